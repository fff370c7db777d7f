"""Tests for glob Pattern compilation and matching."""
from __future__ import annotations

import os
from pathlib import PurePosixPath

import pytest

from path_scope.patterns.pattern import MatchOptions, Pattern, PatternError, escape

pytestmark = pytest.mark.skipif(os.name == "nt", reason="POSIX path semantics")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def literal_sep() -> MatchOptions:
    return MatchOptions(require_literal_separator=True)


@pytest.fixture()
def dotfiles() -> MatchOptions:
    return MatchOptions(require_literal_separator=True, require_literal_leading_dot=True)


# ---------------------------------------------------------------------------
# Wildcards
# ---------------------------------------------------------------------------


class TestWildcards:
    def test_plain_text_matches_itself(self) -> None:
        assert Pattern("/srv/app/config.toml").matches("/srv/app/config.toml")

    def test_plain_text_is_anchored(self) -> None:
        pattern = Pattern("/srv/app")
        assert not pattern.matches("/srv/app/config.toml")
        assert not pattern.matches("/x/srv/app")

    def test_question_mark_matches_one_char(self) -> None:
        pattern = Pattern("/srv/?")
        assert pattern.matches("/srv/a")
        assert not pattern.matches("/srv/ab")
        assert not pattern.matches("/srv/")

    def test_star_matches_any_sequence(self) -> None:
        pattern = Pattern("*.txt")
        assert pattern.matches("notes.txt")
        assert pattern.matches(".txt")
        assert not pattern.matches("notes.md")

    def test_star_crosses_separator_by_default(self) -> None:
        assert Pattern("/srv/*").matches("/srv/a/b")

    def test_star_stops_at_separator_when_literal(self, literal_sep: MatchOptions) -> None:
        pattern = Pattern("/srv/*")
        assert pattern.matches("/srv/a", literal_sep)
        assert not pattern.matches("/srv/a/b", literal_sep)

    def test_question_mark_never_matches_separator_when_literal(
        self, literal_sep: MatchOptions
    ) -> None:
        assert not Pattern("/srv?a").matches("/srv/a", literal_sep)

    def test_metacharacters_of_regex_are_literal(self) -> None:
        pattern = Pattern("/srv/a+b(c).txt")
        assert pattern.matches("/srv/a+b(c).txt")
        assert not pattern.matches("/srv/aab(c)xtxt")


# ---------------------------------------------------------------------------
# Recursive wildcards
# ---------------------------------------------------------------------------


class TestRecursiveWildcard:
    def test_trailing_recursive_matches_descendants(self, literal_sep: MatchOptions) -> None:
        pattern = Pattern("/srv/**")
        assert pattern.matches("/srv/a", literal_sep)
        assert pattern.matches("/srv/a/b/c", literal_sep)

    def test_trailing_recursive_requires_the_separator(self, literal_sep: MatchOptions) -> None:
        assert not Pattern("/srv/**").matches("/srvx/a", literal_sep)

    def test_inner_recursive_matches_zero_components(self, literal_sep: MatchOptions) -> None:
        assert Pattern("/srv/**/c").matches("/srv/c", literal_sep)

    def test_inner_recursive_matches_many_components(self, literal_sep: MatchOptions) -> None:
        pattern = Pattern("/srv/**/c")
        assert pattern.matches("/srv/a/b/c", literal_sep)
        assert not pattern.matches("/srv/a/b/d", literal_sep)

    def test_bare_recursive_matches_everything(self, literal_sep: MatchOptions) -> None:
        assert Pattern("**").matches("a/b/c", literal_sep)

    def test_leading_recursive_component(self, literal_sep: MatchOptions) -> None:
        pattern = Pattern("**/x.txt")
        assert pattern.matches("x.txt", literal_sep)
        assert pattern.matches("a/b/x.txt", literal_sep)

    def test_repeated_recursive_components_collapse(self, literal_sep: MatchOptions) -> None:
        pattern = Pattern("/srv/**/**/c")
        assert pattern.matches("/srv/c", literal_sep)
        assert pattern.matches("/srv/a/b/c", literal_sep)


# ---------------------------------------------------------------------------
# Syntax errors
# ---------------------------------------------------------------------------


class TestPatternErrors:
    def test_triple_star_rejected(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            Pattern("/srv/***")
        assert exc_info.value.position == 5
        assert "wildcards" in exc_info.value.message

    def test_recursive_must_start_a_component(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            Pattern("/srv/a**")
        assert exc_info.value.position == 6
        assert "single path component" in exc_info.value.message

    def test_recursive_must_end_a_component(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            Pattern("/srv/**b")
        assert exc_info.value.position == 7

    def test_unclosed_class_rejected(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            Pattern("/srv/[ab")
        assert exc_info.value.position == 5
        assert exc_info.value.message == "invalid range pattern"

    def test_unclosed_negated_class_rejected(self) -> None:
        with pytest.raises(PatternError):
            Pattern("[!a")

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Pattern("a***")

    def test_error_message_contains_position(self) -> None:
        with pytest.raises(PatternError, match="position 1"):
            Pattern("a**")

    def test_error_keeps_source(self) -> None:
        with pytest.raises(PatternError) as exc_info:
            Pattern("x/[")
        assert exc_info.value.pattern == "x/["


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


class TestCharacterClasses:
    def test_range(self) -> None:
        pattern = Pattern("file[0-9]")
        assert pattern.matches("file5")
        assert not pattern.matches("filea")

    def test_listed_characters(self) -> None:
        pattern = Pattern("[abc].txt")
        assert pattern.matches("b.txt")
        assert not pattern.matches("d.txt")

    def test_negated_class(self) -> None:
        pattern = Pattern("[!abc]x")
        assert pattern.matches("dx")
        assert not pattern.matches("ax")

    def test_closing_bracket_first_is_literal(self) -> None:
        pattern = Pattern("a[]]")
        assert pattern.matches("a]")
        assert not pattern.matches("ab")

    def test_negated_closing_bracket(self) -> None:
        pattern = Pattern("a[!]]")
        assert pattern.matches("ab")
        assert not pattern.matches("a]")

    def test_reversed_range_never_matches(self) -> None:
        assert not Pattern("[z-a]").matches("m")

    def test_class_does_not_match_separator_when_literal(
        self, literal_sep: MatchOptions
    ) -> None:
        pattern = Pattern("a[!x]b")
        assert pattern.matches("a/b")
        assert not pattern.matches("a/b", literal_sep)


# ---------------------------------------------------------------------------
# Match options
# ---------------------------------------------------------------------------


class TestLeadingDot:
    def test_star_skips_dotfile(self, dotfiles: MatchOptions) -> None:
        assert not Pattern("/home/*").matches("/home/.bashrc", dotfiles)

    def test_star_matches_dotfile_without_option(self, literal_sep: MatchOptions) -> None:
        assert Pattern("/home/*").matches("/home/.bashrc", literal_sep)

    def test_literal_dot_still_matches(self, dotfiles: MatchOptions) -> None:
        assert Pattern("/home/.*").matches("/home/.bashrc", dotfiles)

    def test_question_mark_skips_dotfile(self, dotfiles: MatchOptions) -> None:
        assert not Pattern("/home/?bashrc").matches("/home/.bashrc", dotfiles)

    def test_class_skips_dotfile(self, dotfiles: MatchOptions) -> None:
        assert not Pattern("/home/[.]bashrc").matches("/home/.bashrc", dotfiles)

    def test_dot_inside_component_is_fine(self, dotfiles: MatchOptions) -> None:
        assert Pattern("/home/a*").matches("/home/a.b", dotfiles)

    def test_recursive_skips_hidden_directories(self, dotfiles: MatchOptions) -> None:
        pattern = Pattern("/home/**")
        assert pattern.matches("/home/user/notes", dotfiles)
        assert not pattern.matches("/home/.config/app", dotfiles)
        assert not pattern.matches("/home/user/.ssh", dotfiles)

    def test_inner_recursive_skips_hidden_directories(self, dotfiles: MatchOptions) -> None:
        pattern = Pattern("/home/**/x")
        assert pattern.matches("/home/a/x", dotfiles)
        assert not pattern.matches("/home/.a/x", dotfiles)


class TestCaseSensitivity:
    def test_case_sensitive_by_default(self) -> None:
        assert not Pattern("/Data/*.TXT").matches("/data/a.txt")

    def test_case_insensitive(self) -> None:
        options = MatchOptions(case_sensitive=False)
        assert Pattern("/Data/*.TXT").matches("/data/a.txt", options)


class TestMatchOptions:
    def test_defaults(self) -> None:
        options = MatchOptions()
        assert options.case_sensitive is True
        assert options.require_literal_separator is False
        assert options.require_literal_leading_dot is False

    def test_for_platform_protects_dotfiles_on_posix(self) -> None:
        options = MatchOptions.for_platform()
        assert options.require_literal_separator is True
        assert options.require_literal_leading_dot is True

    def test_for_platform_override(self) -> None:
        options = MatchOptions.for_platform(require_literal_leading_dot=False)
        assert options.require_literal_leading_dot is False
        assert options.require_literal_separator is True

    def test_options_are_hashable(self) -> None:
        assert len({MatchOptions(), MatchOptions()}) == 1

    def test_same_pattern_under_different_options(self) -> None:
        pattern = Pattern("/srv/*")
        assert pattern.matches("/srv/a/b")
        assert not pattern.matches("/srv/a/b", MatchOptions(require_literal_separator=True))
        assert pattern.matches("/srv/a/b")


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


class TestEscape:
    def test_wraps_each_metacharacter(self) -> None:
        assert escape("/a/*?[x]") == "/a/[*][?][[]x[]]"

    def test_leaves_plain_text_alone(self) -> None:
        assert escape("/srv/app/file.txt") == "/srv/app/file.txt"

    def test_static_method_matches_function(self) -> None:
        assert Pattern.escape("**") == escape("**")

    def test_escaped_pattern_matches_only_the_literal(self) -> None:
        pattern = Pattern(escape("/srv/a*b"))
        assert pattern.matches("/srv/a*b")
        assert not pattern.matches("/srv/axb")

    def test_escaped_recursive_is_literal(self, literal_sep: MatchOptions) -> None:
        pattern = Pattern(escape("/srv/**"))
        assert pattern.matches("/srv/**", literal_sep)
        assert not pattern.matches("/srv/a", literal_sep)

    def test_escaped_brackets_round_trip(self) -> None:
        assert Pattern(escape("/srv/[*]")).matches("/srv/[*]")


# ---------------------------------------------------------------------------
# Pattern object protocol
# ---------------------------------------------------------------------------


class TestPatternObject:
    def test_as_str_and_str(self) -> None:
        pattern = Pattern("/srv/**")
        assert pattern.as_str() == "/srv/**"
        assert str(pattern) == "/srv/**"

    def test_repr(self) -> None:
        assert repr(Pattern("/srv")) == "Pattern('/srv')"

    def test_equality_by_source(self) -> None:
        assert Pattern("/srv/*") == Pattern("/srv/*")
        assert Pattern("/srv/*") != Pattern("/srv/**")

    def test_not_equal_to_string(self) -> None:
        assert Pattern("/srv") != "/srv"

    def test_set_deduplicates(self) -> None:
        assert len({Pattern("/srv"), Pattern("/srv"), Pattern("/tmp")}) == 2

    def test_matches_path_normalizes(self) -> None:
        pattern = Pattern("/srv/a/b")
        assert pattern.matches_path("/srv//a/./b/")
        assert pattern.matches_path(PurePosixPath("/srv/a/b"))
