"""Glob patterns over filesystem paths.

A :class:`Pattern` is compiled from a Unix-style glob expression and tested
against normalized path strings.  Matching behaviour is controlled by a
:class:`MatchOptions` value supplied at match time, so the same pattern can
be evaluated under different separator and dotfile rules.

Syntax
------
- ``?``      any single character
- ``*``      any sequence of characters
- ``**``     any sequence of path components; must form a whole component
             (``**``, ``**/x``, ``x/**/y`` or ``x/**``)
- ``[abc]``  one of the listed characters; ranges such as ``[a-z]`` work and
             ``[!abc]`` negates the class.  A ``]`` directly after ``[`` or
             ``[!`` is taken literally.

Every other character matches itself.  A separator in the pattern matches
any separator in the path (``/`` on POSIX, ``/`` or ``\\`` on Windows).

Example
-------
::

    from path_scope.patterns import MatchOptions, Pattern

    options = MatchOptions(require_literal_separator=True)
    pattern = Pattern("/workspace/*")
    assert pattern.matches("/workspace/notes.txt", options)
    assert not pattern.matches("/workspace/sub/notes.txt", options)
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath


SEPARATORS: str = "\\/" if os.name == "nt" else "/"
MAIN_SEPARATOR: str = os.sep

_SPECIAL_CHARS: frozenset[str] = frozenset("?*[]")

_ERROR_WILDCARDS = "wildcards are either regular `*` or recursive `**`"
_ERROR_RECURSIVE_WILDCARDS = "recursive wildcards must form a single path component"
_ERROR_INVALID_RANGE = "invalid range pattern"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class PatternError(ValueError):
    """Raised when a glob expression cannot be compiled.

    Attributes
    ----------
    pattern:
        The glob expression that failed to compile.
    position:
        Index of the offending character in *pattern*.
    message:
        Short description of the syntax problem.
    """

    def __init__(self, pattern: str, position: int, message: str) -> None:
        self.pattern = pattern
        self.position = position
        self.message = message
        super().__init__(
            f"Pattern syntax error near position {position}: {message}"
        )


# ---------------------------------------------------------------------------
# Match options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MatchOptions:
    """Flags controlling how a :class:`Pattern` is matched.

    Attributes
    ----------
    case_sensitive:
        When False, letters compare case-insensitively.
    require_literal_separator:
        When True, ``*``, ``?`` and character classes never match a path
        separator; only ``**`` spans directories.
    require_literal_leading_dot:
        When True, a ``.`` at the start of a path component must appear
        literally in the pattern; no wildcard matches it.
    """

    case_sensitive: bool = True
    require_literal_separator: bool = False
    require_literal_leading_dot: bool = False

    @classmethod
    def for_platform(
        cls, require_literal_leading_dot: bool | None = None
    ) -> MatchOptions:
        """Return the options a scope uses on the running platform.

        Separators are always literal.  Dotfiles are protected by default on
        POSIX systems and not on Windows, unless *require_literal_leading_dot*
        is given explicitly.
        """
        if require_literal_leading_dot is None:
            require_literal_leading_dot = os.name != "nt"
        return cls(
            case_sensitive=True,
            require_literal_separator=True,
            require_literal_leading_dot=require_literal_leading_dot,
        )


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


class _TokenKind(str, Enum):
    CHAR = "char"
    ANY_CHAR = "any_char"
    ANY_SEQUENCE = "any_sequence"
    ANY_RECURSIVE = "any_recursive"
    ANY_WITHIN = "any_within"
    ANY_EXCEPT = "any_except"


@dataclass(frozen=True)
class _Token:
    kind: _TokenKind
    char: str = ""
    # (low, high) pairs; a single character is stored as (c, c)
    ranges: tuple[tuple[str, str], ...] = ()
    # for ANY_RECURSIVE: True when the trailing separator was consumed
    consumed_separator: bool = False


def _parse_ranges(chars: str) -> tuple[tuple[str, str], ...]:
    ranges: list[tuple[str, str]] = []
    i = 0
    while i < len(chars):
        if i + 3 <= len(chars) and chars[i + 1] == "-":
            ranges.append((chars[i], chars[i + 2]))
            i += 3
        else:
            ranges.append((chars[i], chars[i]))
            i += 1
    return tuple(ranges)


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    n = len(source)
    i = 0
    while i < n:
        c = source[i]
        if c == "?":
            tokens.append(_Token(_TokenKind.ANY_CHAR))
            i += 1
        elif c == "*":
            start = i
            while i < n and source[i] == "*":
                i += 1
            count = i - start
            if count > 2:
                raise PatternError(source, start, _ERROR_WILDCARDS)
            if count == 1:
                tokens.append(_Token(_TokenKind.ANY_SEQUENCE))
                continue
            if start != 0 and source[start - 1] not in SEPARATORS:
                raise PatternError(source, start, _ERROR_RECURSIVE_WILDCARDS)
            consumed = False
            if i < n:
                if source[i] not in SEPARATORS:
                    raise PatternError(source, i, _ERROR_RECURSIVE_WILDCARDS)
                consumed = True
                i += 1
            token = _Token(_TokenKind.ANY_RECURSIVE, consumed_separator=consumed)
            if tokens and tokens[-1].kind is _TokenKind.ANY_RECURSIVE:
                tokens[-1] = token
            else:
                tokens.append(token)
        elif c == "[":
            if i + 4 <= n and source[i + 1] == "!":
                end = source.find("]", i + 3)
                if end != -1:
                    tokens.append(
                        _Token(_TokenKind.ANY_EXCEPT, ranges=_parse_ranges(source[i + 2:end]))
                    )
                    i = end + 1
                    continue
            elif i + 3 <= n and source[i + 1] != "!":
                end = source.find("]", i + 2)
                if end != -1:
                    tokens.append(
                        _Token(_TokenKind.ANY_WITHIN, ranges=_parse_ranges(source[i + 1:end]))
                    )
                    i = end + 1
                    continue
            raise PatternError(source, i, _ERROR_INVALID_RANGE)
        else:
            tokens.append(_Token(_TokenKind.CHAR, char=c))
            i += 1
    return tokens


# ---------------------------------------------------------------------------
# Regex translation
# ---------------------------------------------------------------------------


def _translate(tokens: list[_Token], options: MatchOptions) -> str:
    """Translate *tokens* into a regular expression for ``re.fullmatch``."""
    escaped_seps = re.escape(SEPARATORS)
    sep = f"[{escaped_seps}]"
    non_sep = f"[^{escaped_seps}]"
    # a '.' that starts the path or follows a separator may not be consumed
    dot_guard = f"(?!(?<!{non_sep})\\.)" if options.require_literal_leading_dot else ""
    sep_guard = f"(?!{sep})" if options.require_literal_separator else ""
    single = dot_guard + (non_sep if options.require_literal_separator else ".")
    component = ("(?!\\.)" if options.require_literal_leading_dot else "") + f"{non_sep}*"

    parts: list[str] = []
    for token in tokens:
        kind = token.kind
        if kind is _TokenKind.CHAR:
            parts.append(sep if token.char in SEPARATORS else re.escape(token.char))
        elif kind is _TokenKind.ANY_CHAR:
            parts.append(single)
        elif kind is _TokenKind.ANY_SEQUENCE:
            parts.append(f"(?:{single})*")
        elif kind is _TokenKind.ANY_RECURSIVE:
            if token.consumed_separator:
                parts.append(f"(?:{component}{sep})*")
            elif options.require_literal_leading_dot:
                parts.append(f"{component}(?:{sep}{component})*")
            else:
                parts.append(".*")
        else:
            parts.append(dot_guard + sep_guard + _translate_class(token))
    return "".join(parts)


def _translate_class(token: _Token) -> str:
    items = [
        re.escape(low) if low == high else f"{re.escape(low)}-{re.escape(high)}"
        for low, high in token.ranges
        if low <= high
    ]
    negated = token.kind is _TokenKind.ANY_EXCEPT
    if not items:
        # an empty class never matches; its negation matches anything
        return "." if negated else "(?!)"
    return f"[{'^' if negated else ''}{''.join(items)}]"


# ---------------------------------------------------------------------------
# Pattern
# ---------------------------------------------------------------------------


class Pattern:
    """A compiled glob expression.

    Patterns compare equal and hash by their source string, so they can be
    stored in sets without duplicates.

    Parameters
    ----------
    source:
        The glob expression.

    Raises
    ------
    PatternError
        When *source* is not a valid glob expression.
    """

    __slots__ = ("_source", "_tokens", "_compiled")

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens = _tokenize(source)
        self._compiled: dict[MatchOptions, re.Pattern[str]] = {}

    @staticmethod
    def escape(text: str) -> str:
        """Return a glob expression that matches *text* literally."""
        return escape(text)

    def as_str(self) -> str:
        """Return the original glob expression."""
        return self._source

    def matches(self, text: str, options: MatchOptions | None = None) -> bool:
        """Return True if *text* matches this pattern under *options*."""
        return self._regex(options or MatchOptions()).fullmatch(text) is not None

    def matches_path(
        self, path: str | os.PathLike[str], options: MatchOptions | None = None
    ) -> bool:
        """Return True if the normalized form of *path* matches this pattern."""
        return self.matches(str(PurePath(path)), options)

    def _regex(self, options: MatchOptions) -> re.Pattern[str]:
        compiled = self._compiled.get(options)
        if compiled is None:
            flags = re.DOTALL
            if not options.case_sensitive:
                flags |= re.IGNORECASE
            compiled = re.compile(_translate(self._tokens, options), flags)
            self._compiled[options] = compiled
        return compiled

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self._source == other._source

    def __hash__(self) -> int:
        return hash(self._source)

    def __str__(self) -> str:
        return self._source

    def __repr__(self) -> str:
        return f"Pattern({self._source!r})"


def escape(text: str) -> str:
    """Neutralize glob metacharacters in *text*.

    Each of ``? * [ ]`` is wrapped in a single-character class, so the
    returned expression matches *text* and nothing else.

    Example
    -------
    >>> escape("/home/u/**")
    '/home/u/[*][*]'
    """
    return "".join(f"[{c}]" if c in _SPECIAL_CHARS else c for c in text)


__all__ = [
    "MAIN_SEPARATOR",
    "MatchOptions",
    "Pattern",
    "PatternError",
    "SEPARATORS",
    "escape",
]
