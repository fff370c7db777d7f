"""Build a :class:`~path_scope.scope.fs_scope.Scope` from configuration.

Each configured entry is resolved (placeholder expansion) and compiled as a
glob from the raw resolved string.  Entries are not escaped and not expanded
as directories, so ``$HOME/projects/**`` keeps its wildcard while
``$HOME/notes.txt`` only matches that one file.

Entries that fail to resolve are skipped.  Configuration surfaces such as
``$DESKTOP`` may legitimately be missing on some machines.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from path_scope.config.resolver import (
    PathResolutionError,
    PathResolver,
    PlaceholderResolver,
)
from path_scope.config.schema import ScopeConfig
from path_scope.patterns.pattern import MatchOptions, Pattern
from path_scope.scope.fs_scope import Scope
from path_scope.scope.variants import PathVariants, default_path_variants

logger = logging.getLogger(__name__)


def scope_from_config(
    config: ScopeConfig,
    resolver: PathResolver | None = None,
    path_variants: PathVariants | None = None,
) -> Scope:
    """Create a scope holding the configured allow and deny patterns.

    Parameters
    ----------
    config:
        Validated scope configuration.
    resolver:
        Placeholder resolver.  Defaults to a :class:`PlaceholderResolver`
        seeded with ``config.variables``.
    path_variants:
        Strategy for alternate path spellings; platform default if omitted.

    Returns
    -------
    Scope

    Raises
    ------
    PatternError
        When a resolved entry is not a valid glob expression.
    """
    resolver = resolver or PlaceholderResolver(variables=dict(config.variables))
    variants = path_variants or default_path_variants()

    allowed = _compile_entries(config.allowed_paths(), resolver, variants)
    forbidden = _compile_entries(config.forbidden_paths() or [], resolver, variants)

    options = MatchOptions.for_platform(config.require_literal_leading_dot)
    logger.debug(
        "Built scope with %d allowed and %d forbidden patterns (leading dot literal=%s)",
        len(allowed),
        len(forbidden),
        options.require_literal_leading_dot,
    )
    return Scope(
        match_options=options,
        path_variants=variants,
        allowed_patterns=allowed,
        forbidden_patterns=forbidden,
    )


def _compile_entries(
    entries: Iterable[str],
    resolver: PathResolver,
    variants: PathVariants,
) -> list[Pattern]:
    patterns: list[Pattern] = []
    for raw in entries:
        try:
            resolved = str(resolver.resolve(raw))
        except PathResolutionError as exc:
            logger.debug("Skipping scope entry %r: %s", raw, exc.reason)
            continue
        for form in [resolved, *variants.variants(resolved)]:
            patterns.append(Pattern(form))
    return patterns


__all__ = ["scope_from_config"]
