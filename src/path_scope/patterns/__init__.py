"""Glob pattern compilation and matching subpackage."""
from __future__ import annotations

from path_scope.patterns.pattern import (
    MAIN_SEPARATOR,
    SEPARATORS,
    MatchOptions,
    Pattern,
    PatternError,
    escape,
)

__all__ = [
    "MAIN_SEPARATOR",
    "MatchOptions",
    "Pattern",
    "PatternError",
    "SEPARATORS",
    "escape",
]
