"""Platform-specific alternate spellings of a path.

Some platforms accept several textual forms for the same absolute path.  On
Windows, ``C:\\data`` may also appear as ``\\\\?\\C:\\data`` once it has been
canonicalized.  A scope asks its :class:`PathVariants` strategy for these
extra forms whenever it inserts a path, and stores a pattern for each one,
so that a query expressed in a different form still matches.
"""
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

EXTENDED_LENGTH_PREFIX = "\\\\?\\"


class PathVariants(ABC):
    """Strategy returning additional forms of a normalized literal path."""

    @abstractmethod
    def variants(self, path: str) -> list[str]:
        """Return zero or more alternate string forms of *path*."""


class NoVariants(PathVariants):
    """A path has exactly one textual form (POSIX)."""

    def variants(self, path: str) -> list[str]:
        return []


class ExtendedLengthVariants(PathVariants):
    """Add the canonical form of a path, or its extended-length form.

    When the path resolves on disk, its canonical real path is returned.
    Otherwise the ``\\\\?\\`` prefixed spelling is returned as a best-effort
    alternate.
    """

    def variants(self, path: str) -> list[str]:
        try:
            return [str(Path(path).resolve(strict=True))]
        except (OSError, RuntimeError, ValueError) as exc:
            logger.debug("Could not canonicalize %s (%s); using prefixed form", path, exc)
            return [f"{EXTENDED_LENGTH_PREFIX}{path}"]


def default_path_variants() -> PathVariants:
    """Return the strategy for the running platform."""
    if os.name == "nt":
        return ExtendedLengthVariants()
    return NoVariants()


__all__ = [
    "EXTENDED_LENGTH_PREFIX",
    "ExtendedLengthVariants",
    "NoVariants",
    "PathVariants",
    "default_path_variants",
]
