"""Placeholder expansion for configured scope paths.

A configured entry may begin with a ``$NAME`` component, for example
``$HOME/projects/**``.  :class:`PlaceholderResolver` replaces that component
with the directory bound to ``NAME``.  Built-in names cover the usual user
directories; callers add or override names through *variables*.

Built-in names
--------------
``HOME``, ``TEMP``, ``CONFIG``, ``DATA``, ``LOCALDATA``, ``CACHE``,
``RUNTIME``, ``DESKTOP``, ``DOCUMENT``, ``DOWNLOAD``.

A name that is unknown, or whose directory cannot be determined on this
machine, raises :class:`PathResolutionError`.  So does any ``..``
component.
"""
from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable


class PathResolutionError(ValueError):
    """Raised when a configured path cannot be resolved.

    Attributes
    ----------
    raw_path:
        The configured entry that failed.
    reason:
        Why resolution failed.
    """

    def __init__(self, raw_path: str, reason: str) -> None:
        self.raw_path = raw_path
        self.reason = reason
        super().__init__(f"Cannot resolve {raw_path!r}: {reason}")


class PathResolver(ABC):
    """Turns a configured path string into a concrete path."""

    @abstractmethod
    def resolve(self, raw_path: str) -> Path:
        """Return the resolved path for *raw_path*.

        Raises
        ------
        PathResolutionError
            When the entry cannot be resolved.
        """


# ---------------------------------------------------------------------------
# Built-in directories
# ---------------------------------------------------------------------------


def _env_dir(name: str) -> Path | None:
    value = os.environ.get(name)
    return Path(value) if value else None


def _home_child(*parts: str) -> Path | None:
    try:
        return Path.home().joinpath(*parts)
    except (KeyError, RuntimeError):
        return None


def _home() -> Path | None:
    return _home_child()


def _config_dir() -> Path | None:
    if os.name == "nt":
        return _env_dir("APPDATA")
    return _env_dir("XDG_CONFIG_HOME") or _home_child(".config")


def _data_dir() -> Path | None:
    if os.name == "nt":
        return _env_dir("APPDATA")
    return _env_dir("XDG_DATA_HOME") or _home_child(".local", "share")


def _local_data_dir() -> Path | None:
    if os.name == "nt":
        return _env_dir("LOCALAPPDATA")
    return _data_dir()


def _cache_dir() -> Path | None:
    if os.name == "nt":
        return _env_dir("LOCALAPPDATA")
    return _env_dir("XDG_CACHE_HOME") or _home_child(".cache")


def _runtime_dir() -> Path | None:
    if os.name == "nt":
        return None
    return _env_dir("XDG_RUNTIME_DIR")


_BUILTIN_DIRECTORIES: dict[str, Callable[[], Path | None]] = {
    "HOME": _home,
    "TEMP": lambda: Path(tempfile.gettempdir()),
    "CONFIG": _config_dir,
    "DATA": _data_dir,
    "LOCALDATA": _local_data_dir,
    "CACHE": _cache_dir,
    "RUNTIME": _runtime_dir,
    "DESKTOP": lambda: _home_child("Desktop"),
    "DOCUMENT": lambda: _home_child("Documents"),
    "DOWNLOAD": lambda: _home_child("Downloads"),
}


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class PlaceholderResolver(PathResolver):
    """Expand a leading ``$NAME`` component into a directory.

    Parameters
    ----------
    variables:
        Extra placeholder bindings, e.g. ``{"APP": "/opt/my-app"}``.  They
        take precedence over the built-in names.
    use_defaults:
        When False, only *variables* are recognised.

    Example
    -------
    >>> resolver = PlaceholderResolver({"APP": "/opt/my-app"}, use_defaults=False)
    >>> resolver.resolve("$APP/data/**")
    PosixPath('/opt/my-app/data/**')
    """

    def __init__(
        self,
        variables: dict[str, str | Path] | None = None,
        use_defaults: bool = True,
    ) -> None:
        self._variables = {name: Path(value) for name, value in (variables or {}).items()}
        self._use_defaults = use_defaults

    def resolve(self, raw_path: str) -> Path:
        path = Path(raw_path)
        parts = path.parts
        if ".." in parts:
            raise PathResolutionError(raw_path, "parent directory components are not allowed")
        if not parts or not parts[0].startswith("$"):
            return path
        base = self.directory(parts[0][1:], raw_path)
        return base.joinpath(*parts[1:])

    def directory(self, name: str, raw_path: str | None = None) -> Path:
        """Return the directory bound to placeholder *name*.

        Raises
        ------
        PathResolutionError
            When *name* is unknown or its directory is unavailable.
        """
        source = raw_path if raw_path is not None else f"${name}"
        if name in self._variables:
            return self._variables[name]
        lookup = _BUILTIN_DIRECTORIES.get(name) if self._use_defaults else None
        if lookup is None:
            raise PathResolutionError(source, f"unknown placeholder ${name}")
        directory = lookup()
        if directory is None:
            raise PathResolutionError(
                source, f"directory for ${name} is not available on this system"
            )
        return directory

    @property
    def names(self) -> list[str]:
        """Return every placeholder name this resolver recognises (sorted)."""
        names = set(self._variables)
        if self._use_defaults:
            names.update(_BUILTIN_DIRECTORIES)
        return sorted(names)


__all__ = [
    "PathResolutionError",
    "PathResolver",
    "PlaceholderResolver",
]
