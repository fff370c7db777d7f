"""Filesystem access scope.

A :class:`Scope` decides whether an arbitrary filesystem path may be
accessed.  It holds two sets of glob patterns, *allowed* and *forbidden*, and
answers :meth:`Scope.is_allowed` queries with a fixed precedence: a path that
matches any forbidden pattern is denied, whatever the allowed set says.

Paths inserted through the public API are stored as escaped literals, so glob
metacharacters in a user-supplied path are never interpreted as wildcards.
Directories get a second pattern granting access to their direct children
(``*``) or to all descendants (``**``).

Matching always uses a literal path separator: ``/dir/*`` does not match
``/dir/sub/file``.  Existing paths are canonicalized before matching, and any
error while doing so denies access.

Example
-------
::

    from path_scope import Scope

    scope = Scope()
    scope.allow_directory("/workspace", recursive=True)
    scope.forbid_file("/workspace/.env")
    assert scope.is_allowed("/workspace/src/app.py")
    assert not scope.is_allowed("/workspace/.env")
"""
from __future__ import annotations

import copy
import logging
import os
import re
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Union

from path_scope.patterns.pattern import (
    MAIN_SEPARATOR,
    SEPARATORS,
    MatchOptions,
    Pattern,
    escape,
)
from path_scope.scope.events import (
    CallbackListener,
    Event,
    EventListener,
    ListenerId,
    ListenerRegistry,
)
from path_scope.scope.variants import PathVariants, default_path_variants

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _normalize(path: PathLike) -> str:
    """Return the component-normalized string form of *path*.

    On POSIX a leading `//` is collapsed to `/` like any other repeated
    separator.
    """
    normalized = str(Path(path))
    if os.name != "nt" and normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


@dataclass
class _PatternSet:
    patterns: set[Pattern] = field(default_factory=set)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def extend(self, patterns: Iterable[Pattern]) -> None:
        with self.lock:
            self.patterns.update(patterns)

    def snapshot(self) -> frozenset[Pattern]:
        with self.lock:
            return frozenset(self.patterns)


@dataclass
class _ScopeState:
    """State shared by every handle of the same scope."""

    allowed: _PatternSet = field(default_factory=_PatternSet)
    forbidden: _PatternSet = field(default_factory=_PatternSet)
    listeners: ListenerRegistry = field(default_factory=ListenerRegistry)


class Scope:
    """Allow/forbid pattern store answering path access queries.

    Handles returned by :meth:`clone` share the same pattern sets and
    listeners; a change made through one handle is visible through all of
    them.  The scope only grows: there is no way to revoke a pattern.

    Parameters
    ----------
    match_options:
        Options used for every match.  ``require_literal_separator`` is
        always forced on.  Defaults to :meth:`MatchOptions.for_platform`.
    path_variants:
        Strategy producing alternate spellings of inserted paths.  Defaults
        to :func:`~path_scope.scope.variants.default_path_variants`.
    allowed_patterns:
        Initial allowed patterns, inserted as given.
    forbidden_patterns:
        Initial forbidden patterns, inserted as given.
    """

    def __init__(
        self,
        match_options: MatchOptions | None = None,
        path_variants: PathVariants | None = None,
        allowed_patterns: Iterable[Pattern] = (),
        forbidden_patterns: Iterable[Pattern] = (),
    ) -> None:
        options = match_options or MatchOptions.for_platform()
        # `/dir/*` must never match `/dir/sub/file`
        self._match_options = replace(options, require_literal_separator=True)
        self._path_variants = path_variants or default_path_variants()
        self._state = _ScopeState()
        self._state.allowed.extend(allowed_patterns)
        self._state.forbidden.extend(forbidden_patterns)

    # ------------------------------------------------------------------
    # Handles
    # ------------------------------------------------------------------

    def clone(self) -> Scope:
        """Return a new handle sharing this scope's state."""
        return copy.copy(self)

    def shares_state_with(self, other: Scope) -> bool:
        """Return True if *other* is a handle to the same scope."""
        return self._state is other._state

    @property
    def match_options(self) -> MatchOptions:
        """Return the options used for matching."""
        return self._match_options

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def allowed_patterns(self) -> frozenset[Pattern]:
        """Return a snapshot of the allowed patterns."""
        return self._state.allowed.snapshot()

    def forbidden_patterns(self) -> frozenset[Pattern]:
        """Return a snapshot of the forbidden patterns."""
        return self._state.forbidden.snapshot()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def listen(
        self, listener: EventListener | Callable[[Event], object]
    ) -> ListenerId:
        """Register a listener for scope changes.

        Parameters
        ----------
        listener:
            An :class:`EventListener`, or any callable taking an
            :class:`Event`.

        Returns
        -------
        uuid.UUID
            Identifier of the registration.
        """
        if not isinstance(listener, EventListener):
            listener = CallbackListener(listener)
        return self._state.listeners.register(listener)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def allow_directory(self, path: PathLike, recursive: bool) -> None:
        """Allow a directory and its contents.

        The directory itself becomes accessible, along with its direct
        children, or all of its descendants when *recursive* is True.

        Raises
        ------
        PatternError
            When the path cannot be turned into a pattern.  Nothing is
            inserted in that case.
        """
        patterns = self._directory_patterns(path, recursive)
        self._state.allowed.extend(patterns)
        self._state.listeners.notify(Event.path_allowed(path))

    def allow_file(self, path: PathLike) -> None:
        """Allow exactly one path.

        Raises
        ------
        PatternError
            When the path cannot be turned into a pattern.
        """
        patterns = self._literal_patterns(path)
        self._state.allowed.extend(patterns)
        self._state.listeners.notify(Event.path_allowed(path))

    def forbid_directory(self, path: PathLike, recursive: bool) -> None:
        """Forbid a directory and its contents.

        Forbidden patterns take precedence over allowed ones, so access is
        always denied.  With ``recursive=False`` only the directory and its
        direct children are forbidden.
        """
        patterns = self._directory_patterns(path, recursive)
        self._state.forbidden.extend(patterns)
        self._state.listeners.notify(Event.path_forbidden(path))

    def forbid_file(self, path: PathLike) -> None:
        """Forbid exactly one path; a same-named directory's contents stay reachable."""
        patterns = self._literal_patterns(path)
        self._state.forbidden.extend(patterns)
        self._state.listeners.notify(Event.path_forbidden(path))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_allowed(self, path: PathLike) -> bool:
        """Return True if *path* may be accessed.

        Existing paths are canonicalized first (symlinks and relative
        segments resolved); paths that do not exist are used as given so
        that files about to be created can be checked, unless they contain
        a `..` component or are dangling symlinks.  Any error along the way
        denies access.
        """
        candidate = self._candidate(path)
        if candidate is None:
            return False
        try:
            if self._matches_any(self._state.forbidden.snapshot(), candidate):
                logger.debug("Scope DENY (forbidden): %s", candidate)
                return False
            allowed = self._matches_any(self._state.allowed.snapshot(), candidate)
        except re.error as exc:
            logger.debug("Scope DENY (match error %s): %s", exc, candidate)
            return False
        logger.debug("Scope %s: %s", "ALLOW" if allowed else "DENY", candidate)
        return allowed

    def is_forbidden(self, path: PathLike) -> bool:
        """Return True if *path* matches a forbidden pattern.

        Paths that cannot be canonicalized are reported as forbidden.
        """
        candidate = self._candidate(path)
        if candidate is None:
            return True
        try:
            return self._matches_any(self._state.forbidden.snapshot(), candidate)
        except re.error:
            return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _candidate(self, path: PathLike) -> str | None:
        try:
            candidate = Path(path)
            if "\x00" in str(candidate):
                raise ValueError("embedded null byte")
            if candidate.exists():
                return _normalize(candidate.resolve(strict=True))
            # stricter than matching the spelling as given: with nothing on
            # disk to canonicalize against, refuse anything whose real
            # location could differ from its spelling
            if candidate.is_symlink():
                raise OSError("dangling symbolic link")
            if ".." in candidate.parts:
                raise ValueError("parent directory component in a nonexistent path")
            return _normalize(candidate)
        except (OSError, RuntimeError, TypeError, ValueError) as exc:
            logger.debug("Scope DENY (unresolvable %r): %s", path, exc)
            return None

    def _matches_any(self, patterns: frozenset[Pattern], candidate: str) -> bool:
        return any(p.matches(candidate, self._match_options) for p in patterns)

    def _literal_forms(self, path: PathLike) -> list[str]:
        normalized = _normalize(path)
        return [normalized, *self._path_variants.variants(normalized)]

    def _literal_patterns(self, path: PathLike) -> list[Pattern]:
        return [Pattern(escape(form)) for form in self._literal_forms(path)]

    def _directory_patterns(self, path: PathLike, recursive: bool) -> list[Pattern]:
        suffix = "**" if recursive else "*"
        patterns: list[Pattern] = []
        for form in self._literal_forms(path):
            patterns.append(Pattern(escape(form)))
            separator = "" if form.endswith(tuple(SEPARATORS)) else MAIN_SEPARATOR
            patterns.append(Pattern(f"{escape(form)}{separator}{suffix}"))
        return patterns

    def __repr__(self) -> str:
        allowed = sorted(p.as_str() for p in self.allowed_patterns())
        forbidden = sorted(p.as_str() for p in self.forbidden_patterns())
        return f"Scope(allowed_patterns={allowed!r}, forbidden_patterns={forbidden!r})"


__all__ = ["PathLike", "Scope"]
