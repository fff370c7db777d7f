"""Scope change notifications.

Every mutating call on a :class:`~path_scope.scope.fs_scope.Scope` publishes
one :class:`Event` to the listeners registered on it.  Listeners implement the
single-method :class:`EventListener` interface; plain callables are adapted
with :class:`CallbackListener`.

Key classes
-----------
Event            : What changed (a path was allowed or forbidden).
EventListener    : Interface with a single ``handle(event)`` method.
NullListener     : Ignores every event.
CallbackListener : Forwards events to a callable.
RecordingListener: Captures events in memory, mainly for tests.
ListenerRegistry : Thread-safe id -> listener mapping with synchronous delivery.
"""
from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

ListenerId = uuid.UUID


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class EventKind(str, Enum):
    """Kinds of scope change."""

    PATH_ALLOWED = "path_allowed"
    PATH_FORBIDDEN = "path_forbidden"


@dataclass(frozen=True)
class Event:
    """A scope change.

    Attributes
    ----------
    kind:
        Whether the path was allowed or forbidden.
    path:
        The path passed to the mutating call, before escaping or
        canonicalization.  It is stored as a :class:`~pathlib.Path`, so
        repeated separators, `.` components and a trailing separator are
        already collapsed (`/srv/a/` is reported as `/srv/a`).
    """

    kind: EventKind
    path: Path

    @classmethod
    def path_allowed(cls, path: str | Path) -> Event:
        return cls(EventKind.PATH_ALLOWED, Path(path))

    @classmethod
    def path_forbidden(cls, path: str | Path) -> Event:
        return cls(EventKind.PATH_FORBIDDEN, Path(path))


# ---------------------------------------------------------------------------
# Listeners
# ---------------------------------------------------------------------------


class EventListener(ABC):
    """Receives scope change events.

    :meth:`handle` runs synchronously inside the mutating call, on the
    calling thread, while the scope's listener registry is locked.  It must
    not register further listeners on the same scope and should return
    promptly.
    """

    @abstractmethod
    def handle(self, event: Event) -> None:
        """Process a single scope change."""


class NullListener(EventListener):
    """Listener that ignores every event."""

    def handle(self, event: Event) -> None:
        return None


class CallbackListener(EventListener):
    """Forward each event to *callback*.

    Parameters
    ----------
    callback:
        Callable invoked with the :class:`Event`.
    """

    def __init__(self, callback: Callable[[Event], object]) -> None:
        self._callback = callback

    def handle(self, event: Event) -> None:
        self._callback(event)

    def __repr__(self) -> str:
        return f"CallbackListener({self._callback!r})"


class RecordingListener(EventListener):
    """Keep every received event in memory, in delivery order."""

    def __init__(self) -> None:
        self._events: list[Event] = []
        self._lock = threading.Lock()

    def handle(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[Event]:
        """Return a copy of the events received so far."""
        with self._lock:
            return list(self._events)

    def allowed_paths(self) -> list[Path]:
        """Return the paths of all ``PATH_ALLOWED`` events."""
        return [e.path for e in self.events if e.kind is EventKind.PATH_ALLOWED]

    def forbidden_paths(self) -> list[Path]:
        """Return the paths of all ``PATH_FORBIDDEN`` events."""
        return [e.path for e in self.events if e.kind is EventKind.PATH_FORBIDDEN]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ListenerRegistry:
    """Maps listener ids to listeners and delivers events to them.

    Listeners stay registered for the lifetime of the registry; there is no
    removal operation.  Delivery holds the registry lock, so a listener that
    registers another listener on the same registry deadlocks.
    """

    def __init__(self) -> None:
        self._listeners: dict[ListenerId, EventListener] = {}
        self._lock = threading.Lock()

    def register(self, listener: EventListener) -> ListenerId:
        """Register *listener* and return its unique identifier."""
        listener_id = uuid.uuid4()
        with self._lock:
            self._listeners[listener_id] = listener
        logger.debug("Registered scope listener %s (%r)", listener_id, listener)
        return listener_id

    def notify(self, event: Event) -> None:
        """Deliver *event* to every listener, in registration order.

        An exception raised by a listener propagates to the caller and the
        remaining listeners are not invoked.
        """
        with self._lock:
            for listener in self._listeners.values():
                listener.handle(event)

    def __contains__(self, listener_id: object) -> bool:
        with self._lock:
            return listener_id in self._listeners

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)


__all__ = [
    "CallbackListener",
    "Event",
    "EventKind",
    "EventListener",
    "ListenerId",
    "ListenerRegistry",
    "NullListener",
    "RecordingListener",
]
