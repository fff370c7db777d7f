"""Filesystem access scope subpackage."""
from __future__ import annotations

from path_scope.scope.events import (
    CallbackListener,
    Event,
    EventKind,
    EventListener,
    ListenerId,
    ListenerRegistry,
    NullListener,
    RecordingListener,
)
from path_scope.scope.fs_scope import Scope
from path_scope.scope.variants import (
    ExtendedLengthVariants,
    NoVariants,
    PathVariants,
    default_path_variants,
)

__all__ = [
    "CallbackListener",
    "Event",
    "EventKind",
    "EventListener",
    "ExtendedLengthVariants",
    "ListenerId",
    "ListenerRegistry",
    "NoVariants",
    "NullListener",
    "PathVariants",
    "RecordingListener",
    "Scope",
    "default_path_variants",
]
