"""path-scope: glob-based filesystem access scope.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import path_scope
>>> scope = path_scope.Scope()
>>> scope.allow_directory("/srv/app", recursive=False)
>>> scope.is_allowed("/srv/app/config.toml")
True
>>> scope.is_allowed("/srv/app/sub/config.toml")
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
from path_scope.patterns.pattern import MatchOptions, Pattern, PatternError, escape

# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------
from path_scope.scope.events import (
    CallbackListener,
    Event,
    EventKind,
    EventListener,
    ListenerId,
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

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from path_scope.config.builder import scope_from_config
from path_scope.config.loader import ScopeConfigError, ScopeConfigLoader
from path_scope.config.resolver import (
    PathResolutionError,
    PathResolver,
    PlaceholderResolver,
)
from path_scope.config.schema import ScopeConfig

__all__ = [
    "__version__",
    # Patterns
    "MatchOptions",
    "Pattern",
    "PatternError",
    "escape",
    # Scope
    "CallbackListener",
    "Event",
    "EventKind",
    "EventListener",
    "ExtendedLengthVariants",
    "ListenerId",
    "NoVariants",
    "NullListener",
    "PathVariants",
    "RecordingListener",
    "Scope",
    "default_path_variants",
    # Configuration
    "PathResolutionError",
    "PathResolver",
    "PlaceholderResolver",
    "ScopeConfig",
    "ScopeConfigError",
    "ScopeConfigLoader",
    "scope_from_config",
]
