"""Scope configuration: schema, YAML loading, placeholder resolution, building.

Example
-------
::

    from path_scope.config import ScopeConfigLoader, scope_from_config

    config = ScopeConfigLoader().load_from_dict({
        "allow": ["$HOME/projects/**"],
        "deny": ["$HOME/projects/secrets/**"],
    })
    scope = scope_from_config(config)
"""
from __future__ import annotations

from path_scope.config.builder import scope_from_config
from path_scope.config.loader import ScopeConfigError, ScopeConfigLoader
from path_scope.config.resolver import (
    PathResolutionError,
    PathResolver,
    PlaceholderResolver,
)
from path_scope.config.schema import ScopeConfig

__all__ = [
    "PathResolutionError",
    "PathResolver",
    "PlaceholderResolver",
    "ScopeConfig",
    "ScopeConfigError",
    "ScopeConfigLoader",
    "scope_from_config",
]
