"""YAML-based scope configuration loader.

ScopeConfigLoader reads YAML scope configs and validates them into
:class:`~path_scope.config.schema.ScopeConfig` instances.

Schema
------
::

    allow:
      - "$HOME/projects/**"
    deny:
      - "$HOME/projects/secrets/**"
    require_literal_leading_dot: true
    variables:
      APP: "/opt/my-app"

The same mapping may also be nested under a top-level ``scope`` key, so a
scope section can live inside a larger application config file.

Example
-------
::

    loader = ScopeConfigLoader()
    config = loader.load("/etc/my-app/scope.yaml")
    scope = scope_from_config(config)
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from path_scope.config.schema import ScopeConfig

logger = logging.getLogger(__name__)


class ScopeConfigError(ValueError):
    """Raised when a scope config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class ScopeConfigLoader:
    """Loads ScopeConfig objects from YAML files, strings, or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are treated as an error.
        Default ``False`` (unknown keys are kept but ignored).
    """

    _KNOWN_KEYS: frozenset[str] = frozenset(
        ["allow", "deny", "require_literal_leading_dot", "variables", "version", "description"]
    )

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> ScopeConfig:
        """Load a ScopeConfig from a YAML file on disk.

        Raises
        ------
        FileNotFoundError
            If the config file does not exist.
        ScopeConfigError
            If the file cannot be parsed or is structurally invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Scope config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw: object = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ScopeConfigError(
                f"Failed to parse YAML: {exc}", str(config_path)
            ) from exc

        return self._build_config(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: dict[str, object] | list[str],
        config_path: str | None = None,
    ) -> ScopeConfig:
        """Validate an already-parsed config mapping (or plain allow list)."""
        return self._build_config(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> ScopeConfig:
        """Load a ScopeConfig from a YAML string.

        Raises
        ------
        ScopeConfigError
            If parsing fails or the config is invalid.
        """
        try:
            raw: object = yaml.safe_load(yaml_string)
        except yaml.YAMLError as exc:
            raise ScopeConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build_config(raw, config_path=config_path)

    def defaults(self) -> ScopeConfig:
        """Return an empty configuration (nothing allowed)."""
        return ScopeConfig()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_config(self, raw: object, config_path: str | None = None) -> ScopeConfig:
        if raw is None:
            raw = {}
        if isinstance(raw, dict) and "scope" in raw:
            raw = raw["scope"] if raw["scope"] is not None else {}

        if not isinstance(raw, (dict, list)):
            raise ScopeConfigError(
                "Scope config must be a YAML mapping or a list of allowed paths.",
                config_path,
            )

        if self._strict and isinstance(raw, dict):
            unknown_keys = set(raw.keys()) - self._KNOWN_KEYS
            if unknown_keys:
                raise ScopeConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_KEYS)}.",
                    config_path,
                )

        try:
            config = ScopeConfig.model_validate(raw)
        except ValidationError as exc:
            raise ScopeConfigError(f"Invalid scope config: {exc}", config_path) from exc

        logger.info(
            "Loaded scope config from %s (%d allowed, %d forbidden)",
            config_path or "<dict>",
            len(config.allow),
            len(config.deny or []),
        )
        return config


__all__ = ["ScopeConfigError", "ScopeConfigLoader"]
