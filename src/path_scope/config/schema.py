"""Scope configuration schema with Pydantic v2 validation.

A scope configuration lists the paths to allow and, optionally, the paths to
forbid.  Entries may start with a ``$NAME`` placeholder that is expanded by a
:class:`~path_scope.config.resolver.PathResolver` when the scope is built.

Example
-------
::

    allow:
      - "$HOME/projects/**"
      - "$TEMP/*"
    deny:
      - "$HOME/projects/secrets/**"
    require_literal_leading_dot: true
    variables:
      APP: /opt/my-app

A plain YAML list is also accepted and treated as the ``allow`` list.
"""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator


class ScopeConfig(BaseModel):
    """Declarative allow/forbid path lists for building a scope."""

    model_config = {"extra": "allow"}

    allow: list[str] = Field(default_factory=list)
    deny: list[str] | None = Field(default=None)
    require_literal_leading_dot: bool | None = Field(default=None)
    variables: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def accept_plain_list(cls, data: object) -> object:
        if isinstance(data, list):
            return {"allow": data}
        return data

    @field_validator("variables")
    @classmethod
    def validate_variable_names(cls, values: dict[str, str]) -> dict[str, str]:
        for name in values:
            if not name or name.startswith("$"):
                raise ValueError(
                    f"Variable name {name!r} must be non-empty and given without '$'"
                )
        return values

    def allowed_paths(self) -> list[str]:
        """Return the configured allow entries."""
        return list(self.allow)

    def forbidden_paths(self) -> list[str] | None:
        """Return the configured deny entries, or None when not set."""
        return None if self.deny is None else list(self.deny)
