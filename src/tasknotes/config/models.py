"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tasknotes.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    name: str = "my-vault"
    extensions: list[str] = Field(default_factory=lambda: ["md"])

    @field_validator("extensions")
    @classmethod
    def _strip_dots(cls, value: list[str]) -> list[str]:
        return [ext.lstrip(".").lower() for ext in value if ext.strip(".")]


class TasksConfig(BaseModel):
    """[tasks] section."""

    model_config = {"frozen": True}

    # Template name applied on conversion (looked up in .tasknotes/templates/).
    template: str | None = None
    reopen_on_unchecked: bool = True
    notify_on_convert: bool = True


class WatchConfig(BaseModel):
    """[watch] section."""

    model_config = {"frozen": True}

    interval: float = Field(default=1.0, gt=0)
