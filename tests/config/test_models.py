"""Tests for the configuration section models."""

import pytest
from pydantic import ValidationError

from tasknotes.config.models import TasksConfig, VaultConfig, WatchConfig


class TestDefaults:
    def test_section_defaults(self) -> None:
        assert VaultConfig().name == "my-vault"
        assert VaultConfig().extensions == ["md"]
        assert TasksConfig().template is None
        assert WatchConfig().interval == 1.0

    def test_sparse_override(self) -> None:
        config = TasksConfig.model_validate({"reopen_on_unchecked": False})
        assert config.reopen_on_unchecked is False
        assert config.notify_on_convert is True


class TestValidation:
    def test_extensions_normalized(self) -> None:
        assert VaultConfig(extensions=[".md", "TXT", "."]).extensions == ["md", "txt"]

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            WatchConfig(interval=0)

    def test_frozen(self) -> None:
        config = TasksConfig()
        with pytest.raises(ValidationError):
            config.template = "x"  # type: ignore[misc]
