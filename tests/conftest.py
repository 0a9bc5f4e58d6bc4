"""Shared pytest fixtures and test helpers for tasknotes tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from tasknotes.config.settings import TaskNotesSettings
from tasknotes.infrastructure.vault import Vault
from tasknotes.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TASKNOTES_* variables from the developer's shell out of tests."""
    monkeypatch.delenv("TASKNOTES_CONFIG", raising=False)
    monkeypatch.delenv("TASKNOTES_VAULT_ROOT", raising=False)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Undo logging and telemetry setup done by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    disable_telemetry()
    structlog.contextvars.clear_contextvars()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault directory with a notes folder and an .obsidian folder."""
    (tmp_path / "notes").mkdir()
    (tmp_path / ".obsidian").mkdir()
    return tmp_path


@pytest.fixture
def vault(vault_root: Path) -> Iterator[Vault]:
    """Vault on a temp directory with a synchronous event bus."""
    settings = TaskNotesSettings.from_cli(vault_root=vault_root, sync=True)
    v = Vault(settings)
    v.init_event_bus(sync=True)
    try:
        yield v
    finally:
        v.close()


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp vault root so the CLI operates on it."""
    monkeypatch.chdir(vault_root)


@pytest.fixture
def make_note(vault_root: Path) -> Callable[..., Path]:
    """Factory writing a note (parents included) under the vault root."""

    def _make(name: str, body: str = "") -> Path:
        path = vault_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _make
