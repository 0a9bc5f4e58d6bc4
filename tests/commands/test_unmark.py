"""Tests for the unmark CLI command."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from tasknotes.cli import cli


@pytest.mark.usefixtures("_isolated_vault")
class TestUnmarkCommand:
    def test_unmark(
        self, cli_runner: CliRunner, make_note: Callable[..., Path], vault_root: Path
    ) -> None:
        make_note("notes/✅ Ship release.md", "- [ ] leftover\n")
        result = cli_runner.invoke(cli, ["unmark", "notes/✅ Ship release.md"])
        assert result.exit_code == 0
        assert "Removed task status from: Ship release" in result.output
        assert (vault_root / "notes" / "Ship release.md").is_file()

    def test_unmark_plain(self, cli_runner: CliRunner, make_note: Callable[..., Path]) -> None:
        make_note("Plain.md")
        result = cli_runner.invoke(cli, ["unmark", "Plain.md"])
        assert result.exit_code == 1
        assert "Note has no task status" in result.output
