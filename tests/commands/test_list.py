"""Tests for the list CLI command."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from tasknotes.cli import cli


@pytest.mark.usefixtures("_isolated_vault")
class TestListCommand:
    def test_list_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_list_table(self, cli_runner: CliRunner, make_note: Callable[..., Path]) -> None:
        make_note("◻️ Buy milk.md")
        make_note("notes/✅ Ship release.md", "- [x] build\n")
        make_note("notes/Meeting.md")
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Buy milk" in result.output
        assert "Ship release" in result.output
        assert "Meeting" not in result.output
        assert "2 task(s) in my-vault" in result.output

    def test_list_filter_quiet(self, cli_runner: CliRunner, make_note: Callable[..., Path]) -> None:
        make_note("◻️ A.md")
        make_note("\U0001f4c5 B.md")
        result = cli_runner.invoke(cli, ["-q", "list", "--status", "scheduled"])
        assert result.exit_code == 0
        assert result.output.strip() == "\U0001f4c5 B.md"

    def test_list_json(self, cli_runner: CliRunner, make_note: Callable[..., Path]) -> None:
        make_note("◻️ A.md")
        result = cli_runner.invoke(cli, ["--json", "list"])
        data = json.loads(result.output)
        assert data["op"] == "list_tasks"
        assert data["data"]["count"] == 1
        assert data["data"]["vault"] == "my-vault"
