"""Tests for output mode selection."""

import json

from tasknotes.output.formatters import OutputSettings, format_result
from tasknotes.services.result import ServiceResult


def _result() -> ServiceResult:
    return ServiceResult(ok=True, op="mark", data={"path": "✅ A.md", "status": "completed"})


class TestFormatResult:
    def test_default_is_rich(self) -> None:
        assert format_result(_result()).startswith("OK  mark")

    def test_json(self) -> None:
        output = format_result(_result(), settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["ok"] is True
        assert parsed["data"]["path"] == "✅ A.md"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_result(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "mark"

    def test_quiet(self) -> None:
        assert format_result(_result(), settings=OutputSettings(quiet=True)) == "✅ A.md"
