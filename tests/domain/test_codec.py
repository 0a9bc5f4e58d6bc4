"""Tests for the status codec: name decoding, encoding, and toggling."""

from __future__ import annotations

import pytest

from tasknotes.domain.codec import (
    TaskName,
    decode,
    encode,
    is_encodable,
    join_name,
    next_on_toggle,
    parse_name,
    split_name,
)
from tasknotes.domain.status import MENU_ORDER, TaskStatus

TITLES = ["Buy milk", "Pay rent", "a", "Q3 review: draft #2", "v1.2 notes", "  spaced  "]


class TestDecode:
    def test_unchecked(self) -> None:
        assert decode("◻️ Buy milk") == (TaskStatus.UNCHECKED, "Buy milk")

    def test_scheduled(self) -> None:
        assert decode("\U0001f4c5 Dentist") == (TaskStatus.SCHEDULED, "Dentist")

    def test_completed(self) -> None:
        assert decode("✅ Ship release") == (TaskStatus.COMPLETED, "Ship release")

    def test_plain_name(self) -> None:
        assert decode("Buy milk") is None

    def test_glyph_without_whitespace(self) -> None:
        assert decode("✅Buy milk") is None

    def test_glyph_only(self) -> None:
        assert decode("✅ ") is None
        assert decode("✅") is None

    def test_glyph_not_at_start(self) -> None:
        assert decode("Buy ✅ milk") is None

    def test_bare_square_without_variation_selector(self) -> None:
        assert decode("◻ Buy milk") is None

    def test_multiple_whitespace_is_separator(self) -> None:
        assert decode("✅   Pay rent") == (TaskStatus.COMPLETED, "Pay rent")

    def test_tab_separator(self) -> None:
        assert decode("✅\tPay rent") == (TaskStatus.COMPLETED, "Pay rent")

    def test_title_kept_verbatim(self) -> None:
        assert decode("◻️ Buy milk ✅ later") == (TaskStatus.UNCHECKED, "Buy milk ✅ later")

    def test_leading_glyph_title_is_ambiguous(self) -> None:
        """Only the first marker is consumed; the rest stays in the title."""
        assert decode("◻️ ✅ done") == (TaskStatus.UNCHECKED, "✅ done")


class TestEncode:
    def test_encode(self) -> None:
        assert encode(TaskStatus.COMPLETED, "Pay rent") == "✅ Pay rent"

    @pytest.mark.parametrize("status", list(TaskStatus))
    @pytest.mark.parametrize("title", TITLES)
    def test_round_trip(self, status: TaskStatus, title: str) -> None:
        assert decode(encode(status, title)) == (status, title.lstrip())

    @pytest.mark.parametrize("title", ["Buy milk", "Q3 review: draft #2"])
    def test_round_trip_exact(self, title: str) -> None:
        for status in TaskStatus:
            assert decode(encode(status, title)) == (status, title)

    @pytest.mark.parametrize("title", TITLES)
    def test_is_encodable_matches_round_trip(self, title: str) -> None:
        survives = decode(encode(TaskStatus.UNCHECKED, title)) == (TaskStatus.UNCHECKED, title)
        assert is_encodable(title) is survives

    @pytest.mark.parametrize(
        "title", ["", " Buy milk", "\tBuy milk", "\u3000Buy milk", "Buy\nmilk"]
    )
    def test_not_encodable(self, title: str) -> None:
        assert not is_encodable(title)


class TestNextOnToggle:
    def test_unchecked_completes(self) -> None:
        assert next_on_toggle(TaskStatus.UNCHECKED) is TaskStatus.COMPLETED

    def test_scheduled_completes(self) -> None:
        assert next_on_toggle(TaskStatus.SCHEDULED) is TaskStatus.COMPLETED

    def test_completed_reopens(self) -> None:
        assert next_on_toggle(TaskStatus.COMPLETED) is TaskStatus.UNCHECKED

    def test_never_reaches_scheduled(self) -> None:
        assert all(next_on_toggle(s) is not TaskStatus.SCHEDULED for s in TaskStatus)


class TestNames:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Buy milk.md", ("Buy milk", "md")),
            ("v1.2 notes.md", ("v1.2 notes", "md")),
            ("README", ("README", "")),
            (".hidden", (".hidden", "")),
        ],
    )
    def test_split_name(self, name: str, expected: tuple[str, str]) -> None:
        assert split_name(name) == expected

    def test_join_name(self) -> None:
        assert join_name("Buy milk", "md") == "Buy milk.md"
        assert join_name("README", "") == "README"

    def test_parse_task_name(self) -> None:
        note = parse_name("◻️ Buy milk.md")
        assert note == TaskName(TaskStatus.UNCHECKED, "Buy milk", "md")
        assert note.is_task
        assert note.name == "◻️ Buy milk.md"

    def test_parse_plain_name(self) -> None:
        note = parse_name("Meeting notes.md")
        assert note.status is None
        assert not note.is_task
        assert note.title == "Meeting notes"

    def test_with_status_preserves_identity(self) -> None:
        note = parse_name("\U0001f4c5 Pay rent.md")
        done = note.with_status(TaskStatus.COMPLETED)
        assert done.name == "✅ Pay rent.md"
        assert (done.title, done.extension) == (note.title, note.extension)
        assert done.with_status(None).name == "Pay rent.md"


class TestStatus:
    def test_glyphs_are_distinct(self) -> None:
        assert len({s.glyph for s in TaskStatus}) == 3

    def test_from_glyph(self) -> None:
        for status in TaskStatus:
            assert TaskStatus.from_glyph(status.glyph) is status

    def test_unknown_glyph(self) -> None:
        with pytest.raises(KeyError):
            TaskStatus.from_glyph("x")

    def test_menu_order(self) -> None:
        assert MENU_ORDER == (TaskStatus.UNCHECKED, TaskStatus.SCHEDULED, TaskStatus.COMPLETED)
