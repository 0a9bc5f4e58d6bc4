"""Tests for note discovery, body access and renames."""

from __future__ import annotations

from pathlib import Path

import pytest

from tasknotes.infrastructure.filesystem import (
    RenameError,
    append_body,
    find_note_files,
    read_body,
    rename_note,
)


class TestRenameNote:
    def test_rename_in_place(self, tmp_path: Path) -> None:
        note = tmp_path / "◻️ Buy milk.md"
        note.write_text("body", encoding="utf-8")
        target = rename_note(note, "✅ Buy milk.md")
        assert target == tmp_path / "✅ Buy milk.md"
        assert target.read_text(encoding="utf-8") == "body"
        assert not note.exists()

    def test_same_name_is_noop(self, tmp_path: Path) -> None:
        note = tmp_path / "a.md"
        note.write_text("", encoding="utf-8")
        assert rename_note(note, "a.md") == note

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        note = tmp_path / "a.md"
        other = tmp_path / "b.md"
        note.write_text("a", encoding="utf-8")
        other.write_text("b", encoding="utf-8")
        with pytest.raises(RenameError, match="Destination already exists"):
            rename_note(note, "b.md")
        assert other.read_text(encoding="utf-8") == "b"

    @pytest.mark.parametrize("name", ["", ".", "..", "sub/b.md", "sub\\b.md"])
    def test_rejects_invalid_names(self, tmp_path: Path, name: str) -> None:
        note = tmp_path / "a.md"
        note.write_text("", encoding="utf-8")
        with pytest.raises(RenameError, match="Invalid file name"):
            rename_note(note, name)
        assert note.exists()

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(RenameError) as exc_info:
            rename_note(tmp_path / "gone.md", "b.md")
        assert exc_info.value.source == tmp_path / "gone.md"
        assert exc_info.value.target == tmp_path / "b.md"


class TestBody:
    def test_read_body(self, tmp_path: Path) -> None:
        note = tmp_path / "a.md"
        note.write_text("- [ ] item\n", encoding="utf-8")
        assert read_body(note) == "- [ ] item\n"

    def test_append_to_empty(self, tmp_path: Path) -> None:
        note = tmp_path / "a.md"
        note.write_text("", encoding="utf-8")
        append_body(note, "text\n")
        assert note.read_text(encoding="utf-8") == "text\n"

    def test_append_separates_with_blank_line(self, tmp_path: Path) -> None:
        note = tmp_path / "a.md"
        note.write_text("intro", encoding="utf-8")
        append_body(note, "text\n")
        assert note.read_text(encoding="utf-8") == "intro\n\ntext\n"


class TestFindNoteFiles:
    def test_skips_tool_directories(self, tmp_path: Path) -> None:
        for rel in ("a.md", "sub/b.md", ".obsidian/c.md", ".tasknotes/d.md", ".git/e.md"):
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        found = [p.relative_to(tmp_path).as_posix() for p in find_note_files(tmp_path)]
        assert found == ["a.md", "sub/b.md"]

    def test_extension_filter(self, tmp_path: Path) -> None:
        (tmp_path / "a.md").write_text("", encoding="utf-8")
        (tmp_path / "b.txt").write_text("", encoding="utf-8")
        (tmp_path / "C.MD").write_text("", encoding="utf-8")
        names = [p.name for p in find_note_files(tmp_path, extensions=["md", "txt"])]
        assert names == ["C.MD", "a.md", "b.txt"]
