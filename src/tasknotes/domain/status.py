"""Task status enum and the marker glyph each status is written with.

A note is a task when its file name starts with one of the glyphs below
followed by whitespace. Plain notes carry no glyph and have no status.
"""

from __future__ import annotations

from enum import StrEnum


class TaskStatus(StrEnum):
    """Status of a task note."""

    UNCHECKED = "unchecked"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"

    @property
    def glyph(self) -> str:
        return STATUS_GLYPHS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_glyph(cls, glyph: str) -> TaskStatus:
        """Look up a status by its marker glyph. Raises KeyError if unknown."""
        return GLYPH_STATUSES[glyph]


STATUS_GLYPHS: dict[TaskStatus, str] = {
    TaskStatus.UNCHECKED: "\u25fb\ufe0f",  # ◻️
    TaskStatus.SCHEDULED: "\U0001f4c5",  # 📅
    TaskStatus.COMPLETED: "\u2705",  # ✅
}

GLYPH_STATUSES: dict[str, TaskStatus] = {glyph: status for status, glyph in STATUS_GLYPHS.items()}

# Order used when offering status choices.
MENU_ORDER: tuple[TaskStatus, ...] = (
    TaskStatus.UNCHECKED,
    TaskStatus.SCHEDULED,
    TaskStatus.COMPLETED,
)
