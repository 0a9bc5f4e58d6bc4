"""Checklist detection in note bodies.

A checklist line is a list bullet (``-``, ``*`` or ``+``), optionally
indented, followed by one space and a bracketed completion indicator::

    - [ ] unchecked
    - [] unchecked
    * [x] checked
      + [X] checked

Only the empty or single-space interior counts as unchecked.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

CHECKLIST_ITEM_RE = re.compile(r"^[ \t]*[-*+] \[([ xX]?)\]", re.MULTILINE)
UNCHECKED_ITEM_RE = re.compile(r"^[ \t]*[-*+] \[ ?\]", re.MULTILINE)


@dataclass(frozen=True)
class ChecklistScan:
    """Counts of checklist items found in a body."""

    total: int = 0
    unchecked: int = 0

    @property
    def checked(self) -> int:
        return self.total - self.unchecked

    @property
    def has_checklist(self) -> bool:
        return self.total > 0

    @property
    def has_unchecked(self) -> bool:
        return self.unchecked > 0

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "checked": self.checked, "unchecked": self.unchecked}


def scan_checklist(body: str) -> ChecklistScan:
    """Count checklist items in *body*."""
    total = 0
    unchecked = 0
    for match in CHECKLIST_ITEM_RE.finditer(body):
        total += 1
        if match.group(1) in ("", " "):
            unchecked += 1
    return ChecklistScan(total=total, unchecked=unchecked)


def has_unchecked_checklist_item(body: str) -> bool:
    """True if at least one line of *body* is an unchecked checklist item."""
    return UNCHECKED_ITEM_RE.search(body) is not None
