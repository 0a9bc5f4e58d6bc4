"""Task status transitions and the checklist completion guard.

States are plain (no marker), unchecked, scheduled and completed:

- plain -> any status: allowed unless the title is not encodable
  (conversion).
- status -> status: allowed, except that completing requires the body to
  have no unchecked checklist item.
- status -> plain: always allowed (marker removal).

The reactive rule lives in :class:`TransitionEngine`: when a completed
note's body gains its first unchecked checklist item, the engine proposes
reopening it. The rule is edge triggered on the tracked per-note flag, so
further edits that keep an unchecked item present do not fire it again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePosixPath

from tasknotes.domain.codec import TaskName, is_encodable, parse_name
from tasknotes.domain.status import TaskStatus


class RejectReason(StrEnum):
    """Why a requested transition was refused."""

    CHECKLIST_INCOMPLETE = "CHECKLIST_INCOMPLETE"
    NOT_A_TASK = "NOT_A_TASK"
    INVALID_TITLE = "INVALID_TITLE"


REJECT_MESSAGES: dict[RejectReason, str] = {
    RejectReason.CHECKLIST_INCOMPLETE: "Cannot complete task: unchecked checklist items remain",
    RejectReason.NOT_A_TASK: "Note has no task status",
    RejectReason.INVALID_TITLE: (
        "Cannot convert: title is empty, spans lines, or starts with whitespace"
    ),
}


@dataclass(frozen=True)
class Allow:
    """An accepted transition and the name the note should be renamed to."""

    target: TaskName

    @property
    def name(self) -> str:
        return self.target.name

    @property
    def status(self) -> TaskStatus | None:
        return self.target.status


@dataclass(frozen=True)
class Reject:
    """A refused transition. The note keeps its current status."""

    reason: RejectReason

    @property
    def message(self) -> str:
        return REJECT_MESSAGES[self.reason]


Decision = Allow | Reject


def evaluate_transition(
    current: TaskStatus | None,
    requested: TaskStatus | None,
    has_unchecked_checklist_item: bool,
    *,
    title: str,
    extension: str = "md",
) -> Decision:
    """Decide whether a note may move from *current* to *requested*.

    ``None`` as *current* means a plain note; ``None`` as *requested* means
    removing the marker. Requesting the current status is allowed and
    yields the unchanged name.

    Examples:
        >>> evaluate_transition(
        ...     TaskStatus.SCHEDULED, TaskStatus.COMPLETED, False, title="Pay rent"
        ... ).name
        '✅ Pay rent.md'
    """
    note = TaskName(status=current, title=title, extension=extension)
    if requested is None:
        if current is None:
            return Reject(RejectReason.NOT_A_TASK)
        return Allow(note.with_status(None))
    if current is None:
        if not is_encodable(title):
            return Reject(RejectReason.INVALID_TITLE)
        return Allow(note.with_status(requested))
    if requested is TaskStatus.COMPLETED and has_unchecked_checklist_item:
        return Reject(RejectReason.CHECKLIST_INCOMPLETE)
    return Allow(note.with_status(requested))


def evaluate_for_name(
    name: str,
    requested: TaskStatus | None,
    has_unchecked_checklist_item: bool,
) -> Decision:
    """:func:`evaluate_transition` for a full file name."""
    note = parse_name(name)
    return evaluate_transition(
        note.status,
        requested,
        has_unchecked_checklist_item,
        title=note.title,
        extension=note.extension,
    )


# ---------------------------------------------------------------------------
# Tracked checklist state
# ---------------------------------------------------------------------------


class ChecklistTracker:
    """Per-note "had an unchecked checklist item at last scan" flags.

    Keys are vault-relative paths. The lifecycle methods are the only
    mutators; renames move a value, deletes evict it.
    """

    def __init__(self) -> None:
        self._state: dict[str, bool] = {}

    def get(self, path: str) -> bool | None:
        """Last recorded value for *path*, or None if never scanned."""
        return self._state.get(path)

    def record(self, path: str, has_unchecked: bool) -> bool | None:
        """Store the latest value and return the previous one."""
        previous = self._state.get(path)
        self._state[path] = has_unchecked
        return previous

    def move(self, old_path: str, new_path: str) -> None:
        if old_path == new_path or old_path not in self._state:
            return
        self._state[new_path] = self._state.pop(old_path)

    def forget(self, path: str) -> None:
        self._state.pop(path, None)

    def __contains__(self, path: object) -> bool:
        return path in self._state

    def __len__(self) -> int:
        return len(self._state)


@dataclass(frozen=True)
class AutoTransition:
    """A transition the engine performs on its own after a body edit."""

    path: str
    decision: Allow
    notice: str

    @property
    def new_path(self) -> str:
        parent = PurePosixPath(self.path).parent
        return str(parent / self.decision.name)


class TransitionEngine:
    """Owns a :class:`ChecklistTracker` and applies the reopen rule.

    All methods are synchronous. Callers must feed events for the same note
    in the order they occurred and issue at most one rename per note at a
    time.
    """

    def __init__(self, tracker: ChecklistTracker | None = None, *, reopen: bool = True) -> None:
        self.tracker = tracker if tracker is not None else ChecklistTracker()
        self._reopen = reopen

    def on_created(self, path: str, has_unchecked: bool) -> None:
        self.tracker.record(path, has_unchecked)

    def on_renamed(self, old_path: str, new_path: str) -> None:
        self.tracker.move(old_path, new_path)

    def on_deleted(self, path: str) -> None:
        self.tracker.forget(path)

    def on_body_modified(self, path: str, has_unchecked: bool) -> AutoTransition | None:
        """Record the latest scan and reopen a completed note if it just gained an item.

        Fires only on a ``False -> True`` change of the tracked flag. A path
        with no recorded value is primed without firing.
        """
        previous = self.tracker.record(path, has_unchecked)
        if not self._reopen or previous is not False or not has_unchecked:
            return None

        name = PurePosixPath(path).name
        note = parse_name(name)
        if note.status is not TaskStatus.COMPLETED:
            return None

        decision = evaluate_for_name(name, TaskStatus.UNCHECKED, has_unchecked)
        if isinstance(decision, Reject):
            return None
        return AutoTransition(
            path=path,
            decision=decision,
            notice=f"Task reopened: new checklist item in {note.title}",
        )

    def on_reopen_failed(self, auto: AutoTransition) -> None:
        """Undo the flag recorded for a reopen whose rename did not happen.

        The note is still completed, so the next edit that keeps an
        unchecked item present must be able to fire the rule again.
        """
        self.tracker.record(auto.path, False)
