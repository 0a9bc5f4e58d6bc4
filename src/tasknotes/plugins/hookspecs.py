"""Pluggy hook specifications for tasknotes lifecycle events."""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("tasknotes")


class TaskNotesHookSpec:
    """Hook specifications for the tasknotes plugin system."""

    @hookspec
    def post_transition(
        self,
        old_path: str,
        new_path: str,
        title: str,
        old_status: str | None,
        new_status: str | None,
        automatic: bool,
    ) -> None:
        """Called after a note was renamed to a new task status.

        ``None`` statuses stand for a plain note. ``automatic`` is True for
        transitions the watcher performed on its own (reopen on edit).
        """

    @hookspec
    def post_sync_event(self, kind: str, path: str, old_path: str | None) -> None:
        """Called after the watcher handled a vault event."""
