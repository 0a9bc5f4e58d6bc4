"""Command: set the status of an existing task."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import STATUS_CHOICE, TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  tasknotes mark "◻️ Buy milk.md" completed
  tasknotes mark "✅ Pay rent.md" unchecked
  tasknotes --json mark "◻️ Dentist.md" scheduled""",
)
@click.argument("path")
@click.argument("status", type=STATUS_CHOICE)
@click.pass_obj
def mark(app: AppContext, path: str, status: str) -> None:
    """Mark the task at PATH as STATUS.

    Completing is refused while the note has unchecked checklist items.
    """
    from tasknotes.domain.status import TaskStatus
    from tasknotes.services.task import TaskService

    app.emit(TaskService(app.vault).set_status(path, TaskStatus(status.lower())))
