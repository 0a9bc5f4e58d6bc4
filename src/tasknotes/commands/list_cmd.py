"""Command: list task notes in the vault."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import STATUS_CHOICE, TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    "list",
    cls=TaskCommand,
    examples="""\
  tasknotes list
  tasknotes list --status scheduled
  tasknotes -q list --status unchecked""",
)
@click.option("--status", "status", type=STATUS_CHOICE, default=None, help="Filter by status.")
@click.pass_obj
def list_cmd(app: AppContext, status: str | None) -> None:
    """List all task notes with their checklist progress."""
    from tasknotes.domain.status import TaskStatus
    from tasknotes.services.task import TaskService

    target = TaskStatus(status.lower()) if status else None
    app.emit(TaskService(app.vault).list_tasks(status=target))
