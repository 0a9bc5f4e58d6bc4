"""Command: toggle a task between completed and unchecked."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  tasknotes toggle "◻️ Buy milk.md"
  tasknotes toggle "✅ Buy milk.md" """,
)
@click.argument("path")
@click.pass_obj
def toggle(app: AppContext, path: str) -> None:
    """Toggle the task at PATH (completed <-> unchecked, scheduled -> completed)."""
    from tasknotes.services.task import TaskService

    app.emit(TaskService(app.vault).toggle(path))
