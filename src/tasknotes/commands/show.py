"""Command: show a note's task status and checklist progress."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  tasknotes show "◻️ Buy milk.md"
  tasknotes --json show "Meeting notes.md" """,
)
@click.argument("path")
@click.pass_obj
def show(app: AppContext, path: str) -> None:
    """Show status, title, and checklist progress of the note at PATH."""
    from tasknotes.services.task import TaskService

    app.emit(TaskService(app.vault).show(path))
