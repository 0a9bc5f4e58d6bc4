"""Command: remove the task status from a note."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  tasknotes unmark "◻️ Buy milk.md"
  tasknotes -q unmark "projects/✅ Launch.md" """,
)
@click.argument("path")
@click.pass_obj
def unmark(app: AppContext, path: str) -> None:
    """Strip the task marker from the note at PATH."""
    from tasknotes.services.task import TaskService

    app.emit(TaskService(app.vault).remove_status(path))
