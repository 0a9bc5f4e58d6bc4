"""Command: convert a plain note into a task."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import STATUS_CHOICE, TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  tasknotes convert "Buy milk.md"
  tasknotes convert "Dentist.md" --status scheduled
  tasknotes convert "Release.md" --template checklist""",
)
@click.argument("path")
@click.option(
    "--status",
    "status",
    type=STATUS_CHOICE,
    default="unchecked",
    show_default=True,
    help="Initial task status.",
)
@click.option("--template", default=None, help="Template appended to the note body.")
@click.pass_obj
def convert(app: AppContext, path: str, status: str, template: str | None) -> None:
    """Add a task status marker to the note at PATH."""
    from tasknotes.domain.status import TaskStatus
    from tasknotes.services.task import TaskService

    result = TaskService(app.vault).convert(path, TaskStatus(status.lower()), template=template)
    app.emit(result)
