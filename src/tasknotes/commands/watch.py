"""Command: watch the vault and reopen completed tasks that gain checklist items."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import click

from tasknotes.commands._base import TaskCommand

if TYPE_CHECKING:
    from tasknotes.commands._context import AppContext


@click.command(
    cls=TaskCommand,
    examples="""\
  tasknotes watch
  tasknotes watch --interval 5
  tasknotes -v watch --iterations 10""",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between polls (default from [watch] interval).",
)
@click.option(
    "--iterations",
    type=click.IntRange(min=0),
    default=0,
    help="Stop after N polls (0 = run until interrupted).",
)
@click.pass_obj
def watch(app: AppContext, interval: float | None, iterations: int) -> None:
    """Watch the vault for note changes.

    A completed task whose body gains an unchecked checklist item is
    renamed back to unchecked.
    """
    from tasknotes.infrastructure.watcher import VaultWatcher
    from tasknotes.services.sync import SyncService

    vault = app.vault
    delay = interval or app.settings.watch.interval
    sync = SyncService(vault)
    watcher = VaultWatcher(vault.root, vault.find_notes)
    watcher.start()
    app.emit(sync.prime())

    show_all = app.settings.verbose or app.settings.json_output
    polls = 0
    try:
        while iterations == 0 or polls < iterations:
            time.sleep(delay)
            polls += 1
            for result in sync.handle_all(watcher.poll()):
                if show_all or not result.ok or result.warnings or result.data.get("notice"):
                    app.emit(result, exit_on_error=False)
            app.report_plugin_failures()
    except KeyboardInterrupt:
        click.echo("Stopped watching.", err=True)
