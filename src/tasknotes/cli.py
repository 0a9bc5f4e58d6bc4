"""Root CLI group for tasknotes with global flags and command registration."""

from __future__ import annotations

import click

from tasknotes import __version__
from tasknotes.commands import register_commands
from tasknotes.commands._context import AppContext
from tasknotes.config.settings import TaskNotesSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasknotes")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--sync", is_flag=True, help="Run plugin hooks synchronously.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    sync: bool,
) -> None:
    """tasknotes: track task status in markdown note file names."""
    ctx.ensure_object(dict)
    settings = TaskNotesSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        sync=sync,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
