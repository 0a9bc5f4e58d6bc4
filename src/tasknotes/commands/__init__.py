"""Subcommand modules for tasknotes.

Provides register_commands() which uses deferred imports to keep
``tasknotes --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from tasknotes.commands.convert import convert
    from tasknotes.commands.list_cmd import list_cmd
    from tasknotes.commands.mark import mark
    from tasknotes.commands.show import show
    from tasknotes.commands.toggle import toggle
    from tasknotes.commands.unmark import unmark
    from tasknotes.commands.watch import watch

    cli.add_command(convert)
    cli.add_command(mark)
    cli.add_command(toggle)
    cli.add_command(unmark)
    cli.add_command(show)
    cli.add_command(list_cmd)
    cli.add_command(watch)
