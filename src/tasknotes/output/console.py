"""Rich Console factory and theme for tasknotes output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TASKNOTES_THEME = Theme(
    {
        "tn.ok": "bold green",
        "tn.error": "bold red",
        "tn.warning": "bold yellow",
        "tn.op": "bold cyan",
        "tn.key": "dim",
        "tn.path": "dim",
        "tn.title": "bold",
        "tn.notice": "italic",
        "tn.status.unchecked": "yellow",
        "tn.status.scheduled": "blue",
        "tn.status.completed": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TASKNOTES_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str | None) -> str:
    """Return the Rich style name for a task status."""
    if not status:
        return ""
    return f"tn.status.{status}"
