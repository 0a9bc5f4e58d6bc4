"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from tasknotes.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from tasknotes.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items)
    if "path" in result.data:
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="tn.ok")
    op = Text(f"  {result.op}", style="tn.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="tn.key")
    if key in ("path", "old_path"):
        v = Text(str(value), style="tn.path")
    elif key == "title":
        v = Text(str(value), style="tn.title")
    elif key in ("status", "previous_status"):
        v = Text(str(value), style=style_for_status(value))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _notice(console: Console, result: ServiceResult) -> None:
    notice = result.data.get("notice")
    if notice:
        console.print(Text(f"  {notice}", style="tn.notice"))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations")
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _checklist_text(checklist: dict[str, int] | None) -> str:
    if not checklist or not checklist.get("total"):
        return "-"
    return f"{checklist['checked']}/{checklist['total']}"


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="tn.error")
    op = Text(f"  {result.op}", style="tn.op")
    console.print(label, op, Text(": "), msg, sep="")
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("path", "title", "status", "previous_status"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])
    if verbose and result.data.get("old_path"):
        _field(console, "old_path", result.data["old_path"])
    _notice(console, result)
    if verbose:
        _render_meta(console, result)


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    status = data.get("status")
    heading = Text()
    if status:
        heading.append(f"{data.get('glyph', '')} ", style=style_for_status(status))
    heading.append(str(data.get("title", "")), style="tn.title")
    console.print(heading)
    _field(console, "path", data.get("path", ""))
    _field(console, "status", status or "plain note")
    _field(console, "checklist", _checklist_text(data.get("checklist")))
    if verbose:
        _render_meta(console, result)


def _render_task_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    if not items:
        console.print(Text("No tasks found.", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("Title", style="tn.title")
    table.add_column("Status")
    table.add_column("Checklist", justify="right")
    if verbose:
        table.add_column("Path", style="tn.path")

    for item in items:
        status = item.get("status")
        row = [
            Text(str(item.get("glyph", ""))),
            Text(str(item.get("title", ""))),
            Text(str(status or ""), style=style_for_status(status)),
            Text(_checklist_text(item.get("checklist"))),
        ]
        if verbose:
            row.append(Text(str(item.get("path", ""))))
        table.add_row(*row)

    console.print(table)
    footer = f"{result.data.get('count', len(items))} task(s)"
    if result.data.get("vault"):
        footer += f" in {result.data['vault']}"
    console.print(Text(footer, style="dim"))
    if verbose:
        _render_meta(console, result)


def _render_sync_event(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    event = result.data.get("event", {})
    if result.data.get("notice"):
        console.print(Text(str(result.data["notice"]), style="tn.notice"))
        _field(console, "path", result.data.get("reopened", ""))
    elif verbose:
        text = f"{event.get('kind', '?')}: {event.get('path', '')}"
        if event.get("old_path"):
            text += f" (from {event['old_path']})"
        console.print(Text(text, style="dim"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "convert": _render_mutation,
    "mark": _render_mutation,
    "toggle": _render_mutation,
    "unmark": _render_mutation,
    "show": _render_show,
    "list_tasks": _render_task_table,
    "sync_event": _render_sync_event,
    "sync_prime": _render_generic,
}
