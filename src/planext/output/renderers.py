"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from planext.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from planext.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
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
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="planext.ok")
    op = Text(f"  {result.op}", style="planext.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="planext.key")
    style = "planext.path" if key == "output" else ""
    console.print(Text.assemble(k, Text(str(value), style=style)))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = Text(err.message if err else "Unknown error")
    label = Text("ERROR", style="planext.error")
    op = Text(f"  {result.op}", style="planext.op")
    sep = Text(" — ")
    extension = err.detail.get("extension") if err else None
    if extension:
        console.print(label, op, sep, Text(f"[{extension}] ", style="planext.extension"), msg)
    else:
        console.print(label, op, sep, msg)

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_extend(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the layer table of an extended plan."""
    _status_line(console, result)
    data = result.data
    _field(console, "extensions", ", ".join(data.get("extensions", [])))
    entrypoint = data.get("entrypoint")
    _field(console, "entrypoint", " ".join(entrypoint) if entrypoint else "(inherited)")
    if "output" in data:
        _field(console, "output", data["output"])

    plan = data.get("plan", {})
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Layer", style="planext.layer")
    table.add_column("Entries", justify="right")
    if verbose:
        table.add_column("Destinations", style="planext.path")
    for i, layer in enumerate(plan.get("layers", []), start=1):
        entries = layer.get("entries", [])
        row: list[str | Text] = [str(i), Text(layer.get("name", "")), str(len(entries))]
        if verbose:
            row.append(Text("\n".join(e.get("destination", "") for e in entries)))
        table.add_row(*row)
    console.print()
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_extensions(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for item in result.data.get("items", []):
        console.print(Text(f"  {item['name']}", style="planext.extension"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback: key-value fields for any op without a dedicated renderer."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "extend": _render_extend,
    "list_extensions": _render_extensions,
}
