"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from bookctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from bookctl.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Snippets skip Rich: the content is returned exactly as the book
    would include it, tabs and brackets untouched.
    """
    if result.ok and result.op == "snippet":
        return str(result.data.get("content", ""))
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Snippets still print their content; that is the whole point of the op.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "snippet":
        return str(result.data.get("content", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="book.ok"), Text(f"  {result.op}", style="book.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "book.path" if key in ("path", "source", "target") else ""
    console.print(Text(f"  {key}: ", style="book.key"), Text(str(value), style=style))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
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

    if duration > 10_000:
        style = "bold red"
    elif duration > 1000:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>10.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _artifact_table(rows: list[tuple[str, dict[str, Any]]], *, verbose: bool) -> Table:
    """One row per source: kind, source name, rebuilt or current."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Source")
    table.add_column("State", no_wrap=True)
    if verbose:
        table.add_column("Output", style="book.path")

    for kind, entry in rows:
        state = (
            Text("rebuilt", style="book.rebuilt")
            if entry.get("rebuilt")
            else Text("current", style="book.current")
        )
        row: list[Any] = [
            Text(kind, style=f"book.kind.{kind}"),
            Path(str(entry.get("source", ""))).name,
            state,
        ]
        if verbose:
            row.append(str(entry.get("output", "")))
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="book.error")
    op = Text(f"  {result.op}", style="book.op")
    console.print(label, op, "—", Text(msg))

    if err and err.detail:
        output = err.detail.get("output")
        if verbose:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                if k != "output":
                    console.print(Text(f"    {k}: {v}"))
        if output:
            console.print(Text(str(output), style="dim"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "target", d.get("target", ""))
    if "needs_rebuild" in d:
        _field(console, "needs_rebuild", d["needs_rebuild"])

    rows: list[tuple[str, dict[str, Any]]] = []
    for kind, key in (("diagram", "diagrams"), ("fragment", "fragments"), ("document", "documents")):
        rows.extend((kind, entry) for entry in d.get(key, []))
    if rows:
        console.print()
        console.print(_artifact_table(rows, verbose=verbose))

    rebuilt = sum(1 for _, entry in rows if entry.get("rebuilt"))
    console.print(f"\n{rebuilt} of {len(rows)} artifacts rebuilt")
    if verbose:
        _render_meta(console, result)


def _render_preprocess(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "source", result.data.get("source", ""))
    _field(console, "path", result.data.get("path", ""))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "build": _render_build,
    "render_diagrams": _render_build,
    "preprocess": _render_preprocess,
}
