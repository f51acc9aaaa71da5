"""Task-specific Rich renderers for TaskResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Composite results (``series``/``parallel``) are recognised by
``data["kind"]``; everything else is dispatched by ``result.op`` in
:func:`render_result`. Unknown ops fall through to a generic key-value
renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from assetctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from assetctl.services.result import TaskResult

COMPOSITE_KINDS = ("series", "parallel")


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: TaskResult, *, verbose: bool = False) -> str:
    """Render a TaskResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if not result.ok:
        _render_error(result, console, verbose=verbose)
    elif result.data.get("kind") in COMPOSITE_KINDS:
        _render_composite(result, console, verbose=verbose)
    else:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: TaskResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Successful stages print the files they wrote, one per line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    outputs = _collect_outputs(result.data)
    if outputs:
        return "\n".join(outputs)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _collect_outputs(data: dict[str, Any]) -> list[str]:
    """Written paths of a stage, or of every stage inside a composite."""
    outputs = list(data.get("outputs", []))
    for child in data.get("tasks", []):
        outputs.extend(_collect_outputs(child.get("data", {})))
    return outputs


def _status_line(console: Console, result: TaskResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="asset.ok")
    op = Text(f"  {result.op}", style="asset.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="asset.key")
    if key in ("path", "archive"):
        v = Text(str(value), style="asset.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: TaskResult) -> None:
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


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    if span_data.get("annotations"):
        extras = [f"{ak}={av}" for ak, av in span_data["annotations"].items()]
        line += f"  ({', '.join(extras)})"

    console.print(line, markup=True)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _print_failed(console: Console, failed: list[dict[str, Any]]) -> None:
    for item in failed:
        path = Text(f"    {item.get('path', '?')}", style="asset.path")
        console.print(path, Text(f"  {item.get('message', '')}"))


def _print_children(console: Console, children: list[dict[str, Any]]) -> None:
    for child in children:
        ok = child.get("ok", False)
        label = Text("ok  " if ok else "FAIL", style="asset.ok" if ok else "asset.error")
        name = Text(f"  {child.get('op', '?')}", style="asset.task")
        extra = ""
        if not ok and child.get("error"):
            extra = f"  {child['error'].get('message', '')}"
        elif "outputs" in child.get("data", {}):
            extra = f"  {len(child['data']['outputs'])} file(s)"
            if child["data"].get("failed"):
                extra += f", {len(child['data']['failed'])} failed"
        console.print(Text("    "), label, name, Text(extra))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: TaskResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="asset.error")
    op = Text(f"  {result.op}", style="asset.op")
    sep = Text(": ")
    console.print(label, op, sep, Text(msg))

    failed = result.data.get("failed", [])
    if failed:
        _print_failed(console, failed)
    children = result.data.get("tasks", [])
    if children:
        _print_children(console, children)
    skipped = result.data.get("skipped", [])
    if skipped:
        console.print(Text(f"  skipped: {', '.join(skipped)}", style="asset.skipped"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")
    if verbose:
        _render_meta(console, result)


# ── Stage renderers ───────────────────────────────────────────────────


def _render_stage(result: TaskResult, console: Console, *, verbose: bool = False) -> None:
    """Render a transform stage: counts plus the files written."""
    _status_line(console, result)
    d = result.data
    outputs = d.get("outputs", [])
    _field(console, "inputs", d.get("inputs", 0))
    _field(console, "outputs", len(outputs))
    for key in ("processed", "cached"):
        if key in d:
            _field(console, key, d[key])
    for path in outputs:
        console.print(Text(f"    {path}", style="asset.path"))
    failed = d.get("failed", [])
    if failed:
        _field(console, "failed", len(failed))
        _print_failed(console, failed)
    if verbose:
        _render_meta(console, result)


def _render_composite(result: TaskResult, console: Console, *, verbose: bool = False) -> None:
    """Render a series/parallel composition as a list of child statuses."""
    _status_line(console, result)
    _field(console, "kind", result.data.get("kind"))
    _print_children(console, result.data.get("tasks", []))
    if verbose:
        for child in result.data.get("tasks", []):
            for path in _collect_outputs(child.get("data", {})):
                console.print(Text(f"      {path}", style="asset.path"))
        _render_meta(console, result)


# ── Task listing ──────────────────────────────────────────────────────


def _render_tasks(result: TaskResult, console: Console, *, verbose: bool = False) -> None:
    """Render the registered task table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Task", style="asset.task", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Description")
    if verbose:
        table.add_column("Runs", style="dim")

    for task in result.data.get("tasks", []):
        row = [task.get("name", ""), task.get("kind", ""), task.get("description", "")]
        if verbose:
            row.append(", ".join(task.get("children", [])))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} tasks")


# ── Init renderer ─────────────────────────────────────────────────────


def _render_init(result: TaskResult, console: Console, *, verbose: bool = False) -> None:
    """Render init results with project details and file manifest."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "name"):
        if key in d:
            _field(console, key, d[key])
    files = d.get("created", [])
    _field(console, "files_created", len(files))
    if verbose:
        for f in files:
            console.print(f"    {f}")
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: TaskResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
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
    # Stages
    "sass": _render_stage,
    "less": _render_stage,
    "javascript": _render_stage,
    "imagemin": _render_stage,
    "kit": _render_stage,
    # Commands
    "tasks": _render_tasks,
    "init": _render_init,
}
