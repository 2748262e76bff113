"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from rollctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from rollctl.services.result import ServiceResult


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
    """Minimal output for ``--quiet`` mode."""
    if not result.ok:
        code = result.error.code if result.error else "UNKNOWN"
        return f"ERROR: {result.op} {code}"
    if result.op == "transitions":
        return " ".join(result.data.get("allowed", []))
    if result.op == "catalog_suggest_code":
        return str(result.data.get("code", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="roll.ok"), Text(f"  {result.op}", style="roll.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}:", style="roll.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="roll.id")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    elif isinstance(value, list):
        v = Text(", ".join(str(x) for x in value) or "-")
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    telemetry = result.meta.get("telemetry")
    if telemetry:
        _render_span(console, telemetry, indent=4)
    for k, v in result.meta.items():
        if k != "telemetry":
            console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    line = f"{prefix}{span.get('duration_ms', 0.0):>8.3f}ms  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(Text(line, style="dim"))
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _count_table(title: str, label: str, counts: dict[str, int]) -> Table:
    table = Table(title=title, show_header=True, pad_edge=False, expand=False)
    table.add_column(label)
    table.add_column("Count", style="roll.count", justify="right")
    for key, count in counts.items():
        table.add_row(Text(key, style=style_for_status(key)), str(count))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code if err else "UNKNOWN"
    console.print(
        Text("ERROR", style="roll.error"),
        Text(f"  {result.op}", style="roll.op"),
        Text(f" [{code}]"),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose:
        _render_meta(console, result)


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render accepted create/update/delete checks."""
    _status_line(console, result)
    for key in ("id", "code", "name", "barcode", "status", "fields_changed"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_transitions(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "status", result.data.get("status", ""))
    _field(console, "allowed", result.data.get("allowed", []))
    _field(console, "terminal", result.data.get("terminal", False))


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "total", result.data.get("total", 0))
    console.print(_count_table("By status", "Status", result.data.get("by_status", {})))
    by_catalog = result.data.get("by_catalog")
    if by_catalog is not None:
        if by_catalog:
            console.print(_count_table("By catalog", "Catalog", by_catalog))
        else:
            console.print(Text("  no catalogs", style="dim"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "check_create": _render_check,
    "check_update": _render_check,
    "check_delete": _render_check,
    "catalog_check_create": _render_check,
    "catalog_check_update": _render_check,
    "catalog_check_delete": _render_check,
    "transitions": _render_transitions,
    "stats": _render_stats,
    "catalog_stats": _render_stats,
}
