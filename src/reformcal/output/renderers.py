"""Rich renderers for ServiceResult, one body renderer per operation.

``render_result`` draws the shared frame (status line, then the body,
then the telemetry tree under ``--verbose``) and looks the body up by
``result.op``.  Unknown operations get a plain key/value listing.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from reformcal.domain.formatting import format_year
from reformcal.domain.names import DAY_NAMES
from reformcal.output.console import create_console, get_output, style_for_calendar

if TYPE_CHECKING:
    from rich.console import Console

    from reformcal.services.result import ServiceResult

    _Body = Callable[[Console, dict[str, Any], bool], None]

_VALUE_STYLES = {
    "jd": "cal.jd",
    "mjd": "cal.jd",
    "date": "cal.date",
    "text": "cal.date",
    "from": "cal.date",
    "to": "cal.date",
}


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as human-readable text.

    Rich drops the color codes when the output is not a terminal, as in
    CliRunner or a pipe.
    """
    console = create_console()
    if not result.ok:
        _error(console, result, verbose)
        return get_output(console).rstrip("\n")

    console.print(Text("OK", style="cal.ok"), Text(f"  {result.op}", style="cal.op"))
    body = _BODIES.get(result.op, _generic)
    body(console, result.data, verbose)
    if verbose and result.meta:
        _meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """The single line printed under ``--quiet``."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {message}"
    line = _QUIET.get(result.op)
    return line(result.data) if line else f"OK: {result.op}"


_QUIET: dict[str, Callable[[dict[str, Any]], str]] = {
    "parse": lambda d: str(d.get("text", "")),
    "convert": lambda d: str(d.get("formats", {}).get("iso8601", "")),
    "shift": lambda d: str(d.get("to", "")),
    "leap": lambda d: "true" if d.get("leap") else "false",
    "fragments": lambda d: " ".join(f"{k}={v}" for k, v in d.get("fragments", {}).items()),
}


# ── Building blocks ───────────────────────────────────────────────────


def _field(console: Console, key: str, value: Any) -> None:
    if key == "calendar":
        style = style_for_calendar(str(value))
    else:
        style = _VALUE_STYLES.get(key, "")
    console.print(Text(f"  {key}: ", style="cal.key"), Text(str(value), style=style))


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def _coordinates(d: dict[str, Any]) -> Table:
    """One day in every coordinate system."""
    table = Table(show_header=True, pad_edge=False)
    table.add_column("System", style="cal.key", no_wrap=True)
    table.add_column("Value")

    wday = d.get("wday")
    year = format_year(d["year"])
    table.add_row("civil", f"{year}-{d['month']:02d}-{d['day']:02d}")
    table.add_row("ordinal", d.get("ordinal") or f"{year}-{d['yday']:03d}")
    table.add_row(
        "commercial",
        d.get("commercial") or f"{format_year(d['cwyear'])}-W{d['cweek']:02d}-{d['cwday']}",
    )
    table.add_row("weekday", DAY_NAMES[wday] if isinstance(wday, int) else "")
    table.add_row("jd", str(d.get("jd")))
    table.add_row("mjd", str(d.get("mjd")))
    return table


def _span_label(span: dict[str, Any]) -> str:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 100 else "yellow" if duration > 10 else "dim"
    label = f"[{style}]{duration:.3f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations")
    if annotations:
        label += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    return label


def _span_tree(span: dict[str, Any], tree: Tree | None = None) -> Tree:
    node = Tree(_span_label(span)) if tree is None else tree.add(_span_label(span))
    for child in span.get("children", []):
        _span_tree(child, node)
    return node


def _meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry":
            console.print(_span_tree(value), style="dim")
        else:
            console.print(f"    {key}: {value}")


def _error(console: Console, result: ServiceResult, verbose: bool) -> None:
    err = result.error
    console.print(
        Text("ERROR", style="cal.error"),
        Text(f"  {result.op}", style="cal.op"),
        Text(f"  [{err.code}]" if err else "", style="dim"),
        Text(f"  {err.message if err else 'Unknown error'}"),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


# ── Bodies ────────────────────────────────────────────────────────────


def _parse(console: Console, d: dict[str, Any], verbose: bool) -> None:
    _field(console, "text", d.get("text", d.get("iso8601", "")))
    _field(console, "calendar", d.get("calendar", ""))
    _field(console, "reform", d.get("reform", ""))
    if "hour" in d:
        _field(console, "zone", d.get("zone", ""))
    console.print(_coordinates(d))
    if verbose:
        _field(console, "fragments", _compact(d.get("fragments", {})))


def _convert(console: Console, d: dict[str, Any], verbose: bool) -> None:
    for key in ("system", "calendar", "reform"):
        _field(console, key, d.get(key, ""))
    console.print(_coordinates(d))
    formats = d.get("formats", {})
    if formats:
        border = style_for_calendar(str(d.get("calendar", ""))) or "dim"
        lines = "\n".join(f"{name}: {text}" for name, text in formats.items())
        console.print(Panel(lines, title="formats", border_style=border, expand=False))


def _fragments(console: Console, d: dict[str, Any], verbose: bool) -> None:
    _field(console, "input", d.get("input", ""))
    fragments = d.get("fragments", {})
    if not fragments:
        console.print(Text("  (no fragments)", style="dim"))
    for key, value in fragments.items():
        _field(console, key, value)


def _shift(console: Console, d: dict[str, Any], verbose: bool) -> None:
    _field(console, "from", d.get("from", ""))
    _field(console, "to", d.get("to", ""))
    moves = [f"{d[unit]:+d} {unit}" for unit in ("years", "months", "days") if d.get(unit)]
    if moves:
        _field(console, "by", ", ".join(moves))
    _field(console, "elapsed_days", d.get("elapsed_days", ""))


def _leap(console: Console, d: dict[str, Any], verbose: bool) -> None:
    verdict = "is" if d.get("leap") else "is not"
    console.print(f"  {d.get('year')} {verdict} a leap year under {d.get('reform')}")
    _field(console, "february_days", d.get("february_days", ""))


def _generic(console: Console, d: dict[str, Any], verbose: bool) -> None:
    for key, value in d.items():
        _field(console, key, _compact(value) if isinstance(value, (dict, list)) else value)


_BODIES: dict[str, _Body] = {
    "parse": _parse,
    "convert": _convert,
    "fragments": _fragments,
    "shift": _shift,
    "leap": _leap,
}
