"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from crosstrain.output.console import create_console, get_output, style_for_value

if TYPE_CHECKING:
    from rich.console import Console

    from crosstrain.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "render_document":
        return str(result.data.get("text", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ct.ok"), Text(f"  {result.op}", style="ct.op"), sep="")


def _field(console: Console, key: str, value: Any, indent: int = 2) -> None:
    """Print a single indented key-value field."""
    k = Text(f"{' ' * indent}{key}: ", style="ct.key")
    if isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    elif key in ("path", "directory"):
        v = Text(str(value), style="ct.path")
    else:
        v = Text(str(value), style=style_for_value(value))
    console.print(k, v, sep="")


def _tree(console: Console, data: dict[str, Any], indent: int = 2) -> None:
    for key, value in data.items():
        if isinstance(value, dict) and value:
            console.print(Text(f"{' ' * indent}{key}:", style="ct.key"))
            _tree(console, value, indent + 2)
        else:
            _field(console, key, value, indent)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_parse(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    header = result.data.get("header") or {}
    if header:
        console.print(Text("  header:", style="ct.key"))
        _tree(console, header, indent=4)
    else:
        console.print(Text("  header: (none)", style="ct.key"))
    body = result.data.get("body", "")
    console.print(Text("  body:", style="ct.key"))
    for line in body.split("\n") if body else []:
        console.print(Text(f"    {line}"), soft_wrap=True)


def _render_document(result: ServiceResult, console: Console) -> None:
    console.out(str(result.data.get("text", "")), highlight=False)


def _named_table(title: str, rows: list[dict[str, Any]], columns: list[str]) -> Table:
    table = Table(title=title, title_justify="left", show_edge=False, pad_edge=False)
    for column in columns:
        table.add_column(column, style="ct.name" if column == "name" else None)
    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))
    return table


def _render_config(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "directory", result.data.get("directory", ""))
    config = dict(result.data.get("config") or {})
    marketplaces = config.pop("marketplaces", [])
    plugins = config.pop("plugins", [])
    _tree(console, config)
    if marketplaces:
        console.print()
        columns = ["name", "source", "enabled", "ref"]
        console.print(_named_table("marketplaces", marketplaces, columns))
    if plugins:
        console.print()
        console.print(_named_table("plugins", plugins, ["name", "marketplace", "enabled"]))


def _render_check(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "directory", result.data.get("directory", ""))
    console.print(Text("  no issues found"))


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print(
        Text("ERROR", style="ct.error"),
        Text(f"  {result.op}", style="ct.op"),
        Text(f" — {msg}"),
        sep="",
    )
    for issue in result.data.get("issues", []):
        console.print(Text(f"  - {issue}", style="ct.warning"))


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "parse_document": _render_parse,
    "render_document": _render_document,
    "show_config": _render_config,
    "check_config": _render_check,
}
