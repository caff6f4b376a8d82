"""Rich Console factory and theme for crosstrain output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CROSSTRAIN_THEME = Theme(
    {
        "ct.ok": "bold green",
        "ct.error": "bold red",
        "ct.warning": "bold yellow",
        "ct.op": "bold cyan",
        "ct.key": "dim",
        "ct.path": "dim",
        "ct.name": "bold blue",
        "ct.true": "green",
        "ct.false": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CROSSTRAIN_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_value(value: object) -> str:
    """Return the Rich style name for a rendered config value."""
    if value is True:
        return "ct.true"
    if value is False:
        return "ct.false"
    return ""
