"""Rich Console factory and theme for rollctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  Outside a terminal (tests, pipes) Rich drops the
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ROLL_THEME = Theme(
    {
        "roll.ok": "bold green",
        "roll.error": "bold red",
        "roll.op": "bold cyan",
        "roll.key": "dim",
        "roll.id": "bold blue",
        "roll.count": "magenta",
        "roll.status.in_stock": "green",
        "roll.status.reserved": "yellow",
        "roll.status.sold": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ROLL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for a roll status (empty for unknown values)."""
    return f"roll.status.{status}" if status in ("in_stock", "reserved", "sold") else ""
