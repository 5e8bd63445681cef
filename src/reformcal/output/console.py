"""Rich Console factory and theme for reformcal output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  Outside a terminal (tests, pipes) Rich drops the
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CAL_THEME = Theme(
    {
        "cal.ok": "bold green",
        "cal.error": "bold red",
        "cal.warning": "bold yellow",
        "cal.op": "bold cyan",
        "cal.key": "dim",
        "cal.date": "bold",
        "cal.jd": "bold blue",
        "cal.julian": "magenta",
        "cal.gregorian": "green",
    }
)

_CALENDAR_STYLES: dict[str, str] = {
    "julian": "cal.julian",
    "gregorian": "cal.gregorian",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=CAL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_calendar(calendar: str) -> str:
    """Rich style name for ``julian`` / ``gregorian``."""
    return _CALENDAR_STYLES.get(calendar, "")
