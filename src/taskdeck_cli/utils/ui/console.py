"""Shared Rich console and the named styles task output is drawn with."""

from functools import cache

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "priority.high": "bold red",
        "priority.medium": "bold yellow",
        "priority.low": "green",
        "due": "cyan",
        "overdue": "bold red",
        "category": "blue",
    }
)


@cache
def get_console() -> Console:
    """Return the console every command prints through."""
    return Console(theme=THEME)
