"""Shared Rich console for Get It Done."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Return the process-wide console.

    Automatic highlighting is off: it would color digits and quotes inside
    task text differently from one task to the next.
    """
    return Console(highlight=False)


def print_hint(message: str) -> None:
    """Print a dimmed secondary line (counters, summaries, next steps)."""
    get_console().print(message, style="dim")
