"""Typer helper utilities."""

from difflib import get_close_matches

import click
import typer
from rich.markup import escape
from typer.core import TyperGroup

from getitdone.utils.ui.console import get_console
from getitdone.utils.ui.formatters import format_error


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with its closest matches.

    ``getitdone lsit`` prints ``Did you mean this? list`` and exits 1.
    Hidden commands are never suggested. Input with no close match falls
    through to click's usual usage error.
    """

    max_suggestions = 3
    similarity_cutoff = 0.6

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            suggestions = self.suggest(args[0])
            if not suggestions:
                raise

            console = get_console()
            format_error(
                f'unknown command "{escape(args[0])}" for "{ctx.info_name}"'
            )
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e

    def suggest(self, attempted: str) -> list[str]:
        visible = [name for name, cmd in self.commands.items() if not cmd.hidden]
        return get_close_matches(
            attempted, visible, n=self.max_suggestions, cutoff=self.similarity_cutoff
        )
