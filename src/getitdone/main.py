"""Main entry point for Get It Done."""

import locale

import typer

from getitdone import __version__
from getitdone.commands import config, tasks
from getitdone.models import FilterMode, SortKey, SortOrder
from getitdone.utils.typer_helpers import SuggestingGroup
from getitdone.utils.ui.console import get_console

app = typer.Typer(
    name="getitdone",
    cls=SuggestingGroup,
    help="Get It Done - a personal task list manager",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


# Add top-level commands
@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Get It Done[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def add(
    text: str = typer.Argument(..., help="Task text (2-100 characters)"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a new task."""
    tasks.add_task(text=text, output=output)


@app.command()
def check(
    text: str = typer.Argument(..., help="Candidate task text"),
) -> None:
    """Validate a task text without adding it."""
    tasks.check_task(text=text)


@app.command("list")
def list_(
    filter_mode: FilterMode | None = typer.Option(
        None, "--filter", "-f", help="Which tasks to show", case_sensitive=False
    ),
    sort_key: SortKey | None = typer.Option(
        None, "--sort", "-s", help="Sort by date, name or status", case_sensitive=False
    ),
    sort_order: SortOrder | None = typer.Option(
        None, "--order", help="Sort direction", case_sensitive=False
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List tasks with the current filter and sort."""
    tasks.list_tasks(
        filter_mode=filter_mode, sort_key=sort_key, sort_order=sort_order, output=output
    )


@app.command()
def toggle(
    task_id: int = typer.Argument(..., help="Task ID"),
) -> None:
    """Mark a task done, or pending again."""
    tasks.toggle_task(task_id=task_id)


@app.command()
def remove(
    task_id: int = typer.Argument(..., help="Task ID"),
) -> None:
    """Delete a task."""
    tasks.remove_task(task_id=task_id)


@app.command()
def clear() -> None:
    """Delete every completed task."""
    tasks.clear_completed()


@app.command()
def stats(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show total, completed and pending counts."""
    tasks.show_stats(output=output)


# Main entry point
def main():
    """Main entry point."""
    # Name sorting collates with the user's locale.
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        pass
    app()


if __name__ == "__main__":
    main()
