"""Task commands: add, check, list, toggle, remove, clear, stats."""

from contextlib import closing

import typer
from rich.markup import escape

from getitdone.models import FilterMode, SortKey, SortOrder, Task, ValidationIssue
from getitdone.services.config_service import get_config_service
from getitdone.services.store_factory import build_task_store
from getitdone.services.task_store import TaskStore, character_count
from getitdone.utils import exit_codes
from getitdone.utils.typer_helpers import SuggestingGroup
from getitdone.utils.ui.console import get_console, print_hint
from getitdone.utils.ui.formatters import (
    format_info,
    format_output,
    format_stats,
    format_success,
    format_tasks_pretty,
    format_warning,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()


def _open_store() -> TaskStore:
    return build_task_store(get_config_service())


def _resolve_output(output: str | None) -> str:
    return output or get_config_service().config.output.format


def _task_dict(task: Task) -> dict:
    return task.model_dump(mode="json", by_alias=True)


@app.command("add")
@command_wrapper
def add_task(
    text: str = typer.Argument(..., help="Task text (2-100 characters)"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a new task."""
    output = _resolve_output(output)
    with closing(_open_store()) as store:
        result = store.insert(text)

    if isinstance(result, ValidationIssue):
        raise AppError(result.message, exit_code=exit_codes.ERROR_INVALID_ARGS)

    if output in ("json", "yaml"):
        format_output(_task_dict(result), output)
        return
    format_success(f"Added: {escape(result.text)}")
    print_hint(f"To complete: getitdone toggle {result.id}")


@app.command("check")
@command_wrapper
def check_task(
    text: str = typer.Argument(..., help="Candidate task text"),
) -> None:
    """Validate a task text without adding it."""
    with closing(_open_store()) as store:
        issue = store.validate_candidate(text)

    print_hint(character_count(text))
    if issue is not None:
        raise AppError(issue.message, exit_code=exit_codes.ERROR_INVALID_ARGS)
    format_success("Task is valid")


@app.command("list")
@command_wrapper
def list_tasks(
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
    output = _resolve_output(output)
    show_dates = get_config_service().config.output.show_dates

    with closing(_open_store()) as store:
        if filter_mode is not None:
            store.set_filter(filter_mode)
        if sort_key is not None:
            store.set_sort(sort_key)
        if sort_order is not None:
            store.set_sort_order(sort_order)

        view = [_task_dict(t) for t in store.compute_view()]
        stats = store.compute_stats().model_dump()
        summary = store.view_summary()
        empty_message = store.empty_message()
        options = store.view_options.model_dump(mode="json")

    if output in ("json", "yaml"):
        format_output({"stats": stats, "view": options, "tasks": view}, output)
        return

    format_stats(stats)
    console.print()
    if not view:
        print_hint(empty_message)
    elif output == "table":
        format_output({"tasks": view}, "table")
    else:
        format_tasks_pretty(view, show_dates=show_dates)

    if stats["total"]:
        console.print()
        print_hint(summary)


@app.command("toggle")
@command_wrapper
def toggle_task(
    task_id: int = typer.Argument(..., help="Task ID"),
) -> None:
    """Mark a task done, or pending again."""
    with closing(_open_store()) as store:
        found = store.get(task_id) is not None
        store.toggle(task_id)
        task = store.get(task_id)

    if not found or task is None:
        format_warning(f"Task #{task_id} not found; nothing changed.")
        return
    if task.completed:
        format_success(f"✓ Completed: {escape(task.text)}")
    else:
        format_success(f"Reopened: {escape(task.text)}")


@app.command("remove")
@command_wrapper
def remove_task(
    task_id: int = typer.Argument(..., help="Task ID"),
) -> None:
    """Delete a task."""
    with closing(_open_store()) as store:
        task = store.get(task_id)
        store.remove(task_id)

    if task is None:
        format_warning(f"Task #{task_id} not found; nothing changed.")
        return
    format_success(f"Deleted: {escape(task.text)}")


@app.command("clear")
@command_wrapper
def clear_completed() -> None:
    """Delete every completed task."""
    with closing(_open_store()) as store:
        removed = store.clear_completed()

    if removed == 0:
        format_info("No completed tasks to clear.")
        return
    format_success(f"Cleared {removed} completed task(s)")


@app.command("stats")
@command_wrapper
def show_stats(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show total, completed and pending counts."""
    output = _resolve_output(output)
    with closing(_open_store()) as store:
        stats = store.compute_stats().model_dump()

    if output == "pretty":
        format_stats(stats)
    else:
        format_output(stats, output)
