"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table
from rich.text import Text

from .console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display plain data (dicts and lists of dicts)."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict) and "tasks" in data:
        format_dict_table(data["tasks"])
    elif isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    columns = list(items[0].keys())
    for column in columns:
        table.add_column(column.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(column)) for column in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key/value rows."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))
    console.print(table)


def format_pretty(data: Any) -> None:
    """Format data in a human-friendly way."""
    if isinstance(data, dict) and "tasks" in data:
        format_tasks_pretty(data["tasks"])
    elif isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list):
        format_tasks_pretty(data)
    else:
        console.print(data)


def format_tasks_pretty(tasks: list[dict], show_dates: bool = True) -> None:
    """One line per task: status icon, text, creation date and id."""
    for task in tasks:
        format_task_item(task, show_dates=show_dates)


def format_task_item(task: dict, show_dates: bool = True) -> None:
    line = Text()
    if task.get("completed"):
        line.append("✓ ", style="bold green")
        line.append(task.get("text", ""), style="dim strike")
    else:
        line.append("○ ", style="bold")
        line.append(task.get("text", ""))

    if show_dates and task.get("createdAt"):
        line.append(f"  {format_date(task['createdAt'])}", style="dim")
    line.append(f"  #{task.get('id')}", style="cyan dim")
    console.print(line)


def format_stats(stats: dict) -> None:
    """Total / completed / pending counters on one line."""
    line = Text()
    line.append(f"{stats.get('total', 0)} ", style="bold blue")
    line.append("total   ", style="blue")
    line.append(f"{stats.get('completed', 0)} ", style="bold green")
    line.append("completed   ", style="green")
    line.append(f"{stats.get('pending', 0)} ", style="bold yellow")
    line.append("pending", style="yellow")
    console.print(line)


def format_date(date_str: str | datetime) -> str:
    """Render an ISO timestamp as a local calendar date."""
    if isinstance(date_str, str):
        try:
            date_str = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        except ValueError:
            return date_str
    return date_str.astimezone().strftime("%Y-%m-%d")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "✓" if value else ""
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")
