"""Configuration management commands."""

from typing import Optional

import typer
from pydantic import BaseModel

from getitdone.services.config_service import get_config_service
from getitdone.utils.ui.console import get_console
from getitdone.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    config_dict = get_config_service().config.model_dump(mode="json")
    format_output(config_dict, output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., storage.backend)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if isinstance(value, BaseModel):
        format_output(value.model_dump(mode="json"), "yaml")
    else:
        console.print(str(value))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., view.sort_key)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    get_config_service().set(key, value)
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all configuration"
        if not typer.confirm(f"Reset {target} to defaults?"):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    get_config_service().reset(key)
    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
