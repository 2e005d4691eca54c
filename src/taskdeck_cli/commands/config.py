"""Configuration management commands."""

from typing import Annotated, Any, Optional

import pydantic
import typer

from taskdeck_cli.config import get_config_manager
from taskdeck_cli.exceptions import NotFoundError, ValidationError
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.console import get_console
from taskdeck_cli.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def parse_value(value: str) -> Any:
    """Convert a command-line string to bool, int or leave it as text."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    return value


@app.command("view")
@command_wrapper(auth_required=False)
def view_config(
    output: Annotated[str, typer.Option("--output", "-o", help="Output format")] = "yaml",
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """View current configuration."""
    format_output(get_config_manager(profile).config.model_dump(), output)


@app.command("get")
@command_wrapper(auth_required=False)
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., output.format)")],
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        raise NotFoundError(f"Configuration key '{key}' not found")
    console.print(value)


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., output.format)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    try:
        get_config_manager(profile).set(key, parsed_value)
    except KeyError as e:
        raise NotFoundError(f"Configuration key '{key}' not found") from e
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid value for '{key}': {value}") from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    key: Annotated[Optional[str], typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_warning("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_manager(profile).reset(key)
    except KeyError as e:
        raise NotFoundError(f"Configuration key '{key}' not found") from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
