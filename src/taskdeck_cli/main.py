"""Main entry point for TaskDeck CLI."""

from typing import Annotated

import typer

from taskdeck_cli import __version__
from taskdeck_cli.commands import (
    auth,
    categories,
    config,
    export_command,
    notifications,
    stats,
    tasks,
    templates,
)
from taskdeck_cli.utils import exit_codes
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="taskdeck",
    cls=SuggestingGroup,
    help="Personal task manager: filter, sort, track progress and export your tasks",
    epilog=f"Exit codes: {exit_codes.legend()}.",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(categories.app, name="categories", help="Category management commands")
app.add_typer(notifications.app, name="notifications", help="Due-date notifications")
app.add_typer(templates.app, name="templates", help="Quick task templates")
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("stats")(stats.stats_command)
app.command("export")(export_command.export_command)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]TaskDeck CLI[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
def login(
    email: Annotated[str | None, typer.Option("--email", help="Email address")] = None,
    name: Annotated[str | None, typer.Option("--name", help="Display name for a new user")] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Log in as the user with this email."""
    # Delegate to auth command
    auth.login(email=email, name=name, profile=profile)


@app.command()
def logout(
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Forget the logged-in user."""
    auth.logout(profile=profile)


@app.command()
def whoami(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Show the logged-in user."""
    auth.whoami(output=output, json_opt=False, profile=profile)


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
