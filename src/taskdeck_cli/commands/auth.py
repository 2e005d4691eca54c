"""Authentication commands."""

from typing import Annotated

import typer

from taskdeck_cli.config import get_config_manager
from taskdeck_cli.services.storage import get_auth_service
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")


@app.command("login")
@command_wrapper(auth_required=False)
async def login(
    email: Annotated[str | None, typer.Option("--email", help="Email address")] = None,
    name: Annotated[str | None, typer.Option("--name", help="Display name for a new user")] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Log in as the user with this email, creating them on first use."""
    if email is None:
        email = typer.prompt("Email")
    user = await get_auth_service(get_config_manager(profile)).login(email, name)
    format_success(f"Logged in as {user.email}")


@app.command("logout")
@command_wrapper(auth_required=False)
def logout(
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Forget the logged-in user."""
    if get_auth_service(get_config_manager(profile)).logout():
        format_success("Logged out")
    else:
        format_info("Not logged in")


@app.command("whoami")
@command_wrapper
async def whoami(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Show the logged-in user."""
    output = resolve_output(output, json_opt, profile)
    user = await get_auth_service(get_config_manager(profile)).current_user()
    format_output(user.model_dump(mode="json"), "table" if output == "pretty" else output)
