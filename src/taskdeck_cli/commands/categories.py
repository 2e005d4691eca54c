"""Category management commands."""

from typing import Annotated

import typer

from taskdeck_cli.exceptions import ValidationError
from taskdeck_cli.services.category_service import CategoryService
from taskdeck_cli.services.storage import get_storage_context
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper
from .utils import categories_payload, resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Category management commands")


async def _category_service(profile: str) -> CategoryService:
    storage = await get_storage_context(profile)
    return CategoryService(storage.category_repository)


@app.command("list")
@command_wrapper
async def list_categories(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """List categories."""
    output = resolve_output(output, json_opt, profile)
    service = await _category_service(profile)
    format_output(categories_payload(await service.list_categories()), output)


@app.command("create")
@command_wrapper
async def create_category(
    name: Annotated[str, typer.Argument(help="Category name")],
    color: Annotated[str | None, typer.Option("--color", help="Display color, e.g. #3b82f6")] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Create a category."""
    service = await _category_service(profile)
    category = await service.create_category(name, color=color)
    format_success(f"Created category: {category.name} [{category.id[:8]}]")


@app.command("update")
@command_wrapper
async def update_category(
    category: Annotated[str, typer.Argument(help="Category name or ID")],
    name: Annotated[str | None, typer.Option("--name", help="New name")] = None,
    color: Annotated[str | None, typer.Option("--color", help="New color")] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Rename or recolor a category."""
    if name is None and color is None:
        raise ValidationError("Nothing to update. Pass --name and/or --color.")
    service = await _category_service(profile)
    updated = await service.update_category(category, name=name, color=color)
    format_success(f"Updated category: {updated.name}")


@app.command("delete")
@command_wrapper
async def delete_category(
    category: Annotated[str, typer.Argument(help="Category name or ID")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Delete a category. Its tasks are kept and become uncategorized."""
    service = await _category_service(profile)
    target = await service.resolve(category)
    if not yes and not typer.confirm(
        f"Delete category '{target.name}'? Its tasks will become uncategorized."
    ):
        format_warning("Cancelled")
        raise typer.Exit(0)
    await service.delete_category(target.id)
    format_success(f"Deleted category: {target.name}")
