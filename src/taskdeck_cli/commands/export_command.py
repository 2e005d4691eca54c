"""Export command - Write tasks to a CSV, JSON or text file."""

from pathlib import Path
from typing import Annotated

import typer

from taskdeck_cli.services.export_service import ExportService
from taskdeck_cli.services.storage import get_storage_context
from taskdeck_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper


@command_wrapper
async def export_command(
    export_format: Annotated[
        str, typer.Option("--format", "-f", help="csv, json or txt")
    ] = "csv",
    status: Annotated[
        str, typer.Option("--status", help="all, completed or pending")
    ] = "all",
    categories: Annotated[
        list[str] | None,
        typer.Option("--category", "-c", help="Only tasks in this category (repeatable)"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output-file", "-O", help="Destination (default tasks-YYYY-MM-DD.<ext>)"),
    ] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Export tasks to a file."""
    storage = await get_storage_context(profile)
    service = ExportService(storage.task_repository, storage.category_repository)
    path, count = await service.export_tasks(
        export_format.lower(), output_file, status=status, categories=categories
    )
    format_success(f"Exported {count} task(s) to: {path}")
