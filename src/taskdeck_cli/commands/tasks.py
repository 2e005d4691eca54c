"""Task management commands."""

from typing import Annotated

import typer

from taskdeck_cli.config import get_config_manager
from taskdeck_cli.core.clock import ReferenceTime
from taskdeck_cli.core.predicates import matches_due_date
from taskdeck_cli.exceptions import ValidationError
from taskdeck_cli.models import FilterConfig
from taskdeck_cli.services.storage import get_storage_context
from taskdeck_cli.services.task_service import TaskService
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.console import get_console
from taskdeck_cli.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper
from .utils import resolve_output, task_to_dict, tasks_payload, truncate

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
bulk_app = typer.Typer(cls=SuggestingGroup, help="Apply one action to several tasks")
app.add_typer(bulk_app, name="bulk")
console = get_console()

OutputOpt = Annotated[str | None, typer.Option("--output", "-o", help="Output format")]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output as JSON (alias for --output json)")]
ProfileOpt = Annotated[str, typer.Option("--profile", help="Profile name")]


async def _task_service(profile: str) -> TaskService:
    storage = await get_storage_context(profile)
    return TaskService(storage.task_repository, storage.category_repository)


@app.command("list")
@command_wrapper
async def list_tasks(
    status: Annotated[str, typer.Option("--status", help="all, pending or completed")] = "all",
    category: Annotated[
        str, typer.Option("--category", "-c", help="all, none, or a category name/ID")
    ] = "all",
    priority: Annotated[str, typer.Option("--priority", "-p", help="all, high, medium or low")] = "all",
    due: Annotated[
        str, typer.Option("--due", help="all, overdue, today, week, month or none")
    ] = "all",
    search: Annotated[str | None, typer.Option("--search", "-s", help="Search title and description")] = None,
    sort: Annotated[
        str | None, typer.Option("--sort", help="created_at, title, due_date or priority")
    ] = None,
    order: Annotated[str | None, typer.Option("--order", help="asc or desc")] = None,
    output: OutputOpt = None,
    json_opt: JsonOpt = False,
    compact: Annotated[bool, typer.Option("--compact", help="Compact output")] = False,
    profile: ProfileOpt = "default",
) -> None:
    """List tasks with filters, search and sorting."""
    output = resolve_output(output, json_opt, profile)
    config = get_config_manager(profile).config
    service = await _task_service(profile)

    tasks = await service.list_tasks(
        FilterConfig(status=status, category=category, priority=priority, due_date=due),
        sort_key=sort or config.ui.sort_by,
        direction=order or config.ui.sort_order,
        search=search,
    )

    overdue_ids = None
    if output == "pretty":
        ref = ReferenceTime.at()
        overdue_ids = [t.id for t in tasks if matches_due_date(t, "overdue", ref)]
    format_output(
        tasks_payload(tasks, overdue_ids), output, compact=compact or config.output.compact
    )


@app.command("add")
@command_wrapper
async def add_task(
    title: Annotated[str, typer.Argument(help="Task title")],
    description: Annotated[str | None, typer.Option("--description", "-d", help="Description")] = None,
    priority: Annotated[str, typer.Option("--priority", "-p", help="high, medium or low")] = "medium",
    due: Annotated[
        str | None, typer.Option("--due", help="Due date (YYYY-MM-DD, ISO datetime, today, tomorrow, +Nd)")
    ] = None,
    category: Annotated[str | None, typer.Option("--category", "-c", help="Category name or ID")] = None,
    output: OutputOpt = None,
    json_opt: JsonOpt = False,
    profile: ProfileOpt = "default",
) -> None:
    """Create a new task."""
    output = resolve_output(output, json_opt, profile)
    service = await _task_service(profile)
    task = await service.add_task(
        title, description=description, priority=priority, due_date=due, category=category
    )
    if output in ("pretty", "table"):
        format_success(f"Created task: {truncate(task.title)} [{task.id[:8]}]")
    else:
        format_output(task_to_dict(task), output)


@app.command("get")
@command_wrapper
async def get_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    output: OutputOpt = None,
    json_opt: JsonOpt = False,
    profile: ProfileOpt = "default",
) -> None:
    """Show task details."""
    output = resolve_output(output, json_opt, profile)
    service = await _task_service(profile)
    task = await service.get_task(task_id)
    format_output(task_to_dict(task), output)


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    title: Annotated[str | None, typer.Option("--title", "-t", help="New title")] = None,
    description: Annotated[str | None, typer.Option("--description", "-d", help="New description")] = None,
    priority: Annotated[str | None, typer.Option("--priority", "-p", help="high, medium or low")] = None,
    due: Annotated[str | None, typer.Option("--due", help="New due date")] = None,
    clear_due: Annotated[bool, typer.Option("--clear-due", help="Remove the due date")] = False,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Category name or ID ('none' to clear)")
    ] = None,
    output: OutputOpt = None,
    json_opt: JsonOpt = False,
    profile: ProfileOpt = "default",
) -> None:
    """Edit a task. Only the options given are changed."""
    if due and clear_due:
        raise ValidationError("Use either --due or --clear-due, not both")

    changes = {
        key: value
        for key, value in (
            ("title", title),
            ("description", description),
            ("priority", priority),
            ("due_date", due),
            ("category", category),
        )
        if value is not None
    }
    if clear_due:
        changes["due_date"] = None
    if not changes:
        raise ValidationError("Nothing to update. Pass at least one option.")

    output = resolve_output(output, json_opt, profile)
    service = await _task_service(profile)
    task = await service.update_task(task_id, **changes)
    if output in ("pretty", "table"):
        format_success(f"Updated task: {truncate(task.title)}")
    else:
        format_output(task_to_dict(task), output)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: ProfileOpt = "default",
) -> None:
    """Delete a task."""
    service = await _task_service(profile)
    task = await service.get_task(task_id)
    if not yes and not typer.confirm(f"Delete task '{task.title}'?"):
        format_warning("Cancelled")
        raise typer.Exit(0)
    await service.delete_task(task.id)
    format_success(f"Deleted task: {truncate(task.title)}")


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    profile: ProfileOpt = "default",
) -> None:
    """Mark a task as completed."""
    service = await _task_service(profile)
    task = await service.complete_task(task_id)
    format_success(f"✓ Completed: {truncate(task.title)}")
    console.print(f"[dim]To undo: taskdeck tasks reopen {task.id[:8]}[/dim]")


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or unique prefix")],
    profile: ProfileOpt = "default",
) -> None:
    """Mark a completed task as pending again."""
    service = await _task_service(profile)
    task = await service.reopen_task(task_id)
    format_success(f"Reopened: {truncate(task.title)}")


@bulk_app.command("complete")
@command_wrapper
async def bulk_complete(
    task_ids: Annotated[list[str], typer.Argument(help="Task IDs or unique prefixes")],
    profile: ProfileOpt = "default",
) -> None:
    """Mark several tasks as completed."""
    service = await _task_service(profile)
    tasks = await service.bulk_set_completed(task_ids, True)
    format_success(f"Completed {len(tasks)} task(s)")


@bulk_app.command("reopen")
@command_wrapper
async def bulk_reopen(
    task_ids: Annotated[list[str], typer.Argument(help="Task IDs or unique prefixes")],
    profile: ProfileOpt = "default",
) -> None:
    """Mark several tasks as pending."""
    service = await _task_service(profile)
    tasks = await service.bulk_set_completed(task_ids, False)
    format_success(f"Reopened {len(tasks)} task(s)")


@bulk_app.command("delete")
@command_wrapper
async def bulk_delete(
    task_ids: Annotated[list[str], typer.Argument(help="Task IDs or unique prefixes")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: ProfileOpt = "default",
) -> None:
    """Delete several tasks."""
    if not yes and not typer.confirm(f"Delete {len(task_ids)} task(s)?"):
        format_warning("Cancelled")
        raise typer.Exit(0)
    service = await _task_service(profile)
    deleted = await service.bulk_delete(task_ids)
    format_success(f"Deleted {deleted} task(s)")
