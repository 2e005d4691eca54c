"""Progress statistics command."""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from taskdeck_cli.models import TaskStats
from taskdeck_cli.services.storage import get_storage_context
from taskdeck_cli.services.task_service import TaskService
from taskdeck_cli.utils.ui.console import get_console
from taskdeck_cli.utils.ui.formatters import format_output, render_progress_bar

from .decorators import command_wrapper
from .utils import resolve_output

console = get_console()


def render_stats(stats: TaskStats) -> None:
    """Print the dashboard view of the statistics."""
    console.print("\n[bold cyan]📊 Task Statistics[/bold cyan]\n")
    console.print(
        f"Overall progress: [bold]{render_progress_bar(stats.percent)}[/bold] {stats.percent}%"
    )
    console.print(
        f"Total: [bold]{stats.total}[/bold]   Completed: [green]{stats.completed}[/green]   "
        f"Pending: [yellow]{stats.pending}[/yellow]"
    )
    console.print(
        f"Overdue: [red]{stats.overdue_count}[/red]   Due today: [cyan]{stats.due_today_count}[/cyan]   "
        f"Created this week: {stats.recent_count}"
    )

    table = Table(title="By priority", show_header=True, header_style="bold magenta")
    table.add_column("Priority")
    table.add_column("Done", justify="right")
    table.add_column("Progress")
    for level, bucket in stats.by_priority.items():
        table.add_row(
            level.capitalize(),
            f"{bucket.completed}/{bucket.total}",
            f"{render_progress_bar(bucket.percent, width=10)} {bucket.percent}%",
        )
    console.print()
    console.print(table)

    if stats.by_category or stats.uncategorized.total:
        table = Table(title="By category", show_header=True, header_style="bold magenta")
        table.add_column("Category")
        table.add_column("Done", justify="right")
        table.add_column("Progress")
        for category in stats.by_category:
            table.add_row(
                escape(category.name),
                f"{category.completed}/{category.total}",
                f"{render_progress_bar(category.percent, width=10)} {category.percent}%",
            )
        if stats.uncategorized.total:
            table.add_row(
                "[dim]Uncategorized[/dim]",
                f"{stats.uncategorized.completed}/{stats.uncategorized.total}",
                f"{render_progress_bar(stats.uncategorized.percent, width=10)} "
                f"{stats.uncategorized.percent}%",
            )
        console.print()
        console.print(table)
    console.print()


@command_wrapper
async def stats_command(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Show completion progress by priority and category."""
    output = resolve_output(output, json_opt, profile)
    storage = await get_storage_context(profile)
    stats = await TaskService(storage.task_repository, storage.category_repository).get_stats()

    if output == "pretty":
        render_stats(stats)
    else:
        format_output(stats.model_dump(mode="json"), output)
