"""Template commands - create common tasks in one step."""

from typing import Annotated

import typer
from rich.table import Table

from taskdeck_cli.services.storage import get_storage_context
from taskdeck_cli.services.task_service import TaskService
from taskdeck_cli.services.template_service import DEFAULT_TEMPLATES, TemplateService
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.console import get_console
from taskdeck_cli.utils.ui.formatters import PRIORITY_COLORS, format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Quick task templates")
console = get_console()


@app.command("list")
@command_wrapper(auth_required=False)
def list_templates(
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """List the built-in templates."""
    output = resolve_output(output, json_opt, profile)
    if output != "pretty":
        format_output([t.model_dump() for t in DEFAULT_TEMPLATES], output)
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Category")
    table.add_column("Description", style="dim")
    for index, template in enumerate(DEFAULT_TEMPLATES, start=1):
        table.add_row(
            str(index),
            template.title,
            f"[{PRIORITY_COLORS[template.priority]}]{template.priority}[/]",
            template.category or "-",
            template.description,
        )
    console.print(table)


@app.command("apply")
@command_wrapper
async def apply_template(
    index: Annotated[int, typer.Argument(help="Template number from 'taskdeck templates list'")],
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Create a task from a template."""
    storage = await get_storage_context(profile)
    task_service = TaskService(storage.task_repository, storage.category_repository)
    task = await TemplateService(task_service).apply(index)
    category = f" in {task.category.name}" if task.category else ""
    format_success(f"Created task from template: {task.title}{category} [{task.id[:8]}]")
