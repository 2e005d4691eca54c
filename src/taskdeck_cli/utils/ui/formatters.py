"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.table import Table
from rich.text import Text

from taskdeck_cli.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml", "quiet")


def format_output(data: Any, output_format: str = "pretty", compact: bool = False) -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_pretty(data, compact=compact)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        if "tasks" in data or "categories" in data:
            format_dict_table(data.get("tasks", data.get("categories")))
        else:
            format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, dict):
        return str(value.get("name", value))
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_quiet(data: Any) -> None:
    """Print only IDs, one per line."""
    if isinstance(data, dict):
        data = data.get("tasks", data.get("categories", [data]))
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])


def _status_line(label: str, style: str, message: str) -> None:
    # Messages carry user text such as "[abcd1234]"; never parse it as markup
    line = Text(f"{label}: ", style=style)
    line.append(message)
    console.print(line)


def format_error(message: str) -> None:
    _status_line("Error", "bold red", message)


def format_success(message: str) -> None:
    _status_line("Success", "bold green", message)


def format_warning(message: str) -> None:
    _status_line("Warning", "bold yellow", message)


def format_info(message: str) -> None:
    _status_line("Info", "bold blue", message)


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🟢",
}

PRIORITY_COLORS = {level: f"priority.{level}" for level in PRIORITY_ICONS}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}


def format_pretty(data: Any, compact: bool = False) -> None:
    """Format data in pretty format with colors and icons."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict) and "tasks" in data:
        format_tasks_pretty(data["tasks"], compact, overdue_ids=data.get("overdue_ids"))
    elif isinstance(data, dict) and "categories" in data:
        format_categories_pretty(data["categories"])
    elif isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list):
        for item in data:
            console.print(item)
    else:
        console.print(data)


def format_tasks_pretty(
    tasks: list[dict],
    compact: bool = False,
    overdue_ids: list[str] | None = None,
) -> None:
    """Format tasks in pretty format, keeping the given order."""
    if not tasks:
        console.print("[yellow]No tasks match your search and filters.[/yellow]")
        return

    overdue = set(overdue_ids or [])
    pending = [t for t in tasks if not t.get("completed")]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(pending)} pending, {len(tasks) - len(pending)} completed)", style="dim")
    console.print(header)
    console.print()

    for task in tasks:
        format_task_item(task, compact, overdue=task.get("id") in overdue)
    console.print()


def format_task_item(task: dict, compact: bool = False, overdue: bool = False) -> None:
    """Format a single task line."""
    completed = task.get("completed", False)
    icon = STATUS_ICONS["completed"] if completed else STATUS_ICONS["open"]
    priority = task.get("priority", "medium")
    title = task.get("title", "Untitled")

    line = Text(f"  {icon} ")
    line.append(title, style="dim" if completed else ("bold" if priority == "high" else ""))
    line.append(f"  {PRIORITY_ICONS.get(priority, '')} {priority}", style=PRIORITY_COLORS.get(priority, ""))

    category = task.get("category")
    if category:
        line.append(f"  #{category.get('name')}", style="category")

    due = task.get("due_date")
    if due:
        due_str = format_due_date(due)
        line.append(f"  📅 {due_str}", style="overdue" if overdue else "due")

    line.append(f"  [{str(task.get('id', ''))[:8]}]", style="dim")
    console.print(line)

    if not compact and task.get("description"):
        console.print(Text(f"      {task['description']}", style="dim"))


def format_categories_pretty(categories: list[dict]) -> None:
    """Format categories with their color swatch."""
    if not categories:
        console.print("[yellow]No categories yet[/yellow]")
        return
    for category in categories:
        line = Text("  ")
        line.append("●", style=_color_style(category.get("color")))
        line.append(f" {category.get('name')}  ")
        line.append(f"[{str(category.get('id', ''))[:8]}]", style="dim")
        console.print(line)


def _color_style(color: str | None) -> str:
    if not color:
        return "white"
    try:
        Style.parse(color)
    except StyleSyntaxError:
        return "white"
    return color


def format_due_date(value: str | datetime) -> str:
    """Render a due date compactly, dropping a midnight time."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if (value.hour, value.minute) == (0, 0):
        return value.strftime("%b %d, %Y")
    return value.strftime("%b %d, %Y %H:%M")


def render_progress_bar(percent: int, width: int = 20) -> str:
    """Render a progress bar using block characters."""
    filled = int(min(max(percent, 0), 100) / 100 * width)
    return "█" * filled + "░" * (width - filled)
