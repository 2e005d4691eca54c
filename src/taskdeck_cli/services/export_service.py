"""Export service - Serialize tasks to CSV, JSON or plain text files."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from taskdeck_cli.core.clock import ReferenceTime
from taskdeck_cli.exceptions import ExportError, ValidationError
from taskdeck_cli.models import Task
from taskdeck_cli.repositories import CategoryRepository, TaskRepository
from taskdeck_cli.services.category_service import CategoryService
from taskdeck_cli.utils.logger import get_logger

EXPORT_FORMATS = ("csv", "json", "txt")
EXPORT_STATUSES = ("all", "completed", "pending")

CSV_HEADERS = ("Title", "Description", "Status", "Priority", "Category", "Due Date", "Created Date")

NO_MATCHES = "No tasks match the selected filters."

UNCATEGORIZED = "Uncategorized"


def select_tasks(
    tasks: Iterable[Task],
    status: str = "all",
    category_ids: Iterable[str] | None = None,
) -> list[Task]:
    """Apply the export filter: completion status plus optional categories."""
    selected = list(tasks)
    if status == "completed":
        selected = [t for t in selected if t.completed]
    elif status == "pending":
        selected = [t for t in selected if not t.completed]

    wanted = set(category_ids or ())
    if wanted:
        selected = [t for t in selected if t.category_id in wanted]
    return selected


def default_filename(export_format: str, now: datetime | None = None) -> str:
    return f"tasks-{(now or datetime.now()):%Y-%m-%d}.{export_format}"


def _category_name(task: Task) -> str:
    return task.category.name if task.category else UNCATEGORIZED


def _date(value: datetime | None, ref: ReferenceTime) -> str:
    return f"{ref.localize(value):%Y-%m-%d}" if value else ""


def render_csv(tasks: list[Task], now: datetime | None = None) -> str:
    """Render tasks as CSV: a bare header line, then every row fully quoted."""
    ref = ReferenceTime.at(now)
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(CSV_HEADERS)
    writer = csv.DictWriter(
        buffer, fieldnames=CSV_HEADERS, quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    for task in tasks:
        writer.writerow(
            {
                "Title": task.title,
                "Description": task.description or "",
                "Status": "Completed" if task.completed else "Pending",
                "Priority": task.priority.capitalize(),
                "Category": _category_name(task),
                "Due Date": _date(task.due_date, ref),
                "Created Date": _date(task.created_at, ref),
            }
        )
    return buffer.getvalue()


def render_json(tasks: list[Task], now: datetime | None = None) -> str:
    payload = {
        "exportDate": (now or datetime.now()).isoformat(),
        "totalTasks": len(tasks),
        "tasks": [
            {
                "id": task.id,
                "title": task.title,
                "description": task.description,
                "completed": task.completed,
                "priority": task.priority,
                "category": task.category.name if task.category else None,
                "dueDate": task.due_date.isoformat() if task.due_date else None,
                "createdAt": task.created_at.isoformat(),
            }
            for task in tasks
        ],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_txt(tasks: list[Task], now: datetime | None = None) -> str:
    """Render a human-readable report, one numbered block per task."""
    ref = ReferenceTime.at(now)
    lines = [
        "TASK EXPORT",
        "=" * 50,
        f"Export Date: {_date(ref.now, ref)}",
        f"Total Tasks: {len(tasks)}",
        "",
    ]
    for index, task in enumerate(tasks, start=1):
        lines.append(f"{index}. {task.title}")
        lines.append(f"   Status: {'✓ Completed' if task.completed else '○ Pending'}")
        lines.append(f"   Priority: {task.priority.upper()}")
        lines.append(f"   Category: {_category_name(task)}")
        if task.description:
            lines.append(f"   Description: {task.description}")
        if task.due_date:
            lines.append(f"   Due Date: {_date(task.due_date, ref)}")
        lines.append(f"   Created: {_date(task.created_at, ref)}")
        lines.append("")
    return "\n".join(lines)


RENDERERS: dict[str, Callable[[list[Task], datetime | None], str]] = {
    "csv": render_csv,
    "json": render_json,
    "txt": render_txt,
}


class ExportService:
    """Service for exporting the owner's tasks to a file."""

    def __init__(
        self,
        task_repository: TaskRepository,
        category_repository: CategoryRepository | None = None,
    ):
        self.task_repository = task_repository
        self.category_repository = category_repository

    async def render(
        self,
        export_format: str = "csv",
        *,
        status: str = "all",
        categories: list[str] | None = None,
        now: datetime | None = None,
    ) -> tuple[str, int]:
        """Render the selected tasks.

        Args:
            export_format: "csv", "json" or "txt"
            status: "all", "completed" or "pending"
            categories: Category names or IDs to restrict the export to
            now: Timestamp written into the export header

        Returns:
            The rendered document and the number of tasks in it

        Raises:
            ValidationError: If the format or status is unknown
            ExportError: If no task matches the filters
        """
        if export_format not in EXPORT_FORMATS:
            raise ValidationError(
                f"Unknown export format '{export_format}'. Choose from: {', '.join(EXPORT_FORMATS)}"
            )
        if status not in EXPORT_STATUSES:
            raise ValidationError(
                f"Unknown status '{status}'. Choose from: {', '.join(EXPORT_STATUSES)}"
            )

        category_ids = await self._category_ids(categories or [])
        tasks = select_tasks(await self.task_repository.list_all(), status, category_ids)
        if not tasks:
            raise ExportError(NO_MATCHES)
        return RENDERERS[export_format](tasks, now), len(tasks)

    async def export_tasks(
        self,
        export_format: str = "csv",
        output: str | Path | None = None,
        *,
        status: str = "all",
        categories: list[str] | None = None,
        now: datetime | None = None,
    ) -> tuple[Path, int]:
        """Write the export to ``output`` (default ``tasks-YYYY-MM-DD.<ext>``).

        Returns:
            The written path and the number of exported tasks
        """
        content, count = await self.render(
            export_format, status=status, categories=categories, now=now
        )
        path = Path(output) if output else Path(default_filename(export_format, now))
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Failed to write {path}: {e}") from e
        get_logger("export").info("exported %d tasks to %s", count, path)
        return path, count

    async def _category_ids(self, references: list[str]) -> list[str]:
        if not references:
            return []
        if self.category_repository is None:
            raise ValidationError("Categories are not available")
        service = CategoryService(self.category_repository)
        return [(await service.resolve(ref)).id for ref in references]
