"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. It loads the
owner's full task list once and hands it to the pure derivations for
filtering, sorting, statistics and notifications.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Any

import pydantic

from taskdeck_cli.core import compute_notifications, compute_stats, filter_and_sort
from taskdeck_cli.exceptions import ValidationError
from taskdeck_cli.models import (
    FilterConfig,
    NotificationEvent,
    NotificationPreferences,
    Task,
    TaskCreate,
    TaskStats,
    TaskUpdate,
)
from taskdeck_cli.repositories import CategoryRepository, TaskRepository
from taskdeck_cli.services.category_service import CategoryService
from taskdeck_cli.utils.uuid_utils import resolve_id

_RELATIVE_DAYS = re.compile(r"^\+(\d+)d$")

# Passed as a category reference to detach a task from its category.
NO_CATEGORY = "none"


def parse_due_date(value: str | datetime | None, now: datetime | None = None) -> datetime | None:
    """Parse a due date given on the command line.

    Accepts ISO dates/datetimes, "today", "tomorrow" and "+Nd".

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if value is None or isinstance(value, datetime):
        return value

    text = value.strip().lower()
    today = (now or datetime.now()).replace(hour=0, minute=0, second=0, microsecond=0)
    if text == "today":
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)
    match = _RELATIVE_DAYS.match(text)
    if match:
        return today + timedelta(days=int(match.group(1)))
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(
            f"Invalid due date '{value}'. Use YYYY-MM-DD, an ISO datetime, today, tomorrow or +Nd"
        ) from e


class TaskService:
    """Service for task business logic."""

    def __init__(
        self,
        task_repository: TaskRepository,
        category_repository: CategoryRepository | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            category_repository: Used to resolve category names and for statistics
        """
        self.repository = task_repository
        self.category_repository = category_repository

    async def list_tasks(
        self,
        filters: FilterConfig | None = None,
        *,
        sort_key: str = "created_at",
        direction: str = "desc",
        search: str | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """List tasks filtered, searched and sorted in memory.

        Args:
            filters: Status, category, priority and due-date criteria
            sort_key: Field to order by
            direction: "asc" or "desc"
            search: Case-insensitive text to look for in title or description
            now: Reference instant for the due-date buckets

        Returns:
            Matching tasks in display order
        """
        tasks = await self.repository.list_all()
        if filters is not None and filters.category not in ("all", NO_CATEGORY):
            category = await self._categories().resolve(filters.category)
            filters = filters.model_copy(update={"category": category.id})
        return filter_and_sort(tasks, filters, sort_key, direction, search, now)

    async def resolve_task_id(self, task_id: str) -> str:
        """Expand an abbreviated task ID."""
        return resolve_id(task_id, await self.repository.list_all(), kind="Task")

    async def get_task(self, task_id: str) -> Task:
        return await self.repository.get(await self.resolve_task_id(task_id))

    async def add_task(
        self,
        title: str,
        *,
        description: str | None = None,
        priority: str = "medium",
        due_date: str | datetime | None = None,
        category: str | None = None,
    ) -> Task:
        """Create a new task.

        Args:
            title: Task title (required, must not be blank)
            description: Detailed description
            priority: "low", "medium" or "high"
            due_date: Due date (ISO format, keyword or datetime)
            category: Category name or ID

        Returns:
            Created Task object
        """
        category_id = await self._category_id(category)
        task_data = _validated(
            TaskCreate,
            title=title,
            description=description,
            priority=priority,
            due_date=parse_due_date(due_date),
            category_id=category_id,
        )
        return await self.repository.add(task_data)

    async def update_task(self, task_id: str, **changes: Any) -> Task:
        """Update an existing task.

        Only the keyword arguments given are changed. ``category="none"``
        detaches the task from its category and ``due_date=None`` clears the
        deadline.

        Args:
            task_id: Task ID or unique prefix
            **changes: title, description, completed, priority, due_date, category

        Returns:
            Updated Task object
        """
        resolved_id = await self.resolve_task_id(task_id)
        updates = await self._build_update(changes)
        return await self.repository.update(resolved_id, updates)

    async def delete_task(self, task_id: str) -> str:
        """Delete a task and return its full ID."""
        resolved_id = await self.resolve_task_id(task_id)
        await self.repository.delete(resolved_id)
        return resolved_id

    async def complete_task(self, task_id: str) -> Task:
        return await self.update_task(task_id, completed=True)

    async def reopen_task(self, task_id: str) -> Task:
        return await self.update_task(task_id, completed=False)

    async def bulk_set_completed(self, task_ids: list[str], completed: bool) -> list[Task]:
        """Mark several tasks as completed or pending."""
        resolved = await self._resolve_many(task_ids)
        return await self.repository.bulk_update(resolved, TaskUpdate(completed=completed))

    async def bulk_delete(self, task_ids: list[str]) -> int:
        resolved = await self._resolve_many(task_ids)
        return await self.repository.bulk_delete(resolved)

    async def get_stats(self, now: datetime | None = None) -> TaskStats:
        tasks = await self.repository.list_all()
        categories = (
            await self.category_repository.list_all()
            if self.category_repository is not None
            else None
        )
        return compute_stats(tasks, categories, now)

    async def get_notifications(
        self, preferences: NotificationPreferences, now: datetime | None = None
    ) -> list[NotificationEvent]:
        tasks = await self.repository.list_all()
        return compute_notifications(tasks, preferences, now)

    def _categories(self) -> CategoryService:
        if self.category_repository is None:
            raise ValidationError("Categories are not available")
        return CategoryService(self.category_repository)

    async def _category_id(self, reference: str | None) -> str | None:
        if reference is None or reference.strip().lower() == NO_CATEGORY:
            return None
        category = await self._categories().resolve(reference)
        return category.id

    async def _resolve_many(self, task_ids: list[str]) -> list[str]:
        tasks = await self.repository.list_all()
        return [resolve_id(task_id, tasks, kind="Task") for task_id in task_ids]

    async def _build_update(self, changes: dict[str, Any]) -> TaskUpdate:
        fields = dict(changes)
        if "category" in fields:
            fields["category_id"] = await self._category_id(fields.pop("category"))
        if "due_date" in fields:
            fields["due_date"] = parse_due_date(fields["due_date"])
        return _validated(TaskUpdate, **fields)


def _validated(model: type[pydantic.BaseModel], **fields: Any) -> Any:
    """Build a boundary payload, reporting pydantic errors as ValidationError."""
    try:
        return model(**fields)
    except pydantic.ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(problems) from e
