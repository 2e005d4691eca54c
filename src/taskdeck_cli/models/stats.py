"""Progress statistics result models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BucketStats(BaseModel):
    """Counts for one slice of the task list."""

    total: int = 0
    completed: int = 0
    percent: int = 0


class CategoryStats(BucketStats):
    """Counts for the tasks attached to one category."""

    category_id: str
    name: str
    color: str | None = None


class TaskStats(BaseModel):
    """Dashboard statistics over a task collection.

    Attributes:
        total: Number of tasks
        completed: Number of completed tasks
        pending: Number of incomplete tasks
        percent: Rounded completion percentage (0 when there are no tasks)
        by_priority: Per-priority counts keyed by "high", "medium", "low"
        by_category: Per-category counts
        uncategorized: Counts for tasks without a category
        overdue_count: Incomplete tasks due before today
        due_today_count: Tasks due on today's date
        recent_count: Tasks created during the last 7 days
    """

    total: int = 0
    completed: int = 0
    pending: int = 0
    percent: int = 0
    by_priority: dict[str, BucketStats] = Field(default_factory=dict)
    by_category: list[CategoryStats] = Field(default_factory=list)
    uncategorized: BucketStats = Field(default_factory=BucketStats)
    overdue_count: int = 0
    due_today_count: int = 0
    recent_count: int = 0
