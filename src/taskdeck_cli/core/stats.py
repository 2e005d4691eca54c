"""Progress statistics over a task collection."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from taskdeck_cli.core.clock import ReferenceTime
from taskdeck_cli.core.predicates import matches_due_date
from taskdeck_cli.models import (
    PRIORITIES,
    BucketStats,
    Category,
    CategoryStats,
    Task,
    TaskStats,
)

RECENT_DAYS = 7


def completion_percent(completed: int, total: int) -> int:
    """Whole-number completion percentage, rounding halves up; 0 for no tasks."""
    if total == 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


def _bucket(tasks: list[Task]) -> BucketStats:
    done = sum(1 for task in tasks if task.completed)
    return BucketStats(
        total=len(tasks), completed=done, percent=completion_percent(done, len(tasks))
    )


def _categories_from_tasks(tasks: list[Task]) -> list[Category]:
    found: dict[str, Category] = {}
    for task in tasks:
        if task.category_id is None or task.category_id in found:
            continue
        if task.category is not None:
            found[task.category_id] = task.category
        else:
            found[task.category_id] = Category(id=task.category_id, name=task.category_id)
    return sorted(found.values(), key=lambda c: c.name.lower())


def compute_stats(
    tasks: Iterable[Task],
    categories: Iterable[Category] | None = None,
    now: datetime | None = None,
) -> TaskStats:
    """Reduce a task list to dashboard statistics.

    Args:
        tasks: Task collection to summarise
        categories: Categories to report on; inferred from the tasks when omitted
        now: Reference instant for the overdue, due-today and recent counts

    Returns:
        TaskStats with overall, per-priority and per-category counts
    """
    task_list = list(tasks)
    ref = ReferenceTime.at(now)
    overall = _bucket(task_list)

    by_priority = {
        level: _bucket([t for t in task_list if t.priority == level])
        for level in PRIORITIES
    }

    category_list = (
        list(categories) if categories is not None else _categories_from_tasks(task_list)
    )
    by_category = []
    for category in category_list:
        bucket = _bucket([t for t in task_list if t.category_id == category.id])
        by_category.append(
            CategoryStats(
                category_id=category.id,
                name=category.name,
                color=category.color,
                **bucket.model_dump(),
            )
        )

    week_ago = ref.now - timedelta(days=RECENT_DAYS)

    return TaskStats(
        total=overall.total,
        completed=overall.completed,
        pending=overall.total - overall.completed,
        percent=overall.percent,
        by_priority=by_priority,
        by_category=by_category,
        uncategorized=_bucket([t for t in task_list if t.category_id is None]),
        overdue_count=sum(1 for t in task_list if matches_due_date(t, "overdue", ref)),
        due_today_count=sum(1 for t in task_list if matches_due_date(t, "today", ref)),
        recent_count=sum(
            1 for t in task_list if ref.localize(t.created_at) >= week_ago
        ),
    )
