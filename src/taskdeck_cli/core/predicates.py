"""Single-task filter predicates.

Each predicate answers whether one task passes one criterion. Unrecognised
criterion values never raise: they behave like "all".
"""

from __future__ import annotations

from taskdeck_cli.core.clock import ReferenceTime
from taskdeck_cli.models import PRIORITIES, Task

WEEK_DAYS = 7
MONTH_DAYS = 30


def matches_status(task: Task, status: str) -> bool:
    if status == "pending":
        return not task.completed
    if status == "completed":
        return task.completed
    return True


def matches_category(task: Task, category: str) -> bool:
    if category == "all":
        return True
    if category == "none":
        return task.category_id is None
    return task.category_id == category


def matches_priority(task: Task, priority: str) -> bool:
    if priority not in PRIORITIES:
        return True
    return task.priority == priority


def matches_due_date(task: Task, bucket: str, ref: ReferenceTime) -> bool:
    """Check a task against a due-date bucket relative to ``ref.today``."""
    if bucket == "none":
        return task.due_date is None
    if bucket not in ("overdue", "today", "week", "month"):
        return True
    if task.due_date is None:
        return False

    due = ref.localize(task.due_date)
    today = ref.today

    if bucket == "overdue":
        return due < today and not task.completed
    if bucket == "today":
        return due.date() == today.date()
    if bucket == "week":
        return today <= due <= ref.days_ahead(WEEK_DAYS)
    return today <= due <= ref.days_ahead(MONTH_DAYS)


def matches_search(task: Task, search: str | None) -> bool:
    """Case-insensitive substring match on title or description."""
    if not search:
        return True
    needle = search.lower()
    if needle in task.title.lower():
        return True
    return task.description is not None and needle in task.description.lower()
