"""Filtered and sorted views over a task collection."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from taskdeck_cli.core.clock import ReferenceTime
from taskdeck_cli.core.comparators import sort_tasks
from taskdeck_cli.core.predicates import (
    matches_category,
    matches_due_date,
    matches_priority,
    matches_search,
    matches_status,
)
from taskdeck_cli.models import FilterConfig, Task


def filter_and_sort(
    tasks: Iterable[Task],
    filters: FilterConfig | None = None,
    sort_key: str = "created_at",
    direction: str = "desc",
    search: str | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """Return the tasks to display, in display order.

    Applies the text search first, then every filter criterion (all must
    pass), then the comparator for ``sort_key``/``direction``. The input is
    never modified; an empty input or a configuration matching nothing
    yields an empty list.

    Args:
        tasks: Full task collection
        filters: Criteria to apply (defaults to no filtering)
        sort_key: "created_at", "title", "due_date" or "priority"
        direction: "asc" or "desc"
        search: Optional case-insensitive text to look for
        now: Reference instant for the due-date buckets

    Returns:
        New list of matching tasks
    """
    filters = filters or FilterConfig()
    ref = ReferenceTime.at(now)

    selected = [
        task
        for task in tasks
        if matches_search(task, search)
        and matches_status(task, filters.status)
        and matches_category(task, filters.category)
        and matches_priority(task, filters.priority)
        and matches_due_date(task, filters.due_date, ref)
    ]
    return sort_tasks(selected, sort_key, direction)


derive = filter_and_sort
