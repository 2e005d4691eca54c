"""Task ordering.

Comparators return a negative, zero or positive number like a classic
``cmp`` function. ``sorted`` is stable, so tasks with equal keys keep their
input order.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from functools import cmp_to_key
from typing import Any

from taskdeck_cli.models import Task

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}

Comparator = Callable[[Task, Task], int]


def _title_key(task: Task) -> str:
    return task.title.lower()


def _due_date_key(task: Task) -> float:
    # Undated tasks behave as if due infinitely late.
    if task.due_date is None:
        return math.inf
    return task.due_date.timestamp()


def _priority_key(task: Task) -> int:
    return PRIORITY_ORDER.get(task.priority, 0)


def _created_at_key(task: Task) -> float:
    return task.created_at.timestamp()


SORT_FIELDS: dict[str, Callable[[Task], Any]] = {
    "title": _title_key,
    "due_date": _due_date_key,
    "priority": _priority_key,
    "created_at": _created_at_key,
}


def _compare(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def get_comparator(sort_key: str, direction: str = "desc") -> Comparator:
    """Build a comparator for ``sort_key``.

    Unknown keys fall back to ``created_at``; any direction other than
    ``"asc"`` sorts descending.
    """
    key = SORT_FIELDS.get(sort_key, _created_at_key)
    sign = 1 if direction == "asc" else -1

    def comparator(a: Task, b: Task) -> int:
        return sign * _compare(key(a), key(b))

    return comparator


def sort_tasks(tasks: list[Task], sort_key: str, direction: str = "desc") -> list[Task]:
    return sorted(tasks, key=cmp_to_key(get_comparator(sort_key, direction)))
