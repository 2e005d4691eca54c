"""Pure task derivations: filtering, sorting, notifications and statistics.

Nothing in this package performs I/O, logs, or keeps state between calls.
Every function takes the reference instant explicitly.
"""

from .clock import ReferenceTime
from .comparators import get_comparator, sort_tasks
from .derivation import derive, filter_and_sort
from .notifications import (
    NotificationTracker,
    classify_task,
    compute_notifications,
    format_notification_message,
)
from .stats import completion_percent, compute_stats

__all__ = [
    "ReferenceTime",
    "filter_and_sort",
    "derive",
    "get_comparator",
    "sort_tasks",
    "compute_notifications",
    "classify_task",
    "format_notification_message",
    "NotificationTracker",
    "compute_stats",
    "completion_percent",
]
