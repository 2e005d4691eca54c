"""Due-date notification derivation.

Notifications are recomputed from the current task list on every call.
Nothing is remembered between calls; a caller that wants to avoid showing
the same event twice keeps a :class:`NotificationTracker`.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from taskdeck_cli.core.clock import ReferenceTime
from taskdeck_cli.models import (
    NotificationEvent,
    NotificationPreferences,
    NotificationType,
    Task,
)

_MESSAGES = {
    "overdue": 'Task "{title}" is overdue!',
    "due_today": 'Task "{title}" is due today',
    "due_soon": 'Task "{title}" is due soon',
}


def format_notification_message(task: Task, kind: NotificationType) -> str:
    template = _MESSAGES.get(kind, "Reminder: {title}")
    return template.format(title=task.title)


def classify_task(
    task: Task, preferences: NotificationPreferences, ref: ReferenceTime
) -> NotificationType | None:
    """Classify one task, or return None when no notification applies.

    Classifications are tried in order overdue, due_today, due_soon; the
    first that matches wins and is then dropped if its preference is off.
    """
    if task.completed or task.due_date is None:
        return None

    due = ref.localize(task.due_date)
    due_day = due.date()
    today = ref.today.date()

    if due_day < today:
        return "overdue" if preferences.overdue_reminders else None
    if due_day == today:
        return "due_today" if preferences.due_date_reminders else None

    remind_from = due - timedelta(hours=preferences.reminder_hours)
    if remind_from <= ref.now < due and preferences.due_date_reminders:
        return "due_soon"
    return None


def compute_notifications(
    tasks: Iterable[Task],
    preferences: NotificationPreferences,
    now: datetime | None = None,
) -> list[NotificationEvent]:
    """Derive at most one notification per incomplete, dated task."""
    ref = ReferenceTime.at(now)
    events = []
    for task in tasks:
        kind = classify_task(task, preferences, ref)
        if kind is None:
            continue
        events.append(
            NotificationEvent(
                task_id=task.id,
                task_title=task.title,
                type=kind,
                due_date=task.due_date,
                message=format_notification_message(task, kind),
            )
        )
    return events


class NotificationTracker:
    """Transient, in-memory set of notifications already shown."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __contains__(self, event: NotificationEvent) -> bool:
        return event.key in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def filter_new(self, events: Iterable[NotificationEvent]) -> list[NotificationEvent]:
        """Return the events not seen before and remember them."""
        fresh = []
        for event in events:
            if event.key in self._seen:
                continue
            self._seen.add(event.key)
            fresh.append(event)
        return fresh

    def clear(self) -> None:
        self._seen.clear()
