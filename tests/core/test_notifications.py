"""Tests for due-date notification derivation."""

from __future__ import annotations

from datetime import datetime, timedelta

from taskdeck_cli.core import (
    NotificationTracker,
    ReferenceTime,
    classify_task,
    compute_notifications,
)
from taskdeck_cli.models import NotificationPreferences, Task

NOW = datetime(2024, 6, 15, 12, 0, 0)
REF = ReferenceTime.at(NOW)
DEFAULTS = NotificationPreferences()


def _task(task_id: str = "task-1", **overrides) -> Task:
    data = {"id": task_id, "title": "Pay rent", "created_at": NOW - timedelta(days=10)}
    data.update(overrides)
    return Task(**data)


def test_default_preferences():
    assert DEFAULTS.browser_notifications is True
    assert DEFAULTS.email_notifications is False
    assert DEFAULTS.due_date_reminders is True
    assert DEFAULTS.overdue_reminders is True
    assert DEFAULTS.reminder_hours == 24


def test_due_today_yields_exactly_one_event():
    events = compute_notifications([_task(due_date=NOW.replace(hour=18))], DEFAULTS, NOW)

    assert len(events) == 1
    assert events[0].type == "due_today"
    assert events[0].message == 'Task "Pay rent" is due today'


def test_due_today_suppressed_when_reminders_off():
    prefs = NotificationPreferences(due_date_reminders=False)
    assert compute_notifications([_task(due_date=NOW.replace(hour=18))], prefs, NOW) == []


def test_overdue_event_and_message():
    events = compute_notifications([_task(due_date=NOW - timedelta(days=2))], DEFAULTS, NOW)
    assert [e.type for e in events] == ["overdue"]
    assert events[0].message == 'Task "Pay rent" is overdue!'


def test_overdue_gated_by_its_own_preference():
    task = _task(due_date=NOW - timedelta(days=2))
    assert compute_notifications([task], NotificationPreferences(overdue_reminders=False), NOW) == []
    assert compute_notifications([task], NotificationPreferences(due_date_reminders=False), NOW)


def test_due_soon_within_reminder_window():
    tomorrow_morning = NOW + timedelta(hours=20)
    events = compute_notifications([_task(due_date=tomorrow_morning)], DEFAULTS, NOW)
    assert [e.type for e in events] == ["due_soon"]
    assert events[0].message == 'Task "Pay rent" is due soon'


def test_due_soon_outside_window():
    prefs = NotificationPreferences(reminder_hours=6)
    assert compute_notifications([_task(due_date=NOW + timedelta(hours=20))], prefs, NOW) == []


def test_due_soon_window_start_is_inclusive():
    due = NOW + timedelta(hours=24)
    assert classify_task(_task(due_date=due), DEFAULTS, REF) == "due_soon"


def test_due_today_takes_precedence_over_due_soon():
    # Due in two hours: both today and within the window.
    assert classify_task(_task(due_date=NOW + timedelta(hours=2)), DEFAULTS, REF) == "due_today"


def test_completed_and_undated_tasks_never_notify():
    tasks = [
        _task("done", due_date=NOW - timedelta(days=1), completed=True),
        _task("undated", due_date=None),
    ]
    assert compute_notifications(tasks, DEFAULTS, NOW) == []


def test_at_most_one_event_per_task():
    tasks = [
        _task("a", due_date=NOW - timedelta(days=1)),
        _task("b", due_date=NOW.replace(hour=20)),
        _task("c", due_date=NOW + timedelta(hours=23)),
        _task("d", due_date=NOW + timedelta(days=5)),
    ]
    events = compute_notifications(tasks, DEFAULTS, NOW)

    assert [(e.task_id, e.type) for e in events] == [
        ("a", "overdue"),
        ("b", "due_today"),
        ("c", "due_soon"),
    ]


def test_events_are_recomputed_on_each_call():
    tasks = [_task(due_date=NOW - timedelta(days=1))]
    assert compute_notifications(tasks, DEFAULTS, NOW) == compute_notifications(tasks, DEFAULTS, NOW)


def test_tracker_suppresses_repeats():
    tracker = NotificationTracker()
    events = compute_notifications([_task(due_date=NOW - timedelta(days=1))], DEFAULTS, NOW)

    assert tracker.filter_new(events) == events
    assert tracker.filter_new(events) == []
    assert events[0] in tracker
    assert len(tracker) == 1

    tracker.clear()
    assert tracker.filter_new(events) == events


def test_tracker_treats_new_type_as_new_event():
    tracker = NotificationTracker()
    task = _task(due_date=NOW + timedelta(hours=20))
    tracker.filter_new(compute_notifications([task], DEFAULTS, NOW))

    next_day = NOW + timedelta(hours=12)
    fresh = tracker.filter_new(compute_notifications([task], DEFAULTS, next_day))
    assert [e.type for e in fresh] == ["due_today"]
