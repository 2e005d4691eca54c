"""Filter, sort and notification configuration models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

SortKey = Literal["title", "due_date", "priority", "created_at"]
SortDirection = Literal["asc", "desc"]
NotificationType = Literal["overdue", "due_today", "due_soon"]

STATUS_FILTERS = ("all", "pending", "completed")
DUE_DATE_FILTERS = ("all", "overdue", "today", "week", "month", "none")
SORT_KEYS = ("created_at", "title", "due_date", "priority")


class FilterConfig(BaseModel):
    """Criteria applied to a task list.

    Values are kept as plain strings: anything unrecognised means "no
    filtering" for that criterion.

    Attributes:
        status: "all", "pending" or "completed"
        category: "all", "none" or a category ID
        priority: "all" or a priority level
        due_date: "all", "overdue", "today", "week", "month" or "none"
    """

    status: str = "all"
    category: str = "all"
    priority: str = "all"
    due_date: str = "all"


class NotificationPreferences(BaseModel):
    """Notification settings persisted in the user's config.

    Attributes:
        browser_notifications: Show desktop-style notices when checking
        email_notifications: Reserved for an email channel
        due_date_reminders: Emit due-today and due-soon notifications
        overdue_reminders: Emit overdue notifications
        reminder_hours: How many hours before the due instant a task is "due soon"
    """

    browser_notifications: bool = Field(default=True)
    email_notifications: bool = Field(default=False)
    due_date_reminders: bool = Field(default=True)
    overdue_reminders: bool = Field(default=True)
    reminder_hours: int = Field(default=24, ge=0)


class NotificationEvent(BaseModel):
    """A derived, never persisted, due-date signal for one task."""

    task_id: str
    task_title: str
    type: NotificationType
    due_date: datetime
    message: str

    @property
    def key(self) -> str:
        """Identifier callers can use to suppress repeats."""
        return f"{self.task_id}:{self.type}"
