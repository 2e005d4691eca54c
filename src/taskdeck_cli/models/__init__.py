"""TaskDeck CLI domain models.

This package contains Pydantic models that represent the core domain entities
of the TaskDeck application. These models are used throughout the application
for data validation, serialization, and type safety.
"""

from .core import (
    DEFAULT_CATEGORY_COLOR,
    PRIORITIES,
    Category,
    CategoryCreate,
    CategoryUpdate,
    Priority,
    Task,
    TaskCreate,
    TaskTemplate,
    TaskUpdate,
    User,
)
from .filters import (
    DUE_DATE_FILTERS,
    SORT_KEYS,
    STATUS_FILTERS,
    FilterConfig,
    NotificationEvent,
    NotificationPreferences,
    NotificationType,
    SortDirection,
    SortKey,
)
from .stats import BucketStats, CategoryStats, TaskStats

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskTemplate",
    "Priority",
    "PRIORITIES",
    # Category models
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "DEFAULT_CATEGORY_COLOR",
    # User model
    "User",
    # Filtering and sorting
    "FilterConfig",
    "SortKey",
    "SortDirection",
    "STATUS_FILTERS",
    "DUE_DATE_FILTERS",
    "SORT_KEYS",
    # Notifications
    "NotificationPreferences",
    "NotificationEvent",
    "NotificationType",
    # Statistics
    "BucketStats",
    "CategoryStats",
    "TaskStats",
]
