"""SQLite adapter for the local task vault."""

from .category_repository import SqliteCategoryRepository
from .task_repository import SqliteTaskRepository
from .user_repository import SqliteUserRepository

__all__ = [
    "SqliteTaskRepository",
    "SqliteCategoryRepository",
    "SqliteUserRepository",
]
