"""Repository interfaces for the TaskDeck CLI.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" of the application.

Implementations (Adapters) are in:
- taskdeck_cli.adapters.sqlite (local storage)
"""

from .repository import CategoryRepository, TaskRepository, UserRepository

__all__ = [
    "TaskRepository",
    "CategoryRepository",
    "UserRepository",
]
