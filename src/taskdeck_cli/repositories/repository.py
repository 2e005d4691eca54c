"""Storage ports for tasks, categories and users.

Adapters implement these ABCs; services only ever see the ports. A task or
category repository is bound to one owner when it is built, so none of the
methods take a user id. Task reads and writes return the task with its
category joined.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskdeck_cli.models import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    Task,
    TaskCreate,
    TaskUpdate,
    User,
)


class TaskRepository(ABC):
    """Persistence for one owner's tasks."""

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """Every task of the owner, newest first.

        Filtering and sorting happen in memory, in the core.
        """

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Raises NotFoundError for an unknown id."""

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Store a new task, assigning its id and timestamps.

        Raises:
            StoreError: If the store rejects the write
        """

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply only the fields explicitly set on ``updates``."""

    @abstractmethod
    async def delete(self, task_id: str) -> bool: ...

    @abstractmethod
    async def bulk_update(self, task_ids: list[str], updates: TaskUpdate) -> list[Task]:
        """Apply one update to several tasks in a single transaction."""

    @abstractmethod
    async def bulk_delete(self, task_ids: list[str]) -> int:
        """Delete several tasks; returns how many rows went away."""


class CategoryRepository(ABC):
    """Persistence for one owner's categories."""

    @abstractmethod
    async def list_all(self) -> list[Category]:
        """Categories ordered by name, case-insensitively."""

    @abstractmethod
    async def get(self, category_id: str) -> Category: ...

    @abstractmethod
    async def create(self, category_data: CategoryCreate) -> Category:
        """Raises ValidationError when the owner already has that name."""

    @abstractmethod
    async def update(self, category_id: str, updates: CategoryUpdate) -> Category: ...

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        """Remove a category; its tasks stay, with ``category_id`` cleared."""


class UserRepository(ABC):
    """Owners that tasks and categories are scoped to."""

    @abstractmethod
    async def get_or_create(self, email: str, name: str | None = None) -> User:
        """The user with ``email`` (matched case-insensitively), created on first use."""

    @abstractmethod
    async def get(self, user_id: str) -> User: ...
