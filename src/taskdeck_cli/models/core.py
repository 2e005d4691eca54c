"""Task and category data models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

Priority = Literal["low", "medium", "high"]

PRIORITIES: tuple[Priority, ...] = ("high", "medium", "low")

DEFAULT_CATEGORY_COLOR = "#3b82f6"


def _require_text(value: str | None, field_name: str) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} must not be empty")
    return stripped


class Category(BaseModel):
    """Category model representing a user-defined label.

    Attributes:
        id: Unique identifier for the category
        name: Category name, unique per owner
        color: Hex color code used for display only
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CategoryCreate(BaseModel):
    """Model for creating a new category."""

    name: str
    color: str = DEFAULT_CATEGORY_COLOR

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _require_text(value, "Category name")


class CategoryUpdate(BaseModel):
    """Model for updating an existing category.

    All fields are optional - only provided fields will be updated.
    """

    name: str | None = None
    color: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str | None:
        return _require_text(value, "Category name")


class Task(BaseModel):
    """Task model representing one actionable item.

    Records from stores that predate priorities and due dates load with
    ``priority="medium"`` and ``due_date=None``.

    Attributes:
        id: Unique identifier for the task
        title: Main task text
        description: Optional detailed description
        completed: Completion status
        priority: Priority level ("low", "medium", "high")
        due_date: Optional deadline
        category_id: Optional reference to a category
        category: Joined category, when the store supplies it
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    completed: bool = False
    priority: Priority = "medium"
    due_date: datetime | None = None
    category_id: str | None = None
    category: Category | None = None
    created_at: datetime
    updated_at: datetime | None = None


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required, must not be blank)
        description: Optional detailed description
        priority: Priority level
        due_date: Optional deadline
        category_id: Optional category reference
    """

    title: str
    description: str | None = None
    priority: Priority = "medium"
    due_date: datetime | None = None
    category_id: str | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _require_text(value, "Task title")


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only fields that were explicitly set are applied, so ``category_id=None``
    clears the category while an omitted ``category_id`` leaves it alone.
    """

    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    category_id: str | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str | None) -> str | None:
        return _require_text(value, "Task title")

    def changes(self) -> dict:
        """Return only the fields the caller set."""
        return self.model_dump(exclude_unset=True)


class User(BaseModel):
    """Authenticated owner of tasks and categories."""

    id: str
    email: EmailStr
    name: str | None = None
    created_at: datetime | None = None


class TaskTemplate(BaseModel):
    """Reusable blueprint for a common task."""

    title: str
    description: str
    priority: Priority = "medium"
    category: str | None = Field(default=None, description="Category name to attach")
