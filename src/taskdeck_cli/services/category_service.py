"""Category service - Business logic for category operations."""

from __future__ import annotations

import pydantic

from taskdeck_cli.exceptions import ValidationError
from taskdeck_cli.models import Category, CategoryCreate, CategoryUpdate
from taskdeck_cli.repositories import CategoryRepository
from taskdeck_cli.utils.uuid_utils import resolve_id


class CategoryService:
    """Service for category business logic."""

    def __init__(self, category_repository: CategoryRepository):
        """Initialize the category service.

        Args:
            category_repository: CategoryRepository implementation for data access
        """
        self.repository = category_repository

    async def list_categories(self) -> list[Category]:
        return await self.repository.list_all()

    async def resolve(self, reference: str) -> Category:
        """Find a category by exact name (case-insensitive), ID or ID prefix.

        Raises:
            NotFoundError: If nothing matches
            ValidationError: If an ID prefix is ambiguous
        """
        categories = await self.list_categories()
        wanted = reference.strip().lower()
        for category in categories:
            if category.name.lower() == wanted:
                return category
        category_id = resolve_id(reference, categories, kind="Category")
        return next(c for c in categories if c.id == category_id)

    async def create_category(self, name: str, *, color: str | None = None) -> Category:
        """Create a new category.

        Args:
            name: Category name (required, unique per user)
            color: Optional display color

        Returns:
            Created Category object
        """
        try:
            data = CategoryCreate(name=name, **({"color": color} if color else {}))
        except pydantic.ValidationError as e:
            raise ValidationError("Category name is required") from e
        return await self.repository.create(data)

    async def update_category(
        self,
        reference: str,
        *,
        name: str | None = None,
        color: str | None = None,
    ) -> Category:
        category = await self.resolve(reference)
        try:
            updates = CategoryUpdate(name=name, color=color)
        except pydantic.ValidationError as e:
            raise ValidationError("Category name must not be empty") from e
        return await self.repository.update(category.id, updates)

    async def delete_category(self, reference: str) -> Category:
        """Delete a category; its tasks become uncategorized.

        Returns:
            The deleted Category
        """
        category = await self.resolve(reference)
        await self.repository.delete(category.id)
        return category
