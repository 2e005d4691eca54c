"""SQLite implementation of CategoryRepository."""

from __future__ import annotations

import sqlite3

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from taskdeck_cli.exceptions import NotFoundError
from taskdeck_cli.models import Category, CategoryCreate, CategoryUpdate
from taskdeck_cli.repositories import CategoryRepository


class SqliteCategoryRepository(SqliteRepository, CategoryRepository):
    """SQLite implementation of category repository."""

    async def list_all(self) -> list[Category]:
        cursor = self.query(
            "load categories",
            "SELECT * FROM categories WHERE user_id = ? ORDER BY name COLLATE NOCASE",
            (self.user_id,),
        )
        return [_to_category(row) for row in cursor.fetchall()]

    async def get(self, category_id: str) -> Category:
        row = self.query(
            "load category",
            "SELECT * FROM categories WHERE id = ? AND user_id = ?",
            (category_id, self.user_id),
        ).fetchone()
        if not row:
            raise NotFoundError(f"Category not found: {category_id}")
        return _to_category(row)

    async def create(self, category_data: CategoryCreate) -> Category:
        category_id = generate_uuid()
        now = now_iso()

        with self.transaction(
            "create category", f"Category '{category_data.name}' already exists"
        ) as conn:
            conn.execute(
                """INSERT INTO categories (id, name, color, user_id, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    category_id,
                    category_data.name,
                    category_data.color,
                    self.user_id,
                    now,
                    now,
                ),
            )

        return await self.get(category_id)

    async def update(self, category_id: str, updates: CategoryUpdate) -> Category:
        await self.get(category_id)
        changes = updates.model_dump(exclude_none=True)
        if not changes:
            return await self.get(category_id)

        changes["updated_at"] = now_iso()
        set_clause = ", ".join(f"{column} = ?" for column in changes)

        with self.transaction(
            "update category", f"Category '{updates.name}' already exists"
        ) as conn:
            conn.execute(
                f"UPDATE categories SET {set_clause} WHERE id = ? AND user_id = ?",
                (*changes.values(), category_id, self.user_id),
            )

        return await self.get(category_id)

    async def delete(self, category_id: str) -> bool:
        await self.get(category_id)

        with self.transaction("delete category") as conn:
            # Detach tasks explicitly so no reference survives even when the
            # foreign key pragma is off.
            conn.execute(
                "UPDATE tasks SET category_id = NULL, updated_at = ? "
                "WHERE category_id = ? AND user_id = ?",
                (now_iso(), category_id, self.user_id),
            )
            conn.execute(
                "DELETE FROM categories WHERE id = ? AND user_id = ?",
                (category_id, self.user_id),
            )

        return True


def _to_category(row: sqlite3.Row) -> Category:
    return Category(**row_to_dict(row))
