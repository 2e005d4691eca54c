"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from typing import Any

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_iso,
    parse_datetime,
    row_to_dict,
    to_iso,
)
from taskdeck_cli.exceptions import NotFoundError
from taskdeck_cli.models import Category, Task, TaskCreate, TaskUpdate
from taskdeck_cli.repositories import TaskRepository

_SELECT_WITH_CATEGORY = """
    SELECT t.*,
           c.name AS category_name,
           c.color AS category_color,
           c.created_at AS category_created_at,
           c.updated_at AS category_updated_at
    FROM tasks t
    LEFT JOIN categories c ON c.id = t.category_id
"""


class SqliteTaskRepository(SqliteRepository, TaskRepository):
    """SQLite implementation of task repository."""

    async def list_all(self) -> list[Task]:
        cursor = self.query(
            "load tasks",
            _SELECT_WITH_CATEGORY + " WHERE t.user_id = ? ORDER BY t.created_at DESC",
            (self.user_id,),
        )
        return [_to_task(row) for row in cursor.fetchall()]

    async def get(self, task_id: str) -> Task:
        row = self.query(
            "load task",
            _SELECT_WITH_CATEGORY + " WHERE t.id = ? AND t.user_id = ?",
            (task_id, self.user_id),
        ).fetchone()
        if not row:
            raise NotFoundError(f"Task not found: {task_id}")
        return _to_task(row)

    async def add(self, task_data: TaskCreate) -> Task:
        task_id = generate_uuid()
        now = now_iso()

        with self.transaction("create task") as conn:
            conn.execute(
                """INSERT INTO tasks (
                    id, title, description, completed, priority, due_date,
                    category_id, user_id, created_at, updated_at
                ) VALUES (?, ?, ?, 0, ?, ?, ?, ?, ?, ?)""",
                (
                    task_id,
                    task_data.title,
                    task_data.description,
                    task_data.priority,
                    to_iso(task_data.due_date),
                    task_data.category_id,
                    self.user_id,
                    now,
                    now,
                ),
            )

        return await self.get(task_id)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        await self.get(task_id)
        with self.transaction("update task") as conn:
            self._apply_update(conn, task_id, updates)
        return await self.get(task_id)

    async def delete(self, task_id: str) -> bool:
        await self.get(task_id)
        with self.transaction("delete task") as conn:
            conn.execute(
                "DELETE FROM tasks WHERE id = ? AND user_id = ?", (task_id, self.user_id)
            )
        return True

    async def bulk_update(self, task_ids: list[str], updates: TaskUpdate) -> list[Task]:
        for task_id in task_ids:
            await self.get(task_id)
        with self.transaction("update tasks") as conn:
            for task_id in task_ids:
                self._apply_update(conn, task_id, updates)
        return [await self.get(task_id) for task_id in task_ids]

    async def bulk_delete(self, task_ids: list[str]) -> int:
        deleted = 0
        with self.transaction("delete tasks") as conn:
            for task_id in task_ids:
                cursor = conn.execute(
                    "DELETE FROM tasks WHERE id = ? AND user_id = ?",
                    (task_id, self.user_id),
                )
                deleted += cursor.rowcount
        return deleted

    def _apply_update(
        self, conn: sqlite3.Connection, task_id: str, updates: TaskUpdate
    ) -> None:
        changes: dict[str, Any] = updates.changes()
        if not changes:
            return
        if "due_date" in changes:
            changes["due_date"] = to_iso(changes["due_date"])
        if "completed" in changes:
            changes["completed"] = int(changes["completed"])
        changes["updated_at"] = now_iso()

        set_clause = ", ".join(f"{column} = ?" for column in changes)
        conn.execute(
            f"UPDATE tasks SET {set_clause} WHERE id = ? AND user_id = ?",
            (*changes.values(), task_id, self.user_id),
        )


def _to_task(row: sqlite3.Row) -> Task:
    data = row_to_dict(row)
    category = None
    if data.get("category_id") and data.get("category_name") is not None:
        category = Category(
            id=data["category_id"],
            name=data["category_name"],
            color=data["category_color"],
            created_at=parse_datetime(data["category_created_at"]),
            updated_at=parse_datetime(data["category_updated_at"]),
        )
    return Task(
        id=data["id"],
        title=data["title"],
        description=data["description"],
        completed=bool(data["completed"]),
        priority=data["priority"] or "medium",
        due_date=parse_datetime(data["due_date"]),
        category_id=data["category_id"],
        category=category,
        created_at=parse_datetime(data["created_at"]),
        updated_at=parse_datetime(data["updated_at"]),
    )
