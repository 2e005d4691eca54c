"""SQLite implementation of UserRepository."""

from __future__ import annotations

from taskdeck_cli.adapters.sqlite.base import SqliteRepository
from taskdeck_cli.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict
from taskdeck_cli.exceptions import NotFoundError
from taskdeck_cli.models import User
from taskdeck_cli.repositories import UserRepository


class SqliteUserRepository(SqliteRepository, UserRepository):
    """Local user profiles; one vault can hold several owners."""

    async def get_or_create(self, email: str, name: str | None = None) -> User:
        email = email.strip().lower()
        row = self.query(
            "load user", "SELECT * FROM users WHERE email = ?", (email,)
        ).fetchone()
        if row:
            return User(**row_to_dict(row))

        user_id = generate_uuid()
        with self.transaction("create user") as conn:
            conn.execute(
                "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
                (user_id, email, name, now_iso()),
            )
        return await self.get(user_id)

    async def get(self, user_id: str) -> User:
        row = self.query(
            "load user", "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if not row:
            raise NotFoundError(f"User not found: {user_id}")
        return User(**row_to_dict(row))
