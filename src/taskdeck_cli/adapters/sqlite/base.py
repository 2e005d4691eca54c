"""Shared plumbing for the SQLite repositories."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from taskdeck_cli.adapters.sqlite.connection import get_connection
from taskdeck_cli.exceptions import StoreError, ValidationError
from taskdeck_cli.utils.logger import get_logger


class SqliteRepository:
    """Base for repositories bound to one owner and one database."""

    def __init__(
        self,
        user_id: str | None = None,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize the repository.

        Args:
            user_id: Owner every query is scoped to
            db_path: Optional database file path. If None, uses default location.
            connection: Pre-configured connection (takes precedence over db_path)
        """
        self.user_id = user_id
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def query(self, action: str, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Run a read-only statement.

        Raises:
            StoreError: If the driver rejects the statement
        """
        try:
            return self.connection.execute(sql, params)
        except sqlite3.Error as e:
            get_logger("sqlite").error("failed to %s: %s", action, e)
            raise StoreError(f"Failed to {action}") from e

    @contextmanager
    def transaction(
        self, action: str, conflict_message: str | None = None
    ) -> Iterator[sqlite3.Connection]:
        """Run statements atomically, turning driver errors into app errors.

        Args:
            action: What is being attempted, e.g. "create task"
            conflict_message: Raised as ValidationError on a constraint violation
        """
        try:
            yield self.connection
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            if conflict_message is None:
                get_logger("sqlite").error("failed to %s: %s", action, e)
                raise StoreError(f"Failed to {action}") from e
            raise ValidationError(conflict_message) from e
        except sqlite3.Error as e:
            self.connection.rollback()
            get_logger("sqlite").error("failed to %s: %s", action, e)
            raise StoreError(f"Failed to {action}") from e
        except Exception:
            self.connection.rollback()
            raise
