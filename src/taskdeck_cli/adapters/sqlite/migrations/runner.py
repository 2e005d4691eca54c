"""Forward-only schema migrations for the vault.

Each applied migration is recorded in ``schema_version``; opening a
connection applies whatever is newer than the recorded version.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    applied_at DATETIME NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    """A numbered batch of DDL statements."""

    version: int
    description: str
    statements: tuple[str, ...]

    def up(self, connection: sqlite3.Connection) -> None:
        for statement in self.statements:
            connection.execute(statement)


class MigrationRunner:
    """Brings one connection's schema up to date."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.connection.execute(_VERSION_TABLE)
        self.connection.commit()

    def get_current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def apply(self, migration: Migration) -> None:
        """Apply and record one migration atomically.

        Raises:
            ValueError: If ``migration`` is not newer than the schema
            RuntimeError: If a statement fails; the batch is rolled back
        """
        current = self.get_current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than schema version {current}"
            )
        try:
            migration.up(self.connection)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

    def run_migrations(self, migrations: Iterable[Migration]) -> int:
        """Apply pending migrations in version order; returns how many ran."""
        current = self.get_current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.apply(migration)
        return len(pending)
