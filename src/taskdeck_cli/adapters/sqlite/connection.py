"""Connection handling for the local SQLite vault.

One connection per process is kept open for the active vault file. Opening
a different path closes the previous connection first.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from taskdeck_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner

_BUSY_TIMEOUT = 30.0

_active: tuple[Path, sqlite3.Connection] | None = None


def default_db_path() -> Path:
    return Path(user_data_dir("taskdeck-cli")) / "taskdeck.db"


def configure_connection(connection: sqlite3.Connection) -> sqlite3.Connection:
    """Apply row factory and pragmas, then bring the schema up to date."""
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
    return connection


def open_vault(db_path: Path) -> sqlite3.Connection:
    """Open (creating if needed) the vault at ``db_path``.

    A new file is made readable by its owner only.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    is_new = not db_path.exists()

    connection = sqlite3.connect(str(db_path), timeout=_BUSY_TIMEOUT)
    connection.execute("PRAGMA journal_mode = WAL")
    configure_connection(connection)

    if is_new:
        os.chmod(db_path, 0o600)
    return connection


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Return the shared connection for ``db_path`` (default vault if None)."""
    global _active
    path = Path(db_path) if db_path is not None else default_db_path()
    if _active is not None:
        if _active[0] == path:
            return _active[1]
        close_connection()

    connection = open_vault(path)
    _active = (path, connection)
    return connection


def close_connection() -> None:
    """Commit and close the shared connection, if one is open."""
    global _active
    if _active is None:
        return
    _, connection = _active
    _active = None
    connection.commit()
    connection.close()


atexit.register(close_connection)
