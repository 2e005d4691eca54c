"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from unittest.mock import patch

import pytest

from taskdeck_cli.adapters.sqlite import (
    SqliteCategoryRepository,
    SqliteTaskRepository,
)
from taskdeck_cli.adapters.sqlite.connection import configure_connection
from taskdeck_cli.models import User
from taskdeck_cli.services.storage import StorageContext

# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Send the rotating log file to a temporary directory."""
    import taskdeck_cli.utils.logger as logger_module

    log_dir = str(tmp_path_factory.mktemp("logs"))
    with patch.object(logger_module, "user_log_dir", return_value=log_dir):
        logger_module._logger = None
        yield log_dir


@pytest.fixture(autouse=True)
def tmp_config(tmp_path):
    """Point config and credential files at *tmp_path* and reset the manager cache."""
    import taskdeck_cli.config as config_module

    config_module._config_manager = None
    with patch.object(config_module, "user_config_dir", return_value=str(tmp_path / "config")):
        with patch.object(config_module, "user_data_dir", return_value=str(tmp_path / "data")):
            yield config_module.get_config_manager()
    config_module._config_manager = None


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture()
def db_connection():
    """In-memory SQLite database with every migration applied."""
    conn = configure_connection(sqlite3.connect(":memory:"))
    yield conn
    conn.close()


@pytest.fixture()
def user(db_connection):
    """A seeded owner row."""
    db_connection.execute(
        "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
        ("user-001", "ada@example.com", "Ada", "2024-06-01T09:00:00+00:00"),
    )
    db_connection.commit()
    return User(
        id="user-001",
        email="ada@example.com",
        name="Ada",
        created_at=datetime(2024, 6, 1, 9, 0, tzinfo=UTC),
    )


@pytest.fixture()
def storage(user, task_repo, category_repo):
    """StorageContext wired to the in-memory database."""
    return StorageContext(user=user, task_repository=task_repo, category_repository=category_repo)


@pytest.fixture()
def task_repo(db_connection, user):
    return SqliteTaskRepository(user.id, connection=db_connection)


@pytest.fixture()
def category_repo(db_connection, user):
    return SqliteCategoryRepository(user.id, connection=db_connection)


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip authentication checks in all tests by default."""
    with patch("taskdeck_cli.commands.decorators._require_auth"):
        yield
