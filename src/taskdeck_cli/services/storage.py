"""Wiring of repositories for the active profile.

The storage context is built once per command by the composition root and
injected into services, so services never know which adapter they use.
"""

from __future__ import annotations

from dataclasses import dataclass

from taskdeck_cli.adapters.sqlite import (
    SqliteCategoryRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
)
from taskdeck_cli.config import ConfigManager, get_config_manager
from taskdeck_cli.models import User
from taskdeck_cli.repositories import CategoryRepository, TaskRepository
from taskdeck_cli.services.auth_service import AuthService


@dataclass
class StorageContext:
    """Repositories scoped to the authenticated user."""

    user: User
    task_repository: TaskRepository
    category_repository: CategoryRepository


def get_auth_service(config_manager: ConfigManager | None = None) -> AuthService:
    config_manager = config_manager or get_config_manager()
    db_path = config_manager.config.storage.db_path
    return AuthService(config_manager, SqliteUserRepository(db_path=db_path))


async def get_storage_context(profile: str = "default") -> StorageContext:
    """Build repositories for the logged-in user of ``profile``.

    Raises:
        NotAuthenticatedError: If nobody is logged in
    """
    config_manager = get_config_manager(profile)
    user = await get_auth_service(config_manager).current_user()
    db_path = config_manager.config.storage.db_path
    return StorageContext(
        user=user,
        task_repository=SqliteTaskRepository(user.id, db_path=db_path),
        category_repository=SqliteCategoryRepository(user.id, db_path=db_path),
    )
