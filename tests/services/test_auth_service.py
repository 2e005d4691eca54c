"""Tests for AuthService and the storage context."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from taskdeck_cli.adapters.sqlite import SqliteUserRepository
from taskdeck_cli.exceptions import NotAuthenticatedError, NotFoundError, ValidationError
from taskdeck_cli.services import AuthService
from taskdeck_cli.services.storage import get_storage_context


@pytest.fixture()
def auth(tmp_config, db_connection):
    return AuthService(tmp_config, SqliteUserRepository(connection=db_connection))


@pytest.mark.asyncio
async def test_login_stores_credentials(auth, tmp_config):
    assert not auth.is_authenticated()

    user = await auth.login("Ada@Example.com", "Ada")

    assert auth.is_authenticated()
    assert tmp_config.load_credentials() == {"user_id": user.id, "email": "ada@example.com"}
    assert (await auth.current_user()).id == user.id


@pytest.mark.asyncio
async def test_login_rejects_invalid_email(auth):
    with pytest.raises(ValidationError, match="Invalid email"):
        await auth.login("not-an-email")
    assert not auth.is_authenticated()


@pytest.mark.asyncio
async def test_current_user_requires_login(auth):
    with pytest.raises(NotAuthenticatedError):
        await auth.current_user()


@pytest.mark.asyncio
async def test_stale_credentials_are_cleared(tmp_config):
    repo = MagicMock()
    repo.get = AsyncMock(side_effect=NotFoundError("User not found: gone"))
    tmp_config.save_credentials("gone", "gone@example.com")

    with pytest.raises(NotAuthenticatedError):
        await AuthService(tmp_config, repo).current_user()
    assert tmp_config.load_credentials() is None


@pytest.mark.asyncio
async def test_logout(auth):
    await auth.login("ada@example.com")
    assert auth.logout() is True
    assert auth.logout() is False


@pytest.mark.asyncio
async def test_storage_context_scopes_repositories(auth):
    user = await auth.login("ada@example.com")

    with patch("taskdeck_cli.services.storage.get_auth_service", return_value=auth):
        storage = await get_storage_context()

    assert storage.user.id == user.id
    assert storage.task_repository.user_id == user.id
    assert storage.category_repository.user_id == user.id
