"""Auth service - who the current owner is."""

from __future__ import annotations

import pydantic

from taskdeck_cli.config import ConfigManager
from taskdeck_cli.exceptions import NotAuthenticatedError, NotFoundError, ValidationError
from taskdeck_cli.models import User
from taskdeck_cli.repositories import UserRepository


class AuthService:
    """Resolve, remember and forget the authenticated user of a profile."""

    def __init__(self, config_manager: ConfigManager, user_repository: UserRepository):
        self.config_manager = config_manager
        self.repository = user_repository

    def is_authenticated(self) -> bool:
        return self.config_manager.load_credentials() is not None

    async def login(self, email: str, name: str | None = None) -> User:
        """Select (or create) the user for ``email`` and store credentials.

        Raises:
            ValidationError: If ``email`` is not a valid address
        """
        try:
            User(id="pending", email=email)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid email address: {email}") from e

        user = await self.repository.get_or_create(email, name)
        self.config_manager.save_credentials(user.id, user.email)
        return user

    async def current_user(self) -> User:
        """Return the logged-in user.

        Raises:
            NotAuthenticatedError: If nobody is logged in or the user is gone
        """
        credentials = self.config_manager.load_credentials()
        if credentials is None:
            raise NotAuthenticatedError()
        try:
            return await self.repository.get(credentials["user_id"])
        except NotFoundError as e:
            self.config_manager.clear_credentials()
            raise NotAuthenticatedError() from e

    def logout(self) -> bool:
        """Forget the stored credentials; returns whether anyone was logged in."""
        was_logged_in = self.is_authenticated()
        self.config_manager.clear_credentials()
        return was_logged_in
