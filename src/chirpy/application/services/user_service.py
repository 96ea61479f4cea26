"""Application service for account registration and profile updates."""

from __future__ import annotations

import asyncio
import logging
from uuid import UUID, uuid4

from chirpy.application.ports.password_hasher_port import PasswordHasherPort
from chirpy.application.ports.user_repository_port import (
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from chirpy.domain.auth.credentials import SubmittedCredentials

logger = logging.getLogger(__name__)


class InvalidUserInputError(ValueError):
    """Raised when submitted email or password is blank."""


class UserNotFoundError(LookupError):
    """Raised when a target user cannot be found."""

    def __init__(self, *, user_id: UUID) -> None:
        super().__init__(f"user not found: {user_id}")
        self.user_id = user_id


class UserService:
    """Register accounts and manage the caller's own credentials."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    async def register_user(self, *, email: str, password: str) -> UserRecord:
        """Create one account with a hashed password and return the persisted row."""

        normalized_email, password_hash = await self._prepare_credentials(
            email=email,
            password=password,
        )
        user = await self._users.create_user(
            UserCreateInput(
                user_id=uuid4(),
                email=normalized_email,
                password_hash=password_hash,
            )
        )
        logger.info("user_registered user_id=%s", user.user_id)
        return user

    async def update_credentials(self, *, user_id: UUID, email: str, password: str) -> UserRecord:
        """Replace the email and password of one existing account."""

        normalized_email, password_hash = await self._prepare_credentials(
            email=email,
            password=password,
        )
        updated = await self._users.update_credentials(
            user_id=user_id,
            email=normalized_email,
            password_hash=password_hash,
        )
        if updated is None:
            raise UserNotFoundError(user_id=user_id)
        logger.info("user_credentials_updated user_id=%s", user_id)
        return updated

    async def upgrade_to_chirpy_red(self, *, user_id: UUID) -> UserRecord:
        upgraded = await self._users.set_chirpy_red(user_id=user_id, is_chirpy_red=True)
        if upgraded is None:
            raise UserNotFoundError(user_id=user_id)
        return upgraded

    async def _prepare_credentials(self, *, email: str, password: str) -> tuple[str, str]:
        try:
            credentials = SubmittedCredentials.parse(email=email, password=password)
        except ValueError as exc:
            raise InvalidUserInputError(str(exc)) from exc

        password_hash = await asyncio.to_thread(
            self._password_hasher.hash_password,
            credentials.password,
        )
        return credentials.email, password_hash
