"""Port for user account persistence used by auth and profile services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


class EmailAlreadyRegisteredError(ValueError):
    """Raised when a user create/update collides with an existing email."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"email already registered: {email}")
        self.email = email


@dataclass(frozen=True)
class UserProfile:
    """Public account data; never carries the credential digest."""

    user_id: UUID
    email: str
    is_chirpy_red: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserRecord:
    """User persistence model."""

    user_id: UUID
    email: str
    password_hash: str
    is_chirpy_red: bool
    created_at: datetime
    updated_at: datetime

    def profile(self) -> UserProfile:
        return UserProfile(
            user_id=self.user_id,
            email=self.email,
            is_chirpy_red=self.is_chirpy_red,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(frozen=True)
class UserCreateInput:
    """Input payload for inserting one user account."""

    user_id: UUID
    email: str
    password_hash: str


class UserRepositoryPort(Protocol):
    """User repository contract."""

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by normalized email or None."""

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user and return the persisted row."""

    async def update_credentials(
        self,
        *,
        user_id: UUID,
        email: str,
        password_hash: str,
    ) -> UserRecord | None:
        """Replace email and password hash for one user; None when user is missing."""

    async def set_chirpy_red(self, *, user_id: UUID, is_chirpy_red: bool) -> UserRecord | None:
        """Set membership flag for one user; None when user is missing."""

    async def update_password_hash(self, *, user_id: UUID, password_hash: str) -> None:
        """Replace only the stored digest for one user."""
