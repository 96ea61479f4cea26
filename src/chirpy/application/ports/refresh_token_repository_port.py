"""Port for opaque refresh token persistence operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class RefreshTokenCreateInput:
    """Input payload for inserting a refresh token record."""

    token: str
    user_id: UUID
    expires_at: datetime


@dataclass(frozen=True)
class RefreshTokenRecord:
    """Persisted refresh token model."""

    token: str
    user_id: UUID
    issued_at: datetime
    expires_at: datetime
    revoked_at: datetime | None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, *, now: datetime) -> bool:
        return now > self.expires_at

    def is_usable(self, *, now: datetime) -> bool:
        return not self.is_revoked and not self.is_expired(now=now)


class RefreshTokenRepositoryPort(Protocol):
    """Refresh token persistence contract.

    Every mutation is a single atomic statement. Backend failures raise ``StorageError``.
    """

    async def create_token(self, payload: RefreshTokenCreateInput) -> RefreshTokenRecord:
        """Persist a new refresh token record without collision checks."""

    async def get_by_token(self, *, token: str) -> RefreshTokenRecord | None:
        """Return the record matching ``token`` exactly, revoked or expired included."""

    async def revoke_token(self, *, token: str) -> None:
        """Set ``revoked_at`` on the matching record; unknown tokens are a no-op."""
