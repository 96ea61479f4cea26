"""Port for chirp persistence operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class ChirpRecord:
    """Chirp persistence model."""

    chirp_id: UUID
    body: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ChirpCreateInput:
    """Input payload for inserting one chirp."""

    chirp_id: UUID
    body: str
    user_id: UUID


class ChirpRepositoryPort(Protocol):
    """Chirp repository contract."""

    async def create_chirp(self, payload: ChirpCreateInput) -> ChirpRecord:
        """Insert one chirp and return the persisted row."""

    async def list_chirps(
        self,
        *,
        author_id: UUID | None = None,
        newest_first: bool = False,
    ) -> list[ChirpRecord]:
        """Return chirps ordered by creation time, optionally filtered by author."""

    async def get_by_id(self, *, chirp_id: UUID) -> ChirpRecord | None:
        """Return one chirp by id or None."""

    async def delete_chirp(self, *, chirp_id: UUID) -> bool:
        """Delete one chirp and return whether a row was removed."""
