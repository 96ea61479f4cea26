"""Application service for posting, reading, and deleting chirps."""

from __future__ import annotations

import logging
from enum import StrEnum
from uuid import UUID, uuid4

from chirpy.application.ports.chirp_repository_port import (
    ChirpCreateInput,
    ChirpRecord,
    ChirpRepositoryPort,
)
from chirpy.application.services.access_guard_service import AccessGuardService
from chirpy.domain.chirps.moderation import clean_chirp_body

logger = logging.getLogger(__name__)


class ChirpSortOrder(StrEnum):
    """Supported creation-time orderings for chirp listings."""

    ASC = "asc"
    DESC = "desc"


class ChirpNotFoundError(LookupError):
    """Raised when a chirp id does not match any stored chirp."""

    def __init__(self, *, chirp_id: UUID) -> None:
        super().__init__(f"chirp not found: {chirp_id}")
        self.chirp_id = chirp_id


class ChirpService:
    """Expose chirp use-cases with moderation and ownership enforcement."""

    def __init__(
        self,
        *,
        chirps: ChirpRepositoryPort,
        access_guard: AccessGuardService | None = None,
    ) -> None:
        self._chirps = chirps
        self._access_guard = access_guard or AccessGuardService()

    async def create_chirp(self, *, author_id: UUID, body: str) -> ChirpRecord:
        """Validate and clean the body, then persist it for the author.

        Raises ``ChirpTooLongError`` for bodies over the length limit.
        """

        cleaned = clean_chirp_body(body)
        return await self._chirps.create_chirp(
            ChirpCreateInput(chirp_id=uuid4(), body=cleaned, user_id=author_id)
        )

    async def list_chirps(
        self,
        *,
        author_id: UUID | None = None,
        sort: ChirpSortOrder = ChirpSortOrder.DESC,
    ) -> list[ChirpRecord]:
        """List chirps, newest first unless ``sort`` asks for ascending order."""

        return await self._chirps.list_chirps(
            author_id=author_id,
            newest_first=sort is ChirpSortOrder.DESC,
        )

    async def get_chirp(self, *, chirp_id: UUID) -> ChirpRecord:
        chirp = await self._chirps.get_by_id(chirp_id=chirp_id)
        if chirp is None:
            raise ChirpNotFoundError(chirp_id=chirp_id)
        return chirp

    async def delete_chirp(self, *, actor_user_id: UUID, chirp_id: UUID) -> None:
        """Delete one chirp after confirming the actor authored it."""

        chirp = await self.get_chirp(chirp_id=chirp_id)
        self._access_guard.require_owner(identity=actor_user_id, resource_owner_id=chirp.user_id)

        deleted = await self._chirps.delete_chirp(chirp_id=chirp_id)
        if not deleted:
            raise ChirpNotFoundError(chirp_id=chirp_id)
        logger.info("chirp_deleted chirp_id=%s user_id=%s", chirp_id, actor_user_id)
