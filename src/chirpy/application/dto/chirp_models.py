"""Pydantic models for chirp HTTP contracts."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from chirpy.application.dto.user_models import StrictModel
from chirpy.application.ports.chirp_repository_port import ChirpRecord


class ChirpCreateRequest(BaseModel):
    body: str


class ChirpResponse(StrictModel):
    """HTTP response model for one chirp."""

    id: UUID
    body: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, chirp: ChirpRecord) -> ChirpResponse:
        return cls(
            id=chirp.chirp_id,
            body=chirp.body,
            user_id=chirp.user_id,
            created_at=chirp.created_at,
            updated_at=chirp.updated_at,
        )
