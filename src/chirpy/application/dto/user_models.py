"""Pydantic models for account, login, and token HTTP contracts."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from chirpy.application.ports.user_repository_port import UserProfile, UserRecord
from chirpy.application.services.session_manager import IssuedSession


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid")


class UserCredentialsRequest(BaseModel):
    """HTTP request model carrying an email/password pair."""

    email: str
    password: str


class UserResponse(StrictModel):
    """Public account profile; the password hash is never included."""

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime
    is_chirpy_red: bool

    @classmethod
    def from_record(cls, user: UserRecord) -> UserResponse:
        return cls.from_profile(user.profile())

    @classmethod
    def from_profile(cls, profile: UserProfile) -> UserResponse:
        return cls(
            id=profile.user_id,
            email=profile.email,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            is_chirpy_red=profile.is_chirpy_red,
        )


class LoginResponse(UserResponse):
    """Public profile plus the freshly issued token pair."""

    token: str
    refresh_token: str

    @classmethod
    def from_session(cls, session: IssuedSession) -> LoginResponse:
        profile = UserResponse.from_profile(session.profile)
        return cls(
            **profile.model_dump(),
            token=session.access_token,
            refresh_token=session.refresh_token,
        )


class RefreshResponse(StrictModel):
    """HTTP response model carrying a new access token."""

    token: str
