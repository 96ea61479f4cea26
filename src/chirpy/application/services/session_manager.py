"""Login, refresh, and revoke orchestration for access/refresh token sessions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from chirpy.application.ports.access_token_codec_port import AccessTokenCodecPort
from chirpy.application.ports.password_hasher_port import PasswordHasherPort
from chirpy.application.ports.refresh_token_issuer_port import RefreshTokenIssuerPort
from chirpy.application.ports.refresh_token_repository_port import (
    RefreshTokenCreateInput,
    RefreshTokenRepositoryPort,
)
from chirpy.application.ports.user_repository_port import (
    UserProfile,
    UserRecord,
    UserRepositoryPort,
)
from chirpy.config.auth_config import AuthConfig
from chirpy.domain.auth.credentials import normalize_email
from chirpy.domain.auth.errors import (
    AuthError,
    InvalidCredentialsError,
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
    RefreshTokenRevokedError,
)

logger = logging.getLogger(__name__)


class SessionOutcome(StrEnum):
    """Outcomes returned by session operations."""

    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    REFRESH_TOKEN_NOT_FOUND = "refresh_token_not_found"
    REFRESH_TOKEN_REVOKED = "refresh_token_revoked"
    REFRESH_TOKEN_EXPIRED = "refresh_token_expired"


_FAILURE_ERRORS: dict[SessionOutcome, type[AuthError]] = {
    SessionOutcome.INVALID_CREDENTIALS: InvalidCredentialsError,
    SessionOutcome.REFRESH_TOKEN_NOT_FOUND: RefreshTokenNotFoundError,
    SessionOutcome.REFRESH_TOKEN_REVOKED: RefreshTokenRevokedError,
    SessionOutcome.REFRESH_TOKEN_EXPIRED: RefreshTokenExpiredError,
}


def _raise_for_outcome(outcome: SessionOutcome) -> None:
    error_type = _FAILURE_ERRORS.get(outcome)
    if error_type is not None:
        raise error_type()


@dataclass(frozen=True)
class IssuedSession:
    """Token pair and public account data returned by a successful login."""

    profile: UserProfile
    access_token: str
    refresh_token: str
    refresh_token_expires_at: datetime


@dataclass(frozen=True)
class LoginResult:
    """Login result model."""

    outcome: SessionOutcome
    session: IssuedSession | None = None

    def raise_for_outcome(self) -> None:
        """Raise the typed failure matching a non-success outcome."""

        _raise_for_outcome(self.outcome)


@dataclass(frozen=True)
class RefreshResult:
    """Refresh result model."""

    outcome: SessionOutcome
    access_token: str | None = None
    user_id: UUID | None = None

    def raise_for_outcome(self) -> None:
        """Raise the typed failure matching a non-success outcome."""

        _raise_for_outcome(self.outcome)


class SessionManager:
    """Issue, refresh, and revoke sessions built from access and refresh tokens."""

    def __init__(
        self,
        *,
        config: AuthConfig,
        users: UserRepositoryPort,
        refresh_tokens: RefreshTokenRepositoryPort,
        password_hasher: PasswordHasherPort,
        access_tokens: AccessTokenCodecPort,
        token_service: RefreshTokenIssuerPort,
    ) -> None:
        self._config = config
        self._users = users
        self._refresh_tokens = refresh_tokens
        self._password_hasher = password_hasher
        self._access_tokens = access_tokens
        self._token_service = token_service

    async def login(self, *, email: str, password: str) -> LoginResult:
        """Verify credentials and issue a new access/refresh token pair.

        Unknown emails and wrong passwords share one outcome, and the password
        hash is always verified (against a dummy digest when no account matches)
        so both branches cost the same.
        """

        user = await self._find_user(email=email)
        stored_hash = user.password_hash if user is not None else None
        is_valid = await asyncio.to_thread(
            self._verify_password,
            password=password,
            password_hash=stored_hash,
        )
        if user is None or not is_valid:
            logger.info(
                "login_failed reason=%s",
                "unknown_email" if user is None else "wrong_password",
            )
            return LoginResult(outcome=SessionOutcome.INVALID_CREDENTIALS)

        await self._upgrade_password_hash(user=user, password=password)
        access_token = self._issue_access_token(user_id=user.user_id)
        issued = self._token_service.issue_token()
        await self._refresh_tokens.create_token(
            RefreshTokenCreateInput(
                token=issued.token,
                user_id=user.user_id,
                expires_at=issued.expires_at,
            )
        )
        logger.info("login_success user_id=%s", user.user_id)
        return LoginResult(
            outcome=SessionOutcome.SUCCESS,
            session=IssuedSession(
                profile=user.profile(),
                access_token=access_token,
                refresh_token=issued.token,
                refresh_token_expires_at=issued.expires_at,
            ),
        )

    async def refresh(self, *, refresh_token: str) -> RefreshResult:
        """Issue a new access token from one fetched refresh token snapshot.

        The refresh token itself is neither rotated nor extended.
        """

        record = await self._refresh_tokens.get_by_token(token=refresh_token)
        if record is None:
            outcome = SessionOutcome.REFRESH_TOKEN_NOT_FOUND
        elif record.is_revoked:
            outcome = SessionOutcome.REFRESH_TOKEN_REVOKED
        elif record.is_expired(now=self._token_service.now()):
            outcome = SessionOutcome.REFRESH_TOKEN_EXPIRED
        else:
            access_token = self._issue_access_token(user_id=record.user_id)
            logger.info("refresh_success user_id=%s", record.user_id)
            return RefreshResult(
                outcome=SessionOutcome.SUCCESS,
                access_token=access_token,
                user_id=record.user_id,
            )

        logger.info("refresh_rejected reason=%s", outcome.value)
        return RefreshResult(outcome=outcome)

    async def revoke(self, *, refresh_token: str) -> None:
        """Revoke one refresh token; unknown tokens are accepted silently."""

        await self._refresh_tokens.revoke_token(token=refresh_token)
        logger.info("refresh_token_revoked")

    async def _find_user(self, *, email: str) -> UserRecord | None:
        try:
            normalized_email = normalize_email(email)
        except ValueError:
            return None
        return await self._users.get_by_email(email=normalized_email)

    def _verify_password(self, *, password: str, password_hash: str | None) -> bool:
        if password_hash is None:
            self._password_hasher.verify_password(
                password=password,
                password_hash=self._password_hasher.dummy_hash(),
            )
            return False
        return self._password_hasher.verify_password(
            password=password,
            password_hash=password_hash,
        )

    async def _upgrade_password_hash(self, *, user: UserRecord, password: str) -> None:
        if not self._password_hasher.needs_rehash(user.password_hash):
            return

        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
        await self._users.update_password_hash(user_id=user.user_id, password_hash=password_hash)
        logger.info("password_rehashed user_id=%s", user.user_id)

    def _issue_access_token(self, *, user_id: UUID) -> str:
        return self._access_tokens.issue(
            subject=str(user_id),
            ttl_seconds=self._config.access_token_ttl_seconds,
            secret=self._config.jwt_secret,
        )
