"""Opaque refresh token generation."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from chirpy.application.ports.refresh_token_issuer_port import (
    IssuedRefreshToken,
    RefreshTokenIssuerPort,
)

REFRESH_TOKEN_BYTES = 32
DEFAULT_REFRESH_TOKEN_TTL = timedelta(days=60)


def generate_refresh_token() -> str:
    """Return 32 cryptographically random bytes as a hex string."""

    return secrets.token_hex(REFRESH_TOKEN_BYTES)


class OpaqueTokenService(RefreshTokenIssuerPort):
    """Generate unpredictable refresh tokens with a fixed time-to-live."""

    def __init__(
        self,
        *,
        token_ttl: timedelta = DEFAULT_REFRESH_TOKEN_TTL,
        token_factory: Callable[[], str] = generate_refresh_token,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._token_ttl = token_ttl
        self._token_factory = token_factory
        self._now = now or (lambda: datetime.now(tz=UTC))

    def now(self) -> datetime:
        return self._now()

    def issue_token(self) -> IssuedRefreshToken:
        return IssuedRefreshToken(
            token=self._token_factory(),
            expires_at=self._now() + self._token_ttl,
        )
