"""Port for minting opaque refresh tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class IssuedRefreshToken:
    """Freshly generated opaque token and its absolute expiry."""

    token: str
    expires_at: datetime


class RefreshTokenIssuerPort(Protocol):
    """Refresh token generation contract, sharing one clock with expiry checks."""

    def now(self) -> datetime:
        """Return the current UTC time used for issuance and expiry decisions."""

    def issue_token(self) -> IssuedRefreshToken: ...
