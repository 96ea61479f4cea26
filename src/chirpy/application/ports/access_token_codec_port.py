"""Port for signed, stateless access tokens."""

from __future__ import annotations

from typing import Protocol


class AccessTokenCodecPort(Protocol):
    """Issue and verify short-lived bearer tokens bound to one subject."""

    def issue(self, *, subject: str, ttl_seconds: int, secret: str) -> str:
        """Return a signed token for ``subject`` expiring ``ttl_seconds`` from now."""

    def verify(self, token: str, *, secret: str) -> str:
        """Return the token subject or raise a ``TokenError`` subclass."""
