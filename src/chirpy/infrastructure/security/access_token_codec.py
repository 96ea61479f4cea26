"""HS256 JWT codec for short-lived access tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import jwt

from chirpy.application.ports.access_token_codec_port import AccessTokenCodecPort
from chirpy.domain.auth.errors import ExpiredTokenError, InvalidSignatureError, MalformedTokenError

ACCESS_TOKEN_ISSUER = "chirpy"
_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["iss", "sub", "iat", "exp"]


class JwtAccessTokenCodec(AccessTokenCodecPort):
    """Sign and verify `{iss, sub, iat, exp}` access tokens with a shared secret."""

    def __init__(
        self,
        *,
        issuer: str = ACCESS_TOKEN_ISSUER,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._issuer = issuer
        self._now = now or (lambda: datetime.now(tz=UTC))

    def issue(self, *, subject: str, ttl_seconds: int, secret: str) -> str:
        """Sign a token for ``subject``; a negative TTL yields an already-expired token."""

        issued_at = int(self._now().timestamp())
        payload = {
            "iss": self._issuer,
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + ttl_seconds,
        }
        return jwt.encode(payload, secret, algorithm=_ALGORITHM)

    def verify(self, token: str, *, secret: str) -> str:
        """Check signature then expiry and return the subject claim verbatim."""

        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[_ALGORITHM],
                issuer=self._issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError() from exc
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError() from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError() from exc

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("access token subject missing")
        return subject
