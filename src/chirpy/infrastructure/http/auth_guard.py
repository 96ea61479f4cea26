"""Authorization header parsing and request authorization guard."""

from __future__ import annotations

import hmac
from uuid import UUID

from chirpy.application.ports.access_token_codec_port import AccessTokenCodecPort
from chirpy.application.services.access_guard_service import AccessGuardService
from chirpy.config.auth_config import DEV_PLATFORM, AuthConfig
from chirpy.domain.auth.errors import (
    AuthHeaderError,
    MalformedAuthHeaderError,
    MalformedTokenError,
    MissingAuthHeaderError,
    UnauthorizedError,
)
from chirpy.domain.auth.principal import AuthenticatedPrincipal

BEARER_SCHEME = "Bearer"
API_KEY_SCHEME = "ApiKey"


def extract_bearer_token(authorization_header: str | None) -> str:
    """Extract token from an exact `Authorization: Bearer <token>` header."""

    return _extract_credential(authorization_header, scheme=BEARER_SCHEME)


def extract_api_key(authorization_header: str | None) -> str:
    """Extract key from an exact `Authorization: ApiKey <key>` header."""

    return _extract_credential(authorization_header, scheme=API_KEY_SCHEME)


def _extract_credential(authorization_header: str | None, *, scheme: str) -> str:
    if authorization_header is None or not authorization_header.strip():
        raise MissingAuthHeaderError()

    parts = authorization_header.strip().split(" ")
    if len(parts) != 2 or parts[0] != scheme or len(parts[1].split()) != 1:
        raise MalformedAuthHeaderError()

    return parts[1]


class AuthorizationGuard:
    """Resolve authenticated callers and enforce ownership, API-key, and platform gates."""

    def __init__(
        self,
        *,
        config: AuthConfig,
        access_tokens: AccessTokenCodecPort,
        access_guard: AccessGuardService | None = None,
    ) -> None:
        self._config = config
        self._access_tokens = access_tokens
        self._access_guard = access_guard or AccessGuardService()

    def authenticate(self, *, authorization_header: str | None) -> AuthenticatedPrincipal:
        """Resolve a bearer access token to the principal it was issued for.

        Header and token failures propagate unchanged.
        """

        token = extract_bearer_token(authorization_header)
        subject = self._access_tokens.verify(token, secret=self._config.jwt_secret)
        try:
            user_id = UUID(subject)
        except ValueError as exc:
            raise MalformedTokenError("access token subject is not a user id") from exc
        return AuthenticatedPrincipal(user_id=user_id)

    def authorize_owner(self, *, identity: UUID | str, resource_owner_id: UUID | str) -> None:
        self._access_guard.require_owner(identity=identity, resource_owner_id=resource_owner_id)

    def authorize_api_key(self, *, authorization_header: str | None) -> None:
        """Require an `ApiKey` header matching the configured key in constant time."""

        try:
            presented = extract_api_key(authorization_header)
        except AuthHeaderError as exc:
            raise UnauthorizedError("missing or malformed api key") from exc

        if not hmac.compare_digest(
            presented.encode("utf-8"),
            self._config.polka_key.encode("utf-8"),
        ):
            raise UnauthorizedError("api key mismatch")

    def authorize_platform(self, *, required_platform: str = DEV_PLATFORM) -> None:
        self._access_guard.require_platform(
            current_platform=self._config.platform,
            required_platform=required_platform,
        )
