"""Typed failures raised by credential, token, and authorization checks.

Every failure carries a structured ``kind`` for logging and telemetry and an
outward ``category`` that the HTTP boundary maps to a status code. Callers must
branch on these attributes rather than on exception messages.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class FailureCategory(StrEnum):
    """Outward failure categories exposed at the request boundary."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    SERVER_ERROR = "server_error"


class AuthFailureKind(StrEnum):
    """Internal failure kinds, available to callers but never echoed to clients."""

    MALFORMED_CREDENTIAL = "malformed_credential"
    INVALID_CREDENTIALS = "invalid_credentials"
    MALFORMED_TOKEN = "malformed_token"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED_TOKEN = "expired_token"
    REFRESH_TOKEN_NOT_FOUND = "refresh_token_not_found"
    REFRESH_TOKEN_REVOKED = "refresh_token_revoked"
    REFRESH_TOKEN_EXPIRED = "refresh_token_expired"
    MISSING_AUTH_HEADER = "missing_auth_header"
    MALFORMED_AUTH_HEADER = "malformed_auth_header"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    STORAGE = "storage"


class AuthError(Exception):
    """Base class for every authentication, authorization, and storage failure."""

    kind: ClassVar[AuthFailureKind]
    category: ClassVar[FailureCategory] = FailureCategory.UNAUTHORIZED
    default_message: ClassVar[str] = "authentication failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class CredentialError(AuthError):
    """Password hashing or verification failure."""


class MalformedCredentialError(CredentialError):
    """Stored credential digest is not a structurally valid hash."""

    kind = AuthFailureKind.MALFORMED_CREDENTIAL
    category = FailureCategory.SERVER_ERROR
    default_message = "malformed credential digest"


class InvalidCredentialsError(CredentialError):
    """Email/password pair did not match any account."""

    kind = AuthFailureKind.INVALID_CREDENTIALS
    default_message = "invalid credentials"


class TokenError(AuthError):
    """Access token could not be accepted."""


class MalformedTokenError(TokenError):
    kind = AuthFailureKind.MALFORMED_TOKEN
    default_message = "malformed access token"


class InvalidSignatureError(TokenError):
    kind = AuthFailureKind.INVALID_SIGNATURE
    default_message = "invalid access token signature"


class ExpiredTokenError(TokenError):
    kind = AuthFailureKind.EXPIRED_TOKEN
    default_message = "access token expired"


class RefreshTokenError(AuthError):
    """Refresh token could not be used to obtain a new access token."""


class RefreshTokenNotFoundError(RefreshTokenError):
    kind = AuthFailureKind.REFRESH_TOKEN_NOT_FOUND
    default_message = "refresh token not found"


class RefreshTokenRevokedError(RefreshTokenError):
    kind = AuthFailureKind.REFRESH_TOKEN_REVOKED
    default_message = "refresh token revoked"


class RefreshTokenExpiredError(RefreshTokenError):
    kind = AuthFailureKind.REFRESH_TOKEN_EXPIRED
    default_message = "refresh token expired"


class AuthHeaderError(AuthError):
    """Authorization header is absent or not in the expected shape."""


class MissingAuthHeaderError(AuthHeaderError):
    kind = AuthFailureKind.MISSING_AUTH_HEADER
    default_message = "missing authorization header"


class MalformedAuthHeaderError(AuthHeaderError):
    kind = AuthFailureKind.MALFORMED_AUTH_HEADER
    default_message = "malformed authorization header"


class AuthorizationError(AuthError):
    """Authenticated caller is not allowed to perform the operation."""


class ForbiddenError(AuthorizationError):
    kind = AuthFailureKind.FORBIDDEN
    category = FailureCategory.FORBIDDEN
    default_message = "forbidden"


class UnauthorizedError(AuthorizationError):
    kind = AuthFailureKind.UNAUTHORIZED
    default_message = "unauthorized"


class StorageError(AuthError):
    """Backend failure while reading or writing persisted auth state."""

    kind = AuthFailureKind.STORAGE
    category = FailureCategory.SERVER_ERROR
    default_message = "storage backend failure"
