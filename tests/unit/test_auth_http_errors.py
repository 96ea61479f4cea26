from __future__ import annotations

import pytest

from chirpy.domain.auth.errors import (
    AuthError,
    ExpiredTokenError,
    FailureCategory,
    ForbiddenError,
    InvalidCredentialsError,
    MalformedCredentialError,
    MissingAuthHeaderError,
    RefreshTokenRevokedError,
    StorageError,
    UnauthorizedError,
)
from chirpy.infrastructure.http.errors import auth_http_exception


@pytest.mark.parametrize(
    "error",
    [
        ExpiredTokenError(),
        RefreshTokenRevokedError(),
        MissingAuthHeaderError(),
        InvalidCredentialsError(),
    ],
)
def test_unauthorized_failures_collapse_to_generic_401(error: AuthError) -> None:
    exc = auth_http_exception(error)

    assert exc.status_code == 401
    assert exc.detail == "unauthorized"
    assert exc.headers == {"WWW-Authenticate": "Bearer"}


def test_api_key_failures_challenge_with_api_key_scheme() -> None:
    exc = auth_http_exception(UnauthorizedError("api key mismatch"), scheme="ApiKey")

    assert exc.status_code == 401
    assert exc.headers == {"WWW-Authenticate": "ApiKey"}


def test_forbidden_failures_map_to_403() -> None:
    exc = auth_http_exception(ForbiddenError("caller does not own resource"))

    assert exc.status_code == 403
    assert exc.detail == "forbidden"


@pytest.mark.parametrize("error", [StorageError(), MalformedCredentialError()])
def test_server_side_failures_map_to_500(error: AuthError) -> None:
    exc = auth_http_exception(error)

    assert exc.status_code == 500
    assert exc.detail == "internal server error"


def test_failure_kinds_are_structured_and_distinct() -> None:
    assert ExpiredTokenError.kind != RefreshTokenRevokedError.kind
    assert ExpiredTokenError.category is FailureCategory.UNAUTHORIZED
    assert StorageError.category is FailureCategory.SERVER_ERROR
    assert str(ExpiredTokenError()) == "access token expired"
