from __future__ import annotations

import pytest

from chirpy.domain.auth.errors import MalformedAuthHeaderError, MissingAuthHeaderError
from chirpy.infrastructure.http.auth_guard import extract_api_key, extract_bearer_token


def test_extract_bearer_token_returns_token_value() -> None:
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


@pytest.mark.parametrize("header", [None, "", "   "])
def test_extract_bearer_token_rejects_missing_value(header: str | None) -> None:
    with pytest.raises(MissingAuthHeaderError):
        extract_bearer_token(header)


@pytest.mark.parametrize(
    "header",
    [
        "Token abc",
        "bearer abc",
        "Bearer",
        "Bearer   ",
        "Bearer  abc",
        "Bearer abc def",
        "Bearer abc\tdef",
        "ApiKey abc",
    ],
)
def test_extract_bearer_token_rejects_malformed_header(header: str) -> None:
    with pytest.raises(MalformedAuthHeaderError):
        extract_bearer_token(header)


def test_extract_api_key_returns_key_value() -> None:
    assert extract_api_key("ApiKey f271c81ff7084ee5b99a5091b42d486e") == (
        "f271c81ff7084ee5b99a5091b42d486e"
    )


@pytest.mark.parametrize("header", ["Bearer key", "ApiKey", "apikey key", "ApiKey a b"])
def test_extract_api_key_rejects_malformed_header(header: str) -> None:
    with pytest.raises(MalformedAuthHeaderError):
        extract_api_key(header)


def test_extract_api_key_rejects_missing_header() -> None:
    with pytest.raises(MissingAuthHeaderError):
        extract_api_key(None)
