"""Submitted email/password pairs, validated before lookup or hashing."""

from __future__ import annotations

from dataclasses import dataclass


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address; blank input is rejected."""

    normalized = email.strip().lower()
    if not normalized:
        raise ValueError("email cannot be blank")
    return normalized


@dataclass(frozen=True)
class SubmittedCredentials:
    """Email/password pair as accepted from a client.

    The email is normalized; the password is kept verbatim so surrounding
    whitespace stays part of the secret.
    """

    email: str
    password: str

    @classmethod
    def parse(cls, *, email: str, password: str) -> SubmittedCredentials:
        if not password.strip():
            raise ValueError("password cannot be blank")
        return cls(email=normalize_email(email), password=password)
