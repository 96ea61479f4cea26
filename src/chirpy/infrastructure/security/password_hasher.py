"""Argon2id password hasher adapter."""

from __future__ import annotations

import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from chirpy.application.ports.password_hasher_port import PasswordHasherPort
from chirpy.domain.auth.errors import MalformedCredentialError


class Argon2PasswordHasher(PasswordHasherPort):
    """Password hashing adapter using memory-hard argon2id with embedded parameters."""

    def __init__(
        self,
        *,
        time_cost: int | None = None,
        memory_cost: int | None = None,
        parallelism: int | None = None,
    ) -> None:
        options = {
            "time_cost": time_cost,
            "memory_cost": memory_cost,
            "parallelism": parallelism,
        }
        self._hasher = PasswordHasher(
            **{name: value for name, value in options.items() if value is not None}
        )
        self._dummy_hash = self.hash_password(secrets.token_urlsafe(32))

    def hash_password(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as exc:
            raise MalformedCredentialError() from exc

    def needs_rehash(self, password_hash: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except InvalidHashError as exc:
            raise MalformedCredentialError() from exc

    def dummy_hash(self) -> str:
        return self._dummy_hash
