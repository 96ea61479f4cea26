"""Port for one-way credential digests."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Salted, memory-hard password digest contract.

    Implementations are CPU bound; async callers run them in a worker thread.
    """

    def hash_password(self, password: str) -> str: ...

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Return whether ``password`` matches the digest, in constant time.

        Raises ``MalformedCredentialError`` when ``password_hash`` is not a valid digest.
        """

    def needs_rehash(self, password_hash: str) -> bool:
        """Return whether a digest was produced with weaker parameters than current ones."""

    def dummy_hash(self) -> str:
        """Return a valid digest matching no real password, for timing equalization."""
