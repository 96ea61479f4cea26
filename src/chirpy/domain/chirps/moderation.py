"""Chirp body validation and word-substitution cleanup."""

from __future__ import annotations

MAX_CHIRP_LENGTH = 140
PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
_REPLACEMENT = "****"


class ChirpTooLongError(ValueError):
    """Raised when a chirp body exceeds the maximum allowed length."""

    def __init__(self) -> None:
        super().__init__("Chirp is too long")


def clean_chirp_body(body: str) -> str:
    """Validate chirp length and mask profane words separated by single spaces."""

    if len(body) > MAX_CHIRP_LENGTH:
        raise ChirpTooLongError()

    words = body.split(" ")
    return " ".join(_REPLACEMENT if word.lower() in PROFANE_WORDS else word for word in words)
