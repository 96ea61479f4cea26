"""Process logging configuration for the Chirpy API."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Statement logging would echo bound refresh tokens and password hashes.
_PINNED_LOGGERS = {"sqlalchemy.engine": logging.WARNING}


def resolve_log_level(level: str) -> int:
    """Map a textual level to a logging constant, falling back to INFO."""

    normalized_level = level.strip().upper() or "INFO"
    resolved = logging.getLevelName(normalized_level)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str) -> None:
    """Configure root logging once per process and pin noisy library loggers."""

    logging.basicConfig(level=resolve_log_level(level), format=_LOG_FORMAT)
    for name, pinned_level in _PINNED_LOGGERS.items():
        logging.getLogger(name).setLevel(pinned_level)
