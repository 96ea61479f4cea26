"""Immutable auth configuration injected into session and guard components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from chirpy.config.settings import Settings

DEV_PLATFORM = "dev"


@dataclass(frozen=True)
class AuthConfig:
    """Process-wide auth configuration, built once at startup and never mutated."""

    jwt_secret: str
    platform: str
    polka_key: str
    access_token_ttl_seconds: int = 3600
    refresh_token_ttl: timedelta = timedelta(days=60)

    @classmethod
    def from_settings(cls, settings: Settings) -> AuthConfig:
        return cls(
            jwt_secret=settings.jwt_secret,
            platform=settings.platform,
            polka_key=settings.polka_key,
            access_token_ttl_seconds=settings.access_token_ttl_seconds,
            refresh_token_ttl=timedelta(days=settings.refresh_token_ttl_days),
        )
