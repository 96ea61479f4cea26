"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(validation_alias="DATABASE_URL")
    jwt_secret: NonEmptyStr = Field(validation_alias="JWT_SECRET")
    platform: NonEmptyStr = Field(default="production", validation_alias="PLATFORM")
    polka_key: NonEmptyStr = Field(validation_alias="POLKA_KEY")
    access_token_ttl_seconds: PositiveInt = Field(
        default=3600,
        validation_alias="ACCESS_TOKEN_TTL_SECONDS",
    )
    refresh_token_ttl_days: PositiveInt = Field(
        default=60,
        validation_alias="REFRESH_TOKEN_TTL_DAYS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]
