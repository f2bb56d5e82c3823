"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("development", alias="APP_ENV")
    app_name: str = Field("Movie Catalog API", alias="APP_NAME")
    app_version: str = Field("1.0.0", alias="APP_VERSION")
    api_v1_prefix: str = Field("/v1", alias="API_V1_PREFIX")

    database_url: str = Field(
        "sqlite+aiosqlite:///./catalog.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    bcrypt_rounds: int = Field(12, ge=4, le=31, alias="BCRYPT_ROUNDS")
    activation_token_ttl_hours: int = Field(
        72, ge=1, alias="ACTIVATION_TOKEN_TTL_HOURS"
    )
    authentication_token_ttl_hours: int = Field(
        24, ge=1, alias="AUTHENTICATION_TOKEN_TTL_HOURS"
    )

    max_body_bytes: int = Field(1_048_576, ge=1, alias="MAX_BODY_BYTES")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
