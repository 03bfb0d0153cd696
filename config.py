"""Settings for the ShortSpace server and CLI, read from the environment or .env."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage: one <label>.db per space
    data_dir: str = Field("./output", description="Directory holding the space files, created on demand")
    db_timeout_seconds: float = Field(10.0, gt=0, description="Upper bound for each database call")

    # Shared secret for /api (X-API-Key)
    api_key: Optional[str] = None

    host: str = "0.0.0.0"
    port: int = Field(8080, ge=1, le=65535)

    # Links
    base_url: str = Field("http://localhost:8080", description="Origin used when the request carries none")
    path_prefix: str = Field("", description="Prefix for redirect paths, e.g. /s for /s/d/abc12")
    short_id_length: int = Field(5, ge=1, le=32)
    max_id_attempts: int = Field(5, ge=1, description="Generated IDs to try before giving up")
    label_epoch_year: int = Field(2023, description="Year whose space label is 'a'")

    # Page metadata
    scrape_metadata: bool = True
    scrape_timeout_seconds: float = Field(5.0, gt=0)

    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("path_prefix")
    @classmethod
    def _normalise_prefix(cls, value: str) -> str:
        value = value.strip().strip("/")
        return f"/{value}" if value else ""

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


def load_config() -> Config:
    return Config()
