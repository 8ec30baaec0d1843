"""Application configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "Record Console"
    gateway_mode: Literal["http", "memory"] = "http"
    gateway_base_url: str = "http://localhost:8080/services/gateway"
    metadata_url: str = "http://localhost:8080/services/gateway/metadata"
    gateway_timeout_seconds: int = 30
    page_limit: int = Field(default=5, ge=1)
    list_group_by: str | None = None
    open_record_column: bool = True
    keep_modal_open_on_failure: bool = False
    cors_allow_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    notification_buffer_size: int = Field(default=50, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
