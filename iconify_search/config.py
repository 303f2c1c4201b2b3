"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IconifyApiSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://api.iconify.design",
        description="Iconify API root used for search and SVG rendering.",
    )
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)
    search_limit: int = Field(default=64, ge=32, le=999)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=0.5, ge=0)


class SearchSettings(BaseModel):
    debounce_ms: int = Field(default=300, ge=0)
    icon_size: int = Field(default=24, ge=1)


class IconifySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ICONIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    api: IconifyApiSettings = Field(default_factory=IconifyApiSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> IconifySettings:
    """Return cached settings instance."""

    return IconifySettings()


__all__ = [
    "IconifyApiSettings",
    "IconifySettings",
    "SearchSettings",
    "get_settings",
]
