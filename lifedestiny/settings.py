"""
Settings using pydantic-settings for type-safe configuration.

Values are read from LIFE_DESTINY_* environment variables or a .env file.
They only supply defaults for the command line; library callers pass
credentials explicitly through UserInput.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.constants import DEFAULT_MODEL_NAME, DEFAULT_REQUEST_TIMEOUT_SECONDS


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIFE_DESTINY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # === Endpoint ===
    api_key: str = Field(
        default="",
        description="Bearer token for the chat-completion endpoint",
    )
    api_base_url: str = Field(
        default="",
        description="OpenAI-compatible base URL, e.g. https://api.example.com/v1",
    )
    model_name: str = Field(
        default=DEFAULT_MODEL_NAME,
        description="Model identifier sent with each request",
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Transport timeout per request, in seconds",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="INFO, DEBUG or TRACE",
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("INFO", "DEBUG", "TRACE"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}. Must be 'INFO', 'DEBUG' or 'TRACE'")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    """
    return Settings()
