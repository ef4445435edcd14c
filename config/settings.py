"""
Configuration settings for skycache.

This module provides type-safe configuration management using Pydantic.
Settings are loaded from environment variables and .env file.

Usage:
    from config.settings import get_settings

    settings = get_settings()
    print(settings.redis_url)
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Get the project root directory (parent of config/)
PROJECT_ROOT = Path(__file__).parent.parent

# Eight hours, matching how long current conditions are considered fresh
DEFAULT_CACHE_TTL_SECONDS = 28800


class Settings(BaseSettings):
    """
    Application settings with validation.

    Settings are loaded from environment variables, with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Weather Provider
    # ==========================================================================
    weather_api_key: str = Field(
        default="",
        description="Weather provider API key"
    )

    weather_api_base_url: str = Field(
        default="https://api.weatherapi.com/v1",
        description="Base URL for the weather provider API"
    )

    request_timeout: int = Field(
        default=10,
        ge=1,
        le=120,
        description="Provider request timeout in seconds"
    )

    # ==========================================================================
    # Cache Store
    # ==========================================================================
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Cache store connection URL (redis:// or rediss://)"
    )

    redis_socket_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Cache store socket timeout in seconds"
    )

    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        ge=1,
        description="Lifetime of a cached weather record in seconds"
    )

    cache_key_prefix: str = Field(
        default="weather:",
        description="Prefix for cache store keys"
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )

    # ==========================================================================
    # Validators
    # ==========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        valid_levels = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("weather_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so endpoints can be appended."""
        return v.rstrip("/")

    # ==========================================================================
    # Properties
    # ==========================================================================
    @property
    def has_api_key(self) -> bool:
        """Check if a valid API key is configured."""
        return bool(self.weather_api_key and self.weather_api_key != "your_api_key_here")

    # ==========================================================================
    # Methods
    # ==========================================================================
    def get_api_key(self) -> str:
        """
        Get the API key, raising an error if not configured.

        Raises:
            ValueError: If API key is not configured
        """
        if not self.has_api_key:
            raise ValueError(
                "Weather API key not configured!\n"
                "Please set WEATHER_API_KEY in your .env file.\n"
                "See .env.example for instructions."
            )
        return self.weather_api_key


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance (cached for performance)

    Note:
        Uses lru_cache to avoid re-reading .env file on every call.
        Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Force reload settings from environment.

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
