"""
Tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings, get_settings, reload_settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.cache_ttl_seconds == 28800
    assert settings.cache_key_prefix == "weather:"
    assert settings.weather_api_base_url == "https://api.weatherapi.com/v1"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "abc123")
    monkeypatch.setenv("REDIS_URL", "rediss://:pw@cache.example.com:6380")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "600")

    settings = Settings(_env_file=None)

    assert settings.weather_api_key == "abc123"
    assert settings.redis_url == "rediss://:pw@cache.example.com:6380"
    assert settings.cache_ttl_seconds == 600


def test_base_url_trailing_slash_stripped():
    settings = Settings(_env_file=None, weather_api_base_url="https://api.weatherapi.com/v1/")
    assert settings.weather_api_base_url == "https://api.weatherapi.com/v1"


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_ttl_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, cache_ttl_seconds=0)


class TestApiKey:

    def test_placeholder_is_not_a_key(self):
        settings = Settings(_env_file=None, weather_api_key="your_api_key_here")
        assert not settings.has_api_key
        with pytest.raises(ValueError):
            settings.get_api_key()

    def test_configured_key(self):
        assert Settings(_env_file=None, weather_api_key="abc").get_api_key() == "abc"


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "7")
    first = reload_settings()
    assert get_settings() is first
    assert first.request_timeout == 7
    get_settings.cache_clear()
