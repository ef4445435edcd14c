"""
Shared fixtures for the skycache test suite.
"""

import json
from typing import Dict, Optional, Tuple
from unittest.mock import MagicMock

import pytest
import redis
import requests

from config.settings import Settings
from skycache.api.cache import CacheStore
from skycache.api.weather_client import WeatherClient


NEW_YORK_PAYLOAD = {
    "location": {"name": "New York", "region": "NY", "country": "USA"},
    "current": {"temp_c": 21.0, "condition": {"text": "Sunny", "code": 1000}},
}


class InMemoryRedis:
    """Minimal stand-in for redis.Redis that records TTLs."""

    def __init__(self):
        self.data: Dict[str, Tuple[bytes, Optional[int]]] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.closed = False

    def get(self, key):
        if self.fail_reads:
            raise redis.ConnectionError("Connection refused")
        entry = self.data.get(key)
        return entry[0] if entry else None

    def set(self, key, value, ex=None):
        if self.fail_writes:
            raise redis.ConnectionError("Connection reset by peer")
        self.data[key] = (value, ex)
        return True

    def ping(self):
        if self.fail_reads:
            raise redis.ConnectionError("Connection refused")
        return True

    def close(self):
        self.closed = True


def make_response(status_code: int = 200, payload=None, text: Optional[str] = None):
    """Build a mock requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if payload is not None:
        response.json.return_value = payload
        response.text = text if text is not None else json.dumps(payload)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    return response


@pytest.fixture
def settings():
    """Settings isolated from the developer's .env file."""
    return Settings(
        _env_file=None,
        weather_api_key="test-key",
        weather_api_base_url="https://api.example.test/v1",
        redis_url="redis://localhost:6379/0",
    )


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def store(fake_redis):
    return CacheStore(client=fake_redis)


@pytest.fixture
def session():
    """Mock requests session answering with the New York payload."""
    mock_session = MagicMock(spec=requests.Session)
    mock_session.get.return_value = make_response(200, NEW_YORK_PAYLOAD)
    return mock_session


@pytest.fixture
def upstream(settings, session):
    return WeatherClient(settings=settings, session=session)
