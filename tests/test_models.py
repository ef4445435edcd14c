"""
Tests for weather records, the provider schema and lookup outcomes.
"""

import json

import pytest
from pydantic import ValidationError

from skycache.data.models import (
    LookupFailure,
    LookupSuccess,
    UpstreamResponse,
    WeatherRecord,
)
from skycache.errors import CacheCorruptError, FailureKind
from tests.conftest import NEW_YORK_PAYLOAD


@pytest.fixture
def record():
    return WeatherRecord(
        location_name="New York",
        region_name="NY",
        temperature_celsius=21.0,
        condition_text="Sunny",
    )


class TestWeatherRecord:

    def test_is_immutable(self, record):
        with pytest.raises(ValidationError):
            record.temperature_celsius = 30.0

    def test_serialized_payload_is_json_with_four_fields(self, record):
        data = json.loads(record.to_bytes())
        assert data == {
            "location_name": "New York",
            "region_name": "NY",
            "temperature_celsius": 21.0,
            "condition_text": "Sunny",
        }

    def test_from_bytes_restores_equal_record(self, record):
        assert WeatherRecord.from_bytes(record.to_bytes()) == record

    @pytest.mark.parametrize("payload", [
        b"not json",
        b"{}",
        b'{"location_name": "X"}',
        b"\xff\xfe",
    ])
    def test_from_bytes_rejects_corrupt_payload(self, payload):
        with pytest.raises(CacheCorruptError) as exc_info:
            WeatherRecord.from_bytes(payload)
        assert exc_info.value.kind is FailureKind.CACHE_CORRUPT

    def test_str(self, record):
        assert str(record) == "New York, NY: Sunny, 21°C"


class TestUpstreamResponse:

    def test_extracts_four_fields(self):
        record = UpstreamResponse.model_validate(NEW_YORK_PAYLOAD).to_record()
        assert record == WeatherRecord(
            location_name="New York",
            region_name="NY",
            temperature_celsius=21.0,
            condition_text="Sunny",
        )

    def test_integer_temperature_accepted(self):
        payload = {
            "location": {"name": "Oslo", "region": "Oslo"},
            "current": {"temp_c": -3, "condition": {"text": "Snow"}},
        }
        assert UpstreamResponse.model_validate(payload).to_record().temperature_celsius == -3.0

    @pytest.mark.parametrize("payload", [
        {"location": {"name": "X", "region": "Y"}},
        {"location": {"name": "X"}, "current": {"temp_c": 1.0, "condition": {"text": "Fog"}}},
        {"location": {"name": "X", "region": "Y"}, "current": {"temp_c": "21", "condition": {"text": "Fog"}}},
        {"location": {"name": 5, "region": "Y"}, "current": {"temp_c": 1.0, "condition": {"text": "Fog"}}},
        {"location": {"name": "X", "region": "Y"}, "current": {"temp_c": 1.0, "condition": "Fog"}},
        [],
    ])
    def test_rejects_missing_or_mistyped_fields(self, payload):
        with pytest.raises(ValidationError):
            UpstreamResponse.model_validate(payload)


class TestLookupResult:

    def test_success_is_ok(self, record):
        result = LookupSuccess(record=record)
        assert result.ok
        assert result.from_cache is False

    def test_failure_is_not_ok(self):
        result = LookupFailure(kind=FailureKind.UPSTREAM_REJECTED, reason="HTTP 403", status_code=403)
        assert not result.ok
        assert str(result) == "HTTP 403"
        assert result.status_code == 403
