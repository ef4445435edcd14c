"""
Data models for weather lookups.

This module defines Pydantic models for the weather record served to
callers, the subset of the provider response we decode, the outcome of a
lookup, and the cache store connection descriptor.

All models are immutable; a record is rebuilt on every successful lookup.
"""

from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from skycache.errors import CacheCorruptError, FailureKind


class WeatherRecord(BaseModel):
    """
    Current weather for one location.

    Attributes:
        location_name: Location name as reported by the provider
        region_name: Region (state, province) of the location
        temperature_celsius: Current temperature in degrees Celsius
        condition_text: Human-readable condition, e.g. "Sunny"
    """

    model_config = ConfigDict(frozen=True)

    location_name: str = Field(..., description="Location name")
    region_name: str = Field(..., description="Region name")
    temperature_celsius: float = Field(..., description="Temperature in Celsius")
    condition_text: str = Field(..., description="Condition description")

    def to_bytes(self) -> bytes:
        """Serialize to the JSON payload stored in the cache."""
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, payload: bytes) -> "WeatherRecord":
        """
        Rebuild a record from a cached payload.

        Raises:
            CacheCorruptError: If the payload is not a valid serialized record
        """
        try:
            return cls.model_validate_json(payload)
        except (ValidationError, UnicodeDecodeError) as e:
            raise CacheCorruptError(f"Cached weather entry is unreadable: {e}") from e

    def __str__(self) -> str:
        return (
            f"{self.location_name}, {self.region_name}: "
            f"{self.condition_text}, {self.temperature_celsius:g}°C"
        )


# =============================================================================
# Provider response schema
# =============================================================================
class _ProviderModel(BaseModel):
    """Base for provider models; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class UpstreamLocation(_ProviderModel):
    name: StrictStr
    region: StrictStr


class UpstreamCondition(_ProviderModel):
    text: StrictStr


class UpstreamCurrent(_ProviderModel):
    temp_c: Union[StrictFloat, StrictInt]
    condition: UpstreamCondition


class UpstreamResponse(_ProviderModel):
    """The fields of the provider's current-conditions document we rely on."""

    location: UpstreamLocation
    current: UpstreamCurrent

    def to_record(self) -> WeatherRecord:
        """Extract the four fields of interest."""
        return WeatherRecord(
            location_name=self.location.name,
            region_name=self.location.region,
            temperature_celsius=self.current.temp_c,
            condition_text=self.current.condition.text,
        )


# =============================================================================
# Lookup outcomes
# =============================================================================
class LookupSuccess(BaseModel):
    """
    A lookup that produced a weather record.

    Attributes:
        record: The weather record
        from_cache: True when served from the cache store
    """

    model_config = ConfigDict(frozen=True)

    record: WeatherRecord
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return True


class LookupFailure(BaseModel):
    """
    A lookup that ended in an error.

    Attributes:
        kind: Which layer failed and how
        reason: Human-readable explanation
        status_code: Provider HTTP status, for rejected requests only
        body: Raw provider response body, for rejected requests only
    """

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    reason: str
    status_code: Optional[int] = None
    body: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.reason


LookupResult = Union[LookupSuccess, LookupFailure]


# =============================================================================
# Cache store connection
# =============================================================================
class StoreConnection(BaseModel):
    """
    Parsed cache store connection URL.

    Attributes:
        host: Store hostname
        port: Store port
        username: Optional ACL username
        password: Optional password
        db: Database index
        ssl: Whether to connect over TLS (``rediss://``)
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1)
    port: int = Field(default=6379, ge=1, le=65535)
    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    db: int = Field(default=0, ge=0)
    ssl: bool = False

    def __str__(self) -> str:
        scheme = "rediss" if self.ssl else "redis"
        return f"{scheme}://{self.host}:{self.port}/{self.db}"
