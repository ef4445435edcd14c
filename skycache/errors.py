"""
Exception hierarchy for weather lookups.

Every error that can end a lookup carries a ``FailureKind`` so the
orchestrator can turn it into a ``LookupFailure`` without inspecting
exception types one by one.
"""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Why a lookup failed; the layer is part of the name."""

    STORE_UNAVAILABLE = "store_unavailable"
    CACHE_CORRUPT = "cache_corrupt"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_REJECTED = "upstream_rejected"
    SCHEMA_MISMATCH = "schema_mismatch"


class WeatherLookupError(Exception):
    """Base exception for failures that terminate a lookup."""

    kind: FailureKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StoreUnavailableError(WeatherLookupError):
    """Raised when the cache store cannot be reached or answers with an error."""

    kind = FailureKind.STORE_UNAVAILABLE


class CacheCorruptError(WeatherLookupError):
    """Raised when a cached value exists but cannot be decoded."""

    kind = FailureKind.CACHE_CORRUPT


class UpstreamUnavailableError(WeatherLookupError):
    """Raised when the weather provider could not be reached at all."""

    kind = FailureKind.UPSTREAM_UNAVAILABLE


class UpstreamRejectedError(WeatherLookupError):
    """Raised when the weather provider answers with a non-success status."""

    kind = FailureKind.UPSTREAM_REJECTED

    def __init__(self, message: str, status_code: int, body: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class SchemaMismatchError(WeatherLookupError):
    """Raised when a successful provider response has an unexpected shape."""

    kind = FailureKind.SCHEMA_MISMATCH


class InvalidStoreURLError(ValueError):
    """Raised when the cache store connection URL cannot be parsed."""
    pass
