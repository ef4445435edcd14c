"""
Data module for weather records, lookup outcomes and key normalization.
"""

from skycache.data.keys import DEFAULT_KEY_PREFIX, cache_key_for, normalize_location
from skycache.data.models import (
    LookupFailure,
    LookupResult,
    LookupSuccess,
    StoreConnection,
    UpstreamResponse,
    WeatherRecord,
)

__all__ = [
    # Models
    "WeatherRecord",
    "UpstreamResponse",
    "LookupSuccess",
    "LookupFailure",
    "LookupResult",
    "StoreConnection",
    # Keys
    "DEFAULT_KEY_PREFIX",
    "normalize_location",
    "cache_key_for",
]
