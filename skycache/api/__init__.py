"""
API module for the weather provider and the cache store.
"""

from skycache.api.weather_client import WeatherClient
from skycache.api.cache import CacheStore, parse_store_url

__all__ = ["WeatherClient", "CacheStore", "parse_store_url"]
