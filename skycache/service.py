"""
Cache-aside weather lookup.

WeatherLookupService answers "what is the weather in X" by checking the
cache store first and only calling the provider on a miss. Store errors
and corrupt entries are reported as failures rather than treated as
misses, so a store outage is visible instead of turning into unbounded
provider traffic.

Usage:
    from skycache.service import WeatherLookupService

    with WeatherLookupService.from_settings() as service:
        result = service.lookup("New York")
        if result.ok:
            print(result.record)
"""

import logging
from typing import Optional

from config.settings import DEFAULT_CACHE_TTL_SECONDS, Settings, get_settings
from skycache.api.cache import CacheStore
from skycache.api.weather_client import WeatherClient
from skycache.data.keys import DEFAULT_KEY_PREFIX, cache_key_for, normalize_location
from skycache.data.models import (
    LookupFailure,
    LookupResult,
    LookupSuccess,
    WeatherRecord,
)
from skycache.errors import (
    StoreUnavailableError,
    UpstreamRejectedError,
    WeatherLookupError,
)

logger = logging.getLogger(__name__)


STATUS_OK_PREFIX = "Cache store reachable"
STATUS_DOWN_PREFIX = "Cache store unreachable"


def check_store(store: CacheStore) -> str:
    """
    Report whether the cache store is reachable.

    Needs no provider credential, so a health page can run it on its own.

    Returns:
        Human-readable status line for an operational health page
    """
    try:
        reply = store.ping()
    except StoreUnavailableError as e:
        logger.warning(f"Status check failed: {e}")
        return f"{STATUS_DOWN_PREFIX}: {e}"
    return f"{STATUS_OK_PREFIX}: {reply}"


class WeatherLookupService:
    """
    Cache-aside orchestrator over a cache store and a weather provider.

    Holds no per-lookup state; one instance serves concurrent lookups.
    Concurrent misses for the same key may each call the provider and
    write the cache; the last write wins.
    """

    def __init__(
        self,
        store: CacheStore,
        upstream: WeatherClient,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ):
        if ttl_seconds < 1:
            raise ValueError(f"ttl_seconds must be at least 1, got {ttl_seconds}")

        self.store = store
        self.upstream = upstream
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "WeatherLookupService":
        """
        Build the service and its collaborators from configuration.

        Raises:
            ValueError: If the API key is missing or the store URL is malformed
        """
        settings = settings or get_settings()
        store = CacheStore.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
        )
        try:
            upstream = WeatherClient(settings=settings)
        except ValueError:
            store.close()
            raise
        return cls(
            store=store,
            upstream=upstream,
            ttl_seconds=settings.cache_ttl_seconds,
            key_prefix=settings.cache_key_prefix,
        )

    def lookup(self, raw_location: str) -> LookupResult:
        """
        Look up current weather for a user-supplied location.

        Args:
            raw_location: Location as typed by the user

        Returns:
            LookupSuccess with the record, or LookupFailure with the reason
        """
        lookup_key = normalize_location(raw_location)
        cache_key = cache_key_for(lookup_key, self.key_prefix)

        try:
            cached = self.store.get(cache_key)
            if cached is not None:
                return LookupSuccess(record=WeatherRecord.from_bytes(cached), from_cache=True)

            record = self.upstream.fetch(lookup_key)
        except WeatherLookupError as e:
            return self._failure(cache_key, e)

        self._remember(cache_key, record)
        return LookupSuccess(record=record, from_cache=False)

    def _remember(self, cache_key: str, record: WeatherRecord) -> None:
        """Write a fetched record; a failed write only costs the memoization."""
        try:
            self.store.set_with_expiry(cache_key, record.to_bytes(), self.ttl_seconds)
        except StoreUnavailableError as e:
            logger.warning(f"Could not cache {cache_key}, serving uncached: {e}")

    @staticmethod
    def _failure(cache_key: str, error: WeatherLookupError) -> LookupFailure:
        logger.warning(f"Lookup failed for {cache_key} ({error.kind.value}): {error}")
        if isinstance(error, UpstreamRejectedError):
            return LookupFailure(
                kind=error.kind,
                reason=error.message,
                status_code=error.status_code,
                body=error.body,
            )
        return LookupFailure(kind=error.kind, reason=error.message)

    def status(self) -> str:
        """
        Report whether the cache store is reachable.

        Returns:
            Human-readable status line for an operational health page
        """
        return check_store(self.store)

    def close(self) -> None:
        """Close the store and provider connections."""
        self.store.close()
        self.upstream.close()

    def __enter__(self) -> "WeatherLookupService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
