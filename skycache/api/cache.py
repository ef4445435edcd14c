"""
Cache store client for weather records.

This module wraps a Redis connection with the three operations the lookup
path and the status page need: get, set-with-expiry and ping.

Cache Strategy:
- Cache key: weather:{lookup_key}
- Value: JSON-serialized WeatherRecord
- Expiry: fixed TTL set on every write (8 hours by default)

Every call is a single attempt. A store failure raises
StoreUnavailableError; an absent key is simply None.
"""

import logging
from typing import Optional
from urllib.parse import unquote, urlsplit

import redis
from redis.backoff import NoBackoff
from redis.retry import Retry

from skycache.data.models import StoreConnection
from skycache.errors import InvalidStoreURLError, StoreUnavailableError

logger = logging.getLogger(__name__)


STORE_SCHEMES = {"redis": False, "rediss": True}
DEFAULT_STORE_PORT = 6379


def parse_store_url(url: str) -> StoreConnection:
    """
    Parse a cache store connection URL.

    Accepted form: ``redis[s]://[[username]:password@]host[:port][/db]``

    Args:
        url: Connection URL from configuration

    Returns:
        StoreConnection descriptor

    Raises:
        InvalidStoreURLError: If the URL is empty or malformed
    """
    if not url or not url.strip():
        raise InvalidStoreURLError("Cache store URL is empty")

    parts = urlsplit(url.strip())

    if parts.scheme not in STORE_SCHEMES:
        raise InvalidStoreURLError(
            f"Unsupported cache store scheme '{parts.scheme}': "
            f"expected one of {sorted(STORE_SCHEMES)}"
        )

    try:
        port = parts.port
    except ValueError as e:
        raise InvalidStoreURLError(f"Invalid cache store port in URL: {e}") from e

    if not parts.hostname:
        raise InvalidStoreURLError("Cache store URL has no host")

    db_path = parts.path.lstrip("/")
    if db_path:
        if not db_path.isdigit():
            raise InvalidStoreURLError(f"Invalid cache store database index: '{db_path}'")
        db = int(db_path)
    else:
        db = 0

    return StoreConnection(
        host=parts.hostname,
        port=port or DEFAULT_STORE_PORT,
        username=unquote(parts.username) if parts.username else None,
        password=unquote(parts.password) if parts.password else None,
        db=db,
        ssl=STORE_SCHEMES[parts.scheme],
    )


class CacheStore:
    """
    Redis-backed key-value store with per-entry expiry.

    The client is created once at startup and shared by every lookup;
    redis-py's connection pool makes it safe for concurrent use.
    """

    def __init__(
        self,
        connection: Optional[StoreConnection] = None,
        client: Optional[redis.Redis] = None,
        socket_timeout: float = 5.0,
    ):
        """
        Initialize the cache store.

        Args:
            connection: Parsed connection descriptor (ignored if client given)
            client: Ready Redis client, mainly for tests
            socket_timeout: Connect and read timeout in seconds
        """
        if client is None:
            if connection is None:
                raise ValueError("Either connection or client is required")
            client = redis.Redis(
                host=connection.host,
                port=connection.port,
                db=connection.db,
                username=connection.username,
                password=connection.password,
                ssl=connection.ssl,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
                retry_on_timeout=False,
                retry=Retry(NoBackoff(), 0),
            )
            logger.info(f"Cache store client created for {connection}")

        self._client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 5.0) -> "CacheStore":
        """Create a cache store from a connection URL."""
        return cls(connection=parse_store_url(url), socket_timeout=socket_timeout)

    def get(self, key: str) -> Optional[bytes]:
        """
        Read a cached value.

        Args:
            key: Cache key

        Returns:
            Stored bytes, or None if the key is absent or expired

        Raises:
            StoreUnavailableError: If the store could not answer
        """
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cache store read failed for '{key}': {e}") from e

        if value is None:
            logger.debug(f"Cache miss: {key}")
        else:
            logger.debug(f"Cache hit: {key}")
        return value

    def set_with_expiry(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """
        Store a value, replacing any existing one and restarting its expiry.

        Args:
            key: Cache key
            value: Serialized payload
            ttl_seconds: Lifetime in seconds (must be positive)

        Raises:
            StoreUnavailableError: If the write was not acknowledged
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        try:
            acknowledged = self._client.set(key, value, ex=ttl_seconds)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cache store write failed for '{key}': {e}") from e

        if not acknowledged:
            raise StoreUnavailableError(f"Cache store did not acknowledge write for '{key}'")

        logger.debug(f"Cached: {key} (ttl={ttl_seconds}s)")

    def ping(self) -> str:
        """
        Check that the store is reachable.

        Returns:
            The store's reply ("PONG")

        Raises:
            StoreUnavailableError: If the store could not answer
        """
        try:
            reply = self._client.ping()
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cache store ping failed: {e}") from e

        if not reply:
            raise StoreUnavailableError("Cache store ping returned no reply")
        return reply if isinstance(reply, str) else "PONG"

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()
        logger.debug("Cache store client closed")

    def __enter__(self) -> "CacheStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
