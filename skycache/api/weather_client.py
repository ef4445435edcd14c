"""
Weather provider API client.

This module fetches current conditions for a lookup key from a
WeatherAPI-style provider and decodes them into a WeatherRecord.

Usage:
    from skycache.api.weather_client import WeatherClient

    client = WeatherClient(api_key="...")
    record = client.fetch("New%20York")
"""

import logging
from typing import Optional

import requests
from pydantic import ValidationError

from config.settings import Settings, get_settings
from skycache.data.models import UpstreamResponse, WeatherRecord
from skycache.errors import (
    SchemaMismatchError,
    UpstreamRejectedError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


CURRENT_CONDITIONS_ENDPOINT = "/current.json"

# Maximum characters of a provider error body kept in messages
MAX_ERROR_BODY_CHARS = 500


class WeatherClient:
    """
    Client for the weather provider's current-conditions endpoint.

    One call to fetch() is exactly one HTTP request; there is no retry
    and no rate limiting here.

    Attributes:
        api_key: Provider API key
        base_url: API base URL
        timeout: Request timeout in seconds
        session: Requests session reused across calls
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the provider client.

        Args:
            api_key: API key (uses settings if not provided)
            settings: Settings object (uses default if not provided)
            session: Requests session (a new one is created if not provided)
        """
        self.settings = settings or get_settings()

        if api_key:
            self.api_key = api_key
        else:
            self.api_key = self.settings.get_api_key()

        self.base_url = self.settings.weather_api_base_url.rstrip("/")
        self.timeout = self.settings.request_timeout
        self.session = session or requests.Session()

        logger.info("WeatherClient initialized")

    def fetch(self, lookup_key: str) -> WeatherRecord:
        """
        Fetch current conditions for a lookup key.

        The key is sent as-is; it is already escaped by normalize_location().

        Args:
            lookup_key: Normalized location

        Returns:
            WeatherRecord decoded from the response

        Raises:
            UpstreamUnavailableError: If no response was received
            UpstreamRejectedError: If the provider answered with a non-200 status
            SchemaMismatchError: If a 200 response has an unexpected body
        """
        url = f"{self.base_url}{CURRENT_CONDITIONS_ENDPOINT}"
        query = f"key={self.api_key}&q={lookup_key}"

        logger.info(f"Fetching current weather for '{lookup_key}'")

        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"Provider request failed: {type(e).__name__}")
            raise UpstreamUnavailableError(
                "Unable to reach weather provider"
            ) from e

        if response.status_code != 200:
            body = response.text
            raise UpstreamRejectedError(
                f"Weather provider returned HTTP {response.status_code}: "
                f"{body[:MAX_ERROR_BODY_CHARS]}",
                status_code=response.status_code,
                body=body,
            )

        return self._decode(response)

    def _decode(self, response: requests.Response) -> WeatherRecord:
        """Validate a successful response body against the expected schema."""
        try:
            payload = response.json()
        except ValueError as e:
            raise SchemaMismatchError(
                f"Weather provider returned a non-JSON body: {response.text[:MAX_ERROR_BODY_CHARS]}"
            ) from e

        try:
            decoded = UpstreamResponse.model_validate(payload)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "<root>"
                for err in e.errors()
            )
            raise SchemaMismatchError(
                f"Weather provider response has unexpected shape (fields: {fields})"
            ) from e

        record = decoded.to_record()
        logger.debug(f"Provider response decoded: {record}")
        return record

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "WeatherClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
