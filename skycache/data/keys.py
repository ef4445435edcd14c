"""
Lookup key helpers.

A raw location string becomes a lookup key by escaping spaces, so that
"New York" and "New%20York" share one cache entry and one provider query.
"""

DEFAULT_KEY_PREFIX = "weather:"


def normalize_location(raw: str) -> str:
    """
    Turn a user-supplied location into a lookup key.

    Only spaces are escaped (as ``%20``); every other character passes
    through unchanged. Never fails; the empty string maps to itself.

    Args:
        raw: Location as typed by the user

    Returns:
        Lookup key used for both the cache key and the provider query
    """
    return raw.replace(" ", "%20")


def cache_key_for(lookup_key: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Build the cache store key for a lookup key."""
    return f"{prefix}{lookup_key}"
