#!/usr/bin/env python
"""
Command-line interface for skycache.

Usage:
    python -m skycache.cli lookup "New York"
    python -m skycache.cli lookup London --json
    python -m skycache.cli status
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from config.settings import Settings, get_settings
from skycache.api.cache import CacheStore
from skycache.service import STATUS_OK_PREFIX, WeatherLookupService, check_store


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="skycache",
        description="Look up current weather, served from the cache when possible.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Current weather for a city
  skycache lookup "New York"

  # Machine-readable output
  skycache lookup London --json

  # Check that the cache store is reachable
  skycache status
        """
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    lookup_parser = subparsers.add_parser('lookup', help='Look up current weather for a location')
    lookup_parser.add_argument('location', help='Location name, e.g. "New York"')
    lookup_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the result as JSON'
    )

    subparsers.add_parser('status', help='Check the cache store connection')

    return parser


def run_lookup(service: WeatherLookupService, location: str, as_json: bool = False) -> int:
    """Run a lookup and print the result."""
    result = service.lookup(location)

    if not result.ok:
        if as_json:
            print(result.model_dump_json())
        print(f"Error: {result.reason}", file=sys.stderr)
        return EXIT_FAILURE

    if as_json:
        print(json.dumps({
            **result.record.model_dump(),
            "from_cache": result.from_cache,
        }))
        return EXIT_OK

    record = result.record
    print(f"Location:    {record.location_name}, {record.region_name}")
    print(f"Condition:   {record.condition_text}")
    print(f"Temperature: {record.temperature_celsius:g} °C")
    print(f"Source:      {'cache' if result.from_cache else 'weather provider'}")
    return EXIT_OK


def run_status(settings: Settings) -> int:
    """Print the cache store status; only the store is contacted."""
    try:
        store = CacheStore.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
        )
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    with store:
        message = check_store(store)
    print(message)
    return EXIT_OK if message.startswith(STATUS_OK_PREFIX) else EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.command == 'status':
        return run_status(settings)

    try:
        service = WeatherLookupService.from_settings(settings)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    with service:
        return run_lookup(service, args.location, as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
