"""
skycache

Current-weather lookup for named locations, served cache-aside from Redis
so the rate-limited weather provider is only called on a cache miss.
"""

__version__ = "1.0.0"
__author__ = "skycache Project"
