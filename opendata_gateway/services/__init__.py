"""
Services package for OpenData Gateway.

Contains the response cache and the response normalizer.
"""

from opendata_gateway.services.cache import CacheEntry, CacheError, ResponseCache
from opendata_gateway.services.normalizer import (
    normalize_exception,
    normalize_response,
    parse_json_body,
)

__all__ = [
    "CacheEntry",
    "CacheError",
    "ResponseCache",
    "normalize_exception",
    "normalize_response",
    "parse_json_body",
]
