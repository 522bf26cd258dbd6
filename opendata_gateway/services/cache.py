"""
Response Cache Service

This module provides process-local caching of successful upstream responses,
keyed by the exact request URL (query string included).

Pattern: Repository pattern over an in-memory dict
Anti-Pattern Avoided: Uses immutable entries so readers never see partial writes

Entries are replaced wholesale and never mutated. An entry past its expiry
instant is dropped on lookup; stores also sweep every expired entry at most once
per purge interval, so URLs that are never requested again do not accumulate.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from opendata_gateway.core.config import DEFAULT_CACHE_TTL_SECONDS
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.observability.metrics import record_cache_operation

logger = logging.getLogger(__name__)

DEFAULT_PURGE_INTERVAL_SECONDS = 60.0


# =============================================================================
# Custom Exceptions
# =============================================================================


class CacheError(Exception):
    """Base exception for cache errors."""

    pass


# =============================================================================
# CacheEntry
# =============================================================================


@dataclass(frozen=True)
class CacheEntry:
    """A cached success response and the instant it stops being served."""

    response: ToolResponse
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


# =============================================================================
# ResponseCache Service
# =============================================================================


class ResponseCache:
    """
    Service for caching successful upstream responses.

    One instance is shared by every fetcher built by the composition root;
    URLs are absolute, so entries from different upstreams never collide.

    Attributes:
        default_ttl_seconds: TTL used when a store does not specify one
    """

    def __init__(
        self,
        default_ttl_seconds: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
        purge_interval_seconds: float = DEFAULT_PURGE_INTERVAL_SECONDS,
    ) -> None:
        """
        Initialize ResponseCache.

        Args:
            default_ttl_seconds: Default TTL (defaults to 15 minutes)
            clock: Monotonic clock returning seconds (defaults to time.monotonic)
            purge_interval_seconds: Minimum time between expiry sweeps on store
        """
        self._default_ttl_seconds = (
            default_ttl_seconds
            if default_ttl_seconds is not None
            else float(DEFAULT_CACHE_TTL_SECONDS)
        )
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}
        self._purge_interval_seconds = purge_interval_seconds
        self._next_purge_at = self._clock() + purge_interval_seconds

    @property
    def default_ttl_seconds(self) -> float:
        """Get the default TTL in seconds."""
        return self._default_ttl_seconds

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, url: str) -> Optional[ToolResponse]:
        """
        Look up a live response for a URL.

        Args:
            url: Exact request URL

        Returns:
            The stored ToolResponse (same object that was stored), or None on
            miss or expiry.
        """
        entry = self._entries.get(url)
        if entry is None:
            record_cache_operation("miss")
            return None

        if not entry.is_live(self._clock()):
            # Only drop the entry we looked at; a concurrent store may have replaced it
            if self._entries.get(url) is entry:
                del self._entries[url]
            record_cache_operation("miss")
            logger.debug("Cache entry expired: %s", url)
            return None

        record_cache_operation("hit")
        return entry.response

    def set(
        self,
        url: str,
        response: ToolResponse,
        ttl_seconds: Optional[float] = None,
    ) -> None:
        """
        Store a success response.

        Args:
            url: Exact request URL
            response: Response to store
            ttl_seconds: Entry lifetime (defaults to default_ttl_seconds)

        Raises:
            CacheError: If the response is a failure
        """
        if not response.success:
            raise CacheError(f"Refusing to cache failed response for {url}")

        now = self._clock()
        if now >= self._next_purge_at:
            purged = self.purge_expired()
            self._next_purge_at = now + self._purge_interval_seconds
            if purged:
                logger.debug("Purged %d expired cache entries", purged)

        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl_seconds
        self._entries[url] = CacheEntry(response=response, expires_at=now + ttl)
        record_cache_operation("store")

    def invalidate(self, url: str) -> bool:
        """
        Remove the entry for a URL.

        Returns:
            True if an entry was removed
        """
        return self._entries.pop(url, None) is not None

    def purge_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [url for url, entry in self._entries.items() if not entry.is_live(now)]
        for url in expired:
            del self._entries[url]
        return len(expired)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()
