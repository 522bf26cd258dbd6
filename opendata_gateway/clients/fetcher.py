"""
Resilient Fetcher

This module provides ResilientFetcher, the single code path every tool uses to
call an upstream Parliament API.

Pattern: Facade over cache -> circuit breaker -> retry policy -> httpx
Pattern: Errors as values at the tool boundary

Flow of fetch(url, cache_options):
    1. cache enabled and a live entry exists -> return it (no network)
    2. breaker.execute(retry.execute(GET url))
    3. 2xx -> normalize, store when caching is enabled, return
    4. any fault -> normalize to a failure ToolResponse (never cached)

fetch() never raises for upstream faults; typed errors from the inner layers
are converted here and nowhere else.

One fetcher exists per upstream and is shared by reference among that
upstream's tools, so they share one circuit breaker.
"""

from typing import Callable, Optional

import httpx

from opendata_gateway.clients.http import create_http_client_from_settings
from opendata_gateway.core.config import Settings, get_settings
from opendata_gateway.models.responses import CacheOptions, ToolResponse
from opendata_gateway.observability.logging import get_logger
from opendata_gateway.resilience.circuit_breaker_state_machine import (
    CircuitBreakerStateMachine,
)
from opendata_gateway.resilience.retry import RetryPolicy, SleepFunc
from opendata_gateway.services.cache import ResponseCache
from opendata_gateway.services.normalizer import normalize_exception, normalize_response


class ResilientFetcher:
    """
    Cached, retried, circuit-broken HTTP GET for one upstream.

    Example:
        >>> fetcher = create_fetcher("members-api", cache=ResponseCache())
        >>> response = await fetcher.fetch(
        ...     "https://members-api.parliament.uk/api/Members/172"
        ... )
        >>> response.success
        True

    Attributes:
        name: Upstream name used in logs, metrics and health reporting
        circuit_breaker: Breaker shared by every tool of this upstream
        cache: Response cache (possibly shared with other fetchers)
    """

    def __init__(
        self,
        name: str,
        client: httpx.AsyncClient,
        cache: ResponseCache,
        retry_policy: RetryPolicy,
        circuit_breaker: CircuitBreakerStateMachine,
        owns_client: bool = False,
    ) -> None:
        """
        Initialize ResilientFetcher.

        Args:
            name: Upstream name
            client: httpx client issuing the GETs
            cache: Response cache
            retry_policy: Retry policy for a single fetch
            circuit_breaker: Breaker guarding the upstream
            owns_client: Close the client in aclose()
        """
        self._name = name
        self._client = client
        self._cache = cache
        self._retry_policy = retry_policy
        self._circuit_breaker = circuit_breaker
        self._owns_client = owns_client
        self._logger = get_logger(__name__, upstream=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def circuit_breaker(self) -> CircuitBreakerStateMachine:
        return self._circuit_breaker

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def fetch(
        self,
        url: str,
        cache_options: Optional[CacheOptions] = None,
    ) -> ToolResponse:
        """
        GET ``url`` and return a normalized ToolResponse.

        Args:
            url: Absolute request URL (also the cache key)
            cache_options: Per-call cache behaviour (default: enabled, 15 min)

        Returns:
            Success or failure ToolResponse. Never raises for upstream faults.
        """
        options = cache_options if cache_options is not None else CacheOptions.default()

        try:
            if options.enabled:
                cached = self._cache.get(url)
                if cached is not None:
                    self._logger.debug("cache_hit", url=url)
                    return cached

            response = await self._circuit_breaker.execute(
                self._retry_policy.execute, lambda: self._client.get(url), url
            )
            result = normalize_response(url, response)

            if options.enabled and result.success:
                self._cache.set(url, result, options.ttl_seconds)

            return result
        except Exception as exc:
            result = normalize_exception(url, exc)
            self._logger.warning(
                "fetch_failed",
                url=url,
                error=result.error,
                status_code=result.status_code,
                exc_type=type(exc).__name__,
            )
            return result

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ResilientFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


# =============================================================================
# Factory
# =============================================================================


def create_fetcher(
    name: str,
    cache: Optional[ResponseCache] = None,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Optional[SleepFunc] = None,
    clock: Optional[Callable[[], float]] = None,
) -> ResilientFetcher:
    """
    Build a ResilientFetcher with configured retry and breaker.

    Args:
        name: Upstream name
        cache: Shared response cache (a private one is created if omitted)
        settings: Application settings (default: get_settings())
        client: Borrowed httpx client; when omitted the fetcher owns one
        transport: Transport for an owned client (tests pass MockTransport)
        sleep: Backoff sleep override
        clock: Monotonic clock override for the breaker and a private cache

    Returns:
        Configured ResilientFetcher
    """
    settings = settings or get_settings()
    owns_client = client is None
    if client is None:
        client = create_http_client_from_settings(settings, transport=transport)

    if cache is None:
        cache = ResponseCache(default_ttl_seconds=settings.cache_ttl_seconds, clock=clock)

    return ResilientFetcher(
        name=name,
        client=client,
        cache=cache,
        retry_policy=RetryPolicy.from_settings(name, settings, sleep=sleep),
        circuit_breaker=CircuitBreakerStateMachine.from_settings(name, settings, clock=clock),
        owns_client=owns_client,
    )
