"""
HTTP Client Module - Client Factory

This module provides the factory for the httpx clients used to reach the
upstream Parliament APIs, with connection pooling and timeouts.

Pattern: Factory pattern for creating configured HTTP clients
Anti-Pattern Avoided: Uses Optional[T] with explicit None defaults

Retries are owned by RetryPolicy, so the transport is built with retries=0
to keep the attempt count exact.
"""

from typing import Optional

import httpx

from opendata_gateway.core.config import Settings


# =============================================================================
# Default Configuration Constants
# =============================================================================


DEFAULT_TIMEOUT_SECONDS: float = 30.0
"""Default timeout for HTTP requests in seconds."""

DEFAULT_MAX_CONNECTIONS: int = 100
"""Maximum number of connections in the pool (one pool per upstream)."""

DEFAULT_MAX_KEEPALIVE: int = 20
"""Maximum number of keepalive connections."""

USER_AGENT = "opendata-gateway/1.0"


# =============================================================================
# HTTP Client Factory
# =============================================================================


def create_http_client(
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a configured HTTP client with connection pooling and timeouts.

    Args:
        base_url: Base URL for all requests
        timeout_seconds: Request timeout in seconds (default: 30.0)
        max_connections: Maximum connections in pool (default: 100)
        max_keepalive: Maximum keepalive connections (default: 20)
        headers: Additional headers to include in all requests
        transport: Transport override (tests pass httpx.MockTransport)

    Returns:
        httpx.AsyncClient: Configured async HTTP client

    Example:
        >>> client = create_http_client(timeout_seconds=10.0)
        >>> async with client:
        ...     response = await client.get("https://members-api.parliament.uk/api/Members/172")
    """
    timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
    max_conn = max_connections if max_connections is not None else DEFAULT_MAX_CONNECTIONS
    max_keep = max_keepalive if max_keepalive is not None else DEFAULT_MAX_KEEPALIVE

    limits = httpx.Limits(
        max_connections=max_conn,
        max_keepalive_connections=max_keep,
    )

    timeout_config = httpx.Timeout(
        connect=timeout,
        read=timeout,
        write=timeout,
        pool=timeout,
    )

    # Upstreams serve JSON and RSS/XML
    default_headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json, application/xml;q=0.9, */*;q=0.8",
    }
    if headers:
        default_headers.update(headers)

    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=0, limits=limits)

    return httpx.AsyncClient(
        base_url=base_url or "",
        timeout=timeout_config,
        headers=default_headers,
        transport=transport,
        follow_redirects=True,
    )


def create_http_client_from_settings(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an HTTP client using the configured timeout and pool sizes."""
    return create_http_client(
        timeout_seconds=settings.request_timeout_seconds,
        max_connections=settings.max_connections,
        max_keepalive=settings.max_keepalive,
        transport=transport,
    )
