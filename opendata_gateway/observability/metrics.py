"""
Prometheus Metrics Module

This module provides Prometheus metrics for the gateway's HTTP surface and for
the upstream access layer (cache operations and upstream attempts).

Pattern: Metrics collection for observability

Metrics Provided:
- opendata_gateway_requests_total: inbound HTTP requests
- opendata_gateway_request_duration_seconds: inbound request latency
- opendata_gateway_requests_in_progress: in-flight inbound requests
- opendata_gateway_cache_operations_total: response cache hits/misses/stores
- opendata_gateway_upstream_attempts_total: single upstream HTTP attempts
"""

import re
import time
from typing import Any, Callable, Optional

from prometheus_client import (
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    make_asgi_app,
)

# =============================================================================
# Path Normalization (High Cardinality Prevention)
# =============================================================================

# Order matters: more specific patterns first
_PATH_PATTERNS = [
    (re.compile(r"/[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"), "/{id}"),
    (re.compile(r"/\d+(?=/|$)"), "/{id}"),
]


def normalize_path(path: str) -> str:
    """
    Normalize a URL path by replacing dynamic segments with placeholders.

    Examples:
        >>> normalize_path("/health")
        '/health'
        >>> normalize_path("/v1/context/12345")
        '/v1/context/{id}'
    """
    if path == "/":
        return path

    normalized = path
    for pattern, replacement in _PATH_PATTERNS:
        normalized = pattern.sub(replacement, normalized)

    return normalized


# =============================================================================
# Inbound Request Metrics
# =============================================================================

REQUESTS_TOTAL = Counter(
    name="opendata_gateway_requests_total",
    documentation="Total number of HTTP requests",
    labelnames=["method", "path", "status"],
)

REQUEST_DURATION_SECONDS = Histogram(
    name="opendata_gateway_request_duration_seconds",
    documentation="HTTP request duration in seconds",
    labelnames=["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

REQUESTS_IN_PROGRESS = Gauge(
    name="opendata_gateway_requests_in_progress",
    documentation="Number of HTTP requests currently being processed",
    labelnames=["method"],
)

# =============================================================================
# Upstream Access Metrics
# =============================================================================

CACHE_OPERATIONS_TOTAL = Counter(
    name="opendata_gateway_cache_operations_total",
    documentation="Total response cache operations by result (hit/miss/store)",
    labelnames=["result"],
)

UPSTREAM_ATTEMPTS_TOTAL = Counter(
    name="opendata_gateway_upstream_attempts_total",
    documentation="Total single upstream HTTP attempts by outcome",
    labelnames=["upstream", "outcome"],
)


def record_cache_operation(result: str) -> None:
    """
    Record a cache operation.

    Args:
        result: Cache operation result ("hit", "miss" or "store")
    """
    CACHE_OPERATIONS_TOTAL.labels(result=result).inc()


def record_upstream_attempt(upstream: str, outcome: str) -> None:
    """
    Record one upstream HTTP attempt.

    Args:
        upstream: Name of the upstream API (e.g. "members-api")
        outcome: "success", "transient" or "permanent"
    """
    UPSTREAM_ATTEMPTS_TOTAL.labels(upstream=upstream, outcome=outcome).inc()


# =============================================================================
# MetricsMiddleware ASGI Middleware
# =============================================================================


class MetricsMiddleware:
    """
    ASGI middleware for Prometheus metrics collection.

    This middleware:
    - Increments request counter per method/path/status
    - Records request latency histogram
    - Tracks in-progress requests gauge
    - Excludes /metrics path from metrics
    """

    def __init__(
        self,
        app: Callable[..., Any],
        exclude_paths: Optional[list[str]] = None,
    ) -> None:
        self.app = app
        self.exclude_paths = exclude_paths or ["/metrics"]

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Any],
        send: Callable[..., Any],
    ) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        raw_path = scope.get("path", "/")

        if raw_path in self.exclude_paths or raw_path.startswith("/metrics"):
            await self.app(scope, receive, send)
            return

        path = normalize_path(raw_path)

        REQUESTS_IN_PROGRESS.labels(method=method).inc()
        start_time = time.perf_counter()
        status_code = "500"

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = str(message.get("status", 500))
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration = time.perf_counter() - start_time

            REQUESTS_TOTAL.labels(method=method, path=path, status=status_code).inc()
            REQUEST_DURATION_SECONDS.labels(method=method, path=path).observe(duration)
            REQUESTS_IN_PROGRESS.labels(method=method).dec()


# =============================================================================
# Metrics Endpoint
# =============================================================================


def get_metrics_app() -> Callable[..., Any]:
    """Get ASGI app serving Prometheus metrics (mounted at /metrics)."""
    return make_asgi_app()


def generate_metrics() -> str:
    """Generate Prometheus metrics text format."""
    return generate_latest(REGISTRY).decode("utf-8")
