"""
Observability package for OpenData Gateway.

Structured logging (structlog) and Prometheus metrics.
"""

from opendata_gateway.observability.logging import (
    configure_logging,
    correlation_id_context,
    get_correlation_id,
    get_logger,
)
from opendata_gateway.observability.metrics import (
    MetricsMiddleware,
    get_metrics_app,
    record_cache_operation,
    record_upstream_attempt,
)

__all__ = [
    "MetricsMiddleware",
    "configure_logging",
    "correlation_id_context",
    "get_correlation_id",
    "get_logger",
    "get_metrics_app",
    "record_cache_operation",
    "record_upstream_attempt",
]
