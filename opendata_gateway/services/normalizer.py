"""
Response Normalizer

This module converts the outcome of an upstream call into a ToolResponse.
Two entry points mirror the two ways a fetch can end:

- normalize_response(): an HTTP response was received (2xx or not)
- normalize_exception(): a typed fault escaped the breaker/retry layers

Pattern: Anti-corruption layer between httpx and the tool boundary

Bodies that are not JSON (RSS/XML feeds, plain text) are a success with
``parsed_json`` left empty, never an error.
"""

import json
from typing import Any, Optional

import httpx

from opendata_gateway.core.exceptions import (
    PermanentUpstreamError,
    UpstreamConnectionError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    format_status_message,
)
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.resilience.circuit_breaker_state_machine import CircuitBreakerError


# =============================================================================
# Messages
# =============================================================================

TIMEOUT_MESSAGE = "Request timed out after multiple attempts"
CIRCUIT_OPEN_MESSAGE = "Service temporarily unavailable (circuit breaker open)"


def unexpected_error_message(exc: BaseException) -> str:
    """Message for faults outside the known taxonomy."""
    return f"Unexpected error: {exc}"


# =============================================================================
# JSON Detection
# =============================================================================


def parse_json_body(body: str) -> Optional[Any]:
    """
    Decode a body as JSON if it is JSON.

    Returns None for empty or whitespace-only bodies, for bodies that fail to
    decode (including nesting too deep to decode), and for a literal ``null``
    document.
    """
    if not body or not body.strip():
        return None
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        return None


# =============================================================================
# Normalization
# =============================================================================


def normalize_response(url: str, response: httpx.Response) -> ToolResponse:
    """
    Normalize a received HTTP response.

    Args:
        url: Request URL
        response: Response as received from httpx

    Returns:
        Success with raw body (and decoded JSON when applicable) for 2xx,
        otherwise a failure carrying the status code and reason phrase.
    """
    if response.is_success:
        body = response.text
        return ToolResponse.ok(url, body, parse_json_body(body))

    return ToolResponse.failure(
        url,
        format_status_message(response.status_code, response.reason_phrase),
        status_code=response.status_code,
    )


def normalize_exception(url: str, exc: BaseException) -> ToolResponse:
    """
    Normalize a fault raised by the breaker or retry layers.

    Args:
        url: Request URL
        exc: The exception that ended the fetch

    Returns:
        Failure response with the user-visible message for the fault kind.
    """
    if isinstance(exc, CircuitBreakerError):
        return ToolResponse.failure(url, CIRCUIT_OPEN_MESSAGE)

    if isinstance(exc, (UpstreamStatusError, PermanentUpstreamError)):
        return ToolResponse.failure(url, exc.message, status_code=exc.status_code)

    if isinstance(exc, UpstreamTimeoutError):
        return ToolResponse.failure(url, TIMEOUT_MESSAGE)

    if isinstance(exc, UpstreamConnectionError):
        return ToolResponse.failure(url, exc.message)

    return ToolResponse.failure(url, unexpected_error_message(exc))
