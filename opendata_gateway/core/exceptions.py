"""
Custom exceptions for OpenData Gateway.

This module provides the exception hierarchy used between the layers of the
resilient fetcher and the tool layer. All exceptions inherit from
OpenDataGatewayException and carry an error code.

Upstream errors are raised by the retry policy and circuit breaker and are
converted into ToolResponse values at the fetcher boundary; they never cross
the tool boundary as raised exceptions.
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """Error codes for OpenData Gateway exceptions."""

    GATEWAY_ERROR = "GATEWAY_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_CONNECTION_ERROR = "UPSTREAM_CONNECTION_ERROR"
    UPSTREAM_STATUS_ERROR = "UPSTREAM_STATUS_ERROR"
    CIRCUIT_OPEN = "CIRCUIT_OPEN"
    TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class OpenDataGatewayException(Exception):
    """
    Base exception for all OpenData Gateway errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GATEWAY_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# Upstream Errors
# =============================================================================


class UpstreamError(OpenDataGatewayException):
    """
    Exception for failed calls to an upstream Parliament API.

    Attributes:
        status_code: HTTP status code of the last response (if any).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: str = ErrorCode.UPSTREAM_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.status_code = status_code


class TransientUpstreamError(UpstreamError):
    """
    A failure likely to succeed on retry (timeouts, network faults, 408/429/5xx).

    Raised by the retry policy once its attempt budget is exhausted. Counted
    by the circuit breaker as a failure of the upstream.
    """


class UpstreamTimeoutError(TransientUpstreamError):
    """The upstream did not answer within the per-attempt timeout."""

    def __init__(self, message: str = "Request timed out after multiple attempts", **kwargs: Any) -> None:
        super().__init__(message, error_code=ErrorCode.UPSTREAM_TIMEOUT, **kwargs)


class UpstreamConnectionError(TransientUpstreamError):
    """A transport-level network failure (DNS, refused connection, reset)."""

    def __init__(self, detail: str, **kwargs: Any) -> None:
        super().__init__(
            f"Network error: {detail}",
            error_code=ErrorCode.UPSTREAM_CONNECTION_ERROR,
            **kwargs,
        )
        self.detail = detail


class UpstreamStatusError(TransientUpstreamError):
    """The upstream kept answering with a transient HTTP status code."""

    def __init__(self, status_code: int, reason: str = "", **kwargs: Any) -> None:
        super().__init__(
            format_status_message(status_code, reason),
            status_code=status_code,
            error_code=ErrorCode.UPSTREAM_STATUS_ERROR,
            **kwargs,
        )
        self.reason = reason


class PermanentUpstreamError(UpstreamError):
    """
    A non-retryable HTTP status (400, 404, ...).

    The upstream is reachable, so the circuit breaker treats this as a
    healthy outcome.
    """

    def __init__(self, status_code: int, reason: str = "", **kwargs: Any) -> None:
        super().__init__(
            format_status_message(status_code, reason),
            status_code=status_code,
            error_code=ErrorCode.UPSTREAM_STATUS_ERROR,
            **kwargs,
        )
        self.reason = reason


def format_status_message(status_code: int, reason: str) -> str:
    """Build the user-visible message for a failed HTTP status."""
    return f"HTTP request failed with status {status_code}: {reason}"


# =============================================================================
# Tool Errors
# =============================================================================


class ToolExecutionError(OpenDataGatewayException):
    """
    Exception for tool execution failures.

    Attributes:
        tool_name: Name of the tool that failed.
    """

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        error_code: str = ErrorCode.TOOL_EXECUTION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.tool_name = tool_name


class ToolValidationError(ToolExecutionError):
    """
    Raised when tool arguments fail validation.

    Attributes:
        field: Name of the argument that failed validation (if known).
    """

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message, tool_name, error_code=ErrorCode.VALIDATION_ERROR)
        self.field = field
