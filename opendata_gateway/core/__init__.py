"""
Core module for OpenData Gateway.

This module contains configuration and the exception hierarchy.
"""

from opendata_gateway.core.config import Settings, get_settings
from opendata_gateway.core.exceptions import (
    ErrorCode,
    OpenDataGatewayException,
    PermanentUpstreamError,
    ToolExecutionError,
    ToolValidationError,
    TransientUpstreamError,
    UpstreamConnectionError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "OpenDataGatewayException",
    "UpstreamError",
    "TransientUpstreamError",
    "UpstreamTimeoutError",
    "UpstreamConnectionError",
    "UpstreamStatusError",
    "PermanentUpstreamError",
    "ToolExecutionError",
    "ToolValidationError",
]
