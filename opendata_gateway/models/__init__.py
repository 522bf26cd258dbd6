"""
Models package for OpenData Gateway.

Exports the response value objects, domain models and API wire models.
"""

from opendata_gateway.models.domain import ContextResource, RegisteredTool, ToolDefinition
from opendata_gateway.models.responses import CacheOptions, ToolResponse
from opendata_gateway.models.tools import (
    ContextResourceSummary,
    ToolExecuteRequest,
    ToolExecuteResponse,
    ToolListResponse,
)

__all__ = [
    "CacheOptions",
    "ContextResource",
    "ContextResourceSummary",
    "RegisteredTool",
    "ToolDefinition",
    "ToolExecuteRequest",
    "ToolExecuteResponse",
    "ToolListResponse",
    "ToolResponse",
]
