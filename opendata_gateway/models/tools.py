"""
Tool Models - HTTP API Request/Response

This module contains Pydantic models for tool listing and execution over the
HTTP API.

Anti-Patterns Avoided:
- Optional fields use Optional[T] with explicit None default
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ToolExecuteRequest(BaseModel):
    """
    Tool execution request model.

    Attributes:
        name: Tool name to execute
        arguments: Tool arguments (validated against the tool schema)
    """

    name: str = Field(..., description="Tool name to execute")
    arguments: dict[str, Any] = Field(
        default_factory=dict, description="Tool arguments"
    )


class ToolExecuteResponse(BaseModel):
    """
    Tool execution response model.

    A failed upstream call is reported with ``success=False`` together with
    the message and last HTTP status code; it is not an HTTP error of the
    gateway itself.

    Attributes:
        name: Tool name that was executed
        success: Whether execution succeeded
        result: Parsed JSON payload, or the raw body for non-JSON responses
        error: Error message if execution failed
        status_code: Upstream HTTP status code if the failure carried one
        url: Upstream URL that was requested
    """

    name: str = Field(..., description="Tool name")
    success: bool = Field(..., description="Whether execution succeeded")
    result: Optional[Any] = Field(default=None, description="Execution result")
    error: Optional[str] = Field(default=None, description="Error message if failed")
    status_code: Optional[int] = Field(
        default=None, description="Upstream HTTP status code"
    )
    url: Optional[str] = Field(default=None, description="Upstream request URL")


class ToolListResponse(BaseModel):
    """Listing of every registered tool definition."""

    tools: list[dict[str, Any]] = Field(default_factory=list)
    count: int = Field(default=0)


class ContextResourceSummary(BaseModel):
    """Public description of a context resource."""

    name: str
    uri: str
    title: str
    description: str
    mime_type: str
