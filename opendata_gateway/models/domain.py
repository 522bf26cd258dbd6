"""
Domain Models - Tool Definitions and Context Resources

This module contains domain models for the tool catalogue and the static
context documents served beside it.

Pattern: Domain models as value objects
Pattern: Pydantic for validation at API boundaries

Note: These are internal domain models used by the tool registry, executor and
context registry. The wire models for the HTTP API live in tools.py.
"""

from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ToolDefinition Model
# =============================================================================


class ToolDefinition(BaseModel):
    """
    Tool definition schema for tool registration.

    This is the metadata describing a tool: its name, what it does, and the
    JSON Schema for its parameters. It does not include the handler callable;
    see RegisteredTool for that.

    Attributes:
        name: Unique tool identifier.
        description: Human-readable description of what the tool does.
        parameters: JSON Schema defining the tool's input parameters.
        upstream: Name of the Parliament API the tool calls.

    Example:
        >>> tool = ToolDefinition(
        ...     name="search_members",
        ...     description="Search for Members of Parliament by name",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {"name": {"type": "string"}},
        ...         "required": ["name"],
        ...     },
        ... )
    """

    name: str = Field(..., description="Unique tool identifier")
    description: Optional[str] = Field(
        default=None, description="Human-readable description"
    )
    parameters: dict[str, Any] = Field(
        ..., description="JSON Schema for input parameters"
    )
    upstream: Optional[str] = Field(
        default=None, description="Upstream API the tool calls"
    )

    model_config = {"frozen": True}


# =============================================================================
# RegisteredTool Model
# =============================================================================


class RegisteredTool(BaseModel):
    """
    A tool with its definition and handler callable.

    The handler is an async callable receiving the validated arguments dict
    and returning a ToolResponse.

    Attributes:
        definition: The tool's metadata (name, description, parameters).
        handler: Callable that executes the tool.
    """

    definition: ToolDefinition
    handler: Callable[..., Any] = Field(..., description="Tool execution callable")

    model_config = {"arbitrary_types_allowed": True}

    @property
    def name(self) -> str:
        """Get tool name from definition."""
        return self.definition.name

    @property
    def description(self) -> Optional[str]:
        """Get tool description from definition."""
        return self.definition.description

    @property
    def parameters(self) -> dict[str, Any]:
        """Get tool parameters from definition."""
        return self.definition.parameters


# =============================================================================
# ContextResource Model
# =============================================================================


class ContextResource(BaseModel):
    """
    A static JSON reference document describing one Parliament API.

    Attributes:
        name: Resource name, ``context:{stem}``
        uri: Resource URI, ``context/{stem}``
        title: Display title derived from the file stem
        description: Short description of the resource
        mime_type: Always application/json
        path: File the content is read from
    """

    name: str
    uri: str
    title: str
    description: str
    mime_type: str = "application/json"
    path: Path = Field(..., exclude=True)

    model_config = {"frozen": True}

    def read_text(self) -> str:
        """Read the document content from disk."""
        return self.path.read_text(encoding="utf-8")
