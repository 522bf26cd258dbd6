"""
Tool Registry

This module implements the registry of tools exposed by the gateway.

Pattern: Service Registry (tool inventory keyed by name)

The application builds one registry at startup (see tools.builtin.build_toolset)
and keeps it on app.state; tests construct their own.
"""

import logging

from opendata_gateway.models.domain import RegisteredTool, ToolDefinition

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class ToolNotFoundError(Exception):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool not found: {tool_name}")


# =============================================================================
# ToolRegistry Class
# =============================================================================


class ToolRegistry:
    """
    Registry for managing available tools.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register("search_members", tool)
        >>> tool = registry.get("search_members")
        >>> response = await tool.handler({"name": "Starmer"})
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, RegisteredTool] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def register(self, name: str, tool: RegisteredTool) -> None:
        """
        Register a tool with the given name.

        If a tool with the same name exists, it is overwritten.

        Args:
            name: The name to register the tool under.
            tool: The RegisteredTool instance to register.
        """
        if name in self._tools:
            logger.warning(f"Replacing registered tool: {name}")
        self._tools[name] = tool
        logger.debug(f"Registered tool: {name}")

    def get(self, name: str) -> RegisteredTool:
        """
        Get a registered tool by name.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        if name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def list(self) -> list[ToolDefinition]:
        """
        List all registered tool definitions, sorted by name.

        Returns:
            List of ToolDefinition instances.
        """
        return [self._tools[name].definition for name in sorted(self._tools)]

    def has(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def unregister(self, name: str) -> None:
        """
        Remove a tool from the registry.

        Note:
            Does not raise an error if the tool doesn't exist.
        """
        self._tools.pop(name, None)
        logger.debug(f"Unregistered tool: {name}")
