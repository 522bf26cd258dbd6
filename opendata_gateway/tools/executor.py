"""
Tool Executor

This module implements the executor that runs registered tools on behalf of
the HTTP API: lookup, argument validation, execution with a timeout, and
wrapping of the ToolResponse into a ToolExecuteResponse.

Pattern: Command Executor (executes tool calls as commands)
Pattern: Fail-fast validation with graceful error wrapping
"""

import asyncio
import inspect
import logging
from typing import Any

from opendata_gateway.core.exceptions import ToolValidationError
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.models.tools import ToolExecuteRequest, ToolExecuteResponse
from opendata_gateway.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

# Covers a full retry cycle against a slow upstream (3 x 30s plus backoff)
DEFAULT_TIMEOUT = 100.0


class ToolExecutor:
    """
    Executor for running registered tools.

    Attributes:
        registry: The ToolRegistry to look up tools from.
        timeout: Maximum execution time in seconds.

    Example:
        >>> executor = ToolExecutor(registry=registry)
        >>> result = await executor.execute(
        ...     ToolExecuteRequest(name="get_member", arguments={"member_id": 172})
        ... )
    """

    def __init__(self, registry: ToolRegistry, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.registry = registry
        self.timeout = timeout

    async def execute(self, request: ToolExecuteRequest) -> ToolExecuteResponse:
        """
        Execute a tool and return the wrapped result.

        Args:
            request: Tool name and arguments.

        Returns:
            ToolExecuteResponse. Upstream failures are reported with
            success=False, the last status code and the failure message.

        Raises:
            ToolNotFoundError: If the tool is not registered.
            ToolValidationError: If arguments fail schema validation.
        """
        tool = self.registry.get(request.name)
        self._validate_arguments(request.name, tool.parameters, request.arguments)

        try:
            outcome = await self._execute_with_timeout(tool.handler, request.arguments)
        except asyncio.TimeoutError:
            logger.warning(f"Tool {request.name} timed out after {self.timeout}s")
            return ToolExecuteResponse(
                name=request.name,
                success=False,
                error=f"Tool execution timeout after {self.timeout}s",
            )
        except Exception as e:
            logger.error(f"Tool {request.name} execution failed: {e}")
            return ToolExecuteResponse(
                name=request.name,
                success=False,
                error=f"Tool execution failed: {e}",
            )

        return self._wrap(request.name, outcome)

    @staticmethod
    def _wrap(name: str, outcome: Any) -> ToolExecuteResponse:
        if not isinstance(outcome, ToolResponse):
            return ToolExecuteResponse(name=name, success=True, result=outcome)

        if not outcome.success:
            return ToolExecuteResponse(
                name=name,
                success=False,
                error=outcome.error,
                status_code=outcome.status_code,
                url=outcome.url,
            )

        result = outcome.parsed_json if outcome.has_json else outcome.raw_content
        return ToolExecuteResponse(name=name, success=True, result=result, url=outcome.url)

    # =========================================================================
    # Argument Validation
    # =========================================================================

    def _validate_arguments(
        self, tool_name: str, schema: dict[str, Any], arguments: dict[str, Any]
    ) -> None:
        """
        Validate arguments against the tool's JSON Schema.

        Checks required properties, rejects unknown properties and checks
        basic JSON types.

        Raises:
            ToolValidationError: If validation fails.
        """
        required = schema.get("required", [])
        for prop in required:
            if prop not in arguments:
                raise ToolValidationError(
                    f"Missing required argument: {prop}",
                    tool_name=tool_name,
                    field=prop,
                )

        properties = schema.get("properties", {})
        for prop_name, value in arguments.items():
            if prop_name not in properties:
                raise ToolValidationError(
                    f"Unknown argument: {prop_name}",
                    tool_name=tool_name,
                    field=prop_name,
                )

            expected_type = properties[prop_name].get("type")
            if expected_type and not self._check_type(value, expected_type):
                raise ToolValidationError(
                    f"Invalid type for '{prop_name}': expected {expected_type}, "
                    f"got {type(value).__name__}",
                    tool_name=tool_name,
                    field=prop_name,
                )

    def _check_type(self, value: Any, expected_type: str) -> bool:
        """Check if a value matches the expected JSON Schema type."""
        type_map = {
            "string": str,
            "integer": int,
            "number": (int, float),
            "boolean": bool,
            "array": list,
            "object": dict,
        }

        python_type = type_map.get(expected_type)
        if python_type is None:
            return True

        # bool is a subclass of int but not a JSON number
        if expected_type in ("integer", "number") and isinstance(value, bool):
            return False

        return isinstance(value, python_type)

    async def _execute_with_timeout(self, handler: Any, arguments: dict[str, Any]) -> Any:
        """
        Execute a handler with timeout protection.

        Sync handlers are run in the default executor to avoid blocking.
        """
        if inspect.iscoroutinefunction(handler):
            return await asyncio.wait_for(handler(arguments), timeout=self.timeout)

        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, handler, arguments)
        return await asyncio.wait_for(future, timeout=self.timeout)
