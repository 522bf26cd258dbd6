"""
API Dependencies

FastAPI dependency functions resolving the objects the application builds at
startup and keeps on app.state. Tests replace them by building the app with
their own toolset.
"""

from fastapi import Request

from opendata_gateway.context.registry import ContextResourceRegistry
from opendata_gateway.tools.builtin import Toolset
from opendata_gateway.tools.executor import ToolExecutor


def get_toolset(request: Request) -> Toolset:
    """Toolset (registry, fetchers, cache) built at startup."""
    return request.app.state.toolset


def get_tool_executor(request: Request) -> ToolExecutor:
    """Executor bound to the application's tool registry."""
    return request.app.state.tool_executor


def get_context_registry(request: Request) -> ContextResourceRegistry:
    """Context resources loaded at startup."""
    return request.app.state.context_registry
