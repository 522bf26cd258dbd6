"""
Tools package for OpenData Gateway.

Contains the tool base class, registry and executor.
"""

from opendata_gateway.tools.executor import ToolExecutor
from opendata_gateway.tools.registry import ToolNotFoundError, ToolRegistry

__all__ = [
    "ToolExecutor",
    "ToolNotFoundError",
    "ToolRegistry",
]
