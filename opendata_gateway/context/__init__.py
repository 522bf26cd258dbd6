"""
Context package for OpenData Gateway.

Loads the static JSON reference documents served beside the tools.
"""

from opendata_gateway.context.registry import (
    ContextResourceNotFoundError,
    ContextResourceRegistry,
    to_display_name,
)

__all__ = [
    "ContextResourceNotFoundError",
    "ContextResourceRegistry",
    "to_display_name",
]
