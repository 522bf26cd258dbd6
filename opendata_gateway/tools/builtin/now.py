"""
Now Tools - now-api.parliament.uk

Tools reading the live annunciator screens of both chambers. The annunciator
changes minute by minute, so responses are never cached.
"""

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import CacheOptions, ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding

NOW_API_BASE = "https://now-api.parliament.uk/api"

HAPPENING_NOW_IN_COMMONS_DEFINITION = ToolDefinition(
    name="happening_now_in_commons",
    description="What is happening right now in the House of Commons chamber "
    "(current business shown on the annunciator).",
    parameters={"type": "object", "properties": {}},
    upstream="now-api",
)

HAPPENING_NOW_IN_LORDS_DEFINITION = ToolDefinition(
    name="happening_now_in_lords",
    description="What is happening right now in the House of Lords chamber "
    "(current business shown on the annunciator).",
    parameters={"type": "object", "properties": {}},
    upstream="now-api",
)


class NowTools(BaseTools):
    """Tools backed by the Now (annunciator) API."""

    UPSTREAM = "now-api"
    BASE_URL = NOW_API_BASE
    DEFAULT_CACHE_OPTIONS = CacheOptions.disabled()
    TOOLS = (
        ToolBinding(HAPPENING_NOW_IN_COMMONS_DEFINITION, "happening_now_in_commons"),
        ToolBinding(HAPPENING_NOW_IN_LORDS_DEFINITION, "happening_now_in_lords"),
    )

    async def happening_now_in_commons(self) -> ToolResponse:
        return await self._get(self._url("/Message/message/CommonsMain/current"))

    async def happening_now_in_lords(self) -> ToolResponse:
        return await self._get(self._url("/Message/message/LordsMain/current"))
