"""
Erskine May Tools - erskinemay-api.parliament.uk

Search of Erskine May, the authoritative guide to parliamentary procedure.
"""

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding, escape_path_segment

ERSKINE_MAY_API_BASE = "https://erskinemay-api.parliament.uk/api"

SEARCH_ERSKINE_MAY_DEFINITION = ToolDefinition(
    name="search_erskine_may",
    description="Search Erskine May parliamentary procedure manual. Use when you "
    "need to understand parliamentary rules, procedures, or precedents.",
    parameters={
        "type": "object",
        "properties": {
            "search_term": {
                "type": "string",
                "description": "Search term for procedure rules (e.g. 'Speaker', "
                "'amendment', 'division')",
            },
        },
        "required": ["search_term"],
    },
    upstream="erskinemay-api",
)


class ErskineMayTools(BaseTools):
    """Tools backed by the Erskine May API."""

    UPSTREAM = "erskinemay-api"
    BASE_URL = ERSKINE_MAY_API_BASE
    TOOLS = (ToolBinding(SEARCH_ERSKINE_MAY_DEFINITION, "search_erskine_may"),)

    async def search_erskine_may(self, search_term: str) -> ToolResponse:
        # The search term is a path segment on this API, not a query parameter
        path = f"/Search/ParagraphSearchResults/{escape_path_segment(search_term)}"
        return await self._get(self._url(path))
