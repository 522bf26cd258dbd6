"""
Hansard Tools - hansard-api.parliament.uk

Full-text search of Hansard, the official report of debates.
"""

from typing import Optional

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding

HANSARD_API_BASE = "https://hansard-api.parliament.uk"

SEARCH_HANSARD_DEFINITION = ToolDefinition(
    name="search_hansard",
    description="Search Hansard debate records. Optionally restrict by House "
    "and by a date range (YYYY-MM-DD).",
    parameters={
        "type": "object",
        "properties": {
            "search_term": {"type": "string", "description": "Words spoken in debate"},
            "house": {
                "type": "string",
                "description": "'Commons' or 'Lords'",
                "enum": ["Commons", "Lords"],
            },
            "start_date": {"type": "string", "description": "Earliest sitting date"},
            "end_date": {"type": "string", "description": "Latest sitting date"},
        },
        "required": ["search_term"],
    },
    upstream="hansard-api",
)


class HansardTools(BaseTools):
    """Tools backed by the Hansard API."""

    UPSTREAM = "hansard-api"
    BASE_URL = HANSARD_API_BASE
    TOOLS = (ToolBinding(SEARCH_HANSARD_DEFINITION, "search_hansard"),)

    async def search_hansard(
        self,
        search_term: str,
        house: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> ToolResponse:
        url = self._url(
            "/search.json",
            {
                "queryParameters.searchTerm": search_term,
                "queryParameters.house": house,
                "queryParameters.startDate": start_date,
                "queryParameters.endDate": end_date,
            },
        )
        return await self._get(url)
