"""
Lords Votes Tools - lordsvotes-api.parliament.uk

Tools for House of Lords divisions (recorded votes).
"""

from typing import Optional

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding, escape_path_segment

LORDS_VOTES_API_BASE = "https://lordsvotes-api.parliament.uk/data"

SEARCH_LORDS_DIVISIONS_DEFINITION = ToolDefinition(
    name="search_lords_divisions",
    description="Search House of Lords divisions by title keyword.",
    parameters={
        "type": "object",
        "properties": {
            "search_term": {"type": "string", "description": "Keyword in the division title"},
            "skip": {"type": "integer", "description": "Number of results to skip"},
            "take": {"type": "integer", "description": "Number of results to return"},
        },
        "required": ["search_term"],
    },
    upstream="lordsvotes-api",
)

GET_LORDS_DIVISION_DEFINITION = ToolDefinition(
    name="get_lords_division",
    description="Get a House of Lords division, including how each Member voted.",
    parameters={
        "type": "object",
        "properties": {
            "division_id": {"type": "integer", "description": "Lords division ID"},
        },
        "required": ["division_id"],
    },
    upstream="lordsvotes-api",
)


class LordsVotesTools(BaseTools):
    """Tools backed by the Lords Votes API."""

    UPSTREAM = "lordsvotes-api"
    BASE_URL = LORDS_VOTES_API_BASE
    TOOLS = (
        ToolBinding(SEARCH_LORDS_DIVISIONS_DEFINITION, "search_lords_divisions"),
        ToolBinding(GET_LORDS_DIVISION_DEFINITION, "get_lords_division"),
    )

    async def search_lords_divisions(
        self,
        search_term: str,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ToolResponse:
        url = self._url(
            "/Divisions/search",
            {"SearchTerm": search_term, "skip": skip, "take": take},
        )
        return await self._get(url)

    async def get_lords_division(self, division_id: int) -> ToolResponse:
        return await self._get(self._url(f"/Divisions/{escape_path_segment(division_id)}"))
