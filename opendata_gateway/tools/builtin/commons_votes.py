"""
Commons Votes Tools - commonsvotes-api.parliament.uk

Tools for House of Commons divisions (recorded votes).
"""

from typing import Optional

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding, escape_path_segment

COMMONS_VOTES_API_BASE = "https://commonsvotes-api.parliament.uk/data"

SEARCH_COMMONS_DIVISIONS_DEFINITION = ToolDefinition(
    name="search_commons_divisions",
    description="Search House of Commons divisions by title keyword.",
    parameters={
        "type": "object",
        "properties": {
            "search_term": {"type": "string", "description": "Keyword in the division title"},
            "skip": {"type": "integer", "description": "Number of results to skip"},
            "take": {"type": "integer", "description": "Number of results to return"},
        },
        "required": ["search_term"],
    },
    upstream="commonsvotes-api",
)

GET_COMMONS_DIVISION_DEFINITION = ToolDefinition(
    name="get_commons_division",
    description="Get a House of Commons division, including how each Member voted.",
    parameters={
        "type": "object",
        "properties": {
            "division_id": {"type": "integer", "description": "Commons division ID"},
        },
        "required": ["division_id"],
    },
    upstream="commonsvotes-api",
)


class CommonsVotesTools(BaseTools):
    """Tools backed by the Commons Votes API."""

    UPSTREAM = "commonsvotes-api"
    BASE_URL = COMMONS_VOTES_API_BASE
    TOOLS = (
        ToolBinding(SEARCH_COMMONS_DIVISIONS_DEFINITION, "search_commons_divisions"),
        ToolBinding(GET_COMMONS_DIVISION_DEFINITION, "get_commons_division"),
    )

    async def search_commons_divisions(
        self,
        search_term: str,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ToolResponse:
        url = self._url(
            "/divisions.json/search",
            {
                "queryParameters.searchTerm": search_term,
                "queryParameters.skip": skip,
                "queryParameters.take": take,
            },
        )
        return await self._get(url)

    async def get_commons_division(self, division_id: int) -> ToolResponse:
        return await self._get(self._url(f"/division/{escape_path_segment(division_id)}.json"))
