"""
Committees Tools - committees-api.parliament.uk

Tools for select, joint and general committees of both Houses.
"""

from typing import Optional

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding, escape_path_segment

COMMITTEES_API_BASE = "https://committees-api.parliament.uk/api"

SEARCH_COMMITTEES_DEFINITION = ToolDefinition(
    name="search_committees",
    description="Search parliamentary committees by name.",
    parameters={
        "type": "object",
        "properties": {
            "search_term": {"type": "string", "description": "Keyword in the committee name"},
            "skip": {"type": "integer", "description": "Number of results to skip"},
            "take": {"type": "integer", "description": "Number of results to return"},
        },
        "required": ["search_term"],
    },
    upstream="committees-api",
)

GET_COMMITTEE_DEFINITION = ToolDefinition(
    name="get_committee",
    description="Get details of a committee, including its members and remit.",
    parameters={
        "type": "object",
        "properties": {
            "committee_id": {"type": "integer", "description": "Committee ID"},
        },
        "required": ["committee_id"],
    },
    upstream="committees-api",
)


class CommitteesTools(BaseTools):
    """Tools backed by the Committees API."""

    UPSTREAM = "committees-api"
    BASE_URL = COMMITTEES_API_BASE
    TOOLS = (
        ToolBinding(SEARCH_COMMITTEES_DEFINITION, "search_committees"),
        ToolBinding(GET_COMMITTEE_DEFINITION, "get_committee"),
    )

    async def search_committees(
        self,
        search_term: str,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ToolResponse:
        url = self._url(
            "/Committees",
            {"SearchTerm": search_term, "Skip": skip, "Take": take},
        )
        return await self._get(url)

    async def get_committee(self, committee_id: int) -> ToolResponse:
        return await self._get(self._url(f"/Committees/{escape_path_segment(committee_id)}"))
