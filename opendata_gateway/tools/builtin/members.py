"""
Members Tools - members-api.parliament.uk

Tools for looking up Members of both Houses and reference data about the
government departments that answer parliamentary questions.
"""

from typing import Optional

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding, escape_path_segment

MEMBERS_API_BASE = "https://members-api.parliament.uk/api"


# =============================================================================
# Tool Definitions
# =============================================================================

SEARCH_MEMBERS_DEFINITION = ToolDefinition(
    name="search_members",
    description="Search for current and former Members of Parliament and the "
    "House of Lords by name. Returns member IDs, party and constituency.",
    parameters={
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "Full or partial member name (e.g. 'Starmer')",
            },
            "skip": {"type": "integer", "description": "Number of results to skip"},
            "take": {
                "type": "integer",
                "description": "Number of results to return (max 20)",
            },
        },
        "required": ["name"],
    },
    upstream="members-api",
)

GET_MEMBER_DEFINITION = ToolDefinition(
    name="get_member",
    description="Get full details of a Member by their member ID.",
    parameters={
        "type": "object",
        "properties": {
            "member_id": {"type": "integer", "description": "Parliament member ID"},
        },
        "required": ["member_id"],
    },
    upstream="members-api",
)

GET_ANSWERING_BODIES_DEFINITION = ToolDefinition(
    name="get_answering_bodies",
    description="List the government departments that answer written and oral "
    "parliamentary questions.",
    parameters={"type": "object", "properties": {}},
    upstream="members-api",
)


# =============================================================================
# MembersTools
# =============================================================================


class MembersTools(BaseTools):
    """Tools backed by the Members API."""

    UPSTREAM = "members-api"
    BASE_URL = MEMBERS_API_BASE
    TOOLS = (
        ToolBinding(SEARCH_MEMBERS_DEFINITION, "search_members"),
        ToolBinding(GET_MEMBER_DEFINITION, "get_member"),
        ToolBinding(GET_ANSWERING_BODIES_DEFINITION, "get_answering_bodies"),
    )

    async def search_members(
        self,
        name: str,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ToolResponse:
        url = self._url("/Members/Search", {"Name": name, "skip": skip, "take": take})
        return await self._get(url)

    async def get_member(self, member_id: int) -> ToolResponse:
        return await self._get(self._url(f"/Members/{escape_path_segment(member_id)}"))

    async def get_answering_bodies(self) -> ToolResponse:
        return await self._get(self._url("/Reference/AnsweringBodies"))
