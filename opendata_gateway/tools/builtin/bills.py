"""
Bills Tools - bills-api.parliament.uk

Tools for searching Bills before Parliament, following recent activity and
reading bill reference data.
"""

from typing import Optional

from opendata_gateway.models.domain import ToolDefinition
from opendata_gateway.models.responses import ToolResponse
from opendata_gateway.tools.base import BaseTools, ToolBinding, escape_path_segment

BILLS_API_BASE = "https://bills-api.parliament.uk/api/v1"

DEFAULT_RECENT_BILLS = 10


# =============================================================================
# Tool Definitions
# =============================================================================

SEARCH_BILLS_DEFINITION = ToolDefinition(
    name="search_bills",
    description="Search Bills by title or keyword. Optionally restrict to a "
    "parliamentary session.",
    parameters={
        "type": "object",
        "properties": {
            "search_term": {
                "type": "string",
                "description": "Keyword in the bill title (e.g. 'Climate')",
            },
            "session_id": {
                "type": "integer",
                "description": "Parliamentary session ID",
            },
            "skip": {"type": "integer", "description": "Number of results to skip"},
            "take": {"type": "integer", "description": "Number of results to return"},
        },
        "required": ["search_term"],
    },
    upstream="bills-api",
)

GET_RECENTLY_UPDATED_BILLS_DEFINITION = ToolDefinition(
    name="get_recently_updated_bills",
    description="List the Bills most recently updated, newest first.",
    parameters={
        "type": "object",
        "properties": {
            "take": {
                "type": "integer",
                "description": f"Number of bills to return (default {DEFAULT_RECENT_BILLS})",
            },
        },
    },
    upstream="bills-api",
)

GET_BILL_DEFINITION = ToolDefinition(
    name="get_bill",
    description="Get full details of a Bill by its bill ID.",
    parameters={
        "type": "object",
        "properties": {
            "bill_id": {"type": "integer", "description": "Bill ID"},
        },
        "required": ["bill_id"],
    },
    upstream="bills-api",
)

GET_BILL_TYPES_DEFINITION = ToolDefinition(
    name="get_bill_types",
    description="List the categories of Bill (public, private, hybrid...).",
    parameters={"type": "object", "properties": {}},
    upstream="bills-api",
)


# =============================================================================
# BillsTools
# =============================================================================


class BillsTools(BaseTools):
    """Tools backed by the Bills API."""

    UPSTREAM = "bills-api"
    BASE_URL = BILLS_API_BASE
    TOOLS = (
        ToolBinding(SEARCH_BILLS_DEFINITION, "search_bills"),
        ToolBinding(GET_RECENTLY_UPDATED_BILLS_DEFINITION, "get_recently_updated_bills"),
        ToolBinding(GET_BILL_DEFINITION, "get_bill"),
        ToolBinding(GET_BILL_TYPES_DEFINITION, "get_bill_types"),
    )

    async def search_bills(
        self,
        search_term: str,
        session_id: Optional[int] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> ToolResponse:
        url = self._url(
            "/Bills",
            {
                "SearchTerm": search_term,
                "SessionId": session_id,
                "Skip": skip,
                "Take": take,
            },
        )
        return await self._get(url)

    async def get_recently_updated_bills(self, take: int = DEFAULT_RECENT_BILLS) -> ToolResponse:
        url = self._url("/Bills", {"SortOrder": "DateUpdatedDescending", "Take": take})
        return await self._get(url)

    async def get_bill(self, bill_id: int) -> ToolResponse:
        return await self._get(self._url(f"/Bills/{escape_path_segment(bill_id)}"))

    async def get_bill_types(self) -> ToolResponse:
        return await self._get(self._url("/BillTypes"))
