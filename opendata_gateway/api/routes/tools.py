"""
Tools Router - Tool Listing and Execution

This module exposes the Parliament API tool catalogue over HTTP.

Endpoints:
- GET /v1/tools: list every registered tool definition
- POST /v1/tools/execute: run one tool

An unknown tool is a 404 and invalid arguments are a 422. A tool whose
upstream call failed is still a 200 with success=false, the upstream status
code and the failure message.

Anti-Patterns Avoided:
- No bare except clauses
- Optional types with explicit None
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from opendata_gateway.api.deps import get_tool_executor
from opendata_gateway.core.exceptions import ToolValidationError
from opendata_gateway.models.tools import (
    ToolExecuteRequest,
    ToolExecuteResponse,
    ToolListResponse,
)
from opendata_gateway.tools.executor import ToolExecutor
from opendata_gateway.tools.registry import ToolNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/tools", tags=["Tools"])


@router.get("", response_model=ToolListResponse)
async def list_tools(
    executor: ToolExecutor = Depends(get_tool_executor),
) -> ToolListResponse:
    """
    List available tools.

    Returns:
        Every tool definition (name, description, JSON Schema, upstream)
    """
    definitions = executor.registry.list()
    return ToolListResponse(
        tools=[definition.model_dump() for definition in definitions],
        count=len(definitions),
    )


@router.post("/execute", response_model=ToolExecuteResponse)
async def execute_tool(
    request: ToolExecuteRequest,
    executor: ToolExecutor = Depends(get_tool_executor),
) -> ToolExecuteResponse:
    """
    Execute a tool with the provided arguments.

    Raises:
        HTTPException 404: If tool not found
        HTTPException 422: If arguments are invalid
    """
    logger.info(f"Executing tool: {request.name}")

    try:
        result = await executor.execute(request)
    except ToolNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tool '{e.tool_name}' not found",
        ) from e
    except ToolValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        ) from e

    if not result.success:
        logger.warning(
            f"Tool {request.name} failed: {result.error} (status={result.status_code})"
        )
    return result
