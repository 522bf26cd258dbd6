"""
Context Router - Static Reference Documents

Endpoints:
- GET /v1/context: list context resources
- GET /v1/context/{name}: return one document's JSON text
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from opendata_gateway.api.deps import get_context_registry
from opendata_gateway.context.registry import (
    MIME_TYPE,
    ContextResourceNotFoundError,
    ContextResourceRegistry,
)
from opendata_gateway.models.tools import ContextResourceSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/context", tags=["Context"])


@router.get("", response_model=list[ContextResourceSummary])
async def list_context_resources(
    registry: ContextResourceRegistry = Depends(get_context_registry),
) -> list[ContextResourceSummary]:
    """List every loaded context resource."""
    return [
        ContextResourceSummary(
            name=resource.name,
            uri=resource.uri,
            title=resource.title,
            description=resource.description,
            mime_type=resource.mime_type,
        )
        for resource in registry.list()
    ]


@router.get("/{name}")
async def read_context_resource(
    name: str,
    registry: ContextResourceRegistry = Depends(get_context_registry),
) -> Response:
    """
    Return a context document.

    Raises:
        HTTPException 404: If no resource has that name
    """
    try:
        text = registry.read(name)
    except ContextResourceNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    return Response(content=text, media_type=MIME_TYPE)
