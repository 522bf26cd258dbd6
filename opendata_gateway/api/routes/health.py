"""
Health Router - Health Endpoints

Endpoints:
- GET /health: liveness
- GET /health/ready: readiness with the circuit breaker state of every upstream

The service reports "degraded" (still HTTP 200) while any upstream circuit is
open, since the remaining upstreams keep serving.

Anti-Patterns Avoided:
- No bare except clauses
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from opendata_gateway import __version__
from opendata_gateway.api.deps import get_toolset
from opendata_gateway.resilience.circuit_breaker_state_machine import CircuitBreakerState
from opendata_gateway.tools.builtin import Toolset

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    upstreams: dict[str, str]
    cached_responses: int


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(toolset: Toolset = Depends(get_toolset)) -> ReadinessResponse:
    """
    Readiness check reporting each upstream's circuit state.

    Returns:
        "ready" when every circuit is closed or half-open, else "degraded"
    """
    upstreams: dict[str, str] = {}
    for name, fetcher in toolset.fetchers.items():
        state = await fetcher.circuit_breaker.get_state()
        upstreams[name] = state.value

    degraded = any(value == CircuitBreakerState.OPEN.value for value in upstreams.values())
    if degraded:
        logger.warning(f"Readiness degraded: {upstreams}")

    return ReadinessResponse(
        status="degraded" if degraded else "ready",
        upstreams=upstreams,
        cached_responses=len(toolset.cache),
    )
