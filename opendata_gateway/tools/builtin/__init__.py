"""
Built-in Tools Package - UK Parliament API Tools

This package provides one tool class per upstream Parliament API and the
composition root that wires them to their fetchers.

build_toolset() creates one ResilientFetcher (own connection pool and circuit
breaker) per upstream, all sharing one ResponseCache, and registers every tool
with a fresh ToolRegistry.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from opendata_gateway.clients.fetcher import ResilientFetcher, create_fetcher
from opendata_gateway.core.config import Settings, get_settings
from opendata_gateway.resilience.retry import SleepFunc
from opendata_gateway.services.cache import ResponseCache
from opendata_gateway.tools.base import BaseTools
from opendata_gateway.tools.builtin.bills import BillsTools
from opendata_gateway.tools.builtin.commons_votes import CommonsVotesTools
from opendata_gateway.tools.builtin.committees import CommitteesTools
from opendata_gateway.tools.builtin.erskine_may import ErskineMayTools
from opendata_gateway.tools.builtin.hansard import HansardTools
from opendata_gateway.tools.builtin.lords_votes import LordsVotesTools
from opendata_gateway.tools.builtin.members import MembersTools
from opendata_gateway.tools.builtin.now import NowTools
from opendata_gateway.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

TOOL_CLASSES: tuple[type[BaseTools], ...] = (
    MembersTools,
    BillsTools,
    NowTools,
    ErskineMayTools,
    CommonsVotesTools,
    LordsVotesTools,
    CommitteesTools,
    HansardTools,
)


@dataclass
class Toolset:
    """Everything build_toolset() wires together, owned by the application."""

    registry: ToolRegistry
    cache: ResponseCache
    fetchers: dict[str, ResilientFetcher] = field(default_factory=dict)
    tools: dict[str, BaseTools] = field(default_factory=dict)

    async def aclose(self) -> None:
        """Close every fetcher's HTTP client."""
        for fetcher in self.fetchers.values():
            await fetcher.aclose()


def build_toolset(
    settings: Optional[Settings] = None,
    cache: Optional[ResponseCache] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: Optional[SleepFunc] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Toolset:
    """
    Build the fetchers, tool instances and registry.

    Args:
        settings: Application settings (default: get_settings())
        cache: Shared response cache (created from settings if omitted)
        transport: Transport for every fetcher's client (tests pass MockTransport)
        sleep: Backoff sleep override
        clock: Monotonic clock override for breakers and the cache

    Returns:
        Toolset with one fetcher per upstream
    """
    settings = settings or get_settings()
    if cache is None:
        cache = ResponseCache(default_ttl_seconds=settings.cache_ttl_seconds, clock=clock)

    toolset = Toolset(registry=ToolRegistry(), cache=cache)

    for tool_class in TOOL_CLASSES:
        fetcher = create_fetcher(
            tool_class.UPSTREAM,
            cache=cache,
            settings=settings,
            transport=transport,
            sleep=sleep,
            clock=clock,
        )
        tools = tool_class(fetcher)
        tools.register(toolset.registry)
        toolset.fetchers[tool_class.UPSTREAM] = fetcher
        toolset.tools[tool_class.UPSTREAM] = tools

    logger.info(
        f"Built {len(toolset.registry)} tools across {len(toolset.fetchers)} upstreams"
    )
    return toolset


__all__ = [
    "BillsTools",
    "CommitteesTools",
    "CommonsVotesTools",
    "ErskineMayTools",
    "HansardTools",
    "LordsVotesTools",
    "MembersTools",
    "NowTools",
    "TOOL_CLASSES",
    "Toolset",
    "build_toolset",
]
