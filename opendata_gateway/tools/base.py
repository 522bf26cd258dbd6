"""
Base Tools - Shared Plumbing for Parliament API Tool Classes

Every upstream API gets one BaseTools subclass. The subclass declares its
base URL, its tool definitions and the coroutine method serving each one;
BaseTools supplies URL building, the fetch call and registration.

Pattern: Template method (subclasses declare, base class registers)
Pattern: Service Proxy (each tool is a thin GET against one upstream)

Tool methods return the fetcher's ToolResponse unchanged. Failures are values,
so a tool method never raises for upstream faults.
"""

import logging
from typing import Any, Awaitable, Callable, ClassVar, NamedTuple, Optional

from opendata_gateway.clients.fetcher import ResilientFetcher
from opendata_gateway.clients.url import build_url, escape_path_segment
from opendata_gateway.models.domain import RegisteredTool, ToolDefinition
from opendata_gateway.models.responses import CacheOptions, ToolResponse
from opendata_gateway.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

__all__ = ["BaseTools", "ToolBinding", "build_url", "escape_path_segment"]


class ToolBinding(NamedTuple):
    """A tool definition and the name of the method that serves it."""

    definition: ToolDefinition
    method_name: str


def _arguments_handler(
    method: Callable[..., Awaitable[ToolResponse]],
) -> Callable[[dict[str, Any]], Awaitable[ToolResponse]]:
    """Adapt a keyword-argument tool method to the executor's dict calling style."""

    async def handler(arguments: dict[str, Any]) -> ToolResponse:
        return await method(**arguments)

    handler.__name__ = getattr(method, "__name__", "handler")
    return handler


class BaseTools:
    """
    Base class for the tools of one upstream Parliament API.

    Subclasses set:
        UPSTREAM: upstream name (matches the fetcher's name)
        BASE_URL: API root without trailing slash
        TOOLS: ToolBinding entries for every public tool method
        DEFAULT_CACHE_OPTIONS: per-class cache behaviour (None = default)

    Attributes:
        fetcher: ResilientFetcher shared by every tool of this upstream
    """

    UPSTREAM: ClassVar[str] = ""
    BASE_URL: ClassVar[str] = ""
    TOOLS: ClassVar[tuple[ToolBinding, ...]] = ()
    DEFAULT_CACHE_OPTIONS: ClassVar[Optional[CacheOptions]] = None

    def __init__(self, fetcher: ResilientFetcher) -> None:
        self._fetcher = fetcher

    @property
    def fetcher(self) -> ResilientFetcher:
        return self._fetcher

    def _url(self, path: str, params: Optional[dict[str, Optional[Any]]] = None) -> str:
        """Build an absolute URL under BASE_URL."""
        return build_url(f"{self.BASE_URL}{path}", params)

    async def _get(
        self,
        url: str,
        cache_options: Optional[CacheOptions] = None,
    ) -> ToolResponse:
        """Fetch ``url`` through the resilient fetcher."""
        if cache_options is None:
            cache_options = self.DEFAULT_CACHE_OPTIONS
        return await self._fetcher.fetch(url, cache_options)

    def definitions(self) -> list[ToolDefinition]:
        """Tool definitions declared by this class."""
        return [binding.definition for binding in self.TOOLS]

    def register(self, registry: ToolRegistry) -> None:
        """
        Register every declared tool method with the registry.

        Args:
            registry: Registry to add the tools to
        """
        for binding in self.TOOLS:
            method = getattr(self, binding.method_name)
            registry.register(
                binding.definition.name,
                RegisteredTool(
                    definition=binding.definition,
                    handler=_arguments_handler(method),
                ),
            )
        logger.debug("Registered %d tools for %s", len(self.TOOLS), self.UPSTREAM)
