"""
Context Resource Registry

Static JSON reference documents describing each Parliament API are served
beside the tools so a calling agent can read them before choosing a tool.

Every ``*.json`` file at the top level of the context directory becomes one
resource. Files are listed in case-insensitive name order; content is read on
request, not at load time.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from opendata_gateway.models.domain import ContextResource

logger = logging.getLogger(__name__)

MIME_TYPE = "application/json"


class ContextResourceNotFoundError(Exception):
    """Raised when a requested context resource does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Context resource not found: {name}")


def to_display_name(stem: str) -> str:
    """
    Title for a file stem: separators become spaces, words are title-cased.

    All-uppercase words are kept as written.

    Example:
        >>> to_display_name("erskine-may_API")
        'Erskine May API'
    """
    words = stem.replace("-", " ").replace("_", " ").split(" ")
    return " ".join(
        word if word.isupper() else word[:1].upper() + word[1:].lower()
        for word in words
    )


def create_resource(path: Path) -> ContextResource:
    """Describe one context file as a resource."""
    stem = path.stem
    return ContextResource(
        name=f"context:{stem}",
        uri=f"context/{stem}",
        title=to_display_name(stem),
        description=f"Official UK Parliament context for {stem} API.",
        mime_type=MIME_TYPE,
        path=path,
    )


class ContextResourceRegistry:
    """
    Registry of context resources loaded from a directory.

    Example:
        >>> registry = ContextResourceRegistry.load("context")
        >>> [r.name for r in registry.list()]
        ['context:bills', 'context:members']
    """

    def __init__(self, resources: Optional[list[ContextResource]] = None) -> None:
        self._resources: dict[str, ContextResource] = {}
        for resource in resources or []:
            self._resources[resource.name] = resource

    @classmethod
    def load(cls, directory: Union[str, Path]) -> "ContextResourceRegistry":
        """
        Load every top-level ``*.json`` file of ``directory``.

        A missing directory, or one without JSON files, yields an empty registry.
        """
        path = Path(directory)
        if not path.is_dir():
            logger.info(f"Context directory not found: {path}")
            return cls()

        files = sorted(
            (p for p in path.glob("*.json") if p.is_file()),
            key=lambda p: p.name.casefold(),
        )
        registry = cls([create_resource(p) for p in files])
        logger.info(f"Loaded {len(registry)} context resources from {path}")
        return registry

    def __len__(self) -> int:
        return len(self._resources)

    def list(self) -> list[ContextResource]:
        """Resources in load order."""
        return list(self._resources.values())

    def get(self, name: str) -> ContextResource:
        """
        Look up a resource by ``context:{stem}`` name, bare stem or URI.

        Raises:
            ContextResourceNotFoundError: If no resource matches.
        """
        for candidate in (name, f"context:{name}"):
            if candidate in self._resources:
                return self._resources[candidate]
        for resource in self._resources.values():
            if resource.uri == name:
                return resource
        raise ContextResourceNotFoundError(name)

    def read(self, name: str) -> str:
        """Read a resource's JSON text."""
        return self.get(name).read_text()
