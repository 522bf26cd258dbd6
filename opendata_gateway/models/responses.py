"""
Response Models

This module contains the value objects exchanged between the resilient fetcher
and the tools: ToolResponse (the normalized outcome of one fetch) and
CacheOptions (per-call cache behaviour).

Pattern: Domain models as immutable value objects
Pattern: Named constructors (ok / failure) instead of ad-hoc field combinations

Anti-Patterns Avoided:
- Optional fields use Optional[T] with explicit None default
- Success and failure fields can never be mixed (rejected at construction)
"""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, model_validator
from pydantic.errors import PydanticUndefinedAnnotation, PydanticUserError

T = TypeVar("T")


# =============================================================================
# Field Name Matching
# =============================================================================


def _match_field_names(value: Any, schema: dict[str, Any], defs: dict[str, Any]) -> Any:
    """
    Rename object keys to the property names a JSON Schema declares.

    Keys are matched case-insensitively; an exact match wins over a folded one.
    Keys with no matching property are kept as they are.
    """
    ref = schema.get("$ref")
    if ref:
        schema = defs.get(ref.rsplit("/", 1)[-1], {})

    for key in ("allOf", "anyOf", "oneOf"):
        for option in schema.get(key, []):
            value = _match_field_names(value, option, defs)

    if isinstance(value, dict):
        properties = schema.get("properties")
        if properties:
            folded = {name.casefold(): name for name in properties}
            matched: dict[Any, Any] = {}
            for key, item in value.items():
                name = key
                if isinstance(key, str) and key not in properties:
                    name = folded.get(key.casefold(), key)
                    if name in matched:
                        continue
                matched[name] = _match_field_names(item, properties.get(name, {}), defs)
            return matched

        extra = schema.get("additionalProperties")
        if isinstance(extra, dict):
            return {key: _match_field_names(item, extra, defs) for key, item in value.items()}

    if isinstance(value, list):
        items = schema.get("items")
        if isinstance(items, dict):
            return [_match_field_names(item, items, defs) for item in value]

    return value


# =============================================================================
# ToolResponse
# =============================================================================


class ToolResponse(BaseModel):
    """
    Normalized outcome of a single upstream fetch.

    Exactly one of two shapes:
    - success: ``error`` and ``status_code`` are None; ``raw_content`` holds the
      body verbatim and ``parsed_json`` the decoded document when the body was
      JSON.
    - failure: ``error`` holds a human-readable message and ``status_code`` the
      last HTTP status (if any); ``raw_content`` and ``parsed_json`` are None.

    Attributes:
        url: Exact request URL (cache key and diagnostic identity)
        raw_content: Response body text (success only)
        parsed_json: Decoded JSON payload (success only, None for non-JSON)
        error: Failure message (failure only)
        status_code: Last HTTP status code (failure only)

    Example:
        >>> response = ToolResponse.ok("https://x/api", '{"value": 42}', {"value": 42})
        >>> response.success
        True
    """

    url: str = Field(..., description="Exact request URL")
    raw_content: Optional[str] = Field(default=None, description="Raw response body")
    parsed_json: Optional[Any] = Field(default=None, description="Decoded JSON payload")
    error: Optional[str] = Field(default=None, description="Error message if failed")
    status_code: Optional[int] = Field(
        default=None, description="HTTP status code of the failed response"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_outcome_shape(self) -> "ToolResponse":
        if self.error is None:
            if self.status_code is not None:
                raise ValueError("a successful response cannot carry a status code")
        elif self.raw_content is not None or self.parsed_json is not None:
            raise ValueError("a failed response cannot carry content")
        return self

    # =========================================================================
    # Named Constructors
    # =========================================================================

    @classmethod
    def ok(
        cls,
        url: str,
        raw_content: Optional[str],
        parsed_json: Optional[Any] = None,
    ) -> "ToolResponse":
        """Build a success response."""
        return cls(url=url, raw_content=raw_content, parsed_json=parsed_json)

    @classmethod
    def failure(
        cls,
        url: str,
        error: str,
        status_code: Optional[int] = None,
    ) -> "ToolResponse":
        """Build a failure response."""
        return cls(url=url, error=error, status_code=status_code)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def success(self) -> bool:
        """True when the fetch produced content rather than an error."""
        return self.error is None

    @property
    def has_json(self) -> bool:
        """True when the body was decoded as a JSON document."""
        return self.parsed_json is not None

    def get_data(self, shape: type[T]) -> Optional[T]:
        """
        Materialize the JSON payload as ``shape``.

        ``shape`` may be a pydantic model, a dataclass, a TypedDict or any type
        pydantic's TypeAdapter accepts. Field names are matched case-insensitively
        when the payload does not validate as it stands.

        Args:
            shape: Target type

        Returns:
            The validated value, or None when no JSON payload exists or the
            payload does not fit the shape.
        """
        if self.parsed_json is None:
            return None
        try:
            adapter = TypeAdapter(shape)
            try:
                return adapter.validate_python(self.parsed_json)
            except ValidationError:
                schema = adapter.json_schema()
                payload = _match_field_names(
                    self.parsed_json, schema, schema.get("$defs", {})
                )
                return adapter.validate_python(payload)
        except (ValidationError, PydanticUserError, PydanticUndefinedAnnotation):
            return None


# =============================================================================
# CacheOptions
# =============================================================================


class CacheOptions(BaseModel):
    """
    Per-call cache behaviour for a fetch.

    Attributes:
        enabled: Whether the response may be served from / stored in the cache
        ttl_seconds: Entry lifetime; None means the configured default (15 min)
    """

    enabled: bool = Field(default=True, description="Use the response cache")
    ttl_seconds: Optional[float] = Field(
        default=None, gt=0.0, description="Cache entry lifetime in seconds"
    )

    model_config = {"frozen": True}

    @classmethod
    def default(cls) -> "CacheOptions":
        """Caching enabled with the default TTL."""
        return cls()

    @classmethod
    def disabled(cls) -> "CacheOptions":
        """Always go to the network, never store."""
        return cls(enabled=False)

    @classmethod
    def from_ttl(cls, seconds: float) -> "CacheOptions":
        """Caching enabled with an explicit TTL."""
        return cls(ttl_seconds=seconds)
