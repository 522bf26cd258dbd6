"""
URL Builder Module

This module builds request URLs for the upstream Parliament APIs.

Pattern: Pure functions, no I/O

Query values are percent-encoded with every reserved character escaped, so only
the unreserved set ``A-Z a-z 0-9 - _ . ~`` survives verbatim. Parameters whose
value is None or the empty string are dropped, which lets tools pass every
optional argument through unconditionally.
"""

from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote


def _to_text(value: Any) -> str:
    """Render a parameter value as query text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def escape_data(value: Any) -> str:
    """
    Percent-encode a value with all reserved characters escaped.

    Example:
        >>> escape_data("a b&c")
        'a%20b%26c'
    """
    return quote(_to_text(value), safe="")


def escape_path_segment(value: Any) -> str:
    """
    Percent-encode a value for use as a single URL path segment.

    Slashes are escaped too, so a search term cannot change the route.
    """
    return escape_data(value)


def build_url(base: str, params: Optional[Mapping[str, Optional[Any]]] = None) -> str:
    """
    Append an encoded query string to a base URL.

    Args:
        base: Absolute URL without a query string
        params: Ordered name/value pairs. None and "" values are omitted.

    Returns:
        ``base`` unchanged when no parameter survives, otherwise
        ``base?name=value&...`` in mapping order.

    Example:
        >>> build_url("https://x/api", {"Name": "Keir Starmer", "skip": None})
        'https://x/api?Name=Keir%20Starmer'
    """
    if not params:
        return base

    parts = [
        f"{name}={escape_data(value)}"
        for name, value in params.items()
        if value is not None and value != ""
    ]
    if not parts:
        return base

    return f"{base}?{'&'.join(parts)}"
