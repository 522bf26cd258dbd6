"""
Clients package for OpenData Gateway.

Contains the URL builder, the httpx client factory and the resilient fetcher.
"""

from opendata_gateway.clients.fetcher import ResilientFetcher, create_fetcher
from opendata_gateway.clients.http import create_http_client, create_http_client_from_settings
from opendata_gateway.clients.url import build_url, escape_path_segment

__all__ = [
    "ResilientFetcher",
    "build_url",
    "create_fetcher",
    "create_http_client",
    "create_http_client_from_settings",
    "escape_path_segment",
]
