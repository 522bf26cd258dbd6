"""Middleware Package - request logging and correlation IDs."""

from opendata_gateway.api.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
