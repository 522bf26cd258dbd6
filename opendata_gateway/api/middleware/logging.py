"""
Request Logging Middleware

This module implements request/response logging for the API and binds a
correlation ID to every request so upstream fetch events can be tied back to
the tool call that caused them.

The correlation ID is taken from the X-Request-ID header when present,
otherwise generated, and echoed back on the response.
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from opendata_gateway.observability.logging import correlation_id_context, get_logger

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    Logs method, path, status code and duration for every request except
    the excluded paths (metrics scrapes by default).
    """

    def __init__(self, app, exclude_paths: tuple[str, ...] = ("/metrics",)) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        with correlation_id_context(correlation_id):
            start_time = time.perf_counter()
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            if not request.url.path.startswith(self.exclude_paths):
                logger.info(
                    "request_completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                )

        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
