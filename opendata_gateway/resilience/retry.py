"""
Retry Policy

This module implements bounded retries with exponential backoff for a single
upstream HTTP GET.

Pattern: Retry with exponential backoff
Pattern: Timeout per attempt, independent of the backoff schedule

Classification:
    Transient (retried): httpx.TimeoutException, a per-attempt timeout,
        httpx.TransportError, and HTTP 408, 429, 500, 502, 503, 504.
    Permanent (raised at once): any other non-2xx status.

After the last attempt the typed error of that attempt is raised
(UpstreamStatusError, UpstreamTimeoutError or UpstreamConnectionError), all
subclasses of TransientUpstreamError so the circuit breaker can count them.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import httpx

from opendata_gateway.core.config import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_RETRY_BASE_DELAY_SECONDS,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    Settings,
)
from opendata_gateway.core.exceptions import (
    PermanentUpstreamError,
    TransientUpstreamError,
    UpstreamConnectionError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)
from opendata_gateway.observability.logging import get_logger
from opendata_gateway.observability.metrics import record_upstream_attempt
from opendata_gateway.resilience.metrics import record_retry


# =============================================================================
# Constants
# =============================================================================

TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

SleepFunc = Callable[[float], Awaitable[None]]
AttemptFunc = Callable[[], Awaitable[httpx.Response]]


def is_transient_status(status_code: int) -> bool:
    """Check whether an HTTP status is worth retrying."""
    return status_code in TRANSIENT_STATUS_CODES


# =============================================================================
# RetryPolicy
# =============================================================================


class RetryPolicy:
    """
    Bounded retry loop around one upstream request.

    Example:
        >>> policy = RetryPolicy(name="members-api")
        >>> response = await policy.execute(lambda: client.get(url))

    Attributes:
        name: Upstream name used in logs and metrics
        max_attempts: Total attempts including the first
        base_delay_seconds: Delay before the first retry; doubles each retry
        attempt_timeout_seconds: Hard limit for a single attempt
    """

    def __init__(
        self,
        name: str = "upstream",
        max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS,
        base_delay_seconds: float = DEFAULT_RETRY_BASE_DELAY_SECONDS,
        attempt_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._name = name
        self._max_attempts = max_attempts
        self._base_delay_seconds = base_delay_seconds
        self._attempt_timeout_seconds = attempt_timeout_seconds
        self._sleep = sleep or asyncio.sleep
        self._logger = get_logger(__name__, upstream=name)

    @classmethod
    def from_settings(
        cls,
        name: str,
        settings: Settings,
        sleep: Optional[SleepFunc] = None,
    ) -> "RetryPolicy":
        """Create a RetryPolicy using configured attempts, backoff and timeout."""
        return cls(
            name=name,
            max_attempts=settings.retry_max_attempts,
            base_delay_seconds=settings.retry_base_delay_seconds,
            attempt_timeout_seconds=settings.request_timeout_seconds,
            sleep=sleep,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def attempt_timeout_seconds(self) -> float:
        return self._attempt_timeout_seconds

    def delay_for_retry(self, retry_number: int) -> float:
        """
        Backoff before retry ``retry_number`` (1-indexed).

        Example:
            >>> RetryPolicy().delay_for_retry(2)
            0.4
        """
        return self._base_delay_seconds * (2 ** (retry_number - 1))

    async def execute(self, attempt: AttemptFunc, url: str = "") -> httpx.Response:
        """
        Run ``attempt`` until it yields a 2xx response or the budget is spent.

        Args:
            attempt: Zero-argument coroutine factory issuing one GET
            url: Request URL, for logging only

        Returns:
            The first 2xx response

        Raises:
            PermanentUpstreamError: Non-retryable status (not retried)
            TransientUpstreamError: Last transient failure after all attempts
        """
        attempt_number = 0

        while True:
            attempt_number += 1
            error: TransientUpstreamError
            reason: str
            try:
                response = await asyncio.wait_for(
                    attempt(), timeout=self._attempt_timeout_seconds
                )
            except (httpx.TimeoutException, asyncio.TimeoutError):
                error = UpstreamTimeoutError()
                reason = "timeout"
            except httpx.TransportError as exc:
                error = UpstreamConnectionError(str(exc) or type(exc).__name__)
                reason = "network"
            else:
                if response.is_success:
                    record_upstream_attempt(self._name, "success")
                    self._logger.debug(
                        "upstream_attempt",
                        url=url,
                        attempt=attempt_number,
                        outcome="success",
                        status_code=response.status_code,
                    )
                    return response

                if not is_transient_status(response.status_code):
                    record_upstream_attempt(self._name, "permanent")
                    self._logger.info(
                        "upstream_attempt",
                        url=url,
                        attempt=attempt_number,
                        outcome="permanent",
                        status_code=response.status_code,
                    )
                    raise PermanentUpstreamError(
                        response.status_code, response.reason_phrase
                    )

                error = UpstreamStatusError(
                    response.status_code, response.reason_phrase
                )
                reason = f"status_{response.status_code}"

            record_upstream_attempt(self._name, "transient")

            if attempt_number >= self._max_attempts:
                self._logger.error(
                    "upstream_retries_exhausted",
                    url=url,
                    attempts=attempt_number,
                    reason=reason,
                    error=error.message,
                )
                raise error

            delay = self.delay_for_retry(attempt_number)
            self._logger.warning(
                "upstream_retry",
                url=url,
                attempt=attempt_number,
                delay_seconds=delay,
                reason=reason,
            )
            record_retry(self._name, reason)
            await self._sleep(delay)
