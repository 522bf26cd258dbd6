"""
Circuit Breaker State Machine

This module implements the circuit breaker that guards one upstream
Parliament API. Every tool of that upstream shares the same instance through
its fetcher.

State Machine:
    CLOSED: Normal operation, all requests pass through
    OPEN: Circuit tripped, requests fail fast with CircuitBreakerError
    HALF_OPEN: Recovery testing, a single trial request passes through

What counts as a failure:
    TransientUpstreamError (retries exhausted on timeouts, network faults or
    retryable statuses). A PermanentUpstreamError means the upstream answered,
    so it resets the counter like a success. Any other exception leaves the
    counter untouched.

State is protected by an asyncio.Lock held only around transitions, never
across the wrapped network call.
"""

import asyncio
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

from opendata_gateway.core.config import (
    DEFAULT_CIRCUIT_BREAKER_FAILURE_THRESHOLD,
    DEFAULT_CIRCUIT_BREAKER_RECOVERY_TIMEOUT_SECONDS,
    Settings,
)
from opendata_gateway.core.exceptions import (
    ErrorCode,
    PermanentUpstreamError,
    TransientUpstreamError,
)
from opendata_gateway.observability.logging import get_logger
from opendata_gateway.resilience.metrics import record_circuit_state_transition

T = TypeVar("T")


# =============================================================================
# State Enum
# =============================================================================


class CircuitBreakerState(Enum):
    """
    State of a circuit breaker.

    States:
        CLOSED: Normal operation, all requests pass through
        OPEN: Circuit is tripped, requests fail immediately
        HALF_OPEN: Recovery testing, one trial request passes through
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


# =============================================================================
# Exception Class
# =============================================================================


class CircuitBreakerError(Exception):
    """
    Exception raised when a circuit breaker rejects a call.

    This indicates that the upstream is considered unhealthy and requests
    should fail fast rather than waiting for timeout.

    Attributes:
        circuit_name: Name of the circuit breaker that is open
        message: Additional context message
        error_code: Always ErrorCode.CIRCUIT_OPEN
    """

    def __init__(self, circuit_name: str, message: str = "Circuit is open") -> None:
        self.circuit_name = circuit_name
        self.message = message
        self.error_code = ErrorCode.CIRCUIT_OPEN
        super().__init__(f"CircuitBreakerError[{circuit_name}]: {message}")


# =============================================================================
# Circuit Breaker State Machine
# =============================================================================


class CircuitBreakerStateMachine:
    """
    Circuit breaker state machine for one upstream API.

    Example:
        >>> breaker = CircuitBreakerStateMachine(name="bills-api")
        >>> response = await breaker.execute(policy.execute, attempt, url)

    Attributes:
        name: Identifier for this circuit breaker (the upstream name)
        failure_threshold: Consecutive failures before opening
        reset_timeout_seconds: Seconds OPEN lasts before a trial call is allowed
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = DEFAULT_CIRCUIT_BREAKER_FAILURE_THRESHOLD,
        reset_timeout_seconds: float = DEFAULT_CIRCUIT_BREAKER_RECOVERY_TIMEOUT_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Initialize CircuitBreakerStateMachine.

        Args:
            name: Name for identification and metrics
            failure_threshold: Number of consecutive failures before opening
            reset_timeout_seconds: Seconds to wait before attempting recovery
            clock: Monotonic clock returning seconds (defaults to time.monotonic)
        """
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")

        self._name = name
        self._failure_threshold = failure_threshold
        self._reset_timeout_seconds = reset_timeout_seconds
        self._clock = clock or time.monotonic

        self._state = CircuitBreakerState.CLOSED
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._trial_in_flight = False

        self._lock = asyncio.Lock()
        self._logger = get_logger(__name__, circuit=name)

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def from_settings(
        cls,
        name: str,
        settings: Settings,
        clock: Optional[Callable[[], float]] = None,
    ) -> "CircuitBreakerStateMachine":
        """
        Create a CircuitBreakerStateMachine with configured threshold and cooldown.

        Args:
            name: Name for identification
            settings: Application settings
            clock: Optional clock override

        Returns:
            Configured CircuitBreakerStateMachine instance
        """
        return cls(
            name=name,
            failure_threshold=settings.circuit_breaker_failure_threshold,
            reset_timeout_seconds=settings.circuit_breaker_recovery_timeout_seconds,
            clock=clock,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def name(self) -> str:
        """Name of this circuit breaker."""
        return self._name

    @property
    def failure_threshold(self) -> int:
        """Number of failures required to open the circuit."""
        return self._failure_threshold

    @property
    def reset_timeout_seconds(self) -> float:
        """Seconds to wait before attempting recovery."""
        return self._reset_timeout_seconds

    @property
    def state(self) -> CircuitBreakerState:
        """
        Current state of the circuit breaker.

        Note: This returns cached state. For state checks that apply the
        OPEN -> HALF_OPEN cooldown, use the get_state() async method.
        """
        return self._state

    @property
    def failure_count(self) -> int:
        """Current consecutive failure count."""
        return self._failure_count

    # =========================================================================
    # State Management (lock must be held)
    # =========================================================================

    def _transition(self, new_state: CircuitBreakerState) -> None:
        old_state = self._state
        if old_state == new_state:
            return
        self._state = new_state
        record_circuit_state_transition(self._name, new_state.value, old_state.value)
        log = self._logger.warning if new_state == CircuitBreakerState.OPEN else self._logger.info
        log(
            "circuit_state_transition",
            from_state=old_state.value,
            to_state=new_state.value,
            failure_count=self._failure_count,
        )

    def _trip(self) -> None:
        self._opened_at = self._clock()
        self._transition(CircuitBreakerState.OPEN)

    def _cooldown_elapsed(self) -> bool:
        if self._opened_at is None:
            return False
        return self._clock() - self._opened_at >= self._reset_timeout_seconds

    def _refresh(self) -> None:
        if self._state == CircuitBreakerState.OPEN and self._cooldown_elapsed():
            self._trial_in_flight = False
            self._transition(CircuitBreakerState.HALF_OPEN)

    # =========================================================================
    # State Management (Thread-Safe)
    # =========================================================================

    async def get_state(self) -> CircuitBreakerState:
        """
        Get current state, applying the OPEN -> HALF_OPEN cooldown transition.

        Returns:
            Current CircuitBreakerState after any transitions
        """
        async with self._lock:
            self._refresh()
            return self._state

    async def _admit(self) -> None:
        """Admit a call or raise CircuitBreakerError."""
        async with self._lock:
            self._refresh()

            if self._state == CircuitBreakerState.OPEN:
                raise CircuitBreakerError(
                    self._name,
                    f"Circuit is open - failing fast (threshold={self._failure_threshold})",
                )

            if self._state == CircuitBreakerState.HALF_OPEN:
                if self._trial_in_flight:
                    raise CircuitBreakerError(
                        self._name, "Circuit is half-open - trial call already in flight"
                    )
                self._trial_in_flight = True

    async def record_failure(self) -> None:
        """
        Record a failure.

        Opens the circuit when the threshold is reached in CLOSED, or
        immediately when the HALF_OPEN trial call fails.
        """
        async with self._lock:
            self._trial_in_flight = False
            self._failure_count += 1

            if self._state == CircuitBreakerState.HALF_OPEN:
                self._trip()
            elif (
                self._state == CircuitBreakerState.CLOSED
                and self._failure_count >= self._failure_threshold
            ):
                self._trip()

    async def record_success(self) -> None:
        """
        Record a success.

        Resets the failure count and closes the circuit if the HALF_OPEN trial call
        succeeded.
        """
        async with self._lock:
            self._trial_in_flight = False
            self._failure_count = 0

            if self._state == CircuitBreakerState.HALF_OPEN:
                self._opened_at = None
                self._transition(CircuitBreakerState.CLOSED)

    async def _release_trial(self) -> None:
        async with self._lock:
            self._trial_in_flight = False

    async def reset(self) -> None:
        """Force the circuit back to CLOSED with a zero failure count."""
        async with self._lock:
            self._failure_count = 0
            self._opened_at = None
            self._trial_in_flight = False
            self._transition(CircuitBreakerState.CLOSED)

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute an async function through the circuit breaker.

        Args:
            func: Async function to call
            *args: Positional arguments for the function
            **kwargs: Keyword arguments for the function

        Returns:
            The result of the function call

        Raises:
            CircuitBreakerError: If the circuit rejects the call
            Exception: Any exception raised by the wrapped function
        """
        await self._admit()

        try:
            result = await func(*args, **kwargs)
        except TransientUpstreamError:
            await self.record_failure()
            raise
        except PermanentUpstreamError:
            await self.record_success()
            raise
        except BaseException:
            await self._release_trial()
            raise

        await self.record_success()
        return result
