"""
Resilience patterns for OpenData Gateway.

This module provides the resilience patterns guarding each upstream API:
- CircuitBreakerStateMachine: fail fast while an upstream is unhealthy
- RetryPolicy: bounded retries with exponential backoff
- Prometheus metrics for state transitions and retries
"""

from opendata_gateway.resilience.circuit_breaker_state_machine import (
    CircuitBreakerError,
    CircuitBreakerState,
    CircuitBreakerStateMachine,
)
from opendata_gateway.resilience.metrics import record_circuit_state_transition, record_retry
from opendata_gateway.resilience.retry import (
    TRANSIENT_STATUS_CODES,
    RetryPolicy,
    is_transient_status,
)

__all__ = [
    # Circuit Breaker
    "CircuitBreakerStateMachine",
    "CircuitBreakerState",
    "CircuitBreakerError",
    # Retry
    "RetryPolicy",
    "TRANSIENT_STATUS_CODES",
    "is_transient_status",
    # Metrics
    "record_circuit_state_transition",
    "record_retry",
]
