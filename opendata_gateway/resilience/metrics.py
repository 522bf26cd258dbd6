"""
Resilience Metrics

This module provides Prometheus metrics for the circuit breaker and retry
policy guarding each upstream Parliament API.

Metrics Provided:
- Circuit breaker state transitions (counter)
- Circuit breaker current state (gauge)
- Retries scheduled by the retry policy (counter)
"""

from prometheus_client import Counter, Gauge

# =============================================================================
# Metric Names
# =============================================================================

METRIC_CIRCUIT_TRANSITIONS = "opendata_gateway_circuit_breaker_state_transitions_total"
METRIC_CIRCUIT_STATE = "opendata_gateway_circuit_breaker_state"
METRIC_RETRIES = "opendata_gateway_retries_total"


# =============================================================================
# Circuit Breaker State Metrics
# =============================================================================

CIRCUIT_STATE_TRANSITIONS = Counter(
    name=METRIC_CIRCUIT_TRANSITIONS,
    documentation="Total number of circuit breaker state transitions",
    labelnames=["circuit_name", "to_state", "from_state"],
)

CIRCUIT_STATE_GAUGE = Gauge(
    name=METRIC_CIRCUIT_STATE,
    documentation="Current state of circuit breaker (0=closed, 1=half_open, 2=open)",
    labelnames=["circuit_name"],
)

# State to numeric mapping for gauge
_STATE_TO_NUMERIC = {
    "closed": 0,
    "half_open": 1,
    "open": 2,
}


def record_circuit_state_transition(
    circuit_name: str,
    to_state: str,
    from_state: str,
) -> None:
    """
    Record a circuit breaker state transition.

    Args:
        circuit_name: Name of the circuit breaker (the upstream name)
        to_state: State transitioning to (closed, open, half_open)
        from_state: State transitioning from (closed, open, half_open)
    """
    CIRCUIT_STATE_TRANSITIONS.labels(
        circuit_name=circuit_name,
        to_state=to_state,
        from_state=from_state,
    ).inc()

    CIRCUIT_STATE_GAUGE.labels(circuit_name=circuit_name).set(
        _STATE_TO_NUMERIC.get(to_state, 0)
    )


# =============================================================================
# Retry Metrics
# =============================================================================

RETRIES = Counter(
    name=METRIC_RETRIES,
    documentation="Total number of retries scheduled after a transient failure",
    labelnames=["upstream", "reason"],
)


def record_retry(upstream: str, reason: str) -> None:
    """
    Record a scheduled retry.

    Args:
        upstream: Name of the upstream API
        reason: Transient condition that triggered the retry
            ("timeout", "network" or "status_<code>")
    """
    RETRIES.labels(upstream=upstream, reason=reason).inc()
