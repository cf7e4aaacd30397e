"""Prometheus metrics for batchtrace.

Counts registry operations by outcome, audit events by kind, and
verification lookups by result.
"""

from prometheus_client import Counter, Gauge, Histogram

# Operation metrics
OPERATION_COUNT = Counter(
    "batchtrace_operations_total",
    "Total number of registry operations processed",
    labelnames=["operation", "outcome"],
)

OPERATION_LATENCY = Histogram(
    "batchtrace_operation_latency_seconds",
    "Registry operation latency in seconds",
    labelnames=["operation"],
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

# Audit metrics
AUDIT_EVENTS = Counter(
    "batchtrace_audit_events_total",
    "Total audit events appended",
    labelnames=["kind"],
)

# Verification metrics
VERIFICATIONS = Counter(
    "batchtrace_verifications_total",
    "Total product verification lookups",
    labelnames=["valid"],
)

# Access control metrics
MANUFACTURERS = Gauge(
    "batchtrace_manufacturers",
    "Number of identities holding the manufacturer capability",
)

_enabled = True


def setup_metrics(enabled: bool = True) -> None:
    """Initialize metrics configuration.

    prometheus_client registers collectors when they are defined; this
    only toggles whether registry components record into them.
    """
    global _enabled
    _enabled = enabled


def metrics_enabled() -> bool:
    """Return whether components should record metrics."""
    return _enabled


def record_operation(operation: str, outcome: str, elapsed: float | None = None) -> None:
    """Record one registry operation and, optionally, its latency."""
    if not _enabled:
        return
    OPERATION_COUNT.labels(operation=operation, outcome=outcome).inc()
    if elapsed is not None:
        OPERATION_LATENCY.labels(operation=operation).observe(elapsed)
