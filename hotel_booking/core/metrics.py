"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking decision metrics
booking_decisions = Counter(
    'booking_decisions_total',
    'Booking rule engine decisions',
    ['operation', 'outcome']  # get/create/update; success, not_found, conflict, payment_required
)

booking_decision_latency = Histogram(
    'booking_decision_latency_seconds',
    'Time spent deciding a booking request',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Database metrics
db_operations = Counter(
    'db_operations_total',
    'Total database operations',
    ['operation']  # read, write
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_decision(operation: str, outcome: str):
    """Record a rule engine decision. Outcome: success, not_found, conflict, payment_required"""
    booking_decisions.labels(operation=operation, outcome=outcome).inc()


def record_db_operation(operation: str):
    """Record database operation. Operation: read, write"""
    db_operations.labels(operation=operation).inc()
