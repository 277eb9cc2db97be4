"""
Prometheus metrics for the booking API
"""

from prometheus_client import Counter, Histogram, REGISTRY


def _counter(name: str, documentation: str, labels):
    # Module may be re-imported under test runners; reuse registered collectors
    try:
        return Counter(name, documentation, labels)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


def _histogram(name: str, documentation: str, labels):
    try:
        return Histogram(name, documentation, labels)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUEST_COUNT = _counter(
    "app_requests_total",
    "Total requests",
    ["method", "endpoint", "status"]
)
REQUEST_DURATION = _histogram(
    "app_request_duration_seconds",
    "Request duration",
    ["method", "endpoint"]
)

# outcome: committed, seat_unavailable, not_found, watch_exhausted, storage_error
SEAT_RESERVATIONS = _counter(
    "seat_reservations_total",
    "Seat reservation commit attempts by outcome",
    ["outcome"]
)
RESERVATION_WATCH_RETRIES = _counter(
    "seat_reservation_watch_retries_total",
    "Optimistic commit retries caused by a concurrent write to the flight record",
    []
)

# outcome: invalid, declined, confirmed, storage_error
PAYMENTS = _counter(
    "payments_total",
    "Payment requests by outcome",
    ["outcome"]
)
