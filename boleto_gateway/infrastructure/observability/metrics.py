"""Prometheus metrics for resolution outcomes, ERP failures and notification dispatch"""

from prometheus_client import Counter, Histogram

# Resolution metrics
resolution_counter = Counter(
    "boleto_resolution_total",
    "Total boleto resolutions",
    ["outcome", "channel"],  # outcome: deliver | regularization | settled | ... ; channel: active | blocked
)

# ERP metrics
erp_failures_counter = Counter(
    "erp_failures_total",
    "Failed SGA API calls",
    ["operation"],  # list_records | find_vehicle
)

# Messaging metrics
dispatch_counter = Counter(
    "notification_dispatch_total",
    "Fire-and-forget notifications by kind and result",
    ["kind", "status"],  # kind: payment_code | payment_link | inspection_video ; status: sent | failed
)

messaging_latency_histogram = Histogram(
    "messaging_latency_seconds",
    "Messaging provider response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_resolution(outcome: str, channel: str) -> None:
    """Count a finished resolution"""
    resolution_counter.labels(outcome=outcome, channel=channel).inc()


def record_dispatch(kind: str, succeeded: bool) -> None:
    dispatch_counter.labels(kind=kind, status="sent" if succeeded else "failed").inc()
