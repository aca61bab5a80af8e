"""Prometheus metrics for login outcomes, vault sync health, and record-store latency"""

from prometheus_client import Counter, Histogram, Gauge

# Login metrics
login_counter = Counter(
    "vault_login_total",
    "Login attempts by outcome",
    ["outcome"],  # granted | invalid_credentials | missing_credentials | vault_unavailable | in_progress
)

session_authenticated_gauge = Gauge(
    "vault_session_authenticated",
    "1 while a user session is authenticated, else 0",
)

# Reconciliation metrics
sync_counter = Counter(
    "vault_sync_total",
    "Reconciliation ticks by outcome",
    ["outcome"],  # updated | not_found | failed | skipped_anonymous | skipped_busy | discarded | error
)

# Record store metrics
vault_fetch_latency_histogram = Histogram(
    "vault_fetch_latency_seconds",
    "Record store read latency",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

vault_fetch_failures_counter = Counter(
    "vault_fetch_failures_total",
    "Failed record store reads",
    ["reason"],  # transport | malformed
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_login(outcome: str) -> None:
    """Count a login attempt outcome"""
    login_counter.labels(outcome=outcome).inc()


def record_session_state(authenticated: bool) -> None:
    session_authenticated_gauge.set(1 if authenticated else 0)


def record_sync(outcome: str) -> None:
    sync_counter.labels(outcome=outcome).inc()
