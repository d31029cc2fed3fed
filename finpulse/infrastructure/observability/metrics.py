"""Prometheus metrics for dashboard loads, analyses, and record writes"""

from prometheus_client import Counter, Histogram

# Analysis metrics
analysis_counter = Counter(
    "finpulse_analysis_total",
    "Uploaded-table analyses performed",
    ["mode"],  # local | api
)

remote_analysis_latency_histogram = Histogram(
    "remote_analysis_latency_seconds",
    "Remote analysis endpoint response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

remote_analysis_failure_counter = Counter(
    "remote_analysis_failures_total",
    "Failed remote analysis calls",
)

# Storage metrics
dashboard_fetch_failures_counter = Counter(
    "dashboard_fetch_failures_total",
    "Dashboard loads aborted by a failed storage fetch",
)

records_written_counter = Counter(
    "finpulse_records_written_total",
    "Records created, updated or deleted",
    ["kind", "operation"],  # transaction | cash_flow | budget_target
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(mode: str) -> None:
    """Count an analysis by mode"""
    analysis_counter.labels(mode=mode).inc()


def record_write(kind: str, operation: str) -> None:
    """Count a storage write by record kind and operation"""
    records_written_counter.labels(kind=kind, operation=operation).inc()
