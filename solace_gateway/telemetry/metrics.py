"""Prometheus metrics definitions and helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    ("method", "route", "status"),
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ("method", "route"),
    buckets=(
        0.005,
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
        30.0,
        60.0,
        120.0,
    ),
)

ERROR_COUNTER = Counter(
    "app_internal_errors_total",
    "Number of requests ending in internal server error responses",
    ("method", "route"),
)

TRANSCODE_OUTCOMES = Counter(
    "audio_transcode_outcomes_total",
    "Audio normalisation results by path taken",
    ("outcome",),
)

REMOTE_POLL_ATTEMPTS = Histogram(
    "audio_remote_poll_attempts",
    "Status polls needed before an uploaded file left PROCESSING",
    ("outcome",),
    buckets=(0, 1, 2, 3, 4, 6, 8, 10, 12, 16, 24),
)

PIPELINE_OUTCOMES = Counter(
    "pipeline_outcomes_total",
    "Completed gateway pipelines by classification",
    ("pipeline", "outcome"),
)


def observe_request(
    method: str,
    route: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record metrics for a completed HTTP request."""

    safe_route = route or "unknown"
    safe_method = method or "UNKNOWN"
    status_label = str(status_code)
    observed_duration = duration_seconds if duration_seconds >= 0 else 0

    REQUEST_COUNT.labels(
        method=safe_method,
        route=safe_route,
        status=status_label,
    ).inc()
    REQUEST_LATENCY.labels(
        method=safe_method,
        route=safe_route,
    ).observe(observed_duration)

    if status_code >= 500:
        ERROR_COUNTER.labels(
            method=safe_method,
            route=safe_route,
        ).inc()


def record_transcode(outcome: str) -> None:
    TRANSCODE_OUTCOMES.labels(outcome=outcome).inc()


def observe_poll(outcome: str, attempts: int) -> None:
    REMOTE_POLL_ATTEMPTS.labels(outcome=outcome).observe(max(0, attempts))


def record_pipeline_outcome(pipeline: str, outcome: str) -> None:
    """Count a finished pipeline run; `outcome` is `ok` or an error code."""

    PIPELINE_OUTCOMES.labels(pipeline=pipeline, outcome=outcome).inc()
