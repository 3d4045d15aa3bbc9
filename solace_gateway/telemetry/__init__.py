"""Telemetry helpers and metrics."""

from .metrics import (
    ERROR_COUNTER,
    PIPELINE_OUTCOMES,
    REMOTE_POLL_ATTEMPTS,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    TRANSCODE_OUTCOMES,
    observe_poll,
    observe_request,
    record_pipeline_outcome,
    record_transcode,
)

__all__ = [
    "ERROR_COUNTER",
    "PIPELINE_OUTCOMES",
    "REMOTE_POLL_ATTEMPTS",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "TRANSCODE_OUTCOMES",
    "observe_poll",
    "observe_request",
    "record_pipeline_outcome",
    "record_transcode",
]
