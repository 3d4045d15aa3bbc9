"""Application middleware package."""

from .limits import BodySizeLimitMiddleware
from .logging import StructuredLoggingMiddleware
from .telemetry import TelemetryMiddleware

__all__ = ["BodySizeLimitMiddleware", "StructuredLoggingMiddleware", "TelemetryMiddleware"]
