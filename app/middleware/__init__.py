"""HTTP middleware: access logging and Prometheus request metrics."""

from .logging import REQUEST_ID_HEADER, StructuredLoggingMiddleware
from .telemetry import TelemetryMiddleware

__all__ = ["REQUEST_ID_HEADER", "StructuredLoggingMiddleware", "TelemetryMiddleware"]
