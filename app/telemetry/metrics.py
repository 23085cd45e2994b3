"""Prometheus metrics for the HTTP surface and the song pipeline."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# Upper bound covers lyric generation, the slowest request path.
_LATENCY_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    ("method", "route", "status"),
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ("method", "route"),
    buckets=_LATENCY_BUCKETS,
)
ERROR_COUNTER = Counter(
    "app_internal_errors_total",
    "Requests answered with a 5xx status",
    ("method", "route"),
)

SONGS_GENERATED = Counter(
    "songs_generated_total",
    "Songs created with a submitted rendering job",
    ("musical_style",),
)
AUDIO_RESOLUTIONS = Counter(
    "audio_resolutions_total",
    "Songs whose audio URL was stored, by the signal that resolved them",
    ("source",),
)
UNMATCHED_CALLBACKS = Counter(
    "suno_callbacks_unmatched_total",
    "Suno webhook deliveries that referenced an unknown job",
)
STATUS_QUERY_FAILURES = Counter(
    "suno_status_query_failures_total",
    "Suno job-status queries that raised and were reported as running",
)


def observe_request(method: str, route: str, status_code: int, duration_seconds: float) -> None:
    """Count the request and its latency under its route template."""

    labels = {"method": method or "UNKNOWN", "route": route or "unmatched"}
    REQUEST_COUNT.labels(status=str(status_code), **labels).inc()
    REQUEST_LATENCY.labels(**labels).observe(max(duration_seconds, 0.0))
    if status_code >= 500:
        ERROR_COUNTER.labels(**labels).inc()


def record_song_generated(musical_style: str) -> None:
    SONGS_GENERATED.labels(musical_style=musical_style or "unknown").inc()


def record_audio_resolution(source: str) -> None:
    AUDIO_RESOLUTIONS.labels(source=source).inc()


def record_unmatched_callback() -> None:
    UNMATCHED_CALLBACKS.inc()


def record_status_query_failure() -> None:
    STATUS_QUERY_FAILURES.inc()
