"""Telemetry helpers and metrics."""

from .metrics import (
    AUDIO_RESOLUTIONS,
    ERROR_COUNTER,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    SONGS_GENERATED,
    STATUS_QUERY_FAILURES,
    UNMATCHED_CALLBACKS,
    observe_request,
    record_audio_resolution,
    record_song_generated,
    record_status_query_failure,
    record_unmatched_callback,
)

__all__ = [
    "AUDIO_RESOLUTIONS",
    "ERROR_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "SONGS_GENERATED",
    "STATUS_QUERY_FAILURES",
    "UNMATCHED_CALLBACKS",
    "observe_request",
    "record_audio_resolution",
    "record_song_generated",
    "record_status_query_failure",
    "record_unmatched_callback",
]
