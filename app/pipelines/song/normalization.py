"""Provider payload normalization.

Suno status responses and webhook deliveries share a loose shape. The task
payload may sit at the top level or under one or two ``data`` envelopes,
and its output list (again under ``data``) may be a sequence or a single
object::

    {"code": 200, "data": {"callbackType": "complete", "task_id": "...",
                           "data": [{"audio_url": "https://..."}]}}

``normalize_render_payload`` reduces all of these to a :class:`RenderStatus`.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from .types import RenderStatus

COMPLETE_MARKER = "complete"
_MAX_ENVELOPES = 2
_TASK_KEYS = ("callbackType", "data", "task_id", "taskId")


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _unwrap(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    """Return the chain of levels from the outermost envelope to the task payload."""

    levels = [payload]
    current = payload
    for _ in range(_MAX_ENVELOPES):
        inner = current.get("data")
        if not isinstance(inner, Mapping) or not any(key in inner for key in _TASK_KEYS):
            break
        levels.append(inner)
        current = inner
    return levels


def extract_audio_url(task: Mapping[str, Any]) -> Optional[str]:
    """Check the first output, then a bare output object, then the task itself."""

    outputs = task.get("data")
    if isinstance(outputs, Sequence) and not isinstance(outputs, (str, bytes)):
        if outputs and isinstance(outputs[0], Mapping):
            url = _text(outputs[0].get("audio_url"))
            if url:
                return url
    elif isinstance(outputs, Mapping):
        url = _text(outputs.get("audio_url"))
        if url:
            return url

    return _text(task.get("audio_url"))


def normalize_render_payload(payload: Any) -> RenderStatus:
    """Reduce a status response or webhook body to ``(audio_url, is_complete, job_id)``."""

    if not isinstance(payload, Mapping):
        return RenderStatus(audio_url=None, is_complete=False)

    levels = _unwrap(payload)
    task = levels[-1]

    callback_type = None
    job_id = None
    # The innermost level wins; enclosing envelopes only fill gaps.
    for level in reversed(levels):
        if callback_type is None:
            callback_type = _text(level.get("callbackType"))
        if job_id is None:
            job_id = _text(level.get("task_id")) or _text(level.get("taskId"))

    return RenderStatus(
        audio_url=extract_audio_url(task),
        is_complete=callback_type == COMPLETE_MARKER,
        job_id=job_id,
    )


__all__ = ["COMPLETE_MARKER", "extract_audio_url", "normalize_render_payload"]
