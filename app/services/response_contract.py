"""Pydantic model for the lyric generator's JSON contract.

The model is asked for a strict JSON object, but replies are not always
well formed. Parsing never fails: missing fields fall back one by one and
unparseable text ends up verbatim in ``lyrics``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Song"
DEFAULT_TOPIC = "General"


class LyricsPayload(BaseModel):
    title: str = DEFAULT_TITLE
    topic: str = DEFAULT_TOPIC
    lyrics: str = ""
    rhythm_pattern: str = Field(default="", alias="rhythmPattern")
    cultural_notes: str = Field(default="", alias="culturalNotes")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("title", "topic", "lyrics", "rhythm_pattern", "cultural_notes", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return "\n".join(str(item) for item in value if item is not None)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_text(cls, payload: str | None) -> "LyricsPayload":
        """Build a payload from raw model output, applying per-field defaults."""

        if not payload or not payload.strip():
            logger.warning("Lyric generator returned empty output; using defaults")
            return cls()

        cleaned = _clean_json_payload(payload)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError:
            logger.warning("Lyric generator output is not valid JSON; keeping raw text as lyrics")
            return cls(lyrics=payload)

        if not isinstance(data, dict):
            logger.warning("Lyric generator JSON is not an object; keeping raw text as lyrics")
            return cls(lyrics=payload)

        # Empty or null fields fall back exactly like missing ones.
        present = {key: value for key, value in data.items() if value not in (None, "", [])}
        return cls.model_validate(present)


def _clean_json_payload(payload: str) -> str:
    """Strip Markdown code blocks and find the first/last brace to extract JSON."""
    cleaned = payload.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]

    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]

    cleaned = cleaned.strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")

    if start != -1 and end != -1 and end > start:
        cleaned = cleaned[start : end + 1]

    return cleaned


__all__ = ["LyricsPayload", "DEFAULT_TITLE", "DEFAULT_TOPIC"]
