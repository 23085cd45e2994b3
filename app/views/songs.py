"""Schemas for song generation, storage, and audio polling."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.models import Complexity, MusicalStyle
from app.pipelines.song import PollStatus

_CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class GenerateSongRequest(BaseModel):
    """Lesson content plus the style/complexity tiers for one generated song."""

    content: str = Field(
        ...,
        min_length=10,
        description="Lesson text to turn into a song (at least 10 characters)",
    )
    document_id: Optional[str] = Field(
        None, description="Uploaded document the content came from"
    )
    musical_style: MusicalStyle = MusicalStyle.TRADITIONAL
    complexity: Complexity = Complexity.SIMPLE

    model_config = _CAMEL_CONFIG


class SongCreateRequest(BaseModel):
    """Manually saved song; no rendering job is submitted."""

    title: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)
    lyrics: str = Field(..., min_length=1)
    rhythm_pattern: Optional[str] = None
    cultural_notes: Optional[str] = None
    musical_style: Optional[str] = None
    source_document_id: Optional[str] = None
    source_text: Optional[str] = None

    model_config = _CAMEL_CONFIG


class SongResponse(BaseModel):
    id: str
    title: str
    topic: str
    lyrics: str
    rhythm_pattern: Optional[str] = None
    cultural_notes: Optional[str] = None
    musical_style: Optional[str] = None
    source_document_id: Optional[str] = None
    source_text: Optional[str] = None
    job_id: Optional[str] = None
    audio_url: Optional[str] = None
    created_at: datetime

    model_config = _CAMEL_CONFIG


class AudioStatusResponse(BaseModel):
    """Poll result: ``{"status": "running"}`` or ``{"status": "success", "audioUrl": ...}``."""

    status: PollStatus
    audio_url: Optional[str] = None

    model_config = _CAMEL_CONFIG
