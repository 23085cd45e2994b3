from typing import Optional
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from enum import Enum


class MusicalStyle(str, Enum):
    TRADITIONAL = "traditional"
    HIGHLIFE = "highlife"
    AFROBEAT = "afrobeat"
    PALM_WINE = "palm-wine"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"


class AudioState(str, Enum):
    """Rendering lifecycle of a song's audio."""

    PENDING = "pending"
    RESOLVED = "resolved"


class Document(BaseModel):
    """Domain model for an uploaded lesson document"""
    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    content: str
    uploaded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentCreate(BaseModel):
    filename: str
    original_name: str
    mime_type: str
    size: int
    content: str


class Song(BaseModel):
    """Domain model for a generated song.

    Everything except ``audio_url`` is fixed at creation time.
    """
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

    model_config = ConfigDict(from_attributes=True)

    @property
    def audio_state(self) -> AudioState:
        return AudioState.RESOLVED if self.audio_url else AudioState.PENDING


class SongCreate(BaseModel):
    title: str
    topic: str
    lyrics: str
    rhythm_pattern: Optional[str] = None
    cultural_notes: Optional[str] = None
    musical_style: Optional[str] = None
    source_document_id: Optional[str] = None
    source_text: Optional[str] = None
    job_id: Optional[str] = None
