"""SQLAlchemy model for generated songs."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, String, Text

from app.models.base import Base, utc_now


class SongRecord(Base):
    __tablename__ = "songs"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    title = Column(Text, nullable=False)
    topic = Column(Text, nullable=False)
    lyrics = Column(Text, nullable=False)
    rhythm_pattern = Column(Text, nullable=True)
    cultural_notes = Column(Text, nullable=True)
    musical_style = Column(Text, nullable=True)
    # Weak reference: documents may be deleted without touching their songs.
    source_document_id = Column(String(36), nullable=True)
    source_text = Column(Text, nullable=True)
    job_id = Column(String(100), nullable=True, index=True)
    audio_url = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
    )


__all__ = ["SongRecord"]
