"""SQLAlchemy model for uploaded lesson documents."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.models.base import Base, utc_now


class DocumentRecord(Base):
    __tablename__ = "documents"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    filename = Column(Text, nullable=False)
    original_name = Column(Text, nullable=False)
    mime_type = Column(Text, nullable=False)
    size = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    uploaded_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
    )


__all__ = ["DocumentRecord"]
