"""Declarative base shared by all SQLAlchemy models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now() -> datetime:
    """Get the current time in UTC."""
    return datetime.now(timezone.utc)


__all__ = ["Base", "utc_now"]
