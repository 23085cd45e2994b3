"""SQLAlchemy models for the MVC architecture."""

from .base import Base
from .document import DocumentRecord  # noqa: F401
from .song import SongRecord  # noqa: F401

__all__ = [
    "Base",
    "DocumentRecord",
    "SongRecord",
]
