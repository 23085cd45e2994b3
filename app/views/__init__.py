"""Pydantic schemas used as views in the MVC architecture."""

from .common import ErrorResponse
from .documents import DocumentResponse
from .songs import (
    AudioStatusResponse,
    GenerateSongRequest,
    SongCreateRequest,
    SongResponse,
)
from .suno import CallbackAcknowledgement

__all__ = [
    "AudioStatusResponse",
    "CallbackAcknowledgement",
    "DocumentResponse",
    "ErrorResponse",
    "GenerateSongRequest",
    "SongCreateRequest",
    "SongResponse",
]
