"""In-memory fallback store used when no database is configured."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from app.application.interfaces import StorageInterface
from app.domain.models import Document, DocumentCreate, Song, SongCreate
from app.domain.services import SongAudioDomainService


def _newest_first(items, attribute: str):
    # Reversing first keeps later inserts ahead when timestamps tie.
    return sorted(
        reversed(list(items)),
        key=lambda item: getattr(item, attribute),
        reverse=True,
    )


class InMemoryStorage(StorageInterface):
    """Process-local store; contents are lost on restart."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._songs: dict[str, Song] = {}

    async def list_documents(self) -> List[Document]:
        return _newest_first(self._documents.values(), "uploaded_at")

    async def get_document(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    async def create_document(self, document: DocumentCreate) -> Document:
        stored = Document(
            id=str(uuid4()),
            uploaded_at=datetime.now(timezone.utc),
            **document.model_dump(),
        )
        self._documents[stored.id] = stored
        return stored

    async def delete_document(self, document_id: str) -> bool:
        return self._documents.pop(document_id, None) is not None

    async def list_songs(self) -> List[Song]:
        return _newest_first(self._songs.values(), "created_at")

    async def get_song(self, song_id: str) -> Optional[Song]:
        return self._songs.get(song_id)

    async def find_song_by_job_id(self, job_id: str) -> Optional[Song]:
        for song in self._songs.values():
            if song.job_id == job_id:
                return song
        return None

    async def create_song(self, song: SongCreate) -> Song:
        stored = Song(
            id=str(uuid4()),
            created_at=datetime.now(timezone.utc),
            audio_url=None,
            **song.model_dump(),
        )
        self._songs[stored.id] = stored
        return stored

    async def set_song_audio_url_if_unset(
        self, song_id: str, audio_url: str
    ) -> Optional[Song]:
        # No await between the check and the write, so this is atomic on the loop.
        existing = self._songs.get(song_id)
        if existing is None:
            return None
        if not SongAudioDomainService.can_resolve(existing.audio_url, audio_url):
            return existing

        updated = existing.model_copy(update={"audio_url": audio_url})
        self._songs[song_id] = updated
        return updated

    async def delete_song(self, song_id: str) -> bool:
        return self._songs.pop(song_id, None) is not None


__all__ = ["InMemoryStorage"]
