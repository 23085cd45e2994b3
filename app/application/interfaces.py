from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models import Document, DocumentCreate, Song, SongCreate


class StorageInterface(ABC):
    """Persistence contract for lesson documents and generated songs"""

    backend_name: str = "unknown"

    async def initialize(self) -> None:
        """Prepare the backend (create tables, warm connections)."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def list_documents(self) -> List[Document]:
        """Return documents ordered by upload time, newest first."""

    @abstractmethod
    async def get_document(self, document_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def create_document(self, document: DocumentCreate) -> Document:
        ...

    @abstractmethod
    async def delete_document(self, document_id: str) -> bool:
        ...

    @abstractmethod
    async def list_songs(self) -> List[Song]:
        """Return songs ordered by creation time, newest first."""

    @abstractmethod
    async def get_song(self, song_id: str) -> Optional[Song]:
        ...

    @abstractmethod
    async def find_song_by_job_id(self, job_id: str) -> Optional[Song]:
        ...

    @abstractmethod
    async def create_song(self, song: SongCreate) -> Song:
        ...

    @abstractmethod
    async def set_song_audio_url_if_unset(
        self, song_id: str, audio_url: str
    ) -> Optional[Song]:
        """Assign ``audio_url`` only while it is still null.

        Returns the stored song (resolved or not), or None when the song
        does not exist.
        """

    @abstractmethod
    async def delete_song(self, song_id: str) -> bool:
        ...
