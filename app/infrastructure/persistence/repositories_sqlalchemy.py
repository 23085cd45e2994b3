from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncEngine

from app.application.interfaces import StorageInterface
from app.database import (
    create_session_factory,
    dispose_engine,
    init_models,
    session_scope,
)
from app.domain.models import Document, DocumentCreate, Song, SongCreate
from app.models.document import DocumentRecord
from app.models.song import SongRecord


class SQLAlchemyStorage(StorageInterface):
    """SQLAlchemy implementation of the document/song store"""

    backend_name = "sqlalchemy"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    async def initialize(self) -> None:
        await init_models(self.engine)

    async def close(self) -> None:
        await dispose_engine(self.engine)

    async def list_documents(self) -> List[Document]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(DocumentRecord).order_by(DocumentRecord.uploaded_at.desc())
            )
            rows = result.scalars().all()
            return [Document.model_validate(row) for row in rows]

    async def get_document(self, document_id: str) -> Optional[Document]:
        async with session_scope(self._session_factory) as session:
            db_document = await session.get(DocumentRecord, document_id)
            return Document.model_validate(db_document) if db_document else None

    async def create_document(self, document: DocumentCreate) -> Document:
        async with session_scope(self._session_factory) as session:
            db_document = DocumentRecord(**document.model_dump())
            session.add(db_document)
            await session.commit()
            await session.refresh(db_document)
            return Document.model_validate(db_document)

    async def delete_document(self, document_id: str) -> bool:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                delete(DocumentRecord).where(DocumentRecord.id == document_id)
            )
            await session.commit()
            return result.rowcount > 0

    async def list_songs(self) -> List[Song]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(SongRecord).order_by(SongRecord.created_at.desc())
            )
            rows = result.scalars().all()
            return [Song.model_validate(row) for row in rows]

    async def get_song(self, song_id: str) -> Optional[Song]:
        async with session_scope(self._session_factory) as session:
            db_song = await session.get(SongRecord, song_id)
            return Song.model_validate(db_song) if db_song else None

    async def find_song_by_job_id(self, job_id: str) -> Optional[Song]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(SongRecord).where(SongRecord.job_id == job_id).limit(1)
            )
            db_song = result.scalar_one_or_none()
            return Song.model_validate(db_song) if db_song else None

    async def create_song(self, song: SongCreate) -> Song:
        async with session_scope(self._session_factory) as session:
            db_song = SongRecord(**song.model_dump())
            session.add(db_song)
            await session.commit()
            await session.refresh(db_song)
            return Song.model_validate(db_song)

    async def set_song_audio_url_if_unset(
        self, song_id: str, audio_url: str
    ) -> Optional[Song]:
        async with session_scope(self._session_factory) as session:
            # Compare-and-set: concurrent resolvers cannot overwrite each other.
            await session.execute(
                update(SongRecord)
                .where(SongRecord.id == song_id, SongRecord.audio_url.is_(None))
                .values(audio_url=audio_url)
            )
            await session.commit()

            db_song = await session.get(SongRecord, song_id, populate_existing=True)
            return Song.model_validate(db_song) if db_song else None

    async def delete_song(self, song_id: str) -> bool:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                delete(SongRecord).where(SongRecord.id == song_id)
            )
            await session.commit()
            return result.rowcount > 0
