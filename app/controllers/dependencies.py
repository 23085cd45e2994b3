"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.application.interfaces import StorageInterface
from app.config.settings import settings
from app.pipelines.song import AudioJobOrchestrator, LyricsGenerator
from app.services.storage import get_storage
from app.services.suno_client import SunoClient

_lyrics_generator = LyricsGenerator()
_render_client = SunoClient()


def get_lyrics_generator() -> LyricsGenerator:
    """Return the shared lyric generator (its Bedrock client is created lazily)."""
    return _lyrics_generator


def get_render_client() -> SunoClient:
    return _render_client


StorageDep = Annotated[StorageInterface, Depends(get_storage)]
LyricsGeneratorDep = Annotated[LyricsGenerator, Depends(get_lyrics_generator)]
RenderClientDep = Annotated[SunoClient, Depends(get_render_client)]


def get_orchestrator(
    storage: StorageDep,
    renderer: RenderClientDep,
) -> AudioJobOrchestrator:
    return AudioJobOrchestrator(
        storage,
        renderer,
        pending_timeout_minutes=settings.suno.pending_timeout_minutes,
    )


OrchestratorDep = Annotated[AudioJobOrchestrator, Depends(get_orchestrator)]


__all__ = [
    "get_lyrics_generator",
    "get_orchestrator",
    "get_render_client",
    "get_storage",
    "LyricsGeneratorDep",
    "OrchestratorDep",
    "RenderClientDep",
    "StorageDep",
]
