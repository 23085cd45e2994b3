"""Song generation, library, and audio polling endpoints.

`POST /api/songs/generate` runs the song pipeline (`app.pipelines.song`):

1. Lyric generation through Bedrock, with per-field fallbacks.
2. Rendering-job submission to Suno; the song is only stored once a job id exists.

`GET /api/songs/{id}/audio` is the client-driven half of audio reconciliation;
the Suno webhook in `app.controllers.suno` is the other half.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from app.config.settings import settings
from app.controllers.dependencies import (
    LyricsGeneratorDep,
    OrchestratorDep,
    StorageDep,
)
from app.domain.models import SongCreate
from app.pipelines.song import GenerationError, PollStatus
from app.services.suno_client import RenderingError
from app.telemetry import record_song_generated
from app.views import (
    AudioStatusResponse,
    ErrorResponse,
    GenerateSongRequest,
    SongCreateRequest,
    SongResponse,
)

router = APIRouter(
    prefix="/api/songs",
    tags=["songs"],
    responses={404: {"model": ErrorResponse}},
)

logger = logging.getLogger(__name__)


async def _get_song_or_404(storage: StorageDep, song_id: str):
    song = await storage.get_song(song_id)
    if not song:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Song not found",
        )
    return song


@router.get("", response_model=List[SongResponse])
async def list_songs(storage: StorageDep) -> List[SongResponse]:
    songs = await storage.list_songs()
    return [SongResponse.model_validate(song) for song in songs]


@router.get("/{song_id}", response_model=SongResponse)
async def get_song(song_id: str, storage: StorageDep) -> SongResponse:
    song = await _get_song_or_404(storage, song_id)
    return SongResponse.model_validate(song)


@router.post(
    "/generate",
    response_model=SongResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_song(
    payload: GenerateSongRequest,
    generator: LyricsGeneratorDep,
    orchestrator: OrchestratorDep,
) -> SongResponse:
    """Generate lyrics, submit the rendering job, and store the pending song."""

    style = payload.musical_style.value
    try:
        lyrics = await generator.generate(
            payload.content,
            style=payload.musical_style,
            complexity=payload.complexity,
        )
    except GenerationError as exc:
        logger.error("Lyric generation failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate song",
        ) from exc

    try:
        song = await orchestrator.submit(
            lyrics,
            style=style,
            source_document_id=payload.document_id,
            source_text=payload.content,
        )
    except RenderingError as exc:
        logger.error("Rendering job submission failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit song for audio rendering",
        ) from exc

    record_song_generated(style)
    return SongResponse.model_validate(song)


@router.post(
    "",
    response_model=SongResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_song(payload: SongCreateRequest, storage: StorageDep) -> SongResponse:
    """Save a song as-is, without generating or rendering anything."""

    song = await storage.create_song(SongCreate(**payload.model_dump()))
    return SongResponse.model_validate(song)


@router.get(
    "/{song_id}/audio",
    response_model=AudioStatusResponse,
    response_model_exclude_none=True,
)
async def get_song_audio(
    song_id: str,
    response: Response,
    orchestrator: OrchestratorDep,
) -> AudioStatusResponse:
    """Report whether the song's audio is ready; clients re-poll while running."""

    result = await orchestrator.poll(song_id)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Song not found",
        )

    if result.status is PollStatus.RUNNING:
        response.headers["Retry-After"] = str(settings.audio_poll_interval_seconds)

    return AudioStatusResponse(status=result.status, audio_url=result.audio_url)


@router.delete("/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_song(song_id: str, storage: StorageDep) -> None:
    deleted = await storage.delete_song(song_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Song not found",
        )
