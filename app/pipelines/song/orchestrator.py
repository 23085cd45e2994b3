"""Audio job orchestration (Stage 02-03 of the song pipeline).

A song's audio moves through two states only::

    PENDING (job_id set, audio_url null) --resolve--> RESOLVED (audio_url set)

Two independent signals can trigger ``resolve``: the provider's webhook
(``handle_callback``) and the client's poll (``poll``). Both funnel into
the storage compare-and-set, so duplicate or racing deliveries converge on
the first URL written. The orchestrator never schedules retries itself;
the polling client drives them.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from app.application.interfaces import StorageInterface
from app.domain.models import Song, SongCreate
from app.domain.services import SongAudioDomainService
from app.services.response_contract import LyricsPayload
from app.services.suno_client import SunoClient
from app.telemetry import (
    record_audio_resolution,
    record_status_query_failure,
    record_unmatched_callback,
)

from .normalization import normalize_render_payload
from .types import AudioPollResult, CallbackOutcome, PollStatus

logger = logging.getLogger("app.pipelines.song")

SOURCE_TEXT_LIMIT = 500


class AudioJobOrchestrator:
    """Submit rendering jobs and reconcile their completion signals."""

    def __init__(
        self,
        storage: StorageInterface,
        renderer: SunoClient,
        *,
        pending_timeout_minutes: int | None = None,
    ) -> None:
        self._storage = storage
        self._renderer = renderer
        self._pending_timeout_minutes = pending_timeout_minutes

    async def submit(
        self,
        lyrics: LyricsPayload,
        *,
        style: str,
        source_document_id: str | None = None,
        source_text: str | None = None,
    ) -> Song:
        """Submit the rendering job, then persist the song with its job id.

        A failed submission propagates and nothing is stored.
        """

        job_id = await self._renderer.submit_job(
            title=lyrics.title,
            lyrics=lyrics.lyrics,
            style=style,
        )

        song = await self._storage.create_song(
            SongCreate(
                title=lyrics.title,
                topic=lyrics.topic,
                lyrics=lyrics.lyrics,
                rhythm_pattern=lyrics.rhythm_pattern,
                cultural_notes=lyrics.cultural_notes,
                musical_style=style,
                source_document_id=source_document_id,
                source_text=source_text[:SOURCE_TEXT_LIMIT] if source_text else None,
                job_id=job_id,
            )
        )
        logger.info("Created song %s with job %s", song.id, job_id)
        return song

    async def resolve(self, song: Song, audio_url: str, *, source: str) -> Optional[Song]:
        """Move a pending song to RESOLVED; a no-op for songs already resolved."""

        if not SongAudioDomainService.can_resolve(song.audio_url, audio_url):
            return song

        stored = await self._storage.set_song_audio_url_if_unset(song.id, audio_url)
        if stored is None:
            logger.warning("Song %s disappeared before its audio could be stored", song.id)
            return None

        if stored.audio_url == audio_url:
            record_audio_resolution(source)
            logger.info("Song %s audio resolved via %s: %s", song.id, source, audio_url)
        else:
            logger.warning(
                "Song %s already resolved to %s; ignoring %s from %s",
                song.id,
                stored.audio_url,
                audio_url,
                source,
            )
        return stored

    async def handle_callback(self, payload: Any) -> tuple[CallbackOutcome, Optional[Song]]:
        """Apply one webhook delivery. Storage failures propagate."""

        status = normalize_render_payload(payload)
        if not status.job_id:
            logger.warning("Suno callback without a task id; ignoring")
            return CallbackOutcome.IGNORED, None

        song = await self._storage.find_song_by_job_id(status.job_id)
        if song is None:
            record_unmatched_callback()
            logger.warning("Received callback for unknown task_id: %s", status.job_id)
            return CallbackOutcome.NOT_FOUND, None

        if not status.is_ready:
            logger.info(
                "Callback for song %s is not a completed render (complete=%s, url=%s)",
                song.id,
                status.is_complete,
                bool(status.audio_url),
            )
            return CallbackOutcome.PENDING, song

        stored = await self.resolve(song, status.audio_url, source="webhook")
        return CallbackOutcome.RESOLVED, stored

    async def poll(self, song_id: str) -> Optional[AudioPollResult]:
        """Report the audio state of a song; None when the song does not exist."""

        song = await self._storage.get_song(song_id)
        if song is None:
            return None

        if song.audio_url:
            return AudioPollResult(PollStatus.SUCCESS, song.audio_url)

        if not song.job_id:
            return AudioPollResult(PollStatus.RUNNING)

        try:
            payload = await self._renderer.get_job_details(song.job_id)
        except Exception as exc:
            # Freshly submitted jobs are often not queryable yet.
            record_status_query_failure()
            logger.info(
                "Suno status query failed for song %s (job %s), will retry: %s",
                song.id,
                song.job_id,
                exc,
            )
            return self._pending_result(song)

        status = normalize_render_payload(payload)
        if status.is_ready:
            stored = await self.resolve(song, status.audio_url, source="poll")
            audio_url = stored.audio_url if stored and stored.audio_url else status.audio_url
            return AudioPollResult(PollStatus.SUCCESS, audio_url)

        logger.info("Song %s still generating...", song.id)
        return self._pending_result(song)

    def _pending_result(self, song: Song) -> AudioPollResult:
        if SongAudioDomainService.is_expired(song, self._pending_timeout_minutes):
            return AudioPollResult(PollStatus.EXPIRED)
        return AudioPollResult(PollStatus.RUNNING)


__all__ = ["AudioJobOrchestrator", "SOURCE_TEXT_LIMIT"]
