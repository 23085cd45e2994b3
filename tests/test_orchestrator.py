"""Audio job reconciliation: submission, webhook, and poll paths."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.domain.models import SongCreate  # noqa: E402
from app.infrastructure.persistence import InMemoryStorage  # noqa: E402
from app.pipelines.song import (  # noqa: E402
    AudioJobOrchestrator,
    CallbackOutcome,
    PollStatus,
)
from app.services.response_contract import LyricsPayload  # noqa: E402
from app.services.suno_client import RenderingError  # noqa: E402


def complete_payload(job_id: str, audio_url: str) -> dict:
    return {
        "code": 200,
        "data": {
            "callbackType": "complete",
            "task_id": job_id,
            "data": [{"audio_url": audio_url}],
        },
    }


def running_payload(job_id: str) -> dict:
    return {"code": 200, "data": {"callbackType": "text", "task_id": job_id, "data": []}}


class FakeRenderer:
    """Stands in for the Suno client; status replies are scripted per test."""

    def __init__(self, job_id: str = "job-1") -> None:
        self.job_id = job_id
        self.submit_error: Exception | None = None
        self.status_payload: object = running_payload(job_id)
        self.status_error: Exception | None = None
        self.submissions: list[dict] = []
        self.status_queries = 0

    async def submit_job(self, *, title, lyrics, style):
        if self.submit_error is not None:
            raise self.submit_error
        self.submissions.append({"title": title, "lyrics": lyrics, "style": style})
        return self.job_id

    async def get_job_details(self, job_id):
        self.status_queries += 1
        if self.status_error is not None:
            raise self.status_error
        return self.status_payload


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def orchestrator(storage, renderer) -> AudioJobOrchestrator:
    return AudioJobOrchestrator(storage, renderer)


LYRICS = LyricsPayload(title="Rain Song", topic="Water Cycle", lyrics="Rain fall down")


@pytest.mark.asyncio
async def test_submit_stores_pending_song_with_job_id(orchestrator, storage, renderer):
    song = await orchestrator.submit(
        LYRICS,
        style="highlife",
        source_text="x" * 800,
    )

    assert song.job_id == "job-1"
    assert song.audio_url is None
    assert song.musical_style == "highlife"
    assert len(song.source_text) == 500
    assert renderer.submissions == [
        {"title": "Rain Song", "lyrics": "Rain fall down", "style": "highlife"}
    ]
    assert await storage.get_song(song.id) == song


@pytest.mark.asyncio
async def test_failed_submission_stores_nothing(orchestrator, storage, renderer):
    renderer.submit_error = RenderingError("provider down")

    with pytest.raises(RenderingError):
        await orchestrator.submit(LYRICS, style="traditional")

    assert await storage.list_songs() == []


@pytest.mark.asyncio
async def test_poll_unknown_song_returns_none(orchestrator):
    assert await orchestrator.poll("missing") is None


@pytest.mark.asyncio
async def test_poll_reports_running_until_complete(orchestrator, renderer):
    song = await orchestrator.submit(LYRICS, style="traditional")

    result = await orchestrator.poll(song.id)
    assert result.status is PollStatus.RUNNING
    assert result.audio_url is None

    renderer.status_payload = complete_payload("job-1", "https://cdn/a.mp3")
    result = await orchestrator.poll(song.id)
    assert result.status is PollStatus.SUCCESS
    assert result.audio_url == "https://cdn/a.mp3"


@pytest.mark.asyncio
async def test_resolved_song_is_served_without_querying_provider(orchestrator, renderer):
    song = await orchestrator.submit(LYRICS, style="traditional")
    renderer.status_payload = complete_payload("job-1", "https://cdn/a.mp3")
    await orchestrator.poll(song.id)
    queries = renderer.status_queries

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.SUCCESS
    assert result.audio_url == "https://cdn/a.mp3"
    assert renderer.status_queries == queries


@pytest.mark.asyncio
async def test_provider_failure_is_reported_as_running(orchestrator, renderer, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")
    renderer.status_error = RuntimeError("record not found")

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.RUNNING
    assert (await storage.get_song(song.id)).audio_url is None


@pytest.mark.asyncio
async def test_song_without_job_reports_running(orchestrator, storage, renderer):
    song = await storage.create_song(SongCreate(title="t", topic="t", lyrics="l"))

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.RUNNING
    assert renderer.status_queries == 0


@pytest.mark.asyncio
async def test_webhook_resolves_and_is_idempotent(orchestrator, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")

    outcome, stored = await orchestrator.handle_callback(
        complete_payload("job-1", "https://cdn/first.mp3")
    )
    assert outcome is CallbackOutcome.RESOLVED
    assert stored.audio_url == "https://cdn/first.mp3"

    outcome, stored = await orchestrator.handle_callback(
        complete_payload("job-1", "https://cdn/second.mp3")
    )
    assert outcome is CallbackOutcome.RESOLVED
    assert stored.audio_url == "https://cdn/first.mp3"
    assert (await storage.get_song(song.id)).audio_url == "https://cdn/first.mp3"


@pytest.mark.asyncio
async def test_webhook_for_unknown_job_changes_nothing(orchestrator, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")

    outcome, stored = await orchestrator.handle_callback(
        complete_payload("other-job", "https://cdn/a.mp3")
    )

    assert outcome is CallbackOutcome.NOT_FOUND
    assert stored is None
    assert (await storage.get_song(song.id)).audio_url is None


@pytest.mark.asyncio
async def test_intermediate_webhook_leaves_song_pending(orchestrator, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")
    payload = complete_payload("job-1", "https://cdn/a.mp3")
    payload["data"]["callbackType"] = "first"

    outcome, _ = await orchestrator.handle_callback(payload)

    assert outcome is CallbackOutcome.PENDING
    assert (await storage.get_song(song.id)).audio_url is None


@pytest.mark.asyncio
async def test_webhook_without_task_id_is_ignored(orchestrator):
    outcome, stored = await orchestrator.handle_callback({"code": 200, "msg": "ok"})

    assert outcome is CallbackOutcome.IGNORED
    assert stored is None


@pytest.mark.asyncio
async def test_racing_webhook_and_poll_converge_on_one_url(orchestrator, renderer, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")
    renderer.status_payload = complete_payload("job-1", "https://cdn/from-poll.mp3")

    (_, from_webhook), from_poll = await asyncio.gather(
        orchestrator.handle_callback(complete_payload("job-1", "https://cdn/from-hook.mp3")),
        orchestrator.poll(song.id),
    )

    final_url = (await storage.get_song(song.id)).audio_url
    assert final_url in {"https://cdn/from-poll.mp3", "https://cdn/from-hook.mp3"}
    assert from_webhook.audio_url == final_url
    assert from_poll.audio_url == final_url


@pytest.mark.asyncio
async def test_pending_song_past_timeout_reports_expired(storage, renderer):
    orchestrator = AudioJobOrchestrator(storage, renderer, pending_timeout_minutes=10)
    song = await orchestrator.submit(LYRICS, style="traditional")
    storage._songs[song.id] = song.model_copy(
        update={"created_at": datetime.now(timezone.utc) - timedelta(minutes=30)}
    )

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.EXPIRED
    assert (await storage.get_song(song.id)).audio_url is None


@pytest.mark.asyncio
async def test_expired_song_can_still_resolve(storage, renderer):
    orchestrator = AudioJobOrchestrator(storage, renderer, pending_timeout_minutes=10)
    song = await orchestrator.submit(LYRICS, style="traditional")
    storage._songs[song.id] = song.model_copy(
        update={"created_at": datetime.now(timezone.utc) - timedelta(minutes=30)}
    )
    renderer.status_payload = complete_payload("job-1", "https://cdn/late.mp3")

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.SUCCESS
    assert result.audio_url == "https://cdn/late.mp3"


@pytest.mark.asyncio
async def test_poll_resolves_from_minimal_status_shape(orchestrator, renderer, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")
    renderer.status_payload = {"data": {"data": [{"audio_url": "X"}], "callbackType": "complete"}}

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.SUCCESS
    assert result.audio_url == "X"
    assert (await storage.get_song(song.id)).audio_url == "X"


@pytest.mark.asyncio
async def test_poll_with_other_callback_type_keeps_running(orchestrator, renderer, storage):
    song = await orchestrator.submit(LYRICS, style="traditional")
    renderer.status_payload = {"data": {"data": [{"audio_url": "X"}], "callbackType": "first"}}

    result = await orchestrator.poll(song.id)

    assert result.status is PollStatus.RUNNING
    assert (await storage.get_song(song.id)).audio_url is None
