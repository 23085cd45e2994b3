"""Suno HTTP client behaviour against a mocked transport."""

from __future__ import annotations

import json
from pathlib import Path
import sys

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.config.settings import SunoConfig  # noqa: E402
from app.services.suno_client import RenderingError, SunoClient  # noqa: E402


def make_config(**overrides) -> SunoConfig:
    values = {
        "api_key": "test-key",
        "base_url": "https://suno.test",
        "callback_url": "https://edusong.test/api/suno/callback",
    }
    values.update(overrides)
    return SunoConfig(**values)


@pytest.mark.asyncio
async def test_submit_job_posts_custom_lyrics_and_returns_task_id():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"code": 200, "data": {"taskId": "task-42"}})

    client = SunoClient(make_config(), transport=httpx.MockTransport(handler))

    job_id = await client.submit_job(title="Rain Song", lyrics="Rain fall down", style="highlife")

    assert job_id == "task-42"
    assert captured["url"] == "https://suno.test/api/v1/generate"
    assert captured["auth"] == "Bearer test-key"
    assert captured["body"]["customMode"] is True
    assert captured["body"]["instrumental"] is False
    assert captured["body"]["prompt"] == "Rain fall down"
    assert captured["body"]["style"] == "highlife"
    assert captured["body"]["callBackUrl"] == "https://edusong.test/api/suno/callback"


@pytest.mark.asyncio
async def test_submit_job_accepts_snake_case_task_id():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"data": {"task_id": "task-7"}})
    )
    client = SunoClient(make_config(), transport=transport)

    assert await client.submit_job(title="t", lyrics="l", style="s") == "task-7"


@pytest.mark.asyncio
async def test_submit_job_raises_on_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="busy"))
    client = SunoClient(make_config(), transport=transport)

    with pytest.raises(RenderingError):
        await client.submit_job(title="t", lyrics="l", style="s")


@pytest.mark.asyncio
async def test_submit_job_raises_without_task_id():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"code": 400, "msg": "bad"})
    )
    client = SunoClient(make_config(), transport=transport)

    with pytest.raises(RenderingError):
        await client.submit_job(title="t", lyrics="l", style="s")


@pytest.mark.asyncio
async def test_submit_job_requires_api_key():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    client = SunoClient(make_config(api_key=None), transport=transport)

    with pytest.raises(RenderingError):
        await client.submit_job(title="t", lyrics="l", style="s")


@pytest.mark.asyncio
async def test_get_job_details_queries_status_endpoint():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["params"] = dict(request.url.params)
        return httpx.Response(200, json={"code": 200, "data": {"callbackType": "complete"}})

    client = SunoClient(make_config(), transport=httpx.MockTransport(handler))

    body = await client.get_job_details("task-42")

    assert captured["path"] == "/music/details"
    assert captured["params"] == {"id": "task-42"}
    assert body["data"]["callbackType"] == "complete"


@pytest.mark.asyncio
async def test_get_job_details_propagates_http_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"msg": "not found"}))
    client = SunoClient(make_config(), transport=transport)

    with pytest.raises(httpx.HTTPStatusError):
        await client.get_job_details("task-42")
