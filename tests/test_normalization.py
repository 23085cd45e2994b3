"""Provider payload normalization across status and webhook shapes."""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.pipelines.song import normalize_render_payload  # noqa: E402


def test_webhook_envelope_with_output_list():
    status = normalize_render_payload(
        {
            "code": 200,
            "data": {
                "callbackType": "complete",
                "task_id": "t1",
                "data": [{"audio_url": "https://x/a.mp3"}],
            },
        }
    )

    assert status.job_id == "t1"
    assert status.audio_url == "https://x/a.mp3"
    assert status.is_complete
    assert status.is_ready


def test_task_at_top_level_with_camel_case_task_id():
    status = normalize_render_payload(
        {
            "callbackType": "complete",
            "taskId": "t2",
            "data": [{"audio_url": "https://x/b.mp3"}, {"audio_url": "https://x/c.mp3"}],
        }
    )

    assert status.job_id == "t2"
    assert status.audio_url == "https://x/b.mp3"
    assert status.is_ready


def test_output_as_single_object():
    status = normalize_render_payload(
        {"data": {"callbackType": "complete", "task_id": "t3", "data": {"audio_url": "https://x/d.mp3"}}}
    )

    assert status.audio_url == "https://x/d.mp3"
    assert status.is_ready


def test_audio_url_on_the_task_itself():
    status = normalize_render_payload(
        {"data": {"callbackType": "complete", "task_id": "t4", "audio_url": "https://x/e.mp3"}}
    )

    assert status.audio_url == "https://x/e.mp3"
    assert status.is_ready


def test_double_envelope_is_unwrapped():
    status = normalize_render_payload(
        {
            "code": 200,
            "data": {
                "data": {
                    "callbackType": "complete",
                    "task_id": "t5",
                    "data": [{"audio_url": "https://x/f.mp3"}],
                }
            },
        }
    )

    assert status.job_id == "t5"
    assert status.audio_url == "https://x/f.mp3"
    assert status.is_ready


def test_non_complete_callback_is_not_ready_even_with_url():
    status = normalize_render_payload(
        {
            "data": {
                "callbackType": "first",
                "task_id": "t6",
                "data": [{"audio_url": "https://x/g.mp3"}],
            }
        }
    )

    assert status.job_id == "t6"
    assert status.audio_url == "https://x/g.mp3"
    assert not status.is_complete
    assert not status.is_ready


def test_complete_without_url_is_not_ready():
    status = normalize_render_payload(
        {"data": {"callbackType": "complete", "task_id": "t7", "data": [{"audio_url": ""}]}}
    )

    assert status.is_complete
    assert status.audio_url is None
    assert not status.is_ready


def test_non_mapping_payload_is_empty():
    status = normalize_render_payload(["unexpected"])

    assert status.job_id is None
    assert status.audio_url is None
    assert not status.is_ready


def test_bare_envelope_without_task_id_or_code():
    status = normalize_render_payload(
        {"data": {"data": [{"audio_url": "X"}], "callbackType": "complete"}}
    )

    assert status.audio_url == "X"
    assert status.job_id is None
    assert status.is_ready


def test_callback_type_match_is_exact():
    for callback_type in ("first", "COMPLETE", "text"):
        status = normalize_render_payload(
            {"data": {"data": [{"audio_url": "X"}], "callbackType": callback_type}}
        )
        assert not status.is_ready, callback_type
