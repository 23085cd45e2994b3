"""Bedrock client wrapper with a stubbed boto3 runtime client."""

from __future__ import annotations

import base64
from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.config.settings import BedrockConfig  # noqa: E402
from app.services.llm_client import (  # noqa: E402
    BedrockLlmClient,
    LlmInvocationError,
    _decode_bedrock_api_key,
)


class FakeRuntime:
    def __init__(self, response=None, error=None) -> None:
        self.response = response or {}
        self.error = error
        self.requests: list[dict] = []

    def converse(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_config() -> BedrockConfig:
    return BedrockConfig(
        BEDROCK_MODEL_ID="test-model",
        BEDROCK_MAX_TOKENS=512,
        BEDROCK_TEMPERATURE=0.5,
        BEDROCK_TOP_P=0.8,
    )


@pytest.mark.asyncio
async def test_invoke_joins_text_blocks_and_sends_inference_config():
    runtime = FakeRuntime(
        response={
            "output": {
                "message": {
                    "content": [{"text": '{"title": "Rain"'}, {"image": {}}, {"text": "}"}]
                }
            }
        }
    )
    client = BedrockLlmClient(runtime, config=make_config())

    text = await client.invoke(system_prompt="sys", user_prompt="user")

    assert text == '{"title": "Rain"\n}'
    request = runtime.requests[0]
    assert request["modelId"] == "test-model"
    assert request["system"] == [{"text": "sys"}]
    assert request["messages"][0]["content"] == [{"text": "user"}]
    assert request["inferenceConfig"] == {"maxTokens": 512, "temperature": 0.5, "topP": 0.8}


@pytest.mark.asyncio
async def test_invoke_returns_empty_string_without_text():
    client = BedrockLlmClient(FakeRuntime(response={"output": {}}), config=make_config())

    assert await client.invoke(system_prompt="s", user_prompt="u") == ""


@pytest.mark.asyncio
async def test_invoke_wraps_runtime_errors():
    client = BedrockLlmClient(FakeRuntime(error=RuntimeError("throttled")), config=make_config())

    with pytest.raises(LlmInvocationError):
        await client.invoke(system_prompt="s", user_prompt="u")


def test_api_key_accepts_base64_and_plain_forms():
    encoded = base64.b64encode(b"AKIDEXAMPLE:secret/value").decode()

    assert _decode_bedrock_api_key(encoded) == ("AKIDEXAMPLE", "secret/value")
    assert _decode_bedrock_api_key("AKID:plain-secret") == ("AKID", "plain-secret")
    assert _decode_bedrock_api_key("no-separator") is None
    assert _decode_bedrock_api_key(None) is None
