"""Amazon Bedrock text generation used by the lyric stage."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Mapping, Optional

import boto3
from fastapi.concurrency import run_in_threadpool

from app.config.settings import AwsConfig, BedrockConfig, settings

logger = logging.getLogger(__name__)


class LlmInvocationError(RuntimeError):
    """Raised when the Bedrock invocation fails."""


def _decode_bedrock_api_key(secret_value: Optional[str]) -> tuple[str, str] | None:
    """Split a BEDROCK_API_KEY (base64 or plain ``access:secret``) into its parts."""

    if not secret_value:
        return None

    try:
        raw = base64.b64decode(secret_value.strip(), validate=True)
    except (binascii.Error, ValueError):
        raw = secret_value.encode("utf-8", "ignore")

    printable = "".join(chr(b) for b in raw if 31 < b < 127)
    access_key, sep, secret_key = printable.partition(":")
    if not sep or not access_key or not secret_key:
        return None
    return access_key, secret_key


def _client_kwargs(bedrock: BedrockConfig, aws: AwsConfig) -> dict[str, Any]:
    """Bedrock's own key wins over the shared AWS keys; otherwise boto3 resolves credentials."""

    kwargs: dict[str, Any] = {"region_name": bedrock.region or aws.region}

    credentials = None
    if bedrock.api_key is not None:
        credentials = _decode_bedrock_api_key(bedrock.api_key.get_secret_value())
        if credentials is None:
            logger.warning("BEDROCK_API_KEY is set but could not be decoded; ignoring it")
    if credentials is None and aws.access_key and aws.secret_key:
        credentials = (aws.access_key, aws.secret_key)

    if credentials is not None:
        kwargs["aws_access_key_id"], kwargs["aws_secret_access_key"] = credentials
    return kwargs


def _collect_text(response: Mapping[str, Any]) -> str:
    blocks = response.get("output", {}).get("message", {}).get("content", [])
    return "\n".join(block["text"] for block in blocks if block.get("text")).strip()


class BedrockLlmClient:
    """Single-turn ``converse`` calls against one configured model.

    ``client`` accepts any object with a boto3-compatible ``converse``
    method. Without one, a ``bedrock-runtime`` client is built from
    settings; if that fails, every ``invoke`` raises.
    """

    def __init__(
        self,
        client: Any | None = None,
        *,
        config: BedrockConfig | None = None,
    ) -> None:
        self._config = config or settings.bedrock
        self._client = client
        if self._client is None:
            try:
                self._client = boto3.client(
                    "bedrock-runtime",
                    **_client_kwargs(self._config, settings.aws),
                )
            except Exception as exc:  # pragma: no cover - configuration issue
                logger.warning("Could not initialise Bedrock client: %s", exc)

    def _inference_config(self) -> dict[str, Any]:
        return {
            "maxTokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "topP": self._config.top_p,
        }

    async def invoke(self, *, system_prompt: str, user_prompt: str) -> str:
        """Return the model's text reply, or an empty string when it produced none."""

        target_model_id = self._config.model_id
        if self._client is None or not target_model_id:
            raise LlmInvocationError("Bedrock client is not configured.")

        request = {
            "modelId": target_model_id,
            "system": [{"text": system_prompt}],
            "messages": [{"role": "user", "content": [{"text": user_prompt}]}],
            "inferenceConfig": self._inference_config(),
        }

        try:
            response = await run_in_threadpool(self._client.converse, **request)
        except Exception as exc:
            logger.error("Bedrock converse failed model=%s: %s", target_model_id, exc)
            raise LlmInvocationError(str(exc)) from exc

        return _collect_text(response)


__all__ = ["BedrockLlmClient", "LlmInvocationError"]
