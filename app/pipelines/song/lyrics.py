"""Lyric generation stage (Stage 01 of the song pipeline)."""

from __future__ import annotations

import logging

from app.domain.models import Complexity, MusicalStyle
from app.services.llm_client import BedrockLlmClient, LlmInvocationError
from app.services.prompt_builder import build_prompt
from app.services.response_contract import LyricsPayload

logger = logging.getLogger("app.pipelines.song")


class GenerationError(RuntimeError):
    """Raised when the text-generation call itself fails."""


def _truncate(value: str, max_length: int = 500) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


class LyricsGenerator:
    """Turn lesson content into structured song fields with one LLM call."""

    def __init__(self, llm_client: BedrockLlmClient | None = None) -> None:
        self._llm_client = llm_client

    @property
    def llm_client(self) -> BedrockLlmClient:
        if self._llm_client is None:
            self._llm_client = BedrockLlmClient()
        return self._llm_client

    async def generate(
        self,
        content: str,
        *,
        style: MusicalStyle,
        complexity: Complexity,
    ) -> LyricsPayload:
        prompts = build_prompt(content=content, style=style, complexity=complexity)

        try:
            raw_response = await self.llm_client.invoke(
                system_prompt=prompts.system_prompt,
                user_prompt=prompts.user_prompt,
            )
        except LlmInvocationError as exc:
            raise GenerationError(f"Failed to generate song: {exc}") from exc

        logger.info(
            "Raw lyric output style=%s complexity=%s: %s",
            style.value,
            complexity.value,
            _truncate(raw_response or ""),
        )
        return LyricsPayload.from_text(raw_response)


__all__ = ["GenerationError", "LyricsGenerator"]
