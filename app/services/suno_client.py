"""HTTP client for the Suno music-rendering API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from app.config.settings import SunoConfig, settings

logger = logging.getLogger(__name__)


class RenderingError(RuntimeError):
    """Raised when the rendering provider rejects or fails a request."""


class SunoClient:
    """Submit rendering jobs and query their status."""

    def __init__(
        self,
        config: SunoConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or settings.suno
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if self._config.api_key is None:
            raise RenderingError("SUNO_API_KEY is not configured.")
        return {
            "Authorization": f"Bearer {self._config.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            transport=self._transport,
        )

    async def submit_job(self, *, title: str, lyrics: str, style: str) -> str:
        """Create a rendering job and return the provider's job identifier."""

        payload = {
            "customMode": True,
            "instrumental": False,
            "title": title,
            "style": style,
            "prompt": lyrics,
            "model": self._config.model,
            "callBackUrl": self._config.callback_url,
        }

        async with self._client() as client:
            try:
                response = await client.post(
                    "/api/v1/generate",
                    json=payload,
                    headers=self._headers(),
                )
                response.raise_for_status()
                body = response.json()
            except httpx.HTTPStatusError as exc:
                raise RenderingError(
                    f"Suno API error {exc.response.status_code}: {exc.response.text}"
                ) from exc
            except httpx.RequestError as exc:
                raise RenderingError(f"Unable to connect to Suno API: {exc}") from exc
            except ValueError as exc:
                raise RenderingError(f"Invalid response from Suno API: {exc}") from exc

        job_id = _extract_task_id(body)
        if not job_id:
            raise RenderingError(f"Suno API response did not include a task id: {body}")

        logger.info("Submitted Suno job %s for title=%r", job_id, title)
        return job_id

    async def get_job_details(self, job_id: str) -> Any:
        """Fetch the raw status payload for a job.

        Any failure propagates; callers decide how to treat a job that is
        not queryable yet.
        """

        async with self._client() as client:
            response = await client.get(
                self._config.status_path,
                params={self._config.status_id_param: job_id},
                headers=self._headers(),
            )
            response.raise_for_status()
            return response.json()


def _extract_task_id(body: Any) -> str | None:
    if not isinstance(body, Mapping):
        return None
    data = body.get("data")
    if isinstance(data, Mapping):
        task_id = data.get("taskId") or data.get("task_id")
        if task_id:
            return str(task_id)
    return None


__all__ = ["RenderingError", "SunoClient"]
