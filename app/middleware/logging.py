"""Per-request access logging with request ids."""

from __future__ import annotations

import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.middleware.structured")

REQUEST_ID_HEADER = "X-Request-ID"

_STATUS_COLORS = (
    (500, "\u001b[31m"),
    (400, "\u001b[33m"),
    (200, "\u001b[32m"),
)
_DEFAULT_COLOR = "\u001b[36m"
_RESET = "\u001b[0m"


def _color_for(status_code: int) -> str:
    for floor, color in _STATUS_COLORS:
        if status_code >= floor:
            return color
    return _DEFAULT_COLOR


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and echo its request id back to the client.

    A client-supplied ``X-Request-ID`` is reused so webhook retries from the
    rendering provider can be correlated in the logs.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:  # pragma: no cover - defensive
            logger.exception(self._line(request, request_id, 500, started))
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(self._line(request, request_id, response.status_code, started))
        return response

    @staticmethod
    def _line(
        request: Request,
        request_id: str,
        status_code: int,
        started: float,
    ) -> str:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        client_ip = request.client.host if request.client else "-"
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        return (
            f"{_color_for(status_code)}"
            f"{request.method} {path} status={status_code} duration_ms={duration_ms} "
            f"client={client_ip} request_id={request_id}"
            f"{_RESET}"
        )
