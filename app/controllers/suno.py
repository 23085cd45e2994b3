"""Suno webhook endpoint.

Suno retries deliveries that are not acknowledged, so every delivery that
can be processed gets a 200 receipt, including ones for unknown jobs.
Only genuine processing failures (e.g. storage errors) return 500.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from app.controllers.dependencies import OrchestratorDep
from app.pipelines.song import CallbackOutcome
from app.views import CallbackAcknowledgement

router = APIRouter(prefix="/api/suno", tags=["suno"])

logger = logging.getLogger(__name__)


@router.post("/callback", response_model=CallbackAcknowledgement)
async def suno_callback(
    request: Request,
    orchestrator: OrchestratorDep,
) -> CallbackAcknowledgement:
    try:
        payload: Any = await request.json()
    except ValueError:
        logger.warning("Suno callback body is not valid JSON; acknowledging anyway")
        return CallbackAcknowledgement(status=CallbackOutcome.IGNORED)

    try:
        outcome, _ = await orchestrator.handle_callback(payload)
    except Exception as exc:
        logger.exception("Suno callback error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process callback",
        ) from exc

    return CallbackAcknowledgement(status=outcome)
