"""Schemas for the Suno webhook endpoint."""

from pydantic import BaseModel

from app.pipelines.song import CallbackOutcome


class CallbackAcknowledgement(BaseModel):
    """Receipt sent back to Suno; the provider retries anything else."""

    received: bool = True
    status: CallbackOutcome
