"""Typed containers shared across the song pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PollStatus(str, Enum):
    RUNNING = "running"
    SUCCESS = "success"
    EXPIRED = "expired"


class CallbackOutcome(str, Enum):
    """How a provider webhook delivery was handled."""

    RESOLVED = "resolved"
    PENDING = "pending"
    NOT_FOUND = "not_found"
    IGNORED = "ignored"


@dataclass(frozen=True)
class RenderStatus:
    """Provider job payload reduced to the two signals the orchestrator needs."""

    audio_url: Optional[str]
    is_complete: bool
    job_id: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.is_complete and bool(self.audio_url)


@dataclass(frozen=True)
class AudioPollResult:
    status: PollStatus
    audio_url: Optional[str] = None
