"""Song generation pipeline package.

Modules follow the order in which a song comes to life:

1. `lyrics`: prompt the LLM and parse the structured song fields.
2. `orchestrator`: submit the rendering job and persist the song.
3. `normalization`: reduce provider status/webhook payloads to one shape.
4. `orchestrator` again: reconcile webhook and poll signals into one
   idempotent `audio_url` write.

The FastAPI controllers import from here.
"""

from .lyrics import GenerationError, LyricsGenerator
from .normalization import normalize_render_payload
from .orchestrator import AudioJobOrchestrator
from .types import AudioPollResult, CallbackOutcome, PollStatus, RenderStatus

__all__ = [
    "AudioJobOrchestrator",
    "AudioPollResult",
    "CallbackOutcome",
    "GenerationError",
    "LyricsGenerator",
    "PollStatus",
    "RenderStatus",
    "normalize_render_payload",
]
