from datetime import datetime, timedelta, timezone
from typing import Optional

from .models import AudioState, Song


class SongAudioDomainService:
    """Domain rules for the PENDING -> RESOLVED audio transition"""

    @staticmethod
    def can_resolve(current_audio_url: Optional[str], candidate_url: Optional[str]) -> bool:
        """Only a pending song accepts a non-empty URL; resolved songs are final."""
        if not candidate_url or not candidate_url.strip():
            return False
        return not current_audio_url

    @staticmethod
    def is_expired(
        song: Song,
        timeout_minutes: Optional[int],
        now: Optional[datetime] = None,
    ) -> bool:
        """Whether a still-pending song has waited longer than the configured timeout."""
        if timeout_minutes is None or song.audio_state is AudioState.RESOLVED:
            return False

        created_at = song.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        current = now or datetime.now(timezone.utc)
        return current - created_at > timedelta(minutes=timeout_minutes)
