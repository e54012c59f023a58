from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class VoicePayload:
    """Voice metadata decoded from a message body."""

    duration: int
    text_part: str
    audio_url: str | None = None
