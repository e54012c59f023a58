"""In-band voice marker carried at the end of a message body.

Body format: ``"<text> [VOICE_MESSAGE:<seconds>]"`` or, without text,
``"[VOICE_MESSAGE:<seconds>]"``. The marker is the only signal that a
message is a voice message; an audio attachment alone is not.
Decoding trims whitespace around the text part, so only trimmed texts
survive an encode and decode unchanged.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from chat_client.application.policies.media import resolve_media_url
from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.voice import VoicePayload

_MARKER_RE = re.compile(r"\[VOICE_MESSAGE:([0-9]+)\]\Z")
_ANY_MARKER_RE = re.compile(r"\[VOICE_MESSAGE:[^\]]*\]")


@dataclass(frozen=True, slots=True)
class VoiceMarker:
    is_voice: bool
    duration: int | None = None
    text_part: str | None = None


NOT_VOICE = VoiceMarker(is_voice=False)


def encode_voice_body(text: str, duration: int) -> str:
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
        raise ValueError(f"duration must be a non-negative integer, got {duration!r}")
    if _ANY_MARKER_RE.search(text):
        raise ValueError("text already carries a voice marker")
    marker = f"[VOICE_MESSAGE:{duration}]"
    return f"{text} {marker}" if text else marker


def decode_voice_body(body: str | None) -> VoiceMarker:
    if not body:
        return NOT_VOICE
    match = _MARKER_RE.search(body)
    if match is None:
        return NOT_VOICE
    if len(_ANY_MARKER_RE.findall(body)) > 1:
        return NOT_VOICE
    return VoiceMarker(
        is_voice=True,
        duration=int(match.group(1)),
        text_part=body[: match.start()].strip(),
    )


def voice_payload_for(message: Message, base_url: str = "") -> VoicePayload | None:
    """Voice data for rendering, or None when the body is plain text."""
    marker = decode_voice_body(message.body)
    if not marker.is_voice:
        return None
    audio = next((a for a in message.attachments if a.is_audio), None)
    return VoicePayload(
        duration=marker.duration or 0,
        text_part=marker.text_part or "",
        audio_url=resolve_media_url(audio.url, base_url) if audio else None,
    )
