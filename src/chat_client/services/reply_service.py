from __future__ import annotations

from chat_client.application.codecs.voice_marker import decode_voice_body
from chat_client.application.dto.compose import ComposeState
from chat_client.config import settings
from chat_client.domain.entities.message import Message, ReplySnapshot

VOICE_PREVIEW = "Voice message"
ATTACHMENT_PREVIEW = "Attachment"
UNKNOWN_SENDER = "User"


def _preview_text(target: Message) -> str:
    marker = decode_voice_body(target.body)
    if marker.is_voice:
        return marker.text_part or VOICE_PREVIEW
    if target.body:
        return target.body
    if target.attachments:
        return target.attachments[0].name or ATTACHMENT_PREVIEW
    return ""


def build_reply_snapshot(target: Message, *, preview_chars: int | None = None) -> ReplySnapshot:
    """Copy what the reply bubble shows; later edits or deletes do not reach it."""
    limit = settings.REPLY_PREVIEW_CHARS if preview_chars is None else preview_chars
    preview = _preview_text(target)
    if len(preview) > limit:
        preview = preview[: max(limit - 3, 0)].rstrip() + "..."
    return ReplySnapshot(
        target_id=target.id,
        body_preview=preview,
        sender_name=target.sender_name or UNKNOWN_SENDER,
    )


class ReplyResolver:
    def __init__(self, compose: ComposeState, *, preview_chars: int | None = None) -> None:
        self._compose = compose
        self._preview_chars = preview_chars

    @property
    def pending(self) -> ReplySnapshot | None:
        return self._compose.reply_to

    def select(self, target: Message) -> ReplySnapshot:
        snapshot = build_reply_snapshot(target, preview_chars=self._preview_chars)
        self._compose.reply_to = snapshot
        return snapshot

    def cancel(self) -> None:
        self._compose.reply_to = None
