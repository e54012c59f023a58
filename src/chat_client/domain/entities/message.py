from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.value_objects.enums import DeliveryState
from chat_client.domain.value_objects.ids import MessageId, UserId


@dataclass(frozen=True, slots=True)
class Attachment:
    url: str
    mime: str | None = None
    name: str | None = None
    size: int | None = None

    @property
    def is_image(self) -> bool:
        return bool(self.mime and self.mime.startswith("image/"))

    @property
    def is_audio(self) -> bool:
        return bool(self.mime and self.mime.startswith("audio/"))


@dataclass(frozen=True, slots=True)
class ReplySnapshot:
    """Point-in-time copy of the message being replied to."""

    target_id: MessageId | None
    body_preview: str
    sender_name: str


@dataclass(frozen=True, slots=True)
class Message:
    id: MessageId | None
    conversation_key: ConversationKey
    sender_id: UserId | None
    body: str | None
    created_at: datetime
    attachments: tuple[Attachment, ...] = ()
    reply_snapshot: ReplySnapshot | None = None
    delivery_state: DeliveryState = DeliveryState.CONFIRMED
    sender_name: str | None = None
