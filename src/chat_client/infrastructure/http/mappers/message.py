from __future__ import annotations

from datetime import datetime, timezone

from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.entities.message import Attachment, Message, ReplySnapshot
from chat_client.domain.value_objects.enums import DeliveryState
from chat_client.infrastructure.http.schemas import AttachmentOut, MessageOut, ReplyToOut

UNKNOWN_SENDER = "User"


def _aware(ts: datetime | None, fallback: datetime) -> datetime:
    if ts is None:
        return fallback
    # Server timestamps without an offset are UTC.
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def attachment_to_entity(model: AttachmentOut) -> Attachment | None:
    location = model.location
    if not location:
        return None
    return Attachment(url=location, mime=model.mime, name=model.name, size=model.size)


def reply_to_snapshot(model: ReplyToOut) -> ReplySnapshot:
    return ReplySnapshot(
        target_id=model.id,
        body_preview=model.message or "",
        sender_name=(model.sender.name if model.sender else None) or UNKNOWN_SENDER,
    )


def model_to_entity(
    model: MessageOut,
    key: ConversationKey,
    *,
    received_at: datetime | None = None,
) -> Message:
    attachments = tuple(a for a in (attachment_to_entity(m) for m in model.attachments) if a is not None)
    sender_id = model.sender_id if model.sender_id is not None else (model.sender.id if model.sender else None)
    return Message(
        id=model.id,
        conversation_key=key,
        sender_id=sender_id,
        body=model.message,
        created_at=_aware(model.created_at, received_at or datetime.now(timezone.utc)),
        attachments=attachments,
        reply_snapshot=reply_to_snapshot(model.reply_to) if model.reply_to else None,
        delivery_state=DeliveryState.CONFIRMED,
        sender_name=model.sender.name if model.sender else None,
    )
