from __future__ import annotations

from enum import StrEnum


class ConversationKind(StrEnum):
    USER = "user"
    GROUP = "group"


class DeliveryState(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class MessageType(StrEnum):
    TEXT = "text"
    VOICE = "voice"


class MessageAction(StrEnum):
    REPLY = "reply"
    DELETE = "delete"


class SendState(StrEnum):
    COMPOSING = "composing"
    SENDING = "sending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class MergeMode(StrEnum):
    PREPEND = "prepend"
    APPEND = "append"
