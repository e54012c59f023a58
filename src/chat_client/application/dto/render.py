from __future__ import annotations

from dataclasses import dataclass

from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.enums import MessageAction, MessageType
from chat_client.domain.value_objects.voice import VoicePayload


@dataclass(frozen=True, slots=True)
class RenderRow:
    message: Message
    show_date_separator: bool
    is_mine: bool
    voice: VoicePayload | None
    date_label: str
    time_label: str
    show_options: bool = False
    action: MessageAction = MessageAction.REPLY

    @property
    def is_voice(self) -> bool:
        return self.voice is not None

    @property
    def message_type(self) -> MessageType:
        return MessageType.VOICE if self.voice is not None else MessageType.TEXT

    @property
    def text(self) -> str | None:
        """Text shown in the bubble; the marker never leaks into it."""
        if self.voice is not None:
            return self.voice.text_part or None
        return self.message.body


@dataclass(frozen=True, slots=True)
class ErrorNotice:
    kind: str
    message: str
    retryable: bool = False
    blocking: bool = False
