from __future__ import annotations

from typing import Protocol

from chat_client.application.dto.page import Page
from chat_client.application.dto.payload import SendPayload
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.entities.message import Message


class MessageTransport(Protocol):
    async def fetch_page(
        self,
        key: ConversationKey,
        page: int,
        page_size: int,
    ) -> Page: ...

    async def send_message(self, payload: SendPayload) -> Message:
        """Submit a message. Returns the server's copy with its assigned id."""
        ...

    async def delete_message(self, message_id: int) -> None: ...
