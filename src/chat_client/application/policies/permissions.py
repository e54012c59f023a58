from __future__ import annotations

from chat_client.application.dto.identity import Identity
from chat_client.application.exceptions import ForbiddenActionError, NotFoundError
from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.enums import MessageAction


def is_mine(message: Message, identity: Identity | None) -> bool:
    if identity is None:
        return False
    return identity.owns(message.sender_id)


def action_for(message: Message, identity: Identity | None) -> MessageAction:
    """The single option offered on long-press: delete own, reply to others."""
    return MessageAction.DELETE if is_mine(message, identity) else MessageAction.REPLY


def assert_can_delete(message: Message | None, identity: Identity | None) -> Message:
    """Raise if the message is unknown or not owned by the current user."""
    if message is None:
        raise NotFoundError("Message not found")
    if message.id is None:
        raise NotFoundError("Message has no server id yet")
    if action_for(message, identity) != MessageAction.DELETE:
        raise ForbiddenActionError("Only your own messages can be deleted")
    return message
