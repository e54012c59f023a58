from __future__ import annotations

from dataclasses import dataclass

from chat_client.domain.value_objects.enums import ConversationKind


@dataclass(frozen=True, slots=True)
class ConversationKey:
    """Target of a conversation view: a single user or a group."""

    kind: ConversationKind
    target_id: int

    @classmethod
    def user(cls, user_id: int) -> ConversationKey:
        return cls(kind=ConversationKind.USER, target_id=user_id)

    @classmethod
    def group(cls, group_id: int) -> ConversationKey:
        return cls(kind=ConversationKind.GROUP, target_id=group_id)

    @property
    def payload_field(self) -> str:
        """Form field naming the recipient on send."""
        return "group_id" if self.kind == ConversationKind.GROUP else "receiver_id"

    def __str__(self) -> str:
        return f"{self.kind}:{self.target_id}"
