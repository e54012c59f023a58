from __future__ import annotations

from dataclasses import dataclass

from chat_client.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class Identity:
    """Signed-in user the view renders for."""

    user_id: UserId
    name: str = ""

    def owns(self, sender_id: int | None) -> bool:
        return sender_id is not None and sender_id == self.user_id
