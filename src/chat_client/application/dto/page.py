from __future__ import annotations

from dataclasses import dataclass

from chat_client.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class PageCursor:
    current: int
    last: int

    @property
    def has_more(self) -> bool:
        return self.current < self.last


@dataclass(frozen=True, slots=True)
class Page:
    items: list[Message]
    cursor: PageCursor | None = None
