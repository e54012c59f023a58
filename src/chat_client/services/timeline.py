from __future__ import annotations

from collections.abc import Iterable, Iterator

from chat_client.application.policies.ordering import merge, remove_by_id
from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.enums import MergeMode


class MessageTimeline:
    """Ordered, duplicate-free message list of one conversation view.

    Every insertion goes through ``ordering.merge`` and swaps the list in a
    single assignment, so readers never see a partially merged state.
    """

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._messages: tuple[Message, ...] = tuple(merge([], messages, MergeMode.APPEND))

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._messages

    def merge(self, incoming: Iterable[Message], mode: MergeMode) -> int:
        """Merge and return how many messages were actually added."""
        before = len(self._messages)
        self._messages = tuple(merge(self._messages, incoming, mode))
        return len(self._messages) - before

    def replace(self, messages: Iterable[Message]) -> None:
        self._messages = tuple(merge([], messages, MergeMode.APPEND))

    def remove(self, message_id: int) -> bool:
        before = len(self._messages)
        self._messages = tuple(remove_by_id(self._messages, message_id))
        return len(self._messages) != before

    def clear(self) -> None:
        self._messages = ()

    def get(self, message_id: int) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
