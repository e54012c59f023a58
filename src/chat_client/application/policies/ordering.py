"""Chronological merge and duplicate suppression for the message list."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, tzinfo

from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.enums import MergeMode


def sort_key(message: Message) -> tuple[datetime, bool, int]:
    # Messages without an id sort after their same-instant peers.
    return (message.created_at, message.id is None, message.id or 0)


def is_sorted(messages: Sequence[Message]) -> bool:
    return all(sort_key(a) <= sort_key(b) for a, b in zip(messages, messages[1:]))


def merge(
    existing: Sequence[Message],
    incoming: Iterable[Message],
    mode: MergeMode,
) -> list[Message]:
    """Merge ``incoming`` into ``existing``.

    Incoming messages whose id is already known are skipped, so applying the
    same merge twice is a no-op. The result is always sorted by created_at.
    """
    seen = {m.id for m in existing if m.id is not None}
    fresh: list[Message] = []
    for message in sorted(incoming, key=sort_key):
        if message.id is not None:
            if message.id in seen:
                continue
            seen.add(message.id)
        fresh.append(message)

    if not fresh:
        return list(existing)

    if mode == MergeMode.PREPEND:
        result = fresh + list(existing)
    else:
        result = list(existing) + fresh

    # Overlapping pages or a skewed server clock; list.sort is stable.
    if not is_sorted(result):
        result.sort(key=sort_key)
    return result


def remove_by_id(existing: Sequence[Message], message_id: int) -> list[Message]:
    return [m for m in existing if m.id != message_id]


def local_date(ts: datetime, tz: tzinfo | None = None) -> date:
    return ts.astimezone(tz).date()


def needs_date_separator(
    current: Message,
    previous: Message | None,
    tz: tzinfo | None = None,
) -> bool:
    if previous is None:
        return True
    return local_date(current.created_at, tz) != local_date(previous.created_at, tz)
