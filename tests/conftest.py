"""Shared test fixtures."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest

from chat_client.application.dto.identity import Identity
from chat_client.application.dto.page import Page, PageCursor
from chat_client.application.dto.payload import SendPayload
from chat_client.application.dto.render import ErrorNotice
from chat_client.application.exceptions import AppError
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.entities.message import Attachment, Message
from chat_client.domain.value_objects.enums import ConversationKind

ME = 42
PEER = 7
BASE_TIME = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def me() -> Identity:
    return Identity(user_id=ME, name="Me")


@pytest.fixture
def peer_key() -> ConversationKey:
    return ConversationKey.user(PEER)


def make_message(
    message_id: int | None,
    *,
    minutes: float = 0,
    sender_id: int = PEER,
    body: str | None = "hello",
    attachments: tuple[Attachment, ...] = (),
    key: ConversationKey | None = None,
    sender_name: str | None = "Peer",
) -> Message:
    return Message(
        id=message_id,
        conversation_key=key or ConversationKey.user(PEER),
        sender_id=sender_id,
        body=body,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        attachments=attachments,
        sender_name=sender_name,
    )


def make_page(ids: range | list[int], *, current: int | None = None, last: int | None = None) -> Page:
    """Page of messages whose id doubles as the minute offset."""
    cursor = PageCursor(current=current, last=last) if current is not None and last is not None else None
    return Page(items=[make_message(i, minutes=i) for i in ids], cursor=cursor)


@dataclass
class FakeClock:
    ms: float = 100_000.0

    def now(self) -> datetime:
        return BASE_TIME + timedelta(milliseconds=self.ms)

    def now_ms(self) -> float:
        return self.ms

    def advance(self, ms: float) -> None:
        self.ms += ms


@dataclass
class FakeTransport:
    """In-memory transport for unit tests."""
    pages: dict[int, Page] = field(default_factory=dict)
    fetch_calls: list[tuple[ConversationKey, int, int]] = field(default_factory=list)
    fetch_error: AppError | None = None
    fetch_gate: asyncio.Event | None = None

    sent: list[SendPayload] = field(default_factory=list)
    send_error: AppError | None = None
    send_result: Message | None = None
    send_gate: asyncio.Event | None = None

    deleted: list[int] = field(default_factory=list)
    delete_error: AppError | None = None

    _next_id: int = 1000

    async def fetch_page(self, key: ConversationKey, page: int, page_size: int) -> Page:
        self.fetch_calls.append((key, page, page_size))
        if self.fetch_gate is not None:
            await self.fetch_gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.pages.get(page, Page(items=[]))

    async def send_message(self, payload: SendPayload) -> Message:
        self.sent.append(payload)
        if self.send_gate is not None:
            await self.send_gate.wait()
        if self.send_error is not None:
            raise self.send_error
        if self.send_result is not None:
            return self.send_result
        self._next_id += 1
        kind = ConversationKind.GROUP if payload.recipient_field == "group_id" else ConversationKind.USER
        return Message(
            id=self._next_id,
            conversation_key=ConversationKey(kind=kind, target_id=payload.recipient_id),
            sender_id=ME,
            body=payload.message,
            created_at=BASE_TIME + timedelta(days=1),
        )

    async def delete_message(self, message_id: int) -> None:
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.append(message_id)


@dataclass
class RecordingView:
    changes: int = 0
    errors: list[ErrorNotice] = field(default_factory=list)
    scrolls: list[bool] = field(default_factory=list)

    def state_changed(self) -> None:
        self.changes += 1

    def show_error(self, notice: ErrorNotice) -> None:
        self.errors.append(notice)

    def scroll_to_end(self, *, animated: bool) -> None:
        self.scrolls.append(animated)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
