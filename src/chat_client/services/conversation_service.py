"""Conversation view controller: composes backfill, send and reply state."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, tzinfo

from chat_client.application.codecs.voice_marker import voice_payload_for
from chat_client.application.dto.identity import Identity
from chat_client.application.dto.render import ErrorNotice, RenderRow
from chat_client.application.exceptions import AppError
from chat_client.application.policies.formatting import format_message_date, format_message_time
from chat_client.application.policies.ordering import needs_date_separator
from chat_client.application.policies.permissions import action_for, assert_can_delete, is_mine
from chat_client.application.ports.clock import Clock
from chat_client.application.ports.transport import MessageTransport
from chat_client.application.ports.view import NullViewPort, ViewPort
from chat_client.config import Settings, settings
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.entities.message import Message, ReplySnapshot
from chat_client.domain.value_objects.enums import MessageAction
from chat_client.services.pagination_service import BackfillController
from chat_client.services.reply_service import ReplyResolver
from chat_client.services.scroll_anchor import ScrollAnchor
from chat_client.services.send_service import SendReconciler
from chat_client.services.timeline import MessageTimeline

logger = logging.getLogger(__name__)


def compose_render_rows(
    messages: Sequence[Message],
    pending_options_id: int | None,
    identity: Identity | None,
    *,
    base_url: str = "",
    tz: tzinfo | None = None,
    today: date | None = None,
) -> list[RenderRow]:
    rows: list[RenderRow] = []
    previous: Message | None = None
    for message in messages:
        rows.append(
            RenderRow(
                message=message,
                show_date_separator=needs_date_separator(message, previous, tz),
                is_mine=is_mine(message, identity),
                voice=voice_payload_for(message, base_url),
                date_label=format_message_date(message.created_at, today, tz),
                time_label=format_message_time(message.created_at, tz),
                show_options=pending_options_id is not None and message.id == pending_options_id,
                action=action_for(message, identity),
            )
        )
        previous = message
    return rows


class ConversationController:
    """State behind one chat screen, for either a user or a group.

    The rendering layer calls the ``on_*`` handlers and reads ``render()``.
    After ``close()`` late network results are dropped instead of applied.
    """

    def __init__(
        self,
        key: ConversationKey,
        transport: MessageTransport,
        identity: Identity | None,
        view: ViewPort | None = None,
        *,
        clock: Clock | None = None,
        config: Settings | None = None,
    ) -> None:
        cfg = config or settings
        self.key = key
        self.identity = identity
        self._transport = transport
        self._view = view or NullViewPort()
        self._alive = True
        self._base_url = cfg.api_root
        self.timeline = MessageTimeline()
        self.pagination = BackfillController(
            key,
            transport,
            self.timeline,
            self._view,
            clock=clock,
            page_size=cfg.PAGE_SIZE,
            scroll_threshold=cfg.SCROLL_TRIGGER_THRESHOLD,
            debounce_ms=cfg.BACKFILL_DEBOUNCE_MS,
            initial_scroll_delay_ms=cfg.INITIAL_SCROLL_DELAY_MS,
            has_more_fallback=cfg.HAS_MORE_FALLBACK,
            is_alive=self.is_alive,
        )
        self.sender = SendReconciler(
            key,
            transport,
            self.timeline,
            self._view,
            max_file_size=cfg.MAX_FILE_SIZE,
            max_image_size=cfg.MAX_IMAGE_SIZE,
            is_alive=self.is_alive,
        )
        self.replies = ReplyResolver(self.sender.compose, preview_chars=cfg.REPLY_PREVIEW_CHARS)
        self.anchor = ScrollAnchor(self._view)
        self.pending_options_id: int | None = None

    def is_alive(self) -> bool:
        return self._alive

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.timeline.messages

    async def load(self) -> None:
        await self.pagination.load_initial()

    def close(self) -> None:
        self._alive = False
        logger.debug("Conversation view %s closed", self.key)

    def render(self, *, tz: tzinfo | None = None, today: date | None = None) -> list[RenderRow]:
        return compose_render_rows(
            self.timeline.messages,
            self.pending_options_id,
            self.identity,
            base_url=self._base_url,
            tz=tz,
            today=today,
        )

    async def on_submit(self) -> Message | None:
        return await self.sender.submit()

    def on_reply(self, message: Message) -> ReplySnapshot:
        snapshot = self.replies.select(message)
        self.pending_options_id = None
        self._view.state_changed()
        return snapshot

    def on_cancel_reply(self) -> None:
        self.replies.cancel()
        self._view.state_changed()

    def on_long_press(self, message_id: int) -> MessageAction | None:
        message = self.timeline.get(message_id)
        if message is None:
            return None
        self.pending_options_id = message_id
        self._view.state_changed()
        return action_for(message, self.identity)

    def on_dismiss_options(self) -> None:
        self.pending_options_id = None
        self._view.state_changed()

    async def on_delete(self, message_id: int) -> bool:
        """Delete an own message once the server confirms. Returns success."""
        assert_can_delete(self.timeline.get(message_id), self.identity)
        try:
            await self._transport.delete_message(message_id)
        except AppError as exc:
            if self._alive:
                logger.warning("Delete of message %d failed in %s: %s", message_id, self.key, exc.detail)
                self._view.show_error(
                    ErrorNotice(kind=type(exc).__name__, message="Failed to delete message.")
                )
            return False
        if not self._alive:
            return False
        self.timeline.remove(message_id)
        if self.pending_options_id == message_id:
            self.pending_options_id = None
        self._view.state_changed()
        return True

    async def on_scroll(self, offset: float) -> bool:
        return await self.pagination.on_scroll(offset)

    async def on_scroll_near_top(self) -> bool:
        return await self.pagination.on_scroll_near_top()

    async def on_load_more(self) -> bool:
        return await self.pagination.request_next_page()

    def on_content_size_changed(self) -> bool:
        newest = self.timeline.messages[-1].id if len(self.timeline) else None
        return self.anchor.content_size_changed(newest, loading_more=self.pagination.state.loading_more)

    def on_keyboard_shown(self, height: float) -> None:
        self.anchor.keyboard_shown(height)

    def on_keyboard_hidden(self) -> None:
        self.anchor.keyboard_hidden()

    @property
    def bottom_padding(self) -> int:
        return self.anchor.bottom_padding
