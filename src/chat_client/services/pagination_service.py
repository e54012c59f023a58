"""History backfill: page cursor, has-more tracking and scroll debouncing."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from chat_client.application.dto.page import PageCursor
from chat_client.application.dto.render import ErrorNotice
from chat_client.application.exceptions import AppError
from chat_client.application.ports.clock import Clock, SystemClock
from chat_client.application.ports.transport import MessageTransport
from chat_client.application.ports.view import ViewPort
from chat_client.config import settings
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.value_objects.enums import MergeMode
from chat_client.services.timeline import MessageTimeline

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PaginationState:
    page: int = 1
    page_size: int = 10
    has_more: bool = True
    loading_more: bool = False
    last_trigger_at: float | None = None
    # Older pages are only fetched on top of a loaded newest page.
    initial_loaded: bool = False


def resolve_has_more(
    count: int,
    cursor: PageCursor | None,
    page_size: int,
    *,
    fallback: bool = True,
) -> bool:
    """Whether older pages may exist after a page of ``count`` items.

    The server cursor wins when present. Without it a full page is taken as
    a hint that more may follow, which is only a best-effort guess.
    """
    if count == 0:
        return False
    if cursor is not None:
        return cursor.has_more
    return fallback and count >= page_size


class BackfillController:
    def __init__(
        self,
        key: ConversationKey,
        transport: MessageTransport,
        timeline: MessageTimeline,
        view: ViewPort,
        *,
        clock: Clock | None = None,
        page_size: int | None = None,
        scroll_threshold: float | None = None,
        debounce_ms: int | None = None,
        initial_scroll_delay_ms: int | None = None,
        has_more_fallback: bool | None = None,
        is_alive: Callable[[], bool] = lambda: True,
    ) -> None:
        self._key = key
        self._transport = transport
        self._timeline = timeline
        self._view = view
        self._clock = clock or SystemClock()
        self._is_alive = is_alive
        self.scroll_threshold = settings.SCROLL_TRIGGER_THRESHOLD if scroll_threshold is None else scroll_threshold
        self.debounce_ms = settings.BACKFILL_DEBOUNCE_MS if debounce_ms is None else debounce_ms
        self.initial_scroll_delay_ms = (
            settings.INITIAL_SCROLL_DELAY_MS if initial_scroll_delay_ms is None else initial_scroll_delay_ms
        )
        self.has_more_fallback = settings.HAS_MORE_FALLBACK if has_more_fallback is None else has_more_fallback
        self.state = PaginationState(page_size=page_size or settings.PAGE_SIZE)
        self.loading = False

    async def load_initial(self) -> None:
        """Fetch the newest page and replace whatever the view held."""
        page_size = self.state.page_size
        self.loading = True
        self._view.state_changed()
        try:
            page = await self._transport.fetch_page(self._key, 1, page_size)
        except AppError as exc:
            self.loading = False
            if not self._is_alive():
                return
            self.state.initial_loaded = False
            logger.warning("Initial load failed for %s: %s", self._key, exc.detail)
            self._timeline.clear()
            self._view.show_error(
                ErrorNotice(
                    kind=type(exc).__name__,
                    message="Could not load messages.",
                    retryable=True,
                    blocking=True,
                )
            )
            self._view.state_changed()
            return

        self.loading = False
        if not self._is_alive():
            logger.debug("Discarding initial page for closed view %s", self._key)
            return

        self._timeline.replace(page.items)
        self.state.page = 1
        self.state.initial_loaded = True
        self.state.has_more = resolve_has_more(
            len(page.items), page.cursor, page_size, fallback=self.has_more_fallback,
        )
        logger.info(
            "Loaded %d messages for %s (has_more=%s)",
            len(page.items), self._key, self.state.has_more,
        )
        self._view.state_changed()
        if len(self._timeline):
            self._schedule_scroll_to_end()

    async def request_next_page(self) -> bool:
        """Fetch the next older page. Returns False when nothing was fetched."""
        if not self.state.initial_loaded or self.loading:
            return False
        if self.state.loading_more or not self.state.has_more:
            return False

        next_page = self.state.page + 1
        self.state.loading_more = True
        self._view.state_changed()
        try:
            page = await self._transport.fetch_page(self._key, next_page, self.state.page_size)
        except AppError as exc:
            error: AppError | None = exc
        else:
            error = None
        finally:
            self.state.loading_more = False

        if not self._is_alive():
            logger.debug("Discarding page %d for closed view %s", next_page, self._key)
            return True

        if error is not None:
            logger.warning("Backfill of page %d failed for %s: %s", next_page, self._key, error.detail)
            self._view.show_error(
                ErrorNotice(kind=type(error).__name__, message="Could not load older messages.")
            )
            self._view.state_changed()
            return True

        if not page.items:
            self.state.has_more = False
        else:
            added = self._timeline.merge(page.items, MergeMode.PREPEND)
            self.state.page = next_page
            self.state.has_more = resolve_has_more(
                len(page.items), page.cursor, self.state.page_size, fallback=self.has_more_fallback,
            )
            logger.debug("Backfilled %d messages (page=%d) for %s", added, next_page, self._key)
        self._view.state_changed()
        return True

    async def on_scroll(self, offset: float) -> bool:
        """Scroll observer entry point; ``offset`` is the distance from the top."""
        if offset > self.scroll_threshold:
            return False
        return await self.on_scroll_near_top()

    async def on_scroll_near_top(self) -> bool:
        if not self.state.initial_loaded or not self.state.has_more or self.state.loading_more:
            return False
        now = self._clock.now_ms()
        last = self.state.last_trigger_at
        if last is not None and now - last <= self.debounce_ms:
            return False
        # Set before the fetch resolves so rapid scroll events cannot stack.
        self.state.last_trigger_at = now
        return await self.request_next_page()

    def _schedule_scroll_to_end(self) -> None:
        loop = asyncio.get_running_loop()
        loop.call_later(self.initial_scroll_delay_ms / 1000, self._scroll_to_end)

    def _scroll_to_end(self) -> None:
        if self._is_alive() and len(self._timeline):
            self._view.scroll_to_end(animated=False)
