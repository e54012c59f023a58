"""Keeps the newest message in view as the content or keyboard changes.

Keyboard height and scroll position belong to the rendering layer; this
observer only turns explicit layout events into viewport commands and never
touches conversation state.
"""
from __future__ import annotations

from chat_client.application.ports.view import ViewPort

KEYBOARD_PADDING = 20


class ScrollAnchor:
    def __init__(self, view: ViewPort) -> None:
        self._view = view
        self.keyboard_height = 0.0
        self._newest_id: int | None = None

    @property
    def bottom_padding(self) -> int:
        return KEYBOARD_PADDING if self.keyboard_height > 0 else 0

    def keyboard_shown(self, height: float) -> None:
        self.keyboard_height = max(height, 0.0)
        self._view.scroll_to_end(animated=True)

    def keyboard_hidden(self) -> None:
        self.keyboard_height = 0.0

    def content_size_changed(self, newest_id: int | None, *, loading_more: bool = False) -> bool:
        """Follow new content at the bottom; prepended history keeps the position."""
        grew_at_bottom = newest_id != self._newest_id
        self._newest_id = newest_id
        if loading_more or not grew_at_bottom:
            return False
        self._view.scroll_to_end(animated=True)
        return True
