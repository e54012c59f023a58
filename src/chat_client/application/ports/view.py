from __future__ import annotations

from typing import Protocol

from chat_client.application.dto.render import ErrorNotice


class ViewPort(Protocol):
    """Callbacks into the rendering layer."""

    def state_changed(self) -> None: ...

    def show_error(self, notice: ErrorNotice) -> None: ...

    def scroll_to_end(self, *, animated: bool) -> None: ...


class NullViewPort:
    def state_changed(self) -> None:
        pass

    def show_error(self, notice: ErrorNotice) -> None:
        pass

    def scroll_to_end(self, *, animated: bool) -> None:
        pass
