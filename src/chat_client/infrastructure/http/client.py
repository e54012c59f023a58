"""httpx implementation of the message transport port."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from types import TracebackType
from typing import Any, Self, TypeVar
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from chat_client.application.dto.page import Page, PageCursor
from chat_client.application.dto.payload import FileUpload, SendPayload
from chat_client.application.exceptions import NetworkFailure, ValidationFailure
from chat_client.config import settings
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.enums import ConversationKind
from chat_client.infrastructure.http.errors import error_for_response
from chat_client.infrastructure.http.hooks import attach_correlation_id, log_response_timing
from chat_client.infrastructure.http.mappers import message as mapper
from chat_client.infrastructure.http.schemas import MessageOut, MessagesPageOut, unwrap_envelope

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _read_upload(upload: FileUpload) -> bytes:
    parsed = urlparse(upload.uri)
    path = Path(parsed.path if parsed.scheme == "file" else upload.uri)
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise ValidationFailure(f"Cannot read attachment {upload.name}: {exc}") from exc


def _parse(model: type[ModelT], body: Any) -> ModelT:
    try:
        return model.model_validate(body)
    except SchemaError as exc:
        raise NetworkFailure(f"Unexpected {model.__name__} shape: {exc.error_count()} errors") from exc


class HttpMessageTransport:
    """Implements application.ports.transport.MessageTransport."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if client is None:
            headers = {"Accept": "application/json"}
            token = settings.API_TOKEN if token is None else token
            if token:
                headers["Authorization"] = f"Bearer {token}"
            client = httpx.AsyncClient(
                base_url=base_url or settings.API_BASE_URL,
                headers=headers,
                timeout=settings.REQUEST_TIMEOUT if timeout is None else timeout,
                transport=http_transport,
                event_hooks={
                    "request": [attach_correlation_id],
                    "response": [log_response_timing],
                },
            )
        self._client = client

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_page(self, key: ConversationKey, page: int, page_size: int) -> Page:
        body = await self._request(
            "GET",
            f"/messages/{key.kind}/{key.target_id}",
            params={"page": page, "per_page": page_size},
        )
        parsed = _parse(MessagesPageOut, body if isinstance(body, dict) else {"messages": body})
        if isinstance(parsed.messages, list):
            items, cursor = parsed.messages, None
        else:
            items = parsed.messages.data
            cursor = None
            if parsed.messages.current_page is not None and parsed.messages.last_page is not None:
                cursor = PageCursor(current=parsed.messages.current_page, last=parsed.messages.last_page)
        return Page(items=[mapper.model_to_entity(m, key) for m in items], cursor=cursor)

    async def send_message(self, payload: SendPayload) -> Message:
        files = [
            ("attachments[]", (upload.name, await _read_upload(upload), upload.mime))
            for upload in payload.attachments
        ]
        body = await self._request(
            "POST",
            "/messages",
            data=payload.form_fields(),
            files=files or None,
        )
        parsed = _parse(MessageOut, body)
        if parsed.id is None:
            raise NetworkFailure("Server response carries no message id")
        kind = ConversationKind.GROUP if payload.recipient_field == "group_id" else ConversationKind.USER
        return mapper.model_to_entity(parsed, ConversationKey(kind=kind, target_id=payload.recipient_id))

    async def delete_message(self, message_id: int) -> None:
        await self._request("DELETE", f"/messages/{message_id}")

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkFailure(str(exc) or type(exc).__name__) from exc

        error = error_for_response(response)
        if error is not None:
            raise error
        if not response.content:
            return {}
        try:
            return unwrap_envelope(response.json())
        except ValueError as exc:
            raise NetworkFailure(f"Malformed response from {path}") from exc
