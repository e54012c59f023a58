"""Wire models for the messages API (Laravel JSON resources)."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SenderOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    name: str | None = None
    avatar_url: str | None = None


class AttachmentOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    path: str | None = None
    uri: str | None = None
    mime: str | None = None
    name: str | None = None
    size: int | None = None

    @property
    def location(self) -> str | None:
        return self.url or self.path or self.uri


class ReplyToOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    message: str | None = None
    sender: SenderOut | None = None


class MessageOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    message: str | None = None
    sender_id: int | None = None
    receiver_id: int | None = None
    group_id: int | None = None
    created_at: datetime | None = None
    sender: SenderOut | None = None
    attachments: list[AttachmentOut] = Field(default_factory=list)
    reply_to: ReplyToOut | None = None


class PaginatorOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[MessageOut] = Field(default_factory=list)
    current_page: int | None = None
    last_page: int | None = Field(
        default=None,
        validation_alias=AliasChoices("last_page", "lastPage"),
    )


class MessagesPageOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: PaginatorOut | list[MessageOut] = Field(default_factory=list)


def unwrap_envelope(body: Any) -> Any:
    """Strip ``{"status": "success", "data": ...}`` when the server wraps a payload."""
    if isinstance(body, dict) and body.get("status") == "success" and "data" in body:
        return body["data"]
    return body
