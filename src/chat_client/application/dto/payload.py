from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FileUpload:
    uri: str
    name: str
    mime: str


@dataclass(frozen=True, slots=True)
class SendPayload:
    recipient_field: str
    recipient_id: int
    message: str | None = None
    reply_to_id: int | None = None
    attachments: tuple[FileUpload, ...] = ()
    voice_duration: int | None = None

    @property
    def is_voice_message(self) -> bool:
        return self.voice_duration is not None

    def form_fields(self) -> dict[str, str]:
        """Non-file multipart fields. Optional fields are omitted, never blank."""
        fields: dict[str, str] = {}
        if self.message:
            fields["message"] = self.message
        fields[self.recipient_field] = str(self.recipient_id)
        if self.reply_to_id is not None:
            fields["reply_to_id"] = str(self.reply_to_id)
        # Advisory only; the body marker stays authoritative.
        if self.voice_duration is not None:
            fields["voice_duration"] = str(self.voice_duration)
            fields["is_voice_message"] = "true"
        return fields
