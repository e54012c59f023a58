from __future__ import annotations

from dataclasses import dataclass

from chat_client.domain.entities.message import ReplySnapshot


@dataclass(frozen=True, slots=True)
class PickedFile:
    """File or image chosen by the picker collaborator."""

    uri: str
    name: str
    mime: str = "application/octet-stream"
    size: int | None = None

    @property
    def is_image(self) -> bool:
        return self.mime.startswith("image/")


@dataclass(frozen=True, slots=True)
class VoiceRecording:
    uri: str
    duration: int


@dataclass(slots=True)
class ComposeState:
    text: str = ""
    attachment: PickedFile | None = None
    voice_recording: VoiceRecording | None = None
    reply_to: ReplySnapshot | None = None

    @property
    def is_empty(self) -> bool:
        return not self.text.strip() and self.attachment is None and self.voice_recording is None

    def clear(self) -> None:
        self.text = ""
        self.attachment = None
        self.voice_recording = None
        self.reply_to = None
