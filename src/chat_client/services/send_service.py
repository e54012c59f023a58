"""Outgoing messages: confirm-then-insert send state machine."""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from chat_client.application.codecs.voice_marker import encode_voice_body
from chat_client.application.dto.compose import ComposeState, PickedFile, VoiceRecording
from chat_client.application.dto.payload import FileUpload, SendPayload
from chat_client.application.dto.render import ErrorNotice
from chat_client.application.exceptions import (
    AppError,
    AttachmentTooLargeError,
    ConstraintFailure,
    ValidationFailure,
)
from chat_client.application.ports.transport import MessageTransport
from chat_client.application.ports.view import ViewPort
from chat_client.config import settings
from chat_client.domain.entities.conversation import ConversationKey
from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.enums import MergeMode, SendState
from chat_client.services.timeline import MessageTimeline

logger = logging.getLogger(__name__)

VOICE_FILE_NAME = "voice_message.m4a"
VOICE_MIME = "audio/m4a"


def build_send_payload(compose: ComposeState, key: ConversationKey) -> SendPayload:
    """Translate the composer into the multipart fields the server expects."""
    text = compose.text.strip()
    uploads: list[FileUpload] = []
    voice_duration: int | None = None

    if compose.attachment is not None:
        uploads.append(
            FileUpload(
                uri=compose.attachment.uri,
                name=compose.attachment.name,
                mime=compose.attachment.mime,
            )
        )

    if compose.voice_recording is not None:
        voice_duration = compose.voice_recording.duration
        try:
            text = encode_voice_body(text, voice_duration)
        except ValueError as exc:
            raise ValidationFailure(str(exc)) from exc
        uploads.append(FileUpload(uri=compose.voice_recording.uri, name=VOICE_FILE_NAME, mime=VOICE_MIME))

    return SendPayload(
        recipient_field=key.payload_field,
        recipient_id=key.target_id,
        message=text or None,
        reply_to_id=compose.reply_to.target_id if compose.reply_to is not None else None,
        attachments=tuple(uploads),
        voice_duration=voice_duration,
    )


class SendReconciler:
    """Runs one submit at a time: composing -> sending -> confirmed | failed.

    Nothing is inserted into the timeline before the server confirms, so a
    failed send leaves no trace besides the preserved composer.
    """

    def __init__(
        self,
        key: ConversationKey,
        transport: MessageTransport,
        timeline: MessageTimeline,
        view: ViewPort,
        compose: ComposeState | None = None,
        *,
        max_file_size: int | None = None,
        max_image_size: int | None = None,
        is_alive: Callable[[], bool] = lambda: True,
    ) -> None:
        self._key = key
        self._transport = transport
        self._timeline = timeline
        self._view = view
        self._is_alive = is_alive
        self.compose = compose if compose is not None else ComposeState()
        self.max_file_size = settings.MAX_FILE_SIZE if max_file_size is None else max_file_size
        self.max_image_size = settings.MAX_IMAGE_SIZE if max_image_size is None else max_image_size
        self.state = SendState.COMPOSING
        self.sending = False
        self.last_error: AppError | None = None

    def set_text(self, text: str) -> None:
        self.compose.text = text
        self._back_to_composing()

    def pick_attachment(self, picked: PickedFile) -> None:
        limit = self.max_image_size if picked.is_image else self.max_file_size
        if picked.size is not None and picked.size > limit:
            raise AttachmentTooLargeError(picked.name, picked.size, limit)
        self.compose.attachment = picked
        self._back_to_composing()

    def remove_attachment(self) -> None:
        self.compose.attachment = None

    def attach_voice(self, recording: VoiceRecording) -> None:
        self.compose.voice_recording = recording
        self._back_to_composing()

    def discard_voice(self) -> None:
        self.compose.voice_recording = None

    async def submit(self) -> Message | None:
        """Send the composer content. Returns the confirmed message or None."""
        if self.sending:
            logger.debug("Submit ignored for %s: a send is already in flight", self._key)
            return None
        if self.compose.is_empty:
            return None

        has_voice = self.compose.voice_recording is not None
        reply_to = self.compose.reply_to
        try:
            payload = build_send_payload(self.compose, self._key)
        except ValidationFailure as exc:
            self._fail(exc, has_voice)
            return None

        self.sending = True
        self.state = SendState.SENDING
        self._view.state_changed()
        try:
            confirmed = await self._transport.send_message(payload)
        except AppError as exc:
            error: AppError | None = exc
        else:
            error = None
        finally:
            self.sending = False

        if not self._is_alive():
            logger.debug("Discarding send result for closed view %s", self._key)
            return None
        if error is not None:
            self._fail(error, has_voice)
            return None

        if confirmed.reply_snapshot is None and reply_to is not None:
            confirmed = replace(confirmed, reply_snapshot=reply_to)
        self._timeline.merge([confirmed], MergeMode.APPEND)
        self.compose.clear()
        self.state = SendState.CONFIRMED
        self.last_error = None
        logger.info("Message %s confirmed in %s", confirmed.id, self._key)
        self._view.state_changed()
        self._view.scroll_to_end(animated=True)
        return confirmed

    def _fail(self, error: AppError, has_voice: bool) -> None:
        self.state = SendState.FAILED
        self.last_error = error
        if isinstance(error, ConstraintFailure) and has_voice:
            # Server keeps the text-only message; log without surfacing.
            logger.warning("Voice send hit a storage constraint in %s: %s", self._key, error.detail)
        else:
            logger.error("Send failed in %s: %s", self._key, error.detail)
            if isinstance(error, ConstraintFailure):
                text = "There was a problem saving your message. Please try again."
            else:
                text = "Failed to send message. Please try again."
            self._view.show_error(ErrorNotice(kind=type(error).__name__, message=text, retryable=True))
        self._view.state_changed()

    def _back_to_composing(self) -> None:
        if self.state != SendState.SENDING:
            self.state = SendState.COMPOSING
