"""Transcription stage (Stage 01) of the chat pipeline."""

from __future__ import annotations

import logging

from app.services.transcribe import SpeechToTextClient

from .types import IncomingMessage

logger = logging.getLogger("app.pipelines.chat")


async def resolve_message_text(
    message: IncomingMessage,
    transcriber: SpeechToTextClient,
) -> str:
    """Return the text to classify, transcribing a voice message when no text was sent.

    A failed or unconfigured transcription yields the placeholder text, which
    classifies as a voice message rather than an empty input.
    """

    text = (message.text or "").strip()
    if text or message.audio is None or not message.audio.data:
        return text

    result = await transcriber.transcribe(message.audio.data, message.audio.mime_type)
    if result.success:
        transcript = str(result.payload.get("text", "")).strip()
        if transcript:
            logger.info("Converted audio to text session=%s", message.session_id)
            return transcript

    logger.info(
        "Transcription unavailable session=%s, using placeholder: %s",
        message.session_id,
        result.error_message,
    )
    return transcriber.placeholder_text


__all__ = ["resolve_message_text"]
