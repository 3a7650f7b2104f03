"""Voice attachment stage (Stage 06) of the chat pipeline."""

from __future__ import annotations

import logging

from app.services.speech import TextToSpeechClient

from .types import ResponseBody, VoiceAttachment

logger = logging.getLogger("app.pipelines.chat")


async def attach_voice(body: ResponseBody, tts: TextToSpeechClient) -> ResponseBody:
    """Return ``body`` with synthesized speech of its message, or unchanged on failure."""

    result = await tts.synthesize(body.message)
    if not result.success:
        logger.info("Voice attachment skipped type=%s: %s", body.type, result.error_message)
        return body

    audio = result.payload.get("audio")
    if not audio:
        return body
    return body.with_voice(
        VoiceAttachment(audio=audio, format=str(result.payload.get("format", "audio/mpeg")))
    )


__all__ = ["attach_voice"]
