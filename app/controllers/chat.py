"""Conversational endpoint.

The POST `/chat` pipeline is mapped stage by stage in
`app.pipelines.chat.flow.ChatPipeline`:

1. Decode the optional base64 voice message.
2. Resolve the message text (transcribing voice-only messages).
3. Identity guard, intent classification and response composition.
4. Optional speech synthesis of the reply.
"""

import base64
import binascii
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends

from app.controllers.dependencies import OrchestratorDep, enforce_rate_limit
from app.pipelines.chat import AudioPayload, ChatPipeline, IncomingMessage
from app.pipelines.chat.composer import INPUT_ERROR_MESSAGE
from app.views import ChatRequest, envelope

router = APIRouter(tags=["chat"], dependencies=[Depends(enforce_rate_limit)])

logger = logging.getLogger(__name__)

PIPELINE_STAGES = tuple(ChatPipeline.describe())
"""Ordered pipeline metadata used for quick reference and debugging."""

DEFAULT_AUDIO_TYPE = "audio/webm"


def decode_audio(request: ChatRequest) -> Optional[AudioPayload]:
    """Decode the attached voice message, ignoring payloads that are not valid base64."""

    if not request.audio_data:
        return None

    encoded = request.audio_data
    if encoded.startswith("data:") and "," in encoded:
        encoded = encoded.split(",", 1)[1]
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        logger.info("Discarding undecodable voice message session=%s", request.session_id)
        return None

    if not data:
        return None
    return AudioPayload(data=data, mime_type=request.audio_type or DEFAULT_AUDIO_TYPE)


@router.post("/chat")
async def chat(request: ChatRequest, orchestrator: OrchestratorDep) -> dict[str, Any]:
    """Classify one message and return the composed response."""

    fields: dict[str, Any] = {
        "text": (request.text or "").strip(),
        "wants_voice": request.wants_voice,
        "audio": decode_audio(request),
    }
    if request.session_id:
        fields["session_id"] = request.session_id
    message = IncomingMessage(**fields)

    body = await orchestrator.handle(message)
    return envelope(
        {"response": body.to_dict(), "session_id": message.session_id},
        success=not body.is_error,
        error=INPUT_ERROR_MESSAGE if body.is_error else None,
    )


__all__ = ["router"]
