"""Text-to-speech controller backed by ElevenLabs."""

from typing import Any

from fastapi import APIRouter, Depends

from app.controllers.dependencies import TtsClientDep, enforce_rate_limit
from app.views import TextToSpeechRequest, capability_envelope, envelope

router = APIRouter(tags=["tts"], dependencies=[Depends(enforce_rate_limit)])


@router.post("/speak")
async def speak(request: TextToSpeechRequest, client: TtsClientDep) -> dict[str, Any]:
    """Synthesize ``text`` and return base64 MP3 audio with its MIME type."""

    text = request.text.strip()
    if not text:
        return envelope(success=False, error="Text required")

    result = await client.synthesize(text, voice_id=request.voice_id)
    return capability_envelope(result)


__all__ = ["router"]
