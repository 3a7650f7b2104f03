"""ElevenLabs text-to-speech client."""

from __future__ import annotations

import base64

import httpx

from app.config.settings import TextToSpeechConfig, settings
from app.services.capability import CapabilityClient, CapabilityError, CapabilityResult

AUDIO_MEDIA_TYPE = "audio/mpeg"


class TextToSpeechClient(CapabilityClient):
    """Synthesize speech and return it as base64-encoded MP3."""

    capability = "tts"
    unavailable_message = "Voice service temporarily unavailable"
    disabled_message = "Voice service not configured"

    def __init__(
        self,
        config: TextToSpeechConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=config.timeout_seconds, transport=transport)
        self._config = config

    @property
    def configured(self) -> bool:
        return self._config.configured

    async def synthesize(self, text: str, *, voice_id: str | None = None) -> CapabilityResult:
        """Return ``{"audio": <base64>, "format": "audio/mpeg", "voice_id": ...}``."""

        if not self.configured:
            return self._disabled()

        text = text.strip()
        if not text:
            return self._failed(message="Text required")

        voice = voice_id or self._config.voice_id
        body = {
            "text": text[: self._config.max_characters],
            "model_id": self._config.model_id,
            "voice_settings": {
                "stability": self._config.stability,
                "similarity_boost": self._config.similarity_boost,
            },
        }
        try:
            response = await self._request(
                "POST",
                f"{self._config.base_url.rstrip('/')}/text-to-speech/{voice}",
                json=body,
                headers={
                    "xi-api-key": self._config.api_key.get_secret_value(),
                    "Content-Type": "application/json",
                    "Accept": AUDIO_MEDIA_TYPE,
                },
            )
            if not response.content:
                raise CapabilityError("tts returned an empty audio stream")
        except CapabilityError as exc:
            return self._failed(exc)

        return self._succeeded(
            audio=base64.b64encode(response.content).decode("ascii"),
            format=AUDIO_MEDIA_TYPE,
            voice_id=voice,
        )


def get_tts_client() -> TextToSpeechClient:
    """Return the default text-to-speech client instance."""

    return _DEFAULT_CLIENT


_DEFAULT_CLIENT = TextToSpeechClient(settings.tts)


__all__ = ["AUDIO_MEDIA_TYPE", "TextToSpeechClient", "get_tts_client"]
