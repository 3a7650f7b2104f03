"""Speech-to-text client used for voice messages."""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from app.config.settings import TranscriptionConfig, settings
from app.services.capability import CapabilityClient, CapabilityError, CapabilityResult

logger = logging.getLogger(__name__)

_TEXT_KEYS = ("text", "transcript")


class SpeechToTextClient(CapabilityClient):
    """Post recorded audio to a Whisper-style transcription endpoint."""

    capability = "transcription"
    unavailable_message = "Speech recognition failed"
    disabled_message = "Speech-to-text service not configured"

    def __init__(
        self,
        config: TranscriptionConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=config.timeout_seconds, transport=transport)
        self._config = config

    @property
    def configured(self) -> bool:
        return self._config.configured

    @property
    def placeholder_text(self) -> str:
        return self._config.placeholder_text

    async def transcribe(self, audio_bytes: bytes, mime_type: str) -> CapabilityResult:
        """Return ``{"text": ...}`` for the recorded audio."""

        if not self.configured:
            return self._disabled()

        if not audio_bytes:
            return self._failed(message="Audio file required")

        headers = {"Accept": "application/json"}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key.get_secret_value()}"
        extension = mime_type.split("/", 1)[-1] if "/" in mime_type else "webm"

        try:
            response = await self._request(
                "POST",
                self._config.base_url,
                files={"audio": (f"voice.{extension}", audio_bytes, mime_type)},
                headers=headers,
            )
            data = self._json(response)
            text = None
            if isinstance(data, Mapping):
                text = next(
                    (data[k] for k in _TEXT_KEYS if isinstance(data.get(k), str)),
                    None,
                )
            elif isinstance(data, str):
                text = data
            if not text or not text.strip():
                raise CapabilityError("transcription returned no text")
        except CapabilityError as exc:
            return self._failed(exc)

        logger.info("Transcription complete. Length: %s", len(text))
        return self._succeeded(text=text.strip())


def get_transcribe_client() -> SpeechToTextClient:
    """Return the default speech-to-text client."""

    return _DEFAULT_CLIENT


_DEFAULT_CLIENT = SpeechToTextClient(settings.transcription)


__all__ = ["SpeechToTextClient", "get_transcribe_client"]
