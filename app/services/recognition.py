"""ACRCloud audio recognition client."""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Mapping

import httpx

from app.config.settings import RecognitionConfig, settings
from app.services.capability import CapabilityClient, CapabilityError, CapabilityResult
from app.utils import sign_acrcloud_request

logger = logging.getLogger(__name__)

_IDENTIFY_URI = "/v1/identify"
_NO_RESULT_CODE = 1001

_SIMULATED_CATALOG: tuple[dict[str, str], ...] = (
    {"title": "Blinding Lights", "artist": "The Weeknd", "album": "After Hours"},
    {"title": "Shape of You", "artist": "Ed Sheeran", "album": "÷ (Divide)"},
    {"title": "Dance Monkey", "artist": "Tones and I", "album": "The Kids Are Coming"},
    {
        "title": "Someone You Loved",
        "artist": "Lewis Capaldi",
        "album": "Divinely Uninspired To A Hellish Extent",
    },
)


def _name_of(value: Any) -> str | None:
    if isinstance(value, Mapping):
        value = value.get("name")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _song_from_metadata(music: Mapping[str, Any]) -> dict[str, Any]:
    raw_artists = music.get("artists") or []
    if not isinstance(raw_artists, list):
        raw_artists = [raw_artists]
    artists = [name for name in map(_name_of, raw_artists) if name]
    return {
        "title": music.get("title") or "Unknown Title",
        "artist": ", ".join(artists) or "Unknown Artist",
        "album": _name_of(music.get("album")) or "Unknown Album",
        "duration": music.get("duration_ms"),
        "label": music.get("label"),
    }


def _parse_identify_response(data: Any) -> tuple[Any, Mapping[str, Any] | None]:
    """Return the status code and first music match, rejecting unexpected shapes."""

    if not isinstance(data, Mapping):
        raise CapabilityError("recognition returned a non-JSON body")

    status = data.get("status") or {}
    metadata = data.get("metadata") or {}
    if not isinstance(status, Mapping) or not isinstance(metadata, Mapping):
        raise CapabilityError("recognition returned a malformed body")

    matches = metadata.get("music") or []
    if not isinstance(matches, list):
        raise CapabilityError("recognition returned a malformed music list")
    first = matches[0] if matches else None
    if first is not None and not isinstance(first, Mapping):
        raise CapabilityError("recognition returned a malformed music entry")
    return status.get("code"), first


class AudioRecognitionClient(CapabilityClient):
    """Identify a song from an audio sample."""

    capability = "recognition"
    unavailable_message = "Recognition service error"
    disabled_message = "Music recognition service not configured"

    def __init__(
        self,
        config: RecognitionConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
        clock=time.time,
    ) -> None:
        super().__init__(timeout=config.timeout_seconds, transport=transport)
        self._config = config
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def configured(self) -> bool:
        return self._config.configured

    @property
    def simulated(self) -> bool:
        return not self.configured and self._config.simulate

    async def identify(self, audio_bytes: bytes, mime_type: str) -> CapabilityResult:
        """Return ``{"song": {...}, "note": ...}`` for a recognised sample."""

        if not self.configured:
            if self.simulated:
                return self._simulate()
            return self._disabled()

        if not audio_bytes:
            return self._failed(message="Audio file required")

        access_key = self._config.access_key.get_secret_value()
        timestamp = str(int(self._clock()))
        signature = sign_acrcloud_request(
            access_key=access_key,
            secret_key=self._config.secret_key.get_secret_value(),
            timestamp=timestamp,
            http_uri=_IDENTIFY_URI,
        )
        extension = mime_type.split("/", 1)[-1] if "/" in mime_type else "webm"
        form = {
            "access_key": access_key,
            "sample_bytes": str(len(audio_bytes)),
            "timestamp": timestamp,
            "signature": signature,
            "data_type": "audio",
            "signature_version": "1",
        }
        files = {"sample": (f"sample.{extension}", audio_bytes, mime_type)}

        try:
            response = await self._request(
                "POST",
                f"https://{self._config.host}{_IDENTIFY_URI}",
                data=form,
                files=files,
            )
            status_code, music = _parse_identify_response(self._json(response))
            song = _song_from_metadata(music) if status_code == 0 and music is not None else None
        except CapabilityError as exc:
            return self._failed(exc)

        logger.info("ACRCloud status code: %s", status_code)
        if song is not None:
            return self._succeeded(
                song=song,
                note="Song identified successfully",
            )

        if status_code == _NO_RESULT_CODE or status_code == 0:
            return self._failed(
                message="Song not recognized. Try recording a clearer sample.",
                note="No match found in database",
            )

        return self._failed(CapabilityError(f"recognition status code {status_code}"))

    def _simulate(self) -> CapabilityResult:
        song = dict(self._rng.choice(_SIMULATED_CATALOG))
        song.update(duration=200000, label="Universal Music")
        return self._succeeded(
            song=song,
            note="Simulated recognition (ACRCloud not configured)",
        )


def get_recognition_client() -> AudioRecognitionClient:
    """Return the default audio recognition client instance."""

    return _DEFAULT_CLIENT


_DEFAULT_CLIENT = AudioRecognitionClient(settings.recognition)


__all__ = ["AudioRecognitionClient", "get_recognition_client"]
