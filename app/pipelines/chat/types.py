"""Typed containers shared across the chat pipeline.

Kept in their own module so the stages (`transcription`, `composer`,
`synthesis`) can import them without circular dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional
from uuid import uuid4

from app.config.identity import CREATOR_NAME


@dataclass(frozen=True)
class AudioPayload:
    """Raw voice-message bytes attached to a chat request."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class IncomingMessage:
    """One inbound chat request; discarded after the response is built."""

    text: str = ""
    wants_voice: bool = False
    session_id: str = field(default_factory=lambda: str(uuid4()))
    audio: Optional[AudioPayload] = None


@dataclass(frozen=True)
class VoiceAttachment:
    audio: str
    format: str


@dataclass(frozen=True)
class ResponseBody:
    """Composed reply for one message.

    ``type`` and ``message`` are fixed at construction; voice synthesis only
    ever produces a copy with ``voice`` set.
    """

    type: str
    message: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    voice: Optional[VoiceAttachment] = None
    is_error: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def with_voice(self, voice: VoiceAttachment) -> "ResponseBody":
        return replace(self, voice=voice)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "message": self.message}
        data.update(self.fields)
        if self.voice is not None:
            data["voice"] = {"audio": self.voice.audio, "format": self.voice.format}
        data["creator"] = CREATOR_NAME
        return data


__all__ = ["AudioPayload", "IncomingMessage", "ResponseBody", "VoiceAttachment"]
