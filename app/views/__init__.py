"""Pydantic schemas used as views in the MVC architecture."""

from .chat import ChatRequest
from .common import Envelope, capability_envelope, envelope
from .downloads import SongDownloadRequest, UrlDownloadRequest
from .tts import TextToSpeechRequest

__all__ = [
    "ChatRequest",
    "Envelope",
    "SongDownloadRequest",
    "TextToSpeechRequest",
    "UrlDownloadRequest",
    "capability_envelope",
    "envelope",
]
