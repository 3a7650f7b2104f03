"""Service layer: capability clients and pure text helpers."""

from .capability import CapabilityClient, CapabilityError, CapabilityResult
from .extractors import MediaFormat, SongRequest, UrlRequest
from .identity_guard import IdentityGuard
from .intent_detector import Intent, IntentDetector
from .llm_client import ChatCompletionClient, get_chat_client
from .media import (
    MediaDownloadClient,
    MediaSearchClient,
    get_media_download_client,
    get_media_search_client,
)
from .recognition import AudioRecognitionClient, get_recognition_client
from .speech import TextToSpeechClient, get_tts_client
from .transcribe import SpeechToTextClient, get_transcribe_client

__all__ = [
    "AudioRecognitionClient",
    "CapabilityClient",
    "CapabilityError",
    "CapabilityResult",
    "ChatCompletionClient",
    "IdentityGuard",
    "Intent",
    "IntentDetector",
    "MediaDownloadClient",
    "MediaFormat",
    "MediaSearchClient",
    "SongRequest",
    "SpeechToTextClient",
    "TextToSpeechClient",
    "UrlRequest",
    "get_chat_client",
    "get_media_download_client",
    "get_media_search_client",
    "get_recognition_client",
    "get_transcribe_client",
    "get_tts_client",
]
