"""Response composition for `/chat` (Stages 02-05 of the chat pipeline).

`ChatOrchestrator.handle` is the single entry point: it resolves the message
text, lets the identity guard short-circuit, classifies the intent, runs the
matching extractor and at most one capability call, and finally attaches
synthesized speech when asked. It always returns a `ResponseBody`; capability
failures degrade to fallback replies inside the branch that made the call.

Downloads are deferred: URL and song requests produce a plan naming the
follow-up endpoint (`/download/audio`, `/download/video`, `/download/song`)
instead of downloading inline.
"""

from __future__ import annotations

import logging
import random
from typing import Final

from app.config.identity import CREATOR_NAME, IDENTITY_STATEMENT, SYSTEM_NAME
from app.config.settings import UploadConfig, settings
from app.services.extractors import (
    MediaFormat,
    extract_song_request,
    extract_url_request,
)
from app.services.identity_guard import IdentityGuard
from app.services.intent_detector import DetectedIntent, Intent, IntentDetector
from app.services.llm_client import ChatCompletionClient, get_chat_client
from app.services.media import MediaSearchClient, get_media_search_client, search_results_url
from app.services.speech import TextToSpeechClient, get_tts_client
from app.services.transcribe import SpeechToTextClient, get_transcribe_client
from app.telemetry import observe_intent

from .generation import compose_music_spec
from .synthesis import attach_voice
from .transcription import resolve_message_text
from .types import IncomingMessage, ResponseBody

logger = logging.getLogger("app.pipelines.chat")
conversation_logger = logging.getLogger("app.logs.conversation")

INPUT_ERROR_MESSAGE: Final[str] = "Message is required"

FALLBACK_REPLIES: Final[tuple[str, ...]] = (
    f"I am {SYSTEM_NAME}, created by {CREATOR_NAME}. How can I help you?",
    "I can't reach my conversation service right now, but I can still download songs "
    "and identify music for you. Ask me for help to see everything I can do.",
    "Sorry, I don't have a good answer for that at the moment. Could you rephrase it?",
    f"{SYSTEM_NAME} here! My conversation engine is taking a short break. "
    "Try asking me to download a song in the meantime.",
)

SONG_EXAMPLES: Final[tuple[str, ...]] = (
    "Download Gleeish Place by King Von",
    "Get me the song Blinding Lights by The Weeknd",
    "Download As It Was by Harry Styles as MP3",
)

CAPABILITIES: Final[tuple[str, ...]] = (
    'Download songs by name (Example: "Download Gleeish Place by King Von")',
    "Identify songs from audio recordings (Shazam-style)",
    "Download YouTube videos by URL",
    "AI Conversations",
    "Music Generation",
    "Voice Messages",
)

DOWNLOAD_ENDPOINTS: Final[dict[MediaFormat, str]] = {
    MediaFormat.MP3: "/download/audio",
    MediaFormat.MP4: "/download/video",
}
SONG_DOWNLOAD_ENDPOINT: Final[str] = "/download/song"
RECOGNITION_ENDPOINT: Final[str] = "/recognize"


def input_error_response() -> ResponseBody:
    return ResponseBody(type="input_error", message=INPUT_ERROR_MESSAGE, is_error=True)


def identity_response() -> ResponseBody:
    return ResponseBody(type="identity", message=IDENTITY_STATEMENT)


class ChatOrchestrator:
    """Route one chat message to a capability and compose the reply."""

    def __init__(
        self,
        *,
        chat_client: ChatCompletionClient,
        tts_client: TextToSpeechClient,
        search_client: MediaSearchClient,
        transcribe_client: SpeechToTextClient,
        detector: IntentDetector | None = None,
        guard: IdentityGuard | None = None,
        rng: random.Random | None = None,
        upload: UploadConfig = settings.upload,
    ) -> None:
        self._chat = chat_client
        self._tts = tts_client
        self._search = search_client
        self._transcriber = transcribe_client
        self._detector = detector or IntentDetector.default()
        self._guard = guard or IdentityGuard()
        self._rng = rng or random.Random()
        self._upload = upload

    async def handle(self, message: IncomingMessage) -> ResponseBody:
        text = await resolve_message_text(message, self._transcriber)
        if not text:
            logger.info("Rejected empty message session=%s", message.session_id)
            return input_error_response()

        if self._guard.matches(text):
            detected = DetectedIntent(intent=Intent.IDENTITY, matched_tokens=())
            body = identity_response()
        else:
            detected = self._detector.detect(text)
            body = await self._compose(detected.intent, text)

        observe_intent(detected.intent.value)
        conversation_logger.info(
            "session=%s | intent=%s | type=%s | tokens=%s | text=%s",
            message.session_id,
            detected.intent.value,
            body.type,
            list(detected.matched_tokens),
            text,
        )

        if message.wants_voice:
            body = await attach_voice(body, self._tts)
        return body

    async def _compose(self, intent: Intent, text: str) -> ResponseBody:
        if intent in (Intent.URL_DOWNLOAD, Intent.VIDEO_DOWNLOAD):
            return self._url_download(intent, text)
        if intent is Intent.SONG_DOWNLOAD:
            return await self._song_download(text)
        if intent is Intent.MUSIC_RECOGNITION:
            return self._music_recognition()
        if intent is Intent.VOICE_MESSAGE:
            return ResponseBody(
                type="voice_message_response",
                message="I received your voice message! How can I help you today?",
            )
        if intent is Intent.MUSIC_GENERATION:
            return self._music_generation()
        if intent is Intent.HELP:
            return ResponseBody(
                type="help",
                message=f"I am {SYSTEM_NAME}, created by {CREATOR_NAME}. I can help with:",
                fields={"capabilities": list(CAPABILITIES)},
            )
        return await self._general(text)

    def _url_download(self, intent: Intent, text: str) -> ResponseBody:
        request = extract_url_request(text)
        if request is None:
            return ResponseBody(
                type="video_download_help",
                message="Send me a YouTube URL to download as MP3 or MP4.",
                fields={"example": "Download https://youtube.com/watch?v=... as MP3"},
            )

        target = "video as MP4" if request.format is MediaFormat.MP4 else "audio as MP3"
        return ResponseBody(
            type=intent.value,
            message=f"I can download that {target}.",
            fields={
                "url": request.url,
                "format": request.format.value,
                "endpoint": DOWNLOAD_ENDPOINTS[request.format],
            },
        )

    async def _song_download(self, text: str) -> ResponseBody:
        request = extract_song_request(text)
        if request is None:
            return ResponseBody(
                type="song_request_unclear",
                message=(
                    "Please specify which song you want to download. "
                    f'Example: "{SONG_EXAMPLES[0]}"'
                ),
                fields={"examples": list(SONG_EXAMPLES)},
            )

        result = await self._search.search(request.song_query)
        if not result.success:
            return ResponseBody(
                type="song_not_found",
                message=(
                    f'I couldn\'t find "{request.song_query}" on YouTube right now. '
                    "Please try a different song or send me a YouTube URL."
                ),
                fields={
                    "song_query": request.song_query,
                    "format": request.format.value,
                    "search_url": search_results_url(request.song_query),
                },
            )

        title = result.payload.get("title") or request.song_query
        return ResponseBody(
            type="song_found",
            message=(
                f'I found "{title}" on YouTube. '
                "Would you like to download it as MP3 (audio) or MP4 (video)?"
            ),
            fields={
                "song": title,
                "song_query": request.song_query,
                "youtube_url": result.payload.get("url"),
                "youtube_id": result.payload.get("video_id"),
                "thumbnail": result.payload.get("thumbnail"),
                "duration": result.payload.get("duration"),
                "format": request.format.value,
                "options": [fmt.value for fmt in MediaFormat],
                "endpoint": SONG_DOWNLOAD_ENDPOINT,
            },
        )

    def _music_recognition(self) -> ResponseBody:
        max_mb = self._upload.max_audio_size / (1024 * 1024)
        return ResponseBody(
            type="music_recognition",
            message="Record or upload an audio sample and I will identify the song for you.",
            fields={
                "endpoint": RECOGNITION_ENDPOINT,
                "max_size": f"{max_mb:g}MB",
                "formats": list(self._upload.accepted_formats),
            },
        )

    def _music_generation(self) -> ResponseBody:
        spec = compose_music_spec(self._rng)
        return ResponseBody(
            type="music_generation",
            message=(
                f"I'll create a {spec['mood']} {spec['genre']} track for you. "
                "This will be an original composition."
            ),
            fields={"specifications": spec},
        )

    async def _general(self, text: str) -> ResponseBody:
        result = await self._chat.complete(text)
        if result.success:
            return ResponseBody(
                type="ai_response",
                message=str(result.payload["reply"]),
                fields={"ai_provider": self._chat.provider_name, "fallback": False},
            )

        return ResponseBody(
            type="ai_response",
            message=self._rng.choice(FALLBACK_REPLIES),
            fields={"ai_provider": self._chat.provider_name, "fallback": True},
        )


def get_chat_orchestrator() -> ChatOrchestrator:
    """Return the process-wide orchestrator wired to the default clients."""

    return _DEFAULT_ORCHESTRATOR


_DEFAULT_ORCHESTRATOR = ChatOrchestrator(
    chat_client=get_chat_client(),
    tts_client=get_tts_client(),
    search_client=get_media_search_client(),
    transcribe_client=get_transcribe_client(),
)


__all__ = [
    "CAPABILITIES",
    "FALLBACK_REPLIES",
    "INPUT_ERROR_MESSAGE",
    "ChatOrchestrator",
    "get_chat_orchestrator",
    "identity_response",
    "input_error_response",
]
