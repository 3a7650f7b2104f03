"""Shared fakes and fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path
import random
import sys
from typing import Any, Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.config.settings import RateLimitConfig  # noqa: E402
from app.pipelines.chat import ChatOrchestrator  # noqa: E402
from app.services.capability import CapabilityResult  # noqa: E402
from app.services.extractors import MediaFormat  # noqa: E402
from app.services.rate_limit import FixedWindowRateLimiter  # noqa: E402

PLACEHOLDER_TEXT = "I sent a voice message. Please respond to my voice input."


class FakeChatClient:
    provider_name = "Fake GPT"

    def __init__(self, result: CapabilityResult | None = None, configured: bool = True) -> None:
        self.result = result or CapabilityResult.ok(reply="Hello from the fake backend", provider="Fake GPT")
        self.configured = configured
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> CapabilityResult:
        self.prompts.append(prompt)
        return self.result


class FakeTtsClient:
    def __init__(self, result: CapabilityResult | None = None, configured: bool = True) -> None:
        self.result = result or CapabilityResult.ok(audio="ZmFrZS1tcDM=", format="audio/mpeg", voice_id="v1")
        self.configured = configured
        self.calls: list[tuple[str, str | None]] = []

    async def synthesize(self, text: str, *, voice_id: str | None = None) -> CapabilityResult:
        self.calls.append((text, voice_id))
        return self.result


class FakeSearchClient:
    def __init__(self, result: CapabilityResult | None = None, configured: bool = True) -> None:
        self.result = result or CapabilityResult.ok(
            title="Ed Sheeran - Shape of You (Official Audio)",
            video_id="JGwWNGJdvx8",
            url="https://www.youtube.com/watch?v=JGwWNGJdvx8",
            thumbnail="https://i.ytimg.com/vi/JGwWNGJdvx8/hqdefault.jpg",
            duration="4:24",
        )
        self.configured = configured
        self.queries: list[str] = []

    async def search(self, query: str) -> CapabilityResult:
        self.queries.append(query)
        return self.result


class FakeDownloadClient:
    def __init__(self, result: CapabilityResult | None = None, configured: bool = True) -> None:
        self.result = result
        self.configured = configured
        self.calls: list[tuple[str, MediaFormat]] = []

    async def download(self, url: str, media_format: MediaFormat) -> CapabilityResult:
        self.calls.append((url, media_format))
        if self.result is not None:
            return self.result
        return CapabilityResult.ok(
            download_link=f"https://cdn.example.com/file.{media_format.value.lower()}",
            title="Shape of You",
            format=media_format.value,
            quality="128kbps" if media_format is MediaFormat.MP3 else "720p",
            note="Click to download",
        )


class FakeTranscribeClient:
    placeholder_text = PLACEHOLDER_TEXT

    def __init__(self, result: CapabilityResult | None = None, configured: bool = True) -> None:
        self.result = result or CapabilityResult.failed("Speech-to-text service not configured")
        self.configured = configured
        self.calls: list[tuple[bytes, str]] = []

    async def transcribe(self, audio_bytes: bytes, mime_type: str) -> CapabilityResult:
        self.calls.append((audio_bytes, mime_type))
        return self.result


class FakeRecognitionClient:
    def __init__(
        self,
        result: CapabilityResult | None = None,
        configured: bool = True,
        simulated: bool = False,
    ) -> None:
        self.result = result or CapabilityResult.ok(
            song={"title": "Blinding Lights", "artist": "The Weeknd", "album": "After Hours"},
            note="Song identified successfully",
        )
        self.configured = configured
        self.simulated = simulated
        self.calls: list[tuple[bytes, str]] = []

    async def identify(self, audio_bytes: bytes, mime_type: str) -> CapabilityResult:
        self.calls.append((audio_bytes, mime_type))
        return self.result


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def tts_client() -> FakeTtsClient:
    return FakeTtsClient()


@pytest.fixture
def search_client() -> FakeSearchClient:
    return FakeSearchClient()


@pytest.fixture
def download_client() -> FakeDownloadClient:
    return FakeDownloadClient()


@pytest.fixture
def transcribe_client() -> FakeTranscribeClient:
    return FakeTranscribeClient()


@pytest.fixture
def recognition_client() -> FakeRecognitionClient:
    return FakeRecognitionClient()


@pytest.fixture
def orchestrator(
    chat_client: FakeChatClient,
    tts_client: FakeTtsClient,
    search_client: FakeSearchClient,
    transcribe_client: FakeTranscribeClient,
) -> ChatOrchestrator:
    return ChatOrchestrator(
        chat_client=chat_client,
        tts_client=tts_client,
        search_client=search_client,
        transcribe_client=transcribe_client,
        rng=random.Random(7),
    )


@pytest.fixture
def rate_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(RateLimitConfig(enabled=True, max_requests=100, window_seconds=60))


@pytest.fixture
def api(
    orchestrator: ChatOrchestrator,
    chat_client: FakeChatClient,
    tts_client: FakeTtsClient,
    search_client: FakeSearchClient,
    download_client: FakeDownloadClient,
    transcribe_client: FakeTranscribeClient,
    recognition_client: FakeRecognitionClient,
    rate_limiter: FixedWindowRateLimiter,
) -> Iterator[Any]:
    """TestClient with every capability dependency swapped for a fake."""

    from fastapi.testclient import TestClient

    from app.main import app
    from app.pipelines.chat import get_chat_orchestrator
    from app.services import (
        get_chat_client,
        get_media_download_client,
        get_media_search_client,
        get_recognition_client,
        get_transcribe_client,
        get_tts_client,
    )
    from app.services.rate_limit import get_rate_limiter

    app.dependency_overrides.update(
        {
            get_chat_orchestrator: lambda: orchestrator,
            get_chat_client: lambda: chat_client,
            get_tts_client: lambda: tts_client,
            get_media_search_client: lambda: search_client,
            get_media_download_client: lambda: download_client,
            get_transcribe_client: lambda: transcribe_client,
            get_recognition_client: lambda: recognition_client,
            get_rate_limiter: lambda: rate_limiter,
        }
    )
    yield TestClient(app)
    app.dependency_overrides.clear()
