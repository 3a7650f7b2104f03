"""Real capability clients exercised against ``httpx.MockTransport``."""

from __future__ import annotations

import asyncio
import base64
import hashlib
import hmac
import json
import random

import httpx
import pytest

from app.config.settings import (
    ChatConfig,
    MediaConfig,
    RecognitionConfig,
    TextToSpeechConfig,
    TranscriptionConfig,
)
from app.services.extractors import MediaFormat
from app.services.llm_client import ChatCompletionClient
from app.services.media import MediaDownloadClient, MediaSearchClient
from app.services.recognition import AudioRecognitionClient
from app.services.speech import TextToSpeechClient
from app.services.transcribe import SpeechToTextClient
from app.utils import sign_acrcloud_request


def _transport(handler, seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def record(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    return httpx.MockTransport(record)


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected outbound call to {request.url}")


# Chat completion


def _chat_client(handler, seen=None, **overrides) -> ChatCompletionClient:
    config = ChatConfig(base_url="https://chat.example/api/gpt", api_key="chat-key", **overrides)
    return ChatCompletionClient(config, transport=_transport(handler, seen))


def test_chat_reply_from_json_result() -> None:
    seen: list[httpx.Request] = []
    client = _chat_client(lambda r: httpx.Response(200, json={"result": "Hi there"}), seen)

    result = asyncio.run(client.complete("hello"))

    assert result.success
    assert result.payload == {"reply": "Hi there", "provider": "GiftedTech GPT-4o"}
    assert seen[0].url.params["q"] == "hello"
    assert seen[0].url.params["apikey"] == "chat-key"


def test_chat_reply_from_plain_text_body() -> None:
    client = _chat_client(lambda r: httpx.Response(200, text="Plain answer"))

    result = asyncio.run(client.complete("hello"))

    assert result.payload["reply"] == "Plain answer"


def test_chat_server_error_becomes_failure_result() -> None:
    client = _chat_client(lambda r: httpx.Response(502, text="bad gateway"))

    result = asyncio.run(client.complete("hello"))

    assert not result.success
    assert result.error_message == ChatCompletionClient.unavailable_message
    assert "502" not in result.error_message


def test_chat_timeout_becomes_failure_result() -> None:
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    result = asyncio.run(_chat_client(slow).complete("hello"))

    assert not result.success


def test_chat_unconfigured_makes_no_call() -> None:
    client = ChatCompletionClient(
        ChatConfig(api_key=None),
        transport=_transport(_unreachable),
    )

    result = asyncio.run(client.complete("hello"))

    assert not result.success
    assert result.error_message == ChatCompletionClient.disabled_message


def test_chat_placeholder_key_counts_as_unconfigured() -> None:
    assert not ChatConfig(api_key="your_api_key_here").configured


# Text to speech


def test_tts_returns_base64_audio_and_truncates_text() -> None:
    seen: list[httpx.Request] = []
    config = TextToSpeechConfig(api_key="tts-key", max_characters=10)
    client = TextToSpeechClient(
        config,
        transport=_transport(lambda r: httpx.Response(200, content=b"ID3-audio"), seen),
    )

    result = asyncio.run(client.synthesize("Hello world, this is long"))

    assert result.success
    assert base64.b64decode(result.payload["audio"]) == b"ID3-audio"
    assert result.payload["format"] == "audio/mpeg"
    body = json.loads(seen[0].content)
    assert body["text"] == "Hello worl"
    assert seen[0].headers["xi-api-key"] == "tts-key"
    assert seen[0].url.path.endswith(f"/text-to-speech/{config.voice_id}")


def test_tts_empty_audio_is_a_failure() -> None:
    client = TextToSpeechClient(
        TextToSpeechConfig(api_key="tts-key"),
        transport=_transport(lambda r: httpx.Response(200, content=b"")),
    )

    assert not asyncio.run(client.synthesize("Hello")).success


def test_tts_rejects_empty_text_without_calling_out() -> None:
    client = TextToSpeechClient(
        TextToSpeechConfig(api_key="tts-key"),
        transport=_transport(_unreachable),
    )

    result = asyncio.run(client.synthesize("   "))

    assert result.error_message == "Text required"


# Audio recognition


def _recognition_config(**overrides) -> RecognitionConfig:
    values = {"host": "identify.example.com", "access_key": "access", "secret_key": "secret"}
    values.update(overrides)
    return RecognitionConfig(**values)


def test_recognition_success_maps_song_metadata() -> None:
    seen: list[httpx.Request] = []
    payload = {
        "status": {"code": 0, "msg": "Success"},
        "metadata": {
            "music": [
                {
                    "title": "Blinding Lights",
                    "artists": [{"name": "The Weeknd"}],
                    "album": {"name": "After Hours"},
                    "duration_ms": 200040,
                    "label": "Republic Records",
                }
            ]
        },
    }
    client = AudioRecognitionClient(
        _recognition_config(),
        transport=_transport(lambda r: httpx.Response(200, json=payload), seen),
        clock=lambda: 1700000000,
    )

    result = asyncio.run(client.identify(b"sample-bytes", "audio/webm"))

    assert result.success
    assert result.payload["song"] == {
        "title": "Blinding Lights",
        "artist": "The Weeknd",
        "album": "After Hours",
        "duration": 200040,
        "label": "Republic Records",
    }
    request = seen[0]
    assert str(request.url) == "https://identify.example.com/v1/identify"
    expected_signature = sign_acrcloud_request(
        access_key="access",
        secret_key="secret",
        timestamp="1700000000",
    )
    assert expected_signature.encode() in request.content
    assert b'name="sample"' in request.content


def test_recognition_no_match() -> None:
    client = AudioRecognitionClient(
        _recognition_config(),
        transport=_transport(
            lambda r: httpx.Response(200, json={"status": {"code": 1001, "msg": "No result"}})
        ),
    )

    result = asyncio.run(client.identify(b"sample-bytes", "audio/webm"))

    assert not result.success
    assert result.error_message == "Song not recognized. Try recording a clearer sample."
    assert result.payload["note"] == "No match found in database"


@pytest.mark.parametrize(
    "body",
    [
        {"status": "ok"},
        {"status": {"code": 0}, "metadata": {"music": {"title": "x"}}},
        {"status": {"code": 0}, "metadata": ["music"]},
        {"status": {"code": 0}, "metadata": {"music": ["Blinding Lights"]}},
        ["not", "an", "object"],
    ],
)
def test_recognition_malformed_body_is_a_failure(body) -> None:
    client = AudioRecognitionClient(
        _recognition_config(),
        transport=_transport(lambda r: httpx.Response(200, json=body)),
    )

    result = asyncio.run(client.identify(b"sample-bytes", "audio/webm"))

    assert not result.success
    assert result.error_message == AudioRecognitionClient.unavailable_message


def test_recognition_tolerates_plain_artist_and_album_names() -> None:
    body = {
        "status": {"code": 0},
        "metadata": {"music": [{"title": "Song", "artists": ["A", {"name": "B"}, 7], "album": "Record"}]},
    }
    client = AudioRecognitionClient(
        _recognition_config(),
        transport=_transport(lambda r: httpx.Response(200, json=body)),
    )

    result = asyncio.run(client.identify(b"sample-bytes", "audio/webm"))

    assert result.success
    assert result.payload["song"]["artist"] == "A, B"
    assert result.payload["song"]["album"] == "Record"


def test_recognition_unconfigured_is_disabled() -> None:
    client = AudioRecognitionClient(
        RecognitionConfig(host=None, access_key=None, secret_key=None, simulate=False),
        transport=_transport(_unreachable),
    )

    result = asyncio.run(client.identify(b"sample", "audio/webm"))

    assert not result.success
    assert result.error_message == AudioRecognitionClient.disabled_message


def test_recognition_simulation_is_seeded() -> None:
    def build() -> AudioRecognitionClient:
        return AudioRecognitionClient(
            RecognitionConfig(host=None, access_key=None, secret_key=None, simulate=True),
            transport=_transport(_unreachable),
            rng=random.Random(3),
        )

    first = asyncio.run(build().identify(b"sample", "audio/webm"))
    second = asyncio.run(build().identify(b"sample", "audio/webm"))

    assert first.success
    assert first.payload == second.payload
    assert "Simulated" in first.payload["note"]


def test_acrcloud_signature_matches_known_value() -> None:
    signature = sign_acrcloud_request(access_key="ak", secret_key="sk", timestamp="1")

    expected = base64.b64encode(
        hmac.new(b"sk", b"POST\n/v1/identify\nak\naudio\n1\n1", hashlib.sha1).digest()
    ).decode()
    assert signature == expected


# Media search and download


def _media_config() -> MediaConfig:
    return MediaConfig(base_url="https://media.example/api", api_key="media-key")


def test_search_returns_first_video() -> None:
    seen: list[httpx.Request] = []
    body = {
        "videos": [
            {"id": "abc123", "title": "Song (Official Audio)", "thumbnail": "t.jpg", "duration": "3:30"},
            {"id": "zzz", "title": "Other"},
        ]
    }
    client = MediaSearchClient(
        _media_config(),
        transport=_transport(lambda r: httpx.Response(200, json=body), seen),
    )

    result = asyncio.run(client.search("Levitating"))

    assert result.payload == {
        "title": "Song (Official Audio)",
        "video_id": "abc123",
        "url": "https://www.youtube.com/watch?v=abc123",
        "thumbnail": "t.jpg",
        "duration": "3:30",
    }
    assert seen[0].url.path == "/api/search/youtube"
    assert seen[0].url.params["q"] == "Levitating official audio"


def test_search_without_results() -> None:
    client = MediaSearchClient(
        _media_config(),
        transport=_transport(lambda r: httpx.Response(200, json={"videos": []})),
    )

    result = asyncio.run(client.search("nothing"))

    assert not result.success
    assert result.error_message == 'No results found for "nothing"'


def test_download_mp4_uses_video_endpoint_and_quality() -> None:
    seen: list[httpx.Request] = []
    client = MediaDownloadClient(
        _media_config(),
        transport=_transport(
            lambda r: httpx.Response(200, json={"url": "https://cdn.example/v.mp4", "title": "Clip"}),
            seen,
        ),
    )

    result = asyncio.run(client.download("https://youtu.be/abc", MediaFormat.MP4))

    assert result.success
    assert result.payload["download_link"] == "https://cdn.example/v.mp4"
    assert result.payload["quality"] == "720p"
    assert result.payload["title"] == "Clip"
    assert seen[0].url.path == "/api/download/ytmp4"
    assert seen[0].url.params["quality"] == "720"


def test_download_mp3_defaults_title() -> None:
    client = MediaDownloadClient(
        _media_config(),
        transport=_transport(lambda r: httpx.Response(200, json={"download_link": "https://cdn.example/a.mp3"})),
    )

    result = asyncio.run(client.download("https://youtu.be/abc", MediaFormat.MP3))

    assert result.payload["title"] == "YouTube Audio"
    assert result.payload["quality"] == "128kbps"


def test_download_without_link_is_a_failure() -> None:
    client = MediaDownloadClient(
        _media_config(),
        transport=_transport(lambda r: httpx.Response(200, json={"status": "error"})),
    )

    result = asyncio.run(client.download("https://youtu.be/abc", MediaFormat.MP4))

    assert not result.success
    assert result.error_message == "MP4 download service is currently unavailable"


# Speech to text


def test_transcription_reads_text_field() -> None:
    seen: list[httpx.Request] = []
    client = SpeechToTextClient(
        TranscriptionConfig(base_url="https://stt.example/v1/transcribe", api_key="stt-key"),
        transport=_transport(lambda r: httpx.Response(200, json={"text": " hello there "}), seen),
    )

    result = asyncio.run(client.transcribe(b"voice", "audio/webm"))

    assert result.payload == {"text": "hello there"}
    assert seen[0].headers["authorization"] == "Bearer stt-key"


def test_transcription_unconfigured_is_disabled() -> None:
    client = SpeechToTextClient(TranscriptionConfig(base_url=None), transport=_transport(_unreachable))

    result = asyncio.run(client.transcribe(b"voice", "audio/webm"))

    assert not result.success
    assert client.placeholder_text.startswith("I sent a voice message")
