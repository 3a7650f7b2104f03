"""Best-effort parameter extraction from free-text chat messages.

Extraction is lossy by nature: callers treat ``None`` as "ask the user to
clarify", never as an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Final


class MediaFormat(str, Enum):
    MP3 = "MP3"
    MP4 = "MP4"


@dataclass(frozen=True)
class UrlRequest:
    """Download-by-URL parameters."""

    url: str
    format: MediaFormat


@dataclass(frozen=True)
class SongRequest:
    """Download-by-name parameters."""

    song_query: str
    format: MediaFormat


_URL_PATTERN: Final = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)
_URL_TRAILING_PUNCTUATION: Final = ".,;:!?)]}'\""

_VIDEO_TOKENS: Final = re.compile(r"\b(?:mp4|video)\b", re.IGNORECASE)
_AUDIO_TOKENS: Final = re.compile(r"\b(?:mp3|audio)\b", re.IGNORECASE)

_FORMAT_PHRASE: Final = re.compile(
    r"\b(?:as|in|to)\s+(?:an?\s+)?(?:mp3|mp4|audio|video)(?:\s+(?:file|format))?\b",
    re.IGNORECASE,
)
_REQUEST_PREAMBLE: Final = re.compile(
    r"""^\s*
    (?:(?:hey|hi|ok|okay|please|kindly)[\s,]+)*
    (?:(?:can|could|would|will)\s+you\s+(?:please\s+)?
      |i\s+(?:want|need|would\s+like|wanna)\s+(?:to\s+)?(?:the\s+song\s+)?
      |help\s+me\s+
    )?
    (?:download|get|fetch|find|save)\b\s*
    (?:me\s+|for\s+me\s+)?
    (?:(?:the|a)\s+)?
    (?:(?:song|track|tune|music|audio)s?\b\s*)?
    (?:(?:called|named|titled)\b\s*)?
    """,
    re.IGNORECASE | re.VERBOSE,
)
_STOP_WORDS: Final[frozenset[str]] = frozenset(
    {"download", "please", "song", "music", "track", "audio", "mp3", "mp4"}
)
_EDGE_MARKERS: Final[frozenset[str]] = frozenset({"by", "of", "for", "from"})
_QUOTES: Final = re.compile(r"[\"“”‘’`]|(?<!\w)'|'(?!\w)")
_EDGE_PUNCTUATION: Final = " \t.,;:!?-"


def extract_url(text: str) -> str | None:
    """Return the first ``http(s)://`` token in ``text``."""

    match = _URL_PATTERN.search(text or "")
    if not match:
        return None
    url = match.group(0).rstrip(_URL_TRAILING_PUNCTUATION)
    return url or None


def extract_format(text: str) -> MediaFormat:
    """MP4 only when video is asked for explicitly and audio is not; MP3 otherwise."""

    text = text or ""
    if _VIDEO_TOKENS.search(text) and not _AUDIO_TOKENS.search(text):
        return MediaFormat.MP4
    return MediaFormat.MP3


def extract_song_query(text: str) -> str | None:
    """Strip request filler from ``text`` to leave a searchable song query."""

    cleaned = _QUOTES.sub(" ", text or "")
    cleaned = _URL_PATTERN.sub(" ", cleaned)
    cleaned = _FORMAT_PHRASE.sub(" ", cleaned)
    cleaned = _REQUEST_PREAMBLE.sub("", cleaned, count=1)

    words = [w for w in cleaned.split() if w.strip(_EDGE_PUNCTUATION).lower() not in _STOP_WORDS]
    while words and words[0].strip(_EDGE_PUNCTUATION).lower() in _EDGE_MARKERS:
        words.pop(0)
    while words and words[-1].strip(_EDGE_PUNCTUATION).lower() in _EDGE_MARKERS:
        words.pop()

    query = " ".join(words).strip(_EDGE_PUNCTUATION)
    return query or None


def extract_url_request(text: str) -> UrlRequest | None:
    url = extract_url(text)
    if url is None:
        return None
    return UrlRequest(url=url, format=extract_format(text))


def extract_song_request(text: str) -> SongRequest | None:
    query = extract_song_query(text)
    if query is None:
        return None
    return SongRequest(song_query=query, format=extract_format(text))


__all__ = [
    "MediaFormat",
    "SongRequest",
    "UrlRequest",
    "extract_format",
    "extract_song_query",
    "extract_song_request",
    "extract_url",
    "extract_url_request",
]
