"""Ordered, pattern-based intent classification for chat messages.

Rules are evaluated top to bottom and the first match wins. Several intents
share vocabulary ("download this song" also reads like a recognition request),
so the order below is the priority order and is covered rule by rule in
``tests/test_intent_detector.py``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence


class Intent(str, Enum):
    IDENTITY = "identity"
    URL_DOWNLOAD = "url_download"
    SONG_DOWNLOAD = "song_download"
    VIDEO_DOWNLOAD = "video_download"
    MUSIC_RECOGNITION = "music_recognition"
    VOICE_MESSAGE = "voice_message"
    MUSIC_GENERATION = "music_generation"
    HELP = "help"
    GENERAL = "general"


@dataclass(frozen=True)
class IntentRule:
    """One ordered classification rule.

    The rule matches when any of its ``alternatives`` matches; an alternative
    matches when all of its patterns are found in the message.
    """

    intent: Intent
    alternatives: Sequence[Sequence[re.Pattern[str]]]

    def match(self, text: str) -> list[str] | None:
        for patterns in self.alternatives:
            hits = _collect_matches(patterns, text)
            if len(hits) == len(patterns):
                return hits
        return None


@dataclass(frozen=True)
class DetectedIntent:
    """Outcome returned by the detector."""

    intent: Intent
    matched_tokens: Sequence[str]


_ACTION_VERB = r"\b(?:download|convert|get|save|fetch|find)\b"
_HTTP_URL = r"https?://\S+"


class IntentDetector:
    """Classify messages with an explicit ordered list of rules."""

    def __init__(self, rules: Sequence[IntentRule]) -> None:
        self._rules = tuple(rules)

    @classmethod
    def default(cls) -> "IntentDetector":
        return cls(DEFAULT_RULES)

    def detect(self, text: str) -> DetectedIntent:
        """Return the first matching rule's intent, or ``GENERAL``."""

        normalised = (text or "").lower()
        for rule in self._rules:
            hits = rule.match(normalised)
            if hits is not None:
                return DetectedIntent(intent=rule.intent, matched_tokens=tuple(hits))
        return DetectedIntent(intent=Intent.GENERAL, matched_tokens=())

    def classify(self, text: str) -> Intent:
        return self.detect(text).intent

    @property
    def rules(self) -> Sequence[IntentRule]:
        """Return the configured rules in evaluation order."""

        return self._rules


def _compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    return [re.compile(raw, re.IGNORECASE | re.DOTALL) for raw in patterns if raw]


def _rule(intent: Intent, *alternatives: Sequence[str]) -> IntentRule:
    return IntentRule(
        intent=intent,
        alternatives=tuple(tuple(_compile_patterns(alt)) for alt in alternatives),
    )


def _collect_matches(patterns: Sequence[re.Pattern[str]], text: str) -> list[str]:
    matches: list[str] = []
    for pattern in patterns:
        match = pattern.search(text)
        if not match:
            break
        matches.append(match.group(0))
    return matches


DEFAULT_RULES: tuple[IntentRule, ...] = (
    _rule(
        Intent.URL_DOWNLOAD,
        (_ACTION_VERB, _HTTP_URL),
        (r"https?://(?:www\.|m\.|music\.)?(?:youtube\.com|youtu\.be)/\S*",),
    ),
    _rule(
        Intent.SONG_DOWNLOAD,
        (_ACTION_VERB, r"\b(?:song|music|track|audio|mp3|by)\b"),
    ),
    _rule(
        Intent.VIDEO_DOWNLOAD,
        (_ACTION_VERB, r"\b(?:youtube|video|mp4)\b"),
        (r"\b(?:yt|youtu\.be|youtube\.com)\b",),
    ),
    _rule(
        Intent.MUSIC_RECOGNITION,
        (r"\bwhat\b.*\bsong\b",),
        (r"\b(?:identify|recogni[sz]e|detect)\b.*\b(?:song|music|track|tune)\b",),
        (r"\bshazam\b",),
        (r"\bname\b.*\bthis\b.*\b(?:track|song|tune)\b",),
        (r"\bupload\b.*\baudio\b",),
        (r"\brecord\b.*\b(?:audio|song)\b",),
    ),
    _rule(
        Intent.VOICE_MESSAGE,
        (r"\bvoice\b.*\bmessage\b",),
        (r"\brecorded\b.*\baudio\b",),
        (r"\baudio\b.*\bmessage\b",),
    ),
    _rule(
        Intent.MUSIC_GENERATION,
        (r"\b(?:create|make|generate|compose)\b.*\b(?:music|songs?|tracks?|beats?)\b",),
    ),
    _rule(
        Intent.HELP,
        (r"\b(?:help|support|guide)\b",),
        (r"\bwhat\b.*\bcan\b.*\byou\b.*\bdo\b",),
    ),
)


__all__ = ["DEFAULT_RULES", "DetectedIntent", "Intent", "IntentDetector", "IntentRule"]
