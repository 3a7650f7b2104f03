"""Highest-priority check for questions about who created or owns the system."""

from __future__ import annotations

import re
from typing import Sequence

from app.config.identity import SYSTEM_NAME, THIRD_PARTY_NAMES

_SYSTEM_TOKEN = re.escape(SYSTEM_NAME.split()[0].lower())
_THIRD_PARTY = "|".join(re.escape(name) for name in THIRD_PARTY_NAMES)
_CREATOR_NOUN = r"(?:creator|owner|maker|developer|author|father|boss)"
_CREATE_VERB_PAST = r"(?:created|made|built|programmed|developed|designed|trained|owns|invented)"

IDENTITY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(raw, re.IGNORECASE | re.DOTALL)
    for raw in (
        rf"\bwho\b.*\b{_CREATE_VERB_PAST}\b.*\b(?:you|{_SYSTEM_TOKEN})\b",
        rf"\bwho\b.*\b(?:is|are|was)\b.*\byour\b.*\b{_CREATOR_NOUN}s?\b",
        rf"\b(?:is|was|are)\b.*\b(?:{_THIRD_PARTY})\b.*\byour\b.*\b{_CREATOR_NOUN}s?\b",
        rf"\b(?:did|does|do)\b.*\b(?:{_THIRD_PARTY})\b.*\b(?:create|make|build|own|develop|program)\b.*\byou\b",
        r"\bare\s+you\b.*\b(?:made|created|built|owned|developed|programmed)\s+by\b",
        rf"\bwho\b.*\byour\s+{_CREATOR_NOUN}s?\b",
    )
)


class IdentityGuard:
    """Pure predicate over the message text; cannot fail."""

    def __init__(self, patterns: Sequence[re.Pattern[str]] = IDENTITY_PATTERNS) -> None:
        self._patterns = tuple(patterns)

    def matches(self, text: str) -> bool:
        if not text:
            return False
        return any(pattern.search(text) for pattern in self._patterns)


__all__ = ["IDENTITY_PATTERNS", "IdentityGuard"]
