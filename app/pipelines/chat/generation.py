"""Cosmetic music-generation specification for the ``music_generation`` intent.

The values only describe a track; no audio is produced.
"""

from __future__ import annotations

import random
from typing import Any, Final

GENRES: Final[tuple[str, ...]] = (
    "electronic",
    "ambient",
    "cinematic",
    "lo-fi",
    "synthwave",
    "orchestral",
)
MOODS: Final[tuple[str, ...]] = (
    "uplifting",
    "melancholic",
    "energetic",
    "calm",
    "mysterious",
    "hopeful",
)
TEMPO_RANGE_BPM: Final[tuple[int, int]] = (80, 139)
STRUCTURE: Final[str] = "Intro - Verse - Chorus - Bridge - Outro"


def compose_music_spec(rng: random.Random) -> dict[str, Any]:
    """Pick genre, mood and tempo from the fixed option sets using ``rng``."""

    low, high = TEMPO_RANGE_BPM
    return {
        "genre": rng.choice(GENRES),
        "mood": rng.choice(MOODS),
        "tempo": f"{rng.randint(low, high)} BPM",
        "structure": STRUCTURE,
        "copyright_safe": True,
    }


__all__ = ["GENRES", "MOODS", "STRUCTURE", "TEMPO_RANGE_BPM", "compose_music_spec"]
