"""High-level orchestration map for the chat pipeline.

The canonical execution order of ``POST /chat``:

1. ``transcription`` – turn a voice-only message into text (placeholder on failure).
2. ``composer`` – reject empty input with an input-error body.
3. ``identity_guard`` – answer ownership questions before anything else.
4. ``intent_detector`` – classify the text with the ordered rule list.
5. ``composer`` – extract parameters and make at most one capability call.
6. ``synthesis`` – optionally attach speech of the composed message.
7. ``controllers.chat`` – wrap the body in the response envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class PipelineStage:
    """Human-readable description of one stage in the chat pipeline."""

    order: int
    name: str
    module: str
    summary: str


class ChatPipeline:
    """Utility wrapper for documenting the `/chat` flow."""

    _STAGES: List[PipelineStage] = [
        PipelineStage(
            1,
            "Transcription",
            "app.pipelines.chat.transcription",
            "Transcribe an attached voice message when the request carries no text.",
        ),
        PipelineStage(
            2,
            "Input Validation",
            "app.pipelines.chat.composer",
            "Return the 'message required' body for empty or whitespace-only text.",
        ),
        PipelineStage(
            3,
            "Identity Guard",
            "app.services.identity_guard",
            "Short-circuit ownership questions with the fixed identity statement.",
        ),
        PipelineStage(
            4,
            "Intent Classification",
            "app.services.intent_detector",
            "Evaluate the ordered rules; the first match wins, 'general' otherwise.",
        ),
        PipelineStage(
            5,
            "Composition",
            "app.pipelines.chat.composer",
            "Run extractors, call at most one capability and build the response body.",
        ),
        PipelineStage(
            6,
            "Voice Attachment",
            "app.pipelines.chat.synthesis",
            "Synthesize the message with text-to-speech when voice was requested.",
        ),
        PipelineStage(
            7,
            "Envelope",
            "app.controllers.chat",
            "Wrap the body with success, system, creator, session and timestamp fields.",
        ),
    ]

    @classmethod
    def describe(cls) -> Iterable[PipelineStage]:
        """Expose the ordered list of stages for debugging and documentation."""

        return tuple(cls._STAGES)


__all__ = ["ChatPipeline", "PipelineStage"]
