"""Chat pipeline package.

Modules are organised by the order in which `/chat` executes (see `flow`):

1. `transcription` – resolve the text of voice-only messages.
2. `composer` – identity guard, intent dispatch and response composition.
3. `generation` – cosmetic music specification for generation requests.
4. `synthesis` – optional voice attachment.

The FastAPI controller imports from here so contributors can jump straight
to the relevant stage.
"""

from .composer import (
    ChatOrchestrator,
    get_chat_orchestrator,
    identity_response,
    input_error_response,
)
from .flow import ChatPipeline, PipelineStage
from .generation import compose_music_spec
from .synthesis import attach_voice
from .transcription import resolve_message_text
from .types import AudioPayload, IncomingMessage, ResponseBody, VoiceAttachment

__all__ = [
    "AudioPayload",
    "ChatOrchestrator",
    "ChatPipeline",
    "IncomingMessage",
    "PipelineStage",
    "ResponseBody",
    "VoiceAttachment",
    "attach_voice",
    "compose_music_spec",
    "get_chat_orchestrator",
    "identity_response",
    "input_error_response",
    "resolve_message_text",
]
