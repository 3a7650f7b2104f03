"""Schemas for the conversational endpoint."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Inbound chat message; text may be empty when a voice message is attached."""

    text: Optional[str] = None
    wants_voice: bool = Field(default=False, alias="wantsVoice")
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    audio_data: Optional[str] = Field(
        default=None,
        alias="audioData",
        description="Base64-encoded voice message",
    )
    audio_type: Optional[str] = Field(
        default=None,
        alias="audioType",
        description="MIME type of the voice message, e.g. audio/webm",
    )

    model_config = ConfigDict(populate_by_name=True)
