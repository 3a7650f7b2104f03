"""Schema for text-to-speech requests."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TextToSpeechRequest(BaseModel):
    text: str = ""
    voice_id: Optional[str] = Field(default=None, alias="voiceId")

    model_config = ConfigDict(populate_by_name=True)
