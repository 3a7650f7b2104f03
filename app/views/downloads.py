"""Schemas for the media download endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.extractors import MediaFormat


class UrlDownloadRequest(BaseModel):
    url: str = ""


class SongDownloadRequest(BaseModel):
    song: Optional[str] = None
    youtube_url: Optional[str] = Field(default=None, alias="youtubeUrl")
    format: MediaFormat = MediaFormat.MP3

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value
