"""Validation helpers for multipart audio uploads."""

from __future__ import annotations

import mimetypes

from fastapi import HTTPException, UploadFile, status

from app.config.settings import UploadConfig


def resolve_content_type(audio_file: UploadFile, config: UploadConfig) -> str:
    """Accept audio or video uploads, guessing the type from the filename when absent."""

    content_type = audio_file.content_type
    if (not content_type or content_type == "application/octet-stream") and audio_file.filename:
        guessed_type, _ = mimetypes.guess_type(audio_file.filename)
        content_type = guessed_type or content_type

    content_type = (content_type or "").lower()
    if not content_type.startswith(config.allowed_mime_prefixes):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Only audio and video files are allowed",
        )
    return content_type


async def read_upload_bytes(audio_file: UploadFile, config: UploadConfig) -> bytes:
    """Load the upload into memory, enforcing the configured size cap."""

    audio_bytes = await audio_file.read(config.max_audio_size + 1)
    await audio_file.close()

    if len(audio_bytes) > config.max_audio_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Audio file exceeds the {config.max_audio_size} byte limit",
        )
    return audio_bytes


__all__ = ["read_upload_bytes", "resolve_content_type"]
