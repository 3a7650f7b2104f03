"""Speech-to-text endpoint for uploaded voice recordings."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.controllers.dependencies import (
    TranscribeClientDep,
    UploadConfigDep,
    enforce_rate_limit,
)
from app.controllers.uploads import read_upload_bytes, resolve_content_type
from app.views import capability_envelope, envelope

router = APIRouter(tags=["transcription"], dependencies=[Depends(enforce_rate_limit)])

_AUDIO_FILE_UPLOAD = File(default=None)


@router.post("/transcribe")
async def transcribe(
    client: TranscribeClientDep,
    upload: UploadConfigDep,
    audio: Optional[UploadFile] = _AUDIO_FILE_UPLOAD,
) -> dict[str, Any]:
    if audio is None:
        return envelope(success=False, error="Audio file required")

    content_type = resolve_content_type(audio, upload)
    audio_bytes = await read_upload_bytes(audio, upload)
    if not audio_bytes:
        return envelope(success=False, error="Audio file required")

    result = await client.transcribe(audio_bytes, content_type)
    return capability_envelope(result)


__all__ = ["router"]
