"""Song recognition from an uploaded audio or video sample."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.controllers.dependencies import (
    RecognitionClientDep,
    UploadConfigDep,
    enforce_rate_limit,
)
from app.controllers.uploads import read_upload_bytes, resolve_content_type
from app.views import capability_envelope, envelope

router = APIRouter(tags=["recognition"], dependencies=[Depends(enforce_rate_limit)])

logger = logging.getLogger(__name__)

AUDIO_REQUIRED = "Audio file required"

_AUDIO_FILE_UPLOAD = File(default=None)


@router.post("/recognize")
async def recognize(
    client: RecognitionClientDep,
    upload: UploadConfigDep,
    audio: Optional[UploadFile] = _AUDIO_FILE_UPLOAD,
) -> dict[str, Any]:
    """Identify the song in the uploaded sample."""

    if audio is None:
        return envelope(success=False, error=AUDIO_REQUIRED)

    content_type = resolve_content_type(audio, upload)
    audio_bytes = await read_upload_bytes(audio, upload)
    if not audio_bytes:
        return envelope(success=False, error=AUDIO_REQUIRED)

    logger.info("Processing music recognition for %s (%d bytes)", audio.filename, len(audio_bytes))
    result = await client.identify(audio_bytes, content_type)
    return capability_envelope(result)


__all__ = ["router"]
