"""Liveness, identity and operational status endpoints."""

import time
from typing import Any

from fastapi import APIRouter, Depends

from app.config.identity import (
    CREATOR_NAME,
    IDENTITY_STATEMENT,
    SYSTEM_NAME,
)
from app.config.settings import settings
from app.controllers.dependencies import (
    ChatClientDep,
    DownloadClientDep,
    RateLimiterDep,
    RecognitionClientDep,
    SearchClientDep,
    TranscribeClientDep,
    TtsClientDep,
    UploadConfigDep,
    require_admin_token,
)
from app.services.capability import CapabilityClient
from app.views import envelope

router = APIRouter(tags=["system"])

_STARTED_AT = time.monotonic()


def _status(client: CapabilityClient) -> str:
    return "active" if client.configured else "inactive"


def feature_status(
    chat: ChatClientDep,
    tts: TtsClientDep,
    recognition: RecognitionClientDep,
    search: SearchClientDep,
    download: DownloadClientDep,
    transcriber: TranscribeClientDep,
) -> dict[str, str]:
    """Map each user-facing feature to ``active``, ``inactive`` or ``simulated``."""

    if recognition.simulated:
        recognition_status = "simulated"
    else:
        recognition_status = _status(recognition)

    return {
        "ai_conversation": _status(chat),
        "song_search": _status(search),
        "song_download": _status(download),
        "music_recognition": recognition_status,
        "voice_synthesis": _status(tts),
        "speech_to_text": _status(transcriber),
    }


@router.get("/health")
async def health(features: dict[str, str] = Depends(feature_status)) -> dict[str, Any]:
    """Report liveness and which capabilities are configured."""

    return envelope({"status": "online", "features": features})


@router.get("/identity")
async def identity() -> dict[str, Any]:
    return envelope(
        {
            "name": SYSTEM_NAME,
            "owner": CREATOR_NAME,
            "statement": IDENTITY_STATEMENT,
            "third_party_services": "Tools only; none of them created or own this system.",
        }
    )


@router.post("/admin/status", dependencies=[Depends(require_admin_token)])
async def admin_status(
    limiter: RateLimiterDep,
    upload: UploadConfigDep,
    features: dict[str, str] = Depends(feature_status),
) -> dict[str, Any]:
    """Operational snapshot for operators holding the admin token."""

    limits = limiter.config
    return envelope(
        {
            "status": "online",
            "version": settings.app_version,
            "uptime_seconds": round(time.monotonic() - _STARTED_AT, 2),
            "features": features,
            "rate_limit": {
                "enabled": limits.enabled,
                "max_requests": limits.max_requests,
                "window_seconds": limits.window_seconds,
                "active_keys": limiter.active_keys,
            },
            "upload": {
                "max_audio_size": upload.max_audio_size,
                "allowed_mime_prefixes": list(upload.allowed_mime_prefixes),
            },
        }
    )


__all__ = ["router"]
