"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from app.config.settings import AdminConfig, UploadConfig, settings
from app.pipelines.chat import ChatOrchestrator, get_chat_orchestrator
from app.services import (
    ChatCompletionClient,
    AudioRecognitionClient,
    MediaDownloadClient,
    MediaSearchClient,
    SpeechToTextClient,
    TextToSpeechClient,
    get_chat_client,
    get_media_download_client,
    get_media_search_client,
    get_recognition_client,
    get_transcribe_client,
    get_tts_client,
)
from app.services.rate_limit import FixedWindowRateLimiter, get_rate_limiter
from app.utils import verify_shared_secret

OrchestratorDep = Annotated[ChatOrchestrator, Depends(get_chat_orchestrator)]
ChatClientDep = Annotated[ChatCompletionClient, Depends(get_chat_client)]
TtsClientDep = Annotated[TextToSpeechClient, Depends(get_tts_client)]
RecognitionClientDep = Annotated[AudioRecognitionClient, Depends(get_recognition_client)]
SearchClientDep = Annotated[MediaSearchClient, Depends(get_media_search_client)]
DownloadClientDep = Annotated[MediaDownloadClient, Depends(get_media_download_client)]
TranscribeClientDep = Annotated[SpeechToTextClient, Depends(get_transcribe_client)]
RateLimiterDep = Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)]


async def enforce_rate_limit(request: Request, limiter: RateLimiterDep) -> None:
    """Reject the request with 429 once the client exceeds its window budget."""

    client_ip = request.client.host if request.client else "unknown"
    decision = limiter.hit(f"{client_ip}:{request.url.path}")
    if not decision.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many requests. Try again in {decision.retry_after} seconds.",
            headers={"Retry-After": str(decision.retry_after)},
        )


def get_admin_config() -> AdminConfig:
    return settings.admin


def get_upload_config() -> UploadConfig:
    return settings.upload


AdminConfigDep = Annotated[AdminConfig, Depends(get_admin_config)]
UploadConfigDep = Annotated[UploadConfig, Depends(get_upload_config)]


async def require_admin_token(request: Request, config: AdminConfigDep) -> None:
    """Validate the shared-secret admin header."""

    if config.token is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin endpoint is not configured",
        )

    provided = request.headers.get(config.header_name)
    if not verify_shared_secret(provided, config.token):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin token",
        )


__all__ = [
    "AdminConfigDep",
    "ChatClientDep",
    "UploadConfigDep",
    "DownloadClientDep",
    "OrchestratorDep",
    "RateLimiterDep",
    "RecognitionClientDep",
    "SearchClientDep",
    "TranscribeClientDep",
    "TtsClientDep",
    "enforce_rate_limit",
    "get_admin_config",
    "get_upload_config",
    "require_admin_token",
]
