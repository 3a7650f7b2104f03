"""Media download endpoints executing the plans returned by `/chat`."""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.controllers.dependencies import DownloadClientDep, SearchClientDep, enforce_rate_limit
from app.services.extractors import MediaFormat
from app.services.media import search_results_url
from app.views import SongDownloadRequest, UrlDownloadRequest, capability_envelope, envelope

router = APIRouter(
    prefix="/download",
    tags=["downloads"],
    dependencies=[Depends(enforce_rate_limit)],
)

logger = logging.getLogger(__name__)

URL_REQUIRED = "YouTube URL required"
SONG_OR_URL_REQUIRED = "Song name or YouTube URL required"


async def _download_url(
    request: UrlDownloadRequest,
    client: DownloadClientDep,
    media_format: MediaFormat,
) -> dict[str, Any]:
    url = request.url.strip()
    if not url:
        return envelope(success=False, error=URL_REQUIRED)

    result = await client.download(url, media_format)
    return capability_envelope(result)


@router.post("/audio")
async def download_audio(request: UrlDownloadRequest, client: DownloadClientDep) -> dict[str, Any]:
    """Convert a YouTube URL to an MP3 download link."""

    return await _download_url(request, client, MediaFormat.MP3)


@router.post("/video")
async def download_video(request: UrlDownloadRequest, client: DownloadClientDep) -> dict[str, Any]:
    """Convert a YouTube URL to an MP4 download link."""

    return await _download_url(request, client, MediaFormat.MP4)


@router.post("/song")
async def download_song(
    request: SongDownloadRequest,
    search: SearchClientDep,
    client: DownloadClientDep,
) -> dict[str, Any]:
    """Download a song by YouTube URL, searching by name first when no URL is given."""

    song = (request.song or "").strip()
    youtube_url = (request.youtube_url or "").strip()
    if not song and not youtube_url:
        return envelope(success=False, error=SONG_OR_URL_REQUIRED)

    if not youtube_url:
        found = await search.search(song)
        if not found.success:
            logger.info("Song search failed for %r: %s", song, found.error_message)
            return envelope(
                {"song": song, "format": request.format.value, "search_url": search_results_url(song)},
                success=False,
                error=found.error_message or f'No results found for "{song}"',
            )
        youtube_url = str(found.payload.get("url") or "")
        song = str(found.payload.get("title") or song)

    result = await client.download(youtube_url, request.format)
    extra: dict[str, Any] = {"format": request.format.value, "youtube_url": youtube_url}
    if song:
        extra["song"] = song
    return capability_envelope(result, **extra)


__all__ = ["router"]
