"""YouTube search and MP3/MP4 download clients."""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote_plus

import httpx

from app.config.settings import MediaConfig, settings
from app.services.capability import CapabilityClient, CapabilityError, CapabilityResult
from app.services.extractors import MediaFormat

_LINK_KEYS = ("download_link", "url", "link")
_QUALITY_LABELS = {MediaFormat.MP3: "{}kbps", MediaFormat.MP4: "{}p"}


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def search_results_url(query: str) -> str:
    """Public YouTube results page for ``query``; used when search is unavailable."""

    return f"https://www.youtube.com/results?search_query={quote_plus(query)}"


class _MediaClient(CapabilityClient):
    def __init__(
        self,
        config: MediaConfig,
        *,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self._config = config

    @property
    def configured(self) -> bool:
        return self._config.configured

    def _endpoint(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _api_key(self) -> str:
        return self._config.api_key.get_secret_value() if self._config.api_key else ""


class MediaSearchClient(_MediaClient):
    """Find the best YouTube match for a free-text song query."""

    capability = "media_search"
    unavailable_message = "Song search is currently unavailable"
    disabled_message = "Song search service not configured"

    def __init__(
        self,
        config: MediaConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, timeout=config.search_timeout_seconds, transport=transport)

    async def search(self, query: str) -> CapabilityResult:
        """Return ``{"title", "video_id", "url", "thumbnail", "duration"}`` of the first hit."""

        if not self.configured:
            return self._disabled()

        try:
            response = await self._request(
                "GET",
                self._endpoint("search/youtube"),
                params={"apikey": self._api_key(), "q": f"{query}{self._config.search_suffix}"},
                headers={"Accept": "application/json"},
            )
            data = self._json(response)
        except CapabilityError as exc:
            return self._failed(exc)

        videos = data.get("videos") if isinstance(data, Mapping) else None
        first = videos[0] if isinstance(videos, list) and videos else None
        if not isinstance(first, Mapping) or not first.get("id"):
            return self._failed(message=f'No results found for "{query}"')

        return self._succeeded(
            title=first.get("title") or query,
            video_id=first["id"],
            url=watch_url(first["id"]),
            thumbnail=first.get("thumbnail"),
            duration=first.get("duration"),
        )


def _extract_link(data: Any) -> str | None:
    if isinstance(data, str):
        return data.strip() if "http" in data else None
    if isinstance(data, Mapping):
        for key in _LINK_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class MediaDownloadClient(_MediaClient):
    """Resolve a direct MP3/MP4 download link for a YouTube URL."""

    capability = "media_download"
    unavailable_message = "Download service is currently unavailable"
    disabled_message = "Download service not configured"

    def __init__(
        self,
        config: MediaConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, timeout=config.download_timeout_seconds, transport=transport)

    async def download(self, url: str, media_format: MediaFormat) -> CapabilityResult:
        """Return ``{"download_link", "title", "format", "quality", "note"}``."""

        if not self.configured:
            return self._disabled()

        if media_format is MediaFormat.MP4:
            path, quality, default_title = "download/ytmp4", self._config.video_quality, "YouTube Video"
        else:
            path, quality, default_title = "download/ytmp3", self._config.audio_quality, "YouTube Audio"
        message = f"{media_format.value} download service is currently unavailable"

        try:
            response = await self._request(
                "GET",
                self._endpoint(path),
                params={"apikey": self._api_key(), "url": url, "quality": quality},
                headers={"Accept": "application/json"},
            )
            data = self._json(response)
            link = _extract_link(data)
            if not link:
                raise CapabilityError("download response carried no link")
        except CapabilityError as exc:
            return self._failed(exc, message=message)

        title = data.get("title") if isinstance(data, Mapping) else None
        return self._succeeded(
            download_link=link,
            title=title or default_title,
            format=media_format.value,
            quality=_QUALITY_LABELS[media_format].format(quality),
            note="Click to download",
        )


def get_media_search_client() -> MediaSearchClient:
    return _DEFAULT_SEARCH_CLIENT


def get_media_download_client() -> MediaDownloadClient:
    return _DEFAULT_DOWNLOAD_CLIENT


_DEFAULT_SEARCH_CLIENT = MediaSearchClient(settings.media)
_DEFAULT_DOWNLOAD_CLIENT = MediaDownloadClient(settings.media)


__all__ = [
    "MediaDownloadClient",
    "MediaSearchClient",
    "get_media_download_client",
    "get_media_search_client",
    "search_results_url",
    "watch_url",
]
