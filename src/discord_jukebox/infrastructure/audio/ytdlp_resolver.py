"""TrackResolver implementation using yt-dlp for direct links and search."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Final, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator
from yt_dlp import YoutubeDL
from yt_dlp.utils import YoutubeDLError

from discord_jukebox.application.interfaces.track_resolver import TrackResolver
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.music.value_objects import PlayableSource, ResolvedTrack, TrackMetadata
from discord_jukebox.domain.shared.exceptions import ResolutionError
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from discord_jukebox.domain.shared.types import HttpUrlStr, NonEmptyStr, NonNegativeInt, PositiveInt

logger = logging.getLogger(__name__)

CACHE_TTL: Final[int] = 1800
CACHE_MAX_SIZE: Final[int] = 500
DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
LOG_URL_TRUNCATE: Final[int] = 60


# ── Pydantic models for yt-dlp data ────────────────────────────────────


class AudioFormatInfo(BaseModel):
    """A single audio format entry from yt-dlp extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None


class YtDlpTrackInfo(BaseModel):
    """Trimmed yt-dlp extraction result.

    Extra fields from yt-dlp are ignored, and garbage values coerce to None.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    webpage_url: HttpUrlStr | None = None
    url: NonEmptyStr | None = None
    title: NonEmptyStr | None = None
    duration: NonNegativeInt | None = None
    thumbnail: HttpUrlStr | None = None
    formats: list[AudioFormatInfo] = Field(default_factory=list)

    @field_validator("url", "title", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("webpage_url", "thumbnail", mode="before")
    @classmethod
    def _coerce_non_http_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.startswith(("http://", "https://")):
            return None
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> int | None:
        if v is None:
            return None
        try:
            val = int(v)
            return val if val >= 0 else None
        except (TypeError, ValueError):
            return None

    @property
    def stream_url(self) -> str | None:
        if self.url:
            return self.url
        audio_formats = [f for f in self.formats if f.acodec != "none" and f.url]
        return audio_formats[-1].url if audio_formats else None


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    info: YtDlpTrackInfo
    cached_at: float


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    default_search: NonEmptyStr = "ytsearch"
    forceipv4: bool = True
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = DEFAULT_SOCKET_TIMEOUT
    format: NonEmptyStr | None = None
    skip_download: bool = True


class YtDlpResolver(TrackResolver):
    """Resolve links with ``extract_info`` and phrases with ``ytsearch1:``.

    yt-dlp is blocking, so every call runs in a worker thread. Successful
    lookups are cached briefly since stream URLs expire.
    """

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._opts = YtDlpOpts(format=self._settings.ytdlp_format)
        self._cache: dict[str, CacheEntry] = {}

    def is_url(self, text: str) -> bool:
        return text.startswith("http")

    async def resolve_by_url(self, url: str) -> ResolvedTrack:
        info = await asyncio.to_thread(self._lookup, url, url)
        return self._to_resolved(info, fallback_ref=url)

    async def resolve_by_search(self, query: str) -> ResolvedTrack:
        info = await asyncio.to_thread(self._lookup, f"ytsearch1:{query}", query)
        return self._to_resolved(info, fallback_ref=query)

    def _lookup(self, target: str, query: str) -> YtDlpTrackInfo:
        now = time.time()
        cached = self._cache.get(target)
        if cached is not None and now - cached.cached_at < CACHE_TTL:
            return cached.info

        info = self._extract_sync(target, query)
        self._cache[target] = CacheEntry(info=info, cached_at=now)
        if len(self._cache) > CACHE_MAX_SIZE:
            expired = [k for k, e in self._cache.items() if now - e.cached_at >= CACHE_TTL]
            for k in expired:
                self._cache.pop(k, None)
        return info

    def _extract_sync(self, target: str, query: str) -> YtDlpTrackInfo:
        try:
            with YoutubeDL(params=cast(Any, self._opts.model_dump())) as ydl:
                data = ydl.extract_info(target, download=False)
        except YoutubeDLError as e:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, target[:LOG_URL_TRUNCATE])
            raise ResolutionError(query, _clean_error(e)) from e

        if isinstance(data, dict) and "entries" in data:
            entries = [e for e in (data.get("entries") or []) if e]
            if not entries:
                logger.info(LogTemplates.YTDLP_FAILED_SEARCH, query)
                raise ResolutionError(query, ErrorMessages.NO_RESULTS)
            data = entries[0]

        if not isinstance(data, dict):
            raise ResolutionError(query, ErrorMessages.NO_RESULTS)
        return YtDlpTrackInfo.model_validate(dict(data))

    def _to_resolved(self, info: YtDlpTrackInfo, *, fallback_ref: str) -> ResolvedTrack:
        stream_url = info.stream_url
        if not stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, info.title)
            raise ResolutionError(
                fallback_ref,
                ErrorMessages.NO_STREAM_URL_FOR_TRACK.format(title=info.title or fallback_ref),
            )

        metadata = TrackMetadata(
            source_ref=info.webpage_url or fallback_ref,
            title=info.title[:500] if info.title else None,
            thumbnail_url=info.thumbnail,
            duration_seconds=info.duration,
        )
        return ResolvedTrack(source=PlayableSource(stream_url=stream_url), metadata=metadata)


def _clean_error(error: YoutubeDLError) -> str:
    message = str(error)
    return message.removeprefix("ERROR: ").strip() or ErrorMessages.NO_RESULTS
