"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.domain.shared.types import HttpUrlStr, NonEmptyStr, NonNegativeInt, TrackTitleStr


class TrackMetadata(BaseModel):
    """Display metadata of a resolved track.

    ``source_ref`` is whatever resolves back to the same audio later on,
    normally the canonical page URL.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    source_ref: NonEmptyStr
    title: TrackTitleStr | None = None
    thumbnail_url: HttpUrlStr | None = None
    duration_seconds: NonNegativeInt | None = None

    @property
    def display_title(self) -> str:
        return self.title or DiscordUIMessages.EMBED_UNKNOWN_TITLE


class PlayableSource(BaseModel):
    """Opaque handle the voice transport knows how to play."""

    model_config = ConfigDict(frozen=True, strict=True)

    stream_url: NonEmptyStr


class ResolvedTrack(BaseModel):
    """Result of a successful resolution: something to play plus what it is."""

    model_config = ConfigDict(frozen=True, strict=True)

    source: PlayableSource
    metadata: TrackMetadata
