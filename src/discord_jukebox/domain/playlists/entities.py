"""Core domain entities for the playlists bounded context."""

from __future__ import annotations

import random

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.music.value_objects import TrackMetadata
from discord_jukebox.domain.shared.datetime_utils import utcnow
from discord_jukebox.domain.shared.exceptions import InvalidPlaylistNameError
from discord_jukebox.domain.shared.messages import ErrorMessages
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    PlaylistNameStr,
    PositiveInt,
    TrackTitleStr,
    UtcDatetimeField,
)


class TrackRef(BaseModel):
    """Lazily-resolved reference stored in a playlist.

    Only the query or URL is kept; it is resolved again at playback time.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    query: NonEmptyStr
    title: TrackTitleStr | None = None

    @property
    def display_title(self) -> str:
        return self.title or self.query

    @classmethod
    def from_metadata(cls, metadata: TrackMetadata) -> TrackRef:
        """Prefer the canonical source URL and title of a resolved track."""
        return cls(query=metadata.source_ref, title=metadata.title)


class Playlist(BaseModel):
    """A named, per-guild list of track references."""

    model_config = ConfigDict(strict=True)

    id: PositiveInt
    name: PlaylistNameStr
    guild_id: DiscordSnowflake
    tracks: list[TrackRef] = Field(default_factory=list)
    created_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    def shuffled_tracks(self, rng: random.Random | None = None) -> list[TrackRef]:
        """Return a uniformly shuffled copy of the track list."""
        tracks = list(self.tracks)
        (rng or random).shuffle(tracks)
        return tracks

    @staticmethod
    def validate_name(name: str, max_length: int = 50) -> str:
        """Normalise a user-supplied playlist name.

        Names are single words so that ``playlist add <name> <query>`` can be
        split unambiguously.
        """
        name = name.strip()
        if not name:
            raise InvalidPlaylistNameError(name, ErrorMessages.EMPTY_PLAYLIST_NAME)
        if len(name) > max_length:
            raise InvalidPlaylistNameError(
                name, ErrorMessages.PLAYLIST_NAME_TOO_LONG.format(max_length=max_length)
            )
        if any(ch.isspace() for ch in name):
            raise InvalidPlaylistNameError(name, ErrorMessages.PLAYLIST_NAME_WHITESPACE)
        return name
