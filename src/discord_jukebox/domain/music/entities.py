"""Core domain entities for the music bounded context."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.music.value_objects import PlayableSource, ResolvedTrack, TrackMetadata
from discord_jukebox.domain.shared.datetime_utils import utcnow
from discord_jukebox.domain.shared.exceptions import QueueFullError
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    PositiveInt,
    UtcDatetimeField,
)


def _new_track_key() -> str:
    return uuid4().hex


class QueuedTrack(BaseModel):
    """A resolved track sitting in a guild's play queue.

    ``key`` identifies this particular queue entry; the same song queued twice
    gets two keys. ``announce_channel_id`` is the text channel the track-ended
    announcement for this entry goes to.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    key: NonEmptyStr = Field(default_factory=_new_track_key)
    metadata: TrackMetadata
    source: PlayableSource
    requested_by_id: DiscordSnowflake
    announce_channel_id: DiscordSnowflake
    requested_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def requester_mention(self) -> str:
        return f"<@{self.requested_by_id}>"

    @property
    def title(self) -> str:
        return self.metadata.display_title

    @classmethod
    def from_resolved(
        cls,
        resolved: ResolvedTrack,
        *,
        requested_by_id: int,
        announce_channel_id: int,
    ) -> QueuedTrack:
        return cls(
            metadata=resolved.metadata,
            source=resolved.source,
            requested_by_id=requested_by_id,
            announce_channel_id=announce_channel_id,
        )


class PlayQueue(BaseModel):
    """Ordered FIFO of queued tracks for one guild.

    Index 0 is the track currently sounding (or about to). Tracks only ever
    leave from the front.
    """

    model_config = ConfigDict(strict=True)

    max_size: PositiveInt = 100
    tracks: list[QueuedTrack] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tracks)

    @property
    def length(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    def enqueue(self, track: QueuedTrack) -> int:
        """Append to the back and return the 1-based position (= new length)."""
        if len(self.tracks) >= self.max_size:
            raise QueueFullError(self.max_size)
        self.tracks.append(track)
        return len(self.tracks)

    def current(self) -> QueuedTrack | None:
        return self.tracks[0] if self.tracks else None

    def advance(self) -> QueuedTrack | None:
        """Drop the front entry and return the new front, if any.

        A no-op on an empty queue.
        """
        if self.tracks:
            self.tracks.pop(0)
        return self.current()

    def clear(self) -> int:
        count = len(self.tracks)
        self.tracks.clear()
        return count

    def snapshot(self) -> tuple[QueuedTrack, ...]:
        return tuple(self.tracks)
