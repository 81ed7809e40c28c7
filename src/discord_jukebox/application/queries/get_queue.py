"""Query for retrieving the current queue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ...domain.music.entities import QueuedTrack
from ...domain.shared.types import DiscordSnowflake, NonNegativeInt

if TYPE_CHECKING:
    from ..services.session_registry import VoiceSessionRegistry


class GetQueueQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake


class QueueInfo(BaseModel):

    guild_id: DiscordSnowflake
    tracks: list[QueuedTrack] = Field(default_factory=list)
    connected: bool = False
    total_duration: NonNegativeInt | None = None

    @property
    def current_track(self) -> QueuedTrack | None:
        return self.tracks[0] if self.tracks else None

    @property
    def upcoming(self) -> list[QueuedTrack]:
        return self.tracks[1:]

    @property
    def length(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return len(self.tracks) == 0


class GetQueueHandler:

    def __init__(self, *, registry: VoiceSessionRegistry) -> None:
        self._registry = registry

    async def handle(self, query: GetQueueQuery) -> QueueInfo:
        session = self._registry.get(query.guild_id)
        if session is None or session.closed:
            return QueueInfo(guild_id=query.guild_id, total_duration=0)

        async with session.lock:
            tracks = list(session.queue.snapshot())

        total_duration = sum(
            t.metadata.duration_seconds for t in tracks if t.metadata.duration_seconds is not None
        )
        return QueueInfo(
            guild_id=query.guild_id,
            tracks=tracks,
            connected=True,
            total_duration=total_duration,
        )
