"""Command and handler for queueing a whole playlist in random order."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ...domain.shared.exceptions import (
    PlaylistNotFoundError,
    QueueFullError,
    ResolutionError,
    TransportError,
)
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake, NonEmptyStr, NonNegativeInt

if TYPE_CHECKING:
    from ...domain.playlists.repository import PlaylistRepository
    from ..services.playback_service import PlaybackService

logger = logging.getLogger(__name__)


class PlayPlaylistCommand(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    text_channel_id: DiscordSnowflake
    voice_channel_id: DiscordSnowflake
    user_id: DiscordSnowflake
    name: NonEmptyStr


class PlayPlaylistResult(BaseModel):
    """Best-effort import summary."""

    model_config = ConfigDict(frozen=True, strict=True)

    playlist_name: NonEmptyStr
    total: NonNegativeInt
    queued: NonNegativeInt
    failed: list[str] = Field(default_factory=list)
    queue_full: bool = False

    @property
    def all_queued(self) -> bool:
        return self.queued == self.total


class PlayPlaylistHandler:
    """Shuffles a playlist and enqueues each track as if ``play`` had been run.

    A track that fails to resolve is reported and skipped; the rest still go
    in. A full queue stops the import.
    """

    def __init__(
        self,
        *,
        playlist_repository: PlaylistRepository,
        playback_service: PlaybackService,
        rng: random.Random | None = None,
    ) -> None:
        self._playlists = playlist_repository
        self._playback = playback_service
        self._rng = rng

    async def handle(self, command: PlayPlaylistCommand) -> PlayPlaylistResult:
        """Raises ``PlaylistNotFoundError`` or ``TransportError`` before anything is queued."""
        playlist = await self._playlists.find_by_name(command.name, command.guild_id)
        if playlist is None:
            raise PlaylistNotFoundError(command.name, command.guild_id)

        tracks = playlist.shuffled_tracks(self._rng)
        if not tracks:
            return PlayPlaylistResult(playlist_name=playlist.name, total=0, queued=0)

        queued = 0
        failed: list[str] = []
        queue_full = False
        session = await self._playback.join(command.guild_id, command.voice_channel_id)
        session.hold()
        try:
            for ref in tracks:
                try:
                    await self._playback.enqueue(
                        guild_id=command.guild_id,
                        voice_channel_id=command.voice_channel_id,
                        text_channel_id=command.text_channel_id,
                        user_id=command.user_id,
                        query=ref.query,
                    )
                except (ResolutionError, TransportError) as e:
                    logger.warning(LogTemplates.PLAYLIST_IMPORT_FAILED, ref.query, playlist.name, e.message)
                    failed.append(ref.display_title)
                    continue
                except QueueFullError:
                    queue_full = True
                    break
                queued += 1
        finally:
            session.release_hold()
            await self._playback.release_if_idle(session)

        logger.info(LogTemplates.PLAYLIST_IMPORT_DONE, queued, len(tracks), playlist.name, command.guild_id)
        return PlayPlaylistResult(
            playlist_name=playlist.name,
            total=len(tracks),
            queued=queued,
            failed=failed,
            queue_full=queue_full,
        )
