"""Command and handler for creating an empty named playlist."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.playlists.entities import Playlist
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.playlists.repository import PlaylistRepository

logger = logging.getLogger(__name__)


class CreatePlaylistCommand(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    name: str


class CreatePlaylistHandler:
    """Validates the name and stores a new playlist.

    Raises ``InvalidPlaylistNameError`` or ``PlaylistAlreadyExistsError`` for
    the caller to report.
    """

    def __init__(
        self, *, playlist_repository: PlaylistRepository, max_name_length: int = 50
    ) -> None:
        self._playlists = playlist_repository
        self._max_name_length = max_name_length

    async def handle(self, command: CreatePlaylistCommand) -> Playlist:
        name = Playlist.validate_name(command.name, self._max_name_length)
        playlist = await self._playlists.create(name, command.guild_id)
        logger.info(LogTemplates.PLAYLIST_CREATED, playlist.name, command.guild_id)
        return playlist
