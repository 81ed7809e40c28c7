"""Queries for browsing a guild's playlists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.exceptions import PlaylistNotFoundError
from ...domain.shared.types import DiscordSnowflake, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.playlists.entities import Playlist
    from ...domain.playlists.repository import PlaylistRepository


class ListPlaylistsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake


class GetPlaylistQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    name: NonEmptyStr


class PlaylistQueryHandler:

    def __init__(self, *, playlist_repository: PlaylistRepository) -> None:
        self._playlists = playlist_repository

    async def list_playlists(self, query: ListPlaylistsQuery) -> list[Playlist]:
        return await self._playlists.list_by_guild(query.guild_id)

    async def get_playlist(self, query: GetPlaylistQuery) -> Playlist:
        playlist = await self._playlists.find_by_name(query.name, query.guild_id)
        if playlist is None:
            raise PlaylistNotFoundError(query.name, query.guild_id)
        return playlist
