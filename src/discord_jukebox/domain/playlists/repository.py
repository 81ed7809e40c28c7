"""
Playlists Domain Repository Interfaces

Abstract base class defining the contract for playlist persistence.
"""

from abc import ABC, abstractmethod

from discord_jukebox.domain.playlists.entities import Playlist, TrackRef


class PlaylistRepository(ABC):
    """Abstract repository for named playlists.

    Every operation takes the guild ID and filters on it, so one guild can
    never see or modify another guild's playlists. Implementations raise
    ``PersistenceError`` when the underlying store fails.
    """

    @abstractmethod
    async def create(self, name: str, guild_id: int) -> Playlist:
        """Create an empty playlist.

        Raises:
            PlaylistAlreadyExistsError: If (name, guild_id) is already stored.
        """
        ...

    @abstractmethod
    async def find_by_name(self, name: str, guild_id: int) -> Playlist | None:
        """Return the playlist with its tracks, or None if absent."""
        ...

    @abstractmethod
    async def list_by_guild(self, guild_id: int) -> list[Playlist]:
        """Return all playlists of a guild, ordered by name."""
        ...

    @abstractmethod
    async def append_track(self, playlist_id: int, guild_id: int, track: TrackRef) -> int:
        """Atomically append a track to the end of a playlist.

        Returns:
            The playlist's track count after the append.
        """
        ...
