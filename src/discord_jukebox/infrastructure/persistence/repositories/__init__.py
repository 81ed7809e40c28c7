"""SQLite repository implementations."""

from discord_jukebox.infrastructure.persistence.repositories.playlist_repository import (
    SQLitePlaylistRepository,
)

__all__ = ["SQLitePlaylistRepository"]
