"""
Playlists Bounded Context

Named, per-guild playlists of lazily-resolved track references.
"""

from discord_jukebox.domain.playlists.entities import Playlist, TrackRef
from discord_jukebox.domain.playlists.repository import PlaylistRepository

__all__ = [
    # Entities
    "Playlist",
    "TrackRef",
    # Repository
    "PlaylistRepository",
]
