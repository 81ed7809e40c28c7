"""
Music Bounded Context

Domain logic for resolved tracks and the live per-guild play queue.
"""

from discord_jukebox.domain.music.entities import PlayQueue, QueuedTrack
from discord_jukebox.domain.music.value_objects import PlayableSource, ResolvedTrack, TrackMetadata

__all__ = [
    # Entities
    "QueuedTrack",
    "PlayQueue",
    # Value Objects
    "TrackMetadata",
    "PlayableSource",
    "ResolvedTrack",
]
