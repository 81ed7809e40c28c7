"""
Application Queries (CQRS Read Side)

Query objects and their handlers for read operations.
"""

from discord_jukebox.application.queries.get_playlists import (
    GetPlaylistQuery,
    ListPlaylistsQuery,
    PlaylistQueryHandler,
)
from discord_jukebox.application.queries.get_queue import GetQueueHandler, GetQueueQuery, QueueInfo

__all__ = [
    "GetPlaylistQuery",
    "GetQueueHandler",
    "GetQueueQuery",
    "ListPlaylistsQuery",
    "PlaylistQueryHandler",
    "QueueInfo",
]
