"""
Application Commands (CQRS Write Side)

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from discord_jukebox.application.commands.create_playlist import (
    CreatePlaylistCommand,
    CreatePlaylistHandler,
)
from discord_jukebox.application.commands.leave import LeaveCommand, LeaveHandler, LeaveResult
from discord_jukebox.application.commands.play_playlist import (
    PlayPlaylistCommand,
    PlayPlaylistHandler,
    PlayPlaylistResult,
)
from discord_jukebox.application.commands.play_track import (
    PlayTrackCommand,
    PlayTrackHandler,
    PlayTrackResult,
    PlayTrackStatus,
)
from discord_jukebox.application.commands.skip_track import (
    SkipResult,
    SkipStatus,
    SkipTrackCommand,
    SkipTrackHandler,
)

__all__ = [
    # Play
    "PlayTrackCommand",
    "PlayTrackHandler",
    "PlayTrackResult",
    "PlayTrackStatus",
    # Skip
    "SkipTrackCommand",
    "SkipTrackHandler",
    "SkipResult",
    "SkipStatus",
    # Leave
    "LeaveCommand",
    "LeaveHandler",
    "LeaveResult",
    # Playlists
    "CreatePlaylistCommand",
    "CreatePlaylistHandler",
    "PlayPlaylistCommand",
    "PlayPlaylistHandler",
    "PlayPlaylistResult",
]
