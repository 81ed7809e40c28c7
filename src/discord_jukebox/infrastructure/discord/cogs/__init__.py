"""Discord cogs - prefix command handlers."""

from discord_jukebox.infrastructure.discord.cogs.music_cog import MusicCog
from discord_jukebox.infrastructure.discord.cogs.playlist_cog import PlaylistCog

__all__ = [
    "MusicCog",
    "PlaylistCog",
]
