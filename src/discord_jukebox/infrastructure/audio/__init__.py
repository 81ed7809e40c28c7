"""Audio resolution adapters."""

from discord_jukebox.infrastructure.audio.ytdlp_resolver import YtDlpResolver

__all__ = ["YtDlpResolver"]
