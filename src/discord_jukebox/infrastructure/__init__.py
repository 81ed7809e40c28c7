"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite playlist repository)
- Discord (bot, cogs, voice and chat adapters)
- Audio (yt-dlp)
"""
