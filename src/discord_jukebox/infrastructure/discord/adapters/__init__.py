"""Discord adapters implementing the application's voice and chat ports."""

from discord_jukebox.infrastructure.discord.adapters.chat_gateway import DiscordChatGateway
from discord_jukebox.infrastructure.discord.adapters.voice_transport import (
    DiscordVoiceConnection,
    DiscordVoiceTransport,
)

__all__ = ["DiscordChatGateway", "DiscordVoiceConnection", "DiscordVoiceTransport"]
