"""Port interfaces implemented by infrastructure adapters."""

from discord_jukebox.application.interfaces.chat_gateway import ChatGateway, ReactionCheck
from discord_jukebox.application.interfaces.track_resolver import TrackResolver
from discord_jukebox.application.interfaces.voice_transport import (
    TrackEndCallback,
    VoiceConnection,
    VoiceTransport,
)

__all__ = [
    "ChatGateway",
    "ReactionCheck",
    "TrackEndCallback",
    "TrackResolver",
    "VoiceConnection",
    "VoiceTransport",
]
