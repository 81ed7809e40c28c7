"""Port interface for Discord voice operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import QueuedTrack

TrackEndCallback = Callable[[str], Awaitable[None]]
"""Invoked once with the finished entry's ``QueuedTrack.key``."""


class VoiceConnection(ABC):
    """A live voice link in one guild.

    Methods raise ``TransportError`` when the underlying client fails.
    """

    guild_id: int

    @property
    @abstractmethod
    def channel_id(self) -> int | None:
        ...

    @abstractmethod
    def is_connected(self) -> bool:
        ...

    @abstractmethod
    async def play(self, track: QueuedTrack, on_end: TrackEndCallback) -> None:
        """Start sounding *track*; *on_end* fires once when it stops for any reason."""
        ...

    @abstractmethod
    async def skip_current(self) -> None:
        """Stop the current track, which fires its end callback."""
        ...

    @abstractmethod
    async def leave(self) -> None:
        """Stop playback and disconnect."""
        ...


class VoiceTransport(ABC):
    """Factory for voice connections."""

    @abstractmethod
    async def join(self, guild_id: int, channel_id: int) -> VoiceConnection:
        """Connect (or move) to a voice channel and return the connection."""
        ...
