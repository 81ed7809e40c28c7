"""Command and handler for disconnecting from voice."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.shared.messages import DiscordUIMessages

if TYPE_CHECKING:
    from ..services.session_registry import VoiceSessionRegistry


@dataclass
class LeaveCommand:
    guild_id: int


@dataclass
class LeaveResult:
    left: bool
    message: str
    cleared_tracks: int = 0


class LeaveHandler:
    """Clears the queue, disconnects and forgets the guild's session."""

    def __init__(self, registry: VoiceSessionRegistry) -> None:
        self._registry = registry

    async def handle(self, command: LeaveCommand) -> LeaveResult:
        session = self._registry.get(command.guild_id)
        if session is None:
            return LeaveResult(left=False, message=DiscordUIMessages.STATE_NOT_IN_VOICE)

        cleared = len(session.queue)
        await self._registry.remove(command.guild_id)
        return LeaveResult(
            left=True, message=DiscordUIMessages.ACTION_DISCONNECTED, cleared_tracks=cleared
        )
