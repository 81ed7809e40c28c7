"""
Skip Track Command

Command and handler for skipping the current track.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import TransportError
from ...domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ...domain.music.entities import QueuedTrack
    from ..services.session_registry import VoiceSessionRegistry

logger = logging.getLogger(__name__)


class SkipStatus(Enum):
    """Status codes for skip results."""

    SKIPPED = "skipped"
    LEFT = "left"
    NOTHING_PLAYING = "nothing_playing"
    NOT_IN_CHANNEL = "not_in_channel"
    ERROR = "error"


@dataclass
class SkipTrackCommand:
    """Command to skip the current track of a guild."""

    guild_id: int

    def __post_init__(self) -> None:
        if self.guild_id <= 0:
            raise ValueError("Guild ID must be positive")


@dataclass
class SkipResult:
    """Result of a skip track command."""

    status: SkipStatus
    message: str
    skipped_track: QueuedTrack | None = None

    @property
    def is_success(self) -> bool:
        return self.status in (SkipStatus.SKIPPED, SkipStatus.LEFT)

    @classmethod
    def skipped(cls, track: QueuedTrack) -> SkipResult:
        return cls(
            status=SkipStatus.SKIPPED,
            message=DiscordUIMessages.ACTION_SKIPPED.format(title=track.title),
            skipped_track=track,
        )

    @classmethod
    def left(cls) -> SkipResult:
        return cls(status=SkipStatus.LEFT, message=DiscordUIMessages.ACTION_SKIP_EMPTY_LEFT)

    @classmethod
    def error(cls, status: SkipStatus, message: str) -> SkipResult:
        return cls(status=status, message=message)


class SkipTrackHandler:
    """Handler for SkipTrackCommand.

    Stopping the current track makes the transport report it as ended, and the
    completion handler then advances and announces. With nothing queued the
    session is torn down right away.
    """

    def __init__(self, registry: VoiceSessionRegistry) -> None:
        self._registry = registry

    async def handle(self, command: SkipTrackCommand) -> SkipResult:
        session = self._registry.get(command.guild_id)
        if session is None or session.closed:
            return SkipResult.error(SkipStatus.NOT_IN_CHANNEL, DiscordUIMessages.STATE_NOT_IN_VOICE)

        async with session.lock:
            if session.closed:
                return SkipResult.error(
                    SkipStatus.NOT_IN_CHANNEL, DiscordUIMessages.STATE_NOT_IN_VOICE
                )

            current = session.queue.current()
            if current is None:
                if session.pending_reservations:
                    return SkipResult.error(
                        SkipStatus.NOTHING_PLAYING, DiscordUIMessages.STATE_NOTHING_PLAYING
                    )
                await self._registry.discard(session)
                return SkipResult.left()

            if session.skip_pending(current):
                return SkipResult.error(
                    SkipStatus.NOTHING_PLAYING,
                    DiscordUIMessages.ACTION_SKIP_PENDING.format(title=current.title),
                )

            try:
                await session.connection.skip_current()
            except TransportError as e:
                logger.warning(LogTemplates.VOICE_SKIP_FAILED, command.guild_id, e)
                return SkipResult.error(SkipStatus.ERROR, DiscordUIMessages.ERROR_COMMAND_FAILED)
            session.mark_skipping(current)

        return SkipResult.skipped(current)
