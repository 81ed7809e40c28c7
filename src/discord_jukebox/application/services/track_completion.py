"""Reacts to the voice transport reporting that a track finished."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.music.entities import QueuedTrack
    from ..interfaces.chat_gateway import ChatGateway
    from .session_registry import VoiceSessionRegistry

logger = logging.getLogger(__name__)


class CompletionOutcome(Enum):
    """What a track-ended event ended up doing."""

    IGNORED = "ignored"
    ADVANCED = "advanced"
    WAITING = "waiting"
    LEFT = "left"


class TrackCompletionHandler:
    """Advances the queue when a track ends, or leaves once nothing is left.

    Events for a session that is gone, or for an entry that is no longer the
    front of the queue, are no-ops, so duplicate or late events are harmless.
    """

    def __init__(self, *, registry: VoiceSessionRegistry, chat_gateway: ChatGateway) -> None:
        self._registry = registry
        self._chat = chat_gateway

    async def on_track_end(self, guild_id: int, track_key: str) -> CompletionOutcome:
        session = self._registry.get(guild_id)
        if session is None:
            logger.debug(LogTemplates.COMPLETION_NO_SESSION, track_key, guild_id)
            return CompletionOutcome.IGNORED

        announce: tuple[int, QueuedTrack] | None = None
        async with session.lock:
            if session.closed:
                logger.debug(LogTemplates.COMPLETION_NO_SESSION, track_key, guild_id)
                return CompletionOutcome.IGNORED

            finished = session.queue.current()
            if finished is None or finished.key != track_key:
                logger.debug(LogTemplates.COMPLETION_STALE_TRACK, track_key, guild_id)
                return CompletionOutcome.IGNORED

            session.queue.advance()
            logger.info(LogTemplates.QUEUE_ADVANCED, guild_id, len(session.queue))

            if not session.connection.is_connected():
                await self._registry.discard(session)
                return CompletionOutcome.LEFT

            next_track = await session.start_front()
            if next_track is None:
                if session.pending_reservations:
                    logger.info(
                        LogTemplates.COMPLETION_PENDING_RESERVATIONS,
                        guild_id,
                        session.pending_reservations,
                    )
                    return CompletionOutcome.WAITING
                logger.info(LogTemplates.QUEUE_EMPTY, guild_id)
                await self._registry.discard(session)
                return CompletionOutcome.LEFT

            announce = (finished.announce_channel_id, next_track)

        await self._announce(guild_id, *announce)
        return CompletionOutcome.ADVANCED

    async def _announce(self, guild_id: int, channel_id: int, track: QueuedTrack) -> None:
        try:
            await self._chat.announce_now_playing(channel_id, track)
        except Exception as e:
            logger.warning(LogTemplates.COMPLETION_ANNOUNCE_FAILED, guild_id, e)
