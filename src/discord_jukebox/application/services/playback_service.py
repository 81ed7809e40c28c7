"""Playback Application Service - resolves user text and queues it in order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.music.entities import QueuedTrack
from ...domain.shared.exceptions import TransportError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import QueuePositionInt
from .session_registry import SessionClosedError

if TYPE_CHECKING:
    from ..interfaces.track_resolver import TrackResolver
    from .session_registry import VoiceSession, VoiceSessionRegistry

logger = logging.getLogger(__name__)


class EnqueueReceipt(BaseModel):
    """Where a freshly queued track landed."""

    model_config = ConfigDict(frozen=True, strict=True)

    track: QueuedTrack
    position: QueuePositionInt

    @property
    def started_playing(self) -> bool:
        return self.position == 1


class PlaybackService:
    """Joins, resolves and enqueues on behalf of ``play`` and ``playlist play``.

    Resolution happens outside the session lock. The session's ticket order
    keeps the queue in request order regardless of how long each resolution
    takes.
    """

    _MAX_CLOSED_RETRIES: int = 3

    def __init__(self, *, registry: VoiceSessionRegistry, track_resolver: TrackResolver) -> None:
        self._registry = registry
        self._resolver = track_resolver

    async def join(self, guild_id: int, voice_channel_id: int) -> VoiceSession:
        return await self._registry.get_or_create(guild_id, voice_channel_id)

    async def release_if_idle(self, session: VoiceSession) -> bool:
        return await self._registry.release_if_idle(session)

    async def enqueue(
        self,
        *,
        guild_id: int,
        voice_channel_id: int,
        text_channel_id: int,
        user_id: int,
        query: str,
    ) -> EnqueueReceipt:
        """Resolve *query* and append it to the guild's queue.

        Raises:
            EmptyQueryError: *query* is blank.
            ResolutionError: The query could not be resolved; the queue is untouched.
            TransportError: Joining voice or starting playback failed.
            QueueFullError: The queue is at capacity.
        """
        session = await self._registry.get_or_create(guild_id, voice_channel_id)
        ticket = session.reserve()

        try:
            resolved = await self._resolver.resolve(query)
        except BaseException:
            await session.abandon(ticket)
            await self._registry.release_if_idle(session)
            raise

        track = QueuedTrack.from_resolved(
            resolved,
            requested_by_id=user_id,
            announce_channel_id=text_channel_id,
        )

        for _ in range(self._MAX_CLOSED_RETRIES):
            try:
                position = await session.commit(ticket, track)
            except SessionClosedError:
                logger.info(LogTemplates.SESSION_CLOSED_RETRY, guild_id)
                session = await self._registry.get_or_create(guild_id, voice_channel_id)
                ticket = session.reserve()
                continue
            except BaseException:
                # commit has already settled the ticket, including on cancellation.
                await self._registry.release_if_idle(session)
                raise
            return EnqueueReceipt(track=track, position=position)

        await session.abandon(ticket)
        await self._registry.release_if_idle(session)
        raise TransportError("enqueue", guild_id)
