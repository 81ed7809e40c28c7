"""Voice sessions and the process-wide registry that owns them.

Lock order is always session lock first, then the registry lock. Nothing
takes a session lock while holding the registry lock.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from ...domain.music.entities import PlayQueue
from ...domain.shared.exceptions import TransportError
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ...domain.music.entities import QueuedTrack
    from ..interfaces.voice_transport import VoiceConnection, VoiceTransport

    GuildTrackEndCallback = Callable[[int, str], Awaitable[None]]

logger = logging.getLogger(__name__)


class SessionClosedError(Exception):
    """Raised to a waiting enqueue when its session was torn down underneath it."""

    def __init__(self, guild_id: int) -> None:
        super().__init__(f"Voice session for guild {guild_id} is closed")
        self.guild_id = guild_id


class VoiceSession:
    """One guild's voice connection plus its play queue.

    Every read or write of ``queue`` and ``connection`` happens under ``lock``.

    Enqueues are ticketed: a command calls :meth:`reserve` before resolving its
    track, then :meth:`commit` afterwards. Commits are applied strictly in
    ticket order, so a slow resolution never lets a later request overtake
    an earlier one. A failed resolution gives its ticket back via
    :meth:`abandon`.
    """

    def __init__(
        self,
        guild_id: int,
        connection: VoiceConnection,
        *,
        max_queue_size: int = 100,
        on_track_end: GuildTrackEndCallback | None = None,
    ) -> None:
        self.guild_id = guild_id
        self.connection = connection
        self.queue = PlayQueue(max_size=max_queue_size)
        self.lock = asyncio.Lock()
        self.closed = False

        self._on_track_end = on_track_end
        self._turn = asyncio.Condition(self.lock)
        self._next_ticket = 0
        self._serving = 0
        self._abandoned: set[int] = set()
        self._holds = 0
        self._stopping_key: str | None = None

    def __repr__(self) -> str:
        return (
            f"VoiceSession(guild_id={self.guild_id}, queue={len(self.queue)}, "
            f"pending={self.pending_reservations}, closed={self.closed})"
        )

    @property
    def pending_reservations(self) -> int:
        """Unsettled tickets plus import holds."""
        return self._next_ticket - self._serving - len(self._abandoned) + self._holds

    @property
    def is_idle(self) -> bool:
        """Nothing queued and nobody about to queue anything."""
        return self.queue.is_empty and self.pending_reservations == 0

    def reserve(self) -> int:
        ticket = self._next_ticket
        self._next_ticket += 1
        return ticket

    async def commit(self, ticket: int, track: QueuedTrack) -> int:
        """Enqueue *track* once every earlier ticket is settled.

        Starts playback when the track lands at the front.

        Returns:
            The 1-based queue position (1 means it started playing).

        Raises:
            SessionClosedError: If the session was torn down while waiting.
            QueueFullError: If the queue is at capacity.
            TransportError: If playback could not be started.
        """
        async with self.lock:
            try:
                await self._turn.wait_for(lambda: self.closed or self._serving == ticket)
            except BaseException:
                # Condition.wait re-acquires the lock before raising.
                self._give_up(ticket)
                raise
            try:
                if self.closed:
                    raise SessionClosedError(self.guild_id)
                position = self.queue.enqueue(track)
                logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, position, self.guild_id)
                if position == 1:
                    await self._start(track)
                return position
            finally:
                self._release_turn()

    async def abandon(self, ticket: int) -> None:
        async with self.lock:
            self._give_up(ticket)
        logger.debug(LogTemplates.QUEUE_SLOT_ABANDONED, ticket, self.guild_id)

    def hold(self) -> None:
        """Keep the session from counting as idle until :meth:`release_hold`.

        Used while a playlist import works through its tracks, so a run of
        failed resolutions does not disconnect between them.
        """
        self._holds += 1

    def release_hold(self) -> None:
        self._holds = max(0, self._holds - 1)
        logger.debug(LogTemplates.SESSION_HOLD_RELEASED, self.guild_id)

    def skip_pending(self, track: QueuedTrack) -> bool:
        """Whether a stop was already issued for *track*. Caller must hold ``lock``."""
        return self._stopping_key == track.key

    def mark_skipping(self, track: QueuedTrack) -> None:
        """Caller must hold ``lock``."""
        self._stopping_key = track.key

    async def start_front(self) -> QueuedTrack | None:
        """Start whatever is at the front, dropping entries that fail to start.

        Caller must hold ``lock``.
        """
        while (track := self.queue.current()) is not None:
            try:
                await self._play(track)
                return track
            except TransportError as e:
                logger.warning(LogTemplates.PLAYBACK_FAILED_START, track.title, self.guild_id, e)
                self.queue.advance()
        return None

    def mark_closed(self) -> None:
        """Caller must hold ``lock``."""
        self.closed = True
        self._turn.notify_all()

    async def _start(self, track: QueuedTrack) -> None:
        try:
            await self._play(track)
        except TransportError:
            self.queue.advance()
            raise

    async def _play(self, track: QueuedTrack) -> None:
        await self.connection.play(track, self._track_ended)
        logger.info(LogTemplates.PLAYBACK_STARTED, track.title, self.guild_id)

    async def _track_ended(self, key: str) -> None:
        logger.debug(LogTemplates.TRACK_ENDED, key, self.guild_id)
        if self._on_track_end is not None:
            await self._on_track_end(self.guild_id, key)

    def _give_up(self, ticket: int) -> None:
        if ticket >= self._serving:
            self._abandoned.add(ticket)
            self._skip_abandoned()
            self._turn.notify_all()

    def _release_turn(self) -> None:
        self._serving += 1
        self._skip_abandoned()
        self._turn.notify_all()

    def _skip_abandoned(self) -> None:
        while self._serving in self._abandoned:
            self._abandoned.discard(self._serving)
            self._serving += 1


class VoiceSessionRegistry:
    """Process-wide map from guild ID to its single :class:`VoiceSession`.

    Map mutation is serialized by one registry lock. Joining a voice channel
    is serialized per guild only, so a slow connect never blocks other guilds.
    """

    def __init__(self, transport: VoiceTransport, *, max_queue_size: int = 100) -> None:
        self._transport = transport
        self._max_queue_size = max_queue_size
        self._sessions: dict[int, VoiceSession] = {}
        self._lock = asyncio.Lock()
        self._join_locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._on_track_end: GuildTrackEndCallback | None = None

    def __len__(self) -> int:
        return len(self._sessions)

    def set_on_track_end_callback(self, callback: GuildTrackEndCallback) -> None:
        """Set the callback every new session routes its track-ended events to."""
        self._on_track_end = callback

    def get(self, guild_id: int) -> VoiceSession | None:
        return self._sessions.get(guild_id)

    async def get_or_create(self, guild_id: int, channel_id: int) -> VoiceSession:
        """Return the guild's live session, joining *channel_id* if there is none.

        Raises:
            TransportError: If the voice connection cannot be established.
        """
        async with self._join_locks[guild_id]:
            session = self._sessions.get(guild_id)
            if session is not None and not session.closed and session.connection.is_connected():
                logger.debug(LogTemplates.SESSION_REUSED, guild_id)
                return session
            if session is not None:
                await self._retire(session)

            connection = await self._transport.join(guild_id, channel_id)
            session = VoiceSession(
                guild_id,
                connection,
                max_queue_size=self._max_queue_size,
                on_track_end=self._on_track_end,
            )
            async with self._lock:
                self._sessions[guild_id] = session
            logger.info(LogTemplates.SESSION_CREATED, guild_id, channel_id)
            return session

    async def remove(self, guild_id: int) -> bool:
        """Tear down the guild's session, if any. Returns whether one existed."""
        session = self._sessions.get(guild_id)
        if session is None:
            return False
        async with session.lock:
            await self.discard(session)
        return True

    async def discard(self, session: VoiceSession) -> None:
        """Close *session*, drop it from the map and disconnect.

        Caller must hold ``session.lock``. Transport failures are logged and
        never stop the session from being dropped.
        """
        if session.closed and self._sessions.get(session.guild_id) is not session:
            return
        session.mark_closed()
        session.queue.clear()
        async with self._lock:
            if self._sessions.get(session.guild_id) is session:
                del self._sessions[session.guild_id]
        try:
            await session.connection.leave()
        except TransportError as e:
            logger.warning(LogTemplates.VOICE_LEAVE_FAILED, session.guild_id, e)
        logger.info(LogTemplates.SESSION_REMOVED, session.guild_id)

    async def _retire(self, session: VoiceSession) -> None:
        """Close a session whose connection already dropped, without calling leave."""
        logger.info(LogTemplates.SESSION_STALE_REPLACED, session.guild_id)
        async with session.lock:
            session.mark_closed()
            session.queue.clear()
        async with self._lock:
            if self._sessions.get(session.guild_id) is session:
                del self._sessions[session.guild_id]

    async def release_if_idle(self, session: VoiceSession) -> bool:
        """Tear *session* down if it has nothing queued and nothing pending."""
        async with session.lock:
            if session.closed or not session.is_idle:
                return False
            await self.discard(session)
            return True

    async def shutdown(self) -> None:
        sessions = list(self._sessions.values())
        for session in sessions:
            async with session.lock:
                await self.discard(session)
        logger.info(LogTemplates.SESSIONS_SHUTDOWN, len(sessions))
