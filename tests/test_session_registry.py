"""
Unit Tests for VoiceSession and VoiceSessionRegistry

Tests for:
- Joining, reusing and re-joining sessions
- Teardown (remove, discard, release_if_idle, shutdown)
- Ticketed commits keeping request order
- Closed sessions rejecting commits
"""

import asyncio

import pytest
from conftest import GUILD_ID, VOICE_CHANNEL_ID, make_track

from discord_jukebox.application.services.session_registry import (
    SessionClosedError,
    VoiceSession,
)
from discord_jukebox.domain.shared.exceptions import QueueFullError, TransportError

OTHER_GUILD_ID = 999999999999999999


class TestRegistryLifecycle:
    """Tests for get_or_create / get / remove."""

    @pytest.mark.asyncio
    async def test_get_or_create_joins_once(self, registry, transport):
        """Should join on first use and reuse the live session afterwards."""
        first = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        second = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        assert first is second
        assert transport.joins == [(GUILD_ID, VOICE_CHANNEL_ID)]
        assert registry.get(GUILD_ID) is first
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_concurrent_get_or_create_joins_once(self, registry, transport):
        """Should serialize concurrent joins for the same guild."""
        sessions = await asyncio.gather(
            *(registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID) for _ in range(5))
        )

        assert len({id(s) for s in sessions}) == 1
        assert len(transport.joins) == 1

    @pytest.mark.asyncio
    async def test_guilds_get_separate_sessions(self, registry):
        """Should keep one session per guild."""
        a = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        b = await registry.get_or_create(OTHER_GUILD_ID, VOICE_CHANNEL_ID)

        assert a is not b
        assert len(registry) == 2

    @pytest.mark.asyncio
    async def test_rejoins_when_connection_dropped(self, registry, transport):
        """Should replace a session whose connection went away and close the old one."""
        stale = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        transport.last_connection.connected = False

        fresh = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        assert fresh is not stale
        assert stale.closed is True
        assert registry.get(GUILD_ID) is fresh
        assert len(transport.joins) == 2

    @pytest.mark.asyncio
    async def test_replacing_dropped_session_wakes_its_waiters(self, registry, transport):
        """Should close the old session properly: clear its queue and fail its waiting commits."""
        stale = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        await stale.commit(stale.reserve(), make_track("Orphaned"))
        stale.reserve()
        waiting = asyncio.create_task(stale.commit(stale.reserve(), make_track("Late")))
        await asyncio.sleep(0)
        old_connection = transport.last_connection
        old_connection.connected = False

        await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        with pytest.raises(SessionClosedError):
            await asyncio.wait_for(waiting, timeout=1.0)
        assert stale.queue.is_empty
        assert not stale.lock.locked()
        assert old_connection.leaves == 0

    @pytest.mark.asyncio
    async def test_join_failure_registers_nothing(self, registry, transport):
        """Should propagate TransportError and leave the map untouched."""
        transport.fail_join = True

        with pytest.raises(TransportError):
            await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        assert registry.get(GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_remove_leaves_and_forgets(self, registry, transport):
        """Should disconnect, clear the queue and drop the session."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        await session.commit(session.reserve(), make_track("One"))

        assert await registry.remove(GUILD_ID) is True

        assert registry.get(GUILD_ID) is None
        assert session.closed is True
        assert session.queue.is_empty
        assert transport.last_connection.leaves == 1
        assert await registry.remove(GUILD_ID) is False

    @pytest.mark.asyncio
    async def test_leave_failure_still_drops_session(self, registry, transport):
        """Should log a failed disconnect and drop the session anyway."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        transport.last_connection.fail_leave = True

        await registry.remove(GUILD_ID)

        assert registry.get(GUILD_ID) is None
        assert session.closed is True

    @pytest.mark.asyncio
    async def test_discard_is_idempotent(self, registry, transport):
        """Should only disconnect once however often a session is discarded."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        async with session.lock:
            await registry.discard(session)
            await registry.discard(session)

        assert transport.last_connection.leaves == 1

    @pytest.mark.asyncio
    async def test_discarding_stale_session_keeps_replacement(self, registry, transport):
        """Should not evict the replacement when an old session is discarded late."""
        stale = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        transport.last_connection.connected = False
        fresh = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        async with stale.lock:
            await registry.discard(stale)

        assert registry.get(GUILD_ID) is fresh

    @pytest.mark.asyncio
    async def test_shutdown_tears_down_everything(self, registry, transport):
        await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        await registry.get_or_create(OTHER_GUILD_ID, VOICE_CHANNEL_ID)

        await registry.shutdown()

        assert len(registry) == 0
        assert all(c.leaves == 1 for c in transport.connections)


class TestReleaseIfIdle:
    """Tests for idle reclamation."""

    @pytest.mark.asyncio
    async def test_releases_idle_session(self, registry, transport):
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)

        assert await registry.release_if_idle(session) is True
        assert registry.get(GUILD_ID) is None
        assert transport.last_connection.leaves == 1

    @pytest.mark.asyncio
    async def test_keeps_session_with_pending_reservation(self, registry):
        """Should not tear down while another command is still resolving."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        session.reserve()

        assert await registry.release_if_idle(session) is False
        assert registry.get(GUILD_ID) is session

    @pytest.mark.asyncio
    async def test_keeps_session_with_queued_tracks(self, registry):
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        await session.commit(session.reserve(), make_track("One"))

        assert await registry.release_if_idle(session) is False


class TestVoiceSessionCommit:
    """Tests for the ticketed enqueue protocol."""

    @pytest.mark.asyncio
    async def test_first_commit_starts_playback(self, registry, transport):
        """Should start the track that lands at position 1."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        track = make_track("One")

        position = await session.commit(session.reserve(), track)

        assert position == 1
        assert transport.last_connection.played == [track]

    @pytest.mark.asyncio
    async def test_later_commit_only_queues(self, registry, transport):
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        first, second = make_track("One"), make_track("Two")

        await session.commit(session.reserve(), first)
        position = await session.commit(session.reserve(), second)

        assert position == 2
        assert transport.last_connection.played == [first]
        assert session.queue.snapshot() == (first, second)

    @pytest.mark.asyncio
    async def test_commits_apply_in_ticket_order(self, registry):
        """Should hold back a later ticket until the earlier one is committed."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        early, late = session.reserve(), session.reserve()
        first, second = make_track("First"), make_track("Second")

        late_commit = asyncio.create_task(session.commit(late, second))
        await asyncio.sleep(0)
        assert session.queue.is_empty

        assert await session.commit(early, first) == 1
        assert await late_commit == 2
        assert session.queue.snapshot() == (first, second)

    @pytest.mark.asyncio
    async def test_abandon_lets_next_ticket_through(self, registry):
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        dropped, kept = session.reserve(), session.reserve()
        track = make_track("Kept")

        waiting = asyncio.create_task(session.commit(kept, track))
        await asyncio.sleep(0)
        await session.abandon(dropped)

        assert await waiting == 1
        assert session.pending_reservations == 0

    @pytest.mark.asyncio
    async def test_commit_on_closed_session_raises(self, registry):
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        ticket = session.reserve()

        await registry.remove(GUILD_ID)

        with pytest.raises(SessionClosedError):
            await session.commit(ticket, make_track("Late"))

    @pytest.mark.asyncio
    async def test_waiting_commit_wakes_when_session_closes(self, registry):
        """Should not leave a waiting commit hanging when the session is torn down."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        session.reserve()
        later = session.reserve()

        waiting = asyncio.create_task(session.commit(later, make_track("Later")))
        await asyncio.sleep(0)
        await registry.remove(GUILD_ID)

        with pytest.raises(SessionClosedError):
            await asyncio.wait_for(waiting, timeout=1)

    @pytest.mark.asyncio
    async def test_full_queue_raises_and_releases_turn(self, transport):
        from discord_jukebox.application.services.session_registry import VoiceSessionRegistry

        registry = VoiceSessionRegistry(transport, max_queue_size=1)
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        await session.commit(session.reserve(), make_track("One"))

        with pytest.raises(QueueFullError):
            await session.commit(session.reserve(), make_track("Two"))

        assert session.pending_reservations == 0
        assert len(session.queue) == 1

    @pytest.mark.asyncio
    async def test_failed_start_drops_track(self, registry, transport):
        """Should take a track that cannot start back off the queue."""
        session = await registry.get_or_create(GUILD_ID, VOICE_CHANNEL_ID)
        transport.last_connection.fail_play_titles.add("Broken")

        with pytest.raises(TransportError):
            await session.commit(session.reserve(), make_track("Broken"))

        assert session.queue.is_empty
        assert session.is_idle


class TestVoiceSessionState:
    def test_pending_reservations_counts_unsettled_tickets(self, transport):
        from conftest import FakeConnection

        session = VoiceSession(GUILD_ID, FakeConnection(GUILD_ID, VOICE_CHANNEL_ID))
        assert session.is_idle

        session.reserve()
        session.reserve()

        assert session.pending_reservations == 2
        assert not session.is_idle
        assert "pending=2" in repr(session)

    def test_hold_keeps_session_busy(self):
        from conftest import FakeConnection

        session = VoiceSession(GUILD_ID, FakeConnection(GUILD_ID, VOICE_CHANNEL_ID))

        session.hold()
        assert not session.is_idle

        session.release_hold()
        session.release_hold()
        assert session.is_idle
        assert session.pending_reservations == 0
