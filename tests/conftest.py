import asyncio

import pytest
import pytest_asyncio

from discord_jukebox.application.interfaces.chat_gateway import ChatGateway
from discord_jukebox.application.interfaces.track_resolver import TrackResolver
from discord_jukebox.application.interfaces.voice_transport import VoiceConnection, VoiceTransport
from discord_jukebox.domain.music.entities import QueuedTrack
from discord_jukebox.domain.music.value_objects import PlayableSource, ResolvedTrack, TrackMetadata
from discord_jukebox.domain.shared.exceptions import ResolutionError, TransportError

GUILD_ID = 111111111111111111
VOICE_CHANNEL_ID = 222222222222222222
TEXT_CHANNEL_ID = 333333333333333333
USER_ID = 444444444444444444
OTHER_USER_ID = 555555555555555555


def make_resolved(title: str, source_ref: str | None = None) -> ResolvedTrack:
    slug = title.lower().replace(" ", "-")
    return ResolvedTrack(
        source=PlayableSource(stream_url=f"https://cdn.example.com/{slug}.webm"),
        metadata=TrackMetadata(
            source_ref=source_ref or f"https://www.youtube.com/watch?v={slug}",
            title=title,
            thumbnail_url=f"https://img.example.com/{slug}.jpg",
            duration_seconds=180,
        ),
    )


def make_track(
    title: str,
    *,
    user_id: int = USER_ID,
    channel_id: int = TEXT_CHANNEL_ID,
) -> QueuedTrack:
    return QueuedTrack.from_resolved(
        make_resolved(title), requested_by_id=user_id, announce_channel_id=channel_id
    )


# ============================================================================
# Fakes for the application ports
# ============================================================================


class FakeConnection(VoiceConnection):
    """In-memory voice connection; the test fires track ends with ``finish()``."""

    def __init__(self, guild_id: int, channel_id: int) -> None:
        self.guild_id = guild_id
        self._channel_id = channel_id
        self.connected = True
        self.played: list[QueuedTrack] = []
        self.skips = 0
        self.leaves = 0
        self.fail_play_titles: set[str] = set()
        self.fail_leave = False
        self._on_end = None

    @property
    def channel_id(self) -> int | None:
        return self._channel_id if self.connected else None

    def is_connected(self) -> bool:
        return self.connected

    async def play(self, track, on_end) -> None:
        if not self.connected or track.title in self.fail_play_titles:
            raise TransportError("play", self.guild_id)
        self.played.append(track)
        self._on_end = on_end

    async def skip_current(self) -> None:
        self.skips += 1

    async def leave(self) -> None:
        self.leaves += 1
        self.connected = False
        if self.fail_leave:
            raise TransportError("leave", self.guild_id)

    @property
    def now_playing(self) -> QueuedTrack | None:
        return self.played[-1] if self.played else None

    async def finish(self) -> None:
        """Report the most recently started track as ended."""
        assert self._on_end is not None and self.played
        await self._on_end(self.played[-1].key)


class FakeTransport(VoiceTransport):
    def __init__(self) -> None:
        self.joins: list[tuple[int, int]] = []
        self.connections: list[FakeConnection] = []
        self.fail_join = False

    async def join(self, guild_id: int, channel_id: int) -> FakeConnection:
        self.joins.append((guild_id, channel_id))
        if self.fail_join:
            raise TransportError("join", guild_id)
        connection = FakeConnection(guild_id, channel_id)
        self.connections.append(connection)
        return connection

    @property
    def last_connection(self) -> FakeConnection:
        return self.connections[-1]


class FakeChatGateway(ChatGateway):
    """Records everything; ``reaction`` is what the next wait returns."""

    def __init__(self) -> None:
        self.announcements: list[tuple[int, QueuedTrack]] = []
        self.proposals: list[dict] = []
        self.removed: list[tuple[int, int]] = []
        self.offered: list[tuple[int, str]] = []
        self.reaction: tuple[int, str] | None = None
        self.wait_timeouts: list[float] = []
        self.fail_announce = False
        self.fail_wait: Exception | None = None
        self._next_message_id = 900000000000000000

    async def announce_now_playing(self, channel_id: int, track: QueuedTrack) -> None:
        if self.fail_announce:
            raise RuntimeError("channel is gone")
        self.announcements.append((channel_id, track))

    async def post_proposal(self, channel_id: int, **kwargs) -> int:
        self._next_message_id += 1
        self.proposals.append({"channel_id": channel_id, "message_id": self._next_message_id, **kwargs})
        return self._next_message_id

    async def wait_for_reaction(self, message_id: int, check, timeout: float):
        self.wait_timeouts.append(timeout)
        if self.fail_wait is not None:
            raise self.fail_wait
        # Offered reactions arrive in order; the first one passing check wins.
        for user_id, emoji in self.offered:
            if check(user_id, emoji):
                return user_id, emoji
        if self.reaction is not None and check(*self.reaction):
            return self.reaction
        return None

    async def remove_message(self, channel_id: int, message_id: int) -> None:
        self.removed.append((channel_id, message_id))


class FakeResolver(TrackResolver):
    """Resolves any text to a track titled after it, with optional delays and failures."""

    def __init__(self) -> None:
        self.delays: dict[str, float] = {}
        self.failures: dict[str, str] = {}
        self.titles: dict[str, str] = {}
        self.calls: list[tuple[str, str]] = []

    def is_url(self, text: str) -> bool:
        return text.startswith("http")

    async def resolve_by_url(self, url: str) -> ResolvedTrack:
        self.calls.append(("url", url))
        return await self._resolve(url, source_ref=url)

    async def resolve_by_search(self, query: str) -> ResolvedTrack:
        self.calls.append(("search", query))
        return await self._resolve(query)

    async def _resolve(self, text: str, source_ref: str | None = None) -> ResolvedTrack:
        await asyncio.sleep(self.delays.get(text, 0))
        if text in self.failures:
            raise ResolutionError(text, self.failures[text])
        return make_resolved(self.titles.get(text, text), source_ref=source_ref)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from discord_jukebox.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def file_database(tmp_path):
    """A file-backed database, for tests that write from several connections at once."""
    from discord_jukebox.infrastructure.persistence.database import Database

    db = Database(f"sqlite:///{tmp_path / 'jukebox.db'}")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def playlist_repository(in_memory_database):
    from discord_jukebox.infrastructure.persistence.repositories.playlist_repository import (
        SQLitePlaylistRepository,
    )

    return SQLitePlaylistRepository(in_memory_database)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def chat_gateway():
    return FakeChatGateway()


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def registry(transport):
    from discord_jukebox.application.services.session_registry import VoiceSessionRegistry

    return VoiceSessionRegistry(transport, max_queue_size=10)


@pytest.fixture
def completion_handler(registry, chat_gateway):
    from discord_jukebox.application.services.track_completion import TrackCompletionHandler

    handler = TrackCompletionHandler(registry=registry, chat_gateway=chat_gateway)
    registry.set_on_track_end_callback(handler.on_track_end)
    return handler


@pytest.fixture
def playback_service(registry, resolver, completion_handler):
    from discord_jukebox.application.services.playback_service import PlaybackService

    return PlaybackService(registry=registry, track_resolver=resolver)
