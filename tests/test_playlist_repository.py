"""
Integration Tests for SQLitePlaylistRepository

Tests for:
- Creating playlists and the (name, guild) uniqueness rule
- Guild scoping of every read and write
- Ordered, atomic appends (including concurrent ones)
- Storage failures surfacing as PersistenceError
"""

import asyncio
import sqlite3
from unittest.mock import AsyncMock

import pytest
from conftest import GUILD_ID

from discord_jukebox.domain.playlists.entities import TrackRef
from discord_jukebox.domain.shared.exceptions import (
    PersistenceError,
    PlaylistAlreadyExistsError,
)
from discord_jukebox.infrastructure.persistence.repositories.playlist_repository import (
    SQLitePlaylistRepository,
)

OTHER_GUILD_ID = 888888888888888888


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_empty_playlist(self, playlist_repository):
        playlist = await playlist_repository.create("chill", GUILD_ID)

        assert playlist.id > 0
        assert playlist.name == "chill"
        assert playlist.guild_id == GUILD_ID
        assert playlist.is_empty

    @pytest.mark.asyncio
    async def test_duplicate_name_in_guild_is_rejected(self, playlist_repository):
        await playlist_repository.create("chill", GUILD_ID)

        with pytest.raises(PlaylistAlreadyExistsError):
            await playlist_repository.create("chill", GUILD_ID)

    @pytest.mark.asyncio
    async def test_same_name_in_other_guild_is_allowed(self, playlist_repository):
        a = await playlist_repository.create("chill", GUILD_ID)
        b = await playlist_repository.create("chill", OTHER_GUILD_ID)

        assert a.id != b.id

    @pytest.mark.asyncio
    async def test_names_are_case_sensitive(self, playlist_repository):
        await playlist_repository.create("chill", GUILD_ID)

        created = await playlist_repository.create("Chill", GUILD_ID)

        assert created.name == "Chill"


class TestFind:
    @pytest.mark.asyncio
    async def test_missing_playlist_is_none(self, playlist_repository):
        assert await playlist_repository.find_by_name("chill", GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_find_is_guild_scoped(self, playlist_repository):
        await playlist_repository.create("chill", OTHER_GUILD_ID)

        assert await playlist_repository.find_by_name("chill", GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_find_returns_tracks_in_append_order(self, playlist_repository):
        playlist = await playlist_repository.create("chill", GUILD_ID)
        for query in ("https://a", "https://b", "https://c"):
            await playlist_repository.append_track(
                playlist.id, GUILD_ID, TrackRef(query=query, title=query[-1].upper())
            )

        found = await playlist_repository.find_by_name("chill", GUILD_ID)

        assert [t.query for t in found.tracks] == ["https://a", "https://b", "https://c"]
        assert [t.title for t in found.tracks] == ["A", "B", "C"]
        assert found.created_at == playlist.created_at

    @pytest.mark.asyncio
    async def test_untitled_track_round_trips(self, playlist_repository):
        playlist = await playlist_repository.create("chill", GUILD_ID)
        await playlist_repository.append_track(playlist.id, GUILD_ID, TrackRef(query="lofi"))

        found = await playlist_repository.find_by_name("chill", GUILD_ID)

        assert found.tracks[0].title is None
        assert found.tracks[0].display_title == "lofi"


class TestListByGuild:
    @pytest.mark.asyncio
    async def test_lists_only_own_guild_sorted_by_name(self, playlist_repository):
        rock = await playlist_repository.create("rock", GUILD_ID)
        await playlist_repository.create("chill", GUILD_ID)
        await playlist_repository.create("other", OTHER_GUILD_ID)
        await playlist_repository.append_track(rock.id, GUILD_ID, TrackRef(query="https://r"))

        playlists = await playlist_repository.list_by_guild(GUILD_ID)

        assert [p.name for p in playlists] == ["chill", "rock"]
        assert [p.track_count for p in playlists] == [0, 1]

    @pytest.mark.asyncio
    async def test_empty_guild(self, playlist_repository):
        assert await playlist_repository.list_by_guild(GUILD_ID) == []


class TestAppend:
    @pytest.mark.asyncio
    async def test_returns_new_count(self, playlist_repository):
        playlist = await playlist_repository.create("chill", GUILD_ID)

        first = await playlist_repository.append_track(playlist.id, GUILD_ID, TrackRef(query="a"))
        second = await playlist_repository.append_track(playlist.id, GUILD_ID, TrackRef(query="b"))

        assert (first, second) == (1, 2)

    @pytest.mark.asyncio
    async def test_append_across_guilds_is_refused(self, playlist_repository):
        """Should not write through another guild's playlist id."""
        theirs = await playlist_repository.create("chill", OTHER_GUILD_ID)

        with pytest.raises(PersistenceError):
            await playlist_repository.append_track(theirs.id, GUILD_ID, TrackRef(query="a"))

        found = await playlist_repository.find_by_name("chill", OTHER_GUILD_ID)
        assert found.is_empty

    @pytest.mark.asyncio
    async def test_concurrent_appends_all_land(self, file_database):
        """Should keep every accepted track when confirmations commit at once."""
        repository = SQLitePlaylistRepository(file_database)
        playlist = await repository.create("chill", GUILD_ID)

        counts = await asyncio.gather(
            *(
                repository.append_track(playlist.id, GUILD_ID, TrackRef(query=f"https://t/{i}"))
                for i in range(8)
            )
        )

        found = await repository.find_by_name("chill", GUILD_ID)
        assert found.track_count == 8
        assert sorted(counts) == list(range(1, 9))
        assert {t.query for t in found.tracks} == {f"https://t/{i}" for i in range(8)}


class TestFailures:
    @pytest.mark.asyncio
    async def test_storage_error_becomes_persistence_error(self):
        database = AsyncMock()
        database.fetch_one.side_effect = sqlite3.OperationalError("disk I/O error")
        repository = SQLitePlaylistRepository(database)

        with pytest.raises(PersistenceError):
            await repository.find_by_name("chill", GUILD_ID)

    @pytest.mark.asyncio
    async def test_create_storage_error(self):
        database = AsyncMock()
        database.execute.side_effect = sqlite3.OperationalError("database is locked")
        repository = SQLitePlaylistRepository(database)

        with pytest.raises(PersistenceError):
            await repository.create("chill", GUILD_ID)
