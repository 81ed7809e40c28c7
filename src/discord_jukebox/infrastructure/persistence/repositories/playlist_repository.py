"""SQLite implementation of the playlist repository."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

import aiosqlite

from discord_jukebox.domain.playlists.entities import Playlist, TrackRef
from discord_jukebox.domain.playlists.repository import PlaylistRepository
from discord_jukebox.domain.shared.datetime_utils import UtcDateTime
from discord_jukebox.domain.shared.exceptions import (
    PersistenceError,
    PlaylistAlreadyExistsError,
)
from discord_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLitePlaylistRepository(PlaylistRepository):
    """Playlists in one table, their tracks as ordered rows in another.

    Every statement filters on ``guild_id``; tracks are only reachable through
    a playlist row of the same guild.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, name: str, guild_id: int) -> Playlist:
        created_at = UtcDateTime.now()
        try:
            cursor = await self._db.execute(
                "INSERT INTO playlists (guild_id, name, created_at) VALUES (?, ?, ?)",
                (guild_id, name, created_at.iso),
            )
        except aiosqlite.IntegrityError as e:
            raise PlaylistAlreadyExistsError(name, guild_id) from e
        except aiosqlite.Error as e:
            raise self._failure("create", e) from e

        if cursor.lastrowid is None:
            raise PersistenceError("create")
        return Playlist(id=cursor.lastrowid, name=name, guild_id=guild_id, created_at=created_at.dt)

    async def find_by_name(self, name: str, guild_id: int) -> Playlist | None:
        try:
            row = await self._db.fetch_one(
                "SELECT id, guild_id, name, created_at FROM playlists "
                "WHERE guild_id = ? AND name = ?",
                (guild_id, name),
            )
            if row is None:
                return None
            track_rows = await self._db.fetch_all(
                """
                SELECT t.playlist_id, t.query, t.title
                FROM playlist_tracks t
                JOIN playlists p ON p.id = t.playlist_id
                WHERE t.playlist_id = ? AND p.guild_id = ?
                ORDER BY t.position
                """,
                (row["id"], guild_id),
            )
        except aiosqlite.Error as e:
            raise self._failure("find_by_name", e) from e

        return self._row_to_playlist(row, track_rows)

    async def list_by_guild(self, guild_id: int) -> list[Playlist]:
        try:
            rows = await self._db.fetch_all(
                "SELECT id, guild_id, name, created_at FROM playlists "
                "WHERE guild_id = ? ORDER BY name",
                (guild_id,),
            )
            track_rows = await self._db.fetch_all(
                """
                SELECT t.playlist_id, t.query, t.title
                FROM playlist_tracks t
                JOIN playlists p ON p.id = t.playlist_id
                WHERE p.guild_id = ?
                ORDER BY t.playlist_id, t.position
                """,
                (guild_id,),
            )
        except aiosqlite.Error as e:
            raise self._failure("list_by_guild", e) from e

        tracks_by_playlist: defaultdict[int, list[dict[str, Any]]] = defaultdict(list)
        for track_row in track_rows:
            tracks_by_playlist[track_row["playlist_id"]].append(track_row)
        return [self._row_to_playlist(row, tracks_by_playlist[row["id"]]) for row in rows]

    async def append_track(self, playlist_id: int, guild_id: int, track: TrackRef) -> int:
        added_at = UtcDateTime.now().iso
        try:
            async with self._db.transaction(immediate=True) as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO playlist_tracks (playlist_id, position, query, title, added_at)
                    SELECT p.id,
                           COALESCE((SELECT MAX(position) + 1 FROM playlist_tracks
                                     WHERE playlist_id = p.id), 0),
                           ?, ?, ?
                    FROM playlists p
                    WHERE p.id = ? AND p.guild_id = ?
                    """,
                    (track.query, track.title, added_at, playlist_id, guild_id),
                )
                if cursor.rowcount == 0:
                    raise PersistenceError("append_track")
                count_cursor = await conn.execute(
                    "SELECT COUNT(*) FROM playlist_tracks WHERE playlist_id = ?",
                    (playlist_id,),
                )
                count_row = await count_cursor.fetchone()
        except aiosqlite.Error as e:
            raise self._failure("append_track", e) from e

        return int(count_row[0]) if count_row else 0

    @staticmethod
    def _failure(operation: str, error: Exception) -> PersistenceError:
        logger.error(LogTemplates.PERSISTENCE_FAILED, operation, error)
        return PersistenceError(operation)

    @staticmethod
    def _row_to_playlist(row: dict[str, Any], track_rows: list[dict[str, Any]]) -> Playlist:
        return Playlist(
            id=row["id"],
            name=row["name"],
            guild_id=row["guild_id"],
            created_at=UtcDateTime.from_iso(row["created_at"]).dt,
            tracks=[TrackRef(query=t["query"], title=t["title"]) for t in track_rows],
        )
