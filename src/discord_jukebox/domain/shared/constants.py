"""Centralized constants for storage and limits."""

from __future__ import annotations


class SQLPragmas:
    """SQLite PRAGMA statements applied to each connection."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class DatabaseURLSchemes:
    SQLITE = "sqlite:///"
    MEMORY_PATH = ":memory:"
    SHARED_MEMORY_URI = "file:discord-jukebox?mode=memory&cache=shared"
