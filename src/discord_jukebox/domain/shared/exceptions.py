"""Base exception classes for domain-level errors.

The hierarchy mirrors how failures are surfaced at the command boundary:

- ``UserInputError``: short user-facing message, never logged as a fault.
- ``ResolutionError``: the external lookup failed; the cause text is shown.
- ``TransportError``: voice connection trouble; logged, never blocks cleanup.
- ``PersistenceError``: the playlist store failed; a generic message is shown.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class UserInputError(DomainError):
    """Raised when a command cannot proceed because of what the user supplied."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "USER_INPUT_ERROR")


class EmptyQueryError(UserInputError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "A search phrase or link is required", code="EMPTY_QUERY")


class NotInVoiceChannelError(UserInputError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "You need to be in a voice channel", code="NOT_IN_VOICE")


class InvalidPlaylistNameError(UserInputError):
    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid playlist name: {name!r}", code="INVALID_PLAYLIST_NAME")
        self.name = name


class PlaylistNotFoundError(UserInputError):
    """Raised when no playlist with the given name exists in the guild."""

    def __init__(self, name: str, guild_id: int, message: str | None = None) -> None:
        msg = message or f"Playlist '{name}' does not exist in this server"
        super().__init__(msg, code="PLAYLIST_NOT_FOUND")
        self.name = name
        self.guild_id = guild_id


class PlaylistAlreadyExistsError(UserInputError):
    """Raised when a (name, guild) pair is already taken."""

    def __init__(self, name: str, guild_id: int, message: str | None = None) -> None:
        msg = message or f"A playlist named '{name}' already exists in this server"
        super().__init__(msg, code="PLAYLIST_ALREADY_EXISTS")
        self.name = name
        self.guild_id = guild_id


class QueueFullError(UserInputError):
    def __init__(self, max_size: int, message: str | None = None) -> None:
        super().__init__(message or f"Queue is full (max {max_size} tracks)", code="QUEUE_FULL")
        self.max_size = max_size


class ResolutionError(DomainError):
    """Raised when user text cannot be turned into a playable track."""

    def __init__(self, query: str, cause: str | None = None) -> None:
        msg = f"Could not resolve '{query}': {cause}" if cause else f"Could not resolve '{query}'"
        super().__init__(msg, code="RESOLUTION_ERROR")
        self.query = query
        self.cause = cause


class TransportError(DomainError):
    """Raised when the voice transport fails to connect, play, skip or leave."""

    def __init__(self, operation: str, guild_id: int, message: str | None = None) -> None:
        msg = message or f"Voice {operation} failed in guild {guild_id}"
        super().__init__(msg, code="TRANSPORT_ERROR")
        self.operation = operation
        self.guild_id = guild_id


class PersistenceError(DomainError):
    """Raised when the playlist store is unavailable or rejects a write."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        msg = message or f"Storage operation '{operation}' failed"
        super().__init__(msg, code="PERSISTENCE_ERROR")
        self.operation = operation
