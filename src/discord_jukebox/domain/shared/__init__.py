"""
Shared Domain Kernel

Contains types, messages and exceptions shared across all bounded contexts.
"""

from discord_jukebox.domain.shared.exceptions import (
    DomainError,
    EmptyQueryError,
    NotInVoiceChannelError,
    PersistenceError,
    PlaylistAlreadyExistsError,
    PlaylistNotFoundError,
    QueueFullError,
    ResolutionError,
    TransportError,
    UserInputError,
)

__all__ = [
    "DomainError",
    "UserInputError",
    "EmptyQueryError",
    "NotInVoiceChannelError",
    "PlaylistNotFoundError",
    "PlaylistAlreadyExistsError",
    "QueueFullError",
    "ResolutionError",
    "TransportError",
    "PersistenceError",
]
