# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- music/: Tracks and the live play queue
- playlists/: Persisted, named playlists and their store contract
- voting/: Confirmation votes gating playlist edits
"""

from discord_jukebox.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
