"""Port interface for resolving user text into playable tracks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.exceptions import EmptyQueryError

if TYPE_CHECKING:
    from ...domain.music.value_objects import ResolvedTrack


class TrackResolver(ABC):
    """Interface for turning a link or search phrase into a playable track.

    Implementations raise ``ResolutionError`` carrying a user-presentable cause
    instead of returning None.
    """

    @abstractmethod
    async def resolve_by_url(self, url: str) -> ResolvedTrack:
        """Fetch the track behind a direct link."""
        ...

    @abstractmethod
    async def resolve_by_search(self, query: str) -> ResolvedTrack:
        """Return the top search result for a phrase."""
        ...

    @abstractmethod
    def is_url(self, text: str) -> bool:
        ...

    async def resolve(self, text: str) -> ResolvedTrack:
        """Dispatch link-shaped text to a direct fetch and anything else to search."""
        text = text.strip()
        if not text:
            raise EmptyQueryError()
        if self.is_url(text):
            return await self.resolve_by_url(text)
        return await self.resolve_by_search(text)
