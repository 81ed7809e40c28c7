"""Port interface for the text side of Discord: announcements and proposals."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import QueuedTrack
    from ...domain.music.value_objects import TrackMetadata

ReactionCheck = Callable[[int, str], bool]
"""Predicate over ``(user_id, emoji)`` deciding whether a reaction is honoured."""


class ChatGateway(ABC):
    """Interface for messages the core sends outside of a command reply."""

    @abstractmethod
    async def announce_now_playing(self, channel_id: int, track: QueuedTrack) -> None:
        """Post the now-playing card for *track* in a text channel."""
        ...

    @abstractmethod
    async def post_proposal(
        self,
        channel_id: int,
        *,
        playlist_name: str,
        metadata: TrackMetadata,
        author_id: int,
        accept_emoji: str,
        reject_emoji: str,
    ) -> int:
        """Post a proposal with accept/reject reactions attached.

        Returns:
            The proposal message ID.
        """
        ...

    @abstractmethod
    async def wait_for_reaction(
        self,
        message_id: int,
        check: ReactionCheck,
        timeout: float,
    ) -> tuple[int, str] | None:
        """Wait for the first reaction on *message_id* passing *check*.

        Returns:
            ``(user_id, emoji)``, or None when *timeout* elapses first.
        """
        ...

    @abstractmethod
    async def remove_message(self, channel_id: int, message_id: int) -> None:
        ...
