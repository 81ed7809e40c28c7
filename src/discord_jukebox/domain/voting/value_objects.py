"""
Voting Domain Value Objects

Immutable value objects for the confirmation-vote bounded context.
"""

from __future__ import annotations

from enum import Enum

from discord_jukebox.domain.shared.messages import EmojiConstants


class VoteChoice(Enum):
    """The two answers a requester can give to a proposal."""

    ACCEPT = "accept"
    REJECT = "reject"

    @classmethod
    def from_reaction(
        cls,
        emoji: str,
        *,
        accept_emoji: str = EmojiConstants.ACCEPT,
        reject_emoji: str = EmojiConstants.REJECT,
    ) -> VoteChoice | None:
        """Map a reaction's rendered emoji to a choice.

        Anything that is not one of the two affordances maps to None and is
        ignored by callers.
        """
        mapping = {accept_emoji: cls.ACCEPT, reject_emoji: cls.REJECT}
        return mapping.get(emoji)


class VoteOutcome(Enum):
    """Lifecycle state of a confirmation vote."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"

    @property
    def is_final(self) -> bool:
        return self is not VoteOutcome.PENDING

    @property
    def commits(self) -> bool:
        """Whether the proposed change should be written."""
        return self is VoteOutcome.ACCEPTED
