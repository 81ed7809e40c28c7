"""
Voting Bounded Context

Single-voter confirmation votes gating playlist edits.
"""

from discord_jukebox.domain.voting.entities import ConfirmationVote
from discord_jukebox.domain.voting.value_objects import VoteChoice, VoteOutcome

__all__ = [
    # Entities
    "ConfirmationVote",
    # Value Objects
    "VoteChoice",
    "VoteOutcome",
]
