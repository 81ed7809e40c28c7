"""Core domain entities for the voting bounded context."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.shared.datetime_utils import utcnow
from discord_jukebox.domain.shared.messages import ErrorMessages
from discord_jukebox.domain.shared.types import DiscordSnowflake, UtcDatetimeField
from discord_jukebox.domain.voting.value_objects import VoteChoice, VoteOutcome


class ConfirmationVote(BaseModel):
    """A single-voter yes/no vote on a posted proposal.

    Only ``author_id`` may resolve it. The first honoured answer wins; later
    calls raise.
    """

    model_config = ConfigDict(strict=True)

    proposal_message_id: DiscordSnowflake
    channel_id: DiscordSnowflake
    author_id: DiscordSnowflake
    deadline: UtcDatetimeField
    outcome: VoteOutcome = VoteOutcome.PENDING
    created_at: UtcDatetimeField = Field(default_factory=utcnow)

    @classmethod
    def open(
        cls,
        *,
        proposal_message_id: int,
        channel_id: int,
        author_id: int,
        timeout_seconds: float,
    ) -> ConfirmationVote:
        now = utcnow()
        return cls(
            proposal_message_id=proposal_message_id,
            channel_id=channel_id,
            author_id=author_id,
            deadline=now + timedelta(seconds=timeout_seconds),
            created_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.outcome is VoteOutcome.PENDING

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.deadline

    def remaining_seconds(self, now: datetime | None = None) -> float:
        return max(0.0, (self.deadline - (now or utcnow())).total_seconds())

    def accepts_voter(self, user_id: int) -> bool:
        return user_id == self.author_id

    def resolve(self, choice: VoteChoice) -> VoteOutcome:
        self._ensure_pending()
        self.outcome = VoteOutcome.ACCEPTED if choice is VoteChoice.ACCEPT else VoteOutcome.REJECTED
        return self.outcome

    def expire(self) -> VoteOutcome:
        self._ensure_pending()
        self.outcome = VoteOutcome.EXPIRED
        return self.outcome

    def _ensure_pending(self) -> None:
        if not self.is_pending:
            raise ValueError(ErrorMessages.VOTE_ALREADY_RESOLVED.format(outcome=self.outcome.value))


