"""Propose, vote, then commit or discard a playlist addition."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.music.value_objects import TrackMetadata
from ...domain.playlists.entities import Playlist, TrackRef
from ...domain.shared.exceptions import PlaylistNotFoundError
from ...domain.shared.messages import EmojiConstants, LogTemplates
from ...domain.shared.types import DiscordSnowflake, NonEmptyStr
from ...domain.voting.entities import ConfirmationVote
from ...domain.voting.value_objects import VoteChoice, VoteOutcome

if TYPE_CHECKING:
    from ...domain.playlists.repository import PlaylistRepository
    from ..interfaces.chat_gateway import ChatGateway
    from ..interfaces.track_resolver import TrackResolver

logger = logging.getLogger(__name__)


class AddTrackRequest(BaseModel):
    """Request to add a track to a playlist after the requester confirms it."""

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    channel_id: DiscordSnowflake
    user_id: DiscordSnowflake
    playlist_name: NonEmptyStr
    query: NonEmptyStr


class AddTrackOutcome(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)

    outcome: VoteOutcome
    playlist_name: NonEmptyStr
    metadata: TrackMetadata
    track_count: int | None = None

    @property
    def added(self) -> bool:
        return self.outcome.commits


class AddTrackConfirmationFlow:
    """Gate ``playlist add`` behind a timed accept/reject reaction from the requester.

    The proposal message is removed whatever the outcome, including when the
    wait itself fails.
    """

    def __init__(
        self,
        *,
        playlist_repository: PlaylistRepository,
        track_resolver: TrackResolver,
        chat_gateway: ChatGateway,
        timeout_seconds: float = 60.0,
        accept_emoji: str = EmojiConstants.ACCEPT,
        reject_emoji: str = EmojiConstants.REJECT,
    ) -> None:
        self._playlists = playlist_repository
        self._resolver = track_resolver
        self._chat = chat_gateway
        self._timeout = timeout_seconds
        self._accept_emoji = accept_emoji
        self._reject_emoji = reject_emoji

    async def run(self, request: AddTrackRequest) -> AddTrackOutcome:
        """Run the flow end to end.

        Raises:
            PlaylistNotFoundError: No playlist by that name in the guild.
            ResolutionError: The track text could not be resolved.
            PersistenceError: The store failed during lookup or append.
        """
        playlist = await self._playlists.find_by_name(request.playlist_name, request.guild_id)
        if playlist is None:
            raise PlaylistNotFoundError(request.playlist_name, request.guild_id)

        resolved = await self._resolver.resolve(request.query)
        metadata = resolved.metadata

        message_id = await self._chat.post_proposal(
            request.channel_id,
            playlist_name=playlist.name,
            metadata=metadata,
            author_id=request.user_id,
            accept_emoji=self._accept_emoji,
            reject_emoji=self._reject_emoji,
        )
        vote = ConfirmationVote.open(
            proposal_message_id=message_id,
            channel_id=request.channel_id,
            author_id=request.user_id,
            timeout_seconds=self._timeout,
        )
        logger.info(LogTemplates.CONFIRMATION_POSTED, message_id, metadata.display_title, request.guild_id)

        try:
            outcome = await self._collect_vote(vote)
        finally:
            await self._remove_proposal(vote)

        logger.info(LogTemplates.CONFIRMATION_RESOLVED, message_id, outcome.value)
        if not outcome.commits:
            return AddTrackOutcome(outcome=outcome, playlist_name=playlist.name, metadata=metadata)

        track_count = await self._commit(playlist, metadata)
        return AddTrackOutcome(
            outcome=outcome,
            playlist_name=playlist.name,
            metadata=metadata,
            track_count=track_count,
        )

    async def _collect_vote(self, vote: ConfirmationVote) -> VoteOutcome:
        def check(user_id: int, emoji: str) -> bool:
            return vote.accepts_voter(user_id) and self._to_choice(emoji) is not None

        reaction = await self._chat.wait_for_reaction(
            vote.proposal_message_id, check, vote.remaining_seconds()
        )
        if reaction is None:
            return vote.expire()

        _, emoji = reaction
        choice = self._to_choice(emoji)
        if choice is None:
            return vote.expire()
        return vote.resolve(choice)

    async def _commit(self, playlist: Playlist, metadata: TrackMetadata) -> int:
        track = TrackRef.from_metadata(metadata)
        count = await self._playlists.append_track(playlist.id, playlist.guild_id, track)
        logger.info(LogTemplates.PLAYLIST_TRACK_APPENDED, track.display_title, playlist.id)
        return count

    async def _remove_proposal(self, vote: ConfirmationVote) -> None:
        try:
            await self._chat.remove_message(vote.channel_id, vote.proposal_message_id)
        except Exception as e:
            logger.warning(LogTemplates.CONFIRMATION_REMOVE_FAILED, vote.proposal_message_id, e)

    def _to_choice(self, emoji: str) -> VoteChoice | None:
        return VoteChoice.from_reaction(
            emoji, accept_emoji=self._accept_emoji, reject_emoji=self._reject_emoji
        )
