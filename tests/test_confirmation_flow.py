"""
Unit Tests for AddTrackConfirmationFlow

Tests for:
- Accept, reject and expire outcomes
- Only the requester's reaction counting
- The proposal message being removed in every outcome
- Missing playlists and failed resolutions
"""

import pytest
import pytest_asyncio
from conftest import GUILD_ID, OTHER_USER_ID, TEXT_CHANNEL_ID, USER_ID

from discord_jukebox.application.services.confirmation_flow import (
    AddTrackConfirmationFlow,
    AddTrackRequest,
)
from discord_jukebox.domain.shared.exceptions import PlaylistNotFoundError, ResolutionError
from discord_jukebox.domain.shared.messages import EmojiConstants
from discord_jukebox.domain.voting.value_objects import VoteOutcome

ACCEPT = EmojiConstants.ACCEPT
REJECT = EmojiConstants.REJECT


def _request(query: str = "lofi beats", playlist_name: str = "chill") -> AddTrackRequest:
    return AddTrackRequest(
        guild_id=GUILD_ID,
        channel_id=TEXT_CHANNEL_ID,
        user_id=USER_ID,
        playlist_name=playlist_name,
        query=query,
    )


@pytest.fixture
def flow(playlist_repository, resolver, chat_gateway):
    return AddTrackConfirmationFlow(
        playlist_repository=playlist_repository,
        track_resolver=resolver,
        chat_gateway=chat_gateway,
        timeout_seconds=60.0,
    )


@pytest_asyncio.fixture
async def chill(playlist_repository):
    return await playlist_repository.create("chill", GUILD_ID)


class TestOutcomes:
    @pytest.mark.asyncio
    async def test_accept_appends_track(self, flow, chill, chat_gateway, playlist_repository):
        chat_gateway.reaction = (USER_ID, ACCEPT)

        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.ACCEPTED
        assert outcome.added is True
        assert outcome.track_count == 1
        stored = await playlist_repository.find_by_name("chill", GUILD_ID)
        assert [t.title for t in stored.tracks] == ["lofi beats"]
        # The canonical source URL is stored, not the search phrase.
        assert stored.tracks[0].query == "https://www.youtube.com/watch?v=lofi-beats"

    @pytest.mark.asyncio
    async def test_reject_discards(self, flow, chill, chat_gateway, playlist_repository):
        chat_gateway.reaction = (USER_ID, REJECT)

        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.REJECTED
        assert outcome.added is False
        stored = await playlist_repository.find_by_name("chill", GUILD_ID)
        assert stored.is_empty

    @pytest.mark.asyncio
    async def test_no_reaction_expires(self, flow, chill, chat_gateway, playlist_repository):
        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.EXPIRED
        stored = await playlist_repository.find_by_name("chill", GUILD_ID)
        assert stored.is_empty

    @pytest.mark.asyncio
    async def test_wait_is_bounded_by_deadline(self, flow, chill, chat_gateway):
        await flow.run(_request())

        (timeout,) = chat_gateway.wait_timeouts
        assert 59.0 < timeout <= 60.0

    @pytest.mark.parametrize("reaction", [(USER_ID, ACCEPT), (USER_ID, REJECT), None])
    @pytest.mark.asyncio
    async def test_proposal_always_removed(self, flow, chill, chat_gateway, reaction):
        chat_gateway.reaction = reaction

        await flow.run(_request())

        (proposal,) = chat_gateway.proposals
        assert chat_gateway.removed == [(TEXT_CHANNEL_ID, proposal["message_id"])]


class TestVoterFiltering:
    @pytest.mark.asyncio
    async def test_other_users_are_ignored(self, flow, chill, chat_gateway):
        """Should ignore another member's accept and honour the requester's reject."""
        chat_gateway.offered = [(OTHER_USER_ID, ACCEPT), (USER_ID, REJECT)]

        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.REJECTED

    @pytest.mark.asyncio
    async def test_only_other_users_react_expires(self, flow, chill, chat_gateway):
        chat_gateway.offered = [(OTHER_USER_ID, ACCEPT)]

        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.EXPIRED

    @pytest.mark.asyncio
    async def test_unrelated_emoji_is_ignored(self, flow, chill, chat_gateway):
        chat_gateway.offered = [(USER_ID, "🎉"), (USER_ID, ACCEPT)]

        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.ACCEPTED

    @pytest.mark.asyncio
    async def test_custom_emojis(self, playlist_repository, resolver, chat_gateway, chill):
        flow = AddTrackConfirmationFlow(
            playlist_repository=playlist_repository,
            track_resolver=resolver,
            chat_gateway=chat_gateway,
            accept_emoji="👍",
            reject_emoji="👎",
        )
        chat_gateway.offered = [(USER_ID, ACCEPT), (USER_ID, "👍")]

        outcome = await flow.run(_request())

        assert outcome.outcome is VoteOutcome.ACCEPTED
        assert chat_gateway.proposals[0]["accept_emoji"] == "👍"


class TestFailures:
    @pytest.mark.asyncio
    async def test_missing_playlist_is_not_found(self, flow, chat_gateway, resolver):
        """Should reply NotFound without resolving, posting or writing anything."""
        with pytest.raises(PlaylistNotFoundError):
            await flow.run(_request(playlist_name="chill"))

        assert resolver.calls == []
        assert chat_gateway.proposals == []

    @pytest.mark.asyncio
    async def test_resolution_failure_posts_nothing(self, flow, chill, resolver, chat_gateway):
        resolver.failures["nothing"] = "no results found"

        with pytest.raises(ResolutionError):
            await flow.run(_request(query="nothing"))

        assert chat_gateway.proposals == []

    @pytest.mark.asyncio
    async def test_wait_failure_still_removes_proposal(self, flow, chill, chat_gateway):
        chat_gateway.fail_wait = RuntimeError("gateway closed")

        with pytest.raises(RuntimeError):
            await flow.run(_request())

        assert len(chat_gateway.removed) == 1

    @pytest.mark.asyncio
    async def test_playlist_of_another_guild_is_not_visible(self, flow, playlist_repository):
        await playlist_repository.create("chill", 777777777777777777)

        with pytest.raises(PlaylistNotFoundError):
            await flow.run(_request())
