"""Discord text-channel adapter implementing ChatGateway."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.chat_gateway import ChatGateway, ReactionCheck
from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_jukebox.infrastructure.discord.embeds import (
    build_now_playing_embed,
    build_proposal_embed,
)

if TYPE_CHECKING:
    from discord.abc import Messageable

    from ....domain.music.entities import QueuedTrack
    from ....domain.music.value_objects import TrackMetadata

logger = logging.getLogger(__name__)


class DiscordChatGateway(ChatGateway):
    def __init__(self, bot: discord.Client) -> None:
        self._bot = bot

    async def _get_channel(self, channel_id: int) -> Messageable:
        channel = self._bot.get_channel(channel_id)
        if channel is None:
            channel = await self._bot.fetch_channel(channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            logger.warning(LogTemplates.CHANNEL_NOT_MESSAGEABLE, channel_id)
            raise discord.InvalidData(f"Channel {channel_id} is not messageable")
        return channel

    async def announce_now_playing(self, channel_id: int, track: QueuedTrack) -> None:
        channel = await self._get_channel(channel_id)
        await channel.send(embed=build_now_playing_embed(track))

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
        channel = await self._get_channel(channel_id)
        mention = f"<@{author_id}>"
        prompt = DiscordUIMessages.CONFIRM_PROMPT.format(
            name=playlist_name, requester=mention, accept=accept_emoji, reject=reject_emoji
        )
        message = await channel.send(
            embed=build_proposal_embed(
                playlist_name, metadata, requester_mention=mention, prompt=prompt
            )
        )
        try:
            await message.add_reaction(accept_emoji)
            await message.add_reaction(reject_emoji)
        except discord.HTTPException:
            await message.delete()
            raise
        return message.id

    async def wait_for_reaction(
        self,
        message_id: int,
        check: ReactionCheck,
        timeout: float,
    ) -> tuple[int, str] | None:
        def predicate(reaction: discord.Reaction, user: discord.abc.User) -> bool:
            return reaction.message.id == message_id and check(user.id, str(reaction.emoji))

        try:
            reaction, user = await self._bot.wait_for(
                "reaction_add", timeout=timeout, check=predicate
            )
        except asyncio.TimeoutError:
            return None
        return user.id, str(reaction.emoji)

    async def remove_message(self, channel_id: int, message_id: int) -> None:
        channel = await self._get_channel(channel_id)
        try:
            message = await channel.fetch_message(message_id)
            await message.delete()
        except discord.NotFound:
            return
