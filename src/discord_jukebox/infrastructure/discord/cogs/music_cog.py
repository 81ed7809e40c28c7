"""Prefix music commands delegating to the application handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from discord_jukebox.application.commands.leave import LeaveCommand
from discord_jukebox.application.commands.play_track import PlayTrackCommand
from discord_jukebox.application.commands.skip_track import SkipTrackCommand
from discord_jukebox.application.queries.get_queue import GetQueueQuery
from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages
from discord_jukebox.infrastructure.discord.embeds import (
    build_now_playing_embed,
    build_queue_embed,
    build_queued_embed,
)
from discord_jukebox.infrastructure.discord.errors import report_command_error

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


def author_voice_channel_id(ctx: commands.Context) -> int | None:
    author = ctx.author
    if not isinstance(author, discord.Member):
        return None
    if author.voice is None or author.voice.channel is None:
        return None
    return author.voice.channel.id


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def cog_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        await report_command_error(ctx, error)

    @commands.command(name="play", aliases=["p"], help="Play a song by URL or search phrase.")
    @commands.guild_only()
    async def play(self, ctx: commands.Context, *, query: str = "") -> None:
        assert ctx.guild is not None

        command = PlayTrackCommand(
            guild_id=ctx.guild.id,
            text_channel_id=ctx.channel.id,
            user_id=ctx.author.id,
            voice_channel_id=author_voice_channel_id(ctx),
            query=query,
        )
        async with ctx.typing():
            result = await self.container.play_track_handler.handle(command)

        if not result.is_success or result.track is None:
            await ctx.send(result.message)
            return

        if result.started_playing:
            await ctx.send(embed=build_now_playing_embed(result.track))
        else:
            await ctx.send(embed=build_queued_embed(result.track, result.queue_position or 0))

    @commands.command(name="skip", aliases=["s"], help="Skip the current track.")
    @commands.guild_only()
    async def skip(self, ctx: commands.Context) -> None:
        assert ctx.guild is not None

        result = await self.container.skip_track_handler.handle(SkipTrackCommand(ctx.guild.id))
        await ctx.send(result.message)

    @commands.command(name="leave", aliases=["disconnect"], help="Stop and leave the voice channel.")
    @commands.guild_only()
    async def leave(self, ctx: commands.Context) -> None:
        assert ctx.guild is not None

        result = await self.container.leave_handler.handle(LeaveCommand(ctx.guild.id))
        await ctx.send(result.message)

    @commands.command(name="queue", aliases=["q"], help="Show the queue.")
    @commands.guild_only()
    async def queue(self, ctx: commands.Context) -> None:
        assert ctx.guild is not None

        info = await self.container.get_queue_handler.handle(GetQueueQuery(guild_id=ctx.guild.id))
        if info.is_empty:
            await ctx.send(DiscordUIMessages.STATE_QUEUE_EMPTY)
            return
        await ctx.send(embed=build_queue_embed(info))

    @commands.command(name="nowplaying", aliases=["np"], help="Show the track that is playing.")
    @commands.guild_only()
    async def nowplaying(self, ctx: commands.Context) -> None:
        assert ctx.guild is not None

        info = await self.container.get_queue_handler.handle(GetQueueQuery(guild_id=ctx.guild.id))
        if info.current_track is None:
            await ctx.send(DiscordUIMessages.STATE_NOTHING_PLAYING)
            return
        await ctx.send(embed=build_now_playing_embed(info.current_track))


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
