"""Prefix ``playlist`` command group: create, add with confirmation, browse and play."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord.ext import commands

from discord_jukebox.application.commands.create_playlist import CreatePlaylistCommand
from discord_jukebox.application.commands.play_playlist import (
    PlayPlaylistCommand,
    PlayPlaylistResult,
)
from discord_jukebox.application.queries.get_playlists import (
    GetPlaylistQuery,
    ListPlaylistsQuery,
)
from discord_jukebox.application.services.confirmation_flow import (
    AddTrackOutcome,
    AddTrackRequest,
)
from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages
from discord_jukebox.domain.voting.value_objects import VoteOutcome
from discord_jukebox.infrastructure.discord.cogs.music_cog import author_voice_channel_id
from discord_jukebox.infrastructure.discord.embeds import (
    build_playlist_embed,
    build_playlists_embed,
)
from discord_jukebox.infrastructure.discord.errors import report_command_error
from discord_jukebox.utils.reply import truncate

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


def describe_add_outcome(outcome: AddTrackOutcome) -> str:
    title = truncate(outcome.metadata.display_title, 200)
    if outcome.outcome is VoteOutcome.ACCEPTED:
        return DiscordUIMessages.SUCCESS_PLAYLIST_TRACK_ADDED.format(
            title=title, name=outcome.playlist_name
        )
    if outcome.outcome is VoteOutcome.REJECTED:
        return DiscordUIMessages.CONFIRM_REJECTED.format(name=outcome.playlist_name)
    return DiscordUIMessages.CONFIRM_EXPIRED.format(title=title, name=outcome.playlist_name)


def describe_import(result: PlayPlaylistResult) -> str:
    if result.total == 0:
        return DiscordUIMessages.STATE_PLAYLIST_EMPTY.format(name=result.playlist_name)

    lines = [
        DiscordUIMessages.SUCCESS_PLAYLIST_QUEUED.format(
            queued=result.queued, total=result.total, name=result.playlist_name
        )
    ]
    if result.failed:
        titles = ", ".join(truncate(title, 60) for title in result.failed)
        lines.append(DiscordUIMessages.ERROR_PLAYLIST_IMPORT_FAILURES.format(titles=titles))
    if result.queue_full:
        lines.append(DiscordUIMessages.ERROR_PLAYLIST_QUEUE_FULL)
    return "\n".join(lines)


class PlaylistCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def cog_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        await report_command_error(ctx, error)

    @commands.group(name="playlist", aliases=["pl"], invoke_without_command=True)
    @commands.guild_only()
    async def playlist(self, ctx: commands.Context) -> None:
        """Manage this server's playlists."""
        await ctx.send_help(ctx.command)

    @playlist.command(name="new", aliases=["create"], help="Create an empty playlist.")
    async def new(self, ctx: commands.Context, name: str = "") -> None:
        assert ctx.guild is not None

        if not name.strip():
            await ctx.send(DiscordUIMessages.ERROR_NEED_PLAYLIST_NAME)
            return

        created = await self.container.create_playlist_handler.handle(
            CreatePlaylistCommand(guild_id=ctx.guild.id, name=name)
        )
        await ctx.send(
            DiscordUIMessages.SUCCESS_PLAYLIST_CREATED.format(
                name=created.name, prefix=self.container.settings.discord.command_prefix
            )
        )

    @playlist.command(name="add", help="Propose a track for a playlist and confirm it.")
    async def add(self, ctx: commands.Context, name: str = "", *, query: str = "") -> None:
        assert ctx.guild is not None

        if not name.strip() or not query.strip():
            await ctx.send(
                DiscordUIMessages.ERROR_NEED_PLAYLIST_AND_TRACK.format(
                    prefix=self.container.settings.discord.command_prefix
                )
            )
            return

        request = AddTrackRequest(
            guild_id=ctx.guild.id,
            channel_id=ctx.channel.id,
            user_id=ctx.author.id,
            playlist_name=name.strip(),
            query=query.strip(),
        )
        outcome = await self.container.confirmation_flow.run(request)
        await ctx.send(describe_add_outcome(outcome))

    @playlist.command(name="list", aliases=["ls"], help="List this server's playlists.")
    async def list_(self, ctx: commands.Context) -> None:
        assert ctx.guild is not None

        playlists = await self.container.playlist_query_handler.list_playlists(
            ListPlaylistsQuery(guild_id=ctx.guild.id)
        )
        if not playlists:
            await ctx.send(DiscordUIMessages.STATE_NO_PLAYLISTS)
            return
        await ctx.send(embed=build_playlists_embed(playlists))

    @playlist.command(name="show", help="Show the tracks stored in a playlist.")
    async def show(self, ctx: commands.Context, name: str = "") -> None:
        assert ctx.guild is not None

        if not name.strip():
            await ctx.send(DiscordUIMessages.ERROR_NEED_PLAYLIST_NAME)
            return

        found = await self.container.playlist_query_handler.get_playlist(
            GetPlaylistQuery(guild_id=ctx.guild.id, name=name.strip())
        )
        if found.is_empty:
            await ctx.send(DiscordUIMessages.STATE_PLAYLIST_EMPTY.format(name=found.name))
            return
        await ctx.send(embed=build_playlist_embed(found))

    @playlist.command(name="play", help="Shuffle a playlist into the queue.")
    async def play(self, ctx: commands.Context, name: str = "") -> None:
        assert ctx.guild is not None

        if not name.strip():
            await ctx.send(DiscordUIMessages.ERROR_NEED_PLAYLIST_NAME)
            return
        voice_channel_id = author_voice_channel_id(ctx)
        if voice_channel_id is None:
            await ctx.send(DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE)
            return

        command = PlayPlaylistCommand(
            guild_id=ctx.guild.id,
            text_channel_id=ctx.channel.id,
            voice_channel_id=voice_channel_id,
            user_id=ctx.author.id,
            name=name.strip(),
        )
        async with ctx.typing():
            result = await self.container.play_playlist_handler.handle(command)
        await ctx.send(describe_import(result))


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(PlaylistCog(bot, container))
