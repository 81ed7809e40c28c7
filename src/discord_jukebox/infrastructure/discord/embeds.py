"""Embed builders for playback, queue and playlist messages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.utils.reply import code_table, format_duration, truncate

if TYPE_CHECKING:
    from ...application.queries.get_queue import QueueInfo
    from ...domain.music.entities import QueuedTrack
    from ...domain.music.value_objects import TrackMetadata
    from ...domain.playlists.entities import Playlist

QUEUE_LISTING_LIMIT = 15
PLAYLIST_LISTING_LIMIT = 25


def build_now_playing_embed(track: QueuedTrack) -> discord.Embed:
    embed = discord.Embed(
        title=truncate(track.title, 256),
        url=track.metadata.source_ref if track.metadata.source_ref.startswith("http") else None,
        description=DiscordUIMessages.EMBED_REQUESTED_BY.format(mention=track.requester_mention),
        color=discord.Color.green(),
    )
    embed.set_author(name=DiscordUIMessages.EMBED_NOW_PLAYING)
    if track.metadata.thumbnail_url:
        embed.set_thumbnail(url=track.metadata.thumbnail_url)
    if track.metadata.duration_seconds is not None:
        embed.add_field(
            name="⏱️ Duration",
            value=format_duration(track.metadata.duration_seconds),
            inline=True,
        )
    return embed


def build_queued_embed(track: QueuedTrack, position: int) -> discord.Embed:
    embed = discord.Embed(
        description=DiscordUIMessages.EMBED_QUEUED.format(
            title=truncate(track.title, 200), position=position
        ),
        color=discord.Color.blurple(),
    )
    if track.metadata.thumbnail_url:
        embed.set_thumbnail(url=track.metadata.thumbnail_url)
    return embed


def build_proposal_embed(
    playlist_name: str, metadata: TrackMetadata, *, requester_mention: str, prompt: str
) -> discord.Embed:
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_PROPOSAL_TITLE.format(name=playlist_name),
        description=f"**{truncate(metadata.display_title, 200)}**\n{prompt}",
        color=discord.Color.gold(),
    )
    if metadata.thumbnail_url:
        embed.set_thumbnail(url=metadata.thumbnail_url)
    embed.set_footer(text=metadata.source_ref)
    embed.add_field(name="Requested by", value=requester_mention, inline=True)
    return embed


def build_queue_embed(queue: QueueInfo) -> discord.Embed:
    rows = [
        (str(idx), truncate(track.title, 60))
        for idx, track in enumerate(queue.tracks[:QUEUE_LISTING_LIMIT], start=1)
    ]
    embed = discord.Embed(
        title=f"\U0001f4cb Queue ({queue.length})",
        description=code_table(rows),
        color=discord.Color.blurple(),
    )
    if queue.length > QUEUE_LISTING_LIMIT:
        embed.add_field(
            name="…", value=f"and {queue.length - QUEUE_LISTING_LIMIT} more", inline=False
        )
    if queue.total_duration:
        embed.set_footer(text=f"Total duration: {format_duration(queue.total_duration)}")
    return embed


def build_playlists_embed(playlists: list[Playlist]) -> discord.Embed:
    lines = [
        DiscordUIMessages.EMBED_PLAYLIST_LINE.format(name=p.name, count=p.track_count)
        for p in playlists[:PLAYLIST_LISTING_LIMIT]
    ]
    return discord.Embed(
        title=DiscordUIMessages.EMBED_PLAYLISTS,
        description="\n".join(lines),
        color=discord.Color.blurple(),
    )


def build_playlist_embed(playlist: Playlist) -> discord.Embed:
    rows = [
        (str(idx), truncate(ref.display_title, 60))
        for idx, ref in enumerate(playlist.tracks[:QUEUE_LISTING_LIMIT], start=1)
    ]
    embed = discord.Embed(
        title=f"\U0001f4cb {playlist.name}",
        description=code_table(rows),
        color=discord.Color.blurple(),
    )
    embed.set_footer(text=f"{playlist.track_count} track(s)")
    return embed
