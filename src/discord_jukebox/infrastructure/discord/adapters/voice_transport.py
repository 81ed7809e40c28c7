"""Discord voice transport implementing VoiceTransport on top of discord.py."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.voice_transport import (
    TrackEndCallback,
    VoiceConnection,
    VoiceTransport,
)
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.shared.exceptions import TransportError
from discord_jukebox.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ....domain.music.entities import QueuedTrack

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT: float = 10.0

VoiceLikeChannel = discord.VoiceChannel | discord.StageChannel


class DiscordVoiceConnection(VoiceConnection):
    """Wraps one guild's ``discord.VoiceClient``."""

    def __init__(
        self,
        bot: discord.Client,
        voice_client: discord.VoiceClient,
        settings: AudioSettings,
    ) -> None:
        self._bot = bot
        self._vc = voice_client
        self._settings = settings
        self.guild_id = voice_client.guild.id

    @property
    def channel_id(self) -> int | None:
        return self._vc.channel.id if self._vc.channel else None

    def is_connected(self) -> bool:
        return self._vc.is_connected()

    async def play(self, track: QueuedTrack, on_end: TrackEndCallback) -> None:
        if not self._vc.is_connected():
            raise TransportError("play", self.guild_id)

        if self._vc.is_playing() or self._vc.is_paused():
            self._vc.stop()

        ffmpeg_options = self._settings.ffmpeg_options
        try:
            source = discord.FFmpegPCMAudio(
                track.source.stream_url,
                before_options=ffmpeg_options.get("before_options"),
                options=ffmpeg_options.get("options"),
            )
            volume_source = discord.PCMVolumeTransformer(
                source, volume=self._settings.default_volume
            )
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise TransportError("play", self.guild_id, str(e)) from e

        guild_id = self.guild_id
        key = track.key

        def after_callback(error: Exception | None = None) -> None:
            if error:
                logger.warning(LogTemplates.PLAYBACK_ERROR, guild_id, error)
            asyncio.run_coroutine_threadsafe(
                self._handle_track_end(on_end, key),
                self._bot.loop,
            )

        try:
            self._vc.play(volume_source, after=after_callback)
        except discord.ClientException as e:
            volume_source.cleanup()
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise TransportError("play", self.guild_id, str(e)) from e

    async def skip_current(self) -> None:
        if self._vc.is_playing() or self._vc.is_paused():
            self._vc.stop()

    async def leave(self) -> None:
        try:
            self._vc.stop()
            await self._vc.disconnect(force=True)
        except discord.DiscordException as e:
            raise TransportError("leave", self.guild_id, str(e)) from e
        logger.info(LogTemplates.VOICE_DISCONNECTED, self.guild_id)

    async def _handle_track_end(self, on_end: TrackEndCallback, key: str) -> None:
        """Runs on the bot loop; FFmpeg's ``after`` fires on the player thread."""
        try:
            await on_end(key)
        except Exception as e:
            logger.error(LogTemplates.TRACK_END_CALLBACK_ERROR, self.guild_id, e)


class DiscordVoiceTransport(VoiceTransport):
    def __init__(
        self,
        bot: discord.Client,
        settings: AudioSettings | None = None,
        *,
        connect_timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._connect_timeout = connect_timeout

    def _get_voice_client(self, guild: discord.Guild) -> discord.VoiceClient | None:
        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    async def join(self, guild_id: int, channel_id: int) -> VoiceConnection:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            logger.warning(LogTemplates.GUILD_NOT_FOUND, guild_id)
            raise TransportError("join", guild_id)

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, VoiceLikeChannel):
            logger.warning(LogTemplates.CHANNEL_NOT_VOICE, channel_id)
            raise TransportError("join", guild_id)

        vc = self._get_voice_client(guild)
        if vc is not None and not vc.is_connected():
            logger.warning(LogTemplates.VOICE_STALE_CLEANUP, guild_id)
            await vc.disconnect(force=True)
            vc = None

        try:
            async with asyncio.timeout(self._connect_timeout):
                if vc is None:
                    vc = await channel.connect(self_deaf=True)
                    logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
                elif vc.channel is None or vc.channel.id != channel_id:
                    await vc.move_to(channel)
                    logger.info(LogTemplates.VOICE_MOVED, channel.name)
        except TimeoutError as e:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            raise TransportError("join", guild_id) from e
        except discord.Forbidden as e:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            raise TransportError("join", guild_id) from e
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise TransportError("join", guild_id, str(e)) from e

        return DiscordVoiceConnection(self._bot, vc, self._settings)
