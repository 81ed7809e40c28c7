"""Dependency Injection Container

Builds the jukebox's object graph lazily: the playlist store, the voice and
chat adapters (which need the running bot), the per-guild session registry and
the command/query handlers the cogs call into.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.create_playlist import CreatePlaylistHandler
    from ..application.commands.leave import LeaveHandler
    from ..application.commands.play_playlist import PlayPlaylistHandler
    from ..application.commands.play_track import PlayTrackHandler
    from ..application.commands.skip_track import SkipTrackHandler
    from ..application.interfaces.chat_gateway import ChatGateway
    from ..application.interfaces.track_resolver import TrackResolver
    from ..application.interfaces.voice_transport import VoiceTransport
    from ..application.queries.get_playlists import PlaylistQueryHandler
    from ..application.queries.get_queue import GetQueueHandler
    from ..application.services.confirmation_flow import AddTrackConfirmationFlow
    from ..application.services.playback_service import PlaybackService
    from ..application.services.session_registry import VoiceSessionRegistry
    from ..application.services.track_completion import TrackCompletionHandler
    from ..domain.playlists.repository import PlaylistRepository
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are created on first access and cached. Anything that talks to
    Discord needs ``set_bot()`` to have been called first.
    """

    settings: Settings
    _bot: Bot | None = None
    _instances: dict[str, Any] = field(default_factory=dict)

    # Persistence layer
    _database: Database | None = None
    _playlist_repository: PlaylistRepository | None = None

    # Infrastructure adapters
    _track_resolver: TrackResolver | None = None
    _voice_transport: VoiceTransport | None = None
    _chat_gateway: ChatGateway | None = None

    # Application services
    _session_registry: VoiceSessionRegistry | None = None
    _track_completion_handler: TrackCompletionHandler | None = None
    _playback_service: PlaybackService | None = None
    _confirmation_flow: AddTrackConfirmationFlow | None = None

    def set_bot(self, bot: Bot) -> None:
        self._bot = bot

    @property
    def bot(self) -> Bot:
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Persistence Layer ===

    @property
    def database(self) -> Database:
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, self.settings.database)
        return self._database

    @property
    def playlist_repository(self) -> PlaylistRepository:
        if self._playlist_repository is None:
            from ..infrastructure.persistence.repositories.playlist_repository import (
                SQLitePlaylistRepository,
            )

            self._playlist_repository = SQLitePlaylistRepository(self.database)
        return self._playlist_repository

    # === Infrastructure Adapters ===

    @property
    def track_resolver(self) -> TrackResolver:
        if self._track_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._track_resolver = YtDlpResolver(self.settings.audio)
        return self._track_resolver

    @property
    def voice_transport(self) -> VoiceTransport:
        if self._voice_transport is None:
            from ..infrastructure.discord.adapters.voice_transport import DiscordVoiceTransport

            self._voice_transport = DiscordVoiceTransport(
                self.bot,
                self.settings.audio,
                connect_timeout=self.settings.voice.connect_timeout_seconds,
            )
        return self._voice_transport

    @property
    def chat_gateway(self) -> ChatGateway:
        if self._chat_gateway is None:
            from ..infrastructure.discord.adapters.chat_gateway import DiscordChatGateway

            self._chat_gateway = DiscordChatGateway(self.bot)
        return self._chat_gateway

    # === Application Services ===

    @property
    def session_registry(self) -> VoiceSessionRegistry:
        if self._session_registry is None:
            from ..application.services.session_registry import VoiceSessionRegistry

            self._session_registry = VoiceSessionRegistry(
                self.voice_transport,
                max_queue_size=self.settings.audio.max_queue_size,
            )
        return self._session_registry

    @property
    def track_completion_handler(self) -> TrackCompletionHandler:
        if self._track_completion_handler is None:
            from ..application.services.track_completion import TrackCompletionHandler

            handler = TrackCompletionHandler(
                registry=self.session_registry,
                chat_gateway=self.chat_gateway,
            )
            self.session_registry.set_on_track_end_callback(handler.on_track_end)
            self._track_completion_handler = handler
        return self._track_completion_handler

    @property
    def playback_service(self) -> PlaybackService:
        if self._playback_service is None:
            from ..application.services.playback_service import PlaybackService

            # Sessions created before the completion handler exists would never advance.
            _ = self.track_completion_handler
            self._playback_service = PlaybackService(
                registry=self.session_registry,
                track_resolver=self.track_resolver,
            )
        return self._playback_service

    @property
    def confirmation_flow(self) -> AddTrackConfirmationFlow:
        if self._confirmation_flow is None:
            from ..application.services.confirmation_flow import AddTrackConfirmationFlow

            playlists = self.settings.playlists
            self._confirmation_flow = AddTrackConfirmationFlow(
                playlist_repository=self.playlist_repository,
                track_resolver=self.track_resolver,
                chat_gateway=self.chat_gateway,
                timeout_seconds=playlists.confirmation_timeout_seconds,
                accept_emoji=playlists.accept_emoji,
                reject_emoji=playlists.reject_emoji,
            )
        return self._confirmation_flow

    # === Command Handlers ===

    @property
    def play_track_handler(self) -> PlayTrackHandler:
        if "play_track_handler" not in self._instances:
            from ..application.commands.play_track import PlayTrackHandler

            self._instances["play_track_handler"] = PlayTrackHandler(
                playback_service=self.playback_service
            )
        return self._instances["play_track_handler"]

    @property
    def skip_track_handler(self) -> SkipTrackHandler:
        if "skip_track_handler" not in self._instances:
            from ..application.commands.skip_track import SkipTrackHandler

            self._instances["skip_track_handler"] = SkipTrackHandler(self.session_registry)
        return self._instances["skip_track_handler"]

    @property
    def leave_handler(self) -> LeaveHandler:
        if "leave_handler" not in self._instances:
            from ..application.commands.leave import LeaveHandler

            self._instances["leave_handler"] = LeaveHandler(self.session_registry)
        return self._instances["leave_handler"]

    @property
    def create_playlist_handler(self) -> CreatePlaylistHandler:
        if "create_playlist_handler" not in self._instances:
            from ..application.commands.create_playlist import CreatePlaylistHandler

            self._instances["create_playlist_handler"] = CreatePlaylistHandler(
                playlist_repository=self.playlist_repository,
                max_name_length=self.settings.playlists.max_name_length,
            )
        return self._instances["create_playlist_handler"]

    @property
    def play_playlist_handler(self) -> PlayPlaylistHandler:
        if "play_playlist_handler" not in self._instances:
            from ..application.commands.play_playlist import PlayPlaylistHandler

            self._instances["play_playlist_handler"] = PlayPlaylistHandler(
                playlist_repository=self.playlist_repository,
                playback_service=self.playback_service,
            )
        return self._instances["play_playlist_handler"]

    # === Query Handlers ===

    @property
    def get_queue_handler(self) -> GetQueueHandler:
        if "get_queue_handler" not in self._instances:
            from ..application.queries.get_queue import GetQueueHandler

            self._instances["get_queue_handler"] = GetQueueHandler(registry=self.session_registry)
        return self._instances["get_queue_handler"]

    @property
    def playlist_query_handler(self) -> PlaylistQueryHandler:
        if "playlist_query_handler" not in self._instances:
            from ..application.queries.get_playlists import PlaylistQueryHandler

            self._instances["playlist_query_handler"] = PlaylistQueryHandler(
                playlist_repository=self.playlist_repository
            )
        return self._instances["playlist_query_handler"]

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Leave every voice channel and close the playlist store."""
        if self._session_registry is not None:
            try:
                await self._session_registry.shutdown()
            except Exception as exc:
                logger.warning("Failed tearing down voice sessions: %r", exc)

        if self._database is not None:
            await self._database.close()

        self._instances.clear()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
