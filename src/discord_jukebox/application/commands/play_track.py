"""Command and handler for playing a track from a query or URL."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from ...domain.music.entities import QueuedTrack
from ...domain.shared.exceptions import (
    EmptyQueryError,
    QueueFullError,
    ResolutionError,
    TransportError,
)
from ...domain.shared.messages import DiscordUIMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake, NonNegativeInt

if TYPE_CHECKING:
    from ..services.playback_service import PlaybackService

logger = logging.getLogger(__name__)


class PlayTrackStatus(Enum):
    """Status codes for play track results."""

    NOW_PLAYING = "now_playing"
    QUEUED = "queued"
    EMPTY_QUERY = "empty_query"
    NOT_IN_VOICE = "not_in_voice"
    RESOLUTION_ERROR = "resolution_error"
    VOICE_ERROR = "voice_error"
    QUEUE_FULL = "queue_full"


class PlayTrackCommand(BaseModel):
    """Request to resolve a query/URL, queue the track, and start it if the queue was empty."""

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    text_channel_id: DiscordSnowflake
    user_id: DiscordSnowflake
    voice_channel_id: DiscordSnowflake | None
    query: str

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v


class PlayTrackResult(BaseModel):
    """Result of a play track command."""

    model_config = ConfigDict(frozen=True, strict=True)

    status: PlayTrackStatus
    message: str
    track: QueuedTrack | None = None
    queue_position: NonNegativeInt | None = None

    @property
    def is_success(self) -> bool:
        return self.status in {PlayTrackStatus.NOW_PLAYING, PlayTrackStatus.QUEUED}

    @property
    def started_playing(self) -> bool:
        return self.status is PlayTrackStatus.NOW_PLAYING

    @classmethod
    def success(cls, track: QueuedTrack, queue_position: int) -> PlayTrackResult:
        if queue_position == 1:
            status = PlayTrackStatus.NOW_PLAYING
            message = f"Now playing: {track.title}"
        else:
            status = PlayTrackStatus.QUEUED
            message = DiscordUIMessages.EMBED_QUEUED.format(
                title=track.title, position=queue_position
            )
        return cls(status=status, message=message, track=track, queue_position=queue_position)

    @classmethod
    def error(cls, status: PlayTrackStatus, message: str) -> PlayTrackResult:
        return cls(status=status, message=message)


class PlayTrackHandler:
    """Joins the requester's channel if needed, then resolves and queues the track."""

    def __init__(self, *, playback_service: PlaybackService) -> None:
        self._playback = playback_service

    async def handle(self, command: PlayTrackCommand) -> PlayTrackResult:
        if not command.query:
            return PlayTrackResult.error(
                PlayTrackStatus.EMPTY_QUERY, DiscordUIMessages.ERROR_EMPTY_QUERY
            )
        if command.voice_channel_id is None:
            return PlayTrackResult.error(
                PlayTrackStatus.NOT_IN_VOICE, DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE
            )

        try:
            receipt = await self._playback.enqueue(
                guild_id=command.guild_id,
                voice_channel_id=command.voice_channel_id,
                text_channel_id=command.text_channel_id,
                user_id=command.user_id,
                query=command.query,
            )
        except EmptyQueryError:
            return PlayTrackResult.error(
                PlayTrackStatus.EMPTY_QUERY, DiscordUIMessages.ERROR_EMPTY_QUERY
            )
        except ResolutionError as e:
            logger.info(LogTemplates.RESOLUTION_FAILED, command.query, e.cause)
            return PlayTrackResult.error(
                PlayTrackStatus.RESOLUTION_ERROR,
                DiscordUIMessages.ERROR_RESOLUTION.format(cause=e.cause or e.message),
            )
        except QueueFullError as e:
            return PlayTrackResult.error(PlayTrackStatus.QUEUE_FULL, e.message)
        except TransportError as e:
            logger.warning(LogTemplates.COMMAND_USER_ERROR, "play", e.message)
            return PlayTrackResult.error(
                PlayTrackStatus.VOICE_ERROR, DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE
            )

        return PlayTrackResult.success(receipt.track, receipt.position)
