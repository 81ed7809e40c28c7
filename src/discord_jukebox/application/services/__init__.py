"""Application services orchestrating sessions, playback and confirmations."""

from discord_jukebox.application.services.confirmation_flow import (
    AddTrackConfirmationFlow,
    AddTrackOutcome,
    AddTrackRequest,
)
from discord_jukebox.application.services.playback_service import EnqueueReceipt, PlaybackService
from discord_jukebox.application.services.session_registry import (
    SessionClosedError,
    VoiceSession,
    VoiceSessionRegistry,
)
from discord_jukebox.application.services.track_completion import (
    CompletionOutcome,
    TrackCompletionHandler,
)

__all__ = [
    "AddTrackConfirmationFlow",
    "AddTrackOutcome",
    "AddTrackRequest",
    "CompletionOutcome",
    "EnqueueReceipt",
    "PlaybackService",
    "SessionClosedError",
    "TrackCompletionHandler",
    "VoiceSession",
    "VoiceSessionRegistry",
]
