"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Playlist Validation Errors
    EMPTY_PLAYLIST_NAME = "Playlist name cannot be empty"
    PLAYLIST_NAME_TOO_LONG = "Playlist name cannot exceed {max_length} characters"
    PLAYLIST_NAME_WHITESPACE = "Playlist name cannot contain whitespace"

    # Voting Validation Errors
    VOTE_ALREADY_RESOLVED = "Confirmation vote is already {outcome}"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"

    # Database Validation Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Audio/Stream Errors
    NO_RESULTS = "no results found"
    NO_STREAM_URL_FOR_TRACK = "no playable stream found for {title}"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"
    DATABASE_ROLLBACK_FAILED = "Rollback failed: %s"

    # Voice Operations
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_STALE_CLEANUP = "Found stale voice client in guild %s, cleaning up"
    VOICE_LEAVE_FAILED = "Failed to leave voice in guild %s: %s"
    VOICE_SKIP_FAILED = "Failed to stop current track in guild %s: %s"

    # Playback Operations
    PLAYBACK_STARTED = "Started playing '%s' in guild %s"
    PLAYBACK_ERROR = "Playback error in guild %s: %s"
    PLAYBACK_FAILED_START = "Failed to start '%s' in guild %s: %s"
    TRACK_ENDED = "Track %s ended in guild %s"
    TRACK_END_CALLBACK_ERROR = "Error in track end handler for guild %s: %s"

    # Completion Handling
    COMPLETION_NO_SESSION = "Track %s ended after session for guild %s was removed"
    COMPLETION_STALE_TRACK = "Ignoring end of %s in guild %s: not the current track"
    COMPLETION_ANNOUNCE_FAILED = "Failed to announce next track in guild %s: %s"
    COMPLETION_PENDING_RESERVATIONS = "Queue empty in guild %s but %s enqueue(s) pending"

    # Queue Operations
    QUEUE_EMPTY = "Queue empty in guild %s"
    QUEUE_ENQUEUED = "Enqueued track '%s' at position %s in guild %s"
    QUEUE_ADVANCED = "Advanced queue in guild %s, %s track(s) left"
    QUEUE_SLOT_ABANDONED = "Abandoned enqueue slot %s in guild %s"

    # Session/Guild Operations
    SESSION_CREATED = "Created voice session for guild %s in channel %s"
    SESSION_REUSED = "Reusing voice session for guild %s"
    SESSION_REMOVED = "Removed voice session for guild %s"
    SESSION_CLOSED_RETRY = "Session for guild %s closed during enqueue, re-acquiring"
    SESSION_STALE_REPLACED = "Replacing disconnected voice session for guild %s"
    SESSION_HOLD_RELEASED = "Released import hold on voice session for guild %s"
    SESSIONS_SHUTDOWN = "Tore down %s voice session(s)"
    GUILD_NOT_FOUND = "Guild %s not found"
    CHANNEL_NOT_VOICE = "Channel %s is not a voice channel"
    CHANNEL_NOT_MESSAGEABLE = "Channel %s is not a text channel"

    # Playlist Operations
    PLAYLIST_CREATED = "Created playlist '%s' in guild %s"
    PLAYLIST_TRACK_APPENDED = "Appended '%s' to playlist %s"
    PLAYLIST_IMPORT_FAILED = "Failed to enqueue '%s' from playlist '%s': %s"
    PLAYLIST_IMPORT_DONE = "Enqueued %s/%s tracks from playlist '%s' in guild %s"
    PERSISTENCE_FAILED = "Playlist store operation '%s' failed: %r"

    # Confirmation Flow
    CONFIRMATION_POSTED = "Posted confirmation %s for '%s' in guild %s"
    CONFIRMATION_RESOLVED = "Confirmation %s resolved as %s"
    CONFIRMATION_REMOVE_FAILED = "Failed to remove confirmation message %s: %s"

    # Resolution/Search
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"
    YTDLP_FAILED_SEARCH = "Failed to search for %r"
    RESOLUTION_FAILED = "Resolution of %r failed: %s"

    # Command Boundary
    COMMAND_USER_ERROR = "Command %s rejected: %s"
    COMMAND_FAILED = "Command %s failed"
    COMMAND_REPLY_FAILED = "Failed to send reply for command %s"

    # Application Lifecycle
    BOT_STARTING = "Starting Discord Jukebox in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Success Messages
    SUCCESS_PLAYLIST_CREATED = "✅ Playlist `{name}` created. Add tracks with `{prefix}playlist add {name} <query>`."
    SUCCESS_PLAYLIST_TRACK_ADDED = "✅ Added **{title}** to playlist `{name}`."
    SUCCESS_PLAYLIST_QUEUED = "📋 Queued {queued}/{total} tracks from playlist `{name}`."

    # Action Messages
    ACTION_SKIPPED = "⏭️ Skipped **{title}**."
    ACTION_SKIP_EMPTY_LEFT = "👋 Nothing left to play, leaving the voice channel."
    ACTION_SKIP_PENDING = "⏭️ Already skipping **{title}**."
    ACTION_DISCONNECTED = "👋 Disconnected from voice channel."

    # Confirmation Messages
    CONFIRM_PROMPT = "Add this track to playlist `{name}`? {requester}, react with {accept} or {reject}."
    CONFIRM_REJECTED = "❌ Not added to `{name}`."
    CONFIRM_EXPIRED = "⌛ No answer in time, **{title}** was not added to `{name}`."

    # Error Messages
    ERROR_EMPTY_QUERY = "🤔 I need a search phrase or a link."
    ERROR_NEED_PLAYLIST_NAME = "I need a name to create a playlist."
    ERROR_NEED_PLAYLIST_AND_TRACK = "Usage: `{prefix}playlist add <name> <search or link>`."
    ERROR_RESOLUTION = "[Error] {cause}"
    ERROR_STORAGE = "❌ Couldn't reach the playlist storage. Try again later."
    ERROR_PLAYLIST_IMPORT_FAILURES = "⚠️ Couldn't queue: {titles}"
    ERROR_PLAYLIST_QUEUE_FULL = "⚠️ The queue filled up before the whole playlist was queued."
    ERROR_COMMAND_FAILED = "❌ Something went wrong running that command."
    ERROR_SERVER_ONLY = "This command can only be used in a server."
    ERROR_COULD_NOT_JOIN_VOICE = "I couldn't join your voice channel."

    # State Messages
    STATE_NOT_IN_VOICE = "I'm not in any voice channel."
    STATE_NEED_TO_BE_IN_VOICE = "You need to be in a voice channel to use this command."
    STATE_NOTHING_PLAYING = "Nothing is playing."
    STATE_QUEUE_EMPTY = "Queue is empty."
    STATE_NO_PLAYLISTS = "This server has no playlists yet."
    STATE_PLAYLIST_EMPTY = "Playlist `{name}` has no tracks yet."

    # Embed Content
    EMBED_NOW_PLAYING = "🎵 Now Playing"
    EMBED_UNKNOWN_TITLE = "No Name"
    EMBED_REQUESTED_BY = "[{mention}]"
    EMBED_QUEUED = "**{title}** - added to the queue at position {position}"
    EMBED_PROPOSAL_TITLE = "Add to `{name}`?"
    EMBED_PLAYLISTS = "📋 Playlists"
    EMBED_PLAYLIST_LINE = "`{name}` - {count} track(s)"


class EmojiConstants:
    """Emoji constants for consistent visual feedback."""

    ERROR = "❌"
    ACCEPT = "☑️"
    REJECT = "❌"
