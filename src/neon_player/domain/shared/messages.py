"""Centralized message constants for error messages, notifications, chat replies and logs."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Song / Playlist Validation Errors
    DUPLICATE_SONG_IDS = "Playlist contains duplicate song ids: {ids}"
    CURRENT_SONG_NOT_IN_PLAYLIST = "Current song {song_id} is not part of the playlist"

    # Playlist Loading Errors
    PLAYLIST_EMPTY = "playlist contains no songs"
    PLAYLIST_UNREACHABLE = "source is unreachable ({error})"
    PLAYLIST_HTTP_STATUS = "server answered with HTTP {status}"
    PLAYLIST_INVALID_JSON = "document is not valid JSON"
    PLAYLIST_INVALID_SHAPE = "expected a JSON array or an object with a 'songs' array"
    PLAYLIST_INVALID_SONG = "song entries do not match the expected schema ({error})"
    PLAYLIST_FILE_NOT_FOUND = "file {path} does not exist"

    # Device Errors
    DEVICE_NO_SOURCE = "no source assigned"
    DEVICE_AUTOPLAY_BLOCKED = "autoplay is not allowed"
    DEVICE_SOURCE_UNPLAYABLE = "source {url} cannot be played"

    # Channel Errors
    CHANNEL_NOT_FOUND = "Channel '{channel_id}' not found"

    # Settings Validation Errors
    INVALID_HEX_COLOR = "Color must use the #RRGGBB hex format"
    INVALID_CHAT_DELAY_RANGE = "chat_min_delay must not exceed chat_max_delay"
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"


class NotificationTexts:
    """Titles and bodies shown through the notification sink."""

    PLAYLIST_LOADED_TITLE = "Playlist loaded"
    PLAYLIST_LOADED_BODY = "{count} songs loaded successfully."
    PLAYLIST_FAILED_TITLE = "Error loading songs"
    PLAYLIST_FAILED_BODY = "The songs could not be loaded. The default playlist will be used."
    PLAYLIST_SAVED_TITLE = "Configuration saved"
    PLAYLIST_SAVED_BODY = "The playlist has been configured successfully."

    PLAYBACK_FAILED_TITLE = "Playback error"
    PLAYBACK_FAILED_NEW_SONG_BODY = "The audio track could not be played. Check the audio URL."
    PLAYBACK_FAILED_RESUME_BODY = "The audio could not be played. Try again later."

    STREAM_FAILED_TITLE = "Stream error"
    STREAM_FAILED_BODY = "Could not start {channel}."


class ChatTexts:
    """System replies produced by chat commands and the channel session."""

    SYSTEM_USERNAME = "SYSTEM"
    SYSTEM_COLOR = "#00FFFF"
    ANONYMOUS_USERNAME = "ANONYMOUS"

    CONNECTED = "Connected to {channel}"
    HELP = (
        "Available commands: /help, /me [action], /clear, /time, /status, /users, "
        "/random, /color [hex]"
    )
    ME_USAGE = "Usage: /me [action] - Example: /me is listening to music"
    CLEARED = "Chat history cleared"
    TIME = "Current time: {time}"
    STATUS = "Connection status: ONLINE - Neural link stable"
    USERS = "Active users in chat: {count}"
    RANDOM = 'Random cyberpunk phrase: "{phrase}"'
    COLOR_CHANGED = "Username color changed to {color}"
    COLOR_INVALID = "Invalid color format. Use hex format like #FF00FF"
    COLOR_CURRENT = "Current color: {color}. Usage: /color #FF00FF"
    UNKNOWN = "Unknown command: {command}. Type /help for available commands."
    USERNAME_CHANGED = "Username changed to: {username}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Application Lifecycle
    APP_STARTING = "Starting neon-player (environment=%s)"
    APP_STOPPED = "neon-player stopped"
    APP_KEYBOARD_INTERRUPT = "Interrupted by user"
    APP_FATAL_ERROR = "Fatal error: %s"
    CONTAINER_SHUTDOWN = "Container shut down"

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Preferences
    PREFERENCE_SAVED = "Preference %s saved"
    PREFERENCE_IGNORED = "Ignoring stored %s value %r"

    # Playlist Loading
    PLAYLIST_LOADING = "Loading playlist from %s"
    PLAYLIST_LOADED = "Loaded %d songs from %s"
    PLAYLIST_LOAD_FAILED = "Playlist load failed: %s"
    PLAYLIST_FALLBACK = "Falling back to default playlist (%d songs)"

    # Playback State Machine
    PLAYBACK_ACTION = "Applying %s"
    PLAYBACK_LISTENER_ERROR = "Error in playback state listener"
    PLAYBACK_NAVIGATED = "Navigated from %s to %s"
    PLAYBACK_ENDED_REPEAT = "Song %s ended, repeating"
    PLAYBACK_ENDED_IDLE = "Ended fired with nothing to play"

    # Device Synchronization
    SYNC_SOURCE_CHANGED = "Device source set to %s"
    SYNC_PLAY_REQUESTED = "Play requested (request %d)"
    SYNC_PLAY_STARTED = "Device playing (request %d)"
    SYNC_PLAY_REJECTED = "Play request %d rejected: %s"
    SYNC_STALE_REJECTION = "Ignoring rejection of superseded play request %d"
    SYNC_STALE_SUCCESS = "Play request %d finished after playback stopped; pausing device"
    SYNC_DEVICE_ERROR = "Unexpected error from output device (request %d)"
    SYNC_PAUSED = "Device paused"
    SYNC_VOLUME = "Device level set to %.2f"
    SYNC_CLOSED = "Device synchronizer closed"

    # Simulated Device
    DEVICE_SOURCE = "[%s] source -> %s"
    DEVICE_PLAYING = "[%s] playing %s"
    DEVICE_PAUSED = "[%s] paused"
    DEVICE_PLAY_OVERTAKEN = "[%s] play request overtaken by pause or source change"
    DEVICE_ENDED = "[%s] reached end of %s"
    DEVICE_HANDLER_ERROR = "[%s] error in %s handler"

    # Channel Session
    CHANNEL_CONNECTED = "Connected to channel %s"
    CHANNEL_DISCONNECTED = "Disconnected from channel %s"
    CHANNEL_STREAM_STARTED = "Streaming %s"
    CHANNEL_STREAM_STOPPED = "Stopped streaming %s"
    CHANNEL_STREAM_FAILED = "Could not start stream for %s: %s"
    CHANNEL_STALE_START = "Ignoring late stream start for %s"
    CHANNEL_TIMER_ARMED = "Background chat armed in %.2fs"
    CHANNEL_TIMER_CANCELLED = "Background chat timer cancelled"

    # Chat
    CHAT_COMMAND = "Chat command %s"
    CHAT_COMMAND_REJECTED = "Chat command rejected (%s): %s"
    CHAT_OUTBOUND = "Outbound chat message from %s"
    CHAT_COLOR_CHANGED = "Chat color changed to %s"
    CHAT_USERNAME_CHANGED = "Username changed to %s"

    # Notifications
    NOTIFICATION = "%s: %s"
