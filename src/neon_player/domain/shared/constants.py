"""Centralized constants for preference keys, database schema, and other shared values.

This module provides reusable constants that reduce magic strings and improve maintainability.
"""

from __future__ import annotations


class ConfigKeys:
    """Configuration and environment variable key names."""

    ENVIRONMENT = "ENVIRONMENT"
    DEBUG = "DEBUG"
    LOG_LEVEL = "LOG_LEVEL"
    DATABASE__URL = "DATABASE__URL"


class PreferenceKeys:
    """Keys persisted by the preference store."""

    USERNAME = "username"
    CHAT_COLOR = "chat_color"
    PLAYLIST_URL = "playlist_url"


class PreferenceDefaults:
    """Values used when nothing has been stored yet."""

    USERNAME = "CYBER_USER"
    CHAT_COLOR = "#FF00FF"


class DatabaseTables:
    """Database table names."""

    PREFERENCES = "preferences"


class SQLPragmas:
    """SQLite PRAGMA statements."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"


class DatabaseURLSchemes:
    """Supported database URL prefixes."""

    SQLITE = "sqlite:///"
    MEMORY = ":memory:"


class PlaybackConstants:
    """Playback limits and defaults."""

    MIN_VOLUME = 0.0
    MAX_VOLUME = 1.0
    DEFAULT_VOLUME = 0.7


class StreamingConstants:
    """Channel session limits and defaults."""

    MIN_VOLUME = 0.0
    MAX_VOLUME = 100.0
    DEFAULT_VOLUME = 50.0
    MAX_CHAT_MESSAGES = 50
    CHAT_MIN_DELAY_SECONDS = 3.0
    CHAT_MAX_DELAY_SECONDS = 10.0


class ChatConstants:
    """Chat input rules."""

    COMMAND_PREFIX = "/"
    HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
    USERNAME_STRIP_PATTERN = r"[^a-zA-Z0-9_]"
    USERNAME_MAX_LENGTH = 16


class DevicePoolNames:
    """Names given to the two output device instances."""

    PLAYER = "player"
    CHANNEL = "channel"
