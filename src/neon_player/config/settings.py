"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import (
    ChatConstants,
    DatabaseURLSchemes,
    PlaybackConstants,
    PreferenceDefaults,
    StreamingConstants,
)
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import (
    BusyTimeoutMs,
    ChatDelaySeconds,
    ConnectionTimeoutS,
    PercentVolume,
    UnitVolume,
)


class PlaybackSettings(BaseModel):
    """Playlist player configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: UnitVolume = PlaybackConstants.DEFAULT_VOLUME
    default_playlist_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("default_playlist_url", "playlist_url"),
    )


class StreamingSettings(BaseModel):
    """Live channel configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: PercentVolume = StreamingConstants.DEFAULT_VOLUME
    chat_min_delay: ChatDelaySeconds = StreamingConstants.CHAT_MIN_DELAY_SECONDS
    chat_max_delay: ChatDelaySeconds = StreamingConstants.CHAT_MAX_DELAY_SECONDS
    max_chat_messages: int = Field(default=StreamingConstants.MAX_CHAT_MESSAGES, ge=1, le=1000)

    @model_validator(mode="after")
    def validate_delay_range(self) -> StreamingSettings:
        if self.chat_min_delay > self.chat_max_delay:
            raise ValueError(ErrorMessages.INVALID_CHAT_DELAY_RANGE)
        return self


class ChatSettings(BaseModel):
    """Chat defaults used until the user picks their own."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_username: str = Field(default=PreferenceDefaults.USERNAME, min_length=1, max_length=16)
    default_color: str = PreferenceDefaults.CHAT_COLOR

    @field_validator("default_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if not re.fullmatch(ChatConstants.HEX_COLOR_PATTERN, v):
            raise ValueError(ErrorMessages.INVALID_HEX_COLOR)
        return v


class DeviceSettings(BaseModel):
    """Simulated output device behaviour."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    tick_interval: float = Field(default=0.25, gt=0.0, le=5.0)
    autoplay_allowed: bool = True
    default_duration: float = Field(default=180.0, gt=0.0)


class LoaderSettings(BaseModel):
    """Playlist loader configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        validation_alias=AliasChoices("timeout_seconds", "timeout"),
    )


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/neon_player.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: BusyTimeoutMs = Field(
        default=5000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: ConnectionTimeoutS = Field(
        default=10,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith("sqlite://") and v != DatabaseURLSchemes.MEMORY:
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - PLAYBACK__DEFAULT_VOLUME, STREAMING__CHAT_MIN_DELAY, etc. (nested)
    - DATABASE__URL (sqlite:///path or :memory:)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)
    streaming: StreamingSettings = Field(default_factory=StreamingSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    device: DeviceSettings = Field(default_factory=DeviceSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=sorted(valid_levels))
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
