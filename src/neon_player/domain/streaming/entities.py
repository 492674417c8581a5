"""Core models for the streaming (live channel) bounded context."""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from neon_player.domain.shared.constants import StreamingConstants
from neon_player.domain.shared.datetime_utils import utcnow
from neon_player.domain.shared.messages import ChatTexts
from neon_player.domain.shared.types import (
    NonEmptyStr,
    NonNegativeInt,
    PercentVolume,
    UtcDatetimeField,
)


class Channel(BaseModel):
    """A simulated live audio source. Read-only from the session's perspective."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: NonEmptyStr
    name: NonEmptyStr
    description: str = ""
    is_live: bool = Field(default=False, alias="isLive")
    stream_url: NonEmptyStr = Field(alias="streamUrl")
    thumbnail_url: str = Field(default="", alias="thumbnailUrl")
    current_listeners: NonNegativeInt = Field(default=0, alias="currentListeners")
    category: str = ""
    created_by: str = Field(default="", alias="createdBy")


class ChatMessage(BaseModel):
    """One feed entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: NonEmptyStr = Field(default_factory=lambda: uuid4().hex)
    username: NonEmptyStr
    message: str
    timestamp: UtcDatetimeField = Field(default_factory=utcnow)
    is_system: bool = False
    color: str | None = None

    @classmethod
    def system(cls, text: str) -> ChatMessage:
        return cls(
            username=ChatTexts.SYSTEM_USERNAME,
            message=text,
            is_system=True,
            color=ChatTexts.SYSTEM_COLOR,
        )

    @property
    def is_action(self) -> bool:
        """``/me`` style message."""
        return self.message.startswith("/me ")


class SessionPhase(Enum):
    """Channel session lifecycle.

    Transitions:
    - IDLE -> CONNECTED (connect)
    - CONNECTED -> STREAMING (start)
    - STREAMING -> CONNECTED (stop)
    - Any -> CONNECTED (connect to another channel)
    - Any -> IDLE (disconnect)
    """

    IDLE = "idle"
    CONNECTED = "connected"
    STREAMING = "streaming"


class StreamingSessionState(BaseModel):
    """Snapshot of the channel session."""

    model_config = ConfigDict(frozen=True)

    current_channel: Channel | None = None
    is_streaming: bool = False
    volume: PercentVolume = StreamingConstants.DEFAULT_VOLUME
    is_muted: bool = False
    chat_messages: tuple[ChatMessage, ...] = ()
    is_connected: bool = False

    @property
    def phase(self) -> SessionPhase:
        if not self.is_connected:
            return SessionPhase.IDLE
        if self.is_streaming:
            return SessionPhase.STREAMING
        return SessionPhase.CONNECTED

    @property
    def output_level(self) -> float:
        """Device level on the 0..1 scale."""
        return 0.0 if self.is_muted else self.volume / StreamingConstants.MAX_VOLUME


def append_to_feed(
    feed: tuple[ChatMessage, ...],
    message: ChatMessage,
    limit: int = StreamingConstants.MAX_CHAT_MESSAGES,
) -> tuple[ChatMessage, ...]:
    """Append ``message`` keeping only the most recent ``limit`` entries."""
    combined = (*feed, message)
    if len(combined) > limit:
        combined = combined[-limit:]
    return combined


def distinct_chatters(feed: tuple[ChatMessage, ...] | list[ChatMessage]) -> int:
    """Number of distinct non-system usernames in ``feed``."""
    return len({m.username for m in feed if not m.is_system})
