"""
Streaming Bounded Context

Channels, chat messages, the session snapshot and the built-in catalog.
"""

from neon_player.domain.streaming.catalog import DEFAULT_CHANNELS, find_channel
from neon_player.domain.streaming.entities import (
    Channel,
    ChatMessage,
    SessionPhase,
    StreamingSessionState,
    append_to_feed,
    distinct_chatters,
)

__all__ = [
    "Channel",
    "ChatMessage",
    "SessionPhase",
    "StreamingSessionState",
    "DEFAULT_CHANNELS",
    "append_to_feed",
    "distinct_chatters",
    "find_channel",
]
