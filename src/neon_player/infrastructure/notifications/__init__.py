"""Notification adapters."""

from neon_player.infrastructure.notifications.logging_sink import (
    LoggingNotificationSink,
    Notification,
)

__all__ = [
    "LoggingNotificationSink",
    "Notification",
]
