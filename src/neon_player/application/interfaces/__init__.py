"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from neon_player.application.interfaces.notification_sink import (
    NotificationKind,
    NotificationSink,
)
from neon_player.application.interfaces.output_device import (
    DeviceEvent,
    OutputDevice,
)
from neon_player.application.interfaces.playlist_loader import PlaylistLoader
from neon_player.application.interfaces.preference_store import PreferenceStore

__all__ = [
    "DeviceEvent",
    "OutputDevice",
    "PlaylistLoader",
    "NotificationKind",
    "NotificationSink",
    "PreferenceStore",
]
