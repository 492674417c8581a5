"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Audio (simulated output device)
- Playlist loading (httpx / local JSON)
- Persistence (SQLite preference store)
- Notifications (logging sink)
- Console front end
"""

from neon_player.infrastructure.audio.simulated_device import SimulatedOutputDevice
from neon_player.infrastructure.notifications.logging_sink import LoggingNotificationSink
from neon_player.infrastructure.persistence.database import Database
from neon_player.infrastructure.persistence.preference_store import SQLitePreferenceStore
from neon_player.infrastructure.playlist.loader import JsonPlaylistLoader

__all__ = [
    "Database",
    "JsonPlaylistLoader",
    "LoggingNotificationSink",
    "SimulatedOutputDevice",
    "SQLitePreferenceStore",
]
