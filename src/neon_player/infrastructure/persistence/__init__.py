"""SQLite persistence - database wrapper and preference store."""

from neon_player.infrastructure.persistence.database import Database
from neon_player.infrastructure.persistence.preference_store import SQLitePreferenceStore

__all__ = [
    "Database",
    "SQLitePreferenceStore",
]
