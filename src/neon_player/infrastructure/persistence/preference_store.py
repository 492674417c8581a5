"""SQLite implementation of the preference store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from neon_player.application.interfaces.preference_store import PreferenceStore
from neon_player.domain.shared.constants import DatabaseTables
from neon_player.domain.shared.datetime_utils import UtcDateTime
from neon_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class SQLitePreferenceStore(PreferenceStore):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, key: str) -> str | None:
        row = await self._db.fetch_one(
            f"SELECT value FROM {DatabaseTables.PREFERENCES} WHERE key = ?",
            (key,),
        )
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        await self._db.execute(
            f"""
            INSERT INTO {DatabaseTables.PREFERENCES} (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value, UtcDateTime.now().iso),
        )
        logger.debug(LogTemplates.PREFERENCE_SAVED, key)

    async def get_all(self) -> dict[str, str]:
        rows = await self._db.fetch_all(
            f"SELECT key, value FROM {DatabaseTables.PREFERENCES} ORDER BY key"
        )
        return {row["key"]: row["value"] for row in rows}
