"""Port interface for persisted user preferences."""

from __future__ import annotations

from abc import ABC, abstractmethod


class PreferenceStore(ABC):
    """Key-value persistence for username, chat color and playlist URL.

    Keys are listed in ``PreferenceKeys``.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if nothing was stored."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...
