"""Port interface for loading playlists."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.playback.state import Song


class PlaylistLoader(ABC):
    """Interface for supplying an ordered song list."""

    @abstractmethod
    async def load(self, url: str | None = None) -> list["Song"]:
        """Load songs from ``url``, or the built-in default list when None.

        Raises:
            LoadError: If the source is unreachable or malformed.
        """
        ...
