"""Playlist sources - HTTP and local JSON loader with a built-in fallback list."""

from neon_player.infrastructure.playlist.loader import (
    DEFAULT_PLAYLIST,
    JsonPlaylistLoader,
    parse_playlist,
)

__all__ = [
    "DEFAULT_PLAYLIST",
    "JsonPlaylistLoader",
    "parse_playlist",
]
