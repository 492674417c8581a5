"""Playlist loader for remote (HTTP) and local JSON song lists."""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from neon_player.application.interfaces.playlist_loader import PlaylistLoader
from neon_player.config.settings import LoaderSettings
from neon_player.domain.playback.state import Song
from neon_player.domain.shared.exceptions import LoadError
from neon_player.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

_SOUNDHELIX = "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-{n}.mp3"

DEFAULT_PLAYLIST: tuple[Song, ...] = (
    Song(id=1, title="Neon Skyline", artist="SoundHelix", audio_src=_SOUNDHELIX.format(n=1), duration=372),
    Song(id=2, title="Chrome Rain", artist="SoundHelix", audio_src=_SOUNDHELIX.format(n=2), duration=425),
    Song(id=3, title="Night City Drive", artist="SoundHelix", audio_src=_SOUNDHELIX.format(n=3), duration=344),
    Song(id=4, title="Ghost Protocol", artist="SoundHelix", audio_src=_SOUNDHELIX.format(n=4), duration=302),
    Song(id=5, title="Synthetic Dawn", artist="SoundHelix", audio_src=_SOUNDHELIX.format(n=5), duration=353),
)

_SONG_LIST = TypeAdapter(list[Song])


def parse_playlist(document: Any, source: str | None) -> list[Song]:
    """Validate a decoded JSON document into songs.

    Accepts either a bare array of songs or an object with a ``songs`` array.

    Raises:
        LoadError: If the shape or any entry is invalid, ids repeat, or the list is empty.
    """
    if isinstance(document, dict):
        document = document.get("songs")
    if not isinstance(document, list):
        raise LoadError(source, ErrorMessages.PLAYLIST_INVALID_SHAPE)

    try:
        songs = _SONG_LIST.validate_python(document)
    except ValidationError as e:
        raise LoadError(
            source, ErrorMessages.PLAYLIST_INVALID_SONG.format(error=e.error_count())
        ) from e

    if not songs:
        raise LoadError(source, ErrorMessages.PLAYLIST_EMPTY)

    counts = Counter(s.id for s in songs)
    duplicates = sorted(song_id for song_id, n in counts.items() if n > 1)
    if duplicates:
        raise LoadError(source, ErrorMessages.DUPLICATE_SONG_IDS.format(ids=duplicates))

    return songs


class JsonPlaylistLoader(PlaylistLoader):
    """Loads playlists over HTTP(S) with httpx, or from a JSON file on disk.

    ``url=None`` returns the built-in playlist without any I/O.
    """

    def __init__(
        self,
        settings: LoaderSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        default_playlist: tuple[Song, ...] = DEFAULT_PLAYLIST,
    ) -> None:
        self._settings = settings or LoaderSettings()
        self._client = client
        self._default = default_playlist

    async def load(self, url: str | None = None) -> list[Song]:
        if url is None:
            return list(self._default)

        if url.startswith(("http://", "https://")):
            document = await self._fetch_remote(url)
        else:
            document = self._read_local(url)

        songs = parse_playlist(document, url)
        logger.info(LogTemplates.PLAYLIST_LOADED, len(songs), url)
        return songs

    async def _fetch_remote(self, url: str) -> Any:
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_seconds,
                    follow_redirects=True,
                ) as client:
                    response = await client.get(url)
        except httpx.HTTPError as e:
            raise LoadError(
                url, ErrorMessages.PLAYLIST_UNREACHABLE.format(error=e.__class__.__name__)
            ) from e

        if not response.is_success:
            raise LoadError(
                url, ErrorMessages.PLAYLIST_HTTP_STATUS.format(status=response.status_code)
            )

        try:
            return response.json()
        except ValueError as e:
            raise LoadError(url, ErrorMessages.PLAYLIST_INVALID_JSON) from e

    def _read_local(self, location: str) -> Any:
        path = Path(location.removeprefix("file://")).expanduser()
        if not path.is_file():
            raise LoadError(location, ErrorMessages.PLAYLIST_FILE_NOT_FOUND.format(path=path))

        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise LoadError(
                location, ErrorMessages.PLAYLIST_UNREACHABLE.format(error=e.__class__.__name__)
            ) from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise LoadError(location, ErrorMessages.PLAYLIST_INVALID_JSON) from e
