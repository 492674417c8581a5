"""Player Application Service - controller lifetime for playlist playback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.constants import PreferenceKeys
from ...domain.shared.exceptions import LoadError
from ...domain.shared.messages import LogTemplates, NotificationTexts
from ..interfaces.notification_sink import NotificationKind
from .device_synchronizer import DeviceSynchronizer

if TYPE_CHECKING:
    from ...domain.playback.state import PlaybackState, Song
    from ...domain.playback.state_machine import PlaybackStateMachine
    from ..interfaces.notification_sink import NotificationSink
    from ..interfaces.output_device import OutputDevice
    from ..interfaces.playlist_loader import PlaylistLoader
    from ..interfaces.preference_store import PreferenceStore

logger = logging.getLogger(__name__)


class PlayerApplicationService:
    """Orchestrates playlist loading, playback operations and device teardown.

    Owns exactly one DeviceSynchronizer (and therefore one OutputDevice
    binding) between ``start()`` and ``shutdown()``.
    """

    def __init__(
        self,
        *,
        state_machine: PlaybackStateMachine,
        device: OutputDevice,
        playlist_loader: PlaylistLoader,
        notifier: NotificationSink,
        preferences: PreferenceStore | None = None,
        default_playlist_url: str | None = None,
    ) -> None:
        self._machine = state_machine
        self._device = device
        self._loader = playlist_loader
        self._notifier = notifier
        self._preferences = preferences
        self._default_playlist_url = default_playlist_url
        self._synchronizer: DeviceSynchronizer | None = None

    async def __aenter__(self) -> PlayerApplicationService:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.shutdown()

    @property
    def state(self) -> PlaybackState:
        return self._machine.state

    @property
    def is_running(self) -> bool:
        return self._synchronizer is not None and not self._synchronizer.is_closed

    @property
    def synchronizer(self) -> DeviceSynchronizer:
        if self._synchronizer is None:
            self._synchronizer = DeviceSynchronizer(
                state_machine=self._machine,
                device=self._device,
                notifier=self._notifier,
            )
        return self._synchronizer

    async def start(self, url: str | None = None) -> int:
        """Bind the device and load the initial playlist.

        The playlist URL is, in order: ``url``, the stored ``playlist_url``
        preference, the configured default, or the built-in list.
        """
        _ = self.synchronizer
        if url is None and self._preferences is not None:
            url = await self._preferences.get(PreferenceKeys.PLAYLIST_URL)
        return await self.load_playlist(url or self._default_playlist_url)

    async def load_playlist(self, url: str | None = None) -> int:
        """Load songs into the state machine, falling back to the default list on failure.

        Returns the number of songs now in the playlist. Never raises LoadError.
        """
        logger.info(LogTemplates.PLAYLIST_LOADING, url or "default playlist")
        try:
            songs = await self._loader.load(url)
        except LoadError as e:
            logger.warning(LogTemplates.PLAYLIST_LOAD_FAILED, e.message)
            songs = await self._loader.load(None)
            logger.info(LogTemplates.PLAYLIST_FALLBACK, len(songs))
            self._notifier.notify(
                NotificationKind.ERROR,
                NotificationTexts.PLAYLIST_FAILED_TITLE,
                NotificationTexts.PLAYLIST_FAILED_BODY,
            )
            self._machine.load_playlist(songs)
            return len(self._machine.state.playlist)

        self._machine.load_playlist(songs)
        if songs:
            self._notifier.notify(
                NotificationKind.INFO,
                NotificationTexts.PLAYLIST_LOADED_TITLE,
                NotificationTexts.PLAYLIST_LOADED_BODY.format(count=len(songs)),
            )
        return len(self._machine.state.playlist)

    async def validate_playlist_url(self, url: str) -> list[Song]:
        """Check that ``url`` loads, then remember it as the preferred playlist.

        Does not touch the current playlist.

        Raises:
            LoadError: If the playlist cannot be loaded.
        """
        songs = await self._loader.load(url)
        if self._preferences is not None:
            await self._preferences.set(PreferenceKeys.PLAYLIST_URL, url)
        self._notifier.notify(
            NotificationKind.INFO,
            NotificationTexts.PLAYLIST_SAVED_TITLE,
            NotificationTexts.PLAYLIST_SAVED_BODY,
        )
        return songs

    # === Playback operations ===

    def find_song(self, song_id: int) -> Song | None:
        for song in self._machine.state.playlist:
            if song.id == song_id:
                return song
        return None

    def select_song(self, song: Song) -> PlaybackState:
        return self._machine.select_song(song)

    def play_song(self, song: Song) -> PlaybackState:
        return self._machine.play_song(song)

    def play(self) -> PlaybackState:
        return self._machine.play()

    def pause(self) -> PlaybackState:
        return self._machine.pause()

    def toggle(self) -> PlaybackState:
        return self._machine.toggle()

    def next(self) -> PlaybackState:
        return self._machine.next()

    def prev(self) -> PlaybackState:
        return self._machine.prev()

    def set_volume(self, value: float) -> PlaybackState:
        return self._machine.set_volume(value)

    def toggle_mute(self) -> PlaybackState:
        return self._machine.toggle_mute()

    def toggle_repeat(self) -> PlaybackState:
        return self._machine.toggle_repeat()

    def toggle_shuffle(self) -> PlaybackState:
        return self._machine.toggle_shuffle()

    def seek(self, position: float) -> PlaybackState:
        return self.synchronizer.seek(position)

    async def shutdown(self) -> None:
        """Release the device. Safe to call more than once."""
        if self._synchronizer is None or self._synchronizer.is_closed:
            return
        self._synchronizer.close()
        await self._synchronizer.drain()
