"""Playback state machine: owns the current PlaybackState and applies actions to it."""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Callable, Iterable

from neon_player.domain.playback.actions import (
    DurationChanged,
    Ended,
    LoadPlaylist,
    NextSong,
    PlaybackAction,
    PlaybackRejected,
    PrevSong,
    Seek,
    SelectSong,
    SetPlaying,
    SetVolume,
    TimeUpdated,
    ToggleMute,
    TogglePlaying,
    ToggleRepeat,
    ToggleShuffle,
)
from neon_player.domain.playback.reducer import reduce
from neon_player.domain.playback.state import PlaybackState, Song
from neon_player.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

StateListener = Callable[[PlaybackState, PlaybackState], None]


class PlaybackStateMachine:
    """Single owner of playback state.

    Every operation is a synchronous, atomic transition through ``reduce``.
    Listeners are called with ``(previous, current)`` after the new state has
    been stored, and only when something actually changed. Actions dispatched
    from inside a listener are queued and applied once the current round of
    notifications has finished, so every listener sees transitions in order.
    """

    def __init__(
        self,
        initial: PlaybackState | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._state = initial or PlaybackState()
        self._rng = rng or random.Random()
        self._listeners: list[StateListener] = []
        self._pending: deque[PlaybackAction] = deque()
        self._dispatching = False

    @property
    def state(self) -> PlaybackState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: PlaybackAction) -> PlaybackState:
        self._pending.append(action)
        if self._dispatching:
            return self._state

        self._dispatching = True
        try:
            while self._pending:
                self._apply(self._pending.popleft())
        finally:
            self._dispatching = False
            self._pending.clear()
        return self._state

    def _apply(self, action: PlaybackAction) -> None:
        logger.debug(LogTemplates.PLAYBACK_ACTION, action)
        previous = self._state
        current = reduce(previous, action, self._rng)
        if current == previous:
            return

        self._state = current
        for listener in list(self._listeners):
            try:
                listener(previous, current)
            except Exception:
                logger.exception(LogTemplates.PLAYBACK_LISTENER_ERROR)

    # === User operations ===

    def load_playlist(self, songs: Iterable[Song]) -> PlaybackState:
        return self.dispatch(LoadPlaylist(songs=tuple(songs)))

    def select_song(self, song: Song) -> PlaybackState:
        return self.dispatch(SelectSong(song=song))

    def play_song(self, song: Song) -> PlaybackState:
        """Select ``song`` and start playing it."""
        return self.dispatch(SelectSong(song=song, play=True))

    def play(self) -> PlaybackState:
        return self.dispatch(SetPlaying(playing=True))

    def pause(self) -> PlaybackState:
        return self.dispatch(SetPlaying(playing=False))

    def toggle(self) -> PlaybackState:
        return self.dispatch(TogglePlaying())

    def next(self) -> PlaybackState:
        before = self._state.current_song
        state = self.dispatch(NextSong())
        logger.debug(LogTemplates.PLAYBACK_NAVIGATED, before, state.current_song)
        return state

    def prev(self) -> PlaybackState:
        before = self._state.current_song
        state = self.dispatch(PrevSong())
        logger.debug(LogTemplates.PLAYBACK_NAVIGATED, before, state.current_song)
        return state

    def set_volume(self, value: float) -> PlaybackState:
        return self.dispatch(SetVolume(value=value))

    def toggle_mute(self) -> PlaybackState:
        return self.dispatch(ToggleMute())

    def toggle_repeat(self) -> PlaybackState:
        return self.dispatch(ToggleRepeat())

    def toggle_shuffle(self) -> PlaybackState:
        return self.dispatch(ToggleShuffle())

    def seek(self, position: float) -> PlaybackState:
        return self.dispatch(Seek(position=position))

    # === Device callbacks ===

    def on_time_update(self, position: float) -> PlaybackState:
        return self.dispatch(TimeUpdated(position=position))

    def on_duration_change(self, duration: float) -> PlaybackState:
        return self.dispatch(DurationChanged(duration=duration))

    def on_ended(self) -> PlaybackState:
        state = self._state
        if state.current_song is None or not state.playlist:
            logger.debug(LogTemplates.PLAYBACK_ENDED_IDLE)
        elif state.repeat:
            logger.debug(LogTemplates.PLAYBACK_ENDED_REPEAT, state.current_song.title)
        return self.dispatch(Ended())

    def on_playback_rejected(self, error: BaseException | str) -> PlaybackState:
        return self.dispatch(PlaybackRejected(reason=str(error)))
