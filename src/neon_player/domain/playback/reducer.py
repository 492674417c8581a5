"""Pure playback transition function.

``reduce(state, action, rng)`` is the only place playlist, navigation,
volume and mute rules are applied. It never touches a device.
"""

from __future__ import annotations

import math
import random
from typing import Any

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
from neon_player.domain.playback.state import PlaybackState, Song
from neon_player.domain.shared.constants import PlaybackConstants
from neon_player.domain.shared.exceptions import InvalidOperationError


def clamp_volume(value: float) -> float:
    return max(PlaybackConstants.MIN_VOLUME, min(PlaybackConstants.MAX_VOLUME, value))


def _rebuild(state: PlaybackState, **changes: Any) -> PlaybackState:
    """Copy ``state`` with ``changes`` applied, re-running model validation."""
    data = {name: getattr(state, name) for name in PlaybackState.model_fields}
    data.update(changes)
    return PlaybackState(**data)


def _select(state: PlaybackState, song: Song, *, playing: bool | None = None) -> PlaybackState:
    changes: dict[str, Any] = {"current_song": song}
    if song != state.current_song:
        changes["current_time"] = 0.0
    if playing is not None:
        changes["is_playing"] = playing
    return _rebuild(state, **changes)


def navigate(state: PlaybackState, step: int, rng: random.Random) -> Song | None:
    """Pick the song ``step`` positions away, or a random other song when shuffling.

    Returns None when navigation is a no-op: nothing selected, empty playlist,
    or a shuffled playlist with no other candidate.
    """
    current = state.current_song
    if current is None or not state.playlist:
        return None

    if state.shuffle:
        candidates = [song for song in state.playlist if song.id != current.id]
        if not candidates:
            return None
        return rng.choice(candidates)

    index = state.index_of(current)
    if index is None:
        return None
    return state.playlist[(index + step) % len(state.playlist)]


def _load_playlist(state: PlaybackState, songs: tuple[Song, ...]) -> PlaybackState:
    current = state.current_song
    if not songs:
        return _rebuild(state, playlist=songs)

    if current is None:
        return _rebuild(state, playlist=songs, current_song=songs[0], current_time=0.0)

    replacement = next((song for song in songs if song.id == current.id), None)
    if replacement is None:
        # Current song vanished from the new list: fall back to the first entry, stopped.
        return _rebuild(
            state,
            playlist=songs,
            current_song=songs[0],
            current_time=0.0,
            is_playing=False,
        )
    return _select(_rebuild(state, playlist=songs), replacement)


def _ended(state: PlaybackState, rng: random.Random) -> PlaybackState:
    if state.current_song is None or not state.playlist:
        return _rebuild(state, is_playing=False)

    if state.repeat:
        return _rebuild(state, current_time=0.0, is_playing=True)

    target = navigate(state, 1, rng)
    if target is None or target == state.current_song:
        return _rebuild(state, current_time=0.0, is_playing=True)
    return _select(state, target, playing=True)


def reduce(state: PlaybackState, action: PlaybackAction, rng: random.Random) -> PlaybackState:
    """Apply ``action`` to ``state`` and return the resulting snapshot."""
    match action:
        case LoadPlaylist(songs=songs):
            return _load_playlist(state, tuple(songs))

        case SelectSong(song=song, play=play):
            if state.playlist and state.index_of(song) is None:
                raise InvalidOperationError(
                    operation=f"select song {song.id}",
                    current_state=f"playlist of {len(state.playlist)} songs",
                )
            return _select(state, song, playing=True if play else None)

        case SetPlaying(playing=playing):
            if playing and state.current_song is None:
                return state
            return _rebuild(state, is_playing=playing)

        case TogglePlaying():
            if not state.is_playing and state.current_song is None:
                return state
            return _rebuild(state, is_playing=not state.is_playing)

        case NextSong() | PrevSong():
            step = 1 if isinstance(action, NextSong) else -1
            target = navigate(state, step, rng)
            if target is None:
                return state
            return _select(state, target)

        case SetVolume(value=value):
            if math.isnan(value):
                return state
            changes: dict[str, Any] = {"volume": clamp_volume(value)}
            if value > 0 and state.is_muted:
                changes["is_muted"] = False
            return _rebuild(state, **changes)

        case ToggleMute():
            return _rebuild(state, is_muted=not state.is_muted)

        case ToggleRepeat():
            return _rebuild(state, repeat=not state.repeat)

        case ToggleShuffle():
            return _rebuild(state, shuffle=not state.shuffle)

        case Seek(position=position):
            position = max(0.0, position)
            if state.duration > 0:
                position = min(position, state.duration)
            return _rebuild(state, current_time=position)

        case TimeUpdated(position=position):
            return _rebuild(state, current_time=max(0.0, position))

        case DurationChanged(duration=duration):
            if not math.isfinite(duration) or duration < 0:
                duration = 0.0
            return _rebuild(state, duration=duration)

        case Ended():
            return _ended(state, rng)

        case PlaybackRejected():
            return _rebuild(state, is_playing=False)

    raise TypeError(f"Unsupported playback action: {action!r}")
