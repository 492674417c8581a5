"""
Playback Actions

The closed set of transitions the playback reducer understands. User
operations and device callbacks are both expressed as one of these.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Song


@dataclass(frozen=True)
class LoadPlaylist:
    songs: tuple[Song, ...]


@dataclass(frozen=True)
class SelectSong:
    song: Song
    play: bool = False


@dataclass(frozen=True)
class SetPlaying:
    playing: bool


@dataclass(frozen=True)
class TogglePlaying:
    pass


@dataclass(frozen=True)
class NextSong:
    pass


@dataclass(frozen=True)
class PrevSong:
    pass


@dataclass(frozen=True)
class SetVolume:
    value: float


@dataclass(frozen=True)
class ToggleMute:
    pass


@dataclass(frozen=True)
class ToggleRepeat:
    pass


@dataclass(frozen=True)
class ToggleShuffle:
    pass


@dataclass(frozen=True)
class Seek:
    position: float


@dataclass(frozen=True)
class TimeUpdated:
    position: float


@dataclass(frozen=True)
class DurationChanged:
    duration: float


@dataclass(frozen=True)
class Ended:
    pass


@dataclass(frozen=True)
class PlaybackRejected:
    reason: str


PlaybackAction = (
    LoadPlaylist
    | SelectSong
    | SetPlaying
    | TogglePlaying
    | NextSong
    | PrevSong
    | SetVolume
    | ToggleMute
    | ToggleRepeat
    | ToggleShuffle
    | Seek
    | TimeUpdated
    | DurationChanged
    | Ended
    | PlaybackRejected
)
