"""
Playback Bounded Context

Songs, the playback snapshot, the closed action set, the pure reducer and the
state machine that owns the current snapshot.
"""

from neon_player.domain.playback.reducer import navigate, reduce
from neon_player.domain.playback.state import PlaybackState, Song
from neon_player.domain.playback.state_machine import PlaybackStateMachine

__all__ = [
    "Song",
    "PlaybackState",
    "PlaybackStateMachine",
    "navigate",
    "reduce",
]
