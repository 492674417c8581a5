"""
Unit Tests for the Playback Transition Function

Tests for:
- Playlist loading and current-song selection
- Sequential and shuffled navigation
- Volume clamping and mute interplay
- Seek / time / duration updates
- Song end handling with and without repeat
"""

import math
import random

import pytest

from neon_player.domain.playback.actions import (
    DurationChanged,
    Ended,
    LoadPlaylist,
    NextSong,
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
from neon_player.domain.playback.reducer import clamp_volume, navigate, reduce
from neon_player.domain.playback.state import PlaybackState, Song
from neon_player.domain.shared.exceptions import InvalidOperationError


@pytest.fixture
def loaded(songs, rng):
    """State with the sample playlist loaded and the first song selected."""
    return reduce(PlaybackState(), LoadPlaylist(songs=tuple(songs)), rng)


# =============================================================================
# Playlist Loading
# =============================================================================


class TestLoadPlaylist:
    """Tests for LoadPlaylist."""

    def test_selects_first_song_without_playing(self, loaded, songs):
        assert loaded.playlist == tuple(songs)
        assert loaded.current_song == songs[0]
        assert loaded.is_playing is False

    def test_keeps_current_song_when_still_present(self, loaded, songs, rng):
        state = reduce(loaded, SelectSong(song=songs[1], play=True), rng)
        reloaded = reduce(state, LoadPlaylist(songs=tuple(reversed(songs))), rng)

        assert reloaded.current_song == songs[1]
        assert reloaded.is_playing is True

    def test_picks_up_new_metadata_for_current_song(self, loaded, songs, rng):
        updated = songs[0].model_copy(update={"audio_src": "https://audio.test/new.mp3"})
        reloaded = reduce(loaded, LoadPlaylist(songs=(updated, *songs[1:])), rng)

        assert reloaded.current_song.audio_src == "https://audio.test/new.mp3"
        assert reloaded.song_changed_from(loaded)

    def test_missing_current_song_falls_back_to_first_and_stops(
        self, loaded, songs, song_factory, rng
    ):
        playing = reduce(loaded, SetPlaying(playing=True), rng)
        replacement = song_factory(2, start=10)

        state = reduce(playing, LoadPlaylist(songs=tuple(replacement)), rng)

        assert state.current_song == replacement[0]
        assert state.is_playing is False
        assert state.current_time == 0.0

    def test_empty_playlist_keeps_selection(self, loaded, songs, rng):
        state = reduce(loaded, LoadPlaylist(songs=()), rng)

        assert state.playlist == ()
        assert state.current_song == songs[0]

    def test_duplicate_ids_rejected(self, songs, rng):
        with pytest.raises(ValueError):
            reduce(PlaybackState(), LoadPlaylist(songs=(songs[0], songs[0])), rng)


# =============================================================================
# Navigation
# =============================================================================


class TestNavigation:
    """Tests for NextSong / PrevSong."""

    def test_next_n_times_returns_to_start(self, song_factory, rng):
        playlist = song_factory(5)
        start = reduce(PlaybackState(), LoadPlaylist(songs=tuple(playlist)), rng)

        state = start
        for _ in range(len(playlist)):
            state = reduce(state, NextSong(), rng)

        assert state.current_song == start.current_song

    def test_prev_wraps_to_last(self, loaded, songs, rng):
        state = reduce(loaded, PrevSong(), rng)

        assert state.current_song == songs[-1]

    def test_navigation_resets_position(self, loaded, songs, rng):
        state = reduce(loaded, TimeUpdated(position=42.0), rng)
        state = reduce(state, NextSong(), rng)

        assert state.current_song == songs[1]
        assert state.current_time == 0.0

    def test_navigation_keeps_play_flag(self, loaded, rng):
        playing = reduce(loaded, SetPlaying(playing=True), rng)

        assert reduce(playing, NextSong(), rng).is_playing is True
        assert reduce(loaded, NextSong(), rng).is_playing is False

    def test_shuffle_never_repeats_current(self, song_factory):
        rng = random.Random(7)
        state = reduce(PlaybackState(), LoadPlaylist(songs=tuple(song_factory(4))), rng)
        state = reduce(state, ToggleShuffle(), rng)

        for _ in range(100):
            before = state.current_song
            state = reduce(state, NextSong(), rng)
            assert state.current_song != before

    def test_shuffle_single_song_is_noop(self, song_factory, rng):
        state = reduce(PlaybackState(), LoadPlaylist(songs=tuple(song_factory(1))), rng)
        state = reduce(state, ToggleShuffle(), rng)

        assert reduce(state, NextSong(), rng) == state
        assert reduce(state, PrevSong(), rng) == state

    def test_navigate_without_selection_returns_none(self, rng):
        assert navigate(PlaybackState(), 1, rng) is None


# =============================================================================
# Volume and Mute
# =============================================================================


class TestVolume:
    """Tests for SetVolume / ToggleMute."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(-0.5, 0.0), (0.0, 0.0), (0.4, 0.4), (1.0, 1.0), (1.5, 1.0)],
    )
    def test_volume_clamped(self, value, expected, rng):
        state = reduce(PlaybackState(), SetVolume(value=value), rng)

        assert state.volume == expected
        assert clamp_volume(value) == expected

    def test_positive_volume_unmutes(self, rng):
        muted = reduce(PlaybackState(), ToggleMute(), rng)
        state = reduce(muted, SetVolume(value=0.3), rng)

        assert state.is_muted is False
        assert state.volume == 0.3

    def test_zero_volume_keeps_mute(self, rng):
        muted = reduce(PlaybackState(), ToggleMute(), rng)

        assert reduce(muted, SetVolume(value=0), rng).is_muted is True

    def test_nan_volume_is_ignored(self, rng):
        state = PlaybackState(volume=0.6)

        assert reduce(state, SetVolume(value=float("nan")), rng) is state

    def test_output_level_is_zero_when_muted(self, rng):
        state = reduce(PlaybackState(volume=0.8), ToggleMute(), rng)

        assert state.volume == 0.8
        assert state.output_level == 0.0


# =============================================================================
# Transport
# =============================================================================


class TestTransport:
    """Tests for play / pause / select / seek."""

    def test_play_without_song_is_noop(self, rng):
        state = PlaybackState()

        assert reduce(state, SetPlaying(playing=True), rng) is state
        assert reduce(state, TogglePlaying(), rng) is state

    def test_toggle_flips_play_flag(self, loaded, rng):
        playing = reduce(loaded, TogglePlaying(), rng)

        assert playing.is_playing is True
        assert reduce(playing, TogglePlaying(), rng).is_playing is False

    def test_select_foreign_song_raises(self, loaded, rng):
        stranger = Song(id=99, title="Stranger", audio_src="https://audio.test/99.mp3")

        with pytest.raises(InvalidOperationError):
            reduce(loaded, SelectSong(song=stranger), rng)

    def test_select_and_play(self, loaded, songs, rng):
        state = reduce(loaded, SelectSong(song=songs[2], play=True), rng)

        assert state.current_song == songs[2]
        assert state.is_playing is True

    def test_seek_clamped_to_duration(self, loaded, rng):
        state = reduce(loaded, DurationChanged(duration=100.0), rng)

        assert reduce(state, Seek(position=150.0), rng).current_time == 100.0
        assert reduce(state, Seek(position=-5.0), rng).current_time == 0.0
        assert reduce(state, Seek(position=30.0), rng).current_time == 30.0

    @pytest.mark.parametrize("duration", [math.nan, math.inf, -3.0])
    def test_invalid_duration_becomes_zero(self, loaded, duration, rng):
        assert reduce(loaded, DurationChanged(duration=duration), rng).duration == 0.0

    def test_rejection_stops_playback(self, loaded, rng):
        playing = reduce(loaded, SetPlaying(playing=True), rng)

        assert reduce(playing, PlaybackRejected(reason="blocked"), rng).is_playing is False

    def test_unknown_action_raises_type_error(self, rng):
        with pytest.raises(TypeError):
            reduce(PlaybackState(), object(), rng)  # type: ignore[arg-type]


# =============================================================================
# Song End
# =============================================================================


class TestEnded:
    """Tests for Ended."""

    def test_repeat_restarts_same_song(self, loaded, songs, rng):
        state = reduce(loaded, SetPlaying(playing=True), rng)
        state = reduce(state, TimeUpdated(position=119.0), rng)
        state = reduce(reduce(state, ToggleRepeat(), rng), Ended(), rng)

        assert state.current_song == songs[0]
        assert state.current_time == 0.0
        assert state.is_playing is True

    def test_advances_to_next_song(self, loaded, songs, rng):
        state = reduce(reduce(loaded, SetPlaying(playing=True), rng), Ended(), rng)

        assert state.current_song == songs[1]
        assert state.is_playing is True
        assert state.current_time == 0.0

    def test_last_song_wraps_to_first(self, loaded, songs, rng):
        state = reduce(loaded, SelectSong(song=songs[-1], play=True), rng)

        assert reduce(state, Ended(), rng).current_song == songs[0]

    def test_single_song_restarts(self, song_factory, rng):
        state = reduce(PlaybackState(), LoadPlaylist(songs=tuple(song_factory(1))), rng)
        state = reduce(reduce(state, TimeUpdated(position=50.0), rng), Ended(), rng)

        assert state.current_time == 0.0
        assert state.is_playing is True

    def test_nothing_to_play_stops(self, rng):
        state = reduce(PlaybackState(), Ended(), rng)

        assert state.is_playing is False
        assert state.current_song is None
