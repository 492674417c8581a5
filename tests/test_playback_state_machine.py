"""
Unit Tests for PlaybackStateMachine

Tests for:
- Listener notification with (previous, current)
- Suppressed notifications for no-op transitions
- Re-entrant dispatch ordering
- Listener failure isolation
"""

import logging

import pytest

from neon_player.domain.playback.state import PlaybackState
from neon_player.domain.playback.state_machine import PlaybackStateMachine


@pytest.fixture
def machine(songs, rng):
    """State machine with the sample playlist loaded."""
    m = PlaybackStateMachine(rng=rng)
    m.load_playlist(songs)
    return m


class TestListeners:
    """Tests for subscribe / notification."""

    def test_listener_receives_previous_and_current(self, machine):
        seen = []
        machine.subscribe(lambda prev, cur: seen.append((prev.is_playing, cur.is_playing)))

        machine.play()

        assert seen == [(False, True)]

    def test_no_notification_when_nothing_changes(self, machine):
        seen = []
        machine.subscribe(lambda prev, cur: seen.append(cur))

        machine.pause()
        machine.set_volume(machine.state.volume)

        assert seen == []

    def test_unsubscribe_stops_notifications(self, machine):
        seen = []
        unsubscribe = machine.subscribe(lambda prev, cur: seen.append(cur))

        unsubscribe()
        unsubscribe()
        machine.play()

        assert seen == []

    def test_failing_listener_does_not_block_others(self, machine, caplog):
        seen = []

        def broken(prev, cur):
            raise RuntimeError("boom")

        machine.subscribe(broken)
        machine.subscribe(lambda prev, cur: seen.append(cur.is_playing))

        with caplog.at_level(logging.ERROR):
            state = machine.play()

        assert state.is_playing is True
        assert seen == [True]
        assert "Error in playback state listener" in caplog.text

    def test_listener_sees_stored_state(self, machine):
        observed = []
        machine.subscribe(lambda prev, cur: observed.append(machine.state is cur))

        machine.next()

        assert observed == [True]


class TestReentrantDispatch:
    """Tests for actions dispatched from inside a listener."""

    def test_nested_action_applied_after_current_round(self, machine):
        order = []

        def enable_repeat_on_play(prev, cur):
            if cur.is_playing and not prev.is_playing:
                machine.toggle_repeat()

        machine.subscribe(enable_repeat_on_play)
        machine.subscribe(
            lambda prev, cur: order.append((cur.is_playing, cur.repeat))
        )

        final = machine.play()

        assert order == [(True, False), (True, True)]
        assert final.repeat is True


class TestOperations:
    """Tests for the convenience operations."""

    def test_play_song_selects_and_plays(self, machine, songs):
        state = machine.play_song(songs[2])

        assert state.current_song == songs[2]
        assert state.is_playing is True

    def test_select_song_keeps_play_flag(self, machine, songs):
        machine.play()

        assert machine.select_song(songs[1]).is_playing is True

    def test_on_playback_rejected_accepts_exception(self, machine):
        machine.play()

        state = machine.on_playback_rejected(RuntimeError("autoplay"))

        assert state.is_playing is False

    def test_repeat_end_keeps_song(self, machine, songs):
        machine.play()
        machine.on_time_update(100.0)
        machine.toggle_repeat()

        state = machine.on_ended()

        assert state.current_song == songs[0]
        assert state.current_time == 0.0

    def test_initial_state_is_respected(self):
        machine = PlaybackStateMachine(PlaybackState(volume=0.2))

        assert machine.state.volume == 0.2
        assert machine.state.current_song is None
