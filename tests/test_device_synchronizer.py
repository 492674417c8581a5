"""
Unit Tests for DeviceSynchronizer

Tests for:
- Binding songs to the device and issuing play / pause
- Rejected play requests reverting state (latest request only)
- Device events flowing back into the state machine
- Seek, volume and mute propagation
- Teardown releasing every subscription
"""

import asyncio
import logging

import pytest

from neon_player.application.interfaces.notification_sink import NotificationKind
from neon_player.application.interfaces.output_device import DeviceEvent
from neon_player.application.services.device_synchronizer import DeviceSynchronizer
from neon_player.domain.playback.state_machine import PlaybackStateMachine
from neon_player.domain.shared.exceptions import PlaybackRejectedError
from neon_player.domain.shared.messages import NotificationTexts


@pytest.fixture
def machine(songs, rng):
    m = PlaybackStateMachine(rng=rng)
    m.load_playlist(songs)
    return m


@pytest.fixture
def sync(machine, fake_device, notifier):
    synchronizer = DeviceSynchronizer(state_machine=machine, device=fake_device, notifier=notifier)
    yield synchronizer
    synchronizer.close()


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Tests for initial binding."""

    def test_binds_current_song_and_volume(self, sync, fake_device, machine, songs):
        assert fake_device.source == songs[0].audio_src
        assert ("set_volume", machine.state.output_level) in fake_device.calls
        assert "load" in fake_device.names()
        assert "play" not in fake_device.names()

    def test_registers_three_device_handlers(self, sync, fake_device):
        assert fake_device.handler_count() == 3


# =============================================================================
# State -> Device
# =============================================================================


class TestStateToDevice:
    """Tests for state changes driving the device."""

    @pytest.mark.asyncio
    async def test_play_song_binds_and_plays(self, sync, fake_device, machine, songs):
        machine.play_song(songs[1])
        await sync.drain()

        assert fake_device.source == songs[1].audio_src
        assert fake_device.playing is True
        assert machine.state.is_playing is True

    @pytest.mark.asyncio
    async def test_pause_pauses_device(self, sync, fake_device, machine):
        machine.play()
        await sync.drain()

        machine.pause()

        assert fake_device.playing is False
        assert fake_device.names()[-1] == "pause"

    @pytest.mark.asyncio
    async def test_pause_in_same_tick_as_play_leaves_device_paused(
        self, sync, fake_device, machine
    ):
        machine.play()
        machine.pause()
        await sync.drain()

        assert machine.state.is_playing is False
        assert fake_device.playing is False
        assert fake_device.names()[-2:] == ["play", "pause"]

    @pytest.mark.asyncio
    async def test_late_success_for_playing_state_is_kept(self, sync, fake_device, machine):
        fake_device.gate = asyncio.Event()
        machine.play()
        await asyncio.sleep(0)

        fake_device.gate.set()
        await sync.drain()

        assert machine.state.is_playing is True
        assert fake_device.playing is True

    @pytest.mark.asyncio
    async def test_navigation_while_paused_does_not_play(self, sync, fake_device, machine, songs):
        machine.next()
        await sync.drain()

        assert fake_device.source == songs[1].audio_src
        assert "play" not in fake_device.names()

    def test_volume_and_mute_drive_output_level(self, sync, fake_device, machine):
        machine.set_volume(0.4)
        assert fake_device.volume == 0.4

        machine.toggle_mute()
        assert fake_device.volume == 0.0

        machine.set_volume(0.6)
        assert fake_device.volume == 0.6

    def test_seek_moves_device_play_head(self, sync, fake_device, machine):
        machine.on_duration_change(100.0)

        state = sync.seek(250.0)

        assert state.current_time == 100.0
        assert fake_device.calls[-1] == ("seek", 100.0)


# =============================================================================
# Rejections
# =============================================================================


class TestPlaybackRejection:
    """Tests for refused play requests."""

    @pytest.mark.asyncio
    async def test_rejection_reverts_and_notifies(self, sync, fake_device, machine, notifier):
        fake_device.reject_with = PlaybackRejectedError("autoplay blocked")

        machine.play()
        await sync.drain()

        assert machine.state.is_playing is False
        last = notifier.history[-1]
        assert last.kind is NotificationKind.ERROR
        assert last.title == NotificationTexts.PLAYBACK_FAILED_TITLE
        assert last.body == NotificationTexts.PLAYBACK_FAILED_RESUME_BODY

    @pytest.mark.asyncio
    async def test_rejection_for_new_song_uses_new_song_text(
        self, sync, fake_device, machine, songs, notifier
    ):
        fake_device.reject_with = PlaybackRejectedError("unsupported")

        machine.play_song(songs[2])
        await sync.drain()

        assert machine.state.current_song == songs[2]
        assert machine.state.is_playing is False
        assert notifier.history[-1].body == NotificationTexts.PLAYBACK_FAILED_NEW_SONG_BODY

    @pytest.mark.asyncio
    async def test_stale_rejection_is_ignored(self, sync, fake_device, machine, songs, notifier):
        fake_device.gate = asyncio.Event()
        fake_device.reject_sources = {songs[0].audio_src}

        machine.play_song(songs[0])
        await asyncio.sleep(0)
        machine.play_song(songs[1])
        await asyncio.sleep(0)
        assert sync.pending_requests == 2

        fake_device.gate.set()
        await sync.drain()

        assert machine.state.current_song == songs[1]
        assert machine.state.is_playing is True
        assert notifier.history == []

    @pytest.mark.asyncio
    async def test_unexpected_device_error_is_treated_as_rejection(
        self, sync, fake_device, machine, caplog
    ):
        fake_device.reject_with = RuntimeError("device exploded")

        with caplog.at_level(logging.ERROR):
            machine.play()
            await sync.drain()

        assert machine.state.is_playing is False
        assert "Unexpected error from output device" in caplog.text


# =============================================================================
# Device -> State
# =============================================================================


class TestDeviceToState:
    """Tests for device events."""

    def test_time_and_duration_forwarded(self, sync, fake_device, machine):
        fake_device.duration = 200.0
        fake_device.emit(DeviceEvent.DURATION_CHANGE)
        fake_device.advance(12.5)
        fake_device.emit(DeviceEvent.TIME_UPDATE)

        assert machine.state.duration == 200.0
        assert machine.state.current_time == 12.5

    @pytest.mark.asyncio
    async def test_ended_advances_and_plays_next(self, sync, fake_device, machine, songs):
        machine.play()
        await sync.drain()

        fake_device.emit(DeviceEvent.ENDED)
        await sync.drain()

        assert machine.state.current_song == songs[1]
        assert fake_device.source == songs[1].audio_src
        assert fake_device.playing is True

    @pytest.mark.asyncio
    async def test_ended_with_repeat_rewinds_device(self, sync, fake_device, machine, songs):
        machine.toggle_repeat()
        machine.play()
        await sync.drain()
        fake_device.advance(120.0)
        plays_before = fake_device.names().count("play")

        fake_device.emit(DeviceEvent.ENDED)
        await sync.drain()

        assert machine.state.current_song == songs[0]
        assert machine.state.current_time == 0.0
        assert ("seek", 0.0) in fake_device.calls
        assert fake_device.names().count("play") == plays_before + 1


# =============================================================================
# Teardown
# =============================================================================


class TestClose:
    """Tests for close / context manager."""

    def test_close_releases_everything(self, machine, fake_device, notifier):
        sync = DeviceSynchronizer(state_machine=machine, device=fake_device, notifier=notifier)

        sync.close()

        assert sync.is_closed
        assert fake_device.handler_count() == 0
        assert fake_device.source is None
        assert fake_device.names()[-2:] == ["pause", "set_source"]

    def test_close_is_idempotent(self, machine, fake_device, notifier):
        sync = DeviceSynchronizer(state_machine=machine, device=fake_device, notifier=notifier)
        sync.close()
        calls = list(fake_device.calls)

        sync.close()

        assert fake_device.calls == calls

    def test_state_changes_after_close_do_not_reach_device(self, machine, fake_device, notifier):
        with DeviceSynchronizer(state_machine=machine, device=fake_device, notifier=notifier):
            pass
        calls = list(fake_device.calls)

        machine.next()
        machine.set_volume(0.1)

        assert fake_device.calls == calls

    @pytest.mark.asyncio
    async def test_close_cancels_pending_requests(self, machine, fake_device, notifier):
        fake_device.gate = asyncio.Event()
        sync = DeviceSynchronizer(state_machine=machine, device=fake_device, notifier=notifier)
        machine.play()
        await asyncio.sleep(0)

        sync.close()
        await sync.drain()

        assert sync.pending_requests == 0
        assert notifier.history == []
