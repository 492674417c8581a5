"""Device Synchronizer - keeps an OutputDevice in step with the playback state machine."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ...application.interfaces.notification_sink import NotificationKind
from ...application.interfaces.output_device import DeviceEvent
from ...domain.shared.exceptions import PlaybackRejectedError
from ...domain.shared.messages import LogTemplates, NotificationTexts

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...domain.playback.state import PlaybackState, Song
    from ...domain.playback.state_machine import PlaybackStateMachine
    from ..interfaces.notification_sink import NotificationSink
    from ..interfaces.output_device import OutputDevice

logger = logging.getLogger(__name__)


class DeviceSynchronizer:
    """Bidirectional glue between a PlaybackStateMachine and one OutputDevice.

    State -> device: song changes re-bind and reload the source, ``is_playing``
    transitions issue play/pause, volume and mute drive the output level.

    Device -> state: ``TIME_UPDATE``, ``DURATION_CHANGE`` and ``ENDED`` are
    forwarded to the state machine in the order the device emits them.

    Handlers are registered on construction and released by ``close()``,
    which is also what leaving the ``with`` block does.
    """

    def __init__(
        self,
        *,
        state_machine: PlaybackStateMachine,
        device: OutputDevice,
        notifier: NotificationSink,
    ) -> None:
        self._machine = state_machine
        self._device = device
        self._notifier = notifier

        self._closed = False
        self._request_seq = 0
        self._play_tasks: set[asyncio.Task[None]] = set()

        self._unsubscribers: list[Callable[[], None]] = [
            device.subscribe(DeviceEvent.TIME_UPDATE, self._on_time_update),
            device.subscribe(DeviceEvent.DURATION_CHANGE, self._on_duration_change),
            device.subscribe(DeviceEvent.ENDED, self._on_ended),
            state_machine.subscribe(self._on_state_change),
        ]

        state = state_machine.state
        device.set_volume(state.output_level)
        if state.current_song is not None:
            self._bind_song(
                state.current_song,
                state.is_playing,
                NotificationTexts.PLAYBACK_FAILED_NEW_SONG_BODY,
            )

    def __enter__(self) -> DeviceSynchronizer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def pending_requests(self) -> int:
        return len(self._play_tasks)

    # === State -> device ===

    def _on_state_change(self, previous: PlaybackState, current: PlaybackState) -> None:
        if self._closed:
            return

        if current.song_changed_from(previous):
            if current.current_song is None:
                self._pause()
                self._device.set_source(None)
            else:
                self._bind_song(
                    current.current_song,
                    current.is_playing,
                    NotificationTexts.PLAYBACK_FAILED_NEW_SONG_BODY,
                )
        elif current.is_playing != previous.is_playing:
            if current.is_playing:
                self._request_play(NotificationTexts.PLAYBACK_FAILED_RESUME_BODY)
            else:
                self._pause()

        if current.output_level != previous.output_level:
            self._device.set_volume(current.output_level)
            logger.debug(LogTemplates.SYNC_VOLUME, current.output_level)

    def _bind_song(self, song: Song, playing: bool, failure_body: str) -> None:
        self._device.set_source(song.audio_src)
        self._device.load()
        logger.debug(LogTemplates.SYNC_SOURCE_CHANGED, song.audio_src)
        if playing:
            self._request_play(failure_body)
        else:
            # Invalidate any play request still in flight for the previous source.
            self._request_seq += 1

    def _pause(self) -> None:
        self._request_seq += 1
        self._device.pause()
        logger.debug(LogTemplates.SYNC_PAUSED)

    def _request_play(self, failure_body: str) -> None:
        self._request_seq += 1
        request_id = self._request_seq
        logger.debug(LogTemplates.SYNC_PLAY_REQUESTED, request_id)

        task = asyncio.create_task(self._play(request_id, failure_body))
        self._play_tasks.add(task)
        task.add_done_callback(self._play_tasks.discard)

    async def _play(self, request_id: int, failure_body: str) -> None:
        try:
            await self._device.play()
        except PlaybackRejectedError as e:
            self._handle_rejection(request_id, e.reason, failure_body)
        except Exception as e:
            logger.exception(LogTemplates.SYNC_DEVICE_ERROR, request_id)
            self._handle_rejection(request_id, str(e), failure_body)
        else:
            self._handle_success(request_id)

    def _handle_success(self, request_id: int) -> None:
        # A pause (or teardown) that landed while play() was pending wins.
        if self._closed or not self._machine.state.is_playing:
            logger.debug(LogTemplates.SYNC_STALE_SUCCESS, request_id)
            self._device.pause()
            return
        logger.debug(LogTemplates.SYNC_PLAY_STARTED, request_id)

    def _handle_rejection(self, request_id: int, reason: str, failure_body: str) -> None:
        if self._closed or request_id != self._request_seq:
            logger.debug(LogTemplates.SYNC_STALE_REJECTION, request_id)
            return

        logger.warning(LogTemplates.SYNC_PLAY_REJECTED, request_id, reason)
        self._machine.on_playback_rejected(reason)
        self._notifier.notify(
            NotificationKind.ERROR,
            NotificationTexts.PLAYBACK_FAILED_TITLE,
            failure_body,
        )

    # === Device -> state ===

    def _on_time_update(self) -> None:
        self._machine.on_time_update(self._device.current_time)

    def _on_duration_change(self) -> None:
        self._machine.on_duration_change(self._device.duration)

    def _on_ended(self) -> None:
        before = self._machine.state
        after = self._machine.on_ended()

        # Same song still playing (repeat, or a one-song playlist wrapping):
        # the device sits at the end of the media, so rewind and play again.
        restarted = (
            after.current_song is not None
            and after.is_playing
            and not after.song_changed_from(before)
        )
        if restarted:
            self._device.current_time = 0.0
            if before.is_playing:
                self._request_play(NotificationTexts.PLAYBACK_FAILED_RESUME_BODY)

    # === Commands that need both sides ===

    def seek(self, position: float) -> PlaybackState:
        state = self._machine.seek(position)
        self._device.current_time = state.current_time
        return state

    async def drain(self) -> None:
        """Wait for every outstanding play request to settle."""
        while self._play_tasks:
            await asyncio.gather(*list(self._play_tasks), return_exceptions=True)

    def close(self) -> None:
        """Pause the device, detach its source and drop every subscription. Idempotent."""
        if self._closed:
            return
        self._closed = True

        for task in list(self._play_tasks):
            task.cancel()

        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

        self._device.pause()
        self._device.set_source(None)
        logger.info(LogTemplates.SYNC_CLOSED)
