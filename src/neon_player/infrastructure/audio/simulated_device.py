"""
Simulated Output Device

An in-process stand-in for a media element: it keeps a play head, advances
it on a timer while playing and emits the same events a real player would.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from neon_player.application.interfaces.output_device import (
    DeviceEvent,
    DeviceEventHandler,
    OutputDevice,
    Unsubscribe,
)
from neon_player.config.settings import DeviceSettings
from neon_player.domain.shared.exceptions import InvalidOperationError, PlaybackRejectedError
from neon_player.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class SimulatedOutputDevice(OutputDevice):
    """Output device driven by the event loop instead of an audio backend.

    Events are never delivered from inside the call that caused them: each
    one is queued with ``loop.call_soon`` and handlers see them in emission
    order.
    """

    def __init__(
        self,
        name: str,
        settings: DeviceSettings | None = None,
        *,
        durations: Mapping[str, float] | None = None,
        unplayable: Iterable[str] = (),
    ) -> None:
        """Initialize the device.

        Args:
            name: Label used in log lines.
            settings: Tick interval, autoplay policy and fallback duration.
            durations: Known media lengths in seconds keyed by URL.
            unplayable: URLs whose play requests are always refused.
        """
        self._name = name
        self._settings = settings or DeviceSettings()
        self._durations = dict(durations or {})
        self._unplayable = set(unplayable)

        self._source: str | None = None
        self._current_time = 0.0
        self._duration = 0.0
        self._volume = 1.0
        self._playing = False
        # Bumped by every pause/load/set_source so an overtaken play() is dropped.
        self._play_generation = 0
        self._tick_task: asyncio.Task[None] | None = None
        self._handlers: dict[DeviceEvent, list[DeviceEventHandler]] = {
            event: [] for event in DeviceEvent
        }

    @property
    def name(self) -> str:
        return self._name

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def current_time(self) -> float:
        return self._current_time

    @current_time.setter
    def current_time(self, value: float) -> None:
        upper = self._duration if self._duration > 0 else max(value, 0.0)
        self._current_time = min(max(value, 0.0), upper)
        self._emit(DeviceEvent.TIME_UPDATE)

    # === Commands ===

    def set_known_durations(self, durations: Mapping[str, float]) -> None:
        """Replace the URL -> length table consulted by ``load()``."""
        self._durations = dict(durations)

    def set_source(self, url: str | None) -> None:
        self._stop_ticking()
        self._source = url
        self._current_time = 0.0
        self._duration = 0.0
        logger.debug(LogTemplates.DEVICE_SOURCE, self._name, url)

    def load(self) -> None:
        self._stop_ticking()
        self._current_time = 0.0
        if self._source is None:
            return
        self._duration = self._durations.get(self._source, self._settings.default_duration)
        self._emit(DeviceEvent.DURATION_CHANGE)

    async def play(self) -> None:
        try:
            self._check_playable()
        except InvalidOperationError as e:
            raise PlaybackRejectedError(e.message) from e

        generation = self._play_generation
        # Yield once so callers always observe play() as a suspension point.
        await asyncio.sleep(0)
        if generation != self._play_generation:
            logger.debug(LogTemplates.DEVICE_PLAY_OVERTAKEN, self._name)
            return
        if self._playing:
            return

        if self._current_time >= self._duration > 0:
            self._current_time = 0.0
        self._playing = True
        self._tick_task = asyncio.create_task(self._tick())
        logger.debug(LogTemplates.DEVICE_PLAYING, self._name, self._source)

    def pause(self) -> None:
        if self._playing:
            logger.debug(LogTemplates.DEVICE_PAUSED, self._name)
        self._stop_ticking()

    def set_volume(self, level: float) -> None:
        self._volume = min(max(level, 0.0), 1.0)

    def subscribe(self, event: DeviceEvent, handler: DeviceEventHandler) -> Unsubscribe:
        handlers = self._handlers[event]
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    async def close(self) -> None:
        task = self._tick_task
        self._stop_ticking()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    # === Internals ===

    def _check_playable(self) -> None:
        if self._source is None:
            raise InvalidOperationError(
                operation="play",
                current_state="no source",
                message=ErrorMessages.DEVICE_NO_SOURCE,
            )
        if not self._settings.autoplay_allowed:
            raise InvalidOperationError(
                operation="play",
                current_state="autoplay blocked",
                message=ErrorMessages.DEVICE_AUTOPLAY_BLOCKED,
            )
        if self._source in self._unplayable:
            raise InvalidOperationError(
                operation="play",
                current_state="unplayable source",
                message=ErrorMessages.DEVICE_SOURCE_UNPLAYABLE.format(url=self._source),
            )

    def _stop_ticking(self) -> None:
        self._play_generation += 1
        self._playing = False
        if self._tick_task is not None:
            if self._tick_task is not asyncio.current_task():
                self._tick_task.cancel()
            self._tick_task = None

    async def _tick(self) -> None:
        interval = self._settings.tick_interval
        while self._playing:
            await asyncio.sleep(interval)
            if not self._playing:
                return
            self._current_time = min(self._current_time + interval, self._duration)
            self._emit(DeviceEvent.TIME_UPDATE)
            if self._current_time >= self._duration:
                logger.debug(LogTemplates.DEVICE_ENDED, self._name, self._source)
                self._playing = False
                self._tick_task = None
                self._emit(DeviceEvent.ENDED)
                return

    def _emit(self, event: DeviceEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet (construction-time wiring); deliver in place.
            self._dispatch(event)
            return
        loop.call_soon(self._dispatch, event)

    def _dispatch(self, event: DeviceEvent) -> None:
        for handler in list(self._handlers[event]):
            try:
                handler()
            except Exception:
                logger.exception(LogTemplates.DEVICE_HANDLER_ERROR, self._name, event.value)
