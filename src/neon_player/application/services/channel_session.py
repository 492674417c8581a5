"""Channel Session - live channel connection, stream output and chat feed."""

from __future__ import annotations

import asyncio
import logging
import math
import random
from typing import TYPE_CHECKING

from ...domain.shared.constants import StreamingConstants
from ...domain.shared.exceptions import PlaybackRejectedError
from ...domain.shared.messages import ChatTexts, LogTemplates, NotificationTexts
from ...domain.streaming.catalog import CHAT_COLORS, SIMULATED_MESSAGES, SIMULATED_USERNAMES
from ...domain.streaming.entities import (
    ChatMessage,
    StreamingSessionState,
    append_to_feed,
)
from ..interfaces.notification_sink import NotificationKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...domain.streaming.entities import Channel
    from ..interfaces.notification_sink import NotificationSink
    from ..interfaces.output_device import OutputDevice

logger = logging.getLogger(__name__)


class ChannelSession:
    """One live-channel session at a time, over Idle / Connected / Streaming.

    While connected a single cancellable timer injects simulated chat at a
    random interval. The timer needs a running event loop, so ``connect()``
    must be called from inside one.
    """

    def __init__(
        self,
        *,
        device: OutputDevice,
        notifier: NotificationSink,
        default_volume: float = StreamingConstants.DEFAULT_VOLUME,
        chat_min_delay: float = StreamingConstants.CHAT_MIN_DELAY_SECONDS,
        chat_max_delay: float = StreamingConstants.CHAT_MAX_DELAY_SECONDS,
        max_chat_messages: int = StreamingConstants.MAX_CHAT_MESSAGES,
        rng: random.Random | None = None,
    ) -> None:
        self._device = device
        self._notifier = notifier
        self._min_delay = chat_min_delay
        self._max_delay = chat_max_delay
        self._max_messages = max_chat_messages
        self._rng = rng or random.Random()

        self._state = StreamingSessionState(volume=default_volume)
        self._timer: asyncio.TimerHandle | None = None
        # Bumped on every connect/stop/disconnect so late play results are ignored.
        self._generation = 0
        self._pending_starts = 0
        self._listeners: list[Callable[[StreamingSessionState], None]] = []

        self._device.set_volume(self._state.output_level)

    @property
    def state(self) -> StreamingSessionState:
        return self._state

    @property
    def timer_armed(self) -> bool:
        return self._timer is not None

    def subscribe(
        self, listener: Callable[[StreamingSessionState], None]
    ) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes: object) -> StreamingSessionState:
        previous = self._state
        data = {name: getattr(previous, name) for name in StreamingSessionState.model_fields}
        data.update(changes)
        self._state = StreamingSessionState(**data)
        if self._state.output_level != previous.output_level:
            self._device.set_volume(self._state.output_level)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception(LogTemplates.PLAYBACK_LISTENER_ERROR)
        return self._state

    # === Connection lifecycle ===

    def connect(self, channel: Channel) -> StreamingSessionState:
        """Tear down any active session, then bind ``channel`` and arm the chat timer."""
        if self._state.is_connected:
            self._teardown()

        self._generation += 1
        self._device.set_source(channel.stream_url)
        self._device.load()

        greeting = ChatMessage.system(ChatTexts.CONNECTED.format(channel=channel.name))
        state = self._update(
            current_channel=channel,
            is_connected=True,
            is_streaming=False,
            chat_messages=(greeting,),
        )
        logger.info(LogTemplates.CHANNEL_CONNECTED, channel.id)
        self._arm_timer()
        return state

    async def start(self) -> bool:
        """Request stream playback. Returns whether the session is now streaming.

        A ``stop()``, ``connect()`` or ``disconnect()`` issued while the request
        is pending wins over its late result.
        """
        channel = self._state.current_channel
        if channel is None:
            return False
        if self._state.is_streaming:
            return True

        generation = self._generation
        self._pending_starts += 1
        try:
            await self._device.play()
        except PlaybackRejectedError as e:
            if generation != self._generation:
                return False
            logger.warning(LogTemplates.CHANNEL_STREAM_FAILED, channel.id, e.reason)
            self._update(is_streaming=False)
            self._notifier.notify(
                NotificationKind.ERROR,
                NotificationTexts.STREAM_FAILED_TITLE,
                NotificationTexts.STREAM_FAILED_BODY.format(channel=channel.name),
            )
            return False
        finally:
            self._pending_starts -= 1

        if generation != self._generation:
            logger.debug(LogTemplates.CHANNEL_STALE_START, channel.id)
            if not self._state.is_streaming and self._pending_starts == 0:
                self._device.pause()
            return False
        self._update(is_streaming=True)
        logger.info(LogTemplates.CHANNEL_STREAM_STARTED, channel.id)
        return True

    def stop(self) -> StreamingSessionState:
        self._generation += 1
        self._device.pause()
        if self._state.is_streaming and self._state.current_channel is not None:
            logger.info(LogTemplates.CHANNEL_STREAM_STOPPED, self._state.current_channel.id)
        return self._update(is_streaming=False)

    def disconnect(self) -> StreamingSessionState:
        """Return to idle. Volume and mute survive. Idempotent."""
        if not self._state.is_connected and self._timer is None:
            return self._state
        self._teardown()
        return self._state

    def close(self) -> None:
        self.disconnect()

    def _teardown(self) -> None:
        self._generation += 1
        self._cancel_timer()
        self._device.pause()
        self._device.set_source(None)

        channel = self._state.current_channel
        self._update(
            current_channel=None,
            is_connected=False,
            is_streaming=False,
            chat_messages=(),
        )
        if channel is not None:
            logger.info(LogTemplates.CHANNEL_DISCONNECTED, channel.id)

    # === Output level ===

    def set_volume(self, value: float) -> StreamingSessionState:
        if math.isnan(value):
            return self._state
        volume = min(max(value, StreamingConstants.MIN_VOLUME), StreamingConstants.MAX_VOLUME)
        changes: dict[str, object] = {"volume": volume}
        if volume > 0:
            changes["is_muted"] = False
        return self._update(**changes)

    def toggle_mute(self) -> StreamingSessionState:
        return self._update(is_muted=not self._state.is_muted)

    # === Chat feed ===

    def _append(self, message: ChatMessage) -> StreamingSessionState:
        return self._update(
            chat_messages=append_to_feed(self._state.chat_messages, message, self._max_messages)
        )

    def send_chat_message(
        self,
        text: str,
        username: str = ChatTexts.ANONYMOUS_USERNAME,
        color: str | None = None,
    ) -> ChatMessage | None:
        """Append a user message. Ignored while disconnected or when ``text`` is blank."""
        text = text.strip()
        if not self._state.is_connected or not text:
            return None

        message = ChatMessage(
            username=(username.strip() or ChatTexts.ANONYMOUS_USERNAME).upper(),
            message=text,
            color=color,
        )
        self._append(message)
        return message

    def add_system_message(self, text: str) -> ChatMessage:
        message = ChatMessage.system(text)
        self._append(message)
        return message

    def clear_chat(self) -> StreamingSessionState:
        return self._update(chat_messages=())

    # === Background chat ===

    def _arm_timer(self) -> None:
        if not self._state.is_connected:
            return
        loop = asyncio.get_running_loop()
        delay = self._rng.uniform(self._min_delay, self._max_delay)
        self._timer = loop.call_later(delay, self._on_timer)
        logger.debug(LogTemplates.CHANNEL_TIMER_ARMED, delay)

    def _cancel_timer(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        logger.debug(LogTemplates.CHANNEL_TIMER_CANCELLED)

    def _on_timer(self) -> None:
        self._timer = None
        if not self._state.is_connected:
            return
        self._append(
            ChatMessage(
                username=self._rng.choice(SIMULATED_USERNAMES),
                message=self._rng.choice(SIMULATED_MESSAGES),
                color=self._rng.choice(CHAT_COLORS),
            )
        )
        self._arm_timer()
