"""Port interface for a playable media sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum

DeviceEventHandler = Callable[[], None]
Unsubscribe = Callable[[], None]


class DeviceEvent(Enum):
    """Notifications an output device emits.

    Handlers take no arguments; they read ``current_time`` / ``duration``
    from the device, the way media element listeners do.
    """

    TIME_UPDATE = "timeupdate"
    DURATION_CHANGE = "durationchange"
    ENDED = "ended"


class OutputDevice(ABC):
    """Interface for an audio output with source assignment and transport controls."""

    @abstractmethod
    def set_source(self, url: str | None) -> None:
        """Assign the media URL, or detach with None."""
        ...

    @abstractmethod
    def load(self) -> None:
        """(Re)load the assigned source from the start."""
        ...

    @abstractmethod
    async def play(self) -> None:
        """Start or resume playback.

        Raises:
            PlaybackRejectedError: If the device refuses to play.
        """
        ...

    @abstractmethod
    def pause(self) -> None:
        ...

    @abstractmethod
    def set_volume(self, level: float) -> None:
        """Set the output level in [0.0, 1.0]."""
        ...

    @property
    @abstractmethod
    def current_time(self) -> float:
        ...

    @current_time.setter
    @abstractmethod
    def current_time(self, value: float) -> None:
        ...

    @property
    @abstractmethod
    def duration(self) -> float:
        ...

    @property
    @abstractmethod
    def source(self) -> str | None:
        ...

    @abstractmethod
    def subscribe(self, event: DeviceEvent, handler: DeviceEventHandler) -> Unsubscribe:
        """Register ``handler`` for ``event`` and return a callable that removes it."""
        ...
