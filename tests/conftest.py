import asyncio
import random

import pytest
import pytest_asyncio

from neon_player.application.interfaces.output_device import DeviceEvent, OutputDevice
from neon_player.domain.playback.state import Song
from neon_player.domain.shared.exceptions import PlaybackRejectedError

# ============================================================================
# Fake Output Device
# ============================================================================


class FakeOutputDevice(OutputDevice):
    """Records every command; events are emitted by the test via ``emit``.

    ``play()`` waits on ``gate`` when one is set, then raises ``reject_with``
    when that is set or when the source it was called for is in ``reject_sources``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.reject_with: PlaybackRejectedError | None = None
        self.reject_sources: set[str] = set()
        self.gate: asyncio.Event | None = None
        self.volume = 1.0
        self.playing = False
        self._source: str | None = None
        self._current_time = 0.0
        self._duration = 0.0
        self._handlers: dict[DeviceEvent, list] = {event: [] for event in DeviceEvent}

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def duration(self) -> float:
        return self._duration

    @duration.setter
    def duration(self, value: float) -> None:
        self._duration = value

    @property
    def current_time(self) -> float:
        return self._current_time

    @current_time.setter
    def current_time(self, value: float) -> None:
        self.calls.append(("seek", value))
        self._current_time = value

    def set_source(self, url):
        self.calls.append(("set_source", url))
        self._source = url

    def load(self):
        self.calls.append(("load",))
        self._current_time = 0.0

    async def play(self):
        source = self._source
        self.calls.append(("play",))
        if self.gate is not None:
            await self.gate.wait()
        if self.reject_with is not None:
            raise self.reject_with
        if source in self.reject_sources:
            raise PlaybackRejectedError(f"cannot play {source}")
        self.playing = True

    def pause(self):
        self.calls.append(("pause",))
        self.playing = False

    def set_volume(self, level):
        self.calls.append(("set_volume", level))
        self.volume = level

    def subscribe(self, event, handler):
        self._handlers[event].append(handler)

        def unsubscribe():
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    # --- test helpers ---

    def emit(self, event: DeviceEvent) -> None:
        for handler in list(self._handlers[event]):
            handler()

    def advance(self, position: float) -> None:
        """Move the play head without recording a seek."""
        self._current_time = position

    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_device():
    """Create a fake output device."""
    return FakeOutputDevice()


# ============================================================================
# Domain Fixtures
# ============================================================================


def make_songs(count: int, start: int = 1) -> list[Song]:
    return [
        Song(
            id=i,
            title=f"Track {i}",
            artist="Test Artist",
            audio_src=f"https://audio.test/{i}.mp3",
            duration=120,
        )
        for i in range(start, start + count)
    ]


@pytest.fixture
def song_factory():
    """Build ``count`` songs with consecutive ids."""
    return make_songs


@pytest.fixture
def songs():
    """Three sample songs."""
    return make_songs(3)


@pytest.fixture
def rng():
    """Seeded random generator for reproducible shuffles."""
    return random.Random(1234)


@pytest.fixture
def notifier():
    """Notification sink that keeps a history."""
    from neon_player.infrastructure.notifications.logging_sink import LoggingNotificationSink

    return LoggingNotificationSink()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from neon_player.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def preference_store(in_memory_database):
    """Create a preference store backed by the in-memory database."""
    from neon_player.infrastructure.persistence.preference_store import SQLitePreferenceStore

    return SQLitePreferenceStore(in_memory_database)
