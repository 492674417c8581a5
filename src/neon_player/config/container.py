"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the player, the channel session and their
adapters. Components are created on first access and cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.constants import DevicePoolNames
from ..domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.interfaces.notification_sink import NotificationSink
    from ..application.interfaces.playlist_loader import PlaylistLoader
    from ..application.interfaces.preference_store import PreferenceStore
    from ..application.services.channel_session import ChannelSession
    from ..application.services.chat_pipeline import ChatPipeline
    from ..application.services.player_service import PlayerApplicationService
    from ..domain.playback.state import PlaybackState
    from ..domain.playback.state_machine import PlaybackStateMachine
    from ..infrastructure.audio.simulated_device import SimulatedOutputDevice
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _preference_store: PreferenceStore | None = None

    # Infrastructure adapters
    _playlist_loader: PlaylistLoader | None = None
    _notifier: NotificationSink | None = None
    _player_device: SimulatedOutputDevice | None = None
    _channel_device: SimulatedOutputDevice | None = None

    # Domain
    _state_machine: PlaybackStateMachine | None = None

    # Application services
    _player_service: PlayerApplicationService | None = None
    _channel_session: ChannelSession | None = None
    _chat_pipeline: ChatPipeline | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    @property
    def preference_store(self) -> PreferenceStore:
        if self._preference_store is None:
            from ..infrastructure.persistence.preference_store import SQLitePreferenceStore

            self._preference_store = SQLitePreferenceStore(self.database)
        return self._preference_store

    # === Infrastructure Adapters ===

    @property
    def playlist_loader(self) -> PlaylistLoader:
        if self._playlist_loader is None:
            from ..infrastructure.playlist.loader import JsonPlaylistLoader

            self._playlist_loader = JsonPlaylistLoader(self.settings.loader)
        return self._playlist_loader

    @property
    def notifier(self) -> NotificationSink:
        if self._notifier is None:
            from ..infrastructure.notifications.logging_sink import LoggingNotificationSink

            self._notifier = LoggingNotificationSink()
        return self._notifier

    @property
    def player_device(self) -> SimulatedOutputDevice:
        """Output device bound to the playlist player."""
        if self._player_device is None:
            from ..infrastructure.audio.simulated_device import SimulatedOutputDevice

            self._player_device = SimulatedOutputDevice(
                DevicePoolNames.PLAYER, self.settings.device
            )
        return self._player_device

    @property
    def channel_device(self) -> SimulatedOutputDevice:
        """Output device bound to the live channel session."""
        if self._channel_device is None:
            from ..infrastructure.audio.simulated_device import SimulatedOutputDevice

            self._channel_device = SimulatedOutputDevice(
                DevicePoolNames.CHANNEL, self.settings.device
            )
        return self._channel_device

    # === Domain ===

    @property
    def state_machine(self) -> PlaybackStateMachine:
        if self._state_machine is None:
            from ..domain.playback.state import PlaybackState
            from ..domain.playback.state_machine import PlaybackStateMachine

            self._state_machine = PlaybackStateMachine(
                PlaybackState(volume=self.settings.playback.default_volume)
            )
        return self._state_machine

    # === Application Services ===

    @property
    def player_service(self) -> PlayerApplicationService:
        """Get the player application service."""
        if self._player_service is None:
            from ..application.services.player_service import PlayerApplicationService

            # Registered before the synchronizer so load() sees the new lengths.
            self.state_machine.subscribe(self._feed_song_durations)
            self._player_service = PlayerApplicationService(
                state_machine=self.state_machine,
                device=self.player_device,
                playlist_loader=self.playlist_loader,
                notifier=self.notifier,
                preferences=self.preference_store,
                default_playlist_url=self.settings.playback.default_playlist_url,
            )
        return self._player_service

    def _feed_song_durations(self, previous: PlaybackState, current: PlaybackState) -> None:
        if current.playlist != previous.playlist:
            self.player_device.set_known_durations(
                {song.audio_src: song.duration for song in current.playlist if song.duration > 0}
            )

    @property
    def channel_session(self) -> ChannelSession:
        """Get the live channel session."""
        if self._channel_session is None:
            from ..application.services.channel_session import ChannelSession

            streaming = self.settings.streaming
            self._channel_session = ChannelSession(
                device=self.channel_device,
                notifier=self.notifier,
                default_volume=streaming.default_volume,
                chat_min_delay=streaming.chat_min_delay,
                chat_max_delay=streaming.chat_max_delay,
                max_chat_messages=streaming.max_chat_messages,
            )
        return self._channel_session

    @property
    def chat_pipeline(self) -> ChatPipeline:
        """Get the chat pipeline."""
        if self._chat_pipeline is None:
            from ..application.services.chat_pipeline import ChatPipeline

            self._chat_pipeline = ChatPipeline(
                session=self.channel_session,
                preferences=self.preference_store,
                default_username=self.settings.chat.default_username,
                default_color=self.settings.chat.default_color,
            )
        return self._chat_pipeline

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()
        await self.chat_pipeline.initialize()

    async def shutdown(self) -> None:
        """Close the channel session, the player and the database, in that order."""
        if self._channel_session is not None:
            try:
                self._channel_session.close()
            except Exception as exc:
                logger.warning("Failed closing channel session: %r", exc)

        if self._player_service is not None:
            try:
                await self._player_service.shutdown()
            except Exception as exc:
                logger.warning("Failed shutting down player: %r", exc)

        for device in (self._player_device, self._channel_device):
            if device is not None:
                await device.close()

        if self._database is not None:
            await self._database.close()

        logger.info(LogTemplates.CONTAINER_SHUTDOWN)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
