"""
Console front end.

Reads one command per line and maps it onto the player, the channel
session and the chat pipeline. Chat messages are echoed as they arrive.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import IO, TYPE_CHECKING

from neon_player.domain.shared.exceptions import DomainError, LoadError
from neon_player.domain.streaming.catalog import DEFAULT_CHANNELS, find_channel

if TYPE_CHECKING:
    from neon_player.config.container import Container
    from neon_player.domain.streaming.entities import ChatMessage, StreamingSessionState

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Player:   play [id] | pause | toggle | next | prev | vol <0-1> | mute | repeat
          shuffle | seek <seconds> | list | load [url] | save <url>
Channels: channels | connect <id> | start | stop | disconnect | cvol <0-100>
          cmute | say <text or /command> | name <new name>
General:  status | help | quit"""


class ConsoleApp:
    """Line-oriented controller for a wired Container."""

    def __init__(
        self,
        container: Container,
        *,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        self._container = container
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._seen_messages: set[str] = set()
        self._unsubscribe = container.channel_session.subscribe(self._on_session_change)

    def write(self, text: str) -> None:
        self._stdout.write(text + "\n")
        self._stdout.flush()

    async def run(self, playlist_url: str | None = None) -> None:
        player = self._container.player_service
        await player.start(playlist_url)
        self.write(HELP_TEXT)
        self._print_status()

        try:
            while True:
                line = await asyncio.to_thread(self._stdin.readline)
                if not line:
                    break
                if not await self.handle(line):
                    break
        finally:
            self._unsubscribe()

    async def handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the user asked to quit."""
        word, _, rest = line.strip().partition(" ")
        word = word.lower()
        rest = rest.strip()
        if not word:
            return True
        logger.debug("Console command %s", word)

        try:
            return await self._dispatch(word, rest)
        except DomainError as e:
            self.write(f"! {e.message}")
        except ValueError:
            self.write(f"! Invalid argument for {word}: {rest!r}")
        return True

    async def _dispatch(self, word: str, rest: str) -> bool:
        player = self._container.player_service
        session = self._container.channel_session
        chat = self._container.chat_pipeline

        match word:
            case "quit" | "exit":
                return False
            case "help":
                self.write(HELP_TEXT)
            case "status":
                self._print_status()
            case "play" if rest:
                song = player.find_song(int(rest))
                if song is None:
                    self.write(f"! No song with id {rest}")
                else:
                    player.play_song(song)
            case "play":
                player.play()
            case "pause":
                player.pause()
            case "toggle":
                player.toggle()
            case "next":
                player.next()
            case "prev":
                player.prev()
            case "vol":
                player.set_volume(float(rest))
            case "mute":
                player.toggle_mute()
            case "repeat":
                player.toggle_repeat()
            case "shuffle":
                player.toggle_shuffle()
            case "seek":
                player.seek(float(rest))
            case "list":
                self._print_playlist()
            case "load":
                count = await player.load_playlist(rest or None)
                self.write(f"{count} songs in playlist")
            case "save":
                try:
                    songs = await player.validate_playlist_url(rest)
                except LoadError as e:
                    self.write(f"! {e.message}")
                else:
                    self.write(f"Playlist URL saved ({len(songs)} songs)")
            case "channels":
                for channel in DEFAULT_CHANNELS:
                    live = "LIVE" if channel.is_live else "off "
                    self.write(
                        f"  [{live}] {channel.id:<16} {channel.name} "
                        f"({channel.current_listeners} listening)"
                    )
            case "connect":
                session.connect(find_channel(rest))
            case "start":
                if not await session.start():
                    self.write("! Not streaming")
            case "stop":
                session.stop()
            case "disconnect":
                session.disconnect()
            case "cvol":
                session.set_volume(float(rest))
            case "cmute":
                session.toggle_mute()
            case "say":
                await chat.submit(rest)
            case "name":
                if await chat.change_username(rest) is None:
                    self.write("! Username must contain letters, digits or underscores")
            case _:
                self.write(f"! Unknown command: {word}. Type help.")
        return True

    # === Rendering ===

    def _on_session_change(self, state: StreamingSessionState) -> None:
        for message in state.chat_messages:
            if message.id not in self._seen_messages:
                self.write(self._format_message(message))
        self._seen_messages = {m.id for m in state.chat_messages}

    @staticmethod
    def _format_message(message: ChatMessage) -> str:
        stamp = message.timestamp.astimezone().strftime("%H:%M")
        if message.is_action:
            return f"[{stamp}] * {message.username} {message.message[4:]}"
        return f"[{stamp}] <{message.username}> {message.message}"

    def _print_playlist(self) -> None:
        state = self._container.player_service.state
        for song in state.playlist:
            marker = ">" if state.current_song == song else " "
            self.write(f" {marker} {song.id:>3}  {song.display_title}  [{song.duration_formatted}]")

    def _print_status(self) -> None:
        player = self._container.player_service.state
        session = self._container.channel_session.state

        song = player.current_song.display_title if player.current_song else "-"
        flags = [
            "playing" if player.is_playing else "paused",
            f"vol {player.volume:.2f}",
        ]
        if player.is_muted:
            flags.append("muted")
        if player.repeat:
            flags.append("repeat")
        if player.shuffle:
            flags.append("shuffle")
        self.write(f"Player : {song} ({', '.join(flags)}) {player.current_time:.0f}s")

        channel = session.current_channel.name if session.current_channel else "-"
        self.write(
            f"Channel: {channel} ({session.phase.value}, vol {session.volume:.0f}"
            f"{', muted' if session.is_muted else ''})"
        )
        chat = self._container.chat_pipeline
        self.write(f"Chat   : {chat.username} {chat.color}")
