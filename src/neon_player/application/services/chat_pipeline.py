"""Chat Pipeline - turns typed chat lines into local replies or outbound messages."""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ...domain.chat.commands import (
    CYBERPUNK_PHRASES,
    ChatCommand,
    ClearCommand,
    ColorCommand,
    HelpCommand,
    MeCommand,
    Passthrough,
    RandomCommand,
    StatusCommand,
    TimeCommand,
    UnknownCommand,
    UsersCommand,
    is_valid_hex_color,
    parse_command,
)
from ...domain.shared.constants import ChatConstants, PreferenceDefaults, PreferenceKeys
from ...domain.shared.datetime_utils import local_now, spelled_out
from ...domain.shared.exceptions import InvalidCommandSyntaxError, UnknownCommandError
from ...domain.shared.messages import ChatTexts, LogTemplates
from ...domain.streaming.entities import distinct_chatters

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ...domain.streaming.entities import ChatMessage
    from ..interfaces.preference_store import PreferenceStore
    from .channel_session import ChannelSession

logger = logging.getLogger(__name__)

_USERNAME_STRIP = re.compile(ChatConstants.USERNAME_STRIP_PATTERN)


class OutcomeKind(Enum):
    LOCAL = "local"
    OUTBOUND = "outbound"


@dataclass(frozen=True)
class ChatOutcome:
    """What a submitted line turned into.

    ``message`` is the feed entry that was appended, or None when an outbound
    message was dropped because the session is not connected.
    """

    kind: OutcomeKind
    text: str
    color: str | None = None
    message: ChatMessage | None = None

    @property
    def is_local(self) -> bool:
        return self.kind is OutcomeKind.LOCAL


def sanitize_username(name: str) -> str:
    """Keep ``[A-Za-z0-9_]``, upper-case, cut to 16 characters."""
    return _USERNAME_STRIP.sub("", name).upper()[: ChatConstants.USERNAME_MAX_LENGTH]


class ChatPipeline:
    """Runs each submitted line through the command parser.

    Commands are answered with a local system message in the session feed;
    plain lines and ``/me`` actions go out as user messages tagged with the
    stored color.
    """

    def __init__(
        self,
        *,
        session: ChannelSession,
        preferences: PreferenceStore | None = None,
        default_username: str = PreferenceDefaults.USERNAME,
        default_color: str = PreferenceDefaults.CHAT_COLOR,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._session = session
        self._preferences = preferences
        self._username = default_username
        self._color = default_color
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def username(self) -> str:
        return self._username

    @property
    def color(self) -> str:
        return self._color

    async def initialize(self) -> None:
        """Read the stored username and color. Invalid stored values are ignored."""
        if self._preferences is None:
            return

        username = await self._preferences.get(PreferenceKeys.USERNAME)
        if username:
            cleaned = sanitize_username(username)
            if cleaned:
                self._username = cleaned
            else:
                logger.warning(LogTemplates.PREFERENCE_IGNORED, PreferenceKeys.USERNAME, username)

        color = await self._preferences.get(PreferenceKeys.CHAT_COLOR)
        if color is not None:
            if is_valid_hex_color(color):
                self._color = color
            else:
                logger.warning(LogTemplates.PREFERENCE_IGNORED, PreferenceKeys.CHAT_COLOR, color)

    async def submit(self, line: str) -> ChatOutcome | None:
        """Handle one line of input. Blank input does nothing and returns None.

        Malformed and unknown commands are answered in the feed, never raised.
        """
        if not line.strip():
            return None

        command = parse_command(line)
        if not isinstance(command, Passthrough):
            logger.debug(LogTemplates.CHAT_COMMAND, type(command).__name__)

        try:
            return await self._dispatch(command)
        except (InvalidCommandSyntaxError, UnknownCommandError) as e:
            logger.debug(LogTemplates.CHAT_COMMAND_REJECTED, e.code, e.message)
            return self._reply(e.message)

    async def _dispatch(self, command: ChatCommand) -> ChatOutcome:
        match command:
            case HelpCommand():
                return self._reply(ChatTexts.HELP)
            case MeCommand(action=None):
                return self._reply(ChatTexts.ME_USAGE)
            case MeCommand(action=action):
                return self._send(f"/me {action}")
            case ClearCommand():
                self._session.clear_chat()
                return self._reply(ChatTexts.CLEARED)
            case TimeCommand():
                return self._reply(ChatTexts.TIME.format(time=spelled_out(self._clock())))
            case StatusCommand():
                return self._reply(ChatTexts.STATUS)
            case UsersCommand():
                count = distinct_chatters(self._session.state.chat_messages)
                return self._reply(ChatTexts.USERS.format(count=count))
            case RandomCommand():
                phrase = self._rng.choice(CYBERPUNK_PHRASES)
                return self._reply(ChatTexts.RANDOM.format(phrase=phrase))
            case ColorCommand(argument=None):
                return self._reply(ChatTexts.COLOR_CURRENT.format(color=self._color))
            case ColorCommand(argument=argument) if is_valid_hex_color(argument):
                await self._change_color(argument)
                return self._reply(ChatTexts.COLOR_CHANGED.format(color=argument))
            case ColorCommand(argument=argument):
                raise InvalidCommandSyntaxError("/color", argument, message=ChatTexts.COLOR_INVALID)
            case UnknownCommand(keyword=keyword):
                raise UnknownCommandError(
                    keyword, message=ChatTexts.UNKNOWN.format(command=keyword)
                )
            case Passthrough(text=text):
                return self._send(text)

    async def change_username(self, name: str) -> str | None:
        """Sanitize and store a new username. Returns None if nothing usable is left."""
        cleaned = sanitize_username(name)
        if not cleaned:
            return None

        self._username = cleaned
        if self._preferences is not None:
            await self._preferences.set(PreferenceKeys.USERNAME, cleaned)
        logger.info(LogTemplates.CHAT_USERNAME_CHANGED, cleaned)
        self._session.add_system_message(ChatTexts.USERNAME_CHANGED.format(username=cleaned))
        return cleaned

    async def _change_color(self, color: str) -> None:
        self._color = color
        if self._preferences is not None:
            await self._preferences.set(PreferenceKeys.CHAT_COLOR, color)
        logger.info(LogTemplates.CHAT_COLOR_CHANGED, color)

    def _reply(self, text: str) -> ChatOutcome:
        message = self._session.add_system_message(text)
        return ChatOutcome(
            kind=OutcomeKind.LOCAL,
            text=text,
            color=message.color,
            message=message,
        )

    def _send(self, text: str) -> ChatOutcome:
        logger.debug(LogTemplates.CHAT_OUTBOUND, self._username)
        message = self._session.send_chat_message(text, self._username, self._color)
        return ChatOutcome(
            kind=OutcomeKind.OUTBOUND,
            text=text,
            color=self._color,
            message=message,
        )
