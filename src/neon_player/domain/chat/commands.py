"""
Chat Command Parsing

Turns a raw chat line into one variant of a closed set: eight recognised
slash-commands, an unknown slash-command, or a plain passthrough message.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from neon_player.domain.shared.constants import ChatConstants

_HEX_COLOR = re.compile(ChatConstants.HEX_COLOR_PATTERN)

CYBERPUNK_PHRASES: tuple[str, ...] = (
    "The matrix has you...",
    "Welcome to the future, choom",
    "Neural link established",
    "Connecting to the Net...",
    "ICE detected - be careful",
    "Your data is now encrypted",
    "Cyber ghost in the machine",
    "The neon never sleeps",
    "Digital dreams come true",
    "Hack the planet!",
)


@dataclass(frozen=True)
class HelpCommand:
    pass


@dataclass(frozen=True)
class MeCommand:
    action: str | None


@dataclass(frozen=True)
class ClearCommand:
    pass


@dataclass(frozen=True)
class TimeCommand:
    pass


@dataclass(frozen=True)
class StatusCommand:
    pass


@dataclass(frozen=True)
class UsersCommand:
    pass


@dataclass(frozen=True)
class RandomCommand:
    pass


@dataclass(frozen=True)
class ColorCommand:
    argument: str | None


@dataclass(frozen=True)
class UnknownCommand:
    keyword: str


@dataclass(frozen=True)
class Passthrough:
    text: str


ChatCommand = (
    HelpCommand
    | MeCommand
    | ClearCommand
    | TimeCommand
    | StatusCommand
    | UsersCommand
    | RandomCommand
    | ColorCommand
    | UnknownCommand
    | Passthrough
)


def is_valid_hex_color(value: str | None) -> bool:
    """Strict ``#RRGGBB`` check, case-insensitive."""
    return value is not None and _HEX_COLOR.fullmatch(value) is not None


def parse_command(line: str) -> ChatCommand:
    """Classify ``line``.

    A line is a command when its first character is ``/``; the keyword is
    the first whitespace-separated token, lower-cased. Anything else is a
    passthrough message and is returned unmodified.
    """
    if not line.startswith(ChatConstants.COMMAND_PREFIX):
        return Passthrough(text=line)

    parts = line.split()
    keyword = parts[0].lower() if parts else ChatConstants.COMMAND_PREFIX
    args = parts[1:]

    match keyword:
        case "/help":
            return HelpCommand()
        case "/me":
            return MeCommand(action=" ".join(args) if args else None)
        case "/clear":
            return ClearCommand()
        case "/time":
            return TimeCommand()
        case "/status":
            return StatusCommand()
        case "/users":
            return UsersCommand()
        case "/random":
            return RandomCommand()
        case "/color":
            return ColorCommand(argument=args[0] if args else None)
        case _:
            return UnknownCommand(keyword=keyword)
