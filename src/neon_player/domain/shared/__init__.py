"""
Shared Domain Kernel

Contains exceptions, constrained types and message constants shared across
all bounded contexts.
"""

from neon_player.domain.shared.exceptions import (
    DomainError,
    InvalidCommandSyntaxError,
    InvalidOperationError,
    LoadError,
    PlaybackRejectedError,
    UnknownCommandError,
)

__all__ = [
    "DomainError",
    "LoadError",
    "PlaybackRejectedError",
    "InvalidCommandSyntaxError",
    "UnknownCommandError",
    "InvalidOperationError",
]
