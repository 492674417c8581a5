"""
Chat Bounded Context

Slash-command grammar and the tagged command variants.
"""

from neon_player.domain.chat.commands import (
    CYBERPUNK_PHRASES,
    ChatCommand,
    is_valid_hex_color,
    parse_command,
)

__all__ = [
    "CYBERPUNK_PHRASES",
    "ChatCommand",
    "is_valid_hex_color",
    "parse_command",
]
