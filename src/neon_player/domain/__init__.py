"""
Domain Layer

Contains pure logic organized by bounded contexts:
- shared/: Cross-cutting exceptions, types and messages
- playback/: Songs, playback state and navigation policy
- streaming/: Channels, chat feed and session snapshot
- chat/: Slash-command grammar
"""

from neon_player.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
