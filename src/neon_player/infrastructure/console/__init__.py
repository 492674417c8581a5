"""Console front end."""

from neon_player.infrastructure.console.app import ConsoleApp

__all__ = [
    "ConsoleApp",
]
