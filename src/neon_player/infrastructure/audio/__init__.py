"""Audio infrastructure - simulated output device."""

from neon_player.infrastructure.audio.simulated_device import SimulatedOutputDevice

__all__ = [
    "SimulatedOutputDevice",
]
