"""Built-in channel catalog and the pools the background chat draws from."""

from __future__ import annotations

from neon_player.domain.shared.exceptions import InvalidOperationError
from neon_player.domain.shared.messages import ErrorMessages
from neon_player.domain.streaming.entities import Channel

DEFAULT_CHANNELS: tuple[Channel, ...] = (
    Channel(
        id="cyber-radio-1",
        name="CYBER RADIO ONE",
        description="Electronic · Synthwave · Cyberpunk",
        is_live=True,
        stream_url="https://www.soundhelix.com/examples/mp3/SoundHelix-Song-1.mp3",
        thumbnail_url="https://images.unsplash.com/photo-1518837695005-2083093ee35b?w=400&h=400&fit=crop",
        current_listeners=2847,
        category="Electronic",
        created_by="CYBER_DJ",
    ),
    Channel(
        id="neon-beats",
        name="NEON BEATS",
        description="House · Techno · Future Bass",
        is_live=True,
        stream_url="https://www.soundhelix.com/examples/mp3/SoundHelix-Song-2.mp3",
        thumbnail_url="https://images.unsplash.com/photo-1571330735066-03aaa9429d89?w=400&h=400&fit=crop",
        current_listeners=1523,
        category="House",
        created_by="NEON_MASTER",
    ),
    Channel(
        id="future-lounge",
        name="FUTURE LOUNGE",
        description="Chillwave · Ambient · Lo-fi",
        is_live=False,
        stream_url="https://www.soundhelix.com/examples/mp3/SoundHelix-Song-3.mp3",
        thumbnail_url="https://images.unsplash.com/photo-1493225457124-a3eb161ffa5f?w=400&h=400&fit=crop",
        current_listeners=892,
        category="Ambient",
        created_by="CHILL_VIBES",
    ),
)

CHAT_COLORS: tuple[str, ...] = (
    "#FF00FF",  # magenta
    "#00FFFF",  # cyan
    "#FFFF00",  # yellow
    "#39FF14",  # green
    "#FF073A",  # red
    "#BF00FF",  # purple
)

SIMULATED_USERNAMES: tuple[str, ...] = (
    "CYBER_USER",
    "NEON_GHOST",
    "SYNTH_RIDER",
    "DIGITAL_SOUL",
    "MATRIX_WALKER",
)

SIMULATED_MESSAGES: tuple[str, ...] = (
    "This beat is sick! 🔥",
    "Love this cyberpunk vibe",
    "Anyone know the track name?",
    "The bass is incredible",
    "Best cyber radio station!",
    "This is my coding soundtrack",
    "Perfect for late night sessions",
    "More synthwave please!",
)


def find_channel(channel_id: str, channels: tuple[Channel, ...] = DEFAULT_CHANNELS) -> Channel:
    """Look up a channel by id (case-insensitive)."""
    wanted = channel_id.strip().lower()
    for channel in channels:
        if channel.id.lower() == wanted:
            return channel
    raise InvalidOperationError(
        operation="connect",
        current_state="unknown channel",
        message=ErrorMessages.CHANNEL_NOT_FOUND.format(channel_id=channel_id),
    )
