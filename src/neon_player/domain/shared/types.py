"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the player is defined here once,
so models can simply annotate their fields::

    from neon_player.domain.shared.types import NonEmptyStr, UnitVolume

    class MyModel(BaseModel):
        name: NonEmptyStr
        volume: UnitVolume
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

SongIdInt = Annotated[int, Field(gt=0)]
"""Positive integer song identifier."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0, used for seconds."""

UnitVolume = Annotated[float, Field(ge=0.0, le=1.0)]
"""Playback output level in [0.0, 1.0]."""

PercentVolume = Annotated[float, Field(ge=0.0, le=100.0)]
"""Streaming output level in [0, 100]."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

ChatDelaySeconds = Annotated[float, Field(gt=0.0, le=3600.0)]
"""Background chat delay bound in seconds."""


# ── Datetime constraints ───────────────────────────────────────────


def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
