"""Date/time helpers.

Goal: centralize all date/time serialization + formatting.

- Store and operate on timezone-aware UTC datetimes.
- Render local wall-clock time only at the edge (chat replies).

This module is intentionally dependency-free and safe to use in any layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from ...domain.shared.messages import ErrorMessages


@dataclass(frozen=True, slots=True)
class UtcDateTime:
    """A tiny value-object wrapper around a timezone-aware UTC `datetime`."""

    dt: datetime

    def __post_init__(self) -> None:
        if self.dt.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED_UTC_DATETIME)
        # Normalize to UTC
        object.__setattr__(self, "dt", self.dt.astimezone(UTC))

    @classmethod
    def now(cls) -> UtcDateTime:
        return cls(datetime.now(UTC))

    @classmethod
    def from_iso(cls, value: str) -> UtcDateTime:
        # Accepts: '...+00:00' or '...Z'
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return cls(datetime.fromisoformat(value))

    @property
    def iso(self) -> str:
        """RFC3339/ISO8601 with explicit offset (+00:00)."""
        return self.dt.isoformat()

    @property
    def unix_millis(self) -> int:
        return int(self.dt.timestamp() * 1000)


def utcnow() -> datetime:
    """Preferred replacement for `datetime.now(UTC)`.

    Returns a timezone-aware datetime in UTC.
    """
    return datetime.now(UTC)


def local_now() -> datetime:
    """Current wall-clock time in the machine's local timezone."""
    return datetime.now().astimezone()


def spelled_out(dt: datetime) -> str:
    """Long, 24-hour rendering, e.g. ``Monday, October 19, 2026 at 15:03:22``."""
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year} at {dt:%H:%M:%S}"
