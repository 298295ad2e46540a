# hood_service/core/clock.py
"""
Clock abstraction.

Every time-sensitive decision receives ``now`` from a Clock instead of
calling ``datetime.now()`` itself, so a single instant is observed per
request and tests can pin time.
"""

from datetime import datetime, timezone
from typing import Protocol


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive values are assumed to already be UTC (that is how they come back
    from SQLite and from ``DateTime`` columns without timezone support).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock, always UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to one instant (tests, replays)."""

    def __init__(self, instant: datetime):
        self.instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self.instant


system_clock = SystemClock()


def get_clock() -> Clock:
    """FastAPI dependency; overridden in tests with a FixedClock."""
    return system_clock
