# hood_service/reservations/rules.py
"""
Per-field reservation policy.

A field may carry a JSON document describing when and how often members can
book it. The document is stored as text on the field and parsed for every
request, so it must round-trip exactly:

    {"reservations_start_at_time_utc": "06:00:00",
     "max_duration_minutes": 60,
     "max_reservations_per_period": 1,
     "reservation_period": "Daily"}
"""

from datetime import datetime, time, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hood_service.core.clock import ensure_utc
from .errors import PolicyParseError


class ReservationPeriod(str, Enum):
    """Recurring window against which the per-user quota is counted."""

    DAILY = "Daily"

    def period_window(self, now: datetime) -> tuple[datetime, datetime]:
        """Half-open ``[start, end)`` window of the period containing ``now``."""
        return _PERIOD_WINDOWS[self](ensure_utc(now))

    def same_period(self, now: datetime, instant: datetime) -> bool:
        start, end = self.period_window(now)
        return start <= ensure_utc(instant) < end


def _daily_window(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


_PERIOD_WINDOWS = {
    ReservationPeriod.DAILY: _daily_window,
}


class ReservationRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    reservations_start_at_time_utc: time
    max_duration_minutes: int = Field(..., ge=0)
    max_reservations_per_period: int = Field(..., ge=0)
    reservation_period: ReservationPeriod = ReservationPeriod.DAILY

    @field_validator("reservations_start_at_time_utc")
    @classmethod
    def _cutoff_is_utc(cls, value: time) -> time:
        # The cutoff is a UTC wall-clock time; store it naive.
        if value.tzinfo is not None:
            if value.utcoffset() != timedelta(0):
                raise ValueError("reservations_start_at_time_utc must be in UTC")
            value = value.replace(tzinfo=None)
        return value

    @classmethod
    def from_json(cls, blob: str) -> "ReservationRules":
        try:
            return cls.model_validate_json(blob)
        except ValidationError as e:
            raise PolicyParseError(f"Failed to parse reservation rules: {e}") from e

    def to_json(self) -> str:
        return self.model_dump_json()

    def is_same_day(self, now: datetime, start: datetime) -> bool:
        return self.reservation_period.same_period(now, start)

    def is_after_cutoff(self, now: datetime) -> bool:
        return ensure_utc(now).time() >= self.reservations_start_at_time_utc

    def is_within_cutoff(self, now: datetime, start: datetime) -> bool:
        """True when ``start`` is in today's period and the cutoff has passed."""
        return self.is_same_day(now, start) and self.is_after_cutoff(now)

    def duration_minutes(self, start: datetime, end: datetime) -> int:
        # Whole minutes, truncated.
        return int((ensure_utc(end) - ensure_utc(start)).total_seconds() // 60)

    def is_within_max_duration(self, start: datetime, end: datetime) -> bool:
        return self.duration_minutes(start, end) <= self.max_duration_minutes

    def period_window(self, now: datetime) -> tuple[datetime, datetime]:
        return self.reservation_period.period_window(now)


def parse_rules(blob: str | None) -> ReservationRules | None:
    """Parse an optional stored blob; ``None`` or empty means unrestricted."""
    if blob is None or not blob.strip():
        return None
    return ReservationRules.from_json(blob)
