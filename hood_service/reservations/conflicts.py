# hood_service/reservations/conflicts.py
"""
Conflict checking against stored reservations.

The checker owns no state; it asks a ``ReservationStore`` (implemented on
SQLAlchemy in ``hood_service.crud.crud_field_reservation``) for the rows it
needs. Deleted reservations never take part in either check.
"""

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from hood_service.core.clock import ensure_utc


class ReservationStore(Protocol):
    """Storage interface consumed by the engine."""

    def get_field(self, field_id: str) -> Optional[Any]: ...

    def list_overlapping_reservations(
        self, field_id: str, start: datetime, end: datetime
    ) -> Sequence[Any]: ...

    def count_user_reservations(
        self,
        user_id: str,
        period_start: datetime,
        period_end: datetime,
        field_id: Optional[str] = None,
    ) -> int: ...


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Half-open overlap: ``[10:00, 11:00)`` and ``[11:00, 12:00)`` do not touch."""
    return ensure_utc(a_start) < ensure_utc(b_end) and ensure_utc(a_end) > ensure_utc(
        b_start
    )


class ReservationConflictChecker:
    def __init__(self, store: ReservationStore):
        self.store = store

    def overlapping(self, field_id: str, start: datetime, end: datetime) -> list:
        candidates = self.store.list_overlapping_reservations(field_id, start, end)
        # The store already filters; re-applying the predicate keeps the
        # definition of "overlap" in one place.
        return [
            r
            for r in candidates
            if intervals_overlap(r.start_date, r.end_date, start, end)
        ]

    def has_overlap(self, field_id: str, start: datetime, end: datetime) -> bool:
        return bool(self.overlapping(field_id, start, end))

    def count_user_reservations_in_period(
        self,
        user_id: str,
        period_bounds: tuple[datetime, datetime],
        field_id: Optional[str] = None,
    ) -> int:
        period_start, period_end = period_bounds
        return self.store.count_user_reservations(
            user_id, period_start, period_end, field_id=field_id
        )
