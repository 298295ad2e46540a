# hood_service/reservations/lifecycle.py
"""
Reservation record lifecycle: ACTIVE -> DELETED, one way.

Deletion is a soft marker with a timestamp; the row is kept for audit and
ignored by conflict and quota checks.
"""

from datetime import datetime

from hood_service.constants.reservation import ReservationStatus
from hood_service.core.clock import ensure_utc
from .admission import AdmissionDecision
from .errors import InvalidReservationTransition, ReservationRejected

_ALLOWED_TRANSITIONS = {
    ReservationStatus.ACTIVE: {ReservationStatus.DELETED},
    ReservationStatus.DELETED: set(),
}


def can_transition(current: str, target: str) -> bool:
    return target in _ALLOWED_TRANSITIONS.get(current, set())


def ensure_admitted(decision: AdmissionDecision) -> None:
    """A reservation row may only be created from an admitted decision."""
    if not decision.admitted:
        raise ReservationRejected(decision.reason, decision.message or "Not admitted")


def mark_deleted(reservation, now: datetime):
    """Soft-delete ``reservation`` in place.

    Already-deleted reservations are returned untouched, keeping the first
    ``deleted_at``.
    """
    if reservation.status == ReservationStatus.DELETED:
        return reservation
    transition(reservation, ReservationStatus.DELETED)
    reservation.deleted_at = ensure_utc(now)
    return reservation


def transition(reservation, target: str):
    if not ReservationStatus.is_valid(target):
        raise InvalidReservationTransition(f"Unknown reservation status {target}")
    if not can_transition(reservation.status, target):
        raise InvalidReservationTransition(
            f"Cannot move reservation {reservation.id} from "
            f"{reservation.status} to {target}"
        )
    reservation.status = target
    return reservation
