# hood_service/services/reservation_service.py
"""
Field reservation workflows.

create: authorize member -> admission engine -> guarded insert
delete: ownership + membership -> soft delete
list:   membership + bounded window -> overlap query

Every failure is raised as a ``ReservationError`` subclass whose ``reason``
the GraphQL layer turns into a stable error code.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from hood_service.core.clock import ensure_utc
from hood_service.crud.crud_field_reservation import SqlAlchemyReservationStore
from hood_service.models.field_reservation import FieldReservation
from hood_service.reservations import (
    ReservationAdmissionEngine,
    ReservationRequest,
    ensure_admitted,
)
from hood_service.reservations.errors import (
    RejectionReason,
    ReservationError,
    ReservationRejected,
)
from hood_service.reservations.rules import parse_rules

logger = logging.getLogger(__name__)


def build_request(
    *,
    field_id: str,
    user_id: str,
    description: Optional[str],
    start: datetime,
    end: datetime,
    now: datetime,
) -> ReservationRequest:
    try:
        return ReservationRequest(
            field_id=field_id,
            user_id=user_id,
            description=description,
            start=start,
            end=end,
            now=now,
        )
    except ValidationError as e:
        raise ReservationRejected(
            RejectionReason.INVALID_INTERVAL,
            "Reservation interval must be timezone-aware with start before end",
        ) from e


def _require_member(
    store: SqlAlchemyReservationStore, *, user_id: str, association_id: str
) -> None:
    if not store.authorize_member(user_id, association_id):
        raise ReservationRejected(
            RejectionReason.UNAUTHORIZED,
            "User is not a member of the association",
        )


def create_field_reservation(
    db: Session,
    *,
    user_id: str,
    field_id: str,
    description: Optional[str],
    start: datetime,
    end: datetime,
    now: datetime,
) -> FieldReservation:
    store = SqlAlchemyReservationStore(db)

    field_obj = store.get_field(field_id)
    if field_obj is None or field_obj.deleted:
        raise ReservationError(f"Field {field_id} not found", RejectionReason.NOT_FOUND)
    _require_member(store, user_id=user_id, association_id=field_obj.association_id)

    request = build_request(
        field_id=field_id,
        user_id=user_id,
        description=description,
        start=start,
        end=end,
        now=now,
    )
    decision = ReservationAdmissionEngine(store).evaluate(request)
    ensure_admitted(decision)

    quota = None
    rules = parse_rules(field_obj.reservation_rules)
    if rules is not None:
        period_start, period_end = rules.period_window(request.now)
        quota = (period_start, period_end, rules.max_reservations_per_period)

    return store.insert_reservation(
        request.field_id,
        request.user_id,
        request.description,
        request.start,
        request.end,
        quota=quota,
    )


def delete_field_reservation(
    db: Session,
    *,
    user_id: str,
    reservation_id: str,
    now: datetime,
) -> FieldReservation:
    store = SqlAlchemyReservationStore(db)

    reservation = store.get_reservation(reservation_id)
    if reservation is None:
        raise ReservationError(
            f"Reservation {reservation_id} not found", RejectionReason.NOT_FOUND
        )
    if reservation.user_id != user_id:
        raise ReservationRejected(
            RejectionReason.UNAUTHORIZED,
            "Only the owner can delete a reservation",
        )
    field_obj = store.get_field(reservation.field_id)
    _require_member(store, user_id=user_id, association_id=field_obj.association_id)

    deleted = store.soft_delete_reservation(reservation_id, now)
    logger.info(f"User {user_id} deleted reservation {reservation_id}")
    return deleted


def list_field_reservations(
    db: Session,
    *,
    user_id: str,
    field_id: str,
    from_date_time: datetime,
    to_date_time: datetime,
    max_days: int,
) -> List[FieldReservation]:
    """Active reservations of a field intersecting a bounded window."""
    store = SqlAlchemyReservationStore(db)
    field_obj = store.get_field(field_id)
    if field_obj is None or field_obj.deleted:
        raise ReservationError(f"Field {field_id} not found", RejectionReason.NOT_FOUND)
    _require_member(store, user_id=user_id, association_id=field_obj.association_id)

    if from_date_time.tzinfo is None or to_date_time.tzinfo is None:
        raise ReservationRejected(
            RejectionReason.INVALID_INTERVAL, "Query window must be timezone-aware"
        )
    if from_date_time >= to_date_time:
        raise ReservationRejected(
            RejectionReason.INVALID_INTERVAL, "fromDateTime must be before toDateTime"
        )
    if to_date_time - from_date_time >= timedelta(days=max_days):
        raise ReservationRejected(
            RejectionReason.INVALID_INTERVAL,
            f"Query window must be shorter than {max_days} days",
        )

    return store.list_overlapping_reservations(
        field_id, ensure_utc(from_date_time), ensure_utc(to_date_time)
    )
