# hood_service/crud/crud_field_reservation.py
"""
Persistence for field reservations.

Besides plain reads this module provides:
- the two fixed queries used by the admission engine (overlap, quota count)
- a guarded insert that locks the field row and re-checks overlap and the
  user's quota inside the insert transaction, so two concurrent requests
  cannot both book a slot
- the soft delete used by the lifecycle
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hood_service.constants.reservation import ReservationStatus
from hood_service.core.clock import ensure_utc
from hood_service.crud.crud_relations import relations
from hood_service.models.field import Field
from hood_service.models.field_reservation import FieldReservation
from hood_service.reservations.conflicts import intervals_overlap
from hood_service.reservations.errors import (
    RejectionReason,
    ReservationError,
    ReservationRejected,
    StorageError,
)
from hood_service.reservations.lifecycle import mark_deleted

logger = logging.getLogger(__name__)


class CRUDFieldReservation:
    """CRUD operations for field reservations."""

    def get(self, db: Session, *, id: str) -> Optional[FieldReservation]:
        return db.query(FieldReservation).filter(FieldReservation.id == id).first()

    def list_overlapping(
        self, db: Session, *, field_id: str, start: datetime, end: datetime
    ) -> List[FieldReservation]:
        """Active reservations of the field intersecting ``[start, end)``."""
        return (
            db.query(FieldReservation)
            .filter(
                and_(
                    FieldReservation.field_id == field_id,
                    FieldReservation.status == ReservationStatus.ACTIVE,
                    FieldReservation.start_date < end,
                    FieldReservation.end_date > start,
                )
            )
            .order_by(FieldReservation.start_date.asc(), FieldReservation.end_date.asc())
            .all()
        )

    def count_user_reservations(
        self,
        db: Session,
        *,
        user_id: str,
        period_start: datetime,
        period_end: datetime,
        field_id: Optional[str] = None,
    ) -> int:
        """Active reservations of the user starting within ``[period_start, period_end)``."""
        query = db.query(func.count(FieldReservation.id)).filter(
            FieldReservation.user_id == user_id,
            FieldReservation.status == ReservationStatus.ACTIVE,
            FieldReservation.start_date >= period_start,
            FieldReservation.start_date < period_end,
        )
        if field_id is not None:
            query = query.filter(FieldReservation.field_id == field_id)
        return query.scalar() or 0

    def get_multi_by_user(
        self,
        db: Session,
        *,
        user_id: str,
        include_deleted: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> List[FieldReservation]:
        query = db.query(FieldReservation).filter(FieldReservation.user_id == user_id)
        if not include_deleted:
            query = query.filter(FieldReservation.status == ReservationStatus.ACTIVE)
        return (
            query.order_by(FieldReservation.start_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def insert_reservation(
        self,
        db: Session,
        *,
        field_id: str,
        user_id: str,
        description: Optional[str],
        start: datetime,
        end: datetime,
        quota: Optional[Tuple[datetime, datetime, int]] = None,
    ) -> FieldReservation:
        """
        Insert a reservation after re-checking overlap under a lock.

        The field row is locked with SELECT ... FOR UPDATE so concurrent
        inserts for the same field are serialized; on PostgreSQL the
        exclusion constraint is the last line of defense and surfaces as an
        IntegrityError.

        ``quota`` is ``(period_start, period_end, max_reservations)``; when
        given, the user's count on this field is re-checked under the same lock.
        """
        try:
            field_obj = db.query(Field).filter(Field.id == field_id).with_for_update().first()
            if not field_obj:
                db.rollback()
                raise ReservationError(
                    f"Field {field_id} not found", RejectionReason.NOT_FOUND
                )

            clashing = [
                r
                for r in self.list_overlapping(db, field_id=field_id, start=start, end=end)
                if intervals_overlap(r.start_date, r.end_date, start, end)
            ]
            if clashing:
                logger.info(
                    f"Reservation for user {user_id} on field {field_id} lost the race "
                    f"to {clashing[0].id}"
                )
                db.rollback()
                raise ReservationRejected(
                    RejectionReason.SLOT_CONFLICT,
                    "Field overlaps with another reservation",
                )

            if quota is not None:
                period_start, period_end, max_reservations = quota
                count = self.count_user_reservations(
                    db,
                    user_id=user_id,
                    period_start=period_start,
                    period_end=period_end,
                    field_id=field_id,
                )
                if count >= max_reservations:
                    logger.info(
                        f"Reservation for user {user_id} on field {field_id} lost the race "
                        f"for the last quota slot"
                    )
                    db.rollback()
                    raise ReservationRejected(
                        RejectionReason.QUOTA_EXCEEDED,
                        f"Only {max_reservations} reservation(s) per period are allowed",
                    )

            reservation = FieldReservation(
                field_id=field_id,
                user_id=user_id,
                description=description,
                start_date=ensure_utc(start),
                end_date=ensure_utc(end),
                status=ReservationStatus.ACTIVE,
            )
            db.add(reservation)
            db.commit()
            db.refresh(reservation)

            logger.info(f"Reservation {reservation.id} created for user {user_id} on field {field_id}")
            return reservation

        except ReservationError:
            raise
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Exclusion constraint rejected reservation on field {field_id}: {e.orig}")
            raise ReservationRejected(
                RejectionReason.SLOT_CONFLICT,
                "Field overlaps with another reservation",
            ) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Failed to create reservation for user {user_id}, field {field_id}: {str(e)}",
                exc_info=True,
                extra={"user_id": user_id, "field_id": field_id},
            )
            raise StorageError("Failed to create reservation") from e

    def soft_delete(
        self, db: Session, *, reservation_id: str, now: datetime
    ) -> FieldReservation:
        try:
            reservation = (
                db.query(FieldReservation)
                .filter(FieldReservation.id == reservation_id)
                .with_for_update()
                .first()
            )
            if not reservation:
                db.rollback()
                raise ReservationError(
                    f"Reservation {reservation_id} not found", RejectionReason.NOT_FOUND
                )
            mark_deleted(reservation, now)
            db.commit()
            db.refresh(reservation)
            logger.info(f"Reservation {reservation_id} deleted")
            return reservation
        except ReservationError:
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Failed to delete reservation {reservation_id}: {str(e)}",
                exc_info=True,
                extra={"reservation_id": reservation_id},
            )
            raise StorageError("Failed to delete reservation") from e


field_reservation = CRUDFieldReservation()


class SqlAlchemyReservationStore:
    """Adapts the CRUD layer to the ``ReservationStore`` interface of the engine."""

    def __init__(self, db: Session):
        self.db = db

    def get_field(self, field_id: str) -> Optional[Field]:
        try:
            return self.db.query(Field).filter(Field.id == field_id).first()
        except SQLAlchemyError as e:
            self._fail("load field", e)

    def list_overlapping_reservations(
        self, field_id: str, start: datetime, end: datetime
    ) -> List[FieldReservation]:
        try:
            return field_reservation.list_overlapping(
                self.db, field_id=field_id, start=start, end=end
            )
        except SQLAlchemyError as e:
            self._fail("query overlapping reservations", e)

    def count_user_reservations(
        self,
        user_id: str,
        period_start: datetime,
        period_end: datetime,
        field_id: Optional[str] = None,
    ) -> int:
        try:
            return field_reservation.count_user_reservations(
                self.db,
                user_id=user_id,
                period_start=period_start,
                period_end=period_end,
                field_id=field_id,
            )
        except SQLAlchemyError as e:
            self._fail("count user reservations", e)

    def get_reservation(self, reservation_id: str) -> Optional[FieldReservation]:
        try:
            return field_reservation.get(self.db, id=reservation_id)
        except SQLAlchemyError as e:
            self._fail("load reservation", e)

    def authorize_member(self, user_id: str, association_id: str) -> bool:
        try:
            return relations.authorize_member(
                self.db, user_id=user_id, association_id=association_id
            )
        except SQLAlchemyError as e:
            self._fail("check membership", e)

    def insert_reservation(
        self,
        field_id: str,
        user_id: str,
        description: Optional[str],
        start: datetime,
        end: datetime,
        quota: Optional[Tuple[datetime, datetime, int]] = None,
    ) -> FieldReservation:
        return field_reservation.insert_reservation(
            self.db,
            field_id=field_id,
            user_id=user_id,
            description=description,
            start=start,
            end=end,
            quota=quota,
        )

    def soft_delete_reservation(self, reservation_id: str, now: datetime) -> FieldReservation:
        return field_reservation.soft_delete(self.db, reservation_id=reservation_id, now=now)

    def _fail(self, action: str, error: SQLAlchemyError):
        self.db.rollback()
        logger.error(f"Storage failure while trying to {action}: {error}", exc_info=True)
        raise StorageError(f"Failed to {action}") from error
