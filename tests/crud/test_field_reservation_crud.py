from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from hood_service import crud
from hood_service.constants.reservation import ReservationStatus
from hood_service.core.clock import ensure_utc
from hood_service.crud.crud_field_reservation import SqlAlchemyReservationStore
from hood_service.models.field_reservation import FieldReservation
from hood_service.reservations.errors import (
    RejectionReason,
    ReservationError,
    ReservationRejected,
    StorageError,
)
from tests.utils.association import create_random_association
from tests.utils.field import create_random_field
from tests.utils.user import create_random_user

UTC = timezone.utc
DAY = datetime(2024, 6, 10, tzinfo=UTC)


def at(hour: int, minute: int = 0, day: datetime = DAY) -> datetime:
    return day + timedelta(hours=hour, minutes=minute)


@pytest.fixture
def setup(db_session: Session):
    owner = create_random_user(db_session, "usr_owner")
    association = create_random_association(db_session, founder_id=owner.id)
    field_obj = create_random_field(db_session, association.id)
    return owner, field_obj


def book(db: Session, field_id: str, user_id: str, start: datetime, end: datetime):
    return crud.field_reservation.insert_reservation(
        db, field_id=field_id, user_id=user_id, description=None, start=start, end=end
    )


def test_insert_reservation(db_session: Session, setup):
    owner, field_obj = setup

    reservation = book(db_session, field_obj.id, owner.id, at(10), at(11))

    assert reservation.id.startswith("res_")
    assert reservation.status == ReservationStatus.ACTIVE
    assert reservation.deleted is False
    assert ensure_utc(reservation.start_date) == at(10)
    assert ensure_utc(reservation.end_date) == at(11)


def test_insert_stores_utc(db_session: Session, setup):
    owner, field_obj = setup
    sao_paulo = timezone(timedelta(hours=-3))

    reservation = book(
        db_session,
        field_obj.id,
        owner.id,
        datetime(2024, 6, 10, 7, 0, tzinfo=sao_paulo),
        datetime(2024, 6, 10, 8, 0, tzinfo=sao_paulo),
    )

    assert ensure_utc(reservation.start_date) == at(10)


def test_guarded_insert_refuses_overlap(db_session: Session, setup):
    owner, field_obj = setup
    book(db_session, field_obj.id, owner.id, at(10), at(11))

    with pytest.raises(ReservationRejected) as exc_info:
        book(db_session, field_obj.id, owner.id, at(10, 30), at(11, 30))

    assert exc_info.value.reason == RejectionReason.SLOT_CONFLICT
    assert len(crud.field_reservation.get_multi_by_user(db_session, user_id=owner.id)) == 1


def test_guarded_insert_allows_back_to_back(db_session: Session, setup):
    owner, field_obj = setup
    book(db_session, field_obj.id, owner.id, at(10), at(11))

    second = book(db_session, field_obj.id, owner.id, at(11), at(12))

    assert second.status == ReservationStatus.ACTIVE


def test_guarded_insert_rechecks_quota(db_session: Session, setup):
    owner, field_obj = setup
    quota = (DAY, DAY + timedelta(days=1), 1)
    crud.field_reservation.insert_reservation(
        db_session, field_id=field_obj.id, user_id=owner.id, description=None,
        start=at(10), end=at(11), quota=quota,
    )

    with pytest.raises(ReservationRejected) as exc_info:
        crud.field_reservation.insert_reservation(
            db_session, field_id=field_obj.id, user_id=owner.id, description=None,
            start=at(12), end=at(13), quota=quota,
        )

    assert exc_info.value.reason == RejectionReason.QUOTA_EXCEEDED
    assert len(crud.field_reservation.get_multi_by_user(db_session, user_id=owner.id)) == 1


def test_status_outside_the_lifecycle_is_refused(db_session: Session, setup):
    owner, field_obj = setup
    db_session.add(
        FieldReservation(
            field_id=field_obj.id, user_id=owner.id, start_date=at(10), end_date=at(11),
            status="PAUSED",
        )
    )

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_guarded_insert_unknown_field(db_session: Session, setup):
    owner, _ = setup

    with pytest.raises(ReservationError) as exc_info:
        book(db_session, "fld_missing", owner.id, at(10), at(11))
    assert exc_info.value.reason == RejectionReason.NOT_FOUND


def test_list_overlapping_ignores_deleted_and_adjacent(db_session: Session, setup):
    owner, field_obj = setup
    early = book(db_session, field_obj.id, owner.id, at(8), at(9))
    kept = book(db_session, field_obj.id, owner.id, at(10), at(11))
    gone = book(db_session, field_obj.id, owner.id, at(12), at(13))
    crud.field_reservation.soft_delete(db_session, reservation_id=gone.id, now=at(7))

    found = crud.field_reservation.list_overlapping(
        db_session, field_id=field_obj.id, start=at(9), end=at(13)
    )

    assert [r.id for r in found] == [kept.id]
    assert early.id not in [r.id for r in found]


def test_count_user_reservations_per_period(db_session: Session, setup):
    owner, field_obj = setup
    other_field = create_random_field(db_session, field_obj.association_id)
    book(db_session, field_obj.id, owner.id, at(10), at(11))
    book(db_session, other_field.id, owner.id, at(10), at(11))
    book(db_session, field_obj.id, owner.id, at(10, day=DAY + timedelta(days=1)), at(11, day=DAY + timedelta(days=1)))
    deleted = book(db_session, field_obj.id, owner.id, at(14), at(15))
    crud.field_reservation.soft_delete(db_session, reservation_id=deleted.id, now=at(7))

    window = dict(period_start=DAY, period_end=DAY + timedelta(days=1))

    assert crud.field_reservation.count_user_reservations(
        db_session, user_id=owner.id, field_id=field_obj.id, **window
    ) == 1
    assert crud.field_reservation.count_user_reservations(
        db_session, user_id=owner.id, **window
    ) == 2
    assert crud.field_reservation.count_user_reservations(
        db_session, user_id="usr_nobody", **window
    ) == 0


def test_soft_delete_is_idempotent(db_session: Session, setup):
    owner, field_obj = setup
    reservation = book(db_session, field_obj.id, owner.id, at(10), at(11))

    crud.field_reservation.soft_delete(db_session, reservation_id=reservation.id, now=at(7))
    again = crud.field_reservation.soft_delete(
        db_session, reservation_id=reservation.id, now=at(8)
    )

    assert again.status == ReservationStatus.DELETED
    assert again.deleted is True
    assert ensure_utc(again.deleted_at) == at(7)


def test_soft_delete_unknown_reservation(db_session: Session):
    with pytest.raises(ReservationError) as exc_info:
        crud.field_reservation.soft_delete(db_session, reservation_id="res_missing", now=at(7))
    assert exc_info.value.reason == RejectionReason.NOT_FOUND


def test_get_multi_by_user_include_deleted(db_session: Session, setup):
    owner, field_obj = setup
    kept = book(db_session, field_obj.id, owner.id, at(10), at(11))
    gone = book(db_session, field_obj.id, owner.id, at(12), at(13))
    crud.field_reservation.soft_delete(db_session, reservation_id=gone.id, now=at(7))

    active = crud.field_reservation.get_multi_by_user(db_session, user_id=owner.id)
    everything = crud.field_reservation.get_multi_by_user(
        db_session, user_id=owner.id, include_deleted=True
    )

    assert [r.id for r in active] == [kept.id]
    assert {r.id for r in everything} == {kept.id, gone.id}


class TestSqlAlchemyReservationStore:
    def setup_method(self):
        self.db = MagicMock()
        self.db.query.side_effect = OperationalError("SELECT 1", {}, Exception("gone"))
        self.store = SqlAlchemyReservationStore(self.db)

    def test_get_field_failure_is_a_storage_error(self):
        with pytest.raises(StorageError) as exc_info:
            self.store.get_field("fld_1")

        assert exc_info.value.reason == RejectionReason.STORAGE_ERROR
        self.db.rollback.assert_called_once()

    def test_overlap_query_failure_is_a_storage_error(self):
        with pytest.raises(StorageError):
            self.store.list_overlapping_reservations("fld_1", at(10), at(11))

    def test_count_failure_is_a_storage_error(self):
        with pytest.raises(StorageError):
            self.store.count_user_reservations("usr_1", DAY, DAY + timedelta(days=1))

    def test_insert_failure_is_a_storage_error(self):
        with pytest.raises(StorageError):
            self.store.insert_reservation("fld_1", "usr_1", None, at(10), at(11))
        self.db.rollback.assert_called()

    def test_membership_failure_is_a_storage_error(self):
        with pytest.raises(StorageError) as exc_info:
            self.store.authorize_member("usr_1", "asc_1")

        assert exc_info.value.reason == RejectionReason.STORAGE_ERROR
        self.db.rollback.assert_called_once()

    def test_reservation_lookup_failure_is_a_storage_error(self):
        with pytest.raises(StorageError):
            self.store.get_reservation("res_1")
        self.db.rollback.assert_called_once()

    def test_storage_error_message_hides_driver_detail(self):
        with pytest.raises(StorageError) as exc_info:
            self.store.get_field("fld_1")

        assert exc_info.value.message == "Failed to load field"
        assert "gone" not in exc_info.value.message
