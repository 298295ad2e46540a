from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from hood_service import crud
from hood_service.constants.reservation import ReservationStatus
from hood_service.reservations.errors import RejectionReason, ReservationError, StorageError
from hood_service.services import reservation_service
from tests.utils.association import add_member, create_random_association
from tests.utils.field import create_random_field
from tests.utils.user import create_random_user

UTC = timezone.utc
DAY = datetime(2024, 1, 1, tzinfo=UTC)


def at(hour: int, minute: int = 0, day: datetime = DAY) -> datetime:
    return day + timedelta(hours=hour, minutes=minute)


@pytest.fixture
def world(db_session: Session):
    admin = create_random_user(db_session, "usr_admin")
    member = create_random_user(db_session, "usr_member")
    outsider = create_random_user(db_session, "usr_outsider")
    association = create_random_association(db_session, founder_id=admin.id)
    add_member(db_session, association.id, member.id)
    field_obj = create_random_field(db_session, association.id)
    return member, outsider, field_obj


def reserve(db, user_id, field_id, start, end, now):
    return reservation_service.create_field_reservation(
        db,
        user_id=user_id,
        field_id=field_id,
        description="Friendly match",
        start=start,
        end=end,
        now=now,
    )


def rejection_of(call) -> RejectionReason:
    with pytest.raises(ReservationError) as exc_info:
        call()
    return exc_info.value.reason


def test_quota_is_released_by_deletion(db_session: Session, world):
    member, _, field_obj = world
    now = at(7)

    first = reserve(db_session, member.id, field_obj.id, at(10), at(11), now)
    assert first.status == ReservationStatus.ACTIVE

    assert rejection_of(
        lambda: reserve(db_session, member.id, field_obj.id, at(11), at(12), now)
    ) == RejectionReason.QUOTA_EXCEEDED

    reservation_service.delete_field_reservation(
        db_session, user_id=member.id, reservation_id=first.id, now=now
    )

    second = reserve(db_session, member.id, field_obj.id, at(11), at(12), now)
    assert second.status == ReservationStatus.ACTIVE


def test_before_opening_time(db_session: Session, world):
    member, _, field_obj = world

    assert rejection_of(
        lambda: reserve(db_session, member.id, field_obj.id, at(10), at(11), at(5))
    ) == RejectionReason.TOO_EARLY


def test_tomorrow_is_the_wrong_day(db_session: Session, world):
    member, _, field_obj = world
    tomorrow = DAY + timedelta(days=1)

    assert rejection_of(
        lambda: reserve(
            db_session, member.id, field_obj.id, at(10, day=tomorrow), at(11, day=tomorrow), at(7)
        )
    ) == RejectionReason.WRONG_DAY


def test_second_overlapping_request_loses(db_session: Session, world):
    member, _, field_obj = world
    admin_id = "usr_admin"

    reserve(db_session, admin_id, field_obj.id, at(10), at(11), at(7))

    assert rejection_of(
        lambda: reserve(db_session, member.id, field_obj.id, at(10, 30), at(11, 30), at(7))
    ) == RejectionReason.SLOT_CONFLICT


def test_outsider_is_unauthorized(db_session: Session, world):
    _, outsider, field_obj = world

    assert rejection_of(
        lambda: reserve(db_session, outsider.id, field_obj.id, at(10), at(11), at(7))
    ) == RejectionReason.UNAUTHORIZED


def test_inverted_interval(db_session: Session, world):
    member, _, field_obj = world

    assert rejection_of(
        lambda: reserve(db_session, member.id, field_obj.id, at(11), at(10), at(7))
    ) == RejectionReason.INVALID_INTERVAL


def test_unknown_field(db_session: Session, world):
    member, _, _ = world

    assert rejection_of(
        lambda: reserve(db_session, member.id, "fld_missing", at(10), at(11), at(7))
    ) == RejectionReason.NOT_FOUND


def test_only_the_owner_can_delete(db_session: Session, world):
    member, _, field_obj = world
    reservation = reserve(db_session, member.id, field_obj.id, at(10), at(11), at(7))

    assert rejection_of(
        lambda: reservation_service.delete_field_reservation(
            db_session, user_id="usr_admin", reservation_id=reservation.id, now=at(8)
        )
    ) == RejectionReason.UNAUTHORIZED


def test_list_window_must_be_shorter_than_the_limit(db_session: Session, world):
    member, _, field_obj = world

    assert rejection_of(
        lambda: reservation_service.list_field_reservations(
            db_session,
            user_id=member.id,
            field_id=field_obj.id,
            from_date_time=DAY,
            to_date_time=DAY + timedelta(days=30),
            max_days=30,
        )
    ) == RejectionReason.INVALID_INTERVAL


def test_list_returns_active_reservations_in_window(db_session: Session, world):
    member, _, field_obj = world
    kept = reserve(db_session, member.id, field_obj.id, at(10), at(11), at(7))

    found = reservation_service.list_field_reservations(
        db_session,
        user_id=member.id,
        field_id=field_obj.id,
        from_date_time=DAY,
        to_date_time=DAY + timedelta(days=29),
        max_days=30,
    )

    assert [r.id for r in found] == [kept.id]


def _database_gone(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))


def test_membership_lookup_failure_is_a_storage_error(
    db_session: Session, world, monkeypatch
):
    member, _, field_obj = world
    monkeypatch.setattr(crud.relations, "get_membership", _database_gone)

    with pytest.raises(StorageError) as exc_info:
        reserve(db_session, member.id, field_obj.id, at(10), at(11), at(7))

    assert exc_info.value.reason == RejectionReason.STORAGE_ERROR
    assert "server closed" not in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_reservation_lookup_failure_on_delete_is_a_storage_error(
    db_session: Session, world, monkeypatch
):
    member, _, field_obj = world
    reservation = reserve(db_session, member.id, field_obj.id, at(10), at(11), at(7))
    monkeypatch.setattr(crud.field_reservation, "get", _database_gone)

    assert rejection_of(
        lambda: reservation_service.delete_field_reservation(
            db_session, user_id=member.id, reservation_id=reservation.id, now=at(8)
        )
    ) == RejectionReason.STORAGE_ERROR


def test_list_membership_failure_is_a_storage_error(db_session: Session, world, monkeypatch):
    member, _, field_obj = world
    monkeypatch.setattr(crud.relations, "get_membership", _database_gone)

    assert rejection_of(
        lambda: reservation_service.list_field_reservations(
            db_session,
            user_id=member.id,
            field_id=field_obj.id,
            from_date_time=DAY,
            to_date_time=DAY + timedelta(days=1),
            max_days=30,
        )
    ) == RejectionReason.STORAGE_ERROR
