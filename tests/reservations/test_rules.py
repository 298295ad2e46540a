import pytest
from datetime import datetime, time, timedelta, timezone

from hood_service.reservations.errors import PolicyParseError, RejectionReason
from hood_service.reservations.rules import (
    ReservationPeriod,
    ReservationRules,
    parse_rules,
)
from tests.utils.field import DAILY_RULES

UTC = timezone.utc


def _rules(**overrides) -> ReservationRules:
    values = {
        "reservations_start_at_time_utc": time(6, 0),
        "max_duration_minutes": 60,
        "max_reservations_per_period": 1,
        "reservation_period": ReservationPeriod.DAILY,
    }
    values.update(overrides)
    return ReservationRules(**values)


class TestSerialization:
    def test_stored_blob_round_trips_exactly(self):
        assert ReservationRules.from_json(DAILY_RULES).to_json() == DAILY_RULES

    def test_parsed_values(self):
        rules = ReservationRules.from_json(DAILY_RULES)

        assert rules.reservations_start_at_time_utc == time(6, 0)
        assert rules.max_duration_minutes == 60
        assert rules.max_reservations_per_period == 1
        assert rules.reservation_period is ReservationPeriod.DAILY

    def test_garbage_blob_is_a_policy_parse_error(self):
        with pytest.raises(PolicyParseError) as exc_info:
            ReservationRules.from_json("not json at all")
        assert exc_info.value.reason == RejectionReason.POLICY_PARSE_ERROR

    def test_missing_key_is_a_policy_parse_error(self):
        with pytest.raises(PolicyParseError):
            ReservationRules.from_json('{"max_duration_minutes": 60}')

    def test_unknown_period_is_a_policy_parse_error(self):
        blob = DAILY_RULES.replace('"Daily"', '"Fortnightly"')
        with pytest.raises(PolicyParseError):
            ReservationRules.from_json(blob)

    def test_negative_limits_are_refused(self):
        blob = DAILY_RULES.replace('"max_duration_minutes":60', '"max_duration_minutes":-5')
        with pytest.raises(PolicyParseError):
            ReservationRules.from_json(blob)

    @pytest.mark.parametrize("blob", [None, "", "   "])
    def test_absent_policy_means_unrestricted(self, blob):
        assert parse_rules(blob) is None


class TestCutoff:
    def test_before_opening_time(self):
        now = datetime(2024, 6, 10, 5, 0, tzinfo=UTC)
        assert _rules().is_within_cutoff(now, now + timedelta(hours=2)) is False

    def test_exactly_at_opening_time(self):
        now = datetime(2024, 6, 10, 6, 0, tzinfo=UTC)
        assert _rules().is_within_cutoff(now, now + timedelta(hours=2)) is True

    def test_start_on_another_day(self):
        now = datetime(2024, 6, 10, 9, 0, tzinfo=UTC)
        tomorrow = datetime(2024, 6, 11, 10, 0, tzinfo=UTC)
        assert _rules().is_within_cutoff(now, tomorrow) is False

    def test_day_is_judged_in_utc(self):
        # 23:30 at UTC-3 on the 10th is already the 11th in UTC.
        now = datetime(2024, 6, 11, 1, 0, tzinfo=UTC)
        start = datetime(2024, 6, 10, 23, 30, tzinfo=timezone(timedelta(hours=-3)))
        assert _rules(reservations_start_at_time_utc=time(0, 0)).is_same_day(now, start)


class TestDuration:
    def test_exact_limit_is_allowed(self):
        start = datetime(2024, 6, 10, 10, 0, tzinfo=UTC)
        assert _rules().is_within_max_duration(start, start + timedelta(minutes=60))

    def test_one_minute_over_is_refused(self):
        start = datetime(2024, 6, 10, 10, 0, tzinfo=UTC)
        assert not _rules().is_within_max_duration(start, start + timedelta(minutes=61))

    def test_partial_minutes_are_truncated(self):
        start = datetime(2024, 6, 10, 10, 0, tzinfo=UTC)
        end = start + timedelta(minutes=60, seconds=59)

        assert _rules().duration_minutes(start, end) == 60
        assert _rules().is_within_max_duration(start, end)


class TestPeriod:
    def test_daily_window_is_the_utc_day(self):
        now = datetime(2024, 6, 10, 15, 42, tzinfo=UTC)

        start, end = ReservationPeriod.DAILY.period_window(now)

        assert start == datetime(2024, 6, 10, tzinfo=UTC)
        assert end == datetime(2024, 6, 11, tzinfo=UTC)

    def test_window_is_half_open(self):
        now = datetime(2024, 6, 10, 15, 42, tzinfo=UTC)

        assert ReservationPeriod.DAILY.same_period(now, datetime(2024, 6, 10, tzinfo=UTC))
        assert not ReservationPeriod.DAILY.same_period(now, datetime(2024, 6, 11, tzinfo=UTC))

    @pytest.mark.parametrize("period", list(ReservationPeriod))
    def test_every_period_has_a_window(self, period):
        now = datetime(2024, 6, 10, 15, 42, tzinfo=UTC)

        start, end = period.period_window(now)

        assert start <= now < end
