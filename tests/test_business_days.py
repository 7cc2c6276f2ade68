"""Tests for working-day calendar arithmetic."""

from datetime import date, datetime, timedelta

import pytest

from sprintcast import context
from sprintcast.business_days import (
    add_business_days,
    business_day_diff,
    coerce_date,
    is_business_day,
)


class TestCoerceDate:
    """Test normalization of date-like values."""

    def test_date_passes_through(self) -> None:
        assert coerce_date(date(2024, 1, 5)) == date(2024, 1, 5)

    def test_datetime_drops_time(self) -> None:
        assert coerce_date(datetime(2024, 1, 5, 17, 30)) == date(2024, 1, 5)

    def test_iso_strings(self) -> None:
        assert coerce_date("2024-01-05") == date(2024, 1, 5)
        assert coerce_date("2024-01-05T09:30:00Z") == date(2024, 1, 5)
        assert coerce_date(" 2024-01-05 ") == date(2024, 1, 5)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2024-13-40", 42, [2024]])
    def test_invalid_values_give_none(self, value: object) -> None:
        assert coerce_date(value) is None


class TestAddBusinessDays:
    """Test advancing by working days."""

    def test_five_days_from_monday_is_next_monday(self) -> None:
        assert add_business_days(date(2024, 1, 1), 5) == date(2024, 1, 8)

    def test_skips_weekend(self) -> None:
        # Friday + 1 -> Monday
        assert add_business_days(date(2024, 1, 5), 1) == date(2024, 1, 8)

    def test_start_on_weekend(self) -> None:
        # Saturday + 1 -> Monday
        assert add_business_days(date(2024, 1, 6), 1) == date(2024, 1, 8)

    @pytest.mark.parametrize("days", [0, -1, -10])
    def test_non_positive_returns_start(self, days: int) -> None:
        assert add_business_days(date(2024, 1, 6), days) == date(2024, 1, 6)

    def test_fractional_days_round_up(self) -> None:
        assert add_business_days(date(2024, 1, 1), 2.5) == date(2024, 1, 4)

    def test_accepts_strings_and_datetimes(self) -> None:
        assert add_business_days("2024-01-01", 5) == date(2024, 1, 8)
        assert add_business_days(datetime(2024, 1, 1, 23, 59), 5) == date(2024, 1, 8)

    def test_invalid_start_falls_back_to_today(self) -> None:
        context.set_as_of(date(2024, 6, 3))
        assert add_business_days("garbage", 5) == date(2024, 6, 3)
        assert add_business_days(None, 5) == date(2024, 6, 3)


class TestBusinessDayDiff:
    """Test counting working days between dates."""

    def test_one_week(self) -> None:
        assert business_day_diff(date(2024, 1, 1), date(2024, 1, 8)) == 5

    def test_same_day_is_zero(self) -> None:
        assert business_day_diff(date(2024, 1, 3), date(2024, 1, 3)) == 0

    def test_end_before_start_is_zero(self) -> None:
        assert business_day_diff(date(2024, 1, 8), date(2024, 1, 1)) == 0

    def test_friday_to_monday(self) -> None:
        assert business_day_diff(date(2024, 1, 5), date(2024, 1, 8)) == 1

    def test_weekend_only_span(self) -> None:
        assert business_day_diff(date(2024, 1, 6), date(2024, 1, 7)) == 0

    def test_whole_weeks(self) -> None:
        assert business_day_diff(date(2024, 1, 1), date(2024, 1, 29)) == 20

    def test_invalid_inputs_give_zero(self) -> None:
        assert business_day_diff(None, date(2024, 1, 8)) == 0
        assert business_day_diff(date(2024, 1, 1), "nope") == 0

    def test_accepts_strings(self) -> None:
        assert business_day_diff("2024-01-01", "2024-01-08") == 5


class TestRoundTrip:
    """Adding n working days and measuring the gap gives n back."""

    @pytest.mark.parametrize("offset", range(5))
    def test_round_trip_from_each_weekday(self, offset: int) -> None:
        start = date(2024, 1, 1) + timedelta(days=offset)
        assert is_business_day(start)
        for n in range(0, 45):
            assert business_day_diff(start, add_business_days(start, n)) == n

    def test_is_business_day(self) -> None:
        assert is_business_day(date(2024, 1, 5))
        assert not is_business_day(date(2024, 1, 6))
        assert not is_business_day(date(2024, 1, 7))
