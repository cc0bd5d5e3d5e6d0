from datetime import date, datetime, timedelta

import pytest

from calendar_logic import (
    add_months_clamped,
    as_day,
    build_weeks,
    days_in_month,
    is_supported_month,
    last_day_of_month,
    normalize_month,
    shift_month,
    sunday_weekday,
)


def test_normalize_month_wraps_years() -> None:
    assert normalize_month(2024, -1) == (2023, 11)
    assert normalize_month(2024, 12) == (2025, 0)
    assert normalize_month(2024, 25) == (2026, 1)
    assert shift_month(2024, 0, -1) == (2023, 11)
    assert shift_month(2024, 11, 1) == (2025, 0)


def test_last_day_of_month() -> None:
    assert last_day_of_month(2024, 1) == date(2024, 2, 29)
    assert last_day_of_month(2023, 1) == date(2023, 2, 28)
    assert last_day_of_month(2024, -1) == date(2023, 12, 31)
    assert last_day_of_month(2024, 12) == date(2025, 1, 31)
    assert days_in_month(2024, 3) == 30


@pytest.mark.parametrize("year", [1999, 2000, 2023, 2024, 2100])
@pytest.mark.parametrize("first_day", range(7))
def test_weeks_are_complete_and_start_on_first_day(year: int, first_day: int) -> None:
    for month in range(12):
        weeks = build_weeks(year, month, first_day)
        assert 4 <= len(weeks) <= 6
        flat = [d for row in weeks for d in row]
        for row in weeks:
            assert len(row) == 7
            assert sunday_weekday(row[0]) == first_day
        # Consecutive days, covering the whole month
        assert all(b - a == timedelta(days=1) for a, b in zip(flat, flat[1:]))
        assert date(year, month + 1, 1) in flat
        assert last_day_of_month(year, month) in flat
        assert flat[0] > date(year, month + 1, 1) - timedelta(days=7)
        assert flat[-1] < last_day_of_month(year, month) + timedelta(days=7)


def test_weeks_known_month() -> None:
    # March 2024 starts on a Friday
    weeks = build_weeks(2024, 2, 0)
    assert weeks[0][0] == date(2024, 2, 25)
    assert weeks[0][5] == date(2024, 3, 1)
    assert weeks[-1][-1] == date(2024, 4, 6)
    monday_weeks = build_weeks(2024, 2, 1)
    assert monday_weeks[0][0] == date(2024, 2, 26)


def test_february_starting_on_first_day_has_four_rows() -> None:
    # February 2015 begins on a Sunday and has 28 days
    assert len(build_weeks(2015, 1, 0)) == 4


@pytest.mark.parametrize("year, month, edge", [(1, 0, date.min), (9999, 11, date.max)])
@pytest.mark.parametrize("first_day", range(7))
def test_weeks_at_ends_of_date_range(year: int, month: int, edge: date, first_day: int) -> None:
    weeks = build_weeks(year, month, first_day)
    assert all(len(row) == 7 for row in weeks)
    flat = [d for row in weeks for d in row]
    days = [d for d in flat if d is not None]
    assert edge in days
    assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:]))
    # Blank cells only pad the side beyond the edge
    if edge == date.min:
        assert days[0] == edge
        assert flat[flat.index(edge):] == days
    else:
        assert days[-1] == edge
        assert flat[:flat.index(edge) + 1] == days


def test_weeks_first_month_pads_with_none() -> None:
    # 1 January of year 1 is a Monday
    weeks = build_weeks(1, 0, 0)
    assert weeks[0][:2] == [None, date(1, 1, 1)]
    assert build_weeks(1, 0, 1)[0][0] == date(1, 1, 1)


def test_unsupported_months() -> None:
    assert build_weeks(10000, 0) == []
    assert build_weeks(1, -1) == []
    assert is_supported_month(9999, 11)
    assert is_supported_month(1, 0)
    assert not is_supported_month(9999, 12)
    assert not is_supported_month(1, -1)


def test_add_months_clamped() -> None:
    assert add_months_clamped(date(2023, 3, 30), -1) == date(2023, 2, 28)
    assert add_months_clamped(date(2024, 3, 30), -1) == date(2024, 2, 29)
    assert add_months_clamped(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months_clamped(date(2024, 12, 15), 1) == date(2025, 1, 15)
    assert add_months_clamped(date(2024, 1, 15), -1) == date(2023, 12, 15)


def test_add_months_does_not_touch_argument() -> None:
    d = date(2024, 3, 30)
    add_months_clamped(d, -1)
    assert d == date(2024, 3, 30)


def test_as_day_and_weekday() -> None:
    assert as_day(datetime(2024, 3, 15, 10, 30)) == date(2024, 3, 15)
    assert sunday_weekday(date(2024, 3, 17)) == 0
    assert sunday_weekday(date(2024, 3, 16)) == 6
