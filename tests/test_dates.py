from datetime import date, datetime

import pytest

from app.core.dates import (
    build_holiday_set,
    count_billable_days,
    format_local_date,
    is_billable_day,
    is_weekday,
    month_bounds,
    parse_local_date,
    parse_month,
    quarter_for_month,
    quarter_windows,
)
from app.core.records import Holiday
from app.errors import InvalidMonthError, MissingInputError


def test_parse_local_date_keeps_calendar_day_of_utc_timestamp():
    assert parse_local_date("2025-01-15T00:00:00.000Z") == date(2025, 1, 15)
    assert parse_local_date("2025-01-15") == date(2025, 1, 15)


def test_parse_local_date_accepts_date_and_datetime():
    assert parse_local_date(date(2025, 6, 2)) == date(2025, 6, 2)
    assert parse_local_date(datetime(2025, 6, 2, 23, 45)) == date(2025, 6, 2)


@pytest.mark.parametrize("value", [None, "", "not-a-date", "2025-02-30", "2025/01/15"])
def test_parse_local_date_returns_none_for_bad_input(value):
    assert parse_local_date(value) is None


def test_format_local_date_zero_pads():
    assert format_local_date(date(2025, 3, 7)) == "2025-03-07"


def test_format_then_parse_returns_same_date():
    for value in (date(2024, 2, 29), date(2025, 12, 31), date(1999, 1, 1)):
        assert parse_local_date(format_local_date(value)) == value


def test_parse_month():
    assert parse_month("2025-03") == (2025, 3)
    with pytest.raises(MissingInputError):
        parse_month(None)
    with pytest.raises(MissingInputError):
        parse_month("  ")
    with pytest.raises(InvalidMonthError):
        parse_month("2025-13")
    with pytest.raises(InvalidMonthError):
        parse_month("March 2025")


def test_weekday_and_billable_classification():
    saturday = date(2025, 1, 4)
    monday = date(2025, 1, 6)
    assert not is_weekday(saturday)
    assert is_weekday(monday)
    assert is_billable_day(monday, set())
    assert not is_billable_day(monday, {"2025-01-06"})


def test_full_week_without_holidays_has_five_billable_days():
    assert count_billable_days(date(2025, 1, 6), date(2025, 1, 12), set()) == 5
    assert count_billable_days(date(2025, 1, 8), date(2025, 1, 14), set()) == 5


def test_count_billable_days_excludes_holidays_and_empty_ranges():
    assert count_billable_days(date(2025, 1, 6), date(2025, 1, 12), {"2025-01-08"}) == 4
    assert count_billable_days(date(2025, 1, 12), date(2025, 1, 6), set()) == 0


def test_month_working_days():
    first, last = month_bounds(2025, 1)
    assert count_billable_days(first, last, set()) == 23
    first, last = month_bounds(2025, 2)
    assert count_billable_days(first, last, set()) == 20


def test_month_bounds_handles_leap_february():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))


def test_quarter_windows_use_fixed_end_days():
    windows = quarter_windows(2024)
    assert [window.start for window in windows] == [
        date(2024, 1, 1),
        date(2024, 4, 1),
        date(2024, 7, 1),
        date(2024, 10, 1),
    ]
    assert [window.end for window in windows] == [
        date(2024, 3, 31),
        date(2024, 6, 30),
        date(2024, 9, 30),
        date(2024, 12, 31),
    ]
    assert windows[1].months == [4, 5, 6]


def test_quarter_for_month():
    assert quarter_for_month(2025, 5).index == 2
    assert quarter_for_month(2025, 12).index == 4


def test_build_holiday_set_filters_year_and_skips_bad_dates():
    holidays = [
        Holiday(date="2025-01-01T00:00:00Z", name="New Year"),
        Holiday(date=date(2024, 12, 25)),
        Holiday(date="bogus"),
    ]
    assert build_holiday_set(holidays, 2025) == {"2025-01-01"}
    assert build_holiday_set(holidays) == {"2025-01-01", "2024-12-25"}
