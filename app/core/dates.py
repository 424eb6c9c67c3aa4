"""Calendar helpers: local dates, billable days, month and quarter windows."""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from app.core.records import DateLike, Holiday
from app.errors import InvalidMonthError, MissingInputError

logger = logging.getLogger(__name__)

# (start month, fixed end day) for Q1..Q4. The end days match the true
# month ends of March, June, September and December.
QUARTER_LAYOUT: Tuple[Tuple[int, int], ...] = ((1, 31), (4, 30), (7, 30), (10, 31))
MONTHS_PER_QUARTER = 3


@dataclass(frozen=True)
class QuarterWindow:
    """A fixed three-month quarter of a calendar year."""

    index: int
    start: date
    end: date

    @property
    def start_month(self) -> int:
        return self.start.month

    @property
    def months(self) -> List[int]:
        return [self.start_month + offset for offset in range(MONTHS_PER_QUARTER)]

    def contains_month(self, month: int) -> bool:
        return self.start_month <= month <= self.end.month


def parse_local_date(value: DateLike) -> Optional[date]:
    """Return the calendar date encoded in ``value`` without timezone shifts.

    Strings are truncated to their ``YYYY-MM-DD`` prefix so UTC-midnight
    timestamps keep their calendar day. Empty or malformed input yields None.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()[:10]
    try:
        year, month, day = (int(part) for part in text.split("-"))
        return date(year, month, day)
    except (TypeError, ValueError):
        logger.warning("Ignoring unparsable date value %r", value)
        return None


def format_local_date(value: date) -> str:
    """Render a date as zero-padded YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_month(value: Optional[str]) -> Tuple[int, int]:
    """Split a ``YYYY-MM`` month parameter into (year, month)."""
    if value is None or not str(value).strip():
        raise MissingInputError("Month is required as YYYY-MM")
    try:
        year, month = map(int, str(value).strip().split("-"))
    except ValueError as exc:
        raise InvalidMonthError(f"Month must be provided in YYYY-MM format, got {value!r}") from exc
    if not 1 <= month <= 12:
        raise InvalidMonthError(f"Month must be between 01 and 12, got {value!r}")
    return year, month


def is_weekday(value: date) -> bool:
    return value.weekday() < 5


def build_holiday_set(holidays: Iterable[Holiday], year: Optional[int] = None) -> Set[str]:
    """Collect formatted holiday dates, optionally restricted to one year."""
    holiday_set: Set[str] = set()
    for holiday in holidays:
        parsed = parse_local_date(holiday.date)
        if parsed is None:
            continue
        if year is not None and parsed.year != year:
            continue
        holiday_set.add(format_local_date(parsed))
    return holiday_set


def is_holiday(value: date, holiday_set: Set[str]) -> bool:
    return format_local_date(value) in holiday_set


def is_billable_day(value: date, holiday_set: Set[str]) -> bool:
    """A billable day is a weekday that is not a public holiday."""
    return is_weekday(value) and not is_holiday(value, holiday_set)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_billable_days(start: date, end: date, holiday_set: Set[str]) -> int:
    """Count billable days in the inclusive range; an empty range counts 0."""
    return sum(1 for day in iter_days(start, end) if is_billable_day(day, holiday_set))


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Return the first and last calendar day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def quarter_windows(year: int) -> List[QuarterWindow]:
    """Return the four quarters of ``year`` in order."""
    windows: List[QuarterWindow] = []
    for index, (start_month, end_day) in enumerate(QUARTER_LAYOUT, start=1):
        end_month = start_month + MONTHS_PER_QUARTER - 1
        windows.append(
            QuarterWindow(
                index=index,
                start=date(year, start_month, 1),
                end=date(year, end_month, end_day),
            )
        )
    return windows


def quarter_for_month(year: int, month: int) -> QuarterWindow:
    for window in quarter_windows(year):
        if window.contains_month(month):
            return window
    raise InvalidMonthError(f"Month must be between 01 and 12, got {month!r}")


__all__ = [
    "MONTHS_PER_QUARTER",
    "QUARTER_LAYOUT",
    "QuarterWindow",
    "build_holiday_set",
    "count_billable_days",
    "format_local_date",
    "format_month",
    "is_billable_day",
    "is_holiday",
    "is_weekday",
    "iter_days",
    "month_bounds",
    "parse_local_date",
    "parse_month",
    "quarter_for_month",
    "quarter_windows",
]
