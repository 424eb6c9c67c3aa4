"""Quarterly vacation allowance and excess-day deductions for salaried staff.

Each quarter grants a free allowance of billable vacation days. Billable
vacation days beyond the allowance are spread over the quarter's months in
proportion to where the vacation was taken (largest-remainder method) and
each month's share is charged at that month's daily salary rate.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, List, Optional, Sequence, Set

from app.core.dates import (
    MONTHS_PER_QUARTER,
    QuarterWindow,
    count_billable_days,
    format_month,
    is_billable_day,
    iter_days,
    month_bounds,
    parse_local_date,
    quarter_for_month,
)
from app.core.money import ZERO, round_money, to_decimal
from app.core.records import Vacation, VacationDeduction

logger = logging.getLogger(__name__)

FREE_VACATION_DAYS_PER_QUARTER = 2


@dataclass
class QuarterVacationUsage:
    """Billable vacation days counted inside one quarter."""

    window: QuarterWindow
    total_days: int = 0
    days_per_month: List[int] = field(default_factory=lambda: [0] * MONTHS_PER_QUARTER)

    def excess_days(self, free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER) -> int:
        """Days above the allowance; zero while the allowance is not exceeded."""

        if self.total_days <= free_allowance:
            return 0
        return self.total_days - free_allowance


def tally_quarter_vacation(
    vacations: Iterable[Vacation],
    window: QuarterWindow,
    holiday_set: Set[str],
) -> QuarterVacationUsage:
    """Count billable vacation days per month of ``window``.

    Intervals are clipped to the quarter. Overlapping intervals are counted
    independently, so a day covered twice counts twice. Intervals with an
    unparsable start or end contribute nothing.
    """

    usage = QuarterVacationUsage(window=window)
    for vacation in vacations:
        start = parse_local_date(vacation.start_date)
        end = parse_local_date(vacation.end_date)
        if start is None or end is None:
            continue
        clipped_start = max(start, window.start)
        clipped_end = min(end, window.end)
        if clipped_start > clipped_end:
            continue
        for day in iter_days(clipped_start, clipped_end):
            if not is_billable_day(day, holiday_set):
                continue
            usage.total_days += 1
            usage.days_per_month[day.month - window.start_month] += 1
    return usage


def allocate_excess(excess_days: int, days_per_month: Sequence[int]) -> List[int]:
    """Apportion ``excess_days`` across months using largest remainders.

    Each month with vacation receives the floor of its proportional share;
    the leftover days go one each to the months with the largest fractional
    remainder, ties resolved by month order. The result always sums to
    ``excess_days``.
    """

    count = len(days_per_month)
    allocations = [0] * count
    total = sum(days_per_month)
    if excess_days <= 0 or total <= 0:
        return allocations

    fractions = [Fraction(0)] * count
    for index, days in enumerate(days_per_month):
        if days <= 0:
            continue
        exact = Fraction(excess_days * days, total)
        allocations[index] = math.floor(exact)
        fractions[index] = exact - allocations[index]

    leftover = excess_days - sum(allocations)
    # sorted() is stable, so equal remainders keep month order
    ranked = sorted(range(count), key=lambda index: fractions[index], reverse=True)
    for index in ranked[:leftover]:
        allocations[index] += 1
    return allocations


def deduction_for_month(
    annual_salary: Decimal,
    usage: QuarterVacationUsage,
    month: int,
    holiday_set: Set[str],
    free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER,
) -> Optional[VacationDeduction]:
    """Return the deduction charged to ``month`` for this quarter's usage."""

    window = usage.window
    if not window.contains_month(month):
        return None
    excess = usage.excess_days(free_allowance)
    if excess == 0:
        return None

    allocations = allocate_excess(excess, usage.days_per_month)
    relative = month - window.start_month
    deduct_days = allocations[relative]

    year = window.start.year
    first_day, last_day = month_bounds(year, month)
    working_days = count_billable_days(first_day, last_day, holiday_set)
    if working_days == 0 or deduct_days == 0:
        return None

    daily_salary = to_decimal(annual_salary) / 12 / working_days
    amount = round_money(daily_salary * deduct_days)
    logger.debug(
        "Vacation deduction %s: days_per_month=%s total=%s excess=%s allocations=%s "
        "deduct_days=%s working_days=%s amount=%s",
        format_month(year, month),
        usage.days_per_month,
        usage.total_days,
        excess,
        allocations,
        deduct_days,
        working_days,
        amount,
    )
    return VacationDeduction(month=format_month(year, month), deduct_days=deduct_days, amount=amount)


def compute_vacation_deductions(
    annual_salary,
    vacations: Sequence[Vacation],
    year: int,
    month: int,
    holiday_set: Set[str],
    free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER,
) -> List[VacationDeduction]:
    """Deductions the quarter containing ``month`` charges to that month.

    The list holds zero or one record. Raises ``InvalidMonthError`` for a
    month outside 1-12.
    """

    window = quarter_for_month(year, month)
    usage = tally_quarter_vacation(vacations, window, holiday_set)
    deduction = deduction_for_month(
        to_decimal(annual_salary), usage, month, holiday_set, free_allowance
    )
    return [deduction] if deduction is not None else []


def total_deduction(deductions: Iterable[VacationDeduction]) -> Decimal:
    return sum((item.amount for item in deductions), ZERO)


__all__ = [
    "FREE_VACATION_DAYS_PER_QUARTER",
    "QuarterVacationUsage",
    "allocate_excess",
    "compute_vacation_deductions",
    "deduction_for_month",
    "tally_quarter_vacation",
    "total_deduction",
]
