"""
Date Range Calculator

Computes inclusive [start, end] boundaries for week, month and year
periods around a reference date. Weeks start on Monday.

DESIGN DECISION: Unknown periods raise InvalidPeriodError.
A typo such as "mnth" must not silently produce a month summary.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from expense_core.models.expense import DateRange, ExpensePeriod

Reference = Union[date, datetime]


class InvalidPeriodError(ValueError):
    """Period is not one of week, month, year."""

    def __init__(self, period):
        self.period = period
        allowed = ", ".join(p.value for p in ExpensePeriod)
        super().__init__(f"Unknown period {period!r}; expected one of: {allowed}")


def coerce_period(period: Union[ExpensePeriod, str]) -> ExpensePeriod:
    """Turn "week"/"month"/"year" into an ExpensePeriod."""
    if isinstance(period, ExpensePeriod):
        return period
    try:
        return ExpensePeriod(period)
    except ValueError:
        raise InvalidPeriodError(period) from None


def _start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def _end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)


def _normalize(reference: Optional[Reference]) -> datetime:
    if reference is None:
        return datetime.now()
    if isinstance(reference, datetime):
        return reference
    return datetime.combine(reference, time.min)


def get_date_range(
    period: Union[ExpensePeriod, str],
    reference: Optional[Reference] = None,
) -> DateRange:
    """
    Get the period containing the reference date.

    Args:
        period: week, month or year
        reference: Date or datetime inside the period. Defaults to now.
                   A timezone-aware reference yields aware boundaries.

    Returns:
        DateRange whose start is the first instant of the period and
        whose end is the last instant (23:59:59.999999) of its final day.

    Raises:
        InvalidPeriodError: If period is not recognized
    """
    period = coerce_period(period)
    ref = _normalize(reference)

    if period is ExpensePeriod.WEEK:
        monday = ref - timedelta(days=ref.weekday())
        sunday = monday + timedelta(days=6)
        return DateRange(start=_start_of_day(monday), end=_end_of_day(sunday))

    if period is ExpensePeriod.YEAR:
        return DateRange(
            start=_start_of_day(ref.replace(month=1, day=1)),
            end=_end_of_day(ref.replace(month=12, day=31)),
        )

    last_day = calendar.monthrange(ref.year, ref.month)[1]
    return DateRange(
        start=_start_of_day(ref.replace(day=1)),
        end=_end_of_day(ref.replace(day=last_day)),
    )


def get_previous_range(
    period: Union[ExpensePeriod, str],
    reference: Optional[Reference] = None,
) -> DateRange:
    """Get the period immediately before the one containing reference."""
    current = get_date_range(period, reference)
    return get_date_range(period, current.start - timedelta(microseconds=1))
