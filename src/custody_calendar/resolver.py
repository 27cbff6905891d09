"""
resolver.py

Turns a holiday definition and a year into the ordered list of ISO dates the holiday
covers that year.

Holidays with a registered expansion rule (see expansion.py) only get their base date
computed here; the span itself comes from the rule. Every other holiday covers
`duration_days` consecutive days from its base date, except date ranges (enumerated
start to end) and custom holidays (literal dates).
"""

from __future__ import annotations

import calendar as pycal
from datetime import date, timedelta
from functools import lru_cache
from typing import List, Optional, Tuple

from .catalog import get_holiday
from .errors import InvalidHolidayRuleError
from .expansion import expand, get_expansion_rule
from .models import (
    CustomDates,
    DateCalculation,
    DateRange,
    FixedDate,
    HolidayDefinition,
    LastWeekday,
    NthWeekday,
    RelativeDate,
)
from .utils import _parse_iso, short_date, sunday_weekday


def nth_weekday(year: int, month: int, weekday: int, nth: int) -> date:
    """
    Date of the nth given weekday (0=Sunday) of a month.

    Raises InvalidHolidayRuleError when the month has no such day (e.g. a 5th Monday).
    """
    first = date(year, month, 1)
    offset = (weekday - sunday_weekday(first) + 7) % 7
    day = 1 + offset + (nth - 1) * 7
    if day > pycal.monthrange(year, month)[1]:
        raise InvalidHolidayRuleError(f"{year}-{month:02d} has no weekday #{nth} for weekday {weekday}")
    return date(year, month, day)


def last_weekday(year: int, month: int, weekday: int) -> date:
    """Date of the last given weekday (0=Sunday) of a month."""
    last = date(year, month, pycal.monthrange(year, month)[1])
    return last - timedelta(days=(sunday_weekday(last) - weekday + 7) % 7)


def base_date(calculation: DateCalculation, year: int) -> Optional[date]:
    """
    Unexpanded first date of a rule in `year`.

    Returns None when the rule has no date that year: Feb 29 in a common year, a custom
    rule without dates, or a relative rule whose base cannot be resolved.
    """
    if isinstance(calculation, FixedDate):
        try:
            return date(year, calculation.month, calculation.day)
        except ValueError:
            return None
    if isinstance(calculation, NthWeekday):
        return nth_weekday(year, calculation.month, calculation.weekday, calculation.nth)
    if isinstance(calculation, LastWeekday):
        return last_weekday(year, calculation.month, calculation.weekday)
    if isinstance(calculation, DateRange):
        return _range_bounds(calculation, year)[0]
    if isinstance(calculation, CustomDates):
        return _parse_iso(calculation.dates[0]) if calculation.dates else None
    if isinstance(calculation, RelativeDate):
        referenced = get_holiday(calculation.base_holiday_id)
        if referenced is None:
            return None
        anchor = base_date(referenced.date_calculation, year)
        if anchor is None:
            return None
        return anchor + timedelta(days=calculation.offset_days)
    raise InvalidHolidayRuleError(f"Unknown date calculation: {calculation!r}")


def _range_bounds(calculation: DateRange, year: int) -> Tuple[Optional[date], Optional[date]]:
    end_year = year + 1 if calculation.crosses_year else year
    try:
        start = date(year, calculation.start_month, calculation.start_day)
    except ValueError:
        start = None
    try:
        end = date(end_year, calculation.end_month, calculation.end_day)
    except ValueError:
        # Feb 29 end in a common year
        end = date(end_year, calculation.end_month, pycal.monthrange(end_year, calculation.end_month)[1])
    return start, end


def _consecutive(start: date, n_days: int) -> Tuple[str, ...]:
    return tuple((start + timedelta(days=i)).isoformat() for i in range(n_days))


@lru_cache(maxsize=1024)
def _resolve_cached(definition: HolidayDefinition, year: int) -> Tuple[str, ...]:
    calc = definition.date_calculation

    if isinstance(calc, CustomDates):
        return tuple(calc.dates)

    if isinstance(calc, DateRange):
        start, end = _range_bounds(calc, year)
        if start is None:
            return ()
        return _consecutive(start, (end - start).days + 1)

    start = base_date(calc, year)
    if start is None:
        return ()

    # Relative holidays are never expanded, even if the referenced one is
    rule = None if isinstance(calc, RelativeDate) else get_expansion_rule(definition.id)
    if rule is not None:
        return tuple(expand(start, rule))
    return _consecutive(start, definition.duration_days)


def resolve_dates(definition: HolidayDefinition, year: int) -> List[str]:
    """
    Get all dates covered by a holiday in a year.

    Parameters
    ----------
    definition: HolidayDefinition
        The holiday to resolve.
    year: int
        The year of the holiday instance. A date range crossing the new year starts in
        `year` and ends in `year + 1`.

    Returns
    -------
    List[str]
        Chronological ISO dates; empty when the holiday has no date that year.

    Example:
        resolve_dates(get_holiday("mlk-day"), 2025)
        => ['2025-01-20', '2025-01-21', '2025-01-22']
    """
    return list(_resolve_cached(definition, year))


def resolve_holiday_dates(holiday_id: str, year: int) -> Optional[List[str]]:
    """Dates of a catalog holiday by id, or None when the id is unknown."""
    definition = get_holiday(holiday_id)
    if definition is None:
        return None
    return resolve_dates(definition, year)


def display_date(definition: HolidayDefinition, year: int) -> str:
    """Human readable span: 'Jul 4', 'Jul 4 - Jul 6' or 'Date not set'."""
    dates = resolve_dates(definition, year)
    if not dates:
        return "Date not set"
    if len(dates) == 1:
        return short_date(dates[0])
    return f"{short_date(dates[0])} - {short_date(dates[-1])}"
