"""
religious.py

Religious holidays follow lunar or lunisolar calendars, so instead of a date rule each
one carries a table of start dates per year (2024-2030). Users may add their own
holidays as CustomReligiousHoliday records, which merge definition and configuration.
"""

from __future__ import annotations

import itertools
import re
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import InvalidCustomHolidayError
from .models import (
    AssignmentType,
    CustomReligiousHoliday,
    ReligionType,
    ReligiousHolidayDefinition,
    ReligiousHolidayUserConfig,
)
from .utils import _parse_iso, add_days, short_date

MAX_CUSTOM_HOLIDAY_DURATION = 14

RELIGIOUS_HOLIDAY_PRIORITY = 30

TABLE_YEARS = range(2024, 2031)


def _religious(
    id: str,
    name: str,
    religion: ReligionType,
    duration: int,
    description: str,
    starts: Sequence[str],
) -> ReligiousHolidayDefinition:
    assert len(starts) == len(TABLE_YEARS), id
    return ReligiousHolidayDefinition(
        id=id,
        name=name,
        religion=religion,
        duration=duration,
        description=description,
        dates=dict(zip(TABLE_YEARS, starts)),
    )


# =========================
# Tables (first day of multi-day holidays)
# =========================
JEWISH_HOLIDAYS: List[ReligiousHolidayDefinition] = [
    _religious("passover", "Passover (First Seder)", "jewish", 2, "First two nights of Passover",
               ["2024-04-22", "2025-04-12", "2026-04-01", "2027-04-21", "2028-04-10", "2029-03-30", "2030-04-17"]),
    _religious("rosh-hashanah", "Rosh Hashanah", "jewish", 2, "Jewish New Year",
               ["2024-10-02", "2025-09-22", "2026-09-11", "2027-10-01", "2028-09-20", "2029-09-09", "2030-09-27"]),
    _religious("yom-kippur", "Yom Kippur", "jewish", 1, "Day of Atonement",
               ["2024-10-11", "2025-10-01", "2026-09-20", "2027-10-10", "2028-09-29", "2029-09-18", "2030-10-06"]),
    _religious("sukkot", "Sukkot (First Days)", "jewish", 2, "Feast of Tabernacles",
               ["2024-10-16", "2025-10-06", "2026-09-25", "2027-10-15", "2028-10-04", "2029-09-23", "2030-10-11"]),
    _religious("hanukkah", "Hanukkah (First Night)", "jewish", 1, "Festival of Lights (first night)",
               ["2024-12-25", "2025-12-14", "2026-12-04", "2027-12-24", "2028-12-12", "2029-12-01", "2030-12-20"]),
    _religious("purim", "Purim", "jewish", 1, "Festival of Lots",
               ["2024-03-23", "2025-03-13", "2026-03-02", "2027-03-22", "2028-03-11", "2029-02-28", "2030-03-18"]),
]

CHRISTIAN_HOLIDAYS: List[ReligiousHolidayDefinition] = [
    _religious("good-friday", "Good Friday", "christian", 1, "Friday before Easter Sunday",
               ["2024-03-29", "2025-04-18", "2026-04-03", "2027-03-26", "2028-04-14", "2029-03-30", "2030-04-19"]),
    _religious("easter-sunday", "Easter Sunday", "christian", 1, "Celebration of the resurrection",
               ["2024-03-31", "2025-04-20", "2026-04-05", "2027-03-28", "2028-04-16", "2029-04-01", "2030-04-21"]),
    _religious("ash-wednesday", "Ash Wednesday", "christian", 1, "Beginning of Lent",
               ["2024-02-14", "2025-03-05", "2026-02-18", "2027-02-10", "2028-03-01", "2029-02-14", "2030-03-06"]),
]

ISLAMIC_HOLIDAYS: List[ReligiousHolidayDefinition] = [
    _religious("eid-al-fitr", "Eid al-Fitr", "islamic", 3, "Festival of Breaking the Fast (end of Ramadan)",
               ["2024-04-09", "2025-03-30", "2026-03-19", "2027-03-08", "2028-02-25", "2029-02-13", "2030-02-03"]),
    _religious("eid-al-adha", "Eid al-Adha", "islamic", 4, "Festival of Sacrifice",
               ["2024-06-16", "2025-06-06", "2026-05-26", "2027-05-16", "2028-05-04", "2029-04-23", "2030-04-12"]),
]

RELIGIOUS_HOLIDAYS: Dict[str, List[ReligiousHolidayDefinition]] = {
    "jewish": JEWISH_HOLIDAYS,
    "christian": CHRISTIAN_HOLIDAYS,
    "islamic": ISLAMIC_HOLIDAYS,
    "other": [],  # user-defined holidays live in CustomReligiousHoliday records
}

ALL_RELIGIOUS_HOLIDAYS: List[ReligiousHolidayDefinition] = [*JEWISH_HOLIDAYS, *CHRISTIAN_HOLIDAYS, *ISLAMIC_HOLIDAYS]

_RELIGION_NAMES: Dict[str, str] = {
    "jewish": "Jewish Holidays",
    "christian": "Christian Holidays",
    "islamic": "Islamic Holidays",
    "other": "Other Religious Holidays",
}

_BY_ID: Dict[str, ReligiousHolidayDefinition] = {h.id: h for h in ALL_RELIGIOUS_HOLIDAYS}
_CUSTOM_SEQ = itertools.count(1)


# =========================
# Lookups
# =========================
def get_religious_holiday(holiday_id: str) -> Optional[ReligiousHolidayDefinition]:
    return _BY_ID.get(holiday_id)


def get_religious_holidays_by_religion(religion: ReligionType) -> List[ReligiousHolidayDefinition]:
    return list(RELIGIOUS_HOLIDAYS.get(religion, []))


def get_religion_display_name(religion: ReligionType) -> str:
    return _RELIGION_NAMES[religion]


# =========================
# Dates
# =========================
def _span(start: Optional[str], duration: int) -> List[str]:
    if not start:
        return []
    return [add_days(start, i) for i in range(duration)]


def religious_holiday_dates(holiday: ReligiousHolidayDefinition, year: int) -> List[str]:
    """Consecutive ISO dates of the holiday in `year`; empty when the table has no entry."""
    return _span(holiday.dates.get(year), holiday.duration)


def custom_holiday_dates(holiday: CustomReligiousHoliday, year: int) -> List[str]:
    return _span(holiday.dates.get(year), holiday.duration)


def religious_holiday_display_date(holiday: ReligiousHolidayDefinition, year: int) -> str:
    dates = religious_holiday_dates(holiday, year)
    if not dates:
        return "Date varies"
    if len(dates) == 1:
        return short_date(dates[0])
    return f"{short_date(dates[0])} - {short_date(dates[-1])}"


def religious_holiday_days(
    configs: Iterable[ReligiousHolidayUserConfig],
    custom_holidays: Iterable[CustomReligiousHoliday] = (),
) -> int:
    """Total nominal days of enabled religious holidays plus every custom holiday."""
    total = 0
    for config in configs:
        holiday = _BY_ID.get(config.holiday_id)
        if config.enabled and holiday is not None:
            total += holiday.duration
    return total + sum(h.duration for h in custom_holidays)


# =========================
# Custom holidays
# =========================
def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def create_custom_religious_holiday(
    name: str,
    start_date: Optional[str],
    duration: int = 1,
    assignment: AssignmentType = AssignmentType.ALTERNATE_ODD_EVEN,
    *,
    holiday_id: Optional[str] = None,
) -> CustomReligiousHoliday:
    """
    Build a user-defined holiday starting on `start_date` (ISO), keyed by that date's year.
    Each call gets a distinct id unless `holiday_id` is given.

    Raises InvalidCustomHolidayError for a blank name, a missing or malformed date,
    a duration outside 1..MAX_CUSTOM_HOLIDAY_DURATION or a compound assignment.
    """
    name = (name or "").strip()
    if not name:
        raise InvalidCustomHolidayError("Custom holiday needs a name")
    if not start_date:
        raise InvalidCustomHolidayError(f"Custom holiday {name!r} needs a date")
    try:
        start = _parse_iso(start_date)
    except ValueError as e:
        raise InvalidCustomHolidayError(f"Custom holiday {name!r}: {e}") from e
    if not 1 <= duration <= MAX_CUSTOM_HOLIDAY_DURATION:
        raise InvalidCustomHolidayError(
            f"Custom holiday {name!r}: duration must be in 1..{MAX_CUSTOM_HOLIDAY_DURATION}, got {duration!r}"
        )
    assignment = AssignmentType(assignment)
    if not assignment.is_simple:
        raise InvalidCustomHolidayError(f"Custom holiday {name!r}: assignment must be a simple policy")

    return CustomReligiousHoliday(
        id=holiday_id or f"custom-{_slug(name) or 'holiday'}-{start.year}-{next(_CUSTOM_SEQ)}",
        name=name,
        duration=duration,
        dates={start.year: start.isoformat()},
        assignment=assignment,
    )
