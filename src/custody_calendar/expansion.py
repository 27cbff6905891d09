"""
Conditional holiday expansion.

Some holidays grow or shift to cover an adjacent weekend depending on the weekday
they fall on:
  - July 4 on a Friday      => Fri-Sun
  - July 4 on a Tuesday     => July 4 only
  - Veterans Day on Monday  => Sat-Mon
  - Halloween               => always the single day

An ExpansionRule stores, for each weekday of the base date (0=Sunday .. 6=Saturday),
the inclusive (start_offset, end_offset) in days to apply around the base date.
Holidays without a registered rule never go through this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import InvalidHolidayRuleError
from .utils import DateLike, _to_pydate, sunday_weekday

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


class ExpansionKind(str, Enum):
    NONE = "none"
    FULL_WEEKEND = "full-weekend"
    INCLUDE_FRIDAY = "include-friday"
    INCLUDE_MONDAY = "include-monday"


# Offsets per kind, by weekday of the base date. Weekdays not listed stay single-day.
_KIND_OFFSETS: Dict[ExpansionKind, Dict[int, Tuple[int, int]]] = {
    ExpansionKind.NONE: {},
    # Fri => Fri-Sun, Sat => Sat-Sun, Sun => Sat-Sun, Mon => Sat-Mon
    ExpansionKind.FULL_WEEKEND: {FRIDAY: (0, 2), SATURDAY: (0, 1), SUNDAY: (-1, 0), MONDAY: (-2, 0)},
    # Sun => Fri-Sun, Sat => Fri-Sat
    ExpansionKind.INCLUDE_FRIDAY: {SUNDAY: (-2, 0), SATURDAY: (-1, 0)},
    # Sat => Sat-Mon, Sun => Sun-Mon
    ExpansionKind.INCLUDE_MONDAY: {SATURDAY: (0, 2), SUNDAY: (0, 1)},
}


@dataclass(frozen=True)
class ExpansionRule:
    """
    Weekday-indexed span offsets.

    offsets[w] = (start_offset, end_offset) for a base date falling on weekday w.
    Exactly seven entries, start_offset <= 0 <= end_offset, so the base date is always
    part of the expanded span.
    """
    name: str
    offsets: Tuple[Tuple[int, int], ...]

    def __post_init__(self) -> None:
        if isinstance(self.offsets, list):
            object.__setattr__(self, "offsets", tuple(tuple(o) for o in self.offsets))
        if len(self.offsets) != 7:
            raise InvalidHolidayRuleError(f"{self.name}: expansion rule needs one entry per weekday, got {len(self.offsets)}")
        for weekday, (start, end) in enumerate(self.offsets):
            if start > 0 or end < 0:
                raise InvalidHolidayRuleError(
                    f"{self.name}: offsets for weekday {weekday} must bracket the base date, got ({start}, {end})"
                )

    # ---------- factories
    @classmethod
    def fixed_span(cls, days: int, name: str = "") -> "ExpansionRule":
        """Always cover `days` consecutive days starting at the base date."""
        if days < 1:
            raise InvalidHolidayRuleError(f"fixed span needs at least one day, got {days!r}")
        return cls(name=name or f"always-{days}", offsets=tuple((0, days - 1) for _ in range(7)))

    @classmethod
    def by_weekday(
        cls,
        rules: Mapping[Union[int, Iterable[int]], ExpansionKind],
        name: str = "",
    ) -> "ExpansionRule":
        """
        Build a rule from weekday(s) -> ExpansionKind entries.

        Weekdays not covered by any entry stay single-day. A weekday listed twice is a
        definition error, since each weekday must have exactly one outcome.

        Example:
            ExpansionRule.by_weekday({
                FRIDAY: ExpansionKind.FULL_WEEKEND,
                SUNDAY: ExpansionKind.INCLUDE_FRIDAY,
                (TUESDAY, WEDNESDAY, THURSDAY): ExpansionKind.NONE,
            })
        """
        table: Dict[int, Tuple[int, int]] = {}
        for key, kind in rules.items():
            weekdays = (key,) if isinstance(key, int) else tuple(key)
            kind = ExpansionKind(kind)
            for weekday in weekdays:
                if weekday in table:
                    raise InvalidHolidayRuleError(f"{name}: weekday {weekday} has more than one expansion")
                table[weekday] = _KIND_OFFSETS[kind].get(weekday, (0, 0))
        return cls(name=name or "by-weekday", offsets=tuple(table.get(w, (0, 0)) for w in range(7)))

    def span_for(self, weekday: int) -> Tuple[int, int]:
        return self.offsets[weekday]


def expand(base_date: DateLike, rule: ExpansionRule) -> List[str]:
    """
    Get all dates covered by a holiday after applying its expansion rule.

    Parameters
    ----------
    base_date: DateLike
        The unexpanded holiday date.
    rule: ExpansionRule
        The rule to apply.

    Returns
    -------
    List[str]
        Chronological ISO dates of the expanded span; always contains base_date.

    Example:
        expand("2025-07-04", JULY_4_EXPANSION)   # Friday
        => ['2025-07-04', '2025-07-05', '2025-07-06']
    """
    d = _to_pydate(base_date)
    start, end = rule.span_for(sunday_weekday(d))
    return [(d + timedelta(days=i)).isoformat() for i in range(start, end + 1)]


# =========================
# Registered rules
# =========================
JULY_4_EXPANSION = ExpansionRule.by_weekday(
    {
        FRIDAY: ExpansionKind.FULL_WEEKEND,                           # Fri-Sun
        SATURDAY: ExpansionKind.FULL_WEEKEND,                         # Sat-Sun
        SUNDAY: ExpansionKind.INCLUDE_FRIDAY,                         # Fri-Sun
        MONDAY: ExpansionKind.FULL_WEEKEND,                           # Sat-Mon
        (TUESDAY, WEDNESDAY, THURSDAY): ExpansionKind.NONE,
    },
    name="independence-day",
)

VETERANS_DAY_EXPANSION = ExpansionRule.by_weekday(
    {
        FRIDAY: ExpansionKind.FULL_WEEKEND,
        SATURDAY: ExpansionKind.FULL_WEEKEND,
        SUNDAY: ExpansionKind.INCLUDE_FRIDAY,
        MONDAY: ExpansionKind.FULL_WEEKEND,
        (TUESDAY, WEDNESDAY, THURSDAY): ExpansionKind.NONE,
    },
    name="veterans-day",
)

# Evening of Oct 31 only
HALLOWEEN_EXPANSION = ExpansionRule.fixed_span(1, name="halloween")

HOLIDAY_EXPANSION_RULES: Dict[str, ExpansionRule] = {
    "independence-day": JULY_4_EXPANSION,
    "veterans-day": VETERANS_DAY_EXPANSION,
    "halloween": HALLOWEEN_EXPANSION,
}


def get_expansion_rule(holiday_id: str) -> Optional[ExpansionRule]:
    return HOLIDAY_EXPANSION_RULES.get(holiday_id)


def has_expansion_rule(holiday_id: str) -> bool:
    return holiday_id in HOLIDAY_EXPANSION_RULES
