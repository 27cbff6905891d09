"""
models.py

Value objects shared by every engine component.

DateCalculation is a closed union of frozen dataclasses, each carrying a `kind` tag,
so the date resolver can match on it exhaustively. Every record here is immutable:
configuration edits go through pure helpers (see configs.py) that return new objects.

Weekdays follow the Sunday=0 ... Saturday=6 convention throughout.
"""

from __future__ import annotations

import calendar as pycal
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Literal, Mapping, Optional, Tuple, Union

from .errors import InvalidCustomHolidayError, InvalidHolidayRuleError
from .utils import _parse_iso, _to_pydate


# =========================
# Enumerations
# =========================
class ParentId(str, Enum):
    PARENT_A = "parentA"
    PARENT_B = "parentB"

    @property
    def other(self) -> "ParentId":
        return ParentId.PARENT_B if self is ParentId.PARENT_A else ParentId.PARENT_A


class HolidayCategory(str, Enum):
    MAJOR_BREAK = "major-break"
    WEEKEND = "weekend"
    BIRTHDAY = "birthday"
    RELIGIOUS = "religious"


class AssignmentType(str, Enum):
    ALTERNATE_ODD_EVEN = "alternate-odd-even"
    ALWAYS_PARENT_A = "always-parent-a"
    ALWAYS_PARENT_B = "always-parent-b"
    SPLIT_PERIOD = "split-period"
    SELECTION_PRIORITY = "selection-priority"

    @property
    def is_simple(self) -> bool:
        """True for policies that give a single owner for the whole holiday instance."""
        return self in (
            AssignmentType.ALTERNATE_ODD_EVEN,
            AssignmentType.ALWAYS_PARENT_A,
            AssignmentType.ALWAYS_PARENT_B,
        )


HolidayPresetType = Literal["traditional", "50-50-split", "one-parent-all"]
ReligionType = Literal["jewish", "christian", "islamic", "other"]


# =========================
# Date calculation rules
# =========================
def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidHolidayRuleError(f"month must be in 1..12, got {month!r}")


def _check_weekday(weekday: int) -> None:
    if not 0 <= weekday <= 6:
        raise InvalidHolidayRuleError(f"weekday must be in 0..6 (0=Sunday), got {weekday!r}")


def _check_day(month: int, day: int) -> None:
    # Leap-year maximum, so Feb 29 stays expressible
    max_day = pycal.monthrange(2024, month)[1]
    if not 1 <= day <= max_day:
        raise InvalidHolidayRuleError(f"day must be in 1..{max_day} for month {month}, got {day!r}")


@dataclass(frozen=True)
class FixedDate:
    month: int
    day: int
    kind: Literal["fixed"] = field(default="fixed", init=False)

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_day(self.month, self.day)


@dataclass(frozen=True)
class NthWeekday:
    month: int
    weekday: int
    nth: int
    kind: Literal["nth-weekday"] = field(default="nth-weekday", init=False)

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_weekday(self.weekday)
        if not 1 <= self.nth <= 5:
            raise InvalidHolidayRuleError(f"nth must be in 1..5, got {self.nth!r}")


@dataclass(frozen=True)
class LastWeekday:
    month: int
    weekday: int
    kind: Literal["last-weekday"] = field(default="last-weekday", init=False)

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_weekday(self.weekday)


@dataclass(frozen=True)
class RelativeDate:
    base_holiday_id: str
    offset_days: int
    kind: Literal["relative"] = field(default="relative", init=False)

    def __post_init__(self) -> None:
        if not self.base_holiday_id:
            raise InvalidHolidayRuleError("relative rule needs a base_holiday_id")


@dataclass(frozen=True)
class DateRange:
    """Inclusive month/day range; crosses into the next year when end_month < start_month."""
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    kind: Literal["date-range"] = field(default="date-range", init=False)

    def __post_init__(self) -> None:
        _check_month(self.start_month)
        _check_month(self.end_month)
        _check_day(self.start_month, self.start_day)
        _check_day(self.end_month, self.end_day)
        if self.end_month == self.start_month and self.end_day < self.start_day:
            raise InvalidHolidayRuleError(
                f"date range ends before it starts: {self.start_month}-{self.start_day} > "
                f"{self.end_month}-{self.end_day}"
            )

    @property
    def crosses_year(self) -> bool:
        return self.end_month < self.start_month


@dataclass(frozen=True)
class CustomDates:
    dates: Tuple[str, ...] = ()
    kind: Literal["custom"] = field(default="custom", init=False)

    def __post_init__(self) -> None:
        if isinstance(self.dates, list):
            object.__setattr__(self, "dates", tuple(self.dates))
        for d in self.dates:
            try:
                _parse_iso(d)
            except ValueError as e:
                raise InvalidHolidayRuleError(str(e)) from e


DateCalculation = Union[FixedDate, NthWeekday, LastWeekday, RelativeDate, DateRange, CustomDates]


# =========================
# Holiday definitions and user configuration
# =========================
@dataclass(frozen=True)
class HolidayDefinition:
    id: str
    name: str
    category: HolidayCategory
    default_assignment: AssignmentType
    date_calculation: DateCalculation
    duration_days: int
    priority: int
    description: str = ""
    enabled_by_default: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidHolidayRuleError("holiday definition needs an id")
        if self.duration_days < 1:
            raise InvalidHolidayRuleError(f"{self.id}: duration_days must be >= 1, got {self.duration_days!r}")


@dataclass(frozen=True)
class SplitPeriodConfig:
    """
    Splits one holiday span into two contiguous segments.

    `split_date` is a month-day ('12-26') or a full ISO date; only month and day are
    used. Segment 1 covers the days before the split date, segment 2 starts on it.
    """
    holiday_id: str
    split_point: str
    split_date: str
    segment1_name: str
    segment2_name: str
    segment1_assignment: AssignmentType
    segment2_assignment: AssignmentType

    def __post_init__(self) -> None:
        for name in ("segment1_assignment", "segment2_assignment"):
            value = AssignmentType(getattr(self, name))
            if not value.is_simple:
                raise InvalidHolidayRuleError(f"{self.holiday_id}: {name} must be a simple policy, got {value.value!r}")
            object.__setattr__(self, name, value)
        _ = self.split_month_day  # validate format

    @property
    def split_month_day(self) -> Tuple[int, int]:
        parts = self.split_date.strip().split("-")
        try:
            if len(parts) == 2:
                month, day = int(parts[0]), int(parts[1])
            elif len(parts) == 3:
                d = _parse_iso(self.split_date)
                month, day = d.month, d.day
            else:
                raise ValueError(self.split_date)
            _check_month(month)
            _check_day(month, day)
        except (ValueError, InvalidHolidayRuleError) as e:
            raise InvalidHolidayRuleError(
                f"{self.holiday_id}: split_date must be 'MM-DD' or 'YYYY-MM-DD', got {self.split_date!r}"
            ) from e
        return month, day


@dataclass(frozen=True)
class SelectionPriorityConfig:
    holiday_id: str
    weeks_per_parent: int
    blocks_per_parent: int
    selection_deadline: str
    first_pick_odd_years: ParentId
    max_consecutive_weeks: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "first_pick_odd_years", ParentId(self.first_pick_odd_years))
        if self.weeks_per_parent < 0 or self.blocks_per_parent < 0:
            raise InvalidHolidayRuleError(f"{self.holiday_id}: weeks and blocks per parent must be >= 0")


@dataclass(frozen=True)
class HolidayUserConfig:
    holiday_id: str
    enabled: bool
    assignment: AssignmentType
    split_config: Optional[SplitPeriodConfig] = None
    selection_config: Optional[SelectionPriorityConfig] = None
    custom_dates: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "assignment", AssignmentType(self.assignment))
        if isinstance(self.custom_dates, list):
            object.__setattr__(self, "custom_dates", tuple(self.custom_dates))
        for d in self.custom_dates or ():
            try:
                _parse_iso(d)
            except (TypeError, AttributeError, ValueError) as e:
                raise InvalidCustomHolidayError(f"{self.holiday_id}: invalid custom date {d!r}") from e


@dataclass(frozen=True)
class BirthdayConfig:
    id: str
    name: str
    type: Literal["child", "parent-a", "parent-b"]
    month: int
    day: int
    default_assignment: AssignmentType

    def __post_init__(self) -> None:
        _check_month(self.month)
        _check_day(self.month, self.day)
        object.__setattr__(self, "default_assignment", AssignmentType(self.default_assignment))

    def date_in(self, year: int) -> Optional[str]:
        """ISO date of the birthday in `year`; Feb 29 birthdays have no date in common years."""
        try:
            return date(year, self.month, self.day).isoformat()
        except ValueError:
            return None


@dataclass(frozen=True)
class ReligiousHolidayDefinition:
    id: str
    name: str
    religion: ReligionType
    duration: int
    description: str
    dates: Mapping[int, str]

    def __hash__(self) -> int:
        return hash((self.id, self.religion, self.duration))


@dataclass(frozen=True)
class ReligiousHolidayUserConfig:
    holiday_id: str
    enabled: bool
    assignment: AssignmentType

    def __post_init__(self) -> None:
        object.__setattr__(self, "assignment", AssignmentType(self.assignment))


@dataclass(frozen=True)
class CustomReligiousHoliday:
    """User-defined holiday: definition and configuration in one record."""
    id: str
    name: str
    duration: int
    dates: Mapping[int, str]
    assignment: AssignmentType

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.duration))


@dataclass(frozen=True)
class HolidayPreset:
    type: str
    name: str
    description: str
    assignments: Mapping[str, AssignmentType]


# =========================
# Base rotation pattern (external collaborator input)
# =========================
@dataclass(frozen=True)
class BasePattern:
    """
    Opaque cyclic custody rotation.

    `pattern[i]` is 'A' (the starting parent) or 'B' (the other parent) for the i-th
    day of the cycle, counted from `start_date`. Days before `start_date` wrap around.
    """
    pattern: Tuple[str, ...]
    start_date: str
    starting_parent: ParentId = ParentId.PARENT_A
    name: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.pattern, (list, str)):
            object.__setattr__(self, "pattern", tuple(self.pattern))
        if not self.pattern:
            raise InvalidHolidayRuleError("base pattern must contain at least one day")
        bad = sorted(set(self.pattern) - {"A", "B"})
        if bad:
            raise InvalidHolidayRuleError(f"base pattern markers must be 'A' or 'B', got {bad!r}")
        object.__setattr__(self, "starting_parent", ParentId(self.starting_parent))
        object.__setattr__(self, "start_date", _to_pydate(self.start_date).isoformat())

    @property
    def cycle_length(self) -> int:
        return len(self.pattern)


# =========================
# Impact and statistics records
# =========================
@dataclass(frozen=True)
class HolidayImpact:
    parent_a_days: float = 0
    parent_b_days: float = 0

    @property
    def total_days(self) -> float:
        return self.parent_a_days + self.parent_b_days


@dataclass(frozen=True)
class HolidayImpactBreakdown:
    major_breaks: HolidayImpact = HolidayImpact()
    weekend_holidays: HolidayImpact = HolidayImpact()
    birthdays: HolidayImpact = HolidayImpact()

    @property
    def total(self) -> HolidayImpact:
        parts = (self.major_breaks, self.weekend_holidays, self.birthdays)
        return HolidayImpact(
            parent_a_days=sum(p.parent_a_days for p in parts),
            parent_b_days=sum(p.parent_b_days for p in parts),
        )


@dataclass(frozen=True)
class ImpactDelta:
    parent: ParentId
    days: int


@dataclass(frozen=True)
class ImpactResult:
    adjusted_percentage_a: float
    adjusted_percentage_b: float
    delta: Optional[ImpactDelta]
    deviation: float
    exceeds_threshold: bool = False

    @property
    def adjusted_percentages(self) -> Dict[ParentId, float]:
        return {ParentId.PARENT_A: self.adjusted_percentage_a, ParentId.PARENT_B: self.adjusted_percentage_b}


@dataclass(frozen=True)
class ParentStats:
    days: int
    percentage: float


@dataclass(frozen=True)
class MonthlyBreakdown:
    month: str
    parent_a_days: int
    parent_b_days: int


@dataclass(frozen=True)
class YearlyStats:
    parent_a: ParentStats
    parent_b: ParentStats
    monthly_breakdown: List[MonthlyBreakdown]
