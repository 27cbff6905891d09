"""
catalog.py

Static holiday catalog, default split/selection configurations and presets.

ALL_HOLIDAYS lists major breaks first, then weekend holidays, then birthdays. That
declaration order is significant: when two claims of equal priority cover the same
day, the holiday listed first wins.

The catalog is validated once at import time; a duplicate id or a relative rule
pointing nowhere is a programming error and raises InvalidHolidayRuleError.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .errors import InvalidHolidayRuleError, UnknownPresetError
from .models import (
    AssignmentType,
    CustomDates,
    DateRange,
    FixedDate,
    HolidayCategory,
    HolidayDefinition,
    HolidayPreset,
    LastWeekday,
    NthWeekday,
    ParentId,
    RelativeDate,
    SelectionPriorityConfig,
    SplitPeriodConfig,
)

LOGGER = logging.getLogger(__name__)

ALT = AssignmentType.ALTERNATE_ODD_EVEN
PARENT_A = AssignmentType.ALWAYS_PARENT_A
PARENT_B = AssignmentType.ALWAYS_PARENT_B
SPLIT = AssignmentType.SPLIT_PERIOD
SELECTION = AssignmentType.SELECTION_PRIORITY

SUNDAY, MONDAY, FRIDAY, THURSDAY = 0, 1, 5, 4


# =========================
# Weekend holidays (typically 3-day weekends)
# =========================
WEEKEND_HOLIDAYS: List[HolidayDefinition] = [
    HolidayDefinition(
        id="mlk-day",
        name="Martin Luther King Jr. Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=NthWeekday(month=1, weekday=MONDAY, nth=3),
        duration_days=3,
        priority=20,
        description="Third Monday of January",
    ),
    HolidayDefinition(
        id="presidents-day",
        name="Presidents' Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=NthWeekday(month=2, weekday=MONDAY, nth=3),
        duration_days=3,
        priority=20,
        description="Third Monday of February",
    ),
    HolidayDefinition(
        id="mothers-day",
        name="Mother's Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=PARENT_B,
        date_calculation=NthWeekday(month=5, weekday=SUNDAY, nth=2),
        duration_days=3,
        priority=25,  # parent-specific days beat ordinary weekend holidays
        description="Second Sunday of May",
    ),
    HolidayDefinition(
        id="memorial-day",
        name="Memorial Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=LastWeekday(month=5, weekday=MONDAY),
        duration_days=3,
        priority=20,
        description="Last Monday of May",
    ),
    HolidayDefinition(
        id="fathers-day",
        name="Father's Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=PARENT_A,
        date_calculation=NthWeekday(month=6, weekday=SUNDAY, nth=3),
        duration_days=3,
        priority=25,
        description="Third Sunday of June",
    ),
    HolidayDefinition(
        id="independence-day",
        name="Independence Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=FixedDate(month=7, day=4),
        duration_days=3,  # nominal; the actual span comes from the expansion rule
        priority=20,
        description="July 4th weekend",
    ),
    HolidayDefinition(
        id="labor-day",
        name="Labor Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=NthWeekday(month=9, weekday=MONDAY, nth=1),
        duration_days=3,
        priority=20,
        description="First Monday of September",
    ),
    HolidayDefinition(
        id="nevada-day",
        name="Nevada Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=LastWeekday(month=10, weekday=FRIDAY),
        duration_days=3,
        priority=15,  # state-specific
        description="Last Friday of October",
    ),
    HolidayDefinition(
        id="halloween",
        name="Halloween",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=FixedDate(month=10, day=31),
        duration_days=1,
        priority=15,
        description="October 31st evening",
    ),
    HolidayDefinition(
        id="veterans-day",
        name="Veterans Day",
        category=HolidayCategory.WEEKEND,
        default_assignment=ALT,
        date_calculation=FixedDate(month=11, day=11),
        duration_days=3,
        priority=20,
        description="November 11th weekend",
    ),
]


# =========================
# Major breaks
# =========================
MAJOR_BREAKS: List[HolidayDefinition] = [
    HolidayDefinition(
        id="spring-break",
        name="Spring Break",
        category=HolidayCategory.MAJOR_BREAK,
        default_assignment=ALT,
        date_calculation=DateRange(start_month=3, start_day=17, end_month=3, end_day=23),
        duration_days=7,
        priority=30,
        description="Typically one week in mid-March",
    ),
    HolidayDefinition(
        id="thanksgiving",
        name="Thanksgiving",
        category=HolidayCategory.MAJOR_BREAK,
        default_assignment=ALT,
        date_calculation=NthWeekday(month=11, weekday=THURSDAY, nth=4),
        duration_days=5,
        priority=35,
        description="Wednesday 6pm through Sunday 6pm",
    ),
    HolidayDefinition(
        id="winter-break",
        name="Winter Break",
        category=HolidayCategory.MAJOR_BREAK,
        default_assignment=SPLIT,
        date_calculation=DateRange(start_month=12, start_day=23, end_month=1, end_day=2),
        duration_days=14,
        priority=40,
        description="December 23 through January 2",
    ),
    HolidayDefinition(
        id="summer-vacation",
        name="Summer Vacation",
        category=HolidayCategory.MAJOR_BREAK,
        default_assignment=SELECTION,
        date_calculation=DateRange(start_month=6, start_day=1, end_month=8, end_day=15),
        duration_days=26,  # about 2 weeks x 2 blocks per parent
        priority=45,
        description="Each parent selects vacation weeks",
    ),
]


# =========================
# Birthdays (the dates come from the user)
# =========================
BIRTHDAY_DEFINITIONS: List[HolidayDefinition] = [
    HolidayDefinition(
        id="child-birthday",
        name="Children's Birthday",
        category=HolidayCategory.BIRTHDAY,
        default_assignment=ALT,
        date_calculation=CustomDates(),
        duration_days=1,
        priority=50,
        description="Child's birthday celebration",
    ),
    HolidayDefinition(
        id="mother-birthday",
        name="Mother's Birthday",
        category=HolidayCategory.BIRTHDAY,
        default_assignment=PARENT_B,
        date_calculation=CustomDates(),
        duration_days=1,
        priority=50,
        description="Mother's birthday",
    ),
    HolidayDefinition(
        id="father-birthday",
        name="Father's Birthday",
        category=HolidayCategory.BIRTHDAY,
        default_assignment=PARENT_A,
        date_calculation=CustomDates(),
        duration_days=1,
        priority=50,
        description="Father's birthday",
    ),
]

ALL_HOLIDAYS: List[HolidayDefinition] = [*MAJOR_BREAKS, *WEEKEND_HOLIDAYS, *BIRTHDAY_DEFINITIONS]


# =========================
# Default compound configurations
# =========================
# Christmas segment (Dec 23 - Dec 25) and New Year segment (Dec 26 - Jan 2)
DEFAULT_WINTER_BREAK_SPLIT = SplitPeriodConfig(
    holiday_id="winter-break",
    split_point="December 26 at 12:00 PM",
    split_date="12-26",
    segment1_name="Christmas",
    segment2_name="New Year's",
    segment1_assignment=ALT,
    segment2_assignment=ALT,
)

DEFAULT_SUMMER_VACATION_CONFIG = SelectionPriorityConfig(
    holiday_id="summer-vacation",
    weeks_per_parent=2,
    blocks_per_parent=2,
    selection_deadline="April 1",
    first_pick_odd_years=ParentId.PARENT_A,
    max_consecutive_weeks=2,
)


# =========================
# Presets
# =========================
def _preset_map(**overrides: AssignmentType) -> Dict[str, AssignmentType]:
    return {h.id: overrides.get(h.id.replace("-", "_"), h.default_assignment) for h in ALL_HOLIDAYS}


HOLIDAY_PRESETS: List[HolidayPreset] = [
    HolidayPreset(
        type="traditional",
        name="Traditional",
        description="Alternating major holidays, fixed parent days (Mother/Father's Day)",
        assignments=_preset_map(),
    ),
    HolidayPreset(
        type="50-50-split",
        name="50/50 Split",
        description="Alternate all holidays by odd/even years",
        assignments=_preset_map(
            mothers_day=ALT,
            fathers_day=ALT,
            mother_birthday=ALT,
            father_birthday=ALT,
        ),
    ),
    HolidayPreset(
        type="one-parent-all",
        name="One Parent All",
        description="All holidays assigned to Parent A (can be customized)",
        assignments={h.id: PARENT_A for h in ALL_HOLIDAYS},
    ),
]


# =========================
# Validation
# =========================
def validate_catalog(definitions: Iterable[HolidayDefinition]) -> None:
    """
    Check the invariants of a holiday catalog.

    Raises InvalidHolidayRuleError on duplicate ids, on relative rules referencing an
    unknown holiday or themselves, and on relative chains that loop.
    """
    by_id: Dict[str, HolidayDefinition] = {}
    for definition in definitions:
        if definition.id in by_id:
            raise InvalidHolidayRuleError(f"Duplicate holiday id in catalog: {definition.id!r}")
        by_id[definition.id] = definition

    for definition in by_id.values():
        seen = {definition.id}
        calc = definition.date_calculation
        while isinstance(calc, RelativeDate):
            base_id = calc.base_holiday_id
            if base_id not in by_id:
                raise InvalidHolidayRuleError(f"{definition.id}: relative rule references unknown holiday {base_id!r}")
            if base_id in seen:
                raise InvalidHolidayRuleError(f"{definition.id}: relative rule loops through {base_id!r}")
            seen.add(base_id)
            calc = by_id[base_id].date_calculation


validate_catalog(ALL_HOLIDAYS)
LOGGER.debug("Holiday catalog validated: %d definitions", len(ALL_HOLIDAYS))

_BY_ID: Dict[str, HolidayDefinition] = {h.id: h for h in ALL_HOLIDAYS}
_ORDER: Dict[str, int] = {h.id: i for i, h in enumerate(ALL_HOLIDAYS)}


# =========================
# Lookups
# =========================
def get_holiday(holiday_id: str) -> Optional[HolidayDefinition]:
    """Holiday definition by id, or None when the id is unknown."""
    return _BY_ID.get(holiday_id)


def get_holidays_by_category(category: HolidayCategory) -> List[HolidayDefinition]:
    category = HolidayCategory(category)
    return [h for h in ALL_HOLIDAYS if h.category is category]


def declaration_index(holiday_id: str) -> Optional[int]:
    """Position of the holiday in ALL_HOLIDAYS (lower wins ties), None when unknown."""
    return _ORDER.get(holiday_id)


def is_weekend_holiday(holiday_id: str) -> bool:
    holiday = _BY_ID.get(holiday_id)
    return holiday is not None and holiday.category is HolidayCategory.WEEKEND


def category_total_days(category: HolidayCategory) -> int:
    return sum(h.duration_days for h in get_holidays_by_category(category))


def get_preset(preset_type: str, *, strict: bool = False) -> Optional[HolidayPreset]:
    """
    Preset by type.

    Returns None for an unknown type, or raises UnknownPresetError when strict=True.
    """
    for preset in HOLIDAY_PRESETS:
        if preset.type == preset_type:
            return preset
    if strict:
        raise UnknownPresetError(
            f"Unknown holiday preset: {preset_type!r}. Available: {[p.type for p in HOLIDAY_PRESETS]}"
        )
    return None
