"""
custody_calendar

Holiday-aware custody day assignment:
  - holiday catalog and date rules (fixed, nth/last weekday, ranges, custom dates)
  - weekday-dependent weekend expansion (July 4, Veterans Day, Halloween)
  - assignment policies (alternating, fixed parent, split period, selection priority)
  - composition of holiday overrides onto a base rotation for a full year
  - impact statistics of holidays on the custody split

Usage:
  from custody_calendar import BasePattern, CustodyCalendar

  pattern = BasePattern(pattern="AABB", start_date="2025-01-01")
  cal = CustodyCalendar(2025, pattern, preset="traditional")
  cal.owner("2025-07-04")
"""

from .errors import (
    CustodyCalendarError,
    InvalidCustomHolidayError,
    InvalidHolidayRuleError,
    OutOfRangeError,
    UnknownPresetError,
)
from .models import (
    AssignmentType,
    BasePattern,
    BirthdayConfig,
    CustomDates,
    CustomReligiousHoliday,
    DateRange,
    FixedDate,
    HolidayCategory,
    HolidayDefinition,
    HolidayImpact,
    HolidayImpactBreakdown,
    HolidayPreset,
    HolidayUserConfig,
    ImpactDelta,
    ImpactResult,
    LastWeekday,
    NthWeekday,
    ParentId,
    RelativeDate,
    ReligiousHolidayDefinition,
    ReligiousHolidayUserConfig,
    SelectionPriorityConfig,
    SplitPeriodConfig,
    YearlyStats,
)
from .catalog import (
    ALL_HOLIDAYS,
    HOLIDAY_PRESETS,
    get_holiday,
    get_holidays_by_category,
    get_preset,
)
from .expansion import ExpansionKind, ExpansionRule, expand, get_expansion_rule
from .resolver import display_date, resolve_dates, resolve_holiday_dates
from .assignment import (
    bulk_assign_weekend_holidays,
    first_pick_parent,
    resolve_assignment,
    resolve_owner,
    resolve_split,
)
from .configs import (
    create_default_birthday_configs,
    create_default_holiday_configs,
    create_default_religious_configs,
    enabled_configs,
    get_config,
    update_config,
)
from .presets import apply_preset
from .religious import (
    ALL_RELIGIOUS_HOLIDAYS,
    create_custom_religious_holiday,
    get_religious_holiday,
    religious_holiday_dates,
)
from .compositor import ConstantOwnerBuilder, HolidayClaim, PatternOwnerBuilder, YearOwnership, build_claims, compose
from .impact import (
    calculate_impact,
    calculate_impact_breakdown,
    determine_primary_parent,
    yearly_stats,
)
from .calendar import CustodyCalendar

__all__ = [
    "CustodyCalendar",
    # errors
    "CustodyCalendarError",
    "InvalidCustomHolidayError",
    "InvalidHolidayRuleError",
    "OutOfRangeError",
    "UnknownPresetError",
    # models
    "AssignmentType",
    "BasePattern",
    "BirthdayConfig",
    "CustomDates",
    "CustomReligiousHoliday",
    "DateRange",
    "FixedDate",
    "HolidayCategory",
    "HolidayDefinition",
    "HolidayImpact",
    "HolidayImpactBreakdown",
    "HolidayPreset",
    "HolidayUserConfig",
    "ImpactDelta",
    "ImpactResult",
    "LastWeekday",
    "NthWeekday",
    "ParentId",
    "RelativeDate",
    "ReligiousHolidayDefinition",
    "ReligiousHolidayUserConfig",
    "SelectionPriorityConfig",
    "SplitPeriodConfig",
    "YearlyStats",
    # catalog and rules
    "ALL_HOLIDAYS",
    "HOLIDAY_PRESETS",
    "get_holiday",
    "get_holidays_by_category",
    "get_preset",
    "ExpansionKind",
    "ExpansionRule",
    "expand",
    "get_expansion_rule",
    "display_date",
    "resolve_dates",
    "resolve_holiday_dates",
    # assignment
    "bulk_assign_weekend_holidays",
    "first_pick_parent",
    "resolve_assignment",
    "resolve_owner",
    "resolve_split",
    # configuration
    "apply_preset",
    "create_default_birthday_configs",
    "create_default_holiday_configs",
    "create_default_religious_configs",
    "enabled_configs",
    "get_config",
    "update_config",
    # religious
    "ALL_RELIGIOUS_HOLIDAYS",
    "create_custom_religious_holiday",
    "get_religious_holiday",
    "religious_holiday_dates",
    # composition and statistics
    "ConstantOwnerBuilder",
    "PatternOwnerBuilder",
    "HolidayClaim",
    "YearOwnership",
    "build_claims",
    "compose",
    "calculate_impact",
    "calculate_impact_breakdown",
    "determine_primary_parent",
    "yearly_stats",
]
