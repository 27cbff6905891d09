"""
configs.py

Default user configurations and pure edit helpers.

Configuration lists belong to the caller: every helper here returns a new list and
leaves its input untouched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, Optional, Sequence, TypeVar

from .catalog import ALL_HOLIDAYS, DEFAULT_SUMMER_VACATION_CONFIG, DEFAULT_WINTER_BREAK_SPLIT
from .models import AssignmentType, BirthdayConfig, HolidayUserConfig, ReligiousHolidayUserConfig
from .religious import ALL_RELIGIOUS_HOLIDAYS

C = TypeVar("C", HolidayUserConfig, ReligiousHolidayUserConfig)

_DEFAULT_SUB_CONFIGS = {
    DEFAULT_WINTER_BREAK_SPLIT.holiday_id: {"split_config": DEFAULT_WINTER_BREAK_SPLIT},
    DEFAULT_SUMMER_VACATION_CONFIG.holiday_id: {"selection_config": DEFAULT_SUMMER_VACATION_CONFIG},
}


def create_default_holiday_configs() -> List[HolidayUserConfig]:
    """One config per catalog holiday, carrying its default policy and sub-configuration."""
    return [
        HolidayUserConfig(
            holiday_id=h.id,
            enabled=h.enabled_by_default,
            assignment=h.default_assignment,
            **_DEFAULT_SUB_CONFIGS.get(h.id, {}),
        )
        for h in ALL_HOLIDAYS
    ]


def create_default_religious_configs() -> List[ReligiousHolidayUserConfig]:
    """Religious holidays are opt-in: disabled and alternating by default."""
    return [
        ReligiousHolidayUserConfig(holiday_id=h.id, enabled=False, assignment=AssignmentType.ALTERNATE_ODD_EVEN)
        for h in ALL_RELIGIOUS_HOLIDAYS
    ]


def create_default_birthday_configs() -> List[BirthdayConfig]:
    return [
        BirthdayConfig(
            id="mother-birthday",
            name="Mother",
            type="parent-b",
            month=1,
            day=1,
            default_assignment=AssignmentType.ALWAYS_PARENT_B,
        ),
        BirthdayConfig(
            id="father-birthday",
            name="Father",
            type="parent-a",
            month=1,
            day=1,
            default_assignment=AssignmentType.ALWAYS_PARENT_A,
        ),
    ]


def get_config(configs: Iterable[C], holiday_id: str) -> Optional[C]:
    """Config for a holiday id, or None when absent."""
    for config in configs:
        if config.holiday_id == holiday_id:
            return config
    return None


def update_config(configs: Sequence[C], holiday_id: str, **patch: Any) -> List[C]:
    """
    Return a new list where the config of `holiday_id` has `patch` applied.

    Example:
        configs = update_config(configs, "halloween", enabled=False)

    An unknown id leaves the list unchanged.
    """
    return [replace(c, **patch) if c.holiday_id == holiday_id else c for c in configs]


def enabled_configs(configs: Iterable[C]) -> List[C]:
    return [c for c in configs if c.enabled]
