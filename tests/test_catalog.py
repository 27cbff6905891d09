# Pytest suite for the static holiday catalog, presets, default configurations
# and the religious holiday tables.
#
# Run:
#   pip install -e .[test]
#   pytest -q tests/test_catalog.py

from __future__ import annotations

from datetime import date

import pytest

from custody_calendar import (
    ALL_HOLIDAYS,
    ALL_RELIGIOUS_HOLIDAYS,
    HOLIDAY_PRESETS,
    AssignmentType,
    CustomReligiousHoliday,
    FixedDate,
    HolidayCategory,
    HolidayDefinition,
    InvalidCustomHolidayError,
    InvalidHolidayRuleError,
    RelativeDate,
    ReligiousHolidayUserConfig,
    UnknownPresetError,
    create_custom_religious_holiday,
    create_default_birthday_configs,
    create_default_holiday_configs,
    create_default_religious_configs,
    get_holiday,
    get_holidays_by_category,
    get_preset,
    get_religious_holiday,
    religious_holiday_dates,
)
from custody_calendar.catalog import (
    BIRTHDAY_DEFINITIONS,
    MAJOR_BREAKS,
    WEEKEND_HOLIDAYS,
    category_total_days,
    declaration_index,
    validate_catalog,
)
from custody_calendar.religious import (
    MAX_CUSTOM_HOLIDAY_DURATION,
    custom_holiday_dates,
    get_religion_display_name,
    get_religious_holidays_by_religion,
    religious_holiday_days,
    religious_holiday_display_date,
)


def _definition(id: str, calc) -> HolidayDefinition:
    return HolidayDefinition(
        id=id,
        name=id,
        category=HolidayCategory.WEEKEND,
        default_assignment=AssignmentType.ALTERNATE_ODD_EVEN,
        date_calculation=calc,
        duration_days=1,
        priority=1,
    )


# ============================================================
# 1) Catalog tables
# ============================================================
def test_catalog_sizes_and_order() -> None:
    assert len(WEEKEND_HOLIDAYS) == 10
    assert len(MAJOR_BREAKS) == 4
    assert len(BIRTHDAY_DEFINITIONS) == 3
    assert ALL_HOLIDAYS == [*MAJOR_BREAKS, *WEEKEND_HOLIDAYS, *BIRTHDAY_DEFINITIONS]
    assert declaration_index("spring-break") == 0
    assert declaration_index("mlk-day") == 4
    assert declaration_index("nope") is None


def test_ids_are_unique() -> None:
    ids = [h.id for h in ALL_HOLIDAYS]
    assert len(ids) == len(set(ids))


@pytest.mark.parametrize(
    "holiday_id, priority, assignment",
    [
        ("summer-vacation", 45, AssignmentType.SELECTION_PRIORITY),
        ("winter-break", 40, AssignmentType.SPLIT_PERIOD),
        ("thanksgiving", 35, AssignmentType.ALTERNATE_ODD_EVEN),
        ("mothers-day", 25, AssignmentType.ALWAYS_PARENT_B),
        ("fathers-day", 25, AssignmentType.ALWAYS_PARENT_A),
        ("nevada-day", 15, AssignmentType.ALTERNATE_ODD_EVEN),
        ("child-birthday", 50, AssignmentType.ALTERNATE_ODD_EVEN),
    ],
)
def test_catalog_entries(holiday_id: str, priority: int, assignment: AssignmentType) -> None:
    holiday = get_holiday(holiday_id)
    assert holiday.priority == priority
    assert holiday.default_assignment is assignment


def test_categories() -> None:
    assert get_holidays_by_category(HolidayCategory.MAJOR_BREAK) == MAJOR_BREAKS
    assert get_holidays_by_category("birthday") == BIRTHDAY_DEFINITIONS
    assert get_holidays_by_category(HolidayCategory.RELIGIOUS) == []
    assert category_total_days(HolidayCategory.WEEKEND) == 28
    assert category_total_days(HolidayCategory.MAJOR_BREAK) == 52


# ============================================================
# 2) Catalog validation
# ============================================================
def test_duplicate_id_raises() -> None:
    fixed = FixedDate(month=1, day=1)
    with pytest.raises(InvalidHolidayRuleError):
        validate_catalog([_definition("a", fixed), _definition("a", fixed)])


def test_dangling_relative_raises() -> None:
    with pytest.raises(InvalidHolidayRuleError):
        validate_catalog([_definition("a", RelativeDate(base_holiday_id="missing", offset_days=1))])


def test_self_relative_raises() -> None:
    with pytest.raises(InvalidHolidayRuleError):
        validate_catalog([_definition("a", RelativeDate(base_holiday_id="a", offset_days=1))])


def test_relative_loop_raises() -> None:
    with pytest.raises(InvalidHolidayRuleError):
        validate_catalog([
            _definition("a", RelativeDate(base_holiday_id="b", offset_days=1)),
            _definition("b", RelativeDate(base_holiday_id="a", offset_days=1)),
        ])


def test_valid_relative_chain() -> None:
    validate_catalog([
        _definition("a", FixedDate(month=3, day=1)),
        _definition("b", RelativeDate(base_holiday_id="a", offset_days=1)),
        _definition("c", RelativeDate(base_holiday_id="b", offset_days=1)),
    ])


def test_duration_must_be_positive() -> None:
    with pytest.raises(InvalidHolidayRuleError):
        HolidayDefinition(
            id="x",
            name="x",
            category=HolidayCategory.WEEKEND,
            default_assignment=AssignmentType.ALTERNATE_ODD_EVEN,
            date_calculation=FixedDate(month=1, day=1),
            duration_days=0,
            priority=1,
        )


# ============================================================
# 3) Presets and defaults
# ============================================================
def test_presets() -> None:
    assert [p.type for p in HOLIDAY_PRESETS] == ["traditional", "50-50-split", "one-parent-all"]
    traditional = get_preset("traditional")
    assert traditional.assignments["mothers-day"] is AssignmentType.ALWAYS_PARENT_B
    assert traditional.assignments["father-birthday"] is AssignmentType.ALWAYS_PARENT_A
    assert set(get_preset("one-parent-all").assignments.values()) == {AssignmentType.ALWAYS_PARENT_A}
    assert set(traditional.assignments) == {h.id for h in ALL_HOLIDAYS}


def test_unknown_preset() -> None:
    assert get_preset("nope") is None
    with pytest.raises(UnknownPresetError):
        get_preset("nope", strict=True)


def test_default_holiday_configs() -> None:
    configs = create_default_holiday_configs()
    assert [c.holiday_id for c in configs] == [h.id for h in ALL_HOLIDAYS]
    assert all(c.enabled for c in configs)
    winter = configs[declaration_index("winter-break")]
    summer = configs[declaration_index("summer-vacation")]
    assert winter.split_config.split_date == "12-26"
    assert summer.selection_config.weeks_per_parent == 2


def test_default_birthdays() -> None:
    mother, father = create_default_birthday_configs()
    assert (mother.id, mother.default_assignment) == ("mother-birthday", AssignmentType.ALWAYS_PARENT_B)
    assert (father.id, father.default_assignment) == ("father-birthday", AssignmentType.ALWAYS_PARENT_A)
    assert mother.date_in(2025) == "2025-01-01"


# ============================================================
# 4) Religious holidays
# ============================================================
def test_religious_tables() -> None:
    assert len(get_religious_holidays_by_religion("jewish")) == 6
    assert len(get_religious_holidays_by_religion("christian")) == 3
    assert len(get_religious_holidays_by_religion("islamic")) == 2
    assert get_religious_holidays_by_religion("other") == []
    assert len(ALL_RELIGIOUS_HOLIDAYS) == 11
    for holiday in ALL_RELIGIOUS_HOLIDAYS:
        assert sorted(holiday.dates) == list(range(2024, 2031))
        for year, start in holiday.dates.items():
            assert date.fromisoformat(start).year == year


def test_religious_dates() -> None:
    assert religious_holiday_dates(get_religious_holiday("passover"), 2025) == ["2025-04-12", "2025-04-13"]
    assert religious_holiday_dates(get_religious_holiday("eid-al-adha"), 2026) == [
        "2026-05-26", "2026-05-27", "2026-05-28", "2026-05-29",
    ]
    assert religious_holiday_dates(get_religious_holiday("easter-sunday"), 2035) == []
    assert get_religious_holiday("nope") is None


def test_religious_display() -> None:
    assert religious_holiday_display_date(get_religious_holiday("easter-sunday"), 2025) == "Apr 20"
    assert religious_holiday_display_date(get_religious_holiday("rosh-hashanah"), 2025) == "Sep 22 - Sep 23"
    assert religious_holiday_display_date(get_religious_holiday("purim"), 2040) == "Date varies"
    assert get_religion_display_name("islamic") == "Islamic Holidays"
    assert get_religion_display_name("other") == "Other Religious Holidays"


def test_default_religious_configs_are_disabled() -> None:
    configs = create_default_religious_configs()
    assert len(configs) == 11
    assert not any(c.enabled for c in configs)
    assert {c.assignment for c in configs} == {AssignmentType.ALTERNATE_ODD_EVEN}


def test_religious_holiday_days() -> None:
    configs = [
        ReligiousHolidayUserConfig("passover", True, AssignmentType.ALTERNATE_ODD_EVEN),
        ReligiousHolidayUserConfig("eid-al-fitr", False, AssignmentType.ALTERNATE_ODD_EVEN),
        ReligiousHolidayUserConfig("unknown", True, AssignmentType.ALTERNATE_ODD_EVEN),
    ]
    custom = create_custom_religious_holiday("Diwali", "2025-10-20", duration=3)
    assert religious_holiday_days(configs) == 2
    assert religious_holiday_days(configs, [custom]) == 5


# ============================================================
# 5) Custom religious holidays
# ============================================================
def test_create_custom_holiday() -> None:
    holiday = create_custom_religious_holiday("  Diwali ", "2025-10-20", duration=2)
    assert isinstance(holiday, CustomReligiousHoliday)
    assert holiday.id.startswith("custom-")
    assert holiday.name == "Diwali"
    assert holiday.dates == {2025: "2025-10-20"}
    assert holiday.assignment is AssignmentType.ALTERNATE_ODD_EVEN
    assert custom_holiday_dates(holiday, 2025) == ["2025-10-20", "2025-10-21"]
    assert custom_holiday_dates(holiday, 2026) == []


@pytest.mark.parametrize(
    "name, start, duration",
    [
        ("", "2025-10-20", 1),
        ("   ", "2025-10-20", 1),
        ("Diwali", None, 1),
        ("Diwali", "", 1),
        ("Diwali", "20/10/2025", 1),
        ("Diwali", "2025-10-20", 0),
        ("Diwali", "2025-10-20", MAX_CUSTOM_HOLIDAY_DURATION + 1),
    ],
)
def test_invalid_custom_holiday_is_rejected(name: str, start, duration: int) -> None:
    with pytest.raises(InvalidCustomHolidayError):
        create_custom_religious_holiday(name, start, duration=duration)


def test_custom_holiday_needs_simple_policy() -> None:
    with pytest.raises(InvalidCustomHolidayError):
        create_custom_religious_holiday("Diwali", "2025-10-20", assignment=AssignmentType.SPLIT_PERIOD)
