# Pytest suite for assignment policies, split periods, selection priority,
# the bulk weekend rule and preset application.
#
# Run:
#   pip install -e .[test]
#   pytest -q tests/test_assignment.py

from __future__ import annotations

import pytest

from custody_calendar import (
    AssignmentType,
    HolidayUserConfig,
    InvalidHolidayRuleError,
    ParentId,
    SplitPeriodConfig,
    apply_preset,
    bulk_assign_weekend_holidays,
    create_default_holiday_configs,
    enabled_configs,
    first_pick_parent,
    get_config,
    get_holiday,
    resolve_assignment,
    resolve_holiday_dates,
    resolve_owner,
    resolve_split,
    update_config,
)
from custody_calendar.assignment import TRADITIONAL_PARENT_DAYS, selection_order, selection_weeks
from custody_calendar.catalog import DEFAULT_SUMMER_VACATION_CONFIG, DEFAULT_WINTER_BREAK_SPLIT, WEEKEND_HOLIDAYS

A, B = ParentId.PARENT_A, ParentId.PARENT_B
ALT = AssignmentType.ALTERNATE_ODD_EVEN


# -------------------------
# Fixtures
# -------------------------
@pytest.fixture(scope="session")
def default_configs() -> list:
    return create_default_holiday_configs()


@pytest.fixture(scope="session")
def winter_2025() -> list:
    return resolve_holiday_dates("winter-break", 2025)


# ============================================================
# 1) Simple policies
# ============================================================
@pytest.mark.parametrize(
    "assignment, year, expected",
    [
        (AssignmentType.ALWAYS_PARENT_A, 2025, A),
        (AssignmentType.ALWAYS_PARENT_A, 2026, A),
        (AssignmentType.ALWAYS_PARENT_B, 2025, B),
        (AssignmentType.ALTERNATE_ODD_EVEN, 2025, A),
        (AssignmentType.ALTERNATE_ODD_EVEN, 2026, B),
        (AssignmentType.ALTERNATE_ODD_EVEN, 2000, B),
        ("alternate-odd-even", 1999, A),
    ],
)
def test_resolve_owner(assignment, year: int, expected: ParentId) -> None:
    assert resolve_owner(assignment, year) is expected


@pytest.mark.parametrize("year", range(2018, 2034))
def test_alternate_is_pure_and_flips(year: int) -> None:
    assert resolve_owner(ALT, year) is resolve_owner(ALT, year)
    assert resolve_owner(ALT, year) is not resolve_owner(ALT, year + 1)


def test_compound_policies_have_no_single_owner() -> None:
    assert resolve_owner(AssignmentType.SPLIT_PERIOD, 2025) is None
    assert resolve_owner(AssignmentType.SELECTION_PRIORITY, 2025) is None


# ============================================================
# 2) Split periods
# ============================================================
def test_winter_split_partitions_span(winter_2025: list) -> None:
    christmas, new_year = resolve_split(DEFAULT_WINTER_BREAK_SPLIT, 2025, winter_2025)

    assert christmas.name == "Christmas"
    assert christmas.dates == ("2025-12-23", "2025-12-24", "2025-12-25")
    assert new_year.dates[0] == "2025-12-26"
    assert new_year.dates[-1] == "2026-01-02"
    assert list(christmas.dates + new_year.dates) == winter_2025


def test_split_segments_resolve_against_year(winter_2025: list) -> None:
    split = SplitPeriodConfig(
        holiday_id="winter-break",
        split_point="December 26 at noon",
        split_date="2025-12-26",
        segment1_name="Christmas",
        segment2_name="New Year's",
        segment1_assignment=AssignmentType.ALWAYS_PARENT_B,
        segment2_assignment=ALT,
    )
    first, second = resolve_split(split, 2025, winter_2025)
    assert first.owner is B
    assert second.owner is A
    first, second = resolve_split(split, 2026, resolve_holiday_dates("winter-break", 2026))
    assert second.owner is B


def test_split_date_outside_span_keeps_everything_in_first_segment(winter_2025: list) -> None:
    split = SplitPeriodConfig(
        holiday_id="winter-break",
        split_point="July",
        split_date="07-01",
        segment1_name="One",
        segment2_name="Two",
        segment1_assignment=ALT,
        segment2_assignment=ALT,
    )
    first, second = resolve_split(split, 2025, winter_2025)
    assert list(first.dates) == winter_2025
    assert second.dates == ()


@pytest.mark.parametrize("split_date", ["26-12-2025", "12/26", "13-01", ""])
def test_malformed_split_date_raises(split_date: str) -> None:
    with pytest.raises(InvalidHolidayRuleError):
        SplitPeriodConfig(
            holiday_id="winter-break",
            split_point="?",
            split_date=split_date,
            segment1_name="One",
            segment2_name="Two",
            segment1_assignment=ALT,
            segment2_assignment=ALT,
        )


def test_split_segments_must_be_simple() -> None:
    with pytest.raises(InvalidHolidayRuleError):
        SplitPeriodConfig(
            holiday_id="winter-break",
            split_point="?",
            split_date="12-26",
            segment1_name="One",
            segment2_name="Two",
            segment1_assignment=AssignmentType.SPLIT_PERIOD,
            segment2_assignment=ALT,
        )


# ============================================================
# 3) Selection priority
# ============================================================
def test_first_pick_alternates_by_parity() -> None:
    assert first_pick_parent(DEFAULT_SUMMER_VACATION_CONFIG, 2025) is A
    assert first_pick_parent(DEFAULT_SUMMER_VACATION_CONFIG, 2026) is B


def test_selection_order_and_weeks() -> None:
    assert selection_order(DEFAULT_SUMMER_VACATION_CONFIG, 2026) == [B, A, B, A]
    assert selection_weeks(DEFAULT_SUMMER_VACATION_CONFIG) == {A: 2, B: 2}


# ============================================================
# 4) Per-date owners
# ============================================================
def test_resolve_assignment_per_policy(default_configs: list, winter_2025: list) -> None:
    winter = get_config(default_configs, "winter-break")
    owners = resolve_assignment(winter, get_holiday("winter-break"), 2025, winter_2025)
    assert set(owners) == set(winter_2025)
    assert set(owners.values()) == {A}

    summer = get_config(default_configs, "summer-vacation")
    summer_dates = resolve_holiday_dates("summer-vacation", 2025)
    assert resolve_assignment(summer, get_holiday("summer-vacation"), 2025, summer_dates) == {}

    mothers = get_config(default_configs, "mothers-day")
    dates = resolve_holiday_dates("mothers-day", 2025)
    assert resolve_assignment(mothers, get_holiday("mothers-day"), 2025, dates) == {d: B for d in dates}


def test_split_without_configuration_alternates(winter_2025: list) -> None:
    config = HolidayUserConfig(holiday_id="winter-break", enabled=True, assignment=AssignmentType.SPLIT_PERIOD)
    owners = resolve_assignment(config, get_holiday("winter-break"), 2026, winter_2025)
    assert set(owners.values()) == {B}


# ============================================================
# 5) Bulk weekend rule
# ============================================================
def test_bulk_parent_a_keeps_mothers_day(default_configs: list) -> None:
    out = bulk_assign_weekend_holidays(default_configs, AssignmentType.ALWAYS_PARENT_A)
    weekend_ids = {h.id for h in WEEKEND_HOLIDAYS}

    for config in out:
        if config.holiday_id == "mothers-day":
            assert config.assignment is AssignmentType.ALWAYS_PARENT_B
        elif config.holiday_id in weekend_ids:
            assert config.assignment is AssignmentType.ALWAYS_PARENT_A
        else:
            assert config == get_config(default_configs, config.holiday_id)


def test_bulk_parent_b_keeps_fathers_day(default_configs: list) -> None:
    out = bulk_assign_weekend_holidays(default_configs, AssignmentType.ALWAYS_PARENT_B)
    assert get_config(out, "fathers-day").assignment is AssignmentType.ALWAYS_PARENT_A
    assert get_config(out, "mothers-day").assignment is AssignmentType.ALWAYS_PARENT_B
    assert get_config(out, "labor-day").assignment is AssignmentType.ALWAYS_PARENT_B


def test_bulk_alternate_has_no_exception(default_configs: list) -> None:
    out = bulk_assign_weekend_holidays(default_configs, ALT)
    assert get_config(out, "mothers-day").assignment is ALT
    assert get_config(out, "fathers-day").assignment is ALT
    assert ALT not in TRADITIONAL_PARENT_DAYS


def test_bulk_does_not_mutate_input(default_configs: list) -> None:
    before = list(default_configs)
    bulk_assign_weekend_holidays(default_configs, AssignmentType.ALWAYS_PARENT_A)
    assert default_configs == before


# ============================================================
# 6) Presets and config edits
# ============================================================
@pytest.mark.parametrize("preset", ["traditional", "50-50-split", "one-parent-all"])
def test_preset_is_idempotent(default_configs: list, preset: str) -> None:
    once = apply_preset(default_configs, preset)
    assert apply_preset(once, preset) == once


def test_preset_keeps_enabled_flags(default_configs: list) -> None:
    configs = update_config(default_configs, "halloween", enabled=False)
    out = apply_preset(configs, "one-parent-all")
    assert get_config(out, "halloween").enabled is False
    assert all(c.assignment is AssignmentType.ALWAYS_PARENT_A for c in out)


def test_fifty_fifty_alternates_parent_days(default_configs: list) -> None:
    out = apply_preset(default_configs, "50-50-split")
    assert get_config(out, "mothers-day").assignment is ALT
    assert get_config(out, "father-birthday").assignment is ALT
    assert get_config(out, "winter-break").assignment is AssignmentType.SPLIT_PERIOD
    assert get_config(out, "summer-vacation").assignment is AssignmentType.SELECTION_PRIORITY


def test_traditional_restores_defaults(default_configs: list) -> None:
    scrambled = apply_preset(default_configs, "one-parent-all")
    assert apply_preset(scrambled, "traditional") == default_configs


def test_unknown_preset_is_noop(default_configs: list) -> None:
    assert apply_preset(default_configs, "nope") == default_configs


def test_configs_outside_preset_pass_through(default_configs: list) -> None:
    extra = HolidayUserConfig(holiday_id="custom-diwali", enabled=True, assignment=AssignmentType.ALWAYS_PARENT_B)
    out = apply_preset([*default_configs, extra], "one-parent-all")
    assert out[-1] is extra


def test_update_config_is_pure(default_configs: list) -> None:
    out = update_config(default_configs, "labor-day", assignment=AssignmentType.ALWAYS_PARENT_B)
    assert get_config(out, "labor-day").assignment is AssignmentType.ALWAYS_PARENT_B
    assert get_config(default_configs, "labor-day").assignment is ALT
    assert update_config(default_configs, "unknown", enabled=False) == default_configs


def test_enabled_configs(default_configs: list) -> None:
    configs = update_config(default_configs, "halloween", enabled=False)
    kept = enabled_configs(configs)
    assert len(kept) == len(configs) - 1
    assert "halloween" not in {c.holiday_id for c in kept}
