# Pytest suite for the holiday impact preview and yearly statistics.
#
# Run:
#   pip install -e .[test]
#   pytest -q tests/test_impact.py

from __future__ import annotations

import pytest

from custody_calendar import (
    AssignmentType,
    BasePattern,
    BirthdayConfig,
    HolidayImpact,
    HolidayImpactBreakdown,
    ParentId,
    calculate_impact,
    calculate_impact_breakdown,
    compose,
    create_default_birthday_configs,
    create_default_holiday_configs,
    determine_primary_parent,
    update_config,
    yearly_stats,
)

A, B = ParentId.PARENT_A, ParentId.PARENT_B


# -------------------------
# Fixtures
# -------------------------
@pytest.fixture(scope="session")
def default_breakdown() -> HolidayImpactBreakdown:
    return calculate_impact_breakdown(create_default_holiday_configs(), create_default_birthday_configs())


# ============================================================
# 1) Breakdown
# ============================================================
def test_default_breakdown(default_breakdown: HolidayImpactBreakdown) -> None:
    # spring 3/4, thanksgiving 2/3, winter 7/7, summer 13/13
    assert default_breakdown.major_breaks == HolidayImpact(25, 27)
    # Mother's Day all B, Father's Day all A, Halloween 0/1, the others 1/2
    assert default_breakdown.weekend_holidays == HolidayImpact(10, 18)
    assert default_breakdown.birthdays == HolidayImpact(1, 1)
    assert default_breakdown.total == HolidayImpact(36, 46)


def test_disabled_holidays_are_ignored() -> None:
    configs = update_config(create_default_holiday_configs(), "summer-vacation", enabled=False)
    breakdown = calculate_impact_breakdown(configs)
    assert breakdown.major_breaks == HolidayImpact(12, 14)
    assert breakdown.birthdays == HolidayImpact(0, 0)


def test_fixed_parent_gets_whole_duration() -> None:
    configs = update_config(create_default_holiday_configs(), "winter-break", assignment=AssignmentType.ALWAYS_PARENT_B)
    assert calculate_impact_breakdown(configs).major_breaks == HolidayImpact(18, 34)


def test_alternating_birthday_counts_half_each() -> None:
    child = BirthdayConfig(id="child-birthday", name="Kid", type="child", month=6, day=3,
                           default_assignment=AssignmentType.ALTERNATE_ODD_EVEN)
    assert calculate_impact_breakdown([], [child]).birthdays == HolidayImpact(1, 1)


def test_birthdays_follow_holiday_configs() -> None:
    birthdays = create_default_birthday_configs()
    configs = update_config(create_default_holiday_configs(), "mother-birthday", enabled=False)
    assert calculate_impact_breakdown(configs, birthdays).birthdays == HolidayImpact(1, 0)

    configs = update_config(configs, "father-birthday", enabled=False)
    assert calculate_impact_breakdown(configs, birthdays).birthdays == HolidayImpact(0, 0)

    configs = update_config(create_default_holiday_configs(), "mother-birthday", assignment=AssignmentType.ALWAYS_PARENT_A)
    assert calculate_impact_breakdown(configs, birthdays).birthdays == HolidayImpact(2, 0)


# ============================================================
# 2) Impact
# ============================================================
def test_zero_impact_keeps_base_split() -> None:
    result = calculate_impact(50, 50, HolidayImpactBreakdown())
    assert result.adjusted_percentages == {A: 50, B: 50}
    assert result.deviation == 0
    assert result.delta is None
    assert result.exceeds_threshold is False


def test_default_impact(default_breakdown: HolidayImpactBreakdown) -> None:
    result = calculate_impact(50, 50, default_breakdown)
    # 82 holiday days: A nets -5, B nets +5
    assert result.adjusted_percentage_a == pytest.approx(48.6)
    assert result.adjusted_percentage_b == pytest.approx(51.4)
    assert result.delta.parent is B
    assert result.delta.days == 10
    assert result.deviation == pytest.approx(1.4)


def test_deviation_threshold() -> None:
    breakdown = HolidayImpactBreakdown(major_breaks=HolidayImpact(60, 0))
    result = calculate_impact(50, 50, breakdown)
    # A: 182.5 + 30 = 212.5 of 365 days
    assert result.adjusted_percentage_a == pytest.approx(58.2)
    assert result.delta.parent is A
    assert result.delta.days == 60
    assert result.exceeds_threshold is False
    assert calculate_impact(50, 50, breakdown, deviation_threshold=5).exceeds_threshold is True


def test_degenerate_total_falls_back_to_even_split() -> None:
    result = calculate_impact(0, 0, HolidayImpactBreakdown())
    assert result.adjusted_percentages == {A: 50, B: 50}
    assert result.delta is None


# ============================================================
# 3) Primary parent
# ============================================================
@pytest.mark.parametrize(
    "pct_a, pct_b, expected",
    [
        (50, 50, ("Alex", 50)),
        (49, 51, ("Sam", 51)),
        (51, 49, ("Alex", 51)),
        (100, 0, ("Alex", 100)),
        (0, 100, ("Sam", 100)),
    ],
)
def test_determine_primary_parent(pct_a: float, pct_b: float, expected: tuple) -> None:
    assert determine_primary_parent("Alex", pct_a, "Sam", pct_b) == expected


# ============================================================
# 4) Yearly statistics
# ============================================================
def test_yearly_stats_percentages() -> None:
    pattern = BasePattern(pattern="AB", start_date="2025-01-01")
    stats = yearly_stats(compose(pattern, 2025, []))

    assert stats.parent_a.days == 183
    assert stats.parent_b.days == 182
    assert stats.parent_a.percentage == pytest.approx(50.14)
    assert stats.parent_b.percentage == pytest.approx(49.86)

    assert [m.month for m in stats.monthly_breakdown][:3] == ["Jan", "Feb", "Mar"]
    assert stats.monthly_breakdown[0].parent_a_days == 16
    assert stats.monthly_breakdown[0].parent_b_days == 15
    assert sum(m.parent_a_days + m.parent_b_days for m in stats.monthly_breakdown) == 365


def test_yearly_stats_single_parent() -> None:
    pattern = BasePattern(pattern="A", start_date="2024-01-01")
    stats = yearly_stats(compose(pattern, 2024, []))
    assert stats.parent_a.days == 366
    assert stats.parent_a.percentage == 100
    assert stats.parent_b.percentage == 0
    assert stats.monthly_breakdown[1].parent_a_days == 29
