"""
impact.py

Statistics on how holiday overrides move the custody split.

The breakdown is a schedule-agnostic preview: holidays whose owner changes with the
year (alternating, split, selection) count as an even split of their nominal duration,
parent A getting floor(duration / 2) and parent B the remainder. That approximation is
what the percentages shown to parents are based on, so it is kept as is.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Tuple

import numpy as np

from .catalog import get_holiday
from .compositor import YearOwnership
from .configs import enabled_configs
from .models import (
    AssignmentType,
    BirthdayConfig,
    HolidayCategory,
    HolidayImpact,
    HolidayImpactBreakdown,
    HolidayUserConfig,
    ImpactDelta,
    ImpactResult,
    MonthlyBreakdown,
    ParentId,
    ParentStats,
    YearlyStats,
)
from .utils import MONTH_ABBR, round_half_up

LOGGER = logging.getLogger(__name__)

DAYS_PER_YEAR = 365
DEFAULT_DEVIATION_THRESHOLD = 10


def _split_days(assignment: AssignmentType, days: float) -> Tuple[float, float]:
    if assignment is AssignmentType.ALWAYS_PARENT_A:
        return days, 0
    if assignment is AssignmentType.ALWAYS_PARENT_B:
        return 0, days
    half = math.floor(days / 2)
    return half, days - half


def calculate_impact_breakdown(
    configs: Iterable[HolidayUserConfig],
    birthdays: Iterable[BirthdayConfig] = (),
) -> HolidayImpactBreakdown:
    """
    Days each parent receives from enabled holidays, by category.

    Major breaks and weekend holidays count their nominal duration_days. Each birthday
    counts one day, half a day to each parent when it is not assigned to a fixed parent;
    birthday totals are rounded half up.

    Parameters
    ----------
    configs: Iterable[HolidayUserConfig]
        Holiday configurations; disabled ones and unknown ids are ignored.
    birthdays: Iterable[BirthdayConfig]
        Birthday configurations, matched to holiday configurations by id.

    Returns
    -------
    HolidayImpactBreakdown
    """
    configs = list(configs)
    by_id = {c.holiday_id: c for c in configs}
    totals = {HolidayCategory.MAJOR_BREAK: [0, 0], HolidayCategory.WEEKEND: [0, 0]}

    for config in enabled_configs(configs):
        holiday = get_holiday(config.holiday_id)
        if holiday is None or holiday.category not in totals:
            continue
        a, b = _split_days(config.assignment, holiday.duration_days)
        totals[holiday.category][0] += a
        totals[holiday.category][1] += b

    birthday_a = birthday_b = 0.0
    for birthday in birthdays:
        config = by_id.get(birthday.id)
        if config is not None and not config.enabled:
            continue
        assignment = birthday.default_assignment if config is None else config.assignment
        if assignment is AssignmentType.ALWAYS_PARENT_A:
            birthday_a += 1
        elif assignment is AssignmentType.ALWAYS_PARENT_B:
            birthday_b += 1
        else:
            birthday_a += 0.5
            birthday_b += 0.5

    return HolidayImpactBreakdown(
        major_breaks=HolidayImpact(*totals[HolidayCategory.MAJOR_BREAK]),
        weekend_holidays=HolidayImpact(*totals[HolidayCategory.WEEKEND]),
        birthdays=HolidayImpact(int(round_half_up(birthday_a)), int(round_half_up(birthday_b))),
    )


def calculate_impact(
    base_percentage_a: float,
    base_percentage_b: float,
    breakdown: HolidayImpactBreakdown,
    deviation_threshold: float = DEFAULT_DEVIATION_THRESHOLD,
) -> ImpactResult:
    """
    Adjusted custody percentages once holiday overrides are applied to a base split.

    Each parent keeps its base share of a 365-day year, gains its holiday days, and
    loses the share of holiday days the base schedule would already have given it.

    Parameters
    ----------
    base_percentage_a: float
        Share of parent A under the base pattern alone (0-100).
    base_percentage_b: float
        Share of parent B under the base pattern alone (0-100).
    breakdown: HolidayImpactBreakdown
        Output of calculate_impact_breakdown.
    deviation_threshold: float, default 10
        Deviation (percentage points) above which the result is flagged.

    Returns
    -------
    ImpactResult
        Percentages and deviation rounded to one decimal. The delta names the parent
        gaining days overall, None on a tie. A degenerate total falls back to 50/50.
    """
    total = breakdown.total
    impact_a, impact_b = total.parent_a_days, total.parent_b_days
    holiday_days = impact_a + impact_b

    net_a = impact_a - holiday_days * base_percentage_a / 100
    net_b = impact_b - holiday_days * base_percentage_b / 100

    adjusted_days_a = base_percentage_a / 100 * DAYS_PER_YEAR + net_a
    adjusted_days_b = base_percentage_b / 100 * DAYS_PER_YEAR + net_b
    total_days = adjusted_days_a + adjusted_days_b

    if total_days > 0:
        adjusted_a = adjusted_days_a / total_days * 100
        adjusted_b = adjusted_days_b / total_days * 100
    else:
        LOGGER.debug("Non-positive adjusted total (%s), falling back to 50/50", total_days)
        adjusted_a = adjusted_b = 50.0

    delta: Optional[ImpactDelta] = None
    if net_a > net_b:
        delta = ImpactDelta(parent=ParentId.PARENT_A, days=int(round_half_up(net_a - net_b)))
    elif net_b > net_a:
        delta = ImpactDelta(parent=ParentId.PARENT_B, days=int(round_half_up(net_b - net_a)))

    deviation = round_half_up(abs(adjusted_a - base_percentage_a), 1)
    return ImpactResult(
        adjusted_percentage_a=round_half_up(adjusted_a, 1),
        adjusted_percentage_b=round_half_up(adjusted_b, 1),
        delta=delta,
        deviation=deviation,
        exceeds_threshold=deviation > deviation_threshold,
    )


def determine_primary_parent(
    parent_a_name: str,
    parent_a_percent: float,
    parent_b_name: str,
    parent_b_percent: float,
) -> Tuple[str, float]:
    """(name, percent) of the parent with the larger share; parent A on a tie."""
    if parent_a_percent >= parent_b_percent:
        return parent_a_name, parent_a_percent
    return parent_b_name, parent_b_percent


def _percentage(days: int, total: int) -> float:
    return round_half_up(days / total * 10000) / 100


def yearly_stats(ownership: YearOwnership, *, base: bool = False) -> YearlyStats:
    """
    Day counts per parent, two-decimal percentages and a month by month breakdown.

    Parameters
    ----------
    ownership: YearOwnership
        A composed year.
    base: bool, default False
        Use the base pattern instead of the final owners.
    """
    codes = ownership.base if base else ownership.owner
    months = ownership.universe.month

    monthly = []
    for m in range(1, 13):
        in_month = codes[months == m]
        b_days = int(np.count_nonzero(in_month))
        monthly.append(MonthlyBreakdown(month=MONTH_ABBR[m - 1], parent_a_days=len(in_month) - b_days, parent_b_days=b_days))

    total = len(codes)
    b_total = int(np.count_nonzero(codes))
    a_total = total - b_total
    return YearlyStats(
        parent_a=ParentStats(days=a_total, percentage=_percentage(a_total, total)),
        parent_b=ParentStats(days=b_total, percentage=_percentage(b_total, total)),
        monthly_breakdown=monthly,
    )
