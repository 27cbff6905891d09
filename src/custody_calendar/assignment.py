"""
assignment.py

Which parent receives a holiday instance.

Simple policies give one owner for the whole instance. Split-period holidays are cut
into two contiguous segments, each resolved on its own. Selection-priority holidays
(summer vacation) are picked by the parents themselves: only the pick order and the
number of weeks per parent are computed here, never concrete days.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .catalog import is_weekend_holiday
from .models import (
    AssignmentType,
    HolidayDefinition,
    HolidayUserConfig,
    ParentId,
    SelectionPriorityConfig,
    SplitPeriodConfig,
)

LOGGER = logging.getLogger(__name__)


def _is_odd(year: int) -> bool:
    return year % 2 == 1


# =========================
# Simple policies
# =========================
def resolve_owner(assignment: AssignmentType, year: int) -> Optional[ParentId]:
    """
    Owner of a holiday instance under a simple policy.

    alternate-odd-even gives parent A in odd years and parent B in even years.
    Compound policies (split-period, selection-priority) have no single owner: None.
    """
    assignment = AssignmentType(assignment)
    if assignment is AssignmentType.ALWAYS_PARENT_A:
        return ParentId.PARENT_A
    if assignment is AssignmentType.ALWAYS_PARENT_B:
        return ParentId.PARENT_B
    if assignment is AssignmentType.ALTERNATE_ODD_EVEN:
        return ParentId.PARENT_A if _is_odd(year) else ParentId.PARENT_B
    return None


# =========================
# Split periods
# =========================
@dataclass(frozen=True)
class SegmentAssignment:
    name: str
    assignment: AssignmentType
    owner: ParentId
    dates: Tuple[str, ...]


def _split_index(split_config: SplitPeriodConfig, dates: Sequence[str]) -> Optional[int]:
    month, day = split_config.split_month_day
    suffix = f"-{month:02d}-{day:02d}"
    for i, d in enumerate(dates):
        if d.endswith(suffix):
            return i
    return None


def resolve_split(
    split_config: SplitPeriodConfig,
    year: int,
    dates: Sequence[str],
) -> Tuple[SegmentAssignment, SegmentAssignment]:
    """
    Partition a holiday span at the split date.

    Segment 1 covers the days strictly before the split date, segment 2 starts on it.
    Both segments together are exactly `dates`, in order. When the split date is not
    part of the span, every day goes to segment 1 and segment 2 is empty.

    Parameters
    ----------
    split_config: SplitPeriodConfig
        Split date plus the name and policy of each segment.
    year: int
        Year of the holiday instance; both segment policies resolve against it.
    dates: Sequence[str]
        The resolved span of the holiday instance.

    Returns
    -------
    Tuple[SegmentAssignment, SegmentAssignment]
    """
    dates = tuple(dates)
    idx = _split_index(split_config, dates)
    if idx is None:
        if dates:
            LOGGER.warning(
                "%s: split date %s is outside %s..%s, whole span goes to %s",
                split_config.holiday_id, split_config.split_date, dates[0], dates[-1], split_config.segment1_name,
            )
        idx = len(dates)

    first = SegmentAssignment(
        name=split_config.segment1_name,
        assignment=split_config.segment1_assignment,
        owner=resolve_owner(split_config.segment1_assignment, year),
        dates=dates[:idx],
    )
    second = SegmentAssignment(
        name=split_config.segment2_name,
        assignment=split_config.segment2_assignment,
        owner=resolve_owner(split_config.segment2_assignment, year),
        dates=dates[idx:],
    )
    return first, second


# =========================
# Selection priority
# =========================
def first_pick_parent(selection_config: SelectionPriorityConfig, year: int) -> ParentId:
    """Parent choosing first: first_pick_odd_years in odd years, the other parent in even years."""
    first = selection_config.first_pick_odd_years
    return first if _is_odd(year) else first.other


def selection_order(selection_config: SelectionPriorityConfig, year: int) -> List[ParentId]:
    """Alternating pick order for every block of the year, starting with the first pick."""
    first = first_pick_parent(selection_config, year)
    return [first if i % 2 == 0 else first.other for i in range(2 * selection_config.blocks_per_parent)]


def selection_weeks(selection_config: SelectionPriorityConfig) -> Dict[ParentId, int]:
    """Vacation weeks each parent selects."""
    return {p: selection_config.weeks_per_parent for p in ParentId}


# =========================
# Per-date owners
# =========================
def resolve_assignment(
    config: HolidayUserConfig,
    definition: HolidayDefinition,
    year: int,
    dates: Sequence[str],
) -> Dict[str, ParentId]:
    """
    Owner of every date of a holiday instance.

    Selection-priority holidays claim no day (empty map). A split-period holiday
    without a split configuration falls back to alternating the whole span.
    """
    assignment = config.assignment

    if assignment is AssignmentType.SELECTION_PRIORITY:
        return {}

    if assignment is AssignmentType.SPLIT_PERIOD:
        if config.split_config is None:
            LOGGER.warning("%s: split-period without split configuration, alternating the whole span", definition.id)
            assignment = AssignmentType.ALTERNATE_ODD_EVEN
        else:
            owners: Dict[str, ParentId] = {}
            for segment in resolve_split(config.split_config, year, dates):
                owners.update({d: segment.owner for d in segment.dates})
            return owners

    owner = resolve_owner(assignment, year)
    return {d: owner for d in dates}


# =========================
# Bulk reassignment of weekend holidays
# =========================
# Mother's Day stays with parent B when every weekend holiday goes to parent A, and
# Father's Day stays with parent A when every weekend holiday goes to parent B.
TRADITIONAL_PARENT_DAYS: Mapping[AssignmentType, Mapping[str, AssignmentType]] = {
    AssignmentType.ALWAYS_PARENT_A: {"mothers-day": AssignmentType.ALWAYS_PARENT_B},
    AssignmentType.ALWAYS_PARENT_B: {"fathers-day": AssignmentType.ALWAYS_PARENT_A},
}


def bulk_weekend_assignment(holiday_id: str, assignment: AssignmentType) -> AssignmentType:
    """Assignment a weekend holiday receives when `assignment` is applied to all of them."""
    assignment = AssignmentType(assignment)
    return TRADITIONAL_PARENT_DAYS.get(assignment, {}).get(holiday_id, assignment)


def bulk_assign_weekend_holidays(
    configs: Iterable[HolidayUserConfig],
    assignment: AssignmentType,
) -> List[HolidayUserConfig]:
    """
    Apply one assignment to every weekend holiday config, honouring TRADITIONAL_PARENT_DAYS.

    Other configs pass through untouched; the input list is never modified.
    """
    return [
        replace(c, assignment=bulk_weekend_assignment(c.holiday_id, assignment))
        if is_weekend_holiday(c.holiday_id) else c
        for c in configs
    ]
