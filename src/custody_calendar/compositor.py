"""
compositor.py

Final per-day ownership of a year: the base rotation pattern, overridden by holiday
claims.

Every enabled holiday instance becomes a HolidayClaim (date -> parent). On a day claimed
by several holidays the highest priority wins; equal priorities fall back to declaration
order (catalog holidays first, in ALL_HOLIDAYS order, then religious holidays, then
custom holidays). Instances of `year - 1` are resolved too, since winter break starts in
December and runs into January.

Ownership arrays are indexed like YearUniverse.days and hold parent codes
(0 = parent A, 1 = parent B).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .assignment import resolve_assignment, resolve_owner
from .catalog import ALL_HOLIDAYS, declaration_index, get_holiday
from .configs import enabled_configs
from .date_universe import YearUniverse
from .errors import OutOfRangeError
from .models import (
    BasePattern,
    BirthdayConfig,
    CustomDates,
    CustomReligiousHoliday,
    HolidayCategory,
    HolidayDefinition,
    HolidayUserConfig,
    ParentId,
    ReligiousHolidayUserConfig,
)
from .religious import (
    ALL_RELIGIOUS_HOLIDAYS,
    RELIGIOUS_HOLIDAY_PRIORITY,
    custom_holiday_dates,
    get_religious_holiday,
    religious_holiday_dates,
)
from .resolver import resolve_dates
from .utils import DateLike, _to_internal_date

LOGGER = logging.getLogger(__name__)

PARENT_CODES: Tuple[ParentId, ParentId] = (ParentId.PARENT_A, ParentId.PARENT_B)
NO_HOLIDAY = -1


def _code(parent: ParentId) -> int:
    return PARENT_CODES.index(ParentId(parent))


# =========================
# Base owner builders
# =========================
class AbstractOwnerBuilder(ABC):
    """
    Abstract base class for builders of the base (non-holiday) owner array of a year.
    """
    @abstractmethod
    def build_owner(self, universe: YearUniverse) -> np.ndarray:
        """
        Build an int8 array of the same length as the universe holding parent codes.

        Parameters
        ----------
        universe: YearUniverse
            The year for which to build the owners.
        """
        pass


@dataclass(frozen=True)
class PatternOwnerBuilder(AbstractOwnerBuilder):
    """
    Base owners from a cyclic A/B rotation pattern.

    Day d gets marker pattern[(d - start_date) mod cycle_length]; days before the
    anchor wrap around the cycle. 'A' is the starting parent, 'B' the other one.

    Attributes
    ----------
    base_pattern: BasePattern
        The rotation to repeat over the year.
    """
    base_pattern: BasePattern

    def build_owner(self, universe: YearUniverse) -> np.ndarray:
        """
        Build an int8 array of the same length as the universe holding parent codes.

        Parameters
        ----------
        universe: YearUniverse
            The year for which to build the owners.

        Returns
        -------
        np.ndarray
            0 where parent A owns the day, 1 where parent B does.
        """
        pattern = self.base_pattern
        is_starting = np.array([m == "A" for m in pattern.pattern], dtype=bool)

        diff = universe.offsets_from(_to_internal_date(pattern.start_date))
        idx = ((diff % pattern.cycle_length) + pattern.cycle_length) % pattern.cycle_length

        starting = _code(pattern.starting_parent)
        return np.where(is_starting[idx], starting, 1 - starting).astype("int8")


@dataclass(frozen=True)
class ConstantOwnerBuilder(AbstractOwnerBuilder):
    """Every day belongs to the same parent."""
    parent: ParentId = ParentId.PARENT_A

    def build_owner(self, universe: YearUniverse) -> np.ndarray:
        return np.full(len(universe), _code(self.parent), dtype="int8")


# =========================
# Claims
# =========================
@dataclass(frozen=True)
class HolidayClaim:
    """
    One holiday instance claiming days.

    Attributes
    ----------
    holiday_id: str
    priority: int
        Higher wins on overlapping days.
    order: int
        Declaration order, lower wins on equal priority.
    owners: Mapping[str, ParentId]
        ISO date -> parent receiving that day.
    """
    holiday_id: str
    priority: int
    order: int
    owners: Mapping[str, ParentId] = field(default_factory=dict)

    @property
    def sort_key(self) -> Tuple[int, int]:
        return -self.priority, self.order


def _in_year(dates: Iterable[str], year: int) -> List[str]:
    prefix = f"{year:04d}-"
    return [d for d in dates if d.startswith(prefix)]


def _holiday_dates(
    config: HolidayUserConfig,
    definition: HolidayDefinition,
    instance_year: int,
    birthdays: Mapping[str, BirthdayConfig],
) -> List[str]:
    # Literal dates belong to the instance of their own year
    if config.custom_dates:
        return _in_year(config.custom_dates, instance_year)
    if definition.category is HolidayCategory.BIRTHDAY and definition.id in birthdays:
        d = birthdays[definition.id].date_in(instance_year)
        return [d] if d else []
    if isinstance(definition.date_calculation, CustomDates):
        return _in_year(resolve_dates(definition, instance_year), instance_year)
    return resolve_dates(definition, instance_year)


def build_claims(
    configs: Iterable[HolidayUserConfig],
    year: int,
    *,
    birthdays: Iterable[BirthdayConfig] = (),
    religious_configs: Iterable[ReligiousHolidayUserConfig] = (),
    custom_holidays: Sequence[CustomReligiousHoliday] = (),
) -> List[HolidayClaim]:
    """
    Resolve every enabled holiday into claims on days of `year`.

    Parameters
    ----------
    configs: Iterable[HolidayUserConfig]
        Catalog holiday configurations. Unknown ids are skipped with a warning.
    year: int
        The year to compose; only its days are kept.
    birthdays: Iterable[BirthdayConfig]
        Birthday dates, matched to birthday holidays by id.
    religious_configs: Iterable[ReligiousHolidayUserConfig]
        Configurations of the tabulated religious holidays.
    custom_holidays: Sequence[CustomReligiousHoliday]
        User-defined holidays, always enabled.

    Returns
    -------
    List[HolidayClaim]
        Claims with at least one day inside `year`.
    """
    configs = enabled_configs(configs)
    religious_configs = enabled_configs(religious_configs)
    birthday_map = {b.id: b for b in birthdays}
    religious_order = {h.id: len(ALL_HOLIDAYS) + i for i, h in enumerate(ALL_RELIGIOUS_HOLIDAYS)}
    custom_base = len(ALL_HOLIDAYS) + len(ALL_RELIGIOUS_HOLIDAYS)

    claims: List[HolidayClaim] = []

    def _add(holiday_id: str, priority: int, order: int, owners: Mapping[str, ParentId]) -> None:
        kept = {d: p for d, p in owners.items() if d.startswith(f"{year:04d}-")}
        if kept:
            claims.append(HolidayClaim(holiday_id=holiday_id, priority=priority, order=order, owners=kept))

    for instance_year in (year - 1, year):
        for config in configs:
            definition = get_holiday(config.holiday_id)
            if definition is None:
                if instance_year == year:
                    LOGGER.warning("Skipping config for unknown holiday %r", config.holiday_id)
                continue
            dates = _holiday_dates(config, definition, instance_year, birthday_map)
            owners = resolve_assignment(config, definition, instance_year, dates)
            _add(definition.id, definition.priority, declaration_index(definition.id), owners)

        for config in religious_configs:
            holiday = get_religious_holiday(config.holiday_id)
            owner = resolve_owner(config.assignment, instance_year)
            if holiday is None or owner is None:
                if instance_year == year:
                    LOGGER.warning("Skipping religious config %r (%s)", config.holiday_id, config.assignment.value)
                continue
            dates = religious_holiday_dates(holiday, instance_year)
            _add(holiday.id, RELIGIOUS_HOLIDAY_PRIORITY, religious_order[holiday.id], {d: owner for d in dates})

        for i, custom in enumerate(custom_holidays):
            owner = resolve_owner(custom.assignment, instance_year)
            if owner is None:
                continue
            dates = custom_holiday_dates(custom, instance_year)
            _add(custom.id, RELIGIOUS_HOLIDAY_PRIORITY, custom_base + i, {d: owner for d in dates})

    LOGGER.debug("Built %d holiday claims for %d", len(claims), year)
    return claims


# =========================
# Composition
# =========================
@dataclass()
class YearOwnership:
    """
    Owner of every day of a year, with the holiday responsible for each override.

    Attributes
    ----------
    universe: YearUniverse
    base: np.ndarray
        Parent codes from the rotation pattern alone.
    owner: np.ndarray
        Parent codes after holiday overrides.
    holiday: np.ndarray
        Index into holiday_ids of the winning claim, NO_HOLIDAY where none.
    holiday_ids: Tuple[str, ...]
    """
    universe: YearUniverse
    base: np.ndarray
    owner: np.ndarray
    holiday: np.ndarray
    holiday_ids: Tuple[str, ...]

    @property
    def year(self) -> int:
        return self.universe.year

    def __len__(self) -> int:
        return len(self.universe)

    def _index(self, day: DateLike) -> int:
        d64 = _to_internal_date(day)
        if not self.universe.contains(d64):
            raise OutOfRangeError(f"Date {d64} is outside year {self.year}")
        return self.universe.locate(d64)

    def owner_of(self, day: DateLike) -> ParentId:
        return PARENT_CODES[int(self.owner[self._index(day)])]

    def base_owner_of(self, day: DateLike) -> ParentId:
        return PARENT_CODES[int(self.base[self._index(day)])]

    def holiday_of(self, day: DateLike) -> Optional[str]:
        """Id of the holiday deciding the owner of `day`, or None for a base-pattern day."""
        h = int(self.holiday[self._index(day)])
        return None if h == NO_HOLIDAY else self.holiday_ids[h]

    def items(self) -> Iterator[Tuple[str, ParentId]]:
        for d64, code in zip(self.universe.days, self.owner):
            yield str(d64), PARENT_CODES[int(code)]

    def counts(self, *, base: bool = False) -> Dict[ParentId, int]:
        codes = self.base if base else self.owner
        n_b = int(codes.sum())
        return {ParentId.PARENT_A: len(codes) - n_b, ParentId.PARENT_B: n_b}

    def overridden_days(self) -> List[str]:
        """Days claimed by a holiday, whether or not the owner changed."""
        return [str(d) for d in self.universe.days[self.holiday != NO_HOLIDAY]]

    def changed_days(self) -> List[str]:
        """Days whose owner differs from the base pattern."""
        return [str(d) for d in self.universe.days[self.owner != self.base]]

    def to_dict(self) -> Dict[str, str]:
        return {d: p.value for d, p in self.items()}


def compose(
    base_pattern: BasePattern,
    year: int,
    claims: Iterable[HolidayClaim],
    *,
    builder: Optional[AbstractOwnerBuilder] = None,
) -> YearOwnership:
    """
    Merge holiday claims onto the base rotation for every day of `year`.

    Parameters
    ----------
    base_pattern: BasePattern
        Rotation giving the owner of unclaimed days.
    year: int
        The year to compose (365 or 366 days).
    claims: Iterable[HolidayClaim]
        Holiday claims, typically from build_claims. Days outside `year` are ignored.
    builder: AbstractOwnerBuilder, optional
        Override for the base owner builder, defaults to PatternOwnerBuilder(base_pattern).

    Returns
    -------
    YearOwnership
    """
    universe = YearUniverse(year)
    base = (builder or PatternOwnerBuilder(base_pattern)).build_owner(universe)
    owner = base.copy()
    holiday = np.full(len(universe), NO_HOLIDAY, dtype="int32")

    holiday_ids: List[str] = []
    for claim in sorted(claims, key=lambda c: c.sort_key):
        if claim.holiday_id not in holiday_ids:
            holiday_ids.append(claim.holiday_id)
        h = holiday_ids.index(claim.holiday_id)
        for day, parent in sorted(claim.owners.items()):
            d64 = _to_internal_date(day)
            if not universe.contains(d64):
                continue
            i = universe.locate(d64)
            # Claims arrive strongest first, so the first claim on a day keeps it
            if holiday[i] == NO_HOLIDAY:
                holiday[i] = h
                owner[i] = _code(parent)

    ownership = YearOwnership(
        universe=universe,
        base=base,
        owner=owner,
        holiday=holiday,
        holiday_ids=tuple(holiday_ids),
    )
    LOGGER.debug(
        "Composed %d: %d days overridden, %d owners changed",
        year, len(ownership.overridden_days()), len(ownership.changed_days()),
    )
    return ownership
