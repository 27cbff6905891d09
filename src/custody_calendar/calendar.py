import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple

from .utils import DateLike, _to_internal_date
from .models import (
    BasePattern,
    BirthdayConfig,
    CustomReligiousHoliday,
    HolidayUserConfig,
    ImpactResult,
    ParentId,
    ReligiousHolidayUserConfig,
    YearlyStats,
)
from .catalog import get_holiday
from .configs import create_default_birthday_configs, create_default_holiday_configs
from .presets import apply_preset
from .resolver import resolve_dates
from .religious import custom_holiday_dates, get_religious_holiday, religious_holiday_dates
from .compositor import PARENT_CODES, HolidayClaim, YearOwnership, build_claims, compose
from .impact import DEFAULT_DEVIATION_THRESHOLD, calculate_impact, calculate_impact_breakdown, yearly_stats
from .errors import OutOfRangeError


class CustodyCalendar:
    """
    Structure representing the custody schedule of one year.

    It is defined by :
        - A base rotation pattern : owner of every day without a holiday
        - Holiday configurations : which holidays are observed and how each is assigned
        - The resulting YearOwnership : owner of every day once holidays are applied

    The year is composed once at construction; every query reads the composed arrays.
    """

    def __init__(self,
                 year: int,
                 base_pattern: BasePattern,
                 configs: Optional[Sequence[HolidayUserConfig]] = None,
                 *,
                 birthdays: Optional[Sequence[BirthdayConfig]] = None,
                 religious_configs: Sequence[ReligiousHolidayUserConfig] = (),
                 custom_holidays: Sequence[CustomReligiousHoliday] = (),
                 preset: Optional[str] = None,
                 parent_names: Tuple[str, str] = ("Parent A", "Parent B")):
        """
        Parameters
        ----------
        year: int
            The year to build.
        base_pattern: BasePattern
            The rotation used for every day no holiday claims.
        configs: Optional[Sequence[HolidayUserConfig]], default None
            Holiday configurations. If None, uses create_default_holiday_configs().
        birthdays: Optional[Sequence[BirthdayConfig]], default None
            Birthday dates. If None, uses create_default_birthday_configs().
        religious_configs: Sequence[ReligiousHolidayUserConfig], default ()
            Configurations of the tabulated religious holidays (only enabled ones claim days).
        custom_holidays: Sequence[CustomReligiousHoliday], default ()
            User-defined holidays.
        preset: Optional[str], default None
            If given, the preset is applied to `configs` before composing.
        parent_names: Tuple[str, str], default ("Parent A", "Parent B")
            Display names used by summary().
        """
        self.year = year
        self.base_pattern = base_pattern
        self.parent_names = parent_names

        configs = list(create_default_holiday_configs() if configs is None else configs)
        if preset is not None:
            configs = apply_preset(configs, preset)
        self.configs: List[HolidayUserConfig] = configs
        self.birthdays: List[BirthdayConfig] = list(create_default_birthday_configs() if birthdays is None else birthdays)
        self.religious_configs: List[ReligiousHolidayUserConfig] = list(religious_configs)
        self.custom_holidays: List[CustomReligiousHoliday] = list(custom_holidays)

        self.claims: List[HolidayClaim] = build_claims(
            self.configs,
            year,
            birthdays=self.birthdays,
            religious_configs=self.religious_configs,
            custom_holidays=self.custom_holidays,
        )
        self.ownership: YearOwnership = compose(base_pattern, year, self.claims)

    # ---------------------------------------
    # |            Helper methods           |
    # ---------------------------------------

    def _range_indices(self, start: Optional[DateLike], end: Optional[DateLike]) -> Tuple[int, int]:
        """
        Give the start and end indices corresponding to the given start and end dates.

        Parameters
        ----------
        start: Optional[DateLike]
            The start date. If None, uses January 1st.
        end: Optional[DateLike]
            The end date. If None, uses December 31st.
        """
        universe = self.ownership.universe
        s = universe.start64 if start is None else _to_internal_date(start)
        e = universe.end64 if end is None else _to_internal_date(end)
        if not (universe.contains(s) and universe.contains(e)):
            raise OutOfRangeError(f"Range {s}..{e} is not inside year {self.year}")
        i0, i1 = universe.locate(s), universe.locate(e)
        if i1 < i0:
            raise ValueError("end < start")
        return i0, i1

    # ---------------------------------------
    # |          Public API methods         |
    # ---------------------------------------

    # ---------------------------
    # 1. Day-level ownership
    # ---------------------------

    def __len__(self) -> int:
        """Return the number of days in the year."""
        return len(self.ownership)

    def owner(self, day: DateLike) -> ParentId:
        """
        Parent owning a day once holidays are applied.

        Parameters
        ----------
        day: DateLike
            A day of the calendar year; other days raise OutOfRangeError.
        """
        return self.ownership.owner_of(day)

    def base_owner(self, day: DateLike) -> ParentId:
        """Parent owning a day under the base rotation alone."""
        return self.ownership.base_owner_of(day)

    def holiday_on(self, day: DateLike) -> Optional[str]:
        """Id of the holiday deciding the owner of a day, None on a regular day."""
        return self.ownership.holiday_of(day)

    def schedule(self, start_date: Optional[DateLike] = None, end_date: Optional[DateLike] = None) -> List[Tuple[str, ParentId]]:
        """
        Ordered (ISO date, owner) pairs between two dates, both included.

        Parameters
        ----------
        start_date: Optional[DateLike]
            If None, uses January 1st.
        end_date: Optional[DateLike]
            If None, uses December 31st.
        """
        i0, i1 = self._range_indices(start_date, end_date)
        days = self.ownership.universe.days[i0:i1 + 1]
        codes = self.ownership.owner[i0:i1 + 1]
        return [(str(d), PARENT_CODES[int(c)]) for d, c in zip(days, codes)]

    def days_of(self, parent: ParentId, start_date: Optional[DateLike] = None, end_date: Optional[DateLike] = None) -> int:
        """Number of days owned by `parent` between two dates, both included."""
        i0, i1 = self._range_indices(start_date, end_date)
        codes = self.ownership.owner[i0:i1 + 1]
        return int(np.count_nonzero(codes == PARENT_CODES.index(ParentId(parent))))

    # ---------------------------
    # 2. Holidays
    # ---------------------------

    def holiday_dates(self, holiday_id: str) -> Optional[List[str]]:
        """
        Dates of the holiday instance starting in this year, whether or not it is enabled.

        Looks up catalog holidays, then religious holidays, then custom holidays.
        Returns None when the id is unknown.
        """
        definition = get_holiday(holiday_id)
        if definition is not None:
            return resolve_dates(definition, self.year)
        religious = get_religious_holiday(holiday_id)
        if religious is not None:
            return religious_holiday_dates(religious, self.year)
        for custom in self.custom_holidays:
            if custom.id == holiday_id:
                return custom_holiday_dates(custom, self.year)
        return None

    def holiday_owner(self, holiday_id: str) -> Dict[str, ParentId]:
        """Days of this year actually won by a holiday, with their owner."""
        if holiday_id not in self.ownership.holiday_ids:
            return {}
        h = self.ownership.holiday_ids.index(holiday_id)
        idx = np.flatnonzero(self.ownership.holiday == h)
        return {str(self.ownership.universe.days[i]): PARENT_CODES[int(self.ownership.owner[i])] for i in idx}

    def overridden_days(self) -> List[str]:
        """Days decided by a holiday rather than by the base rotation."""
        return self.ownership.overridden_days()

    # ---------------------------
    # 3. Statistics
    # ---------------------------

    def stats(self) -> YearlyStats:
        return yearly_stats(self.ownership)

    def base_stats(self) -> YearlyStats:
        return yearly_stats(self.ownership, base=True)

    def impact(self, deviation_threshold: float = DEFAULT_DEVIATION_THRESHOLD) -> ImpactResult:
        """
        Holiday impact preview against this year's base split.

        Parameters
        ----------
        deviation_threshold: float, default 10
            Deviation (percentage points) above which the result is flagged.
        """
        base = self.base_stats()
        breakdown = calculate_impact_breakdown(self.configs, self.birthdays)
        return calculate_impact(base.parent_a.percentage, base.parent_b.percentage, breakdown, deviation_threshold)

    def summary(self) -> None:
        """
        Print a summary of the year: pattern, days per parent before and after holidays, and the overridden days.
        """
        name_a, name_b = self.parent_names
        base, final = self.base_stats(), self.stats()
        enabled = sum(1 for c in self.configs if c.enabled)

        print(f"Custody year: {self.year}")
        print(f"Base pattern: {self.base_pattern.name or ''.join(self.base_pattern.pattern)} (starts {self.base_pattern.start_date})")
        print(f"Holidays enabled: {enabled} ({len(self.claims)} claims)")
        print(f"Overridden days: {len(self.overridden_days())}")
        print(f"{name_a}: {final.parent_a.days} days ({final.parent_a.percentage:.2f}%), base {base.parent_a.percentage:.2f}%")
        print(f"{name_b}: {final.parent_b.days} days ({final.parent_b.percentage:.2f}%), base {base.parent_b.percentage:.2f}%")
