import numpy as np
from typing import Dict
from dataclasses import dataclass, field


@dataclass()
class YearUniverse:
    """
    Structure representing the static information about one calendar year :
        1. Non-lazy fields (built at init):
            - The year itself
            - Contiguous days of the year : np.ndarray of datetime64[D] (365 or 366 entries)
        2. Lazy fields (built on demand and cached):
            - Month (1 to 12) : np.ndarray
            - Day offset from an arbitrary anchor date (see offsets_from)

    The per-day ownership arrays produced by the compositor are indexed the same way
    as `days`, so position i always refers to the i-th day of the year.
    """
    year: int

    days: np.ndarray = field(init=False)
    _cache: Dict[str, np.ndarray] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.start64 = np.datetime64(f"{self.year:04d}-01-01", "D")
        self.end64 = np.datetime64(f"{self.year:04d}-12-31", "D")

        n_days = int((self.end64 - self.start64) / np.timedelta64(1, "D")) + 1
        self.days = self.start64 + np.arange(n_days, dtype="int64").astype("timedelta64[D]")

    def __len__(self) -> int:
        return int(self.days.shape[0])

    def contains(self, d64: np.datetime64) -> bool:
        return bool(self.start64 <= d64 <= self.end64)

    def locate(self, d64: np.datetime64) -> int:
        """Return index i such that days[i] == d64. Raises ValueError if outside."""
        i = int((d64 - self.start64) / np.timedelta64(1, "D"))
        if i < 0 or i >= len(self):
            raise ValueError(f"Date {d64} outside universe [{self.start64}, {self.end64}]")
        return i

    def offsets_from(self, anchor64: np.datetime64) -> np.ndarray:
        """Signed day offsets of every day of the year relative to anchor64."""
        return (self.days - anchor64).astype("timedelta64[D]").astype("int64")

    @property
    def month(self) -> np.ndarray:
        key = "month"
        if key not in self._cache:
            months = self.days.astype("datetime64[M]")
            years_as_months = self.days.astype("datetime64[Y]").astype("datetime64[M]")
            m = (months - years_as_months).astype("int64") + 1
            self._cache[key] = m.astype("uint8")
        return self._cache[key]
