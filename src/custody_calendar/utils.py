import math
import re
import numpy as np
import datetime as dt
from typing import Union, Any

DateLike = Union[dt.date, dt.datetime, str, np.datetime64, Any]

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _parse_iso(s: str) -> dt.date:
    """
    Strict parsing of ISO-8601 calendar dates (YYYY-MM-DD).

    Rules:
        1. Only accept a 4-digit year first, then month and day, separated by '-'.
        2. Month and day may be given with or without a leading zero.
        3. Reject everything else (day-first strings, no separators, time parts).

    Parameters
    ----------
    s: str
        The date string to parse.

    Returns
    -------
    dt.date
        The parsed date.
    """
    s = s.strip()
    if not s:
        raise ValueError("Empty date string.")

    m = re.fullmatch(r"(\d{4})-(\d{1,2})-(\d{1,2})", s)
    if m is None:
        raise ValueError(f"Invalid ISO date string: {s!r}. Expected 'YYYY-MM-DD'.")

    y, mo, d = (int(g) for g in m.groups())
    try:
        return dt.date(y, mo, d)
    except ValueError as e:
        raise ValueError(f"Invalid calendar date parsed from {s!r}: (y={y}, m={mo}, d={d}).") from e


def _to_pydate(x: DateLike) -> dt.date:
    """
    Convert various date-like inputs to a naive datetime.date.

    Supported input types :
        - datetime.date and datetime.datetime (time part ignored)
        - str in ISO-8601 'YYYY-MM-DD' form
        - np.datetime64 (any precision, truncated to the day)
    """
    if isinstance(x, dt.datetime):
        return x.date()
    if isinstance(x, dt.date):
        return x
    if isinstance(x, str):
        return _parse_iso(x)
    if isinstance(x, np.datetime64):
        return dt.date.fromisoformat(np.datetime_as_string(x.astype("datetime64[D]"), unit="D"))
    raise ValueError(f"Unsupported date type: {type(x)}")


def _to_internal_date(x: DateLike) -> np.datetime64:
    """Convert a date-like input to the internal np.datetime64[D] format."""
    if isinstance(x, np.datetime64):
        return x.astype("datetime64[D]")
    return np.datetime64(_to_pydate(x), "D")


def add_days(x: DateLike, days: int) -> str:
    """
    Add days to a date, returning the ISO string of the result.

    Month and year boundaries are handled by plain date arithmetic
    (e.g. '2025-01-31' + 1 = '2025-02-01', '2025-12-31' + 1 = '2026-01-01').
    """
    return (_to_pydate(x) + dt.timedelta(days=days)).isoformat()


def sunday_weekday(x: DateLike) -> int:
    """Weekday with Sunday=0, Monday=1, ..., Saturday=6."""
    return (_to_pydate(x).weekday() + 1) % 7


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round halves upwards (towards +inf).

    round_half_up(0.5) == 1.0 and round_half_up(-2.5) == -2.0.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def short_date(x: DateLike) -> str:
    """Format a date as 'Jul 4'."""
    d = _to_pydate(x)
    return f"{MONTH_ABBR[d.month - 1]} {d.day}"
