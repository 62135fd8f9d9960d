# src/hcal/core/gregorian.py
from __future__ import annotations

"""
Proleptic Gregorian <-> epoch-day conversion.

Epoch day 1 is 0001-01-01 (the same numbering as ``date.toordinal()``), so the
two can be mixed freely. Only years >= 1 are accepted.
"""

from datetime import date
from typing import Tuple

_DAYS_BEFORE_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_gregorian_leap_year(year: int) -> bool:
    y = int(year)
    return y % 4 == 0 and (y % 100 != 0 or y % 400 == 0)


def days_in_gregorian_month(year: int, month: int) -> int:
    m = int(month)
    if not (1 <= m <= 12):
        raise ValueError(f"gregorian month out of range: {month}")
    if m == 2 and is_gregorian_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[m - 1]


def gregorian_to_epoch(year: int, month: int, day: int) -> int:
    """
    Return the epoch day of a Gregorian date.

    Raises
    ------
    ValueError
        If year < 1, or month/day do not exist in that year.
    """
    y, m, d = int(year), int(month), int(day)
    if y < 1:
        raise ValueError(f"gregorian year must be >= 1 (got {year})")
    last = days_in_gregorian_month(y, m)
    if not (1 <= d <= last):
        raise ValueError(f"gregorian day out of range: {y:04d}-{m:02d}-{d}")

    prior = y - 1
    n = d + _DAYS_BEFORE_MONTH[m - 1]
    if m > 2 and is_gregorian_leap_year(y):
        n += 1
    return n + 365 * prior + prior // 4 - prior // 100 + prior // 400


def epoch_to_gregorian(epoch_day: int) -> Tuple[int, int, int]:
    """
    Inverse of gregorian_to_epoch: (year, month, day) for an epoch day >= 1.
    """
    n = int(epoch_day)
    if n < 1:
        raise ValueError(f"epoch day precedes 0001-01-01: {epoch_day}")

    # 366 never overestimates; walk forward to the containing year
    year = max(1, n // 366)
    while n >= gregorian_to_epoch(year + 1, 1, 1):
        year += 1

    month = 1
    while n > gregorian_to_epoch(year, month, days_in_gregorian_month(year, month)):
        month += 1

    day = n - gregorian_to_epoch(year, month, 1) + 1
    return year, month, day


def epoch_from_date(d: date) -> int:
    return gregorian_to_epoch(d.year, d.month, d.day)


def date_from_epoch(epoch_day: int) -> date:
    y, m, d = epoch_to_gregorian(epoch_day)
    return date(y, m, d)
