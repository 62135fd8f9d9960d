# src/hcal/core/months.py
from __future__ import annotations

from enum import IntEnum
from typing import List


class HebrewMonth(IntEnum):
    """
    Fixed Tishrei-relative month numbering.

    ADAR is Adar I in a leap year; ADAR_II only exists in leap years, so a
    non-leap year runs 1..6, 8..13.
    """
    TISHREI = 1
    CHESHVAN = 2
    KISLEV = 3
    TEVES = 4
    SHEVAT = 5
    ADAR = 6
    ADAR_II = 7
    NISSAN = 8
    IYAR = 9
    SIVAN = 10
    TAMMUZ = 11
    AV = 12
    ELUL = 13


def is_leap_year(year: int) -> bool:
    """
    Years 3, 6, 8, 11, 14, 17 and 19 of each 19-year cycle are leap years.
    """
    return (7 * int(year) + 1) % 19 < 7


def months_in_year(year: int) -> int:
    return 13 if is_leap_year(year) else 12


def months_of_year(year: int) -> List[HebrewMonth]:
    """
    The months of a year in calendar order, Tishrei first.
    """
    leap = is_leap_year(year)
    return [m for m in HebrewMonth if leap or m != HebrewMonth.ADAR_II]


def is_valid_month(year: int, month: int) -> bool:
    try:
        m = HebrewMonth(int(month))
    except ValueError:
        return False
    return m != HebrewMonth.ADAR_II or is_leap_year(year)


def require_month(year: int, month: int) -> HebrewMonth:
    if not is_valid_month(year, month):
        raise ValueError(f"month {month} does not exist in Hebrew year {year}")
    return HebrewMonth(int(month))


def month_ordinal(year: int, month: int) -> int:
    """
    1-based position of a month within its year (Tishrei=1).

    In a non-leap year every month after Adar moves up one slot because the
    ADAR_II number is skipped.
    """
    m = require_month(year, month)
    if is_leap_year(year) or m < HebrewMonth.ADAR_II:
        return int(m)
    return int(m) - 1
