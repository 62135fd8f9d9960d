# src/hcal/core/year.py
from __future__ import annotations

from enum import IntEnum

from .molad import JEWISH_EPOCH, elapsed_days
from .months import HebrewMonth, is_leap_year, months_in_year

__all__ = [
    "YearType",
    "is_leap_year",
    "months_in_year",
    "year_length",
    "year_type",
    "is_cheshvan_long",
    "is_kislev_short",
    "rosh_hashana_epoch_day",
    "rosh_hashana_weekday",
    "is_shmita_year",
    "month_length",
]

VALID_YEAR_LENGTHS = frozenset({353, 354, 355, 383, 384, 385})


class YearType(IntEnum):
    """Cheshvan/Kislev kviah."""
    DEFICIENT = 0  # chaserim: both 29
    REGULAR = 1  # kesidran: Cheshvan 29, Kislev 30
    COMPLETE = 2  # shelaimim: both 30

    CHASERIM = 0
    KESIDRAN = 1
    SHELAIMIM = 2


def year_length(year: int) -> int:
    return elapsed_days(int(year) + 1) - elapsed_days(year)


def year_type(year: int) -> YearType:
    rem = year_length(year) % 10
    if rem == 3:
        return YearType.DEFICIENT
    if rem == 5:
        return YearType.COMPLETE
    return YearType.REGULAR


def is_cheshvan_long(year: int) -> bool:
    return year_type(year) == YearType.COMPLETE


def is_kislev_short(year: int) -> bool:
    return year_type(year) == YearType.DEFICIENT


def rosh_hashana_epoch_day(year: int) -> int:
    return elapsed_days(year) + JEWISH_EPOCH + 1


def rosh_hashana_weekday(year: int) -> int:
    """1 = Sunday ... 7 = Shabbos."""
    return rosh_hashana_epoch_day(year) % 7 + 1


def is_shmita_year(year: int) -> bool:
    return int(year) % 7 == 0


def month_length(year: int, month: HebrewMonth) -> int:
    """
    Length of a month, Cheshvan and Kislev included.
    """
    m = HebrewMonth(int(month))
    if m in (HebrewMonth.IYAR, HebrewMonth.TAMMUZ, HebrewMonth.ELUL, HebrewMonth.TEVES, HebrewMonth.ADAR_II):
        return 29
    if m == HebrewMonth.ADAR and not is_leap_year(year):
        return 29
    if m == HebrewMonth.CHESHVAN and not is_cheshvan_long(year):
        return 29
    if m == HebrewMonth.KISLEV and is_kislev_short(year):
        return 29
    return 30
