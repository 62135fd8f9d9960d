# src/hcal/core/hebrew_date.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from functools import total_ordering
from typing import Tuple

from .gregorian import date_from_epoch, epoch_from_date, gregorian_to_epoch
from .molad import JEWISH_EPOCH
from .months import HebrewMonth, is_leap_year, months_of_year, require_month
from .year import YearType, month_length, rosh_hashana_epoch_day, year_length, year_type


class Weekday(IntEnum):
    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SHABBOS = 7


def weekday_of_epoch(epoch_day: int) -> Weekday:
    return Weekday(int(epoch_day) % 7 + 1)


def days_in_month(year: int, month: int) -> int:
    """
    Length of `month` in Hebrew `year`; ValueError if the month does not exist
    in that year (ADAR_II of a non-leap year).
    """
    return month_length(year, require_month(year, month))


def days_before_month(year: int, month: int) -> int:
    """
    Days from 1 Tishrei to the first of `month` in the same year.
    """
    target = require_month(year, month)
    total = 0
    for m in months_of_year(year):
        if m == target:
            return total
        total += month_length(year, m)
    raise AssertionError(f"month {target!r} missing from year {year}")


def hebrew_to_epoch(year: int, month: int, day: int) -> int:
    if int(year) < 1:
        raise ValueError(f"Hebrew year must be >= 1 (got {year})")
    return rosh_hashana_epoch_day(year) + days_before_month(year, month) + int(day) - 1


_FIRST_EPOCH_DAY = JEWISH_EPOCH + 2  # 1 Tishrei AM 1


def epoch_to_hebrew(epoch_day: int) -> Tuple[int, HebrewMonth, int]:
    """
    (year, month, day) of an epoch day. The year is bracketed between two
    consecutive Rosh Hashana days, then the month is found by running sums.
    """
    n = int(epoch_day)
    if n < _FIRST_EPOCH_DAY:
        raise ValueError(f"epoch day precedes 1 Tishrei AM 1: {epoch_day}")

    year = max(1, (n - JEWISH_EPOCH) // 366)
    while n >= rosh_hashana_epoch_day(year + 1):
        year += 1

    start = rosh_hashana_epoch_day(year)
    for m in months_of_year(year):
        length = month_length(year, m)
        if n < start + length:
            return year, m, n - start + 1
        start += length
    raise AssertionError(f"epoch day {n} not located inside year {year}")


# ============================================================
# Immutable date value
# ============================================================

@total_ordering
@dataclass(frozen=True)
class HebrewDate:
    """
    A Hebrew calendar date.

    Construction validates the year and month and clamps a day-of-month past
    the end of the month to its last day:

    >>> HebrewDate(5784, HebrewMonth.CHESHVAN, 30).day  # 5784 has a short Cheshvan
    29
    """
    year: int
    month: HebrewMonth
    day: int

    def __post_init__(self) -> None:
        year = int(self.year)
        if year < 1:
            raise ValueError(f"Hebrew year must be >= 1 (got {self.year})")
        month = require_month(year, self.month)
        day = int(self.day)
        if day < 1:
            raise ValueError(f"day of month must be >= 1 (got {self.day})")
        object.__setattr__(self, "year", year)
        object.__setattr__(self, "month", month)
        object.__setattr__(self, "day", min(day, month_length(year, month)))

    # ----------------------------
    # constructors
    # ----------------------------
    @classmethod
    def from_epoch_day(cls, epoch_day: int) -> "HebrewDate":
        y, m, d = epoch_to_hebrew(epoch_day)
        return cls(y, m, d)

    @classmethod
    def from_gregorian(cls, d: date) -> "HebrewDate":
        return cls.from_epoch_day(epoch_from_date(d))

    @classmethod
    def from_gregorian_ymd(cls, year: int, month: int, day: int) -> "HebrewDate":
        return cls.from_epoch_day(gregorian_to_epoch(year, month, day))

    # ----------------------------
    # conversions
    # ----------------------------
    @property
    def epoch_day(self) -> int:
        return hebrew_to_epoch(self.year, self.month, self.day)

    def to_gregorian(self) -> date:
        return date_from_epoch(self.epoch_day)

    def advance(self, days: int) -> "HebrewDate":
        return HebrewDate.from_epoch_day(self.epoch_day + int(days))

    def replace(self, **changes) -> "HebrewDate":
        return dataclasses.replace(self, **changes)

    # ----------------------------
    # derived facts
    # ----------------------------
    @property
    def weekday(self) -> Weekday:
        return weekday_of_epoch(self.epoch_day)

    @property
    def days_since_rosh_hashana(self) -> int:
        """0 on 1 Tishrei."""
        return days_before_month(self.year, self.month) + self.day - 1

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.year)

    @property
    def days_in_month(self) -> int:
        return month_length(self.year, self.month)

    @property
    def days_in_year(self) -> int:
        return year_length(self.year)

    @property
    def year_type(self) -> YearType:
        return year_type(self.year)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HebrewDate):
            return NotImplemented
        return self.epoch_day < other.epoch_day

    def __str__(self) -> str:
        return f"{self.year:04d}-{int(self.month):02d}-{self.day:02d}"


# ============================================================
# Mutable cursor
# ============================================================

class DateCursor:
    """
    Single-owner mutable wrapper around a HebrewDate for stepping day by day.

    Not thread-safe: a cursor must not be shared between threads without
    external locking. Read `.date` to get an immutable snapshot.
    """

    def __init__(self, start: HebrewDate) -> None:
        self._date = start

    @classmethod
    def from_gregorian(cls, d: date) -> "DateCursor":
        return cls(HebrewDate.from_gregorian(d))

    @property
    def date(self) -> HebrewDate:
        return self._date

    @property
    def gregorian(self) -> date:
        return self._date.to_gregorian()

    def forward(self, days: int = 1) -> HebrewDate:
        self._date = self._date.advance(days)
        return self._date

    def back(self, days: int = 1) -> HebrewDate:
        self._date = self._date.advance(-int(days))
        return self._date

    def set_hebrew(self, year: int, month: int, day: int) -> HebrewDate:
        self._date = HebrewDate(year, month, day)
        return self._date

    def set_gregorian(self, d: date) -> HebrewDate:
        self._date = HebrewDate.from_gregorian(d)
        return self._date

    def __repr__(self) -> str:
        return f"DateCursor({self._date!r})"
