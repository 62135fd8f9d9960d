# src/hcal/core/chalakim.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# ============================================================
# Fixed-point calendrical time
#   1 hour   = 1080 chalakim
#   1 minute = 18 chalakim
#   1 day    = 24 * 1080 = 25920 chalakim
# ============================================================

CHALAKIM_PER_MINUTE = 18
CHALAKIM_PER_HOUR = 1080
CHALAKIM_PER_DAY = 24 * CHALAKIM_PER_HOUR
# (29 * 24 + 12) * 1080 + 793
CHALAKIM_PER_MONTH = 765433


def chalakim(days: int = 0, hours: int = 0, parts: int = 0) -> int:
    """
    Build a chalakim count from whole days, hours and remaining chalakim.

    >>> chalakim(29, 12, 793) == CHALAKIM_PER_MONTH
    True
    """
    return int(days) * CHALAKIM_PER_DAY + int(hours) * CHALAKIM_PER_HOUR + int(parts)


def split_day(total: int) -> Tuple[int, int]:
    """
    Split a chalakim count into (whole days, chalakim into the day).
    """
    if total < 0:
        raise ValueError(f"chalakim must be >= 0 (got {total})")
    return divmod(int(total), CHALAKIM_PER_DAY)


@dataclass(frozen=True)
class TimeOfDay:
    """
    Hours / minutes / chalakim of a chalakim-of-day value.

    hours is the raw count since the start of the calendrical day (18:00 of the
    previous civil evening), minutes is 0..59 and chalakim is 0..17.
    """
    hours: int
    minutes: int
    chalakim: int

    @classmethod
    def from_parts(cls, parts_of_day: int) -> "TimeOfDay":
        p = int(parts_of_day)
        if not (0 <= p < CHALAKIM_PER_DAY):
            raise ValueError(f"parts_of_day out of range: {p}")
        hours, rem = divmod(p, CHALAKIM_PER_HOUR)
        minutes, parts = divmod(rem, CHALAKIM_PER_MINUTE)
        return cls(hours=hours, minutes=minutes, chalakim=parts)

    def to_parts(self) -> int:
        return self.hours * CHALAKIM_PER_HOUR + self.minutes * CHALAKIM_PER_MINUTE + self.chalakim

    @property
    def clock_hours(self) -> int:
        # calendrical hour 0 is 18:00 civil time
        return (self.hours + 18) % 24

    def __str__(self) -> str:
        return f"{self.hours}h {self.minutes}m {self.chalakim}p"
