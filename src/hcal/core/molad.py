# src/hcal/core/molad.py
from __future__ import annotations

"""
Mean conjunction (molad) arithmetic and the Rosh Hashana postponements.

Day numbers produced here ("molad days") count from the day before the epoch
of the calendar; adding JEWISH_EPOCH gives an epoch day. A molad day d falls
on weekday d % 7 with 0 = Sunday.
"""

import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from .chalakim import CHALAKIM_PER_MONTH, TimeOfDay, chalakim, split_day
from .gregorian import date_from_epoch
from .months import HebrewMonth, is_leap_year, month_ordinal

log = logging.getLogger(__name__)

# epoch day of the day before 1 Tishrei AM 1 (0001-01-01 Gregorian is epoch day 1)
JEWISH_EPOCH = -1373429

# BaHaRaD: 1 day, 5 hours, 204 chalakim into the reference week
CHALAKIM_MOLAD_TOHU = chalakim(1, 5, 204)

# postponement thresholds (chalakim into the day)
_MOLAD_ZAKEN = chalakim(hours=18)  # 19440
_GATRAD = chalakim(hours=9, parts=204)  # 9924
_BETUTAKFOT = chalakim(hours=15, parts=589)  # 16789

_SUNDAY, _MONDAY, _TUESDAY, _WEDNESDAY, _FRIDAY = 0, 1, 2, 3, 5
_LO_ADU_ROSH = (_SUNDAY, _WEDNESDAY, _FRIDAY)


def months_elapsed(year: int, month: int = HebrewMonth.TISHREI) -> int:
    """
    Whole lunar months from Molad Tohu to the start of (year, month).
    """
    if int(year) < 1:
        raise ValueError(f"Hebrew year must be >= 1 (got {year})")
    prior = int(year) - 1
    cycles, pos = divmod(prior, 19)
    return 235 * cycles + 12 * pos + (7 * pos + 1) // 19 + (month_ordinal(year, month) - 1)


def chalakim_since_molad_tohu(year: int, month: int = HebrewMonth.TISHREI) -> int:
    return CHALAKIM_MOLAD_TOHU + CHALAKIM_PER_MONTH * months_elapsed(year, month)


def add_dechiyos(year: int, molad_day: int, molad_parts: int) -> int:
    """
    Apply the four postponement rules to the molad of Tishrei.

    Rules 1-3 (molad zaken, GaTRaD, BeTUTaKFoT) add at most one day between
    them; the forbidden-weekday rule is then tested once on the result.
    """
    rh = int(molad_day)
    weekday = rh % 7
    if (
        molad_parts >= _MOLAD_ZAKEN
        or (weekday == _TUESDAY and molad_parts >= _GATRAD and not is_leap_year(year))
        or (weekday == _MONDAY and molad_parts >= _BETUTAKFOT and is_leap_year(int(year) - 1))
    ):
        rh += 1
    if rh % 7 in _LO_ADU_ROSH:
        rh += 1
    return rh


@lru_cache(maxsize=4096)
def elapsed_days(year: int) -> int:
    """
    Days from the calendar epoch to Rosh Hashana of `year`, postponements applied.
    """
    day, parts = split_day(chalakim_since_molad_tohu(year, HebrewMonth.TISHREI))
    return add_dechiyos(year, day, parts)


# ============================================================
# Molad of a month
# ============================================================

@dataclass(frozen=True)
class Molad:
    """
    Molad of a Hebrew month.

    - epoch_day: the Hebrew day the molad belongs to
    - civil_date: Gregorian date on which the molad instant falls
    - time: raw time since the start of the Hebrew day (18:00 the evening before)
    """
    year: int
    month: HebrewMonth
    total_chalakim: int
    epoch_day: int
    time: TimeOfDay

    @property
    def hours(self) -> int:
        # traditional announcement counts hours from midnight
        return self.time.clock_hours

    @property
    def minutes(self) -> int:
        return self.time.minutes

    @property
    def chalakim(self) -> int:
        return self.time.chalakim

    @property
    def weekday(self) -> int:
        """1 = Sunday ... 7 = Shabbos."""
        return self.epoch_day % 7 + 1

    @property
    def civil_date(self) -> date:
        civil = self.epoch_day - 1 if self.time.hours < 6 else self.epoch_day
        return date_from_epoch(civil)

    def __str__(self) -> str:
        return f"The molad is at {self.hours} hours, {self.minutes} minutes and {self.chalakim} Chalakim"


def molad_for(year: int, month: int) -> Molad:
    total = chalakim_since_molad_tohu(year, month)
    day, parts = split_day(total)
    m = Molad(
        year=int(year),
        month=HebrewMonth(int(month)),
        total_chalakim=total,
        epoch_day=day + JEWISH_EPOCH + 1,
        time=TimeOfDay.from_parts(parts),
    )
    log.debug("molad year=%d month=%s chalakim=%d -> %s", m.year, m.month.name, total, m.time)
    return m
