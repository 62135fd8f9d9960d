# src/hcal/features/tekufa.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from hcal.core.hebrew_date import HebrewDate
from hcal.core.molad import elapsed_days

# Shmuel's year of 365.25 days, split into four equal seasons
SOLAR_YEAR_DAYS = 365.25
TEKUFA_DAYS = SOLAR_YEAR_DAYS / 4
# the first Tekufas Tishrei fell 12.625 days before the calendar epoch
INITIAL_TEKUFA_OFFSET = 12.625

TEKUFA_NAMES: Tuple[str, ...] = ("Tishrei", "Teves", "Nissan", "Tammuz")


@dataclass(frozen=True)
class Tekufa:
    """
    A seasonal turning point inside one Hebrew day.

    hours counts from the start of the Hebrew day (18:00 the evening before).
    """
    name: str
    hours: float

    @property
    def clock_time(self) -> Tuple[int, int]:
        """(hour, minute) of the civil clock, 24h."""
        total_minutes = int(round(self.hours * 60))
        h, m = divmod(total_minutes, 60)
        return (h + 18) % 24, m


def _solar_position(d: HebrewDate) -> float:
    days = elapsed_days(d.year) + d.days_since_rosh_hashana + INITIAL_TEKUFA_OFFSET
    return days % SOLAR_YEAR_DAYS


def tekufa_for(d: HebrewDate) -> Optional[Tekufa]:
    """
    The tekufa falling during `d`, or None.
    """
    solar = _solar_position(d)
    into_season = solar % TEKUFA_DAYS
    if not (0 < into_season <= 1):
        return None
    hours = ((1.0 - into_season) * 24.0) % 24
    return Tekufa(name=TEKUFA_NAMES[int(solar // TEKUFA_DAYS)], hours=hours)
