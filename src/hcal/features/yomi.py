# src/hcal/features/yomi.py
from __future__ import annotations

"""
Daily-folio reading cycles.

A cycle is an ordered list of volumes, each with a page count, read one page
per day from a fixed start date. Days on which nothing is read (by default
Yom Kippur and Tisha B'Av) do not consume a page, so a cycle lasts
`total_pages` plus the number of such days it contains.

Cycle boundaries are found a whole cycle at a time: the boundary after a cycle
start S is the first reading day E for which [S, E) holds exactly
`total_pages` reading days.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Callable, Iterable, Optional, Sequence, Tuple, Union

from hcal.core.config import DEFAULT_CONFIG, CalendarConfig
from hcal.core.gregorian import epoch_from_date
from hcal.core.hebrew_date import HebrewDate, epoch_to_hebrew
from hcal.features.config import (
    BAVLI_EARLY_CYCLES,
    BAVLI_EARLY_SHEKALIM_PAGES,
    BAVLI_MASECHTOS,
    YERUSHALMI_MASECHTOS,
)
from hcal.features.holidays import Holiday, holiday_epoch_days

log = logging.getLogger(__name__)

DayLike = Union[date, HebrewDate, int]


def _as_epoch_day(x: DayLike) -> int:
    if isinstance(x, HebrewDate):
        return x.epoch_day
    if isinstance(x, date):
        return epoch_from_date(x)
    if isinstance(x, int):
        return x
    raise TypeError(f"expected date, HebrewDate or epoch day int (got {type(x).__name__})")


# ============================================================
# Volumes / results
# ============================================================

@dataclass(frozen=True)
class Volume:
    name: str
    pages: int
    first_folio: int = 1

    def __post_init__(self) -> None:
        if self.pages < 1:
            raise ValueError(f"volume {self.name!r} must have at least one page (got {self.pages})")


@dataclass(frozen=True)
class Daf:
    """
    Position in a cycle: `page` is 1-based within the volume, `folio` is the
    printed folio number.
    """
    volume_index: int
    page: int
    volume: Volume

    @property
    def name(self) -> str:
        return self.volume.name

    @property
    def folio(self) -> int:
        return self.volume.first_folio + self.page - 1

    def __str__(self) -> str:
        return f"{self.name} {self.folio}"


# ============================================================
# No-reading rules
# ============================================================

class NoReadingRule:
    """
    Decides which epoch days are skipped by a cycle.

    Subclasses implement `__call__`; `count_between` may be overridden with
    something faster than the day-by-day default.
    """

    def __call__(self, epoch_day: int) -> bool:
        raise NotImplementedError

    def count_between(self, lo: int, hi: int) -> int:
        """Number of skipped days n with lo < n <= hi."""
        return sum(1 for n in range(lo + 1, hi + 1) if self(n))


@dataclass(frozen=True)
class NeverSkip(NoReadingRule):
    def __call__(self, epoch_day: int) -> bool:
        return False

    def count_between(self, lo: int, hi: int) -> int:
        return 0


@dataclass(frozen=True)
class PredicateRule(NoReadingRule):
    """Wrap a plain `(epoch_day) -> bool` callable."""
    predicate: Callable[[int], bool]

    def __call__(self, epoch_day: int) -> bool:
        return bool(self.predicate(epoch_day))


@dataclass(frozen=True)
class HolidayExclusion(NoReadingRule):
    """
    Skip every date on which the holiday resolver yields one of `holidays`.

    Counting walks the Hebrew years of the span and checks each year's
    occurrences, so cost grows with years rather than days.
    """
    holidays: Tuple[Holiday, ...] = (Holiday.YOM_KIPPUR, Holiday.TISHA_BEAV)
    config: CalendarConfig = field(default=DEFAULT_CONFIG)

    def __call__(self, epoch_day: int) -> bool:
        year = epoch_to_hebrew(epoch_day)[0]
        return any(epoch_day in holiday_epoch_days(year, h, self.config) for h in self.holidays)

    def count_between(self, lo: int, hi: int) -> int:
        if hi <= lo:
            return 0
        first_year = epoch_to_hebrew(lo + 1)[0]
        last_year = epoch_to_hebrew(hi)[0]
        count = 0
        for year in range(first_year, last_year + 1):
            for h in self.holidays:
                count += sum(1 for n in holiday_epoch_days(year, h, self.config) if lo < n <= hi)
        return count


# ============================================================
# Cycle configuration
# ============================================================

@dataclass(frozen=True)
class CycleConfig:
    """
    One reading schedule.

    The first `early_cycles` cycles read `early_volumes` instead of `volumes`
    (a schedule that switched editions part way through its history).
    """
    name: str
    start: date
    volumes: Tuple[Volume, ...]
    no_reading: NoReadingRule = field(default_factory=HolidayExclusion)
    early_volumes: Tuple[Volume, ...] = ()
    early_cycles: int = 0

    def __post_init__(self) -> None:
        if not self.volumes:
            raise ValueError(f"cycle {self.name!r} has no volumes")
        if self.early_cycles < 0:
            raise ValueError(f"cycle {self.name!r}: early_cycles must be >= 0 (got {self.early_cycles})")
        if self.early_cycles and not self.early_volumes:
            raise ValueError(f"cycle {self.name!r}: early_cycles={self.early_cycles} without early_volumes")
        object.__setattr__(self, "volumes", tuple(self.volumes))
        object.__setattr__(self, "early_volumes", tuple(self.early_volumes))

    @classmethod
    def from_page_counts(
        cls,
        name: str,
        start: date,
        page_counts: Sequence[int],
        *,
        volume_names: Optional[Sequence[str]] = None,
        no_reading: Optional[NoReadingRule] = None,
    ) -> "CycleConfig":
        names = list(volume_names) if volume_names is not None else [f"#{i + 1}" for i in range(len(page_counts))]
        if len(names) != len(page_counts):
            raise ValueError(f"{len(names)} volume names for {len(page_counts)} page counts")
        vols = tuple(Volume(n, int(p)) for n, p in zip(names, page_counts))
        return cls(name=name, start=start, volumes=vols, no_reading=no_reading or HolidayExclusion())

    def volumes_for_cycle(self, number: int) -> Tuple[Volume, ...]:
        """Volumes read in the 1-based cycle `number`."""
        if number <= self.early_cycles:
            return self.early_volumes
        return self.volumes

    def pages_in_cycle(self, number: int) -> int:
        return sum(v.pages for v in self.volumes_for_cycle(number))

    @property
    def total_pages(self) -> int:
        return sum(v.pages for v in self.volumes)

    @property
    def start_epoch_day(self) -> int:
        return epoch_from_date(self.start)

    @property
    def page_counts(self) -> Tuple[int, ...]:
        return tuple(v.pages for v in self.volumes)


@lru_cache(maxsize=1024)
def next_cycle_start(cycle_start: int, config: CycleConfig, number: int = 1) -> int:
    """
    Epoch day on which the cycle after cycle `number` (starting at
    `cycle_start`) begins.
    """
    rule = config.no_reading
    total = config.pages_in_cycle(number)
    end = cycle_start + total
    while True:
        # skipped days inside [cycle_start, end)
        skipped = rule.count_between(cycle_start - 1, end - 1)
        candidate = cycle_start + total + skipped
        if candidate == end:
            break
        end = candidate
    while rule(end):
        end += 1
    log.debug("cycle %s #%d: %d -> %d", config.name, number, cycle_start, end)
    return end


def _locate(n: int, config: CycleConfig) -> Optional[Tuple[int, int]]:
    """(cycle number, cycle start epoch day) of the cycle containing epoch day `n`."""
    start = config.start_epoch_day
    if n < start:
        return None
    number = 1
    nxt = next_cycle_start(start, config, number)
    while nxt <= n:
        start, number = nxt, number + 1
        nxt = next_cycle_start(start, config, number)
    return number, start


def cycle_start_for(day: DayLike, config: CycleConfig) -> Optional[int]:
    """
    Epoch day on which the cycle containing `day` began, or None before the
    configured start.
    """
    found = _locate(_as_epoch_day(day), config)
    return None if found is None else found[1]


def cycle_number(day: DayLike, config: CycleConfig) -> Optional[int]:
    """1-based number of the cycle containing `day`."""
    found = _locate(_as_epoch_day(day), config)
    return None if found is None else found[0]


def page_for(day: DayLike, config: CycleConfig) -> Optional[Daf]:
    """
    The page read on `day`, or None before the start date or on a skipped day.
    """
    n = _as_epoch_day(day)
    if n < config.start_epoch_day or config.no_reading(n):
        return None
    found = _locate(n, config)
    assert found is not None
    number, start = found

    offset = (n - start) - config.no_reading.count_between(start, n)
    for i, vol in enumerate(config.volumes_for_cycle(number)):
        if offset < vol.pages:
            return Daf(volume_index=i, page=offset + 1, volume=vol)
        offset -= vol.pages
    raise AssertionError(f"offset beyond cycle {config.name!r} for epoch day {n}")


def pages_between(start: DayLike, end: DayLike, config: CycleConfig) -> Iterable[Tuple[int, Optional[Daf]]]:
    """Yield (epoch_day, daf) for every day in [start, end]."""
    for n in range(_as_epoch_day(start), _as_epoch_day(end) + 1):
        yield n, page_for(n, config)


# ============================================================
# Reference cycles
# ============================================================

BAVLI_START = date(1923, 9, 11)
YERUSHALMI_START = date(1980, 2, 2)
# cycle 8 began here, the first to read Shekalim in the Vilna pagination
BAVLI_SHEKALIM_CHANGE = date(1975, 6, 24)

_BAVLI_VOLUMES = tuple(Volume(name, last - first + 1, first) for name, last, first in BAVLI_MASECHTOS)
_BAVLI_EARLY_VOLUMES = tuple(
    Volume(v.name, BAVLI_EARLY_SHEKALIM_PAGES, v.first_folio) if v.name == "Shekalim" else v
    for v in _BAVLI_VOLUMES
)

BAVLI = CycleConfig(
    name="bavli",
    start=BAVLI_START,
    volumes=_BAVLI_VOLUMES,
    early_volumes=_BAVLI_EARLY_VOLUMES,
    early_cycles=BAVLI_EARLY_CYCLES,
)

# the published schedule, which reads on every day of the year
BAVLI_CONTINUOUS = CycleConfig(
    name="bavli-continuous",
    start=BAVLI_START,
    volumes=_BAVLI_VOLUMES,
    no_reading=NeverSkip(),
    early_volumes=_BAVLI_EARLY_VOLUMES,
    early_cycles=BAVLI_EARLY_CYCLES,
)

YERUSHALMI = CycleConfig(
    name="yerushalmi",
    start=YERUSHALMI_START,
    volumes=tuple(Volume(name, pages) for name, pages in YERUSHALMI_MASECHTOS),
)


def daf_yomi_bavli(day: DayLike) -> Optional[Daf]:
    return page_for(day, BAVLI)


def daf_yomi_bavli_continuous(day: DayLike) -> Optional[Daf]:
    return page_for(day, BAVLI_CONTINUOUS)


def daf_yomi_yerushalmi(day: DayLike) -> Optional[Daf]:
    return page_for(day, YERUSHALMI)
