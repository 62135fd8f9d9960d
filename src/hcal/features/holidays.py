# src/hcal/features/holidays.py
from __future__ import annotations

"""
Holiday resolver and the observance predicates derived from it.

`resolve_holiday` maps a date to at most one Holiday through a per-month
decision table; `Observance` bundles a date with its resolved holiday so that
every predicate reads the same resolution instead of recomputing it.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple

from hcal.core.config import DEFAULT_CONFIG, CalendarConfig
from hcal.core.hebrew_date import HebrewDate, Weekday
from hcal.core.molad import elapsed_days
from hcal.core.months import HebrewMonth, is_leap_year, is_valid_month
from hcal.core.year import is_kislev_short, is_shmita_year, month_length

log = logging.getLogger(__name__)


class Holiday(IntEnum):
    EREV_PESACH = 0
    PESACH = 1
    CHOL_HAMOED_PESACH = 2
    PESACH_SHENI = 3
    EREV_SHAVUOS = 4
    SHAVUOS = 5
    SEVENTEEN_OF_TAMMUZ = 6
    TISHA_BEAV = 7
    TU_BEAV = 8
    EREV_ROSH_HASHANA = 9
    ROSH_HASHANA = 10
    FAST_OF_GEDALYAH = 11
    EREV_YOM_KIPPUR = 12
    YOM_KIPPUR = 13
    EREV_SUCCOS = 14
    SUCCOS = 15
    CHOL_HAMOED_SUCCOS = 16
    HOSHANA_RABBA = 17
    SHEMINI_ATZERES = 18
    SIMCHAS_TORAH = 19
    # 20 is Erev Chanukah, which is a name only and never resolved
    CHANUKAH = 21
    TENTH_OF_TEVES = 22
    TU_BESHVAT = 23
    FAST_OF_ESTHER = 24
    PURIM = 25
    SHUSHAN_PURIM = 26
    PURIM_KATAN = 27
    ROSH_CHODESH = 28
    YOM_HASHOAH = 29
    YOM_HAZIKARON = 30
    YOM_HAATZMAUT = 31
    YOM_YERUSHALAYIM = 32
    LAG_BAOMER = 33
    SHUSHAN_PURIM_KATAN = 34
    ISRU_CHAG = 35
    YOM_KIPPUR_KATAN = 36


H = Holiday
SUN, MON, TUE, WED, THU, FRI, SAT = (int(w) for w in Weekday)

YOM_TOV_ASSUR_BEMELACHA = frozenset({
    H.PESACH, H.SHAVUOS, H.SUCCOS, H.SHEMINI_ATZERES, H.SIMCHAS_TORAH, H.ROSH_HASHANA, H.YOM_KIPPUR,
})
REGULAR_FASTS = frozenset({
    H.SEVENTEEN_OF_TAMMUZ, H.TISHA_BEAV, H.FAST_OF_GEDALYAH, H.TENTH_OF_TEVES, H.FAST_OF_ESTHER,
})
FASTS = REGULAR_FASTS | {H.YOM_KIPPUR}
EREV_YOM_TOV = frozenset({
    H.EREV_PESACH, H.EREV_SHAVUOS, H.EREV_ROSH_HASHANA, H.EREV_YOM_KIPPUR, H.EREV_SUCCOS, H.HOSHANA_RABBA,
})


# ============================================================
# Decision table
# ============================================================

@dataclass(frozen=True)
class _DayFacts:
    month: HebrewMonth
    day: int
    weekday: int
    leap: bool
    kislev_short: bool
    in_israel: bool
    modern: bool


_Rule = Callable[[_DayFacts], Optional[Holiday]]


def _nissan(f: _DayFacts) -> Optional[Holiday]:
    d, dow, diaspora = f.day, f.weekday, not f.in_israel
    if d == 14:
        return H.EREV_PESACH
    if d in (15, 21) or (diaspora and d in (16, 22)):
        return H.PESACH
    if 17 <= d <= 20 or (d == 16 and f.in_israel):
        return H.CHOL_HAMOED_PESACH
    if (d == 22 and f.in_israel) or (d == 23 and diaspora):
        return H.ISRU_CHAG
    if f.modern and (
        (d == 26 and dow == THU) or (d == 28 and dow == MON) or (d == 27 and dow not in (SUN, FRI))
    ):
        return H.YOM_HASHOAH
    return None


def _iyar(f: _DayFacts) -> Optional[Holiday]:
    d, dow = f.day, f.weekday
    if f.modern:
        if (d == 4 and dow == TUE) or (d in (2, 3) and dow == WED) or (d == 5 and dow == MON):
            return H.YOM_HAZIKARON
        if (d == 5 and dow == WED) or (d in (3, 4) and dow == THU) or (d == 6 and dow == TUE):
            return H.YOM_HAATZMAUT
    if d == 14:
        return H.PESACH_SHENI
    if d == 18:
        return H.LAG_BAOMER
    if f.modern and d == 28:
        return H.YOM_YERUSHALAYIM
    return None


def _sivan(f: _DayFacts) -> Optional[Holiday]:
    d = f.day
    if d == 5:
        return H.EREV_SHAVUOS
    if d == 6 or (d == 7 and not f.in_israel):
        return H.SHAVUOS
    if (d == 7 and f.in_israel) or (d == 8 and not f.in_israel):
        return H.ISRU_CHAG
    return None


def _tammuz(f: _DayFacts) -> Optional[Holiday]:
    # fast deferred to Sunday when the 17th is Shabbos
    if (f.day == 17 and f.weekday != SAT) or (f.day == 18 and f.weekday == SUN):
        return H.SEVENTEEN_OF_TAMMUZ
    return None


def _av(f: _DayFacts) -> Optional[Holiday]:
    if (f.day == 9 and f.weekday != SAT) or (f.day == 10 and f.weekday == SUN):
        return H.TISHA_BEAV
    if f.day == 15:
        return H.TU_BEAV
    return None


def _elul(f: _DayFacts) -> Optional[Holiday]:
    return H.EREV_ROSH_HASHANA if f.day == 29 else None


def _tishrei(f: _DayFacts) -> Optional[Holiday]:
    d, diaspora = f.day, not f.in_israel
    if d in (1, 2):
        return H.ROSH_HASHANA
    if (d == 3 and f.weekday != SAT) or (d == 4 and f.weekday == SUN):
        return H.FAST_OF_GEDALYAH
    if d == 9:
        return H.EREV_YOM_KIPPUR
    if d == 10:
        return H.YOM_KIPPUR
    if d == 14:
        return H.EREV_SUCCOS
    if d == 15 or (d == 16 and diaspora):
        return H.SUCCOS
    if 17 <= d <= 20 or (d == 16 and f.in_israel):
        return H.CHOL_HAMOED_SUCCOS
    if d == 21:
        return H.HOSHANA_RABBA
    if d == 22:
        return H.SHEMINI_ATZERES
    if d == 23 and diaspora:
        return H.SIMCHAS_TORAH
    if (d == 23 and f.in_israel) or (d == 24 and diaspora):
        return H.ISRU_CHAG
    return None


def _kislev(f: _DayFacts) -> Optional[Holiday]:
    return H.CHANUKAH if f.day >= 25 else None


def _teves(f: _DayFacts) -> Optional[Holiday]:
    if f.day in (1, 2) or (f.day == 3 and f.kislev_short):
        return H.CHANUKAH
    if f.day == 10:
        return H.TENTH_OF_TEVES
    return None


def _shevat(f: _DayFacts) -> Optional[Holiday]:
    return H.TU_BESHVAT if f.day == 15 else None


def _purim_month(f: _DayFacts) -> Optional[Holiday]:
    d, dow = f.day, f.weekday
    # Ta'anis Esther moves back to Thursday when the 13th is Shabbos
    if (d in (11, 12) and dow == THU) or (d == 13 and dow not in (FRI, SAT)):
        return H.FAST_OF_ESTHER
    if d == 14:
        return H.PURIM
    if d == 15:
        return H.SHUSHAN_PURIM
    return None


def _adar(f: _DayFacts) -> Optional[Holiday]:
    if not f.leap:
        return _purim_month(f)
    if f.day == 14:
        return H.PURIM_KATAN
    if f.day == 15:
        return H.SHUSHAN_PURIM_KATAN
    return None


def _no_holiday(f: _DayFacts) -> Optional[Holiday]:
    return None


_RULES: Dict[HebrewMonth, _Rule] = {
    HebrewMonth.TISHREI: _tishrei,
    HebrewMonth.CHESHVAN: _no_holiday,
    HebrewMonth.KISLEV: _kislev,
    HebrewMonth.TEVES: _teves,
    HebrewMonth.SHEVAT: _shevat,
    HebrewMonth.ADAR: _adar,
    HebrewMonth.ADAR_II: _purim_month,
    HebrewMonth.NISSAN: _nissan,
    HebrewMonth.IYAR: _iyar,
    HebrewMonth.SIVAN: _sivan,
    HebrewMonth.TAMMUZ: _tammuz,
    HebrewMonth.AV: _av,
    HebrewMonth.ELUL: _elul,
}


def resolve_holiday(d: HebrewDate, config: CalendarConfig = DEFAULT_CONFIG) -> Optional[Holiday]:
    """
    The holiday falling on `d`, or None.
    """
    facts = _DayFacts(
        month=d.month,
        day=d.day,
        weekday=int(d.weekday),
        leap=is_leap_year(d.year),
        kislev_short=is_kislev_short(d.year),
        in_israel=config.in_israel,
        modern=config.use_modern_holidays,
    )
    return _RULES[d.month](facts)


# ============================================================
# Observance: date + resolved holiday
# ============================================================

@dataclass(frozen=True)
class Observance:
    """
    Read-only predicate surface for one date under one configuration.
    """
    date: HebrewDate
    holiday: Optional[Holiday]
    weekday: Weekday
    config: CalendarConfig = DEFAULT_CONFIG

    @property
    def month(self) -> HebrewMonth:
        return self.date.month

    @property
    def day(self) -> int:
        return self.date.day

    # ----------------------------
    # Yom Tov
    # ----------------------------
    @property
    def is_yom_tov(self) -> bool:
        h = self.holiday
        if h is None:
            return False
        if self.is_erev_yom_tov and h != H.HOSHANA_RABBA:
            return False
        if self.is_taanis and h != H.YOM_KIPPUR:
            return False
        return h != H.ISRU_CHAG

    @property
    def is_yom_tov_assur_bemelacha(self) -> bool:
        return self.holiday in YOM_TOV_ASSUR_BEMELACHA

    @property
    def is_assur_bemelacha(self) -> bool:
        return self.weekday == Weekday.SHABBOS or self.is_yom_tov_assur_bemelacha

    is_work_prohibited = is_assur_bemelacha

    @property
    def is_erev_yom_tov(self) -> bool:
        if self.holiday in EREV_YOM_TOV:
            return True
        return self.holiday == H.CHOL_HAMOED_PESACH and self.day == 20

    @property
    def is_erev_yom_tov_sheni(self) -> bool:
        m, d = self.month, self.day
        if m == HebrewMonth.TISHREI and d == 1:
            return True
        if self.config.in_israel:
            return False
        return (
            (m == HebrewMonth.NISSAN and d in (15, 21))
            or (m == HebrewMonth.TISHREI and d in (15, 22))
            or (m == HebrewMonth.SIVAN and d == 6)
        )

    @property
    def is_tomorrow_shabbos_or_yom_tov(self) -> bool:
        return self.weekday == Weekday.FRIDAY or self.is_erev_yom_tov or self.is_erev_yom_tov_sheni

    @property
    def has_candle_lighting(self) -> bool:
        return self.is_tomorrow_shabbos_or_yom_tov

    @property
    def is_aseres_yemei_teshuva(self) -> bool:
        return self.month == HebrewMonth.TISHREI and self.day <= 10

    @property
    def is_pesach(self) -> bool:
        return self.holiday in (H.PESACH, H.CHOL_HAMOED_PESACH)

    @property
    def is_chol_hamoed_pesach(self) -> bool:
        return self.holiday == H.CHOL_HAMOED_PESACH

    @property
    def is_shavuos(self) -> bool:
        return self.holiday == H.SHAVUOS

    @property
    def is_rosh_hashana(self) -> bool:
        return self.holiday == H.ROSH_HASHANA

    @property
    def is_yom_kippur(self) -> bool:
        return self.holiday == H.YOM_KIPPUR

    @property
    def is_succos(self) -> bool:
        return self.holiday in (H.SUCCOS, H.CHOL_HAMOED_SUCCOS, H.HOSHANA_RABBA)

    @property
    def is_hoshana_rabba(self) -> bool:
        return self.holiday == H.HOSHANA_RABBA

    @property
    def is_shemini_atzeres(self) -> bool:
        return self.holiday == H.SHEMINI_ATZERES

    @property
    def is_simchas_torah(self) -> bool:
        return self.holiday == H.SIMCHAS_TORAH

    @property
    def is_chol_hamoed_succos(self) -> bool:
        return self.holiday in (H.CHOL_HAMOED_SUCCOS, H.HOSHANA_RABBA)

    @property
    def is_chol_hamoed(self) -> bool:
        return self.is_chol_hamoed_pesach or self.is_chol_hamoed_succos

    @property
    def is_isru_chag(self) -> bool:
        return self.holiday == H.ISRU_CHAG

    # ----------------------------
    # Rosh Chodesh and the month cycle
    # ----------------------------
    @property
    def is_rosh_chodesh(self) -> bool:
        return (self.day == 1 and self.month != HebrewMonth.TISHREI) or self.day == 30

    @property
    def is_erev_rosh_chodesh(self) -> bool:
        return self.day == 29 and self.month != HebrewMonth.ELUL

    @property
    def is_machar_chodesh(self) -> bool:
        return self.weekday == Weekday.SHABBOS and self.day in (29, 30)

    @property
    def is_shabbos_mevorchim(self) -> bool:
        return (
            self.weekday == Weekday.SHABBOS
            and 23 <= self.day <= 29
            and self.month != HebrewMonth.ELUL
        )

    @property
    def is_yom_kippur_katan(self) -> bool:
        if self.month in (HebrewMonth.ELUL, HebrewMonth.TISHREI, HebrewMonth.KISLEV, HebrewMonth.NISSAN):
            return False
        if self.day == 29 and self.weekday not in (Weekday.FRIDAY, Weekday.SHABBOS):
            return True
        return self.day in (27, 28) and self.weekday == Weekday.THURSDAY

    @property
    def is_behab(self) -> bool:
        if self.month not in (HebrewMonth.CHESHVAN, HebrewMonth.IYAR):
            return False
        if self.weekday == Weekday.MONDAY:
            return 4 < self.day < 18
        if self.weekday == Weekday.THURSDAY:
            return 7 < self.day < 14
        return False

    # ----------------------------
    # Fasts
    # ----------------------------
    @property
    def is_taanis(self) -> bool:
        return self.holiday in FASTS

    is_fast_day = is_taanis

    @property
    def is_regular_taanis(self) -> bool:
        return self.holiday in REGULAR_FASTS

    @property
    def is_tisha_bav(self) -> bool:
        return self.holiday == H.TISHA_BEAV

    @property
    def is_taanis_bechoros(self) -> bool:
        if self.month != HebrewMonth.NISSAN:
            return False
        # moved to Thursday when Erev Pesach is Shabbos
        return (self.day == 14 and self.weekday != Weekday.SHABBOS) or (
            self.day == 12 and self.weekday == Weekday.THURSDAY
        )

    # ----------------------------
    # Counters
    # ----------------------------
    @property
    def is_chanukah(self) -> bool:
        return self.holiday == H.CHANUKAH

    @property
    def day_of_chanukah(self) -> Optional[int]:
        if not self.is_chanukah:
            return None
        if self.month == HebrewMonth.KISLEV:
            return self.day - 24
        return self.day + 5 if is_kislev_short(self.date.year) else self.day + 6

    @property
    def day_of_omer(self) -> Optional[int]:
        m, d = self.month, self.day
        if m == HebrewMonth.NISSAN and d >= 16:
            return d - 15
        if m == HebrewMonth.IYAR:
            return d + 15
        if m == HebrewMonth.SIVAN and d < 6:
            return d + 44
        return None

    @property
    def is_purim(self) -> bool:
        if self.config.is_mukaf_choma:
            return self.holiday == H.SHUSHAN_PURIM
        return self.holiday == H.PURIM

    # ----------------------------
    # Year-level
    # ----------------------------
    @property
    def is_birkas_hachamah(self) -> bool:
        # 28 solar years of 365.25 days; the first tekufas Nissan fell 172 days
        # after molad tohu
        days = elapsed_days(self.date.year) + self.date.days_since_rosh_hashana + 1
        return days % int(28 * 365.25) == 172

    @property
    def is_shmita_year(self) -> bool:
        return is_shmita_year(self.date.year)


def observance_for(d: HebrewDate, config: CalendarConfig = DEFAULT_CONFIG) -> Observance:
    return Observance(date=d, holiday=resolve_holiday(d, config), weekday=d.weekday, config=config)


# ============================================================
# Occurrences within a year
#   Each holiday has a fixed search window; an occurrence is any date in the
#   window whose resolved holiday equals the one searched for.
# ============================================================

_Window = Tuple[HebrewMonth, int, int]
M = HebrewMonth

HOLIDAY_WINDOWS: Dict[Holiday, Tuple[_Window, ...]] = {
    H.EREV_PESACH: ((M.NISSAN, 14, 14),),
    H.PESACH: ((M.NISSAN, 15, 22),),
    H.CHOL_HAMOED_PESACH: ((M.NISSAN, 16, 20),),
    H.PESACH_SHENI: ((M.IYAR, 14, 14),),
    H.EREV_SHAVUOS: ((M.SIVAN, 5, 5),),
    H.SHAVUOS: ((M.SIVAN, 6, 7),),
    H.SEVENTEEN_OF_TAMMUZ: ((M.TAMMUZ, 17, 18),),
    H.TISHA_BEAV: ((M.AV, 9, 10),),
    H.TU_BEAV: ((M.AV, 15, 15),),
    H.EREV_ROSH_HASHANA: ((M.ELUL, 29, 29),),
    H.ROSH_HASHANA: ((M.TISHREI, 1, 2),),
    H.FAST_OF_GEDALYAH: ((M.TISHREI, 3, 4),),
    H.EREV_YOM_KIPPUR: ((M.TISHREI, 9, 9),),
    H.YOM_KIPPUR: ((M.TISHREI, 10, 10),),
    H.EREV_SUCCOS: ((M.TISHREI, 14, 14),),
    H.SUCCOS: ((M.TISHREI, 15, 16),),
    H.CHOL_HAMOED_SUCCOS: ((M.TISHREI, 16, 20),),
    H.HOSHANA_RABBA: ((M.TISHREI, 21, 21),),
    H.SHEMINI_ATZERES: ((M.TISHREI, 22, 22),),
    H.SIMCHAS_TORAH: ((M.TISHREI, 23, 23),),
    H.CHANUKAH: ((M.KISLEV, 25, 30), (M.TEVES, 1, 3)),
    H.TENTH_OF_TEVES: ((M.TEVES, 10, 10),),
    H.TU_BESHVAT: ((M.SHEVAT, 15, 15),),
    H.FAST_OF_ESTHER: ((M.ADAR, 11, 13), (M.ADAR_II, 11, 13)),
    H.PURIM: ((M.ADAR, 14, 14), (M.ADAR_II, 14, 14)),
    H.SHUSHAN_PURIM: ((M.ADAR, 15, 15), (M.ADAR_II, 15, 15)),
    H.PURIM_KATAN: ((M.ADAR, 14, 14),),
    H.SHUSHAN_PURIM_KATAN: ((M.ADAR, 15, 15),),
    H.YOM_HASHOAH: ((M.NISSAN, 26, 28),),
    H.YOM_HAZIKARON: ((M.IYAR, 2, 5),),
    H.YOM_HAATZMAUT: ((M.IYAR, 3, 6),),
    H.YOM_YERUSHALAYIM: ((M.IYAR, 28, 28),),
    H.LAG_BAOMER: ((M.IYAR, 18, 18),),
    H.ISRU_CHAG: ((M.TISHREI, 23, 24), (M.NISSAN, 22, 23), (M.SIVAN, 7, 8)),
}


@lru_cache(maxsize=2048)
def _occurrence_epoch_days(year: int, holiday: Holiday, config: CalendarConfig) -> Tuple[int, ...]:
    out: List[int] = []
    for month, first, last in HOLIDAY_WINDOWS.get(holiday, ()):
        if not is_valid_month(year, month):
            continue
        for day in range(first, min(last, month_length(year, month)) + 1):
            d = HebrewDate(year, month, day)
            if resolve_holiday(d, config) == holiday:
                out.append(d.epoch_day)
    return tuple(sorted(out))


def holiday_dates(
    year: int,
    holiday: Holiday,
    config: CalendarConfig = DEFAULT_CONFIG,
) -> List[HebrewDate]:
    """
    Dates in Hebrew `year` (Tishrei..Elul) on which `holiday` falls.

    Holidays the resolver never produces (ROSH_CHODESH, YOM_KIPPUR_KATAN)
    yield an empty list.
    """
    if int(year) < 1:
        raise ValueError(f"Hebrew year must be >= 1 (got {year})")
    return [HebrewDate.from_epoch_day(n) for n in _occurrence_epoch_days(int(year), Holiday(holiday), config)]


def holiday_epoch_days(year: int, holiday: Holiday, config: CalendarConfig = DEFAULT_CONFIG) -> Tuple[int, ...]:
    return _occurrence_epoch_days(int(year), Holiday(holiday), config)


def holidays_in_year(
    year: int,
    config: CalendarConfig = DEFAULT_CONFIG,
) -> List[Tuple[HebrewDate, Holiday]]:
    """
    Every (date, holiday) of a Hebrew year in date order.
    """
    pairs: List[Tuple[int, Holiday]] = []
    for h in HOLIDAY_WINDOWS:
        for n in _occurrence_epoch_days(int(year), h, config):
            pairs.append((n, h))
    pairs.sort()
    log.debug("holidays_in_year year=%d count=%d", year, len(pairs))
    return [(HebrewDate.from_epoch_day(n), h) for n, h in pairs]
