# src/hcal/features/parsha.py
from __future__ import annotations

"""
Weekly Torah reading.

A year falls into one of 17 reading layouts, chosen by leap status, the
weekday of Rosh Hashana, the Cheshvan/Kislev lengths and (for some layouts)
whether the reader is in Israel. Each layout lists the parsha of every Shabbos
of the year, indexed by week number; None marks a Shabbos that is a Yom Tov or
Chol Hamoed.
"""

from enum import IntEnum, auto
from typing import Dict, Optional, Tuple

from hcal.core.config import DEFAULT_CONFIG, CalendarConfig
from hcal.core.hebrew_date import HebrewDate, Weekday
from hcal.core.molad import elapsed_days
from hcal.core.months import HebrewMonth, is_leap_year
from hcal.core.year import YearType, rosh_hashana_weekday, year_type


class Parsha(IntEnum):
    BERESHIS = auto()
    NOACH = auto()
    LECH_LECHA = auto()
    VAYERA = auto()
    CHAYEI_SARA = auto()
    TOLDOS = auto()
    VAYETZEI = auto()
    VAYISHLACH = auto()
    VAYESHEV = auto()
    MIKETZ = auto()
    VAYIGASH = auto()
    VAYECHI = auto()
    SHEMOS = auto()
    VAERA = auto()
    BO = auto()
    BESHALACH = auto()
    YISRO = auto()
    MISHPATIM = auto()
    TERUMAH = auto()
    TETZAVEH = auto()
    KI_SISA = auto()
    VAYAKHEL = auto()
    PEKUDEI = auto()
    VAYIKRA = auto()
    TZAV = auto()
    SHMINI = auto()
    TAZRIA = auto()
    METZORA = auto()
    ACHREI_MOS = auto()
    KEDOSHIM = auto()
    EMOR = auto()
    BEHAR = auto()
    BECHUKOSAI = auto()
    BAMIDBAR = auto()
    NASSO = auto()
    BEHAALOSCHA = auto()
    SHLACH = auto()
    KORACH = auto()
    CHUKAS = auto()
    BALAK = auto()
    PINCHAS = auto()
    MATOS = auto()
    MASEI = auto()
    DEVARIM = auto()
    VAESCHANAN = auto()
    EIKEV = auto()
    REEH = auto()
    SHOFTIM = auto()
    KI_SEITZEI = auto()
    KI_SAVO = auto()
    NITZAVIM = auto()
    VAYEILECH = auto()
    HAAZINU = auto()
    VZOS_HABERACHA = auto()
    # combined readings
    VAYAKHEL_PEKUDEI = auto()
    TAZRIA_METZORA = auto()
    ACHREI_MOS_KEDOSHIM = auto()
    BEHAR_BECHUKOSAI = auto()
    CHUKAS_BALAK = auto()
    MATOS_MASEI = auto()
    NITZAVIM_VAYEILECH = auto()
    # special Shabbosos
    SHKALIM = auto()
    ZACHOR = auto()
    PARA = auto()
    HACHODESH = auto()
    SHUVA = auto()
    SHIRA = auto()
    HAGADOL = auto()
    CHAZON = auto()
    NACHAMU = auto()


P = Parsha
_ = None

# ============================================================
# Reading layouts
#   Ba=Monday Ga=Tuesday Ha=Thursday Za=Shabbos (Rosh Hashana weekday)
#   Ch=both short  K=regular  Sh=both long
# ============================================================

PARSHA_TABLE: Tuple[Tuple[Optional[Parsha], ...], ...] = (
    # 0: BaCh
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR_BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 1: BaSh, GaK
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR_BECHUKOSAI, P.BAMIDBAR, _, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS_BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 2: HaK
    (
        _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA, P.TOLDOS,
        P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS, P.VAERA,
        P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR_BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 3: HaSh
    (
        _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA, P.TOLDOS,
        P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS, P.VAERA,
        P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA, P.VAYAKHEL,
        P.PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA, P.ACHREI_MOS_KEDOSHIM, P.EMOR,
        P.BEHAR_BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH, P.KORACH, P.CHUKAS,
        P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV, P.REEH, P.SHOFTIM,
        P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 4: ZaCh
    (
        _, _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR_BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 5: ZaSh
    (
        _, _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR_BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 6: leap BaCh
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, P.ACHREI_MOS,
        P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, _, P.NASSO, P.BEHAALOSCHA, P.SHLACH,
        P.KORACH, P.CHUKAS_BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV,
        P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 7: leap BaSh, GaK
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, _,
        P.ACHREI_MOS, P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO,
        P.BEHAALOSCHA, P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM,
        P.VAESCHANAN, P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 8: leap HaCh
    (
        _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA, P.TOLDOS,
        P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS, P.VAERA,
        P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA, P.VAYAKHEL,
        P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, P.ACHREI_MOS, _, P.KEDOSHIM,
        P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH, P.KORACH,
        P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS, P.MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV, P.REEH,
        P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 9: leap HaSh
    (
        _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA, P.TOLDOS,
        P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS, P.VAERA,
        P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA, P.VAYAKHEL,
        P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, P.ACHREI_MOS, _, P.KEDOSHIM,
        P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH, P.KORACH,
        P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS, P.MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV, P.REEH,
        P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 10: leap ZaCh
    (
        _, _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, P.ACHREI_MOS,
        P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH,
        P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV,
        P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 11: leap ZaSh
    (
        _, _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, P.ACHREI_MOS,
        P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, _, P.NASSO, P.BEHAALOSCHA, P.SHLACH,
        P.KORACH, P.CHUKAS_BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV,
        P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 12: BaSh, GaK (Israel)
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR_BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 13: HaK (Israel)
    (
        _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA, P.TOLDOS,
        P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS, P.VAERA,
        P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL_PEKUDEI, P.VAYIKRA, P.TZAV, _, P.SHMINI, P.TAZRIA_METZORA,
        P.ACHREI_MOS_KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA,
        P.SHLACH, P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN,
        P.EIKEV, P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 14: leap BaCh (Israel)
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, P.ACHREI_MOS,
        P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH,
        P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV,
        P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
    # 15: leap BaSh, GaK (Israel)
    (
        _, P.VAYEILECH, P.HAAZINU, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, P.ACHREI_MOS,
        P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH,
        P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS, P.MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV,
        P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM,
    ),
    # 16: leap ZaSh (Israel)
    (
        _, _, P.HAAZINU, _, _, P.BERESHIS, P.NOACH, P.LECH_LECHA, P.VAYERA, P.CHAYEI_SARA,
        P.TOLDOS, P.VAYETZEI, P.VAYISHLACH, P.VAYESHEV, P.MIKETZ, P.VAYIGASH, P.VAYECHI, P.SHEMOS,
        P.VAERA, P.BO, P.BESHALACH, P.YISRO, P.MISHPATIM, P.TERUMAH, P.TETZAVEH, P.KI_SISA,
        P.VAYAKHEL, P.PEKUDEI, P.VAYIKRA, P.TZAV, P.SHMINI, P.TAZRIA, P.METZORA, _, P.ACHREI_MOS,
        P.KEDOSHIM, P.EMOR, P.BEHAR, P.BECHUKOSAI, P.BAMIDBAR, P.NASSO, P.BEHAALOSCHA, P.SHLACH,
        P.KORACH, P.CHUKAS, P.BALAK, P.PINCHAS, P.MATOS_MASEI, P.DEVARIM, P.VAESCHANAN, P.EIKEV,
        P.REEH, P.SHOFTIM, P.KI_SEITZEI, P.KI_SAVO, P.NITZAVIM_VAYEILECH,
    ),
)

_MON, _TUE, _THU, _SAT = Weekday.MONDAY, Weekday.TUESDAY, Weekday.THURSDAY, Weekday.SHABBOS
_CH, _K, _SH = YearType.DEFICIENT, YearType.REGULAR, YearType.COMPLETE

# (leap, Rosh Hashana weekday, year type) -> (diaspora row, Israel row)
_LAYOUT_ROWS: Dict[Tuple[bool, Weekday, YearType], Tuple[int, int]] = {
    (False, _MON, _CH): (0, 0),
    (False, _MON, _SH): (1, 12),
    (False, _TUE, _K): (1, 12),
    (False, _THU, _K): (2, 13),
    (False, _THU, _SH): (3, 3),
    (False, _SAT, _CH): (4, 4),
    (False, _SAT, _SH): (5, 5),
    (True, _MON, _CH): (6, 14),
    (True, _MON, _SH): (7, 15),
    (True, _TUE, _K): (7, 15),
    (True, _THU, _CH): (8, 8),
    (True, _THU, _SH): (9, 9),
    (True, _SAT, _CH): (10, 10),
    (True, _SAT, _SH): (11, 16),
}


def year_type_row(year: int, config: CalendarConfig = DEFAULT_CONFIG) -> int:
    """
    Index into PARSHA_TABLE for Hebrew `year`.

    Raises
    ------
    RuntimeError
        If the year's shape matches no layout (a calendar arithmetic defect).
    """
    key = (is_leap_year(year), Weekday(rosh_hashana_weekday(year)), year_type(year))
    try:
        diaspora_row, israel_row = _LAYOUT_ROWS[key]
    except KeyError as e:
        raise RuntimeError(f"no parsha layout for year {year}: {key}") from e
    return israel_row if config.in_israel else diaspora_row


def parsha_for(d: HebrewDate, config: CalendarConfig = DEFAULT_CONFIG) -> Optional[Parsha]:
    """
    The parsha read on `d`; None unless `d` is a Shabbos with a regular reading.
    """
    if d.weekday != Weekday.SHABBOS:
        return None
    row = PARSHA_TABLE[year_type_row(d.year, config)]
    # elapsed_days % 7 is the Rosh Hashana weekday counted from Sunday = 0
    week = (elapsed_days(d.year) % 7 + d.days_since_rosh_hashana + 1) // 7
    return row[week]


def upcoming_parsha(d: HebrewDate, config: CalendarConfig = DEFAULT_CONFIG) -> Parsha:
    """
    The next regular reading after `d` (today's reading is skipped on Shabbos).
    """
    days_to_shabbos = (Weekday.SHABBOS - d.weekday) % 7 or 7
    shabbos = d.advance(days_to_shabbos)
    parsha = parsha_for(shabbos, config)
    while parsha is None:
        shabbos = shabbos.advance(7)
        parsha = parsha_for(shabbos, config)
    return parsha


def special_shabbos(d: HebrewDate, config: CalendarConfig = DEFAULT_CONFIG) -> Optional[Parsha]:
    """
    One of the special Shabbosos (Shekalim ... Nachamu), or None.
    """
    if d.weekday != Weekday.SHABBOS:
        return None

    m, day, leap = d.month, d.day, d.is_leap_year
    purim_month = (m == HebrewMonth.ADAR and not leap) or m == HebrewMonth.ADAR_II

    if (m == HebrewMonth.SHEVAT and not leap) or (m == HebrewMonth.ADAR and leap):
        if day in (25, 27, 29):
            return P.SHKALIM
    if purim_month:
        if day == 1:
            return P.SHKALIM
        if day in (8, 9, 11, 13):
            return P.ZACHOR
        if day in (18, 20, 22, 23):
            return P.PARA
        if day in (25, 27, 29):
            return P.HACHODESH
    if m == HebrewMonth.NISSAN:
        if day == 1:
            return P.HACHODESH
        if 8 <= day <= 14:
            return P.HAGADOL
    if m == HebrewMonth.AV:
        if 4 <= day <= 9:
            return P.CHAZON
        if 10 <= day <= 16:
            return P.NACHAMU
    if m == HebrewMonth.TISHREI and 3 <= day <= 8:
        return P.SHUVA
    if parsha_for(d, config) == P.BESHALACH:
        return P.SHIRA
    return None
