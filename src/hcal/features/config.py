# src/hcal/features/config.py
from __future__ import annotations

"""
Feature-level name tables and reading-cycle data.

- month / weekday / holiday / parsha transliterations (Ashkenazi spelling)
- Talmud Bavli and Yerushalmi tractate tables for the daily-folio cycles

Tables are read-only mappings keyed by enum member name. Callers that want
other spellings build a NameTables with overrides and pass it explicitly.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from hcal.core.months import HebrewMonth, is_leap_year

# ============================================================
# Months / weekdays
# ============================================================

MONTH_NAMES: Mapping[str, str] = MappingProxyType({
    "TISHREI": "Tishrei",
    "CHESHVAN": "Cheshvan",
    "KISLEV": "Kislev",
    "TEVES": "Teves",
    "SHEVAT": "Shevat",
    "ADAR": "Adar",
    "ADAR_II": "Adar II",
    "NISSAN": "Nissan",
    "IYAR": "Iyar",
    "SIVAN": "Sivan",
    "TAMMUZ": "Tammuz",
    "AV": "Av",
    "ELUL": "Elul",
    "ADAR_I": "Adar I",
})

WEEKDAY_NAMES: Mapping[str, str] = MappingProxyType({
    "SUNDAY": "Sunday",
    "MONDAY": "Monday",
    "TUESDAY": "Tuesday",
    "WEDNESDAY": "Wednesday",
    "THURSDAY": "Thursday",
    "FRIDAY": "Friday",
    "SHABBOS": "Shabbos",
})

# ============================================================
# Holidays (same order as the Holiday enum; EREV_CHANUKAH is name-only)
# ============================================================

HOLIDAY_NAMES: Mapping[str, str] = MappingProxyType({
    "EREV_PESACH": "Erev Pesach",
    "PESACH": "Pesach",
    "CHOL_HAMOED_PESACH": "Chol Hamoed Pesach",
    "PESACH_SHENI": "Pesach Sheni",
    "EREV_SHAVUOS": "Erev Shavuos",
    "SHAVUOS": "Shavuos",
    "SEVENTEEN_OF_TAMMUZ": "Seventeenth of Tammuz",
    "TISHA_BEAV": "Tishah B'Av",
    "TU_BEAV": "Tu B'Av",
    "EREV_ROSH_HASHANA": "Erev Rosh Hashana",
    "ROSH_HASHANA": "Rosh Hashana",
    "FAST_OF_GEDALYAH": "Fast of Gedalyah",
    "EREV_YOM_KIPPUR": "Erev Yom Kippur",
    "YOM_KIPPUR": "Yom Kippur",
    "EREV_SUCCOS": "Erev Succos",
    "SUCCOS": "Succos",
    "CHOL_HAMOED_SUCCOS": "Chol Hamoed Succos",
    "HOSHANA_RABBA": "Hoshana Rabbah",
    "SHEMINI_ATZERES": "Shemini Atzeres",
    "SIMCHAS_TORAH": "Simchas Torah",
    "EREV_CHANUKAH": "Erev Chanukah",
    "CHANUKAH": "Chanukah",
    "TENTH_OF_TEVES": "Tenth of Teves",
    "TU_BESHVAT": "Tu B'Shvat",
    "FAST_OF_ESTHER": "Fast of Esther",
    "PURIM": "Purim",
    "SHUSHAN_PURIM": "Shushan Purim",
    "PURIM_KATAN": "Purim Katan",
    "ROSH_CHODESH": "Rosh Chodesh",
    "YOM_HASHOAH": "Yom HaShoah",
    "YOM_HAZIKARON": "Yom Hazikaron",
    "YOM_HAATZMAUT": "Yom Ha'atzmaut",
    "YOM_YERUSHALAYIM": "Yom Yerushalayim",
    "LAG_BAOMER": "Lag B'Omer",
    "SHUSHAN_PURIM_KATAN": "Shushan Purim Katan",
    "ISRU_CHAG": "Isru Chag",
    "YOM_KIPPUR_KATAN": "Yom Kippur Katan",
})

# ============================================================
# Parshiyos
# ============================================================

PARSHA_NAMES: Mapping[str, str] = MappingProxyType({
    "BERESHIS": "Bereshis",
    "NOACH": "Noach",
    "LECH_LECHA": "Lech Lecha",
    "VAYERA": "Vayera",
    "CHAYEI_SARA": "Chayei Sara",
    "TOLDOS": "Toldos",
    "VAYETZEI": "Vayetzei",
    "VAYISHLACH": "Vayishlach",
    "VAYESHEV": "Vayeshev",
    "MIKETZ": "Miketz",
    "VAYIGASH": "Vayigash",
    "VAYECHI": "Vayechi",
    "SHEMOS": "Shemos",
    "VAERA": "Vaera",
    "BO": "Bo",
    "BESHALACH": "Beshalach",
    "YISRO": "Yisro",
    "MISHPATIM": "Mishpatim",
    "TERUMAH": "Terumah",
    "TETZAVEH": "Tetzaveh",
    "KI_SISA": "Ki Sisa",
    "VAYAKHEL": "Vayakhel",
    "PEKUDEI": "Pekudei",
    "VAYIKRA": "Vayikra",
    "TZAV": "Tzav",
    "SHMINI": "Shmini",
    "TAZRIA": "Tazria",
    "METZORA": "Metzora",
    "ACHREI_MOS": "Achrei Mos",
    "KEDOSHIM": "Kedoshim",
    "EMOR": "Emor",
    "BEHAR": "Behar",
    "BECHUKOSAI": "Bechukosai",
    "BAMIDBAR": "Bamidbar",
    "NASSO": "Nasso",
    "BEHAALOSCHA": "Beha'aloscha",
    "SHLACH": "Sh'lach",
    "KORACH": "Korach",
    "CHUKAS": "Chukas",
    "BALAK": "Balak",
    "PINCHAS": "Pinchas",
    "MATOS": "Matos",
    "MASEI": "Masei",
    "DEVARIM": "Devarim",
    "VAESCHANAN": "Vaeschanan",
    "EIKEV": "Eikev",
    "REEH": "Re'eh",
    "SHOFTIM": "Shoftim",
    "KI_SEITZEI": "Ki Seitzei",
    "KI_SAVO": "Ki Savo",
    "NITZAVIM": "Nitzavim",
    "VAYEILECH": "Vayeilech",
    "HAAZINU": "Ha'Azinu",
    "VZOS_HABERACHA": "Vezos Habracha",
    "VAYAKHEL_PEKUDEI": "Vayakhel Pekudei",
    "TAZRIA_METZORA": "Tazria Metzora",
    "ACHREI_MOS_KEDOSHIM": "Achrei Mos Kedoshim",
    "BEHAR_BECHUKOSAI": "Behar Bechukosai",
    "CHUKAS_BALAK": "Chukas Balak",
    "MATOS_MASEI": "Matos Masei",
    "NITZAVIM_VAYEILECH": "Nitzavim Vayeilech",
    "SHKALIM": "Shekalim",
    "ZACHOR": "Zachor",
    "PARA": "Parah",
    "HACHODESH": "Hachodesh",
    "SHUVA": "Shuva",
    "SHIRA": "Shira",
    "HAGADOL": "Hagadol",
    "CHAZON": "Chazon",
    "NACHAMU": "Nachamu",
})


def _merged(base: Mapping[str, str], extra: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    if not extra:
        return base
    unknown = sorted(set(extra) - set(base))
    if unknown:
        raise KeyError(f"unknown name keys: {unknown}")
    out = dict(base)
    out.update(extra)
    return MappingProxyType(out)


@dataclass(frozen=True)
class NameTables:
    """
    Immutable bundle of display names. Build variants with `with_overrides`.
    """
    months: Mapping[str, str] = field(default_factory=lambda: MONTH_NAMES)
    weekdays: Mapping[str, str] = field(default_factory=lambda: WEEKDAY_NAMES)
    holidays: Mapping[str, str] = field(default_factory=lambda: HOLIDAY_NAMES)
    parshiyos: Mapping[str, str] = field(default_factory=lambda: PARSHA_NAMES)

    def with_overrides(
        self,
        *,
        months: Optional[Mapping[str, str]] = None,
        weekdays: Optional[Mapping[str, str]] = None,
        holidays: Optional[Mapping[str, str]] = None,
        parshiyos: Optional[Mapping[str, str]] = None,
    ) -> "NameTables":
        return NameTables(
            months=_merged(self.months, months),
            weekdays=_merged(self.weekdays, weekdays),
            holidays=_merged(self.holidays, holidays),
            parshiyos=_merged(self.parshiyos, parshiyos),
        )


DEFAULT_NAMES = NameTables()


def _lookup(table: Mapping[str, str], member: Enum, kind: str) -> str:
    try:
        return table[member.name]
    except KeyError as e:
        raise KeyError(f"no {kind} name for {member!r}") from e


def month_name(year: int, month: int, names: NameTables = DEFAULT_NAMES) -> str:
    """
    Display name of a month; ADAR reads "Adar I" in a leap year.
    """
    m = HebrewMonth(int(month))
    if m == HebrewMonth.ADAR and is_leap_year(year):
        return names.months["ADAR_I"]
    return _lookup(names.months, m, "month")


def weekday_name(weekday: Enum, names: NameTables = DEFAULT_NAMES) -> str:
    return _lookup(names.weekdays, weekday, "weekday")


def holiday_name(holiday: Optional[Enum], names: NameTables = DEFAULT_NAMES) -> Optional[str]:
    if holiday is None:
        return None
    return _lookup(names.holidays, holiday, "holiday")


def parsha_name(parsha: Optional[Enum], names: NameTables = DEFAULT_NAMES) -> Optional[str]:
    if parsha is None:
        return None
    return _lookup(names.parshiyos, parsha, "parsha")


# ============================================================
# Daily-folio tractate tables
#   Bavli: (name, last folio, first folio); pages = last - first + 1
#   Yerushalmi: (name, pages) in the Vilna edition
# ============================================================

BAVLI_MASECHTOS: Tuple[Tuple[str, int, int], ...] = (
    ("Berachos", 64, 2),
    ("Shabbos", 157, 2),
    ("Eruvin", 105, 2),
    ("Pesachim", 121, 2),
    ("Shekalim", 22, 2),
    ("Yoma", 88, 2),
    ("Sukkah", 56, 2),
    ("Beitzah", 40, 2),
    ("Rosh Hashana", 35, 2),
    ("Taanis", 31, 2),
    ("Megillah", 32, 2),
    ("Moed Katan", 29, 2),
    ("Chagigah", 27, 2),
    ("Yevamos", 122, 2),
    ("Kesubos", 112, 2),
    ("Nedarim", 91, 2),
    ("Nazir", 66, 2),
    ("Sotah", 49, 2),
    ("Gitin", 90, 2),
    ("Kiddushin", 82, 2),
    ("Bava Kamma", 119, 2),
    ("Bava Metzia", 119, 2),
    ("Bava Basra", 176, 2),
    ("Sanhedrin", 113, 2),
    ("Makkos", 24, 2),
    ("Shevuos", 49, 2),
    ("Avodah Zarah", 76, 2),
    ("Horiyos", 14, 2),
    ("Zevachim", 120, 2),
    ("Menachos", 110, 2),
    ("Chullin", 142, 2),
    ("Bechoros", 61, 2),
    ("Arachin", 34, 2),
    ("Temurah", 34, 2),
    ("Kerisos", 28, 2),
    ("Meilah", 22, 2),
    ("Kinnim", 25, 23),
    ("Tamid", 33, 26),
    ("Midos", 37, 34),
    ("Niddah", 73, 2),
)

# Cycles 1-7 read Shekalim in a 13-page pagination (folios 2-14). Cycle 8
# (from 1975-06-24) onward reads the 22-page Vilna pagination above.
BAVLI_EARLY_CYCLES = 7
BAVLI_EARLY_SHEKALIM_PAGES = 13

YERUSHALMI_MASECHTOS: Tuple[Tuple[str, int], ...] = (
    ("Berachos", 68),
    ("Pe'ah", 37),
    ("Demai", 34),
    ("Kilayim", 44),
    ("Shevi'is", 31),
    ("Terumos", 59),
    ("Ma'asros", 26),
    ("Ma'aser Sheni", 33),
    ("Chalah", 28),
    ("Orlah", 20),
    ("Bikurim", 13),
    ("Shabbos", 92),
    ("Eruvin", 65),
    ("Pesachim", 71),
    ("Beitzah", 22),
    ("Rosh Hashanah", 22),
    ("Yoma", 42),
    ("Sukah", 26),
    ("Ta'anis", 26),
    ("Shekalim", 33),
    ("Megilah", 34),
    ("Chagigah", 22),
    ("Moed Katan", 19),
    ("Yevamos", 85),
    ("Kesuvos", 72),
    ("Sotah", 47),
    ("Nedarim", 40),
    ("Nazir", 47),
    ("Gitin", 54),
    ("Kidushin", 48),
    ("Bava Kama", 44),
    ("Bava Metzia", 37),
    ("Bava Basra", 34),
    ("Shevuos", 44),
    ("Makos", 9),
    ("Sanhedrin", 57),
    ("Avodah Zarah", 37),
    ("Horayos", 19),
    ("Nidah", 13),
)
