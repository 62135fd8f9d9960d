from __future__ import annotations

from datetime import date

import pytest

from hcal.core.config import CalendarConfig
from hcal.core.hebrew_date import HebrewDate
from hcal.core.months import HebrewMonth
from hcal.features.holidays import (
    Holiday,
    holiday_dates,
    holidays_in_year,
    observance_for,
    resolve_holiday,
)

M = HebrewMonth
DIASPORA = CalendarConfig()
ISRAEL = CalendarConfig(in_israel=True)
MODERN = CalendarConfig(use_modern_holidays=True)


def _holiday(y: int, m: int, d: int, config: CalendarConfig = DIASPORA):
    return resolve_holiday(HebrewDate.from_gregorian(date(y, m, d)), config)


def _obs(y: int, m: int, d: int, config: CalendarConfig = DIASPORA):
    return observance_for(HebrewDate.from_gregorian(date(y, m, d)), config)


@pytest.mark.parametrize(
    "g, expected",
    [
        ((2023, 9, 16), Holiday.ROSH_HASHANA),
        ((2023, 9, 17), Holiday.ROSH_HASHANA),
        ((2023, 9, 18), Holiday.FAST_OF_GEDALYAH),
        ((2023, 9, 24), Holiday.EREV_YOM_KIPPUR),
        ((2023, 9, 25), Holiday.YOM_KIPPUR),
        ((2023, 12, 8), Holiday.CHANUKAH),
        ((2023, 12, 22), Holiday.TENTH_OF_TEVES),
        ((2024, 1, 25), Holiday.TU_BESHVAT),
        ((2024, 2, 23), Holiday.PURIM_KATAN),
        ((2024, 3, 21), Holiday.FAST_OF_ESTHER),
        ((2024, 3, 23), None),
        ((2024, 3, 24), Holiday.PURIM),
        ((2024, 3, 25), Holiday.SHUSHAN_PURIM),
        ((2024, 4, 22), Holiday.EREV_PESACH),
        ((2024, 4, 23), Holiday.PESACH),
        ((2024, 5, 26), Holiday.LAG_BAOMER),
        ((2024, 6, 12), Holiday.SHAVUOS),
        ((2024, 8, 13), Holiday.TISHA_BEAV),
        ((2024, 10, 5), None),
        ((2024, 10, 6), Holiday.FAST_OF_GEDALYAH),
    ],
)
def test_resolve_holiday_diaspora(g, expected):
    assert _holiday(*g) == expected


def test_fasts_deferred_from_shabbos():
    # 5779: 17 Tammuz and 9 Av both fell on Shabbos
    assert _holiday(2019, 7, 20) is None
    assert _holiday(2019, 7, 21) == Holiday.SEVENTEEN_OF_TAMMUZ
    assert _holiday(2019, 8, 10) is None
    assert _holiday(2019, 8, 11) == Holiday.TISHA_BEAV
    assert _obs(2019, 8, 11).is_tisha_bav


def test_israel_vs_diaspora():
    assert _holiday(2024, 4, 24) == Holiday.PESACH
    assert _holiday(2024, 4, 24, ISRAEL) == Holiday.CHOL_HAMOED_PESACH
    assert _holiday(2024, 6, 13) == Holiday.SHAVUOS
    assert _holiday(2024, 6, 13, ISRAEL) == Holiday.ISRU_CHAG
    # 22-24 Tishrei 5784
    assert _holiday(2023, 10, 7) == Holiday.SHEMINI_ATZERES
    assert _holiday(2023, 10, 8) == Holiday.SIMCHAS_TORAH
    assert _holiday(2023, 10, 8, ISRAEL) == Holiday.ISRU_CHAG
    assert _holiday(2023, 10, 9) == Holiday.ISRU_CHAG
    assert _holiday(2023, 10, 9, ISRAEL) is None


def test_modern_holidays_only_when_enabled():
    assert _holiday(2024, 5, 6) is None
    assert _holiday(2024, 5, 6, MODERN) == Holiday.YOM_HASHOAH
    assert _holiday(2024, 5, 13, MODERN) == Holiday.YOM_HAZIKARON
    assert _holiday(2024, 5, 14, MODERN) == Holiday.YOM_HAATZMAUT
    assert _holiday(2024, 6, 5, MODERN) == Holiday.YOM_YERUSHALAYIM
    assert _holiday(2024, 6, 5) is None


def test_yom_tov_predicates():
    yk = _obs(2023, 9, 25)
    assert yk.is_yom_tov and yk.is_taanis and yk.is_fast_day
    assert yk.is_assur_bemelacha and yk.is_work_prohibited
    assert not yk.is_regular_taanis

    erev = _obs(2024, 4, 22)
    assert erev.is_erev_yom_tov
    assert not erev.is_yom_tov
    assert erev.has_candle_lighting
    assert erev.is_taanis_bechoros

    hr = _obs(2023, 10, 6)
    assert hr.is_hoshana_rabba and hr.is_yom_tov and hr.is_erev_yom_tov
    assert hr.is_chol_hamoed_succos and hr.is_succos

    gedalyah = _obs(2023, 9, 18)
    assert gedalyah.is_regular_taanis and not gedalyah.is_yom_tov

    isru = _obs(2023, 10, 9)
    assert isru.is_isru_chag and not isru.is_yom_tov


def test_shabbos_is_assur_bemelacha_without_a_holiday():
    o = _obs(2023, 12, 23)
    assert o.holiday is None
    assert o.is_assur_bemelacha
    assert not o.is_yom_tov_assur_bemelacha
    assert _obs(2023, 12, 22).has_candle_lighting


def test_erev_yom_tov_sheni():
    assert _obs(2024, 4, 23).is_erev_yom_tov_sheni
    assert not _obs(2024, 4, 23, ISRAEL).is_erev_yom_tov_sheni
    assert _obs(2023, 9, 16, ISRAEL).is_erev_yom_tov_sheni


def test_chanukah_counting_in_a_short_kislev_year():
    days = holiday_dates(5784, Holiday.CHANUKAH)
    assert len(days) == 8
    assert days[0] == HebrewDate(5784, M.KISLEV, 25)
    assert days[-1] == HebrewDate(5784, M.TEVES, 3)
    assert [observance_for(d).day_of_chanukah for d in days] == list(range(1, 9))
    assert observance_for(HebrewDate(5784, M.TEVES, 4)).day_of_chanukah is None


def test_chanukah_always_eight_days():
    for y in range(5770, 5800):
        assert len(holiday_dates(y, Holiday.CHANUKAH)) == 8


def test_omer_count():
    assert observance_for(HebrewDate(5784, M.NISSAN, 15)).day_of_omer is None
    assert observance_for(HebrewDate(5784, M.NISSAN, 16)).day_of_omer == 1
    assert observance_for(HebrewDate(5784, M.IYAR, 18)).day_of_omer == 33
    assert observance_for(HebrewDate(5784, M.SIVAN, 5)).day_of_omer == 49
    assert observance_for(HebrewDate(5784, M.SIVAN, 6)).day_of_omer is None


def test_month_cycle_predicates():
    assert observance_for(HebrewDate(5783, M.CHESHVAN, 30)).is_rosh_chodesh
    assert observance_for(HebrewDate(5784, M.KISLEV, 1)).is_rosh_chodesh
    assert not observance_for(HebrewDate(5784, M.TISHREI, 1)).is_rosh_chodesh
    assert observance_for(HebrewDate(5784, M.CHESHVAN, 29)).is_erev_rosh_chodesh
    assert not observance_for(HebrewDate(5783, M.ELUL, 29)).is_erev_rosh_chodesh
    # 26 Kislev 5784 is Shabbos Mevorchim for Teves
    assert _obs(2023, 12, 9).is_shabbos_mevorchim
    assert observance_for(HebrewDate(5784, M.CHESHVAN, 29)).is_yom_kippur_katan
    assert observance_for(HebrewDate(5784, M.TISHREI, 10)).is_aseres_yemei_teshuva


def test_behab_days_in_cheshvan_5784():
    assert _obs(2023, 10, 23).is_behab
    assert _obs(2023, 10, 26).is_behab
    assert _obs(2023, 10, 30).is_behab
    assert not _obs(2023, 10, 24).is_behab


def test_purim_in_a_walled_city():
    walled = CalendarConfig(is_mukaf_choma=True)
    purim = HebrewDate(5783, M.ADAR, 14)
    shushan = HebrewDate(5783, M.ADAR, 15)
    assert observance_for(purim).is_purim
    assert not observance_for(shushan).is_purim
    assert not observance_for(purim, walled).is_purim
    assert observance_for(shushan, walled).is_purim


def test_yom_kippur_and_tisha_beav_once_a_year_on_different_days():
    for y in range(5700, 5800):
        yk = holiday_dates(y, Holiday.YOM_KIPPUR)
        tb = holiday_dates(y, Holiday.TISHA_BEAV)
        assert len(yk) == 1 and len(tb) == 1
        assert yk[0] != tb[0]


def test_holiday_dates_per_location():
    assert len(holiday_dates(5784, Holiday.PESACH)) == 4
    assert len(holiday_dates(5784, Holiday.PESACH, ISRAEL)) == 2
    assert holiday_dates(5784, Holiday.ROSH_CHODESH) == []
    with pytest.raises(ValueError):
        holiday_dates(0, Holiday.PESACH)


def test_holidays_in_year_sorted():
    pairs = holidays_in_year(5784)
    assert pairs[0] == (HebrewDate(5784, M.TISHREI, 1), Holiday.ROSH_HASHANA)
    assert pairs[-1] == (HebrewDate(5784, M.ELUL, 29), Holiday.EREV_ROSH_HASHANA)
    days = [d for d, _ in pairs]
    assert days == sorted(days)


def test_year_level_predicates():
    assert observance_for(HebrewDate(5769, M.NISSAN, 14)).is_birkas_hachamah
    hits = [
        n
        for n in range(HebrewDate(5769, M.TISHREI, 1).epoch_day, HebrewDate(5770, M.TISHREI, 1).epoch_day)
        if observance_for(HebrewDate.from_epoch_day(n)).is_birkas_hachamah
    ]
    assert hits == [HebrewDate(5769, M.NISSAN, 14).epoch_day]
    assert observance_for(HebrewDate(5782, M.TISHREI, 1)).is_shmita_year
