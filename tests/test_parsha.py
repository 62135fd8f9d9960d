from __future__ import annotations

from datetime import date

import pytest

from hcal.core.config import CalendarConfig
from hcal.core.hebrew_date import HebrewDate, Weekday
from hcal.core.months import HebrewMonth
from hcal.features.parsha import (
    PARSHA_TABLE,
    Parsha,
    parsha_for,
    special_shabbos,
    upcoming_parsha,
    year_type_row,
)

ISRAEL = CalendarConfig(in_israel=True)


def _day(y: int, m: int, d: int) -> HebrewDate:
    return HebrewDate.from_gregorian(date(y, m, d))


def _shabbosos(year: int):
    h = HebrewDate(year, HebrewMonth.TISHREI, 1)
    h = h.advance((Weekday.SHABBOS - h.weekday) % 7)
    while h.year == year:
        yield h
        h = h.advance(7)


@pytest.mark.parametrize(
    "g, expected",
    [
        ((2023, 12, 23), Parsha.VAYIGASH),
        ((2023, 12, 30), Parsha.VAYECHI),
        ((2024, 1, 27), Parsha.BESHALACH),
        ((2024, 5, 4), Parsha.ACHREI_MOS),
        ((2024, 5, 11), Parsha.KEDOSHIM),
    ],
)
def test_parsha_vectors(g, expected):
    assert parsha_for(_day(*g)) == expected


def test_no_parsha_on_weekdays_or_yom_tov():
    assert parsha_for(_day(2023, 12, 22)) is None
    # Shabbos Chol Hamoed Pesach 5784
    assert parsha_for(_day(2024, 4, 27)) is None
    assert parsha_for(_day(2024, 4, 27), ISRAEL) is None


def test_israel_reads_ahead_when_the_eighth_day_of_pesach_is_shabbos():
    d = _day(2019, 4, 27)
    assert parsha_for(d) is None
    assert parsha_for(d, ISRAEL) == Parsha.ACHREI_MOS


def test_upcoming_parsha():
    # Tuesday of Pesach 5784; the coming Shabbos is Chol Hamoed
    assert upcoming_parsha(_day(2024, 4, 23)) == Parsha.ACHREI_MOS
    assert upcoming_parsha(_day(2023, 12, 20)) == Parsha.VAYIGASH
    # on Shabbos the current reading is skipped
    assert upcoming_parsha(_day(2023, 12, 23)) == Parsha.VAYECHI


@pytest.mark.parametrize(
    "g, expected",
    [
        ((2023, 9, 23), Parsha.SHUVA),
        ((2024, 1, 27), Parsha.SHIRA),
        ((2024, 3, 9), Parsha.SHKALIM),
        ((2024, 3, 23), Parsha.ZACHOR),
        ((2024, 3, 30), Parsha.PARA),
        ((2024, 4, 6), Parsha.HACHODESH),
        ((2024, 4, 20), Parsha.HAGADOL),
        ((2024, 8, 10), Parsha.CHAZON),
        ((2024, 8, 17), Parsha.NACHAMU),
        ((2023, 12, 23), None),
        ((2024, 3, 8), None),
    ],
)
def test_special_shabbos(g, expected):
    assert special_shabbos(_day(*g)) == expected


def test_every_year_has_a_layout():
    for y in range(5500, 6000):
        assert 0 <= year_type_row(y) < len(PARSHA_TABLE)
        assert 0 <= year_type_row(y, ISRAEL) < len(PARSHA_TABLE)


@pytest.mark.parametrize("config", [CalendarConfig(), ISRAEL], ids=["diaspora", "israel"])
def test_each_year_reads_bereshis_once(config):
    for y in range(5770, 5800):
        readings = [parsha_for(s, config) for s in _shabbosos(y)]
        assert readings.count(Parsha.BERESHIS) == 1
