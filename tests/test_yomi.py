from __future__ import annotations

from datetime import date, timedelta

import pytest

from hcal.core.gregorian import epoch_from_date
from hcal.core.hebrew_date import HebrewDate
from hcal.features.yomi import (
    BAVLI,
    BAVLI_CONTINUOUS,
    BAVLI_SHEKALIM_CHANGE,
    BAVLI_START,
    YERUSHALMI,
    YERUSHALMI_START,
    CycleConfig,
    Daf,
    HolidayExclusion,
    NeverSkip,
    PredicateRule,
    Volume,
    cycle_number,
    cycle_start_for,
    daf_yomi_bavli,
    daf_yomi_bavli_continuous,
    daf_yomi_yerushalmi,
    next_cycle_start,
    page_for,
    pages_between,
)


def _linear(daf: Daf, config: CycleConfig) -> int:
    """0-based position of a daf inside its cycle."""
    return sum(config.page_counts[: daf.volume_index]) + daf.page - 1


def _pos(daf: Daf):
    return daf.volume_index, daf.page


def _is_shabbos(epoch_day: int) -> bool:
    return epoch_day % 7 == 6


def test_reference_cycle_sizes():
    assert BAVLI.total_pages == 2711
    assert YERUSHALMI.total_pages == 1554
    assert (BAVLI.volumes[-1].name, BAVLI.volumes[-1].pages) == ("Niddah", 72)
    assert (YERUSHALMI.volumes[-1].name, YERUSHALMI.volumes[-1].pages) == ("Nidah", 13)
    assert BAVLI.no_reading == HolidayExclusion()


def test_cycles_start_on_their_first_page():
    daf = daf_yomi_bavli(BAVLI_START)
    assert _pos(daf) == (0, 1)
    assert daf.name == "Berachos"
    assert daf.folio == 2
    assert str(daf) == "Berachos 2"

    daf = daf_yomi_yerushalmi(YERUSHALMI_START)
    assert _pos(daf) == (0, 1)
    assert daf.folio == 1


def test_before_start_has_no_page():
    assert daf_yomi_bavli(BAVLI_START - timedelta(days=1)) is None
    assert daf_yomi_yerushalmi(YERUSHALMI_START - timedelta(days=1)) is None
    assert cycle_number(YERUSHALMI_START - timedelta(days=1), YERUSHALMI) is None
    assert cycle_start_for(YERUSHALMI_START - timedelta(days=1), YERUSHALMI) is None


def test_no_reading_on_yom_kippur_and_tisha_beav():
    for d in (date(2023, 9, 25), date(2024, 8, 13), date(2019, 8, 11)):
        assert daf_yomi_bavli(d) is None
        assert daf_yomi_yerushalmi(d) is None


def test_skipped_day_does_not_consume_a_page():
    before = daf_yomi_yerushalmi(date(2023, 9, 24))
    after = daf_yomi_yerushalmi(date(2023, 9, 26))
    assert _linear(after, YERUSHALMI) in (_linear(before, YERUSHALMI) + 1, 0)


def test_pages_advance_one_per_reading_day():
    prev = None
    for n, daf in pages_between(date(2023, 1, 1), date(2023, 12, 31), YERUSHALMI):
        if daf is None:
            continue
        cur = _linear(daf, YERUSHALMI)
        if prev is not None:
            assert cur == prev + 1 or cur == 0
        prev = cur


def test_yerushalmi_cycle_wraps():
    start = YERUSHALMI.start_epoch_day
    boundary = next_cycle_start(start, YERUSHALMI)
    assert boundary - start >= YERUSHALMI.total_pages
    assert _pos(page_for(boundary, YERUSHALMI)) == (0, 1)
    assert cycle_number(boundary, YERUSHALMI) == 2
    assert cycle_start_for(boundary + 10, YERUSHALMI) == boundary

    last = boundary - 1
    while page_for(last, YERUSHALMI) is None:
        last -= 1
    assert _pos(page_for(last, YERUSHALMI)) == (len(YERUSHALMI.volumes) - 1, 13)


def test_bavli_is_in_a_later_cycle_today():
    assert cycle_number(date(2024, 1, 1), BAVLI) >= 14


def test_bavli_wraps_from_niddah_to_berachos():
    boundary = cycle_start_for(date(2024, 1, 1), BAVLI)
    assert _pos(page_for(boundary, BAVLI)) == (0, 1)

    last = boundary - 1
    while page_for(last, BAVLI) is None:
        last -= 1
    daf = page_for(last, BAVLI)
    assert _pos(daf) == (len(BAVLI.volumes) - 1, 72)
    assert str(daf) == "Niddah 73"


def test_early_bavli_cycles_read_a_shorter_shekalim():
    assert [v.pages for v in BAVLI.volumes_for_cycle(1) if v.name == "Shekalim"] == [13]
    assert [v.pages for v in BAVLI.volumes_for_cycle(7) if v.name == "Shekalim"] == [13]
    assert [v.pages for v in BAVLI.volumes_for_cycle(8) if v.name == "Shekalim"] == [22]
    assert BAVLI.pages_in_cycle(1) == 2702
    assert BAVLI.pages_in_cycle(8) == 2711

    # Berachos through Pesachim hold 443 pages
    first_cycle = BAVLI_START + timedelta(days=443)
    assert str(daf_yomi_bavli_continuous(first_cycle + timedelta(days=12))) == "Shekalim 14"
    assert str(daf_yomi_bavli_continuous(first_cycle + timedelta(days=13))) == "Yoma 2"

    eighth_cycle = BAVLI_SHEKALIM_CHANGE + timedelta(days=443)
    assert str(daf_yomi_bavli_continuous(eighth_cycle + timedelta(days=13))) == "Shekalim 15"
    assert str(daf_yomi_bavli_continuous(eighth_cycle + timedelta(days=22))) == "Yoma 2"


def test_continuous_bavli_matches_published_dates():
    assert BAVLI_CONTINUOUS.no_reading == NeverSkip()
    assert BAVLI_CONTINUOUS.start_epoch_day + 7 * 2702 == epoch_from_date(BAVLI_SHEKALIM_CHANGE)

    assert str(daf_yomi_bavli_continuous(date(1975, 6, 23))) == "Niddah 73"
    assert _pos(daf_yomi_bavli_continuous(BAVLI_SHEKALIM_CHANGE)) == (0, 1)
    assert cycle_number(BAVLI_SHEKALIM_CHANGE, BAVLI_CONTINUOUS) == 8

    # the fourteenth cycle began on 5 January 2020
    daf = daf_yomi_bavli_continuous(date(2020, 1, 5))
    assert _pos(daf) == (0, 1)
    assert str(daf) == "Berachos 2"
    assert cycle_number(date(2020, 1, 5), BAVLI_CONTINUOUS) == 14
    assert cycle_start_for(date(2020, 3, 1), BAVLI_CONTINUOUS) == epoch_from_date(date(2020, 1, 5))

    daf = daf_yomi_bavli_continuous(date(2020, 1, 4))
    assert _pos(daf) == (39, 72)
    assert str(daf) == "Niddah 73"


def test_custom_cycle_without_skips():
    cfg = CycleConfig.from_page_counts("tiny", date(2024, 1, 1), [3, 2], no_reading=NeverSkip())
    got = [_pos(page_for(date(2024, 1, 1) + timedelta(days=i), cfg)) for i in range(7)]
    assert got == [(0, 1), (0, 2), (0, 3), (1, 1), (1, 2), (0, 1), (0, 2)]
    assert next_cycle_start(cfg.start_epoch_day, cfg) == cfg.start_epoch_day + 5
    assert cycle_number(date(2024, 1, 6), cfg) == 2


def test_custom_cycle_skipping_shabbos():
    cfg = CycleConfig.from_page_counts(
        "tiny",
        date(2024, 1, 4),
        [3, 2],
        volume_names=["A", "B"],
        no_reading=PredicateRule(_is_shabbos),
    )
    got = []
    for i in range(7):
        daf = page_for(date(2024, 1, 4) + timedelta(days=i), cfg)
        got.append(None if daf is None else _pos(daf))
    assert got == [(0, 1), (0, 2), None, (0, 3), (1, 1), (1, 2), (0, 1)]
    assert cycle_start_for(date(2024, 1, 10), cfg) == epoch_from_date(date(2024, 1, 10))


def test_boundary_skips_forward_past_a_no_reading_day():
    # five pages from Monday end on Friday; Shabbos is skipped
    cfg = CycleConfig.from_page_counts("tiny", date(2024, 1, 1), [5], no_reading=PredicateRule(_is_shabbos))
    assert next_cycle_start(cfg.start_epoch_day, cfg) == epoch_from_date(date(2024, 1, 7))


def test_epoch_day_and_hebrew_date_inputs_agree():
    d = date(2023, 12, 23)
    assert daf_yomi_yerushalmi(d) == daf_yomi_yerushalmi(epoch_from_date(d))
    assert daf_yomi_yerushalmi(d) == daf_yomi_yerushalmi(HebrewDate.from_gregorian(d))


def test_invalid_inputs():
    with pytest.raises(ValueError):
        Volume("empty", 0)
    with pytest.raises(ValueError):
        CycleConfig(name="none", start=date(2024, 1, 1), volumes=())
    with pytest.raises(ValueError):
        CycleConfig.from_page_counts("x", date(2024, 1, 1), [1, 2], volume_names=["only one"])
    with pytest.raises(TypeError):
        page_for("2024-01-01", YERUSHALMI)
    with pytest.raises(ValueError):
        CycleConfig(name="early", start=date(2024, 1, 1), volumes=(Volume("A", 2),), early_cycles=1)
