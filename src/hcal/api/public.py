# src/hcal/api/public.py
from __future__ import annotations

import datetime as dt
import logging
import time
from datetime import date
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Path, Query
from pydantic import BaseModel, Field

from hcal.core.config import ApiConfig, CalendarConfig
from hcal.core.gregorian import date_from_epoch
from hcal.core.hebrew_date import HebrewDate
from hcal.core.molad import molad_for
from hcal.core.months import HebrewMonth
from hcal.core.year import is_shmita_year, rosh_hashana_epoch_day, year_length, year_type
from hcal.features.config import (
    DEFAULT_NAMES,
    NameTables,
    holiday_name,
    month_name,
    parsha_name,
    weekday_name,
)
from hcal.features.holidays import holidays_in_year, observance_for
from hcal.features.parsha import parsha_for, special_shabbos, upcoming_parsha, year_type_row
from hcal.features.tekufa import tekufa_for
from hcal.features.yomi import Daf, daf_yomi_bavli, daf_yomi_yerushalmi

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("hcal.api.public")

# Observance properties exposed as boolean flags
FLAG_NAMES = (
    "is_yom_tov",
    "is_yom_tov_assur_bemelacha",
    "is_assur_bemelacha",
    "has_candle_lighting",
    "is_erev_yom_tov",
    "is_erev_yom_tov_sheni",
    "is_aseres_yemei_teshuva",
    "is_chol_hamoed",
    "is_rosh_chodesh",
    "is_erev_rosh_chodesh",
    "is_machar_chodesh",
    "is_shabbos_mevorchim",
    "is_yom_kippur_katan",
    "is_behab",
    "is_taanis",
    "is_taanis_bechoros",
    "is_chanukah",
    "is_purim",
    "is_isru_chag",
    "is_birkas_hachamah",
    "is_shmita_year",
)


# ============================================================
# Response Models
# ============================================================
class HebrewDateOut(BaseModel):
    year: int
    month: int
    month_name: str
    day: int
    leap: bool = Field(default=False, description="true in a 13-month year")


class DafOut(BaseModel):
    volume: str
    volume_index: int
    page: int
    folio: int


class TekufaOut(BaseModel):
    name: str
    hours: float
    clock: str


class DayResponse(BaseModel):
    date: dt.date
    hebrew: HebrewDateOut
    weekday: int
    weekday_name: str
    holiday: Optional[str] = None
    holiday_name: Optional[str] = None
    parsha: Optional[str] = None
    parsha_name: Optional[str] = None
    upcoming_parsha: str
    special_shabbos: Optional[str] = None
    day_of_omer: Optional[int] = None
    day_of_chanukah: Optional[int] = None
    flags: Dict[str, bool] = Field(default_factory=dict)
    daf_bavli: Optional[DafOut] = None
    daf_yerushalmi: Optional[DafOut] = None
    tekufa: Optional[TekufaOut] = None


class RangeResponse(BaseModel):
    start: dt.date
    end: dt.date
    days: List[DayResponse]


class HolidayOccurrence(BaseModel):
    date: dt.date
    hebrew: HebrewDateOut
    holiday: str
    name: str


class YearResponse(BaseModel):
    year: int
    leap: bool
    length: int
    year_type: str
    rosh_hashana: dt.date
    parsha_layout: int
    shmita: bool
    holidays: List[HolidayOccurrence]


class MoladResponse(BaseModel):
    year: int
    month: int
    month_name: str
    hours: int
    minutes: int
    chalakim: int
    weekday: int
    civil_date: dt.date
    text: str


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s.strip())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"invalid date (expected YYYY-MM-DD): {s!r}") from e


def _parse_date_any(x: str | date) -> date:
    if isinstance(x, date):
        return x
    return _parse_iso_date(str(x))


def _parse_month(raw: str | int) -> HebrewMonth:
    s = str(raw).strip()
    try:
        if s.isdigit():
            return HebrewMonth(int(s))
        return HebrewMonth[s.upper().replace(" ", "_")]
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"unknown Hebrew month: {raw!r}") from e


@lru_cache(maxsize=1)
def _api_config() -> ApiConfig:
    return ApiConfig.from_env()


def _calendar_config(
    in_israel: Optional[bool],
    modern: Optional[bool],
    mukaf_choma: Optional[bool],
) -> CalendarConfig:
    return _api_config().calendar.with_overrides(
        in_israel=in_israel,
        use_modern_holidays=modern,
        is_mukaf_choma=mukaf_choma,
    )


def _hebrew_out(h: HebrewDate, names: NameTables) -> Dict[str, Any]:
    return {
        "year": h.year,
        "month": int(h.month),
        "month_name": month_name(h.year, h.month, names),
        "day": h.day,
        "leap": h.is_leap_year,
    }


def _daf_out(daf: Optional[Daf]) -> Optional[Dict[str, Any]]:
    if daf is None:
        return None
    return {
        "volume": daf.name,
        "volume_index": daf.volume_index,
        "page": daf.page,
        "folio": daf.folio,
    }


def _day_payload(h: HebrewDate, config: CalendarConfig, names: NameTables) -> Dict[str, Any]:
    obs = observance_for(h, config)
    parsha = parsha_for(h, config)
    special = special_shabbos(h, config)
    tekufa = tekufa_for(h)
    clock = None
    if tekufa is not None:
        hh, mm = tekufa.clock_time
        clock = {"name": tekufa.name, "hours": round(tekufa.hours, 4), "clock": f"{hh:02d}:{mm:02d}"}

    return {
        "date": h.to_gregorian().isoformat(),
        "hebrew": _hebrew_out(h, names),
        "weekday": int(obs.weekday),
        "weekday_name": weekday_name(obs.weekday, names),
        "holiday": None if obs.holiday is None else obs.holiday.name,
        "holiday_name": holiday_name(obs.holiday, names),
        "parsha": None if parsha is None else parsha.name,
        "parsha_name": parsha_name(parsha, names),
        "upcoming_parsha": upcoming_parsha(h, config).name,
        "special_shabbos": None if special is None else special.name,
        "day_of_omer": obs.day_of_omer,
        "day_of_chanukah": obs.day_of_chanukah,
        "flags": {name: bool(getattr(obs, name)) for name in FLAG_NAMES},
        "daf_bavli": _daf_out(daf_yomi_bavli(h)),
        "daf_yerushalmi": _daf_out(daf_yomi_yerushalmi(h)),
        "tekufa": clock,
    }


def get_calendar_day(
    date_: str | date,
    *,
    in_israel: Optional[bool] = None,
    modern: Optional[bool] = None,
    mukaf_choma: Optional[bool] = None,
    names: NameTables = DEFAULT_NAMES,
) -> dict:
    d = _parse_date_any(date_)
    config = _calendar_config(in_israel, modern, mukaf_choma)
    return _day_payload(HebrewDate.from_gregorian(d), config, names)


def get_calendar_range(
    start: str | date,
    end: str | date,
    *,
    in_israel: Optional[bool] = None,
    modern: Optional[bool] = None,
    mukaf_choma: Optional[bool] = None,
    names: NameTables = DEFAULT_NAMES,
) -> dict:
    s = _parse_date_any(start)
    e = _parse_date_any(end)
    if e < s:
        raise HTTPException(status_code=422, detail="end must be >= start")

    config = _calendar_config(in_israel, modern, mukaf_choma)
    days: List[Dict[str, Any]] = []
    h = HebrewDate.from_gregorian(s)
    for _ in range((e - s).days + 1):
        days.append(_day_payload(h, config, names))
        h = h.advance(1)
    return {"start": s.isoformat(), "end": e.isoformat(), "days": days}


def get_hebrew_day(
    year: int,
    month: str | int,
    day: int,
    *,
    in_israel: Optional[bool] = None,
    modern: Optional[bool] = None,
    mukaf_choma: Optional[bool] = None,
    names: NameTables = DEFAULT_NAMES,
) -> dict:
    m = _parse_month(month)
    try:
        h = HebrewDate(year, m, day)
        h.to_gregorian()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    config = _calendar_config(in_israel, modern, mukaf_choma)
    return _day_payload(h, config, names)


def get_year_info(
    year: int,
    *,
    in_israel: Optional[bool] = None,
    modern: Optional[bool] = None,
    mukaf_choma: Optional[bool] = None,
    names: NameTables = DEFAULT_NAMES,
) -> dict:
    if year < 1:
        raise HTTPException(status_code=422, detail=f"Hebrew year must be >= 1 (got {year})")
    config = _calendar_config(in_israel, modern, mukaf_choma)
    try:
        rosh_hashana = date_from_epoch(rosh_hashana_epoch_day(year))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    occurrences = [
        {
            "date": h.to_gregorian().isoformat(),
            "hebrew": _hebrew_out(h, names),
            "holiday": holiday.name,
            "name": holiday_name(holiday, names),
        }
        for h, holiday in holidays_in_year(year, config)
    ]
    return {
        "year": year,
        "leap": HebrewDate(year, HebrewMonth.TISHREI, 1).is_leap_year,
        "length": year_length(year),
        "year_type": year_type(year).name,
        "rosh_hashana": rosh_hashana.isoformat(),
        "parsha_layout": year_type_row(year, config),
        "shmita": is_shmita_year(year),
        "holidays": occurrences,
    }


def get_molad(year: int, month: str | int, *, names: NameTables = DEFAULT_NAMES) -> dict:
    m = _parse_month(month)
    try:
        HebrewDate(year, m, 1)
        molad = molad_for(year, m)
        civil = molad.civil_date
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {
        "year": molad.year,
        "month": int(molad.month),
        "month_name": month_name(year, molad.month, names),
        "hours": molad.hours,
        "minutes": molad.minutes,
        "chalakim": molad.chalakim,
        "weekday": molad.weekday,
        "civil_date": civil.isoformat(),
        "text": str(molad),
    }


# ============================================================
# Endpoints
# ============================================================
@router.get("/day", response_model=DayResponse)
def get_day(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    in_israel: Optional[bool] = Query(None),
    modern: Optional[bool] = Query(None, description="include Israeli modern holidays"),
    mukaf_choma: Optional[bool] = Query(None, description="walled city (Shushan Purim)"),
    timing: bool = Query(False, description="log timing (diagnostics)"),
) -> DayResponse:
    t0 = time.perf_counter()
    payload = get_calendar_day(date_str, in_israel=in_israel, modern=modern, mukaf_choma=mukaf_choma)
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /day date=%s total=%.3fs", date_str, t1 - t0)

    return DayResponse(**payload)


@router.get("/range", response_model=RangeResponse)
def get_range(
    start_str: str = Query(..., alias="start", description="YYYY-MM-DD"),
    end_str: str = Query(..., alias="end", description="YYYY-MM-DD"),
    in_israel: Optional[bool] = Query(None),
    modern: Optional[bool] = Query(None),
    mukaf_choma: Optional[bool] = Query(None),
    limit_days: Optional[int] = Query(None, ge=1, le=2000, description="maximum number of days (default 370)"),
    timing: bool = Query(False, description="log timing (diagnostics)"),
) -> RangeResponse:
    start = _parse_iso_date(start_str)
    end = _parse_iso_date(end_str)
    if end < start:
        raise HTTPException(status_code=422, detail="end must be >= start")

    cfg = _api_config()
    limit = min(limit_days or cfg.default_limit_days, cfg.max_limit_days)
    days_count = (end - start).days + 1
    if days_count > limit:
        raise HTTPException(status_code=422, detail=f"range too large: {days_count} days (limit_days={limit})")

    t0 = time.perf_counter()
    payload = get_calendar_range(start, end, in_israel=in_israel, modern=modern, mukaf_choma=mukaf_choma)
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /range start=%s end=%s days=%d total=%.3fs", start, end, days_count, t1 - t0)

    return RangeResponse(**payload)


@router.get("/hebrew", response_model=DayResponse)
def get_hebrew(
    year: int = Query(..., ge=1),
    month: str = Query(..., description="1..13 (Tishrei=1) or name, e.g. NISSAN"),
    day: int = Query(..., ge=1, le=30),
    in_israel: Optional[bool] = Query(None),
    modern: Optional[bool] = Query(None),
    mukaf_choma: Optional[bool] = Query(None),
) -> DayResponse:
    payload = get_hebrew_day(year, month, day, in_israel=in_israel, modern=modern, mukaf_choma=mukaf_choma)
    return DayResponse(**payload)


@router.get("/year/{year}", response_model=YearResponse)
def get_year(
    year: int = Path(..., ge=1),
    in_israel: Optional[bool] = Query(None),
    modern: Optional[bool] = Query(None),
    mukaf_choma: Optional[bool] = Query(None),
) -> YearResponse:
    return YearResponse(**get_year_info(year, in_israel=in_israel, modern=modern, mukaf_choma=mukaf_choma))


@router.get("/molad", response_model=MoladResponse)
def get_molad_endpoint(
    year: int = Query(..., ge=1),
    month: str = Query(..., description="1..13 (Tishrei=1) or name, e.g. TEVES"),
) -> MoladResponse:
    return MoladResponse(**get_molad(year, month))
