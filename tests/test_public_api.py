from __future__ import annotations

from datetime import date

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from hcal.api.app import app
from hcal.api.public import get_calendar_day, get_calendar_range, get_year_info


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


def test_calendar_day_function():
    res = get_calendar_day("2023-12-23")
    assert res["hebrew"] == {"year": 5784, "month": 4, "month_name": "Teves", "day": 11, "leap": True}
    assert res["weekday"] == 7
    assert res["weekday_name"] == "Shabbos"
    assert res["parsha"] == "VAYIGASH"
    assert res["parsha_name"] == "Vayigash"
    assert res["upcoming_parsha"] == "VAYECHI"
    assert res["holiday"] is None
    assert res["flags"]["is_assur_bemelacha"] is True
    assert res["daf_yerushalmi"] is not None


def test_calendar_day_accepts_date_and_rejects_garbage():
    assert get_calendar_day(date(2024, 4, 23))["holiday"] == "PESACH"
    with pytest.raises(HTTPException) as e:
        get_calendar_day("2024-02-30")
    assert e.value.status_code == 422


def test_calendar_range_function():
    res = get_calendar_range("2023-12-08", "2023-12-15")
    assert [d["day_of_chanukah"] for d in res["days"]] == list(range(1, 9))
    assert {d["holiday"] for d in res["days"]} == {"CHANUKAH"}


def test_year_info_function():
    info = get_year_info(5784)
    assert info["leap"] is True
    assert info["length"] == 383
    assert info["year_type"] == "DEFICIENT"
    assert info["rosh_hashana"] == "2023-09-16"
    yk = [h for h in info["holidays"] if h["holiday"] == "YOM_KIPPUR"]
    assert [h["date"] for h in yk] == ["2023-09-25"]
    assert yk[0]["name"] == "Yom Kippur"


def test_day_endpoint(client: TestClient):
    r = client.get("/api/v1/day", params={"date": "2024-04-24"})
    assert r.status_code == 200
    assert r.json()["holiday"] == "PESACH"

    r = client.get("/api/v1/day", params={"date": "2024-04-24", "in_israel": "true"})
    assert r.status_code == 200
    body = r.json()
    assert body["holiday"] == "CHOL_HAMOED_PESACH"
    assert body["flags"]["is_chol_hamoed"] is True
    assert body["day_of_omer"] == 1


def test_day_endpoint_bad_date(client: TestClient):
    r = client.get("/api/v1/day", params={"date": "not-a-date"})
    assert r.status_code == 422


def test_modern_and_walled_city_flags(client: TestClient):
    r = client.get("/api/v1/day", params={"date": "2024-05-14", "modern": "true"})
    assert r.json()["holiday"] == "YOM_HAATZMAUT"

    r = client.get("/api/v1/day", params={"date": "2023-03-08", "mukaf_choma": "true"})
    body = r.json()
    assert body["holiday"] == "SHUSHAN_PURIM"
    assert body["flags"]["is_purim"] is True


def test_range_endpoint(client: TestClient):
    r = client.get("/api/v1/range", params={"start": "2023-09-16", "end": "2023-09-25"})
    assert r.status_code == 200
    days = r.json()["days"]
    assert len(days) == 10
    assert days[-1]["holiday"] == "YOM_KIPPUR"
    assert days[-1]["daf_bavli"] is None


def test_range_endpoint_limits(client: TestClient):
    r = client.get("/api/v1/range", params={"start": "2024-01-01", "end": "2024-01-10", "limit_days": 5})
    assert r.status_code == 422
    r = client.get("/api/v1/range", params={"start": "2024-01-10", "end": "2024-01-01"})
    assert r.status_code == 422
    r = client.get("/api/v1/range", params={"start": "2024-01-01", "end": "2024-01-02", "limit_days": 0})
    assert r.status_code == 422


def test_hebrew_endpoint(client: TestClient):
    r = client.get("/api/v1/hebrew", params={"year": 5784, "month": "NISSAN", "day": 15})
    assert r.status_code == 200
    assert r.json()["date"] == "2024-04-23"

    r = client.get("/api/v1/hebrew", params={"year": 5784, "month": 8, "day": 15})
    assert r.json()["date"] == "2024-04-23"

    r = client.get("/api/v1/hebrew", params={"year": 5783, "month": "ADAR_II", "day": 1})
    assert r.status_code == 422
    r = client.get("/api/v1/hebrew", params={"year": 5783, "month": "SHMADAR", "day": 1})
    assert r.status_code == 422


def test_year_endpoint(client: TestClient):
    r = client.get("/api/v1/year/5783")
    assert r.status_code == 200
    body = r.json()
    assert body["leap"] is False
    assert body["length"] == 355
    assert body["shmita"] is False

    assert client.get("/api/v1/year/0").status_code == 422


def test_molad_endpoint(client: TestClient):
    r = client.get("/api/v1/molad", params={"year": 5784, "month": "TEVES"})
    assert r.status_code == 200
    body = r.json()
    assert (body["hours"], body["minutes"], body["chalakim"]) == (20, 1, 3)
    assert body["civil_date"] == "2023-12-12"
    assert body["text"] == "The molad is at 20 hours, 1 minutes and 3 Chalakim"
