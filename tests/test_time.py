# tests/test_time.py

import math
from datetime import datetime, timedelta, timezone

import pytest

from astrocore.core.time import (
    Time,
    UtcDateTime,
    add_days,
    current_time,
    make_time,
    time_from_utc,
    utc_from_time,
)


@pytest.mark.parametrize(
    "fields, ut",
    [
        ((2000, 1, 1, 12, 0, 0.0), 0.0),
        ((2022, 1, 1, 12, 0, 0.0), 8036.0),
        ((2022, 1, 1, 18, 0, 0.0), 8036.25),
        ((1970, 12, 13, 23, 45, 12.345), -10610.510273784723),
        ((2022, 1, 1, 18, 59, 59.9999), 8036.291666655093),
    ],
)
def test_make_time_known_values(fields, ut):
    assert make_time(*fields).ut == pytest.approx(ut, abs=1e-9)


@pytest.mark.parametrize(
    "fields, text",
    [
        ((2000, 1, 1, 12, 0, 0.0), "2000-01-01T12:00:00.000Z"),
        ((1970, 12, 13, 23, 45, 12.345), "1970-12-13T23:45:12.345Z"),
        # milliseconds are truncated, never rounded up into the next second
        ((2022, 1, 1, 18, 59, 59.9999), "2022-01-01T18:59:59.999Z"),
    ],
)
def test_iso_string(fields, text):
    assert str(make_time(*fields)) == text


def test_iso_string_from_raw_ut():
    assert str(Time(8126.418466077072)) == "2022-04-01T22:02:35.469Z"


def test_iso_string_extended_years():
    t = make_time(-100, 3, 1)
    assert str(t).startswith("-00100-03-01T00:00:00")
    t = make_time(12000, 1, 1)
    assert str(t).startswith("+12000-01-01")


def test_add_days():
    t = make_time(2000, 1, 1, 12).add_days(1.25)
    assert str(t) == "2000-01-02T18:00:00.000Z"
    assert add_days(make_time(2000, 1, 1, 12), 1.25).ut == t.ut


def test_tt_at_j2000_follows_deltat_table():
    # ΔT interpolated between the 2000-01-01 and 2001-01-01 breakpoints
    dt = 63.8285 + (0.5 / 366.0) * (64.0908 - 63.8285)
    t = Time(0.0)
    assert t.tt == pytest.approx(dt / 86400.0, abs=1e-9)
    assert t.tt - t.ut == pytest.approx(63.83 / 86400.0, abs=1e-6)


def test_from_terrestrial_time_inverts_tt():
    for tt in (-36525.0, -1000.0, 0.0, 8126.418466077072, 10373.141119633277):
        t = Time.from_terrestrial_time(tt)
        assert t.tt == tt
        assert Time(t.ut).tt == pytest.approx(tt, abs=1e-11)


def test_time_equality_ignores_tt():
    a = Time.from_terrestrial_time(1.0)
    b = Time(a.ut)
    assert a.tt == 1.0
    assert a == b
    assert hash(a) == hash(b)


def test_tt_cannot_be_passed_to_constructor():
    with pytest.raises(TypeError):
        Time(1.0, 1.0)
    with pytest.raises(TypeError):
        Time(ut=1.0, tt=1.0)
    assert Time(1.0).tt == pytest.approx(1.0 + 64.0 / 86400.0, abs=1e-5)


def test_utc_round_trip():
    utc = UtcDateTime(2019, 6, 24, 15, 45, 37.0)
    t = time_from_utc(utc)
    back = utc_from_time(t)
    assert (back.year, back.month, back.day, back.hour, back.minute) == (2019, 6, 24, 15, 45)
    assert back.second == pytest.approx(37.0, abs=1e-4)


def test_utc_from_time_before_unix_epoch():
    u = utc_from_time(make_time(1900, 2, 28, 6, 30, 30.0))
    assert (u.year, u.month, u.day, u.hour, u.minute) == (1900, 2, 28, 6, 30)


def test_leap_day_and_century():
    assert str(make_time(2000, 2, 29)) == "2000-02-29T00:00:00.000Z"
    # 1900 is not a leap year: Feb 29 rolls into March 1
    assert str(make_time(1900, 2, 29)) == "1900-03-01T00:00:00.000Z"


def test_datetime_bridge():
    dt = datetime(2021, 7, 4, 3, 2, 1, 500000, tzinfo=timezone.utc)
    t = Time.from_datetime(dt)
    assert str(t) == "2021-07-04T03:02:01.500Z"
    assert abs(t.to_datetime() - dt) < timedelta(milliseconds=1)


def test_datetime_bridge_converts_zones():
    zoned = datetime(2021, 7, 4, 12, 0, tzinfo=timezone(timedelta(hours=8)))
    naive = datetime(2021, 7, 4, 4, 0)
    assert Time.from_datetime(zoned).ut == pytest.approx(Time.from_datetime(naive).ut, abs=1e-12)


def test_current_time_uses_unix_clock():
    assert current_time(0.0).ut == -10957.5
    assert str(current_time(86400.0 * 365)) == "1971-01-01T00:00:00.000Z"
    now = current_time()
    assert math.isfinite(now.tt)
    assert now.ut > 8000.0
