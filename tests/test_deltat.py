# tests/test_deltat.py

import pytest

from astrocore.core.time import Time, make_time
from astrocore.reference import deltat as dt


@pytest.fixture(autouse=True)
def _fresh_table(monkeypatch):
    monkeypatch.delenv("ASTROCORE_DELTAT_TABLE", raising=False)
    dt.reload_deltat_table()
    yield
    monkeypatch.delenv("ASTROCORE_DELTAT_TABLE", raising=False)
    dt.reload_deltat_table()


def test_builtin_table_shape():
    tbl = dt.BUILTIN_TABLE
    assert len(tbl) == 90
    xs = [x for (x, _) in tbl]
    assert all(b > a for a, b in zip(xs, xs[1:]))
    lo, hi = tbl.range
    assert lo == xs[0] and hi == xs[-1]


def test_breakpoints_are_exact():
    assert dt.delta_t(51544.0) == pytest.approx(63.8285, abs=1e-12)
    assert dt.delta_t(51910.0) == pytest.approx(64.0908, abs=1e-12)


def test_linear_between_breakpoints():
    mid = 0.5 * (51544.0 + 51910.0)
    assert dt.delta_t(mid) == pytest.approx(0.5 * (63.8285 + 64.0908), abs=1e-12)


def test_clamped_outside_table():
    lo, hi = dt.BUILTIN_TABLE.range
    first = dt.BUILTIN_TABLE.y[0]
    last = dt.BUILTIN_TABLE.y[-1]
    assert dt.delta_t(lo - 1e5) == first
    assert dt.delta_t(hi + 1e5) == last
    assert dt.delta_t(lo) == first
    assert dt.delta_t(hi) == last


def test_terrestrial_time_offset():
    ut = 8036.0
    assert dt.terrestrial_time(ut) - ut == pytest.approx(dt.delta_t(ut + dt.Y2000_IN_MJD) / 86400.0, abs=1e-15)


def test_env_override_table(tmp_path, monkeypatch):
    p = tmp_path / "dt.csv"
    p.write_text("mjd,delta_t_seconds\n0,100\n100000,100\n", encoding="utf-8")
    monkeypatch.setenv("ASTROCORE_DELTAT_TABLE", str(p))
    tbl = dt.reload_deltat_table()
    assert len(tbl) == 2
    assert dt.delta_t(51544.5) == 100.0
    assert Time(0.0).tt == pytest.approx(100.0 / 86400.0, abs=1e-15)


def test_env_table_is_cached_until_reload(tmp_path, monkeypatch):
    p = tmp_path / "dt.csv"
    p.write_text("mjd,delta_t_seconds\n0,50\n100000,50\n", encoding="utf-8")
    monkeypatch.setenv("ASTROCORE_DELTAT_TABLE", str(p))
    dt.reload_deltat_table()
    assert dt.delta_t(51544.5) == 50.0

    p.write_text("mjd,delta_t_seconds\n0,75\n100000,75\n", encoding="utf-8")
    assert dt.delta_t(51544.5) == 50.0
    dt.reload_deltat_table()
    assert dt.delta_t(51544.5) == 75.0


@pytest.mark.parametrize(
    "content",
    [
        "mjd,delta_t_seconds\n0,1\n",                      # too short
        "mjd,delta_t_seconds\n10,1\n5,2\n",                 # not increasing
        "when,value\n0,1\n1,2\n",                           # wrong columns
    ],
)
def test_bad_env_table_falls_back(tmp_path, monkeypatch, caplog, content):
    p = tmp_path / "bad.csv"
    p.write_text(content, encoding="utf-8")
    monkeypatch.setenv("ASTROCORE_DELTAT_TABLE", str(p))
    with caplog.at_level("WARNING", logger="astrocore.reference.deltat"):
        tbl = dt.reload_deltat_table()
    assert tbl is dt.BUILTIN_TABLE
    assert "Ignoring" in caplog.text


def test_missing_env_table_falls_back(tmp_path, monkeypatch):
    monkeypatch.setenv("ASTROCORE_DELTAT_TABLE", str(tmp_path / "nope.csv"))
    assert dt.reload_deltat_table() is dt.BUILTIN_TABLE


def test_make_time_uses_active_table(tmp_path, monkeypatch):
    before = make_time(2019, 1, 1).tt
    p = tmp_path / "dt.csv"
    p.write_text("mjd,delta_t_seconds\n0,0\n100000,0\n", encoding="utf-8")
    monkeypatch.setenv("ASTROCORE_DELTAT_TABLE", str(p))
    dt.reload_deltat_table()
    t = make_time(2019, 1, 1)
    assert t.tt == t.ut
    assert before > t.tt


def test_module_docstring():
    assert dt.__doc__ is not None
    assert "ASTROCORE_DELTAT_TABLE" in dt.__doc__
