# tests/test_search.py

import logging
import math

import pytest

from astrocore.core.errors import NoConvergeError, SearchFailureError
from astrocore.core.time import Time
from astrocore.engines import search as srch

ONE_SECOND = 1.0 / 86400.0


def test_quad_interp_line():
    x, t, df_dt = srch.quad_interp(10.0, 2.0, -1.0, 0.0, 1.0)
    assert (x, t) == (0.0, 10.0)
    assert df_dt == 0.5


def test_quad_interp_flat_line_has_no_root():
    assert srch.quad_interp(0.0, 1.0, 2.0, 2.0, 2.0) is None


def test_quad_interp_single_root():
    # f(x) = x^2 + x - 0.75 has roots 0.5 and -1.5
    x, t, df_dt = srch.quad_interp(10.0, 2.0, -0.75, -0.75, 1.25)
    assert x == pytest.approx(0.5, abs=1e-15)
    assert t == pytest.approx(11.0, abs=1e-15)
    assert df_dt == pytest.approx(1.0, abs=1e-15)


def test_quad_interp_two_roots_rejected():
    # f(x) = x^2 - 0.25: roots at +/-0.5 both inside the window
    assert srch.quad_interp(0.0, 1.0, 0.75, -0.25, 0.75) is None


def test_quad_interp_no_real_root():
    assert srch.quad_interp(0.0, 1.0, 2.0, 1.0, 2.0) is None


def test_search_linear():
    t = srch.search(lambda t: t.ut - 5.3, Time(0.0), Time(10.0), 1.0)
    assert t.ut == pytest.approx(5.3, abs=ONE_SECOND)


def test_search_sine_ascending_crossing():
    def f(t):
        return math.sin(2.0 * math.pi * t.ut / 10.0)

    t = srch.search(f, Time(9.3), Time(11.0), 0.1)
    assert t.ut == pytest.approx(10.0, abs=0.2 * ONE_SECOND)


def test_search_negative_everywhere_fails():
    with pytest.raises(SearchFailureError):
        srch.search(lambda t: -1.0 - (t.ut - 5.0) ** 2, Time(0.0), Time(10.0), 1.0)


def test_search_no_crossing_fails():
    with pytest.raises(SearchFailureError):
        srch.search(lambda t: (t.ut - 5.0) ** 2 + 1.0, Time(0.0), Time(10.0), 1.0)


def test_search_iteration_limit(monkeypatch):
    monkeypatch.setattr(srch, "ITER_LIMIT", 1)

    def f(t):
        return math.sin(2.0 * math.pi * t.ut / 10.0)

    with pytest.raises(NoConvergeError):
        srch.search(f, Time(9.3), Time(11.0), 0.001)


def test_search_logs_convergence(caplog):
    with caplog.at_level(logging.DEBUG, logger="astrocore.engines.search"):
        srch.search(lambda t: t.ut - 5.3, Time(0.0), Time(10.0), 1.0)
    assert "search converged" in caplog.text
