# tests/test_lunar.py

import math

import pytest

from astrocore.core.time import make_time
from astrocore.reference import lunar
from astrocore.reference.astro_args import KM_PER_AU


def test_add_the_is_angle_addition():
    a, b = 0.7, -1.9
    c, s = lunar._add_the(math.cos(a), math.sin(a), math.cos(b), math.sin(b))
    assert c == pytest.approx(math.cos(a + b), abs=1e-15)
    assert s == pytest.approx(math.sin(a + b), abs=1e-15)


def test_context_harmonics_match_trig():
    ctx = lunar._MoonContext(0.19)
    # co/si hold (scaled) cos/sin of k times each argument at column k+6
    for i in range(1, 5):
        c1 = ctx.co[7][i]
        s1 = ctx.si[7][i]
        fac = math.hypot(c1, s1)
        base = math.atan2(s1, c1)
        assert ctx.co[6][i] == 1.0 and ctx.si[6][i] == 0.0
        for k in (1, 2, 3):
            assert ctx.co[k + 6][i] == pytest.approx(fac ** k * math.cos(k * base), abs=1e-12)
            assert ctx.si[k + 6][i] == pytest.approx(fac ** k * math.sin(k * base), abs=1e-12)
            assert ctx.co[6 - k][i] == ctx.co[6 + k][i]
            assert ctx.si[6 - k][i] == -ctx.si[6 + k][i]


def test_ecliptic_geo_moon_sanity():
    t = make_time(2019, 6, 24, 15, 45, 37.0)
    m = lunar.ecliptic_geo_moon(t)
    assert math.degrees(m.lat_rad) == pytest.approx(-4.851798346972171, abs=1e-3)
    assert math.degrees(m.lon_rad) == pytest.approx(354.5951298193645, abs=1e-2)
    assert m.dist_au == pytest.approx(0.0026968810499258147, rel=1e-6)


def test_geo_moon_vector():
    t = make_time(2019, 6, 24, 15, 45, 37.0)
    v = lunar.geo_moon(t)
    assert v.x == pytest.approx(+0.002674037026701135, abs=5e-7)
    assert v.y == pytest.approx(-0.0001531610316600666, abs=5e-7)
    assert v.z == pytest.approx(-0.0003150159927069429, abs=5e-7)
    assert v.t is t


def test_moon_distance_range():
    # the Moon stays between about 356,000 and 407,000 km
    t = make_time(2000, 1, 1)
    for i in range(0, 400, 3):
        km = lunar.ecliptic_geo_moon(t.add_days(i)).dist_au * KM_PER_AU
        assert 355_000.0 < km < 408_000.0


def test_longitude_normalized():
    t = make_time(1980, 1, 1)
    for i in range(0, 60):
        lon = lunar.ecliptic_geo_moon(t.add_days(i)).lon_rad
        assert 0.0 <= lon < 2.0 * math.pi
