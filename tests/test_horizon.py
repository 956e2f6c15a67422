# tests/test_horizon.py

import pytest

from astrocore.core.errors import InvalidParameterError
from astrocore.core.time import make_time
from astrocore.core.types import Observer
from astrocore.engines.horizon import horizon, refraction_angle
from astrocore.reference.orientation import sidereal_time


def test_refraction_none_is_zero():
    for alt in (-45.0, -1.0, 0.0, 10.0, 89.0):
        assert refraction_angle("none", alt) == 0.0


def test_refraction_at_horizon():
    # about 29 arcminutes at the geometric horizon
    assert refraction_angle("normal", 0.0) == pytest.approx(0.483, abs=0.005)
    assert refraction_angle("jplhor", 0.0) == refraction_angle("normal", 0.0)


def test_refraction_shrinks_with_altitude():
    vals = [refraction_angle("normal", a) for a in (0.0, 5.0, 20.0, 45.0, 80.0)]
    assert vals == sorted(vals, reverse=True)
    assert abs(refraction_angle("normal", 90.0)) < 1e-4


def test_refraction_below_horizon():
    # clamped at -1 degree, then faded toward the nadir for "normal"
    clamp = refraction_angle("jplhor", -1.0)
    assert refraction_angle("jplhor", -30.0) == clamp
    assert refraction_angle("normal", -30.0) == pytest.approx(clamp * 60.0 / 89.0, rel=1e-12)
    assert refraction_angle("normal", -90.0) == 0.0


def test_refraction_out_of_range_altitude():
    assert refraction_angle("normal", -95.0) == 0.0
    assert refraction_angle("normal", 95.0) == 0.0


def test_refraction_bad_mode():
    with pytest.raises(InvalidParameterError):
        refraction_angle("heavy", 10.0)
    with pytest.raises(InvalidParameterError):
        horizon(make_time(2020, 1, 1), Observer(0, 0), 0.0, 0.0, "heavy")


def test_zenith_and_pole():
    t = make_time(2020, 6, 1, 22, 15)
    obs = Observer(40.0, -75.0, 0.0)
    lst = (sidereal_time(t) + obs.longitude / 15.0) % 24.0

    hor = horizon(t, obs, lst, obs.latitude)
    assert hor.altitude == pytest.approx(90.0, abs=1e-6)

    hor = horizon(t, obs, 3.0, 90.0)
    assert hor.altitude == pytest.approx(obs.latitude, abs=1e-9)
    assert hor.azimuth == pytest.approx(0.0, abs=1e-6) or hor.azimuth == pytest.approx(360.0, abs=1e-6)


def test_meridian_south_and_east():
    t = make_time(2020, 6, 1, 22, 15)
    obs = Observer(40.0, -75.0, 0.0)
    lst = (sidereal_time(t) + obs.longitude / 15.0) % 24.0

    # on the meridian south of the zenith
    hor = horizon(t, obs, lst, 0.0)
    assert hor.azimuth == pytest.approx(180.0, abs=1e-6)
    assert hor.altitude == pytest.approx(50.0, abs=1e-6)

    # six hours east of the meridian, on the equator: rising due east
    hor = horizon(t, obs, (lst + 6.0) % 24.0, 0.0)
    assert hor.azimuth == pytest.approx(90.0, abs=1e-6)
    assert hor.altitude == pytest.approx(0.0, abs=1e-6)


def test_refraction_lifts_and_moves_radec():
    t = make_time(2020, 6, 1, 22, 15)
    obs = Observer(40.0, -75.0, 0.0)
    lst = (sidereal_time(t) + obs.longitude / 15.0) % 24.0
    ra, dec = lst, -45.0         # 5 degrees above the southern horizon

    plain = horizon(t, obs, ra, dec, "none")
    refr = horizon(t, obs, ra, dec, "normal")
    assert (plain.ra, plain.dec) == (ra, dec)
    assert refr.altitude - plain.altitude == pytest.approx(refraction_angle("normal", plain.altitude), abs=0.02)
    assert refr.azimuth == pytest.approx(plain.azimuth, abs=1e-6)
    assert refr.dec > dec
