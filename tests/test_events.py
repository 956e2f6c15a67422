# tests/test_events.py

import pytest

from astrocore.core.errors import (
    EarthNotAllowedError,
    InternalError,
    InvalidBodyError,
    InvalidParameterError,
    WrongMoonQuarterError,
)
from astrocore.core.time import make_time
from astrocore.core.types import Apsis, MoonQuarter, Observer
from astrocore.engines import moon, planets, riseset, seasons
from astrocore.engines.horizon import horizon
from astrocore.engines.positions import equator
from astrocore.reference.astro_args import synodic_period

MINUTE = 1.0 / 1440.0


def assert_near(t, expected, tol_days):
    assert t.ut == pytest.approx(expected.ut, abs=tol_days), f"{t} vs {expected}"


# ------------------------------------------------------------
# Seasons
# ------------------------------------------------------------

def test_seasons_2019():
    s = seasons.seasons(2019)
    assert_near(s.mar_equinox, make_time(2019, 3, 20, 21, 58), 3 * MINUTE)
    assert_near(s.jun_solstice, make_time(2019, 6, 21, 15, 54), 3 * MINUTE)
    assert_near(s.sep_equinox, make_time(2019, 9, 23, 7, 50), 3 * MINUTE)
    assert_near(s.dec_solstice, make_time(2019, 12, 22, 4, 19), 3 * MINUTE)


def test_search_sun_longitude_outside_window():
    assert seasons.search_sun_longitude(0.0, make_time(2019, 1, 1), 10.0) is None


def test_search_sun_longitude_any_target():
    t = seasons.search_sun_longitude(45.0, make_time(2019, 4, 1), 60.0)
    assert t is not None
    # cross-quarter day in early May
    assert make_time(2019, 5, 4).ut < t.ut < make_time(2019, 5, 7).ut


# ------------------------------------------------------------
# Moon phases
# ------------------------------------------------------------

QUARTERS_2019 = [
    (0, make_time(2019, 1, 6, 1, 28)),
    (1, make_time(2019, 1, 14, 6, 45)),
    (2, make_time(2019, 1, 21, 5, 16)),
    (3, make_time(2019, 1, 27, 21, 10)),
    (0, make_time(2019, 2, 4, 21, 4)),
]


def test_moon_quarters_january_2019():
    mq = moon.search_moon_quarter(make_time(2019, 1, 1))
    for i, (quarter, when) in enumerate(QUARTERS_2019):
        if i > 0:
            mq = moon.next_moon_quarter(mq)
        assert mq.quarter == quarter
        assert_near(mq.time, when, 3 * MINUTE)
    assert mq.name == "New Moon"


def test_moon_phase_values():
    assert moon.moon_phase(make_time(2019, 1, 21, 5, 16)) == pytest.approx(180.0, abs=0.1)
    p = moon.moon_phase(make_time(2019, 1, 6, 1, 28))
    assert min(p, 360.0 - p) < 0.1


def test_search_moon_phase_beyond_limit():
    # just after new moon the next one is ~29 days away
    assert moon.search_moon_phase(0.0, make_time(2019, 1, 7), 5.0) is None


def test_search_moon_phase_clipped_limit():
    t = moon.search_moon_phase(180.0, make_time(2019, 1, 7), 30.0)
    assert_near(t, make_time(2019, 1, 21, 5, 16), 3 * MINUTE)


def test_next_moon_quarter_detects_mismatch():
    bogus = MoonQuarter(2, make_time(2019, 1, 6, 1, 28))
    with pytest.raises(WrongMoonQuarterError):
        moon.next_moon_quarter(bogus)


# ------------------------------------------------------------
# Lunar apsides
# ------------------------------------------------------------

def test_lunar_apsides_january_2019():
    a = moon.search_lunar_apsis(make_time(2019, 1, 1))
    assert a.kind == "apocenter"
    assert_near(a.time, make_time(2019, 1, 9, 4, 28), 0.05)
    assert a.dist_km == pytest.approx(406117.0, abs=100.0)

    p = moon.next_lunar_apsis(a)
    assert p.kind == "pericenter"
    assert_near(p.time, make_time(2019, 1, 21, 19, 59), 0.05)
    assert p.dist_km == pytest.approx(357344.0, abs=100.0)
    assert p.dist_au == pytest.approx(moon.moon_distance(p.time), abs=1e-15)


def test_next_lunar_apsis_bad_kind():
    a = moon.search_lunar_apsis(make_time(2019, 1, 1))
    with pytest.raises(InvalidParameterError):
        moon.next_lunar_apsis(Apsis(a.time, "perihelion", a.dist_au, a.dist_km))


def test_next_lunar_apsis_wrong_sequence():
    a = moon.search_lunar_apsis(make_time(2019, 1, 1))
    mislabelled = Apsis(a.time, "pericenter", a.dist_au, a.dist_km)
    with pytest.raises(InternalError):
        moon.next_lunar_apsis(mislabelled)


# ------------------------------------------------------------
# Planets relative to the Sun
# ------------------------------------------------------------

def test_synodic_periods():
    assert synodic_period("Moon") == 29.530588
    assert synodic_period("Venus") == pytest.approx(583.9, abs=0.5)
    assert synodic_period("Mars") == pytest.approx(779.9, abs=0.5)
    with pytest.raises(EarthNotAllowedError):
        synodic_period("Earth")


def test_mars_opposition_2020():
    t = planets.search_relative_longitude("Mars", 0.0, make_time(2020, 1, 1))
    assert_near(t, make_time(2020, 10, 13, 23, 20), 0.1)
    assert planets.longitude_from_sun("Mars", t) == pytest.approx(180.0, abs=0.5)


def test_relative_longitude_bad_bodies():
    t = make_time(2020, 1, 1)
    with pytest.raises(EarthNotAllowedError):
        planets.search_relative_longitude("Earth", 0.0, t)
    with pytest.raises(InvalidBodyError):
        planets.search_relative_longitude("Moon", 0.0, t)


def test_elongation_record():
    t = make_time(2020, 3, 24, 22)
    e = planets.elongation("Venus", t)
    assert e.visibility == "evening"
    assert e.elongation == pytest.approx(46.1, abs=0.2)
    # east of the Sun, so the folded longitude equals the raw one
    assert e.relative_longitude == pytest.approx(planets.longitude_from_sun("Venus", t), abs=1e-12)
    assert 0.0 <= e.relative_longitude <= 180.0
    with pytest.raises(EarthNotAllowedError):
        planets.elongation("Earth", t)


def test_max_elongation_venus_2020():
    e = planets.search_max_elongation("Venus", make_time(2020, 1, 1))
    assert_near(e.time, make_time(2020, 3, 24, 22), 0.2)
    assert e.visibility == "evening"
    assert e.elongation == pytest.approx(46.08, abs=0.1)


def test_max_elongation_mercury_2019():
    e = planets.search_max_elongation("Mercury", make_time(2019, 1, 1))
    assert_near(e.time, make_time(2019, 2, 27, 1), 0.2)
    assert e.visibility == "evening"
    assert e.elongation == pytest.approx(18.1, abs=0.2)

    e = planets.search_max_elongation("Mercury", e.time.add_days(1))
    assert_near(e.time, make_time(2019, 4, 11, 20), 0.3)
    assert e.visibility == "morning"


def test_max_elongation_outer_planet_rejected():
    with pytest.raises(InvalidBodyError):
        planets.search_max_elongation("Mars", make_time(2020, 1, 1))


def test_angle_from_sun():
    t = make_time(2020, 10, 13, 23, 20)
    assert planets.angle_from_sun("Mars", t) == pytest.approx(180.0, abs=3.0)
    assert planets.angle_from_sun("Sun", t) == pytest.approx(0.0, abs=1e-3)


# ------------------------------------------------------------
# Illumination
# ------------------------------------------------------------

def test_sun_magnitude():
    info = illumination_at("Sun", make_time(2019, 7, 4))
    assert -26.9 < info.mag < -26.6
    assert info.phase_angle == 0.0
    assert info.helio_dist == 0.0


def test_full_moon_illumination():
    info = illumination_at("Moon", make_time(2019, 1, 21, 5, 16))
    assert info.mag < -12.5
    assert info.phase_fraction > 0.99
    assert info.helio_dist == pytest.approx(0.984, abs=0.01)


def test_saturn_ring_tilt():
    info = illumination_at("Saturn", make_time(2019, 7, 9))
    assert 20.0 < abs(info.ring_tilt) < 27.0
    assert -0.5 < info.mag < 0.5


def test_pluto_magnitude():
    info = illumination_at("Pluto", make_time(2019, 7, 14))
    assert 13.8 < info.mag < 14.8


def test_illumination_rejects_barycentres_and_earth():
    t = make_time(2019, 7, 14)
    with pytest.raises(InvalidBodyError):
        planets.illumination("EMB", t)
    with pytest.raises(InvalidBodyError):
        planets.illumination("SSB", t)
    with pytest.raises(EarthNotAllowedError):
        planets.illumination("Earth", t)


def test_venus_peak_magnitude_2020():
    info = planets.search_peak_magnitude("Venus", make_time(2020, 1, 1))
    assert_near(info.time, make_time(2020, 4, 28), 4.0)
    assert -4.9 < info.mag < -4.3
    with pytest.raises(InvalidBodyError):
        planets.search_peak_magnitude("Mars", make_time(2020, 1, 1))


def illumination_at(body, t):
    info = planets.illumination(body, t)
    assert info.time == t
    return info


# ------------------------------------------------------------
# Rise, set and culmination
# ------------------------------------------------------------

GREENWICH = Observer(51.4769, 0.0, 0.0)


def test_sun_rise_set_greenwich_midsummer():
    start = make_time(2019, 6, 21)
    rise = riseset.search_rise_set("Sun", GREENWICH, "rise", start, 1.0)
    sett = riseset.search_rise_set("Sun", GREENWICH, "set", start, 1.0)
    assert_near(rise, make_time(2019, 6, 21, 3, 43), 2 * MINUTE)
    assert_near(sett, make_time(2019, 6, 21, 20, 21), 2 * MINUTE)

    # the upper limb touches the refracted horizon: centre ~50' below it
    eq = equator("Sun", rise, GREENWICH, "of-date")
    hor = horizon(rise, GREENWICH, eq.ra, eq.dec, "none")
    assert hor.altitude == pytest.approx(-0.833, abs=0.02)


def test_sun_culmination_greenwich():
    evt = riseset.search_hour_angle("Sun", GREENWICH, 0.0, make_time(2019, 6, 21))
    assert_near(evt.time, make_time(2019, 6, 21, 12, 1, 47), 1 * MINUTE)
    assert evt.hor.altitude == pytest.approx(90.0 - 51.4769 + 23.44, abs=0.05)
    assert evt.hor.azimuth == pytest.approx(180.0, abs=0.01)


def test_lower_culmination_follows_upper():
    up = riseset.search_hour_angle("Moon", GREENWICH, 0.0, make_time(2019, 6, 21))
    low = riseset.search_hour_angle("Moon", GREENWICH, 12.0, up.time)
    # half a lunar day later
    assert 0.45 < low.time.ut - up.time.ut < 0.6
    assert low.hor.altitude < up.hor.altitude


def test_midnight_sun_has_no_set():
    obs = Observer(80.0, 15.0, 0.0)
    assert riseset.search_rise_set("Sun", obs, "set", make_time(2019, 6, 15), 5.0) is None


def test_moon_rise_set_order():
    start = make_time(2019, 6, 1)
    rise = riseset.search_rise_set("Moon", GREENWICH, "rise", start, 2.0)
    assert rise is not None
    sett = riseset.search_rise_set("Moon", GREENWICH, "set", rise, 2.0)
    assert sett is not None
    assert rise.ut < sett.ut < rise.ut + 1.1


def test_rise_set_bad_direction():
    with pytest.raises(InvalidParameterError):
        riseset.search_rise_set("Sun", GREENWICH, "up", make_time(2019, 6, 21), 1.0)
