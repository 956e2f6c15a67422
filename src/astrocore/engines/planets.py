"""
astrocore.engines.planets
-------------------------
Sun-relative geometry of the planets: elongation, relative-longitude events,
maximum elongation, visual magnitude and peak brightness.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Tuple

from ..core.errors import (
    EarthNotAllowedError,
    InternalError,
    InvalidBodyError,
    NoConvergeError,
    SearchFailureError,
)
from ..core.time import Time
from ..core.types import ElongationEvent, IlluminationInfo, check_body
from ..core.vectors import Vector, angle_between
from ..reference import astro_args as aa
from ..reference.astro_args import (
    is_superior_planet,
    longitude_offset,
    normalize_longitude,
    synodic_period,
)
from ..reference.lunar import geo_moon
from ..reference.vsop import calc_earth
from .positions import ecliptic, ecliptic_longitude, geo_vector, helio_vector
from .search import search

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Angles relative to the Sun
# ------------------------------------------------------------

def angle_from_sun(body: str, time: Time) -> float:
    """Angle between the Sun and a body as seen from the Earth, degrees."""
    # both vectors are taken without aberration
    sv = geo_vector("Sun", time, "none")
    bv = geo_vector(body, time, "none")
    return angle_between(sv, bv)


def longitude_from_sun(body: str, time: Time) -> float:
    """Geocentric ecliptic longitude of a body minus that of the Sun, in [0, 360)."""
    if body == "Earth":
        raise EarthNotAllowedError("longitude_from_sun is undefined for the Earth")
    sv = geo_vector("Sun", time, "none")
    se = ecliptic(sv)
    bv = geo_vector(body, time, "none")
    be = ecliptic(bv)
    return normalize_longitude(be.elon - se.elon)


def elongation(body: str, time: Time) -> ElongationEvent:
    angle = longitude_from_sun(body, time)
    if angle > 180.0:
        visibility = "morning"
        rlon = 360.0 - angle
    else:
        visibility = "evening"
        rlon = angle
    return ElongationEvent(time, visibility, angle_from_sun(body, time), rlon)


# ------------------------------------------------------------
# Relative longitude (conjunction / opposition family)
# ------------------------------------------------------------

def _rlon_offset(body: str, time: Time, direction: int, target_rel_lon: float) -> float:
    plon = ecliptic_longitude(body, time)
    elon = ecliptic_longitude("Earth", time)
    diff = direction * (elon - plon)
    return longitude_offset(diff - target_rel_lon)


def search_relative_longitude(body: str, target_rel_lon: float, start: Time) -> Time:
    """
    Next time the heliocentric longitudes of the Earth and a planet differ
    by target_rel_lon degrees (0 = inferior conjunction / opposition).
    """
    if body == "Earth":
        raise EarthNotAllowedError("relative longitude of the Earth to itself")
    if body == "Moon":
        raise InvalidBodyError("relative longitude is defined for planets only")
    check_body(body)

    syn = synodic_period(body)
    direction = +1 if is_superior_planet(body) else -1

    # a negative error angle means we are behind the target
    error_angle = _rlon_offset(body, start, direction, target_rel_lon)
    if error_angle > 0:
        error_angle -= 360

    time = start
    for it in range(100):
        day_adjust = (-error_angle / 360.0) * syn
        time = time.add_days(day_adjust)
        if abs(day_adjust) * aa.SECONDS_PER_DAY < 1.0:
            return time

        prev_angle = error_angle
        error_angle = _rlon_offset(body, time, direction, target_rel_lon)
        logger.debug("relative longitude %s iter=%d error=%.6f", body, it, error_angle)

        if abs(prev_angle) < 30.0 and prev_angle != error_angle:
            # adapt the period to the local orbital speeds (Mercury, Mars)
            ratio = prev_angle / (prev_angle - error_angle)
            if 0.5 < ratio < 2.0:
                syn *= ratio

    raise NoConvergeError(f"relative longitude search for {body} did not converge")


def _bracket_window(body: str, start: Time, s1: float, s2: float,
                    upper_inclusive: bool) -> Tuple[Time, float, float]:
    """
    Choose the relative-longitude window [lo, hi] to search next, away from
    the cusps at 0 and 180 degrees.
    """
    plon = ecliptic_longitude(body, start)
    elon = ecliptic_longitude("Earth", start)
    rlon = longitude_offset(plon - elon)

    beyond = (rlon >= +s2) if upper_inclusive else (rlon > +s2)
    if -s1 <= rlon < +s1:
        return start, +s1, +s2
    if beyond or rlon < -s2:
        return start, -s2, -s1
    adjust = -synodic_period(body) / 4.0
    if rlon >= 0.0:
        return start.add_days(adjust), +s1, +s2
    return start.add_days(adjust), -s2, -s1


def _search_extremum(body: str, start: Time, s1: float, s2: float, upper_inclusive: bool,
                     slope: Callable[[Time], float], what: str) -> Time:
    for _ in range(2):
        t_start, rlon_lo, rlon_hi = _bracket_window(body, start, s1, s2, upper_inclusive)
        t1 = search_relative_longitude(body, rlon_lo, t_start)
        t2 = search_relative_longitude(body, rlon_hi, t1)

        if slope(t1) >= 0:
            raise InternalError(f"{what} bracket for {body}: slope at window start is not negative")
        if slope(t2) <= 0:
            raise InternalError(f"{what} bracket for {body}: slope at window end is not positive")

        tx = search(slope, t1, t2, 10.0)
        if tx.tt >= start.tt:
            return tx

        # event already past; the next window starts after t2
        start = t2.add_days(1.0)

    raise SearchFailureError(f"no {what} of {body} found")


# ------------------------------------------------------------
# Maximum elongation (Mercury, Venus)
# ------------------------------------------------------------

_ELONGATION_WINDOWS = {
    "Mercury": (50.0, 85.0),
    "Venus": (40.0, 50.0),
}


def search_max_elongation(body: str, start: Time) -> ElongationEvent:
    """Next greatest elongation of Mercury or Venus after start."""
    try:
        s1, s2 = _ELONGATION_WINDOWS[body]
    except KeyError:
        raise InvalidBodyError("maximum elongation is defined for Mercury and Venus only") from None

    def neg_elong_slope(t: Time) -> float:
        dt = 0.1
        e1 = angle_from_sun(body, t.add_days(-dt / 2.0))
        e2 = angle_from_sun(body, t.add_days(+dt / 2.0))
        return (e1 - e2) / dt

    tx = _search_extremum(body, start, s1, s2, False, neg_elong_slope, "maximum elongation")
    return elongation(body, tx)


# ------------------------------------------------------------
# Visual magnitude
# ------------------------------------------------------------

# c0 + x*(c1 + x*(c2 + x*c3)) with x = phase/100
_MAG_COEFFS = {
    "Mercury": (-0.60, +4.98, -4.88, +3.02),
    "Mars": (-1.52, +1.60, 0.0, 0.0),
    "Jupiter": (-9.40, +0.50, 0.0, 0.0),
    "Uranus": (-7.19, +0.25, 0.0, 0.0),
    "Neptune": (-6.87, 0.0, 0.0, 0.0),
    "Pluto": (-1.00, +4.00, 0.0, 0.0),
}


def _moon_magnitude(phase: float, helio_dist: float, geo_dist: float) -> float:
    rad = phase * aa.DEG2RAD
    rad2 = rad * rad
    rad4 = rad2 * rad2
    mag = -12.717 + 1.49 * abs(rad) + 0.0431 * rad4
    moon_mean_distance_au = 385000.6 / aa.KM_PER_AU
    geo_au = geo_dist / moon_mean_distance_au
    mag += 5 * math.log10(helio_dist * geo_au)
    return mag


def _saturn_magnitude(phase: float, helio_dist: float, geo_dist: float,
                      gc: Vector, time: Time) -> Tuple[float, float]:
    """Magnitude including the rings; returns (mag, ring_tilt_deg)."""
    eclip = ecliptic(gc)

    ir = aa.DEG2RAD * 28.06                                 # ring plane vs ecliptic
    nr = aa.DEG2RAD * (169.51 + (3.82e-5 * time.tt))        # ascending node of the rings

    lat = aa.DEG2RAD * eclip.elat
    lon = aa.DEG2RAD * eclip.elon
    tilt = math.asin(math.sin(lat) * math.cos(ir) - math.cos(lat) * math.sin(ir) * math.sin(lon - nr))
    sin_tilt = math.sin(abs(tilt))

    mag = -9.0 + 0.044 * phase
    mag += sin_tilt * (-2.6 + 1.2 * sin_tilt)
    mag += 5.0 * math.log10(helio_dist * geo_dist)
    return mag, aa.RAD2DEG * tilt


def _visual_magnitude(body: str, phase: float, helio_dist: float, geo_dist: float) -> float:
    if body == "Venus":
        if phase < 163.6:
            c0, c1, c2, c3 = -4.47, +1.03, +0.57, +0.13
        else:
            c0, c1, c2, c3 = 0.98, -1.02, 0.0, 0.0
    else:
        try:
            c0, c1, c2, c3 = _MAG_COEFFS[body]
        except KeyError:
            raise InvalidBodyError(f"no magnitude model for {body!r}") from None

    x = phase / 100
    mag = c0 + x * (c1 + x * (c2 + x * c3))
    mag += 5.0 * math.log10(helio_dist * geo_dist)
    return mag


def illumination(body: str, time: Time) -> IlluminationInfo:
    """Visual magnitude and phase geometry of a body as seen from the Earth."""
    if body == "Earth":
        raise EarthNotAllowedError("illumination of the Earth as seen from itself")
    check_body(body)

    earth = calc_earth(time)

    if body == "Sun":
        gc = Vector(-earth.x, -earth.y, -earth.z, time)
        hc = Vector(0.0, 0.0, 0.0, time)
        # the Sun is a source, not a reflector
        phase = 0.0
    else:
        if body == "Moon":
            gc = geo_moon(time)
            hc = Vector(earth.x + gc.x, earth.y + gc.y, earth.z + gc.z, time)
        else:
            hc = helio_vector(body, time)
            gc = Vector(hc.x - earth.x, hc.y - earth.y, hc.z - earth.z, time)
        phase = angle_between(gc, hc)

    geo_dist = gc.length()
    helio_dist = hc.length()
    ring_tilt = 0.0

    if body == "Sun":
        mag = -0.17 + 5.0 * math.log10(geo_dist / aa.AU_PER_PARSEC)
    elif body == "Moon":
        mag = _moon_magnitude(phase, helio_dist, geo_dist)
    elif body == "Saturn":
        mag, ring_tilt = _saturn_magnitude(phase, helio_dist, geo_dist, gc, time)
    else:
        mag = _visual_magnitude(body, phase, helio_dist, geo_dist)

    return IlluminationInfo(time, mag, phase, helio_dist, ring_tilt)


def search_peak_magnitude(body: str, start: Time) -> IlluminationInfo:
    """Next time Venus reaches its greatest brilliancy."""
    if body != "Venus":
        raise InvalidBodyError("peak magnitude search is defined for Venus only")

    def mag_slope(t: Time) -> float:
        # negative while brightening, positive while fading
        dt = 0.01
        y1 = illumination(body, t.add_days(-dt / 2))
        y2 = illumination(body, t.add_days(+dt / 2))
        return (y2.mag - y1.mag) / dt

    tx = _search_extremum(body, start, 10.0, 30.0, True, mag_slope, "peak magnitude")
    return illumination(body, tx)
