"""
astrocore.engines.positions
---------------------------
Heliocentric and geocentric vectors of Solar System bodies, light-time
correction, equatorial (RA/Dec) and ecliptic coordinates.
"""
from __future__ import annotations

import logging
import math

from ..core.errors import InvalidBodyError, NoConvergeError
from ..core.time import Time
from ..core.types import (
    ABERRATIONS,
    EQUATOR_EPOCHS,
    Aberration,
    Ecliptic,
    Equatorial,
    EquatorEpoch,
    Observer,
    check_body,
    check_choice,
)
from ..core.vectors import Vector
from ..reference import astro_args as aa
from ..reference.lunar import geo_moon
from ..reference.orientation import (
    e_tilt,
    geo_pos,
    nutation,
    precession,
    vector_to_radec,
)
from ..reference.pluto import calc_pluto
from ..reference.vsop import VSOP_BODIES, calc_earth, calc_vsop

logger = logging.getLogger(__name__)

OB2000 = 0.40909260059599012    # mean obliquity of the J2000 ecliptic, radians

# Outer planets whose pull moves the Sun about the barycenter.
_SSB_PLANETS = (
    ("Jupiter", aa.JUPITER_GM),
    ("Saturn", aa.SATURN_GM),
    ("Uranus", aa.URANUS_GM),
    ("Neptune", aa.NEPTUNE_GM),
)


def _origin(time: Time) -> Vector:
    return Vector(0.0, 0.0, 0.0, time)


def _emb_offset(time: Time) -> Vector:
    """Geocentric position of the Earth/Moon barycenter."""
    return geo_moon(time) / (1.0 + aa.EARTH_MOON_MASS_RATIO)


def _ssb(time: Time) -> Vector:
    """Heliocentric position of the Solar System barycenter."""
    x = y = z = 0.0
    for body, gm in _SSB_PLANETS:
        shift = gm / (gm + aa.SUN_GM)
        p = calc_vsop(body, time)
        x += shift * p.x
        y += shift * p.y
        z += shift * p.z
    return Vector(x, y, z, time)


# ------------------------------------------------------------
# Heliocentric
# ------------------------------------------------------------

def helio_vector(body: str, time: Time) -> Vector:
    """
    Heliocentric J2000 equatorial position (AU), without light-time correction.
    """
    check_body(body)
    if body == "Sun":
        return _origin(time)
    if body in VSOP_BODIES:
        return calc_vsop(body, time)
    if body == "Pluto":
        return calc_pluto(time)
    if body == "Moon":
        moon = geo_moon(time)
        earth = calc_earth(time)
        return Vector(moon.x + earth.x, moon.y + earth.y, moon.z + earth.z, time)
    if body == "EMB":
        return calc_earth(time) + _emb_offset(time)
    if body == "SSB":
        return _ssb(time)
    raise InvalidBodyError(f"no heliocentric model for {body!r}")


def helio_distance(body: str, time: Time) -> float:
    return helio_vector(body, time).length()


# ------------------------------------------------------------
# Geocentric
# ------------------------------------------------------------

def geo_vector(body: str, time: Time, aberration: Aberration = "corrected") -> Vector:
    """
    Geocentric J2000 equatorial position (AU) as seen at `time`.

    Bodies other than the Sun, Moon and EMB are corrected for light travel
    time; with aberration="corrected" the Earth is backdated as well, which
    approximates stellar aberration to first order.
    """
    check_choice("aberration", aberration, ABERRATIONS)
    check_body(body)

    if body == "Earth":
        return _origin(time)
    if body == "Sun":
        return -calc_earth(time)
    if body == "Moon":
        return geo_moon(time)
    if body == "EMB":
        return _emb_offset(time)

    earth = calc_earth(time)
    ltime = time
    for it in range(10):
        h = helio_vector(body, ltime)
        if aberration == "corrected":
            earth = calc_earth(ltime)

        vec = Vector(h.x - earth.x, h.y - earth.y, h.z - earth.z, time)
        ltime2 = time.add_days(-vec.length() / aa.C_AUDAY)
        dt = abs(ltime2.tt - ltime.tt)
        logger.debug("light-time %s iter=%d dt=%.3e", body, it, dt)
        if dt < 1.0e-9:
            return vec
        ltime = ltime2

    raise NoConvergeError(f"light-time solver did not converge for {body}")


# ------------------------------------------------------------
# Equatorial / ecliptic coordinates
# ------------------------------------------------------------

def equator(
    body: str,
    time: Time,
    observer: Observer,
    epoch: EquatorEpoch = "j2000",
    aberration: Aberration = "corrected",
) -> Equatorial:
    """Topocentric RA/Dec of a body, J2000 or true equator of date."""
    check_choice("epoch", epoch, EQUATOR_EPOCHS)
    gc_observer = geo_pos(time, observer)
    gc = geo_vector(body, time, aberration)

    j2000 = (gc.x - gc_observer[0], gc.y - gc_observer[1], gc.z - gc_observer[2])
    if epoch == "of-date":
        temp = precession(0.0, j2000, time.tt)
        datevect = nutation(time, +1, temp)
        return vector_to_radec(datevect)
    return vector_to_radec(j2000)


def rotate_equatorial_to_ecliptic(pos, obliq_radians: float) -> Ecliptic:
    cos_ob = math.cos(obliq_radians)
    sin_ob = math.sin(obliq_radians)

    ex = +pos[0]
    ey = +pos[1] * cos_ob + pos[2] * sin_ob
    ez = -pos[1] * sin_ob + pos[2] * cos_ob

    xyproj = math.sqrt(ex * ex + ey * ey)
    if xyproj > 0.0:
        elon = aa.RAD2DEG * math.atan2(ey, ex)
        if elon < 0.0:
            elon += 360.0
    else:
        elon = 0.0

    elat = aa.RAD2DEG * math.atan2(ez, xyproj)
    return Ecliptic(ex, ey, ez, elat, elon)


def ecliptic(equ: Vector) -> Ecliptic:
    """J2000 equatorial vector -> J2000 ecliptic coordinates."""
    return rotate_equatorial_to_ecliptic((equ.x, equ.y, equ.z), OB2000)


def ecliptic_longitude(body: str, time: Time) -> float:
    """Heliocentric J2000 ecliptic longitude of a body, degrees."""
    if body == "Sun":
        raise InvalidBodyError("the Sun has no heliocentric longitude")
    return ecliptic(helio_vector(body, time)).elon


def sun_position(time: Time) -> Ecliptic:
    """
    Apparent geocentric position of the Sun in true ecliptic-of-date coordinates.
    """
    # light travel time from the Sun; without it seasons come out ~8 minutes early
    adjusted = time.add_days(-1.0 / aa.C_AUDAY)

    earth2000 = calc_earth(adjusted)
    sun2000 = (-earth2000.x, -earth2000.y, -earth2000.z)

    stemp = precession(0.0, sun2000, adjusted.tt)
    sun_ofdate = nutation(adjusted, +1, stemp)

    true_obliq = aa.DEG2RAD * e_tilt(adjusted).tobl
    return rotate_equatorial_to_ecliptic(sun_ofdate, true_obliq)
