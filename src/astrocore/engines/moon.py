"""
astrocore.engines.moon
----------------------
Lunar events: phase angle, quarters, and perigee/apogee.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from ..core.errors import (
    InternalError,
    InvalidParameterError,
    NoMoonQuarterError,
    SearchFailureError,
    WrongMoonQuarterError,
)
from ..core.time import Time
from ..core.types import Apsis, MoonQuarter
from ..reference.astro_args import KM_PER_AU, MEAN_SYNODIC_MONTH, longitude_offset
from ..reference.lunar import ecliptic_geo_moon
from .planets import longitude_from_sun
from .search import search

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Phase and quarters
# ------------------------------------------------------------

def moon_phase(time: Time) -> float:
    """
    Moon's geocentric ecliptic longitude minus the Sun's, degrees in [0, 360):
    0 new, 90 first quarter, 180 full, 270 third quarter.
    """
    return longitude_from_sun("Moon", time)


def search_moon_phase(target_lon: float, start: Time, limit_days: float) -> Optional[Time]:
    """
    Next time the Moon reaches phase angle target_lon, within limit_days of start.
    None when it cannot happen inside the window.
    """
    def moon_offset(t: Time) -> float:
        return longitude_offset(moon_phase(t) - target_lon)

    # the quarter can land up to ~0.826 days away from the mean-motion estimate
    uncertainty = 0.9

    ya = moon_offset(start)
    if ya > 0.0:
        ya -= 360.0     # search forward in time
    est_dt = -(MEAN_SYNODIC_MONTH * ya) / 360.0
    dt1 = est_dt - uncertainty
    if dt1 > limit_days:
        return None
    dt2 = est_dt + uncertainty
    if limit_days < dt2:
        dt2 = limit_days

    t1 = start.add_days(dt1)
    t2 = start.add_days(dt2)
    try:
        return search(moon_offset, t1, t2, 1.0)
    except SearchFailureError:
        logger.debug("Moon phase %.1f not found between %s and %s", target_lon, t1, t2)
        return None


def search_moon_quarter(start: Time) -> MoonQuarter:
    """First lunar quarter (new, first, full, third) after start."""
    angle = moon_phase(start)
    quarter = (1 + int(math.floor(angle / 90.0))) % 4
    t = search_moon_phase(90.0 * quarter, start, 10.0)
    if t is None:
        raise NoMoonQuarterError(f"no moon quarter found within 10 days of {start}")
    return MoonQuarter(quarter, t)


def next_moon_quarter(mq: MoonQuarter) -> MoonQuarter:
    """The quarter that follows mq."""
    # successive quarters are 6.5 to 8.3 days apart
    nxt = search_moon_quarter(mq.time.add_days(6.0))
    if nxt.quarter != (1 + mq.quarter) % 4:
        raise WrongMoonQuarterError(
            f"expected quarter {(1 + mq.quarter) % 4} after {mq.quarter}, found {nxt.quarter}"
        )
    return nxt


# ------------------------------------------------------------
# Apsides
# ------------------------------------------------------------

def moon_distance(t: Time) -> float:
    """Geocentric distance of the Moon, AU."""
    return ecliptic_geo_moon(t).dist_au


def _distance_slope(direction: int):
    def slope(time: Time) -> float:
        dt = 0.001
        dist1 = moon_distance(time.add_days(-dt / 2.0))
        dist2 = moon_distance(time.add_days(+dt / 2.0))
        return direction * (dist2 - dist1) / dt
    return slope


def search_lunar_apsis(start: Time) -> Apsis:
    """First perigee or apogee of the Moon after start."""
    increment = 5.0
    rising = _distance_slope(+1)
    falling = _distance_slope(-1)

    t1 = start
    m1 = rising(t1)
    it = 0
    while it * increment < 2.0 * MEAN_SYNODIC_MONTH:
        t2 = t1.add_days(increment)
        m2 = rising(t2)

        # slope changes sign (or touches zero) inside [t1, t2]
        if m1 * m2 <= 0.0:
            if m1 < 0.0 or m2 > 0.0:
                t = search(rising, t1, t2, 1.0)
                kind = "pericenter"
            elif m1 > 0.0 or m2 < 0.0:
                t = search(falling, t1, t2, 1.0)
                kind = "apocenter"
            else:
                raise InternalError("lunar distance slope is zero at both ends of the window")

            dist_au = moon_distance(t)
            return Apsis(t, kind, dist_au, dist_au * KM_PER_AU)

        t1 = t2
        m1 = m2
        it += 1

    raise InternalError(f"no lunar apsis within two synodic months of {start}")


def next_lunar_apsis(apsis: Apsis) -> Apsis:
    """The apsis following `apsis`, which must be of the opposite kind."""
    skip = 11.0
    if apsis.kind == "apocenter":
        expected = "pericenter"
    elif apsis.kind == "pericenter":
        expected = "apocenter"
    else:
        raise InvalidParameterError(f"invalid apsis kind {apsis.kind!r}")

    nxt = search_lunar_apsis(apsis.time.add_days(skip))
    if nxt.kind != expected:
        raise InternalError(f"expected {expected} after {apsis.kind}, found {nxt.kind}")
    return nxt
