"""
astrocore.engines.riseset
-------------------------
Hour-angle events (culmination, lower transit) and rise/set times.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from ..core.errors import SearchFailureError
from ..core.time import Time
from ..core.types import DIRECTIONS, Direction, HourAngleEvent, Observer, check_body, check_choice
from ..reference.astro_args import (
    MOON_RADIUS_AU,
    RAD2DEG,
    REFRACTION_NEAR_HORIZON,
    SOLAR_DAYS_PER_SIDEREAL_DAY,
    SUN_RADIUS_AU,
)
from ..reference.orientation import sidereal_time
from .horizon import horizon
from .positions import equator
from .search import search

logger = logging.getLogger(__name__)

_BODY_RADIUS_AU = {
    "Sun": SUN_RADIUS_AU,
    "Moon": MOON_RADIUS_AU,
}


def search_hour_angle(body: str, observer: Observer, hour_angle: float, start: Time) -> HourAngleEvent:
    """
    Next time after start when the body's local hour angle equals hour_angle
    (0 = upper culmination, 12 = lower culmination).
    """
    check_body(body)
    time = start
    it = 0
    while True:
        it += 1
        gast = sidereal_time(time)
        ofdate = equator(body, time, observer, "of-date", "corrected")

        delta_sidereal_hours = math.fmod((hour_angle + ofdate.ra - observer.longitude / 15) - gast, 24.0)
        if it == 1:
            # the first step always goes forward
            if delta_sidereal_hours < 0:
                delta_sidereal_hours += 24
        else:
            if delta_sidereal_hours < -12.0:
                delta_sidereal_hours += 24.0
            elif delta_sidereal_hours > +12.0:
                delta_sidereal_hours -= 24.0

        if abs(delta_sidereal_hours) * 3600.0 < 0.1:
            hor = horizon(time, observer, ofdate.ra, ofdate.dec, "normal")
            return HourAngleEvent(time, hor)

        delta_days = (delta_sidereal_hours / 24.0) * SOLAR_DAYS_PER_SIDEREAL_DAY
        time = time.add_days(delta_days)


def search_rise_set(
    body: str,
    observer: Observer,
    direction: Direction,
    start: Time,
    limit_days: float,
) -> Optional[Time]:
    """
    Next rise (direction="rise") or set ("set") of the body's upper limb after
    start, within limit_days. None if there is no such event in the window.
    """
    check_choice("direction", direction, DIRECTIONS)
    check_body(body)

    if direction == "rise":
        ha_before = 12.0    # lowest point precedes the rise
        ha_after = 0.0      # culmination follows it
        sign = +1
    else:
        ha_before = 0.0
        ha_after = 12.0
        sign = -1

    body_radius_au = _BODY_RADIUS_AU.get(body, 0.0)

    def peak_altitude(t: Time) -> float:
        # geometric altitude of the upper limb plus a fixed horizon refraction
        ofdate = equator(body, t, observer, "of-date", "corrected")
        hor = horizon(t, observer, ofdate.ra, ofdate.dec, "none")
        return sign * (hor.altitude + RAD2DEG * (body_radius_au / ofdate.dist) + REFRACTION_NEAR_HORIZON)

    time_start = start
    alt_before = peak_altitude(time_start)
    if alt_before > 0.0:
        # already past the event; wait for the next culmination/bottom
        evt_before = search_hour_angle(body, observer, ha_before, time_start)
        time_before = evt_before.time
        alt_before = peak_altitude(time_before)
    else:
        time_before = time_start

    evt_after = search_hour_angle(body, observer, ha_after, time_before)
    alt_after = peak_altitude(evt_after.time)

    while True:
        if alt_before <= 0.0 and alt_after > 0.0:
            try:
                return search(peak_altitude, time_before, evt_after.time, 1.0)
            except SearchFailureError:
                logger.debug("%s %s: no crossing between %s and %s", body, direction, time_before, evt_after.time)

        evt_before = search_hour_angle(body, observer, ha_before, evt_after.time)
        evt_after = search_hour_angle(body, observer, ha_after, evt_before.time)

        if evt_before.time.ut >= time_start.ut + limit_days:
            return None

        time_before = evt_before.time
        alt_before = peak_altitude(evt_before.time)
        alt_after = peak_altitude(evt_after.time)
