"""
astrocore.engines.seasons
-------------------------
Solar longitude crossings: equinoxes and solstices.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..core.errors import SearchFailureError
from ..core.time import Time, make_time
from ..core.types import SeasonsInfo
from ..reference.astro_args import longitude_offset
from .positions import sun_position
from .search import search

logger = logging.getLogger(__name__)


def search_sun_longitude(target_lon: float, start: Time, limit_days: float) -> Optional[Time]:
    """
    Time when the Sun's apparent ecliptic longitude of date reaches target_lon
    (degrees), searching limit_days forward from start. None if not in the window.
    """
    def sun_offset(t: Time) -> float:
        return longitude_offset(sun_position(t).elon - target_lon)

    t2 = start.add_days(limit_days)
    try:
        return search(sun_offset, start, t2, 1.0)
    except SearchFailureError:
        logger.debug("Sun longitude %.1f not reached between %s and %s", target_lon, start, t2)
        return None


def _find_season_change(target_lon: float, year: int, month: int, day: int) -> Time:
    start = make_time(year, month, day, 0, 0, 0.0)
    t = search_sun_longitude(target_lon, start, 4.0)
    if t is None:
        raise SearchFailureError(f"cannot find solar longitude {target_lon} for year {year}")
    return t


def seasons(year: int) -> SeasonsInfo:
    """March/September equinoxes and June/December solstices of a calendar year."""
    return SeasonsInfo(
        mar_equinox=_find_season_change(0, year, 3, 19),
        jun_solstice=_find_season_change(90, year, 6, 19),
        sep_equinox=_find_season_change(180, year, 9, 21),
        dec_solstice=_find_season_change(270, year, 12, 20),
    )
