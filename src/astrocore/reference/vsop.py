# reference/vsop.py

from __future__ import annotations

import math
from typing import Tuple

from ..core.errors import InvalidBodyError
from ..core.time import Time
from ..core.vectors import Vector
from ._vsop_data import VSOP_MODELS

VSOP_BODIES: Tuple[str, ...] = tuple(VSOP_MODELS)


def vsop_sphere(body: str, time: Time) -> Tuple[float, float, float]:
    """
    Heliocentric ecliptic (longitude rad, latitude rad, radius AU), J2000 ecliptic.
    """
    try:
        model = VSOP_MODELS[body]
    except KeyError:
        raise InvalidBodyError(f"no VSOP model for {body!r}") from None

    t = time.tt / 365250    # millennia since 2000
    sphere = [0.0, 0.0, 0.0]
    for k, formula in enumerate(model):
        tpower = 1.0
        for series in formula:
            total = 0.0
            for amplitude, phase, frequency in series:
                total += amplitude * math.cos(phase + (t * frequency))
            sphere[k] += tpower * total
            tpower *= t
    return sphere[0], sphere[1], sphere[2]


def calc_vsop(body: str, time: Time) -> Vector:
    """Heliocentric J2000 equatorial position of a planet."""
    lon, lat, rad = vsop_sphere(body, time)

    r_coslat = rad * math.cos(lat)
    ex = r_coslat * math.cos(lon)
    ey = r_coslat * math.sin(lon)
    ez = rad * math.sin(lat)

    # VSOP ecliptic -> J2000 equator (fixed frame-tie rotation)
    return Vector(
        ex + 0.000000440360 * ey - 0.000000190919 * ez,
        -0.000000479966 * ex + 0.917482137087 * ey - 0.397776982902 * ez,
        0.397776982902 * ey + 0.917482137087 * ez,
        time,
    )


def calc_earth(time: Time) -> Vector:
    return calc_vsop("Earth", time)
