"""
astrocore.engines.horizon
-------------------------
Observer horizon coordinates (azimuth/altitude) with optional atmospheric
refraction.
"""
from __future__ import annotations

import math

from ..core.time import Time
from ..core.types import REFRACTIONS, Horizontal, Observer, Refraction, check_choice
from ..reference.astro_args import DEG2RAD, RAD2DEG
from ..reference.orientation import ter2cel


def _saemundsson(hd: float) -> float:
    """Refraction in degrees for apparent altitude hd, clamped at -1 degree."""
    # the formula diverges near hd = -5.11
    if hd < -1.0:
        hd = -1.0
    return (1.02 / math.tan((hd + 10.3 / (hd + 5.11)) * DEG2RAD)) / 60.0


def refraction_angle(refraction: Refraction, altitude: float) -> float:
    """Refraction lift in degrees for a geometric altitude."""
    check_choice("refraction", refraction, REFRACTIONS)
    if altitude < -90.0 or altitude > +90.0:
        return 0.0
    if refraction == "none":
        return 0.0
    refr = _saemundsson(altitude)
    if refraction == "normal" and altitude < -1.0:
        # fade out toward the nadir so altitude never drops below -90
        refr *= (altitude + 90.0) / 89.0
    return refr


def horizon(time: Time, observer: Observer, ra: float, dec: float,
            refraction: Refraction = "none") -> Horizontal:
    """
    Convert equator-of-date RA (hours) / Dec (degrees) to azimuth/altitude.

    With refraction, altitude is raised and the returned RA/Dec are the
    refracted equatorial coordinates; otherwise RA/Dec are echoed back.
    """
    check_choice("refraction", refraction, REFRACTIONS)

    sinlat = math.sin(observer.latitude * DEG2RAD)
    coslat = math.cos(observer.latitude * DEG2RAD)
    sinlon = math.sin(observer.longitude * DEG2RAD)
    coslon = math.cos(observer.longitude * DEG2RAD)
    sindc = math.sin(dec * DEG2RAD)
    cosdc = math.cos(dec * DEG2RAD)
    sinra = math.sin(ra * 15 * DEG2RAD)
    cosra = math.cos(ra * 15 * DEG2RAD)

    # zenith, north, west unit vectors in the rotating Earth frame
    uze = (coslat * coslon, coslat * sinlon, sinlat)
    une = (-sinlat * coslon, -sinlat * sinlon, coslat)
    uwe = (sinlon, -coslon, 0.0)

    uz = ter2cel(time, uze)
    un = ter2cel(time, une)
    uw = ter2cel(time, uwe)

    p = (cosdc * cosra, cosdc * sinra, sindc)

    pz = p[0] * uz[0] + p[1] * uz[1] + p[2] * uz[2]
    pn = p[0] * un[0] + p[1] * un[1] + p[2] * un[2]
    pw = p[0] * uw[0] + p[1] * uw[1] + p[2] * uw[2]

    proj = math.sqrt(pn * pn + pw * pw)
    az = 0.0
    if proj > 0.0:
        az = -math.atan2(pw, pn) * RAD2DEG
        if az < 0:
            az += 360
        if az >= 360:
            az -= 360
    zd = math.atan2(proj, pz) * RAD2DEG
    out_ra = ra
    out_dec = dec

    if refraction in ("normal", "jplhor"):
        zd0 = zd
        refr = _saemundsson(90.0 - zd)

        if refraction == "normal" and zd > 91.0:
            refr *= (180.0 - zd) / 89.0

        zd -= refr

        if refr > 0.0 and zd > 3.0e-4:
            sinzd = math.sin(zd * DEG2RAD)
            coszd = math.cos(zd * DEG2RAD)
            sinzd0 = math.sin(zd0 * DEG2RAD)
            coszd0 = math.cos(zd0 * DEG2RAD)

            pr = [((p[j] - coszd0 * uz[j]) / sinzd0) * sinzd + uz[j] * coszd for j in range(3)]

            proj = math.sqrt(pr[0] * pr[0] + pr[1] * pr[1])
            if proj > 0:
                out_ra = math.atan2(pr[1], pr[0]) * RAD2DEG / 15
                if out_ra < 0:
                    out_ra += 24
                if out_ra >= 24:
                    out_ra -= 24
            else:
                out_ra = 0
            out_dec = math.atan2(pr[2], proj) * RAD2DEG

    return Horizontal(azimuth=az, altitude=90.0 - zd, ra=out_ra, dec=out_dec)
