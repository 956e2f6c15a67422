"""
astrocore.reference.orientation

Earth orientation: IAU 2000B nutation, precession, obliquity, sidereal time
and the terrestrial <-> celestial frame transforms used for observers.

Positions are plain (x, y, z) tuples in AU; frames are J2000 equatorial
unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, fmod, sin, sqrt
from typing import Tuple

from ..core.errors import BadVectorError, InternalError
from ..core.time import Time
from ..core.types import Equatorial, Observer
from ..core.vectors import RotationMatrix
from .astro_args import ANGVEL, ASEC2RAD, ASEC360, DEG2RAD, ERAD, KM_PER_AU, PI2, RAD2DEG

XYZ = Tuple[float, float, float]


# ============================================================
# IAU 2000B nutation series (77 luni-solar terms)
# ============================================================

# Multipliers of (l, l', F, D, Omega)
_NALS: Tuple[Tuple[int, int, int, int, int], ...] = (
    (0, 0, 0, 0, 1),
    (0, 0, 2, -2, 2),
    (0, 0, 2, 0, 2),
    (0, 0, 0, 0, 2),
    (0, 1, 0, 0, 0),
    (0, 1, 2, -2, 2),
    (1, 0, 0, 0, 0),
    (0, 0, 2, 0, 1),
    (1, 0, 2, 0, 2),
    (0, -1, 2, -2, 2),
    (0, 0, 2, -2, 1),
    (-1, 0, 2, 0, 2),
    (-1, 0, 0, 2, 0),
    (1, 0, 0, 0, 1),
    (-1, 0, 0, 0, 1),
    (-1, 0, 2, 2, 2),
    (1, 0, 2, 0, 1),
    (-2, 0, 2, 0, 1),
    (0, 0, 0, 2, 0),
    (0, 0, 2, 2, 2),
    (0, -2, 2, -2, 2),
    (-2, 0, 0, 2, 0),
    (2, 0, 2, 0, 2),
    (1, 0, 2, -2, 2),
    (-1, 0, 2, 0, 1),
    (2, 0, 0, 0, 0),
    (0, 0, 2, 0, 0),
    (0, 1, 0, 0, 1),
    (-1, 0, 0, 2, 1),
    (0, 2, 2, -2, 2),
    (0, 0, -2, 2, 0),
    (1, 0, 0, -2, 1),
    (0, -1, 0, 0, 1),
    (-1, 0, 2, 2, 1),
    (0, 2, 0, 0, 0),
    (1, 0, 2, 2, 2),
    (-2, 0, 2, 0, 0),
    (0, 1, 2, 0, 2),
    (0, 0, 2, 2, 1),
    (0, -1, 2, 0, 2),
    (0, 0, 0, 2, 1),
    (1, 0, 2, -2, 1),
    (2, 0, 2, -2, 2),
    (-2, 0, 0, 2, 1),
    (2, 0, 2, 0, 1),
    (0, -1, 2, -2, 1),
    (0, 0, 0, -2, 1),
    (-1, -1, 0, 2, 0),
    (2, 0, 0, -2, 1),
    (1, 0, 0, 2, 0),
    (0, 1, 2, -2, 1),
    (1, -1, 0, 0, 0),
    (-2, 0, 2, 0, 2),
    (3, 0, 2, 0, 2),
    (0, -1, 0, 2, 0),
    (1, -1, 2, 0, 2),
    (0, 0, 0, 1, 0),
    (-1, -1, 2, 2, 2),
    (-1, 0, 2, 0, 0),
    (0, -1, 2, 2, 2),
    (-2, 0, 0, 0, 1),
    (1, 1, 2, 0, 2),
    (2, 0, 0, 0, 1),
    (-1, 1, 0, 1, 0),
    (1, 1, 0, 0, 0),
    (1, 0, 2, 0, 0),
    (-1, 0, 2, -2, 1),
    (1, 0, 0, 0, 2),
    (-1, 0, 0, 1, 0),
    (0, 0, 2, 1, 2),
    (-1, 0, 2, 4, 2),
    (-1, 1, 0, 1, 1),
    (0, -2, 2, -2, 1),
    (1, 0, 2, 2, 1),
    (-2, 0, 2, 2, 2),
    (-1, 0, 0, 0, 2),
    (1, 1, 2, -2, 2),
)

# (A, A', A'', B, B', B'') in 0.1 microarcseconds
_CLS: Tuple[Tuple[float, float, float, float, float, float], ...] = (
    (-172064161.0, -174666.0, 33386.0, 92052331.0, 9086.0, 15377.0),
    (-13170906.0, -1675.0, -13696.0, 5730336.0, -3015.0, -4587.0),
    (-2276413.0, -234.0, 2796.0, 978459.0, -485.0, 1374.0),
    (2074554.0, 207.0, -698.0, -897492.0, 470.0, -291.0),
    (1475877.0, -3633.0, 11817.0, 73871.0, -184.0, -1924.0),
    (-516821.0, 1226.0, -524.0, 224386.0, -677.0, -174.0),
    (711159.0, 73.0, -872.0, -6750.0, 0.0, 358.0),
    (-387298.0, -367.0, 380.0, 200728.0, 18.0, 318.0),
    (-301461.0, -36.0, 816.0, 129025.0, -63.0, 367.0),
    (215829.0, -494.0, 111.0, -95929.0, 299.0, 132.0),
    (128227.0, 137.0, 181.0, -68982.0, -9.0, 39.0),
    (123457.0, 11.0, 19.0, -53311.0, 32.0, -4.0),
    (156994.0, 10.0, -168.0, -1235.0, 0.0, 82.0),
    (63110.0, 63.0, 27.0, -33228.0, 0.0, -9.0),
    (-57976.0, -63.0, -189.0, 31429.0, 0.0, -75.0),
    (-59641.0, -11.0, 149.0, 25543.0, -11.0, 66.0),
    (-51613.0, -42.0, 129.0, 26366.0, 0.0, 78.0),
    (45893.0, 50.0, 31.0, -24236.0, -10.0, 20.0),
    (63384.0, 11.0, -150.0, -1220.0, 0.0, 29.0),
    (-38571.0, -1.0, 158.0, 16452.0, -11.0, 68.0),
    (32481.0, 0.0, 0.0, -13870.0, 0.0, 0.0),
    (-47722.0, 0.0, -18.0, 477.0, 0.0, -25.0),
    (-31046.0, -1.0, 131.0, 13238.0, -11.0, 59.0),
    (28593.0, 0.0, -1.0, -12338.0, 10.0, -3.0),
    (20441.0, 21.0, 10.0, -10758.0, 0.0, -3.0),
    (29243.0, 0.0, -74.0, -609.0, 0.0, 13.0),
    (25887.0, 0.0, -66.0, -550.0, 0.0, 11.0),
    (-14053.0, -25.0, 79.0, 8551.0, -2.0, -45.0),
    (15164.0, 10.0, 11.0, -8001.0, 0.0, -1.0),
    (-15794.0, 72.0, -16.0, 6850.0, -42.0, -5.0),
    (21783.0, 0.0, 13.0, -167.0, 0.0, 13.0),
    (-12873.0, -10.0, -37.0, 6953.0, 0.0, -14.0),
    (-12654.0, 11.0, 63.0, 6415.0, 0.0, 26.0),
    (-10204.0, 0.0, 25.0, 5222.0, 0.0, 15.0),
    (16707.0, -85.0, -10.0, 168.0, -1.0, 10.0),
    (-7691.0, 0.0, 44.0, 3268.0, 0.0, 19.0),
    (-11024.0, 0.0, -14.0, 104.0, 0.0, 2.0),
    (7566.0, -21.0, -11.0, -3250.0, 0.0, -5.0),
    (-6637.0, -11.0, 25.0, 3353.0, 0.0, 14.0),
    (-7141.0, 21.0, 8.0, 3070.0, 0.0, 4.0),
    (-6302.0, -11.0, 2.0, 3272.0, 0.0, 4.0),
    (5800.0, 10.0, 2.0, -3045.0, 0.0, -1.0),
    (6443.0, 0.0, -7.0, -2768.0, 0.0, -4.0),
    (-5774.0, -11.0, -15.0, 3041.0, 0.0, -5.0),
    (-5350.0, 0.0, 21.0, 2695.0, 0.0, 12.0),
    (-4752.0, -11.0, -3.0, 2719.0, 0.0, -3.0),
    (-4940.0, -11.0, -21.0, 2720.0, 0.0, -9.0),
    (7350.0, 0.0, -8.0, -51.0, 0.0, 4.0),
    (4065.0, 0.0, 6.0, -2206.0, 0.0, 1.0),
    (6579.0, 0.0, -24.0, -199.0, 0.0, 2.0),
    (3579.0, 0.0, 5.0, -1900.0, 0.0, 1.0),
    (4725.0, 0.0, -6.0, -41.0, 0.0, 3.0),
    (-3075.0, 0.0, -2.0, 1313.0, 0.0, -1.0),
    (-2904.0, 0.0, 15.0, 1233.0, 0.0, 7.0),
    (4348.0, 0.0, -10.0, -81.0, 0.0, 2.0),
    (-2878.0, 0.0, 8.0, 1232.0, 0.0, 4.0),
    (-4230.0, 0.0, 5.0, -20.0, 0.0, -2.0),
    (-2819.0, 0.0, 7.0, 1207.0, 0.0, 3.0),
    (-4056.0, 0.0, 5.0, 40.0, 0.0, -2.0),
    (-2647.0, 0.0, 11.0, 1129.0, 0.0, 5.0),
    (-2294.0, 0.0, -10.0, 1266.0, 0.0, -4.0),
    (2481.0, 0.0, -7.0, -1062.0, 0.0, -3.0),
    (2179.0, 0.0, -2.0, -1129.0, 0.0, -2.0),
    (3276.0, 0.0, 1.0, -9.0, 0.0, 0.0),
    (-3389.0, 0.0, 5.0, 35.0, 0.0, -2.0),
    (3339.0, 0.0, -13.0, -107.0, 0.0, 1.0),
    (-1987.0, 0.0, -6.0, 1073.0, 0.0, -2.0),
    (-1981.0, 0.0, 0.0, 854.0, 0.0, 0.0),
    (4026.0, 0.0, -353.0, -553.0, 0.0, -139.0),
    (1660.0, 0.0, -5.0, -710.0, 0.0, -2.0),
    (-1521.0, 0.0, 9.0, 647.0, 0.0, 4.0),
    (1314.0, 0.0, 0.0, -700.0, 0.0, 0.0),
    (-1283.0, 0.0, 0.0, 672.0, 0.0, 0.0),
    (-1331.0, 0.0, 8.0, 663.0, 0.0, 4.0),
    (1383.0, 0.0, -2.0, -594.0, 0.0, -2.0),
    (1405.0, 0.0, 4.0, -610.0, 0.0, 2.0),
    (1290.0, 0.0, 0.0, -556.0, 0.0, 0.0),
)


def iau2000b(time: Time) -> Tuple[float, float]:
    """Nutation in longitude and obliquity (dpsi, deps), arcseconds."""
    t = time.tt / 36525
    el = fmod(485868.249036 + t * 1717915923.2178, ASEC360) * ASEC2RAD
    elp = fmod(1287104.79305 + t * 129596581.0481, ASEC360) * ASEC2RAD
    f = fmod(335779.526232 + t * 1739527262.8478, ASEC360) * ASEC2RAD
    d = fmod(1072260.70369 + t * 1602961601.2090, ASEC360) * ASEC2RAD
    om = fmod(450160.398036 - t * 6962890.5431, ASEC360) * ASEC2RAD

    dp = 0.0
    de = 0.0
    for i in range(76, -1, -1):
        n = _NALS[i]
        c = _CLS[i]
        arg = fmod((n[0] * el + n[1] * elp + n[2] * f + n[3] * d + n[4] * om), PI2)
        sarg = sin(arg)
        carg = cos(arg)
        dp += (c[0] + c[1] * t) * sarg + c[2] * carg
        de += (c[3] + c[4] * t) * carg + c[5] * sarg

    dpsi = -0.000135 + (dp * 1.0e-7)
    deps = +0.000388 + (de * 1.0e-7)
    return dpsi, deps


def mean_obliquity(tt: float) -> float:
    """Mean obliquity of the ecliptic in degrees."""
    t = tt / 36525.0
    asec = (
        ((((-0.0000000434 * t
            - 0.000000576) * t
           + 0.00200340) * t
          - 0.0001831) * t
         - 46.836769) * t + 84381.406
    )
    return asec / 3600.0


@dataclass(frozen=True)
class EarthTilt:
    tt: float
    dpsi: float     # arcsec
    deps: float     # arcsec
    ee: float       # equation of the equinoxes, seconds of time
    mobl: float     # mean obliquity, degrees
    tobl: float     # true obliquity, degrees


def e_tilt(time: Time) -> EarthTilt:
    dpsi, deps = iau2000b(time)
    mobl = mean_obliquity(time.tt)
    tobl = mobl + (deps / 3600.0)
    ee = dpsi * cos(mobl * DEG2RAD) / 15.0
    return EarthTilt(time.tt, dpsi, deps, ee, mobl, tobl)


def ecl2equ_vec(time: Time, ecl: XYZ) -> XYZ:
    """Ecliptic of date -> equator of date, using the mean obliquity."""
    obl = mean_obliquity(time.tt) * DEG2RAD
    cos_obl = cos(obl)
    sin_obl = sin(obl)
    return (
        ecl[0],
        ecl[1] * cos_obl - ecl[2] * sin_obl,
        ecl[1] * sin_obl + ecl[2] * cos_obl,
    )


# ============================================================
# Precession
# ============================================================

def precession_rot(tt1: float, tt2: float) -> RotationMatrix:
    """
    Precession matrix between two epochs (TT days), one of which must be J2000 (0).
    """
    if (tt1 != 0.0) and (tt2 != 0.0):
        raise InternalError("precession: one of (tt1, tt2) must be zero")

    eps0 = 84381.406
    t = (tt2 - tt1) / 36525
    if tt2 == 0:
        t = -t

    psia = (((((-0.0000000951 * t
                + 0.000132851) * t
               - 0.00114045) * t
              - 1.0790069) * t
             + 5038.481507) * t)

    omegaa = (((((+0.0000003337 * t
                  - 0.000000467) * t
                 - 0.00772503) * t
                + 0.0512623) * t
               - 0.025754) * t + eps0)

    chia = (((((-0.0000000560 * t
                + 0.000170663) * t
               - 0.00121197) * t
              - 2.3814292) * t
             + 10.556403) * t)

    eps0 = eps0 * ASEC2RAD
    psia = psia * ASEC2RAD
    omegaa = omegaa * ASEC2RAD
    chia = chia * ASEC2RAD

    sa = sin(eps0)
    ca = cos(eps0)
    sb = sin(-psia)
    cb = cos(-psia)
    sc = sin(-omegaa)
    cc = cos(-omegaa)
    sd = sin(chia)
    cd = cos(chia)

    xx = cd * cb - sb * sd * cc
    yx = cd * sb * ca + sd * cc * cb * ca - sa * sd * sc
    zx = cd * sb * sa + sd * cc * cb * sa + ca * sd * sc
    xy = -sd * cb - sb * cd * cc
    yy = -sd * sb * ca + cd * cc * cb * ca - sa * cd * sc
    zy = -sd * sb * sa + cd * cc * cb * sa + ca * cd * sc
    xz = sb * sc
    yz = -sc * cb * ca - sa * cc
    zz = -sc * cb * sa + cc * ca

    if tt2 == 0.0:
        # other epoch -> J2000
        return RotationMatrix(((xx, yx, zx), (xy, yy, zy), (xz, yz, zz)))
    # J2000 -> other epoch
    return RotationMatrix(((xx, xy, xz), (yx, yy, yz), (zx, zy, zz)))


def precession(tt1: float, pos: XYZ, tt2: float) -> XYZ:
    return precession_rot(tt1, tt2).rotate_xyz(pos)


# ============================================================
# Nutation
# ============================================================

def nutation_rot(time: Time, direction: int) -> RotationMatrix:
    """
    Nutation matrix: direction=+1 mean equator -> true equator of date,
    direction=-1 the inverse.
    """
    tilt = e_tilt(time)
    oblm = tilt.mobl * DEG2RAD
    oblt = tilt.tobl * DEG2RAD
    psi = tilt.dpsi * ASEC2RAD
    cobm = cos(oblm)
    sobm = sin(oblm)
    cobt = cos(oblt)
    sobt = sin(oblt)
    cpsi = cos(psi)
    spsi = sin(psi)

    xx = cpsi
    yx = -spsi * cobm
    zx = -spsi * sobm
    xy = spsi * cobt
    yy = cpsi * cobm * cobt + sobm * sobt
    zy = cpsi * sobm * cobt - cobm * sobt
    xz = spsi * sobt
    yz = cpsi * cobm * sobt - sobm * cobt
    zz = cpsi * sobm * sobt + cobm * cobt

    if direction > 0:
        return RotationMatrix(((xx, xy, xz), (yx, yy, yz), (zx, zy, zz)))
    return RotationMatrix(((xx, yx, zx), (xy, yy, zy), (xz, yz, zz)))


def nutation(time: Time, direction: int, pos: XYZ) -> XYZ:
    return nutation_rot(time, direction).rotate_xyz(pos)


def vector_to_radec(pos: XYZ) -> Equatorial:
    """Cartesian equatorial -> (RA hours, Dec degrees, distance)."""
    xyproj = pos[0] * pos[0] + pos[1] * pos[1]
    dist = sqrt(xyproj + pos[2] * pos[2])
    if xyproj == 0.0:
        if pos[2] == 0.0:
            raise BadVectorError("indeterminate RA/Dec for a zero-length vector")
        return Equatorial(0.0, -90.0 if pos[2] < 0 else +90.0, dist)

    ra = atan2(pos[1], pos[0]) / (DEG2RAD * 15.0)
    if ra < 0:
        ra += 24.0
    dec = RAD2DEG * atan2(pos[2], sqrt(xyproj))
    return Equatorial(ra, dec, dist)


# ============================================================
# Earth rotation
# ============================================================

def era(time: Time) -> float:
    """Earth Rotation Angle, degrees."""
    thet1 = 0.7790572732640 + 0.00273781191135448 * time.ut
    thet3 = fmod(time.ut, 1.0)
    theta = 360.0 * fmod(thet1 + thet3, 1.0)
    if theta < 0.0:
        theta += 360.0
    return theta


def sidereal_time(time: Time) -> float:
    """Greenwich apparent sidereal time, hours in [0, 24)."""
    t = time.tt / 36525.0
    eqeq = 15.0 * e_tilt(time).ee
    theta = era(time)
    st = (eqeq + 0.014506 +
          ((((-0.0000000368 * t
              - 0.000029956) * t
             - 0.00000044) * t
            + 1.3915817) * t
           + 4612.156534) * t)

    gst = fmod(st / 3600.0 + theta, 360.0) / 15.0
    if gst < 0.0:
        gst += 24.0
    return gst


def terra(observer: Observer, st: float) -> Tuple[XYZ, XYZ]:
    """
    Observer position (AU) and velocity (km/day) in the rotating Earth frame
    for sidereal time st (hours).
    """
    erad_km = ERAD / 1000.0
    df = 1.0 - 0.003352819697896    # flattening
    df2 = df * df
    phi = observer.latitude * DEG2RAD
    sinphi = sin(phi)
    cosphi = cos(phi)
    c = 1.0 / sqrt(cosphi * cosphi + df2 * sinphi * sinphi)
    s = df2 * c
    ht_km = observer.height / 1000.0
    ach = erad_km * c + ht_km
    ash = erad_km * s + ht_km
    stlocl = (15.0 * st + observer.longitude) * DEG2RAD
    sinst = sin(stlocl)
    cosst = cos(stlocl)

    pos = (
        ach * cosphi * cosst / KM_PER_AU,
        ach * cosphi * sinst / KM_PER_AU,
        ash * sinphi / KM_PER_AU,
    )
    vel = (
        -ANGVEL * ach * cosphi * sinst * 86400.0,
        +ANGVEL * ach * cosphi * cosst * 86400.0,
        0.0,
    )
    return pos, vel


def geo_pos(time: Time, observer: Observer) -> XYZ:
    """Geocentric J2000 equatorial position of the observer."""
    gast = sidereal_time(time)
    pos1, _vel = terra(observer, gast)
    pos2 = nutation(time, -1, pos1)
    return precession(time.tt, pos2, 0.0)


def spin(angle: float, pos: XYZ) -> XYZ:
    """Rotate about the z axis by `angle` degrees (frame rotation)."""
    angr = angle * DEG2RAD
    cosang = cos(angr)
    sinang = sin(angr)
    return (
        cosang * pos[0] + sinang * pos[1] + 0 * pos[2],
        -sinang * pos[0] + cosang * pos[1] + 0 * pos[2],
        0 * pos[0] + 0 * pos[1] + 1 * pos[2],
    )


def ter2cel(time: Time, vec: XYZ) -> XYZ:
    """Terrestrial (rotating) frame -> celestial frame of date."""
    gast = sidereal_time(time)
    return spin(-15.0 * gast, vec)
