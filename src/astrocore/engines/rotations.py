"""
astrocore.engines.rotations
---------------------------
Rotation matrices between the four reference frames:

  EQJ  mean equator and equinox of J2000
  EQD  true equator and equinox of date
  ECL  mean ecliptic and equinox of J2000
  HOR  observer horizon (x = north, y = west, z = zenith)
"""
from __future__ import annotations

import math

from ..core.time import Time
from ..core.types import Observer
from ..core.vectors import RotationMatrix, combine
from ..reference.orientation import nutation_rot, precession_rot, ter2cel

# cos/sin of the J2000 mean obliquity
_C2000 = 0.9174821430670688
_S2000 = 0.3977769691083922


def rotation_eqj_ecl() -> RotationMatrix:
    return RotationMatrix(((1.0, 0.0, 0.0), (0.0, +_C2000, -_S2000), (0.0, +_S2000, +_C2000)))


def rotation_ecl_eqj() -> RotationMatrix:
    return RotationMatrix(((1.0, 0.0, 0.0), (0.0, +_C2000, +_S2000), (0.0, -_S2000, +_C2000)))


def rotation_eqj_eqd(time: Time) -> RotationMatrix:
    prec = precession_rot(0.0, time.tt)
    nut = nutation_rot(time, +1)
    return combine(prec, nut)


def rotation_eqd_eqj(time: Time) -> RotationMatrix:
    nut = nutation_rot(time, -1)
    prec = precession_rot(time.tt, 0.0)
    return combine(nut, prec)


def rotation_eqd_hor(time: Time, observer: Observer) -> RotationMatrix:
    sinlat = math.sin(math.radians(observer.latitude))
    coslat = math.cos(math.radians(observer.latitude))
    sinlon = math.sin(math.radians(observer.longitude))
    coslon = math.cos(math.radians(observer.longitude))

    uze = (coslat * coslon, coslat * sinlon, sinlat)
    une = (-sinlat * coslon, -sinlat * sinlon, coslat)
    uwe = (sinlon, -coslon, 0.0)

    uz = ter2cel(time, uze)
    un = ter2cel(time, une)
    uw = ter2cel(time, uwe)

    return RotationMatrix((
        (un[0], uw[0], uz[0]),
        (un[1], uw[1], uz[1]),
        (un[2], uw[2], uz[2]),
    ))


def rotation_hor_eqd(time: Time, observer: Observer) -> RotationMatrix:
    return rotation_eqd_hor(time, observer).inverse()


def rotation_hor_eqj(time: Time, observer: Observer) -> RotationMatrix:
    return combine(rotation_hor_eqd(time, observer), rotation_eqd_eqj(time))


def rotation_eqj_hor(time: Time, observer: Observer) -> RotationMatrix:
    return rotation_hor_eqj(time, observer).inverse()


def rotation_eqd_ecl(time: Time) -> RotationMatrix:
    return combine(rotation_eqd_eqj(time), rotation_eqj_ecl())


def rotation_ecl_eqd(time: Time) -> RotationMatrix:
    return rotation_eqd_ecl(time).inverse()


def rotation_ecl_hor(time: Time, observer: Observer) -> RotationMatrix:
    return combine(rotation_ecl_eqd(time), rotation_eqd_hor(time, observer))


def rotation_hor_ecl(time: Time, observer: Observer) -> RotationMatrix:
    return rotation_ecl_hor(time, observer).inverse()
