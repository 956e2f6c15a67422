from __future__ import annotations

from typing import Dict

from ..core.errors import EarthNotAllowedError, InvalidBodyError


# ------------------------------------------------------------
# Units & physical constants
# ------------------------------------------------------------

DEG2RAD = 0.017453292519943296
RAD2DEG = 57.295779513082321
ASEC360 = 1296000.0
ASEC2RAD = 4.848136811095359935899141e-6
ASEC180 = 180.0 * 60.0 * 60.0              # arcseconds per 180 degrees
PI = 3.14159265358979323846
PI2 = 2.0 * PI
ARC = 3600.0 * 180.0 / PI          # arcseconds per radian
AU_PER_PARSEC = ASEC180 / PI

C_AUDAY = 173.1446326846693        # speed of light, AU/day
ERAD = 6378136.6                   # Earth equatorial radius, metres
AU = 1.4959787069098932e+11        # metres
KM_PER_AU = 1.4959787069098932e+8
ANGVEL = 7.2921150e-5              # Earth rotation, rad/s
SECONDS_PER_DAY = 24.0 * 3600.0
SOLAR_DAYS_PER_SIDEREAL_DAY = 0.9972695717592592

MEAN_SYNODIC_MONTH = 29.530588
EARTH_ORBITAL_PERIOD = 365.256
REFRACTION_NEAR_HORIZON = 34.0 / 60.0      # degrees of lift at the horizon
SUN_RADIUS_AU = 4.6505e-3
MOON_RADIUS_AU = 1.15717e-5

EARTH_MOON_MASS_RATIO = 81.30056

# GM in AU^3/day^2
SUN_GM = 0.2959122082855911e-03
JUPITER_GM = 0.2825345909524226e-06
SATURN_GM = 0.8459715185680659e-07
URANUS_GM = 0.1292024916781969e-07
NEPTUNE_GM = 0.1524358900784276e-07


# ------------------------------------------------------------
# Angle helpers
# ------------------------------------------------------------

def longitude_offset(diff: float) -> float:
    """Wrap degrees to (-180, +180]."""
    offset = diff
    while offset <= -180.0:
        offset += 360.0
    while offset > 180.0:
        offset -= 360.0
    return offset


def normalize_longitude(lon: float) -> float:
    """Wrap degrees to [0, 360)."""
    while lon < 0.0:
        lon += 360.0
    while lon >= 360.0:
        lon -= 360.0
    return lon


# ------------------------------------------------------------
# Orbital periods
# ------------------------------------------------------------

ORBITAL_PERIOD_DAYS: Dict[str, float] = {
    "Mercury": 87.969,
    "Venus": 224.701,
    "Earth": EARTH_ORBITAL_PERIOD,
    "Mars": 686.980,
    "Jupiter": 4332.589,
    "Saturn": 10759.22,
    "Uranus": 30685.4,
    "Neptune": 60189.0,
    "Pluto": 90560.0,
}

_SUPERIOR = frozenset({"Mars", "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto"})


def is_superior_planet(body: str) -> bool:
    return body in _SUPERIOR


def planet_orbital_period(body: str) -> float:
    try:
        return ORBITAL_PERIOD_DAYS[body]
    except KeyError:
        raise InvalidBodyError(f"no orbital period for {body!r}") from None


def synodic_period(body: str) -> float:
    """
    Mean days between successive identical Sun-Earth-body configurations.

    Earth has no synodic period as seen from itself.
    """
    if body == "Earth":
        raise EarthNotAllowedError("the Earth has no synodic period")
    if body == "Moon":
        return MEAN_SYNODIC_MONTH
    tp = planet_orbital_period(body)
    te = EARTH_ORBITAL_PERIOD
    return abs(te / (te / tp - 1.0))
