from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Literal, Tuple

from .time import Time
from .errors import InvalidBodyError, InvalidParameterError

Body = Literal[
    "Sun", "Moon", "Mercury", "Venus", "Earth", "Mars",
    "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto", "EMB", "SSB",
]

BODIES: Tuple[str, ...] = (
    "Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn",
    "Uranus", "Neptune", "Pluto", "Sun", "Moon", "EMB", "SSB",
)

Aberration = Literal["corrected", "none"]
EquatorEpoch = Literal["j2000", "of-date"]
Refraction = Literal["none", "normal", "jplhor"]
Direction = Literal["rise", "set"]
Visibility = Literal["morning", "evening"]
ApsisKind = Literal["pericenter", "apocenter"]

ABERRATIONS: Tuple[str, ...] = ("corrected", "none")
EQUATOR_EPOCHS: Tuple[str, ...] = ("j2000", "of-date")
REFRACTIONS: Tuple[str, ...] = ("none", "normal", "jplhor")
DIRECTIONS: Tuple[str, ...] = ("rise", "set")

QUARTER_NAMES: Tuple[str, ...] = ("New Moon", "First Quarter", "Full Moon", "Third Quarter")


def check_body(body: str) -> str:
    if body not in BODIES:
        raise InvalidBodyError(f"unknown body: {body!r}")
    return body


def check_choice(name: str, value: str, allowed: Tuple[str, ...]) -> str:
    if value not in allowed:
        raise InvalidParameterError(f"{name} must be one of {', '.join(allowed)}; got {value!r}")
    return value


@dataclass(frozen=True)
class Observer:
    """A point on or near the Earth's surface (geodetic degrees, metres above sea level)."""
    latitude: float
    longitude: float
    height: float = 0.0


@dataclass(frozen=True)
class Equatorial:
    """Right ascension (sidereal hours), declination (degrees), distance (AU)."""
    ra: float
    dec: float
    dist: float


@dataclass(frozen=True)
class Ecliptic:
    """Cartesian and spherical ecliptic coordinates."""
    ex: float
    ey: float
    ez: float
    elat: float
    elon: float


@dataclass(frozen=True)
class Horizontal:
    """Azimuth/altitude (degrees) plus the (possibly refracted) RA/Dec."""
    azimuth: float
    altitude: float
    ra: float
    dec: float


@dataclass(frozen=True)
class SeasonsInfo:
    mar_equinox: Time
    jun_solstice: Time
    sep_equinox: Time
    dec_solstice: Time


@dataclass(frozen=True)
class MoonQuarter:
    quarter: int  # 0=new, 1=first quarter, 2=full, 3=third quarter
    time: Time

    @property
    def name(self) -> str:
        return QUARTER_NAMES[self.quarter]


@dataclass(frozen=True)
class ElongationEvent:
    time: Time
    visibility: Visibility
    elongation: float
    relative_longitude: float


@dataclass(frozen=True)
class HourAngleEvent:
    time: Time
    hor: Horizontal


@dataclass(frozen=True)
class IlluminationInfo:
    time: Time
    mag: float
    phase_angle: float
    helio_dist: float
    ring_tilt: float = 0.0

    @property
    def phase_fraction(self) -> float:
        """Illuminated fraction of the disc as seen from the Earth."""
        return (1.0 + math.cos(math.radians(self.phase_angle))) / 2.0


@dataclass(frozen=True)
class Apsis:
    time: Time
    kind: ApsisKind
    dist_au: float
    dist_km: float
