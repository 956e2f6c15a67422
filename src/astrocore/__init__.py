"""astrocore public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .core.errors import (
    AstroError,
    BadTimeError,
    BadVectorError,
    EarthNotAllowedError,
    InternalError,
    InvalidBodyError,
    InvalidParameterError,
    NoConvergeError,
    NoMoonQuarterError,
    SearchFailureError,
    WrongMoonQuarterError,
)
from .core.time import (
    Time,
    UtcDateTime,
    add_days,
    current_time,
    make_time,
    time_from_utc,
    utc_from_time,
)
from .core.types import (
    BODIES,
    Apsis,
    Ecliptic,
    ElongationEvent,
    Equatorial,
    HourAngleEvent,
    Horizontal,
    IlluminationInfo,
    MoonQuarter,
    Observer,
    SeasonsInfo,
)
from .core.vectors import (
    RotationMatrix,
    Spherical,
    Vector,
    angle_between,
    combine,
    sphere_from_vector,
    vector_from_sphere,
)
from .reference.astro_args import synodic_period
from .reference.deltat import delta_t, reload_deltat_table
from .reference.lunar import geo_moon
from .reference.orientation import sidereal_time, vector_to_radec
from .engines.horizon import horizon, refraction_angle
from .engines.moon import (
    moon_phase,
    next_lunar_apsis,
    next_moon_quarter,
    search_lunar_apsis,
    search_moon_phase,
    search_moon_quarter,
)
from .engines.planets import (
    angle_from_sun,
    elongation,
    illumination,
    longitude_from_sun,
    search_max_elongation,
    search_peak_magnitude,
    search_relative_longitude,
)
from .engines.positions import (
    ecliptic,
    ecliptic_longitude,
    equator,
    geo_vector,
    helio_distance,
    helio_vector,
    sun_position,
)
from .engines.riseset import search_hour_angle, search_rise_set
from .engines.rotations import (
    rotation_ecl_eqd,
    rotation_ecl_eqj,
    rotation_ecl_hor,
    rotation_eqd_ecl,
    rotation_eqd_eqj,
    rotation_eqd_hor,
    rotation_eqj_ecl,
    rotation_eqj_eqd,
    rotation_eqj_hor,
    rotation_hor_ecl,
    rotation_hor_eqd,
    rotation_hor_eqj,
)
from .engines.search import search
from .engines.seasons import search_sun_longitude, seasons

__all__ = [
    # errors
    "AstroError",
    "BadTimeError",
    "BadVectorError",
    "EarthNotAllowedError",
    "InternalError",
    "InvalidBodyError",
    "InvalidParameterError",
    "NoConvergeError",
    "NoMoonQuarterError",
    "SearchFailureError",
    "WrongMoonQuarterError",
    # time
    "Time",
    "UtcDateTime",
    "add_days",
    "current_time",
    "make_time",
    "time_from_utc",
    "utc_from_time",
    "delta_t",
    "reload_deltat_table",
    # records
    "BODIES",
    "Apsis",
    "Ecliptic",
    "ElongationEvent",
    "Equatorial",
    "HourAngleEvent",
    "Horizontal",
    "IlluminationInfo",
    "MoonQuarter",
    "Observer",
    "SeasonsInfo",
    # geometry
    "RotationMatrix",
    "Spherical",
    "Vector",
    "angle_between",
    "combine",
    "sphere_from_vector",
    "vector_from_sphere",
    "vector_to_radec",
    "sidereal_time",
    "rotation_ecl_eqd",
    "rotation_ecl_eqj",
    "rotation_ecl_hor",
    "rotation_eqd_ecl",
    "rotation_eqd_eqj",
    "rotation_eqd_hor",
    "rotation_eqj_ecl",
    "rotation_eqj_eqd",
    "rotation_eqj_hor",
    "rotation_hor_ecl",
    "rotation_hor_eqd",
    "rotation_hor_eqj",
    # positions
    "ecliptic",
    "ecliptic_longitude",
    "equator",
    "geo_moon",
    "geo_vector",
    "helio_distance",
    "helio_vector",
    "horizon",
    "refraction_angle",
    "sun_position",
    "synodic_period",
    # events
    "search",
    "search_sun_longitude",
    "seasons",
    "moon_phase",
    "search_moon_phase",
    "search_moon_quarter",
    "next_moon_quarter",
    "search_lunar_apsis",
    "next_lunar_apsis",
    "angle_from_sun",
    "longitude_from_sun",
    "elongation",
    "search_relative_longitude",
    "search_max_elongation",
    "illumination",
    "search_peak_magnitude",
    "search_hour_angle",
    "search_rise_set",
]
