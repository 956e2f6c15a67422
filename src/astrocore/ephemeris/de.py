#ephemeris/de.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Tuple

from ..reference.deltat import J2000_JD

logger = logging.getLogger(__name__)

DEFAULT_KERNEL = "de421.bsp"

# kernel target names; outer planets only have barycenters in the DE4xx files
_TARGETS: Dict[str, str] = {
    "Sun": "sun",
    "Mercury": "mercury",
    "Venus": "venus",
    "Earth": "earth",
    "Moon": "moon",
    "EMB": "earth barycenter",
    "Mars": "mars barycenter",
    "Jupiter": "jupiter barycenter",
    "Saturn": "saturn barycenter",
    "Uranus": "uranus barycenter",
    "Neptune": "neptune barycenter",
    "Pluto": "pluto barycenter",
    "SSB": "solar system barycenter",
}


@dataclass
class JplHelio:
    """
    Heliocentric ICRF (J2000 equatorial) positions in AU from a JPL kernel.

    Requires optional deps:
      pip install "astrocore[ephemeris]"
    """
    kernel: object
    ts: object

    @classmethod
    def load(cls, path: str | None = None) -> "JplHelio":
        try:
            from skyfield.api import load  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                "JPL ephemeris not available. Install extras:\n"
                "  pip install \"astrocore[ephemeris]\""
            ) from e

        name = path or os.environ.get("ASTROCORE_EPHEMERIS") or DEFAULT_KERNEL
        logger.info("loading JPL kernel %s", name)
        kernel = load(name)
        return cls(kernel=kernel, ts=load.timescale())

    def bodies(self) -> Tuple[str, ...]:
        return tuple(_TARGETS)

    def helio(self, body: str, tt: float) -> Tuple[float, float, float]:
        """Heliocentric position of `body` at tt (days since J2000, TT), AU."""
        try:
            target = _TARGETS[body]
        except KeyError:
            raise ValueError(f"body {body!r} not available from the kernel") from None
        t = self.ts.tt_jd(J2000_JD + tt)
        vec = self.kernel[target] - self.kernel["sun"]
        x, y, z = vec.at(t).position.au
        return float(x), float(y), float(z)
