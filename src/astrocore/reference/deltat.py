"""
astrocore.reference.deltat

ΔT (= TT − UT) as a piecewise-linear table over Modified Julian Day (UT).

The built-in table has 90 breakpoints from the year 1660 to 2028 (historical
values followed by predictions). Outside the table the first/last value is used.

A replacement table may be supplied through the ASTROCORE_DELTAT_TABLE
environment variable (CSV with columns: mjd, delta_t_seconds).
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Tuple

import csv
import logging
import os
from pathlib import Path

from ..core.errors import InternalError

logger = logging.getLogger(__name__)

MJD_BASIS = 2400000.5        # JD of MJD 0
J2000_JD = 2451545.0
Y2000_IN_MJD = J2000_JD - MJD_BASIS


# ---------------------------------------------------------------------------
# Table model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeltaTTable:
    """
    Piecewise-linear ΔT table over MJD, clamped at both ends.
    """
    x: Tuple[float, ...]   # MJD (strictly increasing)
    y: Tuple[float, ...]   # ΔT in seconds

    def __len__(self) -> int:
        return len(self.x)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        """
        Iterate over (mjd, delta_t_seconds) pairs.
        """
        return iter(zip(self.x, self.y))

    def items(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(zip(self.x, self.y))

    def eval(self, mjd: float) -> float:
        x, y = self.x, self.y
        if mjd <= x[0]:
            return y[0]
        if mjd >= x[-1]:
            return y[-1]

        # binary search, always keeping an element after c
        lo, hi = 0, len(x) - 2
        while lo <= hi:
            c = (lo + hi) // 2
            if mjd < x[c]:
                hi = c - 1
            elif mjd > x[c + 1]:
                lo = c + 1
            else:
                frac = (mjd - x[c]) / (x[c + 1] - x[c])
                return y[c] + frac * (y[c + 1] - y[c])

        raise InternalError(f"delta-t: could not bracket mjd={mjd}")

    @property
    def range(self) -> Tuple[float, float]:
        return (self.x[0], self.x[-1])


_DT_POINTS: Tuple[Tuple[float, float], ...] = (
    (-72638.0, 38.0),
    (-65333.0, 26.0),
    (-58028.0, 21.0),
    (-50724.0, 21.1),
    (-43419.0, 13.5),
    (-39766.0, 13.7),
    (-36114.0, 14.8),
    (-32461.0, 15.7),
    (-28809.0, 15.6),
    (-25156.0, 13.3),
    (-21504.0, 12.6),
    (-17852.0, 11.2),
    (-14200.0, 11.13),
    (-10547.0, 7.95),
    (-6895.0, 6.22),
    (-3242.0, 6.55),
    (-1416.0, 7.26),
    (410.0, 7.35),
    (2237.0, 5.92),
    (4063.0, 1.04),
    (5889.0, -3.19),
    (7715.0, -5.36),
    (9542.0, -5.74),
    (11368.0, -5.86),
    (13194.0, -6.41),
    (15020.0, -2.70),
    (16846.0, 3.92),
    (18672.0, 10.38),
    (20498.0, 17.19),
    (22324.0, 21.41),
    (24151.0, 23.63),
    (25977.0, 24.02),
    (27803.0, 23.91),
    (29629.0, 24.35),
    (31456.0, 26.76),
    (33282.0, 29.15),
    (35108.0, 31.07),
    (36934.0, 33.150),
    (38761.0, 35.738),
    (40587.0, 40.182),
    (42413.0, 45.477),
    (44239.0, 50.540),
    (44605.0, 51.3808),
    (44970.0, 52.1668),
    (45335.0, 52.9565),
    (45700.0, 53.7882),
    (46066.0, 54.3427),
    (46431.0, 54.8712),
    (46796.0, 55.3222),
    (47161.0, 55.8197),
    (47527.0, 56.3000),
    (47892.0, 56.8553),
    (48257.0, 57.5653),
    (48622.0, 58.3092),
    (48988.0, 59.1218),
    (49353.0, 59.9845),
    (49718.0, 60.7853),
    (50083.0, 61.6287),
    (50449.0, 62.2950),
    (50814.0, 62.9659),
    (51179.0, 63.4673),
    (51544.0, 63.8285),
    (51910.0, 64.0908),
    (52275.0, 64.2998),
    (52640.0, 64.4734),
    (53005.0, 64.5736),
    (53371.0, 64.6876),
    (53736.0, 64.8452),
    (54101.0, 65.1464),
    (54466.0, 65.4573),
    (54832.0, 65.7768),
    (55197.0, 66.0699),
    (55562.0, 66.3246),
    (55927.0, 66.6030),
    (56293.0, 66.9069),
    (56658.0, 67.2810),
    (57023.0, 67.6439),
    (57388.0, 68.1024),
    (57754.0, 68.5927),
    (58119.0, 68.9676),
    (58484.0, 69.2201),
    (58849.0, 69.87),
    (59214.0, 70.39),
    (59580.0, 70.91),
    (59945.0, 71.40),
    (60310.0, 71.88),
    (60675.0, 72.36),
    (61041.0, 72.83),
    (61406.0, 73.32),
    (61680.0, 73.66),
)

BUILTIN_TABLE = DeltaTTable(
    tuple(p[0] for p in _DT_POINTS),
    tuple(p[1] for p in _DT_POINTS),
)


# ---------------------------------------------------------------------------
# Optional override table
# ---------------------------------------------------------------------------

def read_table_csv(path: Path) -> DeltaTTable:
    """Read a (mjd, delta_t_seconds) CSV; raise ValueError if it is unusable."""
    xs: list[float] = []
    ys: list[float] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        for r in csv.DictReader(f):
            xs.append(float(r["mjd"]))
            ys.append(float(r["delta_t_seconds"]))
    if len(xs) < 2:
        raise ValueError("ΔT table needs at least two rows")
    for i in range(1, len(xs)):
        if not (xs[i] > xs[i - 1]):
            raise ValueError("ΔT table mjd is not strictly increasing")
    return DeltaTTable(tuple(xs), tuple(ys))


@lru_cache(maxsize=1)
def active_table() -> DeltaTTable:
    """
    The table used for all TT computations.

    ASTROCORE_DELTAT_TABLE (path to CSV) replaces the built-in table; an
    unreadable or malformed file is reported and the built-in table is used.
    """
    p = os.environ.get("ASTROCORE_DELTAT_TABLE", "").strip()
    if not p:
        return BUILTIN_TABLE
    path = Path(p).expanduser()
    try:
        table = read_table_csv(path)
    except (OSError, KeyError, ValueError) as e:
        logger.warning("Ignoring ΔT table %s: %s", path, e)
        return BUILTIN_TABLE
    logger.info("Using ΔT table %s (%d rows)", path, len(table))
    return table


def reload_deltat_table() -> DeltaTTable:
    """Forget the cached table and read the environment again."""
    active_table.cache_clear()
    return active_table()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def delta_t(mjd: float) -> float:
    """ΔT in seconds at the given Modified Julian Day (UT)."""
    return active_table().eval(mjd)


def terrestrial_time(ut: float) -> float:
    """TT days since J2000 for UT days since J2000."""
    return ut + delta_t(ut + Y2000_IN_MJD) / 86400.0
