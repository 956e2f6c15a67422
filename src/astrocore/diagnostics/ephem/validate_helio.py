#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from astrocore.core.time import Time
from astrocore.core.vectors import Vector, angle_between
from astrocore.diagnostics import _need_matplotlib, _need_numpy
from astrocore.engines.positions import helio_vector
from astrocore.ephemeris import require_ephemeris
from astrocore.reference.pluto import pluto_range

_DEFAULT_BODIES = ["Mercury", "Venus", "Earth", "Mars", "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto"]
_YEAR_DAYS = 365.25


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare helio_vector against a JPL kernel.")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2050)
    p.add_argument("--step-days", type=float, default=20.0)
    p.add_argument("--body", action="append", default=[], help="body name (repeatable; default: all planets)")
    p.add_argument("--kernel", default=None, help="JPL .bsp file (default: $ASTROCORE_EPHEMERIS or de421.bsp)")
    p.add_argument("--out-png", default="helio_validation.png")
    args = p.parse_args(argv)

    require_ephemeris()
    np = _need_numpy()
    plt = _need_matplotlib()

    from astrocore.ephemeris.de import JplHelio

    print("Loading JPL kernel...")
    jpl = JplHelio.load(args.kernel)

    bodies = args.body or _DEFAULT_BODIES
    tt0 = (args.year_start - 2000) * _YEAR_DAYS
    tt1 = (args.year_end - 2000) * _YEAR_DAYS
    tts = np.arange(tt0, tt1, args.step_days)
    years = 2000.0 + tts / _YEAR_DAYS

    fig, ax = plt.subplots(figsize=(12, 6))

    for body in bodies:
        errs = []
        xs = []
        for tt, yr in zip(tts, years):
            if body == "Pluto":
                lo, hi = pluto_range()
                if not (lo <= tt <= hi):
                    continue
            t = Time.from_terrestrial_time(float(tt))
            ours = helio_vector(body, t)
            x, y, z = jpl.helio(body, t.tt)
            ref = Vector(x, y, z, t)
            errs.append(angle_between(ours, ref) * 3600.0)
            xs.append(yr)

        if not errs:
            print(f"{body:8s}: no samples in range")
            continue
        arr = np.array(errs, dtype=float)
        print(f"{body:8s}: n={len(arr):5d}  rms={np.sqrt(np.mean(arr ** 2)):8.3f}\"  max={arr.max():8.3f}\"")
        ax.plot(xs, arr, linewidth=1, label=body)

    ax.set_yscale("log")
    ax.set_title("Heliocentric direction error (astrocore - JPL)")
    ax.set_xlabel("Year")
    ax.set_ylabel("Error (arcsec)")
    ax.grid(True, alpha=0.3)
    ax.legend(ncol=3, fontsize=8)
    fig.tight_layout()
    fig.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
