#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

from astrocore.diagnostics import _need_matplotlib, _need_numpy
from astrocore.reference import deltat as dt

# mean Gregorian year in days; MJD of 2000-01-01T12:00
_YEAR_DAYS = 365.2425


def _year_to_mjd(year: float) -> float:
    return dt.Y2000_IN_MJD + (year - 2000.0) * _YEAR_DAYS


def _mjd_to_year(mjd: float) -> float:
    return 2000.0 + (mjd - dt.Y2000_IN_MJD) / _YEAR_DAYS


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Plot Delta T (TT-UT) from the active astrocore table.")
    p.add_argument("--y0", type=int, default=1650, help="start year")
    p.add_argument("--y1", type=int, default=2050, help="end year")
    p.add_argument("--step", type=float, default=0.25, help="sampling step in years (e.g., 0.1, 0.25, 1.0)")
    p.add_argument("--out", default="deltat.png", help="output image filename")
    p.add_argument("--show-table", action="store_true", help="scatter the table breakpoints")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    table = dt.active_table()

    ys = np.arange(float(args.y0), float(args.y1) + 1e-12, float(args.step), dtype=float)
    vals = np.array([dt.delta_t(_year_to_mjd(float(y))) for y in ys], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(ys, vals, linewidth=2, label="interpolated")

    if args.show_table:
        pts = [(x, v) for (x, v) in table if args.y0 <= _mjd_to_year(x) <= args.y1]
        if pts:
            y_tbl = np.array([_mjd_to_year(x) for (x, _) in pts], dtype=float)
            dt_tbl = np.array([v for (_, v) in pts], dtype=float)
            ax.scatter(y_tbl, dt_tbl, s=10, alpha=0.7, color="red", label=f"table ({len(table)} rows)")

    ax.set_title("Delta T = TT − UT (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("ΔT (s)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
