from __future__ import annotations

import argparse
import importlib
import logging
import os
import re
import sys
from typing import List, Optional

from .core.errors import AstroError, InvalidParameterError
from .core.time import Time, current_time, make_time


_DATE_RE = re.compile(
    r"^(-?\d{1,6})-(\d{2})-(\d{2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2}(?:\.\d+)?))?)?Z?$"
)


def _configure_logging(verbose: bool) -> None:
    level_name = os.environ.get("ASTROCORE_LOG")
    if level_name:
        level = getattr(logging, level_name.upper(), logging.WARNING)
    else:
        level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_time(s: Optional[str]) -> Time:
    """YYYY-MM-DD[THH:MM[:SS[.fff]]][Z], always UTC. None means now."""
    if s is None:
        return current_time()
    m = _DATE_RE.match(s.strip())
    if m is None:
        raise InvalidParameterError(f"cannot parse date {s!r} (expected YYYY-MM-DD[THH:MM[:SS]])")
    year, month, day = int(m.group(1)), int(m.group(2)), int(m.group(3))
    hour = int(m.group(4) or 0)
    minute = int(m.group(5) or 0)
    second = float(m.group(6) or 0.0)
    return make_time(year, month, day, hour, minute, second)


def _add_observer_args(p: argparse.ArgumentParser, required: bool) -> None:
    p.add_argument("--lat", type=float, required=required, default=None, help="Latitude in degrees (north positive)")
    p.add_argument("--lon", type=float, required=required, default=None, help="Longitude in degrees (east positive)")
    p.add_argument("--height", type=float, default=0.0, help="Height above sea level in metres")


# ------------------------------------------------------------
# Subcommands
# ------------------------------------------------------------

def cmd_position(argv: List[str]) -> int:
    import astrocore as ac

    p = argparse.ArgumentParser(prog="astrocore position", description="Position of a body at a given time.")
    p.add_argument("body", choices=ac.BODIES)
    p.add_argument("--date", default=None, help="UTC date/time (default: now)")
    _add_observer_args(p, required=False)
    p.add_argument("--of-date", action="store_true", help="Report RA/Dec in the equator of date")
    p.add_argument("--no-aberration", action="store_true", help="Skip the light-travel correction")
    args = p.parse_args(argv)

    t = _parse_time(args.date)
    aberration = "none" if args.no_aberration else "corrected"
    epoch = "of-date" if args.of_date else "j2000"

    print(f"Time: {t}  (ut={t.ut:.8f}, tt={t.tt:.8f})")
    print()

    hv = ac.helio_vector(args.body, t)
    print("Heliocentric J2000 equatorial (AU):")
    print(f"  x = {hv.x:+.9f}  y = {hv.y:+.9f}  z = {hv.z:+.9f}")

    if args.body != "Earth":
        gv = ac.geo_vector(args.body, t, aberration)
        ecl = ac.ecliptic(gv)
        print("Geocentric J2000 equatorial (AU):")
        print(f"  x = {gv.x:+.9f}  y = {gv.y:+.9f}  z = {gv.z:+.9f}")
        print("Geocentric J2000 ecliptic (degrees):")
        print(f"  lon = {ecl.elon:.6f}  lat = {ecl.elat:+.6f}")

    if args.lat is not None and args.lon is not None:
        observer = ac.Observer(args.lat, args.lon, args.height)
        eq = ac.equator(args.body, t, observer, epoch, aberration)
        print(f"Topocentric equatorial ({epoch}):")
        print(f"  ra = {eq.ra:.6f} h  dec = {eq.dec:+.6f} deg  dist = {eq.dist:.9f} AU")
        if epoch != "of-date":
            eq = ac.equator(args.body, t, observer, "of-date", aberration)
        hor = ac.horizon(t, observer, eq.ra, eq.dec, "normal")
        print("Horizontal (refracted):")
        print(f"  azimuth = {hor.azimuth:.6f}  altitude = {hor.altitude:+.6f}")

    return 0


def cmd_seasons(argv: List[str]) -> int:
    import astrocore as ac

    p = argparse.ArgumentParser(prog="astrocore seasons", description="Equinoxes and solstices of a year.")
    p.add_argument("year", type=int)
    args = p.parse_args(argv)

    s = ac.seasons(args.year)
    print(f"March equinox     : {s.mar_equinox}")
    print(f"June solstice     : {s.jun_solstice}")
    print(f"September equinox : {s.sep_equinox}")
    print(f"December solstice : {s.dec_solstice}")
    return 0


def cmd_moon_quarters(argv: List[str]) -> int:
    import astrocore as ac

    p = argparse.ArgumentParser(prog="astrocore moon-quarters", description="Upcoming lunar quarters.")
    p.add_argument("--date", default=None, help="UTC date/time (default: now)")
    p.add_argument("--count", type=int, default=4)
    args = p.parse_args(argv)

    mq = ac.search_moon_quarter(_parse_time(args.date))
    for i in range(args.count):
        if i > 0:
            mq = ac.next_moon_quarter(mq)
        print(f"{mq.time}  {mq.name}")
    return 0


def cmd_riseset(argv: List[str]) -> int:
    import astrocore as ac

    p = argparse.ArgumentParser(prog="astrocore riseset", description="Rise, culmination and set times.")
    p.add_argument("body", choices=[b for b in ac.BODIES if b not in ("Earth", "EMB", "SSB")])
    _add_observer_args(p, required=True)
    p.add_argument("--date", default=None, help="UTC date/time to search from (default: now)")
    p.add_argument("--days", type=float, default=1.0, help="Search window in days")
    args = p.parse_args(argv)

    observer = ac.Observer(args.lat, args.lon, args.height)
    t = _parse_time(args.date)

    rise = ac.search_rise_set(args.body, observer, "rise", t, args.days)
    culm = ac.search_hour_angle(args.body, observer, 0.0, t)
    sett = ac.search_rise_set(args.body, observer, "set", t, args.days)

    print(f"Rise    : {rise if rise is not None else '-'}")
    print(f"Culmin. : {culm.time}  altitude {culm.hor.altitude:+.3f}")
    print(f"Set     : {sett if sett is not None else '-'}")
    return 0


def cmd_elongation(argv: List[str]) -> int:
    import astrocore as ac

    p = argparse.ArgumentParser(prog="astrocore elongation", description="Elongation and next greatest elongation.")
    p.add_argument("body")
    p.add_argument("--date", default=None, help="UTC date/time (default: now)")
    args = p.parse_args(argv)

    t = _parse_time(args.date)
    e = ac.elongation(args.body, t)
    print(f"{t}  {args.body}: elongation {e.elongation:.3f} deg ({e.visibility})")

    if args.body in ("Mercury", "Venus"):
        mx = ac.search_max_elongation(args.body, t)
        print(f"Next greatest elongation: {mx.time}  {mx.elongation:.3f} deg ({mx.visibility})")
    return 0


def cmd_apsis(argv: List[str]) -> int:
    import astrocore as ac

    p = argparse.ArgumentParser(prog="astrocore apsis", description="Upcoming lunar perigees and apogees.")
    p.add_argument("--date", default=None, help="UTC date/time (default: now)")
    p.add_argument("--count", type=int, default=2)
    args = p.parse_args(argv)

    apsis = ac.search_lunar_apsis(_parse_time(args.date))
    for i in range(args.count):
        if i > 0:
            apsis = ac.next_lunar_apsis(apsis)
        label = "perigee" if apsis.kind == "pericenter" else "apogee "
        print(f"{apsis.time}  {label}  {apsis.dist_km:,.0f} km")
    return 0


def cmd_diag(tool: str, argv: List[str]) -> int:
    """Run a diagnostics tool; numpy/matplotlib are imported only here."""
    mod = importlib.import_module(_DIAG_TOOLS[tool])
    return int(mod.main(argv) or 0)


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------

_COMMANDS = {
    "position": cmd_position,
    "seasons": cmd_seasons,
    "moon-quarters": cmd_moon_quarters,
    "riseset": cmd_riseset,
    "elongation": cmd_elongation,
    "apsis": cmd_apsis,
}

_DIAG_TOOLS = {
    "plot-deltat": "astrocore.diagnostics.plot_deltat",
    "validate-helio": "astrocore.diagnostics.ephem.validate_helio",
}


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="astrocore", description="Solar System positions and events.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log search iterations (DEBUG)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("position", help="Helio/geocentric vectors, RA/Dec and horizon coordinates")
    sub.add_parser("seasons", help="Equinox and solstice times of a year")
    sub.add_parser("moon-quarters", help="Upcoming lunar quarters")
    sub.add_parser("riseset", help="Rise, culmination and set times for an observer")
    sub.add_parser("elongation", help="Angular distance from the Sun")
    sub.add_parser("apsis", help="Lunar perigees and apogees")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (numpy/matplotlib, ephemeris extras)")
    p_diag.add_argument("tool", choices=sorted(_DIAG_TOOLS), help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.cmd == "diag":
            return cmd_diag(args.tool, rest)
        return _COMMANDS[args.cmd](rest)
    except AstroError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
