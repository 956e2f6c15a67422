"""
astrocore.engines.search
------------------------
Generic root finder for scalar functions of time: bisection combined with
quadratic interpolation. Every event finder reduces to an ascending
zero-crossing of some f(t) over a bracketing window.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Tuple

from ..core.errors import NoConvergeError, SearchFailureError
from ..core.time import Time
from ..reference.astro_args import SECONDS_PER_DAY

logger = logging.getLogger(__name__)

SearchFunc = Callable[[Time], float]

ITER_LIMIT = 20


def quad_interp(tm: float, dt: float, fa: float, fm: float, fb: float) -> Optional[Tuple[float, float, float]]:
    """
    Fit a parabola through (tm-dt, fa), (tm, fm), (tm+dt, fb).

    Returns (x, t, df_dt) for the unique root with x in [-1, +1], or None when
    there is no such root (or two of them).
    """
    Q = (fb + fa) / 2.0 - fm
    R = (fb - fa) / 2.0
    S = fm

    if Q == 0.0:
        # a line
        if R == 0.0:
            return None
        x = -S / R
        if x < -1.0 or x > +1.0:
            return None
    else:
        u = R * R - 4 * Q * S
        if u <= 0.0:
            return None
        ru = math.sqrt(u)
        x1 = (-R + ru) / (2.0 * Q)
        x2 = (-R - ru) / (2.0 * Q)
        if -1.0 <= x1 <= +1.0:
            if -1.0 <= x2 <= +1.0:
                return None
            x = x1
        elif -1.0 <= x2 <= +1.0:
            x = x2
        else:
            return None

    t = tm + x * dt
    df_dt = (2 * Q * x + R) / dt
    return x, t, df_dt


def search(func: SearchFunc, t1: Time, t2: Time, dt_tolerance_seconds: float) -> Time:
    """
    Find the time in [t1, t2] where func ascends through zero.

    The window must contain at most one zero-crossing. Raises
    SearchFailureError when no ascending crossing is found and
    NoConvergeError after too many iterations.
    """
    dt_days = abs(dt_tolerance_seconds / SECONDS_PER_DAY)
    f1 = func(t1)
    f2 = func(t2)
    fmid = 0.0
    calc_fmid = True

    it = 0
    while True:
        it += 1
        if it > ITER_LIMIT:
            raise NoConvergeError(f"search did not converge after {ITER_LIMIT} iterations")

        dt = (t2.tt - t1.tt) / 2.0
        tmid = t1.add_days(dt)
        if abs(dt) < dt_days:
            logger.debug("search converged by bisection at %s (iter=%d)", tmid, it)
            return tmid

        if calc_fmid:
            fmid = func(tmid)
        else:
            calc_fmid = True

        q = quad_interp(tmid.ut, t2.ut - tmid.ut, f1, fmid, f2)
        if q is not None:
            _x, q_ut, q_df_dt = q
            tq = Time(q_ut)
            fq = func(tq)
            if q_df_dt != 0.0:
                if abs(fq / q_df_dt) < dt_days:
                    logger.debug("search converged by interpolation at %s (iter=%d)", tq, it)
                    return tq

                # try a tighter window centred on the interpolated root
                dt_guess = 1.2 * abs(fq / q_df_dt)
                if dt_guess < dt / 10.0:
                    tleft = tq.add_days(-dt_guess)
                    tright = tq.add_days(+dt_guess)
                    if (tleft.ut - t1.ut) * (tleft.ut - t2.ut) < 0:
                        if (tright.ut - t1.ut) * (tright.ut - t2.ut) < 0:
                            fleft = func(tleft)
                            fright = func(tright)
                            if fleft < 0.0 and fright >= 0.0:
                                f1, f2 = fleft, fright
                                t1, t2 = tleft, tright
                                fmid = fq
                                calc_fmid = False
                                continue

        if f1 < 0.0 and fmid >= 0.0:
            t2, f2 = tmid, fmid
            continue

        if fmid < 0.0 and f2 >= 0.0:
            t1, f1 = tmid, fmid
            continue

        # no ascending crossing, or the window spans more than one
        raise SearchFailureError(f"no ascending zero-crossing between {t1} and {t2}")
