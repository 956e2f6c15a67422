from __future__ import annotations

import math
import time as _wallclock
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from ..reference.deltat import Y2000_IN_MJD, delta_t, terrestrial_time

J2000_JD = 2451545.0
UNIX_EPOCH_UT = -10957.5      # 1970-01-01T00:00:00Z in days since J2000


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _calendar_from_jd(jd: int) -> Tuple[int, int, int]:
    """Gregorian (year, month, day) of the civil day starting at JD jd - 0.5."""
    k = jd + 68569
    n = _cdiv(4 * k, 146097)
    k = k - _cdiv(146097 * n + 3, 4)
    m = _cdiv(4000 * (k + 1), 1461001)
    k = k - _cdiv(1461 * m, 4) + 31
    month = _cdiv(80 * k, 2447)
    day = k - _cdiv(2447 * month, 80)
    k = _cdiv(month, 11)
    month = month + 2 - 12 * k
    year = 100 * (n - 49) + m + k
    return year, month, day


@dataclass(frozen=True)
class UtcDateTime:
    """Broken-down UTC calendar time."""
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: float


@dataclass(frozen=True)
class Time:
    """
    A moment expressed both as UT and TT, in days since 2000-01-01T12:00:00.

    Time(ut) computes tt from the ΔT table; only from_terrestrial_time sets
    tt directly. Time values are immutable; arithmetic returns new instances.
    """
    ut: float
    tt: float = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tt", terrestrial_time(self.ut))

    # -------------------------
    # Construction
    # -------------------------
    @classmethod
    def from_terrestrial_time(cls, tt: float) -> "Time":
        """Build a Time whose tt is exactly `tt`, back-solving ut."""
        ut = tt
        for _ in range(20):
            nxt = tt - delta_t(ut + Y2000_IN_MJD) / 86400.0
            if abs(nxt - ut) < 1e-12:
                ut = nxt
                break
            ut = nxt
        t = cls(ut)
        object.__setattr__(t, "tt", tt)
        return t

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Time":
        """Naive datetimes are taken to be UTC."""
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        sec = dt.second + dt.microsecond / 1e6
        return make_time(dt.year, dt.month, dt.day, dt.hour, dt.minute, sec)

    # -------------------------
    # Arithmetic
    # -------------------------
    def add_days(self, days: float) -> "Time":
        """
        Shift by a number of UT days; tt is recomputed.

        ΔT drifts about a second per year, so adding in UT rather than TT
        differs by roughly 1e-7 * days.
        """
        return Time(self.ut + days)

    # -------------------------
    # Conversions
    # -------------------------
    def to_datetime(self) -> datetime:
        u = utc_from_time(self)
        whole = int(u.second)
        micro = int(round((u.second - whole) * 1e6))
        if micro >= 1000000:
            whole, micro = whole + 1, micro - 1000000
        base = datetime(u.year, u.month, u.day, u.hour, u.minute, tzinfo=timezone.utc)
        return base + timedelta(seconds=whole, microseconds=micro)

    def __str__(self) -> str:
        # days since 2000-01-01T00:00Z
        d = self.ut + 0.5
        day = math.floor(d)
        micros = round((d - day) * 86400e6)
        if micros >= 86400000000:
            day += 1
            micros -= 86400000000
        millis = micros // 1000
        year, month, mday = _calendar_from_jd(int(day) + 2451545)
        hour, rem = divmod(millis, 3600000)
        minute, rem = divmod(rem, 60000)
        second, ms = divmod(rem, 1000)
        ytext = f"{year:04d}" if 0 <= year <= 9999 else f"{year:+06d}"
        return f"{ytext}-{month:02d}-{mday:02d}T{hour:02d}:{minute:02d}:{second:02d}.{ms:03d}Z"


# ---------------------------------------------------------------------------
# Calendar conversions
# ---------------------------------------------------------------------------

def make_time(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: float = 0.0) -> Time:
    """
    Proleptic Gregorian UTC calendar fields to Time.

    Fields are not range-checked; out-of-range values give an arithmetically
    valid but meaningless time.
    """
    y = int(year)
    m = int(month)
    d = int(day)
    jd12h = (
        d - 32075
        + _cdiv(1461 * (y + 4800 + _cdiv(m - 14, 12)), 4)
        + _cdiv(367 * (m - 2 - _cdiv(m - 14, 12) * 12), 12)
        - _cdiv(3 * _cdiv(y + 4900 + _cdiv(m - 14, 12), 100), 4)
    )
    y2000 = float(jd12h - 2451545)
    ut = y2000 - 0.5 + (hour / 24.0) + (minute / (24.0 * 60.0)) + (second / (24.0 * 3600.0))
    return Time(ut)


def time_from_utc(utc: UtcDateTime) -> Time:
    return make_time(utc.year, utc.month, utc.day, utc.hour, utc.minute, utc.second)


def utc_from_time(t: Time) -> UtcDateTime:
    """Time to broken-down UTC (integer cal_date algorithm)."""
    djd = t.ut + 2451545.5
    jd = int(djd)

    x = 24.0 * math.fmod(djd, 1.0)
    hour = int(x)
    x = 60.0 * math.fmod(x, 1.0)
    minute = int(x)
    second = 60.0 * math.fmod(x, 1.0)

    year, month, day = _calendar_from_jd(jd)
    return UtcDateTime(year, month, day, hour, minute, second)


def add_days(t: Time, days: float) -> Time:
    return t.add_days(days)


def current_time(clock: Optional[float] = None) -> Time:
    """Wall-clock time now (or at the given Unix timestamp)."""
    secs = _wallclock.time() if clock is None else clock
    return Time(secs / 86400.0 + UNIX_EPOCH_UT)
