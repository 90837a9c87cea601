# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""GNSS Time Systems and Conversions

Instants are held as whole seconds since 1970-01-01 00:00:00 plus a
fractional second in [0, 1), the representation used by RTKLIB's
``gtime_t``.  Keeping the two parts apart preserves sub-microsecond
resolution for epochs decades away from the reference.
"""

import math
from datetime import date
from typing import List, Sequence, Tuple, Union

from .constants import DTTOL, GPST0, WEEKSEC

_UNIX_ORDINAL = date(1970, 1, 1).toordinal()

# Instants the calendar functions can represent (0001/01/01 to 9999/12/30)
TIME_MIN = (date.min.toordinal() - _UNIX_ORDINAL) * 86400
TIME_MAX = (date.max.toordinal() - _UNIX_ORDINAL) * 86400 - 1

# Leap seconds (utc - gpst) in effect from each date, oldest first
LEAPS = (
    ((1980, 1, 6, 0, 0, 0), 0),
    ((1981, 7, 1, 0, 0, 0), -1),
    ((1982, 7, 1, 0, 0, 0), -2),
    ((1983, 7, 1, 0, 0, 0), -3),
    ((1985, 7, 1, 0, 0, 0), -4),
    ((1988, 1, 1, 0, 0, 0), -5),
    ((1990, 1, 1, 0, 0, 0), -6),
    ((1991, 1, 1, 0, 0, 0), -7),
    ((1992, 7, 1, 0, 0, 0), -8),
    ((1993, 7, 1, 0, 0, 0), -9),
    ((1994, 7, 1, 0, 0, 0), -10),
    ((1996, 1, 1, 0, 0, 0), -11),
    ((1997, 7, 1, 0, 0, 0), -12),
    ((1999, 1, 1, 0, 0, 0), -13),
    ((2006, 1, 1, 0, 0, 0), -14),
    ((2009, 1, 1, 0, 0, 0), -15),
    ((2012, 7, 1, 0, 0, 0), -16),
    ((2015, 7, 1, 0, 0, 0), -17),
    ((2017, 1, 1, 0, 0, 0), -18),
)


class GTime:
    """Instant expressed as (integer seconds, fractional second)

    Parameters:
    -----------
    time : int
        Seconds since 1970-01-01 00:00:00
    sec : float
        Fraction of second, normalized into [0, 1)

    A zero ``time`` is used by the screening functions as "no bound".
    """

    __slots__ = ('time', 'sec')

    def __init__(self, time: int = 0, sec: float = 0.0):
        carry = math.floor(sec)
        self.time = int(time) + int(carry)
        self.sec = float(sec - carry)

    def __add__(self, seconds: float) -> 'GTime':
        """Add seconds using + operator"""
        if isinstance(seconds, (int, float)):
            return timeadd(self, seconds)
        return NotImplemented

    def __sub__(self, other: Union['GTime', float]) -> Union[float, 'GTime']:
        """Subtract time (difference in seconds) or seconds"""
        if isinstance(other, GTime):
            return timediff(self, other)
        if isinstance(other, (int, float)):
            return timeadd(self, -other)
        return NotImplemented

    def _key(self) -> Tuple[int, float]:
        return self.time, self.sec

    def __lt__(self, other: 'GTime') -> bool:
        if not isinstance(other, GTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: 'GTime') -> bool:
        if not isinstance(other, GTime):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: 'GTime') -> bool:
        if not isinstance(other, GTime):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: 'GTime') -> bool:
        if not isinstance(other, GTime):
            return NotImplemented
        return self._key() >= other._key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GTime):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return time2str(self, 3)

    def __repr__(self):
        return f"GTime({self.time}, {self.sec!r})"


def epoch2time(ep: Sequence[float]) -> GTime:
    """Convert calendar day/time to GTime

    Parameters:
    -----------
    ep : sequence of float
        {year, month, day, hour, min, sec}, sec may carry a fraction

    Returns:
    --------
    GTime
        Instant on the proleptic Gregorian calendar

    Raises:
    -------
    ValueError
        If year/month/day do not form a valid date
    """
    year, mon, day = int(ep[0]), int(ep[1]), int(ep[2])
    days = date(year, mon, day).toordinal() - _UNIX_ORDINAL
    sec = math.floor(ep[5])
    return GTime(days * 86400 + int(ep[3]) * 3600 + int(ep[4]) * 60 + int(sec),
                 ep[5] - sec)


def time2epoch(t: GTime) -> List[float]:
    """Convert GTime to calendar day/time {year, month, day, hour, min, sec}"""
    days, sec = divmod(t.time, 86400)
    d = date.fromordinal(_UNIX_ORDINAL + days)
    return [float(d.year), float(d.month), float(d.day),
            float(sec // 3600), float(sec % 3600 // 60), sec % 60 + t.sec]


def timeadd(t: GTime, sec: float) -> GTime:
    """Add seconds to time

    The integral and fractional parts of ``sec`` are combined separately so
    that small deltas are not absorbed by a large epoch value.
    """
    whole = math.floor(sec)
    tt = t.sec + (sec - whole)
    carry = math.floor(tt)
    return GTime(t.time + int(whole) + int(carry), tt - carry)


def timediff(t1: GTime, t2: GTime) -> float:
    """Compute time difference t1 - t2 in seconds"""
    return float(t1.time - t2.time) + (t1.sec - t2.sec)


def time2gpst(t: GTime) -> Tuple[int, float]:
    """Convert GTime to GPS week and time of week

    Returns:
    --------
    tuple : (week, tow)
        GPS week number and time of week in seconds
    """
    t0 = epoch2time(GPST0)
    sec = t.time - t0.time
    week = sec // WEEKSEC
    return int(week), float(sec - week * WEEKSEC) + t.sec


def gpst2time(week: int, tow: float) -> GTime:
    """Convert GPS week and time of week to GTime"""
    return timeadd(GTime(epoch2time(GPST0).time + WEEKSEC * int(week)), tow)


def gpst2utc(t: GTime) -> GTime:
    """Convert GPS time to UTC using the leap seconds table

    Instants before the GPS epoch are returned unchanged.
    """
    for ep, leap in reversed(LEAPS):
        tu = timeadd(t, leap)
        if timediff(tu, epoch2time(ep)) >= 0.0:
            return tu
    return GTime(t.time, t.sec)


def utc2gpst(t: GTime) -> GTime:
    """Convert UTC to GPS time using the leap seconds table"""
    for ep, leap in reversed(LEAPS):
        if timediff(t, epoch2time(ep)) >= 0.0:
            return timeadd(t, -leap)
    return GTime(t.time, t.sec)


def screent(time: GTime, ts: GTime, te: GTime, tint: float) -> bool:
    """Screen time by window and interval

    Parameters:
    -----------
    time : GTime
        Time to screen
    ts, te : GTime
        Start/end of the window (``time == 0``: unbounded)
    tint : float
        Time interval (s), 0 disables interval screening

    Returns:
    --------
    bool
        True if ``time`` lies in the window and, for ``tint > 0``, within
        DTTOL of a multiple of ``tint`` in GPS time of week
    """
    if tint > 0.0:
        _, tow = time2gpst(time)
        if math.fmod(tow + DTTOL, tint) > DTTOL * 2.0:
            return False
    if ts.time != 0 and timediff(time, ts) < -DTTOL:
        return False
    if te.time != 0 and timediff(time, te) >= DTTOL:
        return False
    return True


def time2str(t: GTime, n: int = 0) -> str:
    """Format time as 'yyyy/mm/dd hh:mm:ss.sss' with n decimals (0-12)"""
    n = min(max(n, 0), 12)
    if 1.0 - t.sec < 0.5 / 10.0 ** n:
        t = GTime(t.time + 1, 0.0)
    ep = time2epoch(t)
    width = 2 if n <= 0 else n + 3
    return (f"{ep[0]:04.0f}/{ep[1]:02.0f}/{ep[2]:02.0f} "
            f"{ep[3]:02.0f}:{ep[4]:02.0f}:{ep[5]:0{width}.{n}f}")
