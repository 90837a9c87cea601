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

"""Solution buffer with growable or ring storage.

Two storage disciplines share one insert/get contract:

- linear: capacity seeds to SOLBUF_SEED and doubles whenever a new record
  would not fit; nothing is ever evicted.  After ingestion the buffer is
  sorted by time and shrunk to fit once with sort_chronological().
- cyclic: fixed capacity ``nmax``; records are appended at ``end`` and the
  oldest one is evicted when ``end`` catches up with ``start``, so at most
  ``nmax - 1`` records are held.
"""

import logging
from typing import Iterator, List, Optional

import numpy as np
import pandas as pd

from ..core.constants import SOLBUF_SEED
from ..core.data_structures import Solution
from ..core.time import GTime, time2gpst, timediff
from .solution import SolutionStreamParser

logger = logging.getLogger(__name__)


class SolutionBuffer:
    """Store of decoded solutions

    Parameters
    ----------
    cyclic : bool
        Ring buffer (True) or growable array (False)
    nmax : int
        Ring capacity, at least 2; ignored for the growable array

    Attributes
    ----------
    n : int
        Number of stored solutions
    nmax : int
        Current capacity
    start, end : int
        Ring indices of the oldest record and of the next write
    time : GTime
        Time of the last decoded solution
    rb : np.ndarray
        Reference position {x,y,z} (ECEF, m) for baseline solutions
    parser : SolutionStreamParser
        Line buffer of the stream feeding this buffer
    alloc_failed : bool
        Set when growing the array failed and the buffer was emptied

    Raises
    ------
    ValueError
        If a cyclic buffer is requested with nmax < 2
    """

    def __init__(self, cyclic: bool = False, nmax: int = 0):
        self.data: List[Optional[Solution]] = []
        self.time = GTime()
        self.parser = SolutionStreamParser()
        self.init(cyclic, nmax)

    def init(self, cyclic: bool, nmax: int = 0):
        """(Re)initialize as an empty linear or cyclic buffer"""
        if cyclic and nmax <= 1:
            raise ValueError(f"Cyclic solution buffer requires nmax >= 2: {nmax}")
        self.reset()
        self.cyclic = bool(cyclic)
        if self.cyclic:
            self.data = [None] * nmax
            self.nmax = nmax

    def reset(self):
        """Release storage and clear counters, line buffer and reference position"""
        self.data = []
        self.n = self.nmax = self.start = self.end = 0
        self.rb = np.zeros(3)
        self.parser.reset()
        self.alloc_failed = False

    def _release(self):
        self.data = []
        self.n = self.nmax = self.start = self.end = 0

    def insert(self, sol: Solution) -> bool:
        """Add a solution

        Returns
        -------
        bool
            False if the ring has fewer than 2 slots or if growing the array
            failed, in which case every stored solution is lost
        """
        if self.cyclic:
            if self.nmax <= 1:
                return False
            self.data[self.end] = sol
            self.end = (self.end + 1) % self.nmax
            if self.start == self.end:
                self.start = (self.start + 1) % self.nmax
            else:
                self.n += 1
            return True

        if self.n >= self.nmax:
            nmax = SOLBUF_SEED if self.nmax == 0 else self.nmax * 2
            try:
                self.data.extend([None] * (nmax - len(self.data)))
            except MemoryError:
                logger.error("Solution buffer allocation failed: nmax=%d", nmax)
                self._release()
                self.alloc_failed = True
                return False
            self.nmax = nmax
        self.data[self.n] = sol
        self.n += 1
        return True

    def get(self, index: int) -> Optional[Solution]:
        """Get solution by logical index (0: oldest), None if out of range"""
        if index < 0 or index >= self.n:
            return None
        index += self.start
        if index >= self.nmax:
            index -= self.nmax
        return self.data[index]

    def sort_chronological(self) -> bool:
        """Sort the solutions by time and shrink storage to fit

        Only meaningful for the growable array; ring buffers are already in
        insertion order and are left untouched.  Records with equal times may
        come out in any order.

        Returns
        -------
        bool
            True if the buffer holds at least one solution and was sorted
        """
        if self.cyclic:
            logger.warning("Sort requested on a cyclic solution buffer, ignored")
            return False
        if self.n <= 0:
            return False

        t0 = self.data[0].time
        self.data = sorted(self.data[:self.n], key=lambda sol: timediff(sol.time, t0))
        self.nmax = self.n
        self.start = 0
        self.end = self.n - 1
        return True

    def __len__(self) -> int:
        return self.n

    def __iter__(self) -> Iterator[Solution]:
        for i in range(self.n):
            yield self.get(i)

    def to_dataframe(self) -> pd.DataFrame:
        """Export the solutions in logical order as a DataFrame

        Columns: week, tow, x, y, z, vx, vy, vz (ECEF), lat, lon (deg),
        height (m), stat, ns, age, ratio.
        """
        rows = []
        for sol in self:
            week, tow = time2gpst(sol.time)
            llh = sol.get_llh()
            rows.append({
                'week': week, 'tow': tow,
                'x': sol.rr[0], 'y': sol.rr[1], 'z': sol.rr[2],
                'vx': sol.rr[3], 'vy': sol.rr[4], 'vz': sol.rr[5],
                'lat': np.degrees(llh[0]), 'lon': np.degrees(llh[1]), 'height': llh[2],
                'stat': sol.stat, 'ns': sol.ns, 'age': sol.age, 'ratio': sol.ratio,
            })
        columns = ['week', 'tow', 'x', 'y', 'z', 'vx', 'vy', 'vz',
                   'lat', 'lon', 'height', 'stat', 'ns', 'age', 'ratio']
        return pd.DataFrame(rows, columns=columns)

    def __repr__(self):
        mode = "cyclic" if self.cyclic else "linear"
        return f"SolutionBuffer({mode}, n={self.n}, nmax={self.nmax})"
