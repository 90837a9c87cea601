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

"""Core data structures for solution ingestion"""

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from .constants import SOLQ_NONE, SOLTYPE_XYZ, TIMES_GPST, TIMES_JST
from .time import GTime, epoch2time


@dataclass(frozen=True)
class Solution:
    """Positioning solution of one navigation epoch.

    Attributes
    ----------
    time : GTime
        Solution epoch in GPS time
    rr : np.ndarray
        Position/velocity, shape (6,): {x,y,z,vx,vy,vz} in ECEF (m, m/s)
        or {e,n,u,ve,vn,vu} for baselines
    qr : np.ndarray
        Position variance/covariance (m²), shape (6,):
        {c_xx,c_yy,c_zz,c_xy,c_yz,c_zx} or {c_ee,c_nn,c_uu,c_en,c_nu,c_ue}
    qv : np.ndarray
        Velocity variance/covariance (m²/s²), shape (6,), same packing as qr
    dtr : np.ndarray
        Receiver clock bias to time systems (s), shape (6,)
    type : int
        SOLTYPE_XYZ (ECEF) or SOLTYPE_ENU (baseline)
    stat : int
        Solution status (SOLQ_NONE, SOLQ_FIX, ...), 0..255
    ns : int
        Number of valid satellites
    age : float
        Age of differential (s)
    ratio : float
        AR ratio factor for validation
    thres : float
        AR ratio threshold for validation

    Notes
    -----
    Records are created once by the decoder and never modified after they
    enter a solution buffer.  The arrays are copied on construction and
    made read-only.
    """
    time: GTime = field(default_factory=GTime)
    rr: np.ndarray = field(default_factory=lambda: np.zeros(6))
    qr: np.ndarray = field(default_factory=lambda: np.zeros(6, dtype=np.float32))
    qv: np.ndarray = field(default_factory=lambda: np.zeros(6, dtype=np.float32))
    dtr: np.ndarray = field(default_factory=lambda: np.zeros(6))
    type: int = SOLTYPE_XYZ
    stat: int = SOLQ_NONE
    ns: int = 0
    age: float = 0.0
    ratio: float = 0.0
    thres: float = 0.0

    def __post_init__(self):
        for name, dtype in (('rr', np.float64), ('qr', np.float32),
                            ('qv', np.float32), ('dtr', np.float64)):
            value = np.array(getattr(self, name), dtype=dtype)
            if value.shape != (6,):
                raise ValueError(f"{name} must have 6 elements, got shape {value.shape}")
            value.flags.writeable = False
            object.__setattr__(self, name, value)

    def get_llh(self) -> np.ndarray:
        """Get geodetic position [lat (rad), lon (rad), height (m)] of an ECEF solution."""
        from ..coordinate import ecef2llh
        return ecef2llh(self.rr[:3])

    def get_enu_cov(self) -> np.ndarray:
        """Get 3x3 position covariance in local ENU coordinates at the solution position."""
        from ..coordinate import cov_to_matrix, covenu
        return covenu(self.get_llh(), cov_to_matrix(self.qr))


@dataclass(frozen=True)
class SolutionOptions:
    """Options describing how solution records are read.

    Only the time system of the record time tags is consulted by the decoder.
    """
    times: int = TIMES_GPST     # time system (TIMES_???)

    def __post_init__(self):
        if not TIMES_GPST <= self.times <= TIMES_JST:
            raise ValueError(f"Invalid time system: {self.times}")


SOLOPT_DEFAULT = SolutionOptions()


def _to_gtime(value: Any) -> GTime:
    if value is None:
        return GTime()
    if isinstance(value, GTime):
        return value
    if isinstance(value, (list, tuple)):
        return epoch2time(value)
    return GTime(int(value), float(value) - int(value))


@dataclass
class ReadConfig:
    """Window, filter and buffer settings for reading solutions.

    Attributes
    ----------
    ts, te : GTime
        Start/end time of the window (``time == 0``: unbounded)
    tint : float
        Time interval (s) (0: all)
    qflag : int
        Quality flag (0: all)
    cyclic : bool
        Use a fixed-capacity ring buffer instead of a growable array
    nmax : int
        Ring capacity (ignored for the growable array)
    """
    ts: GTime = field(default_factory=GTime)
    te: GTime = field(default_factory=GTime)
    tint: float = 0.0
    qflag: int = 0
    cyclic: bool = False
    nmax: int = 0

    def __post_init__(self):
        self.ts = _to_gtime(self.ts)
        self.te = _to_gtime(self.te)
        if self.tint < 0.0:
            raise ValueError(f"Time interval must be non-negative: {self.tint}")
        if not 0 <= self.qflag <= 255:
            raise ValueError(f"Quality flag out of range: {self.qflag}")
        if self.cyclic and self.nmax <= 1:
            raise ValueError(f"Cyclic buffer requires nmax >= 2: {self.nmax}")

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'ReadConfig':
        """Configure from dictionary

        Example config:
        {
            'ts': [2024, 3, 1, 0, 0, 0],
            'te': [2024, 3, 2, 0, 0, 0],
            'tint': 1.0,
            'qflag': 1,
            'cyclic': False,
        }
        """
        known = {'ts', 'te', 'tint', 'qflag', 'cyclic', 'nmax'}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**config)
