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

"""Core Solution Processing Module.

This module provides the foundation shared by the solution readers:

- **Constants**: WGS84 ellipsoid, time system, solution format and quality
  constants, stream limits
- **Time Systems**: GTime instants, calendar conversion, GPS week/TOW,
  leap-second aware GPST/UTC conversion and time window screening
- **Linear Algebra**: dot/norm/matmul primitives
- **Data Structures**: Solution records, solution options and read
  configuration

Example Usage:
    >>> from pysolbuf.core import *
    >>>
    >>> t = epoch2time([2024, 3, 1, 12, 0, 0.5])
    >>> week, tow = time2gpst(t)
    >>> screent(t, GTime(), GTime(), 1.0)
"""

from .constants import *
from .data_structures import *
from .linalg import dot, matmul, norm
from .time import *
