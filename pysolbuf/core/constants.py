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

"""Solution Buffer Constants and System Parameters"""

import numpy as np

# Earth Parameters (WGS84)
RE_WGS84 = 6378137.0           # earth semimajor axis (m)
FE_WGS84 = 1.0 / 298.257223563 # earth flattening
E2_WGS84 = FE_WGS84 * (2.0 - FE_WGS84)  # eccentricity squared
GEOCENTER_TOL = 1.0E-3         # radius treated as the geocenter (m)

# Unit conversion
D2R = np.pi / 180.0            # degrees to radians

# Time System Parameters
GPST0 = [1980, 1, 6, 0, 0, 0]  # GPS time reference epoch
WEEKSEC = 604800               # seconds in a GPS week
DTTOL = 0.025                  # tolerance of time difference (s)
JST_OFFSET = 9.0 * 3600.0      # JST - UTC (s)

# Time systems of solution records
TIMES_GPST = 0      # gps time
TIMES_UTC = 1       # utc
TIMES_JST = 2       # jst

# Solution types
SOLTYPE_XYZ = 0     # xyz-ecef
SOLTYPE_ENU = 1     # enu-baseline

# Solution Status
SOLQ_NONE = 0       # no solution
SOLQ_FIX = 1        # fixed solution

# Solution stream
MAXSOLMSG = 8191               # max length of solution message
SOLBUF_SEED = 8192             # initial capacity of a linear solution buffer
COMMENTH = "%"                 # comment line indicator for solution
MSG_DISCONN = "$_DISCONNECT\r\n"  # disconnect message
SOLSYNC = ord("$")             # line start marker
