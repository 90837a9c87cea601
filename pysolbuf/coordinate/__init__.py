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

"""Coordinate transformation utilities

This module provides the geodetic transforms used by the solution readers:
- ECEF <-> geodetic (WGS84 latitude, longitude, ellipsoidal height)
- ECEF <-> local ENU rotations for difference and velocity vectors
- Covariance propagation between ENU and ECEF, packed or full 3x3
"""

from .transforms import (
    cov_to_matrix,
    covecef,
    covenu,
    ecef2enu,
    ecef2llh,
    enu2ecef,
    llh2ecef,
    matrix_to_cov,
    xyz2enu,
)
