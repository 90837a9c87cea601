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

"""Coordinate transformation utilities"""


import numpy as np

from ..core.constants import E2_WGS84, GEOCENTER_TOL, RE_WGS84
from ..core.linalg import matmul, norm


def ecef2llh(xyz: np.ndarray) -> np.ndarray:
    """Convert ECEF coordinates to geodetic coordinates

    Converts Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates
    to geodetic coordinates using an iterative algorithm.

    Parameters
    ----------
    xyz : np.ndarray
        ECEF coordinates [x, y, z] in meters

    Returns
    -------
    np.ndarray
        Geodetic coordinates [lat, lon, height] where:
        - lat: latitude in radians (-π/2 to π/2)
        - lon: longitude in radians (-π to π)
        - height: height above WGS84 ellipsoid in meters

    Notes
    -----
    Iterates on the z-intercept of the ellipsoid normal until it moves by
    less than 1e-7 m, which bounds the height error well below a millimeter.
    Points within GEOCENTER_TOL of the geocenter have no defined normal and
    return [0, 0, -RE_WGS84].

    Examples
    --------
    >>> import numpy as np
    >>> ecef = np.array([-3961904.939, 3348993.763, 3698211.764])  # Tokyo
    >>> llh = ecef2llh(ecef)
    >>> lat_deg, lon_deg = np.degrees(llh[0]), np.degrees(llh[1])
    """
    if norm(np.asarray(xyz, dtype=np.float64)[:3]) < GEOCENTER_TOL:
        return np.array([0.0, 0.0, -RE_WGS84])

    x, y, z = float(xyz[0]), float(xyz[1]), float(xyz[2])
    r2 = x * x + y * y

    zk = 0.0
    v = RE_WGS84
    zn = z
    for _ in range(20):  # Converges in about 6 iterations
        if abs(zn - zk) < 1e-7:
            break
        zk = zn
        sinp = zn / np.sqrt(r2 + zn * zn)
        v = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * sinp * sinp)
        zn = z + v * E2_WGS84 * sinp

    if r2 > 1e-12:
        lat = np.arctan(zn / np.sqrt(r2))
        lon = np.arctan2(y, x)
    else:
        lat = np.pi / 2.0 if z > 0.0 else -np.pi / 2.0
        lon = 0.0

    return np.array([lat, lon, np.sqrt(r2 + zn * zn) - v])


def llh2ecef(llh: np.ndarray) -> np.ndarray:
    """Convert geodetic coordinates to ECEF coordinates

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] where:
        - lat: latitude in radians
        - lon: longitude in radians
        - height: height above WGS84 ellipsoid in meters

    Returns
    -------
    np.ndarray
        ECEF coordinates [x, y, z] in meters

    Notes
    -----
    Uses the WGS84 ellipsoid parameters. This transformation is exact
    (no iterations required).

    Examples
    --------
    >>> import numpy as np
    >>> llh = np.array([np.radians(35.3606), np.radians(138.7274), 3776])  # Mount Fuji
    >>> ecef = llh2ecef(llh)
    """
    lat, lon, h = llh[0], llh[1], llh[2]

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    N = RE_WGS84 / np.sqrt(1.0 - E2_WGS84 * sin_lat**2)

    x = (N + h) * cos_lat * cos_lon
    y = (N + h) * cos_lat * sin_lon
    z = (N * (1.0 - E2_WGS84) + h) * sin_lat

    return np.array([x, y, z])


def xyz2enu(llh: np.ndarray) -> np.ndarray:
    """Compute rotation matrix from ECEF to ENU coordinates

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m); height unused

    Returns
    -------
    np.ndarray
        Rotation matrix E (3x3) whose rows are the East, North and Up unit
        vectors expressed in ECEF, so that v_enu = E @ v_ecef

    Examples
    --------
    >>> import numpy as np
    >>> E = xyz2enu(np.array([np.radians(45.0), 0.0, 0.0]))
    >>> up = E[2]  # local vertical in ECEF
    """
    lat, lon = llh[0], llh[1]
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    return np.array([
        [-sin_lon, cos_lon, 0.0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat]
    ])


def ecef2enu(llh: np.ndarray, r: np.ndarray) -> np.ndarray:
    """Rotate an ECEF vector into the local ENU frame at llh

    Parameters:
    -----------
    llh : np.ndarray
        Origin geodetic coordinates [lat, lon, height] (rad, rad, m)
    r : np.ndarray
        Vector in ECEF (m or m/s)

    Returns:
    --------
    e : np.ndarray
        Vector in local ENU
    """
    return matmul("NN", xyz2enu(llh), np.reshape(r, (3, 1))).ravel()


def enu2ecef(llh: np.ndarray, e: np.ndarray) -> np.ndarray:
    """Rotate a local ENU vector into ECEF

    Transforms a difference or velocity vector, not an absolute position:
    r = E^T @ e with E from xyz2enu().

    Parameters:
    -----------
    llh : np.ndarray
        Origin geodetic coordinates [lat, lon, height] (rad, rad, m)
    e : np.ndarray
        Vector in local ENU [e, n, u]

    Returns:
    --------
    r : np.ndarray
        Vector in ECEF
    """
    return matmul("TN", xyz2enu(llh), np.reshape(e, (3, 1))).ravel()


def cov_to_matrix(q: np.ndarray) -> np.ndarray:
    """Expand packed covariance {c_11,c_22,c_33,c_12,c_23,c_31} to a symmetric 3x3"""
    q = np.asarray(q, dtype=np.float64)
    if q.shape == (3, 3):
        return q.copy()
    if q.shape != (6,):
        raise ValueError(f"Packed covariance must have 6 terms, got shape {q.shape}")
    return np.array([
        [q[0], q[3], q[5]],
        [q[3], q[1], q[4]],
        [q[5], q[4], q[2]]
    ])


def matrix_to_cov(P: np.ndarray) -> np.ndarray:
    """Pack a symmetric 3x3 covariance into {c_11,c_22,c_33,c_12,c_23,c_31}"""
    P = np.asarray(P, dtype=np.float64)
    return np.array([P[0, 0], P[1, 1], P[2, 2], P[0, 1], P[1, 2], P[2, 0]])


def covecef(llh: np.ndarray, Q: np.ndarray) -> np.ndarray:
    """Transform covariance from local ENU to ECEF

    Parameters
    ----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] where rotation is computed
    Q : np.ndarray
        ENU covariance, packed {c_ee,c_nn,c_uu,c_en,c_nu,c_ue} or 3x3

    Returns
    -------
    np.ndarray
        Covariance matrix in ECEF coordinates (3x3)

    Notes
    -----
    Uses the transformation: P = E^T * Q * E where E is the ECEF to ENU
    rotation matrix at the specified location.
    """
    E = xyz2enu(llh)
    return matmul("TN", E, matmul("NN", cov_to_matrix(Q), E))


def covenu(llh: np.ndarray, P: np.ndarray) -> np.ndarray:
    """Transform covariance from ECEF to local ENU

    Parameters:
    -----------
    llh : np.ndarray
        Geodetic coordinates [lat, lon, height] (rad, rad, m)
    P : np.ndarray
        ECEF covariance, packed {c_xx,c_yy,c_zz,c_xy,c_yz,c_zx} or 3x3

    Returns:
    --------
    Q : np.ndarray
        Covariance matrix in ENU (3x3), Q = E * P * E^T
    """
    E = xyz2enu(llh)
    return matmul("NT", matmul("NN", E, cov_to_matrix(P)), E)
