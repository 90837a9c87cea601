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

"""Dense linear algebra primitives shared by the coordinate transforms"""

from typing import Optional

import numpy as np


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Inner product of two vectors"""
    return float(np.dot(np.ravel(a), np.ravel(b)))


def norm(a: np.ndarray) -> float:
    """Euclidean norm of a vector"""
    return float(np.sqrt(dot(a, a)))


def matmul(tr: str, A: np.ndarray, B: np.ndarray, alpha: float = 1.0,
           beta: float = 0.0, C: Optional[np.ndarray] = None) -> np.ndarray:
    """Multiply matrices: C = alpha * op(A) @ op(B) + beta * C

    Parameters
    ----------
    tr : str
        Two transpose flags for A and B, each 'N' (as is) or 'T' (transposed)
    A, B : np.ndarray
        Row-major dense matrices of compatible shapes after op()
    alpha, beta : float
        Scale factors
    C : np.ndarray, optional
        Accumulator, required when beta is nonzero

    Returns
    -------
    np.ndarray
        The product; C itself is not modified

    Examples
    --------
    >>> E = np.eye(3)
    >>> P = matmul("TN", E, matmul("NN", np.diag([1.0, 2.0, 3.0]), E))
    """
    if len(tr) != 2 or any(f not in "NT" for f in tr):
        raise ValueError(f"Invalid transpose flags: {tr!r}")

    opA = np.atleast_2d(np.asarray(A, dtype=np.float64))
    opB = np.atleast_2d(np.asarray(B, dtype=np.float64))
    if tr[0] == 'T':
        opA = opA.T
    if tr[1] == 'T':
        opB = opB.T
    if opA.shape[1] != opB.shape[0]:
        raise ValueError(f"Incompatible shapes: {opA.shape} and {opB.shape}")

    result = alpha * (opA @ opB)
    if beta != 0.0:
        if C is None:
            raise ValueError("C is required when beta is nonzero")
        result = result + beta * np.asarray(C, dtype=np.float64).reshape(result.shape)
    return result
