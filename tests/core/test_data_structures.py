#!/usr/bin/env python3
"""Test suite for data structures"""

import dataclasses
import unittest

import numpy as np

from pysolbuf.coordinate.transforms import llh2ecef
from pysolbuf.core.constants import SOLQ_FIX, SOLQ_NONE, SOLTYPE_XYZ, TIMES_GPST, TIMES_UTC
from pysolbuf.core.data_structures import (
    SOLOPT_DEFAULT, ReadConfig, Solution, SolutionOptions
)
from pysolbuf.core.time import GTime, epoch2time


class TestSolution(unittest.TestCase):
    """Test solution record"""

    def test_defaults(self):
        sol = Solution()
        self.assertEqual(sol.time, GTime())
        self.assertEqual(sol.rr.shape, (6,))
        self.assertEqual(sol.qr.shape, (6,))
        self.assertEqual(sol.qv.shape, (6,))
        self.assertEqual(sol.dtr.shape, (6,))
        self.assertEqual(sol.type, SOLTYPE_XYZ)
        self.assertEqual(sol.stat, SOLQ_NONE)
        self.assertEqual(sol.ns, 0)

    def test_arrays_not_shared(self):
        sol1 = Solution()
        sol2 = Solution()
        self.assertIsNot(sol1.rr, sol2.rr)

    def test_immutable(self):
        sol = Solution(stat=SOLQ_FIX)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            sol.stat = SOLQ_NONE

    def test_arrays_read_only(self):
        rr = np.arange(6, dtype=np.float64)
        sol = Solution(rr=rr)
        with self.assertRaises(ValueError):
            sol.rr[0] = 1.0
        with self.assertRaises(ValueError):
            sol.qr[:] = 0.5
        # The caller's array is copied, not frozen
        rr[0] = 10.0
        self.assertEqual(sol.rr[0], 0.0)
        self.assertEqual(sol.qr.dtype, np.float32)

    def test_array_shape(self):
        with self.assertRaises(ValueError):
            Solution(rr=np.zeros(3))

    def test_get_llh(self):
        llh = np.array([np.radians(35.0), np.radians(139.0), 100.0])
        rr = np.zeros(6)
        rr[:3] = llh2ecef(llh)
        sol = Solution(rr=rr)
        np.testing.assert_allclose(sol.get_llh(), llh, atol=1e-9)

    def test_get_enu_cov(self):
        rr = np.zeros(6)
        rr[:3] = llh2ecef(np.array([np.radians(35.0), np.radians(139.0), 100.0]))
        sol = Solution(rr=rr, qr=np.array([0.01, 0.01, 0.01, 0.0, 0.0, 0.0], dtype=np.float32))
        # Isotropic covariance is invariant under rotation
        np.testing.assert_allclose(sol.get_enu_cov(), np.eye(3) * 0.01, atol=1e-9)


class TestSolutionOptions(unittest.TestCase):

    def test_default(self):
        self.assertEqual(SOLOPT_DEFAULT.times, TIMES_GPST)
        self.assertEqual(SolutionOptions(times=TIMES_UTC).times, TIMES_UTC)

    def test_invalid_time_system(self):
        with self.assertRaises(ValueError):
            SolutionOptions(times=5)


class TestReadConfig(unittest.TestCase):

    def test_defaults_are_unbounded(self):
        config = ReadConfig()
        self.assertEqual(config.ts.time, 0)
        self.assertEqual(config.te.time, 0)
        self.assertEqual(config.tint, 0.0)
        self.assertEqual(config.qflag, 0)
        self.assertFalse(config.cyclic)

    def test_from_dict(self):
        config = ReadConfig.from_dict({
            'ts': [2024, 3, 1, 0, 0, 0],
            'te': [2024, 3, 2, 0, 0, 0],
            'tint': 1.0,
            'qflag': 1,
        })
        self.assertEqual(config.ts, epoch2time([2024, 3, 1, 0, 0, 0]))
        self.assertEqual(config.te, epoch2time([2024, 3, 2, 0, 0, 0]))
        self.assertEqual(config.tint, 1.0)
        self.assertEqual(config.qflag, 1)

    def test_from_dict_unknown_key(self):
        with self.assertRaises(ValueError):
            ReadConfig.from_dict({'start': 0})

    def test_validation(self):
        with self.assertRaises(ValueError):
            ReadConfig(tint=-1.0)
        with self.assertRaises(ValueError):
            ReadConfig(qflag=300)
        with self.assertRaises(ValueError):
            ReadConfig(cyclic=True, nmax=1)
        self.assertEqual(ReadConfig(cyclic=True, nmax=2).nmax, 2)


if __name__ == '__main__':
    unittest.main()
