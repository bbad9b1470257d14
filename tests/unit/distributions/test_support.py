"""
Tests for distribution supports.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from itertools import islice
from math import inf

import numpy as np
import pytest

from pysatl_rand.distributions.support import ContinuousSupport, IntegerSupport, Support
from pysatl_rand.types import ContinuousSupportShape1D


class TestContinuousSupport:
    def test_default_is_real_line(self) -> None:
        support = ContinuousSupport()
        assert support.bounds == (-inf, inf)
        assert support.shape is ContinuousSupportShape1D.REAL_LINE
        assert not support.left_closed

    def test_contains(self) -> None:
        support = ContinuousSupport(0.0, 1.0, right_closed=False)
        assert 0.0 in support
        assert 1.0 not in support
        np.testing.assert_array_equal(
            support.contains(np.array([-0.1, 0.5, 1.0])), np.array([False, True, False])
        )

    def test_clip(self) -> None:
        support = ContinuousSupport(left=0.0)
        assert support.clip(-3.0) == 0.0
        assert support.clip(5.0) == 5.0
        assert support.shape is ContinuousSupportShape1D.RAY_RIGHT

    def test_protocol(self) -> None:
        assert isinstance(ContinuousSupport(), Support)
        assert isinstance(IntegerSupport(0, 3), Support)


class TestIntegerSupport:
    def test_bounds(self) -> None:
        assert IntegerSupport(0, 10).bounds == (0.0, 10.0)
        assert IntegerSupport(min_k=2).bounds == (2.0, inf)
        assert IntegerSupport().bounds == (-inf, inf)

    def test_invalid_range(self) -> None:
        with pytest.raises(ValueError):
            IntegerSupport(5, 1)

    def test_contains(self) -> None:
        support = IntegerSupport(0, 4)
        assert 0 in support
        assert 4.0 in support
        assert 2.5 not in support
        assert 5 not in support
        assert inf not in IntegerSupport(min_k=0)
        np.testing.assert_array_equal(
            support.contains(np.array([-1, 0, 1.5, 3])), np.array([False, True, False, True])
        )

    def test_clip(self) -> None:
        support = IntegerSupport(0, 4)
        assert support.clip(-2.5) == 0.0
        assert support.clip(2.5) == 2.5
        assert support.clip(9.0) == 4.0

    def test_navigation(self) -> None:
        support = IntegerSupport(0, 2)
        assert support.first() == 0
        assert support.last() == 2
        assert support.next(1) == 2
        assert support.next(2) is None
        assert support.prev(0) is None
        assert support.prev(2) == 1

    def test_iteration(self) -> None:
        assert list(IntegerSupport(1, 4)) == [1, 2, 3, 4]
        assert list(islice(IntegerSupport(min_k=7), 3)) == [7, 8, 9]
        with pytest.raises(RuntimeError):
            next(iter(IntegerSupport(max_k=3)))

    def test_iter_between(self) -> None:
        support = IntegerSupport(0, 10)
        assert list(support.iter_between(2.5, 5.0)) == [3, 4, 5]
        assert list(support.iter_between(-inf, 1.0)) == [0, 1]
        assert list(support.iter_between(8.2, inf)) == [9, 10]
        assert list(support.iter_between(4.2, 4.8)) == []
