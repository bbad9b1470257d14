"""
Tests for the elementary variates.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_rand.engine import JKiss32Engine, JLKiss64Engine
from pysatl_rand.generators.elementary import (
    bernoulli,
    exponential,
    geometric,
    normal,
    standard_bernoulli,
    standard_exponential,
    standard_normal,
    standard_uniform,
    uniform,
)

N_DRAWS = 20_000


def sample_moments(draws: list[float]) -> tuple[float, float]:
    n = len(draws)
    mean = math.fsum(draws) / n
    variance = math.fsum((x - mean) ** 2 for x in draws) / (n - 1)
    return mean, variance


class _MaxEngine:
    """Engine that always returns its largest value."""

    def __init__(self, bits: int) -> None:
        self._max = 2**bits - 1

    def variate(self) -> int:
        return self._max

    def max_value(self) -> int:
        return self._max


class _ZeroEngine(_MaxEngine):
    def variate(self) -> int:
        return 0


class TestUniform:
    @pytest.mark.parametrize("bits", [32, 64])
    def test_open_interval_at_engine_extremes(self, bits) -> None:
        assert 0.0 < standard_uniform(_ZeroEngine(bits)) < 1.0
        assert 0.0 < standard_uniform(_MaxEngine(bits)) < 1.0

    @pytest.mark.parametrize("engine_cls", [JKiss32Engine, JLKiss64Engine])
    def test_moments(self, engine_cls) -> None:
        engine = engine_cls(seed=11)
        mean, variance = sample_moments([standard_uniform(engine) for _ in range(N_DRAWS)])
        assert mean == pytest.approx(0.5, abs=5 * math.sqrt(1 / 12 / N_DRAWS))
        assert variance == pytest.approx(1 / 12, rel=0.05)

    def test_scaled(self) -> None:
        engine = JLKiss64Engine(seed=3)
        draws = [uniform(engine, -2.0, 3.0) for _ in range(1000)]
        assert all(-2.0 < x < 3.0 for x in draws)


class TestContinuousVariates:
    def test_exponential(self) -> None:
        engine = JLKiss64Engine(seed=5)
        mean, variance = sample_moments([exponential(engine, 4.0) for _ in range(N_DRAWS)])
        assert mean == pytest.approx(0.25, abs=5 * 0.25 / math.sqrt(N_DRAWS))
        assert variance == pytest.approx(0.0625, rel=0.1)

    def test_standard_exponential_is_positive(self) -> None:
        engine = JKiss32Engine(seed=5)
        assert all(standard_exponential(engine) > 0.0 for _ in range(1000))

    def test_normal(self) -> None:
        engine = JLKiss64Engine(seed=6)
        mean, variance = sample_moments([normal(engine, 3.0, 2.0) for _ in range(N_DRAWS)])
        assert mean == pytest.approx(3.0, abs=5 * 2.0 / math.sqrt(N_DRAWS))
        assert variance == pytest.approx(4.0, rel=0.05)

    def test_standard_normal_symmetry(self) -> None:
        engine = JLKiss64Engine(seed=7)
        positives = sum(standard_normal(engine) > 0.0 for _ in range(N_DRAWS))
        assert positives / N_DRAWS == pytest.approx(0.5, abs=0.02)


class TestDiscreteVariates:
    @pytest.mark.parametrize("engine_cls", [JKiss32Engine, JLKiss64Engine])
    def test_standard_bernoulli(self, engine_cls) -> None:
        engine = engine_cls(seed=8)
        draws = [standard_bernoulli(engine) for _ in range(N_DRAWS)]
        assert set(draws) == {0, 1}
        assert sum(draws) / N_DRAWS == pytest.approx(0.5, abs=0.02)

    def test_bernoulli(self) -> None:
        engine = JLKiss64Engine(seed=9)
        draws = [bernoulli(engine, 0.2) for _ in range(N_DRAWS)]
        assert sum(draws) / N_DRAWS == pytest.approx(0.2, abs=0.015)

    def test_geometric(self) -> None:
        engine = JLKiss64Engine(seed=10)
        p = 0.3
        mean, _ = sample_moments([geometric(engine, p) for _ in range(N_DRAWS)])
        expected = (1 - p) / p
        assert mean == pytest.approx(expected, abs=5 * math.sqrt((1 - p) / p**2 / N_DRAWS))

    def test_geometric_certain_success(self) -> None:
        assert geometric(JLKiss64Engine(), 1.0) == 0
