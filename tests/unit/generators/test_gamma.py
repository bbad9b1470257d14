"""
Tests for the regime-dispatched Gamma sampler.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_rand.config import configure_settings
from pysatl_rand.engine import JLKiss64Engine
from pysatl_rand.errors import RejectionLoopExhaustedWarning
from pysatl_rand.generators import GammaRegime, GammaSampler, LargeShapeConstants
from pysatl_rand.generators.gamma import is_integral, select_regime

N_DRAWS = 50_000


class TestRegimeSelection:
    @pytest.mark.parametrize(
        "shape, regime",
        [
            (1.0, GammaRegime.INTEGER_SHAPE),
            (4.0, GammaRegime.INTEGER_SHAPE),
            (3.0000001, GammaRegime.INTEGER_SHAPE),
            (0.5, GammaRegime.HALF_INTEGER_SHAPE),
            (2.5, GammaRegime.HALF_INTEGER_SHAPE),
            (4.5, GammaRegime.HALF_INTEGER_SHAPE),
            (0.3, GammaRegime.SMALL_SHAPE),
            (0.999, GammaRegime.SMALL_SHAPE),
            (1.7, GammaRegime.MEDIUM_SHAPE),
            (3.0001, GammaRegime.LARGE_SHAPE),
            (3.7, GammaRegime.LARGE_SHAPE),
            (5.0, GammaRegime.LARGE_SHAPE),
            (7.5, GammaRegime.LARGE_SHAPE),
            (250.0, GammaRegime.LARGE_SHAPE),
        ],
    )
    def test_select_regime(self, shape, regime) -> None:
        assert select_regime(shape) is regime

    def test_is_integral_is_relative(self) -> None:
        assert is_integral(1_000_000.4)
        assert not is_integral(2.001)
        assert is_integral(0.0)

    def test_constants_only_for_large_shape(self) -> None:
        assert GammaSampler.for_shape(2.0).constants is None
        sampler = GammaSampler.for_shape(9.0)
        assert isinstance(sampler.constants, LargeShapeConstants)
        assert sampler.constants.m == 8.0

    def test_scale_is_inverse_rate(self) -> None:
        assert GammaSampler.for_shape(2.0, rate=4.0).scale == 0.25


class TestSampling:
    @pytest.mark.parametrize("shape", [0.3, 0.5, 1.0, 1.7, 2.5, 3.0, 3.7, 7.3, 60.0])
    def test_moments(self, shape) -> None:
        rate = 2.0
        sampler = GammaSampler.for_shape(shape, rate)
        engine = JLKiss64Engine(seed=round(shape * 1000))
        draws = [sampler(engine) for _ in range(N_DRAWS)]

        assert all(x >= 0.0 for x in draws)
        mean = math.fsum(draws) / N_DRAWS
        variance = math.fsum((x - mean) ** 2 for x in draws) / (N_DRAWS - 1)

        expected_mean = shape / rate
        expected_variance = shape / rate**2
        mean_se = math.sqrt(expected_variance / N_DRAWS)
        variance_se = math.sqrt((2 * shape**2 + 6 * shape) / N_DRAWS) / rate**2
        assert mean == pytest.approx(expected_mean, abs=5 * mean_se)
        assert variance == pytest.approx(expected_variance, abs=5 * variance_se)

    @pytest.mark.parametrize("shape", [1, 2, 3, 4])
    def test_integer_shape_moments(self, shape) -> None:
        n_draws = 100_000
        scale = 1.5
        sampler = GammaSampler.for_shape(shape, 1 / scale)
        engine = JLKiss64Engine(seed=shape)
        draws = [sampler(engine) for _ in range(n_draws)]

        mean = math.fsum(draws) / n_draws
        variance = math.fsum((x - mean) ** 2 for x in draws) / (n_draws - 1)
        mean_se = math.sqrt(shape * scale**2 / n_draws)
        variance_se = math.sqrt((2 * shape**2 + 6 * shape) / n_draws) * scale**2
        assert mean == pytest.approx(shape * scale, abs=5 * mean_se)
        assert variance == pytest.approx(shape * scale**2, abs=5 * variance_se)

    @pytest.mark.parametrize("shape", [0.3, 2.0, 2.5, 3.7, 12.0])
    def test_reproducible(self, shape) -> None:
        sampler = GammaSampler.for_shape(shape)

        def draw(seed: int) -> list[float]:
            engine = JLKiss64Engine(seed=seed)
            return [sampler(engine) for _ in range(200)]

        first = draw(1)
        assert first == draw(1)
        assert len(set(first)) == len(first)
        assert first != draw(2)

    @pytest.mark.parametrize("shape", [0.3, 1.7, 7.3])
    def test_exhausted_rejection_loop(self, shape) -> None:
        sampler = GammaSampler.for_shape(shape)
        configure_settings(rejection_cap=0)
        with pytest.warns(RejectionLoopExhaustedWarning):
            value = sampler(JLKiss64Engine())
        assert math.isnan(value)
