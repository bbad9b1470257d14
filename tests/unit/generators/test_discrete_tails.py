"""
Tests for the Zeta and Logarithmic samplers.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest
from scipy.stats import logser, zipf

from pysatl_rand.config import configure_settings
from pysatl_rand.engine import JKiss32Engine, JLKiss64Engine
from pysatl_rand.errors import RejectionLoopExhaustedWarning
from pysatl_rand.generators import (
    LogarithmicRegime,
    LogarithmicSampler,
    ZetaRegime,
    ZetaSampler,
)
from pysatl_rand.generators.logarithmic import select_regime

N_DRAWS = 20_000


def assert_frequencies(draws: list[int], pmf, points: range) -> None:
    """Empirical frequency of every point within 5 standard errors of its mass."""
    for k in points:
        expected = float(pmf(k))
        frequency = sum(1 for x in draws if x == k) / len(draws)
        standard_error = math.sqrt(expected * (1.0 - expected) / len(draws))
        assert frequency == pytest.approx(expected, abs=5 * standard_error + 1e-12)


class TestZetaSampler:
    def test_regime(self) -> None:
        assert ZetaSampler.for_exponent(2.0).regime is ZetaRegime.REJECTION
        assert ZetaSampler.for_exponent(2.0).envelope == 2.0
        assert ZetaSampler.for_exponent(1500.0).regime is ZetaRegime.POINT_MASS

    @pytest.mark.parametrize("exponent", [1.3, 2.0, 3.5, 8.0])
    def test_frequencies(self, exponent) -> None:
        sampler = ZetaSampler.for_exponent(exponent)
        engine = JLKiss64Engine(seed=int(10 * exponent))
        draws = [sampler(engine) for _ in range(N_DRAWS)]

        assert min(draws) >= 1
        assert_frequencies(draws, lambda k: zipf.pmf(k, exponent), range(1, 6))

    def test_point_mass(self) -> None:
        sampler = ZetaSampler.for_exponent(1500.0)
        engine = JKiss32Engine(seed=3)
        assert {sampler(engine) for _ in range(50)} == {1}

    def test_reproducible(self) -> None:
        sampler = ZetaSampler.for_exponent(1.7)

        def draw(seed: int) -> list[int]:
            engine = JLKiss64Engine(seed=seed)
            return [sampler(engine) for _ in range(200)]

        assert draw(5) == draw(5)
        assert draw(5) != draw(6)

    def test_exhausted_rejection_loop(self) -> None:
        sampler = ZetaSampler.for_exponent(2.0)
        configure_settings(rejection_cap=0)
        with pytest.warns(RejectionLoopExhaustedWarning, match="Zeta"):
            assert sampler(JLKiss64Engine()) == -1


class TestLogarithmicSampler:
    @pytest.mark.parametrize(
        "probability, regime",
        [
            (0.01, LogarithmicRegime.SEARCH),
            (0.9, LogarithmicRegime.SEARCH),
            (0.95, LogarithmicRegime.KEMP),
            (0.999, LogarithmicRegime.KEMP),
        ],
    )
    def test_select_regime(self, probability, regime) -> None:
        assert select_regime(probability) is regime
        assert LogarithmicSampler.for_probability(probability).regime is regime

    @pytest.mark.parametrize("probability", [0.05, 0.4, 0.9, 0.96, 0.99])
    def test_moments(self, probability) -> None:
        sampler = LogarithmicSampler.for_probability(probability)
        engine = JLKiss64Engine(seed=int(1000 * probability))
        draws = [sampler(engine) for _ in range(N_DRAWS)]

        assert min(draws) >= 1
        mean = math.fsum(draws) / N_DRAWS
        mean_se = math.sqrt(float(logser.var(probability)) / N_DRAWS)
        assert mean == pytest.approx(float(logser.mean(probability)), abs=5 * mean_se)
        assert_frequencies(draws, lambda k: logser.pmf(k, probability), range(1, 4))

    def test_exhausted_rejection_loop(self) -> None:
        sampler = LogarithmicSampler.for_probability(0.99)
        configure_settings(rejection_cap=0)
        with pytest.warns(RejectionLoopExhaustedWarning, match="Logarithmic"):
            assert sampler(JLKiss64Engine()) == -1
