"""
Logarithmic distribution family implementation.

Contains the logarithmic series family on the positive integers, parametrized
by the probability ``0 < p < 1``. Sampling is delegated to
:class:`~pysatl_rand.generators.logarithmic.LogarithmicSampler`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath
import math
from dataclasses import field
from typing import TYPE_CHECKING

from pysatl_rand.distributions.distribution import DiscreteDistribution
from pysatl_rand.distributions.support import IntegerSupport
from pysatl_rand.families.parametric_family import ParametricFamily
from pysatl_rand.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_rand.families.registry import ParametricFamilyRegister
from pysatl_rand.generators.logarithmic import LogarithmicSampler
from pysatl_rand.types import FamilyName, UnivariateDiscrete

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine

_HEAD_LIMIT = 1000
_EPS = 2.220446049250313e-16


@parametrization(name="probability")
class LogarithmicParameters(Parametrization):
    """
    Probability parametrization of logarithmic series distribution.

    Parameters
    ----------
    probability : float
        Probability ``0 < p < 1``

    Attributes
    ----------
    log_probability : float
        ``ln p``.
    log_complement : float
        ``ln(1 - p)``.
    norm : float
        ``-1 / ln(1 - p)``.
    """

    probability: float = 0.5
    log_probability: float = field(init=False, repr=False, compare=False)
    log_complement: float = field(init=False, repr=False, compare=False)
    norm: float = field(init=False, repr=False, compare=False)

    @constraint(description="0 < probability < 1", field="probability", fallback=0.5)
    def check_probability(self) -> bool:
        return 0.0 < self.probability < 1.0

    def _derive(self) -> None:
        probability = float(self.probability)
        log_complement = math.log1p(-probability)
        object.__setattr__(self, "probability", probability)
        object.__setattr__(self, "log_probability", math.log(probability))
        object.__setattr__(self, "log_complement", log_complement)
        object.__setattr__(self, "norm", -1.0 / log_complement)


class Logarithmic(DiscreteDistribution):
    """
    Logarithmic series distribution.

    Probability mass function:
        P(X = k) = -p^k / (k ln(1 - p)),  k = 1, 2, ...

    Parameters
    ----------
    probability : float, default 0.5
        Probability; values outside ``(0, 1)`` fall back to 0.5.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.LOGARITHMIC

    def __init__(self, probability: float = 0.5, engine: UniformEngine | None = None) -> None:
        super().__init__(engine)
        self.set_probability(probability)

    def set_probability(self, probability: float) -> None:
        """Replace the probability, sanitizing out-of-domain values."""
        parameters = LogarithmicParameters(probability=probability)
        self._parameters = parameters
        self._sampler = LogarithmicSampler.for_probability(parameters.probability)

    @property
    def parameters(self) -> LogarithmicParameters:
        return self._parameters

    @property
    def probability(self) -> float:
        return self._parameters.probability

    @property
    def support(self) -> IntegerSupport:
        return IntegerSupport(1, None)

    @property
    def sampler(self) -> LogarithmicSampler:
        return self._sampler

    def _pmf(self, k: int) -> float:
        if k < 1:
            return 0.0
        return math.exp(self._log_pmf(k))

    def _log_pmf(self, k: int) -> float:
        if k < 1:
            return -math.inf
        params = self._parameters
        return math.log(params.norm) + k * params.log_probability - math.log(k)

    def _head(self, k: int) -> float:
        """``P(X <= k)`` summed term by term."""
        p = self.probability
        term = self._parameters.norm * p
        terms = [term]
        for i in range(1, k):
            term *= p * i / (i + 1)
            terms.append(term)
        return math.fsum(terms)

    def _tail(self, k: int) -> float:
        """
        ``P(X > k)`` summed until the remainder bound ``term · p / (1 - p)``
        drops below the running total times the machine epsilon.
        """
        p = self.probability
        term = self._pmf(k + 1)
        if term == 0.0:
            return 0.0
        ratio = p / (1.0 - p)
        terms = [term]
        total = term
        i = k + 1
        while term * ratio > total * _EPS:
            term *= p * i / (i + 1)
            terms.append(term)
            total += term
            i += 1
        return math.fsum(terms)

    def _cdf(self, x: float) -> float:
        if x < 1.0:
            return 0.0
        if math.isinf(x):
            return 1.0
        k = math.floor(x)
        if k <= _HEAD_LIMIT:
            return min(self._head(k), 1.0)
        return 1.0 - self._tail(k)

    def _sf(self, x: float) -> float:
        if x < 1.0:
            return 1.0
        if math.isinf(x):
            return 0.0
        return self._tail(math.floor(x))

    def _cf(self, t: float) -> complex:
        p = self.probability
        return cmath.log(1.0 - p * cmath.exp(1j * t)) / self._parameters.log_complement

    def _raw_moments(self) -> tuple[float, float, float, float]:
        p = self.probability
        q = 1.0 - p
        scaled = self._parameters.norm * p
        return (
            scaled / q,
            scaled / q**2,
            scaled * (1.0 + p) / q**3,
            scaled * (1.0 + 4.0 * p + p * p) / q**4,
        )

    def mean(self) -> float:
        return self._raw_moments()[0]

    def variance(self) -> float:
        scaled = self._parameters.norm * self.probability
        return scaled * (1.0 - scaled) / (1.0 - self.probability) ** 2

    def mode(self) -> float:
        return 1.0

    def skewness(self) -> float:
        m1, m2, m3, _ = self._raw_moments()
        central = m3 - 3.0 * m1 * m2 + 2.0 * m1**3
        return central / self.variance() ** 1.5

    def excess_kurtosis(self) -> float:
        m1, m2, m3, m4 = self._raw_moments()
        central = m4 - 4.0 * m1 * m3 + 6.0 * m1 * m1 * m2 - 3.0 * m1**4
        return central / self.variance() ** 2 - 3.0


def configure_logarithmic_family() -> None:
    """
    Configure and register the Logarithmic distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LOGARITHMIC):
        return

    family = ParametricFamily(
        name=FamilyName.LOGARITHMIC,
        distr_type=UnivariateDiscrete,
        distribution=Logarithmic,
        parametrizations=[LogarithmicParameters],
    )
    family.__doc__ = Logarithmic.__doc__

    ParametricFamilyRegister.register(family)


__all__ = [
    "Logarithmic",
    "LogarithmicParameters",
    "configure_logarithmic_family",
]
