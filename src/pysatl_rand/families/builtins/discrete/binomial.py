"""
Binomial distribution family implementation.

Contains the Binomial family parametrized by the number of trials and the
success probability. Sampling is delegated to
:class:`~pysatl_rand.generators.binomial.BinomialSampler`, built once per
parameter set.
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
from pysatl_rand.generators.binomial import BinomialSampler, ProbabilitySplit
from pysatl_rand.numerics.beta import regularized_beta_fun
from pysatl_rand.numerics.combinatorics import TABLE_LIMIT, binomial_coef, log_binomial_coef
from pysatl_rand.types import FamilyName, UnivariateDiscrete

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine


def _clip_probability(parameters: BinomialParameters) -> float:
    if math.isnan(parameters.probability):
        return 0.5
    return min(max(parameters.probability, 0.0), 1.0)


def _log_or_minus_inf(value: float) -> float:
    return math.log(value) if value > 0.0 else -math.inf


@parametrization(name="numberProbability")
class BinomialParameters(Parametrization):
    """
    Number-probability parametrization of binomial distribution.

    Parameters
    ----------
    number : int
        Number of trials, at least 1
    probability : float
        Success probability in ``[0, 1]``

    Attributes
    ----------
    complement : float
        ``q = 1 - p``.
    log_probability, log_complement : float
        ``ln p`` and ``ln q`` (``-inf`` when zero).
    split : ProbabilitySplit
        Decomposition of ``min(p, q)`` used by the sampler.
    """

    number: int = 1
    probability: float = 0.5
    complement: float = field(init=False, repr=False, compare=False)
    log_probability: float = field(init=False, repr=False, compare=False)
    log_complement: float = field(init=False, repr=False, compare=False)
    split: ProbabilitySplit = field(init=False, repr=False, compare=False)

    @constraint(
        description="number is an integer >= 1",
        field="number",
        fallback=lambda parameters: (
            max(int(parameters.number), 1) if math.isfinite(parameters.number) else 1
        ),
    )
    def check_number(self) -> bool:
        return (
            math.isfinite(self.number)
            and self.number >= 1
            and self.number == math.floor(self.number)
        )

    @constraint(
        description="0 <= probability <= 1",
        field="probability",
        fallback=_clip_probability,
    )
    def check_probability(self) -> bool:
        return 0.0 <= self.probability <= 1.0

    def _derive(self) -> None:
        number = int(self.number)
        probability = float(self.probability)
        complement = 1.0 - probability
        object.__setattr__(self, "number", number)
        object.__setattr__(self, "probability", probability)
        object.__setattr__(self, "complement", complement)
        object.__setattr__(self, "log_probability", _log_or_minus_inf(probability))
        object.__setattr__(self, "log_complement", _log_or_minus_inf(complement))
        object.__setattr__(self, "split", ProbabilitySplit.of(number, probability))


class Binomial(DiscreteDistribution):
    """
    Binomial distribution: number of successes in ``number`` independent
    trials with success probability ``probability``.

    Probability mass function:
        P(X = k) = C(n, k) p^k q^(n-k),  k = 0, ..., n

    Parameters
    ----------
    number : int, default 1
        Number of trials; values below 1 fall back to 1.
    probability : float, default 0.5
        Success probability; clipped into ``[0, 1]``.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.BINOMIAL

    def __init__(
        self,
        number: int = 1,
        probability: float = 0.5,
        engine: UniformEngine | None = None,
    ) -> None:
        super().__init__(engine)
        self.set_parameters(number, probability)

    def set_parameters(self, number: int, probability: float) -> None:
        """Replace the parameters, sanitizing out-of-domain values."""
        parameters = BinomialParameters(number=number, probability=probability)
        sampler = BinomialSampler.for_parameters(parameters.number, parameters.probability)
        self._parameters, self._sampler = parameters, sampler

    @property
    def parameters(self) -> BinomialParameters:
        return self._parameters

    @property
    def number(self) -> int:
        return self._parameters.number

    @property
    def probability(self) -> float:
        return self._parameters.probability

    @property
    def support(self) -> IntegerSupport:
        return IntegerSupport(0, self.number)

    @property
    def sampler(self) -> BinomialSampler:
        return self._sampler

    def _degenerate_pmf(self, k: int) -> float | None:
        p = self.probability
        if p == 0.0:
            return 1.0 if k == 0 else 0.0
        if p == 1.0:
            return 1.0 if k == self.number else 0.0
        return None

    def _pmf(self, k: int) -> float:
        n = self.number
        if k < 0 or k > n:
            return 0.0
        degenerate = self._degenerate_pmf(k)
        if degenerate is not None:
            return degenerate
        if n > TABLE_LIMIT:
            return math.exp(self._log_pmf(k))
        p, q = self.probability, self._parameters.complement
        if k == n - k:
            return binomial_coef(n, k) * (p * q) ** k
        return binomial_coef(n, k) * p**k * q ** (n - k)

    def _log_pmf(self, k: int) -> float:
        n = self.number
        if k < 0 or k > n:
            return -math.inf
        degenerate = self._degenerate_pmf(k)
        if degenerate is not None:
            return 0.0 if degenerate == 1.0 else -math.inf
        params = self._parameters
        return (
            log_binomial_coef(n, k)
            + k * params.log_probability
            + (n - k) * params.log_complement
        )

    def _cdf(self, x: float) -> float:
        if x < 0.0:
            return 0.0
        n = self.number
        if x >= n:
            return 1.0
        k = math.floor(x)
        return regularized_beta_fun(self._parameters.complement, n - k, k + 1)

    def _sf(self, x: float) -> float:
        if x < 0.0:
            return 1.0
        n = self.number
        if x >= n:
            return 0.0
        k = math.floor(x)
        return regularized_beta_fun(self.probability, k + 1, n - k)

    def _cf(self, t: float) -> complex:
        q = self._parameters.complement
        return (q + self.probability * cmath.exp(1j * t)) ** self.number

    def mean(self) -> float:
        return self.number * self.probability

    def variance(self) -> float:
        return self.number * self.probability * self._parameters.complement

    def mode(self) -> float:
        return float(min(math.floor((self.number + 1) * self.probability), self.number))

    def skewness(self) -> float:
        variance = self.variance()
        if variance == 0.0:
            return math.nan
        return (self._parameters.complement - self.probability) / math.sqrt(variance)

    def excess_kurtosis(self) -> float:
        variance = self.variance()
        if variance == 0.0:
            return math.nan
        pq = self.probability * self._parameters.complement
        return (1.0 - 6.0 * pq) / variance


def configure_binomial_family() -> None:
    """
    Configure and register the Binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BINOMIAL):
        return

    family = ParametricFamily(
        name=FamilyName.BINOMIAL,
        distr_type=UnivariateDiscrete,
        distribution=Binomial,
        parametrizations=[BinomialParameters],
    )
    family.__doc__ = Binomial.__doc__

    ParametricFamilyRegister.register(family)


__all__ = [
    "Binomial",
    "BinomialParameters",
    "configure_binomial_family",
]
