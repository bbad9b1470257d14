"""
Zeta distribution family implementation.

Contains the Zeta (Zipf) family on the positive integers, parametrized by the
exponent ``s > 1``. The normalizing constant is the Riemann zeta function;
the head of the distribution function is a generalized harmonic number and
the tail a Hurwitz zeta value.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath
import math
from dataclasses import field
from typing import TYPE_CHECKING

from scipy.special import gammaln
from scipy.special import zeta as hurwitz_zeta

from pysatl_rand.distributions import numerical
from pysatl_rand.distributions.distribution import DiscreteDistribution
from pysatl_rand.distributions.support import IntegerSupport
from pysatl_rand.families.parametric_family import ParametricFamily
from pysatl_rand.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_rand.families.registry import ParametricFamilyRegister
from pysatl_rand.generators.zeta import ZetaSampler
from pysatl_rand.numerics.integration import integral
from pysatl_rand.numerics.series import harmonic_number, zeta_riemann
from pysatl_rand.types import FamilyName, UnivariateDiscrete

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine

# Points summed directly by the distribution function before switching to the
# Hurwitz tail.
_HEAD_LIMIT = 1000

# Exponent from which the characteristic function is summed term by term.
_DIRECT_CF_EXPONENT = 8.0
_CF_EPS = 1e-17

# Polylogarithm integral over u = v^2 in [0, 80].
_CF_UPPER = math.sqrt(80.0)
_CF_TOLERANCE = 1e-12
_CF_DEPTH = 30


@parametrization(name="exponent")
class ZetaParameters(Parametrization):
    """
    Exponent parametrization of Zeta distribution.

    Parameters
    ----------
    exponent : float
        Exponent ``s > 1``

    Attributes
    ----------
    zeta : float
        Normalizing constant ``ζ(s)``.
    log_zeta : float
        ``ln ζ(s)``.
    """

    exponent: float = 2.0
    zeta: float = field(init=False, repr=False, compare=False)
    log_zeta: float = field(init=False, repr=False, compare=False)

    @constraint(description="exponent > 1", field="exponent", fallback=2.0)
    def check_exponent(self) -> bool:
        return math.isfinite(self.exponent) and self.exponent > 1.0

    def _derive(self) -> None:
        exponent = float(self.exponent)
        zeta = zeta_riemann(exponent)
        object.__setattr__(self, "exponent", exponent)
        object.__setattr__(self, "zeta", zeta)
        object.__setattr__(self, "log_zeta", math.log(zeta))


class Zeta(DiscreteDistribution):
    """
    Zeta (Zipf) distribution.

    Probability mass function:
        P(X = k) = k^(-s) / ζ(s),  k = 1, 2, ...

    Raw moments ``E[X^n] = ζ(s - n) / ζ(s)`` exist only for ``s > n + 1``:
    the mean and the variance are ``inf`` below that, skewness and excess
    kurtosis are NaN.

    Parameters
    ----------
    exponent : float, default 2.0
        Exponent; values not above 1 fall back to 2.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.ZETA

    def __init__(self, exponent: float = 2.0, engine: UniformEngine | None = None) -> None:
        super().__init__(engine)
        self.set_exponent(exponent)

    def set_exponent(self, exponent: float) -> None:
        """Replace the exponent, sanitizing out-of-domain values."""
        parameters = ZetaParameters(exponent=exponent)
        self._parameters = parameters
        self._sampler = ZetaSampler.for_exponent(parameters.exponent)

    @property
    def parameters(self) -> ZetaParameters:
        return self._parameters

    @property
    def exponent(self) -> float:
        return self._parameters.exponent

    @property
    def support(self) -> IntegerSupport:
        return IntegerSupport(1, None)

    @property
    def sampler(self) -> ZetaSampler:
        return self._sampler

    def _pmf(self, k: int) -> float:
        if k < 1:
            return 0.0
        return k**-self.exponent / self._parameters.zeta

    def _log_pmf(self, k: int) -> float:
        if k < 1:
            return -math.inf
        return -self.exponent * math.log(k) - self._parameters.log_zeta

    def _cdf(self, x: float) -> float:
        if x < 1.0:
            return 0.0
        if math.isinf(x):
            return 1.0
        k = math.floor(x)
        if k <= _HEAD_LIMIT:
            return min(harmonic_number(self.exponent, k) / self._parameters.zeta, 1.0)
        return 1.0 - self._sf(x)

    def _sf(self, x: float) -> float:
        if x < 1.0:
            return 1.0
        if math.isinf(x):
            return 0.0
        k = math.floor(x)
        return float(hurwitz_zeta(self.exponent, k + 1.0)) / self._parameters.zeta

    def _quantile(self, p: float) -> float:
        return numerical.discrete_tail_quantile(self, p)

    def _polylog(self, t: float) -> complex:
        """``Li_s(e^(it))`` for ``e^(it) != 1``."""
        s = self.exponent
        if s >= _DIRECT_CF_EXPONENT:
            terms = []
            k = 1
            while True:
                weight = k**-s
                terms.append(weight * cmath.exp(1j * t * k))
                if weight < _CF_EPS:
                    break
                k += 1
            return complex(
                math.fsum(term.real for term in terms), math.fsum(term.imag for term in terms)
            )

        z = cmath.exp(1j * t)

        def integrand(v: float) -> complex:
            w = z * math.exp(-v * v)
            return 2.0 * v ** (2.0 * s - 1.0) * w / (1.0 - w)

        real = integral(lambda v: integrand(v).real, 0.0, _CF_UPPER, _CF_TOLERANCE, _CF_DEPTH)
        imag = integral(lambda v: integrand(v).imag, 0.0, _CF_UPPER, _CF_TOLERANCE, _CF_DEPTH)
        return complex(real, imag) / math.exp(float(gammaln(s)))

    def _cf(self, t: float) -> complex:
        if math.remainder(t, 2.0 * math.pi) == 0.0:
            return complex(1.0)
        return self._polylog(t) / self._parameters.zeta

    def _raw_moment(self, order: int) -> float:
        return zeta_riemann(self.exponent - order) / self._parameters.zeta

    def mean(self) -> float:
        if self.exponent <= 2.0:
            return math.inf
        return self._raw_moment(1)

    def variance(self) -> float:
        if self.exponent <= 3.0:
            return math.inf
        mean = self._raw_moment(1)
        return self._raw_moment(2) - mean * mean

    def mode(self) -> float:
        return 1.0

    def skewness(self) -> float:
        if self.exponent <= 4.0:
            return math.nan
        m1, m2, m3 = (self._raw_moment(order) for order in (1, 2, 3))
        variance = m2 - m1 * m1
        return (m3 - 3.0 * m1 * m2 + 2.0 * m1**3) / variance**1.5

    def excess_kurtosis(self) -> float:
        if self.exponent <= 5.0:
            return math.nan
        m1, m2, m3, m4 = (self._raw_moment(order) for order in (1, 2, 3, 4))
        variance = m2 - m1 * m1
        central = m4 - 4.0 * m1 * m3 + 6.0 * m1 * m1 * m2 - 3.0 * m1**4
        return central / (variance * variance) - 3.0


def configure_zeta_family() -> None:
    """
    Configure and register the Zeta distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ZETA):
        return

    family = ParametricFamily(
        name=FamilyName.ZETA,
        distr_type=UnivariateDiscrete,
        distribution=Zeta,
        parametrizations=[ZetaParameters],
    )
    family.__doc__ = Zeta.__doc__

    ParametricFamilyRegister.register(family)


__all__ = [
    "Zeta",
    "ZetaParameters",
    "configure_zeta_family",
]
