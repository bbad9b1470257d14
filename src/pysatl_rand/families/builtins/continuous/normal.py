"""
Normal distribution family implementation.

Contains the Normal family with mean-std, mean-precision and exponential
parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath
import math
from functools import partial
from typing import TYPE_CHECKING, Any

from scipy.special import log_ndtr, ndtr, ndtri

from pysatl_rand.distributions.distribution import ContinuousDistribution, elementwise
from pysatl_rand.distributions.support import ContinuousSupport
from pysatl_rand.families.parametric_family import ParametricFamily
from pysatl_rand.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_rand.families.registry import ParametricFamilyRegister
from pysatl_rand.generators.elementary import normal
from pysatl_rand.types import FamilyName, UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_rand.engine import UniformEngine

_LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)


@parametrization(name="meanStd")
class NormalParameters(Parametrization):
    """
    Standard parametrization of normal distribution.

    Parameters
    ----------
    mu : float
        Mean of the distribution
    sigma : float
        Standard deviation of the distribution
    """

    mu: float = 0.0
    sigma: float = 1.0

    @constraint(description="mu is finite", field="mu", fallback=0.0)
    def check_mu_finite(self) -> bool:
        return math.isfinite(self.mu)

    @constraint(description="0 < sigma < inf", field="sigma", fallback=1.0)
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is positive."""
        return 0.0 < self.sigma < math.inf


@parametrization(name="meanPrec")
class NormalMeanPrecParameters(Parametrization):
    """
    Mean-precision parametrization of normal distribution.

    Parameters
    ----------
    mu : float
        Mean of the distribution
    tau : float
        Precision parameter (inverse variance)
    """

    mu: float = 0.0
    tau: float = 1.0

    @constraint(description="0 < tau < inf", field="tau", fallback=1.0)
    def check_tau_positive(self) -> bool:
        """Check that precision parameter is positive."""
        return 0.0 < self.tau < math.inf

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Transform to Standard parametrization.

        Returns
        -------
        Parametrization
            Standard parametrization instance
        """
        return NormalParameters(mu=self.mu, sigma=math.sqrt(1.0 / self.tau))


@parametrization(name="exponential")
class NormalExponentialParameters(Parametrization):
    """
    Exponential family parametrization of normal distribution.
        Uses the form: y = exp(a*x² + b*x + c)

    Parameters
    ----------
    a : float
        Quadratic term coefficient in exponential form
    b : float
        Linear term coefficient in exponential form
    """

    a: float = -0.5
    b: float = 0.0

    @property
    def c(self) -> float:
        """
        Calculate the normalization constant c.

        Returns
        -------
        float
            Normalization constant
        """
        return (self.b**2) / (4 * self.a) - (1 / 2) * math.log(math.pi / (-self.a))

    @constraint(description="a < 0", field="a", fallback=-0.5)
    def check_a_negative(self) -> bool:
        """Check that quadratic term coefficient is negative."""
        return self.a < 0

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Transform to Standard parametrization.

        Returns
        -------
        Parametrization
            Standard parametrization instance
        """
        mu = -self.b / (2 * self.a)
        sigma = math.sqrt(-1 / (2 * self.a))
        return NormalParameters(mu=mu, sigma=sigma)


class Normal(ContinuousDistribution):
    """
    Normal (Gaussian) distribution.

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

    Parameters
    ----------
    mu : float, default 0.0
        Mean.
    sigma : float, default 1.0
        Standard deviation; non-positive values fall back to 1.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.NORMAL

    def __init__(
        self, mu: float = 0.0, sigma: float = 1.0, engine: UniformEngine | None = None
    ) -> None:
        super().__init__(engine)
        self.set_parameters(mu, sigma)

    def set_parameters(self, mu: float, sigma: float) -> None:
        self._parameters = NormalParameters(mu=mu, sigma=sigma)

    @property
    def parameters(self) -> NormalParameters:
        return self._parameters

    @property
    def mu(self) -> float:
        return self._parameters.mu

    @property
    def sigma(self) -> float:
        return self._parameters.sigma

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    @property
    def sampler(self) -> Callable[[UniformEngine], float]:
        return partial(normal, mu=self.mu, sigma=self.sigma)

    def _standardize(self, x: float) -> float:
        return (x - self.mu) / self.sigma

    def _pdf(self, x: float) -> float:
        return math.exp(self._log_pdf(x))

    def _log_pdf(self, x: float) -> float:
        z = self._standardize(x)
        return -0.5 * z * z - math.log(self.sigma) - _LOG_SQRT_2PI

    def _cdf(self, x: float) -> float:
        return float(ndtr(self._standardize(x)))

    def _sf(self, x: float) -> float:
        return float(ndtr(-self._standardize(x)))

    def _log_cdf(self, x: float) -> float:
        return float(log_ndtr(self._standardize(x)))

    def log_cdf(self, x: Any) -> Any:
        """Logarithm of the distribution function, accurate deep in the left tail."""
        return elementwise(self._log_cdf, x)

    def _cf(self, t: float) -> complex:
        return cmath.exp(complex(-0.5 * (self.sigma * t) ** 2, self.mu * t))

    def _quantile(self, p: float) -> float:
        if not 0.0 <= p <= 1.0:
            return math.nan
        return self.mu + self.sigma * float(ndtri(p))

    def mean(self) -> float:
        return self.mu

    def variance(self) -> float:
        return self.sigma**2

    def median(self) -> float:
        return self.mu

    def mode(self) -> float:
        return self.mu

    def skewness(self) -> float:
        return 0.0

    def excess_kurtosis(self) -> float:
        return 0.0


def configure_normal_family() -> None:
    """
    Configure and register the Normal distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NORMAL):
        return

    family = ParametricFamily(
        name=FamilyName.NORMAL,
        distr_type=UnivariateContinuous,
        distribution=Normal,
        parametrizations=[
            NormalParameters,
            NormalMeanPrecParameters,
            NormalExponentialParameters,
        ],
    )
    family.__doc__ = Normal.__doc__

    ParametricFamilyRegister.register(family)


__all__ = [
    "Normal",
    "NormalExponentialParameters",
    "NormalMeanPrecParameters",
    "NormalParameters",
    "configure_normal_family",
]
