"""
Exponential distribution family implementation.

Contains the Exponential family with rate and scale parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from functools import partial
from typing import TYPE_CHECKING

from pysatl_rand.distributions.distribution import ContinuousDistribution
from pysatl_rand.distributions.support import ContinuousSupport
from pysatl_rand.families.parametric_family import ParametricFamily
from pysatl_rand.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_rand.families.registry import ParametricFamilyRegister
from pysatl_rand.generators.elementary import exponential
from pysatl_rand.types import FamilyName, UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_rand.engine import UniformEngine


@parametrization(name="rate")
class ExponentialParameters(Parametrization):
    """
    Rate parametrization of exponential distribution.

    Parameters
    ----------
    rate : float
        Rate parameter (λ) of the distribution
    """

    rate: float = 1.0

    @constraint(description="0 < rate < inf", field="rate", fallback=1.0)
    def check_rate_positive(self) -> bool:
        """Check that rate parameter is positive."""
        return 0.0 < self.rate < math.inf


@parametrization(name="scale")
class ExponentialScaleParameters(Parametrization):
    """
    Scale parametrization of exponential distribution.

    Parameters
    ----------
    scale : float
        Scale parameter (β) of the distribution, β = 1/λ
    """

    scale: float = 1.0

    @constraint(description="0 < scale < inf", field="scale", fallback=1.0)
    def check_scale_positive(self) -> bool:
        """Check that scale parameter is positive."""
        return 0.0 < self.scale < math.inf

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Transform to Rate parametrization.

        Returns
        -------
        Parametrization
            Rate parametrization instance
        """
        return ExponentialParameters(rate=1.0 / self.scale)


class Exponential(ContinuousDistribution):
    """
    Exponential distribution.

    The exponential distribution is a continuous probability distribution that
    describes the time between events in a Poisson process. It has a single
    parameter: rate (λ) or scale (β = 1/λ).

    Probability density function (rate parametrization):
        f(x) = λ * exp(-λ * x) for x ≥ 0

    Parameters
    ----------
    rate : float, default 1.0
        Rate parameter; non-positive values fall back to 1.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.EXPONENTIAL

    def __init__(self, rate: float = 1.0, engine: UniformEngine | None = None) -> None:
        super().__init__(engine)
        self.set_rate(rate)

    def set_rate(self, rate: float) -> None:
        self._parameters = ExponentialParameters(rate=rate)

    @property
    def parameters(self) -> ExponentialParameters:
        return self._parameters

    @property
    def rate(self) -> float:
        return self._parameters.rate

    @property
    def scale(self) -> float:
        return 1.0 / self._parameters.rate

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    @property
    def sampler(self) -> Callable[[UniformEngine], float]:
        return partial(exponential, rate=self.rate)

    def _pdf(self, x: float) -> float:
        return self.rate * math.exp(-self.rate * x) if x >= 0.0 else 0.0

    def _log_pdf(self, x: float) -> float:
        return math.log(self.rate) - self.rate * x if x >= 0.0 else -math.inf

    def _cdf(self, x: float) -> float:
        return -math.expm1(-self.rate * x) if x > 0.0 else 0.0

    def _sf(self, x: float) -> float:
        return math.exp(-self.rate * x) if x > 0.0 else 1.0

    def _cf(self, t: float) -> complex:
        return self.rate / complex(self.rate, -t)

    def _quantile(self, p: float) -> float:
        if not 0.0 <= p <= 1.0:
            return math.nan
        if p == 1.0:
            return math.inf
        return -math.log1p(-p) / self.rate

    def mean(self) -> float:
        return 1.0 / self.rate

    def variance(self) -> float:
        return 1.0 / (self.rate**2)

    def median(self) -> float:
        return math.log(2.0) / self.rate

    def mode(self) -> float:
        return 0.0

    def skewness(self) -> float:
        """Skewness of exponential distribution (always 2)."""
        return 2.0

    def excess_kurtosis(self) -> float:
        return 6.0


def configure_exponential_family() -> None:
    """
    Configure and register the Exponential distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.EXPONENTIAL):
        return

    family = ParametricFamily(
        name=FamilyName.EXPONENTIAL,
        distr_type=UnivariateContinuous,
        distribution=Exponential,
        parametrizations=[ExponentialParameters, ExponentialScaleParameters],
    )
    family.__doc__ = Exponential.__doc__

    ParametricFamilyRegister.register(family)


__all__ = [
    "Exponential",
    "ExponentialParameters",
    "ExponentialScaleParameters",
    "configure_exponential_family",
]
