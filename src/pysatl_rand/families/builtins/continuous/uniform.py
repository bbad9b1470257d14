"""
Continuous uniform distribution family implementation.

Contains the ContinuousUniform family with standard (lower, upper) and
mean-width parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath
import math
from dataclasses import field
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
from pysatl_rand.generators.elementary import uniform
from pysatl_rand.types import FamilyName, UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Callable

    from pysatl_rand.engine import UniformEngine

CALCULATION_PRECISION = 1e-10


@parametrization(name="standard")
class UniformParameters(Parametrization):
    """
    Standard parametrization of uniform distribution.

    Parameters
    ----------
    lower : float
        Lower bound of the distribution
    upper : float
        Upper bound of the distribution, greater than ``lower``
    """

    lower: float = 0.0
    upper: float = 1.0
    width: float = field(init=False, repr=False, compare=False)

    @constraint(description="lower is finite", field="lower", fallback=0.0)
    def check_lower_finite(self) -> bool:
        return math.isfinite(self.lower)

    @constraint(
        description="lower < upper < inf",
        field="upper",
        fallback=lambda parameters: parameters.lower + 1.0,
    )
    def check_upper_greater_than_lower(self) -> bool:
        """Check that upper bound is greater than lower bound."""
        return self.lower < self.upper < math.inf

    def _derive(self) -> None:
        object.__setattr__(self, "width", self.upper - self.lower)


@parametrization(name="meanWidth")
class UniformMeanWidthParameters(Parametrization):
    """
    Mean-width parametrization of uniform distribution.

    Parameters
    ----------
    mean : float
        Mean (center) of the distribution
    width : float
        Width of the distribution (upper - lower)
    """

    mean: float = 0.5
    width: float = 1.0

    @constraint(description="width > 0", field="width", fallback=1.0)
    def check_width_positive(self) -> bool:
        """Check that width is positive."""
        return self.width > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Transform to Standard parametrization.

        Returns
        -------
        Parametrization
            Standard parametrization instance
        """
        half_width = self.width / 2
        return UniformParameters(lower=self.mean - half_width, upper=self.mean + half_width)


class ContinuousUniform(ContinuousDistribution):
    """
    Continuous uniform distribution on ``[lower, upper]``.

    Parameters
    ----------
    lower : float, default 0.0
        Lower bound.
    upper : float, default 1.0
        Upper bound; replaced by ``lower + 1`` (with a ``ParameterClampWarning``)
        unless it exceeds ``lower``.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.CONTINUOUS_UNIFORM

    def __init__(
        self, lower: float = 0.0, upper: float = 1.0, engine: UniformEngine | None = None
    ) -> None:
        super().__init__(engine)
        self.set_support(lower, upper)

    def set_support(self, lower: float, upper: float) -> None:
        self._parameters = UniformParameters(lower=lower, upper=upper)

    @property
    def parameters(self) -> UniformParameters:
        return self._parameters

    @property
    def lower(self) -> float:
        return self._parameters.lower

    @property
    def upper(self) -> float:
        return self._parameters.upper

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=self.lower, right=self.upper)

    @property
    def sampler(self) -> Callable[[UniformEngine], float]:
        return partial(uniform, lower=self.lower, upper=self.upper)

    def _pdf(self, x: float) -> float:
        return 1.0 / self._parameters.width if self.lower <= x <= self.upper else 0.0

    def _cdf(self, x: float) -> float:
        if x <= self.lower:
            return 0.0
        if x >= self.upper:
            return 1.0
        return (x - self.lower) / self._parameters.width

    def _sf(self, x: float) -> float:
        if x <= self.lower:
            return 1.0
        if x >= self.upper:
            return 0.0
        return (self.upper - x) / self._parameters.width

    def _cf(self, t: float) -> complex:
        if abs(t) < CALCULATION_PRECISION:
            return 1.0 + 0j
        numerator = cmath.exp(1j * t * self.upper) - cmath.exp(1j * t * self.lower)
        return numerator / (1j * t * self._parameters.width)

    def _quantile(self, p: float) -> float:
        if not 0.0 <= p <= 1.0:
            return math.nan
        return self.lower + p * self._parameters.width

    def mean(self) -> float:
        return 0.5 * (self.lower + self.upper)

    def variance(self) -> float:
        return self._parameters.width**2 / 12.0

    def median(self) -> float:
        return self.mean()

    def mode(self) -> float:
        """Any point of the support is a mode; the midpoint is returned."""
        return self.mean()

    def skewness(self) -> float:
        return 0.0

    def excess_kurtosis(self) -> float:
        return -1.2


def configure_uniform_family() -> None:
    """
    Configure and register the ContinuousUniform distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CONTINUOUS_UNIFORM):
        return

    Uniform = ParametricFamily(
        name=FamilyName.CONTINUOUS_UNIFORM,
        distr_type=UnivariateContinuous,
        distribution=ContinuousUniform,
        parametrizations=[UniformParameters, UniformMeanWidthParameters],
    )
    Uniform.__doc__ = ContinuousUniform.__doc__

    ParametricFamilyRegister.register(Uniform)


__all__ = [
    "ContinuousUniform",
    "UniformMeanWidthParameters",
    "UniformParameters",
    "configure_uniform_family",
]
