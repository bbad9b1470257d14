"""
Gamma distribution family implementation.

Contains the Gamma family (shape-rate and shape-scale parameterizations) and
two restricted views over it:

- :class:`ChiSquared` — ``Gamma(k/2, 1/2)`` parametrized by the integer
  degree ``k``;
- :class:`Erlang` — Gamma with an integer shape.

Both views own a private :class:`Gamma` core and delegate evaluation,
statistics and sampling to it, so their parameters can only be changed
through their own setters.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import field
from typing import TYPE_CHECKING

from scipy.special import gammaln, ndtri

from pysatl_rand.distributions import numerical
from pysatl_rand.distributions.distribution import ContinuousDistribution
from pysatl_rand.distributions.support import ContinuousSupport
from pysatl_rand.families.parametric_family import ParametricFamily
from pysatl_rand.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_rand.families.registry import ParametricFamilyRegister
from pysatl_rand.generators.gamma import GammaSampler, is_integral
from pysatl_rand.numerics.gamma import (
    digamma,
    regularized_lower_inc_gamma,
    regularized_upper_inc_gamma,
    trigamma,
)
from pysatl_rand.types import FamilyName, UnivariateContinuous

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine


def _positive_finite(value: float) -> bool:
    return 0.0 < value < math.inf


def _integral_at_least_one(value: float) -> bool:
    return math.isfinite(value) and value >= 1 and value == math.floor(value)


def _at_least_one(value: float) -> int:
    return max(int(value), 1) if math.isfinite(value) else 1


@parametrization(name="shapeRate")
class GammaParameters(Parametrization):
    """
    Shape-rate parametrization of gamma distribution.

    A shape within a relative ``1e-6`` of an integer is snapped onto it.

    Parameters
    ----------
    shape : float
        Shape parameter (α)
    rate : float
        Rate parameter (β)

    Attributes
    ----------
    scale : float
        ``1 / β``.
    log_shape, log_rate : float
        ``ln α`` and ``ln β``.
    lgamma_shape : float
        ``ln Γ(α)``.
    log_norm : float
        Log of the density normalization ``α ln β − ln Γ(α)``.
    """

    shape: float = 1.0
    rate: float = 1.0
    scale: float = field(init=False, repr=False, compare=False)
    log_shape: float = field(init=False, repr=False, compare=False)
    log_rate: float = field(init=False, repr=False, compare=False)
    lgamma_shape: float = field(init=False, repr=False, compare=False)
    log_norm: float = field(init=False, repr=False, compare=False)

    @constraint(description="0 < shape < inf", field="shape", fallback=1.0)
    def check_shape_positive(self) -> bool:
        return _positive_finite(self.shape)

    @constraint(description="0 < rate < inf", field="rate", fallback=1.0)
    def check_rate_positive(self) -> bool:
        return _positive_finite(self.rate)

    def _derive(self) -> None:
        shape = float(round(self.shape)) if is_integral(self.shape) else float(self.shape)
        rate = float(self.rate)
        lgamma_shape = float(gammaln(shape))
        log_rate = math.log(rate)
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "rate", rate)
        object.__setattr__(self, "scale", 1.0 / rate)
        object.__setattr__(self, "log_shape", math.log(shape))
        object.__setattr__(self, "log_rate", log_rate)
        object.__setattr__(self, "lgamma_shape", lgamma_shape)
        object.__setattr__(self, "log_norm", shape * log_rate - lgamma_shape)


@parametrization(name="shapeScale")
class GammaScaleParameters(Parametrization):
    """
    Shape-scale parametrization of gamma distribution.

    Parameters
    ----------
    shape : float
        Shape parameter (α)
    scale : float
        Scale parameter (θ = 1/β)
    """

    shape: float = 1.0
    scale: float = 1.0

    @constraint(description="0 < shape < inf", field="shape", fallback=1.0)
    def check_shape_positive(self) -> bool:
        return _positive_finite(self.shape)

    @constraint(description="0 < scale < inf", field="scale", fallback=1.0)
    def check_scale_positive(self) -> bool:
        return _positive_finite(self.scale)

    def transform_to_base_parametrization(self) -> Parametrization:
        return GammaParameters(shape=self.shape, rate=1.0 / self.scale)


@parametrization(name="degree")
class ChiSquaredParameters(Parametrization):
    """
    Degrees-of-freedom parametrization of chi-squared distribution.

    Parameters
    ----------
    degree : int
        Number of degrees of freedom, at least 1
    """

    degree: int = 1

    @constraint(
        description="degree is an integer >= 1",
        field="degree",
        fallback=lambda parameters: _at_least_one(parameters.degree),
    )
    def check_degree(self) -> bool:
        return _integral_at_least_one(self.degree)

    def _derive(self) -> None:
        object.__setattr__(self, "degree", int(self.degree))

    def to_gamma(self) -> GammaParameters:
        """Equivalent ``Gamma(k/2, 1/2)`` parameters."""
        return GammaParameters(shape=0.5 * self.degree, rate=0.5)


@parametrization(name="shapeRate")
class ErlangParameters(Parametrization):
    """
    Shape-rate parametrization of Erlang distribution.

    Parameters
    ----------
    shape : int
        Integer shape parameter, at least 1
    rate : float
        Rate parameter (β)
    """

    shape: int = 1
    rate: float = 1.0

    @constraint(
        description="shape is an integer >= 1",
        field="shape",
        fallback=lambda parameters: _at_least_one(parameters.shape),
    )
    def check_shape(self) -> bool:
        return _integral_at_least_one(self.shape)

    @constraint(description="0 < rate < inf", field="rate", fallback=1.0)
    def check_rate_positive(self) -> bool:
        return _positive_finite(self.rate)

    def _derive(self) -> None:
        object.__setattr__(self, "shape", int(self.shape))

    def to_gamma(self) -> GammaParameters:
        """Equivalent gamma parameters."""
        return GammaParameters(shape=float(self.shape), rate=self.rate)


class Gamma(ContinuousDistribution):
    """
    Gamma distribution.

    Probability density function:
        f(x) = β^α / Γ(α) * x^(α-1) * exp(-βx) for x ≥ 0

    Parameters
    ----------
    shape : float, default 1.0
        Shape α; non-positive values fall back to 1.
    rate : float, default 1.0
        Rate β; non-positive values fall back to 1.
    engine : UniformEngine, optional
        Private engine.

    Notes
    -----
    The sampling regime and its constants are chosen once per parameter set;
    :meth:`set_parameters` replaces parameters and sampler together.
    """

    family_name = FamilyName.GAMMA

    def __init__(
        self, shape: float = 1.0, rate: float = 1.0, engine: UniformEngine | None = None
    ) -> None:
        super().__init__(engine)
        self.set_parameters(shape, rate)

    def set_parameters(self, shape: float, rate: float) -> None:
        """Replace the parameters, sanitizing out-of-domain values."""
        parameters = GammaParameters(shape=shape, rate=rate)
        sampler = GammaSampler.for_shape(parameters.shape, parameters.rate)
        self._parameters, self._sampler = parameters, sampler

    @property
    def parameters(self) -> GammaParameters:
        return self._parameters

    @property
    def shape(self) -> float:
        return self._parameters.shape

    @property
    def rate(self) -> float:
        return self._parameters.rate

    @property
    def scale(self) -> float:
        return self._parameters.scale

    @property
    def log_shape(self) -> float:
        return self._parameters.log_shape

    @property
    def log_rate(self) -> float:
        return self._parameters.log_rate

    @property
    def lgamma_shape(self) -> float:
        return self._parameters.lgamma_shape

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    @property
    def sampler(self) -> GammaSampler:
        return self._sampler

    def _pdf(self, x: float) -> float:
        if x < 0.0:
            return 0.0
        if x == 0.0:
            if self.shape < 1.0:
                return math.inf
            return self.rate if self.shape == 1.0 else 0.0
        return math.exp(self._log_pdf(x))

    def _log_pdf(self, x: float) -> float:
        if x < 0.0:
            return -math.inf
        if x == 0.0:
            if self.shape < 1.0:
                return math.inf
            return self.log_rate if self.shape == 1.0 else -math.inf
        p = self._parameters
        return p.log_norm + (p.shape - 1.0) * math.log(x) - p.rate * x

    def _cdf(self, x: float) -> float:
        if x <= 0.0:
            return 0.0
        return regularized_lower_inc_gamma(self.shape, self.rate * x)

    def _sf(self, x: float) -> float:
        if x <= 0.0:
            return 1.0
        return regularized_upper_inc_gamma(self.shape, self.rate * x)

    def _cf(self, t: float) -> complex:
        return complex(1.0, -t / self.rate) ** (-self.shape)

    def _quantile_initial_guess(self, p: float) -> float:
        """
        Starting point of the quantile iteration for ``0 < p < 1``.

        Since ``γ(α, x) <= x^α / α``, the point ``(p Γ(α + 1))^(1/α) / β``
        never exceeds the quantile, and for ``α <= 1`` the concave distribution
        function takes Newton steps from it monotonically onto the root. For
        ``α > 1`` the Wilson-Hilferty approximation is used when it lies above
        that bound.
        """
        shape = self.shape
        guess = math.exp((math.log(p) + float(gammaln(shape + 1.0))) / shape)
        if shape > 1.0:
            base = 1.0 - 1.0 / (9.0 * shape) + float(ndtri(p)) / (3.0 * math.sqrt(shape))
            if base > 0.0:
                guess = max(guess, shape * base**3)
        return guess / self.rate

    def _quantile(self, p: float) -> float:
        if 0.0 < p < 1.0:
            return numerical.continuous_quantile(self, p, self._quantile_initial_guess(p))
        return numerical.continuous_quantile(self, p)

    def mean(self) -> float:
        return self.shape / self.rate

    def variance(self) -> float:
        return self.shape / (self.rate * self.rate)

    def mode(self) -> float:
        return 0.0 if self.shape < 1.0 else (self.shape - 1.0) / self.rate

    def skewness(self) -> float:
        return 2.0 / math.sqrt(self.shape)

    def excess_kurtosis(self) -> float:
        return 6.0 / self.shape

    def mean_of_log(self) -> float:
        """``E[ln X] = ψ(α) − ln β``."""
        return digamma(self.shape) - self.log_rate

    def variance_of_log(self) -> float:
        """``Var[ln X] = ψ₁(α)``."""
        return trigamma(self.shape)


class _GammaView(ContinuousDistribution):
    """Distribution backed by a private :class:`Gamma` core."""

    _core: Gamma

    def _rebuild_core(self, parameters: GammaParameters) -> None:
        self._core = Gamma(parameters.shape, parameters.rate, engine=self._engine)

    @property
    def support(self) -> ContinuousSupport:
        return self._core.support

    @property
    def sampler(self) -> GammaSampler:
        return self._core.sampler

    def _pdf(self, x: float) -> float:
        return self._core._pdf(x)

    def _log_pdf(self, x: float) -> float:
        return self._core._log_pdf(x)

    def _cdf(self, x: float) -> float:
        return self._core._cdf(x)

    def _sf(self, x: float) -> float:
        return self._core._sf(x)

    def _cf(self, t: float) -> complex:
        return self._core._cf(t)

    def _quantile(self, p: float) -> float:
        return self._core._quantile(p)

    def mean(self) -> float:
        return self._core.mean()

    def variance(self) -> float:
        return self._core.variance()

    def mode(self) -> float:
        return self._core.mode()

    def skewness(self) -> float:
        return self._core.skewness()

    def excess_kurtosis(self) -> float:
        return self._core.excess_kurtosis()

    def mean_of_log(self) -> float:
        return self._core.mean_of_log()

    def variance_of_log(self) -> float:
        return self._core.variance_of_log()


class ChiSquared(_GammaView):
    """
    Chi-squared distribution with ``degree`` degrees of freedom.

    Equal in law to ``Gamma(degree / 2, 1 / 2)``.

    Parameters
    ----------
    degree : int, default 1
        Degrees of freedom; values below 1 fall back to 1.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.CHI_SQUARED

    def __init__(self, degree: int = 1, engine: UniformEngine | None = None) -> None:
        super().__init__(engine)
        self.set_degree(degree)

    def set_degree(self, degree: int) -> None:
        parameters = ChiSquaredParameters(degree=degree)
        self._rebuild_core(parameters.to_gamma())
        self._parameters = parameters

    @property
    def parameters(self) -> ChiSquaredParameters:
        return self._parameters

    @property
    def degree(self) -> int:
        return self._parameters.degree


class Erlang(_GammaView):
    """
    Erlang distribution: gamma with an integer shape.

    Parameters
    ----------
    shape : int, default 1
        Number of exponential phases; values below 1 fall back to 1.
    rate : float, default 1.0
        Rate of each phase; non-positive values fall back to 1.
    engine : UniformEngine, optional
        Private engine.
    """

    family_name = FamilyName.ERLANG

    def __init__(
        self, shape: int = 1, rate: float = 1.0, engine: UniformEngine | None = None
    ) -> None:
        super().__init__(engine)
        self.set_parameters(shape, rate)

    def set_parameters(self, shape: int, rate: float) -> None:
        parameters = ErlangParameters(shape=shape, rate=rate)
        self._rebuild_core(parameters.to_gamma())
        self._parameters = parameters

    @property
    def parameters(self) -> ErlangParameters:
        return self._parameters

    @property
    def shape(self) -> int:
        return self._parameters.shape

    @property
    def rate(self) -> float:
        return self._parameters.rate

    @property
    def scale(self) -> float:
        return self._core.scale


def configure_gamma_family() -> None:
    """
    Configure and register the Gamma distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GAMMA):
        return

    family = ParametricFamily(
        name=FamilyName.GAMMA,
        distr_type=UnivariateContinuous,
        distribution=Gamma,
        parametrizations=[GammaParameters, GammaScaleParameters],
    )
    family.__doc__ = Gamma.__doc__

    ParametricFamilyRegister.register(family)


def configure_chi_squared_family() -> None:
    """
    Configure and register the ChiSquared distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CHI_SQUARED):
        return

    family = ParametricFamily(
        name=FamilyName.CHI_SQUARED,
        distr_type=UnivariateContinuous,
        distribution=ChiSquared,
        parametrizations=[ChiSquaredParameters],
    )
    family.__doc__ = ChiSquared.__doc__

    ParametricFamilyRegister.register(family)


def configure_erlang_family() -> None:
    """
    Configure and register the Erlang distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ERLANG):
        return

    family = ParametricFamily(
        name=FamilyName.ERLANG,
        distr_type=UnivariateContinuous,
        distribution=Erlang,
        parametrizations=[ErlangParameters],
    )
    family.__doc__ = Erlang.__doc__

    ParametricFamilyRegister.register(family)


__all__ = [
    "ChiSquared",
    "ChiSquaredParameters",
    "Erlang",
    "ErlangParameters",
    "Gamma",
    "GammaParameters",
    "GammaScaleParameters",
    "configure_chi_squared_family",
    "configure_erlang_family",
    "configure_gamma_family",
]
