"""
Distribution Interfaces and Base Classes
========================================

This module defines the public :class:`Distribution` protocol and the base
classes concrete families derive from:

- :class:`BaseDistribution` – engine ownership, sampling and moments shared by
  every family.
- :class:`ContinuousDistribution` – density-based façade; quantile, mode and
  expected value fall back to the numerical algorithms of
  :mod:`pysatl_rand.distributions.numerical`.
- :class:`DiscreteDistribution` – mass-function-based façade with the discrete
  counterparts of the same algorithms.

Notes
-----
- Subclasses implement scalar ``_pdf`` / ``_pmf``, ``_cdf`` and ``_cf``; the
  public methods accept scalars or NumPy arrays and apply them element-wise.
- Every distribution owns a private engine (built by
  :func:`~pysatl_rand.engine.make_engine` unless one is passed); every
  sampling call accepts an explicit ``engine`` override.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from pysatl_rand.distributions import numerical
from pysatl_rand.distributions.sampling import ArraySample, as_values, fill_buffer
from pysatl_rand.engine import make_engine
from pysatl_rand.types import UnivariateContinuous, UnivariateDiscrete

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar, Self

    import numpy.typing as npt

    from pysatl_rand.distributions.sampling import Sample, SampleBuffer
    from pysatl_rand.distributions.support import ContinuousSupport, IntegerSupport, Support
    from pysatl_rand.engine import UniformEngine
    from pysatl_rand.families.parametrizations import Parametrization
    from pysatl_rand.types import DistributionType, FamilyName, Number, ScalarFunc


def elementwise[R](func: Callable[[float], R], x: Any, otype: type = np.float64) -> Any:
    """
    Apply a scalar function to a scalar or, element by element, to an array.

    Parameters
    ----------
    func : Callable[[float], R]
        Scalar function.
    x : Number or array-like
        Argument(s).
    otype : type, default numpy.float64
        Element type of the returned array.

    Returns
    -------
    R or numpy.ndarray
        ``func(x)`` for scalars, an array of the same shape otherwise.
    """
    if np.ndim(x) == 0:
        return func(float(x))
    return np.vectorize(lambda value: func(float(value)), otypes=[otype])(np.asarray(x))


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def support(self) -> Support: ...

    def mean(self) -> float: ...

    def variance(self) -> float: ...

    def variate(self, engine: UniformEngine | None = None) -> Number: ...

    def sample(self, n: int, engine: UniformEngine | None = None) -> Sample: ...


class BaseDistribution(ABC):
    """
    Behaviour shared by all families.

    Parameters
    ----------
    engine : UniformEngine, optional
        Private engine of this distribution; a new one from
        :func:`~pysatl_rand.engine.make_engine` when omitted.
    """

    family_name: ClassVar[FamilyName]
    distribution_type: ClassVar[DistributionType]
    _sample_dtype: ClassVar[type] = np.float64

    def __init__(self, engine: UniformEngine | None = None) -> None:
        self._engine = make_engine() if engine is None else engine

    @classmethod
    def from_parameters(
        cls, parameters: Parametrization, engine: UniformEngine | None = None
    ) -> Self:
        """Build a distribution from its base parametrization."""
        return cls(**parameters.parameters, engine=engine)

    @property
    def engine(self) -> UniformEngine:
        """Engine used when no explicit one is passed to sampling calls."""
        return self._engine

    @engine.setter
    def engine(self, engine: UniformEngine) -> None:
        self._engine = engine

    def seed(self, value: int) -> None:
        """Reseed the private engine."""
        self._engine.seed(value)

    @property
    @abstractmethod
    def parameters(self) -> Parametrization:
        """Current (sanitized) parameters."""

    @property
    @abstractmethod
    def support(self) -> ContinuousSupport | IntegerSupport:
        """Support of the distribution."""

    @property
    @abstractmethod
    def sampler(self) -> Callable[[UniformEngine], Number]:
        """Frozen sampler for the current parameters."""

    def _resolve_engine(self, engine: UniformEngine | None) -> UniformEngine:
        return self._engine if engine is None else engine

    def variate(self, engine: UniformEngine | None = None) -> Number:
        """Draw a single variate."""
        return self.sampler(self._resolve_engine(engine))

    def fill(self, buffer: SampleBuffer, engine: UniformEngine | None = None) -> None:
        """
        Fill a caller-owned buffer with independent variates.

        The sampler is taken once, so the whole buffer is drawn with the
        parameters current at the time of the call.

        Parameters
        ----------
        buffer : numpy.ndarray or MutableSequence
            Buffer to overwrite element by element.
        engine : UniformEngine, optional
            Engine to draw from instead of the private one.
        """
        fill_buffer(buffer, self.sampler, self._resolve_engine(engine))

    def sample(self, n: int, engine: UniformEngine | None = None) -> ArraySample:
        """
        Draw ``n`` variates.

        Parameters
        ----------
        n : int
            Number of variates.
        engine : UniformEngine, optional
            Engine to draw from instead of the private one.

        Returns
        -------
        ArraySample
            Sample of shape ``(n, 1)``.
        """
        if n < 0:
            raise ValueError("Sample size must be non-negative.")
        data = np.empty((n, 1), dtype=self._sample_dtype)
        self.fill(data, engine)
        return ArraySample(data)

    @abstractmethod
    def mean(self) -> float: ...

    @abstractmethod
    def variance(self) -> float: ...

    def std(self) -> float:
        return math.sqrt(self.variance())

    @abstractmethod
    def skewness(self) -> float: ...

    @abstractmethod
    def excess_kurtosis(self) -> float: ...

    def kurtosis(self) -> float:
        return self.excess_kurtosis() + 3.0

    @abstractmethod
    def quantile(self, p: Any) -> Any: ...

    def median(self) -> float:
        return float(self.quantile(0.5))

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.parameters.parameters.items())
        return f"{self.family_name}({params})"


class ContinuousDistribution(BaseDistribution):
    """Base class of univariate continuous distributions."""

    distribution_type = UnivariateContinuous

    @abstractmethod
    def _pdf(self, x: float) -> float: ...

    def _log_pdf(self, x: float) -> float:
        value = self._pdf(x)
        return math.log(value) if value > 0.0 else -math.inf

    @abstractmethod
    def _cdf(self, x: float) -> float: ...

    def _sf(self, x: float) -> float:
        return 1.0 - self._cdf(x)

    @abstractmethod
    def _cf(self, t: float) -> complex: ...

    def _quantile(self, p: float) -> float:
        return numerical.continuous_quantile(self, p)

    def pdf(self, x: Any) -> Any:
        """Probability density at ``x``."""
        return elementwise(self._pdf, x)

    def log_pdf(self, x: Any) -> Any:
        """Natural logarithm of the density at ``x``."""
        return elementwise(self._log_pdf, x)

    def cdf(self, x: Any) -> Any:
        """Probability ``P(X <= x)``."""
        return elementwise(self._cdf, x)

    def sf(self, x: Any) -> Any:
        """Survival function ``P(X > x)``."""
        return elementwise(self._sf, x)

    def hazard(self, x: Any) -> Any:
        """Hazard rate ``f(x) / S(x)``."""
        return elementwise(lambda v: self._pdf(v) / self._sf(v), x)

    def cf(self, t: Any) -> Any:
        """Characteristic function ``E[exp(itX)]``."""
        return elementwise(self._cf, t, np.complex128)

    def quantile(self, p: Any) -> Any:
        """
        Inverse of the distribution function.

        NaN outside ``[0, 1]``; the support bounds at ``0`` and ``1``.
        """
        return elementwise(self._quantile, p)

    def mode(self) -> float:
        return numerical.continuous_mode(self)

    def expected_value(self, func: ScalarFunc, start_point: float | None = None) -> float:
        """
        ``E[func(X)]`` by numerical integration over the non-negligible range.

        Parameters
        ----------
        func : Callable[[float], float]
            Function of the random variable.
        start_point : float, optional
            Point inside the bulk of the integrand; the mean by default.

        Returns
        -------
        float
            The expectation, NaN if the integrand tails decay too slowly.
        """
        return numerical.continuous_expected_value(self, func, start_point)

    def likelihood(self, sample: Sample | npt.ArrayLike) -> float:
        """Product of densities over a sample."""
        return math.prod(self._pdf(float(x)) for x in as_values(sample))

    def log_likelihood(self, sample: Sample | npt.ArrayLike) -> float:
        """Sum of log-densities over a sample."""
        return sum(self._log_pdf(float(x)) for x in as_values(sample))


class DiscreteDistribution(BaseDistribution):
    """Base class of univariate distributions over the integers."""

    distribution_type = UnivariateDiscrete
    _sample_dtype = np.int64

    @abstractmethod
    def _pmf(self, k: int) -> float: ...

    def _log_pmf(self, k: int) -> float:
        value = self._pmf(k)
        return math.log(value) if value > 0.0 else -math.inf

    @abstractmethod
    def _cdf(self, x: float) -> float: ...

    def _sf(self, x: float) -> float:
        return 1.0 - self._cdf(x)

    @abstractmethod
    def _cf(self, t: float) -> complex: ...

    def _quantile(self, p: float) -> float:
        return numerical.discrete_quantile(self, p)

    def _integral_point(self, x: float) -> int | None:
        return int(x) if x == math.floor(x) else None

    def _pmf_at(self, x: float) -> float:
        k = self._integral_point(x)
        return 0.0 if k is None else self._pmf(k)

    def _log_pmf_at(self, x: float) -> float:
        k = self._integral_point(x)
        return -math.inf if k is None else self._log_pmf(k)

    def pmf(self, k: Any) -> Any:
        """Probability ``P(X = k)``; zero for non-integer ``k``."""
        return elementwise(self._pmf_at, k)

    def log_pmf(self, k: Any) -> Any:
        """Natural logarithm of the mass at ``k``."""
        return elementwise(self._log_pmf_at, k)

    def cdf(self, x: Any) -> Any:
        """Probability ``P(X <= x)``."""
        return elementwise(self._cdf, x)

    def sf(self, x: Any) -> Any:
        """Survival function ``P(X > x)``."""
        return elementwise(self._sf, x)

    def hazard(self, x: Any) -> Any:
        """Discrete hazard ``P(X = x) / P(X >= x)``."""
        return elementwise(lambda v: self._pmf_at(v) / self._sf(v - 1.0), x)

    def cf(self, t: Any) -> Any:
        """Characteristic function ``E[exp(itX)]``."""
        return elementwise(self._cf, t, np.complex128)

    def quantile(self, p: Any) -> Any:
        """
        Smallest support point ``k`` with ``F(k) >= p``.

        NaN outside ``[0, 1]``; the support bounds at ``0`` and ``1``.
        """
        return elementwise(self._quantile, p)

    def mode(self) -> float:
        return float(numerical.discrete_mode(self))

    def expected_value(self, func: ScalarFunc, start_point: float | None = None) -> float:
        """``E[func(X)]`` by summation over the non-negligible range."""
        return numerical.discrete_expected_value(self, func, start_point)

    def likelihood(self, sample: Sample | npt.ArrayLike) -> float:
        """Product of masses over a sample."""
        return math.prod(self._pmf_at(float(x)) for x in as_values(sample))

    def log_likelihood(self, sample: Sample | npt.ArrayLike) -> float:
        """Sum of log-masses over a sample."""
        return sum(self._log_pmf_at(float(x)) for x in as_values(sample))


__all__ = [
    "BaseDistribution",
    "ContinuousDistribution",
    "DiscreteDistribution",
    "Distribution",
    "elementwise",
]
