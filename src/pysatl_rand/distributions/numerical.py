"""
Numerical Characteristic Algorithms
===================================

Generic algorithms used by distributions that have no closed form for a
characteristic:

- quantile by damped Newton iteration on ``F(x) - p`` from the mean or a
  family-specific initial guess (continuous), or by stepping along the
  support, or doubling and bisecting a bracket for heavy tails (discrete);
- mode by bracket localization and Brent minimization of ``-f`` (continuous)
  or hill-climbing on the mass function (discrete);
- expected value by searching for negligible tails in variance-sized steps,
  then integrating (continuous) or summing (discrete).

Notes
-----
- Failures are reported through the return value: NaN for an undefined
  result and ``+inf`` for a quantile the solver could not reach.
- ``variance()`` must have a closed form, since the tail search depends on it.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from pysatl_rand._logging import get_logger
from pysatl_rand.config import get_settings
from pysatl_rand.numerics.integration import integral
from pysatl_rand.numerics.solvers import find_min, find_root_newton

if TYPE_CHECKING:
    from pysatl_rand.distributions.distribution import (
        ContinuousDistribution,
        DiscreteDistribution,
    )
    from pysatl_rand.types import ScalarFunc

logger = get_logger(__name__)

_FALLBACK_MODE_STEP = 100.0
_MAX_BRACKET = 2**1000


def _finite_or(value: float, fallback: float) -> float:
    return value if math.isfinite(value) else fallback


def _boundary_quantile(p: float, bounds: tuple[float, float]) -> float | None:
    """Handle ``p`` outside ``(0, 1)``; ``None`` means an interior query."""
    if math.isnan(p) or p < 0.0 or p > 1.0:
        return math.nan
    if p == 0.0:
        return bounds[0]
    if p == 1.0:
        return bounds[1]
    return None


def continuous_quantile(
    distribution: ContinuousDistribution, p: float, start: float | None = None
) -> float:
    """
    Quantile of a continuous distribution by Newton iteration.

    Parameters
    ----------
    distribution : ContinuousDistribution
        Distribution with scalar ``_cdf`` and ``_pdf``.
    p : float
        Probability.
    start : float, optional
        Initial guess; the mean (zero if it is not finite) by default.

    Returns
    -------
    float
        ``x`` with ``F(x) = p``; NaN outside ``[0, 1]``, the support bounds at
        ``0`` and ``1``, and ``+inf`` when the iteration does not converge.
    """
    boundary = _boundary_quantile(p, distribution.support.bounds)
    if boundary is not None:
        return boundary

    if start is None:
        start = _finite_or(distribution.mean(), 0.0)
    result = find_root_newton(lambda x: distribution._cdf(x) - p, distribution._pdf, start)
    if not result.converged:
        logger.debug("quantile_not_converged", distribution=repr(distribution), p=p)
        return math.inf
    return result.x


def continuous_mode(distribution: ContinuousDistribution) -> float:
    """
    Mode of a unimodal continuous distribution.

    The bracket ``[mu - step, mu + step]`` around the mean (the median if the
    mean is not finite) with ``step = 10 · variance`` is shifted in the
    direction of increasing density until the density at ``mu`` dominates
    both ends, staying inside the support. The maximum of the density is then
    located by Brent's minimizer applied to ``-f``.

    Returns
    -------
    float
        The mode, NaN when the minimizer does not converge.
    """
    support = distribution.support
    settings = get_settings()
    f = distribution._pdf

    mu = distribution.mean()
    if not math.isfinite(mu):
        mu = _finite_or(distribution.median(), 0.0)
    mu = support.clip(mu)
    step = 10.0 * distribution.variance()
    if not math.isfinite(step) or step <= 0.0:
        step = _FALLBACK_MODE_STEP

    a = support.clip(mu - step)
    b = support.clip(mu + step)
    fa, fb, fmu = f(a), f(b), f(mu)
    for _ in range(settings.tail_max_steps):
        if fa > fmu and a > support.bounds[0]:
            b, mu, fmu = mu, a, fa
            a = support.clip(a - step)
            fa = f(a)
        elif fb > fmu and b < support.bounds[1]:
            a, mu, fmu = mu, b, fb
            b = support.clip(b + step)
            fb = f(b)
        else:
            break

    result = find_min(lambda x: -f(x), a, b)
    return result.x if result.converged else math.nan


def _tail(
    integrand: ScalarFunc,
    start: float,
    step: float,
    limit: float,
    tolerance: float,
    max_steps: int,
) -> float | None:
    """Walk from ``start`` by ``step`` until the integrand is negligible or ``limit``."""
    x = start
    for _ in range(max_steps):
        x += step
        if (step < 0.0 and x <= limit) or (step > 0.0 and x >= limit):
            return limit
        if abs(integrand(x)) < tolerance:
            return x
    return None


def continuous_expected_value(
    distribution: ContinuousDistribution,
    func: ScalarFunc,
    start_point: float | None = None,
) -> float:
    """
    ``E[func(X)]`` for a continuous distribution.

    Parameters
    ----------
    distribution : ContinuousDistribution
        Distribution with a scalar ``_pdf`` and a closed-form variance.
    func : Callable[[float], float]
        Function of the random variable.
    start_point : float, optional
        Point inside the bulk of the integrand; the mean by default.

    Returns
    -------
    float
        The expectation; NaN if no negligible tail is found within
        ``tail_max_steps`` steps.
    """
    settings = get_settings()
    lower_bound, upper_bound = distribution.support.bounds

    def integrand(x: float) -> float:
        y = func(x)
        return 0.0 if y == 0.0 else y * distribution._pdf(x)

    start = start_point if start_point is not None else _finite_or(distribution.mean(), 0.0)
    start = distribution.support.clip(start)
    step = distribution.variance()
    if not (math.isfinite(step) and step > 0.0):
        return math.nan

    lower = _tail(
        integrand, start, -step, lower_bound, settings.tail_tolerance, settings.tail_max_steps
    )
    upper = _tail(
        integrand, start, step, upper_bound, settings.tail_tolerance, settings.tail_max_steps
    )
    if lower is None or upper is None:
        logger.debug("expected_value_tail_not_found", distribution=repr(distribution))
        return math.nan
    return integral(integrand, lower, upper, settings.tail_tolerance)


def discrete_quantile(distribution: DiscreteDistribution, p: float) -> float:
    """
    Smallest support point ``k`` with ``F(k) >= p``.

    Starts at ``⌊mean⌋`` (clipped to the support) and steps one point at a
    time in the required direction.
    """
    bounds = distribution.support.bounds
    boundary = _boundary_quantile(p, bounds)
    if boundary is not None:
        return boundary

    k = math.floor(distribution.support.clip(_finite_or(distribution.mean(), 0.0)))
    cdf = distribution._cdf
    if cdf(k) >= p:
        while k - 1 >= bounds[0] and cdf(k - 1) >= p:
            k -= 1
        return float(k)
    while cdf(k) < p:
        if k + 1 > bounds[1]:
            return float(k)
        k += 1
    return float(k)


def discrete_tail_quantile(distribution: DiscreteDistribution, p: float) -> float:
    """
    Smallest support point ``k`` with ``F(k) >= p`` for a heavy right tail.

    The bracket above the lower support bound is doubled until it covers
    ``p`` and then bisected on the integers.

    Returns
    -------
    float
        The quantile; ``+inf`` when no bracket below the float range covers
        ``p``.
    """
    bounds = distribution.support.bounds
    boundary = _boundary_quantile(p, bounds)
    if boundary is not None:
        return boundary

    cdf = distribution._cdf
    lower = math.floor(bounds[0])
    if cdf(lower) >= p:
        return float(lower)
    width = 1
    while cdf(lower + width) < p:
        lower += width
        width *= 2
        if lower + width > _MAX_BRACKET:
            logger.debug("quantile_bracket_overflow", distribution=repr(distribution), p=p)
            return math.inf
    upper = lower + width
    while upper - lower > 1:
        middle = (lower + upper) // 2
        if cdf(middle) >= p:
            upper = middle
        else:
            lower = middle
    return float(upper)


def discrete_mode(distribution: DiscreteDistribution) -> int:
    """Mode of a unimodal discrete distribution by hill-climbing on the pmf."""
    lower, upper = distribution.support.bounds
    pmf = distribution._pmf
    k = math.floor(distribution.support.clip(_finite_or(distribution.mean(), 0.0)))
    current = pmf(k)
    while k + 1 <= upper and pmf(k + 1) > current:
        k += 1
        current = pmf(k)
    while k - 1 >= lower and pmf(k - 1) > current:
        k -= 1
        current = pmf(k)
    return k


def discrete_expected_value(
    distribution: DiscreteDistribution,
    func: ScalarFunc,
    start_point: float | None = None,
) -> float:
    """
    ``E[func(X)]`` for a discrete distribution.

    Searches for negligible tails in unit steps and sums
    ``func(k) · P(X = k)`` over the points in between.
    """
    settings = get_settings()
    support = distribution.support
    lower_bound, upper_bound = support.bounds

    def term(x: float) -> float:
        y = func(x)
        return 0.0 if y == 0.0 else y * distribution._pmf(int(x))

    start = start_point if start_point is not None else _finite_or(distribution.mean(), 0.0)
    start = float(math.floor(support.clip(start)))

    lower = _tail(term, start, -1.0, lower_bound, settings.tail_tolerance, settings.tail_max_steps)
    upper = _tail(term, start, 1.0, upper_bound, settings.tail_tolerance, settings.tail_max_steps)
    if lower is None or upper is None:
        logger.debug("expected_value_tail_not_found", distribution=repr(distribution))
        return math.nan
    return math.fsum(term(float(k)) for k in support.iter_between(lower, upper))


__all__ = [
    "continuous_expected_value",
    "continuous_mode",
    "continuous_quantile",
    "discrete_expected_value",
    "discrete_mode",
    "discrete_quantile",
    "discrete_tail_quantile",
]
