"""
Beta Functions
==============

Complete and incomplete beta functions. The incomplete form is computed from
its continued fraction, switching to ``I_x(a, b) = 1 - I_{1-x}(b, a)`` above
``x = (a + 1) / (a + b + 2)`` where the fraction converges slowly.

Notes
-----
- The fraction needs ``O(√(a + b))`` terms near the mean ``a / (a + b)``; its
  term cap grows accordingly and reaching it gives NaN.
- For ``a, b >= 10`` the prefactor ``x^a (1-x)^b / B(a, b)`` is evaluated
  through Stirling's remainder, without the cancellation between
  ``a ln x + b ln(1 - x)`` and ``ln B(a, b)``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from scipy.special import gammaln

from pysatl_rand.numerics.gamma import log1pmx, stirling_correction

# two ulps of 1.0
_EPS = 4.440892098500626e-16
_FPMIN = 1e-300
_MAX_TERMS = 1000
_TERMS_PER_ROOT = 50
_STIRLING_THRESHOLD = 10.0
_HALF_LOG_2PI = 0.5 * math.log(2.0 * math.pi)


def log_beta_fun(a: float, b: float) -> float:
    """Logarithm of the beta function; NaN for non-positive arguments."""
    if not (a > 0.0 and b > 0.0):
        return math.nan
    return float(gammaln(a) + gammaln(b) - gammaln(a + b))


def beta_fun(a: float, b: float) -> float:
    """Beta function ``B(a, b) = Γ(a) Γ(b) / Γ(a + b)``."""
    return math.exp(log_beta_fun(a, b))


def _guard(value: float) -> float:
    return _FPMIN if abs(value) < _FPMIN else value


def _log_front(x: float, a: float, b: float) -> float:
    """``ln(x^a (1-x)^b / B(a, b))``."""
    if a < _STIRLING_THRESHOLD or b < _STIRLING_THRESHOLD:
        return a * math.log(x) + b * math.log1p(-x) - log_beta_fun(a, b)
    total = a + b
    x0 = a / total
    y0 = b / total
    # the linear terms of a ln(x / x0) and b ln(y / y0) cancel
    deviation = a * log1pmx((x - x0) / x0) + b * log1pmx((x0 - x) / y0)
    return (
        deviation
        + 0.5 * (math.log(a) + math.log(b) - math.log(total))
        - _HALF_LOG_2PI
        + stirling_correction(total)
        - stirling_correction(a)
        - stirling_correction(b)
    )


def _continued_fraction(x: float, a: float, b: float) -> float:
    """
    Continued fraction of the incomplete beta function (modified Lentz);
    NaN when the term cap is reached.
    """
    qab = a + b
    qap = a + 1.0
    qam = a - 1.0
    c = 1.0
    d = 1.0 / _guard(1.0 - qab * x / qap)
    h = d
    for m in range(1, _MAX_TERMS + int(_TERMS_PER_ROOT * math.sqrt(qab)) + 1):
        m2 = 2 * m
        aa = m * (b - m) * x / ((qam + m2) * (a + m2))
        d = 1.0 / _guard(1.0 + aa * d)
        c = _guard(1.0 + aa / c)
        h *= d * c

        aa = -(a + m) * (qab + m) * x / ((a + m2) * (qap + m2))
        d = 1.0 / _guard(1.0 + aa * d)
        c = _guard(1.0 + aa / c)
        delta = d * c
        h *= delta
        if abs(delta - 1.0) <= _EPS:
            return h
    return math.nan


def regularized_beta_fun(x: float, a: float, b: float) -> float:
    """
    Regularized incomplete beta function ``I_x(a, b)``.

    Parameters
    ----------
    x : float
        Upper integration limit in ``[0, 1]``.
    a, b : float
        Positive shape arguments.

    Returns
    -------
    float
        ``I_x(a, b)``; NaN for arguments outside the domain or when the
        continued fraction does not converge.
    """
    if math.isnan(x) or x < 0.0 or x > 1.0 or not (a > 0.0 and b > 0.0):
        return math.nan
    if x == 0.0:
        return 0.0
    if x == 1.0:
        return 1.0

    front = math.exp(_log_front(x, a, b))
    if x < (a + 1.0) / (a + b + 2.0):
        return front * _continued_fraction(x, a, b) / a
    return 1.0 - front * _continued_fraction(1.0 - x, b, a) / b


def incomplete_beta_fun(x: float, a: float, b: float) -> float:
    """Incomplete beta function ``B(x; a, b) = ∫₀ˣ t^(a-1) (1-t)^(b-1) dt``."""
    return regularized_beta_fun(x, a, b) * beta_fun(a, b)


__all__ = [
    "beta_fun",
    "incomplete_beta_fun",
    "log_beta_fun",
    "regularized_beta_fun",
]
