"""
Gamma-related Special Functions
===============================

Polygamma functions of order 0 and 1 and the incomplete gamma functions in
plain, logarithmic and regularized forms.

Notes
-----
- Incomplete gamma functions use the power series when ``x < a + 1`` and the
  modified Lentz continued fraction otherwise. Both need ``O(√a)`` terms near
  ``x = a``, so their term cap grows with ``√a``; reaching it gives NaN.
- The prefactor ``x^a e^(-x) / Γ(a)`` is evaluated through Stirling's remainder
  for ``a >= 10`` to avoid cancellation at large shapes.
- Invalid arguments and poles produce NaN instead of raising.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

from scipy.special import gammaln

# two ulps of 1.0
_EPS = 4.440892098500626e-16
_FPMIN = 1e-300
_MAX_TERMS = 1000
_TERMS_PER_ROOT = 50
_ASYMPTOTIC_THRESHOLD = 6.0
_STIRLING_THRESHOLD = 10.0
_HALF_LOG_2PI = 0.5 * math.log(2.0 * math.pi)


def _is_pole(x: float) -> bool:
    return x <= 0.0 and x == math.floor(x)


def digamma(x: float) -> float:
    """
    Digamma function ``ψ(x) = Γ'(x) / Γ(x)``.

    Parameters
    ----------
    x : float
        Argument.

    Returns
    -------
    float
        ``ψ(x)``; NaN at non-positive integers.
    """
    if math.isnan(x) or _is_pole(x):
        return math.nan
    if x < 0.0:
        return digamma(1.0 - x) - math.pi / math.tan(math.pi * x)

    result = 0.0
    while x < _ASYMPTOTIC_THRESHOLD:
        result -= 1.0 / x
        x += 1.0

    inv2 = 1.0 / (x * x)
    series = inv2 * (
        1 / 12 - inv2 * (1 / 120 - inv2 * (1 / 252 - inv2 * (1 / 240 - inv2 / 132)))
    )
    return result + math.log(x) - 0.5 / x - series


def trigamma(x: float) -> float:
    """
    Trigamma function ``ψ₁(x) = ψ'(x)``.

    Parameters
    ----------
    x : float
        Argument.

    Returns
    -------
    float
        ``ψ₁(x)``; NaN at non-positive integers.
    """
    if math.isnan(x) or _is_pole(x):
        return math.nan
    if x < 0.0:
        return (math.pi / math.sin(math.pi * x)) ** 2 - trigamma(1.0 - x)

    result = 0.0
    while x < _ASYMPTOTIC_THRESHOLD:
        result += 1.0 / (x * x)
        x += 1.0

    inv = 1.0 / x
    inv2 = inv * inv
    series = inv * (
        1.0
        + inv * 0.5
        + inv2 * (1 / 6 - inv2 * (1 / 30 - inv2 * (1 / 42 - inv2 * (1 / 30 - inv2 * 5 / 66))))
    )
    return result + series


def log1pmx(x: float) -> float:
    """
    ``ln(1 + x) - x`` without cancellation near ``x = 0``.

    Parameters
    ----------
    x : float
        Argument, ``x > -1``.

    Returns
    -------
    float
        ``ln(1 + x) - x``; NaN for ``x < -1``.
    """
    if math.isnan(x) or x < -1.0:
        return math.nan
    if abs(x) > 0.5:
        return math.log1p(x) - x
    power = -x * x
    total = 0.0
    for k in range(2, _MAX_TERMS):
        term = power / k
        total += term
        if abs(term) <= abs(total) * _EPS:
            break
        power *= -x
    return total


def stirling_correction(x: float) -> float:
    """
    Remainder ``ln Γ(x) - [(x - ½) ln x - x + ½ ln 2π]`` of Stirling's formula.

    The asymptotic series is used from ``x = 10`` on, below that the
    remainder is taken from ``ln Γ`` directly.
    """
    if math.isnan(x) or x <= 0.0:
        return math.nan
    if x < _STIRLING_THRESHOLD:
        return float(gammaln(x)) - (x - 0.5) * math.log(x) + x - _HALF_LOG_2PI
    inv = 1.0 / x
    inv2 = inv * inv
    tail = 1 / 1680 - inv2 * (1 / 1188 - inv2 * 691 / 360360)
    return inv * (1 / 12 - inv2 * (1 / 360 - inv2 * (1 / 1260 - inv2 * tail)))


def _term_cap(a: float) -> int:
    # series and fraction need O(sqrt(a)) terms when x is close to a
    return _MAX_TERMS + int(_TERMS_PER_ROOT * math.sqrt(a))


def _log_front(a: float, x: float) -> float:
    """
    ``ln(x^a e^(-x) / Γ(a))``.

    For large ``a`` the leading terms of ``a ln x`` and ``ln Γ(a)`` cancel;
    writing ``x = a (1 + t)`` leaves ``a (ln(1 + t) - t)`` and Stirling's
    remainder instead.
    """
    if a < _STIRLING_THRESHOLD:
        return a * math.log(x) - x - float(gammaln(a))
    t = (x - a) / a
    return a * log1pmx(t) + 0.5 * math.log(a) - _HALF_LOG_2PI - stirling_correction(a)


def _log_series(a: float, x: float) -> float:
    """
    Logarithm of ``Σ_n x^n / (a (a+1) ... (a+n))``, so that
    ``γ(a, x) = x^a e^(-x) · series``; NaN when the term cap is reached.
    """
    ap = a
    term = 1.0 / a
    total = term
    for _ in range(_term_cap(a)):
        ap += 1.0
        term *= x / ap
        total += term
        if term <= total * _EPS:
            return math.log(total)
    return math.nan


def _log_continued_fraction(a: float, x: float) -> float:
    """
    Logarithm of the modified Lentz continued fraction ``h`` with
    ``Γ(a, x) = x^a e^(-x) · h``; NaN when the term cap is reached.
    """
    b = x + 1.0 - a
    c = 1.0 / _FPMIN
    d = 1.0 / b
    h = d
    for i in range(1, _term_cap(a) + 1):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < _FPMIN:
            d = _FPMIN
        c = b + an / c
        if abs(c) < _FPMIN:
            c = _FPMIN
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) <= _EPS:
            return math.log(h)
    return math.nan


def log_lower_inc_gamma(a: float, x: float) -> float:
    """Logarithm of the lower incomplete gamma function ``γ(a, x)``."""
    if math.isnan(a) or math.isnan(x) or a <= 0.0 or x < 0.0:
        return math.nan
    if x == 0.0:
        return -math.inf
    if math.isinf(x):
        return float(gammaln(a))
    if x < a + 1.0:
        return a * math.log(x) - x + _log_series(a, x)
    upper = math.exp(_log_front(a, x) + _log_continued_fraction(a, x))
    return float(gammaln(a)) + math.log1p(-upper)


def log_upper_inc_gamma(a: float, x: float) -> float:
    """Logarithm of the upper incomplete gamma function ``Γ(a, x)``."""
    if math.isnan(a) or math.isnan(x) or a <= 0.0 or x < 0.0:
        return math.nan
    if x == 0.0:
        return float(gammaln(a))
    if math.isinf(x):
        return -math.inf
    if x < a + 1.0:
        lower = math.exp(_log_front(a, x) + _log_series(a, x))
        return float(gammaln(a)) + math.log1p(-lower)
    return a * math.log(x) - x + _log_continued_fraction(a, x)


def lower_inc_gamma(a: float, x: float) -> float:
    """Lower incomplete gamma function ``γ(a, x) = ∫₀ˣ t^(a-1) e^(-t) dt``."""
    return math.exp(log_lower_inc_gamma(a, x))


def upper_inc_gamma(a: float, x: float) -> float:
    """Upper incomplete gamma function ``Γ(a, x) = ∫ₓ^∞ t^(a-1) e^(-t) dt``."""
    return math.exp(log_upper_inc_gamma(a, x))


def regularized_lower_inc_gamma(a: float, x: float) -> float:
    """
    Regularized lower incomplete gamma ``P(a, x) = γ(a, x) / Γ(a)``.

    The complementary function is evaluated directly and subtracted from one
    on the continued-fraction side, so ``P + Q = 1`` to rounding. NaN when
    neither expansion converges within its term cap.
    """
    if math.isnan(a) or math.isnan(x) or a <= 0.0 or x < 0.0:
        return math.nan
    if x == 0.0:
        return 0.0
    if math.isinf(x):
        return 1.0
    front = _log_front(a, x)
    if x < a + 1.0:
        return math.exp(front + _log_series(a, x))
    return 1.0 - math.exp(front + _log_continued_fraction(a, x))


def regularized_upper_inc_gamma(a: float, x: float) -> float:
    """Regularized upper incomplete gamma ``Q(a, x) = Γ(a, x) / Γ(a)``."""
    if math.isnan(a) or math.isnan(x) or a <= 0.0 or x < 0.0:
        return math.nan
    if x == 0.0:
        return 1.0
    if math.isinf(x):
        return 0.0
    front = _log_front(a, x)
    if x < a + 1.0:
        return 1.0 - math.exp(front + _log_series(a, x))
    return math.exp(front + _log_continued_fraction(a, x))


__all__ = [
    "digamma",
    "log1pmx",
    "log_lower_inc_gamma",
    "log_upper_inc_gamma",
    "lower_inc_gamma",
    "regularized_lower_inc_gamma",
    "regularized_upper_inc_gamma",
    "stirling_correction",
    "trigamma",
    "upper_inc_gamma",
]
