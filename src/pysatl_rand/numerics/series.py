"""
Series-based Special Functions
==============================

Bernoulli numbers, the Riemann zeta function, generalized harmonic numbers and
the modified Bessel function of the first kind.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from fractions import Fraction
from functools import lru_cache

from scipy.special import gammaln

# Euler-Maclaurin summation: explicit terms before the remainder and the
# number of Bernoulli corrections.
_ZETA_TERMS = 10
_ZETA_CORRECTIONS = 10

_EPS = 1e-16
_MAX_TERMS = 10_000


@lru_cache(maxsize=None)
def _bernoulli_fraction(n: int) -> Fraction:
    """Exact ``B_n`` (with ``B_1 = +1/2``) by the Akiyama-Tanigawa algorithm."""
    row = [Fraction(0)] * (n + 1)
    for m in range(n + 1):
        row[m] = Fraction(1, m + 1)
        for j in range(m, 0, -1):
            row[j - 1] = j * (row[j - 1] - row[j])
    return row[0]


def bernoulli_number(n: int) -> float:
    """
    Bernoulli number ``B_n``.

    Parameters
    ----------
    n : int
        Non-negative index.

    Returns
    -------
    float
        ``B_n`` with the convention ``B_1 = +1/2``; NaN for negative ``n``.
    """
    if n < 0:
        return math.nan
    if n > 1 and n % 2 == 1:
        return 0.0
    return float(_bernoulli_fraction(n))


def zeta_riemann(s: float) -> float:
    """
    Riemann zeta function by Euler-Maclaurin summation.

    Parameters
    ----------
    s : float
        Real argument, ``s != 1``.

    Returns
    -------
    float
        ``ζ(s)``; ``inf`` at the pole ``s = 1``.
    """
    if math.isnan(s):
        return math.nan
    if s == 1.0:
        return math.inf
    if math.isinf(s):
        return 1.0 if s > 0 else math.nan

    n = float(_ZETA_TERMS)
    total = math.fsum(k**-s for k in range(1, _ZETA_TERMS))
    total += n ** (1.0 - s) / (s - 1.0) + 0.5 * n**-s

    rising = s  # s (s + 1) ... (s + 2j - 2)
    power = n ** (-s - 1.0)
    for j in range(1, _ZETA_CORRECTIONS + 1):
        total += float(_bernoulli_fraction(2 * j)) / math.factorial(2 * j) * rising * power
        rising *= (s + 2 * j - 1) * (s + 2 * j)
        power /= n * n
    return total


def harmonic_number(exponent: float, number: int) -> float:
    """Generalized harmonic number ``Σ_{i=1}^{number} i^(-exponent)``."""
    if number < 1:
        return 0.0
    if exponent == 0.0:
        return float(number)
    if exponent == 1.0:
        return math.fsum(1.0 / i for i in range(1, number + 1))
    return math.fsum(i**-exponent for i in range(1, number + 1))


def modified_bessel_first_kind(x: float, n: float) -> float:
    """
    Modified Bessel function of the first kind ``I_n(x)``.

    Sums the power series ``Σ (x/2)^(2k+n) / (k! Γ(k+n+1))`` using the ratio of
    consecutive terms.

    Parameters
    ----------
    x : float
        Argument. Negative values are allowed for integer orders only.
    n : float
        Non-negative order.

    Returns
    -------
    float
        ``I_n(x)``; NaN outside the supported domain.
    """
    if math.isnan(x) or math.isnan(n) or n < 0.0:
        return math.nan
    if x == 0.0:
        return 1.0 if n == 0.0 else 0.0
    if x < 0.0:
        if n != math.floor(n):
            return math.nan
        sign = -1.0 if int(n) % 2 else 1.0
        return sign * modified_bessel_first_kind(-x, n)

    half_x = 0.5 * x
    quarter_x2 = half_x * half_x
    term = math.exp(n * math.log(half_x) - float(gammaln(n + 1.0)))
    total = term
    for k in range(1, _MAX_TERMS + 1):
        term *= quarter_x2 / (k * (k + n))
        total += term
        if term < total * _EPS:
            break
    return total


__all__ = [
    "bernoulli_number",
    "harmonic_number",
    "modified_bessel_first_kind",
    "zeta_riemann",
]
