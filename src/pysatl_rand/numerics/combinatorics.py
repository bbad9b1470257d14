"""
Factorials and Binomial Coefficients
====================================

Exact tables up to ``n = 255`` and Stirling-series extensions beyond.
Values are returned as floats; results that do not fit a double are ``inf``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

TABLE_LIMIT = 255

_EXACT_FACTORIALS: tuple[int, ...] = tuple(math.factorial(n) for n in range(TABLE_LIMIT + 1))
_LOG_FACTORIALS: tuple[float, ...] = tuple(math.log(f) for f in _EXACT_FACTORIALS)

_HALF_LOG_2PI = 0.5 * math.log(2.0 * math.pi)
_LOG_DOUBLE_MAX = math.log(1.7976931348623157e308)


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf


def _exp_or_inf(x: float) -> float:
    return math.exp(x) if x < _LOG_DOUBLE_MAX else math.inf


def _stirling_log_factorial(n: int) -> float:
    """ln n! by the Stirling series, accurate to double precision for n > 255."""
    x = float(n)
    inv = 1.0 / x
    inv2 = inv * inv
    correction = inv * (1 / 12 - inv2 * (1 / 360 - inv2 * (1 / 1260 - inv2 / 1680)))
    return x * math.log(x) - x + 0.5 * math.log(x) + _HALF_LOG_2PI + correction


def log_factorial(n: int) -> float:
    """
    Natural logarithm of ``n!``.

    Parameters
    ----------
    n : int
        Non-negative integer.

    Returns
    -------
    float
        ``ln n!``; NaN for negative ``n``.
    """
    if n < 0:
        return math.nan
    if n <= TABLE_LIMIT:
        return _LOG_FACTORIALS[n]
    return _stirling_log_factorial(n)


def factorial(n: int) -> float:
    """
    ``n!`` as a float.

    Exact for tabulated ``n`` as far as a double can represent it, ``inf``
    once the value overflows. NaN for negative ``n``.
    """
    if n < 0:
        return math.nan
    if n <= TABLE_LIMIT:
        return _to_float(_EXACT_FACTORIALS[n])
    # 171! already exceeds the largest double
    return math.inf


def double_factorial(n: int) -> float:
    """``n!! = n (n - 2) (n - 4) ...``; ``1`` for ``n <= 0``."""
    if n <= 0:
        return 1.0
    return _to_float(math.prod(range(n, 0, -2)))


def log_binomial_coef(n: int, k: int) -> float:
    """Natural logarithm of ``C(n, k)``; ``-inf`` when ``k`` is outside ``[0, n]``."""
    if k < 0 or k > n:
        return -math.inf
    return log_factorial(n) - log_factorial(k) - log_factorial(n - k)


def binomial_coef(n: int, k: int) -> float:
    """
    Binomial coefficient ``C(n, k)``.

    Parameters
    ----------
    n : int
        Number of trials.
    k : int
        Number of successes.

    Returns
    -------
    float
        Exact ratio of tabulated factorials for ``n <= 255``,
        ``exp(log C(n, k))`` beyond; ``0`` when ``k`` is outside ``[0, n]``.
    """
    if k < 0 or k > n:
        return 0.0
    if n <= TABLE_LIMIT:
        return _to_float(
            _EXACT_FACTORIALS[n] // (_EXACT_FACTORIALS[k] * _EXACT_FACTORIALS[n - k])
        )
    return _exp_or_inf(log_binomial_coef(n, k))


def gamma_half(k: int) -> float:
    """
    ``Γ(k / 2)`` for a positive integer ``k``.

    Uses ``Γ(m) = (m - 1)!`` for even ``k`` and
    ``Γ(m + 1/2) = (2m)! √π / (4^m m!)`` for odd ``k``.
    """
    if k <= 0:
        return math.nan
    if k % 2 == 0:
        return factorial(k // 2 - 1)
    m = (k - 1) // 2
    log_value = log_factorial(2 * m) - log_factorial(m) - m * math.log(4.0)
    return _exp_or_inf(log_value + 0.5 * math.log(math.pi))


__all__ = [
    "TABLE_LIMIT",
    "binomial_coef",
    "double_factorial",
    "factorial",
    "gamma_half",
    "log_binomial_coef",
    "log_factorial",
]
