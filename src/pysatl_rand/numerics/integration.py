"""
Numerical Integration
=====================

Adaptive Simpson quadrature over a finite interval.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_rand.config import get_settings

if TYPE_CHECKING:
    from pysatl_rand.types import ScalarFunc


def _adaptive_simpson(
    f: ScalarFunc,
    a: float,
    b: float,
    epsilon: float,
    whole: float,
    fa: float,
    fb: float,
    fc: float,
    depth: int,
) -> float:
    c = 0.5 * (a + b)
    h = b - a
    fd = f(0.5 * (a + c))
    fe = f(0.5 * (c + b))
    left = h / 12.0 * (fa + 4.0 * fd + fc)
    right = h / 12.0 * (fc + 4.0 * fe + fb)
    refined = left + right
    if depth <= 0 or abs(refined - whole) <= 15.0 * epsilon:
        return refined + (refined - whole) / 15.0
    return _adaptive_simpson(
        f, a, c, 0.5 * epsilon, left, fa, fc, fd, depth - 1
    ) + _adaptive_simpson(f, c, b, 0.5 * epsilon, right, fc, fb, fe, depth - 1)


def integral(
    f: ScalarFunc,
    a: float,
    b: float,
    epsilon: float | None = None,
    max_depth: int | None = None,
) -> float:
    """
    Integrate ``f`` over ``[a, b]`` by adaptive Simpson's rule.

    A subinterval is accepted when the refined and coarse estimates differ by
    at most ``15 ε``; the tolerance is halved on every bisection. Once
    ``max_depth`` bisections are reached the current estimate is accepted.

    Parameters
    ----------
    f : Callable[[float], float]
        Integrand, finite on ``[a, b]``.
    a, b : float
        Integration limits. Reversed limits flip the sign.
    epsilon : float, optional
        Target error; defaults to ``integration_tolerance`` from the settings.
    max_depth : int, optional
        Recursion cap; defaults to ``integration_max_depth`` from the settings.

    Returns
    -------
    float
        Estimate of the integral.
    """
    if a == b:
        return 0.0
    if a > b:
        return -integral(f, b, a, epsilon, max_depth)

    settings = get_settings()
    eps = settings.integration_tolerance if epsilon is None else epsilon
    depth = settings.integration_max_depth if max_depth is None else max_depth

    fa = f(a)
    fb = f(b)
    fc = f(0.5 * (a + b))
    whole = (b - a) / 6.0 * (fa + 4.0 * fc + fb)
    return _adaptive_simpson(f, a, b, eps, whole, fa, fb, fc, depth)


__all__ = [
    "integral",
]
