"""
Root Finding and Minimization
=============================

Scalar solvers used by quantile and mode computations:

- :func:`find_root_newton` — damped Newton iteration with a derivative.
- :func:`find_root_secant` — secant (quasi-Newton) iteration.
- :func:`find_root_brent` — Brent's bracketing method.
- :func:`find_min` — Brent's golden-section / parabolic minimizer.

Notes
-----
- Every solver returns a :class:`SolverResult`. When it does not converge
  within ``root_max_iter`` iterations, or stalls before reaching the
  tolerance, the result has ``converged=False`` and ``x = nan``; nothing is
  raised.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_rand._logging import get_logger
from pysatl_rand.config import get_settings

if TYPE_CHECKING:
    from pysatl_rand.types import ScalarFunc

logger = get_logger(__name__)

_MACHINE_EPS = 2.220446049250313e-16
_GOLDEN = 0.3819660112501051


@dataclass(frozen=True, slots=True)
class SolverResult:
    """
    Outcome of a solver run.

    Attributes
    ----------
    x : float
        Root or minimizer; NaN when the solver failed.
    converged : bool
        Whether the tolerance was reached.
    iterations : int
        Number of iterations performed.
    """

    x: float
    converged: bool
    iterations: int

    def __bool__(self) -> bool:
        return self.converged


def _failure(method: str, iterations: int, reason: str) -> SolverResult:
    logger.debug("solver_not_converged", method=method, iterations=iterations, reason=reason)
    return SolverResult(math.nan, False, iterations)


def _resolve(epsilon: float | None) -> tuple[float, int]:
    settings = get_settings()
    return (settings.root_tolerance if epsilon is None else epsilon), settings.root_max_iter


def find_root_newton(
    f: ScalarFunc,
    df: ScalarFunc,
    x0: float,
    epsilon: float | None = None,
) -> SolverResult:
    """
    Damped Newton iteration.

    The Newton step is halved while the new residual is not finite, is larger
    than the current one, or lands on a point with zero derivative. A root is
    accepted when the residual vanishes or the step is within ``epsilon`` of
    ``|x|``; halving the step below that size counts as a failure.

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought.
    df : Callable[[float], float]
        Derivative of ``f``.
    x0 : float
        Starting point.
    epsilon : float, optional
        Relative step tolerance; defaults to ``root_tolerance`` from the
        settings.

    Returns
    -------
    SolverResult
        Root estimate and convergence flag.
    """
    eps, max_iter = _resolve(epsilon)
    x = x0
    fx = f(x)
    if not math.isfinite(fx):
        return _failure("newton", 0, "non-finite residual at start")
    if fx == 0.0:
        return SolverResult(x, True, 0)

    for iteration in range(1, max_iter + 1):
        dfx = df(x)
        if dfx == 0.0 or not math.isfinite(dfx):
            return _failure("newton", iteration, "zero or non-finite derivative")
        step = fx / dfx
        if abs(step) <= eps * abs(x):
            return SolverResult(x - step, True, iteration)

        alpha = 1.0
        while True:
            candidate = x - alpha * step
            f_candidate = f(candidate)
            if math.isfinite(f_candidate) and (
                f_candidate == 0.0
                or (abs(f_candidate) <= abs(fx) and df(candidate) != 0.0)
            ):
                break
            alpha *= 0.5
            if alpha * abs(step) <= eps * abs(x):
                return _failure("newton", iteration, "damping stalled")

        if f_candidate == 0.0:
            return SolverResult(candidate, True, iteration)
        x, fx = candidate, f_candidate

    return _failure("newton", max_iter, "iteration cap")


def find_root_secant(f: ScalarFunc, x0: float, epsilon: float | None = None) -> SolverResult:
    """
    Secant iteration started from ``x0`` and a small perturbation of it.

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought.
    x0 : float
        Starting point.
    epsilon : float, optional
        Step tolerance; defaults to ``root_tolerance`` from the settings.

    Returns
    -------
    SolverResult
        Root estimate and convergence flag.
    """
    eps, max_iter = _resolve(epsilon)
    x_prev = x0
    f_prev = f(x_prev)
    if f_prev == 0.0:
        return SolverResult(x_prev, True, 0)
    x = x0 + 1e-4 * max(abs(x0), 1.0)
    fx = f(x)

    for iteration in range(1, max_iter + 1):
        if fx == 0.0:
            return SolverResult(x, True, iteration)
        if fx == f_prev or not (math.isfinite(fx) and math.isfinite(f_prev)):
            return _failure("secant", iteration, "flat or non-finite secant")
        x_next = x - fx * (x - x_prev) / (fx - f_prev)
        if not math.isfinite(x_next):
            return _failure("secant", iteration, "non-finite step")
        x_prev, f_prev = x, fx
        x = x_next
        fx = f(x)
        if abs(x - x_prev) < eps:
            return SolverResult(x, True, iteration)

    return _failure("secant", max_iter, "iteration cap")


def find_root_brent(
    f: ScalarFunc,
    a: float,
    b: float,
    epsilon: float | None = None,
) -> SolverResult:
    """
    Brent's root-finding method.

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought.
    a, b : float
        Bracket; ``f(a)`` and ``f(b)`` must differ in sign.
    epsilon : float, optional
        Absolute tolerance; defaults to ``root_tolerance`` from the settings.

    Returns
    -------
    SolverResult
        Root estimate, or a failed result when there is no sign change.
    """
    eps, max_iter = _resolve(epsilon)
    fa = f(a)
    fb = f(b)
    if fa == 0.0:
        return SolverResult(a, True, 0)
    if fb == 0.0:
        return SolverResult(b, True, 0)
    if fa * fb > 0.0:
        return _failure("brent", 0, "no sign change on the bracket")

    c, fc = b, fb
    d = e = b - a
    for iteration in range(1, max_iter + 1):
        if (fb > 0.0) == (fc > 0.0):
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        tol = 2.0 * _MACHINE_EPS * abs(b) + 0.5 * eps
        xm = 0.5 * (c - b)
        if abs(xm) <= tol or fb == 0.0:
            return SolverResult(b, True, iteration)

        if abs(e) >= tol and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0.0:
                q = -q
            p = abs(p)
            if 2.0 * p < min(3.0 * xm * q - abs(tol * q), abs(e * q)):
                e, d = d, p / q
            else:
                d = e = xm
        else:
            d = e = xm

        a, fa = b, fb
        b += d if abs(d) > tol else math.copysign(tol, xm)
        fb = f(b)

    return _failure("brent", max_iter, "iteration cap")


def find_min(
    f: ScalarFunc,
    a: float,
    b: float,
    epsilon: float | None = None,
) -> SolverResult:
    """
    Brent's minimizer on ``[a, b]``.

    Combines golden-section steps with parabolic interpolation.

    Parameters
    ----------
    f : Callable[[float], float]
        Function to minimize.
    a, b : float
        Search interval.
    epsilon : float, optional
        Tolerance; defaults to ``root_tolerance`` from the settings.

    Returns
    -------
    SolverResult
        Minimizer estimate and convergence flag.
    """
    eps, max_iter = _resolve(epsilon)
    if a > b:
        a, b = b, a

    x = w = v = a + _GOLDEN * (b - a)
    fx = fw = fv = f(x)
    d = e = 0.0

    for iteration in range(1, max_iter + 1):
        xm = 0.5 * (a + b)
        tol1 = eps * abs(x) + eps
        tol2 = 2.0 * tol1
        if abs(x - xm) <= tol2 - 0.5 * (b - a):
            return SolverResult(x, True, iteration)

        golden_step = True
        if abs(e) > tol1:
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)
            previous_e = e
            e = d
            if abs(p) < abs(0.5 * q * previous_e) and q * (a - x) < p < q * (b - x):
                d = p / q
                u = x + d
                if u - a < tol2 or b - u < tol2:
                    d = math.copysign(tol1, xm - x)
                golden_step = False
        if golden_step:
            e = (a - x) if x >= xm else (b - x)
            d = _GOLDEN * e

        u = x + d if abs(d) >= tol1 else x + math.copysign(tol1, d)
        fu = f(u)
        if fu <= fx:
            if u >= x:
                a = x
            else:
                b = x
            v, w, x = w, x, u
            fv, fw, fx = fw, fx, fu
        else:
            if u < x:
                a = u
            else:
                b = u
            if fu <= fw or w == x:
                v, w = w, u
                fv, fw = fw, fu
            elif fu <= fv or v == x or v == w:
                v, fv = u, fu

    return _failure("brent_min", max_iter, "iteration cap")


__all__ = [
    "SolverResult",
    "find_min",
    "find_root_brent",
    "find_root_newton",
    "find_root_secant",
]
