"""
Numerical kernel: special functions, quadrature, root finding and
minimization. All functions are pure and keep no state between calls.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .beta import beta_fun, incomplete_beta_fun, log_beta_fun, regularized_beta_fun
from .combinatorics import (
    binomial_coef,
    double_factorial,
    factorial,
    gamma_half,
    log_binomial_coef,
    log_factorial,
)
from .gamma import (
    digamma,
    log1pmx,
    log_lower_inc_gamma,
    log_upper_inc_gamma,
    lower_inc_gamma,
    regularized_lower_inc_gamma,
    regularized_upper_inc_gamma,
    stirling_correction,
    trigamma,
    upper_inc_gamma,
)
from .integration import integral
from .series import bernoulli_number, harmonic_number, modified_bessel_first_kind, zeta_riemann
from .solvers import SolverResult, find_min, find_root_brent, find_root_newton, find_root_secant

__all__ = [
    "SolverResult",
    "bernoulli_number",
    "beta_fun",
    "binomial_coef",
    "digamma",
    "double_factorial",
    "factorial",
    "find_min",
    "find_root_brent",
    "find_root_newton",
    "find_root_secant",
    "gamma_half",
    "harmonic_number",
    "incomplete_beta_fun",
    "integral",
    "log1pmx",
    "log_beta_fun",
    "log_binomial_coef",
    "log_factorial",
    "log_lower_inc_gamma",
    "log_upper_inc_gamma",
    "lower_inc_gamma",
    "modified_bessel_first_kind",
    "regularized_beta_fun",
    "regularized_lower_inc_gamma",
    "regularized_upper_inc_gamma",
    "stirling_correction",
    "trigamma",
    "upper_inc_gamma",
    "zeta_riemann",
]
