"""
Distribution Families Configuration
====================================

This module registers the built-in parametric distribution families of the
PySATL Rand library:

- :class:`ContinuousUniform Family` — uniform distribution on an interval.
- :class:`Exponential Family` — rate and scale parameterizations.
- :class:`Normal Family` — Gaussian distribution with multiple parameterizations.
- :class:`Gamma Family` — shape/rate and shape/scale parameterizations, with the
  restricted :class:`ChiSquared Family` and :class:`Erlang Family` views.
- :class:`Binomial Family` — number of trials and success probability.
- :class:`Zeta Family` — Zipf distribution on the positive integers.
- :class:`Logarithmic Family` — logarithmic series distribution.

Notes
-----
- All families are registered in the global ParametricFamilyRegister.
- Registration is idempotent; every configure function returns early when its
  family is already present.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_rand.families.builtins import (
    configure_binomial_family,
    configure_chi_squared_family,
    configure_erlang_family,
    configure_exponential_family,
    configure_gamma_family,
    configure_logarithmic_family,
    configure_normal_family,
    configure_uniform_family,
    configure_zeta_family,
)
from pysatl_rand.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_uniform_family()
    configure_exponential_family()
    configure_normal_family()
    configure_gamma_family()
    configure_chi_squared_family()
    configure_erlang_family()
    configure_binomial_family()
    configure_zeta_family()
    configure_logarithmic_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()


__all__ = [
    "configure_families_register",
    "reset_families_register",
]
