"""
Built-in distribution families for PySATL Rand.

This package contains implementations of standard statistical distribution families
that are available by default in PySATL Rand.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_rand.families.builtins.continuous import (
    ChiSquared,
    ContinuousUniform,
    Erlang,
    Exponential,
    Gamma,
    Normal,
    configure_chi_squared_family,
    configure_erlang_family,
    configure_exponential_family,
    configure_gamma_family,
    configure_normal_family,
    configure_uniform_family,
)
from pysatl_rand.families.builtins.discrete import (
    Binomial,
    Logarithmic,
    Zeta,
    configure_binomial_family,
    configure_logarithmic_family,
    configure_zeta_family,
)

__all__ = [
    "Binomial",
    "ChiSquared",
    "ContinuousUniform",
    "Erlang",
    "Exponential",
    "Gamma",
    "Logarithmic",
    "Normal",
    "Zeta",
    "configure_binomial_family",
    "configure_chi_squared_family",
    "configure_erlang_family",
    "configure_exponential_family",
    "configure_gamma_family",
    "configure_logarithmic_family",
    "configure_normal_family",
    "configure_uniform_family",
    "configure_zeta_family",
]
