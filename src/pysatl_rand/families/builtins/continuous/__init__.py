"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_rand.families.builtins.continuous.exponential import (
    Exponential,
    configure_exponential_family,
)
from pysatl_rand.families.builtins.continuous.gamma import (
    ChiSquared,
    Erlang,
    Gamma,
    configure_chi_squared_family,
    configure_erlang_family,
    configure_gamma_family,
)
from pysatl_rand.families.builtins.continuous.normal import Normal, configure_normal_family
from pysatl_rand.families.builtins.continuous.uniform import (
    ContinuousUniform,
    configure_uniform_family,
)

__all__ = [
    "ChiSquared",
    "ContinuousUniform",
    "Erlang",
    "Exponential",
    "Gamma",
    "Normal",
    "configure_chi_squared_family",
    "configure_erlang_family",
    "configure_exponential_family",
    "configure_gamma_family",
    "configure_normal_family",
    "configure_uniform_family",
]
