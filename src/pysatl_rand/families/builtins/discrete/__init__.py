"""
Built-in discrete distribution families.

This module contains implementations of discrete parametric families.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_rand.families.builtins.discrete.binomial import Binomial, configure_binomial_family
from pysatl_rand.families.builtins.discrete.logarithmic import (
    Logarithmic,
    configure_logarithmic_family,
)
from pysatl_rand.families.builtins.discrete.zeta import Zeta, configure_zeta_family

__all__ = [
    "Binomial",
    "Logarithmic",
    "Zeta",
    "configure_binomial_family",
    "configure_logarithmic_family",
    "configure_zeta_family",
]
