"""
Parametric Families module for working with statistical distribution families.

This package provides the framework for defining, registering and
instantiating parametric families of statistical distributions, and the
built-in families themselves.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .builtins import (
    Binomial,
    ChiSquared,
    ContinuousUniform,
    Erlang,
    Exponential,
    Gamma,
    Logarithmic,
    Normal,
    Zeta,
)
from .configuration import configure_families_register, reset_families_register
from .parametric_family import ParametricFamily
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import ParametricFamilyRegister

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
    "ParametricFamilyRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "ParametricFamily",
    "constraint",
    "parametrization",
    "configure_families_register",
    "reset_families_register",
]
