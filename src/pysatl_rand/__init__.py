"""
PySATL Rand
===========

Reproducible random-variate generation and distribution characteristics:
uniform KISS engines, a numerical kernel of special functions and solvers,
regime-dispatched Gamma and Binomial generators, Zeta and Logarithmic
samplers, and a family registry that builds distributions by name.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .config import NumericalSettings, configure_settings, get_settings, reset_settings
from .distributions import *
from .distributions import __all__ as _distr_all
from .engine import JKiss32Engine, JLKiss64Engine, UniformEngine, make_engine
from .errors import ParameterClampWarning, PySATLRandWarning, RejectionLoopExhaustedWarning
from .families import *
from .families import __all__ as _family_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-rand")
__all__ = [
    "__version__",
    "JKiss32Engine",
    "JLKiss64Engine",
    "NumericalSettings",
    "ParameterClampWarning",
    "PySATLRandWarning",
    "RejectionLoopExhaustedWarning",
    "UniformEngine",
    "configure_settings",
    "get_settings",
    "make_engine",
    "reset_settings",
    *_distr_all,
    *_family_all,
    *_types_all,
]

del _distr_all
del _family_all
del _types_all
