"""
Distributions module: the distribution façade, supports, sample containers
and the numerical algorithms behind characteristics without closed forms.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .distribution import (
    BaseDistribution,
    ContinuousDistribution,
    DiscreteDistribution,
    Distribution,
)
from .sampling import ArraySample, Sample
from .support import ContinuousSupport, IntegerSupport, Support

__all__ = [
    "ArraySample",
    "BaseDistribution",
    "ContinuousDistribution",
    "ContinuousSupport",
    "DiscreteDistribution",
    "Distribution",
    "IntegerSupport",
    "Sample",
    "Support",
]
