"""
Variate generators: elementary variates and the regime-dispatched Gamma,
Binomial, Zeta and Logarithmic samplers.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .binomial import BinomialRegime, BinomialSampler, BtpeConstants, ProbabilitySplit
from .gamma import GammaRegime, GammaSampler, LargeShapeConstants
from .logarithmic import LogarithmicRegime, LogarithmicSampler
from .zeta import ZetaRegime, ZetaSampler

__all__ = [
    "BinomialRegime",
    "BinomialSampler",
    "BtpeConstants",
    "GammaRegime",
    "GammaSampler",
    "LargeShapeConstants",
    "LogarithmicRegime",
    "LogarithmicSampler",
    "ProbabilitySplit",
    "ZetaRegime",
    "ZetaSampler",
]
