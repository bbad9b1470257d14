"""
Logarithmic Variate Generation
==============================

Kemp's algorithms for the logarithmic series distribution
``P(X = k) = -p^k / (k ln(1 - p))``.

Regimes
-------
- ``SEARCH`` — sequential search (Kemp's LS) through the mass function; the
  expected number of steps is the mean, so it is used for ``p < 0.95``.
- ``KEMP`` — Kemp's LK algorithm: ``X = ⌊1 + ln V / ln(1 - (1 - p)^U)⌋``
  with shortcuts for the values ``1`` and ``2``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from pysatl_rand._logging import get_logger
from pysatl_rand.config import get_settings
from pysatl_rand.errors import warn_rejection_exhausted
from pysatl_rand.generators.elementary import standard_uniform

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine

logger = get_logger(__name__)

_SEARCH_THRESHOLD = 0.95


class LogarithmicRegime(Enum):
    SEARCH = auto()
    KEMP = auto()


def select_regime(probability: float) -> LogarithmicRegime:
    if probability < _SEARCH_THRESHOLD:
        return LogarithmicRegime.SEARCH
    return LogarithmicRegime.KEMP


@dataclass(frozen=True, slots=True)
class LogarithmicSampler:
    """
    Frozen logarithmic series sampler for one probability.

    Attributes
    ----------
    probability : float
        ``0 < p < 1``.
    log_complement : float
        ``ln(1 - p)``.
    regime : LogarithmicRegime
        Selected algorithm.
    """

    probability: float
    log_complement: float
    regime: LogarithmicRegime

    @classmethod
    def for_probability(cls, probability: float) -> LogarithmicSampler:
        regime = select_regime(probability)
        logger.debug("logarithmic_regime_selected", probability=probability, regime=regime.name)
        return cls(
            probability=probability,
            log_complement=math.log1p(-probability),
            regime=regime,
        )

    def _search(self, engine: UniformEngine) -> int:
        p = self.probability
        u = standard_uniform(engine)
        mass = -p / self.log_complement
        k = 1
        while u > mass and mass > 0.0:
            u -= mass
            mass *= p * k / (k + 1)
            k += 1
        return k

    def _kemp(self, engine: UniformEngine) -> int:
        p = self.probability
        cap = get_settings().rejection_cap
        for _ in range(cap):
            v = standard_uniform(engine)
            if v >= p:
                return 1
            q = -math.expm1(self.log_complement * standard_uniform(engine))
            if v <= q * q:
                k = math.floor(1.0 + math.log(v) / math.log(q))
                if k >= 1:
                    return k
                continue
            return 1 if v >= q else 2
        warn_rejection_exhausted("Logarithmic", cap, stacklevel=4)
        return -1

    def __call__(self, engine: UniformEngine) -> int:
        """Draw one variate; ``-1`` if the rejection loop gave up."""
        if self.regime is LogarithmicRegime.SEARCH:
            return self._search(engine)
        return self._kemp(engine)


__all__ = [
    "LogarithmicRegime",
    "LogarithmicSampler",
    "select_regime",
]
