"""
Zeta Variate Generation
=======================

Devroye's rejection algorithm for the Zeta (Zipf) distribution
``P(X = k) = k^(-s) / ζ(s)``.

A candidate ``X = ⌊U^(-1/(s-1))⌋`` is drawn from a Pareto envelope and
accepted with probability proportional to ``T / b`` where
``T = (1 + 1/X)^(s-1)`` and ``b = 2^(s-1)``. Candidates beyond the int64 range
are rejected.

Regimes
-------
- ``POINT_MASS`` — the exponent is so large that ``2^(s-1)`` overflows; all
  mass sits at ``1``.
- ``REJECTION`` — Devroye's algorithm.
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

_LOG_MAX_VARIATE = 62.0 * math.log(2.0)
_MAX_ENVELOPE_EXPONENT = 1000.0


class ZetaRegime(Enum):
    POINT_MASS = auto()
    REJECTION = auto()


@dataclass(frozen=True, slots=True)
class ZetaSampler:
    """
    Frozen Zeta sampler for one exponent.

    Attributes
    ----------
    exponent : float
        ``s > 1``.
    regime : ZetaRegime
        Selected algorithm.
    envelope : float
        ``b = 2^(s-1)``; ``inf`` for ``POINT_MASS``.
    """

    exponent: float
    regime: ZetaRegime
    envelope: float

    @classmethod
    def for_exponent(cls, exponent: float) -> ZetaSampler:
        if exponent - 1.0 >= _MAX_ENVELOPE_EXPONENT:
            regime, envelope = ZetaRegime.POINT_MASS, math.inf
        else:
            regime, envelope = ZetaRegime.REJECTION, 2.0 ** (exponent - 1.0)
        logger.debug("zeta_regime_selected", exponent=exponent, regime=regime.name)
        return cls(exponent=exponent, regime=regime, envelope=envelope)

    def __call__(self, engine: UniformEngine) -> int:
        """Draw one variate; ``-1`` if the rejection loop gave up."""
        if self.regime is ZetaRegime.POINT_MASS:
            return 1

        am1 = self.exponent - 1.0
        b = self.envelope
        cap = get_settings().rejection_cap
        for _ in range(cap):
            u = standard_uniform(engine)
            v = standard_uniform(engine)
            log_x = -math.log(u) / am1
            if log_x >= _LOG_MAX_VARIATE:
                continue
            x = math.floor(math.exp(log_x))
            t = (1.0 + 1.0 / x) ** am1
            if v * x * (t - 1.0) / (b - 1.0) <= t / b:
                return x
        warn_rejection_exhausted("Zeta", cap, stacklevel=3)
        return -1


__all__ = [
    "ZetaRegime",
    "ZetaSampler",
]
