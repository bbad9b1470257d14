"""
Gamma Variate Generation
========================

Regime-dispatched sampling of the Gamma distribution. The regime is chosen
once per shape value and stored, together with the constants of the large
shape rejection algorithm, in an immutable :class:`GammaSampler`.

Regimes
-------
- ``INTEGER_SHAPE`` — integral shape below 5: sum of exponentials.
- ``HALF_INTEGER_SHAPE`` — half-integral shape below 5: sum of exponentials
  plus half a squared normal.
- ``SMALL_SHAPE`` — shape up to 1: Ahrens-Dieter GS rejection.
- ``MEDIUM_SHAPE`` — shape in ``(1, 3]``: rejection from an exponential with
  mean equal to the shape.
- ``LARGE_SHAPE`` — everything else: normal envelope with an exponential
  tail, accepted through squeeze tests.
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
from pysatl_rand.generators.elementary import (
    standard_exponential,
    standard_normal,
    standard_uniform,
)

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine

logger = get_logger(__name__)

_EXPONENTIAL_BRANCH_PROBABILITY = 0.0095722652
_LARGE_SHAPE_OFFSET = 3.7203285
_EXACT_REGIMES_LIMIT = 5.0
_SHAPE_TOLERANCE = 1e-6


class GammaRegime(Enum):
    INTEGER_SHAPE = auto()
    HALF_INTEGER_SHAPE = auto()
    SMALL_SHAPE = auto()
    MEDIUM_SHAPE = auto()
    LARGE_SHAPE = auto()


def is_integral(value: float) -> bool:
    """Whether ``value`` lies within ``1e-6`` (relative) of an integer."""
    return math.isclose(value, round(value), rel_tol=_SHAPE_TOLERANCE)


def select_regime(shape: float) -> GammaRegime:
    """
    Choose the sampling algorithm for a shape value.

    Parameters
    ----------
    shape : float
        Positive shape parameter.

    Returns
    -------
    GammaRegime
        Regime tag; the exact regimes are only used below a shape of 5.
    """
    if shape < _EXACT_REGIMES_LIMIT:
        if is_integral(shape):
            return GammaRegime.INTEGER_SHAPE
        if is_integral(shape - 0.5):
            return GammaRegime.HALF_INTEGER_SHAPE
        if shape <= 1.0:
            return GammaRegime.SMALL_SHAPE
        if shape <= 3.0:
            return GammaRegime.MEDIUM_SHAPE
    return GammaRegime.LARGE_SHAPE


@dataclass(frozen=True, slots=True)
class LargeShapeConstants:
    """Constants of the large shape rejection algorithm for one shape value."""

    m: float
    s_squared: float
    s: float
    d: float
    b: float
    w: float
    v: float
    c: float

    @classmethod
    def for_shape(cls, shape: float) -> LargeShapeConstants:
        m = shape - 1.0
        s_squared = math.sqrt(8.0 * shape / 3.0) + shape
        s = math.sqrt(s_squared)
        d = math.sqrt(6.0) * s_squared
        b = d + m
        return cls(
            m=m,
            s_squared=s_squared,
            s=s,
            d=d,
            b=b,
            w=s_squared / (m - 1.0),
            v=2.0 * s_squared / (m * math.sqrt(shape)),
            c=b + math.log(s * d / b) - 2.0 * m - _LARGE_SHAPE_OFFSET,
        )


def _integer_shape(engine: UniformEngine, shape: float) -> float:
    return math.fsum(standard_exponential(engine) for _ in range(round(shape)))


def _half_integer_shape(engine: UniformEngine, shape: float) -> float:
    total = math.fsum(standard_exponential(engine) for _ in range(math.floor(shape)))
    n = standard_normal(engine)
    return total + 0.5 * n * n


def _small_shape(engine: UniformEngine, shape: float, cap: int) -> float:
    coef = 1.0 / shape + 1.0 / math.e
    inv_shape = 1.0 / shape
    for _ in range(cap):
        u = standard_uniform(engine)
        p = shape * coef * u
        w = standard_exponential(engine)
        if p <= 1.0:
            x = p**inv_shape
            if x <= w:
                return x
        else:
            x = -math.log(coef * (1.0 - u))
            if (1.0 - shape) * math.log(x) <= w:
                return x
    warn_rejection_exhausted("Gamma small shape", cap, stacklevel=4)
    return math.nan


def _medium_shape(engine: UniformEngine, shape: float, cap: int) -> float:
    for _ in range(cap):
        w1 = standard_exponential(engine)
        w2 = standard_exponential(engine)
        if w2 >= (shape - 1.0) * (w1 - math.log(w1) - 1.0):
            return shape * w1
    warn_rejection_exhausted("Gamma medium shape", cap, stacklevel=4)
    return math.nan


def _large_shape(engine: UniformEngine, k: LargeShapeConstants, cap: int) -> float:
    for _ in range(cap):
        if standard_uniform(engine) <= _EXPONENTIAL_BRANCH_PROBABILITY:
            w1 = standard_exponential(engine)
            w2 = standard_exponential(engine)
            x = k.b * (1.0 + w1 / k.d)
            if k.m * (x / k.b - math.log(x / k.m)) + k.c <= w2:
                return x
            continue

        for _ in range(cap):
            n = standard_normal(engine)
            x = k.s * n + k.m
            if 0.0 <= x <= k.b:
                break
        else:
            break

        u = standard_uniform(engine)
        half_n2 = 0.5 * n * n
        if n > 0.0:
            if u < 1.0 - k.w * half_n2:
                return x
        elif u < 1.0 + half_n2 * (k.v * n - k.w):
            return x
        if math.log(u) < k.m * math.log(x / k.m) + k.m - x + half_n2:
            return x
    warn_rejection_exhausted("Gamma large shape", cap, stacklevel=4)
    return math.nan


@dataclass(frozen=True, slots=True)
class GammaSampler:
    """
    Frozen Gamma sampler for one parameter set.

    Attributes
    ----------
    shape : float
        Shape parameter α.
    scale : float
        Scale ``1 / β`` applied to standard variates.
    regime : GammaRegime
        Selected algorithm.
    constants : LargeShapeConstants or None
        Present only for ``LARGE_SHAPE``.
    """

    shape: float
    scale: float
    regime: GammaRegime
    constants: LargeShapeConstants | None = None

    @classmethod
    def for_shape(cls, shape: float, rate: float = 1.0) -> GammaSampler:
        regime = select_regime(shape)
        constants = (
            LargeShapeConstants.for_shape(shape) if regime is GammaRegime.LARGE_SHAPE else None
        )
        logger.debug("gamma_regime_selected", shape=shape, regime=regime.name)
        return cls(shape=shape, scale=1.0 / rate, regime=regime, constants=constants)

    def standard_variate(self, engine: UniformEngine) -> float:
        """Variate of ``Gamma(shape, 1)``; NaN if a rejection loop gave up."""
        match self.regime:
            case GammaRegime.INTEGER_SHAPE:
                return _integer_shape(engine, self.shape)
            case GammaRegime.HALF_INTEGER_SHAPE:
                return _half_integer_shape(engine, self.shape)
            case GammaRegime.SMALL_SHAPE:
                return _small_shape(engine, self.shape, get_settings().rejection_cap)
            case GammaRegime.MEDIUM_SHAPE:
                return _medium_shape(engine, self.shape, get_settings().rejection_cap)
            case _:
                assert self.constants is not None
                return _large_shape(engine, self.constants, get_settings().rejection_cap)

    def __call__(self, engine: UniformEngine) -> float:
        return self.scale * self.standard_variate(engine)


__all__ = [
    "GammaRegime",
    "GammaSampler",
    "LargeShapeConstants",
    "is_integral",
    "select_regime",
]
