"""
Elementary Variates
===================

Building blocks shared by the rejection samplers: uniform, exponential,
normal, Bernoulli and geometric variates drawn from a
:class:`~pysatl_rand.engine.UniformEngine`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pysatl_rand.engine import UniformEngine

_MANTISSA_BITS = 53
_TWO_PI = 2.0 * math.pi


def standard_uniform(engine: UniformEngine) -> float:
    """
    Uniform variate on the open interval ``(0, 1)``.

    The top 53 bits of the engine output (all of them for narrower engines)
    are centred in their cell, so neither endpoint can be returned.
    """
    bits = engine.max_value().bit_length()
    shift = max(bits - _MANTISSA_BITS, 0)
    return ((engine.variate() >> shift) + 0.5) * 2.0 ** -(bits - shift)


def uniform(engine: UniformEngine, lower: float, upper: float) -> float:
    """Uniform variate on ``(lower, upper)``."""
    return lower + (upper - lower) * standard_uniform(engine)


def standard_exponential(engine: UniformEngine) -> float:
    """Exponential variate with unit rate."""
    return -math.log(standard_uniform(engine))


def exponential(engine: UniformEngine, rate: float) -> float:
    return standard_exponential(engine) / rate


def standard_normal(engine: UniformEngine) -> float:
    """Standard normal variate by the Box-Muller transform."""
    radius = math.sqrt(-2.0 * math.log(standard_uniform(engine)))
    return radius * math.cos(_TWO_PI * standard_uniform(engine))


def normal(engine: UniformEngine, mu: float, sigma: float) -> float:
    return mu + sigma * standard_normal(engine)


def standard_bernoulli(engine: UniformEngine) -> int:
    """Fair coin flip taken from the most significant bit of one draw."""
    return engine.variate() >> (engine.max_value().bit_length() - 1)


def bernoulli(engine: UniformEngine, probability: float) -> int:
    return int(standard_uniform(engine) < probability)


def geometric(engine: UniformEngine, probability: float) -> int:
    """
    Number of failures before the first success.

    Parameters
    ----------
    engine : UniformEngine
        Source of uniform integers.
    probability : float
        Success probability of a single trial; values ``>= 1`` give ``0``.

    Returns
    -------
    int
        ``floor(log U / log(1 - p))``.
    """
    if probability >= 1.0:
        return 0
    return math.floor(math.log(standard_uniform(engine)) / math.log1p(-probability))


__all__ = [
    "bernoulli",
    "exponential",
    "geometric",
    "normal",
    "standard_bernoulli",
    "standard_exponential",
    "standard_normal",
    "standard_uniform",
    "uniform",
]
