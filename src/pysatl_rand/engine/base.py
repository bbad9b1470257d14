"""
Uniform Engine Interfaces
=========================

Protocol implemented by every uniform integer engine and the common base class
of the KISS engines.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC, abstractmethod
from math import floor, log10
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_rand._logging import get_logger

if TYPE_CHECKING:
    from typing import ClassVar

logger = get_logger(__name__)

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

_GOLDEN_GAMMA = 0x9E3779B97F4A7C15


def splitmix64(state: int) -> tuple[int, int]:
    """
    Advance a SplitMix64 state.

    Parameters
    ----------
    state : int
        Current 64-bit state.

    Returns
    -------
    tuple[int, int]
        The next state and the 64-bit output derived from it.
    """
    state = (state + _GOLDEN_GAMMA) & MASK64
    z = state
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return state, z ^ (z >> 31)


def expand_seed(seed: int, count: int) -> list[int]:
    """Expand ``seed`` into ``count`` 64-bit words with SplitMix64."""
    state = seed & MASK64
    words = []
    for _ in range(count):
        state, word = splitmix64(state)
        words.append(word)
    return words


@runtime_checkable
class UniformEngine(Protocol):
    """
    Source of uniformly distributed unsigned integers.

    Every draw lies in ``[0, max_value()]``. Engines are deterministic: two
    engines seeded with the same value produce the same sequence.
    """

    def variate(self) -> int: ...

    def max_value(self) -> int: ...

    def max_decimals(self) -> int: ...

    def seed(self, value: int) -> None: ...


class BaseUniformEngine(ABC):
    """
    Shared behaviour of fixed-width engines.

    Subclasses set ``bits`` and implement :meth:`variate` and :meth:`seed`.
    """

    bits: ClassVar[int]

    @abstractmethod
    def variate(self) -> int:
        """Advance the state and return the next integer."""

    @abstractmethod
    def seed(self, value: int) -> None:
        """Reset every register from ``value``."""

    def max_value(self) -> int:
        """Largest integer returned by :meth:`variate`."""
        return (1 << self.bits) - 1

    def max_decimals(self) -> int:
        """Number of decimal digits a uniform fraction of this width carries."""
        return floor(self.bits * log10(2))

    def _log_seeded(self, value: int) -> None:
        logger.debug("engine_seeded", engine=type(self).__name__, seed=value)


__all__ = [
    "MASK32",
    "MASK64",
    "BaseUniformEngine",
    "UniformEngine",
    "expand_seed",
    "splitmix64",
]
