"""
KISS Engines
============

Two combined generators in the KISS style (congruential + xorshift +
multiply-with-carry):

- :class:`JKiss32Engine` — 32-bit output.
- :class:`JLKiss64Engine` — 64-bit output, two 32-bit multiply-with-carry
  stages.

Notes
-----
- Engines constructed without a seed start from fixed registers, so an
  unseeded engine is reproducible too.
- An engine is not safe to share between threads.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, replace

from pysatl_rand.engine.base import MASK32, MASK64, BaseUniformEngine, expand_seed

_MWC_MULTIPLIER_1 = 4294584393
_MWC_MULTIPLIER_2 = 4246477509
# Carries are kept strictly below this bound, well under both multipliers.
_CARRY_MODULUS = 698769068

_DEFAULT_Y32 = 987654321
_DEFAULT_Y64 = 987654321987


def _carry_from(word: int) -> int:
    return word % _CARRY_MODULUS + 1


@dataclass(slots=True)
class JKiss32State:
    """Registers of :class:`JKiss32Engine`."""

    x: int = 123456789
    y: int = _DEFAULT_Y32
    z: int = 43219876
    c: int = 6543217


@dataclass(slots=True)
class JLKiss64State:
    """Registers of :class:`JLKiss64Engine`."""

    x: int = 123456789123
    y: int = _DEFAULT_Y64
    z1: int = 43219876
    c1: int = 6543217
    z2: int = 21987643
    c2: int = 1732654


class JKiss32Engine(BaseUniformEngine):
    """
    32-bit KISS engine.

    Parameters
    ----------
    seed : int, optional
        Seed expanded into all registers. The default registers are used
        when omitted.
    """

    bits = 32

    def __init__(self, seed: int | None = None) -> None:
        self._state = JKiss32State()
        if seed is not None:
            self.seed(seed)

    @property
    def state(self) -> JKiss32State:
        """Copy of the current registers."""
        return replace(self._state)

    @state.setter
    def state(self, value: JKiss32State) -> None:
        if not isinstance(value, JKiss32State):
            raise TypeError(f"Expected JKiss32State, got {type(value).__name__}")
        self._state = replace(value)

    def seed(self, value: int) -> None:
        x, y, z, c = expand_seed(value, 4)
        y &= MASK32
        self._state = JKiss32State(
            x=x & MASK32,
            y=y or _DEFAULT_Y32,
            z=z & MASK32,
            c=_carry_from(c),
        )
        self._log_seeded(value)

    def variate(self) -> int:
        s = self._state
        s.x = (314527869 * s.x + 1234567) & MASK32

        y = s.y
        y ^= (y << 5) & MASK32
        y ^= y >> 7
        y ^= (y << 22) & MASK32
        s.y = y

        t = _MWC_MULTIPLIER_1 * s.z + s.c
        s.c = t >> 32
        s.z = t & MASK32

        return (s.x + s.y + s.z) & MASK32


class JLKiss64Engine(BaseUniformEngine):
    """
    64-bit KISS engine.

    Parameters
    ----------
    seed : int, optional
        Seed expanded into all registers. The default registers are used
        when omitted.
    """

    bits = 64

    def __init__(self, seed: int | None = None) -> None:
        self._state = JLKiss64State()
        if seed is not None:
            self.seed(seed)

    @property
    def state(self) -> JLKiss64State:
        """Copy of the current registers."""
        return replace(self._state)

    @state.setter
    def state(self, value: JLKiss64State) -> None:
        if not isinstance(value, JLKiss64State):
            raise TypeError(f"Expected JLKiss64State, got {type(value).__name__}")
        self._state = replace(value)

    def seed(self, value: int) -> None:
        x, y, z1, c1, z2, c2 = expand_seed(value, 6)
        self._state = JLKiss64State(
            x=x,
            y=y or _DEFAULT_Y64,
            z1=z1 & MASK32,
            c1=_carry_from(c1),
            z2=z2 & MASK32,
            c2=_carry_from(c2),
        )
        self._log_seeded(value)

    def variate(self) -> int:
        s = self._state
        s.x = (1490024343005336237 * s.x + 123456789) & MASK64

        y = s.y
        y ^= (y << 21) & MASK64
        y ^= y >> 17
        y ^= (y << 30) & MASK64
        s.y = y

        t = _MWC_MULTIPLIER_1 * s.z1 + s.c1
        s.c1 = t >> 32
        s.z1 = t & MASK32

        t = _MWC_MULTIPLIER_2 * s.z2 + s.c2
        s.c2 = t >> 32
        s.z2 = t & MASK32

        return (s.x + s.y + s.z1 + (s.z2 << 32)) & MASK64


__all__ = [
    "JKiss32Engine",
    "JKiss32State",
    "JLKiss64Engine",
    "JLKiss64State",
]
