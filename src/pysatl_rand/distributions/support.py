"""
Distribution Supports
=====================

Support descriptions for univariate distributions:

- :class:`ContinuousSupport` — an interval of the real line.
- :class:`IntegerSupport` — the integers of a (possibly unbounded) range.

Both expose ``bounds`` and ``clip`` so that numerical routines can keep
their search inside the support.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import ceil, floor, inf
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_rand.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    @property
    def bounds(self) -> tuple[float, float]: ...

    def clip(self, x: float) -> float: ...


class ContinuousSupport(Interval1D, Support): ...


@dataclass(frozen=True, slots=True)
class IntegerSupport:
    """
    Integers ``k`` with ``min_k <= k <= max_k``.

    Parameters
    ----------
    min_k : int, optional
        Smallest point; unbounded below when omitted.
    max_k : int, optional
        Largest point; unbounded above when omitted.
    """

    min_k: int | None = None
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.min_k is not None and self.max_k is not None and self.min_k > self.max_k:
            raise ValueError("min_k must not exceed max_k.")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        mask = np.isfinite(xf) & (xf == np.floor(xf))
        if self.min_k is not None:
            mask &= xf >= self.min_k
        if self.max_k is not None:
            mask &= xf <= self.max_k

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def bounds(self) -> tuple[float, float]:
        """Smallest and largest point, infinite on unbounded sides."""
        lower = -inf if self.min_k is None else float(self.min_k)
        upper = inf if self.max_k is None else float(self.max_k)
        return lower, upper

    @property
    def is_left_bounded(self) -> bool:
        return self.min_k is not None

    @property
    def is_right_bounded(self) -> bool:
        return self.max_k is not None

    def clip(self, x: float) -> float:
        """Project ``x`` onto ``[min_k, max_k]``."""
        lower, upper = self.bounds
        return min(max(x, lower), upper)

    def first(self) -> int | None:
        return self.min_k

    def last(self) -> int | None:
        return self.max_k

    def next(self, current: int) -> int | None:
        nxt = current + 1
        if self.max_k is not None and nxt > self.max_k:
            return None
        return nxt

    def prev(self, current: int) -> int | None:
        prv = current - 1
        if self.min_k is not None and prv < self.min_k:
            return None
        return prv

    def iter_points(self) -> Iterator[int]:
        """
        Iterate over the points in increasing order.

        Raises
        ------
        RuntimeError
            If the support is unbounded below.
        """
        if self.min_k is None:
            raise RuntimeError(
                "Cannot iterate points of an IntegerSupport without min_k. "
                "Provide a lower bound to enable enumeration."
            )
        current = self.min_k
        while self.max_k is None or current <= self.max_k:
            yield current
            current += 1

    def iter_between(self, a: float, b: float) -> Iterator[int]:
        """Iterate over the points of ``[a, b]`` in increasing order."""
        lower, upper = self.bounds
        start = ceil(max(a, lower))
        stop = floor(min(b, upper))
        yield from range(start, stop + 1)

    __iter__ = iter_points


__all__ = [
    "ContinuousSupport",
    "IntegerSupport",
    "Support",
]
