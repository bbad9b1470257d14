"""
Core Type Definitions
=====================

Type aliases, distribution kind descriptors and the one-dimensional interval
used to describe supports of univariate distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, StrEnum, auto
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Distribution over an integer lattice, described by a mass function.
    CONTINUOUS : str
        Distribution over the real line, described by a density.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


@dataclass(frozen=True, slots=True)
class DistributionType:
    """
    Kind and dimension of a distribution.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Dimension of the sample space. Only ``1`` is produced by this package.
    """

    kind: Kind
    dimension: int = 1


UnivariateContinuous = DistributionType(kind=Kind.CONTINUOUS)
"""Type for univariate continuous distributions."""

UnivariateDiscrete = DistributionType(kind=Kind.DISCRETE)
"""Type for univariate discrete distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

ComplexArray = NDArray[np.complexfloating[Any]]
"""Type alias for complex arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""

type ParametrizationName = str
"""Type alias for parametrization names."""


class ContinuousSupportShape1D(Enum):
    """
    Topological shape of a 1D interval.

    Attributes
    ----------
    REAL_LINE
        Entire real line (-∞, ∞).
    RAY_LEFT
        Right-bounded ray (-∞, b].
    RAY_RIGHT
        Left-bounded ray [a, ∞), e.g. the support of the Gamma family.
    BOUNDED_INTERVAL
        Bounded interval [a, b].
    EMPTY
        Empty support.
    SINGLE_POINT
        Single point {a}.
    """

    REAL_LINE = auto()
    RAY_LEFT = auto()
    RAY_RIGHT = auto()
    BOUNDED_INTERVAL = auto()
    EMPTY = auto()
    SINGLE_POINT = auto()


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    1D interval with configurable closure.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    left_closed : bool, default=True
        Whether left endpoint is included (ignored if left = -inf).
    right_closed : bool, default=True
        Whether right endpoint is included (ignored if right = inf).
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        if self.left == -inf and self.left_closed:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf and self.right_closed:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) are contained in the interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within the interval, False otherwise.
        """
        arr = np.asarray(x)

        left_ok = (arr > self.left) | (self.left_closed & (arr >= self.left))
        right_ok = (arr < self.right) | (self.right_closed & (arr <= self.right))
        result = left_ok & right_ok

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def clip(self, x: float) -> float:
        """Project ``x`` onto the closure of the interval."""
        return min(max(x, self.left), self.right)

    @property
    def bounds(self) -> tuple[float, float]:
        """Infimum and supremum of the interval."""
        return self.left, self.right

    @property
    def is_empty(self) -> bool:
        """Check if the interval is empty."""
        if self.left > self.right:
            return True

        return bool(self.left == self.right and not (self.left_closed and self.right_closed))

    @property
    def shape(self) -> ContinuousSupportShape1D:
        """Topological shape of the interval."""
        if self.is_empty:
            return ContinuousSupportShape1D.EMPTY

        if self.left == self.right:
            return ContinuousSupportShape1D.SINGLE_POINT

        if self.left == -inf and self.right == inf:
            return ContinuousSupportShape1D.REAL_LINE
        if self.left == -inf:
            return ContinuousSupportShape1D.RAY_LEFT
        if self.right == inf:
            return ContinuousSupportShape1D.RAY_RIGHT
        return ContinuousSupportShape1D.BOUNDED_INTERVAL


class FamilyName(StrEnum):
    """Names under which the built-in families are registered."""

    CONTINUOUS_UNIFORM = "ContinuousUniform"
    EXPONENTIAL = "Exponential"
    NORMAL = "Normal"
    GAMMA = "Gamma"
    CHI_SQUARED = "ChiSquared"
    ERLANG = "Erlang"
    BINOMIAL = "Binomial"
    ZETA = "Zeta"
    LOGARITHMIC = "Logarithmic"


__all__ = [
    "Kind",
    "DistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "ParametrizationName",
    "ScalarFunc",
    "Interval1D",
    "ContinuousSupportShape1D",
    "BoolArray",
    "ComplexArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "FamilyName",
]
