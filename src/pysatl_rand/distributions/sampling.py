"""
Sample Containers
=================

Containers returned by ``Distribution.sample`` and accepted by the
likelihood functions, and the in-place buffer filling used by ``fill``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import MutableSequence
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    import numpy.typing as npt

    from pysatl_rand.engine import UniformEngine
    from pysatl_rand.types import Number

    type SampleBuffer = npt.NDArray[Any] | MutableSequence[Any]


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[Any]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container.

    Stores samples as a 2D array of shape ``(n_samples, 1)``; floating point
    for continuous distributions and integer for discrete ones.

    Parameters
    ----------
    data : numpy.ndarray
        2D array of shape (n, d).

    Raises
    ------
    ValueError
        If data is not 2D.
    """

    dimension: int
    data: npt.NDArray[Any]

    def __init__(self, data: npt.NDArray[Any]) -> None:
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, d).")
        self.data = data
        self.dimension = int(data.shape[1])

    @classmethod
    def from_values(cls, values: Any) -> ArraySample:
        """Wrap a one-dimensional array-like as an ``(n, 1)`` sample."""
        return cls(np.asarray(values).reshape(-1, 1))

    def __len__(self) -> int:
        """Return the number of samples (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[Any]]:
        """Iterate over samples (rows of the array)."""
        yield from self.data

    @property
    def array(self) -> npt.NDArray[Any]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, d)."""
        n, d = self.data.shape
        return int(n), int(d)


def as_values(sample: Sample | Any) -> npt.NDArray[Any]:
    """Flatten an :class:`ArraySample` or any array-like into a 1D array."""
    if isinstance(sample, ArraySample):
        return sample.array.reshape(-1)
    return np.asarray(sample).reshape(-1)


def fill_buffer(
    buffer: SampleBuffer,
    draw: Callable[[UniformEngine], Number],
    engine: UniformEngine,
) -> None:
    """
    Fill ``buffer`` in place with variates from ``draw``.

    Parameters
    ----------
    buffer : numpy.ndarray or MutableSequence
        Caller-owned buffer. Arrays of any shape are filled element-wise.
    draw : Callable[[UniformEngine], Number]
        Frozen sampler producing one variate per call.
    engine : UniformEngine
        Source of uniform integers.

    Raises
    ------
    TypeError
        If the buffer is neither a writable array nor a mutable sequence.
    """
    if isinstance(buffer, np.ndarray):
        if not buffer.flags.writeable:
            raise TypeError("Sample buffer is read-only.")
        for index in np.ndindex(buffer.shape):
            buffer[index] = draw(engine)
        return
    if isinstance(buffer, MutableSequence):
        for i in range(len(buffer)):
            buffer[i] = draw(engine)
        return
    raise TypeError(f"Cannot fill a buffer of type {type(buffer).__name__}.")


__all__ = [
    "ArraySample",
    "Sample",
    "as_values",
    "fill_buffer",
]
