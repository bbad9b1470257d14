"""
Warning categories emitted by PySATL Rand.

Soft numerical failures are reported through return values (NaN, ``-1`` or an
unconverged :class:`~pysatl_rand.numerics.solvers.SolverResult`); the warnings
below only make those events visible.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings


class PySATLRandWarning(UserWarning):
    """Base class of all warnings issued by the package."""


class ParameterClampWarning(PySATLRandWarning):
    """An out-of-domain parameter was replaced by its fallback value."""


class RejectionLoopExhaustedWarning(PySATLRandWarning, RuntimeWarning):
    """A rejection sampler hit its defensive iteration cap."""


def warn_rejection_exhausted(sampler: str, cap: int, stacklevel: int = 3) -> None:
    """Emit :class:`RejectionLoopExhaustedWarning` for ``sampler``."""
    warnings.warn(
        f"{sampler} rejection loop gave up after {cap} iterations",
        RejectionLoopExhaustedWarning,
        stacklevel=stacklevel,
    )


__all__ = [
    "PySATLRandWarning",
    "ParameterClampWarning",
    "RejectionLoopExhaustedWarning",
    "warn_rejection_exhausted",
]
