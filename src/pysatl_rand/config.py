"""
Numerical Settings
==================

Process-wide numerical configuration: which uniform engine variant is built by
default, the defensive iteration caps of rejection samplers and solvers, and
the tolerances of the integration and tail-search routines.

Notes
-----
- Settings are immutable. :func:`configure_settings` installs overrides and
  invalidates the cached instance; :func:`reset_settings` drops them.
- The engine variant may also be selected through the ``PYSATL_RAND_ENGINE``
  environment variable, read once when the settings are first built.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import os
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Any

ENGINE_ENV_VARIABLE = "PYSATL_RAND_ENGINE"

_overrides: dict[str, Any] = {}


@dataclass(frozen=True, slots=True)
class NumericalSettings:
    """
    Immutable bundle of numerical knobs.

    Parameters
    ----------
    engine : str, default "jlkiss64"
        Uniform engine variant built by :func:`pysatl_rand.engine.make_engine`
        (``"jlkiss64"`` or ``"jkiss32"``).
    rejection_cap : int, default 10_000_000
        Defensive ceiling on the iterations of any rejection loop. Valid
        parameters never get close to it.
    root_tolerance : float, default 1e-10
        Absolute step tolerance of root finders and the minimizer.
    root_max_iter : int, default 10_000
        Iteration cap of root finders and the minimizer.
    integration_tolerance : float, default 1e-11
        Target error of adaptive Simpson integration.
    integration_max_depth : int, default 10
        Recursion cap of adaptive Simpson integration.
    tail_tolerance : float, default 1e-10
        Integrand magnitude below which a tail is considered negligible.
    tail_max_steps : int, default 1000
        Maximum number of steps while searching for a negligible tail.
    """

    engine: str = "jlkiss64"
    rejection_cap: int = 10_000_000
    root_tolerance: float = 1e-10
    root_max_iter: int = 10_000
    integration_tolerance: float = 1e-11
    integration_max_depth: int = 10
    tail_tolerance: float = 1e-10
    tail_max_steps: int = 1000


@lru_cache(maxsize=1)
def get_settings() -> NumericalSettings:
    """
    Return the active settings.

    Returns
    -------
    NumericalSettings
        Defaults, updated by the environment and by :func:`configure_settings`.
    """
    settings = NumericalSettings()
    engine = os.environ.get(ENGINE_ENV_VARIABLE)
    if engine:
        settings = replace(settings, engine=engine.strip().lower())
    if _overrides:
        settings = replace(settings, **_overrides)
    return settings


def configure_settings(**overrides: Any) -> NumericalSettings:
    """
    Override selected settings for the rest of the process.

    Parameters
    ----------
    **overrides
        Field names of :class:`NumericalSettings` and their new values.

    Returns
    -------
    NumericalSettings
        The new active settings.

    Raises
    ------
    ValueError
        If an unknown setting name is given.
    """
    known = {f.name for f in fields(NumericalSettings)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
    _overrides.update(overrides)
    get_settings.cache_clear()
    return get_settings()


def reset_settings() -> None:
    """Drop all overrides and the cached settings."""
    _overrides.clear()
    get_settings.cache_clear()


__all__ = [
    "ENGINE_ENV_VARIABLE",
    "NumericalSettings",
    "configure_settings",
    "get_settings",
    "reset_settings",
]
