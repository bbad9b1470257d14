"""
Uniform pseudo-random engines.

The default variant is chosen by :func:`pysatl_rand.config.get_settings`
(``engine`` setting or the ``PYSATL_RAND_ENGINE`` environment variable).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from pysatl_rand.config import get_settings

from .base import BaseUniformEngine, UniformEngine
from .kiss import JKiss32Engine, JKiss32State, JLKiss64Engine, JLKiss64State

ENGINES: dict[str, type[JKiss32Engine] | type[JLKiss64Engine]] = {
    "jkiss32": JKiss32Engine,
    "jlkiss64": JLKiss64Engine,
}


def make_engine(seed: int | None = None, kind: str | None = None) -> UniformEngine:
    """
    Build a uniform engine.

    Parameters
    ----------
    seed : int, optional
        Seed for the new engine; default registers when omitted.
    kind : str, optional
        Engine variant name. Defaults to the configured one.

    Returns
    -------
    UniformEngine
        A fresh engine.

    Raises
    ------
    ValueError
        If the variant name is unknown.
    """
    name = (kind or get_settings().engine).lower()
    try:
        engine_cls = ENGINES[name]
    except KeyError:
        raise ValueError(
            f"Unknown engine '{name}', expected one of: {', '.join(sorted(ENGINES))}"
        ) from None
    return engine_cls(seed)


__all__ = [
    "ENGINES",
    "BaseUniformEngine",
    "JKiss32Engine",
    "JKiss32State",
    "JLKiss64Engine",
    "JLKiss64State",
    "UniformEngine",
    "make_engine",
]
