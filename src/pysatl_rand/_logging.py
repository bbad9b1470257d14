"""
Structured logging for PySATL Rand.

Loggers are :mod:`structlog` bound loggers wrapped around standard library
loggers of the ``pysatl_rand`` hierarchy. The package never touches the global
structlog configuration or the root logger: events are rendered to a single
key-value (or JSON) line and handed to :mod:`logging`, where the application
decides what to do with them.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import sys
from typing import Any

import structlog

PACKAGE_LOGGER_NAME = "pysatl_rand"

_json_output = False
_handler: logging.Handler | None = None


def _render(logger: Any, method_name: str, event_dict: dict[str, Any]) -> str:
    """Render the event with the renderer selected by :func:`configure_logging`."""
    if _json_output:
        renderer: Any = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True)
    return str(renderer(logger, method_name, event_dict))


_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    _render,
]


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> Any:
    """
    Get a structured logger.

    Parameters
    ----------
    name : str
        Standard library logger name, normally the caller's ``__name__``.

    Returns
    -------
    structlog.stdlib.BoundLogger
        Logger whose events end up in ``logging.getLogger(name)``.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(level: str = "INFO", *, json_output: bool = False) -> None:
    """
    Attach a stderr handler to the package logger.

    Parameters
    ----------
    level : str, default "INFO"
        Level name ("DEBUG", "INFO", "WARNING", ...).
    json_output : bool, default False
        Emit JSON lines instead of ``key=value`` pairs.
    """
    global _handler, _json_output

    _json_output = json_output
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(_handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = [
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
    "get_logger",
]
