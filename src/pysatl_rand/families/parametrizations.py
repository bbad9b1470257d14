"""
Parameterization classes and specifications for distribution families.

This module provides the core abstractions for defining different parameterizations
of statistical distributions: constraint declaration, sanitization of
out-of-domain values on construction, derived quantities and conversion
between parameterization formats.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from abc import ABC
from dataclasses import dataclass, fields
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec, dataclass_transform

from pysatl_rand.errors import ParameterClampWarning
from pysatl_rand.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    field : str, optional
        Parameter replaced when the check fails. Constraints without a field
        cannot be repaired and raise instead.
    fallback : Any, optional
        Replacement value, or a callable receiving the parameters object and
        returning the replacement.
    """

    description: str
    check: Callable[[Any], bool]
    field: str | None = None
    fallback: Any = None

    def repaired_value(self, parameters: Parametrization) -> Any:
        """Value that replaces the violating parameter."""
        if callable(self.fallback):
            return self.fallback(parameters)
        return self.fallback


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    Concrete parametrizations are frozen, slotted dataclasses created by the
    :func:`parametrization` decorator. On construction every violated
    constraint with a fallback replaces its field and emits
    :class:`~pysatl_rand.errors.ParameterClampWarning`, after which
    :meth:`_derive` fills the derived (``init=False``) fields. Derived values
    are therefore recomputed together, by construction or
    :func:`dataclasses.replace`, and never partially.
    """

    # These attributes are set by the @parametrization decorator
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    def __post_init__(self) -> None:
        self._enforce_constraints()
        self._derive()

    def _enforce_constraints(self) -> None:
        for item in self._constraints:
            if item.check(self):
                continue
            if item.field is None:
                raise ValueError(f'Constraint "{item.description}" does not hold')
            old = getattr(self, item.field)
            new = item.repaired_value(self)
            warnings.warn(
                f'{type(self).__name__}: constraint "{item.description}" does not hold '
                f"for {item.field}={old!r}, using {new!r}",
                ParameterClampWarning,
                stacklevel=4,
            )
            object.__setattr__(self, item.field, new)

    def _derive(self) -> None:
        """Compute derived fields; nothing to do by default."""

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get the constructor parameters as a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}  # type: ignore[arg-type]

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        ValueError
            If any constraint is not satisfied.
        """
        for item in self._constraints:
            if not item.check(self):
                raise ValueError(f'Constraint "{item.description}" does not hold')

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in the base parametrization.

        Notes
        -----
        Base implementation returns self. Subclasses should override
        if conversion to a different parametrization is needed.
        """
        return self


P = ParamSpec("P")


def constraint(
    description: str,
    *,
    field: str | None = None,
    fallback: Any = None,
) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    field : str, optional
        Parameter to replace when the predicate fails.
    fallback : Any, optional
        Replacement value or callable ``(parameters) -> value``.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    Sets marker attributes on the function:
    - __is_constraint: True
    - __constraint_description: description
    - __constraint_field / __constraint_fallback: repair instructions
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        setattr(wrapper, "__constraint_field", field)
        setattr(wrapper, "__constraint_fallback", fallback)
        return wrapper

    return decorator


def _collect_constraints(cls: type[Parametrization]) -> list[ParametrizationConstraint]:
    """Collect constraint methods from the class, in declaration order."""
    constraints: list[ParametrizationConstraint] = []
    for attr_name, attr in cls.__dict__.items():
        if isinstance(attr, staticmethod):
            if getattr(attr.__func__, "__is_constraint", False):
                raise TypeError(
                    f"@constraint '{attr_name}' must be an instance method, not @staticmethod"
                )
            continue
        if isinstance(attr, classmethod):
            if getattr(attr.__func__, "__is_constraint", False):
                raise TypeError(
                    f"@constraint '{attr_name}' must be an instance method, not @classmethod"
                )
            continue

        func = attr if isfunction(attr) else None
        if func is None or not getattr(func, "__is_constraint", False):
            continue
        constraints.append(
            ParametrizationConstraint(
                description=getattr(func, "__constraint_description", func.__name__),
                check=func,
                field=getattr(func, "__constraint_field", None),
                fallback=getattr(func, "__constraint_fallback", None),
            )
        )
    return constraints


@dataclass_transform(frozen_default=True)
def parametrization(*, name: str) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to declare a class as a named parametrization.

    Parameters
    ----------
    name : str
        Name of the parametrization.

    Returns
    -------
    Callable[[type[Parametrization]], type[Parametrization]]
        Class decorator.

    Notes
    -----
    Converts the class to a frozen, slotted dataclass and collects the
    constraint methods marked with @constraint. Families pick up the
    decorated classes when they are built.
    """

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if "__dataclass_fields__" not in cls.__dict__:
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)
        return cls

    return decorator


__all__ = [
    "Parametrization",
    "ParametrizationConstraint",
    "constraint",
    "parametrization",
]
