"""
Parametric family definitions and management infrastructure.

This module contains the main class for defining parametric families of
distributions: a named collection of parametrizations bound to the
distribution class that implements the family, with a factory that builds
distributions from parameters in any registered parametrization.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Any

    from pysatl_rand.distributions.distribution import BaseDistribution
    from pysatl_rand.engine import UniformEngine
    from pysatl_rand.families.parametrizations import Parametrization
    from pysatl_rand.types import DistributionType, ParametrizationName


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType
        Kind and dimension of the family's distributions.
    distribution : type[BaseDistribution]
        Class implementing the family. Its constructor accepts the fields of
        the base parametrization as keyword arguments, plus ``engine``.
    parametrizations : Sequence[type[Parametrization]]
        Parametrization classes; the first one is the base parametrization.

    Raises
    ------
    ValueError
        If no parametrization is given or two share a name.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType,
        distribution: type[BaseDistribution],
        parametrizations: Sequence[type[Parametrization]],
    ):
        if not parametrizations:
            raise ValueError(f"Family {name} needs at least one parametrization.")
        self._name = name
        self._distr_type = distr_type
        self._distribution = distribution

        # Runtime registry of parametrization classes
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}
        for parametrization_class in parametrizations:
            self.register_parametrization(
                parametrization_class.__param_name__, parametrization_class
            )

        # The first registered name is the base parametrization name
        self.base_parametrization_name: ParametrizationName = parametrizations[0].__param_name__

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def distr_type(self) -> DistributionType:
        """Get the distribution type of the family."""
        return self._distr_type

    @property
    def distribution_class(self) -> type[BaseDistribution]:
        """Get the class implementing the family."""
        return self._distribution

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Get mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def parametrization_names(self) -> list[ParametrizationName]:
        """Registered parametrization names, base first."""
        return list(self._parametrizations)

    @property
    def base(self) -> type[Parametrization]:
        """Get the base parametrization class."""
        return self._parametrizations[self.base_parametrization_name]

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Parameters
        ----------
        name : ParametrizationName
            Unique parametrization name.
        parametrization_class : type[Parametrization]
            Parametrization class to register.

        Raises
        ------
        ValueError
            If name is already registered.
        """
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """
        Convert parameters to the base parametrization.

        Parameters
        ----------
        parameters : Parametrization
            Parameters in any parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in base parametrization.
        """
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def distribution(
        self,
        parametrization_name: str | None = None,
        engine: UniformEngine | None = None,
        **parameters_values: Any,
    ) -> BaseDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        engine : UniformEngine, optional
            Private engine of the new distribution.
        **parameters_values
            Parameter values for the distribution. Out-of-domain values are
            replaced by their fallbacks with a ``ParameterClampWarning``.

        Returns
        -------
        BaseDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        KeyError
            If parametrization name is not registered.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        parameters = parametrization_class(**parameters_values)
        base_parameters = self.to_base(parameters)
        return self._distribution.from_parameters(base_parameters, engine=engine)

    def __repr__(self) -> str:
        names = self.parametrization_names
        return f"ParametricFamily(name={self._name!r}, parametrizations={names})"

    __call__ = distribution


__all__ = [
    "ParametricFamily",
]
