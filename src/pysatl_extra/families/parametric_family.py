"""
Parametric families of distributions.

A :class:`ParametricFamily` bundles what one distribution family (Lomax,
Zeta, ...) knows analytically: its characteristic functions, the dataclass
holding its parameters, a support resolver and a sampling strategy. Calling
the family builds a
:class:`~pysatl_extra.families.distribution.ParametricFamilyDistribution`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from functools import partial
from typing import TYPE_CHECKING

from pysatl_extra.distributions.computation import AnalyticalComputation
from pysatl_extra.distributions.strategies import (
    DefaultComputationStrategy,
    DefaultSamplingUnivariateStrategy,
)
from pysatl_extra.families.distribution import ParametricFamilyDistribution

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from pysatl_extra.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_extra.distributions.support import Support
    from pysatl_extra.families.parametrizations import Parametrization
    from pysatl_extra.types import DistributionType, GenericCharacteristicName

    type ParametrizedFunction = Callable[[Parametrization, Any], Any]
    type SupportResolver = Callable[[Parametrization], Support | None]


class ParametricFamily:
    """
    A family of distributions indexed by one set of parameters.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType
        Type shared by every member of the family.
    distr_characteristics : Mapping[GenericCharacteristicName, Callable]
        Analytical characteristics. Each function takes the parameters object
        first and the evaluation argument second.
    sampling_strategy : SamplingStrategy, optional
        Strategy for sampling; inverse transform through the quantile by default.
    computation_strategy : ComputationStrategy, optional
        Strategy resolving characteristics that have no analytical form.
    support_by_parametrization : Callable or None, optional
        Function that returns the support for given parameters.

    Notes
    -----
    The parameters dataclass is attached afterwards with the
    :func:`~pysatl_extra.families.parametrizations.parametrization` decorator.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType,
        distr_characteristics: Mapping[GenericCharacteristicName, ParametrizedFunction],
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
        support_by_parametrization: SupportResolver | None = None,
    ):
        self._name = name
        self._distr_type = distr_type
        self.distr_characteristics = dict(distr_characteristics)
        self._parameters_class: type[Parametrization] | None = None
        self._support_resolver = support_by_parametrization

        self.sampling_strategy = (
            DefaultSamplingUnivariateStrategy() if sampling_strategy is None else sampling_strategy
        )
        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def distribution_type(self) -> DistributionType:
        """Get the type shared by the members of the family."""
        return self._distr_type

    @property
    def parameters_class(self) -> type[Parametrization]:
        """
        Get the parameters dataclass of the family.

        Raises
        ------
        ValueError
            If no parameters class has been attached yet.
        """
        if self._parameters_class is None:
            raise ValueError(f"Family '{self._name}' has no parameters class.")
        return self._parameters_class

    def register_parameters(self, parameters_class: type[Parametrization]) -> None:
        """
        Attach the parameters dataclass.

        Raises
        ------
        ValueError
            If the family already has one.
        """
        if self._parameters_class is not None:
            raise ValueError(f"Family '{self._name}' already registered its parameters.")
        self._parameters_class = parameters_class

    def support_for(self, parameters: Parametrization) -> Support | None:
        """Support of the member with the given parameters (``None`` if unknown)."""
        if self._support_resolver is None:
            return None
        return self._support_resolver(parameters)

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """Bind every analytical characteristic to ``parameters``."""
        return {
            characteristic: AnalyticalComputation(
                target=characteristic, func=partial(func, parameters)
            )
            for characteristic, func in self.distr_characteristics.items()
        }

    def distribution(
        self, *parameters_args: Any, check_args: bool = True, **parameters_values: Any
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        *parameters_args
            Parameter values in the documented order. Trailing parameters
            with defaults may be omitted.
        check_args : bool, default=True
            Validate the parameter constraints. Passing ``False`` skips
            validation; evaluating an invalid distribution is then undefined.
        **parameters_values
            Parameter values by name.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        TypeError
            If too many or unknown parameters are given.
        ParameterConstraintError
            If parameters don't satisfy constraints.
        """
        parameters = self.parameters_class(*parameters_args, **parameters_values)
        if check_args:
            parameters.validate()
        return ParametricFamilyDistribution(
            self, self._distr_type, parameters, self.support_for(parameters)
        )

    __call__ = distribution
