"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families, together with the convenience evaluation
methods (``pdf``, ``cdf``, ``ppf``, moments, sampling) built on top of
:meth:`query_method`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from pysatl_extra.distributions.distribution import Distribution
from pysatl_extra.types import CharacteristicName, Kind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_extra.distributions.computation import AnalyticalComputation
    from pysatl_extra.distributions.sampling import ArraySample
    from pysatl_extra.distributions.strategies import (
        ComputationStrategy,
        Method,
        SamplingStrategy,
    )
    from pysatl_extra.distributions.support import Support
    from pysatl_extra.families.parametric_family import ParametricFamily
    from pysatl_extra.families.parametrizations import Parametrization
    from pysatl_extra.types import (
        DistributionType,
        GenericCharacteristicName,
    )


def _unwrap(value: Any) -> Any:
    """Return Python scalars for 0-d results and arrays otherwise."""
    if np.ndim(value) == 0:
        return np.asarray(value).item()
    return value


@dataclass(frozen=True, slots=True)
class ParametricFamilyDistribution(Distribution):
    """
    A specific distribution instance from a parametric family.

    Represents a concrete distribution with specific parameter values,
    providing methods for computation and sampling. Instances are immutable;
    resolved characteristic methods are cached per instance.

    Parameters
    ----------
    family : ParametricFamily
        Family that created this distribution.
    _distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values for this distribution.
    _support : Support or None
        Support of this distribution.
    """

    family: ParametricFamily = field(repr=False, compare=False)
    _distribution_type: DistributionType
    parameters: Parametrization
    _support: Support | None = field(compare=False)
    _analytical: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _methods: dict[GenericCharacteristicName, Method[Any, Any]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    @property
    def family_name(self) -> str:
        """Get the name of the family."""
        return self.family.name

    @property
    def distribution_type(self) -> DistributionType:
        """Get the distribution type."""
        return self._distribution_type

    @property
    def params(self) -> tuple[Any, ...]:
        """Parameter values in the documented order."""
        return self.parameters.values

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Get analytical computations for this distribution.

        Lazily computed and cached per instance.
        """
        if not self._analytical:
            self._analytical.update(self.family._build_analytical_computations(self.parameters))
        return self._analytical

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        """Get the sampling strategy for this distribution."""
        return self.family.sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        """Get the computation strategy for this distribution."""
        return self.family.computation_strategy

    @property
    def support(self) -> Support | None:
        """Get the support of this distribution."""
        return self._support

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        """
        Resolve a characteristic method.

        Methods resolved without options are cached on the instance; passing
        options (tolerances, search limits) always resolves afresh.
        """
        if options:
            return self.computation_strategy.query_method(characteristic_name, self, **options)
        method = self._methods.get(characteristic_name)
        if method is None:
            method = self.computation_strategy.query_method(characteristic_name, self)
            self._methods[characteristic_name] = method
        return method

    def _evaluate(self, characteristic_name: GenericCharacteristicName, x: Any) -> Any:
        return _unwrap(self.query_method(characteristic_name)(x))

    @property
    def _is_discrete(self) -> bool:
        return getattr(self._distribution_type, "kind", None) == Kind.DISCRETE

    # --- Evaluation ---------------------------------------------------------

    def pdf(self, x: Any) -> Any:
        """Density at ``x``; for discrete distributions the mass function."""
        if self._is_discrete:
            return self.pmf(x)
        return self._evaluate(CharacteristicName.PDF, x)

    def logpdf(self, x: Any) -> Any:
        """Log-density at ``x``; for discrete distributions the log-mass."""
        if self._is_discrete:
            return self.logpmf(x)
        return self._evaluate(CharacteristicName.LOGPDF, x)

    def pmf(self, x: Any) -> Any:
        """Probability mass at ``x``."""
        return self._evaluate(CharacteristicName.PMF, x)

    def logpmf(self, x: Any) -> Any:
        """Logarithm of the probability mass at ``x``."""
        return self._evaluate(CharacteristicName.LOGPMF, x)

    def cdf(self, x: Any) -> Any:
        """Cumulative distribution function ``P(X <= x)``."""
        return self._evaluate(CharacteristicName.CDF, x)

    def ppf(self, p: Any) -> Any:
        """
        Quantile function (generalized inverse of the CDF).

        Raises
        ------
        ValueError
            If a probability lies outside ``[0, 1]``.
        """
        return self._evaluate(CharacteristicName.PPF, p)

    quantile = ppf

    def in_support(self, x: Any) -> Any:
        """Membership of ``x`` in the support (scalar or boolean array)."""
        if self._support is None:
            return True if np.ndim(x) == 0 else np.ones(np.shape(x), dtype=bool)
        return self._support.contains(x)

    def mgf(self, t: Any) -> Any:
        """Moment generating function ``E[exp(tX)]``."""
        return self._evaluate(CharacteristicName.MGF, t)

    def cf(self, t: Any) -> Any:
        """Characteristic function ``E[exp(itX)]``."""
        return self._evaluate(CharacteristicName.CF, t)

    # --- Moments ------------------------------------------------------------

    def mean(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.MEAN, None))

    def var(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.VAR, None))

    def std(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.STD, None))

    def median(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.MEDIAN, None))

    def mode(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.MODE, None))

    def skewness(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.SKEW, None))

    def kurtosis(self, excess: bool = False) -> float:
        """Raw kurtosis, or excess kurtosis when ``excess`` is True."""
        method = self.query_method(CharacteristicName.KURT)
        return float(method(None, excess=excess))

    def entropy(self) -> float:
        return float(self.calculate_characteristic(CharacteristicName.ENTROPY, None))

    # --- Sampling -----------------------------------------------------------

    def sample(self, n: int, rng: np.random.Generator, **options: Any) -> ArraySample:
        """
        Generate ``n`` variates as a ``(n, 1)`` sample.

        Parameters
        ----------
        n : int
            Number of samples to generate.
        rng : numpy.random.Generator
            Caller-owned random generator; the only source of entropy.
        **options : Any
            Additional options for sampling.
        """
        return self.sampling_strategy.sample(n, distr=self, rng=rng, **options)

    def sample_one(self, rng: np.random.Generator) -> float:
        """Draw a single variate."""
        return float(self.sample(1, rng).values[0])
