"""
Borel distribution family implementation.

Contains the Borel family: the total progeny of a Galton-Watson branching
process with Poisson(μ) offspring, started from one individual.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

from pysatl_extra.distributions.fitters import cdf_by_summation, integer_quantile
from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import lattice_points
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_borel_family() -> None:
    """
    Configure and register the Borel distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BOREL):
        return

    BOREL_DOC = """
    Borel distribution.

    Parameters: μ in [0, 1) (default 0).

    For k = 1, 2, ...:
        P(X = k) = e^{-μk} (μk)^{k-1} / k!

    μ = 0 is the point mass at 1.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        mu = parameters.mu

        k, inside = lattice_points(x, 1)
        with np.errstate(divide="ignore"):
            value = -mu * k + sp.xlogy(k - 1.0, mu * k) - sp.gammaln(k + 1.0)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for Borel distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - mu: float (mean offspring number)
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities, zero outside the positive integers
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cdf_by_summation(lambda k: pmf(parameters, k), x, 1)

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 1)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Borel distribution: 1/(1 - μ)."""
        return 1.0 / (1.0 - cast(_Base, parameters).mu)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Borel distribution: μ/(1 - μ)³."""
        mu = cast(_Base, parameters).mu
        return mu / (1.0 - mu) ** 3

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Borel distribution (always 1)."""
        return 1.0

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Borel distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1)

    Borel = ParametricFamily(
        name=FamilyName.BOREL,
        distr_type=UnivariateDiscrete,
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.MODE: mode_func,
        },
        support_by_parametrization=_support,
    )
    Borel.__doc__ = BOREL_DOC

    @parametrization(family=Borel)
    class _Base(Parametrization):
        """
        Standard parametrization of Borel distribution.

        Parameters
        ----------
        mu : float
            Mean number of offspring per individual
        """

        mu: float = 0.0

        @constraint(description="0 <= mu < 1")
        def check_mu_range(self) -> bool:
            return 0 <= self.mu < 1

    ParametricFamilyRegister.register(Borel)
