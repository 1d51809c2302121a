"""
Beta negative binomial distribution family implementation.

Contains the compound of the negative binomial law with a Beta-distributed
success probability.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf, nan, sqrt
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
    is_integer,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.families.sampling import CompoundSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_beta_neg_binomial_family() -> None:
    """
    Configure and register the beta negative binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BETA_NEG_BINOMIAL):
        return

    BETA_NEG_BINOMIAL_DOC = """
    Beta negative binomial distribution.

    Parameters: number of successes r (positive integer, default 1) and
    Beta shapes α > 0 (default 1) and β > 0 (default α).

    For k = 0, 1, 2, ...:
        P(X = k) = Γ(r + k) / (k! Γ(r)) · B(α + r, β + k) / B(α, β)

    The mean is infinite for α ≤ 1 and the variance for α ≤ 2.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability mass function.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - r: int (number of successes)
            - alpha: float (first Beta shape)
            - beta: float (second Beta shape)
        x : NumericArray
            Points at which to evaluate the log-mass

        Returns
        -------
        NumericArray
            Log-probabilities, -inf outside the non-negative integers
        """
        parameters = cast(_Base, parameters)
        r, alpha, beta = parameters.r, parameters.alpha, parameters.beta

        k, inside = lattice_points(x, 0)
        value = (
            sp.gammaln(r + k)
            - sp.gammaln(k + 1.0)
            - sp.gammaln(r)
            + sp.betaln(alpha + r, beta + k)
            - sp.betaln(alpha, beta)
        )
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """CDF as a partial sum of the mass function."""
        return cdf_by_summation(lambda k: pmf(parameters, k), x, 0)

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Smallest k with CDF(k) >= p (integer search).

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        return integer_quantile(lambda k: cdf(parameters, k), p, 0)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: rβ/(α - 1) for α > 1, inf otherwise."""
        parameters = cast(_Base, parameters)
        r, alpha, beta = parameters.r, parameters.alpha, parameters.beta
        if alpha <= 1:
            return inf
        return r * beta / (alpha - 1.0)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: rβ(r + α - 1)(β + α - 1) / ((α - 2)(α - 1)²) for α > 2."""
        parameters = cast(_Base, parameters)
        r, alpha, beta = parameters.r, parameters.alpha, parameters.beta
        if alpha <= 2:
            return inf
        numerator = r * beta * (r + alpha - 1.0) * (beta + alpha - 1.0)
        return numerator / ((alpha - 2.0) * (alpha - 1.0) ** 2)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness for α > 3, NaN otherwise."""
        parameters = cast(_Base, parameters)
        r, alpha, beta = parameters.r, parameters.alpha, parameters.beta
        if alpha <= 3:
            return nan
        spread = r * beta * (r + alpha - 1.0) * (beta + alpha - 1.0) / (alpha - 2.0)
        numerator = (2.0 * r + alpha - 1.0) * (2.0 * beta + alpha - 1.0)
        return numerator / ((alpha - 3.0) * sqrt(spread))

    def _latent(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        return rng.beta(parameters.alpha, parameters.beta, size=n)

    def _conditional(
        parameters: Any, success: NumericArray, rng: np.random.Generator
    ) -> NumericArray:
        parameters = cast(_Base, parameters)
        return rng.negative_binomial(int(parameters.r), success).astype(np.float64)

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of beta negative binomial distribution"""
        return IntegerLatticeDiscreteSupport(min_k=0)

    BetaNegBinomial = ParametricFamily(
        name=FamilyName.BETA_NEG_BINOMIAL,
        distr_type=UnivariateDiscrete,
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
        },
        sampling_strategy=CompoundSamplingStrategy(_latent, _conditional),
        support_by_parametrization=_support,
    )
    BetaNegBinomial.__doc__ = BETA_NEG_BINOMIAL_DOC

    @parametrization(family=BetaNegBinomial)
    class _Base(Parametrization):
        """
        Standard parametrization of beta negative binomial distribution.

        Parameters
        ----------
        r : int
            Number of successes until the experiment stops
        alpha : float
            First shape parameter of the Beta mixing law
        beta : float
            Second shape parameter of the Beta mixing law; defaults to alpha
        """

        r: int = 1
        alpha: float = 1.0
        beta: float | None = None

        def __post_init__(self) -> None:
            if self.beta is None:
                object.__setattr__(self, "beta", self.alpha)

        @constraint(description="r is a positive integer")
        def check_r_positive_integer(self) -> bool:
            return is_integer(self.r) and self.r > 0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

    ParametricFamilyRegister.register(BetaNegBinomial)
