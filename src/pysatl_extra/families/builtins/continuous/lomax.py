"""
Lomax distribution family implementation.

Contains the Lomax (Pareto Type II) family with shape α and scale λ.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf, log, nan, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.families.builtins.common import as_array, check_probability, kurtosis_value
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.families.sampling import TransformSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any


def configure_lomax_family() -> None:
    """
    Configure and register the Lomax distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LOMAX):
        return

    LOMAX_DOC = """
    Lomax (Pareto Type II) distribution.

    Parameters: shape α > 0 (default 1) and scale λ > 0 (default 1).

    For x ≥ 0:
        f(x) = (α/λ) (1 + x/λ)^{-(α+1)}
        F(x) = 1 - (1 + x/λ)^{-α}

    Moments: the mean is NaN for α ≤ 1; the variance is inf for 1 < α ≤ 2
    and NaN for α ≤ 1; skewness needs α > 3 and kurtosis α > 4 (NaN
    otherwise).
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        alpha, lam = parameters.alpha, parameters.lambda_

        x = as_array(x)
        inside = x >= 0
        value = log(alpha / lam) - (alpha + 1.0) * np.log1p(np.where(inside, x, 0.0) / lam)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Lomax distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - lambda_: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero for x < 0
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for Lomax distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - lambda_: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the cumulative distribution function

        Returns
        -------
        NumericArray
            Probabilities P(X ≤ x) for each point x
        """
        parameters = cast(_Base, parameters)
        alpha, lam = parameters.alpha, parameters.lambda_

        x = as_array(x)
        inside = x > 0
        value = -np.expm1(-alpha * np.log1p(np.where(inside, x, 0.0) / lam))
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Lomax distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - lambda_: float (scale parameter)
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            Quantiles λ((1 - p)^{-1/α} - 1); p = 1 maps to inf

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        alpha, lam = parameters.alpha, parameters.lambda_

        with np.errstate(divide="ignore", over="ignore"):
            return cast(NumericArray, lam * np.expm1(-np.log1p(-p) / alpha))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Lomax distribution: λ/(α - 1), NaN for α <= 1."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        if alpha <= 1:
            return nan
        return parameters.lambda_ / (alpha - 1.0)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Lomax distribution: λ²α / ((α - 1)²(α - 2))."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        if alpha <= 1:
            return nan
        if alpha <= 2:
            return inf
        return parameters.lambda_**2 * alpha / ((alpha - 1.0) ** 2 * (alpha - 2.0))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness: 2(1 + α)/(α - 3) √((α - 2)/α), NaN for α <= 3."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        if alpha <= 3:
            return nan
        return 2.0 * (1.0 + alpha) / (alpha - 3.0) * sqrt((alpha - 2.0) / alpha)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """
        Raw or excess kurtosis of Lomax distribution.

        The excess is 6(α³ + α² - 6α - 2) / (α(α - 3)(α - 4)), NaN for α <= 4.
        """
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        if alpha <= 4:
            return nan
        numerator = 6.0 * (alpha**3 + alpha**2 - 6.0 * alpha - 2.0)
        excess_kurtosis = numerator / (alpha * (alpha - 3.0) * (alpha - 4.0))
        return kurtosis_value(3.0 + excess_kurtosis, excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: λ(2^{1/α} - 1)."""
        parameters = cast(_Base, parameters)
        return parameters.lambda_ * (2.0 ** (1.0 / parameters.alpha) - 1.0)

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Lomax distribution (always 0)."""
        return 0.0

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Differential entropy: ln(λ/α) + 1/α + 1."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        return log(parameters.lambda_ / alpha) + 1.0 / alpha + 1.0

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        # numpy's pareto draws the standard Lomax law
        parameters = cast(_Base, parameters)
        return cast(NumericArray, parameters.lambda_ * rng.pareto(parameters.alpha, size=n))

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Lomax distribution"""
        return ContinuousSupport(left=0.0)

    Lomax = ParametricFamily(
        name=FamilyName.LOMAX,
        distr_type=UnivariateContinuous,
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.ENTROPY: entropy_func,
        },
        sampling_strategy=TransformSamplingStrategy(_sample),
        support_by_parametrization=_support,
    )
    Lomax.__doc__ = LOMAX_DOC

    @parametrization(family=Lomax)
    class _Base(Parametrization):
        """
        Standard parametrization of Lomax distribution.

        Parameters
        ----------
        alpha : float
            Shape parameter (α)
        lambda_ : float
            Scale parameter (λ)
        """

        alpha: float = 1.0
        lambda_: float = 1.0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    ParametricFamilyRegister.register(Lomax)
