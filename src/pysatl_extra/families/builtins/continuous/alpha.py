"""
Alpha distribution family implementation.

Contains the Alpha family: the law of ``β/W`` where ``W`` is a normal
variable with mean ``α`` and unit variance truncated to ``(0, ∞)``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf, nan, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp, stats

from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.families.builtins.common import as_array, check_probability
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

_LOG_SQRT_2PI = 0.5 * np.log(2.0 * np.pi)


def configure_alpha_family() -> None:
    """
    Configure and register the Alpha distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ALPHA):
        return

    ALPHA_DOC = """
    Alpha distribution.

    Parameters: shape α > 0 and scale β > 0 (both default to 1).

    Probability density function:
        f(x) = β / (x² Φ(α) √(2π)) * exp(-(α - β/x)² / 2) for x > 0

    Cumulative distribution function:
        F(x) = Φ(α - β/x) / Φ(α)

    The distribution is heavy tailed: mean and variance are infinite.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability density function.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - beta: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the log-density

        Returns
        -------
        NumericArray
            Log-density values, ``-inf`` for x <= 0
        """
        parameters = cast(_Base, parameters)
        alpha, beta = parameters.alpha, parameters.beta

        x = as_array(x)
        inside = x > 0
        safe = np.where(inside, x, 1.0)
        value = (
            np.log(beta)
            - 2.0 * np.log(safe)
            - sp.log_ndtr(alpha)
            - _LOG_SQRT_2PI
            - 0.5 * (alpha - beta / safe) ** 2
        )
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Alpha distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - beta: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function for Alpha distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - beta: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the cumulative distribution function

        Returns
        -------
        NumericArray
            Probabilities P(X ≤ x) for each point x
        """
        parameters = cast(_Base, parameters)
        alpha, beta = parameters.alpha, parameters.beta

        x = as_array(x)
        inside = x > 0
        safe = np.where(inside, x, 1.0)
        value = sp.ndtr(alpha - beta / safe) / sp.ndtr(alpha)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Alpha distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (shape parameter)
            - beta: float (scale parameter)
        p : NumericArray
            Probability from [0, 1]

        Returns
        -------
        NumericArray
            Quantiles corresponding to probabilities p:
            - For p = 0: returns 0.0
            - For p = 1: returns np.inf
            - For p in (0, 1): returns β / (α - Φ⁻¹(p Φ(α)))

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        alpha, beta = parameters.alpha, parameters.beta

        interior = (p > 0) & (p < 1)
        safe = np.where(interior, p, 0.5)
        value = beta / (alpha - sp.ndtri(safe * sp.ndtr(alpha)))
        return cast(NumericArray, np.where(interior, value, np.where(p <= 0, 0.0, np.inf)))

    def mean_func(_1: Parametrization, _2: Any) -> float:
        """Mean of Alpha distribution (infinite)."""
        return inf

    def var_func(_1: Parametrization, _2: Any) -> float:
        """Variance of Alpha distribution (infinite)."""
        return inf

    def skew_func(_1: Parametrization, _2: Any) -> float:
        """Skewness of Alpha distribution (undefined)."""
        return nan

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        """Kurtosis of Alpha distribution (undefined, raw or excess)."""
        return nan

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode of Alpha distribution: β(√(α² + 8) - α)/4."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        return parameters.beta * (sqrt(alpha**2 + 8.0) - alpha) / 4.0

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        w = stats.truncnorm.rvs(-alpha, np.inf, loc=alpha, size=n, random_state=rng)
        return cast(NumericArray, parameters.beta / w)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Alpha distribution"""
        return ContinuousSupport(left=0.0, left_closed=False)

    Alpha = ParametricFamily(
        name=FamilyName.ALPHA,
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
            CharacteristicName.MODE: mode_func,
        },
        sampling_strategy=TransformSamplingStrategy(_sample),
        support_by_parametrization=_support,
    )
    Alpha.__doc__ = ALPHA_DOC

    @parametrization(family=Alpha)
    class _Base(Parametrization):
        """
        Standard parametrization of Alpha distribution.

        Parameters
        ----------
        alpha : float
            Shape parameter (α)
        beta : float
            Scale parameter (β)
        """

        alpha: float = 1.0
        beta: float = 1.0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

    ParametricFamilyRegister.register(Alpha)
