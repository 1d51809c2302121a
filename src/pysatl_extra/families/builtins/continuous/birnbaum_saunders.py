"""
Birnbaum-Saunders distribution family implementation.

Contains the Birnbaum-Saunders (fatigue life) family with location μ,
shape α and scale β.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

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

_LOG_SQRT_2PI = 0.5 * np.log(2.0 * np.pi)


def _squared_root_term(w: NumericArray) -> NumericArray:
    """(w + √(4 + w²))², written without cancellation for negative w."""
    r = np.sqrt(4.0 + w**2)
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.where(w >= 0, w + r, 4.0 / (r - w))
    return cast(NumericArray, t**2)


def configure_birnbaum_saunders_family() -> None:
    """
    Configure and register the Birnbaum-Saunders distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BIRNBAUM_SAUNDERS):
        return

    BIRNBAUM_SAUNDERS_DOC = """
    Birnbaum-Saunders (fatigue life) distribution.

    Parameters: location μ (default 0), shape α > 0 and scale β > 0
    (both default to 1).

    With y = x - μ > 0 and u = (√(y/β) - √(β/y)) / α:
        F(x) = Φ(u)
        f(x) = (√(y/β) + √(β/y)) / (2αy) * φ(u)

    Quantile:
        Q(p) = μ + (β/4) (αz + √(4 + α²z²))²,  z = Φ⁻¹(p)
    """

    def _standardize(parameters: _Base, x: NumericArray) -> tuple[Any, Any, Any]:
        mu, beta = parameters.mu, parameters.beta
        x = as_array(x)
        inside = x > mu
        y = np.where(inside, x - mu, beta)
        ratio = np.sqrt(y / beta)
        return inside, y, ratio

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        inside, y, ratio = _standardize(parameters, x)
        u = (ratio - 1.0 / ratio) / alpha
        value = np.log(ratio + 1.0 / ratio) - np.log(2.0 * alpha * y) - _LOG_SQRT_2PI - 0.5 * u**2
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Birnbaum-Saunders distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mu: float (location)
            - alpha: float (shape)
            - beta: float (scale)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero for x <= μ
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: Φ((√(y/β) - √(β/y)) / α)."""
        parameters = cast(_Base, parameters)
        inside, _, ratio = _standardize(parameters, x)
        value = sp.ndtr((ratio - 1.0 / ratio) / parameters.alpha)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Birnbaum-Saunders distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        mu, alpha, beta = parameters.mu, parameters.alpha, parameters.beta

        interior = (p > 0) & (p < 1)
        z = sp.ndtri(np.where(interior, p, 0.5))
        value = mu + 0.25 * beta * _squared_root_term(alpha * z)
        return cast(NumericArray, np.where(interior, value, np.where(p <= 0, mu, np.inf)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: μ + β(1 + α²/2)."""
        parameters = cast(_Base, parameters)
        return parameters.mu + parameters.beta * (1.0 + parameters.alpha**2 / 2.0)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: (αβ)² (1 + 5α²/4)."""
        parameters = cast(_Base, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        return (alpha * beta) ** 2 * (1.0 + 5.0 * alpha**2 / 4.0)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness: 4α(11α² + 6) / (5α² + 4)^{3/2}."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        return 4.0 * alpha * (11.0 * alpha**2 + 6.0) / (5.0 * alpha**2 + 4.0) ** 1.5

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis; the excess is 6α²(93α² + 40) / (5α² + 4)²."""
        parameters = cast(_Base, parameters)
        alpha = parameters.alpha
        excess_kurtosis = 6.0 * alpha**2 * (93.0 * alpha**2 + 40.0) / (5.0 * alpha**2 + 4.0) ** 2
        return kurtosis_value(3.0 + excess_kurtosis, excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: μ + β."""
        parameters = cast(_Base, parameters)
        return parameters.mu + parameters.beta

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        half = 0.5 * parameters.alpha * rng.standard_normal(n)
        value = parameters.beta * (half + np.sqrt(1.0 + half**2)) ** 2 + parameters.mu
        return cast(NumericArray, value)

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of Birnbaum-Saunders distribution"""
        parameters = cast(_Base, parameters)
        return ContinuousSupport(left=parameters.mu, left_closed=False)

    BirnbaumSaunders = ParametricFamily(
        name=FamilyName.BIRNBAUM_SAUNDERS,
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
        },
        sampling_strategy=TransformSamplingStrategy(_sample),
        support_by_parametrization=_support,
    )
    BirnbaumSaunders.__doc__ = BIRNBAUM_SAUNDERS_DOC

    @parametrization(family=BirnbaumSaunders)
    class _Base(Parametrization):
        """
        Standard parametrization of Birnbaum-Saunders distribution.

        Parameters
        ----------
        mu : float
            Location parameter (μ)
        alpha : float
            Shape parameter (α)
        beta : float
            Scale parameter (β)
        """

        mu: float = 0.0
        alpha: float = 1.0
        beta: float = 1.0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

    ParametricFamilyRegister.register(BirnbaumSaunders)
