"""
Benini distribution family implementation.

Contains the Benini family, a log-quadratic generalization of the Pareto law
used for income data.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import exp, log, pi, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.families.builtins.common import (
    as_array,
    central_moments,
    check_probability,
    kurtosis_value,
)
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
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any


def configure_benini_family() -> None:
    """
    Configure and register the Benini distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BENINI):
        return

    BENINI_DOC = """
    Benini distribution.

    Parameters: shapes α > 0 (default 1), β > 0 (default 1) and scale σ > 0
    (default 1).

    With L = ln(x/σ), for x ≥ σ:
        F(x) = 1 - exp(-αL - βL²)
        f(x) = exp(-αL - βL²) (α + 2βL) / x

    All moments exist:
        E[X^k] = σ^k (1 + k √π / (2√β) erfcx((α - k) / (2√β)))
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        alpha, beta, sigma = parameters.alpha, parameters.beta, parameters.sigma

        x = as_array(x)
        inside = x >= sigma
        safe = np.where(inside, x, sigma)
        ln = np.log(safe / sigma)
        value = -alpha * ln - beta * ln**2 + np.log(alpha + 2.0 * beta * ln) - np.log(safe)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Probability density function, zero below σ."""
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 1 - exp(-αL - βL²)."""
        parameters = cast(_Base, parameters)
        alpha, beta, sigma = parameters.alpha, parameters.beta, parameters.sigma

        x = as_array(x)
        inside = x > sigma
        ln = np.log(np.where(inside, x, sigma) / sigma)
        return cast(NumericArray, np.where(inside, -np.expm1(-alpha * ln - beta * ln**2), 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Benini distribution.

        Returns σ exp((-α + √(α² - 4β ln(1 - p))) / (2β)); p = 1 maps to inf.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        alpha, beta, sigma = parameters.alpha, parameters.beta, parameters.sigma

        with np.errstate(divide="ignore", over="ignore"):
            ln = (-alpha + np.sqrt(alpha**2 - 4.0 * beta * np.log1p(-p))) / (2.0 * beta)
            return cast(NumericArray, sigma * np.exp(ln))

    def _raw_moment(parameters: _Base, k: int) -> float:
        alpha, beta, sigma = parameters.alpha, parameters.beta, parameters.sigma
        tail = k * sqrt(pi) / (2.0 * sqrt(beta)) * sp.erfcx((alpha - k) / (2.0 * sqrt(beta)))
        return float(sigma**k * (1.0 + tail))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, k) for k in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Benini distribution."""
        return _raw_moment(cast(_Base, parameters), 1)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Benini distribution."""
        return _moments(parameters)[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness of Benini distribution."""
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of Benini distribution."""
        return kurtosis_value(_moments(parameters)[3], excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: σ exp((-α + √(α² + 4β ln 2)) / (2β))."""
        parameters = cast(_Base, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        ln = (-alpha + sqrt(alpha**2 + 4.0 * beta * log(2.0))) / (2.0 * beta)
        return parameters.sigma * exp(ln)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """
        Mode of Benini distribution.

        The log-density is stationary where u = α + 2βL solves u² + u = 2β;
        when that point lies below σ the mode is σ.
        """
        parameters = cast(_Base, parameters)
        alpha, beta = parameters.alpha, parameters.beta
        u = 0.5 * (-1.0 + sqrt(1.0 + 8.0 * beta))
        ln = (u - alpha) / (2.0 * beta)
        return parameters.sigma * exp(max(ln, 0.0))

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of Benini distribution"""
        parameters = cast(_Base, parameters)
        return ContinuousSupport(left=parameters.sigma)

    Benini = ParametricFamily(
        name=FamilyName.BENINI,
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
        },
        support_by_parametrization=_support,
    )
    Benini.__doc__ = BENINI_DOC

    @parametrization(family=Benini)
    class _Base(Parametrization):
        """
        Standard parametrization of Benini distribution.

        Parameters
        ----------
        alpha : float
            Shape parameter (α)
        beta : float
            Shape parameter (β)
        sigma : float
            Scale parameter (σ), the lower end of the support
        """

        alpha: float = 1.0
        beta: float = 1.0
        sigma: float = 1.0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    ParametricFamilyRegister.register(Benini)
