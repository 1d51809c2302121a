"""
PERT distribution family implementation.

Contains the (Beta-)PERT family used for three-point project estimates:
minimum a, most likely b and maximum c.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import log, sqrt
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


def configure_pert_family() -> None:
    """
    Configure and register the PERT distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.PERT):
        return

    PERT_DOC = """
    PERT distribution.

    Parameters: minimum a (default 0), mode b (default 0.5) and maximum c
    (default 1) with a < b < c.

    X = a + (c - a) Y with Y ~ Beta(α, β), where
        α = 1 + 4(b - a)/(c - a)
        β = 1 + 4(c - b)/(c - a)

    Mean is (a + 4b + c)/6; shape moments are those of Beta(α, β).
    """

    def _shapes(parameters: _Base) -> tuple[float, float]:
        a, b, c = parameters.a, parameters.b, parameters.c
        width = c - a
        return 1.0 + 4.0 * (b - a) / width, 1.0 + 4.0 * (c - b) / width

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        a, c = parameters.a, parameters.c
        alpha, beta = _shapes(parameters)

        x = as_array(x)
        inside = (x >= a) & (x <= c)
        y = (np.where(inside, x, 0.5 * (a + c)) - a) / (c - a)
        with np.errstate(divide="ignore"):
            value = (
                sp.xlogy(alpha - 1.0, y)
                + sp.xlog1py(beta - 1.0, -y)
                - sp.betaln(alpha, beta)
                - log(c - a)
            )
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for PERT distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float (minimum)
            - b: float (most likely value)
            - c: float (maximum)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero outside [a, c]
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: I_y(α, β) with y = (x - a)/(c - a)."""
        parameters = cast(_Base, parameters)
        a, c = parameters.a, parameters.c
        alpha, beta = _shapes(parameters)

        y = np.clip((as_array(x) - a) / (c - a), 0.0, 1.0)
        return cast(NumericArray, sp.betainc(alpha, beta, y))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function: a + (c - a) I⁻¹_p(α, β).

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        a, c = parameters.a, parameters.c
        alpha, beta = _shapes(parameters)
        return cast(NumericArray, a + (c - a) * sp.betaincinv(alpha, beta, p))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of PERT distribution: (a + 4b + c)/6."""
        parameters = cast(_Base, parameters)
        return (parameters.a + 4.0 * parameters.b + parameters.c) / 6.0

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of PERT distribution: (c - a)² αβ / ((α + β)²(α + β + 1))."""
        parameters = cast(_Base, parameters)
        alpha, beta = _shapes(parameters)
        total = alpha + beta
        return (parameters.c - parameters.a) ** 2 * alpha * beta / (total**2 * (total + 1.0))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness of the underlying Beta(α, β)."""
        alpha, beta = _shapes(cast(_Base, parameters))
        total = alpha + beta
        return 2.0 * (beta - alpha) * sqrt(total + 1.0) / ((total + 2.0) * sqrt(alpha * beta))

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of the underlying Beta(α, β)."""
        alpha, beta = _shapes(cast(_Base, parameters))
        total = alpha + beta
        numerator = 6.0 * ((alpha - beta) ** 2 * (total + 1.0) - alpha * beta * (total + 2.0))
        excess_kurtosis = numerator / (alpha * beta * (total + 2.0) * (total + 3.0))
        return kurtosis_value(3.0 + excess_kurtosis, excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median of PERT distribution (exact quantile at 1/2)."""
        return float(ppf(parameters, 0.5))

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode of PERT distribution: b."""
        return cast(_Base, parameters).b

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Differential entropy: Beta(α, β) entropy plus ln(c - a)."""
        parameters = cast(_Base, parameters)
        alpha, beta = _shapes(parameters)
        beta_entropy = (
            sp.betaln(alpha, beta)
            - (alpha - 1.0) * sp.digamma(alpha)
            - (beta - 1.0) * sp.digamma(beta)
            + (alpha + beta - 2.0) * sp.digamma(alpha + beta)
        )
        return float(beta_entropy + log(parameters.c - parameters.a))

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        a, c = parameters.a, parameters.c
        alpha, beta = _shapes(parameters)
        return cast(NumericArray, a + (c - a) * rng.beta(alpha, beta, size=n))

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of PERT distribution"""
        parameters = cast(_Base, parameters)
        return ContinuousSupport(left=parameters.a, right=parameters.c)

    PERT = ParametricFamily(
        name=FamilyName.PERT,
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
    PERT.__doc__ = PERT_DOC

    @parametrization(family=PERT)
    class _Base(Parametrization):
        """
        Standard parametrization of PERT distribution.

        Parameters
        ----------
        a : float
            Minimum value
        b : float
            Most likely value
        c : float
            Maximum value
        """

        a: float = 0.0
        b: float = 0.5
        c: float = 1.0

        @constraint(description="a < b")
        def check_a_less_than_b(self) -> bool:
            return self.a < self.b

        @constraint(description="b < c")
        def check_b_less_than_c(self) -> bool:
            return self.b < self.c

    ParametricFamilyRegister.register(PERT)
