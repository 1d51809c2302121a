"""
Maxwell distribution family implementation.

Contains the Maxwell-Boltzmann speed distribution with scale a.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import log, pi, sqrt
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
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any


def configure_maxwell_family() -> None:
    """
    Configure and register the Maxwell distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.MAXWELL):
        return

    MAXWELL_DOC = """
    Maxwell (Maxwell-Boltzmann) distribution.

    Parameters: scale a > 0 (default 1).

    For x ≥ 0:
        f(x) = √(2/π) x² exp(-x²/(2a²)) / a³
        F(x) = P(3/2, x²/(2a²))

    where P is the regularized lower incomplete gamma function.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        a = parameters.a

        x = as_array(x)
        inside = (x >= 0) & np.isfinite(x)
        safe = np.where(inside, x, a)
        with np.errstate(divide="ignore"):
            log_x = np.log(safe)
        value = 0.5 * log(2.0 / pi) - 3.0 * log(a) + 2.0 * log_x - safe**2 / (2.0 * a**2)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Maxwell distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - a: float (scale parameter)
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
        Cumulative distribution function for Maxwell distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - a: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the cumulative distribution function

        Returns
        -------
        NumericArray
            Probabilities P(X ≤ x) for each point x
        """
        parameters = cast(_Base, parameters)
        a = parameters.a

        x = as_array(x)
        inside = x > 0
        value = sp.gammainc(1.5, np.where(inside, x, 0.0) ** 2 / (2.0 * a**2))
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function: a √(2 P⁻¹(3/2, p)).

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        return cast(NumericArray, parameters.a * np.sqrt(2.0 * sp.gammaincinv(1.5, p)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Maxwell distribution: 2a √(2/π)."""
        parameters = cast(_Base, parameters)
        return 2.0 * parameters.a * sqrt(2.0 / pi)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Maxwell distribution: a²(3π - 8)/π."""
        parameters = cast(_Base, parameters)
        return parameters.a**2 * (3.0 * pi - 8.0) / pi

    def skew_func(_1: Parametrization, _2: Any) -> float:
        """Skewness of Maxwell distribution: 2√2 (16 - 5π) / (3π - 8)^{3/2}."""
        return 2.0 * sqrt(2.0) * (16.0 - 5.0 * pi) / (3.0 * pi - 8.0) ** 1.5

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        """
        Raw or excess kurtosis of Maxwell distribution.

        The excess is 4(-96 + 40π - 3π²) / (3π - 8)².
        """
        excess_kurtosis = 4.0 * (-96.0 + 40.0 * pi - 3.0 * pi**2) / (3.0 * pi - 8.0) ** 2
        return kurtosis_value(3.0 + excess_kurtosis, excess)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode of Maxwell distribution: a√2."""
        return cast(_Base, parameters).a * sqrt(2.0)

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Differential entropy: ln(a√(2π)) + γ - 1/2."""
        parameters = cast(_Base, parameters)
        return log(parameters.a * sqrt(2.0 * pi)) + np.euler_gamma - 0.5

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Maxwell distribution"""
        return ContinuousSupport(left=0.0)

    Maxwell = ParametricFamily(
        name=FamilyName.MAXWELL,
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
            CharacteristicName.ENTROPY: entropy_func,
        },
        support_by_parametrization=_support,
    )
    Maxwell.__doc__ = MAXWELL_DOC

    @parametrization(family=Maxwell)
    class _Base(Parametrization):
        """
        Standard parametrization of Maxwell distribution.

        Parameters
        ----------
        a : float
            Scale parameter
        """

        a: float = 1.0

        @constraint(description="a > 0")
        def check_a_positive(self) -> bool:
            return self.a > 0

    ParametricFamilyRegister.register(Maxwell)
