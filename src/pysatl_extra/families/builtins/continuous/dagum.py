"""
Dagum distribution family implementation.

Contains the Dagum (inverse Burr) family used for income and wealth data.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import exp, log, nan
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


def configure_dagum_family() -> None:
    """
    Configure and register the Dagum distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.DAGUM):
        return

    DAGUM_DOC = """
    Dagum distribution.

    Parameters: shape a > 0, scale b > 0 and shape p > 0 (all default to 1).

    For x > 0:
        F(x) = (1 + (x/b)^{-a})^{-p}
        f(x) = (ap/x) (x/b)^{ap} / ((x/b)^a + 1)^{p+1}

    The r-th raw moment b^r Γ(1 - r/a) Γ(p + r/a) / Γ(p) exists only for
    r < a; moments of higher order are NaN.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        a, b, p = parameters.a, parameters.b, parameters.p

        x = as_array(x)
        inside = x > 0
        safe = np.where(inside, x, b)
        z = safe / b
        value = log(a * p) - np.log(safe) + a * p * np.log(z) - (p + 1.0) * np.log1p(z**a)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Dagum distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float (shape)
            - b: float (scale)
            - p: float (shape)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero for x <= 0
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: (1 + (x/b)^{-a})^{-p}."""
        parameters = cast(_Base, parameters)
        a, b, p = parameters.a, parameters.b, parameters.p

        x = as_array(x)
        inside = x > 0
        z = np.where(inside, x, b) / b
        value = np.exp(-p * np.log1p(z ** (-a)))
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function: b (q^{-1/p} - 1)^{-1/a} at probability q.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        q = check_probability(p)
        parameters = cast(_Base, parameters)
        a, b, shape = parameters.a, parameters.b, parameters.p

        with np.errstate(divide="ignore", over="ignore"):
            return cast(NumericArray, b * np.expm1(-np.log(q) / shape) ** (-1.0 / a))

    def _raw_moment(parameters: _Base, r: int) -> float:
        a, b, p = parameters.a, parameters.b, parameters.p
        if r >= a:
            return nan
        return b**r * exp(sp.gammaln(1.0 - r / a) + sp.gammaln(p + r / a) - sp.gammaln(p))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, r) for r in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Dagum distribution (NaN for a <= 1)."""
        return _raw_moment(cast(_Base, parameters), 1)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Dagum distribution (NaN for a <= 2)."""
        return _moments(parameters)[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness of Dagum distribution (NaN for a <= 3)."""
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of Dagum distribution (NaN for a <= 4)."""
        return kurtosis_value(_moments(parameters)[3], excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: b (2^{1/p} - 1)^{-1/a}."""
        parameters = cast(_Base, parameters)
        a, p = parameters.a, parameters.p
        return parameters.b * (2.0 ** (1.0 / p) - 1.0) ** (-1.0 / a)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: b ((ap - 1)/(a + 1))^{1/a} for ap > 1, else 0."""
        parameters = cast(_Base, parameters)
        a, p = parameters.a, parameters.p
        if a * p <= 1:
            return 0.0
        return parameters.b * ((a * p - 1.0) / (a + 1.0)) ** (1.0 / a)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Dagum distribution"""
        return ContinuousSupport(left=0.0, left_closed=False)

    Dagum = ParametricFamily(
        name=FamilyName.DAGUM,
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
    Dagum.__doc__ = DAGUM_DOC

    @parametrization(family=Dagum)
    class _Base(Parametrization):
        """
        Standard parametrization of Dagum distribution.

        Parameters
        ----------
        a : float
            Shape parameter
        b : float
            Scale parameter
        p : float
            Shape parameter
        """

        a: float = 1.0
        b: float = 1.0
        p: float = 1.0

        @constraint(description="a > 0")
        def check_a_positive(self) -> bool:
            return self.a > 0

        @constraint(description="b > 0")
        def check_b_positive(self) -> bool:
            return self.b > 0

        @constraint(description="p > 0")
        def check_p_positive(self) -> bool:
            return self.p > 0

    ParametricFamilyRegister.register(Dagum)
