"""
Burr (Type XII) distribution family implementation.

Contains the Burr Type XII family (Singh-Maddala distribution) with shapes
c, k and scale λ.
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


def configure_burr_family() -> None:
    """
    Configure and register the Burr Type XII distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BURR):
        return

    BURR_DOC = """
    Burr Type XII distribution.

    Parameters: shapes c > 0, k > 0 and scale λ > 0 (all default to 1).

    For x > 0, with z = x/λ:
        f(x) = (ck/λ) z^{c-1} (1 + z^c)^{-k-1}
        F(x) = 1 - (1 + z^c)^{-k}

    The r-th raw moment λ^r Γ(1 + r/c) Γ(k - r/c) / Γ(k) exists only for
    r < ck; moments of higher order are NaN.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        c, k, lam = parameters.c, parameters.k, parameters.lambda_

        x = as_array(x)
        inside = x > 0
        z = np.where(inside, x, lam) / lam
        value = log(c * k / lam) + (c - 1.0) * np.log(z) - (k + 1.0) * np.log1p(z**c)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Burr Type XII distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - c: float (first shape parameter)
            - k: float (second shape parameter)
            - lambda_: float (scale parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero for x <= 0
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 1 - (1 + (x/λ)^c)^{-k}."""
        parameters = cast(_Base, parameters)
        c, k, lam = parameters.c, parameters.k, parameters.lambda_

        x = as_array(x)
        inside = x > 0
        z = np.where(inside, x, 0.0) / lam
        return cast(NumericArray, np.where(inside, -np.expm1(-k * np.log1p(z**c)), 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function: λ ((1 - p)^{-1/k} - 1)^{1/c}.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        c, k, lam = parameters.c, parameters.k, parameters.lambda_

        with np.errstate(divide="ignore", over="ignore"):
            return cast(NumericArray, lam * np.expm1(-np.log1p(-p) / k) ** (1.0 / c))

    def _raw_moment(parameters: _Base, r: int) -> float:
        c, k, lam = parameters.c, parameters.k, parameters.lambda_
        if r >= c * k:
            return nan
        return lam**r * exp(sp.gammaln(1.0 + r / c) + sp.gammaln(k - r / c) - sp.gammaln(k))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, r) for r in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Burr distribution (NaN for ck <= 1)."""
        return _raw_moment(cast(_Base, parameters), 1)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Burr distribution (NaN for ck <= 2)."""
        return _moments(parameters)[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness of Burr distribution (NaN for ck <= 3)."""
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of Burr distribution (NaN for ck <= 4)."""
        return kurtosis_value(_moments(parameters)[3], excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: λ (2^{1/k} - 1)^{1/c}."""
        parameters = cast(_Base, parameters)
        c, k = parameters.c, parameters.k
        return parameters.lambda_ * (2.0 ** (1.0 / k) - 1.0) ** (1.0 / c)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: λ ((c - 1)/(ck + 1))^{1/c} for c > 1, else 0."""
        parameters = cast(_Base, parameters)
        c, k = parameters.c, parameters.k
        if c <= 1:
            return 0.0
        return parameters.lambda_ * ((c - 1.0) / (c * k + 1.0)) ** (1.0 / c)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Burr distribution"""
        return ContinuousSupport(left=0.0, left_closed=False)

    Burr = ParametricFamily(
        name=FamilyName.BURR,
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
    Burr.__doc__ = BURR_DOC

    @parametrization(family=Burr)
    class _Base(Parametrization):
        """
        Standard parametrization of Burr Type XII distribution.

        Parameters
        ----------
        c : float
            First shape parameter
        k : float
            Second shape parameter
        lambda_ : float
            Scale parameter (λ)
        """

        c: float = 1.0
        k: float = 1.0
        lambda_: float = 1.0

        @constraint(description="c > 0")
        def check_c_positive(self) -> bool:
            return self.c > 0

        @constraint(description="k > 0")
        def check_k_positive(self) -> bool:
            return self.k > 0

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    ParametricFamilyRegister.register(Burr)
