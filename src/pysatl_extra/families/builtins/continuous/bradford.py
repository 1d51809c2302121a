"""
Bradford distribution family implementation.

Contains the Bradford family on the unit interval.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import expm1, log, log1p
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


def configure_bradford_family() -> None:
    """
    Configure and register the Bradford distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BRADFORD):
        return

    BRADFORD_DOC = """
    Bradford distribution.

    Parameter: shape c > 0 (default 1). With k = ln(1 + c), for 0 ≤ x ≤ 1:
        f(x) = c / (k (1 + cx))
        F(x) = ln(1 + cx) / k
        Q(p) = ((1 + c)^p - 1) / c
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Bradford distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - c: float (shape parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero outside [0, 1]
        """
        parameters = cast(_Base, parameters)
        c = parameters.c

        x = as_array(x)
        inside = (x >= 0) & (x <= 1)
        value = c / (log1p(c) * (1.0 + c * np.where(inside, x, 0.0)))
        return cast(NumericArray, np.where(inside, value, 0.0))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        c = parameters.c

        x = as_array(x)
        inside = (x >= 0) & (x <= 1)
        value = log(c) - log(log1p(c)) - np.log1p(c * np.where(inside, x, 0.0))
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: ln(1 + cx) / ln(1 + c)."""
        parameters = cast(_Base, parameters)
        c = parameters.c
        clipped = np.clip(as_array(x), 0.0, 1.0)
        return cast(NumericArray, np.log1p(c * clipped) / log1p(c))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Bradford distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        c = parameters.c
        return cast(NumericArray, np.expm1(p * log1p(c)) / c)

    def _raw_moment(parameters: _Base, n: int) -> float:
        """E[X^n] = c / (k (n + 1)) ₂F₁(1, n + 1; n + 2; -c)."""
        c = parameters.c
        return float(c / (log1p(c) * (n + 1)) * sp.hyp2f1(1.0, n + 1.0, n + 2.0, -c))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, n) for n in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Bradford distribution: (c - k) / (ck)."""
        parameters = cast(_Base, parameters)
        c = parameters.c
        k = log1p(c)
        return (c - k) / (c * k)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Bradford distribution: ((c + 2)k - 2c) / (2ck²)."""
        parameters = cast(_Base, parameters)
        c = parameters.c
        k = log1p(c)
        return ((c + 2.0) * k - 2.0 * c) / (2.0 * c * k**2)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: (√(1 + c) - 1) / c."""
        parameters = cast(_Base, parameters)
        c = parameters.c
        return expm1(0.5 * log1p(c)) / c

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Bradford distribution (always 0)."""
        return 0.0

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Differential entropy: k/2 - ln(c/k)."""
        parameters = cast(_Base, parameters)
        c = parameters.c
        k = log1p(c)
        return k / 2.0 - log(c / k)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Bradford distribution"""
        return ContinuousSupport(left=0.0, right=1.0)

    Bradford = ParametricFamily(
        name=FamilyName.BRADFORD,
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
        support_by_parametrization=_support,
    )
    Bradford.__doc__ = BRADFORD_DOC

    @parametrization(family=Bradford)
    class _Base(Parametrization):
        """
        Standard parametrization of Bradford distribution.

        Parameters
        ----------
        c : float
            Shape parameter
        """

        c: float = 1.0

        @constraint(description="c > 0")
        def check_c_positive(self) -> bool:
            return self.c > 0

    ParametricFamilyRegister.register(Bradford)
