"""
Benktander Type I distribution family implementation.

Contains the Benktander Type I family, a claim-size distribution from
actuarial science whose mean excess function is linear in log-scale.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import pi, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

from pysatl_extra.distributions.fitters import root_quantile
from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.families.builtins.common import as_array, central_moments, kurtosis_value
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

QUANTILE_UPPER_BRACKET = 1e8


def configure_benktander_type1_family() -> None:
    """
    Configure and register the Benktander Type I distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BENKTANDER_TYPE1):
        return

    BENKTANDER_TYPE1_DOC = """
    Benktander Type I distribution.

    Parameters: a > 0 (default 1) and 0 < b ≤ a(a + 1)/2 (b defaults to the upper
    bound).

    For x ≥ 1:
        F(x) = 1 - (1 + 2b ln(x)/a) x^{-(a + 1 + b ln x)}
        f(x) = [(1 + 2b ln(x)/a)(1 + a + 2b ln x) - 2b/a] x^{-(2 + a + b ln x)}

    The mean is 1 + 1/a. The quantile is found by root finding on [1, 1e8].
    """

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Benktander Type I distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float
            - b: float
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero below 1
        """
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b

        x = as_array(x)
        inside = x >= 1
        safe = np.where(inside, x, 1.0)
        ln = np.log(safe)
        factor = (1.0 + 2.0 * b * ln / a) * (1.0 + a + 2.0 * b * ln) - 2.0 * b / a
        value = factor * np.exp(-(2.0 + a + b * ln) * ln)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b

        x = as_array(x)
        inside = x >= 1
        ln = np.log(np.where(inside, x, 1.0))
        factor = (1.0 + 2.0 * b * ln / a) * (1.0 + a + 2.0 * b * ln) - 2.0 * b / a
        value = np.log(factor) - (2.0 + a + b * ln) * ln
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function, zero below 1."""
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b

        x = as_array(x)
        inside = x > 1
        ln = np.log(np.where(inside, x, 1.0))
        survival = (1.0 + 2.0 * b * ln / a) * np.exp(-(a + 1.0 + b * ln) * ln)
        return cast(NumericArray, np.where(inside, 1.0 - survival, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function by root finding of ``cdf(x) - p`` on ``[1, 1e8]``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        NumericalComputationError
            If the quantile lies beyond the bracket.
        """
        parameters = cast(_Base, parameters)
        return root_quantile(
            lambda t: cdf(parameters, t),
            p,
            (1.0, QUANTILE_UPPER_BRACKET),
            (1.0, np.inf),
        )

    def _raw_moment(parameters: _Base, k: int) -> float:
        """
        E[X^k] = 1 + k (I + (1 - cI)/a) with c = a + 1 - k and
        I = ∫₀^∞ exp(-cL - bL²) dL = √π/(2√b) erfcx(c/(2√b)).
        """
        a, b = parameters.a, parameters.b
        c = a + 1.0 - k
        integral = sqrt(pi) / (2.0 * sqrt(b)) * sp.erfcx(c / (2.0 * sqrt(b)))
        return float(1.0 + k * (integral + (1.0 - c * integral) / a))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, k) for k in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Benktander Type I distribution: 1 + 1/a."""
        parameters = cast(_Base, parameters)
        return 1.0 + 1.0 / parameters.a

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: (2aI - 1)/a² with I = √π/(2√b) erfcx((a - 1)/(2√b))."""
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b
        integral = sqrt(pi) / (2.0 * sqrt(b)) * sp.erfcx((a - 1.0) / (2.0 * sqrt(b)))
        return float((2.0 * a * integral - 1.0) / a**2)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Benktander Type I distribution"""
        return ContinuousSupport(left=1.0)

    BenktanderType1 = ParametricFamily(
        name=FamilyName.BENKTANDER_TYPE1,
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
        },
        support_by_parametrization=_support,
    )
    BenktanderType1.__doc__ = BENKTANDER_TYPE1_DOC

    @parametrization(family=BenktanderType1)
    class _Base(Parametrization):
        """
        Standard parametrization of Benktander Type I distribution.

        Parameters
        ----------
        a : float
            Tail parameter, a > 0
        b : float, optional
            Log-quadratic parameter, 0 < b ≤ a(a + 1)/2; defaults to a(a + 1)/2
        """

        a: float = 1.0
        b: float | None = None

        def __post_init__(self) -> None:
            if self.b is None:
                object.__setattr__(self, "b", self.a * (self.a + 1.0) / 2.0)

        @constraint(description="a > 0")
        def check_a_positive(self) -> bool:
            return self.a > 0

        @constraint(description="0 < b <= a(a + 1)/2")
        def check_b_range(self) -> bool:
            return 0 < self.b <= self.a * (self.a + 1.0) / 2.0

    ParametricFamilyRegister.register(BenktanderType1)
