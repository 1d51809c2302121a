"""
Benktander Type II distribution family implementation.

Contains the Benktander Type II (Benktander-Weibull) family, a claim-size
distribution whose quantile is expressed through the Lambert W function.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import exp, log
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

# exp(L) overflows float64 above this
_LAMBERTW_DIRECT_LIMIT = 700.0
_NEWTON_STEPS = 50


def _lambertw_of_exp(log_arg: NumericArray) -> NumericArray:
    """
    Principal branch W(exp(L)), i.e. the solution of w + ln w = L.

    Small arguments go through :func:`scipy.special.lambertw`; large ones are
    solved by Newton iterations started at L - ln L.
    """
    log_arg = np.asarray(log_arg, dtype=np.float64)
    direct = log_arg <= _LAMBERTW_DIRECT_LIMIT
    small = np.where(direct, log_arg, 0.0)
    out = np.asarray(sp.lambertw(np.exp(small)).real, dtype=np.float64)

    if np.any(~direct):
        big = np.where(direct, 2.0 * _LAMBERTW_DIRECT_LIMIT, log_arg)
        with np.errstate(invalid="ignore"):
            w = big - np.log(big)
            for _ in range(_NEWTON_STEPS):
                w = w - (w + np.log(w) - big) / (1.0 + 1.0 / w)
        out = np.where(direct, out, w)
    return cast(NumericArray, out)


def configure_benktander_type2_family() -> None:
    """
    Configure and register the Benktander Type II distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BENKTANDER_TYPE2):
        return

    BENKTANDER_TYPE2_DOC = """
    Benktander Type II distribution.

    Parameters: a > 0 (default 1) and 0 < b ≤ 1 (b defaults to 1, the
    exponential case shifted to start at 1).

    For x ≥ 1:
        F(x) = 1 - x^{b-1} exp((a/b)(1 - x^b))
        f(x) = exp((a/b)(1 - x^b)) x^{b-2} (a x^b - b + 1)

    Quantile, for b < 1:
        Q(p) = ((1-b)/a W(a/(1-b) e^{a/(1-b)} (1-p)^{-b/(1-b)}))^{1/b}
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b

        x = as_array(x)
        inside = x >= 1
        safe = np.where(inside, x, 1.0)
        xb = safe**b
        value = (a / b) * (1.0 - xb) + (b - 2.0) * np.log(safe) + np.log(a * xb - b + 1.0)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Benktander Type II distribution.

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
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function, zero below 1."""
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b

        x = as_array(x)
        inside = x > 1
        safe = np.where(inside, x, 1.0)
        log_survival = (b - 1.0) * np.log(safe) + (a / b) * (1.0 - safe**b)
        return cast(NumericArray, np.where(inside, -np.expm1(log_survival), 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Benktander Type II distribution.

        Uses 1 - ln(1 - p)/a for b = 1 and the Lambert W form otherwise;
        the W argument is handled in log space so it never overflows.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        a, b = parameters.a, parameters.b

        with np.errstate(divide="ignore"):
            log_q = np.log1p(-p)
        if b == 1.0:
            return cast(NumericArray, 1.0 - log_q / a)

        c = a / (1.0 - b)
        finite = p < 1
        log_arg = np.log(c) + c - (b / (1.0 - b)) * np.where(finite, log_q, 0.0)
        w = _lambertw_of_exp(log_arg)
        value = (w / c) ** (1.0 / b)
        return cast(NumericArray, np.where(finite, value, np.inf))

    def _raw_moment(parameters: _Base, k: int) -> float:
        """
        E[X^k] = 1 + (k/b) e^z z^{-s} Γ(s) Q(s, z) with z = a/b and
        s = 1 + (k - 1)/b.
        """
        a, b = parameters.a, parameters.b
        z = a / b
        s = 1.0 + (k - 1.0) / b
        upper = sp.gammaincc(s, z)
        if upper == 0.0:
            return 1.0
        return 1.0 + (k / b) * exp(z - s * log(z) + sp.gammaln(s) + log(upper))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, k) for k in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Benktander Type II distribution: 1 + 1/a."""
        parameters = cast(_Base, parameters)
        return 1.0 + 1.0 / parameters.a

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Benktander Type II distribution."""
        return _moments(parameters)[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Benktander Type II distribution (always 1)."""
        return 1.0

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Benktander Type II distribution"""
        return ContinuousSupport(left=1.0)

    BenktanderType2 = ParametricFamily(
        name=FamilyName.BENKTANDER_TYPE2,
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
        support_by_parametrization=_support,
    )
    BenktanderType2.__doc__ = BENKTANDER_TYPE2_DOC

    @parametrization(family=BenktanderType2)
    class _Base(Parametrization):
        """
        Standard parametrization of Benktander Type II distribution.

        Parameters
        ----------
        a : float
            Scale-like parameter, a > 0
        b : float
            Shape parameter, 0 < b ≤ 1
        """

        a: float = 1.0
        b: float = 1.0

        @constraint(description="a > 0")
        def check_a_positive(self) -> bool:
            return self.a > 0

        @constraint(description="0 < b <= 1")
        def check_b_range(self) -> bool:
            return 0 < self.b <= 1

    ParametricFamilyRegister.register(BenktanderType2)
