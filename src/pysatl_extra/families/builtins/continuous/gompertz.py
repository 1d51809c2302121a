"""
Gompertz distribution family implementation.

Contains the Gompertz family used in actuarial science and demography, with
shape η and rate b.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import exp, inf, log, log1p
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import integrate, special as sp

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


def configure_gompertz_family() -> None:
    """
    Configure and register the Gompertz distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GOMPERTZ):
        return

    GOMPERTZ_DOC = """
    Gompertz distribution.

    Parameters: shape η > 0 (default 1) and rate b > 0 (default 1).

    For x ≥ 0:
        f(x) = bη exp(η + bx - η e^{bx})
        F(x) = 1 - exp(-η (e^{bx} - 1))
        Q(p) = ln(1 - ln(1 - p)/η) / b

    The mean is e^η E₁(η)/b; higher moments are integrated numerically.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        eta, b = parameters.eta, parameters.b

        x = as_array(x)
        inside = x >= 0
        bx = b * np.where(inside, x, 0.0)
        with np.errstate(over="ignore"):
            value = log(b * eta) + bx - eta * np.expm1(bx)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Gompertz distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - eta: float (shape parameter)
            - b: float (rate parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero for x < 0
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 1 - exp(-η (e^{bx} - 1))."""
        parameters = cast(_Base, parameters)
        eta, b = parameters.eta, parameters.b

        x = as_array(x)
        inside = x > 0
        with np.errstate(over="ignore"):
            value = -np.expm1(-eta * np.expm1(b * np.where(inside, x, 0.0)))
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF) for Gompertz distribution.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        eta, b = parameters.eta, parameters.b

        with np.errstate(divide="ignore"):
            return cast(NumericArray, np.log1p(-np.log1p(-p) / eta) / b)

    def _raw_moment(parameters: _Base, k: int) -> float:
        """E[X^k] = k/b^k ∫₀^∞ y^{k-1} exp(-η(e^y - 1)) dy."""
        eta, b = parameters.eta, parameters.b

        def integrand(y: float) -> float:
            with np.errstate(over="ignore"):
                return y ** (k - 1) * float(np.exp(-eta * np.expm1(y)))

        value, _ = integrate.quad(integrand, 0.0, inf, limit=200)
        return float(k * value / b**k)

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        m1 = mean_func(parameters, None)
        return central_moments(m1, *(_raw_moment(parameters, k) for k in range(2, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Gompertz distribution: e^η E₁(η) / b."""
        parameters = cast(_Base, parameters)
        eta = parameters.eta
        return float(exp(eta) * sp.exp1(eta) / parameters.b)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Gompertz distribution (second moment by quadrature)."""
        parameters = cast(_Base, parameters)
        return _raw_moment(parameters, 2) - mean_func(parameters, None) ** 2

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def median_func(parameters: Parametrization, _: Any) -> float:
        """Median: ln(1 + ln 2 / η) / b."""
        parameters = cast(_Base, parameters)
        return log1p(log(2.0) / parameters.eta) / parameters.b

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: -ln(η)/b for η < 1, else 0."""
        parameters = cast(_Base, parameters)
        if parameters.eta >= 1:
            return 0.0
        return -log(parameters.eta) / parameters.b

    def mgf_func(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """
        Moment generating function.

        With s = 1 + t/b, M(t) = e^η η^{-t/b} Γ(s, η) for s > 0; otherwise
        η e^η ∫₁^∞ u^{t/b} e^{-ηu} du is integrated numerically.
        """
        parameters = cast(_Base, parameters)
        eta, b = parameters.eta, parameters.b

        t = as_array(t)
        out = np.empty(t.size, dtype=np.float64)
        for i, point in enumerate(t.ravel()):
            s = 1.0 + point / b
            if s > 0:
                upper = sp.gammaincc(s, eta)
                out[i] = exp(eta - (point / b) * log(eta) + sp.gammaln(s)) * upper
            else:
                value, _ = integrate.quad(
                    lambda u, r=point / b: u**r * exp(-eta * (u - 1.0)), 1.0, inf, limit=200
                )
                out[i] = eta * value
        return cast(NumericArray, out.reshape(t.shape))

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Gompertz distribution"""
        return ContinuousSupport(left=0.0)

    Gompertz = ParametricFamily(
        name=FamilyName.GOMPERTZ,
        distr_type=UnivariateContinuous,
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MGF: mgf_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
        },
        support_by_parametrization=_support,
    )
    Gompertz.__doc__ = GOMPERTZ_DOC

    @parametrization(family=Gompertz)
    class _Base(Parametrization):
        """
        Standard parametrization of Gompertz distribution.

        Parameters
        ----------
        eta : float
            Shape parameter (η)
        b : float
            Rate parameter
        """

        eta: float = 1.0
        b: float = 1.0

        @constraint(description="eta > 0")
        def check_eta_positive(self) -> bool:
            return self.eta > 0

        @constraint(description="b > 0")
        def check_b_positive(self) -> bool:
            return self.b > 0

    ParametricFamilyRegister.register(Gompertz)
