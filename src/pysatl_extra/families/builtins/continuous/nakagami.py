"""
Nakagami distribution family implementation.

Contains the Nakagami-m fading family with shape m and spread Ω.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import exp, log, sqrt
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
from pysatl_extra.families.sampling import TransformSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any


def configure_nakagami_family() -> None:
    """
    Configure and register the Nakagami distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.NAKAGAMI):
        return

    NAKAGAMI_DOC = """
    Nakagami distribution.

    Parameters: shape m ≥ 1/2 (default 1/2) and spread Ω > 0 (default 1).

    For x ≥ 0:
        f(x) = 2 m^m / (Γ(m) Ω^m) x^{2m-1} exp(-m x²/Ω)
        F(x) = P(m, m x²/Ω)

    X² follows Gamma(m, Ω/m), which is also how variates are drawn.
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        m, omega = parameters.m, parameters.omega

        x = as_array(x)
        inside = (x >= 0) & np.isfinite(x)
        safe = np.where(inside, x, 1.0)
        with np.errstate(divide="ignore"):
            power = sp.xlogy(2.0 * m - 1.0, safe)
        value = log(2.0) + m * log(m / omega) - sp.gammaln(m) + power - m * safe**2 / omega
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Nakagami distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - m: float (shape parameter)
            - omega: float (spread parameter)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero for x < 0
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: P(m, m x²/Ω)."""
        parameters = cast(_Base, parameters)
        m, omega = parameters.m, parameters.omega

        x = as_array(x)
        inside = x > 0
        value = sp.gammainc(m, m * np.where(inside, x, 0.0) ** 2 / omega)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function: √(Ω/m · P⁻¹(m, p)).

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        parameters = cast(_Base, parameters)
        m, omega = parameters.m, parameters.omega
        return cast(NumericArray, np.sqrt(omega / m * sp.gammaincinv(m, p)))

    def _raw_moment(parameters: _Base, k: int) -> float:
        """E[X^k] = Γ(m + k/2) / Γ(m) · (Ω/m)^{k/2}."""
        m, omega = parameters.m, parameters.omega
        return exp(sp.gammaln(m + k / 2.0) - sp.gammaln(m)) * (omega / m) ** (k / 2.0)

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, k) for k in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        return _raw_moment(cast(_Base, parameters), 1)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Nakagami distribution: Ω - mean²."""
        parameters = cast(_Base, parameters)
        return parameters.omega - _raw_moment(parameters, 1) ** 2

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: √((2m - 1)Ω / (2m))."""
        parameters = cast(_Base, parameters)
        m = parameters.m
        return sqrt((2.0 * m - 1.0) * parameters.omega / (2.0 * m))

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Differential entropy of Nakagami distribution."""
        parameters = cast(_Base, parameters)
        m = parameters.m
        standard = sp.gammaln(m) + m - (m - 0.5) * sp.digamma(m) - 0.5 * log(m) - log(2.0)
        return float(standard + 0.5 * log(parameters.omega))

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        m, omega = parameters.m, parameters.omega
        return cast(NumericArray, np.sqrt(rng.gamma(m, omega / m, size=n)))

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Nakagami distribution"""
        return ContinuousSupport(left=0.0)

    Nakagami = ParametricFamily(
        name=FamilyName.NAKAGAMI,
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
        sampling_strategy=TransformSamplingStrategy(_sample),
        support_by_parametrization=_support,
    )
    Nakagami.__doc__ = NAKAGAMI_DOC

    @parametrization(family=Nakagami)
    class _Base(Parametrization):
        """
        Standard parametrization of Nakagami distribution.

        Parameters
        ----------
        m : float
            Shape parameter
        omega : float
            Spread parameter (Ω = E[X²])
        """

        m: float = 0.5
        omega: float = 1.0

        @constraint(description="m >= 0.5")
        def check_m_at_least_half(self) -> bool:
            return self.m >= 0.5

        @constraint(description="omega > 0")
        def check_omega_positive(self) -> bool:
            return self.omega > 0

    ParametricFamilyRegister.register(Nakagami)
