"""
Bhattacharjee distribution family implementation.

Contains the Bhattacharjee family: the sum of a uniform variable on [a, b]
and an independent centred normal error with standard deviation σ.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

from pysatl_extra.distributions.fitters import root_quantile
from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.families.builtins.common import as_array, kurtosis_value
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.families.sampling import CompoundSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    ComplexArray,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

# Quantile bracket half-width beyond [a, b], in units of sigma
QUANTILE_BRACKET_SIGMAS = 50.0

_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)


def configure_bhattacharjee_family() -> None:
    """
    Configure and register the Bhattacharjee distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.BHATTACHARJEE):
        return

    BHATTACHARJEE_DOC = """
    Bhattacharjee distribution.

    Parameters: a < b (default 0 and 1) and σ > 0 (default 1).

    X = U + σZ with U ~ Uniform(a, b) and Z ~ N(0, 1). With
    t₁ = (x - a)/σ and t₂ = (x - b)/σ:
        f(x) = (Φ(t₁) - Φ(t₂)) / (b - a)
        F(x) = σ/(b - a) [t₁Φ(t₁) - t₂Φ(t₂) + φ(t₁) - φ(t₂)]

    The quantile is found by root finding on [a - 50σ, b + 50σ].
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Log-density computed as log(Φ(t₁) - Φ(t₂)) in log space.

        Right of the midpoint the survival form Φ(-t₂) - Φ(-t₁) is used so
        that neither tail loses precision.
        """
        parameters = cast(_Base, parameters)
        a, b, sigma = parameters.a, parameters.b, parameters.sigma

        x = as_array(x)
        t1 = (x - a) / sigma
        t2 = (x - b) / sigma
        right = x > 0.5 * (a + b)
        hi = np.where(right, -t2, t1)
        lo = np.where(right, -t1, t2)
        log_hi = sp.log_ndtr(hi)
        with np.errstate(invalid="ignore", divide="ignore"):
            log_diff = log_hi + np.log(-np.expm1(sp.log_ndtr(lo) - log_hi))
        return cast(NumericArray, np.where(np.isfinite(x), log_diff - np.log(b - a), -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Bhattacharjee distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - a: float (lower end of the uniform component)
            - b: float (upper end of the uniform component)
            - sigma: float (standard deviation of the normal component)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function for Bhattacharjee distribution."""
        parameters = cast(_Base, parameters)
        a, b, sigma = parameters.a, parameters.b, parameters.sigma

        x = as_array(x)
        t1 = (x - a) / sigma
        t2 = (x - b) / sigma

        def g(t: NumericArray) -> NumericArray:
            return cast(NumericArray, t * sp.ndtr(t) + _INV_SQRT_2PI * np.exp(-0.5 * t**2))

        with np.errstate(invalid="ignore"):
            value = sigma / (b - a) * (g(t1) - g(t2))
        value = np.where(np.isposinf(x), 1.0, np.where(np.isneginf(x), 0.0, value))
        return cast(NumericArray, np.clip(value, 0.0, 1.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function by root finding on ``[a - 50σ, b + 50σ]``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        NumericalComputationError
            If root finding fails.
        """
        parameters = cast(_Base, parameters)
        a, b, sigma = parameters.a, parameters.b, parameters.sigma
        bracket = (a - QUANTILE_BRACKET_SIGMAS * sigma, b + QUANTILE_BRACKET_SIGMAS * sigma)
        return root_quantile(lambda t: cdf(parameters, t), p, bracket, (-np.inf, np.inf))

    def _uniform_transform(parameters: _Base, s: Any) -> Any:
        """E[exp(sU)] for U ~ Uniform(a, b); s may be complex."""
        a, b = parameters.a, parameters.b
        s = np.asarray(s)
        nonzero = s != 0
        safe = np.where(nonzero, s, 1.0)
        value = (np.exp(safe * b) - np.exp(safe * a)) / (safe * (b - a))
        return np.where(nonzero, value, 1.0)

    def mgf_func(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function: M_U(t) exp(σ²t²/2)."""
        parameters = cast(_Base, parameters)
        t = as_array(t)
        value = _uniform_transform(parameters, t) * np.exp(0.5 * (parameters.sigma * t) ** 2)
        return cast(NumericArray, value)

    def char_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        """Characteristic function: φ_U(t) exp(-σ²t²/2)."""
        parameters = cast(_Base, parameters)
        t = as_array(t)
        damping = np.exp(-0.5 * (parameters.sigma * t) ** 2)
        value = _uniform_transform(parameters, 1j * t) * damping
        return cast(ComplexArray, value)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Bhattacharjee distribution: (a + b)/2."""
        parameters = cast(_Base, parameters)
        return 0.5 * (parameters.a + parameters.b)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Bhattacharjee distribution: σ² + (b - a)²/12."""
        parameters = cast(_Base, parameters)
        return parameters.sigma**2 + (parameters.b - parameters.a) ** 2 / 12.0

    def skew_func(_1: Parametrization, _2: Any) -> float:
        """Skewness of Bhattacharjee distribution (always 0)."""
        return 0.0

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis; the excess is -(b - a)⁴ / (120 var²)."""
        parameters = cast(_Base, parameters)
        width = parameters.b - parameters.a
        excess_kurtosis = -(width**4) / (120.0 * var_func(parameters, None) ** 2)
        return kurtosis_value(3.0 + excess_kurtosis, excess)

    def _latent(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        return rng.uniform(parameters.a, parameters.b, size=n)

    def _conditional(
        parameters: Any, theta: NumericArray, rng: np.random.Generator
    ) -> NumericArray:
        parameters = cast(_Base, parameters)
        return rng.normal(theta, parameters.sigma)

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Bhattacharjee distribution"""
        return ContinuousSupport()

    Bhattacharjee = ParametricFamily(
        name=FamilyName.BHATTACHARJEE,
        distr_type=UnivariateContinuous,
        distr_characteristics={
            CharacteristicName.PDF: pdf,
            CharacteristicName.LOGPDF: logpdf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MGF: mgf_func,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.MEDIAN: mean_func,
            CharacteristicName.MODE: mean_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
        },
        sampling_strategy=CompoundSamplingStrategy(_latent, _conditional),
        support_by_parametrization=_support,
    )
    Bhattacharjee.__doc__ = BHATTACHARJEE_DOC

    @parametrization(family=Bhattacharjee)
    class _Base(Parametrization):
        """
        Standard parametrization of Bhattacharjee distribution.

        Parameters
        ----------
        a : float
            Lower end of the uniform component
        b : float
            Upper end of the uniform component
        sigma : float
            Standard deviation of the normal component
        """

        a: float = 0.0
        b: float = 1.0
        sigma: float = 1.0

        @constraint(description="a < b")
        def check_a_less_than_b(self) -> bool:
            return self.a < self.b

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    ParametricFamilyRegister.register(Bhattacharjee)
