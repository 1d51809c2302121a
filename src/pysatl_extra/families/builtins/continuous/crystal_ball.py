"""
Crystal Ball distribution family implementation.

Contains the Crystal Ball family: a Gaussian core glued to a power-law low
tail, used in high-energy physics to model lossy processes.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import erf, exp, inf, log, nan, pi, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import integrate, special as sp

from pysatl_extra.distributions.fitters import check_probability
from pysatl_extra.distributions.support import ContinuousSupport
from pysatl_extra.families.builtins.common import as_array, central_moments, kurtosis_value
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.families.sampling import RejectionSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

_SQRT_2PI = sqrt(2.0 * pi)


class _Constants:
    """Normalization constants A, B, C, D and N of the Crystal Ball density."""

    __slots__ = ("log_a", "b", "c", "d", "log_n")

    def __init__(self, alpha: float, m: float, scale: float) -> None:
        self.log_a = m * log(m / alpha) - 0.5 * alpha**2
        self.b = m / alpha - alpha
        self.c = (m / alpha) / (m - 1.0) * exp(-0.5 * alpha**2)
        self.d = sqrt(pi / 2.0) * (1.0 + erf(alpha / sqrt(2.0)))
        self.log_n = -log(scale * (self.c + self.d))


def configure_crystal_ball_family() -> None:
    """
    Configure and register the Crystal Ball distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CRYSTAL_BALL):
        return

    CRYSTAL_BALL_DOC = """
    Crystal Ball distribution.

    Parameters: transition point α > 0, tail exponent m > 1, location
    (default 0) and scale σ > 0 (default 1).

    With z = (x - loc)/σ:
        f(x) = N exp(-z²/2)          for z > -α
        f(x) = N A (B - z)^{-m}      for z ≤ -α

    where A = (m/α)^m e^{-α²/2}, B = m/α - α, C = (m/α)/(m - 1) e^{-α²/2},
    D = √(π/2)(1 + erf(α/√2)) and N = 1/(σ(C + D)).

    Mean needs m > 2 and variance m > 3; otherwise they are NaN. Sampling is
    by rejection from a normal-plus-power-law envelope.
    """

    def _constants(parameters: _Base) -> _Constants:
        return _Constants(parameters.alpha, parameters.m, parameters.scale)

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        alpha, m = parameters.alpha, parameters.m
        k = _constants(parameters)

        z = (as_array(x) - parameters.loc) / parameters.scale
        core = z > -alpha
        tail_base = np.where(core, k.b + alpha, k.b - z)
        with np.errstate(invalid="ignore"):
            value = np.where(core, -0.5 * z**2, k.log_a - m * np.log(tail_base))
        value = np.where(np.isinf(z), -np.inf, value)
        return cast(NumericArray, k.log_n + value)

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for Crystal Ball distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - alpha: float (transition point)
            - m: float (tail exponent)
            - loc: float (location)
            - scale: float (scale)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values at points x
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function (piecewise integral of the density).

        Tail: NσC ((B - z)α/m)^{1-m}; core: Nσ[C + √(π/2)(erf(z/√2) + erf(α/√2))].
        """
        parameters = cast(_Base, parameters)
        alpha, m, scale = parameters.alpha, parameters.m, parameters.scale
        k = _constants(parameters)
        weight = exp(k.log_n) * scale

        z = (as_array(x) - parameters.loc) / scale
        core = z > -alpha
        tail_base = np.where(core, k.b + alpha, k.b - z)
        with np.errstate(over="ignore", divide="ignore"):
            tail = weight * k.c * (tail_base * alpha / m) ** (1.0 - m)
        body = weight * (k.c + sqrt(pi / 2.0) * (sp.erf(z / sqrt(2.0)) + erf(alpha / sqrt(2.0))))
        return cast(NumericArray, np.clip(np.where(core, body, tail), 0.0, 1.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function, inverting each piece of the CDF in closed form.

        Tail (p ≤ NσC): z = B - (m/α)(p/(NσC))^{-1/(m-1)}.
        Core: 1 - p = Nσ√(2π)Φ(-z), so z = -Φ⁻¹((1 - p)/(Nσ√(2π))).

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        parameters = cast(_Base, parameters)
        alpha, m, scale = parameters.alpha, parameters.m, parameters.scale
        k = _constants(parameters)
        weight = exp(k.log_n) * scale
        tail_mass = weight * k.c

        probs = check_probability(p)
        in_tail = probs <= tail_mass
        with np.errstate(divide="ignore", over="ignore"):
            tail = k.b - (m / alpha) * (probs / tail_mass) ** (-1.0 / (m - 1.0))
            core = -sp.ndtri((1.0 - probs) / (weight * _SQRT_2PI))
        z = np.where(in_tail, tail, core)
        z = np.where(probs == 0.0, -inf, np.where(probs == 1.0, inf, z))
        return cast(NumericArray, parameters.loc + scale * z)

    def _raw_moment(parameters: _Base, order: int) -> float:
        """E[X^order] by quadrature; NaN when the tail makes it diverge."""
        if parameters.m <= order + 1:
            return nan
        split = parameters.loc - parameters.alpha * parameters.scale

        def integrand(t: float) -> float:
            return t**order * float(pdf(parameters, t))

        left, _ = integrate.quad(integrand, -inf, split, limit=200)
        right, _ = integrate.quad(integrand, split, inf, limit=200)
        return float(left + right)

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        return central_moments(*(_raw_moment(parameters, r) for r in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Crystal Ball distribution (NaN for m <= 2)."""
        return _raw_moment(cast(_Base, parameters), 1)

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Crystal Ball distribution (NaN for m <= 3)."""
        parameters = cast(_Base, parameters)
        m1 = _raw_moment(parameters, 1)
        return central_moments(m1, _raw_moment(parameters, 2))[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness of Crystal Ball distribution (NaN for m <= 4)."""
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis of Crystal Ball distribution (NaN for m <= 5)."""
        return kurtosis_value(_moments(parameters)[3], excess)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode of Crystal Ball distribution: loc."""
        return cast(_Base, parameters).loc

    def _propose(parameters: Any, rng: np.random.Generator) -> float:
        """
        Draw from the envelope exp(-z²/2) + A(B - z)^{-m} 1{z ≤ -α}, a mixture
        of a standard normal (mass √(2π)) and a power-law tail (mass C).
        """
        parameters = cast(_Base, parameters)
        alpha, m = parameters.alpha, parameters.m
        k = _constants(parameters)
        if rng.random() * (_SQRT_2PI + k.c) < _SQRT_2PI:
            z = rng.standard_normal()
        else:
            z = k.b - (m / alpha) * rng.random() ** (-1.0 / (m - 1.0))
        return parameters.loc + parameters.scale * float(z)

    def _log_acceptance(parameters: Any, x: float) -> float:
        parameters = cast(_Base, parameters)
        alpha, m = parameters.alpha, parameters.m
        z = (x - parameters.loc) / parameters.scale
        if z > -alpha:
            return 0.0
        k = _constants(parameters)
        log_tail = k.log_a - m * log(k.b - z)
        return float(log_tail - np.logaddexp(-0.5 * z**2, log_tail))

    def _support(_: Parametrization) -> ContinuousSupport:
        """Support of Crystal Ball distribution"""
        return ContinuousSupport()

    CrystalBall = ParametricFamily(
        name=FamilyName.CRYSTAL_BALL,
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
        sampling_strategy=RejectionSamplingStrategy(_propose, _log_acceptance),
        support_by_parametrization=_support,
    )
    CrystalBall.__doc__ = CRYSTAL_BALL_DOC

    @parametrization(family=CrystalBall)
    class _Base(Parametrization):
        """
        Standard parametrization of Crystal Ball distribution.

        Parameters
        ----------
        alpha : float
            Transition point between core and tail, in units of scale
        m : float
            Power-law exponent of the tail
        loc : float
            Location of the Gaussian core
        scale : float
            Width of the Gaussian core
        """

        alpha: float
        m: float
        loc: float = 0.0
        scale: float = 1.0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="m > 1")
        def check_m_greater_than_one(self) -> bool:
            return self.m > 1

        @constraint(description="scale > 0")
        def check_scale_positive(self) -> bool:
            return self.scale > 0

    ParametricFamilyRegister.register(CrystalBall)
