"""
ARGUS distribution family implementation.

Contains the ARGUS family used in particle physics to model invariant-mass
backgrounds near a kinematic cut-off.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import pi, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import integrate, special as sp

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


def _psi(chi: Any) -> Any:
    """Ψ(χ) = Φ(χ) - χφ(χ) - 1/2, evaluated as P(3/2, χ²/2)/2."""
    return 0.5 * sp.gammainc(1.5, 0.5 * np.square(chi))


def configure_argus_family() -> None:
    """
    Configure and register the ARGUS distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ARGUS):
        return

    ARGUS_DOC = """
    ARGUS distribution.

    Parameters: curvature χ > 0 and cut-off c > 0 (both default to 1).

    Probability density function, for 0 < x < c:
        f(x) = χ³ / (√(2π) Ψ(χ)) * x/c² * √(1 - x²/c²) * exp(-χ² (1 - x²/c²) / 2)

    where Ψ(χ) = Φ(χ) - χφ(χ) - 1/2.

    The quantile has no closed form and is found by root finding on [0, c].
    """

    def logpdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        chi, c = parameters.chi, parameters.c

        x = as_array(x)
        inside = (x > 0) & (x < c)
        y = 1.0 - np.square(np.where(inside, x, 0.5 * c) / c)
        value = (
            3.0 * np.log(chi)
            - 0.5 * np.log(2.0 * pi)
            - np.log(_psi(chi))
            + np.log(np.where(inside, x, 0.5 * c))
            - 2.0 * np.log(c)
            + 0.5 * np.log(y)
            - 0.5 * chi**2 * y
        )
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability density function for ARGUS distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - chi: float (curvature)
            - c: float (cut-off)
        x : NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        NumericArray
            Probability density values, zero outside (0, c)
        """
        return cast(NumericArray, np.exp(logpdf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Cumulative distribution function: F(x) = 1 - Ψ(χ√(1 - x²/c²)) / Ψ(χ).
        """
        parameters = cast(_Base, parameters)
        chi, c = parameters.chi, parameters.c

        x = as_array(x)
        clipped = np.clip(x, 0.0, c)
        y = 1.0 - np.square(clipped / c)
        return cast(NumericArray, 1.0 - _psi(chi * np.sqrt(y)) / _psi(chi))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Quantile function by root finding of ``cdf(x) - p`` on ``[0, c]``.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        NumericalComputationError
            If root finding fails.
        """
        parameters = cast(_Base, parameters)
        c = parameters.c
        return root_quantile(lambda t: cdf(parameters, t), p, (0.0, c), (0.0, c))

    def _raw_moment(parameters: _Base, k: int) -> float:
        value, _ = integrate.quad(
            lambda t: t**k * float(pdf(parameters, t)), 0.0, parameters.c, limit=200
        )
        return float(value)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: c √(π/8) χ e^{-χ²/4} I₁(χ²/4) / Ψ(χ)."""
        parameters = cast(_Base, parameters)
        chi, c = parameters.chi, parameters.c
        return float(c * sqrt(pi / 8.0) * chi * sp.ive(1, chi**2 / 4.0) / _psi(chi))

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: c² (1 - 3/χ² + χφ(χ)/Ψ(χ)) - mean²."""
        parameters = cast(_Base, parameters)
        chi, c = parameters.chi, parameters.c
        phi = np.exp(-0.5 * chi**2) / sqrt(2.0 * pi)
        second = c**2 * (1.0 - 3.0 / chi**2 + chi * phi / _psi(chi))
        return float(second - mean_func(parameters, None) ** 2)

    def _standardized(parameters: Parametrization) -> tuple[float, float, float, float]:
        parameters = cast(_Base, parameters)
        m1 = mean_func(parameters, None)
        m2 = var_func(parameters, None) + m1**2
        return central_moments(m1, m2, _raw_moment(parameters, 3), _raw_moment(parameters, 4))

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness from numerically integrated third moment."""
        return _standardized(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis from numerically integrated fourth moment."""
        return kurtosis_value(_standardized(parameters)[3], excess)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: c/(√2 χ) √(χ² - 2 + √(χ⁴ + 4))."""
        parameters = cast(_Base, parameters)
        chi, c = parameters.chi, parameters.c
        return c / (sqrt(2.0) * chi) * sqrt(chi**2 - 2.0 + sqrt(chi**4 + 4.0))

    def _support(parameters: Parametrization) -> ContinuousSupport:
        """Support of ARGUS distribution"""
        parameters = cast(_Base, parameters)
        return ContinuousSupport(left=0.0, right=parameters.c)

    Argus = ParametricFamily(
        name=FamilyName.ARGUS,
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
    Argus.__doc__ = ARGUS_DOC

    @parametrization(family=Argus)
    class _Base(Parametrization):
        """
        Standard parametrization of ARGUS distribution.

        Parameters
        ----------
        chi : float
            Curvature parameter (χ)
        c : float
            Cut-off parameter
        """

        chi: float = 1.0
        c: float = 1.0

        @constraint(description="chi > 0")
        def check_chi_positive(self) -> bool:
            return self.chi > 0

        @constraint(description="c > 0")
        def check_c_positive(self) -> bool:
            return self.c > 0

    ParametricFamilyRegister.register(Argus)
