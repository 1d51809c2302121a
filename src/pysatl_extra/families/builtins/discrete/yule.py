"""
Yule-Simon distribution family implementation.

Contains the Yule-Simon family with shape ρ, a geometric law mixed over an
exponentially distributed log-odds.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import log, nan, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

from pysatl_extra.distributions.fitters import integer_quantile
from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import floor_points, kurtosis_value, lattice_points
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
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_yule_family() -> None:
    """
    Configure and register the Yule-Simon distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.YULE):
        return

    YULE_DOC = """
    Yule-Simon distribution.

    Parameters: shape ρ > 0 (default 1).

    For k = 1, 2, ...:
        P(X = k) = ρ B(k, ρ + 1)
        F(k) = 1 - k B(k, ρ + 1)

    Mean needs ρ > 1, variance ρ > 2, skewness ρ > 3 and kurtosis ρ > 4;
    otherwise they are NaN.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        rho = cast(_Base, parameters).rho

        k, inside = lattice_points(x, 1)
        value = log(rho) + sp.betaln(k, rho + 1.0)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for Yule-Simon distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - rho: float (shape parameter)
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities, zero outside the positive integers
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 1 - k B(k, ρ + 1), k = floor(x)."""
        rho = cast(_Base, parameters).rho

        k = floor_points(x)
        inside = k >= 1
        safe = np.where(inside & np.isfinite(k), k, 1.0)
        value = -np.expm1(np.log(safe) + sp.betaln(safe, rho + 1.0))
        value = np.where(np.isposinf(k), 1.0, value)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 1)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: ρ/(ρ - 1) for ρ > 1."""
        rho = cast(_Base, parameters).rho
        return rho / (rho - 1.0) if rho > 1 else nan

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: ρ² / ((ρ - 1)²(ρ - 2)) for ρ > 2."""
        rho = cast(_Base, parameters).rho
        return rho**2 / ((rho - 1.0) ** 2 * (rho - 2.0)) if rho > 2 else nan

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness: (ρ + 1)² √(ρ - 2) / ((ρ - 3)ρ) for ρ > 3."""
        rho = cast(_Base, parameters).rho
        if rho <= 3:
            return nan
        return (rho + 1.0) ** 2 * sqrt(rho - 2.0) / ((rho - 3.0) * rho)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """
        Raw or excess kurtosis for ρ > 4.

        The excess is ρ + 3 + (11ρ³ - 49ρ - 22) / ((ρ - 4)(ρ - 3)ρ).
        """
        rho = cast(_Base, parameters).rho
        if rho <= 4:
            return nan
        tail = (11.0 * rho**3 - 49.0 * rho - 22.0) / ((rho - 4.0) * (rho - 3.0) * rho)
        return kurtosis_value(3.0 + rho + 3.0 + tail, excess)

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Yule-Simon distribution (always 1)."""
        return 1.0

    def _latent(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        rho = cast(_Base, parameters).rho
        return rng.exponential(1.0 / rho, size=n)

    def _conditional(
        parameters: Any, log_odds: NumericArray, rng: np.random.Generator
    ) -> NumericArray:
        # geometric on {1, 2, ...} with success probability exp(-W), by inversion
        u = rng.random(log_odds.shape)
        with np.errstate(divide="ignore"):
            failures = np.floor(np.log(u) / np.log(-np.expm1(-log_odds)))
        return cast(NumericArray, 1.0 + failures)

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Yule-Simon distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1)

    Yule = ParametricFamily(
        name=FamilyName.YULE,
        distr_type=UnivariateDiscrete,
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: mode_func,
        },
        sampling_strategy=CompoundSamplingStrategy(_latent, _conditional),
        support_by_parametrization=_support,
    )
    Yule.__doc__ = YULE_DOC

    @parametrization(family=Yule)
    class _Base(Parametrization):
        """
        Standard parametrization of Yule-Simon distribution.

        Parameters
        ----------
        rho : float
            Shape parameter (ρ)
        """

        rho: float = 1.0

        @constraint(description="rho > 0")
        def check_rho_positive(self) -> bool:
            return self.rho > 0

    ParametricFamilyRegister.register(Yule)
