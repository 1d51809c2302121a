"""
Flory-Schulz distribution family implementation.

Contains the Flory-Schulz family describing chain lengths in step-growth
polymerization.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import ceil, floor, log, log1p, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np

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
from pysatl_extra.families.sampling import TransformSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_flory_schulz_family() -> None:
    """
    Configure and register the Flory-Schulz distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.FLORY_SCHULZ):
        return

    FLORY_SCHULZ_DOC = """
    Flory-Schulz distribution.

    Parameters: a in (0, 1) (default 0.5).

    For k = 1, 2, ...:
        P(X = k) = a² k (1 - a)^{k-1}
        F(k) = 1 - (1 - a)^k (1 + ak)

    X - 1 is negative binomial with 2 successes and success probability a.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        a = cast(_Base, parameters).a

        k, inside = lattice_points(x, 1)
        value = 2.0 * log(a) + np.log(k) + (k - 1.0) * log1p(-a)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for Flory-Schulz distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - a: float (termination probability)
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities, zero outside the positive integers
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 1 - (1 - a)^k (1 + ak), k = floor(x)."""
        a = cast(_Base, parameters).a

        k = floor_points(x)
        inside = k >= 1
        safe = np.where(inside & np.isfinite(k), k, 1.0)
        value = -np.expm1(safe * log1p(-a) + np.log1p(a * safe))
        value = np.where(np.isposinf(k), 1.0, value)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 1)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Flory-Schulz distribution: 2/a - 1."""
        return 2.0 / cast(_Base, parameters).a - 1.0

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Flory-Schulz distribution: 2(1 - a)/a²."""
        a = cast(_Base, parameters).a
        return 2.0 * (1.0 - a) / a**2

    def skew_func(parameters: Parametrization, _: Any) -> float:
        """Skewness: (2 - a)/√(2(1 - a))."""
        a = cast(_Base, parameters).a
        return (2.0 - a) / sqrt(2.0 - 2.0 * a)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        """Raw or excess kurtosis; the excess is 3 + a²/(2(1 - a))."""
        a = cast(_Base, parameters).a
        return kurtosis_value(6.0 + a**2 / (2.0 - 2.0 * a), excess)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: the better of the integers around -1/ln(1 - a)."""
        peak = -1.0 / log1p(-cast(_Base, parameters).a)
        candidates = np.array([max(floor(peak), 1), max(ceil(peak), 1)], dtype=np.float64)
        return float(candidates[np.argmax(logpmf(parameters, candidates))])

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        a = cast(_Base, parameters).a
        return cast(NumericArray, 1.0 + rng.negative_binomial(2, a, size=n))

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Flory-Schulz distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1)

    FlorySchulz = ParametricFamily(
        name=FamilyName.FLORY_SCHULZ,
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
        sampling_strategy=TransformSamplingStrategy(_sample),
        support_by_parametrization=_support,
    )
    FlorySchulz.__doc__ = FLORY_SCHULZ_DOC

    @parametrization(family=FlorySchulz)
    class _Base(Parametrization):
        """
        Standard parametrization of Flory-Schulz distribution.

        Parameters
        ----------
        a : float
            Probability that a growing chain terminates at each step
        """

        a: float = 0.5

        @constraint(description="0 < a < 1")
        def check_a_range(self) -> bool:
            return 0 < self.a < 1

    ParametricFamilyRegister.register(FlorySchulz)
