"""
Logarithmic (log-series) distribution family implementation.

Contains the logarithmic series family with parameter p, sampled with Kemp's
algorithm.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import log, log1p
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_extra.distributions.fitters import cdf_by_summation, integer_quantile
from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import central_moments, kurtosis_value, lattice_points
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


def configure_logarithmic_family() -> None:
    """
    Configure and register the logarithmic distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LOGARITHMIC):
        return

    LOGARITHMIC_DOC = """
    Logarithmic (log-series) distribution.

    Parameters: p in (0, 1) (default 0.5).

    For k = 1, 2, ...:
        P(X = k) = -p^k / (k ln(1 - p))

    The CDF is the partial sum of the mass function.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        p = cast(_Base, parameters).p

        k, inside = lattice_points(x, 1)
        value = k * log(p) - np.log(k) - log(-log1p(-p))
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for logarithmic distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - p: float (shape parameter)
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities, zero outside the positive integers
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cdf_by_summation(lambda k: pmf(parameters, k), x, 1)

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 1)

    def _raw_moments(parameters: _Base) -> tuple[float, float, float, float]:
        """E[X^j] = -S_j / ln(1 - p) with S_j = Σ k^{j-1} p^k."""
        p = parameters.p
        q = 1.0 - p
        scale = -1.0 / log1p(-p)
        return (
            scale * p / q,
            scale * p / q**2,
            scale * p * (1.0 + p) / q**3,
            scale * p * (1.0 + 4.0 * p + p**2) / q**4,
        )

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        return central_moments(*_raw_moments(cast(_Base, parameters)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: -p / ((1 - p) ln(1 - p))."""
        return _raw_moments(cast(_Base, parameters))[0]

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: -p (p + ln(1 - p)) / ((1 - p)² ln²(1 - p))."""
        p = cast(_Base, parameters).p
        log_q = log1p(-p)
        return -p * (p + log_q) / ((1.0 - p) ** 2 * log_q**2)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of logarithmic distribution (always 1)."""
        return 1.0

    def _sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        """Kemp's algorithm (LK) for the logarithmic series distribution."""
        p = cast(_Base, parameters).p
        h = log1p(-p)
        v = rng.random(n)
        u = rng.random(n)
        q = -np.expm1(u * h)
        with np.errstate(divide="ignore", invalid="ignore"):
            tail = np.floor(1.0 + np.log(v) / np.log(q))
        head = np.where(v > q, 1.0, 2.0)
        out = np.where(v < q**2, tail, head)
        return cast(NumericArray, np.where(v >= p, 1.0, out))

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of logarithmic distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1)

    Logarithmic = ParametricFamily(
        name=FamilyName.LOGARITHMIC,
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
    Logarithmic.__doc__ = LOGARITHMIC_DOC

    @parametrization(family=Logarithmic)
    class _Base(Parametrization):
        """
        Standard parametrization of logarithmic distribution.

        Parameters
        ----------
        p : float
            Shape parameter
        """

        p: float = 0.5

        @constraint(description="0 < p < 1")
        def check_p_range(self) -> bool:
            return 0 < self.p < 1

    ParametricFamilyRegister.register(Logarithmic)
