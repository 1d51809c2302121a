"""
Gauss-Kuzmin distribution family implementation.

Contains the parameter-free Gauss-Kuzmin law of the partial quotients of the
continued fraction of a uniform random number.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf, log, nan
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import check_probability, floor_points, lattice_points
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import Parametrization, parametrization
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any

_LOG2 = log(2.0)


def configure_gauss_kuzmin_family() -> None:
    """
    Configure and register the Gauss-Kuzmin distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.GAUSS_KUZMIN):
        return

    GAUSS_KUZMIN_DOC = """
    Gauss-Kuzmin distribution.

    No parameters.

    For k = 1, 2, ...:
        P(X = k) = -log₂(1 - 1/(k + 1)²)
        F(k) = 1 - log₂((k + 2)/(k + 1))

    Mean and variance are infinite.
    """

    def logpmf(_: Parametrization, x: NumericArray) -> NumericArray:
        k, inside = lattice_points(x, 1)
        value = np.log(-np.log1p(-1.0 / (k + 1.0) ** 2)) - log(_LOG2)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(_: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 1 - log₂(1 + 1/(k + 1)), k = floor(x)."""
        k = floor_points(x)
        inside = k >= 1
        safe = np.where(inside, k, 1.0)
        value = 1.0 - np.log1p(1.0 / (safe + 1.0)) / _LOG2
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        """
        Generalized inverse of the CDF.

        The continuous solution t = (2 - 2^{1-p}) / (2^{1-p} - 1) of F(t) = p
        is rounded up and then corrected by one step in either direction
        against the exact CDF.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        probs = check_probability(p)
        interior = probs < 1.0
        power = np.exp2(1.0 - np.where(interior, probs, 0.0))
        k = np.maximum(np.ceil((2.0 - power) / (power - 1.0)), 1.0)

        below = (k > 1.0) & (cdf(parameters, k - 1.0) >= probs)
        k = np.where(below, k - 1.0, k)
        short = cdf(parameters, k) < probs
        k = np.where(short & interior, k + 1.0, k)
        return cast(NumericArray, np.where(interior, k, inf))

    def mean_func(_1: Parametrization, _2: Any) -> float:
        """Mean of Gauss-Kuzmin distribution (infinite)."""
        return inf

    def var_func(_1: Parametrization, _2: Any) -> float:
        """Variance of Gauss-Kuzmin distribution (infinite)."""
        return inf

    def skew_func(_1: Parametrization, _2: Any) -> float:
        return nan

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        return nan

    def median_func(_1: Parametrization, _2: Any) -> float:
        """Median of Gauss-Kuzmin distribution (2)."""
        return 2.0

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Gauss-Kuzmin distribution (1)."""
        return 1.0

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Gauss-Kuzmin distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1)

    GaussKuzmin = ParametricFamily(
        name=FamilyName.GAUSS_KUZMIN,
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
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
        },
        support_by_parametrization=_support,
    )
    GaussKuzmin.__doc__ = GAUSS_KUZMIN_DOC

    @parametrization(family=GaussKuzmin)
    class _Base(Parametrization):
        """Gauss-Kuzmin distribution has no parameters."""

    ParametricFamilyRegister.register(GaussKuzmin)
