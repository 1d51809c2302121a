"""
Zipf distribution family implementation.

Contains the finite Zipf family over ranks 1..N with exponent s. The
cumulative generalized harmonic numbers are tabulated once per (N, s).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache
from math import log
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_extra.distributions.fitters import integer_quantile
from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import (
    central_moments,
    floor_points,
    kurtosis_value,
    lattice_points,
)
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import (
    Parametrization,
    constraint,
    is_integer,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


@lru_cache(maxsize=64)
def harmonic_table(n: int, s: float) -> NumericArray:
    """
    Cumulative generalized harmonic numbers ``H_{k,s} = Σ_{i=1..k} i^{-s}``.

    Element ``k - 1`` holds ``H_{k,s}`` for ``k = 1..n``. The returned array
    is read-only because it is shared between calls.
    """
    ranks = np.arange(1, n + 1, dtype=np.float64)
    table = np.cumsum(ranks ** (-s))
    table.flags.writeable = False
    return cast(NumericArray, table)


def harmonic_number(n: int, s: float) -> float:
    """Generalized harmonic number ``H_{n,s}``."""
    return float(harmonic_table(n, s)[-1])


def configure_zipf_family() -> None:
    """
    Configure and register the Zipf distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ZIPF):
        return

    ZIPF_DOC = """
    Zipf distribution.

    Parameters: number of elements N (integer >= 1, default 1) and exponent
    s >= 0 (default 1).

    For k = 1, ..., N:
        P(X = k) = k^{-s} / H_{N,s}
        F(k) = H_{k,s} / H_{N,s}

    where H_{k,s} is the generalized harmonic number. The CDF equals 1 exactly
    from k = N on.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)
        n, s = int(parameters.n), parameters.s

        k, inside = lattice_points(x, 1, n)
        value = -s * np.log(k) - log(harmonic_number(n, s))
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for Zipf distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - n: int (number of elements)
            - s: float (exponent)
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities, zero outside 1..N
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function from the tabulated harmonic numbers."""
        parameters = cast(_Base, parameters)
        n, s = int(parameters.n), parameters.s

        table = harmonic_table(n, s)
        k = floor_points(x)
        inside = (k >= 1) & (k < n)
        index = np.where(inside, k, 1.0).astype(np.int64) - 1
        value = np.where(inside, table[index] / table[-1], 0.0)
        return cast(NumericArray, np.where(k >= n, 1.0, value))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        n = int(cast(_Base, parameters).n)
        return integer_quantile(lambda k: cdf(parameters, k), p, 1, n)

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        """Raw moments E[X^j] = H_{N,s-j} / H_{N,s}."""
        parameters = cast(_Base, parameters)
        n, s = int(parameters.n), parameters.s
        norm = harmonic_number(n, s)
        return central_moments(*(harmonic_number(n, s - j) / norm for j in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[0]

    def var_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Zipf distribution (always 1)."""
        return 1.0

    def entropy_func(parameters: Parametrization, _: Any) -> float:
        """Entropy: -Σ P(k) ln P(k) over k = 1..N."""
        parameters = cast(_Base, parameters)
        ks = np.arange(1, int(parameters.n) + 1, dtype=np.float64)
        log_p = logpmf(parameters, ks)
        return float(-np.sum(np.exp(log_p) * log_p))

    def _support(parameters: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Zipf distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1, max_k=int(cast(_Base, parameters).n))

    Zipf = ParametricFamily(
        name=FamilyName.ZIPF,
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
            CharacteristicName.ENTROPY: entropy_func,
        },
        support_by_parametrization=_support,
    )
    Zipf.__doc__ = ZIPF_DOC

    @parametrization(family=Zipf)
    class _Base(Parametrization):
        """
        Standard parametrization of Zipf distribution.

        Parameters
        ----------
        n : int
            Number of elements (N)
        s : float
            Exponent
        """

        n: int = 1
        s: float = 1.0

        @constraint(description="n is an integer >= 1")
        def check_n_positive_integer(self) -> bool:
            return is_integer(self.n) and self.n >= 1

        @constraint(description="s >= 0")
        def check_s_non_negative(self) -> bool:
            return self.s >= 0

    ParametricFamilyRegister.register(Zipf)
