"""
Zeta distribution family implementation.

Contains the zeta (Zipf on the infinite lattice) family with exponent s.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import log, nan
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

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


def configure_zeta_family() -> None:
    """
    Configure and register the zeta distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ZETA):
        return

    ZETA_DOC = """
    Zeta distribution.

    Parameters: exponent s > 1 (default 2).

    For k = 1, 2, ...:
        P(X = k) = k^{-s} / ζ(s)
        F(k) = 1 - ζ(s, k + 1) / ζ(s)

    where ζ(s, q) is the Hurwitz zeta function. The raw moment of order j
    exists for s > j + 1 and equals ζ(s - j) / ζ(s); missing moments are NaN.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        s = cast(_Base, parameters).s

        k, inside = lattice_points(x, 1)
        value = -s * np.log(k) - log(sp.zeta(s))
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for zeta distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with field:
            - s: float (exponent)
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            Probabilities, zero outside the positive integers
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        s = cast(_Base, parameters).s

        k = floor_points(x)
        inside = k >= 1
        safe = np.where(inside & np.isfinite(k), k, 1.0)
        value = 1.0 - sp.zeta(s, safe + 1.0) / sp.zeta(s)
        value = np.where(np.isposinf(k), 1.0, value)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 1)

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        s = cast(_Base, parameters).s
        norm = float(sp.zeta(s))
        raw = [float(sp.zeta(s - j)) / norm if s > j + 1 else nan for j in range(1, 5)]
        return central_moments(*raw)

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: ζ(s - 1)/ζ(s) for s > 2."""
        return _moments(parameters)[0]

    def var_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of zeta distribution (always 1)."""
        return 1.0

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of zeta distribution"""
        return IntegerLatticeDiscreteSupport(min_k=1)

    Zeta = ParametricFamily(
        name=FamilyName.ZETA,
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
        support_by_parametrization=_support,
    )
    Zeta.__doc__ = ZETA_DOC

    @parametrization(family=Zeta)
    class _Base(Parametrization):
        """
        Standard parametrization of zeta distribution.

        Parameters
        ----------
        s : float
            Exponent of the power law
        """

        s: float = 2.0

        @constraint(description="s > 1")
        def check_s_greater_than_one(self) -> bool:
            return self.s > 1

    ParametricFamilyRegister.register(Zeta)
