"""
Rademacher distribution family implementation.

Contains the parameter-free symmetric two-point law on {-1, +1}.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import log, nan
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_extra.distributions.support import ExplicitTableDiscreteSupport
from pysatl_extra.families.builtins.common import as_array, check_probability, kurtosis_value
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import Parametrization, parametrization
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.families.sampling import TransformSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    ComplexArray,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any


def configure_rademacher_family() -> None:
    """
    Configure and register the Rademacher distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.RADEMACHER):
        return

    RADEMACHER_DOC = """
    Rademacher distribution.

    No parameters. P(X = -1) = P(X = 1) = 1/2.

    Mean 0, variance 1, raw kurtosis 1; the mode is undefined (NaN) and the
    median is taken as 0.
    """

    def pmf(_: Parametrization, x: NumericArray) -> NumericArray:
        """
        Probability mass function for Rademacher distribution.

        Parameters
        ----------
        x : NumericArray
            Points at which to evaluate the probability mass function

        Returns
        -------
        NumericArray
            1/2 at -1 and +1, zero elsewhere
        """
        x = as_array(x)
        return cast(NumericArray, np.where((x == -1.0) | (x == 1.0), 0.5, 0.0))

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        with np.errstate(divide="ignore"):
            return cast(NumericArray, np.log(pmf(parameters, x)))

    def cdf(_: Parametrization, x: NumericArray) -> NumericArray:
        """Cumulative distribution function: 0 below -1, 1/2 on [-1, 1), 1 from 1."""
        x = as_array(x)
        return cast(NumericArray, np.where(x >= 1.0, 1.0, np.where(x >= -1.0, 0.5, 0.0)))

    def ppf(_: Parametrization, p: NumericArray) -> NumericArray:
        """
        Percent point function: -1 for p <= 1/2, +1 otherwise.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p = check_probability(p)
        return cast(NumericArray, np.where(p <= 0.5, -1.0, 1.0))

    def mean_func(_1: Parametrization, _2: Any) -> float:
        return 0.0

    def var_func(_1: Parametrization, _2: Any) -> float:
        return 1.0

    def skew_func(_1: Parametrization, _2: Any) -> float:
        return 0.0

    def kurt_func(_1: Parametrization, _2: Any, excess: bool = False) -> float:
        return kurtosis_value(1.0, excess)

    def median_func(_1: Parametrization, _2: Any) -> float:
        return 0.0

    def mode_func(_1: Parametrization, _2: Any) -> float:
        """Mode of Rademacher distribution (undefined, NaN)."""
        return nan

    def entropy_func(_1: Parametrization, _2: Any) -> float:
        """Entropy of Rademacher distribution: ln 2."""
        return log(2.0)

    def mgf_func(_: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function: cosh(t)."""
        return cast(NumericArray, np.cosh(as_array(t)))

    def cf_func(_: Parametrization, t: NumericArray) -> ComplexArray:
        """Characteristic function: cos(t)."""
        return cast(ComplexArray, np.cos(as_array(t)).astype(np.complex128))

    def _sample(_: Any, rng: np.random.Generator, n: int) -> NumericArray:
        return cast(NumericArray, 2.0 * rng.integers(0, 2, size=n) - 1.0)

    def _support(_: Parametrization) -> ExplicitTableDiscreteSupport:
        """Support of Rademacher distribution"""
        return ExplicitTableDiscreteSupport([-1, 1], assume_sorted=True)

    Rademacher = ParametricFamily(
        name=FamilyName.RADEMACHER,
        distr_type=UnivariateDiscrete,
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MGF: mgf_func,
            CharacteristicName.CF: cf_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.ENTROPY: entropy_func,
        },
        sampling_strategy=TransformSamplingStrategy(_sample),
        support_by_parametrization=_support,
    )
    Rademacher.__doc__ = RADEMACHER_DOC

    @parametrization(family=Rademacher)
    class _Base(Parametrization):
        """Rademacher distribution has no parameters."""

    ParametricFamilyRegister.register(Rademacher)
