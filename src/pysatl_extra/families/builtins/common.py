"""
Helpers shared by the builtin families.

Moment bookkeeping (raw moments to standardized ones) and the small NumPy
idioms used to evaluate piecewise characteristics without warnings.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import isfinite, nan
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_extra.distributions.fitters import check_probability

if TYPE_CHECKING:
    from typing import Any

    from pysatl_extra.types import BoolArray, NumericArray

__all__ = [
    "as_array",
    "check_probability",
    "floor_points",
    "lattice_points",
    "central_moments",
    "kurtosis_value",
]


def as_array(x: Any) -> NumericArray:
    """Convert points to a float64 array (0-d for scalars)."""
    return cast("NumericArray", np.asarray(x, dtype=np.float64))


def kurtosis_value(raw_kurtosis: float, excess: bool) -> float:
    """Raw kurtosis, or excess kurtosis when ``excess`` is True."""
    return raw_kurtosis - 3.0 if excess else raw_kurtosis


def central_moments(
    m1: float, m2: float, m3: float = nan, m4: float = nan
) -> tuple[float, float, float, float]:
    """
    Convert raw moments ``E[X^k]`` (k = 1..4) to mean, variance, skewness and
    raw kurtosis.
    """
    mean = m1 if isfinite(m1) else nan
    if not (isfinite(m1) and isfinite(m2)):
        return mean, nan, nan, nan

    var = m2 - m1**2
    if not isfinite(m3) or var <= 0:
        return mean, var, nan, nan
    mu3 = m3 - 3 * m1 * m2 + 2 * m1**3
    skewness = mu3 / var**1.5

    if not isfinite(m4):
        return mean, var, skewness, nan
    mu4 = m4 - 4 * m1 * m3 + 6 * m1**2 * m2 - 3 * m1**4
    return mean, var, skewness, mu4 / var**2


def lattice_points(
    x: Any, lower: int, upper: int | None = None
) -> tuple[NumericArray, BoolArray]:
    """
    Split points into integers of ``[lower, upper]`` and everything else.

    Returns the points with non-members replaced by ``lower`` (safe to feed
    to a mass function) and the membership mask.
    """
    k = as_array(x)
    with np.errstate(invalid="ignore"):
        inside = np.isfinite(k) & (k == np.floor(k)) & (k >= lower)
        if upper is not None:
            inside &= k <= upper
    return cast("NumericArray", np.where(inside, k, float(lower))), cast("BoolArray", inside)


def floor_points(x: Any) -> NumericArray:
    """``floor(x)`` as float64, keeping infinities (discrete CDF argument)."""
    return cast("NumericArray", np.floor(as_array(x)))
