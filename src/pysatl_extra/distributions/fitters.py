"""
Numerical Fitters
=================

Generic numerical algorithms shared by the builtin families and the
characteristic graph:

- :func:`root_quantile` — quantile by bracketed ``brentq`` on ``cdf(x) - p``;
- :func:`integer_quantile` — generalized inverse of a discrete CDF by
  geometric bracket doubling and bisection on the integer lattice;
- :func:`cdf_by_summation` — discrete CDF as partial sums of the mass
  function;

and the ``fit_*`` factories used as edges of the characteristic graph.

Notes
-----
Every function here is vectorized over its point argument. Scalars come back
as 0-d arrays, as from the analytical NumPy characteristics.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections.abc import Callable
from math import inf, isfinite
from typing import TYPE_CHECKING, Any, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from pysatl_extra.distributions.computation import FittedComputationMethod
from pysatl_extra.distributions.support import (
    ExplicitTableDiscreteSupport,
    IntegerLatticeDiscreteSupport,
)
from pysatl_extra.exceptions import NumericalComputationError
from pysatl_extra.types import CharacteristicName

if TYPE_CHECKING:
    from pysatl_extra.distributions.distribution import Distribution
    from pysatl_extra.distributions.strategies import Method
    from pysatl_extra.types import GenericCharacteristicName, NumericArray

    type ArrayFunc = Callable[[Any], Any]

logger = logging.getLogger(__name__)

DEFAULT_X_TOL = 1e-12
DEFAULT_MAX_ITER = 200
DEFAULT_MAX_EXPAND = 200
INTEGER_SEARCH_INITIAL_STEP = 16
INTEGER_SEARCH_MAX_DOUBLINGS = 128
INTEGER_SEARCH_TABLE_LIMIT = 1_000_000
# A CDF that stops growing this close to 1 has saturated in floating point
INTEGER_SEARCH_SATURATION = 1e-9
# Largest number of mass terms a partial-sum CDF may build
SUMMATION_MAX_TERMS = 1 << 24


def check_probability(p: Any) -> NumericArray:
    """
    Validate probabilities for a quantile call.

    Raises
    ------
    ValueError
        If any value lies outside ``[0, 1]`` or is NaN.
    """
    probs = np.asarray(p, dtype=np.float64)
    if np.any(np.isnan(probs)) or np.any((probs < 0.0) | (probs > 1.0)):
        raise ValueError("Probability must be in [0, 1]")
    return cast("NumericArray", probs)


def root_quantile(
    cdf: ArrayFunc,
    p: Any,
    bracket: tuple[float, float],
    edges: tuple[float, float],
    *,
    x_tol: float = DEFAULT_X_TOL,
    max_iter: int = DEFAULT_MAX_ITER,
) -> NumericArray:
    """
    Quantile by root finding of ``cdf(x) - p`` inside a fixed bracket.

    Parameters
    ----------
    cdf : Callable
        Continuous, non-decreasing CDF.
    p : array_like
        Probabilities in ``[0, 1]``.
    bracket : tuple[float, float]
        Finite search interval ``[lo, hi]``.
    edges : tuple[float, float]
        Values returned for ``p == 0`` and ``p == 1`` (support infimum and
        supremum).
    x_tol, max_iter
        Passed to :func:`scipy.optimize.brentq`.

    Raises
    ------
    NumericalComputationError
        If the bracket does not contain the root or ``brentq`` fails to
        converge.
    """
    probs = check_probability(p)
    lo, hi = bracket
    flat = probs.ravel()
    out = np.empty(flat.shape, dtype=np.float64)

    def _cdf(x: float) -> float:
        return float(cdf(x))

    f_lo = _cdf(lo)
    f_hi = _cdf(hi)
    for i, q in enumerate(flat):
        if q == 0.0:
            out[i] = edges[0]
            continue
        if q == 1.0:
            out[i] = edges[1]
            continue
        if f_lo > q or f_hi < q:
            raise NumericalComputationError(
                f"Quantile bracket [{lo}, {hi}] does not contain the root for p={q} "
                f"(cdf values {f_lo}, {f_hi})."
            )
        try:
            out[i] = _sp_optimize.brentq(
                lambda x, q=q: _cdf(x) - q, lo, hi, xtol=x_tol, maxiter=max_iter
            )
        except RuntimeError as exc:
            raise NumericalComputationError(f"Root finding failed for p={q}: {exc}") from exc

    return cast("NumericArray", out.reshape(probs.shape))


def _bracket_upper(
    cdf: ArrayFunc,
    q: float,
    lower: int,
    upper: int | None,
    initial_step: int,
    max_doublings: int,
) -> tuple[int, float]:
    """
    Grow ``hi`` geometrically from ``lower`` until ``cdf(hi) >= q``.

    Returns ``hi`` and ``cdf(hi)``. When the CDF stops increasing between two
    doublings within ``INTEGER_SEARCH_SATURATION`` of 1, it has saturated in
    floating point and the saturated level is returned instead.
    """
    step = initial_step
    hi = lower + step if upper is None else min(lower + step, upper)
    previous = 0.0
    for _ in range(max_doublings):
        level = float(cdf(hi))
        if level >= q:
            return hi, level
        if upper is not None and hi >= upper:
            return upper, level
        if 0.0 < level <= previous:
            if 1.0 - level > INTEGER_SEARCH_SATURATION:
                raise NumericalComputationError(
                    f"CDF stopped increasing at {level} below p={q}."
                )
            logger.debug("CDF saturated at %r below p=%r by k=%d", level, q, hi)
            return hi, level
        previous = level
        step *= 2
        hi = lower + step if upper is None else min(lower + step, upper)
        logger.debug("Integer quantile bracket grown to %d for p=%r", hi, q)
    raise NumericalComputationError(
        f"Could not bracket the quantile for p={q} after {max_doublings} doublings."
    )


def integer_quantile(
    cdf: ArrayFunc,
    p: Any,
    lower: int,
    upper: int | None = None,
    *,
    initial_step: int = INTEGER_SEARCH_INITIAL_STEP,
    max_doublings: int = INTEGER_SEARCH_MAX_DOUBLINGS,
    table_limit: int = INTEGER_SEARCH_TABLE_LIMIT,
) -> NumericArray:
    """
    Generalized inverse of a CDF on the integers ``lower, lower + 1, ...``.

    Returns the smallest integer ``k`` with ``cdf(k) >= p``. The upper bracket
    starts at ``lower + initial_step`` and doubles until it covers the largest
    requested probability; the bracket is then bisected. Small brackets are
    bisected over a tabulated CDF with :func:`numpy.searchsorted`, large ones
    point by point. Probabilities above the level at which a summed CDF
    saturates map to the first point of that level.

    Parameters
    ----------
    cdf : Callable
        Vectorized discrete CDF.
    p : array_like
        Probabilities in ``[0, 1]``.
    lower : int
        Smallest support point.
    upper : int or None
        Largest support point (``None`` for unbounded support).

    Returns
    -------
    NumericArray
        Float array of integer-valued quantiles; ``p == 0`` maps to ``lower``
        and ``p == 1`` to ``upper`` (``inf`` when unbounded).

    Raises
    ------
    NumericalComputationError
        If the bracket cannot be grown to cover ``p`` or the CDF stops
        increasing well below 1.
    """
    probs = check_probability(p)
    flat = probs.ravel()
    out = np.empty(flat.shape, dtype=np.float64)
    out[flat == 0.0] = lower
    out[flat == 1.0] = inf if upper is None else upper

    interior = (flat > 0.0) & (flat < 1.0)
    if not np.any(interior):
        return cast("NumericArray", out.reshape(probs.shape))

    hi, level = _bracket_upper(
        cdf, float(flat[interior].max()), lower, upper, initial_step, max_doublings
    )
    targets = np.minimum(flat[interior], level)

    if hi - lower < table_limit:
        ks = np.arange(lower, hi + 1)
        table = np.maximum.accumulate(np.asarray(cdf(ks), dtype=np.float64))
        idx = np.searchsorted(table, targets, side="left")
        out[interior] = ks[np.minimum(idx, ks.size - 1)]
    else:
        result = np.empty(targets.shape, dtype=np.float64)
        for i, q in enumerate(targets):
            left, right = lower - 1, hi
            while right - left > 1:
                mid = (left + right) // 2
                if float(cdf(mid)) >= q:
                    right = mid
                else:
                    left = mid
            result[i] = right
        out[interior] = result

    return cast("NumericArray", out.reshape(probs.shape))


def _summation_grid(
    x: Any, lower: int, upper: int | None
) -> tuple[NumericArray, NumericArray, Any, NumericArray]:
    xs = np.floor(np.asarray(x, dtype=np.float64))
    flat = xs.ravel()
    out = np.zeros(flat.shape, dtype=np.float64)
    above = np.isposinf(flat) if upper is None else flat >= upper
    out[above] = 1.0
    inside = np.isfinite(flat) & (flat >= lower) & ~above
    return cast("NumericArray", xs), out, inside, flat


def _summation_points(lower: int, top: float) -> NumericArray:
    """Integers ``lower..top``, refusing sums longer than ``SUMMATION_MAX_TERMS``."""
    count = int(top) - lower + 1
    if count > SUMMATION_MAX_TERMS:
        raise NumericalComputationError(
            f"Summing the mass function up to {int(top)} needs {count} terms, "
            f"more than the limit of {SUMMATION_MAX_TERMS}."
        )
    return cast("NumericArray", np.arange(lower, int(top) + 1))


def cdf_by_summation(
    pmf: ArrayFunc, x: Any, lower: int, upper: int | None = None
) -> NumericArray:
    """
    Discrete CDF as the partial sum of ``pmf`` over ``k = lower..floor(x)``.

    One cumulative sum up to ``max(x)`` serves all points, so the cost is
    linear in the largest requested point.

    Raises
    ------
    NumericalComputationError
        If more than ``SUMMATION_MAX_TERMS`` terms would be summed.
    """
    xs, out, inside, flat = _summation_grid(x, lower, upper)
    if np.any(inside):
        ks = _summation_points(lower, flat[inside].max())
        cumulative = np.minimum(np.cumsum(np.asarray(pmf(ks), dtype=np.float64)), 1.0)
        out[inside] = cumulative[(flat[inside] - lower).astype(np.int64)]
    return cast("NumericArray", out.reshape(xs.shape))


def _resolve(distribution: Distribution, name: GenericCharacteristicName) -> Method[Any, Any]:
    """
    Resolve a characteristic from the distribution.

    Raises
    ------
    RuntimeError
        If the distribution does not provide a computation strategy.
    """
    try:
        return distribution.query_method(name)
    except AttributeError as e:
        raise RuntimeError(
            "Distribution must provide computation_strategy.query_method(name, distribution)."
        ) from e


def _continuous_bounds(distribution: Distribution) -> tuple[float, float]:
    support = distribution.support
    if support is None:
        return -inf, inf
    return support.bounds


def _expand_bracket(
    cdf: Callable[[float], float],
    q: float,
    left: float,
    right: float,
    max_expand: int,
) -> tuple[float, float]:
    """Find ``lo <= hi`` with ``cdf(lo) <= q <= cdf(hi)`` inside ``[left, right]``."""
    if isfinite(left) and isfinite(right):
        return left, right

    center = left if isfinite(left) else (right if isfinite(right) else 0.0)
    lo = left if isfinite(left) else center - 1.0
    hi = right if isfinite(right) else center + 1.0
    step = 1.0
    for _ in range(max_expand):
        lo_ok = cdf(lo) <= q
        hi_ok = cdf(hi) >= q
        if lo_ok and hi_ok:
            return lo, hi
        step *= 2.0
        if not lo_ok:
            lo = center - step
        if not hi_ok:
            hi = center + step
        logger.debug("Quantile bracket expanded to [%g, %g] for p=%r", lo, hi, q)
    raise NumericalComputationError(f"Could not bracket the quantile for p={q}.")


def fit_pdf_to_cdf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Fit ``cdf`` from a resolvable ``pdf`` via adaptive quadrature.

    The density is integrated from the support infimum to each point.
    """
    pdf_func = _resolve(distribution, CharacteristicName.PDF)
    left, right = _continuous_bounds(distribution)
    limit = int(options.get("quad_limit", 200))

    def _cdf(x: Any, **kwargs: Any) -> NumericArray:
        xs = np.asarray(x, dtype=np.float64)
        out = np.empty(xs.size, dtype=np.float64)
        for i, point in enumerate(xs.ravel()):
            if point <= left:
                out[i] = 0.0
            elif point >= right:
                out[i] = 1.0
            else:
                val, _ = _sp_integrate.quad(
                    lambda t: float(pdf_func(t, **kwargs)), left, float(point), limit=limit
                )
                out[i] = min(max(val, 0.0), 1.0)
        return cast("NumericArray", out.reshape(xs.shape))

    cdf_func = cast(Callable[[Any, KwArg(Any)], Any], _cdf)
    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.CDF, sources=[CharacteristicName.PDF], func=cdf_func
    )


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Fit ``ppf`` from a resolvable ``cdf`` by bracket expansion and ``brentq``.

    Options
    -------
    x_tol : float
    max_iter : int
    max_expand : int
        Maximum number of bracket doublings away from the support.
    """
    cdf_method = _resolve(distribution, CharacteristicName.CDF)
    left, right = _continuous_bounds(distribution)
    x_tol = float(options.get("x_tol", DEFAULT_X_TOL))
    max_iter = int(options.get("max_iter", DEFAULT_MAX_ITER))
    max_expand = int(options.get("max_expand", DEFAULT_MAX_EXPAND))

    def _scalar_cdf(x: float) -> float:
        return float(cdf_method(x))

    def _ppf(p: Any, **kwargs: Any) -> NumericArray:
        probs = check_probability(p)
        out = np.empty(probs.size, dtype=np.float64)
        for i, q in enumerate(probs.ravel()):
            if 0.0 < q < 1.0:
                bracket = _expand_bracket(_scalar_cdf, float(q), left, right, max_expand)
            else:
                bracket = (left, right)
            out[i] = root_quantile(
                _scalar_cdf, q, bracket, (left, right), x_tol=x_tol, max_iter=max_iter
            )
        return cast("NumericArray", out.reshape(probs.shape))

    ppf_func = cast(Callable[[Any, KwArg(Any)], Any], _ppf)
    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.PPF, sources=[CharacteristicName.CDF], func=ppf_func
    )


def fit_pdf_to_logpdf_1C(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """Fit ``logpdf`` as the logarithm of a resolvable ``pdf``."""
    pdf_func = _resolve(distribution, CharacteristicName.PDF)

    def _logpdf(x: Any, **kwargs: Any) -> NumericArray:
        with np.errstate(divide="ignore"):
            return cast("NumericArray", np.log(pdf_func(x, **kwargs)))

    logpdf_func = cast(Callable[[Any, KwArg(Any)], Any], _logpdf)
    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.LOGPDF, sources=[CharacteristicName.PDF], func=logpdf_func
    )


# --- Discrete fitters (1D) ---------------------------------------------------


def _lattice_bounds(distribution: Distribution) -> tuple[int, int | None]:
    support = distribution.support
    if not isinstance(support, IntegerLatticeDiscreteSupport) or support.first() is None:
        raise RuntimeError("A left-bounded integer lattice support is required.")
    return cast(int, support.first()), support.last()


def fit_pmf_to_cdf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Build ``cdf`` from ``pmf`` by partial summation over a left-bounded lattice.

    Explicit point tables are summed over their points directly.
    """
    support = distribution.support
    pmf_func = _resolve(distribution, CharacteristicName.PMF)

    if isinstance(support, ExplicitTableDiscreteSupport):
        points = support.points
        cumulative = np.minimum(np.cumsum(np.asarray(pmf_func(points), dtype=np.float64)), 1.0)

        def _table_cdf(x: Any, **kwargs: Any) -> NumericArray:
            idx = np.searchsorted(points, np.asarray(x, dtype=np.float64), side="right")
            padded = np.concatenate(([0.0], cumulative))
            return cast("NumericArray", padded[idx])

        cdf_func = cast(Callable[[Any, KwArg(Any)], Any], _table_cdf)
    else:
        lower, upper = _lattice_bounds(distribution)

        def _cdf(x: Any, **kwargs: Any) -> NumericArray:
            return cdf_by_summation(lambda k: pmf_func(k, **kwargs), x, lower, upper)

        cdf_func = cast(Callable[[Any, KwArg(Any)], Any], _cdf)

    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.CDF, sources=[CharacteristicName.PMF], func=cdf_func
    )


def fit_cdf_to_ppf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[Any, Any]:
    """
    Build ``ppf`` as the generalized inverse of ``cdf`` on the support.

    Options
    -------
    initial_step : int
    max_doublings : int
    """
    support = distribution.support
    cdf_func = _resolve(distribution, CharacteristicName.CDF)

    if isinstance(support, ExplicitTableDiscreteSupport):
        points = support.points.astype(np.float64)

        def _table_ppf(p: Any, **kwargs: Any) -> NumericArray:
            probs = check_probability(p)
            table = np.maximum.accumulate(np.asarray(cdf_func(points), dtype=np.float64))
            idx = np.searchsorted(table, probs, side="left")
            return cast("NumericArray", points[np.minimum(idx, points.size - 1)])

        ppf_func = cast(Callable[[Any, KwArg(Any)], Any], _table_ppf)
    else:
        lower, upper = _lattice_bounds(distribution)
        initial_step = int(options.get("initial_step", INTEGER_SEARCH_INITIAL_STEP))
        max_doublings = int(options.get("max_doublings", INTEGER_SEARCH_MAX_DOUBLINGS))

        def _ppf(p: Any, **kwargs: Any) -> NumericArray:
            return integer_quantile(
                cdf_func,
                p,
                lower,
                upper,
                initial_step=initial_step,
                max_doublings=max_doublings,
            )

        ppf_func = cast(Callable[[Any, KwArg(Any)], Any], _ppf)

    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.PPF, sources=[CharacteristicName.CDF], func=ppf_func
    )


def fit_pmf_to_logpmf_1D(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """Fit ``logpmf`` as the logarithm of a resolvable ``pmf``."""
    pmf_func = _resolve(distribution, CharacteristicName.PMF)

    def _logpmf(x: Any, **kwargs: Any) -> NumericArray:
        with np.errstate(divide="ignore"):
            return cast("NumericArray", np.log(pmf_func(x, **kwargs)))

    logpmf_func = cast(Callable[[Any, KwArg(Any)], Any], _logpmf)
    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.LOGPMF, sources=[CharacteristicName.PMF], func=logpmf_func
    )


# --- Kind-independent fitters -------------------------------------------------


def fit_var_to_std(distribution: Distribution, /, **_: Any) -> FittedComputationMethod[Any, Any]:
    """Standard deviation as the square root of the variance."""
    var_func = _resolve(distribution, CharacteristicName.VAR)

    def _std(data: Any, **kwargs: Any) -> float:
        return float(np.sqrt(var_func(data, **kwargs)))

    std_func = cast(Callable[[Any, KwArg(Any)], Any], _std)
    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.STD, sources=[CharacteristicName.VAR], func=std_func
    )


def fit_ppf_to_median(
    distribution: Distribution, /, **_: Any
) -> FittedComputationMethod[Any, Any]:
    """Median as ``ppf(0.5)``."""
    ppf_func = _resolve(distribution, CharacteristicName.PPF)

    def _median(_data: Any, **kwargs: Any) -> float:
        return float(ppf_func(0.5, **kwargs))

    median_func = cast(Callable[[Any, KwArg(Any)], Any], _median)
    return FittedComputationMethod[Any, Any](
        target=CharacteristicName.MEDIAN, sources=[CharacteristicName.PPF], func=median_func
    )
