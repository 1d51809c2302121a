"""
Conway-Maxwell-Poisson distribution family implementation.

Contains the Conway-Maxwell-Poisson (COM-Poisson) family for over- and
under-dispersed counts, together with the truncated series for its
normalizing constant Z(λ, ν).
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from functools import lru_cache
from math import exp, floor, inf, log, log1p, sqrt
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp

from pysatl_extra.distributions.fitters import cdf_by_summation, integer_quantile
from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import as_array, lattice_points
from pysatl_extra.families.parametric_family import ParametricFamily
from pysatl_extra.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_extra.families.registry import ParametricFamilyRegister
from pysatl_extra.types import (
    CharacteristicName,
    ComplexArray,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

# Relative size of the newest series term at which the series is truncated
SERIES_TOL = 1e-15
# Hard cap on the number of series terms
SERIES_MAX_TERMS = 10_000


def _peak(lam: float, nu: float) -> float:
    """Location λ^{1/ν} of the largest series term (capped against overflow)."""
    if nu == 0:
        return 0.0
    return exp(min(log(lam) / nu, 700.0))


@lru_cache(maxsize=256)
def _log_series_terms(
    lam: float, nu: float, tol: float = SERIES_TOL, max_terms: int = SERIES_MAX_TERMS
) -> NumericArray:
    """
    Logarithms of the series terms λ^k / (k!)^ν kept after truncation.

    The series stops at the first term past the mode λ^{1/ν} that is below
    ``tol`` times the running sum. Reaching ``max_terms`` issues a
    ``UserWarning``.
    """
    ks = np.arange(max_terms, dtype=np.float64)
    log_terms = ks * log(lam) - nu * sp.gammaln(ks + 1.0)
    running = np.logaddexp.accumulate(log_terms)

    peak = _peak(lam, nu)
    small = (ks > peak) & (log_terms < running + log(tol))
    if np.any(small):
        count = int(np.argmax(small)) + 1
        logger.debug("Conway series for lam=%r, nu=%r truncated after %d terms", lam, nu, count)
    else:
        count = max_terms
        warnings.warn(
            f"Conway normalizer series for lam={lam}, nu={nu} reached the cap of "
            f"{max_terms} terms without converging.",
            UserWarning,
            stacklevel=2,
        )
    terms = log_terms[:count]
    terms.setflags(write=False)
    return cast(NumericArray, terms)


def log_normalizer(
    lam: float, nu: float, tol: float = SERIES_TOL, max_terms: int = SERIES_MAX_TERMS
) -> float:
    """
    ``log Z(λ, ν)`` with Z(λ, ν) = Σ_k λ^k / (k!)^ν.

    Closed forms are used for ν = 0 (geometric, λ < 1), ν = 1 (Poisson) and
    ν = 2 (modified Bessel function I₀); other ν sum the truncated series.
    """
    if nu == 0:
        return -log1p(-lam) if lam < 1 else inf
    if nu == 1:
        return lam
    if nu == 2:
        root = 2.0 * sqrt(lam)
        return float(log(sp.i0e(root)) + root)
    return float(sp.logsumexp(_log_series_terms(lam, nu, tol, max_terms)))


def configure_conway_family() -> None:
    """
    Configure and register the Conway-Maxwell-Poisson distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.CONWAY):
        return

    CONWAY_DOC = """
    Conway-Maxwell-Poisson distribution.

    Parameters: rate λ > 0 (default 1) and dispersion ν ≥ 0 (default 1); ν = 0
    requires λ < 1.

    For k = 0, 1, 2, ...:
        P(X = k) = λ^k / ((k!)^ν Z(λ, ν)),   Z(λ, ν) = Σ_j λ^j / (j!)^ν

    ν = 1 is the Poisson law, ν = 0 the geometric law and ν → ∞ the
    Bernoulli law. Characteristics accept ``tol`` and ``max_terms`` options
    that control the truncation of the normalizer series.
    """

    def _log_z(parameters: _Base, tol: float, max_terms: int) -> float:
        return log_normalizer(parameters.lam, parameters.nu, tol, max_terms)

    def logpmf(
        parameters: Parametrization,
        x: NumericArray,
        tol: float = SERIES_TOL,
        max_terms: int = SERIES_MAX_TERMS,
    ) -> NumericArray:
        parameters = cast(_Base, parameters)
        lam, nu = parameters.lam, parameters.nu

        k, inside = lattice_points(x, 0)
        value = k * log(lam) - nu * sp.gammaln(k + 1.0) - _log_z(parameters, tol, max_terms)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(
        parameters: Parametrization,
        x: NumericArray,
        tol: float = SERIES_TOL,
        max_terms: int = SERIES_MAX_TERMS,
    ) -> NumericArray:
        """
        Probability mass function for Conway-Maxwell-Poisson distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - lam: float (rate)
            - nu: float (dispersion)
        x : NumericArray
            Points at which to evaluate the probability mass function
        tol : float
            Relative truncation tolerance of the normalizer series
        max_terms : int
            Hard cap on the number of series terms

        Returns
        -------
        NumericArray
            Probabilities, zero outside the non-negative integers
        """
        return cast(NumericArray, np.exp(logpmf(parameters, x, tol, max_terms)))

    def cdf(
        parameters: Parametrization,
        x: NumericArray,
        tol: float = SERIES_TOL,
        max_terms: int = SERIES_MAX_TERMS,
    ) -> NumericArray:
        return cdf_by_summation(lambda k: pmf(parameters, k, tol, max_terms), x, 0)

    def ppf(
        parameters: Parametrization,
        p: NumericArray,
        tol: float = SERIES_TOL,
        max_terms: int = SERIES_MAX_TERMS,
    ) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k, tol, max_terms), p, 0)

    def _series_moments(parameters: _Base) -> tuple[float, float]:
        """First two raw moments from the normalized series terms."""
        log_terms = _log_series_terms(parameters.lam, parameters.nu)
        weights = np.exp(log_terms - sp.logsumexp(log_terms))
        ks = np.arange(weights.size, dtype=np.float64)
        return float(np.sum(ks * weights)), float(np.sum(ks**2 * weights))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """
        Mean of Conway-Maxwell-Poisson distribution.

        Closed forms for ν = 0 (λ/(1 - λ)) and ν = 1 (λ); otherwise the
        normalized series.
        """
        parameters = cast(_Base, parameters)
        lam, nu = parameters.lam, parameters.nu
        if nu == 0:
            return lam / (1.0 - lam)
        if nu == 1:
            return lam
        return _series_moments(parameters)[0]

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Conway-Maxwell-Poisson distribution."""
        parameters = cast(_Base, parameters)
        lam, nu = parameters.lam, parameters.nu
        if nu == 0:
            return lam / (1.0 - lam) ** 2
        if nu == 1:
            return lam
        m1, m2 = _series_moments(parameters)
        return m2 - m1**2

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: floor(λ^{1/ν}) for ν > 0, 0 for ν = 0."""
        parameters = cast(_Base, parameters)
        return float(floor(_peak(parameters.lam, parameters.nu)))

    def mgf_func(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """Moment generating function: Z(λe^t, ν) / Z(λ, ν)."""
        parameters = cast(_Base, parameters)
        lam, nu = parameters.lam, parameters.nu
        log_z = log_normalizer(lam, nu)

        t = as_array(t)
        out = np.empty(t.size, dtype=np.float64)
        for i, point in enumerate(t.ravel()):
            out[i] = exp(log_normalizer(lam * exp(point), nu) - log_z)
        return cast(NumericArray, out.reshape(t.shape))

    def cf_func(parameters: Parametrization, t: NumericArray) -> ComplexArray:
        """
        Characteristic function: Z(λe^{it}, ν) / Z(λ, ν).

        Closed forms for ν = 0 and ν = 1; otherwise the normalized series
        terms weighted by e^{itk}.
        """
        parameters = cast(_Base, parameters)
        lam, nu = parameters.lam, parameters.nu

        t = as_array(t)
        rotation = np.exp(1j * t)
        if nu == 0:
            return cast(ComplexArray, (1.0 - lam) / (1.0 - lam * rotation))
        if nu == 1:
            return cast(ComplexArray, np.exp(lam * (rotation - 1.0)))
        log_terms = _log_series_terms(lam, nu)
        weights = np.exp(log_terms - sp.logsumexp(log_terms))
        ks = np.arange(weights.size, dtype=np.float64)
        return cast(ComplexArray, np.exp(1j * np.multiply.outer(t, ks)) @ weights)

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Conway-Maxwell-Poisson distribution"""
        return IntegerLatticeDiscreteSupport(min_k=0)

    Conway = ParametricFamily(
        name=FamilyName.CONWAY,
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
            CharacteristicName.MODE: mode_func,
        },
        support_by_parametrization=_support,
    )
    Conway.__doc__ = CONWAY_DOC

    @parametrization(family=Conway)
    class _Base(Parametrization):
        """
        Standard parametrization of Conway-Maxwell-Poisson distribution.

        Parameters
        ----------
        lam : float
            Rate parameter (λ)
        nu : float
            Dispersion parameter (ν)
        """

        lam: float = 1.0
        nu: float = 1.0

        @constraint(description="lam > 0")
        def check_lam_positive(self) -> bool:
            return self.lam > 0

        @constraint(description="nu >= 0")
        def check_nu_non_negative(self) -> bool:
            return self.nu >= 0

        @constraint(description="nu > 0 or lam < 1")
        def check_geometric_convergence(self) -> bool:
            return self.nu > 0 or self.lam < 1

    ParametricFamilyRegister.register(Conway)
