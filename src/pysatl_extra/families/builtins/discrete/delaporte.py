"""
Delaporte distribution family implementation.

Contains the Delaporte family: the sum of a Poisson(λ) count and an
independent negative binomial count arising from a Gamma(α, β)-mixed Poisson.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import floor, log
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import special as sp, stats

from pysatl_extra.distributions.fitters import cdf_by_summation, integer_quantile
from pysatl_extra.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_extra.families.builtins.common import as_array, kurtosis_value, lattice_points
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


def configure_delaporte_family() -> None:
    """
    Configure and register the Delaporte distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.DELAPORTE):
        return

    DELAPORTE_DOC = """
    Delaporte distribution.

    Parameters: Poisson rate λ > 0 (default 1), Gamma shape α > 0 (default 1)
    and Gamma scale β > 0 (default α).

    For k = 0, 1, 2, ...:
        P(X = k) = Σ_{i=0}^{k} Γ(α + i) β^i λ^{k-i} e^{-λ}
                   / (Γ(α) i! (1 + β)^{α+i} (k - i)!)

    The mass terms are combined with log-sum-exp. The CDF sums the
    convolution of the Poisson and negative binomial mass functions.
    """

    def _log_terms(parameters: _Base, k: int) -> NumericArray:
        lam, alpha, beta = parameters.lam, parameters.alpha, parameters.beta
        i = np.arange(k + 1, dtype=np.float64)
        return cast(
            NumericArray,
            sp.gammaln(alpha + i)
            - sp.gammaln(alpha)
            - sp.gammaln(i + 1.0)
            + i * log(beta)
            - (alpha + i) * np.log1p(beta)
            + (k - i) * log(lam)
            - sp.gammaln(k - i + 1.0)
            - lam,
        )

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the probability mass function.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - lam: float (Poisson rate)
            - alpha: float (Gamma shape)
            - beta: float (Gamma scale)
        x : NumericArray
            Points at which to evaluate the log-mass

        Returns
        -------
        NumericArray
            Log-probabilities, -inf outside the non-negative integers
        """
        parameters = cast(_Base, parameters)

        k, inside = lattice_points(x, 0)
        flat_k = k.ravel()
        flat_inside = inside.ravel()
        out = np.full(flat_k.shape, -np.inf)
        for idx in np.flatnonzero(flat_inside):
            out[idx] = sp.logsumexp(_log_terms(parameters, int(flat_k[idx])))
        return cast(NumericArray, out.reshape(k.shape))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        return cast(NumericArray, np.exp(logpmf(parameters, x)))

    def _mass_table(parameters: _Base, top: int) -> NumericArray:
        """P(X = k) for k = 0..top as a Poisson and negative binomial convolution."""
        ks = np.arange(top + 1)
        poisson = stats.poisson.pmf(ks, parameters.lam)
        negative_binomial = stats.nbinom.pmf(ks, parameters.alpha, 1.0 / (1.0 + parameters.beta))
        return cast(NumericArray, np.convolve(poisson, negative_binomial)[: top + 1])

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        parameters = cast(_Base, parameters)

        def mass(k: NumericArray) -> NumericArray:
            return _mass_table(parameters, int(k.max()))[k.astype(np.int64)]

        return cdf_by_summation(mass, x, 0)

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 0)

    def _cumulants(parameters: _Base) -> tuple[float, float, float, float]:
        """Cumulants κ₁..κ₄: Poisson part plus negative binomial part."""
        lam, alpha, beta = parameters.lam, parameters.alpha, parameters.beta
        ab = alpha * beta
        return (
            lam + ab,
            lam + ab * (1.0 + beta),
            lam + ab * (1.0 + beta) * (1.0 + 2.0 * beta),
            lam + ab * (1.0 + beta) * (1.0 + 6.0 * beta + 6.0 * beta**2),
        )

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean of Delaporte distribution: λ + αβ."""
        return _cumulants(cast(_Base, parameters))[0]

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance of Delaporte distribution: λ + αβ(1 + β)."""
        return _cumulants(cast(_Base, parameters))[1]

    def skew_func(parameters: Parametrization, _: Any) -> float:
        _, k2, k3, _ = _cumulants(cast(_Base, parameters))
        return float(k3 / k2**1.5)

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        _, k2, _, k4 = _cumulants(cast(_Base, parameters))
        return kurtosis_value(3.0 + k4 / k2**2, excess)

    def mode_func(parameters: Parametrization, _: Any) -> float:
        """Mode: floor((α - 1)β + λ), clipped at 0."""
        parameters = cast(_Base, parameters)
        z = (parameters.alpha - 1.0) * parameters.beta + parameters.lam
        return float(max(floor(z), 0))

    def mgf_func(parameters: Parametrization, t: NumericArray) -> NumericArray:
        """
        Moment generating function: exp(λ(e^t - 1)) (1 - β(e^t - 1))^{-α}.

        Infinite where β(e^t - 1) >= 1.
        """
        parameters = cast(_Base, parameters)
        lam, alpha, beta = parameters.lam, parameters.alpha, parameters.beta

        growth = np.expm1(as_array(t))
        base = 1.0 - beta * growth
        finite = base > 0
        with np.errstate(over="ignore"):
            value = np.exp(lam * growth - alpha * np.log(np.where(finite, base, 1.0)))
        return cast(NumericArray, np.where(finite, value, np.inf))

    def _latent(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        parameters = cast(_Base, parameters)
        return rng.gamma(parameters.alpha, parameters.beta, size=n)

    def _conditional(
        parameters: Any, rate: NumericArray, rng: np.random.Generator
    ) -> NumericArray:
        parameters = cast(_Base, parameters)
        mixed = rng.poisson(rate)
        background = rng.poisson(parameters.lam, size=rate.shape)
        return (mixed + background).astype(np.float64)

    def _support(_: Parametrization) -> IntegerLatticeDiscreteSupport:
        """Support of Delaporte distribution"""
        return IntegerLatticeDiscreteSupport(min_k=0)

    Delaporte = ParametricFamily(
        name=FamilyName.DELAPORTE,
        distr_type=UnivariateDiscrete,
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOGPMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.MGF: mgf_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.MODE: mode_func,
        },
        sampling_strategy=CompoundSamplingStrategy(_latent, _conditional),
        support_by_parametrization=_support,
    )
    Delaporte.__doc__ = DELAPORTE_DOC

    @parametrization(family=Delaporte)
    class _Base(Parametrization):
        """
        Standard parametrization of Delaporte distribution.

        Parameters
        ----------
        lam : float
            Rate of the fixed Poisson component (λ)
        alpha : float
            Shape of the Gamma-distributed rate (α)
        beta : float
            Scale of the Gamma-distributed rate (β); defaults to α
        """

        lam: float = 1.0
        alpha: float = 1.0
        beta: float | None = None

        def __post_init__(self) -> None:
            if self.beta is None:
                object.__setattr__(self, "beta", self.alpha)

        @constraint(description="lam > 0")
        def check_lam_positive(self) -> bool:
            return self.lam > 0

        @constraint(description="alpha > 0")
        def check_alpha_positive(self) -> bool:
            return self.alpha > 0

        @constraint(description="beta > 0")
        def check_beta_positive(self) -> bool:
            return self.beta > 0

    ParametricFamilyRegister.register(Delaporte)
