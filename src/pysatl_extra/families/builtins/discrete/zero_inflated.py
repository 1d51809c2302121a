"""
Zero-inflated count distribution families.

Contains the zero-inflated Binomial, negative binomial and Poisson families.
All three share one mixture structure: a structural zero with probability p
and a SciPy base distribution with probability 1 - p.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, cast

import numpy as np
from scipy import stats

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
from pysatl_extra.families.sampling import ZeroInflatedSamplingStrategy
from pysatl_extra.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from scipy.stats._distn_infrastructure import rv_discrete_frozen


class _Inflated(Protocol):
    p: float


def _zero_inflated_family(
    name: FamilyName,
    doc: str,
    base: Callable[[Any], rv_discrete_frozen],
    upper: Callable[[Any], int | None],
) -> ParametricFamily:
    """
    Build a zero-inflated family around a frozen SciPy count distribution.

    Parameters
    ----------
    name : FamilyName
        Family name.
    doc : str
        Family docstring.
    base : Callable
        Maps the parameters to the frozen base distribution.
    upper : Callable
        Maps the parameters to the largest support point (``None`` when
        unbounded).

    Returns
    -------
    ParametricFamily
        Family with the ``base`` parametrization still to be attached.
    """

    def logpmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """
        Logarithm of the mixture mass function.

        At zero this is log(p + (1 - p) f(0)); elsewhere log(1 - p) + log f(k).
        """
        p = cast(_Inflated, parameters).p
        k, inside = lattice_points(x, 0, upper(parameters))
        with np.errstate(divide="ignore"):
            base_log = base(parameters).logpmf(k)
            log_keep = np.log1p(-p)
            at_zero = np.logaddexp(np.log(p), log_keep + base_log)
            value = np.where(k == 0.0, at_zero, log_keep + base_log)
        return cast(NumericArray, np.where(inside, value, -np.inf))

    def pmf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        p = cast(_Inflated, parameters).p
        k, inside = lattice_points(x, 0, upper(parameters))
        value = (1.0 - p) * base(parameters).pmf(k) + np.where(k == 0.0, p, 0.0)
        return cast(NumericArray, np.where(inside, value, 0.0))

    def cdf(parameters: Parametrization, x: NumericArray) -> NumericArray:
        """Mixture CDF: p + (1 - p) F(k) for k >= 0, zero below."""
        p = cast(_Inflated, parameters).p
        k = floor_points(x)
        value = p + (1.0 - p) * base(parameters).cdf(k)
        return cast(NumericArray, np.where(k >= 0.0, np.minimum(value, 1.0), 0.0))

    def ppf(parameters: Parametrization, p: NumericArray) -> NumericArray:
        return integer_quantile(lambda k: cdf(parameters, k), p, 0, upper(parameters))

    def _moments(parameters: Parametrization) -> tuple[float, float, float, float]:
        """Raw moments of the mixture are (1 - p) times those of the base."""
        keep = 1.0 - cast(_Inflated, parameters).p
        frozen = base(parameters)
        return central_moments(*(keep * float(frozen.moment(j)) for j in range(1, 5)))

    def mean_func(parameters: Parametrization, _: Any) -> float:
        """Mean: (1 - p) μ."""
        p = cast(_Inflated, parameters).p
        return (1.0 - p) * float(base(parameters).mean())

    def var_func(parameters: Parametrization, _: Any) -> float:
        """Variance: (1 - p)(σ² + p μ²)."""
        p = cast(_Inflated, parameters).p
        mean, var = (float(v) for v in base(parameters).stats(moments="mv"))
        return (1.0 - p) * (var + p * mean**2)

    def skew_func(parameters: Parametrization, _: Any) -> float:
        return _moments(parameters)[2]

    def kurt_func(parameters: Parametrization, _: Any, excess: bool = False) -> float:
        return kurtosis_value(_moments(parameters)[3], excess)

    def _inflation(parameters: Any) -> float:
        return float(cast(_Inflated, parameters).p)

    def _base_sample(parameters: Any, rng: np.random.Generator, n: int) -> NumericArray:
        return cast(NumericArray, base(parameters).rvs(size=n, random_state=rng))

    def _support(parameters: Parametrization) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(min_k=0, max_k=upper(parameters))

    family = ParametricFamily(
        name=name,
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
        },
        sampling_strategy=ZeroInflatedSamplingStrategy(_inflation, _base_sample),
        support_by_parametrization=_support,
    )
    family.__doc__ = doc
    return family


def configure_zero_inflated_binomial_family() -> None:
    """
    Configure and register the zero-inflated Binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ZERO_INFLATED_BINOMIAL):
        return

    ZIB_DOC = """
    Zero-inflated Binomial distribution.

    Parameters: number of trials n (integer >= 0, default 1), success
    probability θ in [0, 1] (default 0.5) and inflation probability p in
    [0, 1] (default 0.5).

    P(X = 0) = p + (1 - p)(1 - θ)^n, P(X = k) = (1 - p) C(n, k) θ^k (1 - θ)^{n-k}.
    """

    ZeroInflatedBinomial = _zero_inflated_family(
        FamilyName.ZERO_INFLATED_BINOMIAL,
        ZIB_DOC,
        lambda prm: stats.binom(int(prm.n), prm.theta),
        lambda prm: int(prm.n),
    )

    @parametrization(family=ZeroInflatedBinomial)
    class _Base(Parametrization):
        """
        Standard parametrization of zero-inflated Binomial distribution.

        Parameters
        ----------
        n : int
            Number of trials
        theta : float
            Success probability of the Binomial component
        p : float
            Probability of the structural zero
        """

        n: int = 1
        theta: float = 0.5
        p: float = 0.5

        @constraint(description="n is an integer >= 0")
        def check_n_non_negative_integer(self) -> bool:
            return is_integer(self.n) and self.n >= 0

        @constraint(description="0 <= theta <= 1")
        def check_theta_range(self) -> bool:
            return 0 <= self.theta <= 1

        @constraint(description="0 <= p <= 1")
        def check_p_range(self) -> bool:
            return 0 <= self.p <= 1

    ParametricFamilyRegister.register(ZeroInflatedBinomial)


def configure_zero_inflated_negative_binomial_family() -> None:
    """
    Configure and register the zero-inflated negative binomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ZERO_INFLATED_NEGATIVE_BINOMIAL):
        return

    ZINB_DOC = """
    Zero-inflated negative binomial distribution.

    Parameters: number of successes r (positive integer, default 1), success
    probability θ in (0, 1] (default 0.5) and inflation probability p in
    [0, 1] (default 0.5).

    The count component is the number of failures before the r-th success.
    """

    ZeroInflatedNegativeBinomial = _zero_inflated_family(
        FamilyName.ZERO_INFLATED_NEGATIVE_BINOMIAL,
        ZINB_DOC,
        lambda prm: stats.nbinom(int(prm.r), prm.theta),
        lambda _: None,
    )

    @parametrization(family=ZeroInflatedNegativeBinomial)
    class _Base(Parametrization):
        """
        Standard parametrization of zero-inflated negative binomial distribution.

        Parameters
        ----------
        r : int
            Number of successes
        theta : float
            Success probability of the negative binomial component
        p : float
            Probability of the structural zero
        """

        r: int = 1
        theta: float = 0.5
        p: float = 0.5

        @constraint(description="r is a positive integer")
        def check_r_positive_integer(self) -> bool:
            return is_integer(self.r) and self.r > 0

        @constraint(description="0 < theta <= 1")
        def check_theta_range(self) -> bool:
            return 0 < self.theta <= 1

        @constraint(description="0 <= p <= 1")
        def check_p_range(self) -> bool:
            return 0 <= self.p <= 1

    ParametricFamilyRegister.register(ZeroInflatedNegativeBinomial)


def configure_zero_inflated_poisson_family() -> None:
    """
    Configure and register the zero-inflated Poisson distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.ZERO_INFLATED_POISSON):
        return

    ZIP_DOC = """
    Zero-inflated Poisson distribution.

    Parameters: rate λ > 0 (default 1) and inflation probability p in [0, 1]
    (default 0.5).

    P(X = 0) = p + (1 - p) e^{-λ}, P(X = k) = (1 - p) λ^k e^{-λ} / k!.
    Mean (1 - p) λ, variance (1 - p) λ (1 + p λ).
    """

    ZeroInflatedPoisson = _zero_inflated_family(
        FamilyName.ZERO_INFLATED_POISSON,
        ZIP_DOC,
        lambda prm: stats.poisson(prm.lam),
        lambda _: None,
    )

    @parametrization(family=ZeroInflatedPoisson)
    class _Base(Parametrization):
        """
        Standard parametrization of zero-inflated Poisson distribution.

        Parameters
        ----------
        lam : float
            Rate of the Poisson component (λ)
        p : float
            Probability of the structural zero
        """

        lam: float = 1.0
        p: float = 0.5

        @constraint(description="lam > 0")
        def check_lam_positive(self) -> bool:
            return self.lam > 0

        @constraint(description="0 <= p <= 1")
        def check_p_range(self) -> bool:
            return 0 <= self.p <= 1

    ParametricFamilyRegister.register(ZeroInflatedPoisson)
