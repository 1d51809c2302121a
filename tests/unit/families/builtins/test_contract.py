"""
Properties shared by every builtin distribution family.

Each family is instantiated with several parameter sets, heavy tails among
them, and checked for density and CDF ranges, log consistency, quantile
round trips, behaviour outside the support and convergence of the sample mean.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest

from pysatl_extra.types import FamilyName, Kind

from .base import BaseDistributionTest

FAMILY_PARAMETERS = [
    (FamilyName.ALPHA, {"alpha": 2.0, "beta": 1.5}),
    (FamilyName.ALPHA, {"alpha": 0.8, "beta": 3.0}),
    (FamilyName.ARGUS, {"chi": 1.5, "c": 2.0}),
    (FamilyName.ARGUS, {"chi": 0.5, "c": 1.0}),
    (FamilyName.BENINI, {"alpha": 2.0, "beta": 0.5, "sigma": 3.0}),
    (FamilyName.BENINI, {"alpha": 0.5, "beta": 2.0, "sigma": 1.0}),
    (FamilyName.BENKTANDER_TYPE1, {"a": 2.0, "b": 1.0}),
    (FamilyName.BENKTANDER_TYPE1, {"a": 1.0, "b": 0.5}),
    (FamilyName.BENKTANDER_TYPE2, {"a": 1.5, "b": 0.5}),
    (FamilyName.BENKTANDER_TYPE2, {"a": 0.5, "b": 0.8}),
    (FamilyName.BHATTACHARJEE, {"a": -1.0, "b": 3.0, "sigma": 0.5}),
    (FamilyName.BHATTACHARJEE, {"a": 0.0, "b": 1.0, "sigma": 2.0}),
    (FamilyName.BIRNBAUM_SAUNDERS, {"mu": 1.0, "alpha": 0.5, "beta": 2.0}),
    (FamilyName.BIRNBAUM_SAUNDERS, {"mu": -1.0, "alpha": 2.0, "beta": 0.5}),
    (FamilyName.BRADFORD, {"c": 3.0}),
    (FamilyName.BRADFORD, {"c": 0.2}),
    (FamilyName.BURR, {"c": 2.0, "k": 3.0, "lambda_": 1.5}),
    (FamilyName.BURR, {"c": 1.0, "k": 0.8, "lambda_": 1.0}),
    (FamilyName.CRYSTAL_BALL, {"alpha": 1.5, "m": 6.0, "loc": 0.5, "scale": 2.0}),
    (FamilyName.CRYSTAL_BALL, {"alpha": 2.0, "m": 2.0, "loc": -1.0}),
    (FamilyName.CRYSTAL_BALL, {"alpha": 1.0, "m": 1.2}),
    (FamilyName.DAGUM, {"a": 6.0, "b": 2.0, "p": 0.7}),
    (FamilyName.DAGUM, {"a": 1.5, "b": 1.0, "p": 2.0}),
    (FamilyName.GOMPERTZ, {"eta": 0.5, "b": 2.0}),
    (FamilyName.GOMPERTZ, {"eta": 2.0, "b": 0.5}),
    (FamilyName.LOMAX, {"alpha": 6.0, "lambda_": 2.0}),
    (FamilyName.LOMAX, {"alpha": 1.5, "lambda_": 1.0}),
    (FamilyName.MAXWELL, {"a": 1.7}),
    (FamilyName.MAXWELL, {"a": 0.2}),
    (FamilyName.NAKAGAMI, {"m": 2.5, "omega": 4.0}),
    (FamilyName.NAKAGAMI, {"m": 0.5, "omega": 1.0}),
    (FamilyName.PERT, {"a": 1.0, "b": 2.0, "c": 6.0}),
    (FamilyName.PERT, {"a": -2.0, "b": -1.5, "c": 3.0}),
    (FamilyName.BETA_NEG_BINOMIAL, {"r": 3, "alpha": 5.0, "beta": 2.0}),
    (FamilyName.BETA_NEG_BINOMIAL, {"r": 1, "alpha": 0.5, "beta": 0.1}),
    (FamilyName.BOREL, {"mu": 0.4}),
    (FamilyName.BOREL, {"mu": 0.9}),
    (FamilyName.CONWAY, {"lam": 2.0, "nu": 0.5}),
    (FamilyName.CONWAY, {"lam": 6.0, "nu": 2.0}),
    (FamilyName.DELAPORTE, {"lam": 1.5, "alpha": 2.0, "beta": 0.8}),
    (FamilyName.DELAPORTE, {"lam": 5.0, "alpha": 3.0, "beta": 2.0}),
    (FamilyName.FLORY_SCHULZ, {"a": 0.3}),
    (FamilyName.FLORY_SCHULZ, {"a": 0.9}),
    (FamilyName.GAUSS_KUZMIN, {}),
    (FamilyName.LOGARITHMIC, {"p": 0.7}),
    (FamilyName.LOGARITHMIC, {"p": 0.95}),
    (FamilyName.RADEMACHER, {}),
    (FamilyName.YULE, {"rho": 8.0}),
    (FamilyName.YULE, {"rho": 2.5}),
    (FamilyName.YULE, {"rho": 0.8}),
    (FamilyName.ZETA, {"s": 4.5}),
    (FamilyName.ZETA, {"s": 2.5}),
    (FamilyName.ZETA, {"s": 1.5}),
    (FamilyName.ZERO_INFLATED_BINOMIAL, {"n": 12, "theta": 0.4, "p": 0.25}),
    (FamilyName.ZERO_INFLATED_BINOMIAL, {"n": 40, "theta": 0.9, "p": 0.6}),
    (FamilyName.ZERO_INFLATED_NEGATIVE_BINOMIAL, {"r": 3, "theta": 0.35, "p": 0.3}),
    (FamilyName.ZERO_INFLATED_NEGATIVE_BINOMIAL, {"r": 8, "theta": 0.6, "p": 0.5}),
    (FamilyName.ZERO_INFLATED_POISSON, {"lam": 5.0, "p": 0.2}),
    (FamilyName.ZERO_INFLATED_POISSON, {"lam": 0.5, "p": 0.0}),
    (FamilyName.ZIPF, {"n": 20, "s": 1.3}),
    (FamilyName.ZIPF, {"n": 100, "s": 0.5}),
]

SAMPLE_SIZE = 10_000
ROUND_TRIP_SIZE = 50
# Above this level a partial-sum CDF no longer separates neighbouring points of a heavy tail
ROUND_TRIP_LEVEL = 0.999


def _case_id(name, params):
    return f"{name}({', '.join(f'{value:g}' for value in params.values())})"


parametrize_families = pytest.mark.parametrize(
    "name, params", FAMILY_PARAMETERS, ids=[_case_id(*case) for case in FAMILY_PARAMETERS]
)


class TestDistributionContract(BaseDistributionTest):
    """Contract checks run against all builtin families."""

    def _distribution(self, name, params):
        return self.family(name)(**params)

    def _grid(self, dist):
        """Points spread over the bulk of the distribution and a little beyond."""
        inner = np.asarray(dist.ppf(np.linspace(0.01, 0.99, 25)), dtype=np.float64)
        lo, hi = float(inner.min()), float(inner.max())
        width = max(hi - lo, 1.0)
        outer = np.linspace(lo - 0.2 * width, hi + 0.2 * width, 41)
        if dist.distribution_type.kind == Kind.DISCRETE:
            outer = np.floor(outer)
        return np.unique(np.concatenate([inner, outer]))

    def test_all_families_are_covered(self):
        assert {name for name, _ in FAMILY_PARAMETERS} == set(FamilyName)

    @parametrize_families
    def test_density_and_cdf_ranges(self, name, params):
        dist = self._distribution(name, params)
        grid = self._grid(dist)
        density = np.asarray(dist.pdf(grid))
        cdf = np.asarray(dist.cdf(grid))
        assert np.all(density >= 0.0)
        assert np.all((cdf >= 0.0) & (cdf <= 1.0))
        assert np.all(np.diff(cdf) >= -1e-12)

    @parametrize_families
    def test_log_consistency(self, name, params):
        dist = self._distribution(name, params)
        grid = self._grid(dist)
        inside = np.asarray(dist.in_support(grid), dtype=bool) & (np.asarray(dist.pdf(grid)) > 0)
        points = grid[inside]
        np.testing.assert_allclose(np.exp(dist.logpdf(points)), dist.pdf(points), rtol=1e-9)

    @parametrize_families
    def test_outside_support(self, name, params):
        dist = self._distribution(name, params)
        lo, hi = dist.support.bounds
        if math.isfinite(lo):
            assert dist.pdf(lo - 1.0) == 0.0
            assert dist.cdf(lo - 1.0) == 0.0
            assert dist.in_support(lo - 1.0) is False
        if math.isfinite(hi):
            assert dist.pdf(hi + 1.0) == 0.0
            assert dist.cdf(hi + 1.0) == 1.0
            assert dist.in_support(hi + 1.0) is False
        if dist.distribution_type.kind == Kind.DISCRETE:
            assert dist.pmf(float(dist.median()) + 0.5) == 0.0

    @parametrize_families
    def test_quantile_round_trip(self, name, params, rng):
        dist = self._distribution(name, params)
        draws = dist.sample(ROUND_TRIP_SIZE, rng).values
        draws = draws[draws <= dist.ppf(ROUND_TRIP_LEVEL)]
        recovered = dist.ppf(dist.cdf(draws))
        if dist.distribution_type.kind == Kind.DISCRETE:
            np.testing.assert_array_equal(recovered, draws)
        else:
            np.testing.assert_allclose(recovered, draws, rtol=1e-6, atol=1e-8)

    @parametrize_families
    def test_sample_mean_convergence(self, name, params, rng):
        dist = self._distribution(name, params)
        mean = dist.mean()
        if not math.isfinite(mean):
            pytest.skip("mean is not finite")
        if not math.isfinite(dist.std()):
            pytest.skip("variance is not finite")
        sample = dist.sample(SAMPLE_SIZE, rng)
        assert sample.shape == (SAMPLE_SIZE, 1)
        assert np.all(np.asarray(dist.in_support(sample.values), dtype=bool))
        self.assert_sample_matches(sample.values, mean, dist.std())

    @parametrize_families
    def test_quantile_rejects_invalid_probabilities(self, name, params):
        dist = self._distribution(name, params)
        for bad in (-0.1, 1.1, math.nan):
            with pytest.raises(ValueError):
                dist.ppf(bad)
