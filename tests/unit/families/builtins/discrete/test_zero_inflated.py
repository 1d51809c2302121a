"""
Tests for Zero-Inflated Distribution Families

Zero-inflated binomial, negative binomial and Poisson share one
implementation; each is checked against the mixture of a point mass at zero
and the corresponding SciPy distribution.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy import stats

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import CharacteristicName, FamilyName

from ..base import BaseDistributionTest


def _mixture_moments(base, p):
    """Mean, variance, skewness and raw kurtosis of the zero-inflated mixture."""
    raw = [(1.0 - p) * float(base.moment(j)) for j in range(1, 5)]
    mean = raw[0]
    var = raw[1] - mean**2
    third = raw[2] - 3 * mean * raw[1] + 2 * mean**3
    fourth = raw[3] - 4 * mean * raw[2] + 6 * mean**2 * raw[1] - 3 * mean**4
    return mean, var, third / var**1.5, fourth / var**2


CASES = [
    (FamilyName.ZERO_INFLATED_BINOMIAL, {"n": 12, "theta": 0.4, "p": 0.25}, stats.binom(12, 0.4)),
    (
        FamilyName.ZERO_INFLATED_NEGATIVE_BINOMIAL,
        {"r": 3, "theta": 0.35, "p": 0.3},
        stats.nbinom(3, 0.35),
    ),
    (FamilyName.ZERO_INFLATED_POISSON, {"lam": 5.0, "p": 0.2}, stats.poisson(5.0)),
]


class TestZeroInflatedFamilies(BaseDistributionTest):
    """Shared checks for all zero-inflated families."""

    @pytest.mark.parametrize("name, params, base", CASES)
    def test_pmf_is_mixture(self, name, params, base):
        dist = self.family(name)(**params)
        p = params["p"]
        k = np.arange(0, 40)
        expected = (1.0 - p) * base.pmf(k) + np.where(k == 0, p, 0.0)
        self.assert_arrays_almost_equal(dist.pmf(k), expected)
        np.testing.assert_allclose(dist.logpmf(k[:10]), np.log(expected[:10]), rtol=1e-12)
        assert dist.pmf(-1) == 0.0
        assert dist.pmf(0.5) == 0.0

    @pytest.mark.parametrize("name, params, base", CASES)
    def test_cdf_is_mixture(self, name, params, base):
        dist = self.family(name)(**params)
        p = params["p"]
        x = np.array([-0.5, 0.0, 0.7, 3.0, 6.2, 15.0])
        expected = np.where(x >= 0, p + (1.0 - p) * base.cdf(np.floor(x)), 0.0)
        self.assert_arrays_almost_equal(dist.cdf(x), expected)

    @pytest.mark.parametrize("name, params, base", CASES)
    def test_ppf_is_generalized_inverse(self, name, params, base):
        dist = self.family(name)(**params)
        for level in self.QUANTILE_LEVELS:
            q = dist.ppf(level)
            assert dist.cdf(q) >= level
            assert q == 0 or dist.cdf(q - 1) < level
        assert dist.ppf(0.0) == 0.0

    @pytest.mark.parametrize("name, params, base", CASES)
    def test_moments(self, name, params, base):
        dist = self.family(name)(**params)
        mean, var, skew, kurt = _mixture_moments(base, params["p"])
        assert dist.mean() == pytest.approx(mean, rel=1e-12)
        assert dist.var() == pytest.approx(var, rel=1e-10)
        assert dist.skewness() == pytest.approx(skew, rel=1e-9)
        assert dist.kurtosis() == pytest.approx(kurt, rel=1e-9)

    @pytest.mark.parametrize("name, params, base", CASES)
    def test_zero_inflated_sampling(self, name, params, base, rng):
        dist = self.family(name)(**params)
        sample = dist.sample(4000, rng).values
        assert np.all(sample >= 0)
        self.assert_sample_matches(sample, dist.mean(), dist.std())
        zero_share = float(np.mean(sample == 0))
        assert zero_share == pytest.approx(float(dist.pmf(0)), abs=0.04)

    @pytest.mark.parametrize("name, params, base", CASES)
    def test_no_generating_function(self, name, params, base):
        dist = self.family(name)(**params)
        assert CharacteristicName.MGF not in dist.analytical_computations


class TestZeroInflatedPoisson(BaseDistributionTest):
    """Zero-inflated Poisson specifics."""

    def setup_method(self):
        """Setup before each test method."""
        self.zip_family = self.family(FamilyName.ZERO_INFLATED_POISSON)
        self.dist = self.zip_family(lam=5.0, p=0.2)

    @pytest.mark.parametrize(
        "kwargs, message",
        [({"lam": 0.0}, "lam > 0"), ({"p": 1.5}, "0 <= p <= 1"), ({"p": -0.1}, "0 <= p <= 1")],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.zip_family(**kwargs)

    def test_quantiles_follow_generalized_inverse(self):
        # F(3) = 0.412 and F(4) = 0.552, so the median is 4
        np.testing.assert_array_equal(self.dist.ppf(np.array([0.5, 0.95])), [4.0, 9.0])

    def test_closed_form_moments(self):
        assert self.dist.mean() == pytest.approx(4.0, rel=1e-12)
        assert self.dist.var() == pytest.approx(0.8 * (5.0 + 0.2 * 25.0), rel=1e-12)

    def test_degenerate_inflation(self):
        dist = self.zip_family(lam=3.0, p=1.0)
        assert dist.pmf(0) == 1.0
        assert dist.pmf(2) == 0.0
        assert dist.logpmf(0) == 0.0
        assert math.isinf(dist.logpmf(2))
        without = self.zip_family(lam=3.0, p=0.0)
        assert without.pmf(2) == pytest.approx(float(stats.poisson.pmf(2, 3.0)), rel=1e-12)


class TestZeroInflatedBinomial(BaseDistributionTest):
    """Zero-inflated binomial specifics."""

    def setup_method(self):
        """Setup before each test method."""
        self.zib_family = self.family(FamilyName.ZERO_INFLATED_BINOMIAL)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"n": -1}, "n is an integer >= 0"),
            ({"n": 2.5}, "n is an integer >= 0"),
            ({"theta": 1.2}, "0 <= theta <= 1"),
            ({"p": 2.0}, "0 <= p <= 1"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.zib_family(**kwargs)

    def test_support_is_bounded_by_trials(self):
        dist = self.zib_family(n=6, theta=0.5, p=0.1)
        assert dist.support.bounds == (0, 6)
        assert dist.pmf(7) == 0.0
        assert dist.cdf(6) == pytest.approx(1.0, abs=1e-15)
        assert dist.ppf(1.0) == 6.0


class TestZeroInflatedNegativeBinomial(BaseDistributionTest):
    """Zero-inflated negative binomial specifics."""

    def setup_method(self):
        """Setup before each test method."""
        self.zinb_family = self.family(FamilyName.ZERO_INFLATED_NEGATIVE_BINOMIAL)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"r": 0}, "r is a positive integer"),
            ({"theta": 0.0}, "0 < theta <= 1"),
            ({"p": -0.5}, "0 <= p <= 1"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.zinb_family(**kwargs)

    def test_unbounded_support(self):
        dist = self.zinb_family(r=2, theta=0.5, p=0.3)
        assert dist.support.bounds[1] == math.inf
        assert dist.ppf(1.0) == math.inf
