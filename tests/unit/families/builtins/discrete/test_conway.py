"""
Tests for Conway-Maxwell-Poisson Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest
from scipy import special, stats

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.families.builtins.discrete.conway import log_normalizer
from pysatl_extra.types import CharacteristicName, FamilyName

from ..base import BaseDistributionTest


class TestConwayFamily(BaseDistributionTest):
    """Test suite for Conway-Maxwell-Poisson distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.conway_family = self.family(FamilyName.CONWAY)
        self.dist = self.conway_family(lam=2.0, nu=0.5)

    def _direct_pmf(self, lam, nu, k):
        terms = np.arange(400) * math.log(lam) - nu * special.gammaln(np.arange(400) + 1.0)
        return np.exp(k * math.log(lam) - nu * special.gammaln(k + 1.0) - special.logsumexp(terms))

    def test_defaults(self):
        assert self.conway_family().params == (1.0, 1.0)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"lam": 0.0}, "lam > 0"),
            ({"lam": 1.0, "nu": -0.5}, "nu >= 0"),
            ({"lam": 1.5, "nu": 0.0}, "nu > 0 or lam < 1"),
        ],
    )
    def test_parametrization_constraints(self, kwargs, message):
        with pytest.raises(ParameterConstraintError, match=message):
            self.conway_family(**kwargs)

    def test_poisson_case(self):
        dist = self.conway_family(lam=3.5)
        reference = stats.poisson(3.5)
        k = np.arange(0, 20)
        self.assert_arrays_almost_equal(dist.pmf(k), reference.pmf(k))
        self.assert_arrays_almost_equal(dist.cdf(k), reference.cdf(k))
        assert dist.mean() == 3.5
        assert dist.var() == 3.5
        assert dist.mode() == 3.0

    def test_geometric_case(self):
        dist = self.conway_family(lam=0.6, nu=0.0)
        reference = stats.geom(0.4, loc=-1)
        k = np.arange(0, 25)
        self.assert_arrays_almost_equal(dist.pmf(k), reference.pmf(k))
        assert dist.mean() == pytest.approx(1.5, rel=1e-12)
        assert dist.var() == pytest.approx(0.6 / 0.16, rel=1e-12)
        assert dist.mode() == 0.0

    def test_bessel_normalizer(self):
        expected = special.logsumexp(
            np.arange(200) * math.log(2.5) - 2.0 * special.gammaln(np.arange(200) + 1.0)
        )
        assert log_normalizer(2.5, 2.0) == pytest.approx(float(expected), rel=1e-12)

    def test_series_pmf(self):
        k = np.arange(0, 40)
        np.testing.assert_allclose(self.dist.pmf(k), self._direct_pmf(2.0, 0.5, k), rtol=1e-10)
        assert self.dist.pmf(-1) == 0.0
        assert self.dist.pmf(0.5) == 0.0

    def test_cdf_and_ppf(self):
        k = np.arange(0, 30)
        np.testing.assert_allclose(
            self.dist.cdf(k), np.cumsum(self._direct_pmf(2.0, 0.5, k)), rtol=1e-10
        )
        for level in self.QUANTILE_LEVELS:
            q = self.dist.ppf(level)
            assert self.dist.cdf(q) >= level
            assert q == 0 or self.dist.cdf(q - 1) < level

    def test_series_moments(self):
        k = np.arange(0, 400)
        pmf = self._direct_pmf(2.0, 0.5, k)
        mean = float(np.sum(k * pmf))
        assert self.dist.mean() == pytest.approx(mean, rel=1e-10)
        assert self.dist.var() == pytest.approx(float(np.sum(k**2 * pmf)) - mean**2, rel=1e-9)
        assert self.dist.mode() == 4.0

    def test_mgf(self):
        dist = self.conway_family(lam=1.5)
        assert dist.mgf(0.3) == pytest.approx(math.exp(1.5 * math.expm1(0.3)), rel=1e-12)
        k = np.arange(0, 400)
        expected = float(np.sum(np.exp(0.2 * k) * self._direct_pmf(2.0, 0.5, k)))
        assert self.dist.mgf(0.2) == pytest.approx(expected, rel=1e-10)

    def test_cf(self):
        k = np.arange(0, 400)
        expected = complex(np.sum(np.exp(0.7j * k) * self._direct_pmf(2.0, 0.5, k)))
        value = complex(self.dist.cf(0.7))
        assert value == pytest.approx(expected, abs=1e-12)
        assert complex(self.dist.cf(0.0)) == pytest.approx(1.0, rel=1e-12)
        assert np.shape(self.dist.cf(np.array([0.1, 0.2, 0.3]))) == (3,)

    def test_cf_closed_forms(self):
        t = 1.3
        poisson = complex(self.conway_family(lam=1.5).cf(t))
        assert poisson == pytest.approx(complex(np.exp(1.5 * (np.exp(1j * t) - 1.0))), rel=1e-12)
        geometric = complex(self.conway_family(lam=0.4, nu=0.0).cf(t))
        assert geometric == pytest.approx(0.6 / (1.0 - 0.4 * complex(np.exp(1j * t))), rel=1e-12)

    def test_truncation_options(self):
        pmf = self.dist.query_method(CharacteristicName.PMF)
        with pytest.warns(UserWarning, match="cap"):
            truncated = pmf(np.arange(3), tol=1e-15, max_terms=3)
        # three terms leave the normalizer incomplete, so masses are inflated
        assert np.all(truncated > self.dist.pmf(np.arange(3)))

    def test_sampling(self, rng):
        sample = self.dist.sample(2000, rng).values
        assert np.all(sample >= 0)
        self.assert_sample_matches(sample, self.dist.mean(), self.dist.std())
