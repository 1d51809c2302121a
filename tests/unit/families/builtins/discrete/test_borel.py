"""
Tests for Borel Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest

from pysatl_extra.exceptions import ParameterConstraintError
from pysatl_extra.types import FamilyName

from ..base import BaseDistributionTest


class TestBorelFamily(BaseDistributionTest):
    """Test suite for Borel distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.borel_family = self.family(FamilyName.BOREL)
        self.dist = self.borel_family(mu=0.4)

    @staticmethod
    def _closed_pmf(k, mu):
        return math.exp(-mu * k) * (mu * k) ** (k - 1) / math.factorial(k)

    @pytest.mark.parametrize("mu", [-0.1, 1.0, 1.5])
    def test_parametrization_constraints(self, mu):
        with pytest.raises(ParameterConstraintError, match="0 <= mu < 1"):
            self.borel_family(mu=mu)

    def test_pmf(self):
        k = np.arange(1, 15)
        expected = [self._closed_pmf(int(i), 0.4) for i in k]
        np.testing.assert_allclose(self.dist.pmf(k), expected, rtol=1e-12)
        assert self.dist.pmf(0) == 0.0
        assert self.dist.pmf(1.5) == 0.0

    def test_pmf_sums_to_one(self):
        k = np.arange(1, 200)
        assert float(np.sum(self.dist.pmf(k))) == pytest.approx(1.0, abs=1e-12)

    def test_point_mass_at_zero_mu(self):
        dist = self.borel_family()
        assert dist.pmf(1) == 1.0
        assert dist.pmf(2) == 0.0
        assert dist.cdf(1) == 1.0
        assert dist.var() == 0.0
        assert dist.ppf(0.7) == 1.0

    def test_cdf_and_ppf(self):
        k = np.arange(1, 12)
        cdf = self.dist.cdf(k)
        np.testing.assert_allclose(cdf, np.cumsum(self.dist.pmf(k)), rtol=1e-12)
        assert self.dist.cdf(0.5) == 0.0
        assert self.dist.cdf(2.5) == pytest.approx(float(cdf[1]), rel=1e-12)
        for level in (0.3, 0.6, 0.9, 0.99):
            q = self.dist.ppf(level)
            assert self.dist.cdf(q) >= level
            assert q == 1 or self.dist.cdf(q - 1) < level

    def test_moments(self):
        k = np.arange(1, 400)
        pmf = self.dist.pmf(k)
        mean = float(np.sum(k * pmf))
        assert self.dist.mean() == pytest.approx(1.0 / 0.6, rel=1e-12)
        assert self.dist.mean() == pytest.approx(mean, rel=1e-10)
        var = float(np.sum(k**2 * pmf)) - mean**2
        assert self.dist.var() == pytest.approx(var, rel=1e-9)
        assert self.dist.mode() == 1.0

    def test_sampling(self, rng):
        sample = self.dist.sample(2000, rng).values
        assert np.all(sample >= 1)
        self.assert_sample_matches(sample, self.dist.mean(), self.dist.std())
