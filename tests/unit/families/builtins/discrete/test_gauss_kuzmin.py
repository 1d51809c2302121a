"""
Tests for Gauss-Kuzmin Distribution Family
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math

import numpy as np
import pytest

from pysatl_extra.types import FamilyName

from ..base import BaseDistributionTest


class TestGaussKuzminFamily(BaseDistributionTest):
    """Test suite for Gauss-Kuzmin distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        self.gk_family = self.family(FamilyName.GAUSS_KUZMIN)
        self.dist = self.gk_family()

    def test_has_no_parameters(self):
        assert self.dist.params == ()
        with pytest.raises(TypeError):
            self.gk_family(1.0)

    def test_pmf(self):
        k = np.arange(1, 20)
        expected = -np.log2(1.0 - 1.0 / (k + 1.0) ** 2)
        self.assert_arrays_almost_equal(self.dist.pmf(k), expected)
        assert self.dist.pmf(0) == 0.0
        assert self.dist.pmf(1.5) == 0.0

    def test_cdf_telescopes(self):
        k = np.arange(1, 50)
        np.testing.assert_allclose(self.dist.cdf(k), np.cumsum(self.dist.pmf(k)), rtol=1e-12)
        assert self.dist.cdf(0.9) == 0.0
        assert self.dist.cdf(2.5) == pytest.approx(1.0 - math.log2(4.0 / 3.0), rel=1e-12)

    @pytest.mark.parametrize("level", [0.0, 0.1, 0.415, 0.5, 0.9, 0.99, 0.9999])
    def test_ppf_is_generalized_inverse(self, level):
        q = self.dist.ppf(level)
        assert self.dist.cdf(q) >= level
        assert q == 1.0 or self.dist.cdf(q - 1.0) < level

    def test_ppf_at_cdf_values(self):
        k = np.arange(1.0, 30.0)
        np.testing.assert_array_equal(self.dist.ppf(self.dist.cdf(k)), k)
        assert self.dist.ppf(1.0) == math.inf

    def test_moments(self):
        assert self.dist.mean() == math.inf
        assert self.dist.var() == math.inf
        assert math.isnan(self.dist.skewness())
        assert math.isnan(self.dist.kurtosis())
        assert self.dist.median() == 2.0
        assert self.dist.mode() == 1.0

    def test_sampling(self, rng):
        sample = self.dist.sample(2000, rng).values
        assert np.all(sample >= 1)
        assert np.mean(sample == 1) == pytest.approx(math.log2(4.0 / 3.0), abs=0.05)
